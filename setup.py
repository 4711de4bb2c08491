import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="smote_balancer",
    version="0.1.0",
    author="Alejandro Sanchez Ferrer",
    author_email="asanc.tech@gmail.com",
    description="SMOTE oversampling of minority classes for imbalanced tabular datasets",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/asferrer/smote_balancer",
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "scikit-learn>=1.3",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
