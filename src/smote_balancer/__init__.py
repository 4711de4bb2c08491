"""
SMOTE oversampling for imbalanced tabular datasets.

Synthesizes minority-class examples by interpolating between nearest
neighbors, optionally resamples the majority class, and trains a
scikit-learn estimator on the balanced result.
"""

from .exceptions import (
    SmoteError,
    ConfigurationError,
    EncodingError,
    ProtectionExhausted,
    NotFittedError
)
from .data import AttributeKind, AttributeDescriptor, EncodedExample, Dataset, NominalToBinaryEncoder
from .neighbors import LinearNNSearch
from .balancing import (
    SmoteConfig,
    SmoteResult,
    ClassPartitioner,
    SyntheticExampleGenerator,
    ProtectionFilter,
    SmoteOversampler
)
from .estimators import PlainEstimator, SeedableEstimator, wrap_estimator
from .pipeline import SmoteClassifier

__version__ = "0.1.0"

__all__ = [
    'SmoteError',
    'ConfigurationError',
    'EncodingError',
    'ProtectionExhausted',
    'NotFittedError',
    'AttributeKind',
    'AttributeDescriptor',
    'EncodedExample',
    'Dataset',
    'NominalToBinaryEncoder',
    'LinearNNSearch',
    'SmoteConfig',
    'SmoteResult',
    'ClassPartitioner',
    'SyntheticExampleGenerator',
    'ProtectionFilter',
    'SmoteOversampler',
    'PlainEstimator',
    'SeedableEstimator',
    'wrap_estimator',
    'SmoteClassifier'
]
