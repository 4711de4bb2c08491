"""
Estimators module wrapping scikit-learn models for training on balanced data.
"""

from .adapters import (
    TREE_MEASURES,
    EstimatorAdapter,
    PlainEstimator,
    SeedableEstimator,
    default_estimator,
    wrap_estimator
)

__all__ = [
    'TREE_MEASURES',
    'EstimatorAdapter',
    'PlainEstimator',
    'SeedableEstimator',
    'default_estimator',
    'wrap_estimator'
]
