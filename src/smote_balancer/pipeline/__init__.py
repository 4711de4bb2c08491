"""
Pipeline module combining encoding, SMOTE balancing and estimator training.
"""

from .smote_classifier import SmoteClassifier

__all__ = [
    'SmoteClassifier'
]
