"""
Adapters giving scikit-learn estimators the capabilities the balancer needs.

Capabilities are decided once, when the estimator is wrapped:
- seeding: estimators with a ``random_state`` parameter become a
  SeedableEstimator, all others a PlainEstimator
- measures: a name -> callable mapping; decision trees get tree size,
  leaf count and depth by default, other estimators none
- sample weights: forwarded to ``fit`` only when ``fit`` accepts them
"""

from abc import ABC
from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

import numpy as np
from sklearn.base import clone
from sklearn.tree import BaseDecisionTree, DecisionTreeClassifier, DecisionTreeRegressor
from sklearn.utils.validation import has_fit_parameter

from ..data.dataset import Dataset
from ..exceptions import ConfigurationError, NotFittedError

logger = logging.getLogger(__name__)

MeasureFunction = Callable[[Any], float]

TREE_MEASURES: Dict[str, MeasureFunction] = {
    'measureTreeSize': lambda tree: float(tree.tree_.node_count),
    'measureNumLeaves': lambda tree: float(tree.get_n_leaves()),
    'measureDepth': lambda tree: float(tree.get_depth()),
}


class EstimatorAdapter(ABC):
    """Common fit/predict surface over a wrapped scikit-learn estimator."""

    seedable = False

    def __init__(self, estimator: Any, measures: Optional[Mapping[str, MeasureFunction]] = None):
        """
        Args:
            estimator: Unfitted scikit-learn estimator, owned by this adapter
            measures: Named measures computed from the fitted estimator
        """
        self.estimator = estimator
        self.measures = dict(measures) if measures else {}
        self.accepts_sample_weight = has_fit_parameter(estimator, 'sample_weight')
        self.has_predict_proba = hasattr(estimator, 'predict_proba')
        self.num_classes: Optional[int] = None  # None for a numeric class
        self.is_fitted = False

    def set_params(self, params: Mapping[str, Any]) -> None:
        """Pass-through hyperparameters for the wrapped estimator."""
        if not params:
            return
        try:
            self.estimator.set_params(**params)
        except ValueError as exc:
            raise ConfigurationError(f"Estimator rejected parameters {dict(params)}: {exc}") from exc

    def fit(self, dataset: Dataset) -> 'EstimatorAdapter':
        """Fit the estimator on an encoded dataset."""
        X = dataset.feature_matrix()
        y = dataset.labels()
        if dataset.is_nominal_class:
            y = y.astype(int)
            self.num_classes = dataset.num_classes

        if self.accepts_sample_weight:
            self.estimator.fit(X, y, sample_weight=dataset.weights())
        else:
            self.estimator.fit(X, y)

        self.is_fitted = True
        logger.info(f"Fitted {type(self.estimator).__name__} on {len(dataset)} examples")
        return self

    def predict_distribution(self, values: np.ndarray) -> np.ndarray:
        """
        Class distribution for one encoded example.

        Args:
            values: Encoded attribute vector

        Returns:
            Probabilities over all classes (normalised unless all zero), or a
            single-element array with the prediction for a numeric class
        """
        self._check_fitted()
        X = np.asarray(values, dtype=float).reshape(1, -1)

        if self.num_classes is None:
            return np.array([float(self.estimator.predict(X)[0])])

        sums = np.zeros(self.num_classes)
        if self.has_predict_proba:
            probs = self.estimator.predict_proba(X)[0]
            for cls, prob in zip(self.estimator.classes_, probs):
                sums[int(cls)] += prob
        else:
            sums[int(self.estimator.predict(X)[0])] = 1.0

        total = sums.sum()
        if total > 0:
            sums /= total
        return sums

    def enumerate_measures(self) -> List[str]:
        return list(self.measures)

    def get_measure(self, name: str) -> float:
        """Value of a named measure of the fitted estimator."""
        if name not in self.measures:
            raise ValueError("Additional measures not supported by base estimator.")
        self._check_fitted()
        return self.measures[name](self.estimator)

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise NotFittedError(f"{type(self.estimator).__name__} has not been fitted")

    def __str__(self) -> str:
        return str(self.estimator)


class PlainEstimator(EstimatorAdapter):
    """Estimator without a seed of its own."""


class SeedableEstimator(EstimatorAdapter):
    """Estimator whose randomness is controlled by ``random_state``."""

    seedable = True

    def set_seed(self, seed: int) -> None:
        self.estimator.set_params(random_state=int(seed))


def default_estimator(nominal_class: bool = True) -> Any:
    """Decision tree matching the class type."""
    return DecisionTreeClassifier() if nominal_class else DecisionTreeRegressor()


def wrap_estimator(estimator: Any,
                   measures: Optional[Mapping[str, MeasureFunction]] = None) -> EstimatorAdapter:
    """
    Clone ``estimator`` and wrap the clone in the matching adapter.

    Args:
        estimator: Any scikit-learn estimator (fitted or not; only its
            parameters are kept)
        measures: Named measures; decision trees default to TREE_MEASURES

    Returns:
        SeedableEstimator or PlainEstimator owning the clone
    """
    owned = clone(estimator)
    if measures is None and isinstance(owned, BaseDecisionTree):
        measures = TREE_MEASURES

    if 'random_state' in owned.get_params(deep=False):
        return SeedableEstimator(owned, measures)
    return PlainEstimator(owned, measures)
