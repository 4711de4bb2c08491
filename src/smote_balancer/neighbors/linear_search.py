"""
Linear-scan k-nearest-neighbor search over an encoded dataset.
"""

from typing import List, Optional
import logging

import numpy as np

from ..data.dataset import Dataset, EncodedExample
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LinearNNSearch:
    """
    Exact nearest-neighbor search by scanning the whole reference set.

    Distance is Euclidean over the attribute vector. A missing value on
    either side contributes nothing along that attribute. Results are ordered
    by ascending distance; equal distances keep reference-set order.
    """

    def __init__(self, reference: Dataset, normalize: bool = False):
        """
        Args:
            reference: Examples to search. Held by reference, not copied.
            normalize: Divide each attribute difference by the attribute's
                value range over the reference set
        """
        self.reference = reference
        self.normalize = normalize
        self._matrix = reference.feature_matrix()
        self._scale = self._compute_scale() if normalize else None

    def __len__(self) -> int:
        return len(self.reference)

    def _compute_scale(self) -> Optional[np.ndarray]:
        if len(self.reference) == 0:
            return None
        with np.errstate(all='ignore'):
            ranges = np.nanmax(self._matrix, axis=0) - np.nanmin(self._matrix, axis=0)
        ranges = np.where(np.isfinite(ranges) & (ranges > 0), ranges, np.inf)
        return 1.0 / ranges

    def distances(self, point: EncodedExample) -> np.ndarray:
        """Distance from ``point`` to every reference example, in reference order."""
        diffs = self._matrix - point.values
        if self._scale is not None:
            diffs = diffs * self._scale
        diffs = np.where(np.isnan(diffs), 0.0, diffs)
        return np.sqrt(np.sum(diffs * diffs, axis=1))

    def k_nearest_neighbours(self, point: EncodedExample, k: int) -> List[EncodedExample]:
        """
        The ``k`` reference examples closest to ``point``.

        Args:
            point: Query example (need not belong to the reference set)
            k: Number of neighbors, at least 1. When ``k`` is at least the
                reference size the whole reference set is returned, sorted.

        Returns:
            Examples ordered by ascending distance
        """
        if k < 1:
            raise ConfigurationError(f"Number of neighbors must be >= 1, got {k}")
        if len(self.reference) == 0:
            raise ConfigurationError("Cannot search an empty reference set")

        order = np.argsort(self.distances(point), kind='stable')[:k]
        return [self.reference[i] for i in order]

    def nearest(self, point: EncodedExample) -> EncodedExample:
        """Single closest reference example."""
        return self.k_nearest_neighbours(point, 1)[0]
