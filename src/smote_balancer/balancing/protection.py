"""
Acceptance test for synthetic examples that land next to the majority class.
"""

from typing import Optional
import logging

from .partitioner import Partition
from ..data.dataset import EncodedExample
from ..neighbors.linear_search import LinearNNSearch

logger = logging.getLogger(__name__)


class ProtectionFilter:
    """
    Rejects a synthetic example whose nearest neighbor in the full dataset
    belongs to the other class partition.

    A disabled filter accepts every candidate without searching.
    """

    def __init__(self, full_index: Optional[LinearNNSearch], partition: Partition, enabled: bool = True):
        """
        Args:
            full_index: Search over every original example
            partition: Partition used to tell minority from majority labels
            enabled: When False every candidate is valid
        """
        if enabled and full_index is None:
            raise ValueError("An enabled protection filter needs a full-dataset index")
        self.full_index = full_index
        self.partition = partition
        self.enabled = enabled

    def is_valid(self, candidate: EncodedExample) -> bool:
        """True when the candidate's nearest neighbor shares its class category."""
        if not self.enabled:
            return True

        nearest = self.full_index.nearest(candidate)
        found = self.partition.category_of(nearest.label)
        passed = found == self.partition.category_of(candidate.label)
        if not passed:
            logger.debug(f"redo: nearest neighbor of {candidate.values.tolist()} is {found}")
        return passed
