"""
Minority/majority partitioning of an encoded dataset.
"""

from dataclasses import dataclass
import logging

from ..data.dataset import Dataset
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MINORITY = 'minority'
MAJORITY = 'majority'


@dataclass(frozen=True)
class Partition:
    """The two class partitions of a dataset."""
    minority: Dataset
    majority: Dataset
    minority_is_positive: bool = False  # True when the sides were swapped

    def category_of(self, label: float) -> str:
        """Which partition an example with ``label`` belongs to."""
        positive = label > 0.0
        return MINORITY if positive == self.minority_is_positive else MAJORITY


class ClassPartitioner:
    """
    Splits a dataset on the sign of the class label.

    Labels above zero form one side, the rest the other. The smaller side is
    the minority whatever label it carries.
    """

    def partition(self, dataset: Dataset) -> Partition:
        """
        Partition ``dataset`` into minority and majority.

        Args:
            dataset: Encoded dataset; left untouched

        Returns:
            Partition with new datasets for each side
        """
        positive = dataset.subset(ex for ex in dataset if ex.label > 0.0)
        non_positive = dataset.subset(ex for ex in dataset if not ex.label > 0.0)

        minority, majority = non_positive, positive
        swapped = len(minority) > len(majority)
        if swapped:
            minority, majority = majority, minority
            logger.debug("Positive-labelled examples are the minority, swapping partitions")

        if len(minority) == 0 or len(majority) == 0:
            raise ConfigurationError(
                f"Both classes need examples to oversample: "
                f"{len(minority)} minority, {len(majority)} majority"
            )

        logger.info(f"Partitioned {len(dataset)} examples: "
                    f"{len(minority)} minority, {len(majority)} majority")
        return Partition(minority, majority, swapped)
