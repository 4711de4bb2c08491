"""
Main SMOTE oversampler producing a balanced dataset.
"""

from typing import Optional
import logging

import numpy as np
from tqdm import tqdm

from .generator import SyntheticExampleGenerator, round_half_up
from .partitioner import ClassPartitioner, Partition
from .protection import ProtectionFilter
from .smote_config import SmoteConfig, SmoteResult
from ..data.dataset import Dataset, EncodedExample
from ..exceptions import ConfigurationError, ProtectionExhausted
from ..neighbors.linear_search import LinearNNSearch

logger = logging.getLogger(__name__)


class SmoteOversampler:
    """
    Drives a full oversampling run.

    Steps:
    - Partition into minority and majority
    - Keep the original data, or the minority plus majority drawn with replacement
    - Append synthetic minority examples interpolated between nearest neighbors,
      optionally refusing those that fall next to the other class

    All randomness comes from one generator, consumed in a fixed order, so a
    seed reproduces the output exactly.
    """

    def __init__(self, config: Optional[SmoteConfig] = None, show_progress: bool = False):
        """
        Initialize the oversampler.

        Args:
            config: SMOTE configuration (defaults if None)
            show_progress: Display a progress bar while generating
        """
        self.config = config if config is not None else SmoteConfig()
        self.show_progress = show_progress
        self.partitioner = ClassPartitioner()

    def resample(self, dataset: Dataset, rng: Optional[np.random.Generator] = None) -> SmoteResult:
        """
        Build a balanced dataset.

        Args:
            dataset: Encoded dataset; not modified
            rng: Random source. A fresh generator seeded with ``config.seed``
                is used if None.

        Returns:
            SmoteResult holding the balanced dataset and run statistics
        """
        if rng is None:
            rng = np.random.default_rng(self.config.seed)

        data = dataset.drop_missing_class()
        if len(data) == 0:
            raise ConfigurationError("Dataset has no examples with a known class")

        partition = self.partitioner.partition(data)
        minority, majority = partition.minority, partition.majority

        minority_target = int(round_half_up(len(minority) * self.config.minority_generation_fraction))
        logger.info(f"Generating {minority_target} synthetic minority examples")

        balanced, majority_drawn = self._base_output(data, partition, rng)

        if self.config.smote_neighbors > len(minority):
            logger.warning(f"smote_neighbors={self.config.smote_neighbors} exceeds the "
                           f"{len(minority)} minority examples; using the whole partition")

        minority_index = LinearNNSearch(minority, normalize=self.config.normalize_distances)
        protection = self._build_protection(data, partition)
        generator = SyntheticExampleGenerator(data.attributes, self.config.per_attribute_neighbor)

        rejected = 0
        for _ in tqdm(range(minority_target), desc="Generating synthetic examples",
                      disable=not self.show_progress):
            candidate = self._generate_one(minority, minority_index, generator, rng)

            rejections = 0
            while not protection.is_valid(candidate):
                rejections += 1
                if rejections >= self.config.max_protection_retries:
                    raise ProtectionExhausted(rejections)
                candidate = self._generate_one(minority, minority_index, generator, rng)
            rejected += rejections

            balanced.append(candidate)

        result = SmoteResult(
            dataset=balanced,
            minority_count=len(minority),
            majority_count=len(majority),
            synthetic_count=minority_target,
            majority_drawn=majority_drawn,
            rejected_count=rejected,
            swapped=partition.minority_is_positive
        )
        logger.info(result.get_summary())
        return result

    def _base_output(self, data: Dataset, partition: Partition, rng: np.random.Generator):
        """
        Output before synthetic examples are added.

        Returns:
            Tuple of (dataset, number of majority examples in it)
        """
        if self.config.majority_draw_fraction == 1.0:
            return data.copy(), len(partition.majority)

        majority = partition.majority
        n_draw = int(round_half_up(len(majority) * self.config.majority_draw_fraction))
        output = partition.minority.copy()
        for _ in range(n_draw):
            output.append(majority[rng.integers(len(majority))])

        logger.info(f"Drew {n_draw} of {len(majority)} majority examples with replacement")
        return output, n_draw

    def _build_protection(self, data: Dataset, partition: Partition) -> ProtectionFilter:
        if not self.config.synthetic_example_protection:
            return ProtectionFilter(None, partition, enabled=False)
        full_index = LinearNNSearch(data, normalize=self.config.normalize_distances)
        return ProtectionFilter(full_index, partition, enabled=True)

    def _generate_one(self, minority: Dataset, index: LinearNNSearch,
                      generator: SyntheticExampleGenerator,
                      rng: np.random.Generator) -> EncodedExample:
        """Draw a random minority base and interpolate towards its neighbors."""
        base = minority[rng.integers(len(minority))]
        neighbors = index.k_nearest_neighbours(base, self.config.smote_neighbors)
        return generator.generate(base, neighbors, rng)
