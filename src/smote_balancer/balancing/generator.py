"""
Synthetic example generation by interpolating between a base and a neighbor.
"""

from typing import Optional, Sequence
import math

import numpy as np

from ..data.dataset import AttributeDescriptor, AttributeKind, EncodedExample
from ..exceptions import ConfigurationError


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves going up."""
    return float(math.floor(value + 0.5))


class SyntheticExampleGenerator:
    """
    Builds one synthetic example per call.

    Random draws happen in a fixed order so a seeded generator reproduces the
    same examples: the neighbor (once, or per attribute before that
    attribute's draw), then one interpolation draw for each attribute where
    both values are present.
    """

    def __init__(self, attributes: Sequence[AttributeDescriptor], per_attribute_neighbor: bool = False):
        self.attributes = tuple(attributes)
        self.per_attribute_neighbor = per_attribute_neighbor

    def generate(self, base: EncodedExample,
                 neighbor_pool: Sequence[EncodedExample],
                 rng: np.random.Generator,
                 per_attribute_neighbor: Optional[bool] = None) -> EncodedExample:
        """
        Interpolate a new example between ``base`` and random pool members.

        Args:
            base: Minority example the synthetic one starts from
            neighbor_pool: Candidate neighbors (usually the k nearest)
            rng: Random source, consumed in attribute order
            per_attribute_neighbor: Overrides the mode set at construction
                for this call

        Returns:
            New synthetic example with the base's label
        """
        if len(neighbor_pool) == 0:
            raise ConfigurationError("Neighbor pool is empty")

        if per_attribute_neighbor is None:
            per_attribute_neighbor = self.per_attribute_neighbor

        neighbor = None
        if not per_attribute_neighbor:
            neighbor = neighbor_pool[rng.integers(len(neighbor_pool))]

        synthetic = np.empty(len(self.attributes), dtype=float)
        for attribute in self.attributes:
            i = attribute.index
            if per_attribute_neighbor:
                neighbor = neighbor_pool[rng.integers(len(neighbor_pool))]

            if base.is_missing(i):
                synthetic[i] = neighbor[i]
            elif neighbor.is_missing(i):
                synthetic[i] = base[i]
            else:
                delta = (neighbor[i] - base[i]) * rng.random()

                if attribute.kind == AttributeKind.NUMERIC:
                    synthetic[i] = base[i] + delta
                elif attribute.kind == AttributeKind.NOMINAL:
                    synthetic[i] = round_half_up(base[i] + delta)
                else:
                    synthetic[i] = base[i]

        return EncodedExample(synthetic, base.label, weight=1.0, synthetic=True)
