"""
Encoded dataset model shared by the encoder, the neighbor search and the balancer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence
import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

MISSING = float('nan')


class AttributeKind(str, Enum):
    """How an attribute takes part in interpolation."""
    NUMERIC = 'numeric'
    NOMINAL = 'nominal'
    OTHER = 'other'


@dataclass(frozen=True)
class AttributeDescriptor:
    """Position, name and kind of one encoded attribute."""
    index: int
    name: str
    kind: AttributeKind = AttributeKind.NUMERIC


@dataclass(frozen=True, eq=False)
class EncodedExample:
    """
    A fixed-length numeric vector plus a class label.

    Values are copied and frozen on construction, so an example can be shared
    between datasets without defensive copies. Missing values are NaN.
    """
    values: np.ndarray
    label: float
    weight: float = 1.0
    synthetic: bool = False

    def __post_init__(self):
        values = np.array(self.values, dtype=float)
        if values.ndim != 1:
            raise ValueError(f"Example values must be one-dimensional, got shape {values.shape}")
        values.setflags(write=False)
        object.__setattr__(self, 'values', values)
        object.__setattr__(self, 'label', float(self.label))
        object.__setattr__(self, 'weight', float(self.weight))

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return float(self.values[index])

    def is_missing(self, index: int) -> bool:
        """True when the value at ``index`` is the missing sentinel."""
        return bool(np.isnan(self.values[index]))

    @property
    def has_missing_label(self) -> bool:
        return bool(np.isnan(self.label))

    def __repr__(self) -> str:
        kind = "synthetic" if self.synthetic else "original"
        return f"EncodedExample({self.values.tolist()}, label={self.label:g}, {kind})"


@dataclass
class Dataset:
    """
    Ordered, append-only collection of encoded examples.

    All examples share ``attributes``. ``class_categories`` lists the class
    values for a nominal class (labels are indices into it) and is None for a
    numeric class.
    """
    attributes: Sequence[AttributeDescriptor]
    examples: List[EncodedExample] = field(default_factory=list)
    class_name: str = 'class'
    class_categories: Optional[Sequence] = None

    def __post_init__(self):
        self.attributes = tuple(self.attributes)
        self.examples = list(self.examples)
        if self.class_categories is not None:
            self.class_categories = tuple(self.class_categories)
        for example in self.examples:
            self._check_width(example)

    def __len__(self) -> int:
        return len(self.examples)

    def __iter__(self) -> Iterator[EncodedExample]:
        return iter(self.examples)

    def __getitem__(self, index: int) -> EncodedExample:
        return self.examples[index]

    @property
    def num_attributes(self) -> int:
        return len(self.attributes)

    @property
    def is_nominal_class(self) -> bool:
        return self.class_categories is not None

    @property
    def num_classes(self) -> int:
        """Number of class values; 1 for a numeric class."""
        return len(self.class_categories) if self.is_nominal_class else 1

    def _check_width(self, example: EncodedExample) -> None:
        if len(example) != len(self.attributes):
            raise ValueError(
                f"Example has {len(example)} values, dataset has {len(self.attributes)} attributes"
            )

    def append(self, example: EncodedExample) -> None:
        """Add an example at the end of the dataset."""
        self._check_width(example)
        self.examples.append(example)

    def extend(self, examples: Iterable[EncodedExample]) -> None:
        for example in examples:
            self.append(example)

    def empty_copy(self) -> 'Dataset':
        """New dataset with the same header and no examples."""
        return Dataset(self.attributes, [], self.class_name, self.class_categories)

    def copy(self) -> 'Dataset':
        """New dataset holding the same (immutable) examples."""
        return self.subset(self.examples)

    def subset(self, examples: Iterable[EncodedExample]) -> 'Dataset':
        """New dataset with this header and the given examples."""
        return Dataset(self.attributes, list(examples), self.class_name, self.class_categories)

    def drop_missing_class(self) -> 'Dataset':
        """Copy without the examples whose class label is missing."""
        kept = [ex for ex in self.examples if not ex.has_missing_label]
        if len(kept) < len(self.examples):
            logger.info(f"Removed {len(self.examples) - len(kept)} examples with missing class")
        return self.subset(kept)

    def feature_matrix(self) -> np.ndarray:
        """Attribute values as an (n_examples, n_attributes) array."""
        if not self.examples:
            return np.empty((0, self.num_attributes), dtype=float)
        return np.vstack([ex.values for ex in self.examples])

    def labels(self) -> np.ndarray:
        return np.array([ex.label for ex in self.examples], dtype=float)

    def weights(self) -> np.ndarray:
        return np.array([ex.weight for ex in self.examples], dtype=float)

    def synthetic_mask(self) -> np.ndarray:
        return np.array([ex.synthetic for ex in self.examples], dtype=bool)

    def class_counts(self) -> dict:
        """Number of examples per label value."""
        counts = {}
        for ex in self.examples:
            counts[ex.label] = counts.get(ex.label, 0) + 1
        return counts

    def to_frame(self) -> pd.DataFrame:
        """Encoded values, label and synthetic flag as a DataFrame."""
        frame = pd.DataFrame(self.feature_matrix(), columns=[a.name for a in self.attributes])
        frame[self.class_name] = self.labels()
        frame['synthetic'] = self.synthetic_mask()
        return frame
