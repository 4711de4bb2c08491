"""
Configuration and result types for SMOTE oversampling.
"""

from dataclasses import asdict, dataclass, field, fields
from numbers import Integral
from pathlib import Path
from typing import Any, Dict, Mapping, Union
import json
import logging
import math

from ..data.dataset import Dataset
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class SmoteConfig:
    """Configuration for SMOTE oversampling."""
    minority_generation_fraction: float = 1.0  # Synthetic examples per minority example
    majority_draw_fraction: float = 1.0  # 1.0 keeps the original dataset untouched
    smote_neighbors: int = 5
    per_attribute_neighbor: bool = False
    synthetic_example_protection: bool = False
    seed: int = 1
    max_protection_retries: int = 1000  # Per synthetic example
    normalize_distances: bool = False
    estimator_params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration."""
        self.smote_neighbors = _as_count("smote_neighbors", self.smote_neighbors)
        self.max_protection_retries = _as_count("max_protection_retries", self.max_protection_retries)
        self.minority_generation_fraction = _as_fraction(
            "minority_generation_fraction", self.minority_generation_fraction)
        self.majority_draw_fraction = _as_fraction(
            "majority_draw_fraction", self.majority_draw_fraction)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'SmoteConfig':
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown SMOTE options: {unknown}. Available: {sorted(known)}")
        return cls(**values)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'SmoteConfig':
        """Load a config from a JSON file holding an object of options."""
        with open(path, 'r') as f:
            values = json.load(f)
        if not isinstance(values, dict):
            raise ConfigurationError(f"Expected a JSON object in {path}")
        logger.info(f"Loaded SMOTE configuration from {path}")
        return cls.from_dict(values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **changes) -> 'SmoteConfig':
        """Copy with some options changed (validated again)."""
        values = self.to_dict()
        values.update(changes)
        return self.from_dict(values)


@dataclass
class SmoteResult:
    """Result of an oversampling run."""
    dataset: Dataset  # Balanced output
    minority_count: int
    majority_count: int
    synthetic_count: int
    majority_drawn: int  # Majority examples in the output
    rejected_count: int = 0  # Candidates refused by the protection filter
    swapped: bool = False  # Minority partition carries the positive labels

    @property
    def total_original(self) -> int:
        """Total examples entering the oversampler."""
        return self.minority_count + self.majority_count

    @property
    def total_balanced(self) -> int:
        """Total examples in the balanced dataset."""
        return len(self.dataset)

    def get_summary(self) -> str:
        """Get human-readable summary."""
        lines = [
            "SMOTE Summary",
            f"Original: {self.total_original} examples "
            f"({self.minority_count} minority, {self.majority_count} majority)",
            f"Balanced: {self.total_balanced} examples",
            f"Synthetic: {self.synthetic_count} generated",
            f"Majority drawn: {self.majority_drawn}",
            f"Protection rejections: {self.rejected_count}"
        ]
        return "\n".join(lines)


def _as_count(name: str, value: Any) -> int:
    """Whole number >= 1; integral floats (as read from JSON) are accepted."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")
    return int(value)


def _as_fraction(name: str, value: Any) -> float:
    """Finite, non-negative float."""
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"{name} must be a finite value >= 0, got {value}")
    return value
