"""
Balancing module for SMOTE oversampling of a two-sided class split.

Supports:
- Minority/majority partitioning on the class-label sign
- Synthetic examples interpolated between nearest minority neighbors
- Neighbor-per-attribute generation
- Synthetic example protection against majority-adjacent candidates
- Majority down/up-sampling with replacement
"""

from .smote_config import SmoteConfig, SmoteResult
from .partitioner import MINORITY, MAJORITY, Partition, ClassPartitioner
from .generator import SyntheticExampleGenerator, round_half_up
from .protection import ProtectionFilter
from .oversampler import SmoteOversampler

__all__ = [
    'SmoteConfig',
    'SmoteResult',
    'MINORITY',
    'MAJORITY',
    'Partition',
    'ClassPartitioner',
    'SyntheticExampleGenerator',
    'round_half_up',
    'ProtectionFilter',
    'SmoteOversampler'
]
