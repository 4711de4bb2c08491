"""
Data module for the encoded dataset model and raw-data encoding.

Supports:
- Immutable encoded examples with a missing-value sentinel (NaN)
- Append-only datasets sharing attribute descriptors
- Nominal-to-binary encoding of pandas DataFrames
"""

from .dataset import (
    MISSING,
    AttributeKind,
    AttributeDescriptor,
    EncodedExample,
    Dataset
)
from .encoder import ColumnEncoding, NominalToBinaryEncoder

__all__ = [
    'MISSING',
    'AttributeKind',
    'AttributeDescriptor',
    'EncodedExample',
    'Dataset',
    'ColumnEncoding',
    'NominalToBinaryEncoder'
]
