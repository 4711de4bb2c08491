"""
Nominal-to-binary encoding of raw tabular data.

Turns a pandas DataFrame into a Dataset whose attribute values are all
floats, so Euclidean distance between examples is meaningful:

- numeric and boolean columns are kept as numeric attributes
- nominal (string/categorical) columns become one 0/1 indicator per
  category, or a single nominal code attribute when ``binarize=False``
- datetime columns become pass-through ``other`` attributes (epoch seconds)
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

import numpy as np
import pandas as pd

from .dataset import AttributeDescriptor, AttributeKind, Dataset, EncodedExample
from ..exceptions import EncodingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnEncoding:
    """How one raw column maps to encoded attributes."""
    name: str
    kind: str  # 'numeric', 'nominal', 'datetime'
    categories: Optional[tuple] = None


class NominalToBinaryEncoder:
    """
    Encoder fitted once on the training frame and reused for prediction.

    Usage:
        encoder = NominalToBinaryEncoder()
        dataset = encoder.fit_transform(frame, target='label')
        row = encoder.transform_features(new_frame)
    """

    def __init__(self, binarize: bool = True, nominal_class: Optional[bool] = None):
        """
        Args:
            binarize: Expand every nominal column into per-category indicators
            nominal_class: Force the class to be nominal (True) or numeric
                (False). None infers it: float columns holding non-integral
                values are numeric, anything else is nominal.
        """
        self.binarize = binarize
        self.nominal_class = nominal_class
        self.target_: Optional[str] = None
        self.columns_: List[ColumnEncoding] = []
        self.attributes_: List[AttributeDescriptor] = []
        self.class_categories_: Optional[tuple] = None

    @property
    def is_fitted(self) -> bool:
        return self.target_ is not None

    def fit(self, frame: pd.DataFrame, target: str) -> 'NominalToBinaryEncoder':
        """Learn column kinds, category lists and the class layout."""
        if target not in frame.columns:
            raise EncodingError(f"Target column '{target}' not found in dataset")

        self.target_ = target
        self.columns_ = [self._fit_column(frame[col]) for col in frame.columns if col != target]
        self.attributes_ = self._build_attributes()
        self.class_categories_ = self._fit_class(frame[target])

        logger.debug(f"Encoded {len(self.columns_)} columns into {len(self.attributes_)} attributes")
        return self

    def transform(self, frame: pd.DataFrame) -> Dataset:
        """Encode a frame into a Dataset. A frame without the target gets missing labels."""
        self._check_fitted()
        values = self.transform_features(frame)

        if self.target_ in frame.columns:
            labels = self._encode_class(frame[self.target_])
        else:
            labels = np.full(len(frame), np.nan)

        examples = [EncodedExample(row, label) for row, label in zip(values, labels)]
        return Dataset(self.attributes_, examples, str(self.target_), self.class_categories_)

    def fit_transform(self, frame: pd.DataFrame, target: str) -> Dataset:
        return self.fit(frame, target).transform(frame)

    def transform_features(self, frame: pd.DataFrame) -> np.ndarray:
        """Encode only the attribute columns as an (n_rows, n_attributes) array."""
        self._check_fitted()
        missing = [col.name for col in self.columns_ if col.name not in frame.columns]
        if missing:
            raise EncodingError(f"Columns missing from input: {missing}")

        blocks = [self._encode_column(frame[col.name], col) for col in self.columns_]
        if not blocks:
            return np.empty((len(frame), 0), dtype=float)
        return np.hstack(blocks)

    # ------------------------------------------------------------------ #

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise EncodingError("Encoder must be fitted before transform")

    def _fit_column(self, series: pd.Series) -> ColumnEncoding:
        name = series.name
        dtype = series.dtype

        if pd.api.types.is_bool_dtype(dtype):
            return ColumnEncoding(name, 'numeric')
        if pd.api.types.is_datetime64_any_dtype(dtype):
            return ColumnEncoding(name, 'datetime')
        if isinstance(dtype, pd.CategoricalDtype):
            return ColumnEncoding(name, 'nominal', tuple(dtype.categories))
        if pd.api.types.is_complex_dtype(dtype) or pd.api.types.is_timedelta64_dtype(dtype):
            raise EncodingError(f"Column '{name}' has unsupported type {dtype}")
        if pd.api.types.is_numeric_dtype(dtype):
            return ColumnEncoding(name, 'numeric')
        if pd.api.types.is_string_dtype(dtype) or pd.api.types.is_object_dtype(dtype):
            return ColumnEncoding(name, 'nominal', _sorted_categories(series))

        raise EncodingError(f"Column '{name}' has unsupported type {dtype}")

    def _build_attributes(self) -> List[AttributeDescriptor]:
        attributes = []
        for col in self.columns_:
            if col.kind == 'nominal' and self.binarize:
                for category in col.categories:
                    attributes.append(AttributeDescriptor(
                        len(attributes), f"{col.name}={category}", AttributeKind.NUMERIC))
            elif col.kind == 'nominal':
                attributes.append(AttributeDescriptor(len(attributes), str(col.name), AttributeKind.NOMINAL))
            elif col.kind == 'datetime':
                attributes.append(AttributeDescriptor(len(attributes), str(col.name), AttributeKind.OTHER))
            else:
                attributes.append(AttributeDescriptor(len(attributes), str(col.name), AttributeKind.NUMERIC))
        return attributes

    def _encode_column(self, series: pd.Series, col: ColumnEncoding) -> np.ndarray:
        if col.kind == 'numeric':
            try:
                values = pd.to_numeric(series, errors='raise').astype(float).to_numpy()
            except (TypeError, ValueError) as exc:
                raise EncodingError(f"Column '{col.name}' is not numeric: {exc}") from exc
            return values.reshape(-1, 1)

        if col.kind == 'datetime':
            stamps = pd.to_datetime(series)
            if stamps.dt.tz is not None:
                stamps = stamps.dt.tz_convert('UTC').dt.tz_localize(None)
            nanos = stamps.to_numpy(dtype='datetime64[ns]').astype('int64')
            return np.where(stamps.isna().to_numpy(), np.nan, nanos / 1e9).reshape(-1, 1)

        # Unseen categories get code -1 and are treated as missing
        codes = pd.Categorical(series, categories=col.categories).codes.astype(float)
        codes[codes < 0] = np.nan

        if not self.binarize:
            return codes.reshape(-1, 1)

        indicators = (codes.reshape(-1, 1) == np.arange(len(col.categories))).astype(float)
        indicators[np.isnan(codes)] = np.nan
        return indicators

    def _fit_class(self, series: pd.Series) -> Optional[tuple]:
        dtype = series.dtype
        nominal = self.nominal_class
        if nominal is None:
            present = series.dropna()
            nominal = not (pd.api.types.is_float_dtype(dtype)
                           and not np.all(np.mod(present.to_numpy(), 1) == 0))

        if not nominal:
            if not pd.api.types.is_numeric_dtype(dtype) or pd.api.types.is_bool_dtype(dtype):
                raise EncodingError(f"Numeric class '{series.name}' has non-numeric type {dtype}")
            return None

        if isinstance(dtype, pd.CategoricalDtype):
            return tuple(dtype.categories)
        return _sorted_categories(series)

    def _encode_class(self, series: pd.Series) -> np.ndarray:
        if self.class_categories_ is None:
            return series.astype(float).to_numpy()

        codes = pd.Categorical(series, categories=self.class_categories_).codes.astype(float)
        codes[codes < 0] = np.nan
        return codes

    def encode_row(self, row) -> np.ndarray:
        """Encode a single raw example given as a dict, Series or one-row DataFrame."""
        return self.transform_features(_as_frame(row))[0]

    def decode_class(self, label: float):
        """Class value for an encoded label."""
        if self.class_categories_ is None or np.isnan(label):
            return label
        return self.class_categories_[int(label)]


def _as_frame(row) -> pd.DataFrame:
    if isinstance(row, pd.DataFrame):
        if len(row) != 1:
            raise EncodingError(f"Expected a single row, got {len(row)}")
        return row
    if isinstance(row, pd.Series):
        return row.to_frame().T.infer_objects()
    if isinstance(row, dict):
        return pd.DataFrame([row])
    raise EncodingError(f"Cannot encode example of type {type(row).__name__}")


def _sorted_categories(series: pd.Series) -> tuple:
    """Distinct non-missing values in sorted order."""
    present = series.dropna()
    strings = [isinstance(v, str) for v in present]
    if any(strings) and not all(strings):
        raise EncodingError(f"Column '{series.name}' mixes strings with other object types")
    try:
        return tuple(sorted(present.unique()))
    except TypeError as exc:
        raise EncodingError(f"Column '{series.name}' has values that cannot be ordered: {exc}") from exc
