"""
End-to-end SMOTE classifier: encode, oversample, then train an estimator.
"""

from copy import deepcopy
from typing import Any, List, Mapping, Optional, Tuple
import logging

import numpy as np
import pandas as pd

from ..balancing import SmoteConfig, SmoteOversampler, SmoteResult
from ..data import Dataset, NominalToBinaryEncoder
from ..estimators import EstimatorAdapter, default_estimator, wrap_estimator
from ..estimators.adapters import MeasureFunction
from ..exceptions import ConfigurationError, EncodingError, NotFittedError

logger = logging.getLogger(__name__)

MAX_ESTIMATOR_SEED = 2 ** 31 - 1


class SmoteClassifier:
    """
    Trains a scikit-learn estimator on a SMOTE-balanced copy of the data.

    Usage:
        config = SmoteConfig(
            minority_generation_fraction=2.0,
            smote_neighbors=5,
            synthetic_example_protection=True
        )

        classifier = SmoteClassifier(config)
        balanced, estimator = classifier.run(frame, target='label', seed=7)
        probabilities = classifier.predict({'age': 41, 'colour': 'red'})

    Each run clones the estimator and fits the clone; the fitted adapter is
    returned and kept for ``predict``.
    """

    def __init__(self,
                 config: Optional[SmoteConfig] = None,
                 estimator: Optional[Any] = None,
                 encoder: Optional[NominalToBinaryEncoder] = None,
                 measures: Optional[Mapping[str, MeasureFunction]] = None,
                 show_progress: bool = False):
        """
        Initialize classifier.

        Args:
            config: SMOTE configuration (defaults if None)
            estimator: scikit-learn estimator template; a decision tree
                matching the class type if None
            encoder: Unfitted encoder template (NominalToBinaryEncoder if None)
            measures: Named measures for the fitted estimator
            show_progress: Display a progress bar during generation
        """
        self.config = config if config is not None else SmoteConfig()
        self.estimator = estimator
        self.encoder = encoder if encoder is not None else NominalToBinaryEncoder()
        self.measures = measures
        self.show_progress = show_progress

        self.encoder_: Optional[NominalToBinaryEncoder] = None
        self.estimator_: Optional[EstimatorAdapter] = None
        self.last_result: Optional[SmoteResult] = None

    def run(self,
            frame: pd.DataFrame,
            target: str,
            config: Optional[SmoteConfig] = None,
            seed: Optional[int] = None) -> Tuple[Dataset, EstimatorAdapter]:
        """
        Balance ``frame`` and fit the estimator on the result.

        Args:
            frame: Raw dataset including the target column
            target: Name of the class column
            config: Overrides the configuration given at construction
            seed: Overrides ``config.seed``

        Returns:
            Tuple of (balanced encoded dataset, fitted estimator adapter)
        """
        config = config if config is not None else self.config
        if seed is not None:
            config = config.replace(seed=seed)

        if target not in frame.columns:
            raise EncodingError(f"Target column '{target}' not found in dataset")

        # Stage 1: drop rows without a class
        known = frame[frame[target].notna()]
        if len(known) == 0:
            raise ConfigurationError("Dataset has no examples with a known class")
        if len(known) < len(frame):
            logger.info(f"Removed {len(frame) - len(known)} rows with missing class")

        # Stage 2: encode
        encoder = deepcopy(self.encoder)
        dataset = encoder.fit_transform(known, target)

        # Stage 3: oversample
        rng = np.random.default_rng(config.seed)
        result = SmoteOversampler(config, self.show_progress).resample(dataset, rng)

        # Stage 4: train
        template = self.estimator
        if template is None:
            template = default_estimator(dataset.is_nominal_class)
        adapter = wrap_estimator(template, self.measures)
        adapter.set_params(config.estimator_params)
        if adapter.seedable:
            adapter.set_seed(int(rng.integers(MAX_ESTIMATOR_SEED)))
        adapter.fit(result.dataset)

        self.encoder_ = encoder
        self.estimator_ = adapter
        self.last_result = result
        return result.dataset, adapter

    def predict(self, example) -> np.ndarray:
        """
        Class distribution for a raw example.

        Args:
            example: dict, Series or one-row DataFrame with the training columns

        Returns:
            Probability vector over the class categories, or a one-element
            array holding the prediction for a numeric class
        """
        self._check_fitted()
        values = self.encoder_.encode_row(example)
        return self.estimator_.predict_distribution(values)

    distribution_for_instance = predict

    def predict_class(self, example):
        """Most probable class value (or the prediction for a numeric class)."""
        distribution = self.predict(example)
        if self.encoder_.class_categories_ is None:
            return float(distribution[0])
        return self.encoder_.decode_class(float(np.argmax(distribution)))

    def enumerate_measures(self) -> List[str]:
        self._check_fitted()
        return self.estimator_.enumerate_measures()

    def get_measure(self, name: str) -> float:
        self._check_fitted()
        return self.estimator_.get_measure(name)

    def _check_fitted(self) -> None:
        if self.estimator_ is None:
            raise NotFittedError("SMOTE: No model built yet.")

    def __str__(self) -> str:
        if self.estimator_ is None:
            return "SMOTE: No model built yet."
        return f"SMOTE base estimator:\n\n{self.estimator_}\n"
