"""
Integration tests for SmoteClassifier.

These tests run the whole chain: encoding, oversampling and estimator
training, then prediction on raw examples.
"""
import pytest
import json

import numpy as np
import pandas as pd
from sklearn.neighbors import KNeighborsClassifier

from smote_balancer import (
    ConfigurationError,
    EncodingError,
    NotFittedError,
    PlainEstimator,
    SeedableEstimator,
    SmoteClassifier,
    SmoteConfig
)


@pytest.mark.integration
class TestSmoteClassifierRun:
    """Tests for SmoteClassifier.run."""

    def test_run_balances_and_fits(self, imbalanced_frame):
        """Test the balanced size and the fitted estimator."""
        classifier = SmoteClassifier(SmoteConfig(minority_generation_fraction=2.0))

        balanced, estimator = classifier.run(imbalanced_frame, 'label')

        assert len(balanced) == len(imbalanced_frame) + 24
        assert isinstance(estimator, SeedableEstimator)
        assert estimator.is_fitted
        assert classifier.last_result.swapped
        assert classifier.last_result.minority_count == 12

    def test_synthetic_examples_carry_minority_class(self, imbalanced_frame):
        """Test that every synthetic example is labelled 'pos'."""
        classifier = SmoteClassifier()

        balanced, _ = classifier.run(imbalanced_frame, 'label')

        frame = balanced.to_frame()
        synthetic = frame[frame['synthetic']]
        assert len(synthetic) == 12
        # Categories are sorted, so 'pos' encodes as 1
        assert (synthetic['label'] == 1.0).all()
        assert classifier.encoder_.decode_class(1.0) == 'pos'

    def test_same_seed_same_run(self, imbalanced_frame):
        """Test end-to-end reproducibility from a single seed."""
        config = SmoteConfig(majority_draw_fraction=0.5, synthetic_example_protection=True)

        first = SmoteClassifier(config)
        second = SmoteClassifier(config)
        balanced_a, estimator_a = first.run(imbalanced_frame, 'label', seed=5)
        balanced_b, estimator_b = second.run(imbalanced_frame, 'label', seed=5)

        pd.testing.assert_frame_equal(balanced_a.to_frame(), balanced_b.to_frame())
        assert estimator_a.estimator.random_state == estimator_b.estimator.random_state

        row = imbalanced_frame.drop(columns='label').iloc[[3]]
        np.testing.assert_array_equal(first.predict(row), second.predict(row))

    def test_seed_argument_overrides_config(self, imbalanced_frame):
        """Test that the seed argument takes precedence over config.seed."""
        classifier = SmoteClassifier(SmoteConfig(seed=1))

        default_run, _ = classifier.run(imbalanced_frame, 'label')
        seeded_run, _ = classifier.run(imbalanced_frame, 'label', seed=99)

        assert not np.array_equal(default_run.feature_matrix(), seeded_run.feature_matrix())
        assert classifier.config.seed == 1

    def test_estimator_params_pass_through(self, imbalanced_frame):
        """Test that estimator_params reach the estimator."""
        config = SmoteConfig(estimator_params={'max_depth': 2})

        _, estimator = SmoteClassifier(config).run(imbalanced_frame, 'label')

        assert estimator.estimator.max_depth == 2
        assert estimator.get_measure('measureDepth') <= 2.0

    def test_template_estimator_untouched(self, imbalanced_frame):
        """Test that the caller's estimator is cloned, never fitted."""
        template = KNeighborsClassifier(n_neighbors=3)

        _, estimator = SmoteClassifier(estimator=template).run(imbalanced_frame, 'label')

        assert isinstance(estimator, PlainEstimator)
        assert estimator.estimator is not template
        assert not hasattr(template, 'classes_')

    def test_missing_class_rows_removed(self, imbalanced_frame):
        """Test that rows without a class are dropped before encoding."""
        frame = imbalanced_frame.copy()
        frame.loc[0, 'label'] = None

        balanced, _ = SmoteClassifier().run(frame, 'label')

        assert len(balanced) == len(frame) - 1 + 12

    def test_all_classes_missing(self, imbalanced_frame):
        """Test error when no row has a class."""
        frame = imbalanced_frame.copy()
        frame['label'] = None

        with pytest.raises(ConfigurationError):
            SmoteClassifier().run(frame, 'label')

    def test_unknown_target(self, imbalanced_frame):
        """Test error for a target column that does not exist."""
        with pytest.raises(EncodingError):
            SmoteClassifier().run(imbalanced_frame, 'nope')

    def test_config_from_json(self, imbalanced_frame, tmp_path):
        """Test a run configured from a JSON file."""
        path = tmp_path / "smote.json"
        path.write_text(json.dumps({'minority_generation_fraction': 0.5, 'smote_neighbors': 3}))

        balanced, _ = SmoteClassifier(SmoteConfig.from_json(path)).run(imbalanced_frame, 'label')

        assert len(balanced) == len(imbalanced_frame) + 6


@pytest.mark.integration
class TestSmoteClassifierPredict:
    """Tests for prediction after a run."""

    def test_predict_before_run(self):
        """Test error and description before any model is built."""
        classifier = SmoteClassifier()

        assert str(classifier) == "SMOTE: No model built yet."
        with pytest.raises(NotFittedError):
            classifier.predict({'x1': 0.0})

    def test_predict_distribution(self, imbalanced_frame):
        """Test probability vectors for dict, Series and DataFrame input."""
        classifier = SmoteClassifier()
        classifier.run(imbalanced_frame, 'label')
        features = imbalanced_frame.drop(columns='label')

        for example in (features.iloc[[0]], features.iloc[0], features.iloc[0].to_dict()):
            distribution = classifier.predict(example)
            assert distribution.shape == (2,)
            assert distribution.sum() == pytest.approx(1.0)

    def test_predict_class(self, imbalanced_frame):
        """Test that clearly separated examples get their class back."""
        classifier = SmoteClassifier(estimator=KNeighborsClassifier(n_neighbors=5))
        classifier.run(imbalanced_frame, 'label')

        assert classifier.predict_class({'x1': 8.0, 'x2': 8.0, 'colour': 'red'}) == 'pos'
        assert classifier.predict_class({'x1': -4.0, 'x2': -4.0, 'colour': 'red'}) == 'neg'

    def test_measures_delegate(self, imbalanced_frame):
        """Test measure introspection through the classifier."""
        classifier = SmoteClassifier()
        classifier.run(imbalanced_frame, 'label')

        assert 'measureNumLeaves' in classifier.enumerate_measures()
        assert classifier.get_measure('measureNumLeaves') >= 2.0
        assert str(classifier).startswith("SMOTE base estimator")

    def test_numeric_class(self, regression_frame):
        """Test regression: numeric class with a one-element prediction."""
        classifier = SmoteClassifier()

        balanced, estimator = classifier.run(regression_frame, 'target')

        assert not balanced.is_nominal_class
        assert len(balanced) == 25 + 5
        assert type(estimator.estimator).__name__ == 'DecisionTreeRegressor'
        prediction = classifier.predict({'x': 3.0})
        assert prediction.shape == (1,)
        assert prediction[0] > 0.0
