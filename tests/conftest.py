"""
Shared fixtures for all tests.

This module provides common fixtures used across unit and integration tests.
"""
import pytest
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add src to path for running from a checkout
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from smote_balancer.data import AttributeDescriptor, AttributeKind, Dataset, EncodedExample


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: end-to-end runs through the classifier")


def make_dataset(points, labels, kinds=None):
    """Build a Dataset from rows of values and matching labels."""
    width = len(points[0]) if points else 0
    kinds = kinds or [AttributeKind.NUMERIC] * width
    attributes = [AttributeDescriptor(i, f"a{i}", kind) for i, kind in enumerate(kinds)]
    examples = [EncodedExample(p, label) for p, label in zip(points, labels)]
    return Dataset(attributes, examples, 'class', ('minority', 'majority'))


# =============================================================================
# Encoded Dataset Fixtures
# =============================================================================

@pytest.fixture
def dataset_factory():
    """Factory building a Dataset from rows, labels and optional kinds."""
    return make_dataset


@pytest.fixture
def toy_dataset():
    """Two label-0 points and one label-1 point (the label-1 side is smaller)."""
    return make_dataset([[0.0, 0.0], [0.0, 2.0], [10.0, 10.0]], [0, 0, 1])


@pytest.fixture
def skewed_dataset():
    """Two label-0 points against three label-1 points."""
    return make_dataset(
        [[0.0, 0.0], [0.0, 2.0], [10.0, 10.0], [11.0, 10.0], [10.0, 11.0]],
        [0, 0, 1, 1, 1]
    )


@pytest.fixture
def large_skewed_dataset():
    """Ten minority (label 0) and forty majority (label 1) examples in 3-D."""
    rng = np.random.default_rng(42)
    minority = rng.normal(0.0, 1.0, size=(10, 3))
    majority = rng.normal(5.0, 1.0, size=(40, 3))
    points = np.vstack([minority, majority]).tolist()
    labels = [0] * 10 + [1] * 40
    return make_dataset(points, labels)


# =============================================================================
# Raw Data Fixtures
# =============================================================================

@pytest.fixture
def imbalanced_frame():
    """Raw frame with numeric and nominal columns: 60 'neg' rows, 12 'pos' rows."""
    rng = np.random.default_rng(0)
    n_neg, n_pos = 60, 12
    frame = pd.DataFrame({
        'x1': np.concatenate([rng.normal(0.0, 1.0, n_neg), rng.normal(3.0, 1.0, n_pos)]),
        'x2': np.concatenate([rng.normal(0.0, 1.0, n_neg), rng.normal(3.0, 1.0, n_pos)]),
        'colour': ['red', 'green', 'blue'] * ((n_neg + n_pos) // 3),
        'label': ['neg'] * n_neg + ['pos'] * n_pos
    })
    return frame


@pytest.fixture
def regression_frame():
    """Raw frame with a numeric class: 5 non-positive targets, 20 positive."""
    rng = np.random.default_rng(1)
    x = np.concatenate([rng.uniform(-5.0, -1.0, 5), rng.uniform(1.0, 5.0, 20)])
    return pd.DataFrame({
        'x': x,
        'target': x * 1.5 + 0.25
    })
