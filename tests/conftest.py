"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from handodds.game.equity import EstimatorConfig, ProbabilityEstimator


@pytest.fixture
def rng():
    """Seeded generator so randomized tests are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def fast_estimator():
    """Estimator with few trials for tests that don't check frequencies."""
    return ProbabilityEstimator(EstimatorConfig(num_trials=300), rng=11)
