"""Test the configuration module functionality."""

import pytest

from preflow.config import SOLVER_CONFIG, SolverConfig


def test_solver_config_defaults():
    """Test that the default configuration values are correct."""
    config = SolverConfig()

    assert config.max_iterations is None
    assert config.progress_log_interval == 10000
    assert config.default_random_seed is None


def test_iteration_limit():
    config = SolverConfig(max_iterations=5)

    assert not config.iteration_limit_reached(5)
    assert config.iteration_limit_reached(6)


def test_no_iteration_limit():
    config = SolverConfig()
    assert not config.iteration_limit_reached(10**9)


def test_zero_iteration_limit():
    assert SolverConfig(max_iterations=0).iteration_limit_reached(1)


def test_should_log_progress():
    config = SolverConfig(progress_log_interval=3)

    assert [i for i in range(1, 10) if config.should_log_progress(i)] == [3, 6, 9]


def test_progress_logging_disabled():
    config = SolverConfig(progress_log_interval=0)
    assert not any(config.should_log_progress(i) for i in range(1, 100))


@pytest.mark.parametrize(
    "kwargs", [{"max_iterations": -1}, {"progress_log_interval": -5}]
)
def test_negative_values_rejected(kwargs):
    with pytest.raises(ValueError, match="must be non-negative"):
        SolverConfig(**kwargs)


def test_global_config_instance():
    """Test that the global SOLVER_CONFIG instance works."""
    assert SOLVER_CONFIG.max_iterations is None
    assert not SOLVER_CONFIG.iteration_limit_reached(1)
