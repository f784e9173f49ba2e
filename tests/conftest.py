"""Pytest configuration for the mc-diffusion test suite."""

import pytest

from mcdiffusion.config import get_default_sim_options


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-statistical",
        action="store_true",
        default=False,
        help="Run statistical checks against analytic results (skipped by default)",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "statistical: mark test as a statistical check (skipped unless --run-statistical is passed)",
    )
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow (large sample sizes, may take several seconds)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip statistical tests unless the corresponding flag is passed."""
    if config.getoption("--run-statistical"):
        return
    skip_statistical = pytest.mark.skip(reason="need --run-statistical option to run")
    for item in items:
        if "statistical" in item.keywords:
            item.add_marker(skip_statistical)


@pytest.fixture
def small_options():
    """Cheap options: 200 trials over a 1 s horizon."""
    options = get_default_sim_options()
    options.update(
        {
            "delta_t": 1e-3,
            "max_t": 1.0,
            "trials": 200,
            "random_state": 1234,
        }
    )
    return options
