"""Pytest configuration — fast-by-default setup.

Slow tests (large images checked against naive per-pixel reference
implementations) are skipped unless --slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)
"""
import numpy as np
import pytest

from graymap import Image


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests on large images against reference loops",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped — pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def gradient():
    """A 5x3 image whose level at (x, y) is 10*y + x."""
    levels = np.array([[10 * y + x for x in range(5)] for y in range(3)])
    image = Image.from_array(levels, maxval=255)
    yield image
    image.destroy()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
