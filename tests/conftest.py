"""
conftest.py
~~~~~~~~~~~

Shared fixtures for the feedforward test suite.
"""

import logging

import numpy as np
import pytest

from feedforward import IdGenerator


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep package logs out of test output unless a test asks for them."""
    logger = logging.getLogger("feedforward")
    previous = logger.level
    logger.setLevel(logging.WARNING)
    yield
    logger.setLevel(previous)


@pytest.fixture
def id_generator():
    """A fresh id allocator, independent of the process default."""
    return IdGenerator()


@pytest.fixture
def rng():
    """Seeded random generator for reproducible weights."""
    return np.random.default_rng(1234)


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary directory for network storage."""
    data_dir = tmp_path / "test_networks"
    data_dir.mkdir()
    return str(data_dir)
