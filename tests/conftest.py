"""Pytest configuration for zkcircuit tests."""

import random
import sys
from pathlib import Path

import pytest

# Add the repository root to the path so tests run without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from zkcircuit.primitives.field import BN254_FR  # noqa: E402


@pytest.fixture
def field():
    """BN254 scalar field, the default synthesis field."""
    return BN254_FR


@pytest.fixture
def rng():
    """Deterministic randomness so failures reproduce."""
    return random.Random(1234)
