"""Pytest configuration and shared fixtures."""

import pytest
import numpy as np
from pathlib import Path

from potpack.packing.rectangle import Rectangle
from potpack.utils.config import get_default_config, load_config


@pytest.fixture(scope="session")
def test_config():
    """Load test configuration."""
    config_path = Path(__file__).resolve().parents[1] / "config" / "default.yaml"
    if not config_path.exists():
        return get_default_config()
    return load_config(str(config_path))


@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def mixed_rectangles():
    """Sizes that hit the split and height-match branches (no exact fit)."""
    return [
        Rectangle(width=2, height=4, rect_id=0),
        Rectangle(width=2, height=2, rect_id=1),
        Rectangle(width=2, height=2, rect_id=2),
    ]


@pytest.fixture
def random_rectangles(rng):
    """Forty rectangles of assorted sizes."""
    sides = rng.integers(1, 64, size=(40, 2), endpoint=True)
    return [Rectangle(width=int(w), height=int(h), rect_id=i) for i, (w, h) in enumerate(sides)]
