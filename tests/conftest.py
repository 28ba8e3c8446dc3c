"""Pytest configuration for lumentrace tests.

Provides shared fixtures: the two-sphere default world and a glass sphere.
"""

import pytest

from lumentrace.shapes import glass_sphere
from lumentrace.world import default_world as make_default_world


@pytest.fixture
def default_world():
    """A fresh default world; tests may mutate its shapes and light."""
    return make_default_world()


@pytest.fixture
def glass():
    """A unit glass sphere (transparency 1.0, refractive index 1.5)."""
    return glass_sphere()
