"""Tests for Ray."""

import pytest
from lumentrace.ray import Ray
from lumentrace.transformations import scaling, translation
from lumentrace.vec4 import point, vector


class TestRay:
    """Test Ray class."""

    def test_creation(self):
        origin = point(1, 2, 3)
        direction = vector(4, 5, 6)
        r = Ray(origin, direction)
        assert r.origin == origin
        assert r.direction == direction

    def test_position(self):
        r = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert r.position(0) == point(2, 3, 4)
        assert r.position(1) == point(3, 3, 4)
        assert r.position(-1) == point(1, 3, 4)
        assert r.position(2.5) == point(4.5, 3, 4)

    def test_translate(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = r.transform(translation(3, 4, 5))
        assert r2.origin == point(4, 6, 8)
        assert r2.direction == vector(0, 1, 0)

    def test_scale(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = r.transform(scaling(2, 3, 4))
        assert r2.origin == point(2, 6, 12)
        assert r2.direction == vector(0, 3, 0)

    def test_transform_returns_new_ray(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r.transform(translation(3, 4, 5))
        assert r.origin == point(1, 2, 3)

    def test_equality(self):
        assert Ray(point(0, 0, 0), vector(0, 0, 1)) == Ray(point(0, 0, 0), vector(0, 0, 1))
        assert Ray(point(0, 0, 0), vector(0, 0, 1)) != Ray(point(0, 0, 0), vector(0, 1, 0))

    def test_transform_round_trip(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        m = translation(3, 4, 5) * scaling(2, 2, 2)
        assert r.transform(m).transform(m.inverse()) == r
