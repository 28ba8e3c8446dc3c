"""Tests for intersections, hit selection and shading precomputation."""

import pytest
import math
from lumentrace.constants import EPSILON
from lumentrace.intersection import Intersection, intersections, hit, prepare_computations
from lumentrace.ray import Ray
from lumentrace.shapes import Plane, Sphere, glass_sphere
from lumentrace.transformations import scaling, translation
from lumentrace.vec4 import point, vector

SQRT2_2 = math.sqrt(2) / 2


class TestIntersection:
    """Test Intersection records and the intersections() aggregator."""

    def test_creation(self):
        s = Sphere()
        i = Intersection(3.5, s)
        assert i.t == 3.5
        assert i.object is s

    def test_equality_is_identity(self):
        s = Sphere()
        assert Intersection(1, s) != Intersection(1, s)

    def test_aggregate_sorts_by_t(self):
        s = Sphere()
        i1, i2, i3 = Intersection(2, s), Intersection(-1, s), Intersection(1, s)
        xs = intersections(i1, i2, i3)
        assert [i.t for i in xs] == [-1, 1, 2]


class TestHit:
    """Test hit() selection."""

    def test_all_positive(self):
        s = Sphere()
        i1, i2 = Intersection(1, s), Intersection(2, s)
        assert hit(intersections(i2, i1)) is i1

    def test_some_negative(self):
        s = Sphere()
        i1, i2 = Intersection(-1, s), Intersection(1, s)
        assert hit(intersections(i2, i1)) is i2

    def test_all_negative(self):
        s = Sphere()
        assert hit(intersections(Intersection(-2, s), Intersection(-1, s))) is None

    def test_lowest_non_negative(self):
        s = Sphere()
        i1, i2, i3, i4 = (Intersection(t, s) for t in (5, 7, -3, 2))
        assert hit(intersections(i1, i2, i3, i4)) is i4

    def test_unsorted_input(self):
        s = Sphere()
        i1, i2, i3 = Intersection(5, s), Intersection(-3, s), Intersection(2, s)
        assert hit([i1, i2, i3]) is i3

    def test_zero_counts_as_hit(self):
        s = Sphere()
        i = Intersection(0, s)
        assert hit([Intersection(-1, s), i]) is i

    def test_empty(self):
        assert hit([]) is None


class TestPrepareComputations:
    """Test prepare_computations."""

    def test_outside_hit(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        s = Sphere()
        comps = prepare_computations(Intersection(4, s), r)
        assert comps.t == 4
        assert comps.object is s
        assert comps.point == point(0, 0, -1)
        assert comps.eye == vector(0, 0, -1)
        assert comps.normal == vector(0, 0, -1)
        assert comps.inside is False

    def test_inside_hit(self):
        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = prepare_computations(Intersection(1, Sphere()), r)
        assert comps.point == point(0, 0, 1)
        assert comps.eye == vector(0, 0, -1)
        assert comps.inside is True
        # Flipped to face the eye
        assert comps.normal == vector(0, 0, -1)

    def test_over_point(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        s = Sphere(translation(0, 0, 1))
        comps = prepare_computations(Intersection(5, s), r)
        assert comps.over_point.z < -EPSILON / 2
        assert comps.point.z > comps.over_point.z

    def test_under_point(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        s = glass_sphere(translation(0, 0, 1))
        i = Intersection(5, s)
        comps = prepare_computations(i, r, [i])
        assert comps.under_point.z > EPSILON / 2
        assert comps.point.z < comps.under_point.z

    def test_reflection_vector(self):
        r = Ray(point(0, 1, -1), vector(0, -SQRT2_2, SQRT2_2))
        comps = prepare_computations(Intersection(math.sqrt(2), Plane()), r)
        assert comps.reflection_vector == vector(0, SQRT2_2, SQRT2_2)

    def test_default_indices_outside(self):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        s = glass_sphere()
        comps = prepare_computations(Intersection(4, s), r)
        assert comps.n1 == 1.0
        assert comps.n2 == 1.5


class TestRefractiveIndices:
    """Test n1/n2 along a ray through nested glass spheres."""

    @pytest.fixture
    def nested(self):
        a = glass_sphere(scaling(2, 2, 2), refractive_index=1.5)
        b = glass_sphere(translation(0, 0, -0.25), refractive_index=2.0)
        c = glass_sphere(translation(0, 0, 0.25), refractive_index=2.5)
        r = Ray(point(0, 0, -4), vector(0, 0, 1))
        xs = intersections(
            Intersection(2, a), Intersection(2.75, b), Intersection(3.25, c),
            Intersection(4.75, b), Intersection(5.25, c), Intersection(6, a),
        )
        return r, xs

    @pytest.mark.parametrize("index,n1,n2", [
        (0, 1.0, 1.5),
        (1, 1.5, 2.0),
        (2, 2.0, 2.5),
        (3, 2.5, 2.5),
        (4, 2.5, 1.5),
        (5, 1.5, 1.0),
    ])
    def test_n1_n2(self, nested, index, n1, n2):
        r, xs = nested
        comps = prepare_computations(xs[index], r, xs)
        assert comps.n1 == n1
        assert comps.n2 == n2

    def test_identical_shapes_are_distinct(self):
        # Two equal-looking spheres must not be confused in the container list
        a = glass_sphere(refractive_index=1.5)
        b = glass_sphere(refractive_index=1.5)
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        xs = intersections(
            Intersection(4, a), Intersection(4, b), Intersection(6, a), Intersection(6, b)
        )
        comps = prepare_computations(xs[1], r, xs)
        assert comps.n1 == 1.5
        assert comps.n2 == 1.5
        comps = prepare_computations(xs[3], r, xs)
        assert comps.n1 == 1.5
        assert comps.n2 == 1.0


class TestSchlick:
    """Test the Schlick reflectance approximation."""

    def test_total_internal_reflection(self, glass):
        r = Ray(point(0, 0, SQRT2_2), vector(0, 1, 0))
        xs = intersections(Intersection(-SQRT2_2, glass), Intersection(SQRT2_2, glass))
        comps = prepare_computations(xs[1], r, xs)
        assert comps.schlick() == 1.0

    def test_perpendicular(self, glass):
        r = Ray(point(0, 0, 0), vector(0, 1, 0))
        xs = intersections(Intersection(-1, glass), Intersection(1, glass))
        comps = prepare_computations(xs[1], r, xs)
        assert comps.schlick() == pytest.approx(0.04, abs=1e-5)

    def test_small_angle(self, glass):
        r = Ray(point(0, 0.99, -2), vector(0, 0, 1))
        xs = intersections(Intersection(1.8589, glass))
        comps = prepare_computations(xs[0], r, xs)
        assert comps.schlick() == pytest.approx(0.48873, abs=1e-4)
