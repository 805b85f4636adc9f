"""Unit tests for rays and intersection lists."""

import pytest

from tracer.geometry import Sphere
from tracer.intersection import Intersection, hit, intersections
from tracer.math import point, vector
from tracer.matrix import scaling, translation
from tracer.ray import Ray


class TestRay:
    """Tests for ray construction and transformation."""

    def test_position(self):
        r = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert r.position(0) == point(2, 3, 4)
        assert r.position(1) == point(3, 3, 4)
        assert r.position(-1) == point(1, 3, 4)
        assert r.position(2.5) == point(4.5, 3, 4)

    def test_ray_is_read_only(self):
        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        with pytest.raises(AttributeError):
            r.origin = point(1, 1, 1)

    def test_translate(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0)).transform(translation(3, 4, 5))
        assert r.origin == point(4, 6, 8)
        assert r.direction == vector(0, 1, 0)

    def test_scale_keeps_direction_unnormalized(self):
        r = Ray(point(1, 2, 3), vector(0, 1, 0)).transform(scaling(2, 3, 4))
        assert r.origin == point(2, 6, 12)
        assert r.direction == vector(0, 3, 0)


class TestHit:
    """Tests for nearest-hit selection."""

    def test_intersections_are_sorted(self):
        s = Sphere()
        xs = intersections(Intersection(2, s), Intersection(-1, s), Intersection(1, s))
        assert [x.t for x in xs] == [-1, 1, 2]

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
        i4 = Intersection(2, s)
        xs = [Intersection(5, s), Intersection(7, s), Intersection(-3, s), i4]
        assert hit(xs) is i4

    def test_zero_counts_as_a_hit(self):
        s = Sphere()
        i0 = Intersection(0.0, s)
        assert hit([Intersection(-0.5, s), i0, Intersection(3, s)]) is i0

    def test_empty(self):
        assert hit([]) is None
