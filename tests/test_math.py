"""Unit tests for tuples, points, vectors and colors."""

import math

import pytest

from tracer.math import BLACK, Color, Tuple, equals, point, vector


class TestTuples:
    """Tests for homogeneous tuples."""

    def test_point_has_w_one(self):
        """A point is a tuple with w=1."""
        p = point(4, -4, 3)
        assert p == Tuple(4, -4, 3, 1)
        assert p.is_point()
        assert not p.is_vector()

    def test_vector_has_w_zero(self):
        """A vector is a tuple with w=0."""
        v = vector(4, -4, 3)
        assert v == Tuple(4, -4, 3, 0)
        assert v.is_vector()

    def test_point_plus_vector_is_point(self):
        """Adding a vector to a point moves the point."""
        assert (point(3, -2, 5) + vector(-2, 3, 1)) == point(1, 1, 6)

    def test_point_plus_point_is_error(self):
        """Two points cannot be added."""
        with pytest.raises(TypeError):
            point(1, 2, 3) + point(4, 5, 6)

    def test_point_minus_point_is_vector(self):
        """Subtracting two points gives the vector between them."""
        assert (point(3, 2, 1) - point(5, 6, 7)) == vector(-2, -4, -6)

    def test_point_minus_vector_is_point(self):
        assert (point(3, 2, 1) - vector(5, 6, 7)) == point(-2, -4, -6)

    def test_vector_minus_point_is_error(self):
        """A point cannot be subtracted from a vector."""
        with pytest.raises(TypeError):
            vector(1, 2, 3) - point(1, 2, 3)

    def test_negate(self):
        assert -Tuple(1, -2, 3, -4) == Tuple(-1, 2, -3, 4)

    def test_scalar_multiply_and_divide(self):
        a = Tuple(1, -2, 3, -4)
        assert a * 3.5 == Tuple(3.5, -7, 10.5, -14)
        assert 0.5 * a == Tuple(0.5, -1, 1.5, -2)
        assert a / 2 == Tuple(0.5, -1, 1.5, -2)

    def test_equality_is_approximate(self):
        """Components within EPSILON compare equal."""
        assert point(1, 2, 3) == point(1.00001, 2, 3)
        assert point(1, 2, 3) != point(1.001, 2, 3)

    def test_equals_handles_infinity(self):
        assert equals(math.inf, math.inf)
        assert not equals(math.inf, -math.inf)


class TestVectorOperations:
    """Tests for magnitude, normalization, dot and cross products."""

    @pytest.mark.parametrize("v, expected", [
        (vector(1, 0, 0), 1.0),
        (vector(0, 0, 1), 1.0),
        (vector(1, 2, 3), math.sqrt(14)),
        (vector(-1, -2, -3), math.sqrt(14)),
    ])
    def test_magnitude(self, v, expected):
        assert v.magnitude() == pytest.approx(expected)

    def test_normalize(self):
        v = vector(1, 2, 3).normalize()
        assert v == vector(1 / math.sqrt(14), 2 / math.sqrt(14), 3 / math.sqrt(14))
        assert v.magnitude() == pytest.approx(1.0)

    def test_dot(self):
        assert vector(1, 2, 3).dot(vector(2, 3, 4)) == pytest.approx(20)

    def test_cross(self):
        a, b = vector(1, 2, 3), vector(2, 3, 4)
        assert a.cross(b) == vector(-1, 2, -1)
        assert b.cross(a) == vector(1, -2, 1)

    def test_reflect_at_45_degrees(self):
        """A vector approaching at 45 degrees bounces straight back up."""
        assert vector(1, -1, 0).reflect(vector(0, 1, 0)) == vector(1, 1, 0)

    def test_reflect_off_slanted_surface(self):
        n = vector(math.sqrt(2) / 2, math.sqrt(2) / 2, 0)
        assert vector(0, -1, 0).reflect(n) == vector(1, 0, 0)

    def test_angle(self):
        assert vector(1, 0, 0).angle(vector(0, 1, 0)) == pytest.approx(math.pi / 2)
        assert vector(1, 0, 0).angle(vector(2, 0, 0)) == pytest.approx(0.0)


class TestColors:
    """Tests for color arithmetic."""

    def test_components(self):
        c = Color(-0.5, 0.4, 1.7)
        assert (c.red, c.green, c.blue) == (-0.5, 0.4, 1.7)

    def test_add_subtract(self):
        c1, c2 = Color(0.9, 0.6, 0.75), Color(0.7, 0.1, 0.25)
        assert c1 + c2 == Color(1.6, 0.7, 1.0)
        assert c1 - c2 == Color(0.2, 0.5, 0.5)

    def test_scalar_multiply(self):
        assert Color(0.2, 0.3, 0.4) * 2 == Color(0.4, 0.6, 0.8)

    def test_hadamard_product(self):
        assert Color(1, 0.2, 0.4) * Color(0.9, 1, 0.1) == Color(0.9, 0.2, 0.04)

    def test_black(self):
        assert BLACK == Color(0, 0, 0)
