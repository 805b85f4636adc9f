import math
from abc import ABC, abstractmethod

from tracer.math import Color, Tuple
from tracer.matrix import Matrix, identity


class Pattern(ABC):
    """Maps a point in pattern space to a color.

    A pattern has its own transform on top of the shape's. Composite patterns
    take other patterns as operands; each operand then applies its own
    transform to the point it receives.
    """

    def __init__(self, transform: Matrix = None):
        self._transform = identity()
        self.inverse = identity()
        if transform is not None:
            self.transform = transform

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix):
        self.inverse = matrix.inverse()
        self._transform = matrix

    def color_at(self, point: Tuple) -> Color:
        """Color for a point given in the space this pattern is attached to."""
        return self.pattern_at(self.inverse * point)

    def color_at_shape(self, shape, world_point: Tuple) -> Color:
        return self.color_at(shape.world_to_object(world_point))

    @abstractmethod
    def pattern_at(self, pattern_point: Tuple) -> Color:
        pass


def as_pattern(value) -> Pattern:
    if isinstance(value, Pattern):
        return value
    if isinstance(value, Color):
        return SolidPattern(value)
    raise TypeError(f"expected a Color or a Pattern, got {type(value).__name__}")


class SolidPattern(Pattern):
    def __init__(self, color: Color, **kwargs):
        super().__init__(**kwargs)
        self.color = color

    def pattern_at(self, pattern_point):
        return self.color


class _TwoColorPattern(Pattern):
    def __init__(self, a, b, **kwargs):
        super().__init__(**kwargs)
        self.a = as_pattern(a)
        self.b = as_pattern(b)


class StripePattern(_TwoColorPattern):
    """Alternates a and b along x."""

    def pattern_at(self, p):
        if math.floor(p.x) % 2 == 0:
            return self.a.color_at(p)
        return self.b.color_at(p)


class GradientPattern(_TwoColorPattern):
    """Linear blend from a to b over each unit of x."""

    def pattern_at(self, p):
        ca = self.a.color_at(p)
        cb = self.b.color_at(p)
        return ca + (cb - ca) * (p.x - math.floor(p.x))


class RingPattern(_TwoColorPattern):
    """Concentric rings in the xz plane."""

    def pattern_at(self, p):
        if math.floor(math.sqrt(p.x * p.x + p.z * p.z)) % 2 == 0:
            return self.a.color_at(p)
        return self.b.color_at(p)


class CheckerPattern(_TwoColorPattern):
    """3D checkers of unit size."""

    def pattern_at(self, p):
        if (math.floor(p.x) + math.floor(p.y) + math.floor(p.z)) % 2 == 0:
            return self.a.color_at(p)
        return self.b.color_at(p)


class BlendedPattern(_TwoColorPattern):
    def pattern_at(self, p):
        return (self.a.color_at(p) + self.b.color_at(p)) * 0.5
