from tracer.math import Tuple


class Ray:
    """A ray with an origin point and a direction vector.

    The direction is kept as given (not normalized) so that t values found
    in object space match those of the world-space ray.
    """

    __slots__ = ("_origin", "_direction")

    def __init__(self, origin: Tuple, direction: Tuple):
        self._origin = origin
        self._direction = direction

    @property
    def origin(self) -> Tuple:
        return self._origin

    @property
    def direction(self) -> Tuple:
        return self._direction

    def position(self, t: float) -> Tuple:
        return self._origin + self._direction * t

    def transform(self, matrix) -> "Ray":
        return Ray(matrix * self._origin, matrix * self._direction)

    def __eq__(self, other):
        if not isinstance(other, Ray):
            return NotImplemented
        return self._origin == other._origin and self._direction == other._direction

    __hash__ = None

    def __repr__(self):
        return f"Ray({self._origin!r}, {self._direction!r})"
