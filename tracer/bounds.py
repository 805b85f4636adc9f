import math

from tracer.math import EPSILON, Tuple, point
from tracer.ray import Ray

INF = math.inf


class AABB:
    """Axis-aligned bounding box; an empty box has min > max."""

    __slots__ = ("min", "max")

    def __init__(self, min_pt: Tuple = None, max_pt: Tuple = None):
        self.min = min_pt if min_pt is not None else point(INF, INF, INF)
        self.max = max_pt if max_pt is not None else point(-INF, -INF, -INF)

    @staticmethod
    def surrounding_box(box0, box1):
        if box0.is_empty():
            return box1
        if box1.is_empty():
            return box0
        small = point(
            min(box0.min.x, box1.min.x),
            min(box0.min.y, box1.min.y),
            min(box0.min.z, box1.min.z)
        )
        big = point(
            max(box0.max.x, box1.max.x),
            max(box0.max.y, box1.max.y),
            max(box0.max.z, box1.max.z)
        )
        return AABB(small, big)

    @staticmethod
    def from_points(points):
        pts = list(points)
        return AABB(
            point(min(p.x for p in pts), min(p.y for p in pts), min(p.z for p in pts)),
            point(max(p.x for p in pts), max(p.y for p in pts), max(p.z for p in pts)),
        )

    def is_empty(self) -> bool:
        return self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z

    def contains_point(self, p: Tuple) -> bool:
        return (self.min.x <= p.x <= self.max.x
                and self.min.y <= p.y <= self.max.y
                and self.min.z <= p.z <= self.max.z)

    def contains_box(self, box) -> bool:
        return self.contains_point(box.min) and self.contains_point(box.max)

    def transform(self, matrix):
        """Box enclosing the eight transformed corners.

        Zero matrix entries are skipped so that infinite extents do not turn
        into NaN; an axis that still cannot be bounded spans (-inf, inf).
        """
        if self.is_empty():
            return AABB()
        rows = matrix.rows()
        lo, hi = self.min, self.max
        corners = [(x, y, z, 1.0)
                   for x in (lo.x, hi.x)
                   for y in (lo.y, hi.y)
                   for z in (lo.z, hi.z)]
        mins, maxs = [], []
        for axis in range(3):
            row = rows[axis]
            values = [sum(m * c for m, c in zip(row, corner) if m != 0.0)
                      for corner in corners]
            if any(math.isnan(v) for v in values):
                mins.append(-INF)
                maxs.append(INF)
            else:
                mins.append(min(values))
                maxs.append(max(values))
        return AABB(point(*mins), point(*maxs))

    def hit(self, ray: Ray) -> bool:
        if self.is_empty():
            return False
        o, d = ray.origin, ray.direction
        xtmin, xtmax = _check_axis(o.x, d.x, self.min.x, self.max.x)
        ytmin, ytmax = _check_axis(o.y, d.y, self.min.y, self.max.y)
        ztmin, ztmax = _check_axis(o.z, d.z, self.min.z, self.max.z)
        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        return tmin <= tmax

    def split(self):
        """Split along the longest axis into (left, right) halves."""
        dx = self.max.x - self.min.x
        dy = self.max.y - self.min.y
        dz = self.max.z - self.min.z
        x0, y0, z0 = self.min.x, self.min.y, self.min.z
        x1, y1, z1 = self.max.x, self.max.y, self.max.z
        greatest = max(dx, dy, dz)
        if greatest == dx:
            x0 = x1 = _midpoint(x0, x1)
        elif greatest == dy:
            y0 = y1 = _midpoint(y0, y1)
        else:
            z0 = z1 = _midpoint(z0, z1)
        left = AABB(self.min, point(x1, y1, z1))
        right = AABB(point(x0, y0, z0), self.max)
        return left, right

    def __eq__(self, other):
        if not isinstance(other, AABB):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    __hash__ = None

    def __repr__(self):
        return f"AABB({self.min!r}, {self.max!r})"


def _midpoint(lo, hi):
    mid = (lo + hi) / 2.0
    if math.isnan(mid):
        return 0.0
    return mid


def _check_axis(origin, direction, lo, hi):
    # the slack keeps flat boxes (planes, triangles in a plane) hittable
    tmin_numerator = lo - origin - EPSILON
    tmax_numerator = hi - origin + EPSILON
    if direction == 0.0:
        if tmin_numerator <= 0.0 <= tmax_numerator:
            return -INF, INF
        return INF, -INF
    tmin = tmin_numerator / direction
    tmax = tmax_numerator / direction
    if tmin > tmax:
        return tmax, tmin
    return tmin, tmax
