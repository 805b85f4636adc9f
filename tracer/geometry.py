import math
import weakref
from abc import ABC, abstractmethod

from tracer.bounds import AABB
from tracer.errors import DegenerateTriangleError
from tracer.intersection import Intersection
from tracer.material import Material
from tracer.math import EPSILON, Tuple, point, vector
from tracer.matrix import Matrix, identity
from tracer.ray import Ray

INF = math.inf
ORIGIN = point(0, 0, 0)


class Shape(ABC):
    """Base class for everything a ray can hit.

    ``transform`` maps object space into the parent's space. Assigning it
    validates and caches the inverse, so a non-invertible matrix fails here
    rather than in the middle of a render. ``parent`` is a weak, non-owning
    link set by the owning Group or CSG.
    """

    def __init__(self, transform: Matrix = None, material: Material = None,
                 casts_shadow: bool = True):
        self._parent = None
        self._transform = identity()
        self.inverse = identity()
        self.inverse_transpose = identity()
        if transform is not None:
            self.transform = transform
        self.material = material if material is not None else Material()
        self.casts_shadow = casts_shadow

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix):
        inverse = matrix.inverse()
        self._transform = matrix
        self.inverse = inverse
        self.inverse_transpose = inverse.transpose()
        self._bounds_changed()

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    def _set_parent(self, parent):
        self._parent = weakref.ref(parent) if parent is not None else None

    def intersect(self, ray: Ray):
        return self.local_intersect(ray.transform(self.inverse))

    def normal_at(self, world_point: Tuple, hit: Intersection = None) -> Tuple:
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal_at(local_point, hit)
        return self.normal_to_world(local_normal)

    def world_to_object(self, world_point: Tuple) -> Tuple:
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self.inverse * world_point

    def normal_to_world(self, normal: Tuple) -> Tuple:
        normal = (self.inverse_transpose * normal).as_vector().normalize()
        parent = self.parent
        if parent is not None:
            normal = parent.normal_to_world(normal)
        return normal

    @abstractmethod
    def local_intersect(self, ray: Ray):
        pass

    @abstractmethod
    def local_normal_at(self, local_point: Tuple, hit: Intersection = None) -> Tuple:
        pass

    @abstractmethod
    def bounds(self) -> AABB:
        """Bounding box in object space."""

    def parent_space_bounds(self) -> AABB:
        return self.bounds().transform(self._transform)

    def includes(self, shape) -> bool:
        return self is shape

    def divide(self, threshold: int):
        pass

    def _bounds_changed(self):
        parent = self.parent
        if parent is not None:
            parent.refresh_bounds()

    def __repr__(self):
        return f"{type(self).__name__}()"


class Sphere(Shape):
    """Unit sphere centred on the origin."""

    def local_intersect(self, ray):
        sphere_to_ray = ray.origin - ORIGIN
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0:
            return []
        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, local_point, hit=None):
        return local_point - ORIGIN

    def bounds(self):
        return AABB(point(-1, -1, -1), point(1, 1, 1))


def glass_sphere(**kwargs) -> Sphere:
    material = Material(transparency=1.0, refractive_index=1.5)
    return Sphere(material=material, **kwargs)


class Plane(Shape):
    """The infinite xz plane."""

    def local_intersect(self, ray):
        if abs(ray.direction.y) < EPSILON:
            # 광선과 평면이 평행
            return []
        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, local_point, hit=None):
        return vector(0, 1, 0)

    def bounds(self):
        return AABB(point(-INF, 0, -INF), point(INF, 0, INF))


class Cube(Shape):
    """Axis-aligned cube spanning -1..1 on every axis."""

    def local_intersect(self, ray):
        xtmin, xtmax = _check_axis(ray.origin.x, ray.direction.x)
        ytmin, ytmax = _check_axis(ray.origin.y, ray.direction.y)
        ztmin, ztmax = _check_axis(ray.origin.z, ray.direction.z)
        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        if tmin > tmax:
            return []
        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, local_point, hit=None):
        ax, ay, az = abs(local_point.x), abs(local_point.y), abs(local_point.z)
        maxc = max(ax, ay, az)
        if maxc == ax:
            return vector(local_point.x, 0, 0)
        if maxc == ay:
            return vector(0, local_point.y, 0)
        return vector(0, 0, local_point.z)

    def bounds(self):
        return AABB(point(-1, -1, -1), point(1, 1, 1))


def _check_axis(origin, direction, lo=-1.0, hi=1.0):
    tmin_numerator = lo - origin
    tmax_numerator = hi - origin
    if abs(direction) < EPSILON:
        # parallel to the slab: all or nothing, never 0 * inf
        if tmin_numerator <= 0.0 <= tmax_numerator:
            return -INF, INF
        return INF, -INF
    tmin = tmin_numerator / direction
    tmax = tmax_numerator / direction
    if tmin > tmax:
        return tmax, tmin
    return tmin, tmax


class _Truncatable(Shape):
    """Shared extent handling for cylinders and cones around the y axis."""

    def __init__(self, minimum: float = -INF, maximum: float = INF,
                 closed: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.closed = closed

    def truncate(self, minimum: float, maximum: float, closed: bool = None):
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        if closed is not None:
            self.closed = closed
        self._bounds_changed()

    def local_intersect(self, ray):
        ts = self._intersect_sides(ray)
        ts.extend(self._intersect_caps(ray))
        ts.sort()
        return [Intersection(t, self) for t in ts]

    def _in_range(self, ray, t):
        y = ray.origin.y + t * ray.direction.y
        return self.minimum < y < self.maximum

    def _intersect_caps(self, ray):
        # a ray lying in a cap plane never crosses it
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return []
        ts = []
        for cap in (self.minimum, self.maximum):
            t = (cap - ray.origin.y) / ray.direction.y
            if _check_cap(ray, t, self._cap_radius(cap)):
                ts.append(t)
        return ts

    def _cap_normal(self, local_point, radius2):
        dist = local_point.x ** 2 + local_point.z ** 2
        if dist < radius2 and local_point.y >= self.maximum - EPSILON:
            return vector(0, 1, 0)
        if dist < radius2 and local_point.y <= self.minimum + EPSILON:
            return vector(0, -1, 0)
        return None

    @abstractmethod
    def _intersect_sides(self, ray):
        pass

    @abstractmethod
    def _cap_radius(self, y):
        pass

    def __repr__(self):
        return (f"{type(self).__name__}(minimum={self.minimum}, "
                f"maximum={self.maximum}, closed={self.closed})")


def _check_cap(ray, t, radius):
    x = ray.origin.x + t * ray.direction.x
    z = ray.origin.z + t * ray.direction.z
    return x * x + z * z <= radius * radius + EPSILON


class Cylinder(_Truncatable):
    """Unit-radius cylinder along the y axis, optionally truncated and capped."""

    def _intersect_sides(self, ray):
        d, o = ray.direction, ray.origin
        a = d.x * d.x + d.z * d.z
        if abs(a) < EPSILON:
            # 평행
            return []
        b = 2.0 * o.x * d.x + 2.0 * o.z * d.z
        c = o.x * o.x + o.z * o.z - 1.0
        disc = b * b - 4.0 * a * c
        if disc < 0:
            return []
        sqrt_d = math.sqrt(disc)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0
        return [t for t in (t0, t1) if self._in_range(ray, t)]

    def _cap_radius(self, y):
        return 1.0

    def local_normal_at(self, local_point, hit=None):
        cap = self._cap_normal(local_point, 1.0)
        if cap is not None:
            return cap
        return vector(local_point.x, 0, local_point.z)

    def bounds(self):
        return AABB(point(-1, self.minimum, -1), point(1, self.maximum, 1))


class Cone(_Truncatable):
    """Double-napped cone x^2 + z^2 = y^2 along the y axis."""

    def _intersect_sides(self, ray):
        d, o = ray.direction, ray.origin
        a = d.x * d.x - d.y * d.y + d.z * d.z
        b = 2.0 * (o.x * d.x - o.y * d.y + o.z * d.z)
        c = o.x * o.x - o.y * o.y + o.z * o.z
        if abs(a) < EPSILON:
            if abs(b) < EPSILON:
                return []
            # parallel to one half: a single hit on the other half
            t = -c / (2.0 * b)
            return [t] if self._in_range(ray, t) else []
        disc = b * b - 4.0 * a * c
        if disc < 0:
            if disc < -EPSILON:
                return []
            # tangent ray, lost to rounding
            disc = 0.0
        sqrt_d = math.sqrt(disc)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0
        return [t for t in (t0, t1) if self._in_range(ray, t)]

    def _cap_radius(self, y):
        return abs(y)

    def local_normal_at(self, local_point, hit=None):
        cap = self._cap_normal(local_point, local_point.y ** 2)
        if cap is not None:
            return cap
        radius2 = local_point.x ** 2 + local_point.z ** 2
        if radius2 < EPSILON * EPSILON:
            # apex: the slope is undefined, point along the axis
            return vector(0, -1 if local_point.y > 0 else 1, 0)
        y = math.sqrt(radius2)
        if local_point.y > 0:
            y = -y
        return vector(local_point.x, y, local_point.z)

    def bounds(self):
        limit = max(abs(self.minimum), abs(self.maximum))
        return AABB(point(-limit, self.minimum, -limit),
                    point(limit, self.maximum, limit))


class Triangle(Shape):
    def __init__(self, p1: Tuple, p2: Tuple, p3: Tuple, **kwargs):
        super().__init__(**kwargs)
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1
        if self.e1.magnitude() == 0.0 or self.e2.magnitude() == 0.0:
            raise DegenerateTriangleError(f"triangle has a zero-length edge: {p1}, {p2}, {p3}")
        cross = self.e2.cross(self.e1)
        if cross.magnitude() < 1e-12:
            raise DegenerateTriangleError(f"triangle vertices are collinear: {p1}, {p2}, {p3}")
        self.normal = cross.normalize()

    def local_intersect(self, ray):
        # Moller-Trumbore
        dir_cross_e2 = ray.direction.cross(self.e2)
        det = self.e1.dot(dir_cross_e2)
        if abs(det) < EPSILON:
            return []
        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * p1_to_origin.dot(dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []
        origin_cross_e1 = p1_to_origin.cross(self.e1)
        v = f * ray.direction.dot(origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return []
        t = f * self.e2.dot(origin_cross_e1)
        return [Intersection(t, self, u, v)]

    def local_normal_at(self, local_point, hit=None):
        return self.normal

    def bounds(self):
        return AABB.from_points((self.p1, self.p2, self.p3))

    def __repr__(self):
        return f"{type(self).__name__}({self.p1!r}, {self.p2!r}, {self.p3!r})"


class SmoothTriangle(Triangle):
    """Triangle whose normal is interpolated from per-vertex normals."""

    def __init__(self, p1, p2, p3, n1: Tuple, n2: Tuple, n3: Tuple, **kwargs):
        super().__init__(p1, p2, p3, **kwargs)
        self.n1 = n1
        self.n2 = n2
        self.n3 = n3

    def local_normal_at(self, local_point, hit=None):
        if hit is None or hit.u is None:
            return self.normal
        return self.n2 * hit.u + self.n3 * hit.v + self.n1 * (1 - hit.u - hit.v)
