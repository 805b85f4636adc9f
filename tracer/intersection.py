"""Ray/shape hit records and the shading state derived from them.

An intersection list holds every candidate hit of a single ray query sorted
by ``t``, including hits behind the ray origin: those are needed to know
which shapes the ray is inside of when working out refractive indices.
Only :func:`hit` filters them out.
"""

import math
from dataclasses import dataclass
from operator import attrgetter

from tracer.math import EPSILON, Tuple
from tracer.ray import Ray


class Intersection:
    """A hit at distance ``t`` on ``shape``.

    ``u`` and ``v`` carry barycentric coordinates for triangle hits and are
    None for every other shape.
    """

    __slots__ = ("t", "shape", "u", "v")

    def __init__(self, t: float, shape, u: float = None, v: float = None):
        self.t = t
        self.shape = shape
        self.u = u
        self.v = v

    def __repr__(self):
        return f"Intersection(t={self.t:.5f}, shape={type(self.shape).__name__})"


def intersections(*xs):
    """Collect intersections into a list sorted by ascending t."""
    return sorted(xs, key=attrgetter("t"))


def hit(xs):
    """Nearest intersection with t >= 0, or None."""
    best = None
    for x in xs:
        if x.t >= 0.0 and (best is None or x.t < best.t):
            best = x
    return best


@dataclass
class Computations:
    t: float
    shape: object
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    reflectv: Tuple
    inside: bool
    over_point: Tuple
    under_point: Tuple
    n1: float = 1.0
    n2: float = 1.0

    def schlick(self) -> float:
        return schlick(self.eyev, self.normalv, self.n1, self.n2)


def prepare_computations(hit_: Intersection, ray: Ray, xs=None) -> Computations:
    """Precompute the vectors shading needs at ``hit_``.

    ``xs`` is the full intersection list the hit came from; it is walked to
    find the refractive indices on both sides of the surface. Without it both
    indices default to 1.0.
    """
    pt = ray.position(hit_.t)
    normalv = hit_.shape.normal_at(pt, hit_)
    eyev = -ray.direction
    inside = normalv.dot(eyev) < 0
    if inside:
        normalv = -normalv
    reflectv = ray.direction.reflect(normalv)
    offset = normalv * EPSILON

    n1, n2 = 1.0, 1.0
    if xs is not None:
        n1, n2 = _refractive_indices(hit_, xs)

    return Computations(
        t=hit_.t,
        shape=hit_.shape,
        point=pt,
        eyev=eyev,
        normalv=normalv,
        reflectv=reflectv,
        inside=inside,
        over_point=pt + offset,
        under_point=pt - offset,
        n1=n1,
        n2=n2,
    )


def _refractive_indices(hit_, xs):
    containers = []
    n1 = n2 = 1.0
    for x in xs:
        if x is hit_:
            n1 = containers[-1].material.refractive_index if containers else 1.0

        for i, shape in enumerate(containers):
            if shape is x.shape:
                del containers[i]
                break
        else:
            containers.append(x.shape)

        if x is hit_:
            n2 = containers[-1].material.refractive_index if containers else 1.0
            break
    return n1, n2


def schlick(eyev: Tuple, normalv: Tuple, n1: float, n2: float) -> float:
    """Schlick approximation of the Fresnel reflectance."""
    cos = eyev.dot(normalv)
    if n1 > n2:
        n = n1 / n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            # total internal reflection
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)
    r0 = ((n1 - n2) / (n1 + n2)) ** 2
    return r0 + (1 - r0) * (1 - cos) ** 5
