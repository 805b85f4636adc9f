import logging
import math
from dataclasses import dataclass
from operator import attrgetter
from typing import List

from tracer.errors import ShapeHierarchyError
from tracer.geometry import Shape
from tracer.math import BLACK, Color, Tuple
from tracer.ray import Ray
from tracer.shading import MAX_DEPTH

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    width: int = 400
    height: int = 200
    field_of_view: float = math.pi / 3
    max_depth: int = MAX_DEPTH
    workers: int = 1
    bvh_threshold: int = 0  # 0 leaves groups as built

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"field of view must be within (0, pi), got {self.field_of_view}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.bvh_threshold < 0:
            raise ValueError(f"bvh_threshold must be non-negative, got {self.bvh_threshold}")


class World:
    """Top-level shapes plus the lights shining on them.

    A world must not be modified while it is being rendered.
    """

    def __init__(self, objects=(), lights=(), background: Color = BLACK):
        self.objects: List[Shape] = []
        self.lights = []
        self.background = background
        for obj in objects:
            self.add_object(obj)
        for light in lights:
            self.add_light(light)

    def add_object(self, obj: Shape):
        if obj.parent is not None:
            raise ShapeHierarchyError(f"{obj!r} belongs to {obj.parent!r}; add the root instead")
        if any(o is obj for o in self.objects):
            raise ShapeHierarchyError(f"{obj!r} is already in the world")
        self.objects.append(obj)
        logger.debug("added %r to the world", obj)

    def add_light(self, light):
        self.lights.append(light)

    def divide(self, threshold: int):
        for obj in self.objects:
            obj.divide(threshold)

    def intersect(self, ray: Ray):
        xs = []
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        xs.sort(key=attrgetter("t"))
        return xs

    def is_shadowed(self, light_position: Tuple, point: Tuple) -> bool:
        v = light_position - point
        distance = v.magnitude()
        if distance == 0.0:
            return False
        shadow_ray = Ray(point, v / distance)
        for x in self.intersect(shadow_ray):
            if x.t >= distance:
                break
            if x.t > 0.0 and x.shape.casts_shadow:
                return True
        return False


def intersect(world: World, ray: Ray):
    """All intersections of `ray` with `world`, sorted by t."""
    return world.intersect(ray)
