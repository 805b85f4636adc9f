"""Constructive solid geometry: boolean combinations of two shapes."""

import heapq
from enum import Enum
from operator import attrgetter

from tracer.acceleration import adopt
from tracer.bounds import AABB
from tracer.errors import ShapeHierarchyError
from tracer.geometry import Shape


class Operation(Enum):
    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


def intersection_allowed(op: Operation, lhit: bool, inl: bool, inr: bool) -> bool:
    """Whether a hit survives the operation.

    lhit: the hit belongs to the left operand
    inl, inr: the ray is currently inside the left / right operand
    """
    if op is Operation.UNION:
        return (lhit and not inr) or (not lhit and not inl)
    if op is Operation.INTERSECTION:
        return (lhit and inr) or (not lhit and inl)
    if op is Operation.DIFFERENCE:
        return (lhit and not inr) or (not lhit and inl)
    raise ValueError(f"unknown CSG operation: {op!r}")


class CSG(Shape):
    def __init__(self, operation, left: Shape, right: Shape, **kwargs):
        if left is right:
            raise ShapeHierarchyError("CSG operands must be two distinct shapes")
        self.operation = Operation(operation)
        self._box = AABB()
        super().__init__(**kwargs)
        adopt(self, left)
        try:
            adopt(self, right)
        except ShapeHierarchyError:
            left._set_parent(None)
            raise
        self.left = left
        self.right = right
        self.refresh_bounds()

    @property
    def children(self):
        return (self.left, self.right)

    def refresh_bounds(self):
        self._box = AABB.surrounding_box(self.left.parent_space_bounds(),
                                         self.right.parent_space_bounds())
        self._bounds_changed()

    def bounds(self):
        return self._box

    def includes(self, shape):
        return self is shape or self.left.includes(shape) or self.right.includes(shape)

    def local_intersect(self, ray):
        if not self._box.hit(ray):
            return []
        # both operand lists come back sorted, so a merge keeps t order
        xs = list(heapq.merge(self.left.intersect(ray), self.right.intersect(ray),
                              key=attrgetter("t")))
        return self.filter_intersections(xs)

    def filter_intersections(self, xs):
        inl = False
        inr = False
        result = []
        for x in xs:
            lhit = self.left.includes(x.shape)
            if intersection_allowed(self.operation, lhit, inl, inr):
                result.append(x)
            if lhit:
                inl = not inl
            else:
                inr = not inr
        return result

    def local_normal_at(self, local_point, hit=None):
        raise TypeError("a CSG shape has no surface; ask the operand for its normal")

    def divide(self, threshold: int):
        self.left.divide(threshold)
        self.right.divide(threshold)

    def __repr__(self):
        return f"CSG({self.operation.value}, {self.left!r}, {self.right!r})"
