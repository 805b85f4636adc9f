"""Groups of shapes and the bounding-volume hierarchy built from them.

A Group owns its children and keeps a bounding box that encloses every
child's box after that child's transform. The box is rebuilt whenever the
group's structure changes (children added or removed, a child's transform or
extent changed) and is used as a cheap prefilter: a ray that misses it
cannot hit any child.
"""

import logging
from operator import attrgetter

from tracer.bounds import AABB
from tracer.errors import ShapeHierarchyError
from tracer.geometry import Shape

logger = logging.getLogger(__name__)


def adopt(parent: Shape, child: Shape):
    """Link `child` under `parent`, refusing anything that breaks the tree."""
    if child is parent:
        raise ShapeHierarchyError("a shape cannot contain itself")
    if child.parent is not None:
        raise ShapeHierarchyError(f"{child!r} already belongs to {child.parent!r}")
    ancestor = parent.parent
    while ancestor is not None:
        if ancestor is child:
            raise ShapeHierarchyError(f"{child!r} is an ancestor of {parent!r}")
        ancestor = ancestor.parent
    child._set_parent(parent)


class Group(Shape):
    def __init__(self, children=(), **kwargs):
        self._children = []
        self._box = AABB()
        super().__init__(**kwargs)
        self.add_children(children)

    @property
    def children(self):
        return tuple(self._children)

    def __len__(self):
        return len(self._children)

    def __iter__(self):
        return iter(self._children)

    def add_child(self, shape: Shape):
        adopt(self, shape)
        self._children.append(shape)
        self.refresh_bounds()

    def add_children(self, shapes):
        shapes = list(shapes)
        for shape in shapes:
            adopt(self, shape)
            self._children.append(shape)
        if shapes:
            self.refresh_bounds()

    def remove_child(self, shape: Shape):
        for i, child in enumerate(self._children):
            if child is shape:
                del self._children[i]
                break
        else:
            raise ValueError(f"{shape!r} is not a child of this group")
        shape._set_parent(None)
        self.refresh_bounds()

    def refresh_bounds(self):
        box = AABB()
        for child in self._children:
            box = AABB.surrounding_box(box, child.parent_space_bounds())
        self._box = box
        self._bounds_changed()

    def bounds(self):
        return self._box

    def includes(self, shape):
        return self is shape or any(c.includes(shape) for c in self._children)

    def local_intersect(self, ray):
        if not self._box.hit(ray):
            return []
        xs = []
        for child in self._children:
            xs.extend(child.intersect(ray))
        xs.sort(key=attrgetter("t"))
        return xs

    def local_normal_at(self, local_point, hit=None):
        raise TypeError("a group has no surface; ask the child shape for its normal")

    def _split_children(self):
        left_box, right_box = self._box.split()
        left, right, rest = [], [], []
        for child in self._children:
            box = child.parent_space_bounds()
            if left_box.contains_box(box):
                left.append(child)
            elif right_box.contains_box(box):
                right.append(child)
            else:
                rest.append(child)
        return left, right, rest

    def partition_children(self):
        """Move children that fit wholly in either half of the box out of the group.

        Returns (left, right); children straddling the split stay put.
        """
        left, right, rest = self._split_children()
        for child in left + right:
            child._set_parent(None)
        self._children = rest
        self.refresh_bounds()
        return left, right

    def make_subgroup(self, shapes):
        self.add_child(Group(shapes))

    def divide(self, threshold: int):
        total = len(self._children)
        if total and threshold <= total:
            left, right, _ = self._split_children()
            # a zero-extent box puts everything on one side; splitting gains nothing
            if len(left) < total and len(right) < total:
                left, right = self.partition_children()
                if left:
                    self.make_subgroup(left)
                if right:
                    self.make_subgroup(right)
                logger.debug("divided %d children: %d left, %d right, %d kept",
                             total, len(left), len(right),
                             total - len(left) - len(right))
        for child in self._children:
            child.divide(threshold)

    def __repr__(self):
        return f"Group({len(self._children)} children)"
