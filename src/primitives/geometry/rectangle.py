"""Axis-aligned rectangles in float, double and integer precision.

Rectangles are open: a rectangle is valid only with positive width and
height, points on an edge are outside, and rectangles that merely touch do
not intersect. ``contains_rectangle`` is the exception and accepts equal
edges, so a rectangle contains itself.

Empty results use the same inverted-corner sentinels as boxes.
"""

import taichi as ti

from src.primitives.core.types import INF, INT_MAX, INT_MIN, vec2d, vec2f, vec2i
from src.primitives.kernel.box import box_center, box_translate, box_union, box_union_point
from src.primitives.kernel.planar import (
    rect_area,
    rect_circle,
    rect_contains_point,
    rect_contains_rect,
    rect_intersection,
    rect_is_valid,
    rect_overlaps,
    rect_scale,
)

from .shape import Shape2D


class _RectangleMethods(Shape2D):
    @ti.func
    def is_valid(self) -> ti.i32:
        return rect_is_valid(self.min, self.max)

    @ti.func
    def size(self):
        """Width and height as a 2-vector."""
        return self.max - self.min

    @ti.func
    def center(self):
        return box_center(self.min, self.max)

    @ti.func
    def area(self):
        return rect_area(self.min, self.max)

    @ti.func
    def contains_point(self, point) -> ti.i32:
        return rect_contains_point(self.min, self.max, point)

    @ti.func
    def contains_rectangle(self, other) -> ti.i32:
        return rect_contains_rect(self.min, self.max, other.min, other.max)

    @ti.func
    def intersects_rectangle(self, other) -> ti.i32:
        return rect_overlaps(self.min, self.max, other.min, other.max)

    @ti.func
    def intersects_circle_coeffs(self, center, radius) -> ti.i32:
        return rect_circle(self.min, self.max, center, radius)

    @ti.func
    def union(self, other, dest: ti.template()):
        lo, hi = box_union(self.min, self.max, other.min, other.max)
        dest.min = lo
        dest.max = hi
        return dest

    @ti.func
    def union_point(self, point, dest: ti.template()):
        lo, hi = box_union_point(self.min, self.max, point)
        dest.min = lo
        dest.max = hi
        return dest

    @ti.func
    def intersection(self, other, dest: ti.template()):
        """Store the overlap of this rectangle and ``other`` in dest.

        Rectangles without a common region of positive area produce the empty
        sentinel of the destination's precision.
        """
        lo, hi, valid = rect_intersection(self.min, self.max, other.min, other.max)
        if valid:
            dest.min = lo
            dest.max = hi
        else:
            dest.set_empty()
        return dest

    @ti.func
    def translate(self, offset, dest: ti.template()):
        lo, hi = box_translate(self.min, self.max, offset)
        dest.min = lo
        dest.max = hi
        return dest

    @ti.func
    def scale(self, sx, sy, anchor, dest: ti.template()):
        """Store this rectangle scaled by (sx, sy) about ``anchor`` in dest.

        Pass the rectangle's own ``min`` as anchor to keep its corner in place.
        """
        lo, hi = rect_scale(self.min, self.max, sx, sy, anchor)
        dest.min = lo
        dest.max = hi
        return dest


@ti.dataclass
class Rectanglef(_RectangleMethods):
    """A single-precision rectangle.

    Attributes:
        min: Minimum corner (vec2f).
        max: Maximum corner (vec2f).
    """

    min: vec2f
    max: vec2f

    @ti.func
    def set_empty(self):
        self.min = vec2f(INF, INF)
        self.max = vec2f(-INF, -INF)


@ti.dataclass
class Rectangled(_RectangleMethods):
    """A double-precision rectangle.

    Attributes:
        min: Minimum corner (vec2d).
        max: Maximum corner (vec2d).
    """

    min: vec2d
    max: vec2d

    @ti.func
    def set_empty(self):
        self.min = vec2d(INF, INF)
        self.max = vec2d(-INF, -INF)


@ti.dataclass
class Rectanglei(_RectangleMethods):
    """An integer rectangle.

    Attributes:
        min: Minimum corner (vec2i).
        max: Maximum corner (vec2i).
    """

    min: vec2i
    max: vec2i

    @ti.func
    def set_empty(self):
        self.min = vec2i(INT_MAX, INT_MAX)
        self.max = vec2i(INT_MIN, INT_MIN)
