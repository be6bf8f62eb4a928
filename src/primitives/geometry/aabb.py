"""Axis-aligned bounding boxes in float, double and integer precision.

A box is stored as its minimum and maximum corners. It is valid when
``min <= max`` on every axis; bounds are closed, so points on a face are
inside and boxes sharing a face intersect.

An empty box is represented by inverted corners: ``min = +inf, max = -inf``
for float boxes and ``min = INT_MAX, max = INT_MIN`` for integer boxes. An
intersection of disjoint boxes yields exactly this sentinel, and a union with
the sentinel yields the other operand unchanged.

Every method that computes a new box writes it into a caller-supplied
destination and returns the destination. The destination may be any variant,
including the box itself; its precision decides which sentinel an empty
result uses.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.geometry.aabb import AABBf
    >>> from src.primitives.core.types import vec3f
    >>> # Inside a Taichi kernel:
    >>> # a = AABBf(min=vec3f(0, 0, 0), max=vec3f(2, 2, 2))
    >>> # b = AABBf(min=vec3f(1, 1, 1), max=vec3f(3, 3, 3))
    >>> # out = AABBf()
    >>> # a.intersection(b, out)  # out is [1..2]^3
"""

import taichi as ti

from src.primitives.core.types import INF, INT_MAX, INT_MIN, vec3d, vec3f, vec3i
from src.primitives.kernel.box import (
    box_center,
    box_contains_box,
    box_contains_point,
    box_extent,
    box_intersection,
    box_is_valid,
    box_overlaps,
    box_transform,
    box_translate,
    box_union,
    box_union_point,
)
from src.primitives.kernel.plane import plane_box
from src.primitives.kernel.slab import ray_box, segment_box
from src.primitives.kernel.sphere import box_sphere

from .shape import Shape3D


class _BoxMethods(Shape3D):
    """Operations shared by all box variants."""

    @ti.func
    def is_valid(self) -> ti.i32:
        return box_is_valid(self.min, self.max)

    @ti.func
    def get_min(self, component: ti.template()):
        """Minimum coordinate on axis ``component`` (0, 1 or 2).

        The axis must be a compile-time constant; any other value fails to
        compile.
        """
        ti.static_assert(0 <= component <= 2, "component must be 0, 1 or 2")
        return self.min[component]

    @ti.func
    def get_max(self, component: ti.template()):
        """Maximum coordinate on axis ``component`` (0, 1 or 2)."""
        ti.static_assert(0 <= component <= 2, "component must be 0, 1 or 2")
        return self.max[component]

    @ti.func
    def center(self):
        return box_center(self.min, self.max)

    @ti.func
    def extent(self):
        """Half the size of the box on each axis."""
        return box_extent(self.min, self.max)

    @ti.func
    def contains_point(self, point) -> ti.i32:
        return box_contains_point(self.min, self.max, point)

    @ti.func
    def contains_aabb(self, other) -> ti.i32:
        """Test whether ``other`` lies entirely inside this box."""
        return box_contains_box(self.min, self.max, other.min, other.max)

    @ti.func
    def intersects_aabb(self, other) -> ti.i32:
        return box_overlaps(self.min, self.max, other.min, other.max)

    @ti.func
    def intersects_plane_coeffs(self, a, b, c, d) -> ti.i32:
        return plane_box(a, b, c, d, self.min, self.max)

    @ti.func
    def intersects_sphere_coeffs(self, center, radius) -> ti.i32:
        return box_sphere(self.min, self.max, center, radius)

    @ti.func
    def ray_interval(self, origin, direction):
        hit, t_near, t_far = ray_box(origin, direction, self.min, self.max)
        return hit, t_near, t_far

    @ti.func
    def segment_interval(self, p0, p1):
        code, t_near, t_far = segment_box(p0, p1, self.min, self.max)
        return code, t_near, t_far

    @ti.func
    def union(self, other, dest: ti.template()):
        """Store the smallest box enclosing this box and ``other`` in dest."""
        lo, hi = box_union(self.min, self.max, other.min, other.max)
        dest.min = lo
        dest.max = hi
        return dest

    @ti.func
    def union_point(self, point, dest: ti.template()):
        """Store this box grown to include ``point`` in dest."""
        lo, hi = box_union_point(self.min, self.max, point)
        dest.min = lo
        dest.max = hi
        return dest

    @ti.func
    def intersection(self, other, dest: ti.template()):
        """Store the overlap of this box and ``other`` in dest.

        Disjoint boxes (on any axis) produce the empty sentinel of the
        destination's precision.
        """
        lo, hi, valid = box_intersection(self.min, self.max, other.min, other.max)
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


@ti.dataclass
class AABBf(_BoxMethods):
    """A single-precision axis-aligned box.

    Attributes:
        min: Minimum corner (vec3f).
        max: Maximum corner (vec3f).
    """

    min: vec3f
    max: vec3f

    @ti.func
    def set_empty(self):
        self.min = vec3f(INF, INF, INF)
        self.max = vec3f(-INF, -INF, -INF)

    @ti.func
    def transform(self, m, dest: ti.template()):
        """Store the bounds of this box under the affine 4x4 matrix m in dest."""
        lo, hi = box_transform(self.min, self.max, m)
        dest.min = lo
        dest.max = hi
        return dest


@ti.dataclass
class AABBd(_BoxMethods):
    """A double-precision axis-aligned box.

    Attributes:
        min: Minimum corner (vec3d).
        max: Maximum corner (vec3d).
    """

    min: vec3d
    max: vec3d

    @ti.func
    def set_empty(self):
        self.min = vec3d(INF, INF, INF)
        self.max = vec3d(-INF, -INF, -INF)

    @ti.func
    def transform(self, m, dest: ti.template()):
        """Store the bounds of this box under the affine 4x4 matrix m in dest."""
        lo, hi = box_transform(self.min, self.max, m)
        dest.min = lo
        dest.max = hi
        return dest


@ti.dataclass
class AABBi(_BoxMethods):
    """An integer axis-aligned box.

    A transformed integer box is rounded outward to the enclosing integer
    bounds.

    Attributes:
        min: Minimum corner (vec3i).
        max: Maximum corner (vec3i).
    """

    min: vec3i
    max: vec3i

    @ti.func
    def set_empty(self):
        self.min = vec3i(INT_MAX, INT_MAX, INT_MAX)
        self.max = vec3i(INT_MIN, INT_MIN, INT_MIN)

    @ti.func
    def transform(self, m, dest: ti.template()):
        """Store the bounds of this box under the affine 4x4 matrix m in dest.

        The bounds are computed in the matrix precision and rounded outward
        (floor for the minimum, ceil for the maximum).
        """
        lo, hi = box_transform(self.min, self.max, m)
        dest.min = ti.cast(ti.floor(lo), ti.i32)
        dest.max = ti.cast(ti.ceil(hi), ti.i32)
        return dest
