"""Circle primitive: a closed disc given by center and radius."""

import taichi as ti

from src.primitives.core.types import vec2d, vec2f
from src.primitives.kernel.planar import circle_circle, circle_contains_point, rect_circle

from .shape import Shape2D


class _CircleMethods(Shape2D):
    @ti.func
    def contains_point(self, point) -> ti.i32:
        return circle_contains_point(self.center, self.radius, point)

    @ti.func
    def intersects_rectangle(self, other) -> ti.i32:
        return rect_circle(other.min, other.max, self.center, self.radius)

    @ti.func
    def intersects_circle_coeffs(self, center, radius) -> ti.i32:
        return circle_circle(self.center, self.radius, center, radius)

    @ti.func
    def translate(self, offset, dest: ti.template()):
        dest.center = self.center + offset
        dest.radius = self.radius
        return dest


@ti.dataclass
class Circlef(_CircleMethods):
    """A single-precision circle.

    Attributes:
        center: The center point (vec2f).
        radius: The radius (f32).
    """

    center: vec2f
    radius: ti.f32


@ti.dataclass
class Circled(_CircleMethods):
    """A double-precision circle.

    Attributes:
        center: The center point (vec2d).
        radius: The radius (f64).
    """

    center: vec2d
    radius: ti.f64
