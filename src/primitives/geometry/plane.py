"""Plane primitive in implicit form ``a*x + b*y + c*z + d = 0``.

Planes are never normalized behind the caller's back. Intersection tests
against boxes and spheres give the right answer for any non-zero normal;
``distance`` is only Euclidean after an explicit ``normalize``.
"""

import taichi as ti

from src.primitives.kernel.plane import plane_distance, plane_normalize


class _PlaneMethods:
    @ti.func
    def normalize(self, dest: ti.template()):
        """Store this plane with a unit-length normal in dest."""
        a, b, c, d = plane_normalize(self.a, self.b, self.c, self.d)
        dest.a = a
        dest.b = b
        dest.c = c
        dest.d = d
        return dest

    @ti.func
    def distance(self, point):
        """Signed distance from point to the plane, scaled by the normal length."""
        return plane_distance(self.a, self.b, self.c, self.d, point)


@ti.dataclass
class Planef(_PlaneMethods):
    """A single-precision plane.

    Attributes:
        a: Normal x component (f32).
        b: Normal y component (f32).
        c: Normal z component (f32).
        d: Constant term (f32).
    """

    a: ti.f32
    b: ti.f32
    c: ti.f32
    d: ti.f32


@ti.dataclass
class Planed(_PlaneMethods):
    """A double-precision plane.

    Attributes:
        a: Normal x component (f64).
        b: Normal y component (f64).
        c: Normal z component (f64).
        d: Constant term (f64).
    """

    a: ti.f64
    b: ti.f64
    c: ti.f64
    d: ti.f64
