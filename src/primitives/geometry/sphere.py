"""Sphere primitive with ray, segment and shape intersection tests.

A sphere is a closed ball given by its center and radius. The radius is not
validated: a negative radius is kept as is and simply flows through the
squared-distance comparisons.

Ray-sphere intersection uses the robust quadratic formula from Ray Tracing
Gems (see ``src.primitives.kernel.sphere``).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.geometry.sphere import Spheref
    >>> sphere = Spheref(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use sphere.intersects_ray(ray) within a Taichi kernel
"""

import taichi as ti

from src.primitives.core.types import vec3d, vec3f
from src.primitives.kernel.plane import plane_sphere
from src.primitives.kernel.sphere import (
    box_sphere,
    ray_sphere,
    segment_sphere,
    sphere_contains_point,
    sphere_sphere,
)

from .shape import Shape3D


class _SphereMethods(Shape3D):
    @ti.func
    def contains_point(self, point) -> ti.i32:
        return sphere_contains_point(self.center, self.radius, point)

    @ti.func
    def intersects_aabb(self, other) -> ti.i32:
        return box_sphere(other.min, other.max, self.center, self.radius)

    @ti.func
    def intersects_plane_coeffs(self, a, b, c, d) -> ti.i32:
        return plane_sphere(a, b, c, d, self.center, self.radius)

    @ti.func
    def intersects_sphere_coeffs(self, center, radius) -> ti.i32:
        return sphere_sphere(self.center, self.radius, center, radius)

    @ti.func
    def ray_interval(self, origin, direction):
        hit, t_near, t_far = ray_sphere(origin, direction, self.center, self.radius)
        return hit, t_near, t_far

    @ti.func
    def segment_interval(self, p0, p1):
        code, t_near, t_far = segment_sphere(p0, p1, self.center, self.radius)
        return code, t_near, t_far

    @ti.func
    def translate(self, offset, dest: ti.template()):
        """Store this sphere moved by ``offset`` in dest."""
        dest.center = self.center + offset
        dest.radius = self.radius
        return dest


@ti.dataclass
class Spheref(_SphereMethods):
    """A single-precision sphere defined by center and radius.

    Attributes:
        center: The center point of the sphere (vec3f).
        radius: The radius of the sphere (f32).
    """

    center: vec3f
    radius: ti.f32


@ti.dataclass
class Sphered(_SphereMethods):
    """A double-precision sphere defined by center and radius.

    Attributes:
        center: The center point of the sphere (vec3d).
        radius: The radius of the sphere (f64).
    """

    center: vec3d
    radius: ti.f64
