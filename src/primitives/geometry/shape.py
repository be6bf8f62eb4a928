"""Capability mixins shared by every primitive.

``ti.dataclass`` attaches every method it finds on the decorated class,
including inherited ones, to the resulting struct type. The mixins below
therefore define the object-level forms of each query once, on top of a small
set of coordinate-level methods that every concrete primitive supplies:

Shape3D (boxes and spheres) requires:
    contains_point(point) -> i32
    intersects_plane_coeffs(a, b, c, d) -> i32
    intersects_aabb(other) -> i32
    intersects_sphere_coeffs(center, radius) -> i32
    ray_interval(origin, direction) -> (hit, t_near, t_far)
    segment_interval(p0, p1) -> (code, t_near, t_far)

Shape2D (rectangles and circles) requires:
    contains_point(point) -> i32
    intersects_rectangle(other) -> i32
    intersects_circle_coeffs(center, radius) -> i32

Arguments are not annotated so that any precision variant can be passed;
operations between different precisions run in the wider one. Arguments
annotated with ``ti.template()`` are caller-owned destinations and are
written in place.

Example:
    >>> # Inside a Taichi kernel:
    >>> # box = AABBf(min=vec3f(0, 0, 0), max=vec3f(1, 1, 1))
    >>> # window = ti.Vector([0.0, 0.0])
    >>> # if box.intersect_ray(ray, window):
    >>> #     t_near, t_far = window[0], window[1]
"""

import taichi as ti

from src.primitives.kernel.slab import SegmentClass


class Shape3D:
    """Queries available on every 3D primitive."""

    @ti.func
    def contains_xyz(self, x, y, z) -> ti.i32:
        return self.contains_point(ti.Vector([x, y, z]))

    @ti.func
    def intersects_plane(self, plane) -> ti.i32:
        """Test whether the plane passes through this shape."""
        return self.intersects_plane_coeffs(plane.a, plane.b, plane.c, plane.d)

    @ti.func
    def intersects_sphere(self, sphere) -> ti.i32:
        """Test whether this shape and a (closed) sphere touch or overlap."""
        return self.intersects_sphere_coeffs(sphere.center, sphere.radius)

    @ti.func
    def intersects_ray(self, ray) -> ti.i32:
        """Test whether a half-infinite ray hits this shape."""
        hit, t_near, t_far = self.ray_interval(ray.origin, ray.direction)
        return hit

    @ti.func
    def intersect_ray(self, ray, result: ti.template()) -> ti.i32:
        """Test a ray against this shape and report where it enters and leaves.

        Args:
            ray: The ray to test (any precision).
            result: Caller-owned 2-vector. Receives (t_near, t_far) when the
                ray hits and is left untouched otherwise.

        Returns:
            1 if the ray hits the shape, 0 otherwise.
        """
        hit, t_near, t_far = self.ray_interval(ray.origin, ray.direction)
        if hit:
            result[0] = t_near
            result[1] = t_far
        return hit

    @ti.func
    def intersects_line_segment(self, segment, result: ti.template()):
        """Classify a line segment against this shape.

        Args:
            segment: The line segment to test (any precision).
            result: Caller-owned 2-vector. Receives the part of [0, 1] in
                which the segment lies inside the shape, unless the segment
                is OUTSIDE.

        Returns:
            A SegmentClass value.
        """
        code, t_near, t_far = self.segment_interval(segment.p0, segment.p1)
        if code != int(SegmentClass.OUTSIDE):
            result[0] = t_near
            result[1] = t_far
        return code


class Shape2D:
    """Queries available on every 2D primitive."""

    @ti.func
    def contains_xy(self, x, y) -> ti.i32:
        return self.contains_point(ti.Vector([x, y]))

    @ti.func
    def intersects_circle(self, circle) -> ti.i32:
        return self.intersects_circle_coeffs(circle.center, circle.radius)
