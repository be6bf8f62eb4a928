"""Ray and line segment data structures.

Rays are half-infinite: ``p(t) = origin + t * direction`` for ``t >= 0``.
Line segments are the bounded case ``p(t) = p0 + t * (p1 - p0)`` for
``t`` in ``[0, 1]``.

Directions are never normalized implicitly. Every parameter ``t`` reported by
the intersection routines is measured in units of the given direction vector.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.core.ray import Rayf, ray_at, vec3f
    >>> # Inside a Taichi kernel:
    >>> # ray = Rayf(origin=vec3f(0.0, 0.0, 0.0), direction=vec3f(0.0, 0.0, -1.0))
    >>> # point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti

from .types import vec3d, vec3f


@ti.dataclass
class Rayf:
    """A single-precision ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3f).
        direction: The direction vector of the ray (vec3f). Not required to be
            normalized.
    """

    origin: vec3f
    direction: vec3f


@ti.dataclass
class Rayd:
    """A double-precision ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3d).
        direction: The direction vector of the ray (vec3d). Not required to be
            normalized.
    """

    origin: vec3d
    direction: vec3d


@ti.dataclass
class LineSegmentf:
    """A single-precision line segment between two end points.

    Attributes:
        p0: The start point of the segment (vec3f).
        p1: The end point of the segment (vec3f).
    """

    p0: vec3f
    p1: vec3f


@ti.dataclass
class LineSegmentd:
    """A double-precision line segment between two end points.

    Attributes:
        p0: The start point of the segment (vec3d).
        p1: The end point of the segment (vec3d).
    """

    p0: vec3d
    p1: vec3d


@ti.func
def ray_at(ray, t):
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate (any precision).
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def segment_at(segment, t):
    """Compute the point on the segment's supporting line at parameter t.

    ``t = 0`` yields ``p0`` and ``t = 1`` yields ``p1``.
    """
    return segment.p0 + t * (segment.p1 - segment.p0)


@ti.func
def make_ray(origin: vec3f, direction: vec3f) -> Rayf:
    """Create a single-precision ray from origin and direction.

    This is a convenience function for creating rays within Taichi kernels.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector (need not be normalized).

    Returns:
        A new Rayf instance.
    """
    return Rayf(origin=origin, direction=direction)


@ti.func
def make_segment(p0: vec3f, p1: vec3f) -> LineSegmentf:
    """Create a single-precision line segment from its end points."""
    return LineSegmentf(p0=p0, p1=p1)
