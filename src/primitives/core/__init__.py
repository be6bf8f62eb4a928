"""Core types module.

This module contains the building blocks shared by every primitive:

Components:
    types: Vector types per precision, precision tags and empty-box sentinels
    ray: Ray and line segment data structures

Every primitive exists in single (f32) and double (f64) precision; boxes and
rectangles also exist with integer (i32) coordinates. Operations between
primitives of different precision are evaluated in the wider precision.
"""

from .ray import (
    LineSegmentd,
    LineSegmentf,
    Rayd,
    Rayf,
    make_ray,
    make_segment,
    ray_at,
    segment_at,
)
from .types import (
    INF,
    INT_MAX,
    INT_MIN,
    Precision,
    dtype_of,
    is_integer,
    vec2d,
    vec2f,
    vec2i,
    vec3d,
    vec3f,
    vec3i,
    widest,
)

__all__ = [
    "Rayf",
    "Rayd",
    "LineSegmentf",
    "LineSegmentd",
    "ray_at",
    "segment_at",
    "make_ray",
    "make_segment",
    "Precision",
    "dtype_of",
    "widest",
    "is_integer",
    "INF",
    "INT_MAX",
    "INT_MIN",
    "vec2f",
    "vec3f",
    "vec2d",
    "vec3d",
    "vec2i",
    "vec3i",
]
