"""Scene module for storing shapes and querying them in bulk.

This module keeps many shapes of mixed precision on the device and answers
spatial queries against all of them:

Components:
    store: Taichi fields per (kind, precision), tag dispatch and query kernels
    manager: ShapeSet, a Python-side manager with configuration round trip

Shape data is organized for efficient GPU access:
    - Structure-of-Arrays layout per (kind, precision) bank
    - A tag table mapping global indices to banks
    - One kernel launch per query, testing every stored shape

There is no acceleration structure; every query is brute force.
"""

from .manager import ShapeInfo, ShapeSet, ShapeSetConfig, parse_precision
from .store import (
    MAX_RAYS,
    MAX_SHAPES,
    add_aabb,
    add_sphere,
    clear_shapes,
    closest_shape,
    get_shape_count,
    get_shape_tag,
    query_aabb,
    query_closest,
    query_plane,
    query_point,
    query_ray,
    query_segment,
    query_sphere,
    shape_contains_point,
    shape_intersects_aabb,
    shape_intersects_plane,
    shape_intersects_sphere,
    shape_ray_interval,
    shape_segment_interval,
)

__all__ = [
    "MAX_SHAPES",
    "MAX_RAYS",
    "add_aabb",
    "add_sphere",
    "clear_shapes",
    "get_shape_count",
    "get_shape_tag",
    "shape_contains_point",
    "shape_intersects_aabb",
    "shape_intersects_sphere",
    "shape_intersects_plane",
    "shape_ray_interval",
    "shape_segment_interval",
    "closest_shape",
    "query_point",
    "query_aabb",
    "query_sphere",
    "query_plane",
    "query_ray",
    "query_segment",
    "query_closest",
    "ShapeSet",
    "ShapeInfo",
    "ShapeSetConfig",
    "parse_precision",
]
