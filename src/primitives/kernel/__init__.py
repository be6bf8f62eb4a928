"""Intersection kernel module.

Stateless Taichi functions over raw coordinates. Every routine takes corner
vectors, centers, radii and plane coefficients directly, so it can be inlined
into any user kernel regardless of how the caller stores its shapes:

Components:
    box: Box containment, overlap, union, intersection and affine transform
    slab: Ray-box and segment-box tests using the slab method
    sphere: Robust ray-sphere, sphere-sphere and box-sphere tests
    plane: Plane normalization, signed distance, plane-box and plane-sphere
    planar: Rectangle and circle tests in 2D

All routines are implemented as Taichi functions (@ti.func) and are generic
over the coordinate precision. Mixed operands are promoted to the wider type.
"""

from .box import (
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
from .planar import (
    circle_circle,
    circle_contains_point,
    rect_area,
    rect_circle,
    rect_contains_point,
    rect_contains_rect,
    rect_intersection,
    rect_is_valid,
    rect_overlaps,
    rect_scale,
)
from .plane import plane_box, plane_distance, plane_normalize, plane_sphere
from .slab import SegmentClass, classify_window, ray_box, segment_box, slab_interval
from .sphere import (
    box_sphere,
    ray_sphere,
    segment_sphere,
    solve_quadratic_robust,
    sphere_contains_point,
    sphere_interval,
    sphere_sphere,
)

__all__ = [
    "box_center",
    "box_contains_box",
    "box_contains_point",
    "box_extent",
    "box_intersection",
    "box_is_valid",
    "box_overlaps",
    "box_transform",
    "box_translate",
    "box_union",
    "box_union_point",
    "circle_circle",
    "circle_contains_point",
    "rect_area",
    "rect_circle",
    "rect_contains_point",
    "rect_contains_rect",
    "rect_intersection",
    "rect_is_valid",
    "rect_overlaps",
    "rect_scale",
    "plane_box",
    "plane_distance",
    "plane_normalize",
    "plane_sphere",
    "SegmentClass",
    "classify_window",
    "ray_box",
    "segment_box",
    "slab_interval",
    "box_sphere",
    "ray_sphere",
    "segment_sphere",
    "solve_quadratic_robust",
    "sphere_contains_point",
    "sphere_interval",
    "sphere_sphere",
]
