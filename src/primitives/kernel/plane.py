"""Plane routines over implicit coefficients.

A plane is given by ``a*x + b*y + c*z + d = 0``. None of these routines
normalizes the plane: with a non-unit normal the signed distance is scaled
by ``|(a, b, c)|``, but its sign, and therefore every intersection answer
derived from it, is unchanged. Call ``plane_normalize`` first when Euclidean
distances are needed.

Reference: http://www.lighthouse3d.com/tutorials/view-frustum-culling/geometric-approach-testing-boxes-ii/
"""

import taichi as ti

from .box import box_center, box_extent


@ti.func
def plane_distance(a, b, c, d, p):
    """Signed (scaled) distance from point p to the plane."""
    return a * p.x + b * p.y + c * p.z + d


@ti.func
def plane_normalize(a, b, c, d):
    """Scale the plane coefficients so the normal has unit length.

    A zero normal yields non-finite coefficients.

    Returns:
        Tuple of (a, b, c, d).
    """
    inv_length = 1.0 / ti.sqrt(a * a + b * b + c * c)
    return a * inv_length, b * inv_length, c * inv_length, d * inv_length


@ti.func
def plane_box(a, b, c, d, lo, hi) -> ti.i32:
    """Test whether the plane passes through a closed box.

    The distance from the box center to the plane is compared against the
    box half-size projected onto the plane normal. An empty box has a
    negative half-size and misses every plane with a non-zero normal.
    """
    center = box_center(lo, hi)
    half = box_extent(lo, hi)
    distance = a * center.x + b * center.y + c * center.z + d
    radius = ti.abs(a) * half.x + ti.abs(b) * half.y + ti.abs(c) * half.z
    return ti.abs(distance) <= radius


@ti.func
def plane_sphere(a, b, c, d, center, radius) -> ti.i32:
    """Test whether the plane passes through a closed ball."""
    distance = a * center.x + b * center.y + c * center.z + d
    return ti.abs(distance) <= radius * ti.sqrt(a * a + b * b + c * c)
