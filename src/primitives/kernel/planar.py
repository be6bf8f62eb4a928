"""Rectangle and circle routines in the plane.

Rectangles are treated as open regions: a rectangle is valid only when it has
positive extent on both axes, a point on an edge is outside, and two
rectangles that merely share an edge do not intersect. Containment of one
rectangle in another is closed, so a rectangle contains itself.

Circles are closed discs. Their tests are the 2D instances of the ball
routines in ``sphere``, which work for vectors of any dimension.
"""

import taichi as ti

from .sphere import box_sphere, sphere_contains_point, sphere_sphere


@ti.func
def rect_is_valid(lo, hi) -> ti.i32:
    """Check whether a rectangle has ``min < max`` on both axes."""
    return lo.x < hi.x and lo.y < hi.y


@ti.func
def rect_contains_point(lo, hi, p) -> ti.i32:
    """Test whether p lies strictly inside the rectangle."""
    return p.x > lo.x and p.y > lo.y and p.x < hi.x and p.y < hi.y


@ti.func
def rect_contains_rect(lo, hi, other_lo, other_hi) -> ti.i32:
    """Test whether the rectangle [other_lo, other_hi] lies inside [lo, hi]."""
    return (
        other_lo.x >= lo.x
        and other_lo.y >= lo.y
        and other_hi.x <= hi.x
        and other_hi.y <= hi.y
    )


@ti.func
def rect_overlaps(a_lo, a_hi, b_lo, b_hi) -> ti.i32:
    """Test whether two rectangles share a region of positive area."""
    return a_lo.x < b_hi.x and a_hi.x > b_lo.x and a_lo.y < b_hi.y and a_hi.y > b_lo.y


@ti.func
def rect_intersection(a_lo, a_hi, b_lo, b_hi):
    """Compute the overlap of two rectangles.

    Returns:
        Tuple of (lo, hi, valid). When valid is 0 the corners are meaningless
        and callers substitute the empty sentinel.
    """
    lo = ti.max(a_lo, b_lo)
    hi = ti.min(a_hi, b_hi)
    valid = rect_is_valid(lo, hi)
    return lo, hi, valid


@ti.func
def rect_area(lo, hi):
    """Width times height, computed in float."""
    size = hi * 1.0 - lo * 1.0
    return size.x * size.y


@ti.func
def rect_scale(lo, hi, sx, sy, anchor):
    """Scale a rectangle by (sx, sy) about an anchor point.

    Every corner coordinate moves away from (or towards) the anchor by the
    scale factor; the anchor itself stays fixed.

    Returns:
        Tuple of (lo, hi).
    """
    factor = ti.Vector([sx, sy])
    return (lo - anchor) * factor + anchor, (hi - anchor) * factor + anchor


@ti.func
def circle_contains_point(center, radius, p) -> ti.i32:
    return sphere_contains_point(center, radius, p)


@ti.func
def circle_circle(c1, r1, c2, r2) -> ti.i32:
    return sphere_sphere(c1, r1, c2, r2)


@ti.func
def rect_circle(lo, hi, center, radius) -> ti.i32:
    """Test whether a rectangle and a closed disc intersect."""
    return box_sphere(lo, hi, center, radius)
