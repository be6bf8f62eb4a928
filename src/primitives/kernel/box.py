"""Axis-aligned box routines over raw corner coordinates.

Every routine takes the minimum and maximum corners of the boxes involved as
Taichi vectors and is usable from any Taichi kernel. Nothing here knows about
the AABB dataclasses; those live in ``src.primitives.geometry.aabb`` and
delegate to this module.

The routines are precision-generic. Corners of different precision (i32, f32,
f64) can be mixed freely: every intermediate value is derived from the inputs,
so Taichi's implicit promotion evaluates each comparison in the wider type.

Bounds are closed: a point on a face is inside the box, and two boxes that
share a face overlap.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.kernel.box import box_intersection
    >>> # Use box_intersection within a Taichi kernel:
    >>> # lo, hi, valid = box_intersection(a_min, a_max, b_min, b_max)
"""

import taichi as ti


@ti.func
def box_is_valid(lo, hi) -> ti.i32:
    """Check whether a box has ``min <= max`` on every axis.

    The empty-box sentinels (``+inf/-inf`` and ``INT_MAX/INT_MIN``) are
    invalid by construction.
    """
    return lo.x <= hi.x and lo.y <= hi.y and lo.z <= hi.z


@ti.func
def box_contains_point(lo, hi, p) -> ti.i32:
    """Test whether point p lies inside the closed box [lo, hi].

    Args:
        lo: Minimum corner of the box.
        hi: Maximum corner of the box.
        p: The point to test.

    Returns:
        1 if every coordinate of p is within the box bounds, 0 otherwise.
    """
    return (
        p.x >= lo.x
        and p.y >= lo.y
        and p.z >= lo.z
        and p.x <= hi.x
        and p.y <= hi.y
        and p.z <= hi.z
    )


@ti.func
def box_contains_box(lo, hi, other_lo, other_hi) -> ti.i32:
    """Test whether the box [other_lo, other_hi] lies inside [lo, hi].

    Every bound of the inner box must lie within the corresponding bound of
    the outer box. A box always contains itself.
    """
    return (
        other_lo.x >= lo.x
        and other_lo.y >= lo.y
        and other_lo.z >= lo.z
        and other_hi.x <= hi.x
        and other_hi.y <= hi.y
        and other_hi.z <= hi.z
    )


@ti.func
def box_overlaps(a_lo, a_hi, b_lo, b_hi) -> ti.i32:
    """Test whether two closed boxes share at least one point."""
    return (
        a_hi.x >= b_lo.x
        and a_hi.y >= b_lo.y
        and a_hi.z >= b_lo.z
        and a_lo.x <= b_hi.x
        and a_lo.y <= b_hi.y
        and a_lo.z <= b_hi.z
    )


@ti.func
def box_union(a_lo, a_hi, b_lo, b_hi):
    """Compute the smallest box enclosing both input boxes.

    Works for corners of any dimension. The union is commutative and
    associative, and the union with an empty (sentinel) box is the other box.

    Returns:
        Tuple of (lo, hi) corners of the enclosing box.
    """
    return ti.min(a_lo, b_lo), ti.max(a_hi, b_hi)


@ti.func
def box_union_point(lo, hi, p):
    """Grow a box so that it includes point p.

    Returns:
        Tuple of (lo, hi) corners of the grown box.
    """
    return ti.min(lo, p), ti.max(hi, p)


@ti.func
def box_intersection(a_lo, a_hi, b_lo, b_hi):
    """Compute the overlap of two boxes.

    The overlap is the componentwise maximum of the minima and minimum of the
    maxima. When the boxes are disjoint on any axis the returned corners are
    inverted on that axis and ``valid`` is 0; callers replace the corners by
    the empty-box sentinel of their precision.

    Returns:
        Tuple of (lo, hi, valid).
    """
    lo = ti.max(a_lo, b_lo)
    hi = ti.min(a_hi, b_hi)
    valid = box_is_valid(lo, hi)
    return lo, hi, valid


@ti.func
def box_center(lo, hi):
    """Center of the box, ``(lo + hi) / 2``. Integer boxes yield floats.

    Corners are widened to float before adding, so integer boxes near the
    i32 limits (including the empty sentinel) do not wrap around.
    """
    return (lo * 1.0 + hi * 1.0) * 0.5


@ti.func
def box_extent(lo, hi):
    """Half-size of the box, ``(hi - lo) / 2``, computed in float.

    The empty sentinel has a negative extent on every axis.
    """
    return (hi * 1.0 - lo * 1.0) * 0.5


@ti.func
def box_translate(lo, hi, offset):
    """Move a box by offset. Returns the tuple (lo, hi)."""
    return lo + offset, hi + offset


@ti.func
def box_transform(lo, hi, m):
    """Bound a box transformed by an affine 4x4 matrix.

    Uses Arvo's method: each output axis starts at the translation part of
    the matrix and accumulates, per input axis, the smaller (for the minimum)
    or larger (for the maximum) of the matrix entry times the input bounds.
    The result is the tightest axis-aligned box around the eight transformed
    corners. Points are treated as column vectors, ``p' = m @ (p, 1)``.

    Args:
        lo: Minimum corner of the box.
        hi: Maximum corner of the box.
        m: Affine 4x4 matrix. The last row is ignored.

    Returns:
        Tuple of (lo, hi) of the transformed bounds, in the matrix precision.
    """
    new_lo = ti.Vector([m[0, 3], m[1, 3], m[2, 3]])
    new_hi = ti.Vector([m[0, 3], m[1, 3], m[2, 3]])
    for i in ti.static(range(3)):
        for j in ti.static(range(3)):
            a = m[i, j] * lo[j]
            b = m[i, j] * hi[j]
            new_lo[i] += ti.min(a, b)
            new_hi[i] += ti.max(a, b)
    return new_lo, new_hi
