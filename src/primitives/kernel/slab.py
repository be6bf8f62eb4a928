"""Ray-box and segment-box intersection using the slab method.

A box is the intersection of three slabs, one per axis. For each axis the
ray enters and leaves the slab at two parameter values; the ray hits the box
iff the latest entry is not after the earliest exit. See Williams et al.,
"An Efficient and Robust Ray-Box Intersection Algorithm".

A zero direction component means the ray runs parallel to that slab. Instead
of dividing by zero (which would produce NaN for an origin exactly on a slab
plane), the slab is then treated as ``(-inf, +inf)`` if the origin lies
within it and as empty otherwise.

Line segments reuse the same window and classify it against ``[0, 1]``:

    OUTSIDE           the segment does not touch the shape
    ONE_INTERSECTION  exactly one end point lies inside
    TWO_INTERSECTION  both end points lie outside, the segment crosses twice
    INSIDE            both end points lie inside

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.kernel.slab import ray_box
    >>> # Use ray_box within a Taichi kernel:
    >>> # hit, t_near, t_far = ray_box(origin, direction, box_min, box_max)
"""

from enum import IntEnum

import taichi as ti

from src.primitives.core.types import INF


class SegmentClass(IntEnum):
    """Result codes of a line segment intersection test."""

    OUTSIDE = -1
    ONE_INTERSECTION = 1
    TWO_INTERSECTION = 2
    INSIDE = 3


@ti.func
def _slab_axis(o, d, lo, hi):
    """Entry and exit parameters of a ray against one slab.

    Args:
        o: Origin coordinate on this axis.
        d: Direction coordinate on this axis.
        lo: Slab minimum.
        hi: Slab maximum.

    Returns:
        Tuple of (t0, t1) with t0 <= t1, or an empty (+inf, -inf) window if
        the ray is parallel to the slab and outside it.
    """
    t0 = lo - o
    t1 = hi - o
    if d == 0.0:
        inside = o >= lo and o <= hi
        t0 = ti.select(inside, -INF, INF)
        t1 = ti.select(inside, INF, -INF)
    else:
        t0 = t0 / d
        t1 = t1 / d
        if t0 > t1:
            temp = t0
            t0 = t1
            t1 = temp
    return t0, t1


@ti.func
def slab_interval(origin, direction, lo, hi):
    """Parameter window in which the line ``origin + t * direction`` is inside the box.

    The window is not restricted to ``t >= 0``; it is empty when
    ``t_near > t_far``.

    Returns:
        Tuple of (t_near, t_far).
    """
    t_near, t_far = _slab_axis(origin[0], direction[0], lo[0], hi[0])
    for i in ti.static(range(1, 3)):
        t0, t1 = _slab_axis(origin[i], direction[i], lo[i], hi[i])
        t_near = ti.max(t_near, t0)
        t_far = ti.min(t_far, t1)
    return t_near, t_far


@ti.func
def ray_box(origin, direction, lo, hi):
    """Test a half-infinite ray against a closed box.

    A ray whose origin is inside the box hits it with ``t_near <= 0 <= t_far``.
    A box entirely behind the origin is a miss.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (need not be normalized).
        lo: Minimum corner of the box.
        hi: Maximum corner of the box.

    Returns:
        Tuple of (hit, t_near, t_far). The parameters are only meaningful
        when hit is 1.
    """
    t_near, t_far = slab_interval(origin, direction, lo, hi)
    hit = t_near <= t_far and t_far >= 0.0
    return hit, t_near, t_far


@ti.func
def classify_window(t_near, t_far):
    """Classify a line's parameter window against the segment range [0, 1].

    Args:
        t_near: Parameter at which the line enters the shape.
        t_far: Parameter at which the line leaves the shape.

    Returns:
        Tuple of (code, t0, t1) where code is a SegmentClass value and
        [t0, t1] is the window clamped to [0, 1].
    """
    code = int(SegmentClass.OUTSIDE)
    if t_near <= t_far and t_near <= 1.0 and t_far >= 0.0:
        if t_near >= 0.0 and t_far > 1.0:
            code = int(SegmentClass.ONE_INTERSECTION)
        elif t_near < 0.0 and t_far <= 1.0:
            code = int(SegmentClass.ONE_INTERSECTION)
        elif t_near < 0.0 and t_far > 1.0:
            code = int(SegmentClass.INSIDE)
        else:
            code = int(SegmentClass.TWO_INTERSECTION)
    t0 = ti.max(t_near, 0.0)
    t1 = ti.min(t_far, 1.0)
    return code, t0, t1


@ti.func
def segment_box(p0, p1, lo, hi):
    """Classify the line segment from p0 to p1 against a closed box.

    A degenerate segment (p0 == p1) is INSIDE or OUTSIDE depending on where
    the point lies.

    Returns:
        Tuple of (code, t0, t1), see classify_window.
    """
    t_near, t_far = slab_interval(p0, p1 - p0, lo, hi)
    code, t0, t1 = classify_window(t_near, t_far)
    return code, t0, t1
