"""Sphere routines with robust ray-sphere intersection.

The ray-sphere test uses the robust quadratic formula from Ray Tracing Gems
to avoid floating-point artifacts when b^2 is nearly equal to 4ac.

Ball tests (point, sphere, box) compare squared distances against squared
radii and never take a square root. They work for 2D vectors as well, which
is how the circle routines in ``planar`` reuse them.

Degenerate input is not rejected: a zero direction or a negative radius flows
through the arithmetic and produces a deterministic (if meaningless) answer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.kernel.sphere import ray_sphere
    >>> # Use ray_sphere within a Taichi kernel:
    >>> # hit, t_near, t_far = ray_sphere(origin, direction, center, radius)
"""

import taichi as ti
import taichi.math as tm

from src.primitives.core.types import INF

from .slab import classify_window


@ti.func
def solve_quadratic_robust(h, a, c, sqrt_d):
    """Solve quadratic equation using robust formula from Ray Tracing Gems.

    Solves a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant)) avoids catastrophic cancellation
    sign_h = ti.select(h < 0.0, -1.0, 1.0)
    q = -(h + sign_h * sqrt_d)

    t0 = q / a
    t1 = c / q

    # Near-zero q (tangent ray): fall back to the standard formula
    if ti.abs(q) < 1e-10:
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a

    if t0 > t1:
        temp = t0
        t0 = t1
        t1 = temp

    return t0, t1


@ti.func
def sphere_interval(origin, direction, center, radius):
    """Parameter window in which the line ``origin + t * direction`` is inside the sphere.

    The line-sphere intersection is found by solving:
        |origin + t * direction - center|^2 = radius^2

    Expanding gives a*t^2 + 2*h*t + c = 0 with
        a = dot(direction, direction)
        h = dot(direction, origin - center)
        c = dot(origin - center, origin - center) - radius^2

    A zero direction (a == 0) has no quadratic to solve: the window is then
    (-inf, +inf) if the origin lies in the ball and empty otherwise, the
    same rule the slab method applies to a parallel axis.

    Returns:
        Tuple of (t_near, t_far). When the discriminant is negative the
        window is empty (+inf, -inf).
    """
    oc = origin - center
    a = tm.dot(direction, direction)
    h = tm.dot(direction, oc)
    c = tm.dot(oc, oc) - radius * radius

    discriminant = h * h - a * c
    sqrt_d = ti.sqrt(ti.max(discriminant, 0.0))
    t_near, t_far = solve_quadratic_robust(h, a, c, sqrt_d)

    if a == 0.0:
        inside = c <= 0.0
        t_near = ti.select(inside, -INF, INF)
        t_far = ti.select(inside, INF, -INF)
    elif discriminant < 0.0:
        t_near = INF
        t_far = -INF

    return t_near, t_far


@ti.func
def ray_sphere(origin, direction, center, radius):
    """Test a half-infinite ray against a sphere.

    Both roots negative means the sphere is behind the origin: a miss even
    though the line intersects it. An origin inside the sphere yields
    ``t_near < 0 <= t_far``, which is a hit.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (need not be normalized).
        center: The center of the sphere.
        radius: The radius of the sphere.

    Returns:
        Tuple of (hit, t_near, t_far).
    """
    t_near, t_far = sphere_interval(origin, direction, center, radius)
    hit = t_near <= t_far and t_far >= 0.0
    return hit, t_near, t_far


@ti.func
def segment_sphere(p0, p1, center, radius):
    """Classify the line segment from p0 to p1 against a sphere.

    A degenerate segment (p0 == p1) is INSIDE or OUTSIDE depending on where
    the point lies.

    Returns:
        Tuple of (code, t0, t1), see classify_window.
    """
    t_near, t_far = sphere_interval(p0, p1 - p0, center, radius)
    code, t0, t1 = classify_window(t_near, t_far)
    return code, t0, t1


@ti.func
def sphere_contains_point(center, radius, p) -> ti.i32:
    """Test whether p lies in the closed ball around center."""
    d = p - center
    return tm.dot(d, d) <= radius * radius


@ti.func
def sphere_sphere(c1, r1, c2, r2) -> ti.i32:
    """Test whether two balls touch or overlap."""
    d = c1 - c2
    r = r1 + r2
    return tm.dot(d, d) <= r * r


@ti.func
def box_sphere(lo, hi, center, radius) -> ti.i32:
    """Test whether a closed box and a ball intersect.

    Clamps the center into the box and compares the squared distance to the
    clamped point against the squared radius. Only axes on which the center
    lies outside the box contribute to the distance.

    Reference: http://stackoverflow.com/questions/4578967/cube-sphere-intersection-test
    """
    gap = ti.max(ti.max(lo - center, center - hi), 0.0)
    return tm.dot(gap, gap) <= radius * radius
