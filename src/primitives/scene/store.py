"""Mixed-precision shape store with brute-force batch queries.

This module keeps 3D shapes of every precision in Taichi fields and answers
spatial queries against all of them at once. There is no acceleration
structure: each query runs one kernel that tests every stored shape.

Storage uses a Structure-of-Arrays layout with one bank of fields per
(kind, precision) pair. A tag table maps each global shape index to its
kind, precision and slot within the bank; the Taichi-scope ``shape_*``
functions dispatch on those tags and forward to the primitive's own query
methods, so a single kernel can mix f32, f64 and i32 shapes.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.core.types import Precision
    >>> from src.primitives.scene.store import add_aabb, add_sphere, query_point
    >>> add_aabb((0, 0, 0), (1, 1, 1), Precision.I32)
    0
    >>> add_sphere((3, 0, 0), 0.5, Precision.F64)
    1
    >>> query_point((0.5, 0.5, 0.5))
    array([ True, False])
"""

import logging

import numpy as np
import taichi as ti

from src.primitives.core.ray import LineSegmentd, Rayd
from src.primitives.core.types import INF, INT_MAX, INT_MIN, Precision, vec2d
from src.primitives.geometry.aabb import AABBd, AABBf, AABBi
from src.primitives.geometry.plane import Planed
from src.primitives.geometry.registry import ShapeKind, is_3d, shape_type
from src.primitives.geometry.sphere import Sphered, Spheref
from src.primitives.kernel.slab import SegmentClass

logger = logging.getLogger(__name__)

# Maximum number of shapes in the store, and per bank
MAX_SHAPES = 4096
# Maximum number of rays in one closest-hit batch
MAX_RAYS = 4096

# AABB banks
aabb_f32_min = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
aabb_f32_max = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
aabb_f64_min = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SHAPES)
aabb_f64_max = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SHAPES)
aabb_i32_min = ti.Vector.field(3, dtype=ti.i32, shape=MAX_SHAPES)
aabb_i32_max = ti.Vector.field(3, dtype=ti.i32, shape=MAX_SHAPES)

# Sphere banks
sphere_f32_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SHAPES)
sphere_f32_radii = ti.field(dtype=ti.f32, shape=MAX_SHAPES)
sphere_f64_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SHAPES)
sphere_f64_radii = ti.field(dtype=ti.f64, shape=MAX_SHAPES)

# Tag table: global shape index -> (kind, precision, slot in bank)
shape_kinds = ti.field(dtype=ti.i32, shape=MAX_SHAPES)
shape_precisions = ti.field(dtype=ti.i32, shape=MAX_SHAPES)
shape_slots = ti.field(dtype=ti.i32, shape=MAX_SHAPES)
num_shapes = ti.field(dtype=ti.i32, shape=())

# Python-side bank fill counts, keyed by (kind, precision)
_bank_counts: dict[tuple[ShapeKind, Precision], int] = {}

# Query results, one entry per stored shape
query_hits = ti.field(dtype=ti.i32, shape=MAX_SHAPES)
query_t_near = ti.field(dtype=ti.f64, shape=MAX_SHAPES)
query_t_far = ti.field(dtype=ti.f64, shape=MAX_SHAPES)

# Closest-hit batches, one entry per ray
ray_origins = ti.Vector.field(3, dtype=ti.f64, shape=MAX_RAYS)
ray_directions = ti.Vector.field(3, dtype=ti.f64, shape=MAX_RAYS)
closest_indices = ti.field(dtype=ti.i32, shape=MAX_RAYS)
closest_t = ti.field(dtype=ti.f64, shape=MAX_RAYS)


@ti.func
def _load_aabb_f32(slot: ti.i32):
    return AABBf(min=aabb_f32_min[slot], max=aabb_f32_max[slot])


@ti.func
def _load_aabb_f64(slot: ti.i32):
    return AABBd(min=aabb_f64_min[slot], max=aabb_f64_max[slot])


@ti.func
def _load_aabb_i32(slot: ti.i32):
    return AABBi(min=aabb_i32_min[slot], max=aabb_i32_max[slot])


@ti.func
def _load_sphere_f32(slot: ti.i32):
    return Spheref(center=sphere_f32_centers[slot], radius=sphere_f32_radii[slot])


@ti.func
def _load_sphere_f64(slot: ti.i32):
    return Sphered(center=sphere_f64_centers[slot], radius=sphere_f64_radii[slot])


# Bank dispatch table, unrolled at compile time into an if-chain on the tags
_BANKS = (
    (int(ShapeKind.AABB), int(Precision.F32), _load_aabb_f32),
    (int(ShapeKind.AABB), int(Precision.F64), _load_aabb_f64),
    (int(ShapeKind.AABB), int(Precision.I32), _load_aabb_i32),
    (int(ShapeKind.SPHERE), int(Precision.F32), _load_sphere_f32),
    (int(ShapeKind.SPHERE), int(Precision.F64), _load_sphere_f64),
)


def clear_shapes() -> None:
    """Remove all shapes from the store.

    Resets the shape and bank counts to zero. The field data is not cleared
    but will be overwritten when new shapes are added.
    """
    num_shapes[None] = 0
    _bank_counts.clear()
    logger.debug("Cleared shape store")


def get_shape_count() -> int:
    """Get the number of shapes in the store."""
    return int(num_shapes[None])


def get_shape_tag(index: int) -> tuple[ShapeKind, Precision]:
    """Get the kind and precision of a stored shape.

    Raises:
        ValueError: If index does not refer to a stored shape.
    """
    if not 0 <= index < get_shape_count():
        raise ValueError(f"Invalid shape index: {index}")
    return ShapeKind(int(shape_kinds[index])), Precision(int(shape_precisions[index]))


def _as_vector(value, length: int, name: str) -> tuple:
    """Validate a point-like argument and return it as a tuple of floats."""
    try:
        components = tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of numbers, got {value!r}") from e
    if len(components) != length:
        raise ValueError(f"{name} must have {length} components, got {len(components)}")
    return components


def _as_int_vector(value, name: str) -> tuple:
    components = _as_vector(value, 3, name)
    if not all(v.is_integer() for v in components):
        raise ValueError(f"{name} must have integer components for an integer box, got {components}")
    if not all(INT_MIN <= v <= INT_MAX for v in components):
        raise ValueError(f"{name} is out of the i32 range, got {components}")
    return tuple(int(v) for v in components)


def _as_scalar(value, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


def _register(kind: ShapeKind, precision: Precision) -> tuple[int, int]:
    """Reserve a global index and a bank slot for a new shape.

    Callers convert and validate every argument before reserving, so a
    rejected add leaves the store unchanged.

    Raises:
        ValueError: If the kind does not exist in that precision.
        RuntimeError: If the store is full.
    """
    shape_type(kind, precision)
    if not is_3d(kind):
        raise ValueError(f"The shape store holds 3D shapes only, got {ShapeKind(kind).name}")

    idx = num_shapes[None]
    if idx >= MAX_SHAPES:
        raise RuntimeError(f"Maximum number of shapes ({MAX_SHAPES}) exceeded")
    # Banks share the global capacity, so a bank slot is always free here
    key = (ShapeKind(kind), Precision(precision))
    slot = _bank_counts.get(key, 0)

    shape_kinds[idx] = int(key[0])
    shape_precisions[idx] = int(key[1])
    shape_slots[idx] = slot
    _bank_counts[key] = slot + 1
    num_shapes[None] = idx + 1
    return idx, slot


def add_aabb(lo, hi, precision: Precision = Precision.F32) -> int:
    """Add an axis-aligned box to the store.

    The corners are stored as given and are not reordered.

    Args:
        lo: The minimum corner as (x, y, z).
        hi: The maximum corner as (x, y, z).
        precision: Coordinate precision of the stored box.

    Returns:
        The global index of the added box.

    Raises:
        ValueError: If a corner does not have three components, or if an
            integer box is given non-integral coordinates.
        RuntimeError: If the maximum number of shapes is exceeded.
    """
    precision = Precision(precision)
    if precision == Precision.I32:
        lo_values = _as_int_vector(lo, "lo")
        hi_values = _as_int_vector(hi, "hi")
    else:
        lo_values = _as_vector(lo, 3, "lo")
        hi_values = _as_vector(hi, 3, "hi")

    idx, slot = _register(ShapeKind.AABB, precision)
    if precision == Precision.F32:
        aabb_f32_min[slot] = lo_values
        aabb_f32_max[slot] = hi_values
    elif precision == Precision.F64:
        aabb_f64_min[slot] = lo_values
        aabb_f64_max[slot] = hi_values
    else:
        aabb_i32_min[slot] = lo_values
        aabb_i32_max[slot] = hi_values
    logger.debug(f"Added {precision.name} AABB {idx}: {lo_values} - {hi_values}")
    return idx


def add_sphere(center, radius: float, precision: Precision = Precision.F32) -> int:
    """Add a sphere to the store.

    Args:
        center: The center point as (x, y, z).
        radius: The radius. Not validated; a negative radius is stored as is.
        precision: Coordinate precision of the stored sphere (F32 or F64).

    Returns:
        The global index of the added sphere.

    Raises:
        ValueError: If center does not have three numeric components, if
            radius is not a number, or if the precision is I32.
        RuntimeError: If the maximum number of shapes is exceeded.
    """
    precision = Precision(precision)
    center_values = _as_vector(center, 3, "center")
    radius = _as_scalar(radius, "radius")

    idx, slot = _register(ShapeKind.SPHERE, precision)
    if precision == Precision.F32:
        sphere_f32_centers[slot] = center_values
        sphere_f32_radii[slot] = radius
    else:
        sphere_f64_centers[slot] = center_values
        sphere_f64_radii[slot] = radius
    logger.debug(f"Added {precision.name} sphere {idx}: center={center_values} radius={radius}")
    return idx


# =============================================================================
# Taichi-scope dispatch
# =============================================================================


@ti.func
def shape_contains_point(index: ti.i32, point) -> ti.i32:
    """Test whether the stored shape at index contains point."""
    kind = shape_kinds[index]
    precision = shape_precisions[index]
    slot = shape_slots[index]
    result = 0
    for kind_tag, precision_tag, load in ti.static(_BANKS):
        if kind == kind_tag and precision == precision_tag:
            result = load(slot).contains_point(point)
    return result


@ti.func
def shape_intersects_aabb(index: ti.i32, box) -> ti.i32:
    """Test whether the stored shape at index intersects box (any precision)."""
    kind = shape_kinds[index]
    precision = shape_precisions[index]
    slot = shape_slots[index]
    result = 0
    for kind_tag, precision_tag, load in ti.static(_BANKS):
        if kind == kind_tag and precision == precision_tag:
            result = load(slot).intersects_aabb(box)
    return result


@ti.func
def shape_intersects_sphere(index: ti.i32, sphere) -> ti.i32:
    kind = shape_kinds[index]
    precision = shape_precisions[index]
    slot = shape_slots[index]
    result = 0
    for kind_tag, precision_tag, load in ti.static(_BANKS):
        if kind == kind_tag and precision == precision_tag:
            result = load(slot).intersects_sphere(sphere)
    return result


@ti.func
def shape_intersects_plane(index: ti.i32, plane) -> ti.i32:
    kind = shape_kinds[index]
    precision = shape_precisions[index]
    slot = shape_slots[index]
    result = 0
    for kind_tag, precision_tag, load in ti.static(_BANKS):
        if kind == kind_tag and precision == precision_tag:
            result = load(slot).intersects_plane(plane)
    return result


@ti.func
def shape_ray_interval(index: ti.i32, ray):
    """Intersect a ray with the stored shape at index.

    Returns:
        Tuple of (hit, t_near, t_far), with the parameters in f64.
    """
    kind = shape_kinds[index]
    precision = shape_precisions[index]
    slot = shape_slots[index]
    window = vec2d(INF, -INF)
    hit = 0
    for kind_tag, precision_tag, load in ti.static(_BANKS):
        if kind == kind_tag and precision == precision_tag:
            hit = load(slot).intersect_ray(ray, window)
    return hit, window[0], window[1]


@ti.func
def shape_segment_interval(index: ti.i32, segment):
    """Classify a line segment against the stored shape at index.

    Returns:
        Tuple of (code, t0, t1). The interval is (0, 0) for OUTSIDE.
    """
    kind = shape_kinds[index]
    precision = shape_precisions[index]
    slot = shape_slots[index]
    window = vec2d(0.0, 0.0)
    code = int(SegmentClass.OUTSIDE)
    for kind_tag, precision_tag, load in ti.static(_BANKS):
        if kind == kind_tag and precision == precision_tag:
            code = load(slot).intersects_line_segment(segment, window)
    return code, window[0], window[1]


@ti.func
def closest_shape(ray):
    """Find the stored shape a ray reaches first.

    Iterates over all shapes and keeps the smallest entry parameter. A ray
    starting inside a shape reaches it at t = 0.

    Returns:
        Tuple of (index, t). index is -1 if the ray misses every shape.
    """
    closest_index = -1
    closest = ti.cast(INF, ti.f64)
    n = num_shapes[None]
    for i in range(n):
        hit, t_near, t_far = shape_ray_interval(i, ray)
        if hit:
            t = ti.max(t_near, 0.0)
            if t < closest:
                closest = t
                closest_index = i
    return closest_index, closest


# =============================================================================
# Query kernels
# =============================================================================


@ti.kernel
def _query_point_kernel(x: ti.f64, y: ti.f64, z: ti.f64):
    point = ti.Vector([x, y, z])
    for i in range(num_shapes[None]):
        query_hits[i] = shape_contains_point(i, point)


@ti.kernel
def _query_aabb_kernel(
    min_x: ti.f64, min_y: ti.f64, min_z: ti.f64, max_x: ti.f64, max_y: ti.f64, max_z: ti.f64
):
    box = AABBd(min=ti.Vector([min_x, min_y, min_z]), max=ti.Vector([max_x, max_y, max_z]))
    for i in range(num_shapes[None]):
        query_hits[i] = shape_intersects_aabb(i, box)


@ti.kernel
def _query_sphere_kernel(x: ti.f64, y: ti.f64, z: ti.f64, radius: ti.f64):
    sphere = Sphered(center=ti.Vector([x, y, z]), radius=radius)
    for i in range(num_shapes[None]):
        query_hits[i] = shape_intersects_sphere(i, sphere)


@ti.kernel
def _query_plane_kernel(a: ti.f64, b: ti.f64, c: ti.f64, d: ti.f64):
    plane = Planed(a=a, b=b, c=c, d=d)
    for i in range(num_shapes[None]):
        query_hits[i] = shape_intersects_plane(i, plane)


@ti.kernel
def _query_ray_kernel(ox: ti.f64, oy: ti.f64, oz: ti.f64, dx: ti.f64, dy: ti.f64, dz: ti.f64):
    ray = Rayd(origin=ti.Vector([ox, oy, oz]), direction=ti.Vector([dx, dy, dz]))
    for i in range(num_shapes[None]):
        hit, t_near, t_far = shape_ray_interval(i, ray)
        query_hits[i] = hit
        query_t_near[i] = t_near
        query_t_far[i] = t_far


@ti.kernel
def _query_segment_kernel(x0: ti.f64, y0: ti.f64, z0: ti.f64, x1: ti.f64, y1: ti.f64, z1: ti.f64):
    segment = LineSegmentd(p0=ti.Vector([x0, y0, z0]), p1=ti.Vector([x1, y1, z1]))
    for i in range(num_shapes[None]):
        code, t0, t1 = shape_segment_interval(i, segment)
        query_hits[i] = code
        query_t_near[i] = t0
        query_t_far[i] = t1


@ti.kernel
def _query_closest_kernel(n_rays: ti.i32):
    for r in range(n_rays):
        ray = Rayd(origin=ray_origins[r], direction=ray_directions[r])
        index, t = closest_shape(ray)
        closest_indices[r] = index
        closest_t[r] = t


# =============================================================================
# Python-scope queries
# =============================================================================


def query_point(point) -> np.ndarray:
    """Test which stored shapes contain a point.

    Returns:
        Boolean array with one entry per stored shape.
    """
    x, y, z = _as_vector(point, 3, "point")
    logger.debug(f"Point query at {(x, y, z)} over {get_shape_count()} shapes")
    _query_point_kernel(x, y, z)
    return query_hits.to_numpy()[: get_shape_count()].astype(bool)


def query_aabb(lo, hi) -> np.ndarray:
    """Test which stored shapes intersect the closed box [lo, hi]."""
    lo_values = _as_vector(lo, 3, "lo")
    hi_values = _as_vector(hi, 3, "hi")
    logger.debug(f"AABB query {lo_values} - {hi_values} over {get_shape_count()} shapes")
    _query_aabb_kernel(*lo_values, *hi_values)
    return query_hits.to_numpy()[: get_shape_count()].astype(bool)


def query_sphere(center, radius: float) -> np.ndarray:
    """Test which stored shapes intersect a sphere."""
    x, y, z = _as_vector(center, 3, "center")
    radius = _as_scalar(radius, "radius")
    logger.debug(f"Sphere query center={(x, y, z)} radius={radius} over {get_shape_count()} shapes")
    _query_sphere_kernel(x, y, z, radius)
    return query_hits.to_numpy()[: get_shape_count()].astype(bool)


def query_plane(a: float, b: float, c: float, d: float) -> np.ndarray:
    """Test which stored shapes the plane a*x + b*y + c*z + d = 0 passes through."""
    logger.debug(f"Plane query ({a}, {b}, {c}, {d}) over {get_shape_count()} shapes")
    _query_plane_kernel(a, b, c, d)
    return query_hits.to_numpy()[: get_shape_count()].astype(bool)


def query_ray(origin, direction) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Intersect a ray with every stored shape.

    Returns:
        Tuple of (hits, t_near, t_far) arrays with one entry per stored shape.
        The parameters are only meaningful where hits is True.
    """
    origin_values = _as_vector(origin, 3, "origin")
    direction_values = _as_vector(direction, 3, "direction")
    logger.debug(f"Ray query {origin_values} -> {direction_values} over {get_shape_count()} shapes")
    _query_ray_kernel(*origin_values, *direction_values)
    n = get_shape_count()
    return (
        query_hits.to_numpy()[:n].astype(bool),
        query_t_near.to_numpy()[:n],
        query_t_far.to_numpy()[:n],
    )


def query_segment(p0, p1) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Classify a line segment against every stored shape.

    Returns:
        Tuple of (codes, t0, t1) arrays with one entry per stored shape.
        codes holds SegmentClass values.
    """
    p0_values = _as_vector(p0, 3, "p0")
    p1_values = _as_vector(p1, 3, "p1")
    logger.debug(f"Segment query {p0_values} - {p1_values} over {get_shape_count()} shapes")
    _query_segment_kernel(*p0_values, *p1_values)
    n = get_shape_count()
    return (
        query_hits.to_numpy()[:n],
        query_t_near.to_numpy()[:n],
        query_t_far.to_numpy()[:n],
    )


def query_closest(origins, directions) -> tuple[np.ndarray, np.ndarray]:
    """Find the first shape each ray of a batch reaches.

    Rays are processed in parallel; each ray tests every stored shape.

    Args:
        origins: Array-like of shape (n, 3).
        directions: Array-like of shape (n, 3).

    Returns:
        Tuple of (indices, t) arrays of length n. indices is -1 and t is inf
        for rays that miss everything.

    Raises:
        ValueError: If the arrays are not (n, 3) or their lengths differ.
        RuntimeError: If the batch has more than MAX_RAYS rays.
    """
    origins = np.asarray(origins, dtype=np.float64)
    directions = np.asarray(directions, dtype=np.float64)
    if origins.ndim != 2 or origins.shape[1] != 3 or origins.shape != directions.shape:
        raise ValueError(
            f"origins and directions must both have shape (n, 3), got {origins.shape} and {directions.shape}"
        )
    n_rays = origins.shape[0]
    if n_rays > MAX_RAYS:
        raise RuntimeError(f"Maximum number of rays per batch ({MAX_RAYS}) exceeded")

    origin_buffer = np.zeros((MAX_RAYS, 3), dtype=np.float64)
    direction_buffer = np.zeros((MAX_RAYS, 3), dtype=np.float64)
    origin_buffer[:n_rays] = origins
    direction_buffer[:n_rays] = directions
    ray_origins.from_numpy(origin_buffer)
    ray_directions.from_numpy(direction_buffer)

    logger.debug(f"Closest-hit query for {n_rays} rays over {get_shape_count()} shapes")
    _query_closest_kernel(n_rays)
    return closest_indices.to_numpy()[:n_rays], closest_t.to_numpy()[:n_rays]
