"""Scalar and vector types shared by every primitive.

Each primitive comes in a single-precision (f32) and a double-precision (f64)
flavour, and boxes and rectangles additionally in an integer (i32) flavour.
This module names the Taichi vector types for each precision and the
sentinels used to mark an empty integer box.

Mixed-precision expressions inside Taichi kernels follow Taichi's implicit
promotion (i32 -> f32 -> f64), so an operation between two primitives is
always evaluated in the wider of the two precisions.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.core.types import Precision, dtype_of, widest
    >>> dtype_of(Precision.F64) == ti.f64
    True
    >>> widest(Precision.I32, Precision.F32)
    <Precision.F32: 1>
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

# Vector types per precision
vec2f = ti.types.vector(2, ti.f32)
vec3f = ti.types.vector(3, ti.f32)
vec2d = ti.types.vector(2, ti.f64)
vec3d = ti.types.vector(3, ti.f64)
vec2i = ti.types.vector(2, ti.i32)
vec3i = ti.types.vector(3, ti.i32)

# Empty-box sentinels: float boxes use +/-inf, integer boxes the i32 limits
INF = tm.inf
INT_MAX = 2**31 - 1
INT_MIN = -(2**31)


class Precision(IntEnum):
    """Numeric precision of a primitive's coordinates.

    Values are ordered so that a larger value is a wider type; mixing two
    precisions evaluates in ``max(a, b)``.
    """

    I32 = 0
    F32 = 1
    F64 = 2


_DTYPES = {
    Precision.I32: ti.i32,
    Precision.F32: ti.f32,
    Precision.F64: ti.f64,
}


def dtype_of(precision: Precision):
    """Return the Taichi scalar type for a precision tag."""
    return _DTYPES[Precision(precision)]


def widest(a: Precision, b: Precision) -> Precision:
    """Return the precision a mixed operation between ``a`` and ``b`` runs in.

    The narrower operand is always widened; the wider one is never narrowed.
    """
    return Precision(max(int(a), int(b)))


def is_integer(precision: Precision) -> bool:
    """Check whether a precision tag denotes integer coordinates."""
    return Precision(precision) == Precision.I32
