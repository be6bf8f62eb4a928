"""Lookup table from (shape kind, precision) to the primitive struct type.

Python-scope code that builds fields or kernels for a shape chosen at run
time (the shape store, configuration loaders) resolves the concrete
``ti.dataclass`` here instead of branching on names.

Example:
    >>> from src.primitives.geometry.registry import ShapeKind, shape_type
    >>> from src.primitives.core.types import Precision
    >>> from src.primitives.geometry.aabb import AABBi
    >>> shape_type(ShapeKind.AABB, Precision.I32) is AABBi
    True
"""

from enum import IntEnum

from src.primitives.core.types import Precision

from .aabb import AABBd, AABBf, AABBi
from .circle import Circled, Circlef
from .plane import Planed, Planef
from .rectangle import Rectangled, Rectanglef, Rectanglei
from .sphere import Sphered, Spheref


class ShapeKind(IntEnum):
    """Enumeration of primitive kinds."""

    AABB = 0
    SPHERE = 1
    PLANE = 2
    RECTANGLE = 3
    CIRCLE = 4


SHAPE_TYPES = {
    (ShapeKind.AABB, Precision.F32): AABBf,
    (ShapeKind.AABB, Precision.F64): AABBd,
    (ShapeKind.AABB, Precision.I32): AABBi,
    (ShapeKind.SPHERE, Precision.F32): Spheref,
    (ShapeKind.SPHERE, Precision.F64): Sphered,
    (ShapeKind.PLANE, Precision.F32): Planef,
    (ShapeKind.PLANE, Precision.F64): Planed,
    (ShapeKind.RECTANGLE, Precision.F32): Rectanglef,
    (ShapeKind.RECTANGLE, Precision.F64): Rectangled,
    (ShapeKind.RECTANGLE, Precision.I32): Rectanglei,
    (ShapeKind.CIRCLE, Precision.F32): Circlef,
    (ShapeKind.CIRCLE, Precision.F64): Circled,
}


def shape_type(kind: ShapeKind, precision: Precision):
    """Return the struct type for a shape kind in the given precision.

    Raises:
        ValueError: If the kind does not exist in that precision, e.g. an
            integer sphere.
    """
    key = (ShapeKind(kind), Precision(precision))
    if key not in SHAPE_TYPES:
        raise ValueError(
            f"No {ShapeKind(kind).name} type with {Precision(precision).name} precision"
        )
    return SHAPE_TYPES[key]


def is_3d(kind: ShapeKind) -> bool:
    """Check whether a shape kind implements the 3D query set."""
    return ShapeKind(kind) in (ShapeKind.AABB, ShapeKind.SPHERE)
