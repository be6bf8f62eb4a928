"""Geometry module for shape primitives and their capability contracts.

This module provides the primitive value types and the queries they support:

Components:
    shape: Shape3D and Shape2D capability mixins
    aabb: Axis-aligned boxes (AABBf, AABBd, AABBi)
    sphere: Spheres (Spheref, Sphered)
    plane: Planes in implicit form (Planef, Planed)
    rectangle: Axis-aligned rectangles (Rectanglef, Rectangled, Rectanglei)
    circle: Circles (Circlef, Circled)
    registry: (kind, precision) -> primitive type table

All primitives are Taichi dataclasses whose methods are Taichi functions
(@ti.func), so they are usable from any kernel. Computing operations follow
the destination pattern:
    result = shape.operation(other, dest)  # writes into dest and returns it
"""

from .aabb import AABBd, AABBf, AABBi
from .circle import Circled, Circlef
from .plane import Planed, Planef
from .rectangle import Rectangled, Rectanglef, Rectanglei
from .registry import SHAPE_TYPES, ShapeKind, is_3d, shape_type
from .shape import Shape2D, Shape3D
from .sphere import Sphered, Spheref

__all__ = [
    "Shape3D",
    "Shape2D",
    "AABBf",
    "AABBd",
    "AABBi",
    "Spheref",
    "Sphered",
    "Planef",
    "Planed",
    "Rectanglef",
    "Rectangled",
    "Rectanglei",
    "Circlef",
    "Circled",
    "ShapeKind",
    "SHAPE_TYPES",
    "shape_type",
    "is_3d",
]
