"""Geometric primitives and intersection tests on Taichi.

This package provides GPU-ready geometric value types and the spatial queries
between them, with support for:
- Axis-aligned boxes, spheres, planes, rays and line segments in 3D
- Rectangles and circles in 2D
- Single, double and (for boxes and rectangles) integer precision
- Containment, intersection and distance tests across precisions

Subpackages:
    core: Vector types, precision tags, rays and line segments
    kernel: Stateless intersection routines over raw coordinates
    geometry: Primitive dataclasses and their capability contracts
    scene: A mixed-precision shape store with batch queries
"""

__version__ = "0.1.0"
