"""High-level shape set built on the shape store.

This module provides a Python-side API over ``src.primitives.scene.store``
that remembers what was added, round-trips through a plain configuration
object, and turns the per-shape query arrays into index lists.

The ShapeSet maintains:
- A ShapeInfo record for every stored shape, in store index order
- Configuration export/import (ShapeSetConfig, or plain dictionaries)
- Query helpers returning the indices of matching shapes

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.primitives.scene.manager import ShapeSet
    >>> shapes = ShapeSet()
    >>> box = shapes.add_aabb((0, 0, 0), (1, 1, 1), precision="i32")
    >>> ball = shapes.add_sphere((3, 0, 0), 0.5, precision="f64")
    >>> shapes.find_containing((0.5, 0.5, 0.5))
    [0]
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from src.primitives.core.types import Precision
from src.primitives.geometry.registry import ShapeKind
from src.primitives.kernel.slab import SegmentClass
from src.primitives.scene.store import (
    MAX_SHAPES,
    add_aabb,
    add_sphere,
    clear_shapes,
    get_shape_count,
    query_aabb,
    query_closest,
    query_plane,
    query_point,
    query_ray,
    query_segment,
    query_sphere,
)

logger = logging.getLogger(__name__)

_PRECISION_NAMES = {
    "i32": Precision.I32,
    "f32": Precision.F32,
    "f64": Precision.F64,
}


def parse_precision(value: Precision | str) -> Precision:
    """Convert a precision name ("i32", "f32", "f64") or tag to a Precision.

    Raises:
        ValueError: If the name is unknown.
    """
    if isinstance(value, str):
        name = value.lower()
        if name not in _PRECISION_NAMES:
            raise ValueError(f"Unknown precision: {value}")
        return _PRECISION_NAMES[name]
    return Precision(value)


def precision_name(precision: Precision) -> str:
    return Precision(precision).name.lower()


@dataclass
class ShapeInfo:
    """Information about a shape in the set.

    Attributes:
        shape_index: The global index in the shape store.
        kind: The kind of shape (AABB or SPHERE).
        precision: The coordinate precision the shape is stored in.
        params: The shape parameters as provided during creation.
    """

    shape_index: int
    kind: ShapeKind
    precision: Precision
    params: dict[str, Any]


@dataclass
class ShapeSetConfig:
    """Configuration for shape set serialization.

    Attributes:
        shapes: List of shape configurations. Each entry has a "type" key
            ("aabb" or "sphere"), a "precision" key and the shape parameters.
    """

    shapes: list[dict[str, Any]] = field(default_factory=list)


class ShapeSet:
    """Python-side manager for the shape store.

    The shape store is a process-wide singleton; creating a ShapeSet clears
    it, and only one ShapeSet should be in use at a time.

    Attributes:
        shapes: List of ShapeInfo for all shapes, indexed by store index.

    Example:
        >>> shapes = ShapeSet()
        >>> shapes.add_aabb((0, 0, 0), (2, 2, 2))
        0
        >>> shapes.add_sphere((5, 0, 0), 1.0, precision="f64")
        1
        >>> shapes.closest_hit((-1, 1, 1), (1, 0, 0))
        (0, 1.0)
    """

    def __init__(self) -> None:
        """Initialize an empty shape set."""
        self.shapes: list[ShapeInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_shapes()
        self.shapes.clear()

    def clear(self) -> None:
        """Remove all shapes from the set and the underlying store."""
        self._clear_all()
        logger.debug("Cleared shape set")

    def __len__(self) -> int:
        return len(self.shapes)

    # =========================================================================
    # Shape Management
    # =========================================================================

    def add_aabb(
        self,
        lo: tuple[float, float, float],
        hi: tuple[float, float, float],
        precision: Precision | str = Precision.F32,
    ) -> int:
        """Add an axis-aligned box.

        Args:
            lo: The minimum corner as (x, y, z).
            hi: The maximum corner as (x, y, z).
            precision: Precision tag or name ("i32", "f32", "f64").

        Returns:
            The index of the added box.

        Raises:
            RuntimeError: If the maximum number of shapes is exceeded.
            ValueError: If the precision or a corner is invalid.
        """
        precision = parse_precision(precision)
        shape_index = add_aabb(lo, hi, precision)

        info = ShapeInfo(
            shape_index=shape_index,
            kind=ShapeKind.AABB,
            precision=precision,
            params={"min": tuple(lo), "max": tuple(hi)},
        )
        self.shapes.append(info)
        return shape_index

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        precision: Precision | str = Precision.F32,
    ) -> int:
        """Add a sphere.

        Args:
            center: The center point as (x, y, z).
            radius: The radius of the sphere.
            precision: Precision tag or name ("f32" or "f64").

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of shapes is exceeded.
            ValueError: If the precision is unknown or integer, or if center
                or radius is invalid. Nothing is added in that case.
        """
        precision = parse_precision(precision)
        shape_index = add_sphere(center, radius, precision)

        info = ShapeInfo(
            shape_index=shape_index,
            kind=ShapeKind.SPHERE,
            precision=precision,
            params={"center": tuple(center), "radius": float(radius)},
        )
        self.shapes.append(info)
        return shape_index

    def get_shape_info(self, shape_index: int) -> ShapeInfo | None:
        """Get information about a shape by index.

        Returns:
            ShapeInfo for the shape, or None if not found.
        """
        if 0 <= shape_index < len(self.shapes):
            return self.shapes[shape_index]
        return None

    def get_shape_count(self) -> int:
        """Get the number of shapes in the underlying store."""
        return get_shape_count()

    @staticmethod
    def get_max_shapes() -> int:
        """Get the maximum number of shapes supported."""
        return MAX_SHAPES

    # =========================================================================
    # Queries
    # =========================================================================

    def find_containing(self, point: tuple[float, float, float]) -> list[int]:
        """Indices of the shapes that contain a point."""
        return [int(i) for i in query_point(point).nonzero()[0]]

    def find_intersecting_aabb(
        self, lo: tuple[float, float, float], hi: tuple[float, float, float]
    ) -> list[int]:
        """Indices of the shapes that intersect the closed box [lo, hi]."""
        return [int(i) for i in query_aabb(lo, hi).nonzero()[0]]

    def find_intersecting_sphere(self, center: tuple[float, float, float], radius: float) -> list[int]:
        return [int(i) for i in query_sphere(center, radius).nonzero()[0]]

    def find_intersecting_plane(self, a: float, b: float, c: float, d: float) -> list[int]:
        """Indices of the shapes the plane a*x + b*y + c*z + d = 0 passes through."""
        return [int(i) for i in query_plane(a, b, c, d).nonzero()[0]]

    def find_hit_by_ray(
        self, origin: tuple[float, float, float], direction: tuple[float, float, float]
    ) -> list[tuple[int, float, float]]:
        """Shapes hit by a ray, as (index, t_near, t_far) sorted by t_near."""
        hits, t_near, t_far = query_ray(origin, direction)
        result = [(int(i), float(t_near[i]), float(t_far[i])) for i in hits.nonzero()[0]]
        result.sort(key=lambda entry: entry[1])
        return result

    def find_crossed_by_segment(
        self, p0: tuple[float, float, float], p1: tuple[float, float, float]
    ) -> list[tuple[int, SegmentClass]]:
        """Shapes the segment touches, as (index, SegmentClass) pairs."""
        codes, _, _ = query_segment(p0, p1)
        return [
            (i, SegmentClass(int(code)))
            for i, code in enumerate(codes)
            if code != int(SegmentClass.OUTSIDE)
        ]

    def closest_hit(
        self, origin: tuple[float, float, float], direction: tuple[float, float, float]
    ) -> tuple[int, float] | None:
        """The first shape a ray reaches, as (index, t), or None on a miss."""
        indices, t = query_closest([origin], [direction])
        if indices[0] < 0:
            return None
        return int(indices[0]), float(t[0])

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> ShapeSetConfig:
        """Export the shape set to a configuration object."""
        config = ShapeSetConfig()
        for info in self.shapes:
            shape_config: dict[str, Any] = {
                "type": info.kind.name.lower(),
                "precision": precision_name(info.precision),
            }
            for key, value in info.params.items():
                shape_config[key] = list(value) if isinstance(value, tuple) else value
            config.shapes.append(shape_config)
        return config

    def from_config(self, config: ShapeSetConfig) -> None:
        """Load a shape set from a configuration object.

        Clears the current set and loads the configuration.

        Raises:
            ValueError: If the configuration contains an unknown shape type
                or precision, or invalid shape parameters.
        """
        self.clear()
        for shape_config in config.shapes:
            shape_type = shape_config.get("type", "").lower()
            precision = parse_precision(shape_config.get("precision", "f32"))
            if shape_type == "aabb":
                lo = shape_config.get("min", [0, 0, 0])
                hi = shape_config.get("max", [0, 0, 0])
                self.add_aabb(lo, hi, precision)
            elif shape_type == "sphere":
                center = shape_config.get("center", [0, 0, 0])
                radius = shape_config.get("radius", 1.0)
                self.add_sphere(center, radius, precision)
            else:
                raise ValueError(f"Unknown shape type: {shape_type}")
        logger.debug(f"Loaded {len(self.shapes)} shapes from config")

    def to_dict(self) -> dict[str, Any]:
        """Export the shape set to a dictionary (for JSON serialization)."""
        return {"shapes": self.to_config().shapes}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a shape set from a dictionary with a 'shapes' key."""
        self.from_config(ShapeSetConfig(shapes=data.get("shapes", [])))
