"""Shape specification and voxel model definitions.

This module defines the parametric shape description handed to the
rasterizer and the occupancy record it produces.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

# Dimension range accepted by interactive front ends
MIN_DIMENSION = 1
MAX_DIMENSION = 32

Voxel = Tuple[int, int, int]


class ShapeKind(Enum):
    """Supported parametric solids."""

    CUBE = "Cube"
    SPHERE = "Sphere"
    CYLINDER = "Cylinder"
    CONE = "Cone"
    SQUARE_PYRAMID = "SquarePyramid"
    CIRCLE = "Circle"

    @property
    def label(self) -> str:
        """Human readable name."""
        if self is ShapeKind.SQUARE_PYRAMID:
            return "Square Pyramid"
        return self.value

    @classmethod
    def parse(cls, text: str) -> ShapeKind:
        """Resolve a kind from its value, member name or label.

        Args:
            text: User supplied shape name (case-insensitive)

        Returns:
            Matching ShapeKind

        Raises:
            ValueError: If no kind matches
        """
        wanted = text.strip().lower().replace("-", "_")
        for kind in cls:
            candidates = {
                kind.value.lower(),
                kind.name.lower(),
                kind.label.lower(),
                kind.label.lower().replace(" ", "_"),
            }
            if wanted in candidates:
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown shape kind: {text!r}. Use one of: {valid}")


@dataclass(frozen=True)
class ShapeSpec:
    """Shape kind plus bounding-box dimensions in voxels."""

    kind: ShapeKind
    width: int
    height: int
    depth: int

    def __post_init__(self) -> None:
        """Validate dimensions after creation."""
        if not isinstance(self.kind, ShapeKind):
            raise ValueError(f"Invalid shape kind: {self.kind!r}")
        for name in ("width", "height", "depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} cannot be negative, got {value}")

    @property
    def dimensions(self) -> tuple[int, int, int]:
        return (self.width, self.height, self.depth)

    @property
    def grid_cells(self) -> int:
        """Number of cells in the bounding grid."""
        return self.width * self.height * self.depth

    def within_limits(self) -> bool:
        """Check every dimension lies in [MIN_DIMENSION, MAX_DIMENSION]."""
        return all(MIN_DIMENSION <= value <= MAX_DIMENSION for value in self.dimensions)


DEFAULT_SPEC = ShapeSpec(kind=ShapeKind.CUBE, width=5, height=5, depth=5)


@dataclass(frozen=True)
class VoxelModel:
    """Occupied grid cells for one shape specification.

    Instances are never mutated; a new model replaces the old one on
    every regeneration.
    """

    spec: ShapeSpec
    voxels: Tuple[Voxel, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of triples but store an immutable tuple
        object.__setattr__(self, "voxels", tuple(tuple(v) for v in self.voxels))

    @property
    def voxel_count(self) -> int:
        return len(self.voxels)

    @property
    def is_empty(self) -> bool:
        return not self.voxels

    def out_of_bounds(self) -> List[Voxel]:
        """List voxels lying outside the spec's bounding grid."""
        width, height, depth = self.spec.dimensions
        return [
            (x, y, z) for x, y, z in self.voxels
            if not (0 <= x < width and 0 <= y < height and 0 <= z < depth)
        ]

    def duplicates(self) -> List[Voxel]:
        """List voxels that appear more than once."""
        return [voxel for voxel, count in Counter(self.voxels).items() if count > 1]
