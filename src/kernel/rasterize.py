"""Shape rasterization onto an integer voxel grid.

Every shape is sampled at the lower corner of each cell (the integer grid
index) and the grid is walked with x outermost, then y, then z. The
resulting order is part of the model and is consumed unchanged by the
exporter. Inclusion tests are evaluated in exact rational arithmetic so
cells lying exactly on a boundary are always kept.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Iterator, List, Tuple, assert_never

import structlog

from voxel_ir.schema import ShapeKind, ShapeSpec, Voxel, VoxelModel

logger = structlog.get_logger(__name__)


def iter_grid(width: int, height: int, depth: int) -> Iterator[Voxel]:
    """Yield every grid cell with x varying slowest and z fastest."""
    for x in range(width):
        for y in range(height):
            for z in range(depth):
                yield (x, y, z)


def _normalized(coord: int, extent: int) -> Fraction:
    """Exact ``(coord - center) / radius`` for an axis of ``extent`` cells.

    With center ``(extent - 1) / 2`` and radius ``extent / 2`` this is
    ``(2 * coord - (extent - 1)) / extent``; a zero radius maps to 0.
    """
    if extent == 0:
        return Fraction(0)
    return Fraction(2 * coord - (extent - 1), extent)


def _cube(spec: ShapeSpec) -> List[Voxel]:
    return list(iter_grid(spec.width, spec.height, spec.depth))


def _sphere(spec: ShapeSpec) -> List[Voxel]:
    voxels = []
    for x, y, z in iter_grid(spec.width, spec.height, spec.depth):
        dx = _normalized(x, spec.width)
        dy = _normalized(y, spec.height)
        dz = _normalized(z, spec.depth)
        if dx * dx + dy * dy + dz * dz <= 1:
            voxels.append((x, y, z))
    return voxels


def _extruded_ellipse(spec: ShapeSpec, layers: int) -> List[Voxel]:
    """Ellipse in x/z repeated for the first ``layers`` rows of y."""
    voxels = []
    for x, y, z in iter_grid(spec.width, layers, spec.depth):
        dx = _normalized(x, spec.width)
        dz = _normalized(z, spec.depth)
        if dx * dx + dz * dz <= 1:
            voxels.append((x, y, z))
    return voxels


def _circle(spec: ShapeSpec) -> List[Voxel]:
    return _extruded_ellipse(spec, min(1, spec.height))


def _cylinder(spec: ShapeSpec) -> List[Voxel]:
    return _extruded_ellipse(spec, spec.height)


def _cone(spec: ShapeSpec) -> List[Voxel]:
    if spec.height == 0:
        return []

    voxels = []
    for x, y, z in iter_grid(spec.width, spec.height, spec.depth):
        dx = _normalized(x, spec.width)
        dz = _normalized(z, spec.depth)
        height_factor = Fraction(spec.height - y, spec.height)
        if dx * dx + dz * dz <= height_factor * height_factor:
            voxels.append((x, y, z))
    return voxels


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _square_pyramid(spec: ShapeSpec) -> List[Voxel]:
    if spec.height == 0:
        return []
    center_x = spec.width // 2
    center_z = spec.depth // 2

    voxels = []
    for x, y, z in iter_grid(spec.width, spec.height, spec.depth):
        # ceil(extent * (1 - y/height) / 2) in exact integer arithmetic
        remaining = spec.height - y
        width_bound = _ceil_div(spec.width * remaining, 2 * spec.height)
        depth_bound = _ceil_div(spec.depth * remaining, 2 * spec.height)

        in_x = max(center_x - width_bound, 0) <= x < center_x + width_bound
        in_z = max(center_z - depth_bound, 0) <= z < center_z + depth_bound
        if in_x and in_z:
            voxels.append((x, y, z))
    return voxels


def rasterize(spec: ShapeSpec) -> Tuple[Voxel, ...]:
    """Enumerate the occupied cells of a shape.

    Args:
        spec: Shape kind and bounding-box dimensions

    Returns:
        Occupied (x, y, z) cells in traversal order; empty when any
        dimension is zero or the shape excludes every cell
    """
    kind = spec.kind
    match kind:
        case ShapeKind.CUBE:
            voxels = _cube(spec)
        case ShapeKind.SPHERE:
            voxels = _sphere(spec)
        case ShapeKind.CYLINDER:
            voxels = _cylinder(spec)
        case ShapeKind.CONE:
            voxels = _cone(spec)
        case ShapeKind.SQUARE_PYRAMID:
            voxels = _square_pyramid(spec)
        case ShapeKind.CIRCLE:
            voxels = _circle(spec)
        case _:
            assert_never(kind)

    return tuple(voxels)


def build_model(spec: ShapeSpec) -> VoxelModel:
    """Rasterize a shape and wrap the result in a new VoxelModel.

    Args:
        spec: Shape kind and bounding-box dimensions

    Returns:
        Freshly built VoxelModel
    """
    voxels = rasterize(spec)
    model = VoxelModel(spec=spec, voxels=voxels)

    logger.debug(
        "Shape rasterized",
        kind=spec.kind.value,
        width=spec.width,
        height=spec.height,
        depth=spec.depth,
        voxel_count=model.voxel_count,
    )

    if model.is_empty and spec.grid_cells > 0:
        logger.warning("Shape produced no voxels", kind=spec.kind.value, dimensions=spec.dimensions)

    return model
