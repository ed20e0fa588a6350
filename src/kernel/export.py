"""Wavefront OBJ export for voxel models.

Each voxel becomes an independent unit cube of 8 vertices and 12
triangles. Vertices are never shared between voxels, so the output grows
linearly with the voxel count and needs no spatial lookup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

import structlog

from voxel_ir.schema import VoxelModel

logger = structlog.get_logger(__name__)

EXPORT_FILENAME = "exported_shape.obj"
OBJ_BANNER = "# 3D Voxel Sculptor Export"

VERTICES_PER_VOXEL = 8
FACES_PER_VOXEL = 12

# Unit cube corners: bottom face counter-clockwise from the origin corner,
# then the matching top face corners
CUBE_CORNERS: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1),
    (0, 1, 0), (1, 1, 0), (1, 1, 1), (0, 1, 1),
)

# Triangles as 0-based corner indices, two per cube face
CUBE_TRIANGLES: Tuple[Tuple[int, int, int], ...] = (
    # Bottom
    (0, 1, 2), (0, 2, 3),
    # Top
    (4, 7, 6), (4, 6, 5),
    # Front
    (0, 4, 5), (0, 5, 1),
    # Back
    (3, 2, 6), (3, 6, 7),
    # Left
    (0, 3, 7), (0, 7, 4),
    # Right
    (1, 5, 6), (1, 6, 2),
)


class ExportError(Exception):
    """Raised when export operations fail."""
    pass


def _format_coord(value: float) -> str:
    """Shortest round-tripping decimal form: 1.0 -> '1', -0.5 -> '-0.5'."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


def centering_offset(model: VoxelModel) -> Tuple[float, float, float]:
    """Offset that moves the bounding box center to the origin."""
    spec = model.spec
    return (spec.width / 2, spec.height / 2, spec.depth / 2)


def iter_obj_lines(model: VoxelModel) -> Iterator[str]:
    """Yield OBJ lines for a voxel model, without trailing newlines.

    Args:
        model: VoxelModel to encode

    Yields:
        Header comments, then per voxel 8 ``v`` lines and 12 ``f`` lines
    """
    spec = model.spec
    yield OBJ_BANNER
    yield f"# Shape: {spec.kind.value}"
    yield f"# Dimensions: {spec.width} x {spec.height} x {spec.depth}"

    offset_x, offset_y, offset_z = centering_offset(model)
    base = 1

    for x, y, z in model.voxels:
        x_adj = x - offset_x
        y_adj = y - offset_y
        z_adj = z - offset_z

        for cx, cy, cz in CUBE_CORNERS:
            yield (
                f"v {_format_coord(x_adj + cx)} "
                f"{_format_coord(y_adj + cy)} "
                f"{_format_coord(z_adj + cz)}"
            )

        for a, b, c in CUBE_TRIANGLES:
            yield f"f {base + a} {base + b} {base + c}"

        base += VERTICES_PER_VOXEL


def render_obj(model: VoxelModel) -> str:
    """Render the complete OBJ document as a string."""
    return "".join(f"{line}\n" for line in iter_obj_lines(model))


def export_obj(model: VoxelModel) -> Dict[str, Any]:
    """Write a voxel model to ``exported_shape.obj`` in the working directory.

    Any existing file with that name is overwritten. On failure the
    partially written file is left in place.

    Args:
        model: VoxelModel to export

    Returns:
        Dictionary containing export results

    Raises:
        ExportError: If the file cannot be written
    """
    output_path = Path.cwd() / EXPORT_FILENAME
    spec = model.spec

    logger.info(
        "Exporting voxel model",
        kind=spec.kind.value,
        voxel_count=model.voxel_count,
        path=str(output_path),
    )

    try:
        with open(output_path, "w", encoding="ascii", newline="\n") as f:
            for line in iter_obj_lines(model):
                f.write(line)
                f.write("\n")
        size_bytes = output_path.stat().st_size
    except OSError as e:
        logger.error("Export failed", path=str(output_path), error=str(e))
        raise ExportError(f"Failed to write {output_path}: {e}") from e

    result = {
        "format": "obj",
        "uri": f"file://{output_path.resolve()}",
        "path": str(output_path),
        "size_bytes": size_bytes,
        "vertex_count": model.voxel_count * VERTICES_PER_VOXEL,
        "face_count": model.voxel_count * FACES_PER_VOXEL,
        "mime_type": "model/obj",
    }

    logger.info("OBJ export completed", path=str(output_path), size_bytes=size_bytes)

    return result
