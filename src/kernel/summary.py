"""Voxel model analysis and summary generation.

This module computes occupancy statistics for a generated voxel model
and collects warnings worth surfacing to the user.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import structlog

from voxel_ir.schema import MAX_DIMENSION, MIN_DIMENSION, VoxelModel

from .export import FACES_PER_VOXEL, VERTICES_PER_VOXEL

logger = structlog.get_logger(__name__)


@dataclass
class VoxelSummary:
    """Summary of occupancy and extent for a voxel model."""

    kind: str
    width: int
    height: int
    depth: int

    # Occupancy
    grid_cells: int = 0
    voxel_count: int = 0
    fill_ratio: float = 0.0

    # Occupied extent, None when the model is empty
    bounding_box: dict[str, int] | None = None

    # Voxels per y layer, index 0 is the bottom layer
    layer_counts: list[int] = field(default_factory=list)

    # Export size if written as OBJ
    obj_vertices: int = 0
    obj_faces: int = 0

    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary form for display and JSON output."""
        return {
            "kind": self.kind,
            "dimensions": {"width": self.width, "height": self.height, "depth": self.depth},
            "grid_cells": self.grid_cells,
            "voxel_count": self.voxel_count,
            "fill_ratio": self.fill_ratio,
            "bounding_box": self.bounding_box,
            "layer_counts": list(self.layer_counts),
            "obj": {"vertices": self.obj_vertices, "faces": self.obj_faces},
            "warnings": list(self.warnings),
        }


def _occupied_bounds(model: VoxelModel) -> dict[str, int] | None:
    if model.is_empty:
        return None
    xs, ys, zs = zip(*model.voxels)
    return {
        "min_x": min(xs), "min_y": min(ys), "min_z": min(zs),
        "max_x": max(xs), "max_y": max(ys), "max_z": max(zs),
    }


def summarize_model(model: VoxelModel) -> VoxelSummary:
    """Generate an occupancy summary for a voxel model.

    Args:
        model: VoxelModel to analyze

    Returns:
        VoxelSummary instance
    """
    spec = model.spec
    grid_cells = spec.grid_cells
    per_layer = Counter(y for _, y, _ in model.voxels)

    summary = VoxelSummary(
        kind=spec.kind.value,
        width=spec.width,
        height=spec.height,
        depth=spec.depth,
        grid_cells=grid_cells,
        voxel_count=model.voxel_count,
        fill_ratio=model.voxel_count / grid_cells if grid_cells else 0.0,
        bounding_box=_occupied_bounds(model),
        layer_counts=[per_layer.get(y, 0) for y in range(spec.height)],
        obj_vertices=model.voxel_count * VERTICES_PER_VOXEL,
        obj_faces=model.voxel_count * FACES_PER_VOXEL,
    )

    if model.is_empty:
        summary.warnings.append("Shape produced no voxels")

    if not spec.within_limits():
        summary.warnings.append(
            f"Dimensions {spec.width} x {spec.height} x {spec.depth} are outside "
            f"the supported range {MIN_DIMENSION}-{MAX_DIMENSION}"
        )

    if model.out_of_bounds():
        summary.warnings.append("Model contains voxels outside its bounding grid")

    if model.duplicates():
        summary.warnings.append("Model contains duplicate voxels")

    logger.debug(
        "Voxel summary generated",
        kind=summary.kind,
        voxel_count=summary.voxel_count,
        fill_ratio=round(summary.fill_ratio, 4),
        warnings=len(summary.warnings),
    )

    return summary
