"""Kernel package for voxel shape processing.

This package provides shape rasterization onto a voxel grid, occupancy
summaries and OBJ mesh export.
"""

from .rasterize import rasterize, build_model
from .summary import summarize_model, VoxelSummary
from .export import export_obj, render_obj, ExportError, EXPORT_FILENAME

__version__ = "0.1.0"
__all__ = [
    "rasterize", "build_model",
    "summarize_model", "VoxelSummary",
    "export_obj", "render_obj", "ExportError", "EXPORT_FILENAME",
]
