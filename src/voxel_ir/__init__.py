"""Voxel intermediate representation package.

This package provides the shape specification, the voxel occupancy model
and deterministic serialization for generated shapes.
"""

from .schema import ShapeKind, ShapeSpec, Voxel, VoxelModel, DEFAULT_SPEC
from .serialize import to_json_dict, dump_jsonl, load_jsonl

__version__ = "0.1.0"
__all__ = [
    "ShapeKind", "ShapeSpec", "Voxel", "VoxelModel", "DEFAULT_SPEC",
    "to_json_dict", "dump_jsonl", "load_jsonl",
]
