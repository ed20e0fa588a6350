"""Deterministic serialization for voxel models.

This module provides JSON serialization with stable key ordering so that
the same shape specification always produces byte-identical output.
Voxel order is part of the model and is never re-sorted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import orjson

from .schema import ShapeKind, ShapeSpec, VoxelModel

# Serialized format versioning
SCHEMA_VERSION = "0.1.0"


def _sort_dict_recursive(obj: Any) -> Any:
    """Recursively sort dictionaries for deterministic output."""
    if isinstance(obj, dict):
        return {k: _sort_dict_recursive(v) for k, v in sorted(obj.items())}
    elif isinstance(obj, list):
        return [_sort_dict_recursive(item) for item in obj]
    else:
        return obj


def to_json_dict(model: VoxelModel) -> Dict[str, Any]:
    """Convert a voxel model to a JSON-serializable dictionary.

    Args:
        model: The model to serialize

    Returns:
        Dictionary representation ready for JSON serialization
    """
    spec = model.spec
    result = {
        "schema_version": SCHEMA_VERSION,
        "shape": {
            "kind": spec.kind.value,
            "width": spec.width,
            "height": spec.height,
            "depth": spec.depth,
        },
        "voxel_count": model.voxel_count,
        "voxels": [list(voxel) for voxel in model.voxels],
    }
    return _sort_dict_recursive(result)


def to_json_string(model: VoxelModel, pretty: bool = False) -> str:
    """Convert a voxel model to a JSON string.

    Args:
        model: The model to serialize
        pretty: If True, format JSON with indentation

    Returns:
        JSON string representation
    """
    data = to_json_dict(model)

    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    else:
        # Use orjson for faster serialization
        return orjson.dumps(data).decode('utf-8')


def dump_jsonl(model: VoxelModel, path: Union[str, Path]) -> None:
    """Write a voxel model to a JSONL file (one JSON object per line).

    Args:
        model: The model to serialize
        path: Output file path
    """
    batch_dump_jsonl([model], path)


def batch_dump_jsonl(models: List[VoxelModel], path: Union[str, Path]) -> None:
    """Write several voxel models to a JSONL file.

    Args:
        models: Models to serialize, one per line
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'wb') as f:
        for model in models:
            f.write(orjson.dumps(to_json_dict(model)))
            f.write(b'\n')


def load_jsonl(path: Union[str, Path]) -> Iterator[VoxelModel]:
    """Load voxel models from a JSONL file.

    Args:
        path: Input file path

    Yields:
        VoxelModel objects loaded from the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If JSON parsing fails or the record is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"JSONL file not found: {path}")

    with open(path, 'rb') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                data = orjson.loads(line)
                yield _dict_to_model(data)
            except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Failed to parse line {line_num}: {e}") from e


def _dict_to_model(data: Dict[str, Any]) -> VoxelModel:
    """Convert dictionary back to a VoxelModel."""
    shape = data["shape"]
    spec = ShapeSpec(
        kind=ShapeKind(shape["kind"]),
        width=shape["width"],
        height=shape["height"],
        depth=shape["depth"],
    )
    voxels = []
    for entry in data.get("voxels", []):
        if len(entry) != 3:
            raise ValueError(f"Voxel must have 3 coordinates, got {entry!r}")
        voxels.append((int(entry[0]), int(entry[1]), int(entry[2])))

    return VoxelModel(spec=spec, voxels=tuple(voxels))
