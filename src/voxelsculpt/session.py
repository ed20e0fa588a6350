"""Sculpting session state and operations.

The session owns the current shape specification and its voxel model.
Front ends pass the session around explicitly; there is no module level
instance.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from kernel.export import ExportError, export_obj
from kernel.rasterize import build_model
from kernel.summary import VoxelSummary, summarize_model
from voxel_ir.schema import (
    DEFAULT_SPEC,
    MAX_DIMENSION,
    MIN_DIMENSION,
    ShapeSpec,
    VoxelModel,
)

logger = structlog.get_logger(__name__)


class SessionError(Exception):
    """Raised when session operations fail."""
    pass


class SculptSession:
    """Holds the active shape and the voxel model generated from it."""

    def __init__(self, spec: ShapeSpec = DEFAULT_SPEC, enforce_limits: bool = True):
        """Initialize session and generate the initial model.

        Args:
            spec: Initial shape specification
            enforce_limits: Reject dimensions outside the supported range
        """
        self._enforce_limits = enforce_limits
        self._spec = spec
        self._model = VoxelModel(spec=spec)
        self._generation = 0
        self._export_count = 0
        self.last_error: Optional[str] = None

        self.regenerate(spec)
        logger.info("Sculpt session initialized", kind=spec.kind.value, dimensions=spec.dimensions)

    @property
    def spec(self) -> ShapeSpec:
        return self._spec

    @property
    def model(self) -> VoxelModel:
        """Current voxel model; replaced wholesale on each regeneration."""
        return self._model

    @property
    def generation(self) -> int:
        """Number of models generated so far."""
        return self._generation

    def regenerate(self, spec: Optional[ShapeSpec] = None) -> VoxelModel:
        """Rasterize a shape and make it the current model.

        Args:
            spec: New specification; reuses the current one when omitted

        Returns:
            The new VoxelModel

        Raises:
            SessionError: If limits are enforced and a dimension is out of range
        """
        spec = spec or self._spec

        if self._enforce_limits and not spec.within_limits():
            message = (
                f"Dimensions must be between {MIN_DIMENSION} and {MAX_DIMENSION}, "
                f"got {spec.width} x {spec.height} x {spec.depth}"
            )
            self.last_error = message
            logger.error("Rejected shape specification", kind=spec.kind.value, dimensions=spec.dimensions)
            raise SessionError(message)

        model = build_model(spec)

        # Single assignment so readers never see a half-updated model
        self._spec, self._model = spec, model
        self._generation += 1

        if model.is_empty:
            self.last_error = f"{spec.kind.label} produced no voxels at these dimensions"
        else:
            self.last_error = None

        logger.info(
            "Model regenerated",
            kind=spec.kind.value,
            voxel_count=model.voxel_count,
            generation=self._generation,
        )

        return model

    def summary(self) -> VoxelSummary:
        """Summarize the current model."""
        return summarize_model(self._model)

    def export(self) -> Dict[str, Any]:
        """Export the current model as OBJ.

        Returns:
            Export result with ``success`` set; failures carry ``error``
            instead of raising
        """
        model = self._model
        try:
            result = export_obj(model)
        except ExportError as e:
            self.last_error = str(e)
            logger.error("Failed to export model", kind=model.spec.kind.value, error=str(e))
            return {
                "success": False,
                "error": str(e),
                "format": "obj",
                "uri": None,
            }

        self._export_count += 1
        self.last_error = None
        return {"success": True, **result}

    def get_session_stats(self) -> Dict[str, Any]:
        """Get session statistics."""
        spec = self._spec
        return {
            "kind": spec.kind.value,
            "dimensions": list(spec.dimensions),
            "voxel_count": self._model.voxel_count,
            "generation": self._generation,
            "exports": self._export_count,
            "enforce_limits": self._enforce_limits,
            "last_error": self.last_error,
        }
