"""Pytest configuration and shared fixtures.

Provides common test fixtures and configuration for the voxelsculpt test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from kernel.rasterize import build_model
from voxel_ir.schema import ShapeKind, ShapeSpec, VoxelModel


def _configure_test_logging() -> None:
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.testing.LogCapture(),
        ],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Configure test logging
_configure_test_logging()


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore test logging after commands that reconfigure structlog."""
    yield
    _configure_test_logging()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def unit_cube_model() -> VoxelModel:
    """Provide the single-voxel cube model."""
    return build_model(ShapeSpec(ShapeKind.CUBE, 1, 1, 1))


@pytest.fixture
def pyramid_spec() -> ShapeSpec:
    """Provide a 5x5x5 square pyramid specification."""
    return ShapeSpec(ShapeKind.SQUARE_PYRAMID, 5, 5, 5)


@pytest.fixture
def sample_model() -> VoxelModel:
    """Provide a small hand-built model with a known voxel order."""
    spec = ShapeSpec(ShapeKind.CYLINDER, 2, 2, 1)
    return VoxelModel(spec=spec, voxels=[(0, 0, 0), (0, 1, 0), (1, 0, 0), (1, 1, 0)])
