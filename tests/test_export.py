"""Tests for OBJ mesh export."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from kernel.export import (
    EXPORT_FILENAME,
    OBJ_BANNER,
    ExportError,
    centering_offset,
    export_obj,
    iter_obj_lines,
    render_obj,
)
from kernel.rasterize import build_model
from voxel_ir.schema import ShapeKind, ShapeSpec, VoxelModel


class TestObjLines:
    """Test cases for OBJ line generation."""

    def test_header(self, pyramid_spec):
        """Test the three comment lines."""
        lines = list(iter_obj_lines(build_model(pyramid_spec)))
        assert lines[:3] == [
            OBJ_BANNER,
            "# Shape: SquarePyramid",
            "# Dimensions: 5 x 5 x 5",
        ]

    def test_unit_cube(self, unit_cube_model):
        """Test the complete document for a single voxel."""
        assert centering_offset(unit_cube_model) == (0.5, 0.5, 0.5)
        assert list(iter_obj_lines(unit_cube_model))[3:] == [
            "v -0.5 -0.5 -0.5",
            "v 0.5 -0.5 -0.5",
            "v 0.5 -0.5 0.5",
            "v -0.5 -0.5 0.5",
            "v -0.5 0.5 -0.5",
            "v 0.5 0.5 -0.5",
            "v 0.5 0.5 0.5",
            "v -0.5 0.5 0.5",
            "f 1 2 3",
            "f 1 3 4",
            "f 5 8 7",
            "f 5 7 6",
            "f 1 5 6",
            "f 1 6 2",
            "f 4 3 7",
            "f 4 7 8",
            "f 1 4 8",
            "f 1 8 5",
            "f 2 6 7",
            "f 2 7 3",
        ]

    def test_integral_coordinates_have_no_decimals(self):
        """Test whole-number coordinates print without a fraction."""
        model = VoxelModel(ShapeSpec(ShapeKind.CUBE, 2, 2, 2), voxels=[(1, 1, 1)])
        vertices = [line for line in iter_obj_lines(model) if line.startswith("v ")]
        assert vertices[0] == "v 0 0 0"
        assert vertices[6] == "v 1 1 1"

    def test_large_coordinates_keep_full_precision(self):
        """Test coordinates needing more than six digits are not rounded."""
        model = VoxelModel(ShapeSpec(ShapeKind.CUBE, 400001, 1, 1), voxels=[(400000, 0, 0)])
        vertices = [line for line in iter_obj_lines(model) if line.startswith("v ")]
        assert vertices[0] == "v 199999.5 -0.5 -0.5"
        assert vertices[1] == "v 200000.5 -0.5 -0.5"

    def test_offset_uses_whole_model(self):
        """Test the centering offset comes from the spec, not the voxel."""
        model = VoxelModel(ShapeSpec(ShapeKind.CUBE, 4, 2, 6), voxels=[(3, 0, 5)])
        vertices = [line for line in iter_obj_lines(model) if line.startswith("v ")]
        assert vertices[0] == "v 1 -1 2"

    def test_interleaved_per_voxel(self, sample_model):
        """Test 8 vertices then 12 faces for each voxel in order."""
        lines = list(iter_obj_lines(sample_model))
        body = lines[3:]
        assert len(lines) == 3 + 20 * sample_model.voxel_count

        for index in range(sample_model.voxel_count):
            block = body[index * 20:(index + 1) * 20]
            assert all(line.startswith("v ") for line in block[:8])
            assert all(line.startswith("f ") for line in block[8:])

    def test_faces_reference_own_vertices(self):
        """Test face indices stay within each voxel's vertex range."""
        model = build_model(ShapeSpec(ShapeKind.SPHERE, 3, 3, 3))
        faces = [line for line in iter_obj_lines(model) if line.startswith("f ")]
        assert len(faces) == 12 * model.voxel_count

        for index in range(model.voxel_count):
            base = index * 8
            for line in faces[index * 12:(index + 1) * 12]:
                refs = [int(token) for token in line.split()[1:]]
                assert all(base + 1 <= ref <= base + 8 for ref in refs)

    def test_vertices_follow_voxel_order(self, sample_model):
        """Test the exporter does not reorder voxels."""
        lines = list(iter_obj_lines(sample_model))
        first_vertices = [lines[3 + index * 20] for index in range(sample_model.voxel_count)]
        assert first_vertices == [
            "v -1 -1 -0.5",
            "v -1 0 -0.5",
            "v 0 -1 -0.5",
            "v 0 0 -0.5",
        ]

    def test_no_vertex_sharing(self):
        """Test adjacent voxels emit coincident vertices independently."""
        model = build_model(ShapeSpec(ShapeKind.CUBE, 2, 1, 1))
        vertices = [line for line in iter_obj_lines(model) if line.startswith("v ")]
        assert len(vertices) == 16
        assert vertices[1] == vertices[8] == "v 0 -0.5 -0.5"

    def test_empty_model(self):
        """Test an empty model still writes the header."""
        model = build_model(ShapeSpec(ShapeKind.CONE, 4, 0, 4))
        assert render_obj(model) == (
            f"{OBJ_BANNER}\n# Shape: Cone\n# Dimensions: 4 x 0 x 4\n"
        )


class TestExportObj:
    """Test cases for writing OBJ files."""

    def test_writes_fixed_file(self, workdir: Path, unit_cube_model):
        """Test export writes the fixed file name in the working directory."""
        result = export_obj(unit_cube_model)

        output = workdir / EXPORT_FILENAME
        assert output.exists()
        assert output.read_text(encoding="ascii") == render_obj(unit_cube_model)
        assert result["format"] == "obj"
        assert Path(result["path"]).resolve() == output.resolve()
        assert result["vertex_count"] == 8
        assert result["face_count"] == 12
        assert result["size_bytes"] == output.stat().st_size
        assert result["uri"].startswith("file://")

    def test_overwrites_previous_export(self, workdir: Path, unit_cube_model):
        """Test a later export replaces the earlier file."""
        (workdir / EXPORT_FILENAME).write_text("stale content\n" * 1000)

        export_obj(unit_cube_model)

        content = (workdir / EXPORT_FILENAME).read_text(encoding="ascii")
        assert "stale" not in content
        assert content.count("\n") == 23

    def test_write_failure_raises_export_error(self, workdir: Path, unit_cube_model):
        """Test I/O failures are wrapped in ExportError."""
        (workdir / EXPORT_FILENAME).mkdir()

        with capture_logs() as logs:
            with pytest.raises(ExportError, match="Failed to write") as excinfo:
                export_obj(unit_cube_model)

        assert isinstance(excinfo.value.__cause__, OSError)
        assert any(entry["event"] == "Export failed" for entry in logs)
