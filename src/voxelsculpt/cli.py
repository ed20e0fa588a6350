"""voxelsculpt CLI for shape generation and export.

Provides command-line interface for rasterizing parametric shapes,
inspecting the resulting voxel models and exporting them as OBJ meshes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from typer.models import OptionInfo

from kernel.summary import VoxelSummary
from voxel_ir.schema import MAX_DIMENSION, MIN_DIMENSION, ShapeKind, ShapeSpec
from voxel_ir.serialize import dump_jsonl, to_json_string
from voxelsculpt.logging_setup import CONFIGS, configure_profile
from voxelsculpt.session import SculptSession, SessionError

logger = structlog.get_logger(__name__)

# Create Typer app
app = typer.Typer(
    name="voxelsculpt",
    help="Rasterize parametric shapes into voxels and export OBJ meshes",
    add_completion=False,
)

console = Console()


def _display_error(message: str, error: Optional[Exception] = None) -> None:
    """Display error message with styling."""
    error_text = Text(f"❌ {message}", style="bold red")
    if error:
        error_text.append(f"\n   {str(error)}", style="red")
    console.print(Panel(error_text, title="Error", border_style="red"))


def _display_success(message: str) -> None:
    """Display success message with styling."""
    success_text = Text(f"✅ {message}", style="bold green")
    console.print(Panel(success_text, title="Success", border_style="green"))


def _display_warning(message: str) -> None:
    """Display warning message with styling."""
    warning_text = Text(f"⚠️  {message}", style="bold yellow")
    console.print(Panel(warning_text, title="Warning", border_style="yellow"))


def _format_file_size(size: float) -> str:
    """Format file size in human-readable units."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def _parse_kind(value: str) -> ShapeKind:
    try:
        return ShapeKind.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _dimension_option(name: str, flag: str) -> OptionInfo:
    return typer.Option(
        5,
        f"--{name}",
        flag,
        min=MIN_DIMENSION,
        max=MAX_DIMENSION,
        help=f"{name.capitalize()} in voxels ({MIN_DIMENSION}-{MAX_DIMENSION})",
    )


@app.callback()
def main(
    log_profile: str = typer.Option(
        "testing",
        "--log-profile",
        envvar="VOXELSCULPT_LOG_PROFILE",
        help=f"Logging preset ({', '.join(CONFIGS)})",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Configure logging before any command runs."""
    try:
        configure_profile("development" if verbose else log_profile)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-profile") from e


@app.command()
def kinds() -> None:
    """List the supported shape kinds."""
    table = Table(title="Shape Kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Label", style="white")

    for kind in ShapeKind:
        table.add_row(kind.value, kind.label)

    console.print(table)


@app.command()
def generate(
    kind: str = typer.Argument(..., help="Shape kind (see 'kinds')"),
    width: int = _dimension_option("width", "-W"),
    height: int = _dimension_option("height", "-H"),
    depth: int = _dimension_option("depth", "-D"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output path for voxel file"),
    format: str = typer.Option("jsonl", "--format", help="Output format (jsonl, json)"),
) -> None:
    """Rasterize a shape and show its voxel summary."""
    spec = ShapeSpec(kind=_parse_kind(kind), width=width, height=height, depth=depth)

    try:
        session = SculptSession(spec)
    except SessionError as e:
        _display_error("Invalid shape specification", e)
        raise typer.Exit(1)

    _display_summary(session.summary())

    if session.last_error:
        _display_warning(session.last_error)

    if output is None:
        return

    output_path = Path(output)
    try:
        if format.lower() == "jsonl":
            dump_jsonl(session.model, output_path)
        elif format.lower() == "json":
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(to_json_string(session.model, pretty=True), encoding="utf-8")
        else:
            _display_error(f"Unsupported format: {format}")
            raise typer.Exit(1)
    except OSError as e:
        _display_error("Failed to write voxel file", e)
        raise typer.Exit(1)

    logger.info("Voxel file written", path=str(output_path), format=format.lower())
    _display_success(f"Voxels written to: {output_path}")


@app.command()
def export(
    kind: str = typer.Argument(..., help="Shape kind (see 'kinds')"),
    width: int = _dimension_option("width", "-W"),
    height: int = _dimension_option("height", "-H"),
    depth: int = _dimension_option("depth", "-D"),
) -> None:
    """Rasterize a shape and write it to exported_shape.obj in the current directory."""
    spec = ShapeSpec(kind=_parse_kind(kind), width=width, height=height, depth=depth)

    try:
        session = SculptSession(spec)
    except SessionError as e:
        _display_error("Invalid shape specification", e)
        raise typer.Exit(1)

    if session.last_error:
        _display_warning(session.last_error)

    console.print(f"🔄 Exporting {spec.kind.label} ({session.model.voxel_count} voxels)...")
    result = session.export()

    if not result["success"]:
        _display_error("Failed to export OBJ", Exception(result["error"]))
        raise typer.Exit(1)

    table = Table(title="Export Results")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Format", result["format"].upper())
    table.add_row("URI", result["uri"])
    table.add_row("MIME Type", result["mime_type"])
    table.add_row("Vertices", str(result["vertex_count"]))
    table.add_row("Faces", str(result["face_count"]))
    table.add_row("Size", _format_file_size(result["size_bytes"]))

    console.print(table)

    _display_success(f"OBJ file exported to: {result['path']}")


def _display_summary(summary: VoxelSummary) -> None:
    """Display voxel summary in formatted tables."""
    shape_table = Table(title="Shape")
    shape_table.add_column("Property", style="cyan")
    shape_table.add_column("Value", style="white")

    shape_table.add_row("Kind", summary.kind)
    shape_table.add_row("Dimensions", f"{summary.width} x {summary.height} x {summary.depth}")
    shape_table.add_row("Grid Cells", str(summary.grid_cells))
    shape_table.add_row("Voxels", str(summary.voxel_count))
    shape_table.add_row("Fill Ratio", f"{summary.fill_ratio:.1%}")

    if summary.bounding_box:
        bbox = summary.bounding_box
        bbox_str = (f"({bbox['min_x']}, {bbox['min_y']}, {bbox['min_z']}) → "
                    f"({bbox['max_x']}, {bbox['max_y']}, {bbox['max_z']})")
        shape_table.add_row("Occupied Box", bbox_str)

    shape_table.add_row("OBJ Vertices", str(summary.obj_vertices))
    shape_table.add_row("OBJ Faces", str(summary.obj_faces))

    console.print(shape_table)

    layer_table = Table(title="Layers")
    layer_table.add_column("y", style="cyan")
    layer_table.add_column("Voxels", style="yellow")

    for y, count in enumerate(summary.layer_counts):
        layer_table.add_row(str(y), str(count))

    console.print(layer_table)

    if summary.warnings:
        console.print("\n[bold yellow]Warnings:[/bold yellow]")
        for warning in summary.warnings:
            console.print(f"  ⚠️  {warning}")


if __name__ == "__main__":
    app()
