"""Typer CLI for nesting parts onto sheet stock."""

import re
from pathlib import Path
from typing import Annotated

import typer

from panelnest.application.config import (
    ConfigError,
    NestingJobConfiguration,
    config_to_nesting_config,
    config_to_parts,
    load_config,
    merge_cli_overrides,
)
from panelnest.cli.commands import display_load_error, validate_command
from panelnest.domain.value_objects import GrainDirection, SortStrategy
from panelnest.infrastructure import CutDiagramRenderer, NestingResult, NestingService
from panelnest.infrastructure.exporters import ExporterRegistry, ExportManager

# Formats rendered by the CLI itself rather than by an exporter
TEXT_FORMATS = ("summary", "ascii")


def _slug(text: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", text).strip("_").lower()
    return slug or "material"


def _parse_formats(output_formats_str: str) -> list[str]:
    """Parse a comma-separated format list (or "all") and reject unknown names."""
    available = ExporterRegistry.available_formats()
    if output_formats_str.lower() == "all":
        return available

    formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)
    return formats


def _render(result: NestingResult, output_format: str) -> str:
    """Render a result in one of the single-output formats."""
    if output_format == "summary":
        return CutDiagramRenderer().render_waste_summary(result)
    if output_format == "ascii":
        return CutDiagramRenderer().render_all_ascii(result)
    return ExporterRegistry.get(output_format)().export_string(result)


def _run(
    config: NestingJobConfiguration,
    by_material: bool,
    best_strategy: bool,
) -> list[tuple[str, NestingResult]]:
    """Nest the job and return (material name, result) pairs.

    The name is empty for a single combined run.
    """
    service = NestingService(config_to_nesting_config(config))
    parts = config_to_parts(config)

    if by_material:
        results = service.nest_by_material(parts, best_strategy=best_strategy)
        return [(material.display_name, result) for material, result in results.items()]

    if best_strategy:
        return [("", service.nest_best(parts))]
    return [("", service.nest(parts))]


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    runs: list[tuple[str, NestingResult]],
) -> None:
    formats = _parse_formats(output_formats_str)
    manager = ExportManager(output_dir or Path("."))

    exported: dict[str, list[Path]] = {}
    for name, result in runs:
        run_project = f"{project_name}_{_slug(name)}" if name else project_name
        try:
            files = manager.export_all(formats, result, run_project)
        except (OSError, ValueError) as e:
            typer.echo(f"Export error: {e}", err=True)
            raise typer.Exit(code=1)
        for fmt, path in files.items():
            exported.setdefault(fmt, []).append(path)

    typer.echo("\nExported files:")
    for fmt, paths in exported.items():
        for path in paths:
            typer.echo(f"  {fmt.upper()}: {path}")


def _write_or_echo(
    runs: list[tuple[str, NestingResult]],
    output_format: str,
    output_file: Path | None,
) -> None:
    if output_file is None:
        for name, result in runs:
            if name:
                typer.echo(f"== {name} ==")
            typer.echo(_render(result, output_format))
            if name:
                typer.echo()
        return

    for name, result in runs:
        path = output_file
        if name:
            path = output_file.parent / f"{output_file.stem}_{_slug(name)}{output_file.suffix}"
        try:
            if output_format == "dxf":
                # Let ezdxf own the encoding of the drawing
                ExporterRegistry.get("dxf")().export(result, path)
            else:
                path.write_text(_render(result, output_format))
        except OSError as e:
            typer.echo(f"Error writing {path}: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Wrote {output_format} output to {path}")


app = typer.Typer(
    name="panelnest",
    help="Nest rectangular parts onto sheet stock with a skyline bottom-left packer.",
)

app.command(name="validate")(validate_command)


@app.command()
def nest(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format: summary, ascii, svg, csv, json, dxf",
        ),
    ] = "summary",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to this file"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats (svg,csv,json,dxf) or 'all'",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Directory for --output-formats files"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Base name for exported files"),
    ] = "nesting",
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", help="Override sheet width"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", help="Override sheet height"),
    ] = None,
    spacing: Annotated[
        float | None,
        typer.Option("--spacing", help="Override clearance between parts"),
    ] = None,
    edge_margin: Annotated[
        float | None,
        typer.Option("--edge-margin", help="Override clearance from sheet edges"),
    ] = None,
    sort_strategy: Annotated[
        SortStrategy | None,
        typer.Option("--sort", help="Part ordering: height, max_side, area"),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Keep every part in its designed orientation"),
    ] = False,
    grain: Annotated[
        GrainDirection | None,
        typer.Option("--grain", help="Sheet grain: none, horizontal, vertical"),
    ] = None,
    best_strategy: Annotated[
        bool,
        typer.Option("--best-strategy", help="Try every sort strategy, keep the best"),
    ] = False,
    by_material: Annotated[
        bool,
        typer.Option("--by-material", help="Nest each material on its own sheets"),
    ] = False,
) -> None:
    """Nest the parts of a job file onto sheets.

    Example:
        panelnest nest kitchen.json --format svg -o kitchen.svg
    """
    output_format = output_format.lower()
    valid_formats = list(TEXT_FORMATS) + ExporterRegistry.available_formats()
    if output_format not in valid_formats:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(valid_formats)}", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(job_file)
        config = merge_cli_overrides(
            config,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
            spacing=spacing,
            edge_margin=edge_margin,
            sort_strategy=sort_strategy,
            allow_rotation=False if no_rotation else None,
            grain_direction=grain,
        )
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    runs = _run(config, by_material=by_material, best_strategy=best_strategy)

    if output_formats:
        _handle_multi_format_export(output_formats, output_dir, project_name, runs)
    else:
        _write_or_echo(runs, output_format, output_file)

    unplaced = sum(len(result.unplaced) for _, result in runs)
    if unplaced:
        typer.echo(
            f"Warning: {unplaced} part(s) did not fit on a sheet and were not placed.",
            err=True,
        )


if __name__ == "__main__":
    app()
