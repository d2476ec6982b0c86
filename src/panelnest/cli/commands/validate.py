"""The ``validate`` command: check a job file without nesting it.

Exit codes follow ValidationResult: 0 clean, 1 errors, 2 warnings only.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelnest.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a nesting job file.

    Reports JSON syntax errors, schema violations (unknown keys, bad values,
    duplicate part ids), clearances that leave no usable sheet area, and
    parts that can never be placed.

    Example:
        panelnest validate kitchen.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        job = load_config(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(job)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _echo_value(value: object) -> None:
    # Whole objects and arrays are too noisy to echo back
    if value is not None and not isinstance(value, (dict, list)):
        typer.echo(f"    Value: {value!r}", err=True)


def display_load_error(error: ConfigError) -> None:
    """Report a ConfigError on stderr, shaped by its error type."""
    typer.echo("Errors:", err=True)

    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"    Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                f"{detail.get('message', 'Unknown error')}",
                err=True,
            )
    elif error.error_type == "validation":
        for detail in error.details:
            typer.echo(
                f"  {detail.get('path', 'unknown')}: {detail.get('message', 'Unknown error')}",
                err=True,
            )
            _echo_value(detail.get("value"))
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for problem in result.errors:
            typer.echo(f"  {problem.path}: {problem.message}", err=True)
            _echo_value(problem.value)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for advisory in result.warnings:
            typer.echo(f"  {advisory.path}: {advisory.message}")
            if advisory.suggestion:
                typer.echo(f"    Suggestion: {advisory.suggestion}")
        typer.echo()

    error_count = len(result.errors)
    warning_count = len(result.warnings)
    if error_count:
        typer.echo(
            f"Validation failed: {error_count} error(s), {warning_count} warning(s)",
            err=True,
        )
    elif warning_count:
        typer.echo(f"Validation passed with {warning_count} warning(s)")
    else:
        typer.echo("Validation passed. Job is valid.")
