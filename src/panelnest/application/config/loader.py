"""Loading nesting jobs from JSON.

Every failure (missing file, unreadable file, bad JSON, schema violation)
surfaces as a single ConfigError; ``error_type`` names the case.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from panelnest.application.config.schema import NestingJobConfiguration


class ConfigError(Exception):
    """A nesting job could not be loaded.

    Attributes:
        message: Human-readable summary, also the exception text.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Job file involved, if the job came from disk.
        details: Structured problems; line/column for JSON errors,
            path/message/value/error_type for schema errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = list(details) if details else []

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("options", "edge_margin"))
        'options.edge_margin'
        >>> _format_json_path(("parts", 3, "width"))
        'parts[3].width'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    return [
        {
            # Model-level checks (duplicate ids) have no location
            "path": _format_json_path(item["loc"]) or "(root)",
            "message": item["msg"],
            "value": item.get("input"),
            "error_type": item["type"],
        }
        for item in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Job validation failed:"]
    for detail in details:
        line = f"  - {detail['path']}: {detail['message']}"
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got: {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> NestingJobConfiguration:
    try:
        return NestingJobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> NestingJobConfiguration:
    """Read, parse and validate a JSON job file.

    Args:
        path: Location of the job file.

    Returns:
        The validated job.

    Raises:
        ConfigError: With ``error_type`` set to:
            - "file_not_found" if the path does not exist
            - "permission_denied" if it cannot be opened
            - "file_read_error" for other I/O failures
            - "json_parse" if the content is not valid JSON
            - "validation" if the job does not match the schema

    Example:
        >>> try:
        ...     job = load_config(Path("kitchen.json"))
        ... except ConfigError as e:
        ...     print(e.error_type, e.message)
    """
    if not path.exists():
        raise ConfigError(
            message=f"Job file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading job file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Could not read job file {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in job file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> NestingJobConfiguration:
    """Validate a job given as plain data (HTTP bodies, CLI overrides).

    Raises:
        ConfigError: With ``error_type`` "validation" if the data does not
            match the schema.
    """
    return _validate(data)
