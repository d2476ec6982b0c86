"""Adapters from job configuration models to domain objects.

This module converts the Pydantic job schema into the frozen domain value
objects consumed by the nester, and applies command-line overrides on top
of a loaded job.
"""

from typing import Any

from panelnest.application.config.loader import load_config_from_dict
from panelnest.application.config.schema import (
    NestingJobConfiguration,
    PartConfigSchema,
)
from panelnest.domain.value_objects import (
    GrainDirection,
    MaterialInfo,
    NestingConfig,
    Part,
    SheetSize,
    SortStrategy,
)


def config_to_nesting_config(config: NestingJobConfiguration) -> NestingConfig:
    """Build the run-wide NestingConfig from a job."""
    sheet = config.sheet
    options = config.options
    return NestingConfig(
        sheet_size=SheetSize(width=sheet.width, height=sheet.height, label=sheet.label),
        allow_rotation=options.allow_rotation,
        grain_direction=options.grain_direction,
        sort_strategy=options.sort_strategy,
        cutting_tools_thick=options.cutting_tools_thick,
        edge_margin=options.edge_margin,
    )


def config_to_parts(config: NestingJobConfiguration) -> list[Part]:
    """Expand the job's part lines into individual parts.

    A line with quantity N becomes N parts. Single parts keep their id and
    label; copies get ids ``"{id}#{n}"`` and labels ``"{label} #{n}"``.

    Args:
        config: Validated job configuration.

    Returns:
        Parts in job order, copies adjacent to each other.
    """
    parts: list[Part] = []
    for part_config in config.parts:
        parts.extend(_expand_part(part_config))
    return parts


def _expand_part(part_config: PartConfigSchema) -> list[Part]:
    material = MaterialInfo(
        id=part_config.material.id,
        name=part_config.material.name,
        color=part_config.material.color,
    )
    metadata = dict(part_config.metadata) or None

    if part_config.quantity == 1:
        return [
            Part(
                id=part_config.id,
                width=part_config.width,
                height=part_config.height,
                grain_direction=part_config.grain_direction,
                material=material,
                label=part_config.label,
                metadata=metadata,
            )
        ]

    base_label = part_config.label or part_config.id
    return [
        Part(
            id=f"{part_config.id}#{n}",
            width=part_config.width,
            height=part_config.height,
            grain_direction=part_config.grain_direction,
            material=material,
            label=f"{base_label} #{n}",
            metadata=dict(metadata) if metadata else None,
        )
        for n in range(1, part_config.quantity + 1)
    ]


def merge_cli_overrides(
    config: NestingJobConfiguration,
    *,
    sheet_width: float | None = None,
    sheet_height: float | None = None,
    spacing: float | None = None,
    edge_margin: float | None = None,
    sort_strategy: SortStrategy | None = None,
    allow_rotation: bool | None = None,
    grain_direction: GrainDirection | None = None,
) -> NestingJobConfiguration:
    """Merge command-line arguments over a loaded job.

    Only non-None arguments override job values. The merged job is validated
    again, so overrides obey the same constraints as the file.

    Raises:
        ConfigError: If an override violates the job schema.

    Example:
        >>> job = load_config(Path("kitchen.json"))
        >>> merged = merge_cli_overrides(job, spacing=4.0)
        >>> merged.options.cutting_tools_thick
        4.0
    """
    sheet_data: dict[str, Any] = config.sheet.model_dump()
    if sheet_width is not None:
        sheet_data["width"] = sheet_width
    if sheet_height is not None:
        sheet_data["height"] = sheet_height
    if sheet_width is not None or sheet_height is not None:
        # The old label no longer describes the sheet
        sheet_data["label"] = ""

    options_data: dict[str, Any] = config.options.model_dump()
    overrides = {
        "cutting_tools_thick": spacing,
        "edge_margin": edge_margin,
        "sort_strategy": sort_strategy,
        "allow_rotation": allow_rotation,
        "grain_direction": grain_direction,
    }
    for key, value in overrides.items():
        if value is not None:
            options_data[key] = value

    return load_config_from_dict(
        {
            "schema_version": config.schema_version,
            "sheet": sheet_data,
            "options": options_data,
            "parts": [part.model_dump() for part in config.parts],
        }
    )
