"""JSON exporter for nesting results.

The document carries run statistics, every sheet with its placements and
final frontier, and the list of unplaced parts. ``result_to_dict`` is also
used by the HTTP API to build response bodies.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from panelnest.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from panelnest.domain.value_objects import MaterialInfo, Part, PlacedPart
    from panelnest.infrastructure.bin_packing import NestingResult, SheetLayout


logger = logging.getLogger(__name__)


# Current schema version for JSON output
SCHEMA_VERSION = "1.0"


def _material_to_dict(material: MaterialInfo) -> dict[str, str]:
    return {"id": material.id, "name": material.name, "color": material.color}


def part_to_dict(part: Part) -> dict[str, Any]:
    return {
        "id": part.id,
        "label": part.display_label,
        "width": part.width,
        "height": part.height,
        "grain_direction": part.grain_direction.value,
        "material": _material_to_dict(part.material),
        "metadata": dict(part.metadata or {}),
    }


def placement_to_dict(placed: PlacedPart) -> dict[str, Any]:
    return {
        "part_id": placed.id,
        "label": placed.label,
        "sheet_index": placed.sheet_index,
        "x": placed.x,
        "y": placed.y,
        "width": placed.width,
        "height": placed.height,
        "rotation": int(placed.rotation),
        "original_width": placed.original_width,
        "original_height": placed.original_height,
        "grain_direction": placed.part.grain_direction.value,
        "material": _material_to_dict(placed.part.material),
        "metadata": dict(placed.part.metadata or {}),
    }


def sheet_to_dict(layout: SheetLayout, include_skyline: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {
        "index": layout.index,
        "width": layout.sheet_size.width,
        "height": layout.sheet_size.height,
        "label": layout.sheet_size.display_label,
        "part_count": layout.part_count,
        "used_area": layout.used_area,
        "waste_area": layout.waste_area,
        "efficiency": round(layout.efficiency, 2),
        "placements": [placement_to_dict(p) for p in layout.placements],
    }
    if include_skyline:
        data["skyline"] = [
            {"x": s.x, "y": s.y, "width": s.width} for s in layout.skyline
        ]
    return data


def result_to_dict(result: NestingResult, include_skyline: bool = True) -> dict[str, Any]:
    """Plain-data view of a nesting result."""
    return {
        "schema_version": SCHEMA_VERSION,
        "summary": {
            "total_parts": result.total_parts,
            "placed_parts": result.placed_parts,
            "unplaced_parts": len(result.unplaced),
            "total_sheets": result.total_sheets,
            "material_waste": result.material_waste,
            "material_efficiency": round(result.material_efficiency, 2),
            "sort_strategy": result.sort_strategy.value,
        },
        "sheets": [sheet_to_dict(s, include_skyline) for s in result.sheets],
        "unplaced": [part_to_dict(p) for p in result.unplaced],
    }


@ExporterRegistry.register("json")
class JsonResultExporter:
    """Exports the full nesting result as JSON.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, include_skyline: bool = True, indent: int = 2) -> None:
        self.include_skyline = include_skyline
        self.indent = indent

    def export(self, result: NestingResult, path: Path) -> None:
        path.write_text(self.export_string(result))
        logger.info(f"Exported JSON result to {path}")

    def export_string(self, result: NestingResult) -> str:
        data = result_to_dict(result, include_skyline=self.include_skyline)
        return json.dumps(data, indent=self.indent, default=str)
