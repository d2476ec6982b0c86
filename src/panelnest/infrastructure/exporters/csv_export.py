"""CSV cut list exporter.

One row per placed part, ordered by sheet then placement, followed by a
block listing the parts that could not be placed.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from panelnest.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from panelnest.infrastructure.bin_packing import NestingResult


logger = logging.getLogger(__name__)

CUT_LIST_HEADER = [
    "Sheet",
    "Part ID",
    "Label",
    "Material",
    "X",
    "Y",
    "Rotation",
    "Cut Width",
    "Cut Height",
    "Design Width",
    "Design Height",
    "Grain",
]


@ExporterRegistry.register("csv")
class CsvCutListExporter:
    """Exports the nesting result as a CSV cut list.

    Attributes:
        format_name: "csv"
        file_extension: "csv"
        include_unplaced: Whether to append the unplaced parts block.
        precision: Decimal places for coordinates and sizes.
    """

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def __init__(self, include_unplaced: bool = True, precision: int = 1) -> None:
        if precision < 0:
            raise ValueError("Precision must be non-negative")
        self.include_unplaced = include_unplaced
        self.precision = precision

    def export(self, result: NestingResult, path: Path) -> None:
        path.write_text(self.export_string(result), newline="")
        logger.info(f"Exported CSV cut list to {path}")

    def export_string(self, result: NestingResult) -> str:
        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(CUT_LIST_HEADER)
        for layout in result.sheets:
            for placed in layout.placements:
                part = placed.part
                writer.writerow(
                    [
                        layout.index + 1,
                        part.id,
                        part.display_label,
                        part.material.display_name,
                        self._fmt(placed.x),
                        self._fmt(placed.y),
                        int(placed.rotation),
                        self._fmt(placed.width),
                        self._fmt(placed.height),
                        self._fmt(part.width),
                        self._fmt(part.height),
                        part.grain_direction.value,
                    ]
                )

        if self.include_unplaced and result.unplaced:
            writer.writerow([])
            writer.writerow(["Unplaced", "Part ID", "Label", "Material", "Width", "Height"])
            for part in result.unplaced:
                writer.writerow(
                    [
                        "",
                        part.id,
                        part.display_label,
                        part.material.display_name,
                        self._fmt(part.width),
                        self._fmt(part.height),
                    ]
                )

        return output.getvalue()

    def _fmt(self, value: float) -> str:
        return f"{value:.{self.precision}f}"
