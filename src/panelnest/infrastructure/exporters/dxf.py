"""DXF format exporter for nesting layouts.

Generates 2D DXF files (R2010 format) for CNC routers and panel saws. Sheets
are laid out side by side along x; each sheet's origin edge sits on y = 0.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf

from panelnest.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from panelnest.domain.value_objects import PlacedPart
    from panelnest.infrastructure.bin_packing import NestingResult, SheetLayout


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEET": {"color": 7, "linetype": "CONTINUOUS"},  # White - sheet outlines
    "PARTS": {"color": 3, "linetype": "CONTINUOUS"},  # Green - part outlines
    "LABELS": {"color": 5, "linetype": "CONTINUOUS"},  # Blue - text labels
    "MARGIN": {"color": 1, "linetype": "DASHED"},  # Red - usable area boundary
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports nesting layouts to DXF format.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
        sheet_gap: Space left between sheets along x, in sheet units.
        show_labels: Whether to write part labels.
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, sheet_gap: float = 100.0, show_labels: bool = True) -> None:
        if sheet_gap < 0:
            raise ValueError(f"Invalid sheet_gap: {sheet_gap}. Must be non-negative")
        self.sheet_gap = sheet_gap
        self.show_labels = show_labels

    def export(self, result: NestingResult, path: Path) -> None:
        """Write every sheet of the result to a single DXF file."""
        if not result.sheets:
            logger.warning("No sheets to export")

        doc = self._create_document()
        self._draw_all_sheets(doc.modelspace(), result)
        doc.saveas(path)
        logger.info(f"Exported DXF with {result.total_sheets} sheets to {path}")

    def export_string(self, result: NestingResult) -> str:
        doc = self._create_document()
        self._draw_all_sheets(doc.modelspace(), result)

        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def _create_document(self) -> Drawing:
        doc = ezdxf.new("R2010")
        self._setup_layers(doc)
        return doc

    def _setup_layers(self, doc: Drawing) -> None:
        """Create DXF layers with appropriate colors and linetypes."""
        for name, props in LAYERS.items():
            layer = doc.layers.add(name, color=cast(int, props["color"]))
            if props["linetype"] == "DASHED":
                if "DASHED" not in doc.linetypes:
                    doc.linetypes.add(
                        "DASHED",
                        pattern=[0.5, 0.25, -0.25],
                        description="Dashed line",
                    )
                layer.dxf.linetype = "DASHED"

    def _draw_all_sheets(self, msp: Modelspace, result: NestingResult) -> None:
        offset_x = 0.0
        for layout in result.sheets:
            self._draw_sheet(msp, layout, offset_x)
            offset_x += layout.sheet_size.width + self.sheet_gap

    def _draw_sheet(self, msp: Modelspace, layout: SheetLayout, offset_x: float) -> None:
        sheet = layout.sheet_size
        self._draw_rect(msp, offset_x, 0.0, sheet.width, sheet.height, "SHEET")

        margin = layout.edge_margin
        if margin > 0 and sheet.width > 2 * margin and sheet.height > 2 * margin:
            self._draw_rect(
                msp,
                offset_x + margin,
                margin,
                sheet.width - 2 * margin,
                sheet.height - 2 * margin,
                "MARGIN",
            )

        for placed in layout.placements:
            x = offset_x + placed.x
            self._draw_rect(msp, x, placed.y, placed.width, placed.height, "PARTS")
            if self.show_labels:
                self._draw_label(msp, placed, x, placed.y)

    def _draw_rect(
        self,
        msp: Modelspace,
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
        ]
        msp.add_lwpolyline(points, close=True, dxfattribs={"layer": layer})

    def _draw_label(self, msp: Modelspace, placed: PlacedPart, x: float, y: float) -> None:
        """Draw the part label with its as-designed size, centered on the part."""
        part = placed.part
        dim_text = f"{part.width:g} x {part.height:g}"
        if placed.rotated:
            dim_text += " (R)"
        label_text = f"{placed.label}\\P{dim_text}"

        # 8% of the smaller side, clamped to a readable range
        text_height = max(4.0, min(25.0, min(placed.width, placed.height) * 0.08))

        msp.add_mtext(
            label_text,
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + placed.width / 2, y + placed.height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )
