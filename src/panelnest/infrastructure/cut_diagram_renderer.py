"""Cut diagram rendering for nesting results.

This module provides SVG and ASCII rendering of sheet layouts showing part
placements, dimensions, rotation indicators, grain and unused stock.
"""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

from panelnest.domain.value_objects import GrainDirection, MaterialInfo, PlacedPart
from panelnest.infrastructure.bin_packing import NestingResult, SheetLayout

ARROW_HEAD_LENGTH = 6
ARROW_HEAD_SPREAD = math.pi / 6

# Fallback fills for materials that carry no colour of their own
MATERIAL_PALETTE: tuple[str, ...] = (
    "#87CEEB",  # Sky blue
    "#90EE90",  # Light green
    "#DDA0DD",  # Plum
    "#F0E68C",  # Khaki
    "#FFB6C1",  # Light pink
    "#FFA07A",  # Light salmon
    "#DEB887",  # Burlywood
    "#E6E6FA",  # Lavender
)


class CutDiagramRenderer:
    """Renders cut diagrams in SVG and ASCII format.

    Attributes:
        scale: Pixels per sheet unit for SVG rendering (default 0.25, so a
            2440 mm sheet is 610 px wide).
        part_fill: Fill for parts when material colours are disabled.
        part_stroke: Stroke color for part outlines.
        waste_fill: Fill color for unused stock above the frontier.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show part dimensions.
        show_labels: Whether to show part labels.
        show_grain: Whether to show grain direction arrows.
        use_material_colors: Whether to fill parts with their material color.
    """

    def __init__(
        self,
        scale: float = 0.25,
        part_fill: str = "#ADD8E6",  # Light blue
        part_stroke: str = "#000000",  # Black
        waste_fill: str = "#D3D3D3",  # Light gray
        text_color: str = "#000000",  # Black
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_grain: bool = True,
        use_material_colors: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.scale = scale
        self.part_fill = part_fill
        self.part_stroke = part_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_grain = show_grain
        self.use_material_colors = use_material_colors
        self._palette_slots: dict[MaterialInfo, str] = {}

    def material_color(self, material: MaterialInfo) -> str:
        """Fill colour for a material.

        Uses the material's own colour when set; otherwise assigns palette
        entries in first-seen order so a material keeps one colour across
        every sheet rendered by this instance.
        """
        if not self.use_material_colors:
            return self.part_fill
        if material.color:
            return material.color
        if material not in self._palette_slots:
            slot = len(self._palette_slots) % len(MATERIAL_PALETTE)
            self._palette_slots[material] = MATERIAL_PALETTE[slot]
        return self._palette_slots[material]

    def render_svg(self, layout: SheetLayout, total_sheets: int = 1) -> str:
        """Generate SVG cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed parts.
            total_sheets: Total number of sheets (for header display).

        Returns:
            SVG string representation of the layout.
        """
        sheet = layout.sheet_size
        header_height = 30

        materials = self._materials_in(layout)
        legend_height = self._calculate_legend_height(materials)

        svg_width = sheet.width * self.scale
        sheet_height_px = sheet.height * self.scale
        svg_height = sheet_height_px + header_height + legend_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            "",
        ]

        parts.append(self._render_header(layout, total_sheets, svg_width, header_height))

        parts.append("  <!-- Sheet outline -->")
        parts.append(
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet_height_px}" '
            f'fill="#f5deb3" stroke="{self.part_stroke}" stroke-width="2"/>'
        )

        if layout.edge_margin > 0:
            em = layout.edge_margin * self.scale
            usable_w = (sheet.width - 2 * layout.edge_margin) * self.scale
            usable_h = (sheet.height - 2 * layout.edge_margin) * self.scale
            if usable_w > 0 and usable_h > 0:
                parts.append("  <!-- Usable area (inside edge margin) -->")
                parts.append(
                    f'  <rect x="{em}" y="{header_height + em}" '
                    f'width="{usable_w}" height="{usable_h}" '
                    f'fill="none" stroke="#999999" stroke-dasharray="5,5"/>'
                )

        # Unused stock first so parts render on top
        parts.append("")
        parts.append("  <!-- Unused stock -->")
        waste_svg = self._render_unused_stock(layout, header_height)
        if waste_svg:
            parts.append(waste_svg)

        parts.append("")
        parts.append("  <!-- Placed parts -->")
        for placement in layout.placements:
            parts.append(self._render_part(placement, header_height))

        if self.use_material_colors and materials:
            legend_y = header_height + sheet_height_px
            parts.append("")
            parts.append("  <!-- Legend -->")
            parts.append(self._render_legend(materials, svg_width, legend_y))

        parts.append("")
        parts.append("</svg>")

        return "\n".join(parts)

    def render_all_svg(self, result: NestingResult) -> list[str]:
        """Generate SVG cut diagrams for all sheets, one string per sheet."""
        total_sheets = result.total_sheets
        return [self.render_svg(layout, total_sheets) for layout in result.sheets]

    def _render_header(
        self,
        layout: SheetLayout,
        total_sheets: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        header_text = escape(
            f"Sheet {layout.index + 1} of {total_sheets} - "
            f"{layout.sheet_size.display_label} - {layout.efficiency:.1f}% used"
        )

        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>'
        )

    def _render_part(self, placement: PlacedPart, header_height: float) -> str:
        """Render a single placed part as SVG rect and text.

        Args:
            placement: The placed part.
            header_height: Header height offset.

        Returns:
            SVG elements for the part.
        """
        x = placement.x * self.scale
        y = header_height + placement.y * self.scale
        w = placement.width * self.scale
        h = placement.height * self.scale

        part = placement.part
        fill_color = self.material_color(part.material)

        # As-designed size, with a marker when the part was turned on its side
        dims = f"{part.width:g} x {part.height:g}"
        if placement.rotated:
            dims += " (R)"

        text_x = x + w / 2
        text_y = y + h / 2

        font_size = min(12, min(w, h) / 6)
        if font_size < 6:
            # Too small for text
            svg_parts = [
                f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" '
                f'fill="{fill_color}" stroke="{self.part_stroke}"/>'
            ]
            if self.show_grain:
                grain_svg = self._render_grain_indicator(placement, x, y, w, h, font_size)
                if grain_svg:
                    svg_parts.append(grain_svg)
            return "\n".join(svg_parts)

        svg_parts = [
            "  <g>",
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill_color}" stroke="{self.part_stroke}"/>',
        ]

        if self.show_labels:
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">'
                f"{escape(placement.label)}</text>"
            )

        if self.show_dimensions:
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            svg_parts.append(
                f'    <text x="{text_x}" y="{dims_y}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">{dims}</text>'
            )

        if self.show_grain:
            grain_svg = self._render_grain_indicator(placement, x, y, w, h, font_size)
            if grain_svg:
                svg_parts.append(grain_svg)

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def _render_grain_indicator(
        self,
        placement: PlacedPart,
        x: float,
        y: float,
        w: float,
        h: float,
        font_size: float,
    ) -> str | None:
        """Arrow in the lower-right corner of a part showing its grain on the sheet.

        Parts turned by 90 or 270 degrees have their grain turned with them.
        """
        grain = placement.part.grain_direction
        if grain is GrainDirection.NONE:
            return None

        length = min(20, min(w, h) / 4)
        inset = max(5, font_size)
        left = x + w - inset - length
        bottom = y + h - inset

        along_x = (grain is GrainDirection.HORIZONTAL) != placement.rotated
        if along_x:
            mid_y = bottom - length / 2
            return self._render_arrow((left, mid_y), (left + length, mid_y))
        mid_x = left + length / 2
        return self._render_arrow((mid_x, bottom - length), (mid_x, bottom))

    def _render_arrow(
        self, tail: tuple[float, float], tip: tuple[float, float]
    ) -> str:
        tip_x, tip_y = tip
        heading = math.atan2(tip_y - tail[1], tip_x - tail[0])
        barbs = [
            (
                tip_x - ARROW_HEAD_LENGTH * math.cos(heading + spread),
                tip_y - ARROW_HEAD_LENGTH * math.sin(heading + spread),
            )
            for spread in (-ARROW_HEAD_SPREAD, ARROW_HEAD_SPREAD)
        ]
        points = " ".join(f"{px},{py}" for px, py in [tip, *barbs])
        return (
            f'    <line x1="{tail[0]}" y1="{tail[1]}" x2="{tip_x}" y2="{tip_y}" '
            f'stroke="{self.text_color}" stroke-width="1.5"/>\n'
            f'    <polygon points="{points}" fill="{self.text_color}"/>'
        )

    def _materials_in(self, layout: SheetLayout) -> list[MaterialInfo]:
        """Distinct materials on a sheet, in placement order."""
        materials: list[MaterialInfo] = []
        for placement in layout.placements:
            if placement.part.material not in materials:
                materials.append(placement.part.material)
        return materials

    def _calculate_legend_height(self, materials: list[MaterialInfo]) -> float:
        if not materials or not self.use_material_colors:
            return 0.0

        items_per_row = 3
        num_rows = (len(materials) + items_per_row - 1) // items_per_row
        # Title (20px) + padding (10px) + rows (25px each) + bottom padding (10px)
        return 20 + 10 + (num_rows * 25) + 10

    def _render_legend(
        self,
        materials: list[MaterialInfo],
        svg_width: float,
        y_offset: float,
    ) -> str:
        """Render legend showing material colors.

        Args:
            materials: Materials used in the diagram.
            svg_width: Width of the SVG in pixels.
            y_offset: Y position to start the legend.

        Returns:
            SVG elements for the legend.
        """
        if not materials:
            return ""

        parts: list[str] = []

        legend_height = self._calculate_legend_height(materials)
        parts.append(
            f'  <rect x="0" y="{y_offset}" width="{svg_width}" '
            f'height="{legend_height}" fill="#F5F5F5" stroke="#CCCCCC"/>'
        )
        parts.append(
            f'  <text x="10" y="{y_offset + 18}" '
            f'font-family="Arial, sans-serif" font-size="12" font-weight="bold" '
            f'fill="{self.text_color}">Materials:</text>'
        )

        items_per_row = 3
        column_width = svg_width / items_per_row
        swatch_size = 15
        start_y = y_offset + 35

        for idx, material in enumerate(materials):
            row = idx // items_per_row
            col = idx % items_per_row

            x = col * column_width + 15
            y = start_y + row * 25

            parts.append(
                f'  <rect x="{x}" y="{y}" width="{swatch_size}" height="{swatch_size}" '
                f'fill="{self.material_color(material)}" stroke="{self.part_stroke}"/>'
            )
            parts.append(
                f'  <text x="{x + swatch_size + 5}" y="{y + swatch_size - 3}" '
                f'font-family="Arial, sans-serif" font-size="10" '
                f'fill="{self.text_color}">{escape(material.display_name)}</text>'
            )

        return "\n".join(parts)

    def _render_unused_stock(self, layout: SheetLayout, header_height: float) -> str:
        """Shade the stock above the final frontier.

        Everything above a frontier segment is guaranteed empty, so each
        segment contributes one rectangle up to the far edge of the sheet.
        """
        if not layout.placements:
            return ""

        sheet = layout.sheet_size
        parts: list[str] = []

        for segment in layout.skyline:
            waste_height = sheet.height - segment.y
            if waste_height <= 1 or segment.width <= 1:
                continue
            x = segment.x * self.scale
            y = header_height + segment.y * self.scale
            w = segment.width * self.scale
            h = waste_height * self.scale
            parts.append(
                f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" '
                f'fill="{self.waste_fill}" stroke="none"/>'
            )

        return "\n".join(parts)

    def render_combined_svg(self, result: NestingResult) -> str:
        """Generate single SVG with all sheets stacked vertically."""
        if not result.sheets:
            return (
                '<svg width="100" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        sheet_spacing = 20

        sheet_heights = [
            layout.sheet_size.height * self.scale
            + header_height
            + self._calculate_legend_height(self._materials_in(layout))
            for layout in result.sheets
        ]
        svg_width = max(layout.sheet_size.width for layout in result.sheets) * self.scale
        svg_height = sum(h + sheet_spacing for h in sheet_heights)

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        for layout, height in zip(result.sheets, sheet_heights):
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Sheet {layout.index + 1} -->")
            parts.extend(
                f"  {line}"
                for line in self._svg_body(self.render_svg(layout, result.total_sheets))
            )
            parts.append("  </g>")
            y_offset += height + sheet_spacing

        parts.append("</svg>")
        return "\n".join(parts)

    @staticmethod
    def _svg_body(document: str) -> list[str]:
        """Non-blank lines between the root <svg> tags of a document."""
        opening_end = document.index(">") + 1
        closing = document.rindex("</svg>")
        return [line for line in document[opening_end:closing].splitlines() if line.strip()]

    def render_ascii(
        self,
        layout: SheetLayout,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Draw one sheet as boxed text, ``width`` columns wide including the frame."""
        sheet = layout.sheet_size

        columns = max(width - 2, 10)
        # Terminal cells are roughly twice as tall as they are wide
        rows = max(int(columns * sheet.height / sheet.width * 0.5), 10)

        grid = [[" "] * columns for _ in range(rows)]
        for placement in layout.placements:
            self._draw_part_ascii(
                grid, placement, columns / sheet.width, rows / sheet.height
            )

        frame = "+" + "-" * columns + "+"
        return "\n".join(
            [
                f"Sheet {layout.index + 1} of {total_sheets} - "
                f"{sheet.display_label} - {layout.efficiency:.1f}% used",
                frame,
                *("|" + "".join(row) + "|" for row in grid),
                frame,
            ]
        )

    def _draw_part_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPart,
        scale_x: float,
        scale_y: float,
    ) -> None:
        last_row = len(grid) - 1
        last_col = len(grid[0]) - 1 if grid else -1

        def clamp(value: float, upper: int) -> int:
            return max(0, min(int(value), upper))

        left = clamp(placement.x * scale_x, last_col)
        right = clamp(placement.right_edge * scale_x, last_col)
        top = clamp(placement.y * scale_y, last_row)
        bottom = clamp(placement.top_edge * scale_y, last_row)

        for col in range(left, right + 1):
            grid[top][col] = grid[bottom][col] = "-"
        for row in range(top, bottom + 1):
            grid[row][left] = grid[row][right] = "|"
        for row in (top, bottom):
            grid[row][left] = grid[row][right] = "+"

        room = right - left - 1
        if room <= 0:
            return

        dims = f"{placement.part.width:.0f}x{placement.part.height:.0f}"
        if placement.rotated:
            dims += "R"

        for row, text in ((top + 1, placement.label), (top + 2, dims)):
            if row >= bottom:
                break
            grid[row][left + 1 : left + 1 + len(text[:room])] = list(text[:room])

    def render_all_ascii(self, result: NestingResult, width: int = 80) -> str:
        """Generate ASCII cut diagrams for all sheets plus a summary line."""
        if not result.sheets:
            return "No sheets to display."

        total_sheets = result.total_sheets
        parts: list[str] = []

        for layout in result.sheets:
            parts.append(self.render_ascii(layout, width, total_sheets))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total_sheets} sheet{'s' if total_sheets != 1 else ''}, "
            f"{result.material_efficiency:.1f}% material efficiency"
        )
        if result.unplaced:
            parts.append(f"  {len(result.unplaced)} part(s) could not be placed")

        return "\n".join(parts)

    def render_waste_summary(self, result: NestingResult) -> str:
        """Generate text summary of sheet usage and waste.

        Args:
            result: Complete nesting result.

        Returns:
            Formatted summary string.
        """
        lines: list[str] = [
            "NESTING SUMMARY",
            "=" * 40,
            f"Sort Strategy: {result.sort_strategy.value}",
            f"Parts Placed: {result.placed_parts} of {result.total_parts}",
            f"Total Sheets: {result.total_sheets}",
            f"Material Efficiency: {result.material_efficiency:.1f}%",
            f"Material Waste: {result.material_waste:.0f}",
            "",
            "Per-Sheet Details:",
        ]

        for layout in result.sheets:
            lines.append(
                f"  Sheet {layout.index + 1}: "
                f"{layout.part_count} part{'s' if layout.part_count != 1 else ''}, "
                f"{layout.efficiency:.1f}% used ({layout.sheet_size.display_label})"
            )

        if result.unplaced:
            lines.append("")
            lines.append(f"Unplaced Parts: {len(result.unplaced)}")
            for part in result.unplaced:
                lines.append(f"  {part.display_label}: {part.width:g} x {part.height:g}")

        return "\n".join(lines)
