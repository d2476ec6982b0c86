"""Cut diagrams as SVG, backed by CutDiagramRenderer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from panelnest.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from panelnest.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from panelnest.infrastructure.bin_packing import NestingResult


@ExporterRegistry.register("svg")
class SvgExporter:
    """Writes every sheet of a result into one SVG, sheets stacked top to bottom.

    Keyword arguments are handed to CutDiagramRenderer unchanged; see it
    for their meaning.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 0.25,
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_grain: bool = True,
        use_material_colors: bool = True,
    ) -> None:
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
            show_grain=show_grain,
            use_material_colors=use_material_colors,
        )

    def export(self, result: NestingResult, path: Path) -> None:
        path.write_text(self.export_string(result))

    def export_string(self, result: NestingResult) -> str:
        return self.renderer.render_combined_svg(result)

    def export_individual_sheets(
        self, result: NestingResult, base_path: Path
    ) -> list[Path]:
        """Write each sheet to its own file.

        A single-sheet result goes to ``base_path`` itself. Otherwise the
        sheet number is appended to the stem: ``layout_1.svg``,
        ``layout_2.svg`` and so on.

        Returns:
            The written paths, in sheet order.
        """
        documents = self.renderer.render_all_svg(result)
        if len(documents) == 1:
            targets = [base_path]
        else:
            extension = base_path.suffix or ".svg"
            targets = [
                base_path.with_name(f"{base_path.stem}_{number}{extension}")
                for number in range(1, len(documents) + 1)
            ]

        for target, document in zip(targets, documents):
            target.write_text(document)
        return targets
