"""Exporter protocol, format registry and multi-format export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from panelnest.infrastructure.bin_packing import NestingResult


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Interface shared by every nesting result exporter.

    Implementations are constructible without arguments so the registry
    and the export manager can build them on demand.

    Attributes:
        format_name: Registry key of the format (e.g. "svg", "csv").
        file_extension: Extension of written files, without the dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    def export(self, result: NestingResult, path: Path) -> None:
        """Write ``result`` to ``path``."""
        ...

    def export_string(self, result: NestingResult) -> str:
        """Render ``result`` in memory, for stdout and HTTP responses."""
        ...


class ExporterRegistry:
    """Class-level mapping from format names to exporter classes.

    Exporter modules register on import:

        @ExporterRegistry.register("csv")
        class CsvCutListExporter:
            format_name = "csv"
            file_extension = "csv"
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Class decorator adding an exporter under ``format_name``.

        A later registration for the same name replaces the earlier one.
        """

        def wrap(exporter_class: type[Exporter]) -> type[Exporter]:
            previous = cls._exporters.get(format_name)
            if previous is not None and previous is not exporter_class:
                logger.warning(
                    f"Exporter {previous.__name__} for '{format_name}' replaced by "
                    f"{exporter_class.__name__}"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered '{format_name}' exporter {exporter_class.__name__}")
            return exporter_class

        return wrap

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up the exporter class for ``format_name``.

        Raises:
            KeyError: If the format is unknown; the message lists the
                registered formats.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            known = ", ".join(cls.available_formats()) or "none"
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {known}"
            ) from None

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes one nesting result to several formats in a single directory.

    Files are named ``{project_name}_{format}.{extension}``.

    Attributes:
        output_dir: Target directory, created on first export.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        result: NestingResult,
        project_name: str = "nesting",
    ) -> dict[str, Path]:
        """Export ``result`` once per requested format.

        Every format is resolved before anything is written, so an unknown
        name leaves the output directory untouched.

        Args:
            formats: Registered format names, in export order.
            result: Nesting result to export.
            project_name: File name prefix.

        Returns:
            Written file path per format name.

        Raises:
            KeyError: If a format is not registered.
            OSError: If a file cannot be written.
        """
        exporter_classes = [(name, ExporterRegistry.get(name)) for name in formats]

        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: dict[str, Path] = {}
        for name, exporter_class in exporter_classes:
            exporter = exporter_class()
            target = self.output_dir / f"{project_name}_{name}.{exporter.file_extension}"
            logger.info(f"Writing {name} export to {target}")
            exporter.export(result, target)
            written[name] = target
        return written

    def export_single(
        self,
        format_name: str,
        result: NestingResult,
        project_name: str = "nesting",
    ) -> Path:
        """Export ``result`` to one format and return the written path."""
        return self.export_all([format_name], result, project_name)[format_name]
