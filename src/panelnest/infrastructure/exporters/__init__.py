"""Exporter framework for nesting results.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- csv: Cut list with as-cut and as-designed sizes
- dxf: DXF drawing of every sheet for CNC and panel saws
- json: Full result document (sheets, placements, statistics)
- svg: Cut diagrams showing part placements on sheets

Usage:
    from panelnest.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["svg", "csv"], nesting_result, project_name="kitchen")
"""

from panelnest.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from panelnest.infrastructure.exporters.csv_export import CsvCutListExporter
from panelnest.infrastructure.exporters.dxf import DxfExporter
from panelnest.infrastructure.exporters.json_export import (
    JsonResultExporter,
    result_to_dict,
)
from panelnest.infrastructure.exporters.svg import SvgExporter

__all__ = [
    # Framework
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    # Registered exporters
    "CsvCutListExporter",
    "DxfExporter",
    "JsonResultExporter",
    "SvgExporter",
    "result_to_dict",
]
