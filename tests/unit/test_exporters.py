"""Tests for the exporter framework and the registered exporters."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import ClassVar

import ezdxf
import pytest

from panelnest.domain.value_objects import (
    GrainDirection,
    MaterialInfo,
    NestingConfig,
    Part,
    SheetSize,
)
from panelnest.infrastructure.bin_packing import NestingResult, nest
from panelnest.infrastructure.exporters import (
    CsvCutListExporter,
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonResultExporter,
    SvgExporter,
    result_to_dict,
)
from panelnest.infrastructure.exporters.csv_export import CUT_LIST_HEADER
from panelnest.infrastructure.exporters.json_export import SCHEMA_VERSION


@pytest.fixture
def result(oak: MaterialInfo) -> NestingResult:
    config = NestingConfig(sheet_size=SheetSize(1000, 600), cutting_tools_thick=5)
    parts = [
        Part(id="a", width=400, height=300, material=oak, label="Side",
             metadata={"cabinet": 1}),
        Part(id="b", width=700, height=500, material=oak),
        Part(id="c", width=200, height=100, grain_direction=GrainDirection.VERTICAL),
        Part(id="big", width=2000, height=100),
    ]
    return nest(parts, config)


# =============================================================================
# Framework
# =============================================================================


class TestExporterRegistry:
    """Tests for ExporterRegistry."""

    def setup_method(self) -> None:
        """Store original exporters before each test."""
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        """Restore original exporters after each test."""
        ExporterRegistry._exporters = self._original_exporters

    def test_builtin_formats_registered(self) -> None:
        assert ExporterRegistry.available_formats() == ["csv", "dxf", "json", "svg"]
        assert ExporterRegistry.get("svg") is SvgExporter
        assert ExporterRegistry.get("csv") is CsvCutListExporter
        assert ExporterRegistry.get("json") is JsonResultExporter
        assert ExporterRegistry.get("dxf") is DxfExporter

    def test_get_unknown_format_raises_key_error(self) -> None:
        with pytest.raises(KeyError) as exc_info:
            ExporterRegistry.get("unknown_format")
        assert "No exporter registered for format 'unknown_format'" in str(exc_info.value)

    def test_register_new_exporter(self) -> None:
        @ExporterRegistry.register("test_format")
        class TestExporter:
            format_name: ClassVar[str] = "test_format"
            file_extension: ClassVar[str] = "test"

            def export(self, result: NestingResult, path: Path) -> None:
                path.write_text("test")

        assert ExporterRegistry.is_registered("test_format")
        assert ExporterRegistry.get("test_format") is TestExporter

    def test_exporters_satisfy_protocol(self) -> None:
        for name in ExporterRegistry.available_formats():
            assert isinstance(ExporterRegistry.get(name)(), Exporter)


class TestExportManager:
    """Tests for ExportManager."""

    def test_export_all(self, tmp_path: Path, result: NestingResult) -> None:
        manager = ExportManager(tmp_path / "out")
        files = manager.export_all(["svg", "csv", "json", "dxf"], result, "kitchen")

        assert set(files) == {"svg", "csv", "json", "dxf"}
        assert files["svg"] == tmp_path / "out" / "kitchen_svg.svg"
        assert files["csv"].name == "kitchen_csv.csv"
        assert all(path.exists() for path in files.values())

    def test_unknown_format_writes_nothing(self, tmp_path: Path, result: NestingResult) -> None:
        manager = ExportManager(tmp_path / "out")
        with pytest.raises(KeyError):
            manager.export_all(["svg", "nope"], result)
        assert not (tmp_path / "out").exists()

    def test_export_single(self, tmp_path: Path, result: NestingResult) -> None:
        path = ExportManager(tmp_path).export_single("json", result)
        assert path == tmp_path / "nesting_json.json"


# =============================================================================
# Exporters
# =============================================================================


class TestSvgExporter:
    def test_export_string_is_combined(self, result: NestingResult) -> None:
        svg = SvgExporter().export_string(result)
        assert svg.count("<svg") == 1

    def test_individual_sheets(self, tmp_path: Path, result: NestingResult) -> None:
        files = SvgExporter().export_individual_sheets(result, tmp_path / "layout.svg")
        assert [f.name for f in files] == [
            f"layout_{i}.svg" for i in range(1, result.total_sheets + 1)
        ]

    def test_single_sheet_keeps_base_name(self, tmp_path: Path) -> None:
        single = nest([Part(id="a", width=10, height=10)])
        files = SvgExporter().export_individual_sheets(single, tmp_path / "layout.svg")
        assert files == [tmp_path / "layout.svg"]


class TestCsvCutListExporter:
    def _rows(self, text: str) -> list[list[str]]:
        return list(csv.reader(io.StringIO(text)))

    def test_header_and_rows(self, result: NestingResult) -> None:
        rows = self._rows(CsvCutListExporter().export_string(result))
        assert rows[0] == CUT_LIST_HEADER
        part_rows = rows[1 : 1 + result.placed_parts]
        assert [r[1] for r in part_rows] == [p.id for p in result.placements]

    def test_row_values(self, result: NestingResult) -> None:
        rows = self._rows(CsvCutListExporter(precision=0).export_string(result))
        side = next(r for r in rows if len(r) > 1 and r[1] == "a")
        placed = next(p for p in result.placements if p.id == "a")
        assert side[0] == str(placed.sheet_index + 1)
        assert side[2] == "Side"
        assert side[3] == "Oak 18mm"
        assert side[6] == str(int(placed.rotation))
        assert side[9:11] == ["400", "300"]
        assert side[11] == "none"

    def test_unplaced_block(self, result: NestingResult) -> None:
        rows = self._rows(CsvCutListExporter().export_string(result))
        assert ["Unplaced", "Part ID", "Label", "Material", "Width", "Height"] in rows
        assert rows[-1][1] == "big"

    def test_unplaced_block_optional(self, result: NestingResult) -> None:
        text = CsvCutListExporter(include_unplaced=False).export_string(result)
        assert "Unplaced" not in text

    def test_negative_precision_rejected(self) -> None:
        with pytest.raises(ValueError):
            CsvCutListExporter(precision=-1)


class TestJsonResultExporter:
    def test_document(self, result: NestingResult) -> None:
        data = json.loads(JsonResultExporter().export_string(result))

        assert data["schema_version"] == SCHEMA_VERSION
        summary = data["summary"]
        assert summary["total_parts"] == 4
        assert summary["placed_parts"] == 3
        assert summary["unplaced_parts"] == 1
        assert summary["total_sheets"] == result.total_sheets
        assert summary["sort_strategy"] == "height"
        assert data["unplaced"][0]["id"] == "big"

    def test_placement_fields(self, result: NestingResult) -> None:
        data = result_to_dict(result)
        placement = next(
            p for sheet in data["sheets"] for p in sheet["placements"] if p["part_id"] == "a"
        )
        assert placement["label"] == "Side"
        assert placement["original_width"] == 400
        assert placement["material"] == {"id": "oak-18", "name": "Oak 18mm", "color": "#C8A165"}
        assert placement["metadata"] == {"cabinet": 1}

    def test_skyline_optional(self, result: NestingResult) -> None:
        assert "skyline" in result_to_dict(result)["sheets"][0]
        assert "skyline" not in result_to_dict(result, include_skyline=False)["sheets"][0]


class TestDxfExporter:
    def test_readable_drawing(self, result: NestingResult) -> None:
        doc = ezdxf.read(io.StringIO(DxfExporter().export_string(result)))
        msp = doc.modelspace()

        assert len(msp.query('LWPOLYLINE[layer=="SHEET"]')) == result.total_sheets
        assert len(msp.query('LWPOLYLINE[layer=="PARTS"]')) == result.placed_parts
        assert len(msp.query('LWPOLYLINE[layer=="MARGIN"]')) == result.total_sheets
        assert len(msp.query("MTEXT")) == result.placed_parts

    def test_layers(self, result: NestingResult) -> None:
        doc = ezdxf.read(io.StringIO(DxfExporter().export_string(result)))
        for name in ("SHEET", "PARTS", "LABELS", "MARGIN"):
            assert name in doc.layers

    def test_labels_optional(self, result: NestingResult) -> None:
        doc = ezdxf.read(io.StringIO(DxfExporter(show_labels=False).export_string(result)))
        assert len(doc.modelspace().query("MTEXT")) == 0

    def test_export_file(self, tmp_path: Path, result: NestingResult) -> None:
        path = tmp_path / "layout.dxf"
        DxfExporter().export(result, path)
        assert ezdxf.readfile(path).modelspace().query("LWPOLYLINE")

    def test_negative_gap_rejected(self) -> None:
        with pytest.raises(ValueError):
            DxfExporter(sheet_gap=-1)
