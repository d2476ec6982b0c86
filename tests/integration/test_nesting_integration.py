"""End-to-end tests: job file to nested layout to exported files."""

from __future__ import annotations

import csv
import json
from itertools import combinations
from pathlib import Path

import pytest

from panelnest.application.config import (
    config_to_nesting_config,
    config_to_parts,
    load_config,
)
from panelnest.domain.value_objects import GrainDirection, Rotation
from panelnest.infrastructure import NestingService
from panelnest.infrastructure.exporters import ExportManager

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "jobs"

pytestmark = pytest.mark.integration


@pytest.fixture
def kitchen_job():
    return load_config(FIXTURES_PATH / "kitchen.json")


@pytest.fixture
def service(kitchen_job) -> NestingService:
    return NestingService(config_to_nesting_config(kitchen_job))


class TestKitchenJob:
    """Nesting a realistic job across two materials."""

    def test_every_part_placed(self, kitchen_job, service: NestingService) -> None:
        parts = config_to_parts(kitchen_job)
        result = service.nest(parts)

        assert result.total_parts == kitchen_job.total_quantity == 13
        assert result.placed_parts == 13
        assert result.unplaced == ()

    def test_layouts_are_valid(self, kitchen_job, service: NestingService) -> None:
        config = service.config
        margin = config.effective_edge_margin
        spacing = config.cutting_tools_thick
        sheet = config.sheet_size

        for result in service.nest_by_material(config_to_parts(kitchen_job)).values():
            for layout in result.sheets:
                for p in layout.placements:
                    assert p.x >= margin and p.y >= margin
                    assert p.right_edge <= sheet.width - margin + 1e-6
                    assert p.top_edge <= sheet.height - margin + 1e-6
                for a, b in combinations(layout.placements, 2):
                    assert (
                        a.right_edge + spacing <= b.x + 1e-6
                        or b.right_edge + spacing <= a.x + 1e-6
                        or a.top_edge + spacing <= b.y + 1e-6
                        or b.top_edge + spacing <= a.y + 1e-6
                    )

    def test_doors_keep_grain(self, kitchen_job, service: NestingService) -> None:
        result = service.nest_best(config_to_parts(kitchen_job))
        doors = [p for p in result.placements if p.part.grain_direction is GrainDirection.VERTICAL]
        assert len(doors) == 4
        assert all(p.rotation in (Rotation.R0, Rotation.R180) for p in doors)

    def test_materials_split(self, kitchen_job, service: NestingService) -> None:
        results = service.nest_by_material(config_to_parts(kitchen_job))
        assert [m.id for m in results] == ["carcass", "oak"]
        assert sum(r.total_parts for r in results.values()) == 13

    def test_best_strategy_not_worse(self, kitchen_job, service: NestingService) -> None:
        parts = config_to_parts(kitchen_job)
        best = service.nest_best(parts)
        for outcome in service.compare_strategies(parts):
            assert best.material_efficiency >= outcome.material_efficiency


class TestExportRoundTrip:
    """Exported files reflect the nested layout."""

    def test_export_all_formats(self, tmp_path: Path, kitchen_job, service: NestingService) -> None:
        result = service.nest(config_to_parts(kitchen_job))
        files = ExportManager(tmp_path).export_all(
            ["svg", "csv", "json", "dxf"], result, project_name="kitchen"
        )

        data = json.loads(files["json"].read_text())
        assert data["summary"]["placed_parts"] == result.placed_parts
        assert data["sheets"][0]["label"] == "2440 X 1220 mm"

        with files["csv"].open(newline="") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 1 + result.placed_parts

        svg = files["svg"].read_text()
        assert svg.count("<!-- Sheet outline -->") == result.total_sheets
        assert "Oak veneer 19mm" in svg

        assert files["dxf"].stat().st_size > 0

    def test_metadata_passes_through(self, kitchen_job, service: NestingService, tmp_path: Path) -> None:
        result = service.nest(config_to_parts(kitchen_job))
        path = ExportManager(tmp_path).export_single("json", result)
        data = json.loads(path.read_text())
        doors = [
            p for s in data["sheets"] for p in s["placements"] if p["part_id"].startswith("door#")
        ]
        assert all(p["metadata"] == {"finish": "oiled"} for p in doors)
