"""Pytest configuration and shared fixtures for nesting tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from panelnest.domain.value_objects import (
    MaterialInfo,
    NestingConfig,
    Part,
    SheetSize,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests across layers")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared domain fixtures
# =============================================================================


@pytest.fixture
def oak() -> MaterialInfo:
    return MaterialInfo(id="oak-18", name="Oak 18mm", color="#C8A165")


@pytest.fixture
def birch() -> MaterialInfo:
    return MaterialInfo(id="birch-12", name="Birch 12mm")


@pytest.fixture
def small_sheet_config() -> NestingConfig:
    """1000 x 1000 sheet with no clearance, for exact coordinates."""
    return NestingConfig(
        sheet_size=SheetSize(1000.0, 1000.0),
        cutting_tools_thick=0.0,
    )


@pytest.fixture
def cabinet_parts(oak: MaterialInfo) -> list[Part]:
    """A small mixed set of carcass parts."""
    return [
        Part(id="side-l", width=560.0, height=720.0, material=oak, label="Left side"),
        Part(id="side-r", width=560.0, height=720.0, material=oak, label="Right side"),
        Part(id="top", width=800.0, height=560.0, material=oak, label="Top"),
        Part(id="bottom", width=800.0, height=560.0, material=oak, label="Bottom"),
        Part(id="shelf", width=764.0, height=540.0, material=oak, label="Shelf"),
    ]


# =============================================================================
# Job file fixtures
# =============================================================================


@pytest.fixture
def job_data() -> dict[str, Any]:
    """Minimal valid job covering two materials."""
    return {
        "schema_version": "1.0",
        "sheet": {"width": 2440, "height": 1220},
        "options": {"cutting_tools_thick": 4},
        "parts": [
            {
                "id": "side",
                "width": 560,
                "height": 720,
                "quantity": 2,
                "label": "Side",
                "material": {"id": "oak-18", "name": "Oak 18mm"},
            },
            {
                "id": "door",
                "width": 396,
                "height": 716,
                "grain_direction": "vertical",
                "material": {"id": "birch-12", "name": "Birch 12mm"},
            },
        ],
    }


@pytest.fixture
def job_file(tmp_path: Path, job_data: dict[str, Any]) -> Path:
    path = tmp_path / "job.json"
    path.write_text(json.dumps(job_data))
    return path
