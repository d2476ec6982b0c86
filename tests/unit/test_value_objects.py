"""Tests for nesting value objects."""

from __future__ import annotations

import pytest

from panelnest.domain.value_objects import (
    STANDARD_SHEET_SIZES,
    GrainDirection,
    MaterialInfo,
    NestingConfig,
    Part,
    PlacedPart,
    Rotation,
    SheetSize,
    SortStrategy,
)


class TestPart:
    """Tests for Part."""

    def test_defaults(self) -> None:
        part = Part(id="p1", width=300.0, height=200.0)
        assert part.grain_direction is GrainDirection.NONE
        assert part.material == MaterialInfo()
        assert part.metadata is None

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 100)])
    def test_non_positive_dimensions_rejected(self, width: float, height: float) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            Part(id="bad", width=width, height=height)

    def test_area_and_max_side(self) -> None:
        part = Part(id="p1", width=300.0, height=200.0)
        assert part.area == 60000.0
        assert part.max_side == 300.0

    def test_display_label_falls_back_to_id(self) -> None:
        assert Part(id="p1", width=1, height=1).display_label == "p1"
        assert Part(id="p1", width=1, height=1, label="Shelf").display_label == "Shelf"

    def test_grain_given_as_string(self) -> None:
        assert Part(id="p1", width=1, height=1, grain_direction="none").grain_direction is (
            GrainDirection.NONE
        )
        assert Part(id="p1", width=1, height=1, grain_direction="vertical").grain_direction is (
            GrainDirection.VERTICAL
        )

    def test_unknown_grain_rejected(self) -> None:
        with pytest.raises(ValueError):
            Part(id="p1", width=1, height=1, grain_direction="diagonal")

    def test_is_immutable(self) -> None:
        part = Part(id="p1", width=300.0, height=200.0)
        with pytest.raises(AttributeError):
            part.width = 10.0  # type: ignore[misc]


class TestSheetSize:
    """Tests for SheetSize."""

    def test_default_is_common_board(self) -> None:
        sheet = SheetSize()
        assert (sheet.width, sheet.height) == (2440.0, 1220.0)

    def test_rejects_non_positive(self) -> None:
        with pytest.raises(ValueError, match="width"):
            SheetSize(0, 100)
        with pytest.raises(ValueError, match="height"):
            SheetSize(100, -1)

    def test_display_label(self) -> None:
        assert SheetSize(1000.0, 500.0).display_label == "1000 X 500"
        assert SheetSize(1000.0, 500.0, "Offcut").display_label == "Offcut"

    def test_standard_sizes(self) -> None:
        assert [s.display_label for s in STANDARD_SHEET_SIZES] == [
            "2440 X 1220 mm",
            "2720 X 1810 mm",
            "3620 X 1810 mm",
        ]


class TestNestingConfig:
    """Tests for NestingConfig."""

    def test_defaults(self) -> None:
        config = NestingConfig()
        assert config.allow_rotation is True
        assert config.grain_direction is GrainDirection.NONE
        assert config.sort_strategy is SortStrategy.HEIGHT
        assert config.cutting_tools_thick == 10.0
        assert config.edge_margin is None

    def test_edge_margin_defaults_to_spacing(self) -> None:
        assert NestingConfig(cutting_tools_thick=4.0).effective_edge_margin == 4.0

    def test_explicit_zero_edge_margin(self) -> None:
        config = NestingConfig(cutting_tools_thick=4.0, edge_margin=0.0)
        assert config.effective_edge_margin == 0.0

    def test_negative_clearances_rejected(self) -> None:
        with pytest.raises(ValueError, match="Cutting tools"):
            NestingConfig(cutting_tools_thick=-1.0)
        with pytest.raises(ValueError, match="Edge margin"):
            NestingConfig(edge_margin=-1.0)

    def test_enum_options_given_as_strings(self) -> None:
        config = NestingConfig(grain_direction="horizontal", sort_strategy="area")
        assert config.grain_direction is GrainDirection.HORIZONTAL
        assert config.sort_strategy is SortStrategy.AREA
        assert config == NestingConfig(
            grain_direction=GrainDirection.HORIZONTAL, sort_strategy=SortStrategy.AREA
        )

    def test_unknown_sort_strategy_rejected(self) -> None:
        with pytest.raises(ValueError):
            NestingConfig(sort_strategy="weight")


class TestSortStrategy:
    """Tests for SortStrategy keys."""

    def test_keys(self) -> None:
        part = Part(id="p", width=500.0, height=200.0)
        assert SortStrategy.HEIGHT.key(part) == 200.0
        assert SortStrategy.MAX_SIDE.key(part) == 500.0
        assert SortStrategy.AREA.key(part) == 100000.0


class TestRotation:
    """Tests for Rotation."""

    def test_swaps_axes(self) -> None:
        assert not Rotation.R0.swaps_axes
        assert Rotation.R90.swaps_axes
        assert not Rotation.R180.swaps_axes
        assert Rotation.R270.swaps_axes

    def test_degrees(self) -> None:
        assert [int(r) for r in Rotation] == [0, 90, 180, 270]


class TestPlacedPart:
    """Tests for PlacedPart."""

    def test_reports_nominal_and_oriented_sizes(self) -> None:
        part = Part(id="p", width=300.0, height=200.0, label="Back")
        placed = PlacedPart(
            part=part,
            x=10.0,
            y=20.0,
            width=200.0,
            height=300.0,
            rotation=Rotation.R90,
            sheet_index=0,
        )
        assert placed.id == "p"
        assert placed.label == "Back"
        assert (placed.original_width, placed.original_height) == (300.0, 200.0)
        assert placed.rotated
        assert placed.right_edge == 210.0
        assert placed.top_edge == 320.0
        assert placed.area == 60000.0

    def test_negative_position_rejected(self) -> None:
        part = Part(id="p", width=1, height=1)
        with pytest.raises(ValueError, match="Position"):
            PlacedPart(part, x=-1, y=0, width=1, height=1, rotation=Rotation.R0, sheet_index=0)

    def test_negative_sheet_index_rejected(self) -> None:
        part = Part(id="p", width=1, height=1)
        with pytest.raises(ValueError, match="Sheet index"):
            PlacedPart(part, x=0, y=0, width=1, height=1, rotation=Rotation.R0, sheet_index=-1)


class TestMaterialInfo:
    def test_display_name(self) -> None:
        assert MaterialInfo(id="m1", name="Oak").display_name == "Oak"
        assert MaterialInfo(id="m1").display_name == "m1"
        assert MaterialInfo().display_name == "Unknown Material"

    def test_hashable_for_grouping(self) -> None:
        assert {MaterialInfo(id="a"): 1}[MaterialInfo(id="a")] == 1
