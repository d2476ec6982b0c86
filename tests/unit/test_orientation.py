"""Tests for rotation and grain rules."""

from __future__ import annotations

import pytest

from panelnest.domain.orientation import (
    ROTATION_ORDER,
    fits_on_empty_sheet,
    is_rotation_allowed,
    oriented_dimensions,
    rotation_priority,
)
from panelnest.domain.value_objects import (
    GrainDirection,
    NestingConfig,
    Part,
    Rotation,
    SheetSize,
)


@pytest.fixture
def plain_part() -> Part:
    return Part(id="p", width=300.0, height=200.0)


@pytest.fixture
def vertical_grain_part() -> Part:
    return Part(id="g", width=300.0, height=200.0, grain_direction=GrainDirection.VERTICAL)


class TestOrientedDimensions:
    """Tests for oriented_dimensions."""

    @pytest.mark.parametrize("rotation", [Rotation.R0, Rotation.R180])
    def test_keeps_axes(self, plain_part: Part, rotation: Rotation) -> None:
        rect = oriented_dimensions(plain_part, rotation)
        assert (rect.width, rect.height) == (300.0, 200.0)
        assert rect.rotation is rotation

    @pytest.mark.parametrize("rotation", [Rotation.R90, Rotation.R270])
    def test_swaps_axes(self, plain_part: Part, rotation: Rotation) -> None:
        rect = oriented_dimensions(plain_part, rotation)
        assert (rect.width, rect.height) == (200.0, 300.0)

    def test_accepts_plain_degrees(self, plain_part: Part) -> None:
        rect = oriented_dimensions(plain_part, 90)  # type: ignore[arg-type]
        assert rect.rotation is Rotation.R90
        assert rect.area == plain_part.area

    def test_invalid_degrees_rejected(self, plain_part: Part) -> None:
        with pytest.raises(ValueError):
            oriented_dimensions(plain_part, 45)  # type: ignore[arg-type]


class TestIsRotationAllowed:
    """Tests for is_rotation_allowed."""

    def test_rotation_disabled_only_allows_zero(self, plain_part: Part) -> None:
        config = NestingConfig(allow_rotation=False)
        assert is_rotation_allowed(plain_part, Rotation.R0, config)
        for rotation in (Rotation.R90, Rotation.R180, Rotation.R270):
            assert not is_rotation_allowed(plain_part, rotation, config)

    def test_free_rotation_without_grain(self, plain_part: Part) -> None:
        config = NestingConfig()
        assert all(is_rotation_allowed(plain_part, r, config) for r in Rotation)

    def test_sheet_grain_restricts_rotation(self, plain_part: Part) -> None:
        config = NestingConfig(grain_direction=GrainDirection.HORIZONTAL)
        allowed = {r for r in Rotation if is_rotation_allowed(plain_part, r, config)}
        assert allowed == {Rotation.R0, Rotation.R180}

    def test_part_grain_governs_when_sheet_has_none(
        self, vertical_grain_part: Part
    ) -> None:
        config = NestingConfig(grain_direction=GrainDirection.NONE, allow_rotation=True)
        allowed = {
            r for r in Rotation if is_rotation_allowed(vertical_grain_part, r, config)
        }
        assert allowed == {Rotation.R0, Rotation.R180}


class TestRotationPriority:
    """Tests for rotation_priority."""

    def test_full_order(self, plain_part: Part) -> None:
        assert rotation_priority(plain_part, NestingConfig()) == list(ROTATION_ORDER)
        assert ROTATION_ORDER == (Rotation.R0, Rotation.R180, Rotation.R90, Rotation.R270)

    def test_grain_order(self, vertical_grain_part: Part) -> None:
        assert rotation_priority(vertical_grain_part, NestingConfig()) == [
            Rotation.R0,
            Rotation.R180,
        ]

    def test_string_grain_values(self) -> None:
        part = Part(id="p", width=300, height=200, grain_direction="none")
        assert rotation_priority(part, NestingConfig(grain_direction="none")) == list(
            ROTATION_ORDER
        )
        assert rotation_priority(part, NestingConfig(grain_direction="vertical")) == [
            Rotation.R0,
            Rotation.R180,
        ]

    def test_never_empty(self, plain_part: Part) -> None:
        config = NestingConfig(allow_rotation=False)
        assert rotation_priority(plain_part, config) == [Rotation.R0]


class TestFitsOnEmptySheet:
    """Tests for fits_on_empty_sheet."""

    def test_fits_within_margins(self) -> None:
        config = NestingConfig(sheet_size=SheetSize(1000, 500), cutting_tools_thick=10)
        assert fits_on_empty_sheet(Part(id="p", width=980, height=480), config)
        assert not fits_on_empty_sheet(Part(id="p", width=981, height=480), config)

    def test_rotation_makes_part_fit(self) -> None:
        config = NestingConfig(sheet_size=SheetSize(1000, 500), cutting_tools_thick=0)
        tall = Part(id="p", width=400, height=900)
        assert fits_on_empty_sheet(tall, config)
        assert not fits_on_empty_sheet(tall, NestingConfig(
            sheet_size=SheetSize(1000, 500), cutting_tools_thick=0, allow_rotation=False
        ))

    def test_oversized_part(self) -> None:
        config = NestingConfig(sheet_size=SheetSize(1000, 1000), cutting_tools_thick=0)
        assert not fits_on_empty_sheet(Part(id="p", width=1200, height=50), config)
