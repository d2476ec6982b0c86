"""Skyline bottom-left nesting of rectangular parts onto stock sheets.

This module holds the result data structures and the greedy driver that
feeds parts, one at a time, into per-sheet skylines. Result dataclasses are
frozen; only the per-run sheet state in :mod:`panelnest.infrastructure.skyline`
is mutable, and it never escapes a run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from panelnest.domain.orientation import oriented_dimensions, rotation_priority
from panelnest.domain.value_objects import (
    MaterialInfo,
    NestingConfig,
    Part,
    PlacedPart,
    SheetSize,
    SortStrategy,
)
from panelnest.infrastructure.skyline import (
    EPSILON,
    SkylineSegment,
    SkylineSheet,
    commit_placement,
    find_position,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetLayout:
    """Final layout of one sheet.

    Attributes:
        index: Zero-based index of this sheet in the run.
        sheet_size: Dimensions of the sheet.
        placements: Parts placed on this sheet, in placement order.
        skyline: Frontier left behind by the last placement.
        edge_margin: Clearance kept from the sheet boundary during the run.
    """

    index: int
    sheet_size: SheetSize
    placements: tuple[PlacedPart, ...]
    skyline: tuple[SkylineSegment, ...] = ()
    edge_margin: float = 0.0

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def used_area(self) -> float:
        """Total oriented footprint area of the placed parts."""
        return sum(p.area for p in self.placements)

    @property
    def area(self) -> float:
        return self.sheet_size.area

    @property
    def waste_area(self) -> float:
        return max(0.0, self.area - self.used_area)

    @property
    def efficiency(self) -> float:
        """Percentage of the sheet covered by parts."""
        if self.area == 0:
            return 0.0
        return min(100.0, self.used_area / self.area * 100)

    @property
    def part_count(self) -> int:
        return len(self.placements)

    @property
    def highest_point(self) -> float:
        """Top edge of the tallest part on the sheet."""
        if not self.placements:
            return 0.0
        return max(p.top_edge for p in self.placements)


@dataclass(frozen=True)
class NestingResult:
    """Complete result of one nesting run.

    Attributes:
        sheets: Sheet layouts in creation order.
        placements: Every placed part, in placement order.
        unplaced: Parts that fit no sheet, in the order they were rejected.
        total_parts: Number of parts submitted.
        material_waste: Total sheet area minus total placed area.
        material_efficiency: Placed area over total sheet area, in percent.
        sort_strategy: Ordering used for this run.
    """

    sheets: tuple[SheetLayout, ...]
    placements: tuple[PlacedPart, ...]
    unplaced: tuple[Part, ...]
    total_parts: int
    material_waste: float
    material_efficiency: float
    sort_strategy: SortStrategy = SortStrategy.HEIGHT

    def __post_init__(self) -> None:
        if self.material_waste < 0:
            raise ValueError("Material waste must be non-negative")
        if self.material_efficiency < 0 or self.material_efficiency > 100:
            raise ValueError("Material efficiency must be between 0 and 100")

    @property
    def total_sheets(self) -> int:
        return len(self.sheets)

    @property
    def placed_parts(self) -> int:
        return len(self.placements)

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def total_area(self) -> float:
        return sum(sheet.area for sheet in self.sheets)


class SkylineNester:
    """Greedy skyline nester with bottom-left placement.

    Parts are sorted once by the configured strategy (descending). Each part
    is tried on every open sheet in creation order, under every allowed
    rotation in priority order; the first feasible combination wins. When no
    open sheet accepts the part, a new sheet is opened; if even the fresh
    sheet rejects it, the part is reported as unplaced and the sheet is
    discarded.

    Attributes:
        config: Run-wide nesting parameters.
    """

    def __init__(self, config: NestingConfig | None = None) -> None:
        self.config = config or NestingConfig()

    def nest(self, parts: Sequence[Part]) -> NestingResult:
        """Nest parts onto as few sheets as the greedy order allows.

        Args:
            parts: Parts to place. Empty input yields an empty result.

        Returns:
            NestingResult with sheets, placements and rejected parts.
        """
        ordered = self._sort_parts(parts)
        sheets: list[SkylineSheet] = []
        placements: list[PlacedPart] = []
        unplaced: list[Part] = []

        logger.debug(
            "Nesting %d parts on %s sheets (strategy=%s, spacing=%.1f)",
            len(ordered),
            self.config.sheet_size.display_label,
            self.config.sort_strategy.value,
            self.config.cutting_tools_thick,
        )

        for part in ordered:
            placed = None
            for sheet in sheets:
                placed = self._try_place_on_sheet(part, sheet)
                if placed is not None:
                    break

            if placed is None:
                fresh = SkylineSheet.open(len(sheets), self.config.sheet_size)
                placed = self._try_place_on_sheet(part, fresh)
                if placed is not None:
                    sheets.append(fresh)

            if placed is None:
                logger.warning(
                    "Part '%s' (%gx%g) does not fit on a %s sheet, skipping",
                    part.id,
                    part.width,
                    part.height,
                    self.config.sheet_size.display_label,
                )
                unplaced.append(part)
                continue

            placements.append(placed)

        result = self._build_result(sheets, placements, unplaced, len(ordered))
        logger.info(
            "Nested %d/%d parts on %d sheets (%.1f%% efficiency)",
            result.placed_parts,
            result.total_parts,
            result.total_sheets,
            result.material_efficiency,
        )
        return result

    def _sort_parts(self, parts: Iterable[Part]) -> list[Part]:
        """Order parts by the strategy key, largest first.

        ``sorted`` is stable, so equal keys keep their input order.
        """
        return sorted(parts, key=self.config.sort_strategy.key, reverse=True)

    def _try_place_on_sheet(
        self,
        part: Part,
        sheet: SkylineSheet,
    ) -> PlacedPart | None:
        """Place ``part`` on ``sheet`` under the first rotation that fits.

        Mutates the sheet's skyline and placement list on success.
        """
        spacing = self.config.cutting_tools_thick
        margin = self.config.effective_edge_margin

        for rotation in rotation_priority(part, self.config):
            footprint = oriented_dimensions(part, rotation)
            if not self._has_headroom(sheet, footprint.height):
                continue

            position = find_position(
                sheet, footprint.width, footprint.height, spacing, margin
            )
            if position is None:
                continue

            x, y = position
            commit_placement(sheet, x, footprint.width, y, footprint.height, spacing)
            placed = PlacedPart(
                part=part,
                x=x,
                y=y,
                width=footprint.width,
                height=footprint.height,
                rotation=rotation,
                sheet_index=sheet.index,
            )
            sheet.placements.append(placed)
            logger.debug(
                "Placed '%s' on sheet %d at (%.1f, %.1f), %gx%g rotated %d",
                part.id,
                sheet.index,
                x,
                y,
                footprint.width,
                footprint.height,
                int(rotation),
            )
            return placed

        return None

    def _has_headroom(self, sheet: SkylineSheet, height: float) -> bool:
        """Quick check that a part of ``height`` could rest anywhere on ``sheet``.

        Nothing rests below the lowest frontier level or the edge margin, so
        a False here means ``find_position`` would return None as well.
        """
        margin = self.config.effective_edge_margin
        floor = max(sheet.lowest_level, margin)
        return floor + height <= sheet.height - margin + EPSILON

    def _build_result(
        self,
        sheets: list[SkylineSheet],
        placements: list[PlacedPart],
        unplaced: list[Part],
        total_parts: int,
    ) -> NestingResult:
        layouts = tuple(
            SheetLayout(
                index=sheet.index,
                sheet_size=self.config.sheet_size,
                placements=tuple(sheet.placements),
                skyline=tuple(sheet.skyline),
                edge_margin=self.config.effective_edge_margin,
            )
            for sheet in sheets
        )

        total_area = sum(layout.area for layout in layouts)
        used_area = sum(p.area for p in placements)
        if total_area > 0:
            waste = max(0.0, total_area - used_area)
            efficiency = min(100.0, used_area / total_area * 100)
        else:
            waste = 0.0
            efficiency = 0.0

        return NestingResult(
            sheets=layouts,
            placements=tuple(placements),
            unplaced=tuple(unplaced),
            total_parts=total_parts,
            material_waste=waste,
            material_efficiency=efficiency,
            sort_strategy=self.config.sort_strategy,
        )


def nest(parts: Sequence[Part], config: NestingConfig | None = None) -> NestingResult:
    """Nest ``parts`` with a fresh :class:`SkylineNester`."""
    return SkylineNester(config).nest(parts)


@dataclass(frozen=True)
class StrategyOutcome:
    """Result of one run in a strategy comparison."""

    strategy: SortStrategy
    result: NestingResult

    @property
    def total_sheets(self) -> int:
        return self.result.total_sheets

    @property
    def material_efficiency(self) -> float:
        return self.result.material_efficiency


class NestingService:
    """Coordinates nesting runs over a single configuration.

    Furniture projects usually mix several board materials. Parts of
    different materials must never share a sheet, so ``nest_by_material``
    runs one independent nesting per material. The service can also try
    every sort strategy and keep the most efficient layout.

    Attributes:
        config: Base nesting configuration for every run.
    """

    def __init__(self, config: NestingConfig | None = None) -> None:
        self.config = config or NestingConfig()

    def nest(self, parts: Sequence[Part]) -> NestingResult:
        """Single run with the configured strategy."""
        return SkylineNester(self.config).nest(parts)

    def nest_by_material(
        self,
        parts: Sequence[Part],
        best_strategy: bool = False,
    ) -> dict[MaterialInfo, NestingResult]:
        """Run one independent nesting per material.

        Args:
            parts: Parts of any mix of materials.
            best_strategy: Try every sort strategy per material and keep
                the most efficient layout.

        Returns:
            Results keyed by material, in first-seen material order.
        """
        groups = self._group_by_material(parts)
        logger.info(
            "Nesting %d parts across %d material groups",
            len(parts),
            len(groups),
        )

        results: dict[MaterialInfo, NestingResult] = {}
        for material, group_parts in groups.items():
            if best_strategy:
                result = self.nest_best(group_parts)
            else:
                result = self.nest(group_parts)
            logger.debug(
                "Material %s: %d parts -> %d sheets",
                material.display_name,
                len(group_parts),
                result.total_sheets,
            )
            results[material] = result
        return results

    def compare_strategies(
        self,
        parts: Sequence[Part],
        strategies: Sequence[SortStrategy] | None = None,
    ) -> list[StrategyOutcome]:
        """Run the same parts once per sort strategy.

        Args:
            parts: Parts to nest.
            strategies: Strategies to try; all of them by default.

        Returns:
            One outcome per strategy, in the order tried.
        """
        if strategies is None:
            strategies = list(SortStrategy)

        outcomes: list[StrategyOutcome] = []
        for strategy in strategies:
            config = self._with_strategy(strategy)
            result = SkylineNester(config).nest(parts)
            outcomes.append(StrategyOutcome(strategy=strategy, result=result))
        return outcomes

    def nest_best(
        self,
        parts: Sequence[Part],
        strategies: Sequence[SortStrategy] | None = None,
    ) -> NestingResult:
        """Nest with every strategy and keep the most efficient result.

        Ties keep the strategy tried first.
        """
        outcomes = self.compare_strategies(parts, strategies)
        if not outcomes:
            raise ValueError("At least one sort strategy is required")

        best = outcomes[0]
        for outcome in outcomes[1:]:
            if outcome.material_efficiency > best.material_efficiency:
                best = outcome

        logger.info(
            "Best strategy: %s (%d sheets, %.1f%% efficiency)",
            best.strategy.value,
            best.total_sheets,
            best.material_efficiency,
        )
        return best.result

    def _with_strategy(self, strategy: SortStrategy) -> NestingConfig:
        return replace(self.config, sort_strategy=strategy)

    def _group_by_material(
        self,
        parts: Sequence[Part],
    ) -> dict[MaterialInfo, list[Part]]:
        groups: dict[MaterialInfo, list[Part]] = {}
        for part in parts:
            groups.setdefault(part.material, []).append(part)
        return groups
