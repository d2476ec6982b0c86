"""Skyline frontier for a single sheet.

The skyline is the upper envelope of everything already placed on a sheet,
seen from directly above: an ordered list of horizontal segments covering
``[0, sheet width)`` without gaps or overlaps. Committing a part raises the
frontier to the part's top plus the clearance, widened by the clearance to
its right. A part resting on a raised segment adds the clearance once more,
so stacked parts end up ``2 * spacing`` apart; parts on the bare sheet floor
rest on the edge margin instead.

Coordinates: x grows rightward, y grows away from the origin edge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from panelnest.domain.value_objects import PlacedPart, SheetSize

logger = logging.getLogger(__name__)

# Tolerance for float comparisons on accumulated widths.
EPSILON = 1e-9


@dataclass(frozen=True)
class SkylineSegment:
    """One horizontal piece of the frontier.

    Attributes:
        x: Left edge of the segment.
        y: Height of the frontier across the segment.
        width: Horizontal extent.
    """

    x: float
    y: float
    width: float

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class SkylineSheet:
    """Mutable packing state of one open sheet.

    Attributes:
        index: Zero-based creation index of the sheet.
        width: Sheet width.
        height: Sheet height.
        skyline: Frontier segments sorted by x.
        placements: Parts committed to this sheet, in placement order.
    """

    index: int
    width: float
    height: float
    skyline: list[SkylineSegment] = field(default_factory=list)
    placements: list[PlacedPart] = field(default_factory=list)

    @classmethod
    def open(cls, index: int, sheet_size: SheetSize) -> SkylineSheet:
        """Create a sheet with a single flat frontier segment."""
        return cls(
            index=index,
            width=sheet_size.width,
            height=sheet_size.height,
            skyline=[SkylineSegment(x=0.0, y=0.0, width=sheet_size.width)],
        )

    @property
    def lowest_level(self) -> float:
        """Lowest frontier height; no part can rest below it."""
        if not self.skyline:
            return 0.0
        return min(segment.y for segment in self.skyline)

    @property
    def highest_level(self) -> float:
        if not self.skyline:
            return 0.0
        return max(segment.y for segment in self.skyline)


def find_position(
    sheet: SkylineSheet,
    rect_width: float,
    rect_height: float,
    spacing: float,
    margin: float | None = None,
) -> tuple[float, float] | None:
    """Find the bottom-left position for a rectangle on a sheet.

    Every frontier segment is tried as a left anchor. The rectangle's floor
    is the highest resting level under its footprint widened by ``spacing``
    on the right: ``segment.y + spacing`` over raised segments, ``margin``
    over the bare sheet. The best anchor has the lowest y; ties go to the
    leftmost x.

    Args:
        sheet: Sheet whose frontier is searched (not modified).
        rect_width: Oriented width of the rectangle.
        rect_height: Oriented height of the rectangle.
        spacing: Clearance between parts.
        margin: Clearance from the sheet boundary; defaults to ``spacing``.

    Returns:
        ``(x, y)`` of the rectangle's anchor, or None if nothing fits.
    """
    if margin is None:
        margin = spacing
    max_x = sheet.width - margin
    max_y = sheet.height - margin

    if not sheet.skyline:
        if margin + rect_width <= max_x + EPSILON and margin + rect_height <= max_y + EPSILON:
            return (margin, margin)
        return None

    segments = sheet.skyline
    best: tuple[float, float] | None = None

    for i, anchor in enumerate(segments):
        x_start = max(anchor.x, margin)
        x_end = x_start + rect_width
        if x_end > max_x + EPSILON:
            continue

        # Clearance region to the right of the part, clipped at the sheet edge
        scan_end = min(x_end + spacing, sheet.width)
        scan_width = scan_end - x_start
        y_candidate = margin
        covered = 0.0

        # Segments are sorted and disjoint: nothing before i can overlap
        for segment in segments[i:]:
            if segment.x >= scan_end:
                break
            if segment.right <= x_start:
                continue
            overlap = min(segment.right, scan_end) - max(segment.x, x_start)
            if overlap > 0:
                covered += overlap
                if segment.y > EPSILON:
                    y_candidate = max(y_candidate, segment.y + spacing)
            if covered + EPSILON >= scan_width:
                break

        if covered + EPSILON < scan_width:
            continue

        if y_candidate + rect_height > max_y + EPSILON:
            continue

        if best is None or y_candidate < best[1] or (
            y_candidate == best[1] and x_start < best[0]
        ):
            best = (x_start, y_candidate)

    return best


def commit_placement(
    sheet: SkylineSheet,
    x: float,
    width: float,
    y: float,
    height: float,
    spacing: float,
) -> None:
    """Raise the frontier over a newly occupied rectangle.

    Segments outside the occupied span are kept, intersecting ones are split
    and keep their left/right remainders, and a new segment is inserted at
    ``y + height + spacing`` covering the rectangle plus its right-hand
    clearance. Neighbours at equal height are then merged.

    Args:
        sheet: Sheet to update in place.
        x: Left edge of the placed rectangle.
        width: Oriented width of the placed rectangle.
        y: Anchor y of the placed rectangle.
        height: Oriented height of the placed rectangle.
        spacing: Clearance between parts.
    """
    x_end = min(x + width + spacing, sheet.width)
    top = y + height + spacing

    segments: list[SkylineSegment] = []
    for segment in sheet.skyline:
        if segment.right <= x or segment.x >= x_end:
            segments.append(segment)
            continue

        if segment.x < x:
            segments.append(SkylineSegment(x=segment.x, y=segment.y, width=x - segment.x))

        if segment.right > x_end:
            segments.append(
                SkylineSegment(x=x_end, y=segment.y, width=segment.right - x_end)
            )

    segments.append(SkylineSegment(x=x, y=top, width=x_end - x))
    segments.sort(key=lambda s: s.x)

    merged: list[SkylineSegment] = []
    for segment in segments:
        if merged:
            last = merged[-1]
            if last.y == segment.y and abs(last.right - segment.x) <= EPSILON:
                merged[-1] = SkylineSegment(
                    x=last.x, y=last.y, width=last.width + segment.width
                )
                continue
        merged.append(segment)

    sheet.skyline = merged
    logger.debug(
        "Sheet %d frontier now has %d segments (max level %.1f)",
        sheet.index,
        len(merged),
        sheet.highest_level,
    )
