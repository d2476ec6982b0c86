"""Infrastructure layer - skyline packing, rendering and export."""

from .bin_packing import (
    NestingResult,
    NestingService,
    SheetLayout,
    SkylineNester,
    StrategyOutcome,
    nest,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .skyline import SkylineSegment, SkylineSheet, commit_placement, find_position

__all__ = [
    # Packing
    "NestingResult",
    "NestingService",
    "SheetLayout",
    "SkylineNester",
    "StrategyOutcome",
    "nest",
    # Skyline
    "SkylineSegment",
    "SkylineSheet",
    "commit_placement",
    "find_position",
    # Rendering
    "CutDiagramRenderer",
]
