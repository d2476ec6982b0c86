"""Domain layer - nesting value objects and orientation rules."""

from .orientation import (
    ROTATION_ORDER,
    fits_on_empty_sheet,
    is_rotation_allowed,
    oriented_dimensions,
    rotation_priority,
)
from .value_objects import (
    STANDARD_SHEET_SIZES,
    GrainDirection,
    MaterialInfo,
    NestingConfig,
    OrientedRect,
    Part,
    PlacedPart,
    Rotation,
    SheetSize,
    SortStrategy,
)

__all__ = [
    # Value objects
    "GrainDirection",
    "MaterialInfo",
    "NestingConfig",
    "OrientedRect",
    "Part",
    "PlacedPart",
    "Rotation",
    "STANDARD_SHEET_SIZES",
    "SheetSize",
    "SortStrategy",
    # Orientation rules
    "ROTATION_ORDER",
    "fits_on_empty_sheet",
    "is_rotation_allowed",
    "oriented_dimensions",
    "rotation_priority",
]
