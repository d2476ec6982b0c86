"""Rotation and grain rules for placing parts on sheets.

Pure functions: nothing here looks at placement state.
"""

from __future__ import annotations

import logging
from typing import Protocol

from panelnest.domain.value_objects import (
    GrainDirection,
    NestingConfig,
    OrientedRect,
    Part,
    Rotation,
)

logger = logging.getLogger(__name__)

# Preferred order; 0 first so parts keep their designed orientation if possible.
ROTATION_ORDER: tuple[Rotation, ...] = (
    Rotation.R0,
    Rotation.R180,
    Rotation.R90,
    Rotation.R270,
)

GRAIN_SAFE_ROTATIONS: frozenset[Rotation] = frozenset({Rotation.R0, Rotation.R180})


class Rectangular(Protocol):
    width: float
    height: float


def oriented_dimensions(rect: Rectangular, rotation: Rotation) -> OrientedRect:
    """Footprint of ``rect`` after applying ``rotation``.

    Args:
        rect: Anything exposing ``width`` and ``height``.
        rotation: Rotation to apply.

    Returns:
        OrientedRect with width and height swapped for 90 and 270 degrees.
    """
    rotation = Rotation(rotation)
    if rotation.swaps_axes:
        return OrientedRect(width=rect.height, height=rect.width, rotation=rotation)
    return OrientedRect(width=rect.width, height=rect.height, rotation=rotation)


def is_rotation_allowed(
    part: Part,
    rotation: Rotation,
    config: NestingConfig,
) -> bool:
    """Check whether ``rotation`` is permitted for ``part`` under ``config``.

    Sheet grain takes precedence over part grain; either one restricts
    rotations to 0 and 180 degrees, which keep the grain aligned.
    """
    rotation = Rotation(rotation)
    if not config.allow_rotation:
        return rotation is Rotation.R0

    if config.grain_direction is not GrainDirection.NONE:
        return rotation in GRAIN_SAFE_ROTATIONS

    if part.grain_direction is not GrainDirection.NONE:
        return rotation in GRAIN_SAFE_ROTATIONS

    return True


def rotation_priority(part: Part, config: NestingConfig) -> list[Rotation]:
    """Rotations to try for ``part``, in preference order.

    Never empty: rotation 0 is always attempted as a last resort.
    """
    allowed = [r for r in ROTATION_ORDER if is_rotation_allowed(part, r, config)]
    if not allowed:
        logger.debug("No rotation allowed for part '%s', falling back to 0", part.id)
        return [Rotation.R0]
    return allowed


def fits_on_empty_sheet(part: Part, config: NestingConfig) -> bool:
    """Check whether ``part`` fits a fresh sheet under any allowed rotation.

    Mirrors the bounds the packer applies to an empty sheet: the part must
    stay inside the edge margin on every side.
    """
    margin = config.effective_edge_margin
    usable_width = config.sheet_size.width - 2 * margin
    usable_height = config.sheet_size.height - 2 * margin
    for rotation in rotation_priority(part, config):
        footprint = oriented_dimensions(part, rotation)
        if footprint.width <= usable_width and footprint.height <= usable_height:
            return True
    return False
