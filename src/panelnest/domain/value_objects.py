"""Value objects for the nesting domain.

All classes here are immutable. Dimensions are expressed in a single
consistent linear unit (millimetres in practice); no unit conversion
happens anywhere in the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class GrainDirection(str, Enum):
    """Directional fiber/pattern constraint of a part or of the sheet stock.

    Attributes:
        NONE: No grain, any rotation preserves appearance.
        HORIZONTAL: Grain runs along the x axis.
        VERTICAL: Grain runs along the y axis.
    """

    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SortStrategy(str, Enum):
    """Priority key used to order parts before packing (always descending).

    Attributes:
        HEIGHT: Nominal part height.
        MAX_SIDE: Longest nominal side.
        AREA: Nominal area.
    """

    HEIGHT = "height"
    MAX_SIDE = "max_side"
    AREA = "area"

    def key(self, part: Part) -> float:
        """Sort key for a part under this strategy."""
        if self is SortStrategy.MAX_SIDE:
            return part.max_side
        if self is SortStrategy.AREA:
            return part.area
        return part.height


class Rotation(IntEnum):
    """Clockwise rotation of a part on the sheet, in degrees."""

    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270

    @property
    def swaps_axes(self) -> bool:
        """True when width and height trade places."""
        return self in (Rotation.R90, Rotation.R270)


@dataclass(frozen=True)
class MaterialInfo:
    """Opaque material identity carried through packing for display.

    Attributes:
        id: Material identifier from the producing system.
        name: Human-readable material name.
        color: Display colour (any SVG colour string).
    """

    id: str = ""
    name: str = ""
    color: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.id or "Unknown Material"


@dataclass(frozen=True)
class Part:
    """A rectangle to be cut from sheet stock.

    ``width`` and ``height`` are the natural, un-rotated dimensions. The
    metadata mapping holds downstream annotations (cabinet number, part
    name, ...) and is never read by the packer.
    """

    id: str
    width: float
    height: float
    grain_direction: GrainDirection = GrainDirection.NONE
    material: MaterialInfo = field(default_factory=MaterialInfo)
    label: str = ""
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Part dimensions must be positive")
        # Accept plain strings such as "vertical"; unknown values raise ValueError
        object.__setattr__(self, "grain_direction", GrainDirection(self.grain_direction))

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def max_side(self) -> float:
        return max(self.width, self.height)

    @property
    def display_label(self) -> str:
        return self.label or self.id


@dataclass(frozen=True)
class SheetSize:
    """Dimensions of one sheet of stock material.

    Every sheet in a run shares the same size. The default matches the
    most common board size offered by the furniture application.

    Attributes:
        width: Sheet extent along x.
        height: Sheet extent along y.
        label: Display label; derived from the dimensions when empty.
    """

    width: float = 2440.0
    height: float = 1220.0
    label: str = ""

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def display_label(self) -> str:
        return self.label or f"{self.width:g} X {self.height:g}"


STANDARD_SHEET_SIZES: tuple[SheetSize, ...] = (
    SheetSize(2440.0, 1220.0, "2440 X 1220 mm"),
    SheetSize(2720.0, 1810.0, "2720 X 1810 mm"),
    SheetSize(3620.0, 1810.0, "3620 X 1810 mm"),
)


@dataclass(frozen=True)
class NestingConfig:
    """Run-wide nesting parameters.

    Attributes:
        sheet_size: Dimensions shared by every sheet of the run.
        allow_rotation: Master switch for rotating parts.
        grain_direction: Grain of the sheet stock itself.
        sort_strategy: Descending priority key for part ordering.
        cutting_tools_thick: Clearance (saw blade width) kept between every
            pair of placed parts.
        edge_margin: Clearance kept from the sheet boundary. None means the
            same distance as ``cutting_tools_thick``.
    """

    sheet_size: SheetSize = field(default_factory=SheetSize)
    allow_rotation: bool = True
    grain_direction: GrainDirection = GrainDirection.NONE
    sort_strategy: SortStrategy = SortStrategy.HEIGHT
    cutting_tools_thick: float = 10.0
    edge_margin: float | None = None

    def __post_init__(self) -> None:
        if self.cutting_tools_thick < 0:
            raise ValueError("Cutting tools thickness must be non-negative")
        if self.edge_margin is not None and self.edge_margin < 0:
            raise ValueError("Edge margin must be non-negative")
        object.__setattr__(self, "grain_direction", GrainDirection(self.grain_direction))
        object.__setattr__(self, "sort_strategy", SortStrategy(self.sort_strategy))

    @property
    def effective_edge_margin(self) -> float:
        """Boundary clearance actually applied by the packer."""
        if self.edge_margin is None:
            return self.cutting_tools_thick
        return self.edge_margin


@dataclass(frozen=True)
class OrientedRect:
    """Footprint of a rectangle under a specific rotation."""

    width: float
    height: float
    rotation: Rotation = Rotation.R0

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class PlacedPart:
    """A part committed to a position on a sheet.

    ``width``/``height`` are the oriented footprint actually occupied on the
    sheet; the nominal dimensions stay available through ``part`` so that
    consumers can report both "as cut" and "as designed" sizes.

    Attributes:
        part: The original input part.
        x: Left edge in sheet-local coordinates.
        y: Top-left anchor measured from the origin edge of the sheet.
        width: Oriented width on the sheet.
        height: Oriented height on the sheet.
        rotation: Rotation applied to the part.
        sheet_index: Zero-based index of the sheet holding the part.
    """

    part: Part
    x: float
    y: float
    width: float
    height: float
    rotation: Rotation
    sheet_index: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")
        object.__setattr__(self, "rotation", Rotation(self.rotation))

    @property
    def id(self) -> str:
        return self.part.id

    @property
    def label(self) -> str:
        return self.part.display_label

    @property
    def original_width(self) -> float:
        return self.part.width

    @property
    def original_height(self) -> float:
        return self.part.height

    @property
    def rotated(self) -> bool:
        """True if the footprint is the nominal rectangle turned 90 degrees."""
        return self.rotation.swaps_axes

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def top_edge(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height
