"""Pydantic models for nesting job files.

A job file names the sheet stock, the run options and the parts to cut.
Every model forbids unknown keys so typos surface as validation errors
instead of silently falling back to defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from panelnest.domain.value_objects import GrainDirection, SortStrategy

# Supported schema versions for job files
# Version 1.0: Initial schema (sheet, options, parts)
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetConfigSchema(BaseModel):
    """Sheet stock dimensions.

    Attributes:
        width: Sheet extent along x.
        height: Sheet extent along y.
        label: Optional display label (e.g. "2440 X 1220 mm").
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=2440.0, gt=0, description="Sheet width")
    height: float = Field(default=1220.0, gt=0, description="Sheet height")
    label: str = Field(default="", max_length=100)


class NestingOptionsSchema(BaseModel):
    """Run options mapped onto NestingConfig.

    Attributes:
        allow_rotation: Master switch for rotating parts.
        grain_direction: Grain of the sheet stock itself.
        sort_strategy: Descending priority key for part ordering.
        cutting_tools_thick: Clearance between parts (saw blade width).
        edge_margin: Clearance from the sheet boundary; defaults to
            ``cutting_tools_thick`` when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    allow_rotation: bool = True
    grain_direction: GrainDirection = GrainDirection.NONE
    sort_strategy: SortStrategy = SortStrategy.HEIGHT
    cutting_tools_thick: float = Field(
        default=10.0, ge=0, description="Clearance kept between parts"
    )
    edge_margin: float | None = Field(
        default=None, ge=0, description="Clearance kept from the sheet edges"
    )


class MaterialConfigSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = ""
    name: str = ""
    color: str = ""


class PartConfigSchema(BaseModel):
    """One part line of the job; ``quantity`` copies are cut.

    Attributes:
        id: Identifier, unique within the job.
        width: Nominal width.
        height: Nominal height.
        quantity: Number of identical copies.
        label: Display label.
        grain_direction: Grain of this part.
        material: Material identity, carried through for display.
        metadata: Free-form annotations passed through untouched.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, max_length=100)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1, le=10000)
    label: str = Field(default="", max_length=200)
    grain_direction: GrainDirection = GrainDirection.NONE
    material: MaterialConfigSchema = Field(default_factory=MaterialConfigSchema)
    metadata: dict[str, Any] = Field(default_factory=dict)


class NestingJobConfiguration(BaseModel):
    """Root model of a nesting job file.

    Example:
        >>> job = NestingJobConfiguration(
        ...     schema_version="1.0",
        ...     parts=[PartConfigSchema(id="side", width=600, height=720)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    sheet: SheetConfigSchema = Field(default_factory=SheetConfigSchema)
    options: NestingOptionsSchema = Field(default_factory=NestingOptionsSchema)
    parts: list[PartConfigSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept known versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_unique_part_ids(self) -> NestingJobConfiguration:
        seen: set[str] = set()
        duplicates: list[str] = []
        for part in self.parts:
            if part.id in seen and part.id not in duplicates:
                duplicates.append(part.id)
            seen.add(part.id)
        if duplicates:
            raise ValueError(f"Duplicate part ids: {', '.join(duplicates)}")
        return self

    @property
    def total_quantity(self) -> int:
        return sum(part.quantity for part in self.parts)
