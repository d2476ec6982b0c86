"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class MaterialSchema(BaseModel):
    id: str = ""
    name: str = ""
    color: str = ""


class PlacementSchema(BaseModel):
    """A part placed on a sheet."""

    part_id: str = Field(..., description="Part identifier")
    label: str = Field(..., description="Display label")
    sheet_index: int = Field(..., description="Zero-based sheet index")
    x: float = Field(..., description="Left edge on the sheet")
    y: float = Field(..., description="Distance from the sheet's origin edge")
    width: float = Field(..., description="Width as cut (after rotation)")
    height: float = Field(..., description="Height as cut (after rotation)")
    rotation: int = Field(..., description="Rotation in degrees (0, 90, 180, 270)")
    original_width: float = Field(..., description="Width as designed")
    original_height: float = Field(..., description="Height as designed")
    grain_direction: str = Field(..., description="Grain of the part")
    material: MaterialSchema
    metadata: dict[str, Any] = Field(default_factory=dict)


class SheetSchema(BaseModel):
    """One sheet of the layout."""

    index: int
    width: float
    height: float
    label: str
    part_count: int
    used_area: float
    waste_area: float
    efficiency: float = Field(..., description="Percentage of the sheet covered")
    placements: list[PlacementSchema] = Field(default_factory=list)


class UnplacedPartSchema(BaseModel):
    """A part that fit no sheet."""

    id: str
    label: str
    width: float
    height: float
    grain_direction: str
    material: MaterialSchema
    metadata: dict[str, Any] = Field(default_factory=dict)


class NestingSummarySchema(BaseModel):
    total_parts: int
    placed_parts: int
    unplaced_parts: int
    total_sheets: int
    material_waste: float
    material_efficiency: float = Field(..., description="Percentage, 0 to 100")
    sort_strategy: str


class NestingResultSchema(BaseModel):
    """Full result of one nesting run."""

    schema_version: str
    summary: NestingSummarySchema
    sheets: list[SheetSchema] = Field(default_factory=list)
    unplaced: list[UnplacedPartSchema] = Field(default_factory=list)


class MaterialResultSchema(BaseModel):
    """Result of the run for one material; material is None for a combined run."""

    material: MaterialSchema | None = None
    result: NestingResultSchema


class NestResponseSchema(BaseModel):
    """Response for nesting a job."""

    results: list[MaterialResultSchema] = Field(..., description="One entry per run")


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
