"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class NestRequest(BaseModel):
    """Request for nesting a job."""

    config: dict[str, Any] = Field(..., description="Full nesting job JSON")
    best_strategy: bool = Field(
        default=False, description="Try every sort strategy and keep the best"
    )
    by_material: bool = Field(
        default=False, description="Nest each material on its own sheets"
    )


class NestExportRequest(BaseModel):
    """Request for a cut diagram or export file of a nested job."""

    config: dict[str, Any] = Field(..., description="Full nesting job JSON")
    best_strategy: bool = Field(default=False)
    sheet_index: int | None = Field(
        default=None, ge=0, description="SVG only: render just this sheet (zero-based)"
    )


class ConfigValidateRequest(BaseModel):
    """Request for validating a job."""

    config: dict[str, Any] = Field(..., description="Nesting job JSON to validate")
