"""Pydantic schemas for the REST API."""

from panelnest.web.schemas.requests import (
    ConfigValidateRequest,
    NestRequest,
    NestExportRequest,
)
from panelnest.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    MaterialResultSchema,
    MaterialSchema,
    NestingResultSchema,
    NestingSummarySchema,
    NestResponseSchema,
    PlacementSchema,
    SheetSchema,
    UnplacedPartSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "NestRequest",
    "NestExportRequest",
    # Responses
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "MaterialResultSchema",
    "MaterialSchema",
    "NestResponseSchema",
    "NestingResultSchema",
    "NestingSummarySchema",
    "PlacementSchema",
    "SheetSchema",
    "UnplacedPartSchema",
    "ValidationResultSchema",
]
