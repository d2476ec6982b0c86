"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from panelnest.application.config import ConfigError


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


class SheetNotFoundError(Exception):
    """Raised when a requested sheet index is beyond the layout."""

    def __init__(self, sheet_index: int, total_sheets: int) -> None:
        self.sheet_index = sheet_index
        self.total_sheets = total_sheets
        super().__init__(
            f"Sheet {sheet_index} not found; layout has {total_sheets} sheet(s)"
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                # Validation details echo raw input values back
                "details": jsonable_encoder(exc.details),
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_format",
                "details": {"format": exc.format_name, "available": exc.available},
            },
        )

    @app.exception_handler(SheetNotFoundError)
    async def sheet_not_found_handler(
        request: Request, exc: SheetNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {
                    "sheet_index": exc.sheet_index,
                    "total_sheets": exc.total_sheets,
                },
            },
        )
