"""FastAPI REST API for nesting jobs.

This module provides a REST API for nesting parts onto sheets, validating
jobs, and exporting layouts to various formats.

Usage:
    uvicorn panelnest.web:app --reload
"""

from panelnest.web.app import app, create_app

__all__ = ["app", "create_app"]
