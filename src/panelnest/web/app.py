"""ASGI entry point for the nesting service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from panelnest.web.exceptions import register_exception_handlers
from panelnest.web.routers import nest_router, validate_router

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Build the FastAPI app with nesting and validation routes under /api/v1."""
    application = FastAPI(
        title="Panel Nesting API",
        description="REST API for nesting rectangular parts onto sheet stock",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Open CORS; tighten allow_origins when deployed behind a known frontend
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    for router in (nest_router, validate_router):
        application.include_router(router, prefix=API_PREFIX)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return application


app = create_app()
