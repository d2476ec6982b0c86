"""FastAPI dependency injection for nesting services."""

from typing import Annotated, Callable

from fastapi import Depends

from panelnest.domain.value_objects import NestingConfig
from panelnest.infrastructure import CutDiagramRenderer, NestingService

NestingServiceFactory = Callable[[NestingConfig], NestingService]


def get_service_factory() -> NestingServiceFactory:
    """Dependency building a NestingService per request configuration."""
    return NestingService


def get_renderer() -> CutDiagramRenderer:
    """Dependency for CutDiagramRenderer; palette slots live per instance."""
    return CutDiagramRenderer()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[NestingServiceFactory, Depends(get_service_factory)]
RendererDep = Annotated[CutDiagramRenderer, Depends(get_renderer)]
