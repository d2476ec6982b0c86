"""Nesting endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from panelnest.application.config import (
    NestingJobConfiguration,
    config_to_nesting_config,
    config_to_parts,
    load_config_from_dict,
)
from panelnest.infrastructure import NestingResult
from panelnest.infrastructure.exporters import ExporterRegistry, result_to_dict
from panelnest.web.dependencies import RendererDep, ServiceFactoryDep
from panelnest.web.exceptions import SheetNotFoundError, UnsupportedFormatError
from panelnest.web.schemas.requests import NestExportRequest, NestRequest
from panelnest.web.schemas.responses import (
    ExportFormatsSchema,
    MaterialResultSchema,
    MaterialSchema,
    NestingResultSchema,
    NestResponseSchema,
)

router = APIRouter(prefix="/nest", tags=["nest"])

MEDIA_TYPES = {
    "csv": "text/csv",
    "dxf": "application/dxf",
    "json": "application/json",
    "svg": "image/svg+xml",
}


def _to_schema(result: NestingResult) -> NestingResultSchema:
    return NestingResultSchema.model_validate(result_to_dict(result, include_skyline=False))


def _nest_single(
    factory: ServiceFactoryDep,
    config: NestingJobConfiguration,
    best_strategy: bool,
) -> NestingResult:
    service = factory(config_to_nesting_config(config))
    parts = config_to_parts(config)
    if best_strategy:
        return service.nest_best(parts)
    return service.nest(parts)


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("", response_model=NestResponseSchema)
async def nest_job(
    request: NestRequest,
    factory: ServiceFactoryDep,
) -> NestResponseSchema:
    """Nest the parts of a job onto sheets.

    Returns one entry for a combined run, or one entry per material when
    ``by_material`` is set.
    """
    config = load_config_from_dict(request.config)

    if not request.by_material:
        result = _nest_single(factory, config, request.best_strategy)
        return NestResponseSchema(results=[MaterialResultSchema(result=_to_schema(result))])

    service = factory(config_to_nesting_config(config))
    results = service.nest_by_material(
        config_to_parts(config), best_strategy=request.best_strategy
    )
    return NestResponseSchema(
        results=[
            MaterialResultSchema(
                material=MaterialSchema(
                    id=material.id, name=material.name, color=material.color
                ),
                result=_to_schema(result),
            )
            for material, result in results.items()
        ]
    )


@router.post("/svg")
async def nest_job_svg(
    request: NestExportRequest,
    factory: ServiceFactoryDep,
    renderer: RendererDep,
) -> Response:
    """Nest a job and return the cut diagram as SVG.

    All sheets are stacked in one document unless ``sheet_index`` selects one.
    """
    config = load_config_from_dict(request.config)
    result = _nest_single(factory, config, request.best_strategy)

    if request.sheet_index is None:
        content = renderer.render_combined_svg(result)
    else:
        if request.sheet_index >= result.total_sheets:
            raise SheetNotFoundError(request.sheet_index, result.total_sheets)
        layout = result.sheets[request.sheet_index]
        content = renderer.render_svg(layout, result.total_sheets)

    return Response(content=content, media_type=MEDIA_TYPES["svg"])


@router.post("/export/{format_name}")
async def export_nested_job(
    format_name: str,
    request: NestExportRequest,
    factory: ServiceFactoryDep,
) -> Response:
    """Nest a job and return it in a registered export format."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    config = load_config_from_dict(request.config)
    result = _nest_single(factory, config, request.best_strategy)

    exporter_class = ExporterRegistry.get(format_name)
    exporter = exporter_class()
    content = exporter.export_string(result)
    filename = f"nesting.{exporter.file_extension}"

    return Response(
        content=content,
        media_type=MEDIA_TYPES.get(format_name, "text/plain"),
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
