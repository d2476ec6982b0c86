"""Job validation endpoints."""

from fastapi import APIRouter

from panelnest.application.config import load_config_from_dict, validate_config
from panelnest.web.schemas.requests import ConfigValidateRequest
from panelnest.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_job(request: ConfigValidateRequest) -> ValidationResultSchema:
    """Validate a nesting job without running it.

    Schema failures are reported through the ConfigError handler (HTTP 422);
    advisory checks come back here as errors and warnings.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[
            {"message": e.message, "path": e.path, "value": e.value}
            for e in result.errors
        ],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
