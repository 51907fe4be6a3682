"""Configuration validation endpoints."""

from fastapi import APIRouter

from cutopt.application.config import (
    ConfigError,
    load_config_from_dict,
    validate_config,
)
from cutopt.web.schemas.requests import ConfigValidateRequest
from cutopt.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(
    request: ConfigValidateRequest,
) -> ValidationResultSchema:
    """Validate an optimization configuration without running it.

    Schema errors are reported as errors in the response body rather than
    as an error status. A configuration that loads is valid; advisories
    come back as warnings.

    Args:
        request: Request containing configuration to validate.

    Returns:
        Validation result with errors and warnings.
    """
    try:
        config = load_config_from_dict(request.config)
    except ConfigError as e:
        return ValidationResultSchema(
            is_valid=False,
            errors=[
                {"message": detail["message"], "path": detail["path"]}
                for detail in e.details
            ],
        )

    result = validate_config(config)
    return ValidationResultSchema(
        is_valid=True,
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
