"""Error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cutopt.application.config import ConfigError
from cutopt.domain import InvalidDimensionError


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(InvalidDimensionError)
    async def invalid_dimension_handler(
        request: Request, exc: InvalidDimensionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "invalid_dimension",
                "details": [
                    {
                        "spec_index": exc.spec_index,
                        "field": exc.field_name,
                        "value": repr(exc.value),
                    }
                ],
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": [
                    {key: value for key, value in detail.items() if key != "value"}
                    for detail in exc.details
                ],
            },
        )
