"""Pydantic schemas for the REST API."""

from cutopt.web.schemas.requests import (
    ConfigValidateRequest,
    OptimizeFromConfigRequest,
    OptimizeRequest,
    PieceSchema,
    SheetSchema,
)
from cutopt.web.schemas.responses import (
    DiscardedSpecSchema,
    ErrorResponseSchema,
    OptimizeResponse,
    PieceSummarySchema,
    PlacementSchema,
    SheetLayoutSchema,
    SheetSizeSchema,
    StatisticsSchema,
    UnplacedPieceSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "OptimizeFromConfigRequest",
    "OptimizeRequest",
    "PieceSchema",
    "SheetSchema",
    # Responses
    "DiscardedSpecSchema",
    "ErrorResponseSchema",
    "OptimizeResponse",
    "PieceSummarySchema",
    "PlacementSchema",
    "SheetLayoutSchema",
    "SheetSizeSchema",
    "StatisticsSchema",
    "UnplacedPieceSchema",
    "ValidationResultSchema",
]
