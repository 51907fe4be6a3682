"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class SheetSizeSchema(BaseModel):
    """Sheet dimensions used for the run."""

    width: float
    height: float


class PlacementSchema(BaseModel):
    """A piece placed on a sheet."""

    id: str = Field(..., description="Piece identifier")
    label: str | None = Field(default=None, description="Display name")
    spec_index: int = Field(..., description="Index of the originating piece spec")
    x: float = Field(..., description="Offset from the left edge of the sheet")
    y: float = Field(..., description="Offset from the top edge of the sheet")
    width: float = Field(..., description="Width before rotation")
    height: float = Field(..., description="Height before rotation")
    placed_width: float = Field(..., description="Width on the sheet")
    placed_height: float = Field(..., description="Height on the sheet")
    rotated: bool = Field(..., description="Whether the piece is turned 90 degrees")
    color: str = Field(..., description="Display color")


class SheetLayoutSchema(BaseModel):
    """One sheet and its placements."""

    index: int = Field(..., description="Zero-based sheet index")
    used_area: float = Field(..., description="Area covered by pieces")
    efficiency: float = Field(..., description="Used area divided by sheet area")
    acceptance: str = Field(..., description="Why the sheet was accepted")
    pieces: list[PlacementSchema] = Field(default_factory=list)


class UnplacedPieceSchema(BaseModel):
    """A piece the optimizer could not place."""

    id: str
    label: str | None = None
    width: float
    height: float
    color: str
    reason: str = Field(..., description="Reason code")
    message: str = Field(..., description="Human-readable reason")


class DiscardedSpecSchema(BaseModel):
    """A piece spec removed before optimization."""

    spec_index: int
    width: float
    height: float
    quantity: int
    message: str


class StatisticsSchema(BaseModel):
    """Aggregate figures for the run."""

    total_sheets: int
    total_area: float
    used_area: float
    waste_area: float
    efficiency: float
    total_pieces: int
    unplaced_pieces: int
    efficiency_rating: str


class PieceSummarySchema(BaseModel):
    """Summary of the pieces handed to the optimizer."""

    total_pieces: int
    total_area: float
    unique_sizes: int


class OptimizeResponse(BaseModel):
    """Response for an optimization run."""

    sheet: SheetSizeSchema
    sheets: list[SheetLayoutSchema] = Field(default_factory=list)
    unplaced: list[UnplacedPieceSchema] = Field(default_factory=list)
    discarded: list[DiscardedSpecSchema] = Field(default_factory=list)
    statistics: StatisticsSchema
    piece_summary: PieceSummarySchema | None = None


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
