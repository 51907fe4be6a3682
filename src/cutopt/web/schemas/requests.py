"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from cutopt.application.config import OptimizerOptionsConfig
from cutopt.domain import DEFAULT_PIECE_COLOR, DEFAULT_SHEET_HEIGHT, DEFAULT_SHEET_WIDTH


class SheetSchema(BaseModel):
    """Sheet stock dimensions."""

    width: float = Field(
        default=DEFAULT_SHEET_WIDTH, gt=0, allow_inf_nan=False, description="Sheet width"
    )
    height: float = Field(
        default=DEFAULT_SHEET_HEIGHT, gt=0, allow_inf_nan=False, description="Sheet height"
    )


class PieceSchema(BaseModel):
    """A piece type to cut.

    Dimensions are checked by the optimizer so that bad pieces are reported
    with their position in the list.
    """

    width: float = Field(..., description="Piece width")
    height: float = Field(..., description="Piece height")
    quantity: int = Field(default=1, description="Number of pieces")
    color: str = Field(default=DEFAULT_PIECE_COLOR, description="Display color")
    label: str | None = Field(default=None, description="Optional display name")


class OptimizeRequest(BaseModel):
    """Request for optimizing a cut list."""

    sheet: SheetSchema = Field(default_factory=SheetSchema, description="Sheet stock")
    pieces: list[PieceSchema] = Field(
        default_factory=list, description="Pieces to cut, in input order"
    )
    options: OptimizerOptionsConfig = Field(
        default_factory=OptimizerOptionsConfig, description="Optimizer options"
    )
    prefilter: bool = Field(
        default=True,
        description="Discard pieces that cannot fit the sheet before optimizing",
    )


class OptimizeFromConfigRequest(BaseModel):
    """Request for optimizing from a full configuration."""

    config: dict[str, Any] = Field(..., description="Full optimization configuration JSON")


class ConfigValidateRequest(BaseModel):
    """Request for validating a configuration."""

    config: dict[str, Any] = Field(..., description="Optimization configuration JSON")
