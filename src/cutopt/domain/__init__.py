"""Domain layer - pieces, ordering and value objects."""

from .pieces import (
    PieceSummary,
    expand_pieces,
    make_piece_id,
    sort_pieces,
    summarize_pieces,
    validate_spec,
)
from .value_objects import (
    DEFAULT_PIECE_COLOR,
    DEFAULT_SHEET_HEIGHT,
    DEFAULT_SHEET_WIDTH,
    DiscardedSpec,
    InvalidDimensionError,
    PackingAlgorithm,
    PieceSpec,
    SheetAcceptance,
    SortMethod,
    UnitPiece,
    UnplacedReason,
)

__all__ = [
    "DEFAULT_PIECE_COLOR",
    "DEFAULT_SHEET_HEIGHT",
    "DEFAULT_SHEET_WIDTH",
    "DiscardedSpec",
    "InvalidDimensionError",
    "PackingAlgorithm",
    "PieceSpec",
    "PieceSummary",
    "SheetAcceptance",
    "SortMethod",
    "UnitPiece",
    "UnplacedReason",
    "expand_pieces",
    "make_piece_id",
    "sort_pieces",
    "summarize_pieces",
    "validate_spec",
]
