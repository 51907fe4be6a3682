"""Piece expansion, ordering and summary.

Turns quantity-bearing piece specifications into individual unit pieces,
orders them for placement, and summarizes a piece list.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Callable, Sequence

from cutopt.domain.value_objects import (
    InvalidDimensionError,
    PieceSpec,
    SortMethod,
    UnitPiece,
)

logger = logging.getLogger(__name__)


_SORT_KEYS: dict[SortMethod, Callable[[UnitPiece], float]] = {
    SortMethod.MAX_SIDE_DESC: lambda p: p.max_side,
    SortMethod.AREA_DESC: lambda p: p.area,
    SortMethod.WIDTH_DESC: lambda p: p.width,
    SortMethod.HEIGHT_DESC: lambda p: p.height,
}


@dataclass(frozen=True)
class PieceSummary:
    """Summary of a unit piece list.

    Attributes:
        total_pieces: Number of unit pieces.
        total_area: Combined area of all pieces.
        unique_sizes: Number of distinct width x height combinations.
    """

    total_pieces: int
    total_area: float
    unique_sizes: int


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value > 0


def _is_positive_integer(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, Integral):
        return False
    return value > 0


def validate_spec(spec: PieceSpec, index: int) -> None:
    """Check a single piece specification.

    Args:
        spec: The specification to check.
        index: Position of the spec in the input sequence.

    Raises:
        InvalidDimensionError: If width or height is not a finite positive
            number, or quantity is not a positive integer.
    """
    if not _is_positive_number(spec.width):
        raise InvalidDimensionError(index, "width", spec.width)
    if not _is_positive_number(spec.height):
        raise InvalidDimensionError(index, "height", spec.height)
    if not _is_positive_integer(spec.quantity):
        raise InvalidDimensionError(index, "quantity", spec.quantity)


def make_piece_id(position: int, width: float, height: float) -> str:
    """Build the identifier of a unit piece from its expansion position and size."""
    return f"{position}_{width:g}x{height:g}"


def expand_pieces(specs: Sequence[PieceSpec]) -> list[UnitPiece]:
    """Expand piece specifications into individual unit pieces.

    Every spec is validated before any piece is produced, so a bad spec
    anywhere in the input fails the whole call. Output order is specs in
    input order, then repeats within each spec.

    Args:
        specs: Piece specifications, each with a quantity.

    Returns:
        List of unit pieces, one per physical piece.

    Raises:
        InvalidDimensionError: If any spec has an invalid dimension or quantity.
    """
    for index, spec in enumerate(specs):
        validate_spec(spec, index)

    expanded: list[UnitPiece] = []
    for index, spec in enumerate(specs):
        for _ in range(spec.quantity):
            expanded.append(
                UnitPiece(
                    piece_id=make_piece_id(len(expanded), spec.width, spec.height),
                    width=float(spec.width),
                    height=float(spec.height),
                    color=spec.color,
                    spec_index=index,
                    label=spec.label,
                )
            )

    logger.debug("Expanded %d specs into %d unit pieces", len(specs), len(expanded))
    return expanded


def sort_pieces(
    pieces: Sequence[UnitPiece],
    method: SortMethod = SortMethod.MAX_SIDE_DESC,
) -> list[UnitPiece]:
    """Order pieces for placement, largest first by the selected key.

    The sort is stable: pieces with equal keys keep their input order.

    Args:
        pieces: Unit pieces to order.
        method: Which key to sort by.

    Returns:
        New list in placement order.
    """
    return sorted(pieces, key=_SORT_KEYS[SortMethod(method)], reverse=True)


def summarize_pieces(pieces: Sequence[UnitPiece]) -> PieceSummary:
    """Count pieces, total their area and count distinct sizes."""
    return PieceSummary(
        total_pieces=len(pieces),
        total_area=sum(p.area for p in pieces),
        unique_sizes=len({(p.width, p.height) for p in pieces}),
    )
