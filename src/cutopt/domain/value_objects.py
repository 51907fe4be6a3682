"""Value objects for the cut optimization domain.

This module provides the immutable data types used throughout the
optimizer: piece specifications as entered by the user, the individual
unit pieces produced by quantity expansion, and the enumerations that
select ordering, packing algorithm and unplaced-piece classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# Default sheet size in millimetres (standard 8'x4' board)
DEFAULT_SHEET_WIDTH: float = 2440.0
DEFAULT_SHEET_HEIGHT: float = 1220.0

DEFAULT_PIECE_COLOR: str = "#888888"


class InvalidDimensionError(ValueError):
    """Raised when a piece specification has an unusable dimension or quantity.

    Raised during piece expansion, before any placement work begins.

    Attributes:
        spec_index: Zero-based index of the offending specification.
        field_name: Name of the invalid field (width, height or quantity).
        value: The rejected value.
    """

    def __init__(self, spec_index: int, field_name: str, value: Any) -> None:
        self.spec_index = spec_index
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"Piece {spec_index}: {field_name} must be a finite positive "
            f"{'integer' if field_name == 'quantity' else 'number'} (got {value!r})"
        )


class SortMethod(str, Enum):
    """Ordering applied to unit pieces before placement.

    All orderings are descending and stable.

    Attributes:
        MAX_SIDE_DESC: Longest side first (default).
        AREA_DESC: Largest area first.
        WIDTH_DESC: Widest first.
        HEIGHT_DESC: Tallest first.
    """

    MAX_SIDE_DESC = "max-side-desc"
    AREA_DESC = "area-desc"
    WIDTH_DESC = "width-desc"
    HEIGHT_DESC = "height-desc"


class PackingAlgorithm(str, Enum):
    """Strategy used to fill a single sheet."""

    SHELF = "shelf"
    GUILLOTINE = "guillotine"


class UnplacedReason(str, Enum):
    """Why a piece ended up in the unplaced list.

    Attributes:
        TOO_LARGE_EVEN_ROTATED: The piece exceeds the sheet in both orientations.
        NO_SPACE_FOUND: The piece fits a sheet in some orientation, but no
            sheet accommodated it given the placement order and rotation policy.
    """

    TOO_LARGE_EVEN_ROTATED = "too_large_even_rotated"
    NO_SPACE_FOUND = "no_space_found"

    @property
    def message(self) -> str:
        """Human-readable explanation."""
        if self is UnplacedReason.TOO_LARGE_EVEN_ROTATED:
            return "Piece is larger than the sheet in both orientations"
        return "No space found for piece on any sheet"


class SheetAcceptance(str, Enum):
    """How a sheet passed the efficiency gate.

    Attributes:
        BOOTSTRAP: First sheet of the run, accepted unconditionally.
        THRESHOLD: Efficiency met the configured threshold.
        BEST_EFFORT: No ordering variant met the threshold; the best one was kept.
    """

    BOOTSTRAP = "bootstrap"
    THRESHOLD = "threshold"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True)
class PieceSpec:
    """A requested piece type with a quantity.

    Dimensions are checked when the spec is expanded, not on construction,
    so that invalid input is reported as InvalidDimensionError.

    Attributes:
        width: Piece width in sheet units.
        height: Piece height in sheet units.
        quantity: Number of identical pieces to cut.
        color: Display color, passed through untouched.
        label: Optional display name.
    """

    width: float
    height: float
    quantity: int = 1
    color: str = DEFAULT_PIECE_COLOR
    label: str | None = None

    @property
    def area(self) -> float:
        """Total area for all pieces of this spec."""
        return self.width * self.height * self.quantity


@dataclass(frozen=True)
class DiscardedSpec:
    """A piece specification removed before optimization.

    Attributes:
        spec_index: Index of the spec in the caller's input.
        spec: The removed specification.
        message: Why it was removed, for display.
    """

    spec_index: int
    spec: PieceSpec
    message: str


@dataclass(frozen=True)
class UnitPiece:
    """One physical piece to place.

    Width and height always hold the nominal values of the originating
    spec; rotation is recorded on the placement, never here.

    Attributes:
        piece_id: Stable identifier derived from expansion position and size.
        width: Nominal width.
        height: Nominal height.
        color: Display color from the spec.
        spec_index: Index of the originating PieceSpec.
        label: Display name from the spec, if any.
    """

    piece_id: str
    width: float
    height: float
    color: str = DEFAULT_PIECE_COLOR
    spec_index: int = 0
    label: str | None = None

    @property
    def area(self) -> float:
        """Area of the piece."""
        return self.width * self.height

    @property
    def max_side(self) -> float:
        """Length of the longest side."""
        return max(self.width, self.height)

    def fits_within(self, width: float, height: float, rotated: bool = False) -> bool:
        """Check whether the piece fits a width x height box in one orientation."""
        if rotated:
            return self.height <= width and self.width <= height
        return self.width <= width and self.height <= height
