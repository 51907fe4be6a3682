"""Bin packing data models and algorithms for sheet cut optimization.

This module provides data structures for representing sheet layouts,
piece placements, unplaced pieces and packing results, plus the packing
engine itself: a shelf placement state machine (with a guillotine
alternative), a per-sheet efficiency gate with retry, unplaced-piece
classification and statistics.

All result dataclasses are frozen (immutable), so a PackingResult never
shares mutable state with the packer that produced it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

from cutopt.domain.pieces import expand_pieces, sort_pieces
from cutopt.domain.value_objects import (
    PackingAlgorithm,
    PieceSpec,
    SheetAcceptance,
    SortMethod,
    UnitPiece,
    UnplacedReason,
)

logger = logging.getLogger(__name__)


# Efficiency rating bands (fractions)
HIGH_EFFICIENCY: float = 0.85
MEDIUM_EFFICIENCY: float = 0.70


@dataclass(frozen=True)
class OptimizerOptions:
    """Per-call configuration for the optimizer.

    Attributes:
        allow_rotation: Whether pieces may be turned 90 degrees.
        sort_method: Ordering applied to pieces before placement.
        efficiency_threshold: Minimum fraction of sheet area a sheet (other
            than the first) must cover to be accepted outright.
        algorithm: Strategy used to fill each sheet.
        max_sheet_attempts: Ordering variants tried for a sheet before the
            best attempt is accepted.
    """

    allow_rotation: bool = False
    sort_method: SortMethod = SortMethod.MAX_SIDE_DESC
    efficiency_threshold: float = 0.85
    algorithm: PackingAlgorithm = PackingAlgorithm.SHELF
    max_sheet_attempts: int = 4

    def __post_init__(self) -> None:
        if not 0 <= self.efficiency_threshold <= 1:
            raise ValueError("Efficiency threshold must be between 0 and 1")
        if self.max_sheet_attempts < 1:
            raise ValueError("Max sheet attempts must be at least 1")


@dataclass(frozen=True)
class PlacedPiece:
    """A unit piece placed at a specific position on a sheet.

    Coordinates are the top-left offset of the piece within its sheet.

    Attributes:
        piece: The unit piece being placed.
        x: Horizontal offset from the left edge of the sheet.
        y: Vertical offset from the top edge of the sheet.
        rotated: True if piece is rotated 90 degrees from original orientation.
    """

    piece: UnitPiece
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right_edge(self) -> float:
        """X coordinate of piece right edge."""
        return self.x + self.placed_width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of piece bottom edge."""
        return self.y + self.placed_height

    @property
    def area(self) -> float:
        """Area covered by the piece."""
        return self.placed_width * self.placed_height


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single accepted sheet.

    Attributes:
        sheet_index: Zero-based index of this sheet in the packing result.
        width: Sheet width.
        height: Sheet height.
        placements: Placed pieces in placement order.
        acceptance: How the sheet passed the efficiency gate.
    """

    sheet_index: int
    width: float
    height: float
    placements: tuple[PlacedPiece, ...]
    acceptance: SheetAcceptance = SheetAcceptance.THRESHOLD

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def area(self) -> float:
        """Total sheet area."""
        return self.width * self.height

    @property
    def used_area(self) -> float:
        """Total area used by placed pieces."""
        return sum(p.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        """Sheet area not covered by pieces."""
        return self.area - self.used_area

    @property
    def efficiency(self) -> float:
        """Fraction of the sheet covered by pieces."""
        if self.area == 0:
            return 0.0
        return self.used_area / self.area

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.placements)


@dataclass(frozen=True)
class UnplacedPiece:
    """A unit piece that could not be placed on any sheet.

    Attributes:
        piece: The unit piece.
        reason: Classification of the failure.
    """

    piece: UnitPiece
    reason: UnplacedReason

    @property
    def message(self) -> str:
        """Human-readable reason."""
        return self.reason.message


@dataclass(frozen=True)
class PackingStatistics:
    """Summary metrics over a packing result.

    Attributes:
        total_sheets: Number of accepted sheets.
        total_area: Combined area of all sheets.
        used_area: Combined area covered by pieces.
        waste_area: total_area - used_area.
        efficiency: used_area / total_area (0 when there are no sheets).
        total_pieces: Number of placed pieces.
        unplaced_pieces: Number of pieces that could not be placed.
    """

    total_sheets: int
    total_area: float
    used_area: float
    waste_area: float
    efficiency: float
    total_pieces: int = 0
    unplaced_pieces: int = 0

    @property
    def efficiency_percentage(self) -> float:
        """Efficiency as a percentage."""
        return self.efficiency * 100

    @property
    def efficiency_rating(self) -> str:
        """Rating band for the efficiency: high, medium or low."""
        return efficiency_rating(self.efficiency)


@dataclass(frozen=True)
class PackingResult:
    """Complete result of an optimization call.

    Attributes:
        sheets: Accepted sheet layouts in creation order.
        unplaced: Pieces that could not be placed.
        sheet_width: Width of every sheet.
        sheet_height: Height of every sheet.
    """

    sheets: tuple[SheetLayout, ...]
    unplaced: tuple[UnplacedPiece, ...]
    sheet_width: float
    sheet_height: float

    @property
    def total_sheets(self) -> int:
        """Number of sheets used."""
        return len(self.sheets)

    @property
    def total_pieces_placed(self) -> int:
        """Total number of pieces placed across all sheets."""
        return sum(sheet.piece_count for sheet in self.sheets)

    @property
    def statistics(self) -> PackingStatistics:
        """Aggregate statistics for this result."""
        return calculate_statistics(self.sheets, self.unplaced)


def check_sheet_dimensions(sheet_width: float, sheet_height: float) -> None:
    """Raise ValueError unless both sheet dimensions are finite and positive."""
    if not math.isfinite(sheet_width) or sheet_width <= 0:
        raise ValueError(f"Sheet width must be positive and finite (got {sheet_width})")
    if not math.isfinite(sheet_height) or sheet_height <= 0:
        raise ValueError(f"Sheet height must be positive and finite (got {sheet_height})")


def efficiency_rating(efficiency: float) -> str:
    """Classify an efficiency fraction as high, medium or low."""
    if efficiency >= HIGH_EFFICIENCY:
        return "high"
    if efficiency >= MEDIUM_EFFICIENCY:
        return "medium"
    return "low"


def calculate_statistics(
    sheets: Sequence[SheetLayout],
    unplaced: Sequence[UnplacedPiece] = (),
) -> PackingStatistics:
    """Aggregate area and efficiency figures over a list of sheets.

    Args:
        sheets: Accepted sheet layouts.
        unplaced: Unplaced pieces, counted only.

    Returns:
        PackingStatistics; efficiency is 0 when there are no sheets.
    """
    total_area = sum(sheet.area for sheet in sheets)
    used_area = sum(sheet.used_area for sheet in sheets)

    return PackingStatistics(
        total_sheets=len(sheets),
        total_area=total_area,
        used_area=used_area,
        waste_area=total_area - used_area,
        efficiency=used_area / total_area if total_area > 0 else 0.0,
        total_pieces=sum(sheet.piece_count for sheet in sheets),
        unplaced_pieces=len(unplaced),
    )


def classify_unplaced(
    pieces: Sequence[UnitPiece],
    sheet_width: float,
    sheet_height: float,
) -> tuple[UnplacedPiece, ...]:
    """Attach an unplaced reason to each leftover piece.

    A piece is too large when it exceeds the sheet in both orientations,
    regardless of the rotation policy. Anything else simply found no space.

    Args:
        pieces: Pieces left in the queue when packing stopped.
        sheet_width: Sheet width.
        sheet_height: Sheet height.

    Returns:
        Tuple of unplaced pieces in queue order.
    """
    unplaced: list[UnplacedPiece] = []
    for piece in pieces:
        fits_somehow = piece.fits_within(sheet_width, sheet_height) or piece.fits_within(
            sheet_width, sheet_height, rotated=True
        )
        reason = (
            UnplacedReason.NO_SPACE_FOUND
            if fits_somehow
            else UnplacedReason.TOO_LARGE_EVEN_ROTATED
        )
        unplaced.append(UnplacedPiece(piece=piece, reason=reason))
    return tuple(unplaced)


@dataclass
class ShelfCursor:
    """Row cursor for a sheet being filled by the shelf algorithm.

    Pieces are laid left to right along the current row; the row is as tall
    as its tallest piece. Advancing the row moves the cursor below it.

    Attributes:
        sheet_width: Width of the sheet.
        sheet_height: Height of the sheet.
        x: Horizontal cursor within the current row.
        y: Top of the current row.
        row_height: Tallest placed height in the current row.
        placements: Pieces placed so far, in placement order.
    """

    sheet_width: float
    sheet_height: float
    x: float = 0.0
    y: float = 0.0
    row_height: float = 0.0
    placements: list[PlacedPiece] = field(default_factory=list)

    @classmethod
    def open_sheet(cls, sheet_width: float, sheet_height: float) -> ShelfCursor:
        """Start an empty sheet with the cursor at the top-left corner."""
        return cls(sheet_width=sheet_width, sheet_height=sheet_height)

    @property
    def at_row_start(self) -> bool:
        """True when nothing has been placed on the current row."""
        return self.x == 0

    def fits(self, piece: UnitPiece, rotated: bool) -> bool:
        """Check whether the piece fits at the cursor in the given orientation."""
        return piece.fits_within(
            self.sheet_width - self.x, self.sheet_height - self.y, rotated=rotated
        )

    def orientation_for(self, piece: UnitPiece, allow_rotation: bool) -> bool | None:
        """Choose an orientation at the cursor, first fit.

        Returns:
            False for the normal orientation, True for rotated, or None if
            the piece does not fit at the cursor at all.
        """
        if self.fits(piece, rotated=False):
            return False
        if allow_rotation and self.fits(piece, rotated=True):
            return True
        return None

    def place(self, piece: UnitPiece, rotated: bool) -> PlacedPiece:
        """Place a piece at the cursor and advance along the row."""
        placement = PlacedPiece(piece=piece, x=self.x, y=self.y, rotated=rotated)
        self.placements.append(placement)
        self.x += placement.placed_width
        self.row_height = max(self.row_height, placement.placed_height)
        return placement

    def advance_row(self) -> None:
        """Close the current row and start a new one beneath it."""
        self.y += self.row_height
        self.x = 0.0
        self.row_height = 0.0


class ShelfSheetFiller:
    """Fills one sheet with the shelf algorithm.

    Walks the queue once. A piece that does not fit at the cursor starts a
    new row if the current row is in use and is retried there; a piece that
    does not fit even at a row start is deferred to the next sheet.
    """

    def __init__(
        self, sheet_width: float, sheet_height: float, allow_rotation: bool
    ) -> None:
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        self.allow_rotation = allow_rotation

    def fill(
        self, queue: Sequence[UnitPiece]
    ) -> tuple[list[PlacedPiece], list[UnitPiece]]:
        """Pack as many pieces as possible onto a single sheet.

        Args:
            queue: Pieces in placement order.

        Returns:
            Tuple of (placed pieces, pieces deferred to a later sheet).
        """
        cursor = ShelfCursor.open_sheet(self.sheet_width, self.sheet_height)
        deferred: list[UnitPiece] = []

        for piece in queue:
            rotated = cursor.orientation_for(piece, self.allow_rotation)

            if rotated is None and not cursor.at_row_start:
                cursor.advance_row()
                rotated = cursor.orientation_for(piece, self.allow_rotation)

            if rotated is None:
                deferred.append(piece)
                continue

            placement = cursor.place(piece, rotated)
            if rotated:
                logger.debug(
                    "Piece '%s' placed rotated at (%s, %s), placed dimensions: %sx%s",
                    piece.piece_id,
                    placement.x,
                    placement.y,
                    placement.placed_width,
                    placement.placed_height,
                )

        return list(cursor.placements), deferred


@dataclass
class _FreeRect:
    """Free rectangle tracked by the guillotine filler."""

    x: float
    y: float
    width: float
    height: float


class GuillotineSheetFiller:
    """Fills one sheet by splitting free rectangles after each placement.

    Each piece goes into the first free rectangle it fits. The rectangle is
    replaced by a strip to the right of the piece (as tall as the piece) and
    a strip below it (as wide as the rectangle), so every cut runs edge to
    edge within its rectangle.
    """

    def __init__(
        self, sheet_width: float, sheet_height: float, allow_rotation: bool
    ) -> None:
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        self.allow_rotation = allow_rotation

    def fill(
        self, queue: Sequence[UnitPiece]
    ) -> tuple[list[PlacedPiece], list[UnitPiece]]:
        """Pack as many pieces as possible onto a single sheet.

        Args:
            queue: Pieces in placement order.

        Returns:
            Tuple of (placed pieces, pieces deferred to a later sheet).
        """
        free_rects = [_FreeRect(0.0, 0.0, self.sheet_width, self.sheet_height)]
        placed: list[PlacedPiece] = []
        deferred: list[UnitPiece] = []

        for piece in queue:
            match = self._find_rect(piece, free_rects)
            if match is None:
                deferred.append(piece)
                continue

            index, rotated = match
            rect = free_rects.pop(index)
            placement = PlacedPiece(piece=piece, x=rect.x, y=rect.y, rotated=rotated)
            placed.append(placement)

            if rect.width > placement.placed_width:
                free_rects.append(
                    _FreeRect(
                        x=rect.x + placement.placed_width,
                        y=rect.y,
                        width=rect.width - placement.placed_width,
                        height=placement.placed_height,
                    )
                )
            if rect.height > placement.placed_height:
                free_rects.append(
                    _FreeRect(
                        x=rect.x,
                        y=rect.y + placement.placed_height,
                        width=rect.width,
                        height=rect.height - placement.placed_height,
                    )
                )

        return placed, deferred

    def _find_rect(
        self, piece: UnitPiece, free_rects: list[_FreeRect]
    ) -> tuple[int, bool] | None:
        """Return (rect index, rotated) of the first free rectangle that fits."""
        for index, rect in enumerate(free_rects):
            if piece.fits_within(rect.width, rect.height):
                return index, False
            if self.allow_rotation and piece.fits_within(
                rect.width, rect.height, rotated=True
            ):
                return index, True
        return None


SheetFiller = ShelfSheetFiller | GuillotineSheetFiller

_FILLERS: dict[PackingAlgorithm, type[ShelfSheetFiller] | type[GuillotineSheetFiller]] = {
    PackingAlgorithm.SHELF: ShelfSheetFiller,
    PackingAlgorithm.GUILLOTINE: GuillotineSheetFiller,
}


class EfficiencyGate:
    """Accepts or rejects a filled sheet by its efficiency.

    The first sheet of a run is always accepted; later sheets must cover at
    least the threshold fraction of their area.
    """

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    def evaluate(self, efficiency: float, is_first_sheet: bool) -> SheetAcceptance | None:
        """Decide whether a sheet is accepted.

        Args:
            efficiency: Fraction of the sheet covered by pieces.
            is_first_sheet: True if no sheet has been accepted yet.

        Returns:
            The acceptance kind, or None if the sheet is rejected.
        """
        if is_first_sheet:
            return SheetAcceptance.BOOTSTRAP
        if efficiency >= self.threshold:
            return SheetAcceptance.THRESHOLD
        return None


class SheetPacker:
    """Packs pieces onto identical sheets, one sheet at a time.

    For every sheet the queue is handed to a filler; the filled sheet goes
    through the efficiency gate. A rejected sheet returns its pieces to the
    queue and the sheet is retried with the next ordering variant (the
    configured sort first, then the other sort methods). Retries stop when
    a variant places the same set of pieces as an earlier one, or after
    max_sheet_attempts; the best attempt is then accepted as best effort.

    Attributes:
        options: Optimizer options for this packer.
        gate: Efficiency gate built from the options.
    """

    def __init__(self, options: OptimizerOptions | None = None) -> None:
        """Initialize the packer.

        Args:
            options: Optimizer options; defaults are used when omitted.
        """
        self.options = options or OptimizerOptions()
        self.gate = EfficiencyGate(self.options.efficiency_threshold)

    def pack(
        self,
        pieces: Sequence[PieceSpec],
        sheet_width: float,
        sheet_height: float,
    ) -> PackingResult:
        """Expand, order and pack piece specifications onto sheets.

        Args:
            pieces: Piece specifications with quantities.
            sheet_width: Width of every sheet.
            sheet_height: Height of every sheet.

        Returns:
            PackingResult with accepted sheets and unplaced pieces.

        Raises:
            ValueError: If a sheet dimension is not positive.
            InvalidDimensionError: If any piece spec is invalid.
        """
        check_sheet_dimensions(sheet_width, sheet_height)
        units = expand_pieces(pieces)
        return self.pack_units(units, sheet_width, sheet_height)

    def pack_units(
        self,
        units: Sequence[UnitPiece],
        sheet_width: float,
        sheet_height: float,
    ) -> PackingResult:
        """Pack already expanded unit pieces onto sheets.

        Args:
            units: Unit pieces in expansion order.
            sheet_width: Width of every sheet.
            sheet_height: Height of every sheet.

        Returns:
            PackingResult with accepted sheets and unplaced pieces.
        """
        check_sheet_dimensions(sheet_width, sheet_height)
        if not units:
            return PackingResult(
                sheets=(),
                unplaced=(),
                sheet_width=sheet_width,
                sheet_height=sheet_height,
            )

        queue = sort_pieces(units, self.options.sort_method)
        sheets: list[SheetLayout] = []

        logger.debug(
            "Packing %d pieces onto %sx%s sheets (%s, rotation %s)",
            len(queue),
            sheet_width,
            sheet_height,
            self.options.algorithm.value,
            "on" if self.options.allow_rotation else "off",
        )

        while queue:
            outcome = self._fill_next_sheet(
                queue, sheet_width, sheet_height, is_first_sheet=not sheets
            )
            if outcome is None:
                # Nothing fits an empty sheet; the rest can never be placed
                break

            placements, acceptance = outcome
            placed_ids = {p.piece.piece_id for p in placements}
            queue = [p for p in queue if p.piece_id not in placed_ids]

            layout = SheetLayout(
                sheet_index=len(sheets),
                width=sheet_width,
                height=sheet_height,
                placements=tuple(placements),
                acceptance=acceptance,
            )
            sheets.append(layout)

            logger.debug(
                "Sheet %d: %d pieces, %.1f%% efficiency (%s)",
                layout.sheet_index,
                layout.piece_count,
                layout.efficiency * 100,
                acceptance.value,
            )

        unplaced = classify_unplaced(queue, sheet_width, sheet_height)

        logger.info(
            "Packed %d of %d pieces onto %d sheets",
            len(units) - len(unplaced),
            len(units),
            len(sheets),
        )

        return PackingResult(
            sheets=tuple(sheets),
            unplaced=unplaced,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
        )

    def _ordering_variants(self) -> list[SortMethod]:
        """Sort methods tried for a sheet, configured method first."""
        configured = SortMethod(self.options.sort_method)
        variants = [configured] + [m for m in SortMethod if m is not configured]
        return variants[: self.options.max_sheet_attempts]

    def _make_filler(self, sheet_width: float, sheet_height: float) -> SheetFiller:
        filler_cls = _FILLERS[PackingAlgorithm(self.options.algorithm)]
        return filler_cls(sheet_width, sheet_height, self.options.allow_rotation)

    def _fill_next_sheet(
        self,
        queue: list[UnitPiece],
        sheet_width: float,
        sheet_height: float,
        is_first_sheet: bool,
    ) -> tuple[list[PlacedPiece], SheetAcceptance] | None:
        """Fill one sheet, retrying with other orderings while the gate rejects.

        Args:
            queue: Remaining pieces in configured sort order.
            sheet_width: Sheet width.
            sheet_height: Sheet height.
            is_first_sheet: True if no sheet has been accepted yet.

        Returns:
            Tuple of (placements, acceptance), or None if no piece fits an
            empty sheet.
        """
        filler = self._make_filler(sheet_width, sheet_height)
        sheet_area = sheet_width * sheet_height
        seen: set[frozenset[str]] = set()
        best: tuple[list[PlacedPiece], float] | None = None

        for attempt, method in enumerate(self._ordering_variants()):
            ordered = queue if attempt == 0 else sort_pieces(queue, method)
            placements, deferred = filler.fill(ordered)

            if not placements:
                # Fit on an empty sheet does not depend on order
                return None

            placed_set = frozenset(p.piece.piece_id for p in placements)
            if placed_set in seen:
                logger.debug(
                    "Ordering %s placed the same pieces as an earlier attempt",
                    method.value,
                )
                break
            seen.add(placed_set)

            efficiency = sum(p.area for p in placements) / sheet_area
            acceptance = self.gate.evaluate(efficiency, is_first_sheet)
            if acceptance is not None:
                return placements, acceptance

            if not deferred:
                # Every remaining piece is on this sheet; no ordering can add more
                logger.debug(
                    "Last sheet holds all remaining pieces at %.1f%% efficiency",
                    efficiency * 100,
                )
                return placements, SheetAcceptance.BEST_EFFORT

            logger.debug(
                "Sheet rejected with ordering %s: %.1f%% efficiency below %.1f%%",
                method.value,
                efficiency * 100,
                self.options.efficiency_threshold * 100,
            )
            if best is None or efficiency > best[1]:
                best = (placements, efficiency)

        assert best is not None
        logger.info(
            "No ordering reached %.1f%% efficiency; accepting best sheet at %.1f%%",
            self.options.efficiency_threshold * 100,
            best[1] * 100,
        )
        return best[0], SheetAcceptance.BEST_EFFORT


def optimize(
    pieces: Sequence[PieceSpec],
    sheet_width: float,
    sheet_height: float,
    options: OptimizerOptions | None = None,
) -> PackingResult:
    """Pack pieces onto the fewest sheets the heuristics can find.

    Args:
        pieces: Piece specifications with quantities.
        sheet_width: Width of every sheet.
        sheet_height: Height of every sheet.
        options: Optimizer options; defaults when omitted.

    Returns:
        PackingResult with accepted sheets and unplaced pieces.

    Raises:
        ValueError: If a sheet dimension is not positive.
        InvalidDimensionError: If any piece spec is invalid.
    """
    return SheetPacker(options).pack(pieces, sheet_width, sheet_height)
