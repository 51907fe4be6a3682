"""Text and JSON output for packing results."""

from __future__ import annotations

import json
from typing import Any, Sequence

from cutopt.domain.pieces import PieceSummary
from cutopt.domain.value_objects import DiscardedSpec
from cutopt.infrastructure.bin_packing import (
    PackingResult,
    PlacedPiece,
    SheetLayout,
    UnplacedPiece,
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class ResultFormatter:
    """Formats a packing result as a plain-text summary.

    The summary lists overall figures, the requested cut list, one line
    per sheet, and warnings for unplaced and discarded pieces.
    """

    def __init__(self, show_placements: bool = False) -> None:
        """Initialize the formatter.

        Args:
            show_placements: Also list every placement under its sheet.
        """
        self.show_placements = show_placements

    def format(
        self,
        result: PackingResult,
        discarded: Sequence[DiscardedSpec] = (),
        summary: PieceSummary | None = None,
    ) -> str:
        """Format the result as a multi-line string.

        Args:
            result: Packing result to describe.
            discarded: Specs removed before optimization.
            summary: Summary of the pieces handed to the optimizer.
        """
        stats = result.statistics
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Sheet Size: {result.sheet_width:g} x {result.sheet_height:g}",
            f"Total Sheets: {stats.total_sheets}",
            f"Total Pieces: {stats.total_pieces}",
            f"Total Area: {stats.total_area:,.0f}",
            f"Used Area: {stats.used_area:,.0f}",
            f"Waste Area: {stats.waste_area:,.0f}",
            f"Efficiency: {stats.efficiency_percentage:.2f}% ({stats.efficiency_rating})",
        ]

        if summary is not None:
            lines.append("")
            lines.append("Cut List:")
            lines.append(f"  Pieces Requested: {summary.total_pieces}")
            lines.append(f"  Requested Area: {summary.total_area:,.0f}")
            lines.append(f"  Unique Sizes: {summary.unique_sizes}")

        if result.sheets:
            lines.append("")
            lines.append("Per-Sheet Details:")
            for sheet in result.sheets:
                lines.append(self._format_sheet(sheet))
                if self.show_placements:
                    lines.extend(
                        f"    {self._format_placement(p)}" for p in sheet.placements
                    )
        else:
            lines.append("")
            lines.append("No sheets used.")

        if result.unplaced:
            lines.append("")
            lines.append(f"Unplaced Pieces: {len(result.unplaced)}")
            lines.extend(f"  {self._format_unplaced(u)}" for u in result.unplaced)

        if discarded:
            lines.append("")
            lines.append(f"Discarded Before Optimization: {len(discarded)}")
            for item in discarded:
                lines.append(
                    f"  #{item.spec_index + 1} {item.spec.width:g}x{item.spec.height:g}"
                    f" (x{item.spec.quantity}): {item.message}"
                )

        return "\n".join(lines)

    def _format_sheet(self, sheet: SheetLayout) -> str:
        return (
            f"  Sheet {sheet.sheet_index + 1}: "
            f"{_plural(sheet.piece_count, 'piece')}, "
            f"{sheet.efficiency * 100:.1f}% efficiency ({sheet.acceptance.value})"
        )

    def _format_placement(self, placement: PlacedPiece) -> str:
        piece = placement.piece
        name = piece.label or piece.piece_id
        rotated = " rotated" if placement.rotated else ""
        return (
            f"{name}: {placement.placed_width:g}x{placement.placed_height:g}"
            f" at ({placement.x:g}, {placement.y:g}){rotated}"
        )

    def _format_unplaced(self, unplaced: UnplacedPiece) -> str:
        piece = unplaced.piece
        name = piece.label or piece.piece_id
        return f"{name} ({piece.width:g}x{piece.height:g}): {unplaced.message}"


def placement_to_dict(placement: PlacedPiece) -> dict[str, Any]:
    """Serialize a placement with everything a renderer needs."""
    piece = placement.piece
    return {
        "id": piece.piece_id,
        "label": piece.label,
        "spec_index": piece.spec_index,
        "x": placement.x,
        "y": placement.y,
        "width": piece.width,
        "height": piece.height,
        "placed_width": placement.placed_width,
        "placed_height": placement.placed_height,
        "rotated": placement.rotated,
        "color": piece.color,
    }


def summary_to_dict(summary: PieceSummary) -> dict[str, Any]:
    return {
        "total_pieces": summary.total_pieces,
        "total_area": summary.total_area,
        "unique_sizes": summary.unique_sizes,
    }


def result_to_dict(
    result: PackingResult,
    discarded: Sequence[DiscardedSpec] = (),
    summary: PieceSummary | None = None,
) -> dict[str, Any]:
    """Convert a packing result to plain JSON-compatible data.

    The `piece_summary` key is present only when a summary is given.
    """
    stats = result.statistics
    data: dict[str, Any] = {
        "sheet": {"width": result.sheet_width, "height": result.sheet_height},
        "sheets": [
            {
                "index": sheet.sheet_index,
                "used_area": sheet.used_area,
                "efficiency": sheet.efficiency,
                "acceptance": sheet.acceptance.value,
                "pieces": [placement_to_dict(p) for p in sheet.placements],
            }
            for sheet in result.sheets
        ],
        "unplaced": [
            {
                "id": u.piece.piece_id,
                "label": u.piece.label,
                "width": u.piece.width,
                "height": u.piece.height,
                "color": u.piece.color,
                "reason": u.reason.value,
                "message": u.message,
            }
            for u in result.unplaced
        ],
        "discarded": [
            {
                "spec_index": d.spec_index,
                "width": d.spec.width,
                "height": d.spec.height,
                "quantity": d.spec.quantity,
                "message": d.message,
            }
            for d in discarded
        ],
        "statistics": {
            "total_sheets": stats.total_sheets,
            "total_area": stats.total_area,
            "used_area": stats.used_area,
            "waste_area": stats.waste_area,
            "efficiency": stats.efficiency,
            "total_pieces": stats.total_pieces,
            "unplaced_pieces": stats.unplaced_pieces,
            "efficiency_rating": stats.efficiency_rating,
        },
    }
    if summary is not None:
        data["piece_summary"] = summary_to_dict(summary)
    return data


class JsonResultExporter:
    """Exports packing results as JSON."""

    def export(
        self,
        result: PackingResult,
        discarded: Sequence[DiscardedSpec] = (),
        summary: PieceSummary | None = None,
    ) -> str:
        """Export the result as an indented JSON string."""
        return json.dumps(result_to_dict(result, discarded, summary), indent=2)
