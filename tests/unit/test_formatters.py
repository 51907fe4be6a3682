"""Unit tests for ResultFormatter and JsonResultExporter."""

from __future__ import annotations

import json

import pytest

from cutopt.domain import DiscardedSpec, PieceSpec, PieceSummary
from cutopt.infrastructure import (
    JsonResultExporter,
    OptimizerOptions,
    PackingResult,
    ResultFormatter,
    SheetPacker,
    result_to_dict,
)


@pytest.fixture
def result() -> PackingResult:
    """Two placed doors and one piece too large for the sheet."""
    return SheetPacker().pack(
        [
            PieceSpec(width=600, height=400, quantity=2, color="#ff0000", label="Door"),
            PieceSpec(width=1200, height=1200),
        ],
        1000,
        1000,
    )


@pytest.fixture
def discarded() -> list[DiscardedSpec]:
    """One spec removed before optimization."""
    return [
        DiscardedSpec(
            spec_index=2,
            spec=PieceSpec(width=3000, height=100, quantity=2),
            message="Piece 3000x100 is larger than the 1000x1000 sheet",
        )
    ]


@pytest.fixture
def summary() -> PieceSummary:
    """Summary of the three unit pieces behind the result fixture."""
    return PieceSummary(total_pieces=3, total_area=1_920_000, unique_sizes=2)

class TestResultFormatter:
    """Tests for the text summary."""

    def test_summary_header(self, result: PackingResult) -> None:
        """The summary starts with the overall figures."""
        output = ResultFormatter().format(result)
        lines = output.splitlines()

        assert lines[0] == "CUT OPTIMIZATION SUMMARY"
        assert "Sheet Size: 1000 x 1000" in output
        assert "Total Sheets: 1" in output
        assert "Total Pieces: 2" in output
        assert "Used Area: 480,000" in output
        assert "Waste Area: 520,000" in output
        assert "Efficiency: 48.00% (low)" in output

    def test_cut_list_section(self, result: PackingResult, summary: PieceSummary) -> None:
        """The requested cut list is summarized after the overall figures."""
        lines = ResultFormatter().format(result, summary=summary).splitlines()

        start = lines.index("Cut List:")
        assert lines[start + 1 : start + 4] == [
            "  Pieces Requested: 3",
            "  Requested Area: 1,920,000",
            "  Unique Sizes: 2",
        ]
        assert start < lines.index("Per-Sheet Details:")

    def test_cut_list_omitted_without_summary(self, result: PackingResult) -> None:
        """Without a summary the cut list section is left out."""
        assert "Cut List:" not in ResultFormatter().format(result)

    def test_per_sheet_line(self, result: PackingResult) -> None:
        """Each sheet gets a line with its count, efficiency and acceptance."""
        output = ResultFormatter().format(result)
        assert "Sheet 1: 2 pieces, 48.0% efficiency (bootstrap)" in output

    def test_unplaced_section(self, result: PackingResult) -> None:
        """Unplaced pieces are listed with their reason."""
        output = ResultFormatter().format(result)
        assert "Unplaced Pieces: 1" in output
        assert "2_1200x1200 (1200x1200): Piece is larger than the sheet" in output

    def test_discarded_section(
        self, result: PackingResult, discarded: list[DiscardedSpec]
    ) -> None:
        """Discarded specs are listed with their one-based position."""
        output = ResultFormatter().format(result, discarded)
        assert "Discarded Before Optimization: 1" in output
        assert "#3 3000x100 (x2)" in output

    def test_placements_hidden_by_default(self, result: PackingResult) -> None:
        """Placements are only listed when requested."""
        assert "at (0, 400)" not in ResultFormatter().format(result)

    def test_show_placements(self, result: PackingResult) -> None:
        """Placements are listed under their sheet, by label."""
        output = ResultFormatter(show_placements=True).format(result)
        assert "Door: 600x400 at (0, 0)" in output
        assert "Door: 600x400 at (0, 400)" in output

    def test_rotated_placement_marked(self) -> None:
        """Rotated placements are marked."""
        result = SheetPacker(OptimizerOptions(allow_rotation=True)).pack(
            [PieceSpec(width=100, height=900, label="Rail")], 1000, 800
        )
        output = ResultFormatter(show_placements=True).format(result)
        assert "Rail: 900x100 at (0, 0) rotated" in output

    def test_empty_result(self) -> None:
        """An empty result says no sheets were used."""
        output = ResultFormatter().format(SheetPacker().pack([], 1000, 1000))
        assert "No sheets used." in output
        assert "Unplaced Pieces" not in output


class TestJsonResultExporter:
    """Tests for JSON export."""

    def test_export_is_valid_json(
        self, result: PackingResult, discarded: list[DiscardedSpec]
    ) -> None:
        """The export parses back to the result dictionary."""
        data = json.loads(JsonResultExporter().export(result, discarded))
        assert data == json.loads(json.dumps(result_to_dict(result, discarded)))

    def test_sheet_structure(self, result: PackingResult) -> None:
        """Sheets carry their placements with everything a renderer needs."""
        data = result_to_dict(result)
        sheet = data["sheets"][0]

        assert data["sheet"] == {"width": 1000, "height": 1000}
        assert sheet["index"] == 0
        assert sheet["acceptance"] == "bootstrap"
        assert sheet["pieces"][1] == {
            "id": "1_600x400",
            "label": "Door",
            "spec_index": 0,
            "x": 0,
            "y": 400,
            "width": 600,
            "height": 400,
            "placed_width": 600,
            "placed_height": 400,
            "rotated": False,
            "color": "#ff0000",
        }

    def test_unplaced_and_discarded(
        self, result: PackingResult, discarded: list[DiscardedSpec]
    ) -> None:
        """Unplaced pieces carry a reason code; discarded specs their message."""
        data = result_to_dict(result, discarded)

        assert data["unplaced"][0]["reason"] == "too_large_even_rotated"
        assert data["discarded"][0]["spec_index"] == 2
        assert data["discarded"][0]["quantity"] == 2

    def test_statistics(self, result: PackingResult) -> None:
        """Statistics include the rating."""
        stats = result_to_dict(result)["statistics"]
        assert stats["total_sheets"] == 1
        assert stats["efficiency"] == pytest.approx(0.48)
        assert stats["unplaced_pieces"] == 1
        assert stats["efficiency_rating"] == "low"

    def test_piece_summary(self, result: PackingResult, summary: PieceSummary) -> None:
        """The piece summary is exported under its own key."""
        data = json.loads(JsonResultExporter().export(result, summary=summary))
        assert data["piece_summary"] == {
            "total_pieces": 3,
            "total_area": 1_920_000,
            "unique_sizes": 2,
        }

    def test_piece_summary_absent_by_default(self, result: PackingResult) -> None:
        """Without a summary the key is not emitted."""
        assert "piece_summary" not in result_to_dict(result)
