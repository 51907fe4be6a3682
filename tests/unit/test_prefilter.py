"""Unit tests for the oversize pre-filter."""

import logging

import pytest

from cutopt.application import partition_oversized, spec_fits_sheet
from cutopt.domain import PieceSpec


class TestSpecFitsSheet:
    """Tests for spec_fits_sheet."""

    def test_fits_normally(self) -> None:
        """A spec no larger than the sheet fits."""
        assert spec_fits_sheet(PieceSpec(width=1000, height=800), 1000, 800, False)

    def test_fits_only_rotated(self) -> None:
        """Rotated fit counts only when rotation is allowed."""
        spec = PieceSpec(width=100, height=900)
        assert not spec_fits_sheet(spec, 1000, 800, allow_rotation=False)
        assert spec_fits_sheet(spec, 1000, 800, allow_rotation=True)


class TestPartitionOversized:
    """Tests for partition_oversized."""

    def test_keeps_fitting_specs_in_order(self) -> None:
        """Specs that fit pass through unchanged and in order."""
        specs = [PieceSpec(width=600, height=400), PieceSpec(width=300, height=200)]
        result = partition_oversized(specs, 1000, 1000)
        assert result.accepted == specs
        assert result.discarded == []

    def test_discards_oversized(self) -> None:
        """Oversized specs are removed with their index and a message."""
        specs = [
            PieceSpec(width=600, height=400),
            PieceSpec(width=2000, height=2000, quantity=3),
        ]
        result = partition_oversized(specs, 1000, 1000)

        assert result.accepted == [specs[0]]
        assert len(result.discarded) == 1
        assert result.discarded[0].spec_index == 1
        assert result.discarded[0].spec == specs[1]
        assert result.discarded[0].message == (
            "Piece 2000x2000 is larger than the 1000x1000 sheet"
        )

    def test_message_mentions_rotation(self) -> None:
        """If rotation would help, the message says so."""
        result = partition_oversized([PieceSpec(width=100, height=900)], 1000, 800)
        assert result.discarded[0].message.endswith(
            "unless rotated (rotation is disabled)"
        )

    def test_rotation_keeps_spec(self) -> None:
        """With rotation allowed, a spec fitting rotated is kept."""
        result = partition_oversized(
            [PieceSpec(width=100, height=900)], 1000, 800, allow_rotation=True
        )
        assert len(result.accepted) == 1

    @pytest.mark.parametrize(
        "spec", [PieceSpec(width=0, height=5000), PieceSpec(width=5000, height=10, quantity=0)]
    )
    def test_invalid_specs_pass_through(self, spec: PieceSpec) -> None:
        """Invalid specs are left for the optimizer to reject."""
        result = partition_oversized([spec], 1000, 1000)
        assert result.accepted == [spec]
        assert result.discarded == []

    def test_discard_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Discards are logged as warnings."""
        with caplog.at_level(logging.WARNING, logger="cutopt.application.prefilter"):
            partition_oversized([PieceSpec(width=2000, height=10)], 1000, 1000)
        assert "Discarding spec 0" in caplog.text
