"""Pytest configuration and shared fixtures for cut optimizer tests."""

from __future__ import annotations

import pytest

from cutopt.domain import PieceSpec
from cutopt.infrastructure import OptimizerOptions, SheetPacker


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI or REST API"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def packer() -> SheetPacker:
    """Create a packer with default options."""
    return SheetPacker()


@pytest.fixture
def rotating_packer() -> SheetPacker:
    """Create a packer that may rotate pieces."""
    return SheetPacker(OptimizerOptions(allow_rotation=True))


@pytest.fixture
def mixed_specs() -> list[PieceSpec]:
    """A small kitchen-style cut list with several sizes."""
    return [
        PieceSpec(width=600, height=400, quantity=4, color="#ff0000", label="Door"),
        PieceSpec(width=300, height=200, quantity=6, color="#00ff00", label="Shelf"),
        PieceSpec(width=720, height=560, quantity=2, color="#0000ff", label="Side"),
        PieceSpec(width=100, height=900, quantity=3, label="Rail"),
    ]
