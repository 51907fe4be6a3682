"""Removal of piece specifications that can never fit the sheet.

Input collection drops oversized pieces before optimization and shows
the user why. Specs with invalid dimensions are left alone so that the
optimizer reports them as InvalidDimensionError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from cutopt.domain.pieces import validate_spec
from cutopt.domain.value_objects import (
    DiscardedSpec,
    InvalidDimensionError,
    PieceSpec,
)

logger = logging.getLogger(__name__)


@dataclass
class PrefilterResult:
    """Outcome of the oversize pre-filter.

    Attributes:
        accepted: Specs passed on to the optimizer, in input order.
        discarded: Removed specs with the reason for each.
    """

    accepted: list[PieceSpec] = field(default_factory=list)
    discarded: list[DiscardedSpec] = field(default_factory=list)


def spec_fits_sheet(
    spec: PieceSpec, sheet_width: float, sheet_height: float, allow_rotation: bool
) -> bool:
    """Check whether a spec fits an empty sheet in an allowed orientation."""
    if spec.width <= sheet_width and spec.height <= sheet_height:
        return True
    return allow_rotation and spec.height <= sheet_width and spec.width <= sheet_height


def partition_oversized(
    specs: Sequence[PieceSpec],
    sheet_width: float,
    sheet_height: float,
    allow_rotation: bool = False,
) -> PrefilterResult:
    """Split specs into those that can fit the sheet and those that cannot.

    Args:
        specs: Piece specifications as collected from the user.
        sheet_width: Sheet width.
        sheet_height: Sheet height.
        allow_rotation: Whether the rotated orientation counts.

    Returns:
        PrefilterResult with accepted and discarded specs.
    """
    result = PrefilterResult()

    for index, spec in enumerate(specs):
        try:
            validate_spec(spec, index)
        except InvalidDimensionError:
            result.accepted.append(spec)
            continue

        if spec_fits_sheet(spec, sheet_width, sheet_height, allow_rotation):
            result.accepted.append(spec)
            continue

        message = (
            f"Piece {spec.width:g}x{spec.height:g} is larger than the "
            f"{sheet_width:g}x{sheet_height:g} sheet"
        )
        if not allow_rotation and spec_fits_sheet(
            spec, sheet_width, sheet_height, allow_rotation=True
        ):
            message += " unless rotated (rotation is disabled)"

        logger.warning("Discarding spec %d: %s", index, message)
        result.discarded.append(
            DiscardedSpec(spec_index=index, spec=spec, message=message)
        )

    return result
