"""Application commands (use cases) for cut optimization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from cutopt.application.config.adapter import (
    config_to_options,
    config_to_piece_specs,
    config_to_sheet,
)
from cutopt.application.config.schema import OptimizationConfiguration
from cutopt.application.prefilter import partition_oversized
from cutopt.domain.pieces import (
    PieceSummary,
    expand_pieces,
    summarize_pieces,
    validate_spec,
)
from cutopt.domain.value_objects import DiscardedSpec, PieceSpec
from cutopt.infrastructure.bin_packing import (
    OptimizerOptions,
    PackingResult,
    SheetPacker,
    check_sheet_dimensions,
)

logger = logging.getLogger(__name__)


@dataclass
class OptimizeOutput:
    """Output of an optimization run.

    Attributes:
        result: The packing result.
        discarded: Specs removed by the pre-filter.
        piece_summary: Summary of the unit pieces handed to the optimizer.
    """

    result: PackingResult
    discarded: list[DiscardedSpec] = field(default_factory=list)
    piece_summary: PieceSummary | None = None


class OptimizeCommand:
    """Command to optimize a cut list onto sheets.

    Collects pieces the way the input form does (optionally discarding
    specs that cannot fit the sheet), then runs the packer.
    """

    def execute(
        self,
        specs: Sequence[PieceSpec],
        sheet_width: float,
        sheet_height: float,
        options: OptimizerOptions | None = None,
        prefilter: bool = True,
    ) -> OptimizeOutput:
        """Execute the optimization.

        Args:
            specs: Piece specifications with quantities.
            sheet_width: Sheet width.
            sheet_height: Sheet height.
            options: Optimizer options; defaults when omitted.
            prefilter: Discard specs that cannot fit the sheet before packing.

        Returns:
            OptimizeOutput with the result and any discarded specs.

        Raises:
            InvalidDimensionError: If a piece spec is invalid.
            ValueError: If a sheet dimension is not positive.
        """
        options = options or OptimizerOptions()
        check_sheet_dimensions(sheet_width, sheet_height)
        # Report bad specs by their position in the caller's list
        for index, spec in enumerate(specs):
            validate_spec(spec, index)
        discarded: list[DiscardedSpec] = []

        if prefilter:
            filtered = partition_oversized(
                specs, sheet_width, sheet_height, options.allow_rotation
            )
            specs = filtered.accepted
            discarded = filtered.discarded

        units = expand_pieces(specs)
        result = SheetPacker(options).pack_units(units, sheet_width, sheet_height)

        logger.info(
            "Optimization finished: %d sheets, %.1f%% efficiency, %d unplaced, %d discarded",
            result.total_sheets,
            result.statistics.efficiency_percentage,
            len(result.unplaced),
            len(discarded),
        )

        return OptimizeOutput(
            result=result,
            discarded=discarded,
            piece_summary=summarize_pieces(units),
        )

    def execute_config(self, config: OptimizationConfiguration) -> OptimizeOutput:
        """Execute the optimization described by a loaded configuration."""
        sheet_width, sheet_height = config_to_sheet(config)
        return self.execute(
            config_to_piece_specs(config),
            sheet_width,
            sheet_height,
            options=config_to_options(config),
            prefilter=config.output.prefilter,
        )
