"""Conversion from configuration models to domain values."""

from cutopt.application.config.schema import OptimizationConfiguration
from cutopt.domain.value_objects import PieceSpec
from cutopt.infrastructure.bin_packing import OptimizerOptions


def config_to_piece_specs(config: OptimizationConfiguration) -> list[PieceSpec]:
    """Build piece specifications in configuration order."""
    return [
        PieceSpec(
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
            color=piece.color,
            label=piece.label,
        )
        for piece in config.pieces
    ]


def config_to_options(config: OptimizationConfiguration) -> OptimizerOptions:
    """Build OptimizerOptions from the options section."""
    options = config.options
    return OptimizerOptions(
        allow_rotation=options.allow_rotation,
        sort_method=options.sort_method,
        efficiency_threshold=options.efficiency_threshold,
        algorithm=options.algorithm,
        max_sheet_attempts=options.max_sheet_attempts,
    )


def config_to_sheet(config: OptimizationConfiguration) -> tuple[float, float]:
    """Return (width, height) of the configured sheet."""
    return config.sheet.width, config.sheet.height
