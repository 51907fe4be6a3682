"""Configuration merging for CLI override support.

Precedence is CLI args > config values > defaults. Only CLI arguments
that are not None override configuration values.
"""

from typing import Any

from cutopt.application.config.loader import load_config_from_dict
from cutopt.application.config.schema import (
    OptimizationConfiguration,
    PieceConfig,
)


def merge_config_with_cli(
    config: OptimizationConfiguration,
    *,
    sheet_width: float | None = None,
    sheet_height: float | None = None,
    pieces: list[PieceConfig] | None = None,
    allow_rotation: bool | None = None,
    sort_method: str | None = None,
    efficiency_threshold: float | None = None,
    algorithm: str | None = None,
    output_format: str | None = None,
) -> OptimizationConfiguration:
    """Merge CLI arguments into a configuration.

    Pieces given on the command line are appended to the configured pieces.
    The merged data is validated again, so out-of-range overrides raise a
    ConfigError with error_type "validation".

    Args:
        config: Base configuration
        sheet_width: Override for sheet.width
        sheet_height: Override for sheet.height
        pieces: Extra pieces to cut
        allow_rotation: Override for options.allow_rotation
        sort_method: Override for options.sort_method
        efficiency_threshold: Override for options.efficiency_threshold
        algorithm: Override for options.algorithm
        output_format: Override for output.format

    Returns:
        A new OptimizationConfiguration with merged values

    Example:
        >>> merged = merge_config_with_cli(config, sheet_width=1830.0)
        >>> merged.sheet.width
        1830.0
    """
    data = config.model_dump(mode="json")

    _override(data["sheet"], "width", sheet_width)
    _override(data["sheet"], "height", sheet_height)
    _override(data["options"], "allow_rotation", allow_rotation)
    _override(data["options"], "sort_method", sort_method)
    _override(data["options"], "efficiency_threshold", efficiency_threshold)
    _override(data["options"], "algorithm", algorithm)
    _override(data["output"], "format", output_format)

    if pieces:
        data["pieces"].extend(piece.model_dump(mode="json") for piece in pieces)

    return load_config_from_dict(data)


def _override(section: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        section[key] = value
