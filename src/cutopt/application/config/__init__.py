"""Configuration schema and loading for cut optimization.

Public API:
    - OptimizationConfiguration: Root configuration model
    - SheetConfig, PieceConfig, OptimizerOptionsConfig, OutputConfig
    - load_config / load_config_from_dict: Load and validate configuration
    - ConfigError: Exception for configuration errors
    - validate_config: Advisory checks on a loaded configuration
    - merge_config_with_cli: Apply CLI overrides
    - config_to_piece_specs / config_to_options / config_to_sheet: Adapters

Example:
    >>> from pathlib import Path
    >>> from cutopt.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"Sheet: {config.sheet.width}x{config.sheet.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cutopt.application.config.adapter import (
    config_to_options,
    config_to_piece_specs,
    config_to_sheet,
)
from cutopt.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cutopt.application.config.merger import merge_config_with_cli
from cutopt.application.config.schema import (
    SUPPORTED_VERSIONS,
    OptimizationConfiguration,
    OptimizerOptionsConfig,
    OutputConfig,
    PieceConfig,
    SheetConfig,
)
from cutopt.application.config.validator import (
    ValidationResult,
    ValidationWarning,
    check_optimization_advisories,
    validate_config,
)

__all__ = [
    "ConfigError",
    "OptimizationConfiguration",
    "OptimizerOptionsConfig",
    "OutputConfig",
    "PieceConfig",
    "SUPPORTED_VERSIONS",
    "SheetConfig",
    "ValidationResult",
    "ValidationWarning",
    "check_optimization_advisories",
    "config_to_options",
    "config_to_piece_specs",
    "config_to_sheet",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    "validate_config",
]
