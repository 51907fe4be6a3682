"""Unit tests for configuration merger and adapter.

These tests verify:
- CLI args override config values when provided
- CLI args are ignored when None
- CLI pieces are appended after configured pieces
- Out-of-range overrides are reported as ConfigError
- Adapters convert config sections to domain values
"""

import pytest

from cutopt.application.config import (
    ConfigError,
    OptimizationConfiguration,
    OptimizerOptionsConfig,
    PieceConfig,
    SheetConfig,
    config_to_options,
    config_to_piece_specs,
    config_to_sheet,
    merge_config_with_cli,
)
from cutopt.domain import PackingAlgorithm, PieceSpec, SortMethod


@pytest.fixture
def base_config() -> OptimizationConfiguration:
    """Create a base configuration for testing."""
    return OptimizationConfiguration(
        sheet=SheetConfig(width=2440, height=1220),
        pieces=[PieceConfig(width=600, height=400, quantity=2, label="Door")],
        options=OptimizerOptionsConfig(allow_rotation=False),
    )


class TestMergeConfigWithCli:
    """Tests for merge_config_with_cli function."""

    def test_no_overrides(self, base_config: OptimizationConfiguration) -> None:
        """Without CLI values the config is unchanged."""
        merged = merge_config_with_cli(base_config)
        assert merged.model_dump() == base_config.model_dump()

    def test_sheet_override(self, base_config: OptimizationConfiguration) -> None:
        """Sheet dimensions from the CLI win."""
        merged = merge_config_with_cli(base_config, sheet_width=1830.0)
        assert merged.sheet.width == 1830.0
        assert merged.sheet.height == 1220.0

    def test_option_overrides(self, base_config: OptimizationConfiguration) -> None:
        """Option values from the CLI win."""
        merged = merge_config_with_cli(
            base_config,
            allow_rotation=True,
            sort_method="area-desc",
            efficiency_threshold=0.7,
            algorithm="guillotine",
            output_format="json",
        )
        assert merged.options.allow_rotation is True
        assert merged.options.sort_method == SortMethod.AREA_DESC
        assert merged.options.efficiency_threshold == 0.7
        assert merged.options.algorithm == PackingAlgorithm.GUILLOTINE
        assert merged.output.format == "json"

    def test_false_rotation_overrides_true(self) -> None:
        """An explicit False is an override, not a missing value."""
        config = OptimizationConfiguration(
            options=OptimizerOptionsConfig(allow_rotation=True)
        )
        merged = merge_config_with_cli(config, allow_rotation=False)
        assert merged.options.allow_rotation is False

    def test_pieces_appended(self, base_config: OptimizationConfiguration) -> None:
        """CLI pieces follow the configured pieces."""
        merged = merge_config_with_cli(
            base_config, pieces=[PieceConfig(width=300, height=200, quantity=3)]
        )
        assert [(p.width, p.quantity) for p in merged.pieces] == [(600, 2), (300, 3)]

    def test_original_unchanged(self, base_config: OptimizationConfiguration) -> None:
        """Merging returns a new configuration."""
        merge_config_with_cli(base_config, sheet_width=100.0)
        assert base_config.sheet.width == 2440

    def test_invalid_override(self, base_config: OptimizationConfiguration) -> None:
        """Out-of-range overrides fail validation with a path."""
        with pytest.raises(ConfigError) as exc_info:
            merge_config_with_cli(base_config, efficiency_threshold=2.0)
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "options.efficiency_threshold"

    def test_unknown_sort_method(self, base_config: OptimizationConfiguration) -> None:
        """Unknown sort method names are rejected."""
        with pytest.raises(ConfigError):
            merge_config_with_cli(base_config, sort_method="smallest-first")


class TestConfigAdapters:
    """Tests for the config-to-domain adapters."""

    def test_piece_specs(self, base_config: OptimizationConfiguration) -> None:
        """Pieces become PieceSpecs in order."""
        assert config_to_piece_specs(base_config) == [
            PieceSpec(width=600, height=400, quantity=2, color="#888888", label="Door")
        ]

    def test_options(self) -> None:
        """The options section becomes OptimizerOptions."""
        config = OptimizationConfiguration.model_validate(
            {
                "options": {
                    "allow_rotation": True,
                    "sort_method": "width-desc",
                    "efficiency_threshold": 0.6,
                    "algorithm": "guillotine",
                    "max_sheet_attempts": 2,
                }
            }
        )
        options = config_to_options(config)
        assert options.allow_rotation is True
        assert options.sort_method == SortMethod.WIDTH_DESC
        assert options.efficiency_threshold == 0.6
        assert options.algorithm == PackingAlgorithm.GUILLOTINE
        assert options.max_sheet_attempts == 2

    def test_sheet(self, base_config: OptimizationConfiguration) -> None:
        """The sheet section becomes a (width, height) pair."""
        assert config_to_sheet(base_config) == (2440, 1220)
