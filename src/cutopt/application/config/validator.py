"""Validation results and optimization advisories.

Schema problems are caught by pydantic when the file is loaded. This module
adds advisory checks on a loaded configuration: things that will not stop
the optimizer but that the user probably wants to know about.
"""

from dataclasses import dataclass, field

from cutopt.application.config.schema import OptimizationConfiguration
from cutopt.application.prefilter import spec_fits_sheet
from cutopt.domain.value_objects import PieceSpec


# Advisory limits
LOW_THRESHOLD_WARNING: float = 0.5
HIGH_THRESHOLD_WARNING: float = 0.95
MAX_RECOMMENDED_UNIT_PIECES: int = 10_000


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Advisories for a configuration that already passed schema validation.

    Nothing here blocks optimization; a configuration the optimizer cannot
    use never gets this far because the loader raises ConfigError.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Check if the configuration has any warnings."""
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 2 with advisories."""
        return 2 if self.warnings else 0

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def check_optimization_advisories(config: OptimizationConfiguration) -> ValidationResult:
    """Check a configuration for likely mistakes.

    Advisories checked:
    - No pieces configured
    - Pieces that cannot fit the sheet with the configured rotation policy
    - Efficiency threshold unusually low or high
    - Very large piece counts

    Args:
        config: A validated OptimizationConfiguration

    Returns:
        ValidationResult containing any warnings found
    """
    result = ValidationResult()
    sheet = config.sheet
    allow_rotation = config.options.allow_rotation

    if not config.pieces:
        result.add_warning(
            path="pieces",
            message="No pieces configured; the result will be empty",
            suggestion="Add pieces to the config or pass --piece on the command line",
        )

    for i, piece in enumerate(config.pieces):
        spec = PieceSpec(width=piece.width, height=piece.height)
        if spec_fits_sheet(spec, sheet.width, sheet.height, allow_rotation):
            continue

        if not allow_rotation and spec_fits_sheet(
            spec, sheet.width, sheet.height, allow_rotation=True
        ):
            suggestion = "Enable options.allow_rotation so the piece can be turned"
        else:
            suggestion = "Use a larger sheet or split the piece"
        result.add_warning(
            path=f"pieces[{i}]",
            message=(
                f"Piece {piece.width:g}x{piece.height:g} does not fit the "
                f"{sheet.width:g}x{sheet.height:g} sheet and will be discarded"
            ),
            suggestion=suggestion,
        )

    threshold = config.options.efficiency_threshold
    if threshold < LOW_THRESHOLD_WARNING:
        result.add_warning(
            path="options.efficiency_threshold",
            message=(
                f"Efficiency threshold of {threshold:.0%} accepts very sparse sheets"
            ),
            suggestion="Values around 0.85 give denser layouts",
        )
    elif threshold > HIGH_THRESHOLD_WARNING:
        result.add_warning(
            path="options.efficiency_threshold",
            message=(
                f"Efficiency threshold of {threshold:.0%} is rarely reachable; most "
                "sheets will be accepted as best effort"
            ),
            suggestion="Values around 0.85 avoid needless retries",
        )

    total_units = sum(piece.quantity for piece in config.pieces)
    if total_units > MAX_RECOMMENDED_UNIT_PIECES:
        result.add_warning(
            path="pieces",
            message=f"{total_units} unit pieces requested; optimization may be slow",
        )

    return result


def validate_config(config: OptimizationConfiguration) -> ValidationResult:
    """Run all checks on a loaded configuration.

    Args:
        config: A configuration that passed schema validation

    Returns:
        ValidationResult with any advisories
    """
    return check_optimization_advisories(config)
