"""Pydantic models for cut optimization configuration files.

A configuration file describes the sheet stock, the pieces to cut and the
optimizer options. All models forbid unknown keys so that typos surface as
validation errors with a JSON path.
"""

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from cutopt.domain.value_objects import (
    DEFAULT_PIECE_COLOR,
    DEFAULT_SHEET_HEIGHT,
    DEFAULT_SHEET_WIDTH,
    PackingAlgorithm,
    SortMethod,
)

# Supported schema versions for configuration files
# Version 1.0: Sheet, pieces, options and output settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetConfig(BaseModel):
    """Sheet stock dimensions.

    Attributes:
        width: Sheet width (default 2440).
        height: Sheet height (default 1220).
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(
        default=DEFAULT_SHEET_WIDTH, gt=0, allow_inf_nan=False, description="Sheet width"
    )
    height: float = Field(
        default=DEFAULT_SHEET_HEIGHT, gt=0, allow_inf_nan=False, description="Sheet height"
    )


class PieceConfig(BaseModel):
    """A piece type to cut.

    Attributes:
        width: Piece width.
        height: Piece height.
        quantity: How many identical pieces to cut.
        color: Display color as a hex string.
        label: Optional display name.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(
        default=300.0, gt=0, allow_inf_nan=False, description="Piece width"
    )
    height: float = Field(
        default=200.0, gt=0, allow_inf_nan=False, description="Piece height"
    )
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    color: str = Field(
        default=DEFAULT_PIECE_COLOR,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Display color",
    )
    label: str | None = Field(default=None, max_length=100)


class OptimizerOptionsConfig(BaseModel):
    """Optimizer options.

    Attributes:
        allow_rotation: Whether pieces may be rotated 90 degrees.
        sort_method: Piece ordering before placement.
        efficiency_threshold: Minimum efficiency for sheets after the first.
        algorithm: Sheet filling strategy.
        max_sheet_attempts: Ordering variants tried per sheet.
    """

    model_config = ConfigDict(extra="forbid")

    allow_rotation: bool = False
    sort_method: SortMethod = SortMethod.MAX_SIDE_DESC
    efficiency_threshold: float = Field(
        default=0.85,
        ge=0,
        le=1,
        description="Minimum fraction of sheet area used before a sheet is accepted",
    )
    algorithm: PackingAlgorithm = PackingAlgorithm.SHELF
    max_sheet_attempts: int = Field(
        default=4,
        ge=1,
        le=len(SortMethod),
        description="Ordering variants tried before accepting the best sheet",
    )


class OutputConfig(BaseModel):
    """Output settings.

    Attributes:
        format: Output format for the CLI.
        prefilter: Remove pieces that cannot fit the sheet before optimizing.
        show_placements: List every placement in text output.
    """

    model_config = ConfigDict(extra="forbid")

    format: Literal["text", "json"] = "text"
    prefilter: bool = True
    show_placements: bool = False


class OptimizationConfiguration(BaseModel):
    """Root configuration model.

    Example:
        >>> config = OptimizationConfiguration(
        ...     schema_version="1.0",
        ...     pieces=[PieceConfig(width=600, height=400, quantity=2)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    sheet: SheetConfig = Field(default_factory=SheetConfig)
    pieces: list[PieceConfig] = Field(default_factory=list)
    options: OptimizerOptionsConfig = Field(default_factory=OptimizerOptionsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions of a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
