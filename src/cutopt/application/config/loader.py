"""Loading of optimization configuration files.

Reads a JSON configuration, validates it against OptimizationConfiguration
and turns every failure (missing file, unreadable file, bad JSON, schema
violation) into a ConfigError with details the CLI and REST API can show.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutopt.application.config.schema import OptimizationConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration cannot be loaded or validated.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file, when loaded from disk
        details: Per-problem dictionaries (line/column for JSON errors,
            path/message/value for validation errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> format_json_path(("sheet", "width"))
        'sheet.width'
        >>> format_json_path(("pieces", 2, "quantity"))
        'pieces[2].quantity'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def extract_validation_errors(error: PydanticValidationError) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message/value dictionaries."""
    return [
        {
            "path": format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_config_from_dict(
    data: dict[str, Any], path: Path | None = None
) -> OptimizationConfiguration:
    """Validate configuration data that is already parsed.

    Args:
        data: Configuration dictionary (e.g. a REST request body)
        path: Source file, used only for error reporting

    Returns:
        A validated OptimizationConfiguration

    Raises:
        ConfigError: With error_type "validation" if the data does not match
            the schema.
    """
    try:
        return OptimizationConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = extract_validation_errors(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> OptimizationConfiguration:
    """Load and validate a configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        A validated OptimizationConfiguration

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON or
            does not match the schema.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in config file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Config file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
            details=[
                {"path": "", "message": "Expected a JSON object", "value": None}
            ],
        )

    config = load_config_from_dict(data, path=path)
    logger.debug("Loaded config %s with %d piece types", path, len(config.pieces))
    return config
