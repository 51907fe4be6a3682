"""The `validate` command: check a configuration file before optimizing it.

A file that cannot be loaded is rejected. A file that loads is described
(sheet, cut list and optimizer settings) and its advisories are listed
together with the suggested fix, so a user can see what the optimizer
would be asked to do without running it.
"""

from pathlib import Path
from typing import Annotated, Any

import typer

from cutopt.application.config import (
    ConfigError,
    OptimizationConfiguration,
    ValidationResult,
    load_config,
    validate_config,
)

EXIT_REJECTED = 1


def _count(value: int, singular: str, plural: str | None = None) -> str:
    return f"{value} {singular if value == 1 else plural or singular + 's'}"


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to check"),
    ],
) -> None:
    """Check a cut list configuration without optimizing it.

    Exit codes:
        0 - Ready to optimize
        1 - Rejected (missing file, bad JSON or schema errors)
        2 - Loads, but has advisories worth reading

    Example:
        cutopt validate kitchen.json
    """
    typer.echo(f"Checking {config_file}")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=EXIT_REJECTED)

    _describe_config(config)
    result = validate_config(config)
    _display_advisories(result)

    raise typer.Exit(code=result.exit_code)


def _describe_field_error(detail: dict[str, Any]) -> str:
    text = f"{detail.get('path') or '(root)'}: {detail.get('message', 'invalid value')}"
    value = detail.get("value")
    if value is not None and not isinstance(value, (dict, list)):
        text += f" (got {value!r})"
    return text


def display_load_error(error: ConfigError) -> None:
    """Explain why a configuration could not be used.

    Shared by `validate` and `optimize --config`. Everything goes to
    stderr, one reason per line.

    Args:
        error: The ConfigError raised while loading or merging
    """
    if error.error_type == "file_not_found":
        reasons = [f"File not found: {error.path}"]
    elif error.error_type == "json_parse":
        reasons = [
            f"Invalid JSON syntax at line {d.get('line', '?')}, "
            f"column {d.get('column', '?')}: {d.get('message', 'parse error')}"
            for d in error.details
        ] or ["Invalid JSON syntax"]
    elif error.details:
        reasons = [_describe_field_error(d) for d in error.details]
    else:
        reasons = [error.message]

    typer.echo(f"Rejected {error.path or 'configuration'}:", err=True)
    for reason in reasons:
        typer.echo(f"  - {reason}", err=True)


def _describe_config(config: OptimizationConfiguration) -> None:
    options = config.options
    unit_pieces = sum(piece.quantity for piece in config.pieces)
    rotation = "rotation on" if options.allow_rotation else "rotation off"

    typer.echo(f"  Sheet:     {config.sheet.width:g} x {config.sheet.height:g}")
    typer.echo(
        f"  Cut list:  {_count(len(config.pieces), 'piece type')}, "
        f"{_count(unit_pieces, 'piece')}"
    )
    typer.echo(
        f"  Optimizer: {options.algorithm.value}, {options.sort_method.value} order, "
        f"{rotation}, {options.efficiency_threshold:.0%} threshold"
    )


def _display_advisories(result: ValidationResult) -> None:
    typer.echo()
    if not result.has_warnings:
        typer.echo("Ready to optimize.")
        return

    typer.echo(f"{_count(len(result.warnings), 'advisory', 'advisories')}:")
    for warning in result.warnings:
        typer.echo(f"  ! {warning.path}: {warning.message}")
        if warning.suggestion:
            typer.echo(f"    fix: {warning.suggestion}")
