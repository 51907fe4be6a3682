"""Typer CLI for cut optimization."""

import logging
import re
from pathlib import Path
from typing import Annotated

import typer

from cutopt.application import OptimizeCommand
from cutopt.application.config import (
    ConfigError,
    OptimizationConfiguration,
    PieceConfig,
    load_config,
    merge_config_with_cli,
)
from cutopt.cli.commands import validate_command
from cutopt.cli.commands.validate import display_load_error
from cutopt.domain import InvalidDimensionError
from cutopt.infrastructure import JsonResultExporter, ResultFormatter

_PIECE_PATTERN = re.compile(
    r"^\s*(?P<width>[0-9.]+)\s*[xX]\s*(?P<height>[0-9.]+)"
    r"(?:\s*[xX]\s*(?P<quantity>\d+))?\s*$"
)


app = typer.Typer(
    name="cutopt",
    help="Lay out rectangular pieces on sheet stock with minimal waste.",
)

app.command(name="validate")(validate_command)


def parse_piece(value: str) -> PieceConfig:
    """Parse a WIDTHxHEIGHT[xQUANTITY] piece argument.

    Examples:
        >>> parse_piece("600x400x2").quantity
        2

    Raises:
        typer.BadParameter: If the value is not in the expected form.
    """
    match = _PIECE_PATTERN.match(value)
    if match is None:
        raise typer.BadParameter(
            f"Expected WIDTHxHEIGHT or WIDTHxHEIGHTxQUANTITY, got {value!r}"
        )
    try:
        width = float(match.group("width"))
        height = float(match.group("height"))
    except ValueError as e:
        raise typer.BadParameter(f"Invalid number in piece {value!r}") from e

    quantity = match.group("quantity")
    try:
        return PieceConfig(
            width=width,
            height=height,
            quantity=int(quantity) if quantity else 1,
        )
    except ValueError as e:
        raise typer.BadParameter(f"Invalid piece {value!r}: {e}") from e


@app.command()
def optimize(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", "-W", help="Sheet width"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", "-H", help="Sheet height"),
    ] = None,
    piece: Annotated[
        list[str] | None,
        typer.Option(
            "--piece",
            "-p",
            help="Piece as WIDTHxHEIGHT or WIDTHxHEIGHTxQUANTITY (repeatable)",
        ),
    ] = None,
    rotate: Annotated[
        bool | None,
        typer.Option("--rotate/--no-rotate", help="Allow 90 degree rotation"),
    ] = None,
    sort_method: Annotated[
        str | None,
        typer.Option(
            "--sort",
            help="Piece order: max-side-desc, area-desc, width-desc, height-desc",
        ),
    ] = None,
    threshold: Annotated[
        float | None,
        typer.Option("--threshold", help="Minimum sheet efficiency (0-1)"),
    ] = None,
    algorithm: Annotated[
        str | None,
        typer.Option("--algorithm", help="Sheet filling strategy: shelf, guillotine"),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log optimizer progress"),
    ] = False,
) -> None:
    """Optimize a cut list onto sheets.

    Pieces come from the configuration file, the --piece options, or both.
    Command line values override the configuration file.

    Examples:
        cutopt optimize -W 2440 -H 1220 -p 600x400x4 -p 300x200x6
        cutopt optimize --config kitchen.json --rotate --format json
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    extra_pieces = [parse_piece(value) for value in piece or []]

    try:
        if config_file is not None:
            config = load_config(config_file)
        else:
            config = OptimizationConfiguration()
        config = merge_config_with_cli(
            config,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
            pieces=extra_pieces,
            allow_rotation=rotate,
            sort_method=sort_method,
            efficiency_threshold=threshold,
            algorithm=algorithm,
            output_format=output_format,
        )
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        output = OptimizeCommand().execute_config(config)
    except (InvalidDimensionError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if config.output.format == "json":
        content = JsonResultExporter().export(
            output.result, output.discarded, output.piece_summary
        )
    else:
        formatter = ResultFormatter(show_placements=config.output.show_placements)
        content = formatter.format(
            output.result, output.discarded, output.piece_summary
        )

    if output_file is not None:
        output_file.write_text(content + "\n", encoding="utf-8")
        typer.echo(f"Wrote {config.output.format} output to {output_file}")
    else:
        typer.echo(content)


if __name__ == "__main__":
    app()
