"""CLI command implementations for the cut optimizer.

This package contains subcommands for the cutopt CLI, including:
- validate: Validate a configuration file
"""

from cutopt.cli.commands.validate import validate_command

__all__ = ["validate_command"]
