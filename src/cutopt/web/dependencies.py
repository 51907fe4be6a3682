"""FastAPI dependency injection for optimizer services."""

from typing import Annotated

from fastapi import Depends

from cutopt.application import OptimizeCommand


def get_optimize_command() -> OptimizeCommand:
    """Dependency for OptimizeCommand."""
    return OptimizeCommand()


OptimizeCommandDep = Annotated[OptimizeCommand, Depends(get_optimize_command)]
