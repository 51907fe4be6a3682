"""Application layer - use cases and orchestration."""

from .commands import OptimizeCommand, OptimizeOutput
from .prefilter import PrefilterResult, partition_oversized, spec_fits_sheet

__all__ = [
    "OptimizeCommand",
    "OptimizeOutput",
    "PrefilterResult",
    "partition_oversized",
    "spec_fits_sheet",
]
