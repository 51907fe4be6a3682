"""Infrastructure layer - packing engine and formatters."""

from .bin_packing import (
    EfficiencyGate,
    GuillotineSheetFiller,
    OptimizerOptions,
    PackingResult,
    PackingStatistics,
    PlacedPiece,
    SheetLayout,
    SheetPacker,
    ShelfCursor,
    ShelfSheetFiller,
    UnplacedPiece,
    calculate_statistics,
    check_sheet_dimensions,
    classify_unplaced,
    efficiency_rating,
    optimize,
)
from .formatters import (
    JsonResultExporter,
    ResultFormatter,
    placement_to_dict,
    result_to_dict,
)

__all__ = [
    # Bin packing
    "EfficiencyGate",
    "GuillotineSheetFiller",
    "OptimizerOptions",
    "PackingResult",
    "PackingStatistics",
    "PlacedPiece",
    "SheetLayout",
    "SheetPacker",
    "ShelfCursor",
    "ShelfSheetFiller",
    "UnplacedPiece",
    "calculate_statistics",
    "check_sheet_dimensions",
    "classify_unplaced",
    "efficiency_rating",
    "optimize",
    # Formatters
    "JsonResultExporter",
    "ResultFormatter",
    "placement_to_dict",
    "result_to_dict",
]
