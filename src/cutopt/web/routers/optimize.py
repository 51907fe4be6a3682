"""Cut list optimization endpoints."""

from fastapi import APIRouter

from cutopt.application import OptimizeOutput
from cutopt.application.config import load_config_from_dict
from cutopt.domain import PieceSpec
from cutopt.infrastructure import OptimizerOptions, result_to_dict
from cutopt.web.dependencies import OptimizeCommandDep
from cutopt.web.schemas.requests import OptimizeFromConfigRequest, OptimizeRequest
from cutopt.web.schemas.responses import ErrorResponseSchema, OptimizeResponse

router = APIRouter(
    prefix="/optimize",
    tags=["optimize"],
    responses={422: {"model": ErrorResponseSchema}},
)


def _output_to_schema(output: OptimizeOutput) -> OptimizeResponse:
    return OptimizeResponse.model_validate(
        result_to_dict(output.result, output.discarded, output.piece_summary)
    )


@router.post("", response_model=OptimizeResponse)
def optimize_cut_list(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
) -> OptimizeResponse:
    """Optimize a list of pieces onto sheets.

    Args:
        request: Sheet size, pieces and optimizer options.
        command: Injected OptimizeCommand.

    Returns:
        Sheets with placements, unplaced and discarded pieces, and statistics.
    """
    specs = [
        PieceSpec(
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
            color=piece.color,
            label=piece.label,
        )
        for piece in request.pieces
    ]
    opts = request.options
    options = OptimizerOptions(
        allow_rotation=opts.allow_rotation,
        sort_method=opts.sort_method,
        efficiency_threshold=opts.efficiency_threshold,
        algorithm=opts.algorithm,
        max_sheet_attempts=opts.max_sheet_attempts,
    )

    output = command.execute(
        specs,
        request.sheet.width,
        request.sheet.height,
        options=options,
        prefilter=request.prefilter,
    )
    return _output_to_schema(output)


@router.post("/from-config", response_model=OptimizeResponse)
def optimize_from_config(
    request: OptimizeFromConfigRequest,
    command: OptimizeCommandDep,
) -> OptimizeResponse:
    """Optimize the cut list described by a full configuration.

    Raises:
        ConfigError: If the configuration does not match the schema; the
            registered handler turns it into a 422 response.
    """
    config = load_config_from_dict(request.config)
    return _output_to_schema(command.execute_config(config))
