"""
Pool Endpoints

State, trading, liquidity management and visualisation routes for the
single Orbital pool. Every mutation answers with the {success, message}
envelope; a failed operation is returned with status 400.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from orbital import OrbitalEngine, OperationResult
from orbital.errors import OrbitalError

from app.api.schemas import (
    AddLiquidityRequest,
    AddTickRequest,
    ErrorResponse,
    OperationResponse,
    PhaseDiagramResponse,
    PoolStateResponse,
    PriceModel,
    ReconfigureRequest,
    RemoveLiquidityRequest,
    ResetRequest,
    SetReservesRequest,
    TradeRequest,
)
from app.core.engine import get_engine

router = APIRouter()

_ERRORS = {400: {"model": ErrorResponse}}


def _respond(result: OperationResult):
    if result.success:
        return result.to_dict()
    return JSONResponse(status_code=400, content=result.to_dict())


@router.get("/state", response_model=PoolStateResponse)
async def get_state(engine: OrbitalEngine = Depends(get_engine)):
    """Current pool snapshot"""
    return engine.read_state().to_dict()


@router.post("/tick", response_model=OperationResponse, responses=_ERRORS)
async def add_tick(request: AddTickRequest, engine: OrbitalEngine = Depends(get_engine)):
    """Append a new tick"""
    return _respond(engine.add_tick(request.plane_constant, request.reserves))


@router.post("/trade", response_model=OperationResponse, responses=_ERRORS)
async def trade(request: TradeRequest, engine: OrbitalEngine = Depends(get_engine)):
    """
    Swap `amount` of `from_token` for `to_token`

    The trade is routed across ticks from the smallest plane constant up
    and is all-or-nothing: if the ticks cannot absorb the whole input no
    reserve changes.
    """
    return _respond(engine.trade(request.from_token, request.to_token, request.amount))


@router.post("/quote", response_model=OperationResponse, responses=_ERRORS)
async def quote(request: TradeRequest, engine: OrbitalEngine = Depends(get_engine)):
    """Route a trade without executing it"""
    return _respond(engine.quote_trade(request.from_token, request.to_token, request.amount))


@router.post("/set-reserves", response_model=OperationResponse, responses=_ERRORS)
async def set_reserves(request: SetReservesRequest, engine: OrbitalEngine = Depends(get_engine)):
    return _respond(engine.set_reserves(request.tick_index, request.reserves))


@router.post("/add-liquidity", response_model=OperationResponse, responses=_ERRORS)
async def add_liquidity(request: AddLiquidityRequest, engine: OrbitalEngine = Depends(get_engine)):
    return _respond(engine.add_liquidity(request.tick_index, request.lp_id, request.amounts))


@router.post("/remove-liquidity", response_model=OperationResponse, responses=_ERRORS)
async def remove_liquidity(request: RemoveLiquidityRequest, engine: OrbitalEngine = Depends(get_engine)):
    return _respond(engine.remove_liquidity(request.tick_index, request.lp_id, request.fraction))


@router.post("/reset", response_model=OperationResponse, responses=_ERRORS)
async def reset(request: Optional[ResetRequest] = None, engine: OrbitalEngine = Depends(get_engine)):
    """
    Drop every tick

    With `reserves` and `plane` the pool restarts with one tick built from
    them; without a body it is left empty.
    """
    if request is None:
        return _respond(engine.reset())
    return _respond(engine.reset(request.reserves, request.plane))


@router.post("/reconfigure", response_model=OperationResponse, responses=_ERRORS)
async def reconfigure(request: ReconfigureRequest, engine: OrbitalEngine = Depends(get_engine)):
    """Replace the token set and restart with a single tick"""
    return _respond(engine.reconfigure(
        request.token_names,
        request.initial_reserves,
        request.initial_plane_constant
    ))


@router.get("/prices", response_model=List[PriceModel], response_model_by_alias=True)
async def get_prices(engine: OrbitalEngine = Depends(get_engine)):
    """Aggregated price for every ordered token pair"""
    return [p.to_dict() for p in engine.read_prices()]


@router.get("/price", response_model=OperationResponse, responses=_ERRORS)
async def get_price(
    from_token: str = Query(..., alias="from"),
    to_token: str = Query(..., alias="to"),
    engine: OrbitalEngine = Depends(get_engine)
):
    """Aggregated price of `to` per unit of `from`"""
    return _respond(engine.read_price(from_token, to_token))


@router.get("/phase-diagram", response_model=PhaseDiagramResponse, responses=_ERRORS)
async def phase_diagram(
    grid_size: Optional[int] = Query(default=None, description="Grid points per axis"),
    margin: Optional[float] = Query(default=None, description="Fraction added to the largest reserve"),
    engine: OrbitalEngine = Depends(get_engine)
):
    """2-token phase space sample of the current state"""
    try:
        sample = engine.read_phase_sample(grid_size=grid_size, margin=margin)
    except OrbitalError as e:
        return _respond(OperationResult.fail(e))
    return sample.to_dict()
