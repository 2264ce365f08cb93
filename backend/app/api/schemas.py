"""
API Request/Response Schemas using Pydantic

Defines data models for the Orbital AMM API endpoints.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union
from datetime import datetime

TokenRef = Union[int, str]


class TickModel(BaseModel):
    """One tick as exposed in the pool state"""
    index: int = Field(..., description="Tick index (insertion order)")
    plane_constant: float = Field(..., description="Plane constant r")
    reserves: List[float] = Field(..., description="Per-token reserves")
    radius: float = Field(..., description="Sphere radius r·√(n-1)")
    is_interior: bool = Field(..., description="All reserves strictly positive")
    is_boundary: bool = Field(..., description="At least one reserve is zero")
    liquidity: float = Field(..., description="Sum of reserves")


class PoolStateResponse(BaseModel):
    """Response for GET /api/v1/state"""
    ticks: List[TickModel]
    token_names: List[str]
    global_reserves: List[float] = Field(..., description="Element-wise sum of tick reserves")
    tick_count: int

    class Config:
        json_schema_extra = {
            "example": {
                "ticks": [{
                    "index": 0,
                    "plane_constant": 600.0,
                    "reserves": [1000.0, 1000.0, 1000.0],
                    "radius": 848.528,
                    "is_interior": True,
                    "is_boundary": False,
                    "liquidity": 3000.0
                }],
                "token_names": ["USDC", "USDT", "DAI"],
                "global_reserves": [1000.0, 1000.0, 1000.0],
                "tick_count": 1
            }
        }


class AddTickRequest(BaseModel):
    """Request payload for POST /api/v1/tick"""
    plane_constant: float = Field(..., description="Plane constant r (> 0)")
    reserves: List[float] = Field(..., description="Initial reserves, one per token")

    class Config:
        json_schema_extra = {
            "example": {
                "plane_constant": 100.0,
                "reserves": [150.0, 150.0, 150.0]
            }
        }


class TradeRequest(BaseModel):
    """Request payload for POST /api/v1/trade and /api/v1/quote"""
    from_token: TokenRef = Field(..., description="Input token name or index")
    to_token: TokenRef = Field(..., description="Output token name or index")
    amount: float = Field(..., description="Input amount (> 0)")

    class Config:
        json_schema_extra = {
            "example": {
                "from_token": "USDC",
                "to_token": "USDT",
                "amount": 100.0
            }
        }


class SetReservesRequest(BaseModel):
    """Request payload for POST /api/v1/set-reserves"""
    tick_index: int
    reserves: List[float]

    class Config:
        json_schema_extra = {
            "example": {
                "tick_index": 0,
                "reserves": [900.0, 1100.0, 1000.0]
            }
        }


class AddLiquidityRequest(BaseModel):
    """Request payload for POST /api/v1/add-liquidity"""
    tick_index: int
    lp_id: str = Field(default="", description="Liquidity provider id (share bookkeeping only)")
    amounts: List[float] = Field(..., description="Deposit per token")

    class Config:
        json_schema_extra = {
            "example": {
                "tick_index": 0,
                "lp_id": "alice",
                "amounts": [100.0, 0.0, 50.0]
            }
        }


class RemoveLiquidityRequest(BaseModel):
    """Request payload for POST /api/v1/remove-liquidity"""
    tick_index: int
    lp_id: str
    fraction: float = Field(..., description="Share of the LP's position to withdraw, in [0, 1]")

    class Config:
        json_schema_extra = {
            "example": {
                "tick_index": 0,
                "lp_id": "alice",
                "fraction": 0.5
            }
        }


class ResetRequest(BaseModel):
    """Optional body for POST /api/v1/reset"""
    reserves: Optional[List[float]] = None
    plane: Optional[float] = None

    class Config:
        json_schema_extra = {
            "example": {
                "reserves": [1000.0, 1000.0, 1000.0],
                "plane": 600.0
            }
        }


class ReconfigureRequest(BaseModel):
    """Request payload for POST /api/v1/reconfigure"""
    token_names: List[str]
    initial_reserves: List[float]
    initial_plane_constant: float

    class Config:
        json_schema_extra = {
            "example": {
                "token_names": ["USDC", "USDT", "DAI", "FRAX"],
                "initial_reserves": [1000.0, 1000.0, 1000.0, 1000.0],
                "initial_plane_constant": 600.0
            }
        }


class OperationResponse(BaseModel):
    """Uniform {success, message} envelope"""
    success: bool
    message: str
    kind: Optional[str] = Field(default=None, description="Error kind when success is false")
    output: Optional[float] = Field(default=None, description="Trade output or price")
    tick_index: Optional[int] = None
    fills: Optional[List[Dict[str, Any]]] = Field(default=None, description="Per-tick fills in routing order")
    withdrawn: Optional[List[float]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Swapped 100.0 USDC for 99.2 USDT",
                "output": 99.2,
                "fills": [{
                    "tick_index": 0,
                    "plane_constant": 600.0,
                    "amount_in": 100.0,
                    "amount_out": 99.2,
                    "becomes_boundary": False
                }]
            }
        }


class ErrorResponse(BaseModel):
    """Failed operation"""
    success: bool = False
    message: str = Field(..., description="Error message")
    kind: str = Field(..., description="Error kind")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "message": "expected 3 reserves, got 2",
                "kind": "DimensionMismatch"
            }
        }


class PriceModel(BaseModel):
    """Aggregated price of `to` per unit of `from`"""
    from_token: str = Field(..., alias="from")
    to_token: str = Field(..., alias="to")
    price: float

    class Config:
        populate_by_name = True


class PhasePointModel(BaseModel):
    x1: float
    x2: float
    parallel_magnitude: float
    distance_from_equilibrium: float
    is_valid: bool


class TickProjectionModel(BaseModel):
    index: int
    parallel_magnitude: float
    distance_from_equilibrium: float
    orthogonal_norm: float
    plane_constant: float
    reserves: List[float]
    is_interior: bool
    is_boundary: bool


class PhaseDiagramResponse(BaseModel):
    """Response for GET /api/v1/phase-diagram"""
    equal_price_point: float
    radius: float
    bound: float
    phase_points: List[PhasePointModel]
    current_ticks: List[TickProjectionModel]


class HealthCheckResponse(BaseModel):
    """Response for GET /api/v1/health endpoint"""
    status: str = Field(..., description="Service status (healthy, degraded, unhealthy)")
    version: str = Field(..., description="API version")
    pool_version: int = Field(..., description="Version of the published pool snapshot")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "pool_version": 3,
                "timestamp": "2025-10-19T12:00:00Z"
            }
        }
