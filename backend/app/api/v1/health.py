"""
Health Check Endpoints

Provides the health status of the service and its pool.
"""
from fastapi import APIRouter, Depends
from datetime import datetime

from orbital import OrbitalEngine

from app.api.schemas import HealthCheckResponse
from app.config import settings
from app.core.engine import get_engine

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(engine: OrbitalEngine = Depends(get_engine)):
    """
    Health check endpoint

    Returns the current health status of the API and the version of the
    published pool snapshot.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.API_VERSION,
        pool_version=engine.version,
        timestamp=datetime.utcnow()
    )
