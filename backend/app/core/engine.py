"""
Engine provider

The service owns exactly one OrbitalEngine, built from settings at import.
Handlers receive it through the `get_engine` dependency so tests can
override it with a fresh engine.
"""
from orbital import OrbitalEngine

from app.config import settings

_engine = OrbitalEngine(
    token_names=settings.TOKENS,
    initial_reserves=settings.RESERVES,
    initial_plane_constant=settings.PLANE_CONSTANT,
    grid_size=settings.PHASE_GRID_SIZE,
    margin=settings.PHASE_MARGIN
)


def get_engine() -> OrbitalEngine:
    """FastAPI dependency returning the service engine"""
    return _engine
