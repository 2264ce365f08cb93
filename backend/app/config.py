"""
Configuration settings for the Orbital AMM API

Loads environment variables and provides application configuration.
"""
import os
from typing import List
from dotenv import load_dotenv

from orbital.constants import DEFAULT_PLANE_CONSTANT, DEFAULT_TOKENS, PHASE_GRID_SIZE, PHASE_MARGIN
from orbital.math import equal_reserve_point

# Load environment variables from .env file
load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _initial_reserves(tokens: List[str], plane_constant: float, raw: str) -> List[float]:
    """
    Reserves for the first tick, one per token

    Without a usable ORBITAL_RESERVES the tick starts at the equal-reserve
    point on its sphere.
    """
    reserves = [float(x) for x in _split(raw)]
    if len(reserves) != len(tokens):
        return [equal_reserve_point(plane_constant, len(tokens))] * len(tokens)
    return reserves


class Settings:
    """Application settings"""

    # API Configuration
    API_VERSION: str = "0.1.0"
    API_TITLE: str = "Orbital AMM API"
    API_DESCRIPTION: str = "Multi-token stablecoin AMM with sphere invariant and nested ticks"

    # Pool Configuration
    TOKENS: List[str] = _split(os.getenv("ORBITAL_TOKENS", ",".join(DEFAULT_TOKENS)))
    PLANE_CONSTANT: float = float(os.getenv("ORBITAL_PLANE", DEFAULT_PLANE_CONSTANT))
    RESERVES: List[float] = _initial_reserves(TOKENS, PLANE_CONSTANT, os.getenv("ORBITAL_RESERVES", ""))

    # Phase Diagram
    PHASE_GRID_SIZE: int = int(os.getenv("PHASE_GRID_SIZE", PHASE_GRID_SIZE))
    PHASE_MARGIN: float = float(os.getenv("PHASE_MARGIN", PHASE_MARGIN))

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173"
    ).split(",")

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8080))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"


# Create global settings instance
settings = Settings()
