"""
Runtime configuration
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _get_env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


class Settings:
    """Settings from environment variables"""

    # Use /app/data in Docker, current dir otherwise
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "flames.db")

    # Live match clock
    TICK_INTERVAL_SECONDS: float = _get_env_float("TICK_INTERVAL_SECONDS", 1.0)
    MAX_COMMENTARY: int = _get_env_int("MAX_COMMENTARY", 40)
    SIMULATION_SEED: Optional[int] = _get_env_int("SIMULATION_SEED", None)

    # Fantasy squad
    SQUAD_BUDGET: int = _get_env_int("SQUAD_BUDGET", 100)

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
