"""Runtime configuration read from the environment (.env supported)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from .constants import SaturationPenaltyPoint

load_dotenv()

# Mirrors the per-service presets of the HTTP client layer.
_DEFAULT_RESEARCH_TIMEOUT = 8.0


@dataclass(frozen=True)
class Settings:
    """Process-wide settings.  Built once; never mutated."""

    saturation_penalty_point: SaturationPenaltyPoint = SaturationPenaltyPoint.DIMENSIONS
    market_research_url: Optional[str] = None
    market_research_api_key: Optional[str] = None
    market_research_timeout: float = _DEFAULT_RESEARCH_TIMEOUT
    log_level: str = "INFO"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000


def _read_penalty_point(raw: Optional[str]) -> SaturationPenaltyPoint:
    if not raw:
        return SaturationPenaltyPoint.DIMENSIONS
    try:
        return SaturationPenaltyPoint(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(p.value for p in SaturationPenaltyPoint)
        raise ValueError(
            f"SATURATION_PENALTY_POINT must be one of: {allowed} (got {raw!r})"
        ) from exc


def load_settings() -> Settings:
    """Build a fresh :class:`Settings` from the current environment."""
    timeout_raw = os.getenv("MARKET_RESEARCH_TIMEOUT", "").strip()
    return Settings(
        saturation_penalty_point=_read_penalty_point(os.getenv("SATURATION_PENALTY_POINT")),
        market_research_url=os.getenv("MARKET_RESEARCH_URL", "").strip() or None,
        market_research_api_key=os.getenv("MARKET_RESEARCH_API_KEY", "").strip() or None,
        market_research_timeout=float(timeout_raw) if timeout_raw else _DEFAULT_RESEARCH_TIMEOUT,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        debug=os.getenv("DEBUG", "false").lower() == "true",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings for the running process."""
    return load_settings()
