"""Health probes.

Each probe returns ``(http_status, payload)`` and never raises: every
failure is translated into the fixed-shape unhealthy payload with HTTP 503.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from pydantic import BaseModel

from costdesk import __version__
from costdesk.backend.core.utils.config import Settings
from costdesk.backend.schemas import (
    CacheDetailsOut,
    CacheHealthOut,
    CacheUnhealthyOut,
    DatabaseHealthOut,
    DatabaseUnhealthyOut,
    HealthOut,
    UnhealthyOut,
)
from costdesk.backend.services.data_client import DataService

logger = logging.getLogger(__name__)

# Fixed example figures reported by the placeholder cache probe.
PLACEHOLDER_CACHE_PROVIDER = "placeholder"
PLACEHOLDER_HIT_RATE = 0.95
PLACEHOLDER_MISS_RATE = 0.05


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


async def check_database(data: DataService, settings: Settings) -> tuple[int, BaseModel]:
    """Bounded read (one row) against the configured health table."""
    try:
        await data.select(settings.health.table, columns="id", limit=1)
    except Exception as exc:
        logger.error("Database health check failed: %s", exc)
        return 503, UnhealthyOut(error=str(exc), timestamp=_now())

    return 200, HealthOut(
        version=__version__,
        environment=settings.app.environment,
        timestamp=_now(),
    )


async def check_database_detail(data: DataService, settings: Settings) -> tuple[int, BaseModel]:
    """Same read as :func:`check_database`, reporting latency.

    ``degraded`` when the read took longer than ``health.degraded_after_ms``.
    """
    start = time.perf_counter()
    try:
        await data.select(settings.health.table, columns="id", limit=1)
    except Exception as exc:
        logger.error("Database detail check failed: %s", exc)
        return 503, DatabaseUnhealthyOut(error=str(exc), response_time=_elapsed_ms(start), timestamp=_now())

    elapsed = _elapsed_ms(start)
    status = "degraded" if elapsed > settings.health.degraded_after_ms else "healthy"
    return 200, DatabaseHealthOut(status=status, response_time=elapsed, timestamp=_now())


def _cache_stats() -> CacheDetailsOut:
    # No cache backs the application yet; these are example figures only.
    return CacheDetailsOut(
        provider=PLACEHOLDER_CACHE_PROVIDER,
        hit_rate=PLACEHOLDER_HIT_RATE,
        miss_rate=PLACEHOLDER_MISS_RATE,
    )


def check_cache() -> tuple[int, BaseModel]:
    """Placeholder cache probe; not a signal to alert on."""
    start = time.perf_counter()
    try:
        details = _cache_stats()
    except Exception as exc:
        logger.error("Cache health check failed: %s", exc)
        return 503, CacheUnhealthyOut(error=str(exc), response_time=_elapsed_ms(start), timestamp=_now())

    return 200, CacheHealthOut(response_time=_elapsed_ms(start), timestamp=_now(), details=details)
