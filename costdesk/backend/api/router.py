"""Health-probe route handlers.

Included into the FastAPI application under ``/api`` by ``app.py``.  Each
handler delegates to :mod:`costdesk.backend.services.health` and returns
camelCase JSON with the status code the probe chose.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from costdesk.backend.services import check_cache, check_database, check_database_detail

router = APIRouter()


def _respond(status_code: int, payload) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload.model_dump(by_alias=True))


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Database-backed readiness probe (suppressed from the access log)."""
    context = request.app.state.context
    return _respond(*await check_database(context.data, context.settings))


@router.get("/health/db")
async def database_health(request: Request) -> JSONResponse:
    """Database probe reporting read latency; ``degraded`` past the configured threshold."""
    context = request.app.state.context
    return _respond(*await check_database_detail(context.data, context.settings))


@router.get("/health/cache")
async def cache_health() -> JSONResponse:
    """Placeholder cache probe: reports fixed example figures."""
    return _respond(*check_cache())
