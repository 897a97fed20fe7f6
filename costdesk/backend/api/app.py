"""FastAPI application factory.

Instantiate with:
    uvicorn costdesk.backend.api.app:create_app --factory --reload --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from costdesk import __version__
from costdesk.backend.api.router import router
from costdesk.backend.core.context import AppContext
from costdesk.backend.core.utils.config import Settings, load_settings
from costdesk.backend.core.utils.logging_setup import install_access_log_filter
from costdesk.frontend.pages import router as pages_router

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).resolve().parents[2] / "frontend" / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the session-scoped context and close it on shutdown."""
    context = AppContext.from_settings(app.state.settings, transport=app.state.transport)
    app.state.context = context
    logger.info(
        "%s ready (%s) – data service at %s",
        app.state.settings.app.name,
        app.state.settings.app.environment,
        context.data.base_url,
    )
    try:
        yield
    finally:
        await context.aclose()


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Runtime configuration; loaded from ``$COSTDESK_CONFIG`` or
            ``configs/default_config.yaml`` when omitted
        transport: Optional httpx transport for the data service client
            (tests pass an ``httpx.MockTransport``)
    """
    settings = settings or load_settings()

    application = FastAPI(
        title=settings.app.name,
        version=__version__,
        description="Cost-control project pages and health probes",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.transport = transport

    # ── CORS ───────────────────────────────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    # ── Health probes under /api, pages at the root ────────────────────────
    application.include_router(router, prefix="/api")
    application.include_router(pages_router)

    install_access_log_filter()

    return application
