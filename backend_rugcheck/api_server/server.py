"""
FastAPI server — token risk reports over HTTP.

One RiskReportClient per process, created in the lifespan and closed on
shutdown, so every request shares the same cache and the same throttled
upstream queue. Config via env (see backend_rugcheck.config).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI

from backend_rugcheck import __version__
from backend_rugcheck.api_server.risk_report import get_risk_client, router as risk_router
from backend_rugcheck.config import get_settings
from backend_rugcheck.risk_client import RiskReportClient
from backend_rugcheck.rugcheck_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Lifespan: build the shared risk client, close it on shutdown
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the risk client unless one was injected (tests); close what we created."""
    owned = getattr(app.state, "risk_client", None) is None
    if owned:
        app.state.risk_client = RiskReportClient.from_settings(get_settings())
        logger.info("api_risk_client_started")
    try:
        yield
    finally:
        if owned:
            await app.state.risk_client.aclose()
            app.state.risk_client = None
            logger.info("api_risk_client_stopped")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend RugCheck API",
    description="Cached, rate-limited access to RugCheck token risk reports.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(risk_router)


@app.get("/health")
def health(client: RiskReportClient = Depends(get_risk_client)) -> dict[str, Any]:
    """Liveness probe with cache and queue sizes."""
    return {
        "status": "ok",
        "cached": len(client.cache),
        "pending": client.scheduler.pending,
    }
