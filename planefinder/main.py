from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from planefinder.api import api_router
from planefinder.config import settings
from planefinder.services.engine import TrackerEngine

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("planefinder")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the tracker engine with the app and stop it on shutdown."""

    engine = TrackerEngine(settings)
    app.state.engine = engine
    engine.start()
    logger.info(
        "Tracker engine started (%s data)", "live" if settings.live_data else "simulated"
    )

    try:
        yield
    finally:
        await engine.stop()
        app.state.engine = None
        logger.info("Tracker engine stopped")


app = FastAPI(title="Planefinder Backend", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "Planefinder backend is running"}
