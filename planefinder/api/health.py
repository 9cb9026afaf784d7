"""Health check endpoint."""

from fastapi import APIRouter, Request
from planefinder.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(request: Request) -> dict[str, object]:
    """Report liveness plus whether the tracker loop is running."""
    engine = getattr(request.app.state, "engine", None)
    return {
        "status": "ok",
        "env": settings.planefinder_env,
        "mode": "live" if settings.live_data else "simulated",
        "tracker_running": bool(engine and engine.controller.running),
    }
