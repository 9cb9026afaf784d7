"""Tracked-plane and location endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from planefinder.models import (
    AreaResponse,
    LocationUpdate,
    PlaneSnapshot,
    TrackerStatusResponse,
)
from planefinder.services.engine import TrackerEngine

router = APIRouter(prefix="/api/v1", tags=["tracking"])

logger = logging.getLogger("planefinder.api.tracking")


def get_engine(request: Request) -> TrackerEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tracker engine is not running",
        )
    return engine


@router.get("/planes", response_model=list[PlaneSnapshot], summary="List tracked planes")
async def list_planes(engine: TrackerEngine = Depends(get_engine)) -> list[PlaneSnapshot]:
    """Return the current extrapolated state of every tracked plane."""

    return engine.registry.snapshot()


@router.get(
    "/planes/{callsign}", response_model=PlaneSnapshot, summary="Get one tracked plane"
)
async def get_plane(
    callsign: str, engine: TrackerEngine = Depends(get_engine)
) -> PlaneSnapshot:
    plane = engine.registry.get(callsign)
    if plane is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plane not tracked")
    return plane.to_snapshot()


@router.get("/area", response_model=AreaResponse, summary="Current area of interest")
async def get_area(engine: TrackerEngine = Depends(get_engine)) -> AreaResponse:
    return engine.area_view()


@router.post("/location", response_model=AreaResponse, summary="Report observer location")
async def update_location(
    location: LocationUpdate, engine: TrackerEngine = Depends(get_engine)
) -> AreaResponse:
    """Re-center the area of interest. A longitude of exactly 0 is ignored."""

    if not engine.set_center(location):
        logger.debug("Location update ignored: %s", location)
    return engine.area_view()


@router.get(
    "/tracker/status", response_model=TrackerStatusResponse, summary="Tracker status"
)
async def tracker_status(
    engine: TrackerEngine = Depends(get_engine),
) -> TrackerStatusResponse:
    return engine.status()
