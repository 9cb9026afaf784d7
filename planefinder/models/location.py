"""Location and area-of-interest request/response models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LocationUpdate(BaseModel):
    """Observer position pushed by a location source."""

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    longitude: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in decimal degrees"
    )
    altitude: float = Field(default=0.0, description="Altitude in meters")


class BoundingBoxModel(BaseModel):
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float


class AreaResponse(BaseModel):
    """Current area of interest."""

    center: Optional[LocationUpdate] = Field(
        default=None, description="Area center, unset until a location is reported"
    )
    tolerance: float = Field(..., description="Half-extent in coordinate degrees")
    bounding_box: Optional[BoundingBoxModel] = Field(
        default=None, description="Query box derived from the center"
    )


class TrackerStatusResponse(BaseModel):
    """Runtime state of the tracking engine."""

    live_data: bool = Field(..., description="True when polling the live feed")
    running: bool = Field(..., description="Whether the animation loop is active")
    tick: int = Field(..., description="Number of effective ticks processed")
    plane_count: int = Field(..., description="Planes currently tracked")
    fetch_in_flight: bool = Field(default=False)
    fetch_count: int = Field(default=0, description="Completed feed requests")
    last_fetch_at: Optional[datetime] = Field(default=None)
    last_error: Optional[str] = Field(default=None)


__all__ = [
    "AreaResponse",
    "BoundingBoxModel",
    "LocationUpdate",
    "TrackerStatusResponse",
]
