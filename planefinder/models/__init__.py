"""Pydantic models for the planefinder backend."""

from .air_traffic import PlaneSnapshot, StateRecord
from .location import AreaResponse, BoundingBoxModel, LocationUpdate, TrackerStatusResponse

__all__ = [
    "AreaResponse",
    "BoundingBoxModel",
    "LocationUpdate",
    "PlaneSnapshot",
    "StateRecord",
    "TrackerStatusResponse",
]
