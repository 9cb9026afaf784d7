"""Models for air traffic state records and tracked planes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from planefinder.domain import SizeClass


class StateRecord(BaseModel):
    """One aircraft's reported kinematics, as decoded from the feed."""

    callsign: str = Field(..., description="Trimmed callsign or 'Unknown'")
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(
        ..., ge=-180, le=180, description="Longitude in decimal degrees"
    )
    altitude: float = Field(default=0.0, description="Altitude in meters")
    velocity: float = Field(default=0.0, description="Ground speed in m/s")
    heading: float = Field(default=0.0, description="True track in degrees")
    vertical_rate: float = Field(default=0.0, description="Vertical rate in m/s")
    last_contact: int = Field(
        default=0, description="Unix timestamp of the position report"
    )

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class PlaneSnapshot(BaseModel):
    """Point-in-time view of a tracked plane."""

    callsign: str = Field(..., description="Plane identity")
    latitude: float = Field(..., description="Extrapolated latitude")
    longitude: float = Field(..., description="Extrapolated longitude")
    altitude: float = Field(..., description="Extrapolated altitude in meters")
    velocity: float = Field(..., description="Ground speed in m/s")
    heading: float = Field(..., description="True track in degrees")
    vertical_rate: float = Field(..., description="Vertical rate in m/s")
    size_class: SizeClass = Field(..., description="Render size class")
    render_heading: float = Field(
        ..., description="Heading attribute last written to the render target"
    )
    last_update: int = Field(
        ..., description="Unix timestamp of the last real report"
    )
    synthetic: bool = Field(default=False, description="Generated by the simulator")


__all__ = ["PlaneSnapshot", "StateRecord"]
