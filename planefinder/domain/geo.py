"""Geodetic position value type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPosition:
    """WGS-84 point; altitude in meters."""

    lon: float
    lat: float
    alt: float = 0.0

    def with_altitude(self, alt: float) -> "GeoPosition":
        return GeoPosition(lon=self.lon, lat=self.lat, alt=alt)


__all__ = ["GeoPosition"]
