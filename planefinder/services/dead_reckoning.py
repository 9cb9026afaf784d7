"""Dead-reckoning projection of geodetic positions."""

from __future__ import annotations

from typing import Protocol

from geopy.distance import geodesic
from geopy.point import Point

from planefinder.domain import GeoPosition


class GeometryEngine(Protocol):
    """Geodesic primitives consumed by the tracker."""

    def geodetic_move(
        self, position: GeoPosition, distance_m: float, azimuth_deg: float
    ) -> GeoPosition:
        """Move ``position`` along a geodesic; altitude is carried through."""


class GeopyGeometryEngine:
    """WGS-84 geodesic moves using geopy (Karney's algorithm)."""

    def geodetic_move(
        self, position: GeoPosition, distance_m: float, azimuth_deg: float
    ) -> GeoPosition:
        if distance_m < 0:
            distance_m = -distance_m
            azimuth_deg = azimuth_deg + 180.0
        destination = geodesic(meters=distance_m).destination(
            Point(position.lat, position.lon), bearing=azimuth_deg % 360.0
        )
        return GeoPosition(
            lon=destination.longitude, lat=destination.latitude, alt=position.alt
        )


class DeadReckoner:
    """Straight-line, constant-rate projection over an elapsed time."""

    def __init__(self, geometry: GeometryEngine | None = None) -> None:
        self.geometry = geometry or GeopyGeometryEngine()

    def project(
        self, position: GeoPosition, distance: float, azimuth_deg: float
    ) -> GeoPosition:
        """Move ``position`` by ``distance`` meters along ``azimuth_deg`` (true)."""

        if distance == 0:
            return position
        return self.geometry.geodetic_move(position, distance, azimuth_deg)

    def advance(
        self,
        position: GeoPosition,
        *,
        velocity: float,
        heading: float,
        vertical_rate: float,
        elapsed: float,
    ) -> GeoPosition:
        """Project horizontally along ``heading`` and vertically at ``vertical_rate``."""

        moved = self.project(position, velocity * elapsed, heading)
        return moved.with_altitude(position.alt + vertical_rate * elapsed)


__all__ = ["DeadReckoner", "GeometryEngine", "GeopyGeometryEngine"]
