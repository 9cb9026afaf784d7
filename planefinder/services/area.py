"""Area of interest around the observer, used to bound feed queries."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from planefinder.domain import GeoPosition

logger = logging.getLogger("planefinder.area")


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude box in decimal degrees."""

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def as_query_params(self) -> dict[str, float]:
        return {
            "lamin": self.lat_min,
            "lomin": self.lon_min,
            "lamax": self.lat_max,
            "lomax": self.lon_max,
        }


class AreaOfInterest:
    """Center point plus tolerance; the center stays unset until first reported."""

    def __init__(self, tolerance: float, center: GeoPosition | None = None) -> None:
        self.tolerance = tolerance
        self._center = center

    @property
    def center(self) -> GeoPosition | None:
        return self._center

    def set_center(self, point: GeoPosition) -> bool:
        """Replace the center unless the point is degenerate (longitude == 0).

        Returns True when the center was updated.
        """

        if point.lon == 0:
            logger.debug("Ignoring degenerate location %s", point)
            return False
        if self._center is None:
            logger.info("Area of interest centered at %.5f, %.5f", point.lat, point.lon)
        self._center = point
        return True

    def bounding_box(self, tolerance: float | None = None) -> BoundingBox | None:
        """Box with half-extent ``tolerance`` around the center, or None if unset."""

        if self._center is None:
            return None
        half = self.tolerance if tolerance is None else tolerance
        return BoundingBox(
            lat_min=self._center.lat - half,
            lat_max=self._center.lat + half,
            lon_min=self._center.lon - half,
            lon_max=self._center.lon + half,
        )


__all__ = ["AreaOfInterest", "BoundingBox"]
