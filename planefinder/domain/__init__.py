"""Core domain types shared by the tracker components."""

from .aircraft import UNKNOWN_CALLSIGN, SizeClass, classify_callsign
from .geo import GeoPosition

__all__ = ["GeoPosition", "SizeClass", "UNKNOWN_CALLSIGN", "classify_callsign"]
