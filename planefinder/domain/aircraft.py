"""Aircraft size classes used to pick a render symbol."""

from __future__ import annotations

from enum import Enum

UNKNOWN_CALLSIGN = "Unknown"


class SizeClass(str, Enum):
    """Render size class, fixed when a plane is first seen."""

    LIGHT = "Light"
    HEAVY = "Heavy"


def classify_callsign(callsign: str) -> SizeClass:
    """US-registered tail numbers (``N...``) are treated as light aircraft."""

    if callsign.startswith("N"):
        return SizeClass.LIGHT
    return SizeClass.HEAVY


__all__ = ["SizeClass", "UNKNOWN_CALLSIGN", "classify_callsign"]
