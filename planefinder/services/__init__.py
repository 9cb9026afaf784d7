"""Tracking services: area, dead reckoning, registry and the tick loop."""

from .animation import AnimationController
from .area import AreaOfInterest, BoundingBox
from .dead_reckoning import DeadReckoner, GeometryEngine, GeopyGeometryEngine
from .registry import HeadingPolicy, Plane, PlaneRegistry
from .render import InMemoryRenderTarget, RenderTarget, SymbolSpec
from .simulation import SimulationSource

__all__ = [
    "AnimationController",
    "AreaOfInterest",
    "BoundingBox",
    "DeadReckoner",
    "GeometryEngine",
    "GeopyGeometryEngine",
    "HeadingPolicy",
    "InMemoryRenderTarget",
    "Plane",
    "PlaneRegistry",
    "RenderTarget",
    "SimulationSource",
    "SymbolSpec",
]
