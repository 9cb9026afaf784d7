"""Render target interface and an in-memory implementation."""

from __future__ import annotations

from dataclasses import dataclass
import itertools
import logging
from typing import Any, Hashable, Protocol

from planefinder.domain import GeoPosition, SizeClass

logger = logging.getLogger("planefinder.render")


class RenderTarget(Protocol):
    """Scene collaborator that owns drawable objects for tracked planes."""

    def create_renderable(
        self,
        position: GeoPosition,
        size_class: SizeClass,
        *,
        heading: float,
        callsign: str,
    ) -> Hashable:
        """Create a drawable for a new plane and return its handle."""

    def update_renderable(
        self, handle: Hashable, position: GeoPosition, heading: float | None = None
    ) -> None:
        """Move a drawable; ``heading`` of None leaves the heading attribute as is."""

    def remove_renderable(self, handle: Hashable) -> None:
        """Release a drawable."""


@dataclass(frozen=True)
class SymbolSpec:
    """3D model used to draw a size class."""

    model: str
    scale: float


DEFAULT_SYMBOLS: dict[SizeClass, SymbolSpec] = {
    SizeClass.LIGHT: SymbolSpec(model="B_787_8", scale=60.0),
    SizeClass.HEAVY: SymbolSpec(model="Bristol", scale=20.0),
}


@dataclass
class Renderable:
    handle: int
    symbol: SymbolSpec
    position: GeoPosition
    attributes: dict[str, Any]


class InMemoryRenderTarget:
    """Keeps renderables in a dict; used by the service and in tests."""

    def __init__(self, symbols: dict[SizeClass, SymbolSpec] | None = None) -> None:
        self.symbols = symbols or DEFAULT_SYMBOLS
        self.renderables: dict[int, Renderable] = {}
        self._ids = itertools.count(1)

    def create_renderable(
        self,
        position: GeoPosition,
        size_class: SizeClass,
        *,
        heading: float,
        callsign: str,
    ) -> int:
        handle = next(self._ids)
        self.renderables[handle] = Renderable(
            handle=handle,
            symbol=self.symbols[size_class],
            position=position,
            attributes={"HEADING": heading, "CALLSIGN": callsign},
        )
        return handle

    def update_renderable(
        self, handle: int, position: GeoPosition, heading: float | None = None
    ) -> None:
        renderable = self.renderables.get(handle)
        if renderable is None:
            logger.debug("Update for unknown renderable %s ignored", handle)
            return
        renderable.position = position
        if heading is not None:
            renderable.attributes["HEADING"] = heading

    def remove_renderable(self, handle: int) -> None:
        self.renderables.pop(handle, None)

    def __len__(self) -> int:
        return len(self.renderables)


__all__ = [
    "DEFAULT_SYMBOLS",
    "InMemoryRenderTarget",
    "RenderTarget",
    "Renderable",
    "SymbolSpec",
]
