"""Registry of tracked planes keyed by callsign."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Hashable, Iterable, Iterator

from planefinder.domain import GeoPosition, SizeClass, classify_callsign
from planefinder.models.air_traffic import PlaneSnapshot, StateRecord
from planefinder.services.dead_reckoning import DeadReckoner
from planefinder.services.render import RenderTarget

logger = logging.getLogger("planefinder.registry")


@dataclass(frozen=True)
class HeadingPolicy:
    """Offsets added to the true heading before it is written to the render target.

    New light planes are drawn at heading + 180 and new heavy planes at the raw
    heading, while every later report writes heading + 180 regardless of
    class. The defaults reproduce that asymmetry; set the offsets equal to
    unify the two paths.
    """

    light_create_offset: float = 180.0
    heavy_create_offset: float = 0.0
    update_offset: float = 180.0

    def on_create(self, heading: float, size_class: SizeClass) -> float:
        if size_class is SizeClass.LIGHT:
            return heading + self.light_create_offset
        return heading + self.heavy_create_offset

    def on_update(self, heading: float) -> float:
        return heading + self.update_offset


@dataclass
class Plane:
    """A tracked aircraft and the render handle it owns."""

    callsign: str
    position: GeoPosition
    velocity: float
    heading: float
    vertical_rate: float
    size_class: SizeClass
    last_update: int
    render_handle: Hashable
    render_heading: float
    synthetic: bool = False

    def to_snapshot(self) -> PlaneSnapshot:
        return PlaneSnapshot(
            callsign=self.callsign,
            latitude=self.position.lat,
            longitude=self.position.lon,
            altitude=self.position.alt,
            velocity=self.velocity,
            heading=self.heading,
            vertical_rate=self.vertical_rate,
            size_class=self.size_class,
            render_heading=self.render_heading,
            last_update=self.last_update,
            synthetic=self.synthetic,
        )


class PlaneRegistry:
    """Owns the callsign -> Plane mapping and keeps the render target in sync.

    Not thread-safe. All calls are expected to come from the event loop that
    drives the animation ticks; fetch completions run on that same loop.
    """

    def __init__(
        self,
        render_target: RenderTarget,
        *,
        reckoner: DeadReckoner | None = None,
        heading_policy: HeadingPolicy | None = None,
    ) -> None:
        self.render_target = render_target
        self.reckoner = reckoner or DeadReckoner()
        self.heading_policy = heading_policy or HeadingPolicy()
        self._planes: dict[str, Plane] = {}

    def upsert(self, record: StateRecord, now: float) -> Plane:
        """Apply one real report, compensating for the time since it was measured."""

        reported = GeoPosition(lon=record.lon, lat=record.lat, alt=record.altitude)
        position = self.reckoner.advance(
            reported,
            velocity=record.velocity,
            heading=record.heading,
            vertical_rate=record.vertical_rate,
            elapsed=now - record.last_contact,
        )

        plane = self._planes.get(record.callsign)
        if plane is not None:
            plane.position = position
            plane.render_heading = self.heading_policy.on_update(record.heading)
            plane.velocity = record.velocity
            plane.vertical_rate = record.vertical_rate
            plane.heading = record.heading
            plane.last_update = record.last_contact
            self.render_target.update_renderable(
                plane.render_handle, position, plane.render_heading
            )
            return plane

        size_class = classify_callsign(record.callsign)
        render_heading = self.heading_policy.on_create(record.heading, size_class)
        handle = self.render_target.create_renderable(
            position, size_class, heading=render_heading, callsign=record.callsign
        )
        plane = Plane(
            callsign=record.callsign,
            position=position,
            velocity=record.velocity,
            heading=record.heading,
            vertical_rate=record.vertical_rate,
            size_class=size_class,
            last_update=record.last_contact,
            render_handle=handle,
            render_heading=render_heading,
        )
        self._planes[record.callsign] = plane
        logger.debug("Tracking new %s plane %s", size_class.value, record.callsign)
        return plane

    def upsert_batch(self, records: Iterable[StateRecord], now: float) -> int:
        count = 0
        for record in records:
            self.upsert(record, now)
            count += 1
        return count

    def insert(self, plane: Plane) -> None:
        """Add a fully built plane (simulation); an existing entry is released first."""

        existing = self._planes.pop(plane.callsign, None)
        if existing is not None:
            self.render_target.remove_renderable(existing.render_handle)
        self._planes[plane.callsign] = plane

    def extrapolate_all(self, delta_seconds: float) -> None:
        """Advance every plane by ``delta_seconds`` of constant-rate motion."""

        for plane in self._planes.values():
            plane.position = self.reckoner.advance(
                plane.position,
                velocity=plane.velocity,
                heading=plane.heading,
                vertical_rate=plane.vertical_rate,
                elapsed=delta_seconds,
            )
            self.render_target.update_renderable(plane.render_handle, plane.position)

    def evict(self, now: float, stale_after_seconds: float) -> list[str]:
        """Drop planes without a real report in ``stale_after_seconds``."""

        stale = [
            callsign
            for callsign, plane in self._planes.items()
            if now - plane.last_update > stale_after_seconds
        ]
        for callsign in stale:
            plane = self._planes.pop(callsign)
            self.render_target.remove_renderable(plane.render_handle)

        if stale:
            logger.info("Evicted %s stale planes; %s remain", len(stale), len(self._planes))
        return stale

    def get(self, callsign: str) -> Plane | None:
        return self._planes.get(callsign)

    def snapshot(self) -> list[PlaneSnapshot]:
        return [plane.to_snapshot() for plane in self._planes.values()]

    def __contains__(self, callsign: object) -> bool:
        return callsign in self._planes

    def __iter__(self) -> Iterator[Plane]:
        return iter(list(self._planes.values()))

    def __len__(self) -> int:
        return len(self._planes)


__all__ = ["HeadingPolicy", "Plane", "PlaneRegistry"]
