"""Tracker engine: the single owner of all tracking state."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

import httpx

from planefinder.config import Settings
from planefinder.domain import GeoPosition
from planefinder.ingestors.opensky import FetchController
from planefinder.models.location import (
    AreaResponse,
    BoundingBoxModel,
    LocationUpdate,
    TrackerStatusResponse,
)
from planefinder.services.animation import AnimationController
from planefinder.services.area import AreaOfInterest
from planefinder.services.dead_reckoning import DeadReckoner, GeometryEngine
from planefinder.services.registry import HeadingPolicy, PlaneRegistry
from planefinder.services.render import InMemoryRenderTarget, RenderTarget
from planefinder.services.simulation import SimulationSource

logger = logging.getLogger("planefinder.engine")


class TrackerEngine:
    """Wire the tracker components together from one ``Settings`` instance."""

    def __init__(
        self,
        config: Settings,
        *,
        render_target: Optional[RenderTarget] = None,
        geometry: Optional[GeometryEngine] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.render_target = render_target or InMemoryRenderTarget()

        default_center = None
        if config.default_center_lat is not None and config.default_center_lon is not None:
            default_center = GeoPosition(
                lon=config.default_center_lon, lat=config.default_center_lat
            )
        self.area = AreaOfInterest(config.coordinate_tolerance, center=default_center)

        self.registry = PlaneRegistry(
            self.render_target,
            reckoner=DeadReckoner(geometry),
            heading_policy=HeadingPolicy(
                light_create_offset=config.heading_offset_light_create,
                heavy_create_offset=config.heading_offset_heavy_create,
                update_offset=config.heading_offset_update,
            ),
        )

        self.fetcher: FetchController | None = None
        self.simulation: SimulationSource | None = None
        if config.live_data:
            self.fetcher = FetchController(
                self.registry,
                base_url=config.feed_base_url,
                timeout=config.feed_timeout,
                auth=_load_feed_auth(config),
                transport=transport,
            )
        else:
            self.simulation = SimulationSource(plane_count=config.simulation_plane_count)

        self.controller = AnimationController(
            area=self.area,
            registry=self.registry,
            fetcher=self.fetcher,
            simulation=self.simulation,
            live_data=config.live_data,
            ticks_per_second=config.ticks_per_second,
            seconds_per_query=config.seconds_per_query,
            seconds_per_cleanup=config.seconds_per_cleanup,
            stale_after_seconds=config.stale_after_seconds,
            simulation_speedup=config.simulation_speedup,
        )
        self._task: asyncio.Task[None] | None = None

    def set_center(self, location: LocationUpdate) -> bool:
        """Location-source entry point."""

        return self.area.set_center(
            GeoPosition(lon=location.longitude, lat=location.latitude, alt=location.altitude)
        )

    def start(self) -> asyncio.Task[None]:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.controller.run())
        return self._task

    async def stop(self) -> None:
        self.controller.stop()
        task = self._task
        if task:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._task = None
        if self.fetcher is not None:
            await self.fetcher.cancel()

    def area_view(self) -> AreaResponse:
        center = self.area.center
        box = self.area.bounding_box()
        return AreaResponse(
            center=(
                LocationUpdate(latitude=center.lat, longitude=center.lon, altitude=center.alt)
                if center
                else None
            ),
            tolerance=self.area.tolerance,
            bounding_box=(
                BoundingBoxModel(
                    lat_min=box.lat_min,
                    lat_max=box.lat_max,
                    lon_min=box.lon_min,
                    lon_max=box.lon_max,
                )
                if box
                else None
            ),
        )

    def status(self) -> TrackerStatusResponse:
        fetcher = self.fetcher
        return TrackerStatusResponse(
            live_data=self.config.live_data,
            running=self.controller.running,
            tick=self.controller.tick_count,
            plane_count=len(self.registry),
            fetch_in_flight=fetcher.in_flight if fetcher else False,
            fetch_count=fetcher.fetch_count if fetcher else 0,
            last_fetch_at=fetcher.last_fetch_at if fetcher else None,
            last_error=fetcher.last_error if fetcher else None,
        )


def _load_feed_auth(config: Settings) -> tuple[str, str] | None:
    try:
        return config.feed_auth()
    except RuntimeError:
        logger.warning("Feed credentials unavailable; querying anonymously")
        return None


__all__ = ["TrackerEngine"]
