"""Fixed-rate tick loop interleaving fetch, eviction and extrapolation."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Protocol

from planefinder.services.area import AreaOfInterest, BoundingBox
from planefinder.services.registry import PlaneRegistry
from planefinder.services.simulation import SimulationSource

logger = logging.getLogger("planefinder.animation")


class Fetcher(Protocol):
    """What the tick loop needs from the feed fetcher."""

    @property
    def in_flight(self) -> bool:
        ...

    def try_fetch(self, box: BoundingBox) -> Any:
        ...


class AnimationController:
    """Drive the registry one frame at a time.

    Per tick: nothing until the area has a center; simulated mode seeds the
    registry on the first tick; a fetch in flight stalls the whole frame
    (the tick counter does not advance); otherwise evict every
    ``seconds_per_cleanup``, fetch every ``seconds_per_query`` and extrapolate
    on every tick that did not fetch.

    In simulated mode there is no fetch or eviction, so every effective tick
    extrapolates, ticks on the query and cleanup cadence included.
    """

    def __init__(
        self,
        *,
        area: AreaOfInterest,
        registry: PlaneRegistry,
        fetcher: Fetcher | None = None,
        simulation: SimulationSource | None = None,
        live_data: bool = True,
        ticks_per_second: int = 60,
        seconds_per_query: int = 10,
        seconds_per_cleanup: int = 30,
        stale_after_seconds: float = 30.0,
        simulation_speedup: float = 1.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")
        if live_data and fetcher is None:
            raise ValueError("live mode requires a fetcher")

        self.area = area
        self.registry = registry
        self.fetcher = fetcher
        self.simulation = simulation
        self.live_data = live_data
        self.ticks_per_second = ticks_per_second
        self.query_every = max(ticks_per_second * seconds_per_query, 1)
        self.cleanup_every = max(ticks_per_second * seconds_per_cleanup, 1)
        self.stale_after_seconds = stale_after_seconds
        self.speedup = 1.0 if live_data else simulation_speedup
        self.clock = clock

        self.tick_count = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.ticks_per_second

    def tick(self) -> None:
        """Process one frame. Never re-entered; ticks run serially."""

        if self.area.center is None:
            return

        if not self.live_data and self.tick_count == 0 and self.simulation is not None:
            self.simulation.populate(self.registry, self.area)

        if self.fetcher is not None and self.fetcher.in_flight:
            return

        tick = self.tick_count
        self.tick_count += 1

        if self.live_data and tick % self.cleanup_every == 0:
            self.registry.evict(self.clock(), self.stale_after_seconds)

        if self.live_data and tick % self.query_every == 0:
            box = self.area.bounding_box()
            if box is not None:
                self.fetcher.try_fetch(box)
        else:
            self.registry.extrapolate_all(self.tick_interval * self.speedup)

    async def run(self) -> None:
        """Tick at ``ticks_per_second`` until stopped or cancelled."""

        self._running = True
        loop = asyncio.get_running_loop()
        interval = self.tick_interval
        logger.info(
            "Animation loop started at %s ticks/s (%s mode)",
            self.ticks_per_second,
            "live" if self.live_data else "simulated",
        )
        try:
            while self._running:
                started = loop.time()
                try:
                    self.tick()
                except Exception:  # pragma: no cover - keep the frame loop alive
                    logger.exception("Animation tick failed")

                remaining = interval - (loop.time() - started)
                if remaining > 0:
                    await asyncio.sleep(remaining)
                else:
                    # Yield to avoid starving the fetch task and HTTP handlers
                    await asyncio.sleep(0)
        finally:
            self._running = False
            logger.info("Animation loop stopped after %s ticks", self.tick_count)

    def stop(self) -> None:
        self._running = False


__all__ = ["AnimationController", "Fetcher"]
