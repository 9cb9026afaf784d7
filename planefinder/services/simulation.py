"""Synthetic traffic for demo mode and offline testing."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from planefinder.domain import GeoPosition, SizeClass
from planefinder.services.area import AreaOfInterest
from planefinder.services.registry import Plane, PlaneRegistry

logger = logging.getLogger("planefinder.simulation")

ALTITUDE_RANGE_M = (1000.0, 10000.0)
VELOCITY_RANGE_MS = (100.0, 250.0)


class SimulationSource:
    """Populate the registry once with planes clustered around the area center."""

    def __init__(
        self,
        *,
        plane_count: int = 20,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.plane_count = plane_count
        self.rng = rng or random.Random()
        self.clock = clock
        self.populated = False

    def populate(self, registry: PlaneRegistry, area: AreaOfInterest) -> int:
        """Insert the synthetic planes; later calls are no-ops."""

        center = area.center
        if self.populated or center is None:
            return 0

        now = int(self.clock())
        light_count = self.plane_count // 2
        for index in range(self.plane_count):
            size_class = SizeClass.LIGHT if index < light_count else SizeClass.HEAVY
            callsign = f"N{index:03d}SIM" if size_class is SizeClass.LIGHT else f"SIM{index:03d}"
            heading = self.rng.uniform(0.0, 360.0)
            position = GeoPosition(
                lon=center.lon + self.rng.uniform(-area.tolerance, area.tolerance),
                lat=center.lat + self.rng.uniform(-area.tolerance, area.tolerance),
                alt=self.rng.uniform(*ALTITUDE_RANGE_M),
            )
            render_heading = registry.heading_policy.on_create(heading, size_class)
            handle = registry.render_target.create_renderable(
                position, size_class, heading=render_heading, callsign=callsign
            )
            registry.insert(
                Plane(
                    callsign=callsign,
                    position=position,
                    velocity=self.rng.uniform(*VELOCITY_RANGE_MS),
                    heading=heading,
                    vertical_rate=0.0,
                    size_class=size_class,
                    last_update=now,
                    render_handle=handle,
                    render_heading=render_heading,
                    synthetic=True,
                )
            )

        self.populated = True
        logger.info("Simulated %s planes around %.5f, %.5f", self.plane_count, center.lat, center.lon)
        return self.plane_count


__all__ = ["SimulationSource"]
