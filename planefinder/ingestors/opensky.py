"""Bounded-area fetches from the OpenSky ``states/all`` REST endpoint."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging
import time
from typing import Callable

import httpx

from planefinder.config import settings
from planefinder.ingestors.feed_parser import parse_header_timestamp, parse_states
from planefinder.services.area import BoundingBox
from planefinder.services.registry import PlaneRegistry

logger = logging.getLogger("planefinder.ingestors.opensky")


class FetchController:
    """Issue feed queries with at most one request outstanding.

    ``try_fetch`` is called from the animation tick. It starts the request as
    a task on the running loop and returns immediately; the parsed records are
    applied to the registry on that same loop when the response arrives.
    """

    def __init__(
        self,
        registry: PlaneRegistry,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        auth: tuple[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.registry = registry
        self.base_url = base_url or settings.feed_base_url
        self.timeout = timeout or settings.feed_timeout
        self.auth = auth
        self.transport = transport
        self.clock = clock

        self.fetch_count = 0
        self.last_fetch_at: datetime | None = None
        self.last_error: str | None = None
        self._in_flight = False
        self._task: asyncio.Task[int] | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def try_fetch(self, box: BoundingBox) -> asyncio.Task[int] | None:
        """Start a fetch for ``box`` unless one is already outstanding."""

        if self._in_flight:
            logger.debug("Fetch already in flight; skipping")
            return None

        task = asyncio.create_task(self._fetch_and_apply(box))
        self._in_flight = True
        self._task = task
        task.add_done_callback(self._on_done)
        return task

    async def cancel(self) -> None:
        task = self._task
        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _on_done(self, task: asyncio.Task[int]) -> None:
        self._in_flight = False
        self._task = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.last_error = str(exc)
            logger.error("Feed update failed", exc_info=exc)

    async def _fetch_and_apply(self, box: BoundingBox) -> int:
        payload = await self.fetch_payload(box)
        if not payload:
            return 0

        applied = self.registry.upsert_batch(parse_states(payload), self.clock())
        self.fetch_count += 1
        self.last_fetch_at = datetime.now(tz=timezone.utc)
        self.last_error = None
        logger.debug(
            "Applied %s state records (feed time %s); tracking %s planes",
            applied,
            parse_header_timestamp(payload),
            len(self.registry),
        )
        return applied

    async def fetch_payload(self, box: BoundingBox) -> str | None:
        """GET the raw feed text for ``box``; transport problems yield None."""

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport, auth=self.auth
            ) as client:
                response = await client.get(self.base_url, params=box.as_query_params())
        except httpx.TimeoutException as exc:
            return self._fail("Feed request timed out: %s", exc)
        except httpx.RequestError as exc:
            return self._fail("Feed request failed: %s", exc)

        if response.status_code == 429:
            return self._fail("Feed rate limit encountered: %s", response.text)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            return self._fail("Feed returned HTTP %s", exc.response.status_code)

        if not response.text:
            return self._fail("Feed returned an empty payload: %s", response.status_code)
        return response.text

    def _fail(self, message: str, detail: object) -> None:
        logger.warning(message, detail)
        self.last_error = message % (detail,)
        return None


__all__ = ["FetchController"]
