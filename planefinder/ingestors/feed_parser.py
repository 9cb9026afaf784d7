"""Decoder for the positional ``states/all`` feed payload.

The payload is treated as text rather than JSON: a fixed-length header
(``{"time":<10 digits>,"states":[[``) is skipped, the remainder is split on
``[`` into records and each record on ``,`` into positional fields.

Parsing is a partial-success contract. A record with too few fields ends the
whole payload, but every record yielded before it is still valid and is
applied by the caller. Do not turn this into a hard failure: noisy feeds rely
on the prefix being kept.
"""

from __future__ import annotations

import logging
from typing import Iterator

from planefinder.domain import UNKNOWN_CALLSIGN
from planefinder.models.air_traffic import StateRecord

logger = logging.getLogger("planefinder.ingestors.feed_parser")

HEADER_LENGTH = 30
MIN_FIELDS = 13
NULL_TOKEN = "null"

# Positional indices within a state record.
CALLSIGN = 1
LAST_CONTACT = 3
LONGITUDE = 5
LATITUDE = 6
BARO_ALTITUDE = 7
VELOCITY = 9
HEADING = 10
VERTICAL_RATE = 11
GEO_ALTITUDE = 13


def _clean(token: str) -> str:
    return token.strip().rstrip("]}").strip()


def _optional_float(fields: list[str], index: int) -> float | None:
    if index >= len(fields):
        return None
    token = _clean(fields[index])
    if token == NULL_TOKEN:
        return None
    return float(token)


def _extract_callsign(raw: str) -> str:
    """Drop the surrounding quote characters (one leading, two trailing)."""

    start, end = 1, len(raw) - 2
    if start > end or raw.strip() == NULL_TOKEN:
        return UNKNOWN_CALLSIGN
    callsign = raw[start:end].strip()
    return callsign or UNKNOWN_CALLSIGN


def _build_record(fields: list[str]) -> StateRecord:
    altitude = _optional_float(fields, GEO_ALTITUDE)
    if altitude is None:
        altitude = _optional_float(fields, BARO_ALTITUDE)

    last_contact = _optional_float(fields, LAST_CONTACT)

    return StateRecord(
        callsign=_extract_callsign(fields[CALLSIGN]),
        lat=float(_clean(fields[LATITUDE])),
        lon=float(_clean(fields[LONGITUDE])),
        altitude=altitude or 0.0,
        velocity=_optional_float(fields, VELOCITY) or 0.0,
        heading=_optional_float(fields, HEADING) or 0.0,
        vertical_rate=_optional_float(fields, VERTICAL_RATE) or 0.0,
        last_contact=int(last_contact) if last_contact is not None else 0,
    )


def parse_header_timestamp(payload: str) -> int | None:
    """Return the message-sent timestamp embedded in the header, if readable."""

    try:
        return int(payload[8:18])
    except ValueError:
        return None


def parse_states(payload: str) -> Iterator[StateRecord]:
    """Lazily decode state records from a raw feed payload.

    - A record with fewer than ``MIN_FIELDS`` fields stops parsing entirely.
    - Records whose longitude or latitude is ``null`` are skipped.
    - Records with a malformed, non-finite or out-of-range number are dropped.
    - Absent velocity, heading, vertical rate and last contact default to 0.
    - Altitude prefers the geometric field, then barometric, then 0.
    """

    states = payload[HEADER_LENGTH:]
    for element in states.split("["):
        fields = element.split(",")
        if len(fields) < MIN_FIELDS:
            logger.debug(
                "Stopping feed parse at short record (%s fields)", len(fields)
            )
            return

        if _clean(fields[LONGITUDE]) == NULL_TOKEN or _clean(fields[LATITUDE]) == NULL_TOKEN:
            continue

        try:
            record = _build_record(fields)
        except (ValueError, OverflowError) as exc:
            logger.debug("Dropping unparseable state record %r: %s", element, exc)
            continue

        yield record


__all__ = ["HEADER_LENGTH", "MIN_FIELDS", "parse_header_timestamp", "parse_states"]
