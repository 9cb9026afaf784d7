import inspect

import pytest

from feed_samples import SENT_AT, make_payload, make_state
from planefinder.ingestors.feed_parser import (
    HEADER_LENGTH,
    parse_header_timestamp,
    parse_states,
)


def test_parse_states_reads_positional_fields():
    payload = make_payload([make_state()])

    records = list(parse_states(payload))

    assert len(records) == 1
    record = records[0]
    assert record.callsign == "TEST123"
    assert record.lon == 20.0
    assert record.lat == 10.0
    assert record.altitude == pytest.approx(3700.0)
    assert record.velocity == pytest.approx(164.6)
    assert record.heading == 90.0
    assert record.vertical_rate == 2.0
    assert record.last_contact == 1714765198


def test_parse_states_uses_barometric_altitude_when_geometric_missing():
    state = make_state(
        "ABC123  ",
        lat=5.0,
        lon=10.0,
        baro_altitude=1500.0,
        geo_altitude=None,
        velocity=100.0,
        heading=90.0,
        vertical_rate=2.0,
    )

    records = list(parse_states(make_payload([state])))

    assert len(records) == 1
    record = records[0]
    assert record.callsign == "ABC123"
    assert record.lat == 5.0
    assert record.lon == 10.0
    assert record.velocity == 100.0
    assert record.heading == 90.0
    assert record.vertical_rate == 2.0
    assert record.altitude == 1500.0


def test_parse_states_defaults_missing_numbers_to_zero():
    state = make_state(
        baro_altitude=None,
        geo_altitude=None,
        velocity=None,
        heading=None,
        vertical_rate=None,
    )
    state[3] = None

    record = next(parse_states(make_payload([state])))

    assert record.altitude == 0.0
    assert record.velocity == 0.0
    assert record.heading == 0.0
    assert record.vertical_rate == 0.0
    assert record.last_contact == 0


def test_parse_states_drops_records_without_position():
    states = [
        make_state("FIRST   "),
        make_state("NOLAT   ", lat=None),
        make_state("NOLON   ", lon=None),
        make_state("LAST    "),
    ]

    callsigns = [record.callsign for record in parse_states(make_payload(states))]

    assert callsigns == ["FIRST", "LAST"]


def test_parse_states_stops_at_short_record():
    states = [
        make_state("FIRST   "),
        ["abc", "SHORT   ", "US", 1, 2],
        make_state("NEVER   "),
    ]

    callsigns = [record.callsign for record in parse_states(make_payload(states))]

    assert callsigns == ["FIRST"]


def test_parse_states_accepts_thirteen_field_record():
    state = ["abc", "N12345  ", "US", 1700000000, 1700000000, 10.0, 5.0, 800.0, False, 50.0, 45.0, 0.0, None]

    records = list(parse_states(make_payload([state])))

    assert len(records) == 1
    assert records[0].callsign == "N12345"
    assert records[0].altitude == 800.0


@pytest.mark.parametrize("raw_callsign", ["", None, "   "])
def test_parse_states_marks_unparseable_callsigns_unknown(raw_callsign):
    records = list(parse_states(make_payload([make_state(raw_callsign)])))

    assert records[0].callsign == "Unknown"


def test_parse_states_skips_record_with_garbled_number():
    states = [make_state("BAD     ", velocity="fast"), make_state("GOOD    ")]
    payload = make_payload(states).replace('"fast"', "fast")

    callsigns = [record.callsign for record in parse_states(payload)]

    assert callsigns == ["GOOD"]


def test_parse_states_is_lazy_and_tolerates_empty_feeds():
    assert inspect.isgenerator(parse_states(make_payload([make_state()])))
    assert list(parse_states('{"time":1714765200,"states":null}')) == []
    assert list(parse_states("")) == []


def test_parse_header_timestamp():
    payload = make_payload([make_state()])

    assert payload[HEADER_LENGTH - 2 : HEADER_LENGTH] == "[["
    assert parse_header_timestamp(payload) == SENT_AT
    assert parse_header_timestamp("garbage") is None


def test_parse_states_skips_record_with_overflowing_timestamp():
    states = [
        make_state("FIRST   "),
        make_state("HUGE    ", time_position=float("inf")),
        make_state("LAST    "),
    ]
    payload = make_payload(states)
    assert "Infinity" in payload

    callsigns = [record.callsign for record in parse_states(payload)]

    assert callsigns == ["FIRST", "LAST"]


@pytest.mark.parametrize("lat, lon", [(95.0, 20.0), (-90.5, 20.0), (10.0, 181.0)])
def test_parse_states_skips_out_of_range_coordinates(lat, lon):
    states = [make_state("FIRST   "), make_state("BADPOS  ", lat=lat, lon=lon), make_state("LAST    ")]

    callsigns = [record.callsign for record in parse_states(make_payload(states))]

    assert callsigns == ["FIRST", "LAST"]
