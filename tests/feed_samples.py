"""Builders for ``states/all`` payloads in the feed's compact text form."""

import json

SENT_AT = 1714765200


def make_state(
    callsign="TEST123 ",
    *,
    lon=20.0,
    lat=10.0,
    baro_altitude=3657.6,
    velocity=164.6,
    heading=90.0,
    vertical_rate=2.0,
    geo_altitude=3700.0,
    time_position=1714765198,
    icao24="abc123",
):
    return [
        icao24,  # icao24
        callsign,  # callsign, space padded
        "United States",  # origin_country
        time_position,  # time_position
        time_position + 2,  # last_contact
        lon,  # longitude
        lat,  # latitude
        baro_altitude,  # baro_altitude meters
        False,  # on_ground
        velocity,  # velocity m/s
        heading,  # true_track
        vertical_rate,  # vertical_rate m/s
        None,  # sensors
        geo_altitude,  # geo_altitude meters
        "7000",  # squawk
        False,  # spi
        0,  # position_source
    ]


def make_payload(states, sent_at=SENT_AT):
    return json.dumps({"time": sent_at, "states": states}, separators=(",", ":"))
