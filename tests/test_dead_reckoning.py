import pytest
from geographiclib.geodesic import Geodesic

from planefinder.domain import GeoPosition
from planefinder.services.dead_reckoning import DeadReckoner, GeopyGeometryEngine

# WGS-84 equatorial radius * pi / 180
METERS_PER_DEGREE_AT_EQUATOR = 111319.4908


def test_project_zero_distance_is_identity():
    reckoner = DeadReckoner()
    start = GeoPosition(lon=-117.18, lat=33.5556, alt=1200.0)

    assert reckoner.project(start, 0.0, 123.0) == start


def test_project_along_equator():
    reckoner = DeadReckoner()

    moved = reckoner.project(GeoPosition(lon=0.0, lat=0.0), METERS_PER_DEGREE_AT_EQUATOR, 90.0)

    assert moved.lon == pytest.approx(1.0, rel=1e-6)
    assert moved.lat == pytest.approx(0.0, abs=1e-9)


def test_project_due_north_keeps_longitude():
    reckoner = DeadReckoner()
    start = GeoPosition(lon=-117.0, lat=33.0, alt=500.0)

    moved = reckoner.project(start, 10_000.0, 0.0)

    assert moved.lon == pytest.approx(start.lon, abs=1e-9)
    assert moved.lat > start.lat
    assert moved.alt == 500.0


def test_project_and_back_returns_to_start():
    reckoner = DeadReckoner()
    start = GeoPosition(lon=151.2, lat=-33.9)

    out = reckoner.project(start, 25_000.0, 47.0)
    # Azimuth of the same geodesic as it arrives at the far end
    arrival = Geodesic.WGS84.Inverse(start.lat, start.lon, out.lat, out.lon)["azi2"]
    back = reckoner.project(out, -25_000.0, arrival)

    assert back.lat == pytest.approx(start.lat, abs=1e-6)
    assert back.lon == pytest.approx(start.lon, abs=1e-6)


def test_negative_distance_moves_along_reciprocal():
    engine = GeopyGeometryEngine()
    start = GeoPosition(lon=10.0, lat=45.0)

    reverse = engine.geodetic_move(start, -5_000.0, 30.0)
    reciprocal = engine.geodetic_move(start, 5_000.0, 210.0)

    assert reverse.lat == pytest.approx(reciprocal.lat)
    assert reverse.lon == pytest.approx(reciprocal.lon)


def test_advance_projects_altitude_linearly():
    reckoner = DeadReckoner()
    start = GeoPosition(lon=10.0, lat=45.0, alt=1000.0)

    moved = reckoner.advance(start, velocity=0.0, heading=0.0, vertical_rate=-5.0, elapsed=12.0)

    assert moved.lat == start.lat
    assert moved.lon == start.lon
    assert moved.alt == pytest.approx(940.0)


def test_reckoner_uses_injected_geometry():
    calls = []

    class RecordingGeometry:
        def geodetic_move(self, position, distance_m, azimuth_deg):
            calls.append((distance_m, azimuth_deg))
            return GeoPosition(lon=position.lon + 1, lat=position.lat, alt=position.alt)

    reckoner = DeadReckoner(RecordingGeometry())
    moved = reckoner.advance(
        GeoPosition(lon=1.0, lat=2.0, alt=3.0),
        velocity=100.0,
        heading=270.0,
        vertical_rate=1.0,
        elapsed=0.5,
    )

    assert calls == [(50.0, 270.0)]
    assert moved == GeoPosition(lon=2.0, lat=2.0, alt=3.5)
