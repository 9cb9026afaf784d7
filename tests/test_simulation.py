import random

from planefinder.domain import GeoPosition, SizeClass
from planefinder.services.area import AreaOfInterest
from planefinder.services.registry import PlaneRegistry
from planefinder.services.render import InMemoryRenderTarget
from planefinder.services.simulation import SimulationSource

CENTER = GeoPosition(lon=-117.18, lat=33.5556)


def _populate(seed=1, count=20):
    registry = PlaneRegistry(InMemoryRenderTarget())
    area = AreaOfInterest(0.5, center=CENTER)
    source = SimulationSource(plane_count=count, rng=random.Random(seed), clock=lambda: 1000.4)
    return source, registry, area, source.populate(registry, area)


def test_populate_inserts_clustered_planes():
    _, registry, area, inserted = _populate()

    assert inserted == 20
    assert len(registry) == 20
    for plane in registry:
        assert abs(plane.position.lat - CENTER.lat) <= area.tolerance
        assert abs(plane.position.lon - CENTER.lon) <= area.tolerance
        assert 1000.0 <= plane.position.alt <= 10000.0
        assert 0.0 <= plane.heading < 360.0
        assert 100.0 <= plane.velocity <= 250.0
        assert plane.synthetic
        assert plane.last_update == 1000


def test_populate_splits_classes_by_index():
    _, registry, _, _ = _populate()

    light = [plane for plane in registry if plane.size_class is SizeClass.LIGHT]
    heavy = [plane for plane in registry if plane.size_class is SizeClass.HEAVY]
    assert len(light) == 10
    assert len(heavy) == 10
    assert all(plane.callsign.startswith("N") for plane in light)
    assert not any(plane.callsign.startswith("N") for plane in heavy)
    assert all(plane.render_heading == plane.heading + 180.0 for plane in light)


def test_populate_runs_once():
    source, registry, area, _ = _populate(count=4)

    assert source.populate(registry, area) == 0
    assert len(registry) == 4
    assert len(registry.render_target) == 4


def test_populate_waits_for_center():
    registry = PlaneRegistry(InMemoryRenderTarget())
    source = SimulationSource(plane_count=3)

    assert source.populate(registry, AreaOfInterest(0.5)) == 0
    assert not source.populated
    assert len(registry) == 0


def test_seeded_simulation_is_reproducible():
    _, first, _, _ = _populate(seed=42, count=5)
    _, second, _, _ = _populate(seed=42, count=5)

    assert [p.position for p in first] == [p.position for p in second]
