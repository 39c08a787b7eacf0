import math

import numpy as np
import pytest

from arcball.controller.sphere_mapper import SphereMapper


@pytest.fixture
def mapper():
    """800x600 viewport, radius 300"""
    return SphereMapper(800, 600)


def test_radius_from_bounds(mapper):
    assert mapper.radius == pytest.approx(300.0)
    assert mapper.center == (400.0, 300.0)
    assert mapper.bounds_size == (800.0, 600.0)


def test_center_maps_to_pole(mapper):
    np.testing.assert_allclose(mapper.map_to_sphere((400, 300)), [0.0, 0.0, 1.0])


def test_inside_disk_lifts_to_hemisphere(mapper):
    result = mapper.map_to_sphere((550, 300))
    np.testing.assert_allclose(result, [0.5, 0.0, math.sqrt(0.75)])


def test_outside_disk_projects_to_equator(mapper):
    result = mapper.map_to_sphere((1000, 300))
    np.testing.assert_allclose(result, [1.0, 0.0, 0.0])

    result = mapper.map_to_sphere((400 + 600, 300 + 600))
    np.testing.assert_allclose(result, [math.sqrt(0.5), math.sqrt(0.5), 0.0])


def test_negative_distance_flips_vertical(mapper):
    up = mapper.map_to_sphere((400, 450), distance=5.0)
    flipped = mapper.map_to_sphere((400, 450), distance=-5.0)
    assert up[1] == pytest.approx(0.5)
    assert flipped[1] == pytest.approx(-0.5)
    assert up[2] == pytest.approx(flipped[2])


def test_length_never_exceeds_one(mapper):
    for x in np.linspace(-400, 1200, 41):
        for y in np.linspace(-300, 900, 31):
            p = mapper.map_to_sphere((x, y))
            length_sq = float(np.dot(p, p))
            assert length_sq <= 1.0 + 1e-12
            dx, dy = (x - 400) / 300, (y - 300) / 300
            if dx * dx + dy * dy > 1.0:
                assert length_sq == pytest.approx(1.0)
                assert p[2] == pytest.approx(0.0, abs=1e-6)


def test_degenerate_viewport_does_not_produce_nan():
    mapper = SphereMapper(0, 0)
    assert mapper.radius == 0.0
    result = mapper.map_to_sphere((10, 20))
    assert not np.isnan(result).any()
    np.testing.assert_allclose(result, [0.0, 0.0, 1.0])


def test_radius_scale_updates_radius(mapper):
    mapper.set_radius_scale(2.0)
    assert mapper.radius_scale == 2.0
    assert mapper.radius_scale_internal == 1.0
    assert mapper.radius == pytest.approx(600.0)


def test_set_bounds_recomputes_radius(mapper):
    mapper.set_bounds(1024, 512)
    assert mapper.bounds_size == (1024.0, 512.0)
    assert mapper.center == (512.0, 256.0)
    assert mapper.radius == pytest.approx(256.0)


def test_out_buffer_is_reused(mapper):
    out = np.zeros(3)
    assert mapper.map_to_sphere((400, 300), out=out) is out
