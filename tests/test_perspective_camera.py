import math

import numpy as np
import pytest

from arcball.camera.camera_protocol import CameraRef
from arcball.camera.perspective_camera import PerspectiveCamera, compute_view_ray


def test_satisfies_camera_protocol(camera):
    assert isinstance(camera, CameraRef)


def test_distance_and_target(camera):
    assert camera.get_distance() == pytest.approx(5.0)
    target = camera.get_target()
    target[0] = 99.0
    np.testing.assert_array_equal(camera.get_target(), [0.0, 0.0, 0.0])


def test_look_at_updates_view_matrix(camera):
    camera.look_at((0.0, 3.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
    view = camera.get_view_matrix()
    np.testing.assert_allclose(view @ [0.0, 0.0, 0.0, 1.0], [0.0, 0.0, -3.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(view[1, :3], [0.0, 0.0, -1.0], atol=1e-12)


def test_set_target_keeps_position(camera):
    camera.set_target((1.0, 0.0, 0.0))
    np.testing.assert_array_equal(camera.position, [0.0, 0.0, 5.0])
    assert camera.get_distance() == pytest.approx(math.sqrt(26.0))


def test_center_ray_points_forward(camera):
    ray = camera.get_view_ray((400, 300), 800, 600)
    np.testing.assert_allclose(ray.origin, [0.0, 0.0, 0.0])
    np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0])


def test_corner_ray_spans_frustum():
    fov = math.pi / 2
    ray = compute_view_ray((0, 0), 200, 100, fov, 2.0, 1.0)
    # top-left corner: x = -aspect * tan(fov/2), y = +tan(fov/2) at unit depth
    expected = np.array([-2.0, 1.0, -1.0])
    np.testing.assert_allclose(ray.direction, expected / np.linalg.norm(expected))


def test_zero_viewport_yields_center_ray():
    ray = compute_view_ray((10, 10), 0, 0, math.pi / 3, 1.0, 0.1)
    np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0])


def test_projection_matrix_maps_near_plane():
    camera = PerspectiveCamera(fov=math.pi / 2, aspect=1.0, near=1.0, far=10.0)
    proj = camera.get_projection_matrix()
    clip = proj @ [0.0, 0.0, -1.0, 1.0]
    assert clip[2] / clip[3] == pytest.approx(-1.0)
    clip = proj @ [0.0, 0.0, -10.0, 1.0]
    assert clip[2] / clip[3] == pytest.approx(1.0)


def test_set_aspect_ignores_invalid(camera):
    camera.set_aspect(-1.0)
    assert camera.aspect == pytest.approx(800 / 600)
    camera.set_aspect(2.0)
    assert camera.aspect == 2.0
