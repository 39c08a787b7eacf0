import numpy as np

from arcball.core.plane import Plane, Ray


def test_ray_hits_facing_plane():
    plane = Plane(point=(0.0, 0.0, -5.0), normal=(0.0, 0.0, 1.0))
    hit = plane.intersect_ray(Ray(origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0)))
    np.testing.assert_allclose(hit, [0.0, 0.0, -5.0])


def test_oblique_ray_hit():
    plane = Plane(point=(0.0, 0.0, -5.0), normal=(0.0, 0.0, 1.0))
    direction = np.array([1.0, 0.0, -1.0]) / np.sqrt(2.0)
    hit = plane.intersect_ray(Ray(origin=np.zeros(3), direction=direction))
    np.testing.assert_allclose(hit, [5.0, 0.0, -5.0], atol=1e-12)


def test_parallel_ray_returns_none():
    """A ray parallel to the plane has no intersection and no division by zero"""
    plane = Plane(point=(0.0, 0.0, -5.0), normal=(0.0, 0.0, 1.0))
    out = np.array([7.0, 7.0, 7.0])
    hit = plane.intersect_ray(Ray(origin=np.zeros(3), direction=(1.0, 0.0, 0.0)), out=out)
    assert hit is None
    np.testing.assert_array_equal(out, [7.0, 7.0, 7.0])


def test_plane_set_updates_in_place():
    plane = Plane()
    point = plane.point
    plane.set((1.0, 2.0, 3.0), (0.0, 1.0, 0.0))
    assert plane.point is point
    np.testing.assert_array_equal(plane.point, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(plane.normal, [0.0, 1.0, 0.0])


def test_plane_copies_constructor_arrays():
    point = np.array([1.0, 1.0, 1.0])
    plane = Plane(point=point)
    plane.set((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    np.testing.assert_array_equal(point, [1.0, 1.0, 1.0])
