"""Pytest configuration and shared fixtures."""

import pytest

from arcball.camera.perspective_camera import PerspectiveCamera
from arcball.controller.arcball_controller import ArcballController

WIDTH = 800
HEIGHT = 600


@pytest.fixture
def camera():
    """Perspective camera 5 units in front of the origin."""
    return PerspectiveCamera(position=(0.0, 0.0, 5.0), aspect=WIDTH / HEIGHT)


@pytest.fixture
def controller(camera):
    """Controller on an 800x600 viewport with default settings."""
    return ArcballController(camera, WIDTH, HEIGHT)
