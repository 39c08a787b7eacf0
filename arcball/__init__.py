"""Arcball camera controller: orbit, pan and zoom from pointer input."""

from arcball.camera.camera_protocol import CameraRef
from arcball.camera.perspective_camera import PerspectiveCamera
from arcball.controller.arcball_controller import ArcballController
from arcball.controller.config import ControllerConfig
from arcball.controller.gesture import GestureState

__all__ = [
    "ArcballController",
    "CameraRef",
    "ControllerConfig",
    "GestureState",
    "PerspectiveCamera",
]
