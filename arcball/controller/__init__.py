"""Arcball controller and its orientation, panning and distance engines."""

from arcball.controller.arcball_controller import ArcballController
from arcball.controller.config import ControllerConfig
from arcball.controller.gesture import GestureState

__all__ = [
    "ArcballController",
    "ControllerConfig",
    "GestureState",
]
