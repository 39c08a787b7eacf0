"""Tunable parameters of the arcball controller."""
from __future__ import annotations

from dataclasses import dataclass

from arcball.controller.distance_engine import (
    DEFAULT_DISTANCE_MAX,
    DEFAULT_DISTANCE_MIN,
    DEFAULT_DISTANCE_STEP,
)
from arcball.controller.sphere_mapper import DEFAULT_RADIUS_SCALE

DEFAULT_SPEED = 0.175


@dataclass
class ControllerConfig:
    """
    Initial controller parameters.

    Attributes:
        speed: Easing factor applied per apply() call, in (0, 1]
        radius_scale: Arcball size relative to the short viewport side
        distance_step: Distance change per scroll notch
        distance_min: Lower clamp for scrolled distance
        distance_max: Upper clamp for scrolled distance
    """
    speed: float = DEFAULT_SPEED
    radius_scale: float = DEFAULT_RADIUS_SCALE
    distance_step: float = DEFAULT_DISTANCE_STEP
    distance_min: float = DEFAULT_DISTANCE_MIN
    distance_max: float = DEFAULT_DISTANCE_MAX
