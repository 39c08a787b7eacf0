"""Eased camera distance (zoom)."""
from __future__ import annotations

import math
import sys

DEFAULT_DISTANCE_STEP = 0.05
DEFAULT_DISTANCE_MIN = math.ulp(0.0)
DEFAULT_DISTANCE_MAX = sys.float_info.max


class DistanceEngine:
    """
    Scalar distance that approaches a clamped target.

    Scroll steps move ``target`` and clamp it into ``[minimum, maximum]``;
    ``step`` eases ``distance`` towards it by a fixed fraction per call.
    """

    def __init__(self, distance: float,
                 step: float = DEFAULT_DISTANCE_STEP,
                 minimum: float = DEFAULT_DISTANCE_MIN,
                 maximum: float = DEFAULT_DISTANCE_MAX) -> None:
        self.distance = float(distance)
        self.previous = self.distance
        self.target = self.distance
        self.minimum = minimum
        self.maximum = maximum
        self.distance_step = step
        self.zoom = False

    def scroll(self, delta_y: float) -> bool:
        """
        Move the target one step against the scroll direction.

        :param delta_y: Scroll amount, only its sign is used
        :return: False when ``delta_y`` is zero
        """
        direction = (delta_y > 0) - (delta_y < 0)
        if direction == 0:
            return False
        self.target = self.clamp(self.target - direction * self.distance_step)
        return True

    def clamp(self, value: float) -> float:
        return max(self.minimum, min(value, self.maximum))

    def step(self, speed: float) -> float:
        """
        Ease the distance towards the target and refresh ``zoom``.

        ``zoom`` is True when the distance did not change in this call.
        """
        self.distance += (self.target - self.distance) * speed
        self.zoom = self.distance == self.previous
        self.previous = self.distance
        return self.distance
