"""Projection of screen positions onto the virtual arcball sphere."""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np

DEFAULT_RADIUS_SCALE = 1.0


class SphereMapper:
    """
    Maps screen coordinates onto a unit sphere centred in the viewport.

    The sphere radius is ``min(width, height) * radius_scale / 2``. Positions
    are expected with a bottom-left origin; callers flip the y axis first.
    """

    def __init__(self, width: float, height: float,
                 radius_scale: float = DEFAULT_RADIUS_SCALE) -> None:
        self._bounds_size = np.zeros(2, dtype=np.float64)
        self._center = np.zeros(2, dtype=np.float64)
        self._radius = 0.0
        self._radius_scale = radius_scale
        self._radius_scale_internal = radius_scale / 2.0
        self.set_bounds(width, height)

    @property
    def bounds_size(self) -> tuple[float, float]:
        return float(self._bounds_size[0]), float(self._bounds_size[1])

    @property
    def center(self) -> tuple[float, float]:
        return float(self._center[0]), float(self._center[1])

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def radius_scale(self) -> float:
        """Scale as given by the caller (1.0 = sphere fits the short side)."""
        return self._radius_scale

    @property
    def radius_scale_internal(self) -> float:
        """Factor applied to ``min(width, height)``; half of ``radius_scale``."""
        return self._radius_scale_internal

    def set_bounds(self, width: float, height: float) -> None:
        """Update viewport size, centre and radius."""
        self._bounds_size[:] = (width, height)
        self._center[:] = (width * 0.5, height * 0.5)
        self._update_radius()

    def set_radius_scale(self, scale: float) -> None:
        self._radius_scale = scale
        self._radius_scale_internal = scale / 2.0
        self._update_radius()

    def map_to_sphere(self, pos: Sequence[float], distance: float = 1.0,
                      out: np.ndarray | None = None) -> np.ndarray:
        """
        Project a screen position onto the sphere.

        Inside the disk the point is lifted onto the front hemisphere; outside
        it is pulled onto the equator (z = 0). A negative camera distance flips
        the vertical axis. A degenerate radius maps everything to the pole.

        :param pos: (x, y) with bottom-left origin
        :param distance: Current camera distance, only its sign is used
        :param out: Optional destination array
        :return: Point on (or inside, within rounding) the unit sphere
        """
        if out is None:
            out = np.empty(3, dtype=np.float64)

        inv_radius = 1.0 / self._radius if self._radius > 0 else 0.0
        direction = -1.0 if distance < 0 else 1.0

        x = (pos[0] - self._center[0]) * inv_radius
        y = (pos[1] - self._center[1]) * inv_radius * direction

        length_sq = x * x + y * y
        if length_sq > 1.0:
            length = math.sqrt(length_sq)
            out[0], out[1], out[2] = x / length, y / length, 0.0
        else:
            out[0], out[1], out[2] = x, y, math.sqrt(1.0 - length_sq)
        return out

    def _update_radius(self) -> None:
        self._radius = float(min(self._bounds_size[0], self._bounds_size[1])) * self._radius_scale_internal
