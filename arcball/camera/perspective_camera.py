"""Reference perspective camera implementing CameraRef."""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from arcball.core import geometry_utils
from arcball.core.geometry_utils import as_vec3
from arcball.core.plane import Ray

logger = logging.getLogger(__name__)


def compute_view_ray(screen_pos: Sequence[float], width: float, height: float,
                     fov: float, aspect: float, near: float) -> Ray:
    """
    Cast a view-space ray through a screen position.

    :param screen_pos: (x, y) in pixels, origin top-left
    :param width: Viewport width in pixels
    :param height: Viewport height in pixels
    :param fov: Vertical field of view in radians
    :param aspect: Width / height ratio of the frustum
    :param near: Near plane distance
    :return: Ray starting at the eye (view-space origin)
    """
    if width <= 0 or height <= 0:
        nx = ny = 0.0
    else:
        nx = screen_pos[0] / width - 0.5
        ny = 0.5 - screen_pos[1] / height

    half_height = near * math.tan(fov * 0.5)
    half_width = half_height * aspect
    direction = np.array([nx * 2.0 * half_width, ny * 2.0 * half_height, -near])
    return Ray(origin=np.zeros(3), direction=geometry_utils.normalize_vector(direction))


class PerspectiveCamera:
    """
    Minimal look-at perspective camera.

    Holds position, target and up in world space and keeps the view matrix in
    sync with them.
    """

    def __init__(self,
                 position: Sequence[float] = (0.0, 0.0, 5.0),
                 target: Sequence[float] = (0.0, 0.0, 0.0),
                 up: Sequence[float] = (0.0, 1.0, 0.0),
                 fov: float = math.pi / 3,
                 aspect: float = 1.0,
                 near: float = 0.1,
                 far: float = 100.0) -> None:
        self.position = as_vec3(position)
        self.target = as_vec3(target)
        self.up = as_vec3(up)
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far
        self._view_matrix = np.eye(4)
        self._update_view_matrix()

    def get_distance(self) -> float:
        """Distance between position and target."""
        return geometry_utils.calculate_distance(self.target, self.position)

    def get_view_matrix(self) -> np.ndarray:
        """World-to-view matrix (a copy)."""
        return self._view_matrix.copy()

    def get_projection_matrix(self) -> np.ndarray:
        """OpenGL style perspective projection matrix."""
        f = 1.0 / math.tan(self.fov * 0.5)
        near, far = self.near, self.far
        proj = np.zeros((4, 4))
        proj[0, 0] = f / self.aspect
        proj[1, 1] = f
        proj[2, 2] = (far + near) / (near - far)
        proj[2, 3] = 2.0 * far * near / (near - far)
        proj[3, 2] = -1.0
        return proj

    def get_target(self) -> np.ndarray:
        return self.target.copy()

    def set_target(self, target: Sequence[float]) -> None:
        self.target[:] = target
        self._update_view_matrix()

    def set_aspect(self, aspect: float) -> None:
        if aspect <= 0:
            logger.warning("Ignoring non-positive aspect ratio: %s", aspect)
            return
        self.aspect = aspect

    def look_at(self, position: Sequence[float], target: Sequence[float],
                up: Sequence[float]) -> None:
        """Move the camera to ``position`` looking at ``target``."""
        self.position[:] = position
        self.target[:] = target
        self.up[:] = up
        self._update_view_matrix()

    def get_view_ray(self, screen_pos: Sequence[float], width: float, height: float) -> Ray:
        return compute_view_ray(screen_pos, width, height, self.fov, self.aspect, self.near)

    def _update_view_matrix(self) -> None:
        geometry_utils.look_at_matrix(self.position, self.target, self.up, out=self._view_matrix)
