"""Camera target translation by dragging across a picking plane."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from arcball.camera.camera_protocol import CameraRef
from arcball.core import geometry_utils
from arcball.core.plane import Plane

logger = logging.getLogger(__name__)

Z_AXIS = np.array([0.0, 0.0, 1.0])


class PanningEngine:
    """
    Moves the camera target so the picked point follows the pointer.

    At gesture start a plane through the camera target, facing the camera,
    is captured in view and world space. Each drag intersects the view rays
    of the start and current pointer positions with that plane and shifts
    the target by the world-space difference.
    """

    def __init__(self) -> None:
        self.target_world = np.zeros(3, dtype=np.float64)
        self.target_view = np.zeros(3, dtype=np.float64)

        self.plane_view = Plane()
        self.plane_world = Plane()

        self.plane_pos_down_view = np.zeros(3, dtype=np.float64)
        self.plane_pos_drag_view = np.zeros(3, dtype=np.float64)
        self.plane_pos_down_world = np.zeros(3, dtype=np.float64)
        self.plane_pos_drag_world = np.zeros(3, dtype=np.float64)

        self.active = False

        self._inv_view = np.eye(4)
        self._normal = np.zeros(3, dtype=np.float64)
        self._delta = np.zeros(3, dtype=np.float64)

    def begin(self, camera: CameraRef) -> None:
        """Snapshot the camera target and build the picking planes."""
        view_matrix = camera.get_view_matrix()
        self.target_world[:] = camera.get_target()
        geometry_utils.transform_point(self.target_world, view_matrix, out=self.target_view)

        self.plane_view.set(self.target_view, Z_AXIS)

        geometry_utils.invert_matrix(view_matrix, out=self._inv_view)
        geometry_utils.transform_vector(Z_AXIS, self._inv_view, out=self._normal)
        self.plane_world.set(self.target_world, self._normal)

        self.active = True

    def update(self, camera: CameraRef, pos_down: Sequence[float], pos_drag: Sequence[float],
               width: float, height: float) -> bool:
        """
        Translate the camera target for the current drag position.

        :param camera: Camera to cast rays with and move
        :param pos_down: Screen position at gesture start (top-left origin)
        :param pos_drag: Current screen position (top-left origin)
        :param width: Viewport width
        :param height: Viewport height
        :return: False when a ray missed the plane and nothing moved
        """
        hit_down = self.plane_view.intersect_ray(
            camera.get_view_ray(pos_down, width, height), out=self.plane_pos_down_view)
        hit_drag = self.plane_view.intersect_ray(
            camera.get_view_ray(pos_drag, width, height), out=self.plane_pos_drag_view)
        if hit_down is None or hit_drag is None:
            logger.debug("Pan ray parallel to picking plane; skipping update")
            return False

        geometry_utils.invert_matrix(camera.get_view_matrix(), out=self._inv_view)
        geometry_utils.transform_point(self.plane_pos_down_view, self._inv_view,
                                       out=self.plane_pos_down_world)
        geometry_utils.transform_point(self.plane_pos_drag_view, self._inv_view,
                                       out=self.plane_pos_drag_world)

        np.subtract(self.plane_pos_drag_world, self.plane_pos_down_world, out=self._delta)
        camera.set_target(self.target_world - self._delta)
        return True

    def end(self) -> None:
        self.active = False
