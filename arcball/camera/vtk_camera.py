"""vtk camera adapter so the controller can drive a vtkCamera directly."""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
import vtk

from arcball.camera.perspective_camera import compute_view_ray
from arcball.core.plane import Ray

logger = logging.getLogger(__name__)


def vtk_matrix_to_numpy(matrix: vtk.vtkMatrix4x4) -> np.ndarray:
    """Copy a vtkMatrix4x4 into a 4x4 numpy array."""
    return np.array([[matrix.GetElement(i, j) for j in range(4)] for i in range(4)],
                    dtype=np.float64)


class VtkCameraAdapter:
    """
    Exposes a vtkCamera through the CameraRef interface.

    The focal point plays the role of the target. When a renderer is given,
    its clipping range is reset after every camera move.
    """

    def __init__(self, camera: vtk.vtkCamera, renderer: vtk.vtkRenderer | None = None) -> None:
        self.camera = camera
        self.renderer = renderer

    def get_distance(self) -> float:
        return self.camera.GetDistance()

    def get_view_matrix(self) -> np.ndarray:
        return vtk_matrix_to_numpy(self.camera.GetViewTransformMatrix())

    def get_target(self) -> np.ndarray:
        return np.array(self.camera.GetFocalPoint(), dtype=np.float64)

    def set_target(self, target: Sequence[float]) -> None:
        self.camera.SetFocalPoint(*(float(v) for v in target))
        self._reset_clipping_range()

    def look_at(self, position: Sequence[float], target: Sequence[float],
                up: Sequence[float]) -> None:
        self.camera.SetPosition(*(float(v) for v in position))
        self.camera.SetFocalPoint(*(float(v) for v in target))
        self.camera.SetViewUp(*(float(v) for v in up))
        self.camera.OrthogonalizeViewUp()
        self._reset_clipping_range()

    def get_view_ray(self, screen_pos: Sequence[float], width: float, height: float) -> Ray:
        """
        View-space ray through a screen position (origin top-left).

        Uses the camera's vertical view angle and the viewport aspect ratio.
        """
        if self.camera.GetUseHorizontalViewAngle():
            logger.debug("Horizontal view angle is not supported; treating it as vertical.")
        fov = math.radians(self.camera.GetViewAngle())
        aspect = width / height if height > 0 else 1.0
        near = self.camera.GetClippingRange()[0]
        return compute_view_ray(screen_pos, width, height, fov, aspect, near)

    def _reset_clipping_range(self) -> None:
        if self.renderer is not None:
            self.renderer.ResetCameraClippingRange()
