"""Quaternion state for arcball rotation."""
from __future__ import annotations

import logging

import numpy as np

from arcball.core import geometry_utils
from arcball.core import quaternion_utils as qu

logger = logging.getLogger(__name__)


class OrientationEngine:
    """
    Tracks the orientation quaternions of an arcball gesture.

    Responsible for:
    - ``current``: eased orientation pushed to the camera every frame.
    - ``down``: snapshot of ``current`` at drag start.
    - ``drag``: rotation between the sphere points of the current drag.
    - ``target``: goal orientation, ``drag * down``.

    All orientations are world-to-view rotations (wxyz). ``target`` and
    ``current`` are renormalized after every composition or interpolation.
    """

    def __init__(self, initial: np.ndarray) -> None:
        self.current = qu.quat_normalize(np.asarray(initial, dtype=np.float64))
        self.down = qu.quat_identity()
        self.drag = qu.quat_identity()
        self.target = self.current.copy()

        self.pos_down_ptr = np.array([0.0, 0.0, 1.0])
        self.pos_drag_ptr = np.array([0.0, 0.0, 1.0])

        self.matrix = qu.quat_to_rotation_matrix(self.current)
        self._axis = np.zeros(3, dtype=np.float64)
        self._inverse = qu.quat_identity()

    def begin_drag(self, down_ptr: np.ndarray) -> None:
        """Start a rotation gesture from a point on the sphere."""
        self.pos_down_ptr[:] = down_ptr
        self.down[:] = self.current
        qu.quat_identity(out=self.drag)

    def update_drag(self, drag_ptr: np.ndarray) -> None:
        """
        Rotate the target by the arc from the drag-start point to ``drag_ptr``.

        The drag quaternion is (dot, cross) of the two sphere points, which
        rotates by twice the angle between them.
        """
        self.pos_drag_ptr[:] = drag_ptr
        geometry_utils.cross_product(self.pos_down_ptr, self.pos_drag_ptr, out=self._axis)
        self.drag[0] = geometry_utils.dot_product(self.pos_down_ptr, self.pos_drag_ptr)
        self.drag[1:] = self._axis

        qu.quat_multiply(self.drag, self.down, out=self.target)
        qu.quat_normalize(self.target, out=self.target)

    def set_target(self, orientation: np.ndarray) -> None:
        self.target[:] = orientation
        qu.quat_normalize(self.target, out=self.target)

    def step(self, speed: float) -> np.ndarray:
        """
        Ease ``current`` towards ``target`` along the longest arc.

        :param speed: Interpolation factor for this call
        :return: The updated current orientation
        """
        qu.slerp_longest(self.current, self.target, speed, out=self.current)
        qu.quat_normalize(self.current, out=self.current)
        qu.quat_to_rotation_matrix(self.current, out=self.matrix)
        return self.current

    def inverse(self) -> np.ndarray:
        """View-to-world rotation of the current orientation (shared buffer)."""
        return qu.quat_invert_unit(self.current, out=self._inverse)
