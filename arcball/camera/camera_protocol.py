"""Camera interface the arcball controller drives."""
from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from arcball.core.plane import Ray


@runtime_checkable
class CameraRef(Protocol):
    """
    Camera collaborator, not owned by the controller.

    Screen positions passed to ``get_view_ray`` use a top-left origin.
    The view matrix maps world points to view space (camera looks down -Z).
    """

    def get_distance(self) -> float: ...

    def get_view_matrix(self) -> np.ndarray: ...

    def get_target(self) -> np.ndarray: ...

    def set_target(self, target: Sequence[float]) -> None: ...

    def look_at(self, position: Sequence[float], target: Sequence[float],
                up: Sequence[float]) -> None: ...

    def get_view_ray(self, screen_pos: Sequence[float], width: float, height: float) -> Ray: ...
