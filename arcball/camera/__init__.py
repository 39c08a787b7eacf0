"""Camera collaborators driven by the arcball controller."""

from arcball.camera.camera_protocol import CameraRef
from arcball.camera.perspective_camera import PerspectiveCamera, compute_view_ray

__all__ = [
    "CameraRef",
    "PerspectiveCamera",
    "compute_view_ray",
]
