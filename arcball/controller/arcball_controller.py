"""Arcball controller - turns pointer and scroll input into camera motion."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from arcball.camera.camera_protocol import CameraRef
from arcball.controller.config import ControllerConfig
from arcball.controller.distance_engine import DistanceEngine
from arcball.controller.gesture import GestureState
from arcball.controller.orientation_engine import OrientationEngine
from arcball.controller.panning_engine import PanningEngine
from arcball.controller.sphere_mapper import SphereMapper
from arcball.core import geometry_utils
from arcball.core import quaternion_utils as qu
from arcball.utils.log_util import log_io

logger = logging.getLogger(__name__)

Y_AXIS = np.array([0.0, 1.0, 0.0])


class ArcballController:
    """
    Orbit, pan and zoom controller for a look-at camera.

    Input methods (``on_pointer_down``, ``on_pointer_drag``, ``on_scroll``)
    only move targets; ``apply()`` must be called once per rendered frame to
    ease the camera towards them. Easing is per call, not per second.

    Usage:
        controller = ArcballController(camera, 800, 600)
        controller.on_pointer_down(400, 300)
        controller.on_pointer_drag(450, 300)
        controller.on_pointer_up()
        controller.apply()

    Not thread-safe; call everything from the render/UI thread.
    """

    def __init__(self, camera: CameraRef, width: float, height: float,
                 config: ControllerConfig | None = None) -> None:
        config = config or ControllerConfig()
        self._camera = camera

        self._mapper = SphereMapper(width, height)
        self.set_radius_scale(config.radius_scale)
        self._speed = 0.0
        self.set_speed(config.speed)

        self._distance = DistanceEngine(camera.get_distance(), step=config.distance_step)
        self.set_distance_min(config.distance_min)
        self.set_distance_max(config.distance_max)

        self._pos_down = np.zeros(2, dtype=np.float64)
        self._pos_drag = np.zeros(2, dtype=np.float64)

        self._orientation = OrientationEngine(qu.rotation_matrix_to_quat(camera.get_view_matrix()))
        self._panning = PanningEngine()
        self._target_world_original = np.array(camera.get_target(), dtype=np.float64)

        self._gesture = GestureState.IDLE
        self._pan = False
        self._interactive = True

        # per-instance scratch buffers reused every call
        self._pos_flipped = np.zeros(2, dtype=np.float64)
        self._sphere_ptr = np.zeros(3, dtype=np.float64)
        self._local_offset = np.zeros(3, dtype=np.float64)
        self._offset = np.zeros(3, dtype=np.float64)
        self._position = np.zeros(3, dtype=np.float64)
        self._up = np.zeros(3, dtype=np.float64)

        logger.debug("Arcball controller created: bounds=%sx%s, distance=%s",
                     width, height, self._distance.distance)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @log_io()
    def set_look_direction(self, direction: Sequence[float]) -> None:
        """Ease the camera to look along ``direction`` (world space)."""
        direction = geometry_utils.normalize_vector(np.asarray(direction, dtype=np.float64))
        if not direction.any():
            logger.warning("Look direction has zero length. Ignoring set_look_direction().")
            return
        self._orientation.set_target(qu.quat_from_view_direction(direction))

    def get_bounds_size(self) -> tuple[float, float]:
        return self._mapper.bounds_size

    def get_radius(self) -> float:
        return self._mapper.radius

    def set_distance_min(self, minimum: float) -> None:
        if minimum > self._distance.maximum:
            raise ValueError(f"distance_min {minimum} exceeds distance_max {self._distance.maximum}")
        self._distance.minimum = minimum

    def set_distance_max(self, maximum: float) -> None:
        if maximum < self._distance.minimum:
            raise ValueError(f"distance_max {maximum} is below distance_min {self._distance.minimum}")
        self._distance.maximum = maximum

    def get_distance_min(self) -> float:
        return self._distance.minimum

    def get_distance_max(self) -> float:
        return self._distance.maximum

    def set_distance(self, distance: float) -> None:
        """Set the distance to ease towards (not clamped)."""
        self._distance.target = float(distance)

    def get_distance(self) -> float:
        """Current eased distance."""
        return self._distance.distance

    def get_distance_target(self) -> float:
        return self._distance.target

    def set_distance_step(self, step: float) -> None:
        self._distance.distance_step = step

    def get_distance_step(self) -> float:
        return self._distance.distance_step

    def set_radius_scale(self, scale: float) -> None:
        if scale <= 0:
            raise ValueError(f"Radius scale must be > 0, got {scale}.")
        self._mapper.set_radius_scale(scale)

    def get_radius_scale(self) -> float:
        return self._mapper.radius_scale

    def set_speed(self, speed: float) -> None:
        if not 0.0 < speed <= 1.0:
            raise ValueError(f"Speed must be in (0, 1], got {speed}.")
        self._speed = speed

    def get_speed(self) -> float:
        return self._speed

    def enable(self) -> None:
        self._interactive = True

    def disable(self) -> None:
        self._interactive = False

    def is_enabled(self) -> bool:
        return self._interactive

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def gesture_state(self) -> GestureState:
        return self._gesture

    @property
    def orientation(self) -> np.ndarray:
        """Current eased world-to-view orientation (wxyz copy)."""
        return self._orientation.current.copy()

    @property
    def orientation_target(self) -> np.ndarray:
        """Orientation being eased towards (wxyz copy)."""
        return self._orientation.target.copy()

    def map_to_sphere(self, pos: Sequence[float]) -> np.ndarray:
        """Project a bottom-left-origin screen position onto the arcball sphere."""
        return self._mapper.map_to_sphere(pos, self._distance.distance)

    def is_panning(self) -> bool:
        return self._pan

    def is_zooming(self) -> bool:
        """
        Zoom flag from the last apply().

        True when the distance did NOT change in that call.
        """
        return self._distance.zoom

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------
    def on_pointer_down(self, x: float, y: float, pan: bool = False) -> None:
        """
        Start a rotate or pan gesture.

        :param x: Pointer x in pixels, origin top-left
        :param y: Pointer y in pixels, origin top-left
        :param pan: True while the pan modifier is held
        """
        if not self._interactive:
            logger.debug("Pointer down ignored: controller disabled")
            return

        self._pan = pan
        self._pos_down[:] = (x, y)

        ptr = self._map_screen(x, y)
        self._orientation.begin_drag(ptr)

        if pan:
            self._panning.begin(self._camera)
            self._gesture = GestureState.PANNING
        else:
            self._panning.end()
            self._gesture = GestureState.ROTATING

    def on_pointer_drag(self, x: float, y: float, pan: bool = False) -> None:
        """
        Continue the current gesture.

        The pan modifier is re-read on every call, so a gesture may switch
        between rotating and panning midway.
        """
        if not self._interactive:
            logger.debug("Pointer drag ignored: controller disabled")
            return
        if self._gesture is GestureState.IDLE:
            logger.debug("Pointer drag ignored: no gesture in progress")
            return

        self._pos_drag[:] = (x, y)
        self._pan = pan

        if pan:
            if not self._panning.active:
                self._panning.begin(self._camera)
            self._gesture = GestureState.PANNING
            width, height = self._mapper.bounds_size
            self._panning.update(self._camera, self._pos_down, self._pos_drag, width, height)
        else:
            self._gesture = GestureState.ROTATING
            ptr = self._map_screen(x, y)
            self._orientation.update_drag(ptr)

    def on_pointer_up(self) -> None:
        """End the current gesture. Always honoured, even while disabled."""
        if self._gesture is GestureState.IDLE:
            return
        logger.debug("Gesture ended: %s", self._gesture)
        self._gesture = GestureState.IDLE
        self._panning.end()

    def on_scroll(self, delta_y: float) -> None:
        """Step the distance target; positive ``delta_y`` moves closer."""
        if not self._interactive:
            logger.debug("Scroll ignored: controller disabled")
            return
        self._distance.scroll(delta_y)

    def on_resize(self, width: float, height: float) -> None:
        """Update the viewport size. Applied even while disabled."""
        self._mapper.set_bounds(width, height)
        if self._mapper.radius <= 0:
            logger.warning("Degenerate viewport %sx%s; arcball radius is %s",
                           width, height, self._mapper.radius)

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------
    def apply(self) -> None:
        """Ease distance and orientation one step and update the camera."""
        distance = self._distance.step(self._speed)
        self._orientation.step(self._speed)
        inverse = self._orientation.inverse()

        target = self._camera.get_target()
        self._local_offset[2] = distance
        qu.quat_rotate_vector(inverse, self._local_offset, out=self._offset)
        np.add(target, self._offset, out=self._position)
        qu.quat_rotate_vector(inverse, Y_AXIS, out=self._up)

        self._camera.look_at(self._position, target, self._up)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("apply: distance=%.6f position=%s", distance, self._position)

    @log_io()
    def reset_panning(self) -> None:
        """Restore the camera target captured at construction."""
        self._camera.set_target(self._target_world_original.copy())
        self._pan = False

    def _map_screen(self, x: float, y: float) -> np.ndarray:
        """Flip y to a bottom-left origin and project onto the sphere."""
        height = self._mapper.bounds_size[1]
        self._pos_flipped[:] = (x, height - y)
        return self._mapper.map_to_sphere(self._pos_flipped, self._distance.distance,
                                          out=self._sphere_ptr)
