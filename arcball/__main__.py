"""Headless replay of a scripted orbit / pan / zoom session."""
from __future__ import annotations

import argparse
import logging
import sys

from arcball.app.app_settings_manager import AppSettingsManager
from arcball.app.logging_setup import LogSystem, apply_logging_policy
from arcball.camera.perspective_camera import PerspectiveCamera
from arcball.controller.arcball_controller import ArcballController
from arcball.controller.config import ControllerConfig
from arcball.utils.log_util import level_from_name

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="arcball", description=__doc__)
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--distance", type=float, default=5.0)
    parser.add_argument("--frames", type=int, default=60, help="frames per replay phase")
    parser.add_argument("--log-level", default=None, type=str.upper,
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
                        help="overrides the stored logging level")
    parser.add_argument("--defaults", action="store_true",
                        help="ignore stored settings and use built-in defaults")
    return parser.parse_args(argv)


def run_session(controller: ArcballController, camera: PerspectiveCamera, frames: int) -> None:
    """Rotate, pan, then zoom, calling apply() once per frame."""
    width, height = controller.get_bounds_size()
    cx, cy = width * 0.5, height * 0.5

    phases = [
        ("rotate", False, 0.25 * width, 0.0),
        ("pan", True, 0.0, 0.1 * height),
    ]
    for name, pan, dx, dy in phases:
        controller.on_pointer_down(cx, cy, pan)
        for frame in range(frames):
            f = (frame + 1) / frames
            controller.on_pointer_drag(cx + dx * f, cy + dy * f, pan)
            controller.apply()
        controller.on_pointer_up()
        logger.info("%s done: position=%s target=%s", name, camera.position, camera.target)

    for frame in range(frames):
        if frame < 10:
            controller.on_scroll(1)
        controller.apply()
    logger.info("zoom done: distance=%.4f (target %.4f)",
                controller.get_distance(), controller.get_distance_target())


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logs = LogSystem("arcball", args.log_level)
    try:
        if args.defaults:
            config = ControllerConfig()
        else:
            settings_mgr = AppSettingsManager()
            apply_logging_policy(logs, settings_mgr)
            if args.log_level is not None:
                logs.apply_levels(level_from_name(args.log_level))
            config = settings_mgr.controller_config

        aspect = args.width / args.height if args.height > 0 else 1.0
        camera = PerspectiveCamera(position=(0.0, 0.0, args.distance), aspect=aspect)
        controller = ArcballController(camera, args.width, args.height, config)
        logger.info("Replay start: %sx%s, distance=%s", args.width, args.height, args.distance)
        run_session(controller, camera, args.frames)
    finally:
        logs.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
