from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
import math
from typing import Any, Dict
from PySide6.QtCore import QSettings
import logging

from arcball.controller.config import ControllerConfig, DEFAULT_SPEED
from arcball.controller.distance_engine import (
    DEFAULT_DISTANCE_MAX,
    DEFAULT_DISTANCE_MIN,
    DEFAULT_DISTANCE_STEP,
)
from arcball.controller.sphere_mapper import DEFAULT_RADIUS_SCALE
from arcball.utils.log_util import level_from_name

logger = logging.getLogger(__name__)


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value
    def __repr__(self):
        return self.value


# ----------------------
# Defaults
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "controller": {
        "speed": DEFAULT_SPEED,
        "radius_scale": DEFAULT_RADIUS_SCALE,
        "distance_step": DEFAULT_DISTANCE_STEP,
        "distance_min": DEFAULT_DISTANCE_MIN,
        "distance_max": DEFAULT_DISTANCE_MAX,
    },
}

SECTIONS = ("general", "controller")

# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"

@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    controller: ControllerConfig = field(default_factory=ControllerConfig)

# ----------------------
# Validation
# ----------------------
def _to_float(v: Any) -> float | None:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    mode = str(v).strip().lower()
    try:
        return RunMode(mode)
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])

def _validate_logging_level(v: Any) -> str:
    level = level_from_name(v, default=-1)
    name = logging.getLevelName(level) if level >= 0 else ""
    return name if name in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

def _validate_speed(v: Any) -> float:
    f = _to_float(v)
    return f if (f is not None and 0 < f <= 1) else DEFAULT_SPEED

def _validate_radius_scale(v: Any) -> float:
    f = _to_float(v)
    return f if (f is not None and f > 0) else DEFAULT_RADIUS_SCALE

def _validate_distance_step(v: Any) -> float:
    f = _to_float(v)
    return f if (f is not None and f > 0) else DEFAULT_DISTANCE_STEP

def _validate_distance_range(lo: Any, hi: Any) -> tuple[float, float]:
    """Both limits fall back to the defaults unless lo <= hi."""
    f_lo = _to_float(lo)
    f_hi = _to_float(hi)
    if f_lo is None:
        f_lo = DEFAULT_DISTANCE_MIN
    if f_hi is None:
        f_hi = DEFAULT_DISTANCE_MAX
    if f_lo > f_hi:
        logger.warning("distance_min %s > distance_max %s; using defaults", f_lo, f_hi)
        return DEFAULT_DISTANCE_MIN, DEFAULT_DISTANCE_MAX
    return f_lo, f_hi


# ---------------------
# AppSettingsManager
# ---------------------
class AppSettingsManager:
    """
    General and controller settings backed by QSettings.

    Values start from DEFAULTS and are overridden by QSettings. Every value
    is validated on load; out-of-range values fall back to the default.
    set_* writes through to QSettings immediately.
    """
    def __init__(self, org_domain: str = "Arcball.org", app_name: str = "Arcball",
                 settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # read
    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    @property
    def controller_config(self) -> ControllerConfig:
        """Copy of the controller parameters, ready for ArcballController."""
        return ControllerConfig(**asdict(self._data.controller))

    @property
    def speed(self) -> float:
        return self._data.controller.speed

    @property
    def radius_scale(self) -> float:
        return self._data.controller.radius_scale

    @property
    def distance_step(self) -> float:
        return self._data.controller.distance_step

    @property
    def distance_min(self) -> float:
        return self._data.controller.distance_min

    @property
    def distance_max(self) -> float:
        return self._data.controller.distance_max

    # write
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_speed(self, v: float) -> None:
        speed = _validate_speed(v)
        self._settings.setValue("controller/speed", speed)
        self._data.controller.speed = speed

    def set_radius_scale(self, v: float) -> None:
        scale = _validate_radius_scale(v)
        self._settings.setValue("controller/radius_scale", scale)
        self._data.controller.radius_scale = scale

    def set_distance_step(self, v: float) -> None:
        step = _validate_distance_step(v)
        self._settings.setValue("controller/distance_step", step)
        self._data.controller.distance_step = step

    def set_distance_range(self, lo: float, hi: float) -> None:
        lo, hi = _validate_distance_range(lo, hi)
        self._settings.setValue("controller/distance_min", lo)
        self._settings.setValue("controller/distance_max", hi)
        self._data.controller.distance_min = lo
        self._data.controller.distance_max = hi

    # Reset
    def reset_all_to_default(self) -> None:
        for section in SECTIONS:
            self._settings.remove(section)
        self._data = self._load_effective()

    def reset_section(self, section: str) -> None:
        """Restore a single section to its defaults."""
        if section not in SECTIONS:
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "controller": asdict(self._data.controller),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- internals ---------------
    def _load_effective(self) -> AppSettingsData:
        """DEFAULTS overridden by QSettings, validated and modelled."""
        merged = self._apply_qsettings_overrides(DEFAULTS)
        return self._make_model_from(merged)

    def _apply_qsettings_overrides(self, base: dict[str, Any]) -> dict[str, Any]:
        """
        Read the dict based settings and apply QSettings overrides.
        :param base:
        :return: merged dict
        """
        g = dict(base.get("general", {}))
        for key in ("run_mode", "logging_level"):
            v = self._settings.value(f"general/{key}", None)
            if v is not None:
                g[key] = v

        c = dict(base.get("controller", {}))
        for key in c:
            v = self._settings.value(f"controller/{key}", None)
            if v is not None:
                c[key] = v

        return {"general": g, "controller": c}

    def _make_model_from(self, merged: dict[str, Any]) -> AppSettingsData:
        g = merged.get("general", {})
        c = merged.get("controller", {})
        distance_min, distance_max = _validate_distance_range(
            c.get("distance_min", DEFAULT_DISTANCE_MIN),
            c.get("distance_max", DEFAULT_DISTANCE_MAX),
        )
        return AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g.get("run_mode", DEFAULTS["general"]["run_mode"])),
                logging_level=_validate_logging_level(g.get("logging_level", DEFAULTS["general"]["logging_level"])),
            ),
            controller=ControllerConfig(
                speed=_validate_speed(c.get("speed", DEFAULT_SPEED)),
                radius_scale=_validate_radius_scale(c.get("radius_scale", DEFAULT_RADIUS_SCALE)),
                distance_step=_validate_distance_step(c.get("distance_step", DEFAULT_DISTANCE_STEP)),
                distance_min=distance_min,
                distance_max=distance_max,
            ),
        )
