"""Ray and plane primitives used for picking."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

# |normal . direction| below this counts as parallel.
PARALLEL_EPSILON = 1e-9


def _zero3() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


def _z_axis() -> np.ndarray:
    return np.array([0.0, 0.0, 1.0])


@dataclass
class Ray:
    """Half-line ``origin + s * direction`` for s >= 0."""
    origin: np.ndarray = field(default_factory=_zero3)
    direction: np.ndarray = field(default_factory=_z_axis)

    def __post_init__(self):
        self.origin = np.asarray(self.origin, dtype=np.float64)
        self.direction = np.asarray(self.direction, dtype=np.float64)


@dataclass
class Plane:
    """
    Plane given by a point on it and its normal.

    The instance is mutable so a controller can keep one per coordinate
    space and refill it in place on every gesture.
    """
    point: np.ndarray = field(default_factory=_zero3)
    normal: np.ndarray = field(default_factory=_z_axis)

    def __post_init__(self):
        self.point = np.array(self.point, dtype=np.float64)
        self.normal = np.array(self.normal, dtype=np.float64)

    def set(self, point, normal) -> None:
        """Overwrite point and normal in place."""
        self.point[:] = point
        self.normal[:] = normal

    def intersect_ray(self, ray: Ray, out: np.ndarray | None = None) -> np.ndarray | None:
        """
        Intersect a ray with the plane.

        :param ray: Ray to intersect
        :param out: Optional destination array for the hit point
        :return: Hit point, or None when the ray is parallel to the plane
        """
        denom = float(np.dot(self.normal, ray.direction))
        if abs(denom) < PARALLEL_EPSILON:
            return None

        s = float(np.dot(self.normal, self.point - ray.origin)) / denom
        if out is None:
            out = np.empty(3, dtype=np.float64)
        np.multiply(ray.direction, s, out=out)
        out += ray.origin
        return out
