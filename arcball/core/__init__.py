"""Core components layer - view-independent math primitives."""

from arcball.core.geometry_utils import (
    calculate_distance,
    calculate_norm,
    cross_product,
    dot_product,
    look_at_matrix,
    normalize_vector,
    transform_point,
    transform_vector,
)
from arcball.core.plane import Plane, Ray
from arcball.core.quaternion_utils import (
    quat_identity,
    quat_multiply,
    quat_normalize,
    quat_rotate_vector,
    slerp_longest,
)

__all__ = [
    "calculate_distance",
    "calculate_norm",
    "cross_product",
    "dot_product",
    "look_at_matrix",
    "normalize_vector",
    "transform_point",
    "transform_vector",
    "Plane",
    "Ray",
    "quat_identity",
    "quat_multiply",
    "quat_normalize",
    "quat_rotate_vector",
    "slerp_longest",
]
