"""Geometry utility functions for vector and matrix operations."""
from __future__ import annotations

import numpy as np

EPSILON = 1e-12


def as_vec3(value) -> np.ndarray:
    """
    Convert a sequence to a float64 3-vector (always a copy).

    :param value: Sequence of three numbers
    :return: New (3,) array
    """
    arr = np.array(value, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {arr.shape}")
    return arr


def calculate_norm(vector: np.ndarray) -> float:
    """Calculate the Euclidean norm of a vector."""
    return float(np.sqrt(np.dot(vector, vector)))


def calculate_distance(start_point: np.ndarray, end_point: np.ndarray) -> float:
    """
    Calculate the distance between two points.

    :param start_point: Starting point (x, y, z)
    :param end_point: Ending point (x, y, z)
    :return: Distance between the two points
    """
    return calculate_norm(np.subtract(end_point, start_point))


def normalize_vector(vector: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Normalize a vector.

    A zero-length vector normalizes to the zero vector instead of NaN.

    :param vector: Vector of any length
    :param out: Optional destination array
    :return: Normalized vector
    """
    if out is None:
        out = np.empty_like(vector, dtype=np.float64)
    norm = calculate_norm(vector)
    if norm < EPSILON:
        out[...] = 0.0
        return out
    np.divide(vector, norm, out=out)
    return out


def dot_product(vector1: np.ndarray, vector2: np.ndarray) -> float:
    """Calculate the dot product of two vectors."""
    return float(np.dot(vector1, vector2))


def cross_product(vector1: np.ndarray, vector2: np.ndarray,
                  out: np.ndarray | None = None) -> np.ndarray:
    """
    Calculate the cross product of two 3D vectors.

    :param vector1: First vector (x, y, z)
    :param vector2: Second vector (x, y, z)
    :param out: Optional destination array
    :return: Cross product vector (x, y, z)
    """
    if out is None:
        out = np.empty(3, dtype=np.float64)
    x = vector1[1] * vector2[2] - vector1[2] * vector2[1]
    y = vector1[2] * vector2[0] - vector1[0] * vector2[2]
    z = vector1[0] * vector2[1] - vector1[1] * vector2[0]
    out[0], out[1], out[2] = x, y, z
    return out


def transform_point(point: np.ndarray, matrix: np.ndarray,
                    out: np.ndarray | None = None) -> np.ndarray:
    """
    Transform a 3D point by a 4x4 matrix (w = 1, with perspective divide).

    :param point: Point (x, y, z)
    :param matrix: 4x4 matrix, column-vector convention
    :param out: Optional destination array
    :return: Transformed point (x, y, z)
    """
    if out is None:
        out = np.empty(3, dtype=np.float64)
    x, y, z = point[0], point[1], point[2]
    w = matrix[3, 0] * x + matrix[3, 1] * y + matrix[3, 2] * z + matrix[3, 3]
    if abs(w) < EPSILON:
        w = 1.0
    rx = matrix[0, 0] * x + matrix[0, 1] * y + matrix[0, 2] * z + matrix[0, 3]
    ry = matrix[1, 0] * x + matrix[1, 1] * y + matrix[1, 2] * z + matrix[1, 3]
    rz = matrix[2, 0] * x + matrix[2, 1] * y + matrix[2, 2] * z + matrix[2, 3]
    out[0], out[1], out[2] = rx / w, ry / w, rz / w
    return out


def transform_vector(vector: np.ndarray, matrix: np.ndarray,
                     out: np.ndarray | None = None) -> np.ndarray:
    """
    Transform a 3D direction by the upper 3x3 block of a 4x4 matrix.

    :param vector: Vector (x, y, z)
    :param matrix: 4x4 (or 3x3) transformation matrix
    :param out: Optional destination array
    :return: Transformed vector (x, y, z)
    """
    if out is None:
        out = np.empty(3, dtype=np.float64)
    np.dot(matrix[:3, :3], vector, out=out)
    return out


def look_at_matrix(position: np.ndarray, target: np.ndarray, up: np.ndarray,
                   out: np.ndarray | None = None) -> np.ndarray:
    """
    Build a right-handed world-to-view matrix.

    The camera sits at ``position`` and looks down its local -Z axis towards
    ``target``. Degenerate inputs (position == target, up parallel to the
    view direction) fall back to a valid orthonormal basis.

    :param position: Eye position
    :param target: Point looked at
    :param up: Approximate up direction
    :param out: Optional destination 4x4 array
    :return: 4x4 view matrix
    """
    if out is None:
        out = np.empty((4, 4), dtype=np.float64)

    back = normalize_vector(np.subtract(position, target))
    if not back.any():
        back = np.array([0.0, 0.0, 1.0])

    right = normalize_vector(cross_product(up, back))
    if not right.any():
        # up is parallel to the view direction; pick any perpendicular axis
        fallback = np.array([0.0, 0.0, 1.0]) if abs(back[1]) > 0.9 else np.array([0.0, 1.0, 0.0])
        right = normalize_vector(cross_product(fallback, back))
    true_up = cross_product(back, right)

    out[0, :3] = right
    out[1, :3] = true_up
    out[2, :3] = back
    out[0, 3] = -np.dot(right, position)
    out[1, 3] = -np.dot(true_up, position)
    out[2, 3] = -np.dot(back, position)
    out[3, :] = (0.0, 0.0, 0.0, 1.0)
    return out


def invert_matrix(matrix: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """Invert a 4x4 matrix."""
    if out is None:
        out = np.empty((4, 4), dtype=np.float64)
    out[...] = np.linalg.inv(matrix)
    return out
