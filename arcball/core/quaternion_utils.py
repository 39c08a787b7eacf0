"""
Quaternion utilities for camera orientation.

All quaternions use wxyz format (w, x, y, z).
w is the scalar component, (x, y, z) is the vector component.
"""
from __future__ import annotations

import math

import numpy as np

from arcball.core.geometry_utils import look_at_matrix

# Below this angular gap slerp degenerates to a linear blend.
SLERP_LINEAR_THRESHOLD = 1e-6
_EPSILON = 1e-12


def quat_identity(out: np.ndarray | None = None) -> np.ndarray:
    """Return the identity quaternion."""
    if out is None:
        out = np.empty(4, dtype=np.float64)
    out[:] = (1.0, 0.0, 0.0, 0.0)
    return out


def quat_multiply(q1: np.ndarray, q2: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Multiply two quaternions (Hamilton product).

    Parameters
    ----------
    q1 : np.ndarray
        First quaternion (wxyz format)
    q2 : np.ndarray
        Second quaternion (wxyz format)
    out : np.ndarray, optional
        Destination array, may alias ``q1`` or ``q2``

    Returns
    -------
    np.ndarray
        Product quaternion q1 * q2 (wxyz format)
    """
    if out is None:
        out = np.empty(4, dtype=np.float64)
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    out[0] = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    out[1] = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    out[2] = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    out[3] = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2
    return out


def quat_normalize(q: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Normalize quaternion to unit length.

    A zero-norm quaternion has no direction to preserve and is returned
    unchanged (copied into ``out``).

    Parameters
    ----------
    q : np.ndarray
        Quaternion (wxyz format)
    out : np.ndarray, optional
        Destination array, may alias ``q``

    Returns
    -------
    np.ndarray
        Normalized quaternion (wxyz format)
    """
    if out is None:
        out = np.empty(4, dtype=np.float64)
    norm = math.sqrt(q[0] * q[0] + q[1] * q[1] + q[2] * q[2] + q[3] * q[3])
    if norm < _EPSILON:
        out[:] = q
        return out
    np.divide(q, norm, out=out)
    return out


def quat_invert_unit(q: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Inverse of a unit quaternion by negating the scalar component.

    (-w, x, y, z) is the negated conjugate and encodes the same rotation as
    the true inverse.
    """
    if out is None:
        out = np.empty(4, dtype=np.float64)
    out[:] = q
    out[0] = -out[0]
    return out


def quat_rotate_vector(q: np.ndarray, v: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Rotate a 3-vector by a unit quaternion.

    Parameters
    ----------
    q : np.ndarray
        Rotation quaternion (wxyz format)
    v : np.ndarray
        Vector (3,)
    out : np.ndarray, optional
        Destination array, may alias ``v``

    Returns
    -------
    np.ndarray
        Rotated vector (3,)
    """
    if out is None:
        out = np.empty(3, dtype=np.float64)
    w, qx, qy, qz = q
    x, y, z = v[0], v[1], v[2]

    # t = 2 * cross(q.xyz, v)
    tx = 2.0 * (qy * z - qz * y)
    ty = 2.0 * (qz * x - qx * z)
    tz = 2.0 * (qx * y - qy * x)

    # v' = v + w * t + cross(q.xyz, t)
    out[0] = x + w * tx + (qy * tz - qz * ty)
    out[1] = y + w * ty + (qz * tx - qx * tz)
    out[2] = z + w * tz + (qx * ty - qy * tx)
    return out


def quat_to_rotation_matrix(q: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Convert quaternion to 3x3 rotation matrix.

    Parameters
    ----------
    q : np.ndarray
        Quaternion (wxyz format)
    out : np.ndarray, optional
        Destination 3x3 array

    Returns
    -------
    np.ndarray
        3x3 rotation matrix
    """
    if out is None:
        out = np.empty((3, 3), dtype=np.float64)
    w, x, y, z = q[0], q[1], q[2], q[3]
    norm = math.sqrt(w * w + x * x + y * y + z * z)
    if norm >= _EPSILON:
        w, x, y, z = w / norm, x / norm, y / norm, z / norm

    xx = x * x
    yy = y * y
    zz = z * z
    xy = x * y
    xz = x * z
    yz = y * z
    wx = w * x
    wy = w * y
    wz = w * z

    out[0, 0] = 1.0 - 2.0 * (yy + zz)
    out[0, 1] = 2.0 * (xy - wz)
    out[0, 2] = 2.0 * (xz + wy)
    out[1, 0] = 2.0 * (xy + wz)
    out[1, 1] = 1.0 - 2.0 * (xx + zz)
    out[1, 2] = 2.0 * (yz - wx)
    out[2, 0] = 2.0 * (xz - wy)
    out[2, 1] = 2.0 * (yz + wx)
    out[2, 2] = 1.0 - 2.0 * (xx + yy)
    return out


def rotation_matrix_to_quat(R: np.ndarray) -> np.ndarray:
    """
    Convert the rotation block of a 3x3 or 4x4 matrix to a quaternion.

    Uses Shepperd's method for numerical stability.

    Parameters
    ----------
    R : np.ndarray
        3x3 rotation matrix, or 4x4 matrix whose upper-left block is one

    Returns
    -------
    np.ndarray
        Quaternion (wxyz format)
    """
    trace = R[0, 0] + R[1, 1] + R[2, 2]

    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (R[2, 1] - R[1, 2]) * s
        y = (R[0, 2] - R[2, 0]) * s
        z = (R[1, 0] - R[0, 1]) * s
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * math.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        w = (R[2, 1] - R[1, 2]) / s
        x = 0.25 * s
        y = (R[0, 1] + R[1, 0]) / s
        z = (R[0, 2] + R[2, 0]) / s
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * math.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        w = (R[0, 2] - R[2, 0]) / s
        x = (R[0, 1] + R[1, 0]) / s
        y = 0.25 * s
        z = (R[1, 2] + R[2, 1]) / s
    else:
        s = 2.0 * math.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        w = (R[1, 0] - R[0, 1]) / s
        x = (R[0, 2] + R[2, 0]) / s
        y = (R[1, 2] + R[2, 1]) / s
        z = 0.25 * s

    return quat_normalize(np.array([w, x, y, z], dtype=np.float64))


def quat_from_view_direction(direction: np.ndarray) -> np.ndarray:
    """
    View orientation of a camera looking along ``direction`` with +Y up.

    This is the world-to-view rotation, i.e. the inverse of the rotation that
    turns the camera's -Z axis onto ``direction``.
    """
    view = look_at_matrix(np.zeros(3), np.asarray(direction, dtype=np.float64),
                          np.array([0.0, 1.0, 0.0]))
    return rotation_matrix_to_quat(view)


def slerp_longest(a: np.ndarray, b: np.ndarray, t: float,
                  out: np.ndarray | None = None) -> np.ndarray:
    """
    Spherical interpolation that never flips to the shorter arc.

    Unlike the usual slerp, ``b`` is not negated when ``dot(a, b) < 0``, so
    the interpolation can travel the long way round. When ``a`` and ``b`` are
    (nearly) identical the coefficients fall back to a linear blend.

    Parameters
    ----------
    a : np.ndarray
        Start quaternion (wxyz format)
    b : np.ndarray
        End quaternion (wxyz format)
    t : float
        Interpolation factor in [0, 1]
    out : np.ndarray, optional
        Destination array, may alias ``a``

    Returns
    -------
    np.ndarray
        ``scale0 * a + scale1 * b`` (not renormalized)
    """
    if out is None:
        out = np.empty(4, dtype=np.float64)
    ax, ay, az, aw = a[1], a[2], a[3], a[0]
    bx, by, bz, bw = b[1], b[2], b[3], b[0]

    cosom = ax * bx + ay * by + az * bz + aw * bw

    scale0 = 1.0 - t
    scale1 = t
    if (1.0 - cosom) > SLERP_LINEAR_THRESHOLD:
        omega = math.acos(max(-1.0, min(1.0, cosom)))
        sinom = math.sin(omega)
        if abs(sinom) > _EPSILON:
            scale0 = math.sin((1.0 - t) * omega) / sinom
            scale1 = math.sin(t * omega) / sinom

    out[0] = scale0 * aw + scale1 * bw
    out[1] = scale0 * ax + scale1 * bx
    out[2] = scale0 * ay + scale1 * by
    out[3] = scale0 * az + scale1 * bz
    return out
