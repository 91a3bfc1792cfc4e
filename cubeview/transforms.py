"""4x4 transformation matrices for the camera and the spinning cube.

Matrices are in mathematical (row, column) order, acting on column
vectors: ``p' = M @ p``. Transpose them when uploading column-major.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

ROTATION_SPEED_DEGREES = 50.0
ROTATION_AXIS = (0.5, 1.0, 0.0)
CAMERA_OFFSET = (0.0, 0.0, -3.0)
FIELD_OF_VIEW_DEGREES = 45.0
NEAR_PLANE = 0.1
FAR_PLANE = 1000.0


def _as_matrix(matrix) -> np.ndarray:
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {m.shape}")
    return m


def _as_vec3(vector: Sequence[float]) -> np.ndarray:
    v = np.asarray(vector, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {v.shape}")
    return v


def identity() -> np.ndarray:
    """The 4x4 identity matrix."""
    return np.identity(4, dtype=np.float32)


def rotate(matrix, angle: float, axis: Sequence[float]) -> np.ndarray:
    """Post-multiply ``matrix`` by a rotation of ``angle`` radians about ``axis``."""
    m = _as_matrix(matrix)
    a = _as_vec3(axis)
    norm = float(np.linalg.norm(a))
    if norm == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    x, y, z = a / norm
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    rotation = np.array(
        [
            [t * x * x + c, t * x * y - s * z, t * x * z + s * y, 0.0],
            [t * x * y + s * z, t * y * y + c, t * y * z - s * x, 0.0],
            [t * x * z - s * y, t * y * z + s * x, t * z * z + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return (m @ rotation).astype(np.float32)


def translate(matrix, offset: Sequence[float]) -> np.ndarray:
    """Post-multiply ``matrix`` by a translation by ``offset``."""
    m = _as_matrix(matrix)
    translation = np.identity(4)
    translation[:3, 3] = _as_vec3(offset)
    return (m @ translation).astype(np.float32)


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection onto a [-1, 1] depth range."""
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    if tan_half == 0:
        raise ValueError("field of view must not be zero")
    result = np.zeros((4, 4))
    result[0, 0] = 1.0 / (aspect * tan_half)
    result[1, 1] = 1.0 / tan_half
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result.astype(np.float32)


def model_matrix(seconds: float) -> np.ndarray:
    """Rotation of the cube after ``seconds`` of running time."""
    angle = seconds * math.radians(ROTATION_SPEED_DEGREES)
    return rotate(identity(), angle, ROTATION_AXIS)


def view_matrix() -> np.ndarray:
    """Camera transform: the scene pushed back along the negative z axis."""
    return translate(identity(), CAMERA_OFFSET)


def projection_matrix(width: float, height: float) -> np.ndarray:
    """Perspective projection for a viewport of ``width`` x ``height``."""
    if height == 0:
        raise ValueError("viewport height must not be zero")
    return perspective(
        math.radians(FIELD_OF_VIEW_DEGREES),
        float(width) / float(height),
        NEAR_PLANE,
        FAR_PLANE,
    )