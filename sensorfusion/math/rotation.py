"""
Rotation matrix utilities for orientation estimation.

Matrices are flattened row-major numpy arrays, so a 3x3 rotation matrix is
an array of 9 floats. Orientation vectors are ``[azimuth, pitch, roll]`` in
radians.
"""

import math
import numpy as np

from ..errors import DimensionMismatch


def _dimension(matrix: np.ndarray) -> int:
    """Side length of a flattened square matrix."""
    dimension = int(round(math.sqrt(matrix.size)))
    if dimension * dimension != matrix.size:
        raise DimensionMismatch(
            f"matrix of {matrix.size} elements is not square")
    return dimension


def identity(n: int = 3) -> np.ndarray:
    """
    Create an n x n identity matrix flattened row-major.

    Args:
        n: Matrix dimension

    Returns:
        np.ndarray: Identity matrix of n*n elements
    """
    return np.eye(n, dtype=np.float64).ravel()


def multiply(a, b) -> np.ndarray:
    """
    Multiply two flattened square matrices.

    Args:
        a: Left operand (n*n elements)
        b: Right operand (n*n elements)

    Returns:
        np.ndarray: Flattened product a * b

    Raises:
        DimensionMismatch: If the operands differ in size or are not square
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    if a.size != b.size:
        raise DimensionMismatch(
            f"cannot multiply matrices of {a.size} and {b.size} elements")

    n = _dimension(a)
    return (a.reshape(n, n) @ b.reshape(n, n)).ravel()


def from_orientation(orientation) -> np.ndarray:
    """
    Build the rotation matrix for an orientation vector.

    Roll is a rotation about the local Y axis, pitch about X and azimuth
    about Z. They are applied roll first, then pitch, then azimuth, so the
    result is ``Rz(azimuth) * Rx(pitch) * Ry(roll)``.

    Args:
        orientation: ``[azimuth, pitch, roll]`` in radians

    Returns:
        np.ndarray: Flattened 3x3 rotation matrix
    """
    azimuth, pitch, roll = (float(v) for v in orientation[:3])

    sin_x, cos_x = math.sin(pitch), math.cos(pitch)
    sin_y, cos_y = math.sin(roll), math.cos(roll)
    sin_z, cos_z = math.sin(azimuth), math.cos(azimuth)

    x_matrix = np.array([
        1.0, 0.0, 0.0,
        0.0, cos_x, sin_x,
        0.0, -sin_x, cos_x,
    ])
    y_matrix = np.array([
        cos_y, 0.0, sin_y,
        0.0, 1.0, 0.0,
        -sin_y, 0.0, cos_y,
    ])
    z_matrix = np.array([
        cos_z, sin_z, 0.0,
        -sin_z, cos_z, 0.0,
        0.0, 0.0, 1.0,
    ])

    return multiply(z_matrix, multiply(x_matrix, y_matrix))


def rotation_from_vector(rotation_vector) -> np.ndarray:
    """
    Convert a rotation vector (axis-angle increment) into a rotation matrix.

    The vector holds ``[x*sin(t/2), y*sin(t/2), z*sin(t/2)]`` optionally
    followed by the scalar part ``cos(t/2)``. Without the scalar part it is
    derived from the unit-norm constraint.

    Args:
        rotation_vector: 3 or 4 element rotation vector

    Returns:
        np.ndarray: Flattened 3x3 rotation matrix
    """
    q1, q2, q3 = (float(v) for v in rotation_vector[:3])
    if len(rotation_vector) >= 4:
        q0 = float(rotation_vector[3])
    else:
        q0 = math.sqrt(max(0.0, 1.0 - q1 * q1 - q2 * q2 - q3 * q3))

    sq_q1 = 2 * q1 * q1
    sq_q2 = 2 * q2 * q2
    sq_q3 = 2 * q3 * q3
    q1_q2 = 2 * q1 * q2
    q3_q0 = 2 * q3 * q0
    q1_q3 = 2 * q1 * q3
    q2_q0 = 2 * q2 * q0
    q2_q3 = 2 * q2 * q3
    q1_q0 = 2 * q1 * q0

    return np.array([
        1 - sq_q2 - sq_q3, q1_q2 - q3_q0, q1_q3 + q2_q0,
        q1_q2 + q3_q0, 1 - sq_q1 - sq_q3, q2_q3 - q1_q0,
        q1_q3 - q2_q0, q2_q3 + q1_q0, 1 - sq_q1 - sq_q2,
    ])


def to_euler(matrix) -> np.ndarray:
    """
    Decompose a rotation matrix into an orientation vector.

    Inverse of :func:`from_orientation` away from pitch = +-pi/2.

    Args:
        matrix: Flattened 3x3 rotation matrix

    Returns:
        np.ndarray: ``[azimuth, pitch, roll]`` in radians
    """
    r = np.asarray(matrix, dtype=np.float64).ravel()
    if r.size != 9:
        raise DimensionMismatch(f"expected 9 elements, got {r.size}")

    azimuth = math.atan2(r[1], r[4])
    pitch = math.asin(max(-1.0, min(1.0, -r[7])))
    roll = math.atan2(-r[6], r[8])
    return np.array([azimuth, pitch, roll])
