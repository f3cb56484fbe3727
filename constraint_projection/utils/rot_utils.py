"""Rotation utility functions for conversions between representations."""

import numpy as np
from scipy.spatial.transform import Rotation

# Below this angle the log-map Jacobian switches to its Taylor expansion
_SMALL_ANGLE = 1e-6


def normalize_quaternion(quat: np.ndarray) -> np.ndarray:
    """
    Normalize a quaternion.

    Input:
        quat: Quaternion in (w, x, y, z) format, shape (4,)
    Output:
        unit quaternion in (w, x, y, z) format, shape (4,)
    """
    quat = np.asarray(quat, dtype=np.float64)
    if quat.shape != (4,):
        raise ValueError(f"Quaternion must be shape (4,), got {quat.shape}")
    norm = np.linalg.norm(quat)
    if not np.isfinite(norm) or norm < 1e-12:
        raise ValueError(f"Quaternion {quat} cannot be normalized")
    return quat / norm


def quaternion_to_matrix(quat: np.ndarray) -> np.ndarray:
    """
    Convert quaternion to 3x3 rotation matrix.

    Input:
        quat: Quaternion in (w, x, y, z) format, shape (4,)
    Output:
        rotation matrix, shape (3, 3)
    """
    w, x, y, z = normalize_quaternion(quat)
    return Rotation.from_quat([x, y, z, w]).as_matrix()


def matrix_to_quaternion(rot: np.ndarray) -> np.ndarray:
    """
    Convert 3x3 rotation matrix to quaternion.

    Input:
        rot: Rotation matrix, shape (3, 3)
    Output:
        quaternion in (w, x, y, z) format, shape (4,)
    """
    x, y, z, w = Rotation.from_matrix(np.asarray(rot, dtype=np.float64)).as_quat()
    return np.array([w, x, y, z])


def rpy_to_matrix(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """
    Convert roll-pitch-yaw (fixed-axis XYZ Euler angles) to rotation matrix.

    Input:
        roll: Rotation around X axis (radians)
        pitch: Rotation around Y axis (radians)
        yaw: Rotation around Z axis (radians)
    Output:
        rotation matrix, shape (3, 3)
    """
    return Rotation.from_euler("xyz", [roll, pitch, yaw]).as_matrix()


def skew(vector: np.ndarray) -> np.ndarray:
    """Skew-symmetric cross-product matrix of a 3-vector."""
    x, y, z = np.asarray(vector, dtype=np.float64)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def matrix_to_rotation_vector(rot: np.ndarray) -> np.ndarray:
    """
    Convert rotation matrix to a rotation vector (axis * angle).

    Input:
        rot: Rotation matrix, shape (3, 3)
    Output:
        rotation vector, shape (3,), with angle in [0, pi]
    """
    return Rotation.from_matrix(np.asarray(rot, dtype=np.float64)).as_rotvec()


def rotation_vector_to_matrix(rotvec: np.ndarray) -> np.ndarray:
    """Convert rotation vector (axis * angle) to rotation matrix."""
    return Rotation.from_rotvec(np.asarray(rotvec, dtype=np.float64)).as_matrix()


def inverse_left_jacobian(rotvec: np.ndarray) -> np.ndarray:
    """
    Inverse of the left Jacobian of SO(3) at a rotation vector.

    Maps an angular velocity w, applied on the left of exp(phi), to the
    rate of change of phi:  d(phi)/dt = J_l^{-1}(phi) w.

    Input:
        rotvec: Rotation vector phi, shape (3,)
    Output:
        matrix, shape (3, 3). Singular as |phi| approaches pi.
    """
    phi = np.asarray(rotvec, dtype=np.float64)
    angle = float(np.linalg.norm(phi))
    phi_hat = skew(phi)

    if angle < _SMALL_ANGLE:
        coefficient = 1.0 / 12.0 + angle * angle / 720.0
    else:
        half = 0.5 * angle
        coefficient = (1.0 - half / np.tan(half)) / (angle * angle)

    return np.eye(3) - 0.5 * phi_hat + coefficient * (phi_hat @ phi_hat)
