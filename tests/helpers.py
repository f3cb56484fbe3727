"""Shared constants and helpers for the test suite."""

import numpy as np

from constraint_projection.types import PositionConstraintSpec, SE3Pose

# Number of times to run a test that uses randomly generated input
NUM_RANDOM_TESTS = 100

# L1 norm over the whole Jacobian difference; loose because of finite differences
JAC_ERROR_TOLERANCE = 1e-4

# Offset from the last link used to test a link other than the end effector
DIFFERENT_LINK_OFFSET = 2

FD_STEP = 1e-6


def numerical_jacobian(func, q: np.ndarray, h: float = FD_STEP) -> np.ndarray:
    """Forward finite-difference Jacobian of func at q."""
    f0 = np.asarray(func(q))
    jacobian = np.zeros((len(f0), len(q)))
    for i in range(len(q)):
        q_plus = q.copy()
        q_plus[i] += h
        jacobian[:, i] = (np.asarray(func(q_plus)) - f0) / h
    return jacobian


def box_spec(link_name: str) -> PositionConstraintSpec:
    """Thin box in front of the fanuc-like arm (dimensions 0.05 x 0.4 x 0.05)."""
    return PositionConstraintSpec(
        link_name=link_name,
        half_extents=np.array([0.025, 0.2, 0.025]),
        box_pose=SE3Pose(position=np.array([0.9, 0.0, 0.2]), rotation=np.eye(3)),
    )
