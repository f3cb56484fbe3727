"""Kinematics service consumed by the constraints.

Constraints never load robot models themselves; they call a provider that
maps a configuration and a link name to the link's pose and geometric
Jacobian. Providers must be safe to call from several threads as long as
each call works on its own configuration.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from constraint_projection.types import SE3Pose


@runtime_checkable
class KinematicsProvider(Protocol):
    """Protocol for forward kinematics backends."""

    @property
    def num_joints(self) -> int:
        ...

    @property
    def joint_limits(self) -> tuple[np.ndarray, np.ndarray]:
        ...

    def has_link(self, link_name: str) -> bool:
        ...

    def forward_kinematics(
        self,
        joint_positions: np.ndarray,
        link_name: str,
    ) -> tuple[SE3Pose, np.ndarray]:
        """Pose of the link and its (6, num_joints) geometric Jacobian.

        Jacobian rows 0-2 are the linear velocity of the link frame origin,
        rows 3-5 the angular velocity, both in the fixed reference frame.
        """
        ...


def require_link(kinematics: KinematicsProvider, link_name: str) -> None:
    """Raise ValueError unless the provider knows `link_name`."""
    if not kinematics.has_link(link_name):
        raise ValueError(f"Link '{link_name}' not found in kinematic model")
