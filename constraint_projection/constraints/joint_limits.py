from __future__ import annotations

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints.base import BoundedConstraint
from constraint_projection.kinematics.provider import KinematicsProvider
from constraint_projection.types import JointLimitSpec


class JointLimitConstraint(BoundedConstraint):
    """Pulls every joint back inside its (lower, upper) bounds.

    Error row i is the signed amount joint i lies beyond its nearer bound,
    zero within bounds. The Jacobian is diagonal with ones on the rows of
    violated joints. Usually combined with a task constraint in a
    ConstraintIntersection rather than projected on its own.
    """

    def __init__(
        self,
        spec: JointLimitSpec,
        config: ProjectionConfig | None = None,
    ) -> None:
        super().__init__(spec.num_joints, spec.lower, spec.upper, config=config)
        self._spec = spec

    @classmethod
    def from_kinematics(
        cls,
        kinematics: KinematicsProvider,
        config: ProjectionConfig | None = None,
    ) -> JointLimitConstraint:
        """Build from the provider's own joint limits."""
        lower, upper = kinematics.joint_limits
        return cls(JointLimitSpec(lower=lower, upper=upper), config)

    @property
    def spec(self) -> JointLimitSpec:
        return self._spec

    def calc_error(self, joint_positions: np.ndarray) -> np.ndarray:
        return self._check_configuration(joint_positions).copy()

    def calc_error_and_jacobian(
        self, joint_positions: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        q = self._check_configuration(joint_positions).copy()
        return q, np.eye(self.num_joints)
