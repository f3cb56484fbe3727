from __future__ import annotations

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints.base import BoundedConstraint
from constraint_projection.kinematics.provider import KinematicsProvider, require_link
from constraint_projection.types import OrientationConstraintSpec
from constraint_projection.utils.rot_utils import (
    inverse_left_jacobian,
    matrix_to_rotation_vector,
    quaternion_to_matrix,
)


class OrientationConstraint(BoundedConstraint):
    """Keeps a link's orientation near a target.

    The raw error is the rotation vector of R(q) R_target^T, i.e. the
    deviation from the target expressed in the reference frame. Component i
    is penalized outside +/- tolerance i. The error map is not differentiable
    at a deviation angle of pi.
    """

    def __init__(
        self,
        kinematics: KinematicsProvider,
        spec: OrientationConstraintSpec,
        config: ProjectionConfig | None = None,
    ) -> None:
        require_link(kinematics, spec.link_name)
        super().__init__(
            kinematics.num_joints,
            lower=-spec.tolerances,
            upper=spec.tolerances,
            link_name=spec.link_name,
            config=config,
        )
        self._kinematics = kinematics
        self._spec = spec
        self._target_rotation = quaternion_to_matrix(spec.target_orientation)

    @property
    def spec(self) -> OrientationConstraintSpec:
        return self._spec

    @property
    def target_rotation(self) -> np.ndarray:
        return self._target_rotation.copy()

    def calc_error(self, joint_positions: np.ndarray) -> np.ndarray:
        q = self._check_configuration(joint_positions)
        pose, _ = self._kinematics.forward_kinematics(q, self._spec.link_name)
        return matrix_to_rotation_vector(pose.rotation @ self._target_rotation.T)

    def calc_error_and_jacobian(
        self, joint_positions: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        q = self._check_configuration(joint_positions)
        pose, J = self._kinematics.forward_kinematics(q, self._spec.link_name)

        # d/dt (R R_t^T) = [w]x (R R_t^T), so the rotation vector moves with J_l^-1 w
        error = matrix_to_rotation_vector(pose.rotation @ self._target_rotation.T)
        return error, inverse_left_jacobian(error) @ J[3:]
