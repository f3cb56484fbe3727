from __future__ import annotations

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints.base import BoundedConstraint
from constraint_projection.kinematics.provider import KinematicsProvider, require_link
from constraint_projection.types import PositionConstraintSpec
from constraint_projection.utils.rot_utils import skew


class PositionConstraint(BoundedConstraint):
    """Keeps a point on a link inside a box.

    The raw error is the point's position relative to the box center,
    expressed in the box frame, restricted to the constrained axes. It is
    penalized outside +/- the half-extents, so the error and its Jacobian
    are exactly zero inside the box. Unconstrained axes have no row.
    """

    def __init__(
        self,
        kinematics: KinematicsProvider,
        spec: PositionConstraintSpec,
        config: ProjectionConfig | None = None,
    ) -> None:
        require_link(kinematics, spec.link_name)
        axes = np.array(spec.constrained_axes, dtype=int)
        half_extents = spec.half_extents[axes]
        super().__init__(
            kinematics.num_joints,
            lower=-half_extents,
            upper=half_extents,
            link_name=spec.link_name,
            config=config,
        )
        self._kinematics = kinematics
        self._spec = spec
        self._axes = axes
        self._box_position = spec.box_pose.position.copy()
        self._box_rotation_T = spec.box_pose.rotation.T.copy()

    @property
    def spec(self) -> PositionConstraintSpec:
        return self._spec

    @property
    def constrained_axes(self) -> tuple[int, ...]:
        return self._spec.constrained_axes

    def calc_error(self, joint_positions: np.ndarray) -> np.ndarray:
        q = self._check_configuration(joint_positions)
        pose, _ = self._kinematics.forward_kinematics(q, self._spec.link_name)
        return self._error_from_pose(pose.position, pose.rotation)

    def calc_error_and_jacobian(
        self, joint_positions: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        q = self._check_configuration(joint_positions)
        pose, J = self._kinematics.forward_kinematics(q, self._spec.link_name)

        # Velocity of the offset point: v + w x r = v - [r]x w
        offset_world = pose.rotation @ self._spec.link_offset
        J_point = J[:3] - skew(offset_world) @ J[3:]

        error = self._error_from_pose(pose.position, pose.rotation)
        return error, (self._box_rotation_T @ J_point)[self._axes]

    def _error_from_pose(self, position: np.ndarray, rotation: np.ndarray) -> np.ndarray:
        point = position + rotation @ self._spec.link_offset
        return (self._box_rotation_T @ (point - self._box_position))[self._axes]
