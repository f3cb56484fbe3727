from __future__ import annotations

import logging

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints.base import BaseConstraint
from constraint_projection.constraints.intersection import ConstraintIntersection
from constraint_projection.constraints.joint_limits import JointLimitConstraint
from constraint_projection.constraints.orientation import OrientationConstraint
from constraint_projection.constraints.position import PositionConstraint
from constraint_projection.kinematics.provider import KinematicsProvider
from constraint_projection.types import ConstraintsSpec, JointLimitSpec

logger = logging.getLogger(__name__)


def create_constraint(
    kinematics: KinematicsProvider,
    spec: ConstraintsSpec,
    config: ProjectionConfig | None = None,
) -> BaseConstraint:
    """Factory function to build the constraint for a bundle of specs.

    Input:
        kinematics: Provider used by the task-space constraints
        spec: Position, orientation and joint limit specifications
        config: Projection configuration shared by every constraint built
    Output:
        The single constraint if the spec holds one, otherwise a
        ConstraintIntersection of all of them in spec order

    Examples:
        create_constraint(kin, ConstraintsSpec(position=[box]))
        create_constraint(kin, ConstraintsSpec(position=[box], joint_limits=True))
    """
    members: list[BaseConstraint] = []

    for position_spec in spec.position:
        members.append(PositionConstraint(kinematics, position_spec, config))
    for orientation_spec in spec.orientation:
        members.append(OrientationConstraint(kinematics, orientation_spec, config))

    if isinstance(spec.joint_limits, JointLimitSpec):
        if spec.joint_limits.num_joints != kinematics.num_joints:
            raise ValueError(
                f"Joint limits cover {spec.joint_limits.num_joints} joints, "
                f"model has {kinematics.num_joints}"
            )
        members.append(JointLimitConstraint(spec.joint_limits, config))
    elif spec.joint_limits:
        members.append(JointLimitConstraint.from_kinematics(kinematics, config))

    logger.info(
        f"Built {len(members)} constraint(s): "
        + ", ".join(type(member).__name__ for member in members)
    )

    if len(members) == 1:
        return members[0]
    return ConstraintIntersection(members, config)
