from .constraints import (
    UNCONSTRAINED,
    ConstraintsSpec,
    JointLimitSpec,
    OrientationConstraintSpec,
    PositionConstraintSpec,
)
from .geometry import SE3Pose
from .projection import ProjectionResult, ProjectionStatus
from .robot import ChainConfig, JointConfig, JointType

__all__ = [
    # Geometry
    "SE3Pose",
    # Constraint specifications
    "UNCONSTRAINED",
    "PositionConstraintSpec",
    "OrientationConstraintSpec",
    "JointLimitSpec",
    "ConstraintsSpec",
    # Projection
    "ProjectionResult",
    "ProjectionStatus",
    # Robot
    "ChainConfig",
    "JointConfig",
    "JointType",
]
