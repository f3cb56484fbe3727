from .base import BaseConstraint, BoundedConstraint
from .factory import create_constraint
from .intersection import ConstraintIntersection
from .joint_limits import JointLimitConstraint
from .orientation import OrientationConstraint
from .position import PositionConstraint

# The closed set of constraint variants
Constraint = (
    PositionConstraint
    | OrientationConstraint
    | JointLimitConstraint
    | ConstraintIntersection
)

__all__ = [
    "BaseConstraint",
    "BoundedConstraint",
    "Constraint",
    "ConstraintIntersection",
    "JointLimitConstraint",
    "OrientationConstraint",
    "PositionConstraint",
    "create_constraint",
]
