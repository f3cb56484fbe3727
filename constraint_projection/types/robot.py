from dataclasses import dataclass
from enum import Enum

import numpy as np

from constraint_projection.types.geometry import SE3Pose


class JointType(Enum):
    REVOLUTE = "revolute"
    PRISMATIC = "prismatic"


@dataclass(frozen=True)
class JointConfig:
    """One actuated joint of a serial chain, URDF style."""

    name: str
    child_link: str
    origin: SE3Pose  # parent link frame -> joint frame at q = 0
    axis: tuple[float, float, float]  # in the joint frame
    lower: float
    upper: float
    joint_type: JointType = JointType.REVOLUTE

    def __post_init__(self):
        if len(self.axis) != 3 or np.linalg.norm(self.axis) < 1e-12:
            raise ValueError(f"Joint '{self.name}' needs a non-zero 3D axis")
        if self.lower > self.upper:
            raise ValueError(f"Joint '{self.name}' has lower > upper")


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a serial kinematic chain."""

    base_link: str
    joints: tuple[JointConfig, ...]

    @property
    def num_joints(self) -> int:
        return len(self.joints)

    @property
    def link_names(self) -> list[str]:
        return [self.base_link] + [joint.child_link for joint in self.joints]
