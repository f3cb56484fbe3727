import numpy as np

from constraint_projection.types.geometry import SE3Pose
from constraint_projection.types.robot import ChainConfig, JointConfig


def _origin(x: float, y: float, z: float) -> SE3Pose:
    return SE3Pose(position=np.array([x, y, z]), rotation=np.eye(3))


SAMPLE_CHAINS: dict[str, ChainConfig] = {
    # 6R industrial arm with the proportions of a Fanuc M-10iA
    "fanuc_like": ChainConfig(
        base_link="base_link",
        joints=(
            JointConfig("joint_1", "link_1", _origin(0.0, 0.0, 0.45), (0, 0, 1), -2.96, 2.96),
            JointConfig("joint_2", "link_2", _origin(0.15, 0.0, 0.0), (0, 1, 0), -1.57, 2.79),
            JointConfig("joint_3", "link_3", _origin(0.0, 0.0, 0.6), (0, -1, 0), -3.05, 3.05),
            JointConfig("joint_4", "link_4", _origin(0.0, 0.0, 0.2), (-1, 0, 0), -3.31, 3.31),
            JointConfig("joint_5", "link_5", _origin(0.64, 0.0, 0.0), (0, -1, 0), -2.18, 2.18),
            JointConfig("joint_6", "link_6", _origin(0.1, 0.0, 0.0), (-1, 0, 0), -6.28, 6.28),
        ),
    ),
    # Planar 3R arm rotating about z, handy for reasoning about results by hand
    "planar_3r": ChainConfig(
        base_link="base_link",
        joints=(
            JointConfig("joint_1", "link_1", _origin(0.0, 0.0, 0.0), (0, 0, 1), -3.0, 3.0),
            JointConfig("joint_2", "link_2", _origin(0.3, 0.0, 0.0), (0, 0, 1), -3.0, 3.0),
            JointConfig("joint_3", "link_3", _origin(0.25, 0.0, 0.0), (0, 0, 1), -3.0, 3.0),
        ),
    ),
}
