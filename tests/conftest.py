import numpy as np
import pytest
from helpers import DIFFERENT_LINK_OFFSET

from constraint_projection.kinematics import create_serial_chain
from constraint_projection.types import OrientationConstraintSpec


@pytest.fixture
def kinematics():
    return create_serial_chain("fanuc_like")


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def ee_link(kinematics):
    return kinematics.link_names[-1]


@pytest.fixture
def different_link(kinematics):
    return kinematics.link_names[kinematics.num_joints - DIFFERENT_LINK_OFFSET]


@pytest.fixture
def random_state(kinematics, rng):
    lower, upper = kinematics.joint_limits

    def _sample() -> np.ndarray:
        return rng.uniform(lower, upper)

    return _sample


@pytest.fixture
def default_orientation_spec(kinematics, ee_link):
    """Orientation constraint around the end effector pose at q = 0."""
    pose, _ = kinematics.forward_kinematics(np.zeros(kinematics.num_joints), ee_link)
    return OrientationConstraintSpec(
        link_name=ee_link,
        target_orientation=pose.to_quaternion(),
        tolerances=np.array([0.3, 0.3, 0.3]),
    )
