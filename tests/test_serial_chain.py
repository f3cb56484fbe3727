"""
Tests for the numpy serial-chain kinematics provider.
"""

import numpy as np
import pytest
from helpers import JAC_ERROR_TOLERANCE, NUM_RANDOM_TESTS, numerical_jacobian

from constraint_projection.kinematics import (
    KinematicsProvider,
    SerialChainKinematics,
    create_serial_chain,
)
from constraint_projection.types import ChainConfig, JointConfig, JointType, SE3Pose
from constraint_projection.utils.rot_utils import matrix_to_rotation_vector


class TestSerialChainKinematics:
    def test_satisfies_protocol(self, kinematics):
        assert isinstance(kinematics, KinematicsProvider)

    def test_unknown_chain(self):
        with pytest.raises(ValueError, match="Unknown chain"):
            create_serial_chain("does_not_exist")

    def test_links(self, kinematics):
        assert kinematics.num_joints == 6
        assert kinematics.has_link("base_link")
        assert kinematics.has_link("link_6")
        assert not kinematics.has_link("tool0")

    def test_joint_limits_are_copies(self, kinematics):
        lower, upper = kinematics.joint_limits
        lower[0] = 100.0
        assert kinematics.joint_limits[0][0] != 100.0
        assert np.all(lower[1:] < upper[1:])

    def test_unknown_link(self, kinematics):
        with pytest.raises(ValueError):
            kinematics.forward_kinematics(np.zeros(6), "tool0")

    def test_wrong_configuration_size(self, kinematics):
        with pytest.raises(ValueError):
            kinematics.forward_kinematics(np.zeros(5), "link_6")

    def test_base_link_is_fixed(self, kinematics, random_state):
        pose, jacobian = kinematics.forward_kinematics(random_state(), "base_link")
        np.testing.assert_allclose(pose.to_matrix(), np.eye(4))
        np.testing.assert_allclose(jacobian, 0.0)

    def test_planar_closed_form(self):
        kin = create_serial_chain("planar_3r")
        q = np.array([0.3, -0.7, 1.1])
        pose = kin.link_pose(q, "link_3")
        expected = np.array(
            [0.3 * np.cos(q[0]) + 0.25 * np.cos(q[0] + q[1]),
             0.3 * np.sin(q[0]) + 0.25 * np.sin(q[0] + q[1]),
             0.0]
        )
        np.testing.assert_allclose(pose.position, expected, atol=1e-12)
        yaw = q.sum()
        np.testing.assert_allclose(
            pose.rotation[:2, :2],
            [[np.cos(yaw), -np.sin(yaw)], [np.sin(yaw), np.cos(yaw)]],
            atol=1e-12,
        )

    def test_columns_of_later_joints_are_zero(self, kinematics, random_state):
        _, jacobian = kinematics.forward_kinematics(random_state(), "link_3")
        np.testing.assert_allclose(jacobian[:, 3:], 0.0)

    @pytest.mark.parametrize("link_name", ["link_6", "link_4"])
    def test_linear_jacobian(self, kinematics, random_state, link_name):
        for _ in range(NUM_RANDOM_TESTS):
            q = random_state()
            _, jacobian = kinematics.forward_kinematics(q, link_name)
            approx = numerical_jacobian(
                lambda x: kinematics.link_pose(x, link_name).position, q
            )
            assert np.abs(jacobian[:3] - approx).sum() < JAC_ERROR_TOLERANCE

    def test_angular_jacobian(self, kinematics, random_state):
        h = 1e-6
        for _ in range(NUM_RANDOM_TESTS):
            q = random_state()
            pose, jacobian = kinematics.forward_kinematics(q, "link_6")
            approx = np.zeros((3, 6))
            for i in range(6):
                q_plus = q.copy()
                q_plus[i] += h
                rotation_plus = kinematics.link_pose(q_plus, "link_6").rotation
                approx[:, i] = matrix_to_rotation_vector(rotation_plus @ pose.rotation.T) / h
            assert np.abs(jacobian[3:] - approx).sum() < JAC_ERROR_TOLERANCE


class TestPrismaticJoint:
    def test_prismatic_motion_and_jacobian(self):
        chain = ChainConfig(
            base_link="base",
            joints=(
                JointConfig("rail", "carriage", SE3Pose.identity(), (1, 0, 0), 0.0, 2.0,
                            JointType.PRISMATIC),
                JointConfig("pivot", "arm", SE3Pose.identity(), (0, 0, 1), -3.0, 3.0),
            ),
        )
        kin = SerialChainKinematics(chain)
        pose, jacobian = kin.forward_kinematics(np.array([0.5, 0.2]), "arm")
        np.testing.assert_allclose(pose.position, [0.5, 0.0, 0.0])
        np.testing.assert_allclose(jacobian[:, 0], [1, 0, 0, 0, 0, 0])
        np.testing.assert_allclose(jacobian[:, 1], [0, 0, 0, 0, 0, 1])

    def test_duplicate_links_rejected(self):
        chain = ChainConfig(
            base_link="base",
            joints=(
                JointConfig("a", "link", SE3Pose.identity(), (0, 0, 1), -1.0, 1.0),
                JointConfig("b", "link", SE3Pose.identity(), (0, 0, 1), -1.0, 1.0),
            ),
        )
        with pytest.raises(ValueError, match="Duplicate"):
            SerialChainKinematics(chain)

    def test_zero_axis_rejected(self):
        with pytest.raises(ValueError):
            JointConfig("a", "link", SE3Pose.identity(), (0, 0, 0), -1.0, 1.0)
