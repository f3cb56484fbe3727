"""
Pure numpy forward kinematics for serial chains.

Each joint frame is placed by a fixed origin transform relative to its
parent link, then moved by the joint value about (or along) its axis.
The geometric Jacobian is assembled column by column from the joint axes
expressed in the reference frame.
"""

from __future__ import annotations

import numpy as np

from constraint_projection.config.robot_config import SAMPLE_CHAINS
from constraint_projection.types import ChainConfig, JointType, SE3Pose
from constraint_projection.utils.rot_utils import rotation_vector_to_matrix


class SerialChainKinematics:
    """Kinematics provider for an unbranched chain of 1-DOF joints.

    Stateless between calls, so a single instance can be shared by any
    number of threads.
    """

    def __init__(self, chain: ChainConfig) -> None:
        if chain.num_joints == 0:
            raise ValueError("Chain must have at least one joint")

        link_names = chain.link_names
        if len(set(link_names)) != len(link_names):
            raise ValueError(f"Duplicate link names in chain: {link_names}")

        self._chain = chain
        # Link name -> index of the joint that moves it (-1 for the base)
        self._link_index = {name: i - 1 for i, name in enumerate(link_names)}
        self._axes = np.array(
            [np.asarray(j.axis, dtype=np.float64) / np.linalg.norm(j.axis) for j in chain.joints]
        )
        self._lower = np.array([j.lower for j in chain.joints], dtype=np.float64)
        self._upper = np.array([j.upper for j in chain.joints], dtype=np.float64)

    @property
    def chain(self) -> ChainConfig:
        return self._chain

    @property
    def num_joints(self) -> int:
        return self._chain.num_joints

    @property
    def joint_limits(self) -> tuple[np.ndarray, np.ndarray]:
        """Joint limits as (lower_bounds, upper_bounds) arrays."""
        return self._lower.copy(), self._upper.copy()

    @property
    def link_names(self) -> list[str]:
        return self._chain.link_names

    def has_link(self, link_name: str) -> bool:
        return link_name in self._link_index

    def link_pose(self, joint_positions: np.ndarray, link_name: str) -> SE3Pose:
        """Pose of a link in the base frame."""
        pose, _ = self.forward_kinematics(joint_positions, link_name)
        return pose

    def forward_kinematics(
        self,
        joint_positions: np.ndarray,
        link_name: str,
    ) -> tuple[SE3Pose, np.ndarray]:
        """
        Compute the pose and geometric Jacobian of a link.

        Input:
            joint_positions: Joint positions array of length num_joints
            link_name: Name of a link in the chain
        Output:
            (SE3Pose of the link, Jacobian matrix of shape (6, num_joints))
        """
        if link_name not in self._link_index:
            raise ValueError(f"Link '{link_name}' not found in chain")
        q = np.asarray(joint_positions, dtype=np.float64)
        if q.shape != (self.num_joints,):
            raise ValueError(
                f"Expected {self.num_joints} joint positions, got shape {q.shape}"
            )

        last = self._link_index[link_name]
        jacobian = np.zeros((6, self.num_joints))
        rotation = np.eye(3)
        position = np.zeros(3)
        joint_axes = []
        joint_positions_world = []

        for i in range(last + 1):
            joint = self._chain.joints[i]
            position = position + rotation @ joint.origin.position
            rotation = rotation @ joint.origin.rotation
            axis_world = rotation @ self._axes[i]
            joint_axes.append(axis_world)
            joint_positions_world.append(position)

            if joint.joint_type == JointType.REVOLUTE:
                rotation = rotation @ rotation_vector_to_matrix(self._axes[i] * q[i])
            else:
                position = position + axis_world * q[i]

        for i in range(last + 1):
            axis_world = joint_axes[i]
            if self._chain.joints[i].joint_type == JointType.REVOLUTE:
                jacobian[:3, i] = np.cross(axis_world, position - joint_positions_world[i])
                jacobian[3:, i] = axis_world
            else:
                jacobian[:3, i] = axis_world

        return SE3Pose(position=position, rotation=rotation), jacobian


def create_serial_chain(chain_name: str) -> SerialChainKinematics:
    """Factory function to create kinematics for a named sample chain.

    Input:
        chain_name: Key of SAMPLE_CHAINS (e.g. "fanuc_like")
    Output:
        SerialChainKinematics instance
    """
    if chain_name not in SAMPLE_CHAINS:
        available = ", ".join(sorted(SAMPLE_CHAINS.keys()))
        raise ValueError(f"Unknown chain '{chain_name}'. Available chains: {available}")

    return SerialChainKinematics(SAMPLE_CHAINS[chain_name])
