"""
Pinocchio-based forward kinematics and Jacobian computation.

Exposes a Pinocchio model as a KinematicsProvider for any of its frames.
"""

from __future__ import annotations

import importlib
import threading
from typing import Any

import numpy as np

from constraint_projection.types import SE3Pose

pin = importlib.import_module("pinocchio")


class PinocchioKinematics:
    """Kinematics provider backed by a Pinocchio model.

    The model is shared read-only; every thread lazily gets its own
    ``pin.Data`` so concurrent calls never touch the same buffers.
    """

    def __init__(self, model: Any, joint_names: list[str] | None = None) -> None:
        self._model = model

        # Get joint IDs for the specified joint names
        if joint_names is None:
            # Use all actuated joints (exclude universe joint)
            joint_ids = list(range(1, int(model.njoints)))
            actual_joint_names = [str(model.names[i]) for i in joint_ids]
        else:
            joint_ids = []
            model_names_list = list(model.names)
            for name in joint_names:
                if name not in model_names_list:
                    raise ValueError(f"Joint '{name}' not found in model")
                joint_ids.append(model.getJointId(name))
            actual_joint_names = list(joint_names)

        for name, jid in zip(actual_joint_names, joint_ids):
            if model.joints[jid].nq != 1 or model.joints[jid].nv != 1:
                raise ValueError(f"Joint '{name}' is not a single-DOF joint")

        self._joint_names = actual_joint_names
        self._joint_ids = joint_ids
        self._idx_q = [model.joints[jid].idx_q for jid in joint_ids]
        self._idx_v = [model.joints[jid].idx_v for jid in joint_ids]
        self._lower = np.array([model.lowerPositionLimit[i] for i in self._idx_q])
        self._upper = np.array([model.upperPositionLimit[i] for i in self._idx_q])
        self._local = threading.local()

    @classmethod
    def from_urdf(
        cls, urdf_path: str, joint_names: list[str] | None = None
    ) -> PinocchioKinematics:
        """
        Create a provider from a URDF file.

        Input:
            urdf_path: Path to the URDF file
            joint_names: Optional list of joint names to control (if None, uses all joints)
        Output:
            PinocchioKinematics instance
        """
        return cls(pin.buildModelFromUrdf(urdf_path), joint_names)

    @property
    def model(self) -> Any:
        return self._model

    @property
    def joint_names(self) -> list[str]:
        return list(self._joint_names)

    @property
    def num_joints(self) -> int:
        return len(self._joint_ids)

    @property
    def joint_limits(self) -> tuple[np.ndarray, np.ndarray]:
        """Joint limits as (lower_bounds, upper_bounds) arrays."""
        return self._lower.copy(), self._upper.copy()

    def has_link(self, link_name: str) -> bool:
        return bool(self._model.existFrame(link_name))

    def forward_kinematics(
        self,
        joint_positions: np.ndarray,
        link_name: str,
    ) -> tuple[SE3Pose, np.ndarray]:
        """
        Compute the pose and world-aligned frame Jacobian of a link.

        Input:
            joint_positions: Joint positions array of length num_joints
            link_name: Name of a frame in the model
        Output:
            (SE3Pose of the frame, Jacobian matrix of shape (6, num_joints))
        """
        if not self.has_link(link_name):
            raise ValueError(f"Frame '{link_name}' not found in model")
        frame_id = self._model.getFrameId(link_name)
        data = self._data()

        q = self._to_pinocchio_config(joint_positions)
        # Also runs forward kinematics on the joints
        pin.computeJointJacobians(self._model, data, q)
        pin.updateFramePlacements(self._model, data)

        oMf = data.oMf[frame_id]
        J_full = pin.getFrameJacobian(
            self._model, data, frame_id, pin.LOCAL_WORLD_ALIGNED
        )

        pose = SE3Pose(
            position=np.array(oMf.translation),
            rotation=np.array(oMf.rotation),
        )
        return pose, np.array(J_full)[:, self._idx_v]

    # --- Internal helper functions ---

    def _data(self) -> Any:
        data = getattr(self._local, "data", None)
        if data is None:
            data = self._model.createData()
            self._local.data = data
        return data

    def _to_pinocchio_config(self, joint_positions: np.ndarray) -> np.ndarray:
        """Convert controlled joint positions to full Pinocchio configuration."""
        joint_positions = np.asarray(joint_positions, dtype=np.float64)
        if joint_positions.shape != (self.num_joints,):
            raise ValueError(
                f"Expected {self.num_joints} joint positions, got shape {joint_positions.shape}"
            )
        q = pin.neutral(self._model)
        q[self._idx_q] = joint_positions
        return q
