"""Declarative descriptions of the constraints a projector can enforce."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from constraint_projection.types.geometry import SE3Pose
from constraint_projection.utils.rot_utils import normalize_quaternion

# Half-extent marking a box axis as free
UNCONSTRAINED = -1.0


@dataclass(frozen=True)
class PositionConstraintSpec:
    """Keep a point on a link inside an axis-aligned box.

    The box is centered at ``box_pose`` and aligned with its axes. A negative
    half-extent (``UNCONSTRAINED``) frees that axis entirely; a zero
    half-extent pins the point to the box's mid-plane along that axis.
    """

    link_name: str
    half_extents: np.ndarray  # (3,) meters, box frame axes
    box_pose: SE3Pose = field(default_factory=SE3Pose.identity)
    link_offset: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        half_extents = np.asarray(self.half_extents, dtype=np.float64)
        link_offset = np.asarray(self.link_offset, dtype=np.float64)
        if half_extents.shape != (3,):
            raise ValueError(
                f"half_extents must be shape (3,), got {half_extents.shape}"
            )
        if link_offset.shape != (3,):
            raise ValueError(f"link_offset must be shape (3,), got {link_offset.shape}")
        if not np.all(np.isfinite(half_extents)):
            raise ValueError("half_extents must be finite")
        if np.all(half_extents < 0):
            raise ValueError(
                f"Position constraint on '{self.link_name}' leaves every axis unconstrained"
            )
        object.__setattr__(self, "half_extents", half_extents)
        object.__setattr__(self, "link_offset", link_offset)

    @property
    def constrained_axes(self) -> tuple[int, ...]:
        """Indices of the box axes that contribute an error row."""
        return tuple(int(i) for i in np.flatnonzero(self.half_extents >= 0))


@dataclass(frozen=True)
class OrientationConstraintSpec:
    """Keep a link's orientation within per-axis tolerances of a target."""

    link_name: str
    target_orientation: np.ndarray  # (4,) quaternion (w, x, y, z)
    tolerances: np.ndarray  # (3,) radians, about the reference frame axes

    def __post_init__(self):
        tolerances = np.asarray(self.tolerances, dtype=np.float64)
        if tolerances.shape != (3,):
            raise ValueError(f"tolerances must be shape (3,), got {tolerances.shape}")
        if np.any(tolerances < 0) or not np.all(np.isfinite(tolerances)):
            raise ValueError(f"tolerances must be finite and >= 0, got {tolerances}")
        object.__setattr__(
            self, "target_orientation", normalize_quaternion(self.target_orientation)
        )
        object.__setattr__(self, "tolerances", tolerances)


@dataclass(frozen=True)
class JointLimitSpec:
    """Per-joint (lower, upper) bounds, one pair per degree of freedom."""

    lower: np.ndarray
    upper: np.ndarray

    def __post_init__(self):
        lower = np.asarray(self.lower, dtype=np.float64)
        upper = np.asarray(self.upper, dtype=np.float64)
        if lower.ndim != 1 or upper.ndim != 1:
            raise ValueError("Joint limits must be 1-D arrays")
        if len(lower) == 0:
            raise ValueError("Joint limits must cover at least one joint")
        if len(lower) != len(upper):
            raise ValueError(
                f"Expected matching limits, got lower={len(lower)}, upper={len(upper)}"
            )
        if np.any(lower > upper):
            bad = np.flatnonzero(lower > upper).tolist()
            raise ValueError(f"Lower bound exceeds upper bound for joints {bad}")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @property
    def num_joints(self) -> int:
        return len(self.lower)


@dataclass(frozen=True)
class ConstraintsSpec:
    """A bundle of constraints that must hold simultaneously.

    ``joint_limits`` is either a JointLimitSpec, True to take the limits
    from the kinematics provider, or False to leave joints unbounded.
    """

    position: tuple[PositionConstraintSpec, ...] = ()
    orientation: tuple[OrientationConstraintSpec, ...] = ()
    joint_limits: JointLimitSpec | bool = False

    def __post_init__(self):
        object.__setattr__(self, "position", tuple(self.position))
        object.__setattr__(self, "orientation", tuple(self.orientation))
        if not self.position and not self.orientation and not self.joint_limits:
            raise ValueError("Constraints spec is empty")
