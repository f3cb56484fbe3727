"""
Shared capability interface of all constraints.

A constraint maps a configuration q (length n) to an error vector of
length m that is zero exactly on the constraint manifold, and provides
the analytic (m, n) Jacobian of that map. Projection onto the manifold
is delegated to the Newton projector using the constraint's own
tolerance and iteration budget.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.projection.projector import project
from constraint_projection.types import ProjectionResult


class BaseConstraint(ABC):
    """Abstract base for Position, Orientation, JointLimit and Intersection."""

    def __init__(
        self,
        num_joints: int,
        dimension: int,
        link_name: str | None = None,
        config: ProjectionConfig | None = None,
    ) -> None:
        if config is None:
            config = ProjectionConfig()
        if num_joints < 1:
            raise ValueError("num_joints must be >= 1")
        if dimension < 1:
            raise ValueError("Constraint must have at least one error row")

        self._num_joints = num_joints
        self._dimension = dimension
        self._link_name = link_name
        self._tolerance = float(config.tolerance)
        self._max_iterations = int(config.max_iterations)
        self._damping = config.damping
        self._max_step = config.max_step

    @property
    def num_joints(self) -> int:
        return self._num_joints

    @property
    def dimension(self) -> int:
        """Number of rows of the error vector (co-dimension)."""
        return self._dimension

    @property
    def link_name(self) -> str | None:
        return self._link_name

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def set_tolerance(self, tolerance: float) -> None:
        if not tolerance > 0:
            raise ValueError("tolerance must be > 0")
        self._tolerance = float(tolerance)

    def set_max_iterations(self, max_iterations: int) -> None:
        if isinstance(max_iterations, bool) or int(max_iterations) != max_iterations:
            raise ValueError("max_iterations must be an integer")
        if max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        self._max_iterations = int(max_iterations)

    @property
    def projection_config(self) -> ProjectionConfig:
        """Projector settings built from the current tolerance and budget."""
        return ProjectionConfig(
            tolerance=self._tolerance,
            max_iterations=self._max_iterations,
            damping=self._damping,
            max_step=self._max_step,
        )

    @abstractmethod
    def evaluate(self, joint_positions: np.ndarray) -> np.ndarray:
        """Constraint error, shape (dimension,)."""
        raise NotImplementedError

    @abstractmethod
    def jacobian(self, joint_positions: np.ndarray) -> np.ndarray:
        """Derivative of `evaluate`, shape (dimension, num_joints)."""
        raise NotImplementedError

    def is_satisfied(self, joint_positions: np.ndarray) -> bool:
        return bool(np.linalg.norm(self.evaluate(joint_positions)) < self._tolerance)

    def project_with_result(self, joint_positions: np.ndarray) -> ProjectionResult:
        """Project a copy of `joint_positions` onto the manifold."""
        return project(joint_positions, self, self.projection_config)

    def project(self, joint_positions: np.ndarray) -> bool:
        """
        Project a configuration onto the manifold in place.

        Input:
            joint_positions: Writable float64 array of length num_joints; it is
                overwritten with the last iterate whether or not projection
                succeeds
        Output:
            True if the final error norm is below the tolerance
        """
        if not isinstance(joint_positions, np.ndarray):
            raise TypeError("project() mutates its input and needs a numpy array")
        if joint_positions.dtype != np.float64:
            raise TypeError(f"Expected a float64 array, got dtype {joint_positions.dtype}")
        if not joint_positions.flags.writeable:
            raise TypeError("Configuration array is read-only")

        result = self.project_with_result(joint_positions)
        joint_positions[:] = result.configuration
        return result.success

    def _check_configuration(self, joint_positions: np.ndarray) -> np.ndarray:
        q = np.asarray(joint_positions, dtype=np.float64)
        if q.shape != (self._num_joints,):
            raise ValueError(
                f"Expected {self._num_joints} joint positions, got shape {q.shape}"
            )
        return q

    def __repr__(self) -> str:
        link = f", link='{self._link_name}'" if self._link_name is not None else ""
        return (
            f"{type(self).__name__}(dimension={self._dimension}{link}, "
            f"tolerance={self._tolerance:g}, max_iterations={self._max_iterations})"
        )


class BoundedConstraint(BaseConstraint):
    """Constraint whose error is a raw quantity penalized outside [lower, upper].

    Subclasses supply the raw error and its Jacobian. The constraint error
    is zero inside the bounds and the signed excess outside, so the error
    surface is piecewise linear in the raw error with kinks at the bounds.
    """

    def __init__(
        self,
        num_joints: int,
        lower: np.ndarray,
        upper: np.ndarray,
        link_name: str | None = None,
        config: ProjectionConfig | None = None,
    ) -> None:
        lower = np.asarray(lower, dtype=np.float64)
        upper = np.asarray(upper, dtype=np.float64)
        if lower.shape != upper.shape or lower.ndim != 1:
            raise ValueError(
                f"Bounds must be matching 1-D arrays, got {lower.shape} and {upper.shape}"
            )
        if np.any(lower > upper):
            raise ValueError("Lower bound exceeds upper bound")
        super().__init__(num_joints, len(lower), link_name, config)
        self._lower = lower
        self._upper = upper

    @property
    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        return self._lower.copy(), self._upper.copy()

    @abstractmethod
    def calc_error(self, joint_positions: np.ndarray) -> np.ndarray:
        """Raw error before the bound penalty, shape (dimension,)."""
        raise NotImplementedError

    @abstractmethod
    def calc_error_and_jacobian(
        self, joint_positions: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Raw error and its Jacobian, shapes (dimension,) and (dimension, n)."""
        raise NotImplementedError

    def calc_error_jacobian(self, joint_positions: np.ndarray) -> np.ndarray:
        return self.calc_error_and_jacobian(joint_positions)[1]

    def evaluate(self, joint_positions: np.ndarray) -> np.ndarray:
        return self._penalty(self.calc_error(joint_positions))

    def jacobian(self, joint_positions: np.ndarray) -> np.ndarray:
        error, error_jacobian = self.calc_error_and_jacobian(joint_positions)
        return self._penalty_derivative(error)[:, None] * error_jacobian

    def _penalty(self, values: np.ndarray) -> np.ndarray:
        above = np.maximum(values - self._upper, 0.0)
        below = np.minimum(values - self._lower, 0.0)
        return above + below

    def _penalty_derivative(self, values: np.ndarray) -> np.ndarray:
        outside = (values > self._upper) | (values < self._lower)
        return outside.astype(np.float64)
