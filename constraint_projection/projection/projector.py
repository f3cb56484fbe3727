"""
Newton-type projection of configurations onto constraint manifolds.

Each iteration solves the damped least squares system

    dq = -J^T (J J^T + damping^2 I)^{-1} e

(the Moore-Penrose pseudo-inverse when damping is 0) and steps q by dq
until ||e|| drops below the tolerance or the iteration budget runs out.
Running out of iterations is an ordinary outcome reported in the result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.types import ProjectionResult, ProjectionStatus

if TYPE_CHECKING:
    from constraint_projection.constraints.base import BaseConstraint

logger = logging.getLogger(__name__)


def project(
    configuration: np.ndarray,
    constraint: BaseConstraint,
    config: ProjectionConfig | None = None,
) -> ProjectionResult:
    """
    Project a configuration onto a constraint manifold.

    Input:
        configuration: Starting joint positions; never modified
        constraint: Any constraint, simple or an intersection
        config: Projection configuration (uses defaults if None)
    Output:
        ProjectionResult holding the final iterate, successful or not
    """
    if config is None:
        config = ProjectionConfig()

    q = np.array(configuration, dtype=np.float64)
    if q.shape != (constraint.num_joints,):
        raise ValueError(
            f"Expected {constraint.num_joints} joint positions, got shape {q.shape}"
        )

    error = constraint.evaluate(q)
    error_norm = float(np.linalg.norm(error))
    iterations = 0

    while error_norm >= config.tolerance and iterations < config.max_iterations:
        step = _newton_step(constraint.jacobian(q), error, config.damping)
        if step is None:
            logger.debug(
                f"Projection hit a singular system after {iterations} iterations "
                f"(|e|={error_norm:.3e})"
            )
            return ProjectionResult(
                status=ProjectionStatus.SINGULAR,
                configuration=q,
                error_norm=error_norm,
                iterations=iterations,
            )

        if config.max_step is not None:
            step_norm = float(np.linalg.norm(step))
            if step_norm > config.max_step:
                step *= config.max_step / step_norm

        q += step
        iterations += 1
        error = constraint.evaluate(q)
        error_norm = float(np.linalg.norm(error))

    if error_norm < config.tolerance:
        return ProjectionResult(
            status=ProjectionStatus.SUCCESS,
            configuration=q,
            error_norm=error_norm,
            iterations=iterations,
        )

    logger.debug(
        f"Projection did not converge in {iterations} iterations (|e|={error_norm:.3e})"
    )
    return ProjectionResult(
        status=ProjectionStatus.MAX_ITERATIONS,
        configuration=q,
        error_norm=error_norm,
        iterations=iterations,
    )


class Projector:
    """Projects configurations with one fixed ProjectionConfig."""

    def __init__(self, config: ProjectionConfig | None = None) -> None:
        if config is None:
            config = ProjectionConfig()
        self._config = config

    @property
    def config(self) -> ProjectionConfig:
        return self._config

    def project(
        self, configuration: np.ndarray, constraint: BaseConstraint
    ) -> ProjectionResult:
        return project(configuration, constraint, self._config)


# --- Internal helper functions ---


def _newton_step(
    jacobian: np.ndarray, error: np.ndarray, damping: float
) -> np.ndarray | None:
    """Damped least squares step, or None if the system cannot be solved."""
    try:
        if damping > 0:
            JJT = jacobian @ jacobian.T
            damping_matrix = damping**2 * np.eye(len(error))
            step = -jacobian.T @ np.linalg.solve(JJT + damping_matrix, error)
        else:
            step = -np.linalg.pinv(jacobian) @ error
    except np.linalg.LinAlgError:
        return None

    if not np.all(np.isfinite(step)):
        return None
    return step
