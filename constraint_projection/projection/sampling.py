"""Drawing configurations that lie on a constraint manifold."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.projection.projector import project
from constraint_projection.types import ProjectionResult

if TYPE_CHECKING:
    from constraint_projection.constraints.base import BaseConstraint

logger = logging.getLogger(__name__)


def enforce_bounds(
    configuration: np.ndarray, lower: np.ndarray, upper: np.ndarray
) -> np.ndarray:
    """Clip a configuration into [lower, upper], returning a new array."""
    return np.clip(np.asarray(configuration, dtype=np.float64), lower, upper)


def within_bounds(
    configuration: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    tolerance: float = 0.0,
) -> bool:
    q = np.asarray(configuration, dtype=np.float64)
    return bool(np.all(q >= lower - tolerance) and np.all(q <= upper + tolerance))


def sample_constrained(
    constraint: BaseConstraint,
    lower: np.ndarray,
    upper: np.ndarray,
    rng: np.random.Generator | None = None,
    max_attempts: int = 100,
    config: ProjectionConfig | None = None,
) -> ProjectionResult:
    """
    Sample a configuration on the manifold and within bounds.

    Draws uniform samples in [lower, upper] and projects each one until a
    projection succeeds without leaving the bounds.

    Input:
        constraint: Constraint defining the manifold
        lower: Lower joint bounds
        upper: Upper joint bounds
        rng: Random generator (a fresh default_rng if None)
        max_attempts: Number of samples to try
        config: Projection configuration (the constraint's own if None)
    Output:
        First successful in-bounds ProjectionResult. When the attempts run
        out, the result of the last attempt; it may report success while
        lying outside the bounds, so callers check within_bounds as well
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    if rng is None:
        rng = np.random.default_rng()
    if config is None:
        config = constraint.projection_config

    lower = np.asarray(lower, dtype=np.float64)
    upper = np.asarray(upper, dtype=np.float64)

    for _ in range(max_attempts):
        sample = rng.uniform(lower, upper)
        result = project(sample, constraint, config)
        if result.success and within_bounds(
            result.configuration, lower, upper, config.tolerance
        ):
            return result

    logger.debug(f"No constrained sample found in {max_attempts} attempts")
    return result
