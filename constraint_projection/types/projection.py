from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class ProjectionStatus(Enum):
    """Status of a manifold projection attempt."""

    SUCCESS = "success"
    MAX_ITERATIONS = "max_iterations"
    SINGULAR = "singular"


@dataclass
class ProjectionResult:
    """Result of a manifold projection attempt."""

    status: ProjectionStatus
    configuration: np.ndarray  # Last iterate, on the manifold if successful
    error_norm: float  # Norm of the constraint error at `configuration`
    iterations: int  # Newton steps taken

    @property
    def success(self) -> bool:
        return self.status == ProjectionStatus.SUCCESS
