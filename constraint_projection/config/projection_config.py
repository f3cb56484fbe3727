from dataclasses import dataclass

# Projection defaults used by OMPL's constrained state spaces
DEFAULT_TOLERANCE = 1e-4
DEFAULT_MAX_ITERATIONS = 50


@dataclass
class ProjectionConfig:
    """Configuration parameters for Newton manifold projection."""

    tolerance: float = DEFAULT_TOLERANCE  # Success when ||error|| < tolerance
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    damping: float = 1e-3  # Damped least squares regularization, 0 = pseudo-inverse
    max_step: float | None = None  # Cap on ||dq|| per iteration

    def __post_init__(self):
        if not self.tolerance > 0:
            raise ValueError("tolerance must be > 0")
        iterations = self.max_iterations
        if isinstance(iterations, bool) or int(iterations) != iterations:
            raise ValueError("max_iterations must be an integer")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        self.max_iterations = int(self.max_iterations)
        if not self.damping >= 0:
            raise ValueError("damping must be >= 0")
        if self.max_step is not None and not self.max_step > 0:
            raise ValueError("max_step must be > 0")
