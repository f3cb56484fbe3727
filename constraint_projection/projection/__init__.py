from .projector import Projector, project
from .sampling import enforce_bounds, sample_constrained, within_bounds

__all__ = [
    "Projector",
    "enforce_bounds",
    "project",
    "sample_constrained",
    "within_bounds",
]
