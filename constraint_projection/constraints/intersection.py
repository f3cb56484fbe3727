from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints.base import BaseConstraint

logger = logging.getLogger(__name__)


class ConstraintIntersection(BaseConstraint):
    """Simultaneous satisfaction of several constraints.

    Members are referenced, not copied: the same constraint may also be
    used on its own, keeping its own tolerance and iteration budget. The
    intersection's settings only govern its own projections.
    """

    def __init__(
        self,
        constraints: Sequence[BaseConstraint],
        config: ProjectionConfig | None = None,
    ) -> None:
        members = list(constraints)
        if not members:
            raise ValueError("ConstraintIntersection needs at least one constraint")

        num_joints = members[0].num_joints
        for member in members[1:]:
            if member.num_joints != num_joints:
                raise ValueError(
                    f"Cannot intersect constraints over {num_joints} and "
                    f"{member.num_joints} joints"
                )

        super().__init__(
            num_joints,
            sum(member.dimension for member in members),
            config=config,
        )
        self._members = tuple(members)

        if len(members) == 1:
            logger.warning(f"Intersection of a single constraint: {members[0]!r}")

    @property
    def constraints(self) -> tuple[BaseConstraint, ...]:
        return self._members

    @property
    def link_names(self) -> list[str]:
        return [m.link_name for m in self._members if m.link_name is not None]

    def evaluate(self, joint_positions: np.ndarray) -> np.ndarray:
        q = self._check_configuration(joint_positions)
        return np.concatenate([member.evaluate(q) for member in self._members])

    def jacobian(self, joint_positions: np.ndarray) -> np.ndarray:
        q = self._check_configuration(joint_positions)
        return np.vstack([member.jacobian(q) for member in self._members])

    def __len__(self) -> int:
        return len(self._members)
