"""
Tests for building constraints from specification bundles.
"""

import logging

import numpy as np
import pytest
from helpers import box_spec

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints import (
    ConstraintIntersection,
    JointLimitConstraint,
    OrientationConstraint,
    PositionConstraint,
    create_constraint,
)
from constraint_projection.types import ConstraintsSpec, JointLimitSpec


class TestCreateConstraint:
    def test_single_position(self, kinematics, ee_link):
        constraint = create_constraint(kinematics, ConstraintsSpec(position=[box_spec(ee_link)]))
        assert isinstance(constraint, PositionConstraint)

    def test_full_bundle(self, kinematics, ee_link, default_orientation_spec, caplog):
        spec = ConstraintsSpec(
            position=[box_spec(ee_link)],
            orientation=[default_orientation_spec],
            joint_limits=True,
        )
        with caplog.at_level(logging.INFO, logger="constraint_projection"):
            constraint = create_constraint(kinematics, spec)

        assert isinstance(constraint, ConstraintIntersection)
        assert [type(c) for c in constraint.constraints] == [
            PositionConstraint,
            OrientationConstraint,
            JointLimitConstraint,
        ]
        assert constraint.dimension == 3 + 3 + kinematics.num_joints
        assert "Built 3 constraint(s)" in caplog.text

    def test_config_is_shared(self, kinematics, ee_link):
        config = ProjectionConfig(tolerance=1e-3, max_iterations=80)
        constraint = create_constraint(
            kinematics, ConstraintsSpec(position=[box_spec(ee_link)], joint_limits=True), config
        )
        assert constraint.tolerance == 1e-3
        assert all(c.max_iterations == 80 for c in constraint.constraints)

    def test_explicit_joint_limits(self, kinematics):
        n = kinematics.num_joints
        spec = ConstraintsSpec(joint_limits=JointLimitSpec(-np.ones(n), np.ones(n)))
        constraint = create_constraint(kinematics, spec)
        assert isinstance(constraint, JointLimitConstraint)
        np.testing.assert_array_equal(constraint.bounds[1], np.ones(n))

    def test_joint_limit_length_mismatch(self, kinematics):
        spec = ConstraintsSpec(joint_limits=JointLimitSpec(-np.ones(2), np.ones(2)))
        with pytest.raises(ValueError, match="Joint limits cover"):
            create_constraint(kinematics, spec)

    def test_unknown_link(self, kinematics):
        with pytest.raises(ValueError, match="not found"):
            create_constraint(kinematics, ConstraintsSpec(position=[box_spec("tool0")]))
