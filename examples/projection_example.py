"""Minimal constrained projection example, no visualization.

Available sample chains (constraint_projection.config.robot_config):
    "fanuc_like"   6 DOF   industrial arm, links base_link, link_1 .. link_6
    "planar_3r"    3 DOF   planar arm rotating about z

The end effector (link_6) must stay inside a thin box in front of the robot
while keeping its home orientation within 0.3 rad, and every joint must stay
within its limits.
"""

import logging

import numpy as np

from constraint_projection.config.projection_config import ProjectionConfig
from constraint_projection.constraints import create_constraint
from constraint_projection.kinematics import create_serial_chain
from constraint_projection.projection import (
    enforce_bounds,
    sample_constrained,
    within_bounds,
)
from constraint_projection.types import (
    ConstraintsSpec,
    OrientationConstraintSpec,
    PositionConstraintSpec,
    SE3Pose,
)


def main():
    logging.basicConfig(level=logging.INFO)

    # --- ProjectionConfig (all fields shown with defaults) ---
    config = ProjectionConfig(
        tolerance=1e-4,  # success when ||error|| < tolerance
        max_iterations=50,  # Newton iterations per projection
        damping=1e-3,  # damped least squares, 0 = pseudo-inverse
        max_step=None,  # optional cap on ||dq|| per iteration
    )

    kinematics = create_serial_chain("fanuc_like")
    lower, upper = kinematics.joint_limits
    home = np.zeros(kinematics.num_joints)
    home_pose, _ = kinematics.forward_kinematics(home, "link_6")
    print(f"Home EE position: {home_pose.position}")

    spec = ConstraintsSpec(
        position=[
            PositionConstraintSpec(
                link_name="link_6",
                half_extents=np.array([0.025, 0.2, 0.025]),
                box_pose=SE3Pose(position=np.array([0.9, 0.0, 0.2]), rotation=np.eye(3)),
            )
        ],
        orientation=[
            OrientationConstraintSpec(
                link_name="link_6",
                target_orientation=home_pose.to_quaternion(),
                tolerances=np.array([0.3, 0.3, 0.3]),
            )
        ],
        joint_limits=True,
    )
    constraint = create_constraint(kinematics, spec, config)
    constraint.set_max_iterations(100)
    print(f"Constraint: {constraint!r}")

    # Project the home configuration in place
    q = home.copy()
    if constraint.project(q):
        pose, _ = kinematics.forward_kinematics(q, "link_6")
        print(f"Projected home -> {np.round(q, 3)}, EE at {np.round(pose.position, 3)}")
    else:
        print(f"Projection failed, last iterate {np.round(q, 3)}")

    # Draw a handful of configurations on the manifold
    rng = np.random.default_rng(0)
    for i in range(5):
        result = sample_constrained(constraint, lower, upper, rng=rng)
        tol = constraint.tolerance
        if not (result.success and within_bounds(result.configuration, lower, upper, tol)):
            print(f"Sample {i}: no configuration found")
            continue
        q = enforce_bounds(result.configuration, lower, upper)
        print(
            f"Sample {i}: {np.round(q, 3)} "
            f"(|e|={result.error_norm:.2e}, {result.iterations} iterations)"
        )


if __name__ == "__main__":
    main()
