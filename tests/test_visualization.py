"""
Tests for the offline trajectory plots.
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib.pyplot as plt

from projectile_motion.model import ProjectileMotionModel
from projectile_motion.projectile import LaunchConditions
from projectile_motion.visualization import plot_trajectories


def landed_model(angle_deg):
    model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=angle_deg, speed=15.0))
    model.fire()
    while model.airborne:
        model.step(0.1)
    return model


class TestPlotTrajectories:

    def test_backward_launch_stays_in_view(self):
        model = landed_model(135.0)
        traj = model.trajectories[0]
        assert traj.landing_x < 0

        fig = plot_trajectories(model.trajectories)
        left, right = fig.axes[0].get_xlim()
        assert left <= traj.landing_x
        assert right >= traj.samples[0].x
        plt.close(fig)

    def test_forward_launch(self):
        model = landed_model(45.0)
        fig = plot_trajectories(model.trajectories, tracer=model.tracer)
        left, right = fig.axes[0].get_xlim()
        traj = model.trajectories[0]
        assert left <= traj.samples[0].x
        assert right >= traj.landing_x
        plt.close(fig)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
