"""
Tests for the tracer probe.
"""

import sys
import os
from dataclasses import replace

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.config import DEFAULT_CONFIG
from projectile_motion.projectile import LaunchConditions, ProjectileState
from projectile_motion.trajectory import Sample, Trajectory
from projectile_motion.tracer import Tracer, is_readable, find_data_point


def make_trajectory(samples, apex_index=None):
    cond = LaunchConditions()
    traj = Trajectory(cond, ProjectileState.from_launch(cond, DEFAULT_CONFIG.gravity))
    for i, s in enumerate(samples):
        traj.add_sample(s, apex_candidate=(i == apex_index))
    return traj


class TestReadable:

    def test_minor_dot_grid(self):
        assert is_readable(Sample(0.3, 1.0, 1.0), 100)
        assert is_readable(Sample(0.30000000000000004, 1.0, 1.0), 100)
        assert not is_readable(Sample(0.31, 1.0, 1.0), 100)

    def test_ground_and_apex(self):
        assert is_readable(Sample(1.2345, 4.0, 0.0), 100)
        assert is_readable(Sample(0.77, 4.0, 3.0, is_apex=True), 100)

    def test_none(self):
        assert not is_readable(None, 100)


class TestTracer:

    def test_empty_set(self):
        tracer = Tracer([])
        assert tracer.move_to(1.0, 1.0) is None
        assert tracer.data_point is None

    def test_snaps_to_readable_sample(self):
        traj = make_trajectory([Sample(0.1, 1.0, 1.0), Sample(0.11, 1.1, 1.05)])
        tracer = Tracer([traj])
        point = tracer.move_to(0.95, 1.0)
        assert point is traj.samples[0]
        assert tracer.data_point is point

    def test_outside_sensing_radius(self):
        traj = make_trajectory([Sample(0.1, 1.0, 1.0)])
        tracer = Tracer([traj])
        assert tracer.move_to(1.25, 1.0) is None
        assert tracer.move_to(1.2, 1.0) is traj.samples[0]

    def test_unreadable_nearest_gives_no_reading(self):
        # nearest sample is off the grid; the readable one nearby is not a fallback
        traj = make_trajectory([Sample(0.1, 1.0, 1.0), Sample(0.11, 1.1, 1.0)])
        tracer = Tracer([traj])
        assert tracer.move_to(1.12, 1.0) is None

    def test_apex_beats_closer_sample(self):
        traj = make_trajectory(
            [Sample(0.1, 4.9, 4.0), Sample(0.2, 5.0, 5.0), Sample(0.3, 5.1, 5.0)],
            apex_index=1,
        )
        tracer = Tracer([traj])
        point = tracer.move_to(5.12, 5.0)
        assert point is traj.apex_point
        assert point.distance_to(5.12, 5.0) > traj.samples[2].distance_to(5.12, 5.0)

    def test_ground_sample_is_readable(self):
        traj = make_trajectory([Sample(0.9, 8.0, 0.5), Sample(0.9234, 8.3, 0.0)])
        tracer = Tracer([traj])
        assert tracer.move_to(8.3, 0.1) is traj.samples[1]

    def test_most_recent_trajectory_first(self):
        older = make_trajectory([Sample(0.5, 2.0, 2.0)])
        newer = make_trajectory([Sample(0.7, 2.1, 2.0)])
        tracer = Tracer([older, newer])
        # the older sample is closer, but the newer trajectory is searched first
        assert tracer.move_to(2.0, 2.0) is newer.samples[0]

    def test_falls_through_to_older_trajectory(self):
        older = make_trajectory([Sample(0.5, 2.0, 2.0)])
        newer = make_trajectory([Sample(0.7, 9.0, 9.0)])
        tracer = Tracer([older, newer])
        assert tracer.move_to(2.0, 2.0) is older.samples[0]

    def test_sees_list_mutations(self):
        trajectories = []
        tracer = Tracer(trajectories)
        trajectories.append(make_trajectory([Sample(0.5, 2.0, 2.0)]))
        assert tracer.move_to(2.0, 2.0) is not None
        trajectories.clear()
        assert tracer.update() is None
        assert tracer.data_point is None

    def test_alternate_radius(self):
        traj = make_trajectory([Sample(0.1, 1.0, 1.0)])
        tracer = Tracer([traj], config=replace(DEFAULT_CONFIG, sensing_radius=1.0))
        assert tracer.move_to(1.9, 1.0) is traj.samples[0]

    def test_find_data_point_is_pure(self):
        traj = make_trajectory([Sample(0.1, 1.0, 1.0)])
        assert find_data_point((1.0, 1.1), [traj]) is traj.samples[0]
        assert find_data_point((1.0, 1.1), [traj], sensing_radius=0.05) is None
        assert find_data_point((1.0, 1.1), []) is None

    def test_update_if_within_range(self):
        tracer = Tracer([], x=1.0, y=1.0)
        first = Sample(0.1, 1.0, 1.05)
        assert tracer.update_if_within_range(first) is first
        # unreadable or far samples keep the current reading
        assert tracer.update_if_within_range(Sample(0.11, 1.0, 1.0)) is first
        assert tracer.update_if_within_range(Sample(0.2, 5.0, 5.0)) is first
        assert tracer.update_if_within_range(None) is first

    def test_reset(self):
        traj = make_trajectory([Sample(0.1, 1.0, 1.0)])
        tracer = Tracer([traj], x=-1.0, y=-2.0)
        tracer.is_active = True
        tracer.move_to(1.0, 1.0)
        tracer.reset()
        assert tracer.data_point is None
        assert not tracer.is_active
        assert list(tracer.position) == [-1.0, -2.0]


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
