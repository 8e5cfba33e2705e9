"""
Tests for the model: firing, fixed-step time accumulation, erasing and
ground impact events.
"""

import sys
import os
from dataclasses import replace

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.config import DEFAULT_CONFIG
from projectile_motion.model import ProjectileMotionModel
from projectile_motion.projectile import LaunchConditions


def run_until_landed(model, frame_dt=1 / 60, max_frames=10_000):
    for _ in range(max_frames):
        model.step(frame_dt)
        if not model.airborne:
            return
    raise AssertionError("projectiles did not land")


class TestModel:

    def test_range_scenario_emits_one_impact(self):
        model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=45.0, speed=20.0))
        events = []
        model.add_ground_impact_listener(events.append)
        model.fire()
        run_until_landed(model)
        for _ in range(30):
            model.step(1 / 60)
        assert len(events) == 1
        assert events[0].x == pytest.approx(20.0 ** 2 / 9.81, rel=1e-9)
        assert abs(events[0].x - 40.77) < 0.01

    def test_removed_listener_is_not_called(self):
        model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=45.0, speed=20.0))
        kept, removed = [], []
        model.add_ground_impact_listener(kept.append)
        model.add_ground_impact_listener(removed.append)
        model.remove_ground_impact_listener(removed.append)
        model.fire()
        run_until_landed(model)
        assert len(kept) == 1
        assert removed == []

    def test_samples_on_data_point_grid(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=70.0, speed=15.0))
        traj = model.fire()
        run_until_landed(model)
        for s in traj.samples[:-1]:
            assert s.time_ms % DEFAULT_CONFIG.time_per_data_point == 0
        assert traj.samples[-1].y == 0

    def test_manual_single_step(self):
        model = ProjectileMotionModel()
        traj = model.fire()
        model.step_model_elements(DEFAULT_CONFIG.data_point_dt)
        assert len(traj) == 1
        assert traj.samples[0].time_ms == DEFAULT_CONFIG.time_per_data_point

    def test_paused_model_does_not_advance(self):
        model = ProjectileMotionModel()
        traj = model.fire()
        model.is_playing = False
        model.step(1.0)
        assert len(traj) == 0

    def test_slow_motion(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=80.0, speed=30.0))
        traj = model.fire()
        model.set_speed('slow')
        model.step(1.0)
        assert len(traj) == 33
        assert traj.samples[-1].time_ms == 330

    def test_frame_time_spent_without_drift(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=80.0, speed=30.0))
        traj = model.fire()
        model.step(0.03)
        assert len(traj) == 3
        for _ in range(60):
            model.step(1 / 60)
        assert len(traj) == 103
        assert traj.samples[-1].time_ms == 1030

    def test_unknown_speed(self):
        with pytest.raises(ValueError):
            ProjectileMotionModel().set_speed('fast')

    def test_trajectories_advanced_in_creation_order(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=60.0, speed=20.0))
        first = model.fire()
        model.step(0.5)
        second = model.fire()
        model.step(0.5)
        assert first.flight_time > second.flight_time
        assert model.trajectories == [first, second]

    def test_erase_all_mid_flight(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=45.0, speed=20.0))
        first = model.fire()
        model.step(1.0)
        model.fire()
        model.step(0.5)
        assert len(model.airborne) == 2

        model.tracer.is_active = True
        assert model.tracer.move_to(first.apex_point.x, first.apex_point.y) is first.apex_point

        model.erase_all()
        assert model.trajectories == []
        assert model.tracer.data_point is None
        assert model.tracer.update() is None
        assert model.tracer.move_to(first.apex_point.x, first.apex_point.y) is None

    def test_tracer_picks_up_new_samples(self):
        model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=45.0, speed=20.0))
        model.tracer.is_active = True
        model.tracer.move_to(20.0 ** 2 / 9.81, 0.0)
        model.fire()
        run_until_landed(model)
        assert model.tracer.data_point is not None
        assert model.tracer.data_point.y == 0.0

    def test_inactive_tracer_ignores_new_samples(self):
        model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=45.0, speed=20.0))
        model.tracer.move_to(20.0 ** 2 / 9.81, 0.0)
        model.fire()
        run_until_landed(model)
        assert model.tracer.data_point is None

    def test_changed_in_mid_air(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=45.0, speed=10.0))
        landed = model.fire()
        run_until_landed(model)
        flying = model.fire()
        model.step(0.2)

        model.set_launch_conditions(mass=10.0)
        assert flying.changed_in_mid_air
        assert not landed.changed_in_mid_air
        # only the next projectile uses the new mass
        assert flying.mass == LaunchConditions().mass
        assert model.fire().mass == 10.0

    def test_unchanged_launch_values_do_not_flag(self):
        model = ProjectileMotionModel(LaunchConditions(angle_deg=45.0, speed=10.0))
        flying = model.fire()
        model.step(0.2)
        model.set_launch_conditions(mass=model.launch_conditions.mass)
        assert not flying.changed_in_mid_air

    def test_rejects_invalid_launch_changes(self):
        model = ProjectileMotionModel()
        with pytest.raises(ValueError):
            model.set_launch_conditions(speed=100.0)
        with pytest.raises(ValueError):
            model.set_launch_conditions(colour='red')
        assert model.launch_conditions == LaunchConditions()

    def test_air_resistance_applies_to_projectiles_in_flight(self):
        cond = LaunchConditions.from_preset('pumpkin', angle_deg=45.0, speed=30.0)
        calm = ProjectileMotionModel(cond)
        calm_traj = calm.fire()
        run_until_landed(calm)

        model = ProjectileMotionModel(cond)
        traj = model.fire()
        model.step(0.5)
        model.air_resistance_on = True
        run_until_landed(model)
        assert traj.landing_x < calm_traj.landing_x

    def test_reset(self):
        model = ProjectileMotionModel(LaunchConditions(speed=30.0), air_resistance_on=True)
        model.fire()
        model.set_speed('slow')
        model.reset()
        assert model.trajectories == []
        assert model.launch_conditions == LaunchConditions()
        assert not model.air_resistance_on
        assert model.speed == 'normal'

    def test_alternate_config(self):
        config = replace(DEFAULT_CONFIG, gravity=1.62)
        model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=45.0, speed=10.0),
                                      config=config)
        model.fire()
        impacts = []
        while not impacts:
            impacts = model.step(0.1)
        assert impacts[0].x == pytest.approx(100.0 / 1.62, rel=1e-9)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
