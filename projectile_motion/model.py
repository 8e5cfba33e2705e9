"""
Projectile Motion Model
=======================
Thin orchestration over the simulation core:

  - holds the launch conditions for the next shot and the model-wide
    air resistance / altitude settings,
  - fires new trajectories,
  - turns frame time into fixed data-point steps (normal or slow playback),
  - forwards ground impacts to registered listeners (e.g. scoring),
  - erases all trajectories on request.

Air resistance and altitude act on every projectile immediately. The other
launch values only affect the next projectile fired; changing them while
projectiles are airborne flags those trajectories as changed in mid-air.
"""

import logging
from dataclasses import fields, replace
from typing import Callable, List, Optional

from .config import SimulationConfig, DEFAULT_CONFIG
from .integrator import GroundImpact, advance
from .projectile import LaunchConditions, ProjectileState
from .tracer import Tracer
from .trajectory import Trajectory

logger = logging.getLogger(__name__)

PLAYBACK_SPEEDS = ('normal', 'slow')

# float slack when spending accumulated time in data-point steps
TIME_TOLERANCE = 1e-9             # s


class ProjectileMotionModel:
    """Owns the trajectories and advances them in creation order."""

    def __init__(self, launch_conditions: Optional[LaunchConditions] = None,
                 air_resistance_on: bool = False, altitude: float = 0.0,
                 config: SimulationConfig = DEFAULT_CONFIG):
        self.config = config
        self.launch_conditions = launch_conditions or LaunchConditions()
        self.air_resistance_on = air_resistance_on
        self.altitude = altitude

        self.trajectories: List[Trajectory] = []
        self.tracer = Tracer(self.trajectories, config=config)

        self.speed = 'normal'
        self.is_playing = True
        self.residual_time = 0.0

        self._ground_impact_listeners: List[Callable[[GroundImpact], None]] = []

    # ── listeners ────────────────────────────────────────────────────────

    def add_ground_impact_listener(self, listener: Callable[[GroundImpact], None]):
        self._ground_impact_listeners.append(listener)

    def remove_ground_impact_listener(self, listener: Callable[[GroundImpact], None]):
        self._ground_impact_listeners.remove(listener)

    # ── launch settings ──────────────────────────────────────────────────

    def set_launch_conditions(self, **changes) -> LaunchConditions:
        """Change launch values for the next shot, e.g. ``mass=10``."""
        valid = {f.name for f in fields(LaunchConditions)}
        unknown = set(changes) - valid
        if unknown:
            raise ValueError(f"Unknown launch parameters: {sorted(unknown)}")

        conditions = replace(self.launch_conditions, **changes)
        conditions.validate()
        if conditions == self.launch_conditions:
            return conditions
        self.launch_conditions = conditions

        for trajectory in self.trajectories:
            if not trajectory.reached_ground:
                trajectory.changed_in_mid_air = True
        return conditions

    def set_speed(self, speed: str):
        if speed not in PLAYBACK_SPEEDS:
            raise ValueError(
                f"Unknown playback speed '{speed}'. Available: {list(PLAYBACK_SPEEDS)}")
        self.speed = speed

    # ── actions ──────────────────────────────────────────────────────────

    def fire(self) -> Trajectory:
        """Launch a projectile with the current launch conditions."""
        conditions = self.launch_conditions
        conditions.validate()
        state = ProjectileState.from_launch(conditions, self.config.gravity)
        trajectory = Trajectory(conditions, state)
        self.trajectories.append(trajectory)
        logger.info("Fired projectile #%d: speed=%.2f m/s, angle=%.1f°, height=%.2f m",
                    len(self.trajectories), conditions.speed,
                    conditions.angle_deg, conditions.height)
        return trajectory

    def erase_all(self):
        """Discard every trajectory. The tracer loses its reading."""
        count = len(self.trajectories)
        self.trajectories.clear()
        self.tracer.update(self.trajectories)
        logger.info("Erased %d trajectories", count)

    def reset(self):
        self.erase_all()
        self.launch_conditions = LaunchConditions()
        self.air_resistance_on = False
        self.altitude = 0.0
        self.speed = 'normal'
        self.is_playing = True
        self.residual_time = 0.0
        self.tracer.reset()

    # ── time ─────────────────────────────────────────────────────────────

    def step(self, dt: float) -> List[GroundImpact]:
        """
        Advance by ``dt`` seconds of wall time.

        Time is accumulated and spent in fixed data-point steps, so samples
        always land on the millisecond grid the tracer reads.
        """
        if not self.is_playing:
            return []

        factor = 1.0 if self.speed == 'normal' else self.config.slow_motion_factor
        self.residual_time += dt * factor

        impacts = []
        step_dt = self.config.data_point_dt
        while self.residual_time >= step_dt - TIME_TOLERANCE:
            impacts.extend(self.step_model_elements(step_dt))
            self.residual_time -= step_dt
        return impacts

    def step_model_elements(self, dt: float) -> List[GroundImpact]:
        """Advance every trajectory by exactly one increment ``dt``."""
        impacts = []
        for trajectory in self.trajectories:
            if trajectory.reached_ground:
                continue
            result = advance(trajectory, dt, self.air_resistance_on,
                             self.altitude, self.config)
            if self.tracer.is_active:
                self.tracer.update_if_within_range(result.sample)
            if result.ground_impact is not None:
                impacts.append(result.ground_impact)
                logger.info("Projectile landed at x=%.2f m after %.2f s",
                            result.ground_impact.x, result.ground_impact.time)
                for listener in self._ground_impact_listeners:
                    listener(result.ground_impact)
        return impacts

    @property
    def airborne(self) -> List[Trajectory]:
        return [t for t in self.trajectories if not t.reached_ground]
