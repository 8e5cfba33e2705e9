"""
Numerical Integration Engine
=============================
Advances one projectile by one fixed time increment under gravity and
quadratic air drag.

Equations of motion (drag uses the velocity at the start of the step):
    F_drag = ½ ρ A Cd |v| v
    a      = -g ŷ - F_drag / m
    x'     = x + v dt + ½ a dt²
    v'     = v + a dt

When a step would carry the projectile through the ground plane, the exact
crossing time inside that step is solved in closed form and the projectile
is pinned at y = 0.

Ground contact is reported back to the caller as a ``GroundImpact`` value
rather than through a callback into the owning model.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .atmosphere import density
from .config import SimulationConfig, DEFAULT_CONFIG
from .projectile import ProjectileState, cross_sectional_area
from .trajectory import Sample, Trajectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroundImpact:
    """Emitted once per trajectory at the moment it lands."""
    x: float        # m, landing distance
    time: float     # s since fired


@dataclass
class StepResult:
    """Outcome of one integration step."""
    state: ProjectileState
    sample: Optional[Sample]                  # None if the state was already grounded
    ground_impact: Optional[GroundImpact] = None
    apex_crossed: bool = False                # vy went from > 0 to <= 0 this step

    @property
    def ground_reached(self) -> bool:
        return self.ground_impact is not None


def _check_inputs(state: ProjectileState, dt: float):
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if state.mass <= 0:
        raise ValueError(f"mass must be positive, got {state.mass}")
    if state.diameter <= 0:
        raise ValueError(f"diameter must be positive, got {state.diameter}")


def compute_acceleration(state: ProjectileState, rho: float,
                         gravity: float) -> tuple:
    """
    Acceleration [ax, ay] (m/s²) from gravity and drag.

    Drag on each axis is proportional to speed times that axis' velocity
    component, so it always opposes the motion.
    """
    area = cross_sectional_area(state.diameter)
    k = 0.5 * rho * area * state.drag_coefficient * state.speed
    drag_x = k * state.vx
    drag_y = k * state.vy
    ax = -drag_x / state.mass
    ay = -gravity - drag_y / state.mass
    return ax, ay


def time_to_ground(y: float, vy: float, ay: float) -> float:
    """
    Time (s) until y + vy·τ + ½·ay·τ² reaches zero, taking the root nearer
    to zero.

    A negative discriminant cannot occur for a projectile above the ground
    that crosses it within the step, but if it does the projectile lands
    immediately (τ = 0). With ay == 0 the motion is linear.
    """
    if ay == 0:
        if vy == 0:
            return 0.0
        return max(-y / vy, 0.0)

    discriminant = vy * vy - 2 * ay * y
    if discriminant < 0:
        logger.warning(
            "Negative discriminant in ground resolution "
            "(y=%.6g, vy=%.6g, ay=%.6g); landing in place", y, vy, ay)
        return 0.0

    return (-np.sqrt(discriminant) - vy) / ay


def resolve_ground(state: ProjectileState, ax: float, ay: float) -> StepResult:
    """
    Land a projectile whose next step would cross y = 0.

    ``state`` is the pre-step state; ``ax`` and ``ay`` the acceleration
    computed for this step. The state is moved to the exact crossing point,
    flagged as grounded and stopped.
    """
    tau = float(time_to_ground(state.y, state.vy, ay))

    x_ground = state.x + state.vx * tau + 0.5 * ax * tau * tau
    vx_ground = state.vx + ax * tau
    vy_ground = state.vy + ay * tau

    state.ax = ax
    state.ay = ay
    state.time += tau
    state.x = x_ground
    state.y = 0.0
    state.reached_ground = True
    state.stop()

    sample = Sample(state.time, x_ground, 0.0, vx_ground, vy_ground)
    logger.debug("Reached ground at x=%.3f m, t=%.3f s", x_ground, state.time)
    return StepResult(state, sample, GroundImpact(x_ground, state.time))


def step(state: ProjectileState, dt: float, air_resistance_on: bool = False,
         altitude: float = 0.0,
         config: SimulationConfig = DEFAULT_CONFIG) -> StepResult:
    """
    Advance ``state`` in place by one time increment ``dt`` (s).

    Parameters
    ----------
    state : ProjectileState
        The projectile to advance; mutated in place.
    dt : float
        Time increment (s), must be positive.
    air_resistance_on : bool
        If False the air density is zero and only gravity acts.
    altitude : float
        Altitude (m) of the launch site, which sets the air density.
    config : SimulationConfig
        Supplies gravity.

    Returns
    -------
    StepResult
        The new state, the emitted sample and, if the projectile landed
        during this step, a ``GroundImpact``.
    """
    _check_inputs(state, dt)

    if state.reached_ground:
        state.stop()
        return StepResult(state, None)

    rho = density(altitude, air_resistance_on)
    ax, ay = compute_acceleration(state, rho, config.gravity)

    new_x = state.x + state.vx * dt + 0.5 * ax * dt * dt
    new_y = state.y + state.vy * dt + 0.5 * ay * dt * dt
    new_vx = state.vx + ax * dt
    new_vy = state.vy + ay * dt

    if new_y <= 0:
        return resolve_ground(state, ax, ay)

    apex_crossed = state.vy > 0 and new_vy <= 0

    state.ax = ax
    state.ay = ay
    state.time += dt
    state.x = new_x
    state.y = new_y
    state.vx = new_vx
    state.vy = new_vy
    state.speed = float(np.hypot(new_vx, new_vy))

    sample = Sample(state.time, new_x, new_y, new_vx, new_vy)
    return StepResult(state, sample, apex_crossed=apex_crossed)


def advance(trajectory: Trajectory, dt: float, air_resistance_on: bool = False,
            altitude: float = 0.0,
            config: SimulationConfig = DEFAULT_CONFIG) -> StepResult:
    """
    Step a trajectory's projectile and record the emitted sample in its log.

    The returned result carries the sample as stored (with the apex flag
    applied when this step produced the trajectory's apex).
    """
    result = step(trajectory.state, dt, air_resistance_on, altitude, config)
    if result.sample is not None:
        result.sample = trajectory.add_sample(result.sample, result.apex_crossed)
    return result
