"""
Validation Against Reference Solutions
======================================
Checks the fixed-step integrator against two independent references:

  - Closed-form kinematics, for launches without air resistance:
        T = (vy + sqrt(vy² + 2 g h)) / g,   R = vx T,   H = h + vy² / 2g
  - A high-accuracy solution of the same drag equations computed with
    SciPy's adaptive ``solve_ivp`` (RK45, tight tolerances) and a terminal
    ground event, for launches with air resistance.

The reference solver is only used here; the simulation itself always steps
with a fixed increment.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from scipy.integrate import solve_ivp

from .atmosphere import density
from .config import SimulationConfig, DEFAULT_CONFIG
from .integrator import advance
from .projectile import LaunchConditions, ProjectileState, cross_sectional_area
from .trajectory import Trajectory


# (conditions, air_resistance_on, altitude_m)
REFERENCE_CASES = [
    (LaunchConditions(height=0.0, angle_deg=45.0, speed=20.0), False, 0.0),
    (LaunchConditions(height=10.0, angle_deg=30.0, speed=25.0), False, 0.0),
    (LaunchConditions(height=0.0, angle_deg=60.0, speed=40.0), False, 0.0),
    (LaunchConditions.from_preset('cannonball', angle_deg=45.0, speed=50.0), True, 0.0),
    (LaunchConditions.from_preset('pumpkin', angle_deg=80.0, speed=18.0), True, 0.0),
    (LaunchConditions.from_preset('football', angle_deg=35.0, speed=30.0), True, 3000.0),
    (LaunchConditions.from_preset('human', height=5.0, angle_deg=20.0, speed=15.0), True, 12000.0),
]


@dataclass
class FlightMetrics:
    range: float          # m
    max_height: float     # m
    flight_time: float    # s


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    conditions: LaunchConditions
    air_resistance_on: bool
    altitude: float
    reference: FlightMetrics
    simulated: FlightMetrics
    range_error_pct: float
    height_error_pct: float
    time_error_pct: float


def analytic_solution(conditions: LaunchConditions,
                      gravity: float = DEFAULT_CONFIG.gravity) -> FlightMetrics:
    """Exact drag-free range, apex height and flight time."""
    vx, vy = conditions.initial_velocity_vector()
    h = conditions.height
    flight_time = (vy + np.sqrt(vy * vy + 2 * gravity * h)) / gravity
    max_height = h + vy * vy / (2 * gravity) if vy > 0 else h
    return FlightMetrics(float(vx * flight_time), float(max_height), float(flight_time))


def reference_solution(conditions: LaunchConditions, air_resistance_on: bool = True,
                       altitude: float = 0.0,
                       gravity: float = DEFAULT_CONFIG.gravity,
                       max_time: float = 120.0) -> FlightMetrics:
    """
    Integrate the drag equations with an adaptive high-order solver until
    the projectile returns to y = 0.
    """
    rho = density(altitude, air_resistance_on)
    k = 0.5 * rho * cross_sectional_area(conditions.diameter) \
        * conditions.drag_coefficient / conditions.mass

    def rhs(t, s):
        _, _, vx, vy = s
        speed = np.hypot(vx, vy)
        return [vx, vy, -k * speed * vx, -gravity - k * speed * vy]

    def hit_ground(t, s):
        return s[1]
    hit_ground.terminal = True
    hit_ground.direction = -1

    vx0, vy0 = conditions.initial_velocity_vector()
    sol = solve_ivp(rhs, (0.0, max_time), [0.0, conditions.height, vx0, vy0],
                    method='RK45', events=hit_ground, dense_output=True,
                    rtol=1e-10, atol=1e-10)

    if sol.t_events[0].size:
        t_end = float(sol.t_events[0][0])
        x_end = float(sol.y_events[0][0][0])
    else:
        t_end = float(sol.t[-1])
        x_end = float(sol.y[0, -1])

    t_fine = np.linspace(0.0, t_end, 2000)
    max_height = float(np.max(sol.sol(t_fine)[1]))
    return FlightMetrics(x_end, max_height, t_end)


def simulate(conditions: LaunchConditions, air_resistance_on: bool = False,
             altitude: float = 0.0, dt: float = None,
             config: SimulationConfig = DEFAULT_CONFIG,
             max_steps: int = 1_000_000) -> Trajectory:
    """Run one launch to the ground with the fixed-step integrator."""
    dt = config.data_point_dt if dt is None else dt
    state = ProjectileState.from_launch(conditions, config.gravity)
    trajectory = Trajectory(conditions, state)
    for _ in range(max_steps):
        result = advance(trajectory, dt, air_resistance_on, altitude, config)
        if result.ground_reached:
            break
    return trajectory


def _pct(sim, ref):
    return 100.0 * (sim - ref) / ref if ref else 0.0


def validate_against_reference(cases: Sequence[Tuple] = REFERENCE_CASES,
                               dt: float = None,
                               config: SimulationConfig = DEFAULT_CONFIG,
                               verbose: bool = True) -> List[ValidationResult]:
    """
    Simulate each case and compare range, apex height and flight time with
    the analytic (no drag) or adaptive-solver (drag) reference.
    """
    results = []

    if verbose:
        print(f"\n{'='*78}")
        print(f"  VALIDATION: fixed-step integrator vs reference")
        print(f"{'='*78}")
        print(f"{'Drag':>5} {'Alt':>6} {'Ref R':>9} {'Sim R':>9} {'Err %':>7} "
              f"{'Ref H':>8} {'Sim H':>8} {'Err %':>7} "
              f"{'Ref T':>6} {'Sim T':>6} {'Err %':>7}")
        print("-" * 78)

    for conditions, air_resistance_on, altitude in cases:
        if air_resistance_on:
            ref = reference_solution(conditions, True, altitude, config.gravity)
        else:
            ref = analytic_solution(conditions, config.gravity)

        traj = simulate(conditions, air_resistance_on, altitude, dt, config)
        sim = FlightMetrics(traj.landing_x, traj.max_height, traj.flight_time)

        vr = ValidationResult(
            conditions=conditions,
            air_resistance_on=air_resistance_on,
            altitude=altitude,
            reference=ref,
            simulated=sim,
            range_error_pct=_pct(sim.range, ref.range),
            height_error_pct=_pct(sim.max_height, ref.max_height),
            time_error_pct=_pct(sim.flight_time, ref.flight_time),
        )
        results.append(vr)

        if verbose:
            print(f"{'on' if air_resistance_on else 'off':>5} {altitude:>6.0f} "
                  f"{ref.range:>9.2f} {sim.range:>9.2f} {vr.range_error_pct:>+7.2f} "
                  f"{ref.max_height:>8.2f} {sim.max_height:>8.2f} {vr.height_error_pct:>+7.2f} "
                  f"{ref.flight_time:>6.2f} {sim.flight_time:>6.2f} {vr.time_error_pct:>+7.2f}")

    if verbose:
        avg_range_err = np.mean([abs(r.range_error_pct) for r in results])
        print("-" * 78)
        print(f"  Mean absolute range error: {avg_range_err:.3f}%")
        status = "✓ PASS" if avg_range_err < 1.0 else "✗ CHECK TIMESTEP"
        print(f"  Status: {status}")
        print(f"{'='*78}\n")

    return results


if __name__ == "__main__":
    validate_against_reference(verbose=True)
