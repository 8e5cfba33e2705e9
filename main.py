#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE MOTION SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes a demonstration pipeline:
    1. Atmosphere model table
    2. Reference launch (no air resistance) and its ground impact
    3. Air resistance comparison at several altitudes
    4. Validation against closed-form and adaptive-solver references
    5. Tracer tool readings along a trajectory
    6. Plots (trajectories, atmosphere profile)

  All outputs saved to outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip plots
    python main.py --debug      # Verbose logging
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from projectile_motion.atmosphere import temperature, pressure, density
from projectile_motion.logging_config import setup_logging
from projectile_motion.model import ProjectileMotionModel
from projectile_motion.projectile import LaunchConditions, PROJECTILE_TYPES
from projectile_motion.trajectory_io import to_state_object
from projectile_motion.validation import validate_against_reference, simulate


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def run_until_landed(model, frame_dt=1 / 60, max_frames=100_000):
    for _ in range(max_frames):
        model.step(frame_dt)
        if not model.airborne:
            break


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    setup_logging(logging.DEBUG if '--debug' in sys.argv else logging.WARNING)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Atmosphere Model")
    print(f"  {'Alt (m)':>8} {'T (°C)':>8} {'P (kPa)':>9} {'ρ (kg/m³)':>11}")
    for h in [0, 1000, 5000, 10000, 11000, 20000, 25000, 30000]:
        print(f"  {h:>8} {temperature(h):>8.2f} {pressure(h):>9.3f} {density(h):>11.5f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Reference launch
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Reference Launch (45°, 20 m/s, no air resistance)")
    model = ProjectileMotionModel(LaunchConditions(height=0.0, angle_deg=45.0, speed=20.0))
    landings = []
    model.add_ground_impact_listener(landings.append)
    trajectory = model.fire()
    run_until_landed(model)
    print(trajectory.summary())
    print(f"  Ground impact event: x = {landings[0].x:.3f} m")
    print(f"  Exported state: {to_state_object(trajectory)}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Air resistance
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Air Resistance (cannonball, 45°, 50 m/s)")
    cond = LaunchConditions.from_preset('cannonball', angle_deg=45.0, speed=50.0)
    vacuum = simulate(cond, air_resistance_on=False)
    print(f"  {'No drag':<20s}  Range: {vacuum.landing_x:>8.2f} m  "
          f"Apex: {vacuum.max_height:>7.2f} m  ToF: {vacuum.flight_time:>5.2f} s")
    for altitude in [0.0, 5000.0, 15000.0, 30000.0]:
        traj = simulate(cond, air_resistance_on=True, altitude=altitude)
        print(f"  {f'Drag @ {altitude:.0f} m':<20s}  Range: {traj.landing_x:>8.2f} m  "
              f"Apex: {traj.max_height:>7.2f} m  ToF: {traj.flight_time:>5.2f} s")

    print()
    for key, data in PROJECTILE_TYPES.items():
        traj = simulate(LaunchConditions.from_preset(key, angle_deg=45.0, speed=30.0),
                        air_resistance_on=True)
        print(f"  {data['name']:<15s}  Range @ 30 m/s: {traj.landing_x:>7.2f} m")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Validation")
    validate_against_reference(verbose=True)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Tracer
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Tracer Tool")
    model.set_launch_conditions(angle_deg=60.0, speed=15.0)
    second = model.fire()
    run_until_landed(model)
    model.tracer.is_active = True
    apex = second.apex_point
    probes = [(apex.x + 0.05, apex.y), (second.landing_x, 0.1), (5.0, 5.0), (100.0, 100.0)]
    for x, y in probes:
        point = model.tracer.move_to(x, y)
        if point is None:
            print(f"  probe ({x:>7.2f}, {y:>6.2f}) → no reading")
        else:
            tag = ' (apex)' if point.is_apex else ''
            print(f"  probe ({x:>7.2f}, {y:>6.2f}) → t={point.time:.2f} s  "
                  f"x={point.x:.2f} m  y={point.y:.2f} m{tag}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Plots
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 6: Plots")
        from projectile_motion.visualization import (
            plot_trajectories, plot_atmosphere, ensure_output_dir,
        )
        import matplotlib.pyplot as plt

        out = ensure_output_dir('outputs')
        fig = plot_trajectories(model.trajectories, model.tracer,
                                save_path=f'{out}/01_trajectories.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/01_trajectories.png")
        fig = plot_atmosphere(save_path=f'{out}/02_atmosphere_profile.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/02_atmosphere_profile.png")

    model.erase_all()
    print(f"\n  Done in {time.time() - start_time:.2f} s")


if __name__ == "__main__":
    main()
