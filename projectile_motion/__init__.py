"""
Projectile Motion Simulator
===========================
Simulates a projectile fired from a cannon under gravity and optional
quadratic air drag:
  - Altitude-dependent air density (three-layer atmosphere fit)
  - Fixed-step integration with exact ground-contact resolution
  - Time-ordered sample trail per launch with apex detection
  - Tracer probe that snaps to the nearest readable sample
"""

from .config import SimulationConfig, DEFAULT_CONFIG
from .atmosphere import temperature, pressure, density, atmosphere_profile
from .projectile import (
    LaunchConditions, ProjectileState, PROJECTILE_TYPES, cross_sectional_area,
)
from .trajectory import Sample, Trajectory
from .integrator import (
    step, advance, resolve_ground, time_to_ground, GroundImpact, StepResult,
)
from .tracer import Tracer, is_readable, find_data_point
from .trajectory_io import to_state_object, from_state_object, set_value
from .model import ProjectileMotionModel
from .logging_config import setup_logging

__version__ = "1.0.0"
__all__ = [
    'SimulationConfig', 'DEFAULT_CONFIG',
    'temperature', 'pressure', 'density', 'atmosphere_profile',
    'LaunchConditions', 'ProjectileState', 'PROJECTILE_TYPES',
    'cross_sectional_area',
    'Sample', 'Trajectory',
    'step', 'advance', 'resolve_ground', 'time_to_ground',
    'GroundImpact', 'StepResult',
    'Tracer', 'is_readable', 'find_data_point',
    'to_state_object', 'from_state_object', 'set_value',
    'ProjectileMotionModel',
    'setup_logging',
]
