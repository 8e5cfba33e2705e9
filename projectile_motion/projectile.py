"""
Projectile Definition & Launch Conditions
=========================================
Defines the launch configuration chosen by the user and the mutable
kinematic state of one projectile in flight.

Coordinate system:
  x = horizontal distance from the cannon (m)
  y = height above the ground plane (m, up positive)
"""

import numpy as np
from dataclasses import dataclass


# ── Launch defaults (a pumpkin fired steeply) ─────────────────────────────
DEFAULT_HEIGHT = 0.0              # m
DEFAULT_ANGLE = 80.0              # degrees
DEFAULT_SPEED = 18.0              # m/s
DEFAULT_MASS = 5.0                # kg
DEFAULT_DIAMETER = 0.37           # m
DEFAULT_DRAG_COEFFICIENT = 0.6

# ── Allowed ranges for launch values (inclusive) ──────────────────────────
SPEED_RANGE = (0.0, 50.0)         # m/s
ANGLE_RANGE = (-90.0, 180.0)      # degrees
MASS_RANGE = (0.04, 100.0)        # kg
DIAMETER_RANGE = (0.1, 2.5)       # m


# ══════════════════════════════════════════════════════════════════════════
#  Projectile presets: mass kg, diameter m, drag coefficient
# ══════════════════════════════════════════════════════════════════════════

PROJECTILE_TYPES = {
    'cannonball': {
        'name': 'Cannonball',
        'mass': 17.6,
        'diameter': 0.18,
        'drag_coefficient': 0.47,
    },
    'pumpkin': {
        'name': 'Pumpkin',
        'mass': 5.0,
        'diameter': 0.37,
        'drag_coefficient': 0.6,
    },
    'bowling_ball': {
        'name': 'Bowling Ball',
        'mass': 6.8,
        'diameter': 0.22,
        'drag_coefficient': 0.47,
    },
    'football': {
        'name': 'Football',
        'mass': 0.41,
        'diameter': 0.17,
        'drag_coefficient': 0.2,
    },
    'human': {
        'name': 'Human',
        'mass': 70.0,
        'diameter': 0.5,
        'drag_coefficient': 1.0,
    },
}


def cross_sectional_area(diameter: float) -> float:
    """Frontal area (m²) of a round projectile: A = π d² / 4."""
    return np.pi * diameter * diameter / 4


@dataclass
class LaunchConditions:
    """
    Everything chosen before pressing fire.

    Air resistance and altitude are not part of a launch: they belong to the
    model and change the path of projectiles already in flight.
    """
    height: float = DEFAULT_HEIGHT                    # m above ground
    angle_deg: float = DEFAULT_ANGLE                  # degrees above horizontal
    speed: float = DEFAULT_SPEED                      # m/s
    mass: float = DEFAULT_MASS                        # kg
    diameter: float = DEFAULT_DIAMETER                # m
    drag_coefficient: float = DEFAULT_DRAG_COEFFICIENT

    @classmethod
    def from_preset(cls, key: str, **overrides) -> 'LaunchConditions':
        """Launch conditions using a preset's mass, diameter and drag."""
        if key not in PROJECTILE_TYPES:
            raise ValueError(
                f"Unknown projectile type '{key}'. "
                f"Available: {list(PROJECTILE_TYPES.keys())}"
            )
        data = PROJECTILE_TYPES[key]
        params = {
            'mass': data['mass'],
            'diameter': data['diameter'],
            'drag_coefficient': data['drag_coefficient'],
        }
        params.update(overrides)
        return cls(**params)

    def initial_velocity_vector(self) -> np.ndarray:
        """Convert launch speed + angle to [vx, vy]."""
        angle = np.radians(self.angle_deg)
        return np.array([self.speed * np.cos(angle),
                         self.speed * np.sin(angle)])

    def validate(self) -> None:
        """Raise ValueError if any launch value is outside its allowed range."""
        checks = [
            ('speed', self.speed, SPEED_RANGE),
            ('angle_deg', self.angle_deg, ANGLE_RANGE),
            ('mass', self.mass, MASS_RANGE),
            ('diameter', self.diameter, DIAMETER_RANGE),
        ]
        for name, value, (lo, hi) in checks:
            if not lo <= value <= hi:
                raise ValueError(f"{name}={value} is outside [{lo}, {hi}]")
        if self.height < 0:
            raise ValueError(f"height must be >= 0, got {self.height}")
        if self.drag_coefficient < 0:
            raise ValueError(
                f"drag_coefficient must be >= 0, got {self.drag_coefficient}")


@dataclass
class ProjectileState:
    """
    Kinematic state of one projectile, owned by its trajectory.

    Once ``reached_ground`` is set the state is never integrated again and
    its velocity stays at zero.
    """
    x: float
    y: float
    vx: float
    vy: float
    mass: float
    diameter: float
    drag_coefficient: float
    ax: float = 0.0
    ay: float = 0.0
    speed: float = 0.0
    time: float = 0.0                 # s since fired
    reached_ground: bool = False

    def __post_init__(self):
        self.speed = float(np.hypot(self.vx, self.vy))

    @classmethod
    def from_launch(cls, conditions: LaunchConditions,
                    gravity: float) -> 'ProjectileState':
        vx, vy = conditions.initial_velocity_vector()
        return cls(
            x=0.0,
            y=float(conditions.height),
            vx=float(vx),
            vy=float(vy),
            mass=conditions.mass,
            diameter=conditions.diameter,
            drag_coefficient=conditions.drag_coefficient,
            ay=-gravity,
        )

    def stop(self) -> None:
        """Pin the projectile on the ground."""
        self.vx = 0.0
        self.vy = 0.0
        self.speed = 0.0
