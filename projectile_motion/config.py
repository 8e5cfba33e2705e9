"""
Simulation Configuration
========================
Constants that used to be global knobs of the simulation (gravity, the
sampling grid the tracer reads, the tracer's sensing radius, playback
speeds) are gathered in one immutable ``SimulationConfig`` that is passed
into the integrator, the tracer and the model.

Build an alternate config for tests or experiments with
``dataclasses.replace(DEFAULT_CONFIG, gravity=1.62)``.
"""

from dataclasses import dataclass


# ── Physical constants ────────────────────────────────────────────────────
ACCELERATION_DUE_TO_GRAVITY = 9.81   # m/s²

# ── Sampling grid (milliseconds) ──────────────────────────────────────────
TIME_PER_DATA_POINT = 10     # one model step
TIME_PER_MINOR_DOT = 100     # samples on this grid are readable by the tracer
TIME_PER_MAJOR_DOT = 1000

# ── Tracer ────────────────────────────────────────────────────────────────
SENSING_RADIUS = 0.2         # m

# ── Playback ──────────────────────────────────────────────────────────────
SLOW_MOTION_FACTOR = 0.33


@dataclass(frozen=True)
class SimulationConfig:
    """Tunable constants shared by the integrator, tracer and model."""
    gravity: float = ACCELERATION_DUE_TO_GRAVITY          # m/s², positive
    time_per_data_point: int = TIME_PER_DATA_POINT        # ms
    time_per_minor_dot: int = TIME_PER_MINOR_DOT          # ms
    time_per_major_dot: int = TIME_PER_MAJOR_DOT          # ms
    sensing_radius: float = SENSING_RADIUS                # m
    slow_motion_factor: float = SLOW_MOTION_FACTOR

    def __post_init__(self):
        if self.gravity <= 0:
            raise ValueError(f"gravity must be positive, got {self.gravity}")
        if self.time_per_data_point <= 0 or self.time_per_minor_dot <= 0:
            raise ValueError("time grid intervals must be positive")
        if self.sensing_radius < 0:
            raise ValueError(f"sensing_radius must be >= 0, got {self.sensing_radius}")

    @property
    def data_point_dt(self) -> float:
        """Model step in seconds."""
        return self.time_per_data_point / 1000.0


DEFAULT_CONFIG = SimulationConfig()
