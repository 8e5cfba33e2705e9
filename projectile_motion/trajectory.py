"""
Trajectory Sample Log
=====================
A trajectory is the record of one launch: its launch conditions, the live
projectile state, and an append-only, time-ordered list of samples.

Each sample is an immutable snapshot (time, position, velocity). At most one
sample per trajectory is marked as the apex, the first point where the
vertical velocity turned from positive to non-positive.

The log also answers "which recorded point is closest to here?", the query
the tracer tool is built on.
"""

import logging
import numpy as np
from dataclasses import dataclass, replace
from typing import List, Optional

from .projectile import LaunchConditions, ProjectileState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """One recorded observation of a projectile in flight."""
    time: float                       # s since fired
    x: float                          # m
    y: float                          # m
    vx: Optional[float] = None        # m/s
    vy: Optional[float] = None        # m/s
    is_apex: bool = False

    @property
    def time_ms(self) -> int:
        """Time rounded to the nearest whole millisecond."""
        return int(round(self.time * 1000))

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance (m) from this sample to the point (x, y)."""
        return float(np.hypot(self.x - x, self.y - y))

    def to_dict(self) -> dict:
        return {
            'time': self.time,
            'x': self.x,
            'y': self.y,
            'vx': self.vx,
            'vy': self.vy,
            'is_apex': self.is_apex,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Sample':
        return cls(
            time=float(data['time']),
            x=float(data['x']),
            y=float(data['y']),
            vx=None if data.get('vx') is None else float(data['vx']),
            vy=None if data.get('vy') is None else float(data['vy']),
            is_apex=bool(data.get('is_apex', False)),
        )


class Trajectory:
    """
    The path of one fired projectile.

    Samples are only ever appended, in increasing time, until the projectile
    reaches the ground. ``apex_point`` refers to an element of ``samples``,
    not a copy.
    """

    def __init__(self, conditions: LaunchConditions, state: ProjectileState):
        self.conditions = conditions
        self.state = state
        self.samples: List[Sample] = []
        self.apex_point: Optional[Sample] = None

        # launch values were edited while this projectile was airborne
        self.changed_in_mid_air = False

        # set once the ground sample is recorded; no appends after that
        self._closed = False

    # ── fields exposed for state export ──────────────────────────────────

    @property
    def mass(self) -> float:
        return self.state.mass

    @mass.setter
    def mass(self, value: float):
        self.state.mass = value

    @property
    def diameter(self) -> float:
        return self.state.diameter

    @diameter.setter
    def diameter(self, value: float):
        self.state.diameter = value

    @property
    def drag_coefficient(self) -> float:
        return self.state.drag_coefficient

    @drag_coefficient.setter
    def drag_coefficient(self, value: float):
        self.state.drag_coefficient = value

    @property
    def reached_ground(self) -> bool:
        return self.state.reached_ground

    @reached_ground.setter
    def reached_ground(self, value: bool):
        self.state.reached_ground = value
        if value:
            self.state.stop()
            if self.samples:
                self._closed = True

    # ── recording ────────────────────────────────────────────────────────

    def add_sample(self, sample: Sample, apex_candidate: bool = False) -> Sample:
        """
        Append a sample to the log and return the stored sample.

        ``apex_candidate`` marks a step where the vertical velocity turned
        from positive to non-positive. Only the first such sample becomes the
        apex; later sign changes are recorded as ordinary samples.

        The sample recorded once the projectile has reached the ground is the
        last one: any further append raises ValueError.
        """
        if self._closed:
            raise ValueError(
                f"trajectory reached the ground at t={self.samples[-1].time}; "
                f"its log is closed")
        if self.samples and sample.time < self.samples[-1].time:
            raise ValueError(
                f"sample at t={sample.time} precedes last sample at "
                f"t={self.samples[-1].time}")

        if apex_candidate and self.apex_point is None:
            sample = replace(sample, is_apex=True)
            self.apex_point = sample
            logger.debug("Apex at t=%.3f s, (%.3f, %.3f)",
                         sample.time, sample.x, sample.y)
        elif sample.is_apex:
            sample = replace(sample, is_apex=False)

        self.samples.append(sample)
        if self.reached_ground:
            self._closed = True
        return sample

    # ── queries ──────────────────────────────────────────────────────────

    def nearest(self, x: float, y: float) -> Optional[Sample]:
        """
        Sample with the least Euclidean distance to (x, y), or None if
        nothing has been recorded yet.

        Among samples at equal distance the one later in flight time wins.
        """
        if not self.samples:
            return None

        nearest_sample = self.samples[0]
        min_distance = nearest_sample.distance_to(x, y)
        for sample in self.samples:
            distance = sample.distance_to(x, y)
            if distance <= min_distance:
                nearest_sample = sample
                min_distance = distance
        return nearest_sample

    def __len__(self) -> int:
        return len(self.samples)

    # ── array views for plotting / validation ───────────────────────────

    @property
    def times(self) -> np.ndarray:
        return np.array([s.time for s in self.samples])

    @property
    def xs(self) -> np.ndarray:
        return np.array([s.x for s in self.samples])

    @property
    def ys(self) -> np.ndarray:
        return np.array([s.y for s in self.samples])

    @property
    def landing_x(self) -> Optional[float]:
        """Horizontal distance (m) at ground contact, None while airborne."""
        if not self.reached_ground or not self.samples:
            return None
        return self.samples[-1].x

    @property
    def flight_time(self) -> float:
        """Time (s) of the last recorded sample."""
        return self.samples[-1].time if self.samples else 0.0

    @property
    def max_height(self) -> float:
        """Highest recorded height (m), or the launch height if empty."""
        if not self.samples:
            return self.conditions.height
        return float(np.max(self.ys))

    def summary(self) -> str:
        """Human-readable summary string."""
        c = self.conditions
        landing = f"{self.landing_x:>10.2f} m" if self.landing_x is not None \
            else f"{'airborne':>12s}"
        apex = f"{self.apex_point.y:>10.2f} m" if self.apex_point is not None \
            else f"{'-':>12s}"
        lines = [
            f"╔════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY{'':<24s}║",
            f"╠════════════════════════════════════════════╣",
            f"║  Launch speed : {c.speed:>10.2f} m/s{'':<14s}║",
            f"║  Angle        : {c.angle_deg:>10.1f} °{'':<16s}║",
            f"║  Height       : {c.height:>10.2f} m{'':<16s}║",
            f"║  Mass / diam. : {c.mass:>6.2f} kg / {c.diameter:>5.2f} m{'':<8s}║",
            f"╠════════════════════════════════════════════╣",
            f"║  Range        : {landing:<28s}║",
            f"║  Apex height  : {apex:<28s}║",
            f"║  Flight time  : {self.flight_time:>10.2f} s{'':<16s}║",
            f"║  Samples      : {len(self.samples):>10d}{'':<18s}║",
            f"╚════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)
