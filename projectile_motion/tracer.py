"""
Tracer Tool
===========
A probe the user drags over the trajectories. It snaps to the closest
readable sample within a small sensing radius so its time, range and height
can be read off.

A sample is readable if it is the apex, lies on the ground, or falls on the
minor-dot time grid. Trajectories are searched most recent first, and a
trajectory's apex beats any of its other samples that is within range.
"""

import numpy as np
from typing import Optional, Sequence

from .config import SimulationConfig, DEFAULT_CONFIG
from .trajectory import Sample, Trajectory


def is_readable(sample: Optional[Sample], time_per_minor_dot: int) -> bool:
    """Whether the tracer may display ``sample``."""
    return sample is not None and (
        sample.is_apex
        or sample.y == 0
        or sample.time_ms % time_per_minor_dot == 0
    )


def find_data_point(position, trajectories: Sequence[Trajectory],
                    sensing_radius: float = DEFAULT_CONFIG.sensing_radius,
                    time_per_minor_dot: int = DEFAULT_CONFIG.time_per_minor_dot
                    ) -> Optional[Sample]:
    """
    Readable sample within ``sensing_radius`` of ``position`` (x, y), or None.

    Searches the most recent trajectory first and stops at the first match,
    so this is not a global nearest neighbour across trajectories.
    """
    x, y = position
    for trajectory in reversed(trajectories):
        apex = trajectory.apex_point
        if apex is not None and apex.distance_to(x, y) <= sensing_radius:
            return apex

        sample = trajectory.nearest(x, y)
        if is_readable(sample, time_per_minor_dot) \
                and sample.distance_to(x, y) <= sensing_radius:
            return sample
    return None


class Tracer:
    """
    Probe holding a position and the sample it currently displays.

    ``trajectories`` is the model's own list, not a copy, so launches and
    erasures are seen without re-binding.
    """

    def __init__(self, trajectories: Optional[Sequence[Trajectory]] = None,
                 x: float = 0.0, y: float = 0.0,
                 config: SimulationConfig = DEFAULT_CONFIG):
        self.trajectories = trajectories if trajectories is not None else []
        self.config = config
        self._initial_position = (float(x), float(y))
        self.position = np.array(self._initial_position)
        self.data_point: Optional[Sample] = None

        # out in the play area (False when stowed in the toolbox)
        self.is_active = False

    def reset(self):
        self.position = np.array(self._initial_position)
        self.data_point = None
        self.is_active = False

    def move_to(self, x: float, y: float) -> Optional[Sample]:
        """Drag the tracer to (x, y) and refresh the displayed sample."""
        self.position = np.array([float(x), float(y)])
        return self.update()

    def _within_range(self, sample: Sample) -> bool:
        return sample.distance_to(*self.position) <= self.config.sensing_radius

    def update(self, trajectories: Optional[Sequence[Trajectory]] = None
               ) -> Optional[Sample]:
        """
        Recompute and return the displayed sample, or None if no trajectory
        has a readable sample within the sensing radius.
        """
        if trajectories is not None:
            self.trajectories = trajectories

        self.data_point = find_data_point(
            self.position, self.trajectories,
            self.config.sensing_radius, self.config.time_per_minor_dot)
        return self.data_point

    def update_if_within_range(self, sample: Optional[Sample]) -> Optional[Sample]:
        """
        Adopt a freshly recorded sample if it is readable and close enough.
        Leaves the current reading alone otherwise.
        """
        if is_readable(sample, self.config.time_per_minor_dot) \
                and self._within_range(sample):
            self.data_point = sample
        return self.data_point
