"""
Trajectory State Export
=======================
Serializes the fields of a trajectory needed to restore it. The sample log
itself is not exported: it can be rebuilt by replaying the launch.

The apex is exported as plain sample data, not as a reference. On restore it
is re-bound to the trajectory's own sample with the same time, if recorded.
"""

from typing import Any, Dict

from .trajectory import Sample, Trajectory


def _encode_number(value):
    return float(value)


def _encode_bool(value):
    return bool(value)


def _encode_sample(value):
    return None if value is None else value.to_dict()


def _decode_sample(value):
    return None if value is None else Sample.from_dict(value)


# field name -> (encode, decode)
STATE_SCHEMA = {
    'mass': (_encode_number, _encode_number),
    'diameter': (_encode_number, _encode_number),
    'drag_coefficient': (_encode_number, _encode_number),
    'changed_in_mid_air': (_encode_bool, _encode_bool),
    'reached_ground': (_encode_bool, _encode_bool),
    'apex_point': (_encode_sample, _decode_sample),
}


def to_state_object(trajectory: Trajectory) -> Dict[str, Any]:
    """Plain, JSON-compatible dict of the exported fields."""
    if not isinstance(trajectory, Trajectory):
        raise ValueError(f"expected a Trajectory, got {type(trajectory).__name__}")
    return {
        name: encode(getattr(trajectory, name))
        for name, (encode, _) in STATE_SCHEMA.items()
    }


def from_state_object(state: Dict[str, Any]) -> Dict[str, Any]:
    """Decode a state object produced by ``to_state_object``."""
    unknown = set(state) - set(STATE_SCHEMA)
    if unknown:
        raise ValueError(f"unexpected keys in trajectory state: {sorted(unknown)}")
    return {
        name: STATE_SCHEMA[name][1](value)
        for name, value in state.items()
    }


def _recorded_apex(trajectory: Trajectory, apex: Sample) -> Sample:
    for sample in trajectory.samples:
        if sample.time == apex.time:
            return sample
    return apex


def set_value(trajectory: Trajectory, values: Dict[str, Any]) -> None:
    """
    Apply decoded fields to an existing trajectory.

    A restored apex refers to the matching element of ``trajectory.samples``
    when the log holds one; otherwise the decoded copy is kept.
    """
    for name, value in values.items():
        if name not in STATE_SCHEMA:
            raise ValueError(f"unexpected key: {name}")
        if name == 'apex_point' and value is not None:
            value = _recorded_apex(trajectory, value)
        setattr(trajectory, name, value)
