"""Stable partition points of a discretized signal."""

from __future__ import annotations

import logging

import numpy as np

from stl2mitl.core.types import RoundingMode, Signal
from stl2mitl.utils.helpers import round_time

logger = logging.getLogger(__name__)


def transition_times(signal: Signal) -> np.ndarray:
    """Times of the samples whose truth vector differs from the previous one."""
    if len(signal) < 2 or signal.arity == 0:
        return np.empty(0, dtype=float)
    values = np.array([sample.values for sample in signal], dtype=bool)
    times = np.array([sample.t for sample in signal], dtype=float)
    changed = np.any(values[1:] != values[:-1], axis=1)
    return times[1:][changed]


def build_partition_points(
    signal: Signal, rounding: RoundingMode = RoundingMode.HALF_AWAY_FROM_ZERO
) -> tuple[int, ...]:
    """
    Integer time points at which any predicate changes truth value.

    Transitions that round to the same integer collapse into one point.

    Args:
        signal: Sampled signal
        rounding: Tie-breaking rule for real transition times

    Returns:
        Sorted, duplicate-free partition points; empty for a constant signal
    """
    times = transition_times(signal)
    if times.size == 0:
        return ()
    points = tuple(int(t) for t in np.unique(round_time(times, rounding)))
    if len(points) < times.size:
        logger.debug(f"{times.size} transitions collapsed into {len(points)} partition points")
    return points
