"""
Signal Module

Discretized Boolean signals and their stable partition points.
"""

from .model import PredicateBehavior, SignalModel, reference_behaviors, sample_times
from .partition import build_partition_points, transition_times

__all__ = [
    "PredicateBehavior",
    "SignalModel",
    "reference_behaviors",
    "sample_times",
    "build_partition_points",
    "transition_times",
]
