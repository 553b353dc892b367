"""
stl2mitl Helper Utilities

Provides utility functions for:
- Integer time intervals
- Rounding real transition times
"""

from dataclasses import dataclass

import numpy as np

from stl2mitl.core.types import RoundingMode


@dataclass(frozen=True)
class TimeInterval:
    """Closed integer time interval [lower, upper]."""

    lower: int
    upper: int

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(f"Invalid interval: lower ({self.lower}) > upper ({self.upper})")

    def __repr__(self) -> str:
        return f"[{self.lower},{self.upper}]"


def round_time(values, mode: RoundingMode = RoundingMode.HALF_AWAY_FROM_ZERO) -> np.ndarray:
    """
    Round real times to integers.

    Args:
        values: Scalar or array of times
        mode: Tie-breaking rule

    Returns:
        Integer numpy array
    """
    values = np.asarray(values, dtype=float)
    if mode == RoundingMode.HALF_EVEN:
        rounded = np.rint(values)
    else:
        # Exact halves go away from zero, everything else to nearest
        truncated = np.trunc(values)
        rounded = np.where(
            np.abs(values - truncated) == 0.5, truncated + np.sign(values), np.rint(values)
        )
    return rounded.astype(int)
