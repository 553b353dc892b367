"""
Signal model.

Produces a discretized Boolean signal from caller-supplied predicate
behaviours. Each behaviour is a deterministic step function of time; the
model samples all of them on a fixed grid ``t = k * step`` from 0 up to the
first grid point at or beyond the horizon.

In production the signal would come from acquisition or simulation;
``SignalModel`` is the injectable stand-in with the same output shape.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence

import numpy as np
from pydantic import BaseModel, Field, field_validator

from stl2mitl.core.types import (
    PredicateMapping,
    Sample,
    Signal,
    normalize_predicate_text,
)

logger = logging.getLogger(__name__)

DEFAULT_STEP = 0.1

# Tolerance when counting grid steps, so 30 / 0.1 gives 300 and not 301
_GRID_EPSILON = 1e-9
# Decimals kept on grid times, removes k * step float noise
_TIME_DECIMALS = 9


class PredicateBehavior(BaseModel):
    """
    Boolean step function of time.

    The predicate holds on the union of the half-open ``true_intervals``
    ``[start, end)`` and is false elsewhere.
    """

    true_intervals: list[tuple[float, float]] = Field(default_factory=list)

    class Config:
        frozen = True

    @field_validator("true_intervals")
    @classmethod
    def _check_intervals(cls, intervals: list[tuple[float, float]]) -> list[tuple[float, float]]:
        for start, end in intervals:
            if end < start:
                raise ValueError(f"Interval end {end} precedes start {start}")
        return intervals

    @classmethod
    def holds_on(cls, *intervals: tuple[float, float]) -> PredicateBehavior:
        return cls(true_intervals=list(intervals))

    @classmethod
    def holds_before(cls, end: float) -> PredicateBehavior:
        return cls(true_intervals=[(-math.inf, end)])

    @classmethod
    def constant(cls, value: bool) -> PredicateBehavior:
        return cls(true_intervals=[(-math.inf, math.inf)] if value else [])

    def evaluate(self, times) -> np.ndarray:
        """Truth value at each of ``times`` as a Boolean array."""
        times = np.asarray(times, dtype=float)
        result = np.zeros(times.shape, dtype=bool)
        for start, end in self.true_intervals:
            result |= (times >= start) & (times < end)
        return result

    def __call__(self, t: float) -> bool:
        return bool(self.evaluate([t])[0])


def sample_times(horizon: float, step: float = DEFAULT_STEP) -> np.ndarray:
    """
    Grid ``0, step, 2*step, ...`` ending at the first point ``>= horizon``.

    Times are computed by multiplication rather than accumulation, so the
    grid never drifts short of the horizon or past it.
    """
    if horizon < 0:
        raise ValueError(f"Horizon must be non-negative, got {horizon}")
    if step <= 0:
        raise ValueError(f"Sample step must be positive, got {step}")
    count = math.ceil(horizon / step - _GRID_EPSILON)
    return np.round(np.arange(count + 1) * step, _TIME_DECIMALS)


class SignalModel:
    """
    Samples named predicate behaviours into a ``Signal``.

    Behaviours are keyed by predicate text (``"y < 2"``) or by Boolean
    identifier (``"p1"``); text keys are matched ignoring whitespace.

    Args:
        behaviors: Predicate name -> behaviour
        step: Sample spacing

    Example:
        >>> model = SignalModel({"y < 2": PredicateBehavior.holds_before(10)})
        >>> signal = model.sample(30, ["y < 2"])
        >>> len(signal)
        301
    """

    def __init__(
        self, behaviors: Mapping[str, PredicateBehavior], step: float = DEFAULT_STEP
    ):
        if step <= 0:
            raise ValueError(f"Sample step must be positive, got {step}")
        self.behaviors = dict(behaviors)
        self.step = step
        self._normalized = {normalize_predicate_text(k): v for k, v in self.behaviors.items()}

    @classmethod
    def reference(cls, step: float = DEFAULT_STEP) -> SignalModel:
        """The built-in demonstration behaviour over three predicates."""
        return cls(reference_behaviors(), step=step)

    def behavior_for(self, *names: str) -> PredicateBehavior | None:
        """First configured behaviour matching any of ``names``."""
        for name in names:
            if name in self.behaviors:
                return self.behaviors[name]
        for name in names:
            behavior = self._normalized.get(normalize_predicate_text(name))
            if behavior is not None:
                return behavior
        return None

    def sample(
        self,
        horizon: float,
        columns: Sequence[str],
        behaviors: Sequence[PredicateBehavior] | None = None,
    ) -> Signal:
        """
        Sample one column per name in ``columns``.

        Args:
            horizon: Last time to cover
            columns: Column labels
            behaviors: Behaviour per column; looked up by label if omitted

        Returns:
            The sampled signal
        """
        if behaviors is None:
            behaviors = [self._require(name) for name in columns]
        times = sample_times(horizon, self.step)
        if not columns:
            matrix = np.zeros((len(times), 0), dtype=bool)
        else:
            matrix = np.column_stack([behavior.evaluate(times) for behavior in behaviors])

        samples = [
            Sample(t=float(t), values=tuple(bool(v) for v in row))
            for t, row in zip(times, matrix)
        ]
        logger.debug(f"Sampled {len(samples)} points over [0, {horizon}] for {len(columns)} columns")
        return Signal(labels=tuple(columns), samples=samples)

    def for_mapping(self, horizon: float, mapping: PredicateMapping) -> Signal:
        """
        Sample one column per mapping entry, labelled by identifier.

        The signal arity always equals the number of mapping entries. A
        predicate with no configured behaviour is sampled as constant false
        and reported as a warning.
        """
        behaviors = []
        for entry in mapping:
            behavior = self.behavior_for(entry.identifier, entry.predicate)
            if behavior is None:
                logger.warning(
                    f"No behaviour configured for {entry.predicate!r} ({entry.identifier}); "
                    "sampling it as constant false"
                )
                behavior = PredicateBehavior.constant(False)
            behaviors.append(behavior)
        return self.sample(horizon, mapping.identifiers, behaviors)

    def _require(self, name: str) -> PredicateBehavior:
        behavior = self.behavior_for(name)
        if behavior is None:
            raise KeyError(f"No behaviour configured for {name!r}")
        return behavior


def reference_behaviors() -> dict[str, PredicateBehavior]:
    """
    Demonstration behaviour for the formula family ``y < 2``, ``z > 1``,
    ``x > 0.3``: ``y < 2`` on [0, 10), ``z > 1`` on [5, 15), ``x > 0.3``
    on [8, 20).
    """
    return {
        "y < 2": PredicateBehavior.holds_before(10),
        "z > 1": PredicateBehavior.holds_on((5, 15)),
        "x > 0.3": PredicateBehavior.holds_on((8, 20)),
    }
