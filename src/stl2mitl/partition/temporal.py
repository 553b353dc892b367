"""
Temporal operator partitioning.

Splits one bounded temporal operator ``G [a, b] body`` into a conjunction of
copies over consecutive integer sub-intervals, cut at the signal's
partition points::

    G [0, 30] ((p2) U (p3))   with points {10, 15, 20}
    -> G [0, 10] ((p2) U (p3)) ∧ G [11, 15] ((p2) U (p3))
       ∧ G [16, 20] ((p2) U (p3)) ∧ G [21, 30] ((p2) U (p3))

Over each sub-interval every predicate keeps a single truth value, which is
what interval-based MITL model checkers expect.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable

from stl2mitl.core.types import TemporalMatch, TemporalPattern
from stl2mitl.formula.patterns import FormulaPatternMatcher, get_matcher
from stl2mitl.utils.helpers import TimeInterval

logger = logging.getLogger(__name__)

CONJUNCTION = "∧"


def split_interval(lower: int, upper: int, points: Iterable[int]) -> list[TimeInterval]:
    """
    Cover ``[lower, upper]`` with consecutive integer intervals.

    Each point ``t`` with ``lower <= t <= upper`` closes an interval at ``t``;
    the next one opens at ``t + 1``. Whatever remains after the last cut
    becomes the final interval.

    Args:
        lower: Interval lower bound
        upper: Interval upper bound
        points: Partition points, any order

    Returns:
        The sub-intervals in increasing order. ``[lower, upper]`` alone when
        no point falls inside; empty when ``lower > upper``.
    """
    ordered = sorted(set(points))
    segments: list[TimeInterval] = []
    previous = lower
    for t in ordered[bisect.bisect_left(ordered, lower) :]:
        if t > upper:
            break
        segments.append(TimeInterval(previous, t))
        previous = t + 1
    if previous <= upper:
        segments.append(TimeInterval(previous, upper))
    return segments


class TemporalOperatorPartitioner:
    """
    Rewrites the first occurrence of a temporal pattern into sub-intervals.

    Args:
        pattern: Operator kind and body to look for
        matcher: Formula pattern matcher (shared default if omitted)

    Example:
        >>> partitioner = TemporalOperatorPartitioner(TemporalPattern.until("p2", "p3"))
        >>> partitioner.partition("G [2, 7] ((p2) U (p3))", [5])
        'G [2, 5] ((p2) U (p3)) ∧ G [6, 7] ((p2) U (p3))'
    """

    def __init__(self, pattern: TemporalPattern, matcher: FormulaPatternMatcher | None = None):
        self.pattern = pattern
        self.matcher = matcher or get_matcher()

    def find(self, formula: str) -> TemporalMatch | None:
        return self.matcher.find_temporal(formula, self.pattern)

    def render(self, match: TemporalMatch, segments: list[TimeInterval]) -> str:
        """Conjunction of one operator instance per segment."""
        return f" {CONJUNCTION} ".join(
            self.pattern.render(segment.lower, segment.upper, match.body) for segment in segments
        )

    def partition(self, formula: str, points: Iterable[int]) -> str:
        """
        Partition the pattern's first occurrence in ``formula``.

        Bounds are truncated to integers. A formula without the pattern is
        returned unchanged.
        """
        rewritten, _ = self.partition_with_match(formula, points)
        return rewritten

    def partition_with_match(
        self, formula: str, points: Iterable[int]
    ) -> tuple[str, TemporalMatch | None]:
        """Like ``partition`` but also return the rewritten occurrence."""
        match = self.find(formula)
        if match is None:
            return formula, None

        segments = split_interval(match.lower, match.upper, points)
        if not segments:
            logger.warning(
                f"Empty interval [{match.lower}, {match.upper}]; operator removed from formula"
            )
        else:
            logger.debug(
                f"Split [{match.lower}, {match.upper}] into {len(segments)} segment(s): "
                + ", ".join(repr(s) for s in segments)
            )

        replacement = self.render(match, segments)
        return formula[: match.start] + replacement + formula[match.end :], match


def partition_temporal_operator(
    formula: str, points: Iterable[int], pattern: TemporalPattern
) -> str:
    """Functional shortcut for ``TemporalOperatorPartitioner(pattern).partition``."""
    return TemporalOperatorPartitioner(pattern).partition(formula, points)
