"""
Surface-text formula matching.

Everything that looks at formula text goes through ``FormulaPatternMatcher``:
atomic predicate discovery, whole-token substitution and temporal operator
lookup. The partitioner only sees ``TemporalMatch`` objects, so a real
parser can replace this module without touching the interval logic.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation

from stl2mitl.core.types import TemporalMatch, TemporalPattern

logger = logging.getLogger(__name__)

# <identifier> <comparator> <number>, e.g. "y < 2", "x>=0.3"
ATOMIC_PREDICATE_REGEX = r"\w+\s*[<>]=?\s*[\d.]+"

# Interval bounds of a bounded temporal operator
_BOUND = r"([\d.]+)"
_INTERVAL_REGEX = rf"\s*\[\s*{_BOUND}\s*,\s*{_BOUND}\s*\]\s*"

# A token may not continue into a neighbouring word or numeric literal
_TOKEN_BEFORE = r"(?<![\w.])"
_TOKEN_AFTER = r"(?![\w.])"


def truncate_bound(text: str) -> int:
    """Integer part of a bound literal, exact for any number of digits."""
    return int(Decimal(text))


def relax_whitespace(text: str) -> str:
    """Escape ``text`` for use in a regex, letting any whitespace run vary."""
    chunks = text.split()
    return r"\s*".join(re.escape(chunk) for chunk in chunks)


class FormulaPatternMatcher:
    """
    Regex-backed matcher over formula strings.

    Compiled expressions are cached per instance; the matcher itself holds no
    other state and can be shared between pipeline runs.
    """

    def __init__(self, predicate_regex: str = ATOMIC_PREDICATE_REGEX):
        self.predicate_regex = re.compile(predicate_regex)
        self._token_cache: dict[str, re.Pattern[str]] = {}
        self._temporal_cache: dict[TemporalPattern, re.Pattern[str]] = {}

    def find_atomic_predicates(self, formula: str) -> list[tuple[str, int]]:
        """Return ``(text, offset)`` for every non-overlapping predicate match."""
        return [(m.group(0), m.start()) for m in self.predicate_regex.finditer(formula)]

    def token_regex(self, text: str) -> re.Pattern[str]:
        """Compiled whole-token regex for a literal piece of formula text."""
        compiled = self._token_cache.get(text)
        if compiled is None:
            compiled = re.compile(_TOKEN_BEFORE + re.escape(text) + _TOKEN_AFTER)
            self._token_cache[text] = compiled
        return compiled

    def substitute(self, formula: str, text: str, replacement: str) -> str:
        """Replace whole-token occurrences of ``text`` with ``replacement``."""
        if not text:
            return formula
        return self.token_regex(text).sub(lambda _: replacement, formula)

    def temporal_regex(self, pattern: TemporalPattern) -> re.Pattern[str]:
        compiled = self._temporal_cache.get(pattern)
        if compiled is None:
            compiled = re.compile(
                r"\b"
                + re.escape(pattern.operator.value)
                + _INTERVAL_REGEX
                + "("
                + relax_whitespace(pattern.body)
                + ")"
            )
            self._temporal_cache[pattern] = compiled
        return compiled

    def find_temporal(self, formula: str, pattern: TemporalPattern) -> TemporalMatch | None:
        """
        Locate the first occurrence of ``pattern`` in ``formula``.

        Bounds are truncated to integers. Returns ``None`` when the pattern
        is absent or its bounds are not numbers (``[1.2.3, 4]``).
        """
        match = self.temporal_regex(pattern).search(formula)
        if match is None:
            logger.debug(f"No {pattern.operator.value}-operator over {pattern.body} in formula")
            return None

        try:
            lower = truncate_bound(match.group(1))
            upper = truncate_bound(match.group(2))
        except InvalidOperation:
            logger.warning(f"Ignoring temporal operator with malformed bounds: {match.group(0)}")
            return None

        return TemporalMatch(
            operator=pattern.operator,
            lower=lower,
            upper=upper,
            body=match.group(3),
            start=match.start(),
            end=match.end(),
        )


_default_matcher: FormulaPatternMatcher | None = None


def get_matcher() -> FormulaPatternMatcher:
    """Shared matcher using the default predicate grammar."""
    global _default_matcher
    if _default_matcher is None:
        _default_matcher = FormulaPatternMatcher()
    return _default_matcher
