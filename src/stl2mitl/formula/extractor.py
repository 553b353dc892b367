"""Atomic predicate extraction from STL formula text."""

from __future__ import annotations

from stl2mitl.core.types import AtomicPredicate
from stl2mitl.formula.patterns import FormulaPatternMatcher, get_matcher


def extract_atomic_predicates(
    formula: str, matcher: FormulaPatternMatcher | None = None
) -> list[AtomicPredicate]:
    """
    Extract real-valued comparison predicates from an STL formula.

    Matches are returned left to right and are not deduplicated, so a
    predicate written twice appears twice. Tokens that do not fit the
    ``<identifier> <comparator> <number>`` shape are skipped without notice.

    Args:
        formula: STL formula text
        matcher: Pattern matcher to use (shared default if omitted)

    Returns:
        Predicates in order of occurrence; empty if none are found

    Example:
        >>> [p.text for p in extract_atomic_predicates("y<2 and z > 1 and y<2")]
        ['y<2', 'z > 1', 'y<2']
    """
    matcher = matcher or get_matcher()
    return [
        AtomicPredicate(text=text, start=start)
        for text, start in matcher.find_atomic_predicates(formula)
    ]
