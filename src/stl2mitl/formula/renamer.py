"""
Predicate renaming.

Builds the predicate -> Boolean identifier mapping and substitutes the
identifiers into the formula text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from stl2mitl.core.types import (
    AtomicPredicate,
    MappingEntry,
    PredicateMapping,
    TemporalPattern,
)
from stl2mitl.formula.patterns import FormulaPatternMatcher, get_matcher

logger = logging.getLogger(__name__)

_PREFIX_REGEX = re.compile(r"[A-Za-z_]\w*")


def _validate_prefix(prefix: str, matcher: FormulaPatternMatcher) -> None:
    if not _PREFIX_REGEX.fullmatch(prefix):
        raise ValueError(f"Identifier prefix must be a plain word, got {prefix!r}")
    if matcher.predicate_regex.search(f"{prefix}1"):
        raise ValueError(f"Identifier prefix {prefix!r} produces predicate-shaped identifiers")


def build_predicate_mapping(
    predicates: Sequence[AtomicPredicate | str],
    dedupe: bool = False,
    prefix: str = "p",
    matcher: FormulaPatternMatcher | None = None,
) -> PredicateMapping:
    """
    Assign ``<prefix>1 .. <prefix>N`` to predicates in extraction order.

    Args:
        predicates: Extracted predicates (or their text)
        dedupe: Give textually identical predicates a single identifier
        prefix: Identifier prefix
        matcher: Pattern matcher used to validate the prefix

    Returns:
        The predicate mapping
    """
    matcher = matcher or get_matcher()
    _validate_prefix(prefix, matcher)

    entries: list[MappingEntry] = []
    seen: set[str] = set()
    for predicate in predicates:
        text = predicate.text if isinstance(predicate, AtomicPredicate) else predicate
        if dedupe:
            if text in seen:
                continue
            seen.add(text)
        entries.append(MappingEntry(predicate=text, identifier=f"{prefix}{len(entries) + 1}"))

    mapping = PredicateMapping(entries=entries, deduplicated=dedupe)
    shadowed = len(entries) - len(mapping.substitutions())
    if shadowed:
        logger.debug(f"{shadowed} duplicate predicate(s) resolve to their last identifier")
    return mapping


def rename_predicates(
    formula: str,
    mapping: PredicateMapping,
    matcher: FormulaPatternMatcher | None = None,
) -> str:
    """
    Replace every predicate in ``formula`` by its Boolean identifier.

    Occurrences are matched as whole tokens, so ``y<2`` does not touch
    ``y<20`` and ``x>1`` does not touch ``xx>1``. Longer predicates are
    substituted first. Applying the function to its own output is a no-op.
    """
    matcher = matcher or get_matcher()
    table = mapping.substitutions()
    renamed = formula
    for predicate in sorted(table, key=len, reverse=True):
        renamed = matcher.substitute(renamed, predicate, table[predicate])
    return renamed


def resolve_pattern(
    pattern: TemporalPattern,
    mapping: PredicateMapping,
    matcher: FormulaPatternMatcher | None = None,
) -> TemporalPattern:
    """
    Rewrite raw predicate text inside a pattern body to mapped identifiers.

    Lets a target be written against the STL formula, e.g.
    ``TemporalPattern.until("y < 2", "z > 1")``, and still match the
    renamed formula. Predicate text is matched ignoring whitespace, so
    ``"y<2"`` resolves against ``y < 2``. Bodies that already use
    identifiers are unchanged.
    """
    matcher = matcher or get_matcher()
    body = pattern.body
    for text, _ in matcher.find_atomic_predicates(pattern.body):
        identifier = mapping.resolve(text)
        if identifier != text:
            body = matcher.substitute(body, text, identifier)
    if body == pattern.body:
        return pattern
    logger.debug(f"Resolved pattern body {pattern.body} -> {body}")
    return TemporalPattern(operator=pattern.operator, body=body)
