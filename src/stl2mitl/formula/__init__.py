"""
Formula Module

Surface-text handling of STL formulas: atomic predicate extraction,
renaming to Boolean identifiers and temporal operator lookup.
"""

from .extractor import extract_atomic_predicates
from .patterns import ATOMIC_PREDICATE_REGEX, FormulaPatternMatcher, get_matcher
from .renamer import build_predicate_mapping, rename_predicates, resolve_pattern

__all__ = [
    "ATOMIC_PREDICATE_REGEX",
    "FormulaPatternMatcher",
    "get_matcher",
    "extract_atomic_predicates",
    "build_predicate_mapping",
    "rename_predicates",
    "resolve_pattern",
]
