"""
stl2mitl: STL to MITL formula conversion

Rewrites a Signal Temporal Logic formula over real-valued predicates into a
Metric Interval Temporal Logic formula over Boolean predicates, split into
sub-intervals over which an observed signal is stable.

This package provides:
- Formula matching: predicate extraction and renaming
- Signal: sampled Boolean signals and their stable partition points
- Partition: splitting a bounded temporal operator at partition points

Example:
    >>> from stl2mitl import STLToMITLConverter
    >>>
    >>> converter = STLToMITLConverter()
    >>> result = converter.convert("(x > 0.3) ∧ G [0, 30] ((y < 2) U (z > 1))")
    >>> converter.write(result, "output")
"""

__version__ = "0.1.0"

from stl2mitl.core.pipeline import ConverterConfig, STLToMITLConverter
from stl2mitl.core.types import (
    AtomicPredicate,
    ConversionResult,
    MappingEntry,
    PredicateMapping,
    RoundingMode,
    Sample,
    Signal,
    TemporalMatch,
    TemporalOperator,
    TemporalPattern,
)
from stl2mitl.formula import (
    FormulaPatternMatcher,
    build_predicate_mapping,
    extract_atomic_predicates,
    rename_predicates,
)
from stl2mitl.io import ensure_mitl_suffix, write_mitl_file
from stl2mitl.partition import TemporalOperatorPartitioner, split_interval
from stl2mitl.signal import PredicateBehavior, SignalModel, build_partition_points

__all__ = [
    # Pipeline
    "STLToMITLConverter",
    "ConverterConfig",
    # Enums
    "TemporalOperator",
    "RoundingMode",
    # Data models
    "AtomicPredicate",
    "MappingEntry",
    "PredicateMapping",
    "Sample",
    "Signal",
    "TemporalPattern",
    "TemporalMatch",
    "ConversionResult",
    # Stages
    "FormulaPatternMatcher",
    "extract_atomic_predicates",
    "build_predicate_mapping",
    "rename_predicates",
    "PredicateBehavior",
    "SignalModel",
    "build_partition_points",
    "TemporalOperatorPartitioner",
    "split_interval",
    # Output
    "ensure_mitl_suffix",
    "write_mitl_file",
]
