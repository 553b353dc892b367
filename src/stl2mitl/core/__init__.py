"""
stl2mitl Core Module

Contains the shared data model and the conversion pipeline.
"""

from .pipeline import ConverterConfig, STLToMITLConverter
from .types import (
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

__all__ = [
    "STLToMITLConverter",
    "ConverterConfig",
    "AtomicPredicate",
    "ConversionResult",
    "MappingEntry",
    "PredicateMapping",
    "RoundingMode",
    "Sample",
    "Signal",
    "TemporalMatch",
    "TemporalOperator",
    "TemporalPattern",
]
