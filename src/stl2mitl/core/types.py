"""
Core type definitions for stl2mitl.

This module defines the data structures passed between pipeline stages:
- Atomic predicates and the predicate to Boolean identifier mapping
- Discretized signals and partition points
- Tagged temporal-operator patterns and their matches
- The aggregated result of one conversion
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, Field, model_validator

# =============================================================================
# Enumerations
# =============================================================================


class TemporalOperator(str, Enum):
    """Bounded unary temporal operators recognised by the partitioner."""

    GLOBALLY = "G"
    """Bounded always, ``G [a, b] φ``."""

    EVENTUALLY = "F"
    """Bounded eventually, ``F [a, b] φ``."""


class RoundingMode(str, Enum):
    """Rule for turning a real transition time into an integer partition point."""

    HALF_AWAY_FROM_ZERO = "half_away_from_zero"
    """``2.5 -> 3``, ``-2.5 -> -3``."""

    HALF_EVEN = "half_even"
    """Banker's rounding, ``2.5 -> 2``, ``3.5 -> 4``."""


# =============================================================================
# Predicates
# =============================================================================


def normalize_predicate_text(text: str) -> str:
    """Canonical form of a predicate used for whitespace-insensitive lookup."""
    return "".join(text.split())


class AtomicPredicate(BaseModel):
    """
    A real-valued comparison predicate found in an STL formula.

    Attributes:
        text: Exact matched substring, whitespace included
        start: Offset of the match in the source formula
    """

    text: str = Field(..., description="Exact predicate text")
    start: int = Field(0, ge=0, description="Offset in the source formula")

    class Config:
        frozen = True

    def __str__(self) -> str:
        return self.text

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class MappingEntry(BaseModel):
    """One predicate to identifier assignment."""

    predicate: str = Field(..., description="Exact predicate text")
    identifier: str = Field(..., description="Boolean identifier, e.g. p1")

    class Config:
        frozen = True


class PredicateMapping(BaseModel):
    """
    Ordered assignment of Boolean identifiers to atomic predicates.

    Entries keep extraction order. Without deduplication a predicate text
    that occurs twice owns two entries; ``substitutions`` then resolves it
    to the identifier assigned last.
    """

    entries: list[MappingEntry] = Field(default_factory=list)
    deduplicated: bool = Field(False, description="Whether duplicates were merged")

    class Config:
        frozen = True

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MappingEntry]:
        return iter(self.entries)

    @property
    def identifiers(self) -> list[str]:
        return [entry.identifier for entry in self.entries]

    def substitutions(self) -> dict[str, str]:
        """Predicate text -> identifier, later entries overriding earlier ones."""
        table: dict[str, str] = {}
        for entry in self.entries:
            table[entry.predicate] = entry.identifier
        return table

    def predicate_for(self, identifier: str) -> str | None:
        """Return the predicate text an identifier stands for."""
        for entry in self.entries:
            if entry.identifier == identifier:
                return entry.predicate
        return None

    def resolve(self, name: str) -> str:
        """
        Resolve an identifier or raw predicate text to an identifier.

        Names that are neither a known identifier nor a known predicate are
        returned unchanged.
        """
        if name in self.identifiers:
            return name
        wanted = normalize_predicate_text(name)
        resolved = None
        for entry in self.entries:
            if normalize_predicate_text(entry.predicate) == wanted:
                resolved = entry.identifier
        return resolved if resolved is not None else name


# =============================================================================
# Signals
# =============================================================================


class Sample(BaseModel):
    """A single time-stamped vector of predicate truth values."""

    t: float = Field(..., description="Sample time")
    values: tuple[bool, ...] = Field(default_factory=tuple, description="Truth values")

    class Config:
        frozen = True


class Signal(BaseModel):
    """
    A discretized Boolean signal.

    Attributes:
        labels: Column names, one per predicate (identifier or text)
        samples: Time-ordered samples; every sample has ``len(labels)`` values
    """

    labels: tuple[str, ...] = Field(default_factory=tuple)
    samples: list[Sample] = Field(default_factory=list)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_shape(self) -> Signal:
        arity = len(self.labels)
        previous = None
        for sample in self.samples:
            if len(sample.values) != arity:
                raise ValueError(
                    f"Sample at t={sample.t} has {len(sample.values)} values, expected {arity}"
                )
            if previous is not None and sample.t <= previous:
                raise ValueError(f"Samples must be strictly increasing in time (t={sample.t})")
            previous = sample.t
        return self

    @classmethod
    def from_pairs(
        cls, pairs: list[tuple[float, list[bool] | tuple[bool, ...]]], labels=None
    ) -> Signal:
        """Build a signal from ``(t, values)`` pairs."""
        samples = [Sample(t=t, values=tuple(values)) for t, values in pairs]
        if labels is None:
            arity = len(samples[0].values) if samples else 0
            labels = tuple(f"p{i + 1}" for i in range(arity))
        return cls(labels=tuple(labels), samples=samples)

    @property
    def arity(self) -> int:
        return len(self.labels)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __getitem__(self, idx: int) -> Sample:
        return self.samples[idx]


# =============================================================================
# Temporal patterns
# =============================================================================


class TemporalPattern(BaseModel):
    """
    Tagged description of the temporal operator to partition.

    The bounds are not part of the pattern; they are read from the formula.

    Attributes:
        operator: Operator kind, ``G`` by default
        body: Body sub-formula exactly as it follows the interval
    """

    operator: TemporalOperator = Field(TemporalOperator.GLOBALLY)
    body: str = Field(..., min_length=1, description="Body sub-formula")

    class Config:
        frozen = True

    @classmethod
    def until(
        cls, left: str, right: str, operator: TemporalOperator = TemporalOperator.GLOBALLY
    ) -> TemporalPattern:
        """Pattern for ``<operator> [a, b] ((left) U (right))``."""
        return cls(operator=operator, body=f"(({left}) U ({right}))")

    def render(self, lower: int, upper: int, body: str | None = None) -> str:
        return f"{self.operator.value} [{lower}, {upper}] {body or self.body}"


class TemporalMatch(BaseModel):
    """An occurrence of a temporal pattern inside a formula."""

    operator: TemporalOperator
    lower: int = Field(..., description="Lower bound, truncated to an integer")
    upper: int = Field(..., description="Upper bound, truncated to an integer")
    body: str = Field(..., description="Body text as written in the formula")
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    class Config:
        frozen = True


# =============================================================================
# Results
# =============================================================================


class ConversionResult(BaseModel):
    """Every intermediate value produced by one pipeline run."""

    stl_formula: str
    predicates: list[AtomicPredicate] = Field(default_factory=list)
    mapping: PredicateMapping = Field(default_factory=PredicateMapping)
    signal: Signal = Field(default_factory=Signal)
    partition_points: tuple[int, ...] = Field(default_factory=tuple)
    renamed_formula: str = ""
    mitl_formula: str = ""
    match: TemporalMatch | None = None

    @property
    def partitioned(self) -> bool:
        return self.match is not None

    def __str__(self) -> str:
        return self.mitl_formula
