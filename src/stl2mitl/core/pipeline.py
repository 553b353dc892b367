"""
stl2mitl Conversion Pipeline

The main integration point for all conversion stages:
- Atomic predicate extraction
- Predicate renaming to Boolean identifiers
- Signal sampling and stable partition construction
- Temporal operator partitioning
- MITL file output

This module provides the ``STLToMITLConverter`` class that runs the stages
in order and reports every intermediate result.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from stl2mitl.core.types import (
    AtomicPredicate,
    ConversionResult,
    PredicateMapping,
    RoundingMode,
    Signal,
    TemporalPattern,
)
from stl2mitl.formula.extractor import extract_atomic_predicates
from stl2mitl.formula.patterns import FormulaPatternMatcher
from stl2mitl.formula.renamer import build_predicate_mapping, rename_predicates, resolve_pattern
from stl2mitl.io.sink import write_mitl_file
from stl2mitl.partition.temporal import TemporalOperatorPartitioner
from stl2mitl.signal.model import DEFAULT_STEP, PredicateBehavior, SignalModel, reference_behaviors
from stl2mitl.signal.partition import build_partition_points
from stl2mitl.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def _default_target() -> TemporalPattern:
    return TemporalPattern.until("p2", "p3")


@dataclass
class ConverterConfig:
    """Configuration for the conversion pipeline."""

    # Signal
    horizon: float = 30.0
    sample_step: float = DEFAULT_STEP
    behaviors: dict[str, PredicateBehavior] = field(default_factory=reference_behaviors)
    rounding: RoundingMode = RoundingMode.HALF_AWAY_FROM_ZERO

    # Renaming
    dedupe: bool = False
    identifier_prefix: str = "p"

    # Partitioning
    target: TemporalPattern = field(default_factory=_default_target)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Path | None = None
    show_samples: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConverterConfig:
        """
        Build a configuration from plain data (e.g. parsed JSON).

        ``target`` accepts ``{"operator": "G", "body": "..."}`` or
        ``{"left": "p2", "right": "p3"}``. Each behaviour accepts a list of
        ``[start, end)`` pairs or ``{"true_intervals": [...]}``.
        """
        data = dict(data)
        if "behaviors" in data:
            data["behaviors"] = {
                name: PredicateBehavior.model_validate(
                    value if isinstance(value, dict) else {"true_intervals": value}
                )
                for name, value in data["behaviors"].items()
            }
        if "target" in data:
            target = data["target"]
            if isinstance(target, dict) and "left" in target:
                data["target"] = TemporalPattern.until(
                    target["left"], target["right"], target.get("operator", "G")
                )
            else:
                data["target"] = TemporalPattern.model_validate(target)
        if "rounding" in data:
            data["rounding"] = RoundingMode(data["rounding"])
        if data.get("log_file") is not None:
            data["log_file"] = Path(data["log_file"])

        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Path | str) -> ConverterConfig:
        """Load a configuration from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


class STLToMITLConverter:
    """
    Converts STL formulas to partitioned MITL formulas.

    Example:
        >>> converter = STLToMITLConverter()
        >>> result = converter.convert("(x > 0.3) ∧ G [0, 30] ((y < 2) U (z > 1))")
        >>> result.mitl_formula
        '(p1) ∧ G [0, 5] ((p2) U (p3)) ∧ G [6, 8] ((p2) U (p3)) ∧ ...'

    Attributes:
        config: Pipeline configuration
        signal_model: Source of the discretized signal
        matcher: Formula pattern matcher shared by all stages
    """

    def __init__(
        self,
        config: ConverterConfig | None = None,
        signal_model: SignalModel | None = None,
        matcher: FormulaPatternMatcher | None = None,
    ):
        """
        Initialize the converter.

        Args:
            config: Pipeline configuration. Uses defaults if not provided.
            signal_model: Signal source. Built from ``config.behaviors`` if omitted.
            matcher: Formula pattern matcher. A fresh one is created if omitted.
        """
        self.config = config or ConverterConfig()
        self.report = self._setup_logging()
        self.signal_model = signal_model or SignalModel(
            self.config.behaviors, step=self.config.sample_step
        )
        self.matcher = matcher or FormulaPatternMatcher()

        logger.debug("Converter initialized", horizon=self.config.horizon)

    def _setup_logging(self):
        """Configure structured logging and the stage report sink."""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.dev.ConsoleRenderer(colors=False),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        level = getattr(logging, self.config.log_level.upper())
        logging.basicConfig(format="%(message)s", level=level)
        return configure_logging(
            level=level,
            json_output=self.config.json_logs,
            log_file=self.config.log_file,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def extract(self, stl_formula: str) -> list[AtomicPredicate]:
        return extract_atomic_predicates(stl_formula, self.matcher)

    def build_mapping(self, predicates: list[AtomicPredicate]) -> PredicateMapping:
        return build_predicate_mapping(
            predicates,
            dedupe=self.config.dedupe,
            prefix=self.config.identifier_prefix,
            matcher=self.matcher,
        )

    def rename(self, stl_formula: str, mapping: PredicateMapping) -> str:
        return rename_predicates(stl_formula, mapping, self.matcher)

    def synthesize_signal(self, mapping: PredicateMapping) -> Signal:
        return self.signal_model.for_mapping(self.config.horizon, mapping)

    def partition_points(self, signal: Signal) -> tuple[int, ...]:
        return build_partition_points(signal, self.config.rounding)

    def partitioner(self, mapping: PredicateMapping) -> TemporalOperatorPartitioner:
        target = resolve_pattern(self.config.target, mapping, self.matcher)
        return TemporalOperatorPartitioner(target, self.matcher)

    # ------------------------------------------------------------------
    # End to end
    # ------------------------------------------------------------------

    def convert(self, stl_formula: str) -> ConversionResult:
        """
        Run every stage on one STL formula.

        Args:
            stl_formula: Raw STL formula text

        Returns:
            All intermediate results and the partitioned MITL formula
        """
        self.report.update_context(formula=stl_formula)

        predicates = self.extract(stl_formula)
        self.report.log_predicates([p.text for p in predicates])

        mapping = self.build_mapping(predicates)
        self.report.log_mapping(sorted((e.predicate, e.identifier) for e in mapping))

        signal = self.synthesize_signal(mapping)
        self.report.log_signal(
            [mapping.predicate_for(label) or label for label in signal.labels],
            ((s.t, s.values) for s in signal),
            show_samples=self.config.show_samples,
        )

        points = self.partition_points(signal)
        self.report.log_partition_points(points)

        renamed = self.rename(stl_formula, mapping)
        self.report.log_renamed(stl_formula, renamed)

        mitl, match = self.partitioner(mapping).partition_with_match(renamed, points)
        self.report.log_partitioned(mitl)

        if match is None:
            logger.info("Target operator not found; formula left unpartitioned")

        logger.info(
            "Conversion complete",
            predicates=len(predicates),
            partition_points=len(points),
            partitioned=match is not None,
        )
        return ConversionResult(
            stl_formula=stl_formula,
            predicates=predicates,
            mapping=mapping,
            signal=signal,
            partition_points=points,
            renamed_formula=renamed,
            mitl_formula=mitl,
            match=match,
        )

    def write(self, result: ConversionResult | str, filename: str | Path) -> Path | None:
        """Write the MITL formula to ``filename`` (``.mitl`` appended if missing)."""
        formula = result.mitl_formula if isinstance(result, ConversionResult) else result
        return write_mitl_file(formula, filename)

    def convert_and_write(
        self, stl_formula: str, filename: str | Path
    ) -> tuple[ConversionResult, Path | None]:
        result = self.convert(stl_formula)
        return result, self.write(result, filename)
