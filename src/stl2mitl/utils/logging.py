"""
stl2mitl Logging Utilities

Console/log sink for the conversion pipeline. Every stage reports its
intermediate result here: extracted predicates, the mapping table, the
sampled signal, partition points and the formula before and after
partitioning. Supports colored text and JSON output.
"""

import json
import logging
import sys
import threading
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class LogLevel(Enum):
    """Log levels for stl2mitl logging."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    # Pipeline stage reports sit between INFO and WARNING
    STAGE = 25


logging.addLevelName(LogLevel.STAGE.value, "STAGE")


@dataclass
class LogContext:
    """Context information attached to every report."""

    formula: str | None = None
    stage: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


_RESERVED_RECORD_KEYS = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "asctime",
        "taskName",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True, include_level: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "message": record.getMessage(),
            "logger": record.name,
        }

        if self.include_timestamp:
            log_data["timestamp"] = datetime.fromtimestamp(record.created).isoformat()

        if self.include_level:
            log_data["level"] = record.levelname

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "STAGE": "\033[94m",  # Light blue
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None):
        if fmt is None:
            fmt = "%(levelname)-8s | %(message)s"
        if datefmt is None:
            datefmt = "%Y-%m-%d %H:%M:%S"
        super().__init__(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class ConverterLogger:
    """
    Centralized logger for the conversion pipeline.

    Provides:
    - Colored, plain or JSON console output
    - Optional JSON file output
    - A context (current formula and stage) attached to every record
    - One report method per pipeline stage
    """

    _instance: Optional["ConverterLogger"] = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        """Singleton pattern for global logger access."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(
        self,
        name: str = "stl2mitl",
        level: LogLevel | int = LogLevel.INFO,
        json_output: bool = False,
        colored_output: bool = True,
        log_file: Path | None = None,
    ):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value if isinstance(level, LogLevel) else level)
        self.logger.handlers = []
        self.logger.propagate = False

        self.context = LogContext()

        if json_output:
            formatter = JSONFormatter()
        elif colored_output:
            formatter = ColoredFormatter()
        else:
            formatter = logging.Formatter("%(levelname)-8s | %(message)s")

        # Stage reports go to stdout, errors to stderr
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(lambda record: record.levelno < logging.ERROR)
        self.logger.addHandler(console_handler)

        error_handler = logging.StreamHandler(sys.stderr)
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        self.logger.addHandler(error_handler)

        # File output is always JSON
        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(JSONFormatter())
            self.logger.addHandler(file_handler)

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton and detach its handlers."""
        with cls._lock:
            if cls._instance is not None:
                logger = cls._instance.logger
                for handler in list(logger.handlers):
                    logger.removeHandler(handler)
                    handler.close()
                logger.propagate = True
            cls._instance = None

    def update_context(self, **kwargs) -> None:
        """Update specific context fields."""
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.extra[key] = value

    def _add_context(self, extra: dict[str, Any]) -> dict[str, Any]:
        context_dict = asdict(self.context)
        context_dict.update(extra)
        return context_dict

    def debug(self, msg: str, **kwargs) -> None:
        self.logger.debug(msg, extra=self._add_context(kwargs))

    def info(self, msg: str, **kwargs) -> None:
        self.logger.info(msg, extra=self._add_context(kwargs))

    def warning(self, msg: str, **kwargs) -> None:
        self.logger.warning(msg, extra=self._add_context(kwargs))

    def error(self, msg: str, **kwargs) -> None:
        self.logger.error(msg, extra=self._add_context(kwargs))

    def stage(self, msg: str, **kwargs) -> None:
        """Log a pipeline stage report."""
        self.logger.log(LogLevel.STAGE.value, msg, extra=self._add_context(kwargs))

    def _begin(self, number: int, title: str) -> None:
        self.context.stage = title
        self.stage(f"Step {number}: {title}")

    def log_predicates(self, predicates: Sequence[str]) -> None:
        """Report the extracted atomic predicates."""
        self._begin(1, "Extracted atomic predicates")
        if not predicates:
            self.stage("  (none)")
        for text in predicates:
            self.stage(f"- {text}", predicate=text)

    def log_mapping(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Report the predicate to Boolean identifier table."""
        self._begin(2, "Mapped atomic predicates to Boolean variables")
        pairs = list(pairs)
        if not pairs:
            self.stage("  (none)")
        for text, identifier in pairs:
            self.stage(f"- {text} -> {identifier}", predicate=text, identifier=identifier)

    def log_signal(
        self,
        labels: Sequence[str],
        samples: Iterable[tuple[float, Sequence[bool]]],
        show_samples: bool = True,
    ) -> None:
        """Report the sampled signal, one sample per line."""
        self._begin(3, "Synthesized signal behavior")
        header = ", ".join(labels)
        count = 0
        for t, values in samples:
            count += 1
            if show_samples:
                rendered = ", ".join(str(int(v)) for v in values)
                self.stage(f"t = {t:g}, ({header}) = ({rendered})")
        self.stage(f"  {count} samples", sample_count=count)

    def log_partition_points(self, points: Sequence[int]) -> None:
        """Report the stable partition points."""
        self._begin(4, "Constructed stable partitions")
        if not points:
            self.stage("  (none)")
        for t in points:
            self.stage(f"Partition point: {t}", partition_point=t)

    def log_renamed(self, stl_formula: str, mitl_formula: str) -> None:
        """Report the formula before and after predicate renaming."""
        self._begin(5, "Replaced atomic predicates in the STL formula")
        self.stage(f"STL Formula: {stl_formula}")
        self.stage(f"MITL Formula (before partitioning): {mitl_formula}")

    def log_partitioned(self, mitl_formula: str) -> None:
        """Report the formula after temporal operator partitioning."""
        self._begin(6, "Partitioned temporal operators in the MITL formula")
        self.stage(f"MITL Formula (after partitioning): {mitl_formula}")


_global_logger: ConverterLogger | None = None


def get_logger(name: str | None = None) -> ConverterLogger:
    """Get the global logger or create a named child logger."""
    global _global_logger
    if _global_logger is None:
        _global_logger = ConverterLogger()
    if name:
        child_logger = object.__new__(ConverterLogger)
        child_logger.logger = _global_logger.logger.getChild(name)
        child_logger.context = _global_logger.context
        child_logger._initialized = True
        return child_logger
    return _global_logger


def configure_logging(
    level: LogLevel | int = LogLevel.INFO,
    json_output: bool = False,
    colored_output: bool = True,
    log_file: Path | None = None,
) -> ConverterLogger:
    """Configure (or reconfigure) the global logger."""
    global _global_logger
    ConverterLogger._reset()
    _global_logger = ConverterLogger(
        level=level,
        json_output=json_output,
        colored_output=colored_output,
        log_file=log_file,
    )
    return _global_logger
