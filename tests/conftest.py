"""
stl2mitl Test Configuration and Fixtures

Provides shared fixtures for unit and integration tests.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from stl2mitl.core.types import Signal, TemporalPattern
from stl2mitl.utils.logging import ConverterLogger

# ============================================================================
# FORMULA FIXTURES
# ============================================================================


@pytest.fixture
def reference_formula() -> str:
    """Three-predicate formula whose renamed form carries G [0, 30] ((p2) U (p3))."""
    return "(x > 0.3) ∧ G [0, 30] ((y < 2) U (z > 1))"


@pytest.fixture
def sample_formulas() -> dict[str, str]:
    """STL formulas covering the predicate grammar."""
    return {
        "duplicates": "y<2 and z > 1 and y<2",
        "spacing": "G [0, 10] (speed>=3.5 ∧ dist <= 12)",
        "no_predicates": "G [0, 10] ((a) U (b))",
        "empty": "",
        "malformed": "x == 3 ∧ y => 2 ∧ z < 1",
    }


@pytest.fixture
def until_pattern() -> TemporalPattern:
    return TemporalPattern.until("p2", "p3")


# ============================================================================
# SIGNAL FIXTURES
# ============================================================================


@pytest.fixture
def two_predicate_signal() -> Signal:
    """[T,T]@0, [T,F]@5, [F,F]@9.96."""
    return Signal.from_pairs(
        [
            (0.0, [True, True]),
            (5.0, [True, False]),
            (9.96, [False, False]),
        ]
    )


@pytest.fixture
def constant_signal() -> Signal:
    return Signal.from_pairs([(t / 10, [True, False]) for t in range(50)])


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# LOGGING
# ============================================================================


@pytest.fixture(autouse=True)
def reset_converter_logger():
    """Each test starts without a configured report logger."""
    ConverterLogger._reset()
    yield
    ConverterLogger._reset()


# ============================================================================
# CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
