"""
Unit tests for MITL file output and the stage report logger.
"""

import json
import logging

import pytest

from stl2mitl.io.sink import ensure_mitl_suffix, write_mitl_file
from stl2mitl.utils.logging import (
    ColoredFormatter,
    ConverterLogger,
    JSONFormatter,
    LogLevel,
    configure_logging,
    get_logger,
)

# ============================================================================
# File sink
# ============================================================================


class TestEnsureMitlSuffix:
    """Tests for output file naming."""

    def test_appends_suffix(self):
        assert ensure_mitl_suffix("out").name == "out.mitl"

    def test_no_double_suffix(self):
        assert ensure_mitl_suffix("out.mitl").name == "out.mitl"

    def test_same_target(self, temp_dir):
        assert ensure_mitl_suffix(temp_dir / "out") == ensure_mitl_suffix(temp_dir / "out.mitl")

    def test_other_extension_kept(self):
        assert ensure_mitl_suffix("out.txt").name == "out.txt.mitl"

    def test_suffix_inside_name(self):
        assert ensure_mitl_suffix("a.mitl.bak").name == "a.mitl.bak.mitl"


class TestWriteMitlFile:
    """Tests for writing the formula."""

    def test_write(self, temp_dir):
        path = write_mitl_file("G [0, 5] ((p2) U (p3))", temp_dir / "out")
        assert path == temp_dir / "out.mitl"
        assert path.read_text(encoding="utf-8") == "G [0, 5] ((p2) U (p3))"

    def test_write_with_and_without_suffix(self, temp_dir):
        first = write_mitl_file("a", temp_dir / "out")
        second = write_mitl_file("b", temp_dir / "out.mitl")
        assert first == second
        assert sorted(p.name for p in temp_dir.iterdir()) == ["out.mitl"]
        assert second.read_text(encoding="utf-8") == "b"

    def test_utf8_conjunction(self, temp_dir):
        path = write_mitl_file("p1 ∧ p2", temp_dir / "conj")
        assert path.read_bytes() == "p1 ∧ p2".encode("utf-8")

    def test_failure_reported_not_raised(self, temp_dir, caplog):
        target = temp_dir / "missing" / "out"
        with caplog.at_level(logging.ERROR, logger="stl2mitl.io.sink"):
            assert write_mitl_file("p1", target) is None
        assert any("Unable to write to file" in r.getMessage() for r in caplog.records)


# ============================================================================
# Logging
# ============================================================================


class TestConverterLogger:
    """Tests for the stage report logger."""

    def test_singleton(self):
        assert ConverterLogger() is ConverterLogger()

    def test_configure_replaces_instance(self):
        first = configure_logging(colored_output=False)
        second = configure_logging(colored_output=False)
        assert first is not second
        assert len(second.logger.handlers) == 2

    def test_stage_level_registered(self):
        assert logging.getLevelName(LogLevel.STAGE.value) == "STAGE"

    def test_stage_reports(self, capsys):
        report = configure_logging(colored_output=False)
        report.log_predicates(["y<2", "z > 1"])
        report.log_mapping([("y<2", "p1"), ("z > 1", "p2")])
        report.log_signal(["y<2", "z > 1"], [(0.0, (True, False)), (0.1, (True, True))])
        report.log_partition_points([5, 10])
        report.log_renamed("y<2 ∧ z > 1", "p1 ∧ p2")
        report.log_partitioned("p1 ∧ p2")

        out = capsys.readouterr().out
        assert "Step 1: Extracted atomic predicates" in out
        assert "- z > 1 -> p2" in out
        assert "t = 0.1, (y<2, z > 1) = (1, 1)" in out
        assert "2 samples" in out
        assert "Partition point: 10" in out
        assert "MITL Formula (before partitioning): p1 ∧ p2" in out
        assert "MITL Formula (after partitioning): p1 ∧ p2" in out

    def test_samples_can_be_hidden(self, capsys):
        report = configure_logging(colored_output=False)
        report.log_signal(["p1"], [(0.0, (True,))], show_samples=False)
        out = capsys.readouterr().out
        assert "t = 0" not in out
        assert "1 samples" in out

    def test_empty_stages(self, capsys):
        report = configure_logging(colored_output=False)
        report.log_predicates([])
        report.log_partition_points([])
        assert capsys.readouterr().out.count("(none)") == 2

    def test_json_output(self, capsys):
        report = configure_logging(json_output=True)
        report.update_context(formula="y<2")
        report.log_partition_points([7])
        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert lines[-1]["message"] == "Partition point: 7"
        assert lines[-1]["partition_point"] == 7
        assert lines[-1]["formula"] == "y<2"
        assert lines[-1]["level"] == "STAGE"

    def test_log_file(self, temp_dir):
        log_file = temp_dir / "run.log"
        report = configure_logging(colored_output=False, log_file=log_file)
        report.stage("hello")
        for handler in report.logger.handlers:
            handler.flush()
        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["message"] == "hello"

    def test_errors_go_to_stderr(self, capsys):
        report = configure_logging(colored_output=False)
        report.stage("stage line")
        report.error("bad thing")
        captured = capsys.readouterr()
        assert "stage line" in captured.out
        assert "bad thing" not in captured.out
        assert "ERROR    | bad thing" in captured.err
        assert "stage line" not in captured.err

    def test_write_failure_reported_on_stderr(self, temp_dir, capsys):
        configure_logging(colored_output=False)
        assert write_mitl_file("p1", temp_dir / "missing" / "out") is None
        captured = capsys.readouterr()
        assert "Unable to write to file" in captured.err
        assert "Unable to write to file" not in captured.out

    def test_level_filters_reports(self, capsys):
        report = configure_logging(level=LogLevel.WARNING, colored_output=False)
        report.log_partition_points([1])
        assert capsys.readouterr().out == ""

    def test_child_logger_shares_context(self):
        parent = configure_logging(colored_output=False)
        child = get_logger("pipeline")
        assert child is not parent
        assert child.logger.name == "stl2mitl.pipeline"
        assert child.context is parent.context


class TestFormatters:
    """Tests for log formatters."""

    @pytest.fixture
    def record(self):
        return logging.LogRecord("stl2mitl", LogLevel.STAGE.value, __file__, 1, "msg", None, None)

    def test_colored_keeps_record_intact(self, record):
        formatted = ColoredFormatter().format(record)
        assert "\033[94mSTAGE" in formatted
        assert record.levelname == "STAGE"

    def test_json(self, record):
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "msg"
        assert data["level"] == "STAGE"
