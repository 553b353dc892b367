"""
Unit tests for temporal operator partitioning.
"""

import pytest

from stl2mitl.core.types import TemporalOperator, TemporalPattern
from stl2mitl.partition.temporal import (
    TemporalOperatorPartitioner,
    partition_temporal_operator,
    split_interval,
)
from stl2mitl.utils.helpers import TimeInterval

BODY = "((p2) U (p3))"


def segment(lower: int, upper: int) -> str:
    return f"G [{lower}, {upper}] {BODY}"


class TestSplitInterval:
    """Tests for the interval arithmetic."""

    def test_multi_cut(self):
        assert split_interval(0, 30, {10, 15, 20}) == [
            TimeInterval(0, 10),
            TimeInterval(11, 15),
            TimeInterval(16, 20),
            TimeInterval(21, 30),
        ]

    def test_no_cuts(self):
        assert split_interval(2, 7, []) == [TimeInterval(2, 7)]

    def test_points_outside_ignored(self):
        assert split_interval(2, 7, [0, 1, 8, 40]) == [TimeInterval(2, 7)]

    def test_cut_on_lower_bound(self):
        assert split_interval(5, 10, [5]) == [TimeInterval(5, 5), TimeInterval(6, 10)]

    def test_cut_on_upper_bound(self):
        assert split_interval(0, 10, [10]) == [TimeInterval(0, 10)]

    def test_adjacent_cuts(self):
        assert split_interval(0, 4, [1, 2, 3]) == [
            TimeInterval(0, 1),
            TimeInterval(2, 2),
            TimeInterval(3, 3),
            TimeInterval(4, 4),
        ]

    def test_point_interval(self):
        assert split_interval(5, 5, [5]) == [TimeInterval(5, 5)]
        assert split_interval(5, 5, []) == [TimeInterval(5, 5)]

    def test_reversed_bounds_give_nothing(self):
        assert split_interval(9, 3, [4, 5]) == []

    def test_unsorted_points(self):
        assert split_interval(0, 30, [20, 10, 15, 10]) == split_interval(0, 30, [10, 15, 20])

    def test_segments_cover_interval_once(self):
        segments = split_interval(0, 30, [3, 7, 19, 29])
        covered = [t for s in segments for t in range(s.lower, s.upper + 1)]
        assert covered == list(range(0, 31))


class TestTemporalOperatorPartitioner:
    """Tests for formula rewriting."""

    @pytest.fixture
    def partitioner(self, until_pattern):
        return TemporalOperatorPartitioner(until_pattern)

    def test_multi_cut_split(self, partitioner):
        result = partitioner.partition(f"G [0, 30] {BODY}", {10, 15, 20})
        assert result == " ∧ ".join(
            [segment(0, 10), segment(11, 15), segment(16, 20), segment(21, 30)]
        )

    def test_no_points_single_conjunct(self, partitioner):
        result = partitioner.partition("G[2,7]((p2)U(p3))", set())
        assert result == "G [2, 7] ((p2)U(p3))"
        assert "∧" not in result

    def test_degenerate_bound(self, partitioner):
        result = partitioner.partition(f"G [5, 5] {BODY}", {5, 10})
        assert result == segment(5, 5)
        assert "∧" not in result

    def test_reversed_bounds_remove_operator(self, partitioner):
        assert partitioner.partition(f"p1 ∧ G [9, 3] {BODY}", {5}) == "p1 ∧ "

    def test_surrounding_text_kept(self, partitioner):
        formula = f"(p1) ∧ G [0, 10] {BODY} ∧ p4"
        assert partitioner.partition(formula, [4]) == (
            f"(p1) ∧ {segment(0, 4)} ∧ {segment(5, 10)} ∧ p4"
        )

    def test_fractional_bounds_truncated(self, partitioner):
        assert partitioner.partition(f"G [0.5, 4.9] {BODY}", [2]) == (
            f"{segment(0, 2)} ∧ {segment(3, 4)}"
        )

    def test_huge_bound_partitioned_exactly(self, partitioner):
        bound = "9" * 400
        assert partitioner.partition(f"G [0, {bound}] {BODY}", [5]) == (
            f"{segment(0, 5)} ∧ G [6, {bound}] {BODY}"
        )

    def test_long_bound_not_rounded(self, partitioner):
        formula = f"G [0, 12345678901234567890] {BODY}"
        assert partitioner.partition(formula, []) == formula

    def test_pattern_absent(self, partitioner):
        formula = "G [0, 10] ((p1) U (p2))"
        assert partitioner.partition(formula, [5]) == formula

    def test_empty_formula(self, partitioner):
        assert partitioner.partition("", [5]) == ""

    def test_only_first_occurrence(self, partitioner):
        formula = f"G [0, 4] {BODY} ∧ G [0, 4] {BODY}"
        assert partitioner.partition(formula, [2]) == (
            f"{segment(0, 2)} ∧ {segment(3, 4)} ∧ G [0, 4] {BODY}"
        )

    def test_partition_with_match(self, partitioner):
        rewritten, match = partitioner.partition_with_match(f"G [1, 3] {BODY}", [])
        assert rewritten == segment(1, 3)
        assert (match.lower, match.upper) == (1, 3)

    def test_custom_pattern(self):
        pattern = TemporalPattern(operator=TemporalOperator.EVENTUALLY, body="(q1 ∧ q2)")
        result = partition_temporal_operator("F [0, 6] (q1 ∧ q2)", [3], pattern)
        assert result == "F [0, 3] (q1 ∧ q2) ∧ F [4, 6] (q1 ∧ q2)"

    def test_render_reuses_matched_body(self, partitioner):
        result = partitioner.partition("G [0, 2] ((p2)  U  (p3))", [1])
        assert result == "G [0, 1] ((p2)  U  (p3)) ∧ G [2, 2] ((p2)  U  (p3))"
