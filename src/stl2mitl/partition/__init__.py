"""Temporal operator partitioning."""

from .temporal import (
    CONJUNCTION,
    TemporalOperatorPartitioner,
    partition_temporal_operator,
    split_interval,
)

__all__ = [
    "CONJUNCTION",
    "TemporalOperatorPartitioner",
    "partition_temporal_operator",
    "split_interval",
]
