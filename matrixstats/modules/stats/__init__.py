"""
Stats Module - Black Box Interface

Purpose: Aggregate statistics over batches of matrices
Interface: validate_batch(), aggregate(), StatisticsResult
Hidden: Cell parsing rules, rounding, diagonal tolerance

Pure computation with no I/O or shared state.
"""

from .aggregator import (
    DIAGONAL_TOLERANCE,
    NotANumber,
    Number,
    ParsedCell,
    StatisticsResult,
    aggregate,
    parse_cell,
    round3,
    validate_batch,
)

__all__ = [
    "DIAGONAL_TOLERANCE",
    "NotANumber",
    "Number",
    "ParsedCell",
    "StatisticsResult",
    "aggregate",
    "parse_cell",
    "round3",
    "validate_batch",
]
