"""
Matrix statistics aggregation.

A single pass over every cell of every matrix in a batch producing
max, min, sum, mean, element count and a batch-wide diagonal flag.
The aggregator is a pure function: no I/O, no shared state, safe to call
from any number of concurrent requests.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

from ..errors import InvalidBatch

DIAGONAL_TOLERANCE = 1e-10

# Longest leading decimal literal, as accepted by lenient float parsing
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_SEQUENCE_TYPES = (list, tuple)


@dataclass(frozen=True)
class Number:
    """A cell that parsed to a finite number."""
    value: float


@dataclass(frozen=True)
class NotANumber:
    """A cell that does not contribute to any statistic."""
    raw: Any = None


ParsedCell = Union[Number, NotANumber]


def parse_cell(cell: Any) -> ParsedCell:
    """
    Parse a matrix cell.

    Numbers are taken as-is (booleans are not numbers). Strings are parsed
    leniently: leading whitespace is ignored and the longest leading
    decimal literal is used, so "3.5kg" is 3.5 and "abc" is not a number.
    Non-finite results are never numbers, "Infinity" included.

    Unlike JavaScript's parseFloat, containers are not stringified first:
    [5] is not a number here, although parseFloat([5]) gives 5.
    """
    if isinstance(cell, bool):
        return NotANumber(cell)

    if isinstance(cell, (int, float)):
        try:
            value = float(cell)
        except OverflowError:
            return NotANumber(cell)
    elif isinstance(cell, str):
        match = _FLOAT_PREFIX.match(cell.lstrip())
        if not match:
            return NotANumber(cell)
        value = float(match.group())
    else:
        return NotANumber(cell)

    if not math.isfinite(value):
        return NotANumber(cell)
    return Number(value)


def round3(value: float) -> float:
    """Round to 3 decimals, ties away from zero on the scaled value."""
    scaled = abs(value) * 1000
    if not math.isfinite(scaled):
        return value

    rounded = math.copysign(math.floor(scaled + 0.5), value) / 1000
    # Avoid reporting -0.0
    return rounded if rounded != 0 else 0.0


def _json_number(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class StatisticsResult:
    """Aggregate statistics over a matrix batch."""
    max_value: float
    min_value: float
    total_sum: float
    mean: float
    element_count: int
    is_diagonal: bool

    def to_response(self) -> Dict[str, Any]:
        """
        Wire representation used by the stats API.

        Finite cells can still overflow the sum (and so the mean); values
        JSON cannot carry are reported as null.
        """
        return {
            "maxValue": _json_number(self.max_value),
            "minValue": _json_number(self.min_value),
            "promedio": _json_number(self.mean),
            "totalSum": _json_number(self.total_sum),
            "isDiagonal": self.is_diagonal,
            "totalElements": self.element_count,
        }


def _check_shape(batch: Any) -> None:
    if not isinstance(batch, _SEQUENCE_TYPES):
        raise InvalidBatch("matrices must be a list of matrices")

    for index, matrix in enumerate(batch):
        if not isinstance(matrix, _SEQUENCE_TYPES):
            raise InvalidBatch(f"matrix at index {index} is not a list of rows")


def validate_batch(batch: Any) -> Sequence[Sequence[Any]]:
    """
    Validate the shape of a statistics request before any cell is parsed.

    Args:
        batch: Value of the request's "matrices" field

    Returns:
        The batch, unchanged

    Raises:
        InvalidBatch: batch is missing, not a list, empty, or holds a
            matrix that is not a list
    """
    if batch is None:
        raise InvalidBatch("matrices field is required")

    _check_shape(batch)

    if len(batch) == 0:
        raise InvalidBatch("matrices must not be empty")

    return batch


def aggregate(batch: Sequence[Sequence[Any]]) -> StatisticsResult:
    """
    Compute statistics over every numeric cell of every matrix in batch.

    Cells that are not numbers are skipped entirely, as are rows that are
    not lists. The diagonal flag only considers square matrices (row count
    equal to the length of the row being scanned) and becomes False as soon
    as any off-diagonal value exceeds the tolerance.

    Raises:
        InvalidBatch: batch is not a list of lists; nothing is computed
    """
    _check_shape(batch)

    max_value = -math.inf
    min_value = math.inf
    total_sum = 0.0
    count = 0
    is_diagonal = True

    for matrix in batch:
        row_count = len(matrix)
        for i, row in enumerate(matrix):
            if not isinstance(row, _SEQUENCE_TYPES):
                continue

            square = row_count == len(row)
            for j, cell in enumerate(row):
                parsed = parse_cell(cell)
                if not isinstance(parsed, Number):
                    continue

                value = parsed.value
                if value > max_value:
                    max_value = value
                if value < min_value:
                    min_value = value
                total_sum += value
                count += 1

                if square and i != j and abs(value) > DIAGONAL_TOLERANCE:
                    is_diagonal = False

    mean = total_sum / count if count > 0 else 0.0

    return StatisticsResult(
        max_value=round3(max_value) if count > 0 else 0.0,
        min_value=round3(min_value) if count > 0 else 0.0,
        total_sum=round3(total_sum),
        mean=round3(mean),
        element_count=count,
        is_diagonal=is_diagonal,
    )
