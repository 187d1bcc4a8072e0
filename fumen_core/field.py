from __future__ import annotations

from typing import List, Sequence, Tuple

from .alphabet import DigitStream, write_digits
from .errors import RangeViolation
from .page import FIELD_NUM_CELLS, Field

DIFF_BIAS = 8
RUN_DIGITS = 2
RUN_CAPACITY = 64 ** RUN_DIGITS


def _check_length(cells: Sequence[int], name: str) -> None:
    if len(cells) != FIELD_NUM_CELLS:
        raise RangeViolation(name, len(cells), f"cells; expected {FIELD_NUM_CELLS}")


def field_runs(previous: Sequence[int], current: Sequence[int]) -> List[Tuple[int, int]]:
    """Return (diff, run_length) pairs for the cell deltas between two fields."""
    _check_length(previous, 'field')
    _check_length(current, 'field')
    runs: List[Tuple[int, int]] = []
    last_diff = current[0] - previous[0] + DIFF_BIAS
    count = 0
    for prev_cell, cell in zip(previous, current):
        diff = cell - prev_cell + DIFF_BIAS
        if diff != last_diff:
            runs.append((last_diff, count))
            count = 0
        last_diff = diff
        count += 1
    runs.append((last_diff, count))
    return runs


def _run_value(diff: int, length: int) -> int:
    if diff < 0:
        raise RangeViolation('field', diff - DIFF_BIAS, "delta below -8 cannot be encoded")
    value = diff * FIELD_NUM_CELLS + (length - 1)
    if value >= RUN_CAPACITY:
        raise RangeViolation(
            'field', diff - DIFF_BIAS,
            f"delta over a run of {length} cells does not fit {RUN_DIGITS} digits",
        )
    return value


def encode_field(previous: Sequence[int], current: Sequence[int]) -> str:
    """Run-length encode `current` as deltas against `previous`."""
    return "".join(write_digits(_run_value(diff, length), RUN_DIGITS) for diff, length in field_runs(previous, current))


def decode_field(stream: DigitStream, previous: Sequence[int]) -> Field:
    cells: List[int] = []
    while len(cells) < FIELD_NUM_CELLS:
        value = stream.poll(RUN_DIGITS)
        diff = value // FIELD_NUM_CELLS
        repeat = value % FIELD_NUM_CELLS + 1
        # a final run past the last cell is cut short
        for _ in range(min(repeat, FIELD_NUM_CELLS - len(cells))):
            cells.append(previous[len(cells)] + diff - DIFF_BIAS)
    return tuple(cells)
