from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from enum import IntEnum
from typing import Iterator, List, Tuple

FIELD_WIDTH = 10
FIELD_HEIGHT = 24
FIELD_NUM_CELLS = FIELD_WIDTH * FIELD_HEIGHT

Field = Tuple[int, ...]  # row-major, length == FIELD_NUM_CELLS


class MinoType(IntEnum):
    N = 0  # no piece / empty cell
    I = 1
    L = 2
    O = 3
    Z = 4
    T = 5
    J = 6
    S = 7
    G = 8  # garbage


class Rotation(IntEnum):
    SOUTH = 0
    EAST = 1
    NORTH = 2
    WEST = 3


_CELL_SYMBOLS = "_ILOZTJSX"


def _empty_field() -> Field:
    return (0,) * FIELD_NUM_CELLS


@dataclass(frozen=True)
class Piece:
    """The piece about to be placed on a page."""
    type: int = MinoType.N
    rotation: int = Rotation.NORTH
    location: int = 0  # cell index in [0, FIELD_NUM_CELLS)


@dataclass(frozen=True)
class Flags:
    raise_: bool = False
    mirror: bool = False
    color: bool = True
    lock: bool = True
    comment: str = ""


@dataclass(frozen=True)
class Page:
    """One board snapshot plus the piece and flags that go with it."""
    field: Field = dc_field(default_factory=_empty_field)
    piece: Piece = dc_field(default_factory=Piece)
    flags: Flags = dc_field(default_factory=Flags)

    def __post_init__(self) -> None:
        # accept lists from callers; equality and hashing rely on a tuple
        if not isinstance(self.field, tuple):
            object.__setattr__(self, 'field', tuple(self.field))

    def at(self, r: int, c: int) -> int:
        """Gets the cell code at a given row (0 = top) and column."""
        return self.field[r * FIELD_WIDTH + c]

    def rows(self) -> Iterator[Field]:
        for r in range(FIELD_HEIGHT):
            yield self.field[r * FIELD_WIDTH:(r + 1) * FIELD_WIDTH]

    def pretty(self) -> str:
        """Generates a human-readable rendering of the field, top row first."""
        lines: List[str] = []
        for row in self.rows():
            lines.append("".join(
                _CELL_SYMBOLS[cell] if 0 <= cell < len(_CELL_SYMBOLS) else "?"
                for cell in row
            ))
        return "\n".join(lines)


def empty_page() -> Page:
    """All-zero field with default piece and flags; the baseline for the first page's diff."""
    return Page()
