from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping

from .errors import StreamTruncated

ENCODE_TABLE = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
DECODE_TABLE: Mapping[str, int] = MappingProxyType({ch: i for i, ch in enumerate(ENCODE_TABLE)})
BASE = len(ENCODE_TABLE)

FILLER = "?"


def symbol_value(ch: str) -> int:
    # unknown symbols count as 0 instead of failing the decode
    return DECODE_TABLE.get(ch, 0)


def write_digits(value: int, count: int) -> str:
    """Emit `count` symbols for `value`, least-significant digit first.

    Values >= 64**count keep only their low-order digits; range checks belong to the caller.
    """
    out: List[str] = []
    for _ in range(count):
        out.append(ENCODE_TABLE[value % BASE])
        value //= BASE
    return "".join(out)


class DigitStream:
    """Digit values of one encoded string plus the parse cursor.

    Owned by the decode loop; sub-parsers advance it through poll().
    """

    __slots__ = ("digits", "pos")

    def __init__(self, digits: Iterable[int], pos: int = 0):
        self.digits = tuple(digits)
        self.pos = pos

    @classmethod
    def from_text(cls, text: str) -> 'DigitStream':
        return cls(symbol_value(ch) for ch in text if ch != FILLER)

    def remaining(self) -> int:
        return len(self.digits) - self.pos

    def exhausted(self) -> bool:
        return self.pos >= len(self.digits)

    def poll(self, count: int) -> int:
        left = self.remaining()
        if count > left:
            raise StreamTruncated(count, left, self.pos)
        value = 0
        multiplier = 1
        for d in self.digits[self.pos:self.pos + count]:
            value += d * multiplier
            multiplier *= BASE
        self.pos += count
        return value


def read_digits(stream: DigitStream, count: int) -> int:
    """Read `count` digits little-endian at the stream cursor and advance it."""
    return stream.poll(count)
