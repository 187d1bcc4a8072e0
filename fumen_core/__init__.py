"""
Fumen core Python package.

This package contains the data structures and pure-logic helpers for the
v115 fumen text format (a compact encoding of a sequence of 10x24 board pages).
Modules:
- page.py: Page, Piece, Flags, MinoType, Rotation, field constants
- alphabet.py: 64-symbol digit codec and the DigitStream cursor
- percent.py: comment escaping
- field.py: field diff / run-length engine
- descriptor.py: packed piece+flags descriptor and comment block
- codec.py: encode/decode orchestration, Fumen
- serde.py, cli.py: JSON mapping and command line tool
"""
from .page import (
    FIELD_WIDTH,
    FIELD_HEIGHT,
    FIELD_NUM_CELLS,
    MinoType,
    Rotation,
    Piece,
    Flags,
    Page,
    empty_page,
)
from .errors import FumenError, StreamTruncated, RangeViolation, DecodeStatus, DecodeResult
from .codec import FORMAT_TAG, FILLER, Fumen, encode, decode, decode_pages

__all__ = [
    "FIELD_WIDTH", "FIELD_HEIGHT", "FIELD_NUM_CELLS",
    "MinoType", "Rotation", "Piece", "Flags", "Page", "empty_page",
    "FumenError", "StreamTruncated", "RangeViolation", "DecodeStatus", "DecodeResult",
    "FORMAT_TAG", "FILLER", "Fumen", "encode", "decode", "decode_pages",
]
