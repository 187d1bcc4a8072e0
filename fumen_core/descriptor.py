from __future__ import annotations

from dataclasses import replace
from typing import List, Tuple

from .alphabet import DigitStream, write_digits
from .errors import RangeViolation
from .page import FIELD_NUM_CELLS, Flags, MinoType, Page, Piece, Rotation
from .percent import percent_decode, percent_encode

DESCRIPTOR_DIGITS = 3
TYPE_RADIX = 8  # MinoType.G does not fit this slot
ROTATION_RADIX = 4

COMMENT_LENGTH_DIGITS = 2
COMMENT_MAX_LENGTH = 64 ** COMMENT_LENGTH_DIGITS - 1
COMMENT_CHUNK_DIGITS = 5
COMMENT_CHUNK_CHARS = 4
CHAR_RADIX = 96
CHAR_OFFSET = 32  # ' '


def _check_piece(piece: Piece) -> None:
    if not 0 <= piece.type < TYPE_RADIX:
        raise RangeViolation('piece.type', piece.type, f"outside the packable range 0..{TYPE_RADIX - 1}")
    if not 0 <= piece.rotation < ROTATION_RADIX:
        raise RangeViolation('piece.rotation', piece.rotation, f"outside 0..{ROTATION_RADIX - 1}")
    if not 0 <= piece.location < FIELD_NUM_CELLS:
        raise RangeViolation('piece.location', piece.location, f"outside 0..{FIELD_NUM_CELLS - 1}")


def pack_descriptor(piece: Piece, flags: Flags, has_comment: bool) -> int:
    """Fold piece placement and flags into one mixed-radix integer.

    Radix chain, innermost first: type(8), rotation(4), location(240), then one bit each for
    raise, mirror, color, has_comment and inverted lock.
    """
    _check_piece(piece)
    value = 0
    value = (0 if flags.lock else 1) + value * 2
    value = (1 if has_comment else 0) + value * 2
    value = (1 if flags.color else 0) + value * 2
    value = (1 if flags.mirror else 0) + value * 2
    value = (1 if flags.raise_ else 0) + value * 2
    value = int(piece.location) + value * FIELD_NUM_CELLS
    value = int(piece.rotation) + value * ROTATION_RADIX
    value = int(piece.type) + value * TYPE_RADIX
    return value


def unpack_descriptor(value: int) -> Tuple[Piece, Flags, bool]:
    """Reverse pack_descriptor. The returned Flags carry an empty comment."""
    value, mino = divmod(value, TYPE_RADIX)
    value, rotation = divmod(value, ROTATION_RADIX)
    value, location = divmod(value, FIELD_NUM_CELLS)
    value, raise_bit = divmod(value, 2)
    value, mirror_bit = divmod(value, 2)
    value, color_bit = divmod(value, 2)
    value, comment_bit = divmod(value, 2)
    lock_bit = value % 2
    piece = Piece(type=MinoType(mino), rotation=Rotation(rotation), location=location)
    flags = Flags(
        raise_=raise_bit == 1,
        mirror=mirror_bit == 1,
        color=color_bit == 1,
        lock=lock_bit == 0,
    )
    return piece, flags, comment_bit == 1


def encode_comment(comment: str) -> str:
    try:
        escaped = percent_encode(comment)
    except RangeViolation as e:
        raise RangeViolation('flags.comment', e.value, e.detail) from None
    if len(escaped) > COMMENT_MAX_LENGTH:
        raise RangeViolation('flags.comment', len(escaped), f"escaped characters; limit is {COMMENT_MAX_LENGTH}")
    out: List[str] = [write_digits(len(escaped), COMMENT_LENGTH_DIGITS)]
    for start in range(0, len(escaped), COMMENT_CHUNK_CHARS):
        chunk = escaped[start:start + COMMENT_CHUNK_CHARS].ljust(COMMENT_CHUNK_CHARS, ' ')
        chunk_value = 0
        multiplier = 1
        for ch in chunk:
            chunk_value += (ord(ch) - CHAR_OFFSET) * multiplier
            multiplier *= CHAR_RADIX
        out.append(write_digits(chunk_value, COMMENT_CHUNK_DIGITS))
    return "".join(out)


def decode_comment(stream: DigitStream) -> str:
    length = stream.poll(COMMENT_LENGTH_DIGITS)
    num_chunks = -(-length // COMMENT_CHUNK_CHARS)
    chars: List[str] = []
    for _ in range(num_chunks):
        chunk_value = stream.poll(COMMENT_CHUNK_DIGITS)
        for _ in range(COMMENT_CHUNK_CHARS):
            chunk_value, code = divmod(chunk_value, CHAR_RADIX)
            chars.append(chr(code + CHAR_OFFSET))
    return percent_decode("".join(chars[:length]))


def encode_descriptor(page: Page) -> str:
    """Descriptor digits for one page, followed by the comment block when there is a comment."""
    has_comment = len(page.flags.comment) > 0
    out = write_digits(pack_descriptor(page.piece, page.flags, has_comment), DESCRIPTOR_DIGITS)
    if has_comment:
        out += encode_comment(page.flags.comment)
    return out


def decode_descriptor(stream: DigitStream) -> Tuple[Piece, Flags]:
    piece, flags, has_comment = unpack_descriptor(stream.poll(DESCRIPTOR_DIGITS))
    if has_comment:
        flags = replace(flags, comment=decode_comment(stream))
    return piece, flags
