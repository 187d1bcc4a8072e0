from __future__ import annotations

import string
from typing import List

from .errors import RangeViolation

_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-_.~")
_HEX = frozenset(string.hexdigits)


def percent_encode(text: str) -> str:
    """Escape everything outside [0-9A-Za-z-_.~] as %XX.

    Only code points up to 255 fit two hex digits; anything above raises RangeViolation.
    """
    out: List[str] = []
    for ch in text:
        if ch in _UNRESERVED:
            out.append(ch)
            continue
        code = ord(ch)
        if code > 0xFF:
            raise RangeViolation('comment', ch, f"has code point U+{code:04X}; only U+0000..U+00FF can be escaped")
        out.append(f"%{code:02X}")
    return "".join(out)


def percent_decode(text: str) -> str:
    """Reverse percent_encode. A '%' without two hex digits after it is kept literally."""
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '%' and i + 2 < n and text[i + 1] in _HEX and text[i + 2] in _HEX:
            out.append(chr(int(text[i + 1:i + 3], 16)))
            i += 3
            continue
        out.append(ch)
        i += 1
    return "".join(out)
