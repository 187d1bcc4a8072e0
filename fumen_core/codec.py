from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .alphabet import FILLER, DigitStream
from .config import debug_log
from .descriptor import decode_descriptor, encode_descriptor
from .errors import DecodeResult, DecodeStatus, RangeViolation, StreamTruncated
from .field import decode_field, encode_field
from .page import Page, empty_page

FORMAT_TAG = "v115@"


def _decode_page(stream: DigitStream, previous: Page) -> Page:
    field = decode_field(stream, previous.field)
    piece, flags = decode_descriptor(stream)
    return Page(field=field, piece=piece, flags=flags)


def decode(text: str) -> DecodeResult:
    """Decode a fumen string into pages.

    A missing format tag is an expected outcome (UNSUPPORTED_FORMAT). Running out of digits
    mid-page fails the whole decode (STREAM_TRUNCATED); partial page lists are never returned.
    """
    if not text.startswith(FORMAT_TAG):
        debug_log('decode', f"format tag {FORMAT_TAG!r} missing")
        return DecodeResult(DecodeStatus.UNSUPPORTED_FORMAT, error=f"data does not start with {FORMAT_TAG!r}")

    stream = DigitStream.from_text(text[len(FORMAT_TAG):])
    pages: List[Page] = []
    previous = empty_page()
    try:
        while not stream.exhausted():
            page = _decode_page(stream, previous)
            pages.append(page)
            previous = page
    except StreamTruncated as exc:
        debug_log('decode', f"truncated after {len(pages)} page(s): {exc}")
        return DecodeResult(DecodeStatus.STREAM_TRUNCATED, error=str(exc))
    debug_log('decode', f"{len(pages)} page(s) from {len(stream.digits)} digit(s)")
    return DecodeResult(DecodeStatus.OK, pages=tuple(pages))


def decode_pages(text: str) -> Optional[List[Page]]:
    """Pages of a fumen string, or None for either failure kind."""
    result = decode(text)
    return list(result.pages) if result.ok else None


def encode(pages: Iterable[Page]) -> str:
    """Encode pages, each diffed against the one before it.

    Raises RangeViolation (with the page index set) for values that cannot round-trip.
    """
    out: List[str] = [FORMAT_TAG]
    previous = empty_page()
    count = 0
    for index, page in enumerate(pages):
        try:
            out.append(encode_field(previous.field, page.field))
            out.append(encode_descriptor(page))
        except RangeViolation as exc:
            raise exc.at_page(index) from None
        previous = page
        count += 1
    text = "".join(out)
    debug_log('encode', f"{count} page(s) -> {len(text) - len(FORMAT_TAG)} symbol(s)")
    return text


class Fumen:
    """An ordered sequence of pages."""

    def __init__(self, pages: Optional[Iterable[Page]] = None):
        self._pages: List[Page] = list(pages) if pages is not None else []

    def add_page(self, page: Page) -> None:
        self._pages.append(page)

    @property
    def pages(self) -> Tuple[Page, ...]:
        return tuple(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fumen):
            return NotImplemented
        return self._pages == other._pages

    def encode(self) -> str:
        return encode(self._pages)

    @classmethod
    def decode(cls, text: str) -> Optional['Fumen']:
        """Build a Fumen from text; None when the text is not v115 data or is corrupt."""
        result = decode(text)
        if not result.ok:
            return None
        return cls(result.pages)


__all__ = ["FORMAT_TAG", "FILLER", "Fumen", "encode", "decode", "decode_pages"]
