from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from .page import Page


class FumenError(Exception):
    """Base class for codec errors."""


class StreamTruncated(FumenError):
    """Fewer digits remain than a parse step needs."""

    def __init__(self, needed: int, remaining: int, pos: int):
        super().__init__(f"stream ended at digit {pos}: needed {needed}, {remaining} left")
        self.needed = needed
        self.remaining = remaining
        self.pos = pos


class RangeViolation(FumenError, ValueError):
    """A page value cannot be packed into its slot; raised at encode time."""

    def __init__(self, field: str, value: Any, detail: str, page: Optional[int] = None):
        self.field = field
        self.value = value
        self.detail = detail
        self.page = page
        where = f"page {page}: " if page is not None else ""
        super().__init__(f"{where}{field}={value!r} {detail}")

    def at_page(self, page: int) -> 'RangeViolation':
        return RangeViolation(self.field, self.value, self.detail, page=page)


class DecodeStatus(Enum):
    OK = "ok"
    UNSUPPORTED_FORMAT = "unsupported_format"
    STREAM_TRUNCATED = "stream_truncated"


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of a decode. Only OK carries pages; failures never expose partial lists."""
    status: DecodeStatus
    pages: Tuple[Page, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is DecodeStatus.OK

    def __bool__(self) -> bool:
        return self.ok
