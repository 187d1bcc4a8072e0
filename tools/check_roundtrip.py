#!/usr/bin/env python3
"""
Check a file of fumen strings for decode/encode stability and summarize.

- One fumen string per line; blank lines and lines starting with '#' are skipped.
- For each line:
  * decode; count unsupported-format and truncated inputs
  * re-encode the decoded pages and decode again; the pages must match
  * count lines whose re-encoding differs textually (fillers, unknown symbols)
- Prints a JSON summary with counts and a few sample line numbers per category

Usage:
  python tools/check_roundtrip.py data/fumens.txt
  python tools/check_roundtrip.py data/fumens.txt 1000   # first 1000 lines only
"""
from __future__ import annotations

import json
import os
import sys
from typing import Dict, List, Optional

# Allow running from a checkout without installing the package
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from fumen_core.codec import decode, encode  # noqa: E402
from fumen_core.errors import DecodeStatus, RangeViolation  # noqa: E402

SAMPLE_LIMIT = 5


def check_lines(lines: List[str], limit: Optional[int] = None) -> Dict[str, object]:
    counts = {
        "checked": 0,
        "ok": 0,
        "unsupported": 0,
        "truncated": 0,
        "unstable": 0,
        "rewritten": 0,
        "pages": 0,
    }
    samples: Dict[str, List[int]] = {"unsupported": [], "truncated": [], "unstable": [], "rewritten": []}

    def _note(kind: str, lineno: int) -> None:
        counts[kind] += 1
        if len(samples[kind]) < SAMPLE_LIMIT:
            samples[kind].append(lineno)

    effective_limit = limit if (limit is not None and limit > 0) else (1 << 62)

    for lineno, raw in enumerate(lines, start=1):
        if counts["checked"] >= effective_limit:
            break
        text = raw.strip()
        if not text or text.startswith('#'):
            continue
        counts["checked"] += 1

        first = decode(text)
        if first.status is DecodeStatus.UNSUPPORTED_FORMAT:
            _note("unsupported", lineno)
            continue
        if first.status is DecodeStatus.STREAM_TRUNCATED:
            _note("truncated", lineno)
            continue
        counts["pages"] += len(first.pages)

        try:
            again = encode(first.pages)
        except RangeViolation:
            # decoded values that cannot be packed again (e.g. deltas out of range)
            _note("unstable", lineno)
            continue
        second = decode(again)
        if not second.ok or second.pages != first.pages:
            _note("unstable", lineno)
            continue
        if again != text:
            _note("rewritten", lineno)
        counts["ok"] += 1

    return {"counts": counts, "samples": samples}


def main(argv: List[str]) -> int:
    if len(argv) < 2:
        print(__doc__.strip())
        return 2
    path = argv[1]
    limit = int(argv[2]) if len(argv) > 2 else None
    with open(path, "r", encoding="utf-8") as f:
        lines = f.readlines()
    summary = check_lines(lines, limit)
    print(json.dumps(summary, indent=2))
    return 0 if summary["counts"]["unstable"] == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
