from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from .codec import decode, encode
from .errors import RangeViolation
from .page import MinoType, Page, Rotation
from .serde import json_to_pages, pages_to_json


def _fail(message: str) -> int:
    print(f"error: {message}", file=sys.stderr)
    return 1


def _describe(index: int, page: Page) -> str:
    piece = page.piece
    try:
        mino = MinoType(piece.type).name
        rot = Rotation(piece.rotation).name.lower()
    except ValueError:
        mino, rot = str(piece.type), str(piece.rotation)
    bits = [name for name, on in (
        ('raise', page.flags.raise_),
        ('mirror', page.flags.mirror),
        ('color', page.flags.color),
        ('lock', page.flags.lock),
    ) if on]
    line = f"page {index}: {mino} {rot} @{piece.location} [{' '.join(bits)}]"
    if page.flags.comment:
        line += f" {page.flags.comment!r}"
    return line


def cmd_decode(args: argparse.Namespace) -> int:
    result = decode(args.data)
    if not result.ok:
        return _fail(f"{result.status.value}: {result.error}")
    print(json.dumps(pages_to_json(result.pages), indent=args.indent, ensure_ascii=False))
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    try:
        if args.file and args.file != '-':
            with open(args.file, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        else:
            raw = json.load(sys.stdin)
    except (OSError, json.JSONDecodeError) as e:
        return _fail(f"could not read pages: {e}")
    try:
        pages = json_to_pages(raw)
        print(encode(pages))
    except RangeViolation as e:
        return _fail(str(e))
    except (ValueError, TypeError) as e:
        return _fail(f"bad pages: {e}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    result = decode(args.data)
    if not result.ok:
        return _fail(f"{result.status.value}: {result.error}")
    pages = list(enumerate(result.pages))
    if args.page is not None:
        if not 0 <= args.page < len(pages):
            return _fail(f"page {args.page} out of range (0..{len(pages) - 1})")
        pages = [pages[args.page]]
    for n, (index, page) in enumerate(pages):
        if n:
            print()
        print(_describe(index, page))
        print(page.pretty())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='fumen', description='Encode and decode v115 fumen strings')
    sub = parser.add_subparsers(dest='cmd', required=True)

    sd = sub.add_parser('decode', help='Decode fumen text to a JSON page list')
    sd.add_argument('data', help='fumen text starting with v115@')
    sd.add_argument('--indent', type=int, default=None, help='JSON indent')
    sd.set_defaults(fn=cmd_decode)

    se = sub.add_parser('encode', help='Encode a JSON page list to fumen text')
    se.add_argument('file', nargs='?', default=None, help='JSON file (default: stdin)')
    se.set_defaults(fn=cmd_encode)

    ss = sub.add_parser('show', help='Print decoded fields as text')
    ss.add_argument('data', help='fumen text starting with v115@')
    ss.add_argument('--page', type=int, default=None, help='Only show this page index')
    ss.set_defaults(fn=cmd_show)

    args = parser.parse_args(argv)
    return int(args.fn(args))


if __name__ == '__main__':
    raise SystemExit(main())
