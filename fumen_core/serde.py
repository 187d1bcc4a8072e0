from __future__ import annotations

from typing import Any, Dict, Iterable, List, Type, TypeVar

from .page import FIELD_NUM_CELLS, Flags, MinoType, Page, Piece, Rotation

E = TypeVar('E', MinoType, Rotation)


def _enum_from_json(enum_cls: Type[E], value: Any, key: str) -> int:
    """Accept an int or an enum member name ("T", "north"). Out-of-range ints pass through unchanged."""
    if isinstance(value, bool):
        raise ValueError(f"bad {key}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        name = value.strip().upper()
        if name.endswith('_BLOCK'):
            name = name[:-len('_BLOCK')]
        try:
            return enum_cls[name]
        except KeyError:
            raise ValueError(f"bad {key}: {value!r}") from None
    raise ValueError(f"bad {key}: {value!r}")


def _int_from_json(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"bad {key}: {value!r}")
    return value


def _flag_from_json(flags: Dict[str, Any], name: str, default: bool) -> bool:
    value = flags.get(name, default)
    if not isinstance(value, bool):
        raise ValueError(f"bad flags.{name}: {value!r}")
    return value


def page_to_json(page: Page) -> Dict[str, Any]:
    return {
        "field": [int(c) for c in page.field],
        "piece": {
            "type": int(page.piece.type),
            "rotation": int(page.piece.rotation),
            "location": int(page.piece.location),
        },
        "flags": {
            "raise": bool(page.flags.raise_),
            "mirror": bool(page.flags.mirror),
            "color": bool(page.flags.color),
            "lock": bool(page.flags.lock),
            "comment": page.flags.comment,
        },
    }


def json_to_page(obj: Dict[str, Any]) -> Page:
    """Build a Page from its JSON form. Missing keys take the Page defaults."""
    if not isinstance(obj, dict):
        raise ValueError("page must be an object")
    defaults = Page()

    field_in = obj.get("field")
    if field_in is None:
        field = defaults.field
    else:
        if not isinstance(field_in, list) or len(field_in) != FIELD_NUM_CELLS:
            raise ValueError(f"field must be a list of {FIELD_NUM_CELLS} integers")
        field = tuple(_int_from_json(c, "field cell") for c in field_in)

    p = obj.get("piece")
    if p is None:
        p = {}
    if not isinstance(p, dict):
        raise ValueError("piece must be an object")
    piece = Piece(
        type=_enum_from_json(MinoType, p.get("type", defaults.piece.type), "piece.type"),
        rotation=_enum_from_json(Rotation, p.get("rotation", defaults.piece.rotation), "piece.rotation"),
        location=_int_from_json(p.get("location", defaults.piece.location), "piece.location"),
    )

    f = obj.get("flags")
    if f is None:
        f = {}
    if not isinstance(f, dict):
        raise ValueError("flags must be an object")
    comment = f.get("comment", "")
    if not isinstance(comment, str):
        raise ValueError("flags.comment must be a string")
    flags = Flags(
        raise_=_flag_from_json(f, "raise", defaults.flags.raise_),
        mirror=_flag_from_json(f, "mirror", defaults.flags.mirror),
        color=_flag_from_json(f, "color", defaults.flags.color),
        lock=_flag_from_json(f, "lock", defaults.flags.lock),
        comment=comment,
    )
    return Page(field=field, piece=piece, flags=flags)


def pages_to_json(pages: Iterable[Page]) -> List[Dict[str, Any]]:
    return [page_to_json(p) for p in pages]


def json_to_pages(items: Any) -> List[Page]:
    if not isinstance(items, list):
        raise ValueError("pages must be a list")
    return [json_to_page(it) for it in items]
