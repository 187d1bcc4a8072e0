from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request

from fumen_core.codec import FILLER, FORMAT_TAG, decode, encode
from fumen_core.config import debug_log, flask_debug, http_max_bytes, server_port
from fumen_core.errors import RangeViolation
from fumen_core.page import FIELD_HEIGHT, FIELD_NUM_CELLS, FIELD_WIDTH, MinoType, Rotation
from fumen_core.serde import json_to_pages, pages_to_json

app = Flask(__name__)
# Werkzeug enforces this on declared and streamed (no Content-Length) bodies alike
app.config["MAX_CONTENT_LENGTH"] = http_max_bytes()


def _error(reason: str, message: str, status: int = 400, **extra: Any) -> Tuple[Any, int]:
    body: Dict[str, Any] = {"ok": False, "error": message, "reason": reason}
    body.update(extra)
    return jsonify(body), status


@app.errorhandler(413)
def _too_large(_e: Exception) -> Any:
    limit = app.config["MAX_CONTENT_LENGTH"]
    debug_log('http', f"rejecting body on {request.path} (limit {limit})")
    return _error("too_large", f"request body exceeds {limit} bytes", 413)


@app.get("/api/meta")
def api_meta() -> Any:
    return jsonify({
        "ok": True,
        "formatTag": FORMAT_TAG,
        "filler": FILLER,
        "field": {"width": FIELD_WIDTH, "height": FIELD_HEIGHT, "cells": FIELD_NUM_CELLS},
        "minoTypes": [m.name for m in MinoType],
        "rotations": [r.name for r in Rotation],
    })


@app.post("/api/decode")
def api_decode() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, str):
        return _error("bad_request", "data (string) required")
    result = decode(data)
    if not result.ok:
        return _error(result.status.value, result.error or result.status.value)
    return jsonify({"ok": True, "pages": pages_to_json(result.pages)})


@app.post("/api/encode")
def api_encode() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    items = body.get("pages") if isinstance(body, dict) else None
    if items is None:
        return _error("bad_request", "pages required")
    try:
        pages = json_to_pages(items)
    except (ValueError, TypeError) as e:
        return _error("bad_request", f"bad pages: {e}")
    try:
        data = encode(pages)
    except RangeViolation as e:
        return _error("range_violation", str(e), page=e.page, field=e.field)
    return jsonify({"ok": True, "data": data})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=server_port(), debug=flask_debug())
