from __future__ import annotations

import os
import sys

_TRUTHY = ('1', 'true', 'yes', 'on')
DEFAULT_HTTP_MAX = 1024 * 1024  # app.config["MAX_CONTENT_LENGTH"]


def _env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def debug_enabled() -> bool:
    """True when FUMEN_DEBUG is set to 1/true/yes/on. Read on every call so tests can toggle it."""
    return _env_flag('FUMEN_DEBUG')


def debug_log(tag: str, message: str) -> None:
    # stderr keeps CLI output on stdout parseable
    if debug_enabled():
        print(f"[{tag}] {message}", file=sys.stderr)


def http_max_bytes() -> int:
    """Request body limit for the HTTP API (FUMEN_HTTP_MAX, bytes); becomes Flask's MAX_CONTENT_LENGTH."""
    raw = os.getenv('FUMEN_HTTP_MAX')
    if not raw:
        return DEFAULT_HTTP_MAX
    try:
        value = int(raw)
    except ValueError:
        debug_log('config', f"ignoring non-integer FUMEN_HTTP_MAX={raw!r}")
        return DEFAULT_HTTP_MAX
    return value if value > 0 else DEFAULT_HTTP_MAX


def server_port() -> int:
    return int(os.getenv('PORT', '5000'))


def flask_debug() -> bool:
    return os.getenv('FLASK_DEBUG', os.getenv('DEBUG', '0')).lower() in _TRUTHY
