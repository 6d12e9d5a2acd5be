"""Opaque pagination cursors.

A cursor is the listing index's continuation key serialized as compact JSON
and base64-encoded with the standard alphabet. Decoding returns the same
key, so a cursor handed back by a client resumes exactly where the previous
page stopped.
"""

import base64
import binascii
import json
import re
from typing import Any

MAX_CURSOR_LENGTH = 2000
_CURSOR_RE = re.compile(r"^[A-Za-z0-9+/]+=*$")


class InvalidCursorError(ValueError):
    pass


def encode_cursor(key: dict[str, Any]) -> str:
    payload = json.dumps(key, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> dict[str, Any]:
    """Decode a client-supplied cursor. Raises InvalidCursorError."""
    if len(cursor) > MAX_CURSOR_LENGTH:
        raise InvalidCursorError("Cursor too large")
    if not _CURSOR_RE.match(cursor):
        raise InvalidCursorError("Invalid cursor format")
    try:
        raw = base64.b64decode(cursor, validate=True)
        key = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidCursorError("Invalid cursor") from exc
    if not isinstance(key, dict):
        raise InvalidCursorError("Invalid cursor")
    return key
