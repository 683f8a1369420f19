"""Helpers for the 24-character hexadecimal identifiers used by every record.

Campsites and users were originally keyed by document-store object ids and
clients still hold those values, so the relational schema keeps the same
format instead of switching to integers or UUIDs.
"""

from __future__ import annotations

import itertools
import os
import re
import secrets
import time

__all__ = [
    "OBJECT_ID_LENGTH",
    "is_valid_object_id",
    "new_object_id",
    "normalize_object_id",
]

OBJECT_ID_LENGTH = 24

_OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")
_PROCESS_NONCE = secrets.token_hex(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))


def is_valid_object_id(value: object) -> bool:
    """Return ``True`` when ``value`` is a 24-character hexadecimal string."""

    return isinstance(value, str) and bool(_OBJECT_ID_PATTERN.fullmatch(value))


def normalize_object_id(value: object) -> str | None:
    """Return the canonical lower-case form of ``value``, or ``None`` if malformed.

    Surrounding whitespace is ignored; hex digits compare case-insensitively.
    """

    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not is_valid_object_id(candidate):
        return None
    return candidate.lower()


def new_object_id() -> str:
    """Generate a fresh identifier.

    Layout: 4-byte seconds timestamp, 5-byte per-process nonce, 3-byte
    counter. Identifiers generated later sort after earlier ones.
    """

    timestamp = int(time.time()) & 0xFFFFFFFF
    count = next(_counter) & 0xFFFFFF
    return f"{timestamp:08x}{_PROCESS_NONCE}{count:06x}"
