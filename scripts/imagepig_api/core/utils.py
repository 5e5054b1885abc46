"""Utility helpers for the ImagePig client."""

from __future__ import annotations

import base64
import re
from datetime import datetime
from typing import Any, Optional
from urllib.parse import urlparse

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*$", re.IGNORECASE)
_NETWORK_SCHEMES = {"http", "https", "ftp", "ws", "wss"}
_FRACTION_RE = re.compile(r"(T\d{2}:\d{2}:\d{2})[.,](\d+)", re.IGNORECASE)


def is_absolute_url(value: str) -> bool:
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        parsed = urlparse(value)
        # Accessing .port validates the port component.
        parsed.port
    except ValueError:
        return False
    scheme = parsed.scheme.lower()
    if not scheme or not _SCHEME_RE.match(scheme):
        return False
    if any(ch.isspace() or not ch.isprintable() for ch in parsed.netloc):
        return False
    if scheme in _NETWORK_SCHEMES:
        return bool(parsed.hostname)
    return bool(parsed.netloc or parsed.path)


def decode_base64(value: Any) -> bytes:
    """Strictly decode base64 text given as ``str`` or bytes.

    Raises ``ValueError`` (``binascii.Error`` is a subclass) on malformed input.
    """
    if isinstance(value, str):
        value = value.encode("ascii")
    return base64.b64decode(bytes(value), validate=True)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; naive or malformed values yield ``None``."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text[-1:] in {"Z", "z"}:
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits.
    text = _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def extension_from_mime(mime_type: Optional[str], fallback: str = "jpeg") -> str:
    if mime_type:
        mime = mime_type.split(";", 1)[0].strip().lower()
        if mime.endswith("/jpeg") or mime.endswith("/jpg"):
            return "jpeg"
        if mime.endswith("/png"):
            return "png"
        if mime.endswith("/webp"):
            return "webp"
        if "/" in mime and mime.split("/", 1)[1]:
            return mime.split("/", 1)[1]
    return fallback


__all__ = [
    "decode_base64",
    "extension_from_mime",
    "is_absolute_url",
    "parse_timestamp",
]
