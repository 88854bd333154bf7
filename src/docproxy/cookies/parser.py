"""Set-Cookie header parsing into browser cookie records."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional, Union

from .models import CookieRecord, SameSite

logger = logging.getLogger(__name__)

SECURE_PREFIX = "__Secure-"
HOST_PREFIX = "__Host-"

_SAME_SITE_VALUES = {
    "none": SameSite.NONE,
    "lax": SameSite.LAX,
    "strict": SameSite.STRICT,
}

SetCookieValue = Union[str, Sequence[str], None]


def _strip_quotes(value: str) -> str:
    """Remove one layer of matching double or single quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _origin(scheme: str, host: str) -> str:
    if scheme.endswith(":"):
        scheme = scheme[:-1]
    return f"{scheme}://{host}"


def parse_set_cookie_line(line: str, origin_scheme: str, origin_host: str) -> Optional[CookieRecord]:
    """
    Parse a single Set-Cookie line.

    Args:
        line: One full Set-Cookie header value
        origin_scheme: Scheme of the responding origin ("https" or "https:")
        origin_host: Host name of the responding origin

    Returns:
        CookieRecord, or None if the line is structurally unparsable
    """
    parts = [part.strip() for part in line.split(";")]
    parts = [part for part in parts if part]
    if not parts:
        return None

    name, sep, value = parts[0].partition("=")
    if not sep:
        return None

    name = name.strip()
    value = _strip_quotes(value.strip())
    if not name:
        return None

    record = CookieRecord(name=name, value=value)
    path: Optional[str] = None
    has_domain = False

    for attr in parts[1:]:
        raw_key, _, raw_val = attr.partition("=")
        key = raw_key.strip().lower()
        val = raw_val.strip()

        if key == "secure":
            record.secure = True
        elif key == "httponly":
            record.http_only = True
        elif key == "path":
            path = val or "/"
        elif key == "domain":
            has_domain = True
            record.domain = (val[1:] if val.startswith(".") else val).lower()
        elif key == "samesite":
            record.same_site = _SAME_SITE_VALUES.get(val.lower())

    record.path = path or "/"

    if name.startswith(SECURE_PREFIX):
        record.secure = True
    if name.startswith(HOST_PREFIX):
        record.secure = True
        record.path = "/"
        record.domain = None
        has_domain = False

    if record.same_site is SameSite.NONE:
        record.secure = True

    if not has_domain or not record.domain:
        record.url = _origin(origin_scheme, origin_host) + record.path
        record.domain = None

    return record


def map_set_cookie(
    header_value: SetCookieValue,
    origin_scheme: str,
    origin_host: str,
) -> list[CookieRecord]:
    """
    Map raw Set-Cookie header value(s) to cookie records.

    Malformed lines (empty, no "=" in the name/value pair, empty name)
    are skipped without affecting the remaining lines.

    Example:
        records = map_set_cookie(
            ["sid=abc; Path=/; HttpOnly", "__Host-t=1; Secure"],
            "https",
            "example.com",
        )

    Args:
        header_value: A single header string, a sequence of them, or None
        origin_scheme: Scheme of the responding origin
        origin_host: Host name of the responding origin

    Returns:
        List of finalized cookie records, in header order
    """
    if header_value is None:
        return []
    if isinstance(header_value, str):
        lines: Sequence[str] = [header_value]
    else:
        lines = header_value

    records: list[CookieRecord] = []
    for line in lines:
        if not isinstance(line, str):
            continue
        record = parse_set_cookie_line(line, origin_scheme, origin_host)
        if record is None:
            logger.debug("Skipping malformed Set-Cookie line")
            continue
        records.append(record)

    return records
