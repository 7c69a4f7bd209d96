"""GUID parsing and canonical rendering."""

from __future__ import annotations

import re
import uuid

from slnfile.errors import InvalidGuidError

_HEX_GROUPS = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"

# Accepted spellings: bare hyphenated, {braced}, (parenthesised), or 32 hex digits
_GUID_RE = re.compile(
    rf"^(?:{_HEX_GROUPS}|\{{{_HEX_GROUPS}\}}|\({_HEX_GROUPS}\)|[0-9a-fA-F]{{32}})$"
)


def parse_guid(text: str, line_number: int | None = None) -> uuid.UUID:
    candidate = text.strip()
    if not _GUID_RE.match(candidate):
        raise InvalidGuidError(f"invalid GUID {text!r}", line_number)
    return uuid.UUID(candidate.strip("{}()"))


def coerce_guid(value: uuid.UUID | str) -> uuid.UUID:
    """Accept either a UUID or any accepted GUID spelling."""
    if isinstance(value, uuid.UUID):
        return value
    return parse_guid(value)


def format_guid(value: uuid.UUID) -> str:
    """Render as uppercase, brace-delimited, hyphenated hex."""
    return "{" + str(value).upper() + "}"


def try_parse_guid(text: str) -> uuid.UUID | None:
    """Like parse_guid, but return None for text that is not a GUID."""
    try:
        return parse_guid(text)
    except InvalidGuidError:
        return None
