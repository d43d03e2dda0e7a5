"""Parsing of externally supplied identifiers."""

from __future__ import annotations

from orderdesk.domain.exceptions import InvalidIdError


def parse_id(raw: int | str, label: str = "order") -> int:
    """Return ``raw`` as a positive integer or raise ``InvalidIdError``."""
    if isinstance(raw, bool):
        raise InvalidIdError(f"Invalid {label} ID")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidIdError(f"Invalid {label} ID")
        value = int(text)
    if value <= 0:
        raise InvalidIdError(f"Invalid {label} ID")
    return value
