"""Address text utilities.

Splitting provider address strings into comma segments, Plus Code
detection, and single-line formatting of a resolved address. Everything in
this module works on plain strings so it can be shared by the mapper, the
candidate selector and the orchestrator without importing the models.
"""

from __future__ import annotations

import re

# 4 alphanumerics, "+", at least 2 alphanumerics (e.g. "8GXX+PH").
PLUS_CODE_PATTERN = re.compile(r"^[A-Z0-9]{4}\+[A-Z0-9]{2,}")


def is_plus_code(text: str | None) -> bool:
    """Check if a string starts with a Plus Code locator.

    Args:
        text: Candidate string, typically one comma segment of an address.

    Returns:
        True if the string begins with a Plus-Code-shaped token.
    """
    if not text:
        return False
    return PLUS_CODE_PATTERN.match(text.strip()) is not None


def split_segments(text: str | None) -> list[str]:
    """Split an address string on commas and trim each segment.

    Empty segments are dropped, so ``"a, , b"`` gives ``["a", "b"]``.
    """
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def leading_segment(text: str | None) -> str:
    """Return the first comma segment of a string, or ``""``."""
    segments = split_segments(text)
    return segments[0] if segments else ""


def first_street_segment(text: str | None) -> str:
    """Return the first segment after dropping a leading Plus Code segment.

    Only the leading segment is ever dropped; a Plus Code later in the string
    is left alone.
    """
    segments = split_segments(text)
    if segments and is_plus_code(segments[0]):
        segments = segments[1:]
    return segments[0] if segments else ""


def compute_single_line(
    street_address: str | None,
    city: str | None,
    state: str | None,
    postal_code: str | None,
) -> str:
    """Format address parts as ``street, city, state postal``.

    Missing parts are skipped without leaving stray separators.

    Args:
        street_address: Street line.
        city: City name.
        state: State, region or country.
        postal_code: Postal code.

    Returns:
        Single-line address, or ``""`` when every part is empty.
    """
    region = " ".join(part for part in (state, postal_code) if part)
    return ", ".join(part for part in (street_address, city, region) if part)
