"""Timestamp helpers.

The tracking server stores every time as integer Unix milliseconds: run start
and end times, metric timestamps, experiment creation times. ``to_ms`` turns
what callers have at hand into that form, ``ms_to_datetime`` goes back.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

Timestamp = int | float | str | datetime


def now_ms() -> int:
    """Current wall-clock time as Unix milliseconds."""
    return int(time.time() * 1000)


def ms_to_datetime(ms: int) -> datetime:
    """Convert Unix milliseconds from the server to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def _from_iso(text: str) -> datetime:
    text = text.strip()
    if not text:
        raise ValueError("Timestamp string cannot be empty")
    # fromisoformat() only learned the 'Z' suffix in 3.11
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(f"Invalid timestamp format: '{text}'. Expected ISO 8601 or Unix milliseconds.") from e


def to_ms(value: Timestamp) -> int:
    """Normalize a timestamp to Unix milliseconds.

    Args:
        value: One of
            - int/float: already Unix milliseconds (floats are truncated)
            - datetime: naive values are taken as UTC
            - str: ISO 8601, naive values are taken as UTC

    Returns:
        Unix timestamp in milliseconds.

    Raises:
        ValueError: If the value is None, a boolean, an empty or malformed
            string, or of another type.
    """
    if value is None:
        raise ValueError("Timestamp cannot be None")
    if isinstance(value, bool):
        raise ValueError("Timestamp cannot be a boolean")
    if isinstance(value, (int, float)):
        return int(value)

    if isinstance(value, str):
        value = _from_iso(value)
    if not isinstance(value, datetime):
        raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)
