"""Utility helpers for the related-episode matcher.

Pure functions with minimal dependencies for:
- Order-independent pair keys
- Air date parsing
- Title casing for display strings
- Timestamps
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def pair_key(episode_id_1: int, episode_id_2: int) -> str:
    """Return an order-independent key for a pair of episode IDs.

    pair_key(7, 3) == pair_key(3, 7) == "3_7"
    """
    low, high = sorted((int(episode_id_1), int(episode_id_2)))
    return f"{low}_{high}"


def parse_air_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an air date string into an aware UTC datetime.

    Accepts plain ISO dates ("2024-01-15") and ISO timestamps. A bare date is
    taken as midnight UTC.

    Args:
        value: Air date string, or None

    Returns:
        Parsed datetime, or None if the value is empty or malformed
    """
    if not value:
        return None

    text = value.strip()
    try:
        if len(text) == 10:
            parsed = date.fromisoformat(text)
            return datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def air_date_timestamp(value: Optional[str]) -> float:
    """Return the air date as epoch seconds, 0.0 when missing or malformed."""
    dt = parse_air_date(value)
    if dt is None:
        return 0.0
    return dt.timestamp()


def title_case_words(text: str) -> str:
    """Upper-case the first character of each space-separated word.

    Unlike str.title(), the rest of each word is left untouched.
    """
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
