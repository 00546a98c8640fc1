"""
Time and match-minute helpers for the Matchday application.

Match events carry their minute as a string on the wire; these helpers
parse and order them.
"""
from typing import Optional


def parse_minute(minute: Optional[str]) -> Optional[int]:
    """
    Parse a match minute string.

    Args:
        minute: Minute as sent by the client (e.g. "10", " 45 ")

    Returns:
        The minute as a non-negative integer, or None if it is not one

    Example:
        >>> parse_minute("10")
        10
        >>> parse_minute("-3") is None
        True
    """
    if minute is None:
        return None
    text = str(minute).strip()
    if not text.isdigit():
        return None
    return int(text)


def minute_sort_key(minute: Optional[str]) -> int:
    """Sort key placing unparseable minutes after every real one."""
    value = parse_minute(minute)
    return value if value is not None else 10 ** 6

