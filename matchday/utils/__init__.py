"""
Utilities package for the Matchday lineup engine.

This package contains constants, logging setup and time helpers used
throughout the application.
"""
from .time_utils import parse_minute, minute_sort_key
from .logging_utils import setup_logger
from .constants import (
    MAX_SUBSTITUTES, POSITION_CATEGORY_ORDER,
    STAT_GAMES_PLAYED
)

__all__ = [
    "parse_minute", "minute_sort_key", "setup_logger",
    "MAX_SUBSTITUTES", "POSITION_CATEGORY_ORDER",
    "STAT_GAMES_PLAYED"
]
