"""
Models package for the Matchday lineup engine.

This package contains the core data models used throughout the application.
"""
from .formation import (
    Formation, Position, PositionCategory, SlotKey, FORMATIONS, DEFAULT_FORMATION,
    get_formation, list_formations, slots_of, slot_count, category_for_lineup_key
)
from .player import Player, TeamContext, PlayerStats, build_name_lookup
from .match import Match, MatchResult, Lineup, HOME, AWAY
from .match_event import MatchEvent, EventType

__all__ = [
    "Formation", "Position", "PositionCategory", "SlotKey", "FORMATIONS",
    "DEFAULT_FORMATION", "get_formation", "list_formations", "slots_of", "slot_count",
    "category_for_lineup_key",
    "Player", "TeamContext", "PlayerStats", "build_name_lookup",
    "Match", "MatchResult", "Lineup", "HOME", "AWAY",
    "MatchEvent", "EventType"
]
