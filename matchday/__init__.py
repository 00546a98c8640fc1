"""
Matchday lineup engine

Builds formation-based lineups with a bounded substitute bench, records
in-match events into a deduplicated per-match ledger, and credits starters
with games played through a remote match gateway.

The Flask JSON API in ``matchday.ui`` exposes these services to a web frontend.
"""
from .models import Formation, SlotKey, Player, TeamContext, Match, Lineup, MatchEvent, EventType
from .services import (
    AssignmentTable, SubstitutePool, MatchEventLedger, ParticipationRecorder,
    LineupSession, GatewayClient, ServiceFactory
)

__version__ = "1.0.0"

__all__ = [
    "Formation", "SlotKey", "Player", "TeamContext", "Match", "Lineup", "MatchEvent",
    "EventType", "AssignmentTable", "SubstitutePool", "MatchEventLedger",
    "ParticipationRecorder", "LineupSession", "GatewayClient", "ServiceFactory"
]
