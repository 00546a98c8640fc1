"""
Services package for the Matchday lineup engine.

This package contains the assignment table, substitute pool, event ledger,
participation recorder and the gateway client they share.
"""
from .errors import (
    MatchdayError, LineupValidationError, EventValidationError, NetworkError,
    RaceLossError, StatCreditError, PartialFailureError, SessionClosedError
)
from .gateway_client import GatewayClient, EventSnapshot
from .assignment_table import AssignmentTable, AssignmentChange, ChangeKind
from .substitute_pool import SubstitutePool, SubstituteAddResult
from .event_ledger import MatchEventLedger, dedupe
from .participation_recorder import (
    ParticipationRecorder, ParticipationReport, ParticipationResult
)
from .lineup_session import LineupSession, SessionState, SaveResult
from .service_factory import ServiceFactory

__all__ = [
    "MatchdayError", "LineupValidationError", "EventValidationError", "NetworkError",
    "RaceLossError", "StatCreditError", "PartialFailureError", "SessionClosedError",
    "GatewayClient", "EventSnapshot",
    "AssignmentTable", "AssignmentChange", "ChangeKind",
    "SubstitutePool", "SubstituteAddResult",
    "MatchEventLedger", "dedupe",
    "ParticipationRecorder", "ParticipationReport", "ParticipationResult",
    "LineupSession", "SessionState", "SaveResult",
    "ServiceFactory"
]
