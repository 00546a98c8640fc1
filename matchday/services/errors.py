"""
Exceptions raised by the Matchday services.

Validation errors are local and actionable by the user. Network errors wrap
any failed call to the remote gateway and leave in-memory state unchanged.
"""
from typing import Any, Dict, List, Optional


class MatchdayError(Exception):
    """Base class for all Matchday errors."""
    pass


class LineupValidationError(MatchdayError):
    """Lineup is not ready to be saved."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages) or "Lineup is invalid")
        self.messages = list(messages)


class EventValidationError(MatchdayError):
    """Match event rejected before it reached the ledger."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Invalid match event: " + "; ".join(
            f"{field}: {message}" for field, message in errors.items()
        ))
        self.errors = dict(errors)


class NetworkError(MatchdayError):
    """A call to the remote gateway failed."""

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "message": self.message,
            **({"status_code": self.status_code} if self.status_code is not None else {}),
            **({"details": self.details} if self.details else {}),
        }


class RaceLossError(NetworkError):
    """The remote event list changed between our read and our write."""
    pass


class PartialFailureError(MatchdayError):
    """Some, but not necessarily all, per-player stat updates failed."""

    def __init__(self, report: Any):
        failed = report.failed
        super().__init__(
            f"Failed to record participation for {len(failed)} of {len(report.results)} players"
        )
        self.report = report


class SessionClosedError(MatchdayError):
    """The lineup editing session has been closed."""
    pass


class StatCreditError(NetworkError):
    """The event was saved but crediting the player's stat failed; record it again to retry."""
    pass
