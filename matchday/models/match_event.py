"""Match event value type recorded in a per-match ledger."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..utils import parse_minute
from ..utils.constants import STAT_ASSIST, STAT_GOAL, STAT_RED_CARD, STAT_YELLOW_CARD


class EventType(Enum):
    """Kinds of in-match event."""
    GOAL = "goal"
    ASSIST = "assist"
    INJURY = "injury"
    YELLOW_CARD = "yellowCard"
    RED_CARD = "redCard"
    SUBSTITUTION = "substitution"

    @property
    def stat_key(self) -> Optional[str]:
        """Stat this event credits to its player, if any."""
        return _EVENT_STAT_KEYS.get(self)


_EVENT_STAT_KEYS = {
    EventType.GOAL: STAT_GOAL,
    EventType.ASSIST: STAT_ASSIST,
    EventType.YELLOW_CARD: STAT_YELLOW_CARD,
    EventType.RED_CARD: STAT_RED_CARD,
}

DedupKey = Tuple[str, str, str, Optional[str]]


@dataclass(frozen=True)
class MatchEvent:
    """
    One occurrence in a match, tied to a player and a minute.

    Attributes:
        type: What happened
        player_email: Player the event is about (the outgoing player for substitutions)
        minute: Match minute as entered, kept as a string
        subbed_in_email: Incoming player, substitutions only
    """
    type: EventType
    player_email: str
    minute: str
    subbed_in_email: Optional[str] = None

    def __post_init__(self) -> None:
        # Minutes arrive as typed; "10" and " 10" are the same minute
        object.__setattr__(self, "minute", str(self.minute if self.minute is not None else "").strip())
        object.__setattr__(self, "subbed_in_email", self.subbed_in_email or None)

    @property
    def dedup_key(self) -> DedupKey:
        """Fields that make two events the same logical event."""
        return (self.player_email, self.minute, self.type.value, self.subbed_in_email or None)

    def validation_errors(self) -> Dict[str, str]:
        """
        Check the event before it is merged into a ledger.

        Returns:
            Mapping of field name to error message (empty if valid)
        """
        errors: Dict[str, str] = {}
        if not (self.player_email or "").strip():
            errors["playerEmail"] = "Player is required"
        if parse_minute(self.minute) is None:
            errors["minute"] = "Minute must be a non-negative whole number"
        if self.type is EventType.SUBSTITUTION:
            if not (self.subbed_in_email or "").strip():
                errors["subbedInEmail"] = "Substitution requires the incoming player"
            elif self.subbed_in_email == self.player_email:
                errors["subbedInEmail"] = "Incoming and outgoing player must differ"
        elif self.subbed_in_email:
            errors["subbedInEmail"] = "Only substitutions name an incoming player"
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the gateway's camelCase form."""
        data: Dict[str, Any] = {
            "type": self.type.value,
            "playerEmail": self.player_email,
            "minute": self.minute,
        }
        if self.subbed_in_email:
            data["subbedInEmail"] = self.subbed_in_email
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MatchEvent:
        """
        Create an event from the gateway's camelCase form.

        Raises:
            ValueError: If the event type is unknown or an email is not a string
            KeyError: If a required field is missing
        """
        player_email = data["playerEmail"]
        subbed_in_email = data.get("subbedInEmail") or None
        if not isinstance(player_email, str) or not isinstance(subbed_in_email or "", str):
            raise ValueError("Player emails must be strings")
        return cls(
            type=EventType(data["type"]),
            player_email=player_email,
            minute=data.get("minute", ""),
            subbed_in_email=subbed_in_email,
        )
