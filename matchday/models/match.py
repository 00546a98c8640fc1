"""
Match models for the Matchday lineup engine.

This module contains the fixture a lineup is built for, the final score,
and the Lineup save unit sent to the remote match service.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .formation import SlotKey
from .player import TeamContext
from ..utils.constants import SUBSTITUTE_KEY_PREFIX

HOME = "home"
AWAY = "away"


@dataclass
class Match:
    """A scheduled fixture between two clubs."""
    match_id: str
    home_team: str
    away_team: str
    date: str = ""

    def side_for(self, club_name: str) -> Optional[str]:
        """
        Which side a club plays on in this fixture.

        Returns:
            ``"home"``, ``"away"``, or None if the club plays in neither
        """
        if club_name and club_name == self.home_team:
            return HOME
        if club_name and club_name == self.away_team:
            return AWAY
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the gateway's camelCase form."""
        return {
            "matchId": self.match_id,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Match':
        """Create a fixture from the gateway's camelCase form."""
        return cls(
            match_id=data["matchId"],
            home_team=data.get("homeTeam", ""),
            away_team=data.get("awayTeam", ""),
            date=data.get("date", ""),
        )


@dataclass
class MatchResult:
    """Final score of a match."""
    home_score: int
    away_score: int

    def validation_errors(self) -> Dict[str, str]:
        """Scores must be non-negative whole numbers."""
        errors = {}
        for field_name, value in (("homeScore", self.home_score), ("awayScore", self.away_score)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors[field_name] = "Score must be a non-negative whole number"
        return errors

    def to_dict(self) -> Dict[str, int]:
        return {"homeScore": self.home_score, "awayScore": self.away_score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchResult':
        return cls(home_score=data["homeScore"], away_score=data["awayScore"])


@dataclass
class Lineup:
    """
    Starters and substitutes for one team in one match.

    Attributes:
        match_id: Fixture the lineup belongs to
        team: Club, age group and division of the coached team
        formation_id: Catalog formation the slots come from
        assignments: Slot to player email, one slot per player
        substitutes: Substitute emails in bench order
        strategy_notes: Free-text coach notes saved alongside
    """
    match_id: str
    team: TeamContext
    formation_id: str
    assignments: Dict[SlotKey, str] = field(default_factory=dict)
    substitutes: List[str] = field(default_factory=list)
    strategy_notes: str = ""

    def starter_emails(self) -> List[str]:
        """Emails bound to a slot, in slot order, skipping empty bindings."""
        return [email for email in self.assignments.values() if email]

    def to_team_lineup(self) -> Dict[str, str]:
        """
        Flatten into the saved lineup map.

        Slots are keyed by their wire form and substitutes by ``Sub1``,
        ``Sub2``... in bench order.
        """
        team_lineup = {slot.key: email for slot, email in self.assignments.items() if email}
        for index, email in enumerate(self.substitutes, start=1):
            team_lineup[f"{SUBSTITUTE_KEY_PREFIX}{index}"] = email
        return team_lineup

    def to_payload(self, side: str) -> Dict[str, Any]:
        """
        Build the save-lineup request body for one side of the fixture.

        Only the coached side is included so the other coach's lineup is
        left untouched.

        Raises:
            ValueError: If side is neither ``"home"`` nor ``"away"``
        """
        if side not in (HOME, AWAY):
            raise ValueError(f"Unknown side: {side!r}")
        payload: Dict[str, Any] = {"matchId": self.match_id, **self.team.to_dict()}
        payload["formation"] = self.formation_id
        payload["strategyNotes"] = self.strategy_notes
        payload[f"{side}TeamLineup"] = self.to_team_lineup()
        return payload

    @staticmethod
    def split_team_lineup(team_lineup: Dict[str, str]) -> Tuple[Dict[SlotKey, str], List[str]]:
        """
        Split a saved lineup map back into starters and substitutes.

        Keys that are neither slot keys nor ``SubN`` are ignored.
        """
        assignments: Dict[SlotKey, str] = {}
        numbered_subs: List[Tuple[int, str]] = []
        for key, email in (team_lineup or {}).items():
            if not email:
                continue
            suffix = key[len(SUBSTITUTE_KEY_PREFIX):]
            if key.startswith(SUBSTITUTE_KEY_PREFIX) and suffix.isdigit():
                numbered_subs.append((int(suffix), email))
                continue
            try:
                assignments[SlotKey.parse(key)] = email
            except ValueError:
                continue
        substitutes = [email for _, email in sorted(numbered_subs)]
        return assignments, substitutes
