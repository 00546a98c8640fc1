"""
Lineup editing session.

Coordinates the assignment table and substitute pool for one match while a
coach builds a lineup, and saves the result through the gateway.

States:
    DRAFT            no formation chosen
    FORMATION_CHOSEN formation chosen, every slot empty
    ASSIGNING        some slots filled
    VALID            every slot filled
    SAVED            saved and unchanged since; any edit leaves this state
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..models import (
    HOME, Lineup, Match, Player, SlotKey, TeamContext, build_name_lookup, get_formation
)
from ..utils import setup_logger
from ..utils.constants import POSITION_CATEGORY_ORDER
from .assignment_table import AssignmentChange, AssignmentTable, ChangeKind
from .errors import LineupValidationError, SessionClosedError
from .gateway_client import GatewayClient
from .participation_recorder import ParticipationRecorder, ParticipationReport
from .substitute_pool import SubstituteAddResult, SubstitutePool

logger = setup_logger(__name__)


class SessionState(Enum):
    DRAFT = "draft"
    FORMATION_CHOSEN = "formation_chosen"
    ASSIGNING = "assigning"
    VALID = "valid"
    SAVED = "saved"


@dataclass
class SaveResult:
    """Outcome of ``LineupSession.save``."""
    saved: bool
    messages: List[str] = field(default_factory=list)
    participation: Optional[ParticipationReport] = None

    def to_dict(self) -> Dict:
        return {
            "saved": self.saved,
            "messages": self.messages,
            "participation": self.participation.to_dict() if self.participation else None,
        }


class LineupSession:
    """
    One coach editing one match's lineup.

    The session is the only owner of its table and pool. Closing it marks
    it disposed: later mutations raise ``SessionClosedError`` and a save
    that completes after close does not touch session state.
    """

    def __init__(
        self,
        match: Match,
        team: TeamContext,
        roster: Sequence[Player],
        gateway: GatewayClient,
        recorder: Optional[ParticipationRecorder] = None,
    ):
        self.match = match
        self.team = team
        self.roster: List[Player] = list(roster)
        self.gateway = gateway
        self.recorder = recorder or ParticipationRecorder(gateway)

        self.formation_id: Optional[str] = None
        self.strategy_notes = ""
        self.table = AssignmentTable()
        self.pool = SubstitutePool()
        self.table.subscribe(self._on_assignment_change)

        self._saved = False
        self._closed = False

    # ---------- State ---------- #

    @property
    def state(self) -> SessionState:
        if self.formation_id is None:
            return SessionState.DRAFT
        if self._saved:
            return SessionState.SAVED
        if self.table.filled_count == 0:
            return SessionState.FORMATION_CHOSEN
        if self.table.validate():
            return SessionState.ASSIGNING
        return SessionState.VALID

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Dispose of the session; in-flight saves will not update it."""
        self._closed = True
        self.table.unsubscribe(self._on_assignment_change)

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError(f"Lineup session for match {self.match.match_id} is closed")

    def _touch(self) -> None:
        self._saved = False

    def _on_assignment_change(self, change: AssignmentChange) -> None:
        # A new starter can no longer sit on the bench
        if change.kind is ChangeKind.ASSIGNED and change.email:
            self.pool.evict(change.email)

    # ---------- Formation ---------- #

    def needs_confirmation(self, formation_id: str) -> bool:
        """Whether switching to ``formation_id`` would discard assignments."""
        return formation_id != self.formation_id and self.table.filled_count > 0

    def select_formation(self, formation_id: str, confirmed: bool = False) -> bool:
        """
        Choose the formation, clearing every starter assignment.

        The substitute bench is kept.

        Returns:
            False, without changing anything, when assignments exist and the
            change was not confirmed

        Raises:
            KeyError: If the formation is not in the catalog
        """
        self._ensure_open()
        formation = get_formation(formation_id)
        if formation_id == self.formation_id:
            return True
        if self.needs_confirmation(formation_id) and not confirmed:
            return False
        self.formation_id = formation_id
        self.table.reset(formation.slots())
        self._touch()
        logger.debug("Match %s: formation set to %s", self.match.match_id, formation_id)
        return True

    # ---------- Starters ---------- #

    def assign(self, slot: SlotKey, email: Optional[str]) -> None:
        """
        Put a player in a slot (empty email clears it).

        Raises:
            SessionClosedError: If the session is closed
            ValueError: If no formation is chosen or the slot is not in it
        """
        self._ensure_open()
        if self.formation_id is None:
            raise ValueError("Choose a formation before assigning players")
        self.table.assign(slot, email)
        self._touch()

    def unassign(self, slot: SlotKey) -> None:
        self._ensure_open()
        if self.formation_id is None:
            raise ValueError("Choose a formation before assigning players")
        self.table.unassign(slot)
        self._touch()

    def validate(self) -> List[str]:
        """Validation messages for the current lineup."""
        if self.formation_id is None:
            return ["Choose a formation"]
        return self.table.validate(get_formation(self.formation_id).slot_count)

    def require_valid(self) -> None:
        """
        Raises:
            LineupValidationError: If the lineup is incomplete
        """
        messages = self.validate()
        if messages:
            raise LineupValidationError(messages)

    # ---------- Substitutes ---------- #

    def add_substitute(self, email: str) -> SubstituteAddResult:
        self._ensure_open()
        result = self.pool.add(email, starters=self.table.assigned_emails())
        if result.added:
            self._touch()
        return result

    def remove_substitute(self, email: str) -> bool:
        self._ensure_open()
        removed = self.pool.remove(email)
        if removed:
            self._touch()
        return removed

    def available_substitutes(self) -> List[Player]:
        """Roster players who are not starting."""
        return self.pool.available(self.roster, self.table.assigned_emails())

    def roster_by_category(self) -> Dict[str, List[Player]]:
        """Roster grouped for the picker, goalkeepers first."""
        groups: Dict[str, List[Player]] = {category: [] for category in POSITION_CATEGORY_ORDER}
        groups["Unassigned"] = []
        for player in self.roster:
            key = player.position_category.value if player.position_category else "Unassigned"
            groups[key].append(player)
        return {category: players for category, players in groups.items() if players}

    # ---------- Save ---------- #

    def build_lineup(self) -> Lineup:
        """Snapshot the current edits as a save unit."""
        if self.formation_id is None:
            raise ValueError("Choose a formation before building a lineup")
        return Lineup(
            match_id=self.match.match_id,
            team=self.team,
            formation_id=self.formation_id,
            assignments=self.table.as_dict(),
            substitutes=self.pool.members,
            strategy_notes=self.strategy_notes,
        )

    def save(self, record_participation: bool = True) -> SaveResult:
        """
        Save the lineup, then credit the starters with a game played.

        Local validation problems are returned in the result, never raised.

        Raises:
            SessionClosedError: If the session is already closed
            NetworkError: If the lineup save fails (session state unchanged)
            PartialFailureError: If some participation updates failed; the
                lineup itself is saved and the error carries the report
        """
        self._ensure_open()
        messages = self.validate()
        side = self.match.side_for(self.team.club_name)
        if side is None:
            messages.append("You are not a coach for either of the teams in this match.")
        if messages:
            return SaveResult(saved=False, messages=messages)

        lineup = self.build_lineup()
        self.gateway.save_lineups(lineup.to_payload(side))

        if self._closed:
            logger.info("Match %s: session closed during save; skipping follow-up", self.match.match_id)
            return SaveResult(saved=True)
        self._saved = True
        logger.info(
            "Match %s: saved %s lineup for %s", self.match.match_id, side, self.team.club_name
        )

        result = SaveResult(saved=True)
        if record_participation:
            report = self.recorder.record_participation(
                lineup, side == HOME, build_name_lookup(self.roster)
            )
            result.participation = report
            report.raise_for_failures()
        return result

    def to_dict(self) -> Dict:
        """Session snapshot for the web layer."""
        return {
            "match": self.match.to_dict(),
            "team": self.team.to_dict(),
            "state": self.state.value,
            "formation": self.formation_id,
            "slots": [slot.key for slot in self.table.slots],
            "assignments": {slot.key: email for slot, email in self.table.as_dict().items()},
            "substitutes": self.pool.members,
            "available_substitutes": [p.to_dict() for p in self.available_substitutes()],
            "strategy_notes": self.strategy_notes,
            "messages": self.validate(),
        }
