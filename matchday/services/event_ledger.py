"""
Match event ledger.

Each match keeps its events on the gateway. Recording an event reads the
current list, merges the new event in, drops duplicates and writes the whole
list back. When the gateway hands out a version token the write is made
conditional on it, so a concurrent writer is detected instead of silently
overwritten; without one the merge is last-writer-wins.

A goal, assist or card credits the player's stat once. If that update fails
after the event was written, the ledger remembers it and the next recording
of the same event retries the credit.
"""
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import MatchEvent, TeamContext
from ..utils import minute_sort_key, setup_logger
from .errors import EventValidationError, NetworkError, RaceLossError, StatCreditError
from .gateway_client import GatewayClient

logger = setup_logger(__name__)


def dedupe(events: Iterable[MatchEvent]) -> List[MatchEvent]:
    """
    Drop events whose dedup key was already seen.

    Stable: the first occurrence of each key is kept, in input order.
    """
    seen = set()
    unique = []
    for event in events:
        key = event.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique


class MatchEventLedger:
    """Records and lists match events through the remote gateway."""

    def __init__(self, gateway: GatewayClient, credit_stats: bool = True):
        """
        Args:
            gateway: Remote gateway client
            credit_stats: Whether newly recorded goals, assists and cards
                also increment the player's stats
        """
        self.gateway = gateway
        self.credit_stats = credit_stats
        # (match_id, dedup key) of saved events whose stat credit failed
        self._pending_credits: Dict[Tuple[str, tuple], Optional[str]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def validate_event(event: MatchEvent) -> None:
        """
        Raises:
            EventValidationError: If the event cannot be recorded
        """
        errors = event.validation_errors()
        if errors:
            raise EventValidationError(errors)

    def record_event(
        self,
        match_id: str,
        event: MatchEvent,
        team: TeamContext,
        player_name: Optional[str] = None,
    ) -> List[MatchEvent]:
        """
        Add an event to a match's ledger.

        Args:
            match_id: Match the event belongs to
            event: Event to record
            team: Team scope of the gateway calls
            player_name: Display name used when crediting stats

        Returns:
            The merged event list as written

        Raises:
            EventValidationError: Before any I/O, if the event is invalid
            RaceLossError: If another writer changed the list first
            StatCreditError: If the event was saved but its stat update failed;
                recording the same event again retries the stat update
            NetworkError: If the read or the write fails
        """
        self.validate_event(event)

        snapshot = self.gateway.fetch_events(match_id, team)
        already_recorded = any(e.dedup_key == event.dedup_key for e in snapshot.events)
        merged = dedupe(snapshot.events + [event])

        if already_recorded:
            logger.info("Event %s already recorded for match %s", event.dedup_key, match_id)
        remote_duplicates = len(snapshot.events) - len(dedupe(snapshot.events))
        if remote_duplicates:
            logger.info("Dropped %d duplicate events from match %s", remote_duplicates, match_id)

        try:
            self.gateway.replace_events(match_id, team, merged, version=snapshot.version)
        except RaceLossError:
            logger.warning(
                "Version mismatch writing events for match %s (read at %s); event %s not saved",
                match_id, snapshot.version, event.dedup_key,
            )
            raise

        credit_key = (match_id, event.dedup_key)
        with self._lock:
            owed = not already_recorded or credit_key in self._pending_credits
        if self.credit_stats and owed:
            self._credit_stat(match_id, event, team, player_name)
        return merged

    def list_events(self, match_id: str, team: TeamContext) -> List[MatchEvent]:
        """Events for a match, deduplicated and ordered by minute."""
        snapshot = self.gateway.fetch_events(match_id, team)
        return sorted(dedupe(snapshot.events), key=lambda e: minute_sort_key(e.minute))

    def _credit_stat(
        self,
        match_id: str,
        event: MatchEvent,
        team: TeamContext,
        player_name: Optional[str],
    ) -> None:
        stat_key = event.type.stat_key
        if stat_key is None:
            return
        credit_key = (match_id, event.dedup_key)
        try:
            self.gateway.update_player_stat(
                team, event.player_email, player_name or event.player_email, stat_key
            )
        except NetworkError as exc:
            with self._lock:
                self._pending_credits[credit_key] = player_name
            logger.warning(
                "Event %s saved for match %s but %s was not credited: %s",
                event.dedup_key, match_id, stat_key, exc.message,
            )
            raise StatCreditError(
                exc.operation,
                f"Event saved but {stat_key} was not credited; record it again to retry",
                status_code=exc.status_code,
                details=exc.details,
            ) from exc
        with self._lock:
            self._pending_credits.pop(credit_key, None)
