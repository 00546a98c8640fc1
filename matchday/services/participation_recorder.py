"""
Participation recorder.

Credits every starter of a saved lineup with a game played. The per-player
stat calls are independent and run concurrently; there is no rollback, so a
partial failure leaves the successful increments in place and reports which
players still need a retry.
"""
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Union

from ..models import Lineup, TeamContext
from ..utils import setup_logger
from ..utils.constants import (
    PARTICIPATION_MAX_WORKERS, PARTICIPATION_TIMEOUT, STAT_GAMES_PLAYED
)
from .errors import MatchdayError, PartialFailureError
from .gateway_client import GatewayClient

logger = setup_logger(__name__)

NameLookup = Union[Mapping[str, str], Callable[[str], Optional[str]]]


@dataclass
class ParticipationResult:
    """Outcome of one player's games-played increment."""
    email: str
    name: str
    ok: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return {"email": self.email, "name": self.name, "ok": self.ok, "error": self.error}


@dataclass
class ParticipationReport:
    """Per-player results of one fan-out."""
    is_home_game: bool
    results: List[ParticipationResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[ParticipationResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> List[ParticipationResult]:
        return [result for result in self.results if not result.ok]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    def raise_for_failures(self) -> None:
        """
        Raises:
            PartialFailureError: If any player's update failed
        """
        if self.failed:
            raise PartialFailureError(self)

    def to_dict(self) -> Dict:
        return {
            "is_home_game": self.is_home_game,
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "results": [result.to_dict() for result in self.results],
        }


def _resolve_name(lookup: Optional[NameLookup], email: str) -> str:
    if lookup is None:
        return email
    if callable(lookup):
        name = lookup(email)
    else:
        name = lookup.get(email)
    return name or email


class ParticipationRecorder:
    """Fans out games-played stat updates for a lineup's starters."""

    def __init__(
        self,
        gateway: GatewayClient,
        max_workers: int = PARTICIPATION_MAX_WORKERS,
        timeout: float = PARTICIPATION_TIMEOUT,
    ):
        self.gateway = gateway
        self.max_workers = max_workers
        self.timeout = timeout

    def record_participation(
        self,
        lineup: Lineup,
        is_home_game: bool,
        roster_name_lookup: Optional[NameLookup] = None,
    ) -> ParticipationReport:
        """
        Credit each starter with a game played.

        Substitutes are not credited. Names come from ``roster_name_lookup``,
        falling back to the email.

        Returns:
            Report with one result per starter
        """
        players = [
            (email, _resolve_name(roster_name_lookup, email))
            for email in dict.fromkeys(lineup.starter_emails())
        ]
        return self._fan_out(lineup.team, players, is_home_game)

    def retry_failed(self, report: ParticipationReport, team: TeamContext) -> ParticipationReport:
        """Re-issue the updates that failed in an earlier report."""
        players = [(result.email, result.name) for result in report.failed]
        return self._fan_out(team, players, report.is_home_game)

    def _fan_out(self, team: TeamContext, players: List, is_home_game: bool) -> ParticipationReport:
        report = ParticipationReport(is_home_game=is_home_game)
        if not players:
            return report

        executor = ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(players))))
        try:
            futures = {
                executor.submit(
                    self.gateway.update_player_stat,
                    team, email, name, STAT_GAMES_PLAYED, is_home_game,
                ): (email, name)
                for email, name in players
            }
            done, _ = wait(futures, timeout=self.timeout)

            outcomes: Dict[str, ParticipationResult] = {}
            for future, (email, name) in futures.items():
                if future not in done:
                    future.cancel()
                    outcomes[email] = ParticipationResult(
                        email, name, False, f"timed out after {self.timeout}s"
                    )
                    continue
                try:
                    future.result()
                    outcomes[email] = ParticipationResult(email, name, True)
                except MatchdayError as exc:
                    outcomes[email] = ParticipationResult(email, name, False, str(exc))
                except Exception as exc:
                    # Other players' increments are already applied; report this one
                    logger.exception("Unexpected error recording participation for %s", email)
                    outcomes[email] = ParticipationResult(
                        email, name, False, f"{type(exc).__name__}: {exc}"
                    )
        finally:
            executor.shutdown(wait=False)

        report.results = [outcomes[email] for email, _ in players]
        if report.failed:
            logger.warning(
                "Participation recorded for %d of %d players; failed: %s",
                len(report.succeeded), len(report.results),
                ", ".join(result.email for result in report.failed),
            )
        return report
