"""In-memory stand-in for the remote match gateway used across the tests."""
import threading
from typing import Dict, List, Optional, Set

from matchday.models import MatchEvent, MatchResult, Player, PlayerStats, TeamContext
from matchday.services import EventSnapshot, NetworkError, RaceLossError


class FakeGateway:
    """Records every call and keeps event lists with a version counter."""

    def __init__(self, roster: Optional[List[Player]] = None):
        self.roster = list(roster or [])
        self.saved_lineups: List[Dict] = []
        self.events: Dict[str, List[MatchEvent]] = {}
        self.versions: Dict[str, int] = {}
        self.stat_calls: List[tuple] = []
        self.results: Dict[str, MatchResult] = {}
        self.failing_stat_emails: Set[str] = set()
        self.fail_save_lineups = False
        self.fail_fetch_events = False
        self.reads = 0
        self.writes = 0
        self._lock = threading.Lock()

    def save_lineups(self, payload: Dict) -> None:
        if self.fail_save_lineups:
            raise NetworkError("save lineups", "save lineups failed with status 503", 503)
        self.saved_lineups.append(payload)

    def get_lineups(self, match_id: str, team: TeamContext) -> Dict:
        merged = {"homeTeamLineup": {}, "awayTeamLineup": {}}
        for payload in self.saved_lineups:
            if payload["matchId"] == match_id:
                for side in merged:
                    if side in payload:
                        merged[side] = payload[side]
        return merged

    def fetch_events(self, match_id: str, team: TeamContext) -> EventSnapshot:
        if self.fail_fetch_events:
            raise NetworkError("fetch events", "fetch events failed with status 500", 500)
        self.reads += 1
        return EventSnapshot(
            events=list(self.events.get(match_id, [])),
            version=str(self.versions.get(match_id, 0)),
        )

    def replace_events(self, match_id, team, events, version=None) -> None:
        current = str(self.versions.get(match_id, 0))
        if version is not None and version != current:
            raise RaceLossError("replace events", "Match events changed while saving", 412)
        self.writes += 1
        self.events[match_id] = list(events)
        self.versions[match_id] = self.versions.get(match_id, 0) + 1

    def update_player_stat(self, team, player_email, player_name, stat_key, is_home_game=None):
        if player_email in self.failing_stat_emails:
            raise NetworkError("update player stats", "update player stats failed with status 500", 500)
        with self._lock:
            self.stat_calls.append((player_email, player_name, stat_key, is_home_game))

    def get_player_stats(self, team, player_email) -> PlayerStats:
        return PlayerStats(player_email=player_email)

    def fetch_roster(self, team: TeamContext) -> List[Player]:
        return list(self.roster)

    def save_result(self, match_id, team, result) -> None:
        self.results[match_id] = result

    def get_result(self, match_id, team) -> Optional[MatchResult]:
        return self.results.get(match_id)
