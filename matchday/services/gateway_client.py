"""
Client for the remote match gateway.

Every lineup, event, stats and roster call the engine makes goes through
``GatewayClient``. Failures surface as ``NetworkError`` carrying the
operation name and a truncated copy of the upstream body.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import requests

from ..models import MatchEvent, MatchResult, Player, PlayerStats, TeamContext
from ..utils import setup_logger
from ..utils.constants import GATEWAY_TIMEOUT, GATEWAY_URL
from .errors import NetworkError, RaceLossError

logger = setup_logger(__name__)

TokenProvider = Callable[[], Optional[str]]

_BODY_LIMIT = 2000


@dataclass
class EventSnapshot:
    """Remote event list plus the version token it was read at."""
    events: List[MatchEvent] = field(default_factory=list)
    version: Optional[str] = None


class GatewayClient:
    """
    Thin requests-based wrapper over the gateway's REST endpoints.

    Args:
        base_url: Gateway root URL
        timeout: Per-request timeout in seconds
        token_provider: Callable returning a bearer token, or None for anonymous calls
        session: Optional pre-configured requests session
    """

    def __init__(
        self,
        base_url: str = GATEWAY_URL,
        timeout: float = GATEWAY_TIMEOUT,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_provider = token_provider
        self.session = session or requests.Session()

    # ---------- Transport ---------- #

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token_provider is not None:
            token = self.token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s: %s %s", operation, method, url)
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("%s timed out after %ss", operation, self.timeout)
            raise NetworkError(operation, f"{operation} timed out", details=str(exc)) from exc
        except requests.RequestException as exc:
            logger.warning("%s failed: %s", operation, exc)
            raise NetworkError(operation, f"{operation} failed", details=str(exc)) from exc
        return resp

    @staticmethod
    def _body_snippet(resp: requests.Response) -> str:
        try:
            return resp.text[:_BODY_LIMIT]
        except Exception:
            return "<no-body>"

    def _raise_for_status(self, operation: str, resp: requests.Response) -> None:
        if resp.ok:
            return
        details = self._body_snippet(resp)
        logger.warning("%s returned %s: %s", operation, resp.status_code, details[:200])
        raise NetworkError(
            operation,
            f"{operation} failed with status {resp.status_code}",
            status_code=resp.status_code,
            details=details,
        )

    def _json(self, operation: str, resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise NetworkError(
                operation,
                f"{operation} returned an invalid JSON body",
                status_code=resp.status_code,
                details=self._body_snippet(resp),
            ) from exc

    @staticmethod
    def _scope(match_id: Optional[str], team: TeamContext) -> Dict[str, str]:
        scope = team.to_dict()
        if match_id is not None:
            scope = {"matchId": match_id, **scope}
        return scope

    # ---------- Lineups ---------- #

    def save_lineups(self, payload: Dict[str, Any]) -> None:
        """Save one side's lineup for a match."""
        resp = self._request("save lineups", "POST", "/fixture/lineups", json=payload)
        self._raise_for_status("save lineups", resp)

    def get_lineups(self, match_id: str, team: TeamContext) -> Dict[str, Dict[str, str]]:
        """Fetch both saved team lineups for a match."""
        resp = self._request(
            "fetch lineups", "GET", "/fixture/lineups", params=self._scope(match_id, team)
        )
        self._raise_for_status("fetch lineups", resp)
        data = self._json("fetch lineups", resp) or {}
        return {
            "homeTeamLineup": data.get("homeTeamLineup") or {},
            "awayTeamLineup": data.get("awayTeamLineup") or {},
        }

    # ---------- Events ---------- #

    def fetch_events(self, match_id: str, team: TeamContext) -> EventSnapshot:
        """
        Fetch the current event list for a match.

        Entries that cannot be parsed are skipped with a warning.
        """
        resp = self._request(
            "fetch events", "GET", "/fixture/events", params=self._scope(match_id, team)
        )
        self._raise_for_status("fetch events", resp)
        data = self._json("fetch events", resp)
        raw_events = data.get("events", []) if isinstance(data, dict) else (data or [])

        events = []
        for raw in raw_events:
            try:
                events.append(MatchEvent.from_dict(raw))
            except (KeyError, ValueError, TypeError):
                logger.warning("Skipping malformed event for match %s: %r", match_id, raw)
        return EventSnapshot(events=events, version=resp.headers.get("ETag"))

    def replace_events(
        self,
        match_id: str,
        team: TeamContext,
        events: List[MatchEvent],
        version: Optional[str] = None,
    ) -> None:
        """
        Overwrite the remote event list for a match.

        Raises:
            RaceLossError: If the gateway rejects the version token
            NetworkError: On any other failure
        """
        headers = {"If-Match": version} if version else None
        body = {**self._scope(match_id, team), "events": [event.to_dict() for event in events]}
        resp = self._request("replace events", "PUT", "/fixture/events", json=body, headers=headers)
        if resp.status_code in (409, 412):
            raise RaceLossError(
                "replace events",
                "Match events changed while saving; reload and try again",
                status_code=resp.status_code,
                details=self._body_snippet(resp),
            )
        self._raise_for_status("replace events", resp)

    # ---------- Results ---------- #

    def save_result(self, match_id: str, team: TeamContext, result: MatchResult) -> None:
        resp = self._request(
            "save result", "POST", "/fixture/results",
            json={**self._scope(match_id, team), **result.to_dict()},
        )
        self._raise_for_status("save result", resp)

    def get_result(self, match_id: str, team: TeamContext) -> Optional[MatchResult]:
        """Fetch the saved score, or None when no result exists yet."""
        resp = self._request(
            "fetch result", "GET", "/fixture/results", params=self._scope(match_id, team)
        )
        if resp.status_code == 404:
            return None
        self._raise_for_status("fetch result", resp)
        data = self._json("fetch result", resp)
        if not data:
            return None
        return MatchResult.from_dict(data)

    # ---------- Stats ---------- #

    def update_player_stat(
        self,
        team: TeamContext,
        player_email: str,
        player_name: str,
        stat_key: str,
        is_home_game: Optional[bool] = None,
    ) -> None:
        """Increment one stat for one player."""
        body: Dict[str, Any] = {
            **team.to_dict(),
            "playerEmail": player_email,
            "playerName": player_name,
            "eventType": stat_key,
        }
        if is_home_game is not None:
            body["isHomeGame"] = is_home_game
        resp = self._request("update player stats", "POST", "/stats/update", json=body)
        self._raise_for_status("update player stats", resp)

    def get_player_stats(self, team: TeamContext, player_email: str) -> PlayerStats:
        params = {**team.to_dict(), "playerEmail": player_email}
        resp = self._request("fetch player stats", "GET", "/stats/get", params=params)
        self._raise_for_status("fetch player stats", resp)
        return PlayerStats.from_dict(self._json("fetch player stats", resp))

    # ---------- Roster ---------- #

    def fetch_roster(self, team: TeamContext) -> List[Player]:
        """Fetch the players registered to a team."""
        resp = self._request("fetch roster", "GET", "/membership/team", params=team.to_dict())
        self._raise_for_status("fetch roster", resp)
        members = self._json("fetch roster", resp) or []
        return [Player.from_dict(member) for member in members if member.get("email")]
