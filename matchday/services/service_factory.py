"""
Service factory for wiring the Matchday services together.

This module creates the gateway client once and hands the same instance to
every service that talks to the remote match service.
"""
from typing import Optional, Sequence

from ..models import Match, Player, TeamContext
from ..utils.constants import GATEWAY_TIMEOUT, GATEWAY_URL
from .event_ledger import MatchEventLedger
from .gateway_client import GatewayClient, TokenProvider
from .lineup_session import LineupSession
from .participation_recorder import ParticipationRecorder


class ServiceFactory:
    """
    Factory for creating service instances with shared dependencies.

    Args:
        gateway: Pre-built gateway client; one is created from settings when omitted
        token_provider: Bearer token source for a created gateway client
    """

    def __init__(
        self,
        gateway: Optional[GatewayClient] = None,
        token_provider: Optional[TokenProvider] = None,
    ):
        self._gateway = gateway
        self._token_provider = token_provider
        self._recorder: Optional[ParticipationRecorder] = None
        self._ledger: Optional[MatchEventLedger] = None

    def get_gateway(self) -> GatewayClient:
        """Get singleton gateway client."""
        if self._gateway is None:
            self._gateway = GatewayClient(
                base_url=GATEWAY_URL,
                timeout=GATEWAY_TIMEOUT,
                token_provider=self._token_provider,
            )
        return self._gateway

    def get_participation_recorder(self) -> ParticipationRecorder:
        """Get singleton participation recorder."""
        if self._recorder is None:
            self._recorder = ParticipationRecorder(self.get_gateway())
        return self._recorder

    def get_event_ledger(self) -> MatchEventLedger:
        """Get singleton event ledger."""
        if self._ledger is None:
            self._ledger = MatchEventLedger(self.get_gateway())
        return self._ledger

    def create_lineup_session(
        self,
        match: Match,
        team: TeamContext,
        roster: Optional[Sequence[Player]] = None,
    ) -> LineupSession:
        """
        Create a lineup session for one match.

        Args:
            match: Fixture being edited
            team: Coached team
            roster: Players to pick from; fetched from the gateway when omitted
        """
        gateway = self.get_gateway()
        if roster is None:
            roster = gateway.fetch_roster(team)
        return LineupSession(
            match=match,
            team=team,
            roster=roster,
            gateway=gateway,
            recorder=self.get_participation_recorder(),
        )
