"""
Web application module for the Matchday lineup engine.

This module contains the Flask server exposing JSON API endpoints for
building lineups, recording match events and saving results.
"""
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from ..models import (
    AWAY, HOME, Lineup, Match, MatchEvent, MatchResult, Player, SlotKey, TeamContext,
    category_for_lineup_key, get_formation, list_formations
)
from ..services import (
    EventValidationError, LineupSession, NetworkError, PartialFailureError, RaceLossError,
    ServiceFactory, SessionClosedError, StatCreditError
)
from ..utils import setup_logger
from ..utils.constants import SUBSTITUTE_KEY_PREFIX

logger = setup_logger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Keeps one lineup session per match; services come from the factory.
    """

    def __init__(self, service_factory: Optional[ServiceFactory] = None):
        self.service_factory = service_factory or ServiceFactory()
        self.sessions: Dict[str, LineupSession] = {}

    def open_session(self, match: Match, team: TeamContext, roster=None) -> LineupSession:
        """Start a fresh session for a match, closing any previous one."""
        self.close_session(match.match_id)
        session = self.service_factory.create_lineup_session(match, team, roster)
        self.sessions[match.match_id] = session
        return session

    def close_session(self, match_id: str) -> None:
        session = self.sessions.pop(match_id, None)
        if session is not None:
            session.close()


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _team_from(data: Dict) -> TeamContext:
    return TeamContext(
        club_name=_text(data.get("clubName")),
        age_group=_text(data.get("ageGroup")),
        division=_text(data.get("division")),
    )


def _bad_request(message: str) -> Tuple:
    return jsonify({"success": False, "error": message}), 400


def _network_error_response(exc: NetworkError) -> Tuple:
    status = 409 if isinstance(exc, RaceLossError) else 502
    return jsonify({"success": False, "error": exc.message, "details": exc.to_dict()}), status


def _saved_side(team_lineup: Dict[str, str]) -> Dict[str, Any]:
    """Split a saved team lineup into categorised starters and substitutes."""
    assignments, substitutes = Lineup.split_team_lineup(team_lineup)
    starters = [
        {"slot": slot.key, "email": email, "category": category_for_lineup_key(slot.key)}
        for slot, email in assignments.items()
    ]
    bench = []
    for index, email in enumerate(substitutes, start=1):
        key = f"{SUBSTITUTE_KEY_PREFIX}{index}"
        bench.append({"slot": key, "email": email, "category": category_for_lineup_key(key)})
    return {"starters": starters, "substitutes": bench}


def create_app(app_state: Optional[WebAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        app_state: State holder; a default one is created when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    state = app_state or WebAppState()
    app.config["APP_STATE"] = state

    def _session_or_404(match_id: str):
        session = state.sessions.get(match_id)
        if session is None:
            return None, (jsonify({
                "success": False,
                "error": "No lineup session for this match",
                "suggestions": ["Open a lineup session first"]
            }), 404)
        return session, None

    def _team_or_400(data):
        team = _team_from(data)
        if not team.is_complete():
            return None, _bad_request("Club information is incomplete.")
        return team, None

    # ==================== Formations ==================== #

    @app.route("/api/formations", methods=["GET"])
    def get_formations():
        """List catalog formations."""
        return jsonify({
            "success": True,
            "formations": [get_formation(fid).to_dict() for fid in list_formations()]
        })

    # ==================== Lineup session ==================== #

    @app.route("/api/matches/<match_id>/lineup/session", methods=["POST"])
    def open_lineup_session(match_id: str):
        """Open a lineup session for a match."""
        data = _json_body()
        team, error = _team_or_400(_object(data.get("team")))
        if error:
            return error

        fixture = dict(_object(data.get("match")))
        fixture.setdefault("matchId", match_id)
        match = Match.from_dict(fixture)

        roster = None
        if data.get("roster") is not None:
            if not isinstance(data["roster"], list):
                return _bad_request("roster must be a list of players")
            roster = [
                Player.from_dict(p) for p in data["roster"]
                if isinstance(p, dict) and _text(p.get("email"))
            ]

        formation = data.get("formation")
        if formation is not None and not isinstance(formation, str):
            return _bad_request("formation must be a string")

        try:
            session = state.open_session(match, team, roster)
        except NetworkError as exc:
            return _network_error_response(exc)

        if formation:
            try:
                session.select_formation(formation)
            except KeyError as exc:
                return _bad_request(str(exc.args[0]))
        return jsonify({"success": True, "lineup": session.to_dict()})

    @app.route("/api/matches/<match_id>/lineup/session", methods=["DELETE"])
    def close_lineup_session(match_id: str):
        state.close_session(match_id)
        return jsonify({"success": True})

    @app.route("/api/matches/<match_id>/lineup", methods=["GET"])
    def get_lineup(match_id: str):
        session, error = _session_or_404(match_id)
        if error:
            return error
        return jsonify({"success": True, "lineup": session.to_dict()})

    @app.route("/api/matches/<match_id>/lineup/formation", methods=["POST"])
    def change_formation(match_id: str):
        """Change formation; existing assignments need ``confirmed``."""
        session, error = _session_or_404(match_id)
        if error:
            return error
        data = _json_body()
        formation = data.get("formation", "")
        if not isinstance(formation, str):
            return _bad_request("formation must be a string")
        try:
            changed = session.select_formation(formation, confirmed=bool(data.get("confirmed")))
        except KeyError as exc:
            return _bad_request(str(exc.args[0]))
        except SessionClosedError as exc:
            return jsonify({"success": False, "error": str(exc)}), 409

        if not changed:
            return jsonify({
                "success": False,
                "confirmation_required": True,
                "error": "Changing formation will clear all assigned players",
                "suggestions": ["Resend with confirmed=true to continue"]
            }), 409
        return jsonify({"success": True, "lineup": session.to_dict()})

    @app.route("/api/matches/<match_id>/lineup/assign", methods=["POST"])
    def assign_player(match_id: str):
        """Assign a player to a slot; an empty email clears it."""
        session, error = _session_or_404(match_id)
        if error:
            return error
        data = _json_body()
        email = data.get("email")
        if email is not None and not isinstance(email, str):
            return _bad_request("email must be a string")
        try:
            slot = SlotKey.parse(data.get("slot", ""))
            session.assign(slot, email)
        except ValueError as exc:
            return _bad_request(str(exc))
        except SessionClosedError as exc:
            return jsonify({"success": False, "error": str(exc)}), 409
        return jsonify({"success": True, "lineup": session.to_dict()})

    @app.route("/api/matches/<match_id>/lineup/substitutes", methods=["POST"])
    def add_substitute(match_id: str):
        session, error = _session_or_404(match_id)
        if error:
            return error
        email = _json_body().get("email", "")
        if not isinstance(email, str):
            return _bad_request("email must be a string")
        try:
            result = session.add_substitute(email)
        except SessionClosedError as exc:
            return jsonify({"success": False, "error": str(exc)}), 409

        body = {"success": result.added, "result": result.value, "lineup": session.to_dict()}
        if not result.added:
            body["warning"] = {
                "duplicate": "Player is already a substitute",
                "capacity_reached": "You can only have up to 10 substitutes",
                "is_starter": "Player is already in the starting lineup",
                "empty": "Select a player",
            }[result.value]
        return jsonify(body)

    @app.route("/api/matches/<match_id>/lineup/substitutes/<path:email>", methods=["DELETE"])
    def remove_substitute(match_id: str, email: str):
        session, error = _session_or_404(match_id)
        if error:
            return error
        try:
            removed = session.remove_substitute(email)
        except SessionClosedError as exc:
            return jsonify({"success": False, "error": str(exc)}), 409
        return jsonify({"success": removed, "lineup": session.to_dict()})

    @app.route("/api/matches/<match_id>/lineup/save", methods=["POST"])
    def save_lineup(match_id: str):
        """Save the lineup and credit starters with a game played."""
        session, error = _session_or_404(match_id)
        if error:
            return error
        data = _json_body()
        if "strategy_notes" in data:
            notes = data.get("strategy_notes")
            if notes is not None and not isinstance(notes, str):
                return _bad_request("strategy_notes must be a string")
            session.strategy_notes = notes or ""

        try:
            result = session.save()
        except PartialFailureError as exc:
            return jsonify({
                "success": False,
                "saved": True,
                "error": str(exc),
                "participation": exc.report.to_dict()
            }), 207
        except NetworkError as exc:
            return _network_error_response(exc)
        except SessionClosedError as exc:
            return jsonify({"success": False, "error": str(exc)}), 409

        if not result.saved:
            return jsonify({"success": False, "messages": result.messages}), 400
        return jsonify({"success": True, **result.to_dict()})

    @app.route("/api/matches/<match_id>/lineups", methods=["GET"])
    def get_saved_lineups(match_id: str):
        """Both sides' saved lineups, split into categorised starters and substitutes."""
        team, error = _team_or_400(request.args)
        if error:
            return error
        try:
            saved = state.service_factory.get_gateway().get_lineups(match_id, team)
        except NetworkError as exc:
            return _network_error_response(exc)
        return jsonify({
            "success": True,
            "lineups": {
                HOME: _saved_side(saved["homeTeamLineup"]),
                AWAY: _saved_side(saved["awayTeamLineup"]),
            }
        })

    # ==================== Events ==================== #

    @app.route("/api/matches/<match_id>/events", methods=["GET"])
    def get_events(match_id: str):
        team, error = _team_or_400(request.args)
        if error:
            return error
        try:
            events = state.service_factory.get_event_ledger().list_events(match_id, team)
        except NetworkError as exc:
            return _network_error_response(exc)
        return jsonify({"success": True, "events": [event.to_dict() for event in events]})

    @app.route("/api/matches/<match_id>/events", methods=["POST"])
    def record_event(match_id: str):
        """Record a match event against the shared ledger."""
        data = _json_body()
        team, error = _team_or_400(data)
        if error:
            return error
        if not isinstance(data.get("event"), dict):
            return _bad_request("Invalid event: expected an object")
        try:
            event = MatchEvent.from_dict(data["event"])
        except (KeyError, ValueError) as exc:
            return _bad_request(f"Invalid event: {exc}")

        try:
            events = state.service_factory.get_event_ledger().record_event(
                match_id, event, team, player_name=_text(data.get("playerName")) or None
            )
        except EventValidationError as exc:
            return jsonify({"success": False, "error": str(exc), "errors": exc.errors}), 400
        except StatCreditError as exc:
            return jsonify({
                "success": False,
                "event_saved": True,
                "error": exc.message,
                "details": exc.to_dict(),
                "suggestions": ["Record the event again to retry the stat update"]
            }), 502
        except NetworkError as exc:
            return _network_error_response(exc)
        return jsonify({"success": True, "events": [e.to_dict() for e in events]})

    # ==================== Results ==================== #

    @app.route("/api/matches/<match_id>/result", methods=["GET"])
    def get_result(match_id: str):
        team, error = _team_or_400(request.args)
        if error:
            return error
        try:
            result = state.service_factory.get_gateway().get_result(match_id, team)
        except NetworkError as exc:
            return _network_error_response(exc)
        if result is None:
            return jsonify({"success": False, "error": "No result recorded for this match"}), 404
        return jsonify({"success": True, "result": result.to_dict()})

    @app.route("/api/matches/<match_id>/result", methods=["POST"])
    def save_result(match_id: str):
        data = _json_body()
        team, error = _team_or_400(data)
        if error:
            return error
        try:
            result = MatchResult.from_dict(data)
        except KeyError as exc:
            return _bad_request(f"Missing field: {exc.args[0]}")
        errors = result.validation_errors()
        if errors:
            return jsonify({"success": False, "errors": errors}), 400
        try:
            state.service_factory.get_gateway().save_result(match_id, team, result)
        except NetworkError as exc:
            return _network_error_response(exc)
        return jsonify({"success": True, "result": result.to_dict()})

    # ==================== Player stats ==================== #

    @app.route("/api/players/<path:email>/stats", methods=["GET"])
    def get_player_stats(email: str):
        team, error = _team_or_400(request.args)
        if error:
            return error
        try:
            stats = state.service_factory.get_gateway().get_player_stats(team, email)
        except NetworkError as exc:
            return _network_error_response(exc)
        return jsonify({"success": True, "stats": stats.to_dict()})

    return app


def run_web_app(host: str = "127.0.0.1", port: int = 7122) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
    """
    app = create_app()
    logger.info("Serving Matchday API on %s:%s", host, port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    run_web_app(port=int(os.getenv("PORT", 7122)))
