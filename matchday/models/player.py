"""
Player model for the Matchday lineup engine.

This module contains the Player dataclass used by the roster pickers, the
TeamContext that scopes every remote call, and a read-only view of the
statistics aggregate kept by the remote stats service.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .formation import PositionCategory


@dataclass(frozen=True)
class TeamContext:
    """Club, age group and division a lineup or event belongs to."""
    club_name: str
    age_group: str
    division: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to the camelCase form the gateway expects."""
        return {
            "clubName": self.club_name,
            "ageGroup": self.age_group,
            "division": self.division,
        }

    def is_complete(self) -> bool:
        """Whether all three fields are set."""
        return bool(self.club_name and self.age_group and self.division)


@dataclass
class Player:
    """
    A roster member that can be placed in a lineup.

    Attributes:
        email: Player's email address (unique identifier)
        name: Display name
        position_category: Broad position group, if known
        uid: Identifier assigned by the membership service
    """
    email: str
    name: str = ""
    position_category: Optional[PositionCategory] = None
    uid: str = ""

    @property
    def display_name(self) -> str:
        """Name to show, falling back to the email."""
        return self.name or self.email

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "email": self.email,
            "name": self.name,
            "position": self.position_category.value if self.position_category else None,
            "uid": self.uid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from a membership record.

        Unknown position values are kept as ``None`` rather than rejected.
        """
        position_category = None
        if data.get("position"):
            try:
                position_category = PositionCategory(data["position"])
            except ValueError:
                pass  # Unrecognised position, leave uncategorised

        return cls(
            email=data["email"],
            name=data.get("name") or "",
            position_category=position_category,
            uid=data.get("uid") or "",
        )


def build_name_lookup(players: Iterable[Player]) -> Dict[str, str]:
    """Map email to display name for players that have both."""
    return {player.email: player.name for player in players if player.email and player.name}


@dataclass
class PlayerStats:
    """Statistics aggregate as reported by the remote stats service."""
    player_email: str
    player_name: str = ""
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    games_played: int = 0
    home_games_played: int = 0
    away_games_played: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "playerEmail": self.player_email,
            "playerName": self.player_name,
            "goals": self.goals,
            "assists": self.assists,
            "yellowCards": self.yellow_cards,
            "redCards": self.red_cards,
            "gamesPlayed": self.games_played,
            "homeGamesPlayed": self.home_games_played,
            "awayGamesPlayed": self.away_games_played,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerStats':
        """Create from the gateway's camelCase payload."""
        data = data or {}
        return cls(
            player_email=data.get("playerEmail", ""),
            player_name=data.get("playerName", ""),
            goals=int(data.get("goals", 0) or 0),
            assists=int(data.get("assists", 0) or 0),
            yellow_cards=int(data.get("yellowCards", 0) or 0),
            red_cards=int(data.get("redCards", 0) or 0),
            games_played=int(data.get("gamesPlayed", 0) or 0),
            home_games_played=int(data.get("homeGamesPlayed", 0) or 0),
            away_games_played=int(data.get("awayGamesPlayed", 0) or 0),
        )
