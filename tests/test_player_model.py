"""
Unit tests for the Player, TeamContext and PlayerStats models, and for the
Lineup save unit built from them.
"""
import unittest

from matchday.models import (
    Lineup, Match, MatchResult, Player, PlayerStats, PositionCategory, SlotKey,
    TeamContext, build_name_lookup
)


class TestPlayerModel(unittest.TestCase):
    """Test cases for Player and TeamContext."""

    def test_from_dict_with_known_position(self) -> None:
        player = Player.from_dict({"email": "a@x.com", "name": "Alex", "position": "Defender", "uid": "u1"})
        self.assertEqual(player.position_category, PositionCategory.DEFENDER)
        self.assertEqual(player.to_dict()["position"], "Defender")

    def test_from_dict_with_unknown_position(self) -> None:
        player = Player.from_dict({"email": "a@x.com", "position": "Sweeper"})
        self.assertIsNone(player.position_category)
        self.assertEqual(player.display_name, "a@x.com")

    def test_build_name_lookup_skips_nameless(self) -> None:
        lookup = build_name_lookup([Player("a@x.com", "Alex"), Player("b@x.com")])
        self.assertEqual(lookup, {"a@x.com": "Alex"})

    def test_team_context(self) -> None:
        team = TeamContext("Riverside FC", "U12", "Premier")
        self.assertTrue(team.is_complete())
        self.assertEqual(team.to_dict()["ageGroup"], "U12")
        self.assertFalse(TeamContext("Riverside FC", "", "Premier").is_complete())


class TestPlayerStats(unittest.TestCase):
    """PlayerStats mirrors the remote camelCase aggregate."""

    def test_from_dict(self) -> None:
        stats = PlayerStats.from_dict({
            "playerEmail": "a@x.com", "goals": 3, "gamesPlayed": "7", "homeGamesPlayed": 4
        })
        self.assertEqual(stats.goals, 3)
        self.assertEqual(stats.games_played, 7)
        self.assertEqual(stats.away_games_played, 0)
        self.assertEqual(stats.to_dict()["homeGamesPlayed"], 4)

    def test_from_empty_payload(self) -> None:
        self.assertEqual(PlayerStats.from_dict(None).games_played, 0)


class TestMatchModels(unittest.TestCase):
    """Match sides, results and the lineup save unit."""

    def setUp(self) -> None:
        self.team = TeamContext("Riverside FC", "U12", "Premier")
        self.lineup = Lineup(
            match_id="m1",
            team=self.team,
            formation_id="4-4-2",
            assignments={SlotKey.parse("GK-0-0"): "gk@x.com", SlotKey.parse("ST-3-1"): "st@x.com"},
            substitutes=["s1@x.com", "s2@x.com"],
        )

    def test_side_for(self) -> None:
        match = Match("m1", "Riverside FC", "Hillside United")
        self.assertEqual(match.side_for("Riverside FC"), "home")
        self.assertEqual(match.side_for("Hillside United"), "away")
        self.assertIsNone(match.side_for("Other FC"))
        self.assertIsNone(match.side_for(""))

    def test_team_lineup_keys(self) -> None:
        self.assertEqual(self.lineup.to_team_lineup(), {
            "GK-0-0": "gk@x.com", "ST-3-1": "st@x.com", "Sub1": "s1@x.com", "Sub2": "s2@x.com"
        })

    def test_payload_has_only_one_side(self) -> None:
        payload = self.lineup.to_payload("away")
        self.assertIn("awayTeamLineup", payload)
        self.assertNotIn("homeTeamLineup", payload)
        self.assertEqual(payload["formation"], "4-4-2")
        with self.assertRaises(ValueError):
            self.lineup.to_payload("neutral")

    def test_split_team_lineup(self) -> None:
        assignments, substitutes = Lineup.split_team_lineup({
            "Sub2": "s2@x.com", "GK-0-0": "gk@x.com", "Sub1": "s1@x.com", "notes": "x", "ST-3-1": ""
        })
        self.assertEqual(assignments, {SlotKey.parse("GK-0-0"): "gk@x.com"})
        self.assertEqual(substitutes, ["s1@x.com", "s2@x.com"])

    def test_match_result_validation(self) -> None:
        self.assertEqual(MatchResult(2, 0).validation_errors(), {})
        self.assertIn("awayScore", MatchResult(1, -2).validation_errors())
        self.assertIn("homeScore", MatchResult("3", 1).validation_errors())


if __name__ == "__main__":
    unittest.main()
