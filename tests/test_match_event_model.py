"""
Unit tests for the MatchEvent value type.
"""
import unittest

from matchday.models import EventType, MatchEvent


class TestMatchEvent(unittest.TestCase):
    """Test cases for MatchEvent validation and serialization."""

    def test_valid_goal(self) -> None:
        event = MatchEvent(EventType.GOAL, "p@x.com", "23")
        self.assertEqual(event.validation_errors(), {})

    def test_minute_must_be_whole_non_negative(self) -> None:
        for minute in ["", "abc", "-1", "12.5"]:
            with self.subTest(minute=minute):
                errors = MatchEvent(EventType.GOAL, "p@x.com", minute).validation_errors()
                self.assertIn("minute", errors)
        self.assertEqual(MatchEvent(EventType.GOAL, "p@x.com", "0").validation_errors(), {})

    def test_player_required(self) -> None:
        errors = MatchEvent(EventType.INJURY, "", "10").validation_errors()
        self.assertIn("playerEmail", errors)

    def test_substitution_needs_incoming_player(self) -> None:
        errors = MatchEvent(EventType.SUBSTITUTION, "out@x.com", "60").validation_errors()
        self.assertIn("subbedInEmail", errors)

        same = MatchEvent(EventType.SUBSTITUTION, "out@x.com", "60", "out@x.com")
        self.assertIn("subbedInEmail", same.validation_errors())

        valid = MatchEvent(EventType.SUBSTITUTION, "out@x.com", "60", "in@x.com")
        self.assertEqual(valid.validation_errors(), {})

    def test_incoming_player_only_for_substitutions(self) -> None:
        errors = MatchEvent(EventType.GOAL, "p@x.com", "5", "q@x.com").validation_errors()
        self.assertIn("subbedInEmail", errors)

    def test_dedup_key_treats_empty_incoming_as_missing(self) -> None:
        first = MatchEvent(EventType.GOAL, "p@x.com", "5", None)
        second = MatchEvent(EventType.GOAL, "p@x.com", "5", "")
        self.assertEqual(first.dedup_key, second.dedup_key)
        self.assertEqual(first.dedup_key, ("p@x.com", "5", "goal", None))

    def test_minute_is_trimmed_on_construction(self) -> None:
        padded = MatchEvent(EventType.GOAL, "p@x.com", " 10 ")
        self.assertEqual(padded.minute, "10")
        self.assertEqual(padded.dedup_key, MatchEvent(EventType.GOAL, "p@x.com", "10").dedup_key)
        self.assertEqual(padded.validation_errors(), {})

    def test_from_dict_rejects_non_string_email(self) -> None:
        with self.assertRaises(ValueError):
            MatchEvent.from_dict({"type": "goal", "playerEmail": 5, "minute": "1"})

    def test_stat_keys(self) -> None:
        self.assertEqual(EventType.GOAL.stat_key, "goal")
        self.assertEqual(EventType.YELLOW_CARD.stat_key, "yellowCard")
        self.assertIsNone(EventType.INJURY.stat_key)
        self.assertIsNone(EventType.SUBSTITUTION.stat_key)

    def test_from_dict(self) -> None:
        event = MatchEvent.from_dict({
            "type": "substitution", "playerEmail": "out@x.com", "minute": 70,
            "subbedInEmail": "in@x.com",
        })
        self.assertEqual(event.type, EventType.SUBSTITUTION)
        self.assertEqual(event.minute, "70")
        self.assertEqual(event.to_dict()["subbedInEmail"], "in@x.com")

    def test_from_dict_rejects_unknown_type(self) -> None:
        with self.assertRaises(ValueError):
            MatchEvent.from_dict({"type": "offside", "playerEmail": "p@x.com", "minute": "1"})

    def test_to_dict_omits_missing_incoming_player(self) -> None:
        data = MatchEvent(EventType.RED_CARD, "p@x.com", "88").to_dict()
        self.assertEqual(data, {"type": "redCard", "playerEmail": "p@x.com", "minute": "88"})


if __name__ == "__main__":
    unittest.main()
