"""
Unit tests for the formation catalog.

Tests slot key construction and parsing, the catalog layouts, and the
lineup-key category mapping.
"""
import unittest

from matchday.models.formation import (
    DEFAULT_FORMATION,
    FORMATIONS,
    Formation,
    Position,
    PositionCategory,
    SlotKey,
    category_for_lineup_key,
    get_formation,
    list_formations,
    slot_count,
    slots_of,
)


class TestSlotKey(unittest.TestCase):
    """Test SlotKey value semantics."""

    def test_wire_form(self) -> None:
        slot = SlotKey(Position.CENTER_BACK, 1, 2)
        self.assertEqual(slot.key, "CB-1-2")
        self.assertEqual(str(slot), "CB-1-2")

    def test_parse_round_trip(self) -> None:
        slot = SlotKey.parse("CDM-2-0")
        self.assertEqual(slot, SlotKey(Position.DEFENSIVE_MIDFIELDER, 2, 0))

    def test_value_equality_and_hashing(self) -> None:
        first = SlotKey(Position.STRIKER, 3, 1)
        second = SlotKey(Position.STRIKER, 3, 1)
        self.assertEqual(first, second)
        self.assertEqual(len({first, second}), 1)
        self.assertNotEqual(first, SlotKey(Position.STRIKER, 3, 0))

    def test_parse_rejects_malformed_keys(self) -> None:
        for bad in ["", "CB", "CB-1", "XX-1-2", "CB-a-2", "Sub1"]:
            with self.subTest(key=bad):
                with self.assertRaises(ValueError):
                    SlotKey.parse(bad)


class TestFormationCatalog(unittest.TestCase):
    """Test the read-only formation catalog."""

    def test_every_formation_has_eleven_slots(self) -> None:
        self.assertEqual(len(FORMATIONS), 15)
        for formation_id in list_formations():
            with self.subTest(formation=formation_id):
                self.assertEqual(slot_count(formation_id), 11)
                self.assertEqual(len(slots_of(formation_id)), 11)

    def test_slot_keys_are_unique_per_layout(self) -> None:
        for formation_id in list_formations():
            slots = slots_of(formation_id)
            self.assertEqual(len(set(slots)), len(slots))

    def test_goalkeeper_comes_first(self) -> None:
        for formation_id in list_formations():
            self.assertEqual(slots_of(formation_id)[0], SlotKey(Position.GOALKEEPER, 0, 0))

    def test_4_4_2_layout(self) -> None:
        keys = [slot.key for slot in slots_of("4-4-2")]
        self.assertEqual(keys, [
            "GK-0-0",
            "RB-1-0", "CB-1-1", "CB-1-2", "LB-1-3",
            "RM-2-0", "CM-2-1", "CM-2-2", "LM-2-3",
            "ST-3-0", "ST-3-1",
        ])

    def test_default_formation_is_in_catalog(self) -> None:
        self.assertIn(DEFAULT_FORMATION, FORMATIONS)

    def test_unknown_formation_raises(self) -> None:
        with self.assertRaises(KeyError):
            get_formation("2-2-6")

    def test_slots_are_stable_across_calls(self) -> None:
        self.assertEqual(slots_of("4-3-3"), slots_of("4-3-3"))

    def test_to_dict(self) -> None:
        result = get_formation("4-3-3").to_dict()
        self.assertEqual(result["formation"], "4-3-3")
        self.assertEqual(result["rows"][3], ["RW", "ST", "LW"])
        self.assertEqual(result["slot_count"], 11)
        self.assertEqual(result["slots"][-1], "LW-3-2")

    def test_from_labels_rejects_unknown_label(self) -> None:
        with self.assertRaises(ValueError):
            Formation.from_labels("bad", [["GK"], ["XX"]])


class TestPositionCategories(unittest.TestCase):
    """Test the mapping from labels to categories."""

    def test_position_categories(self) -> None:
        self.assertEqual(Position.GOALKEEPER.category, PositionCategory.GOALKEEPER)
        self.assertEqual(Position.LEFT_WING_BACK.category, PositionCategory.DEFENDER)
        self.assertEqual(Position.ATTACKING_MIDFIELDER.category, PositionCategory.MIDFIELDER)
        self.assertEqual(Position.RIGHT_WINGER.category, PositionCategory.FORWARD)

    def test_category_for_lineup_key(self) -> None:
        self.assertEqual(category_for_lineup_key("GK-0-0"), "Goalkeeper")
        self.assertEqual(category_for_lineup_key("RWB-1-0"), "Defender")
        self.assertEqual(category_for_lineup_key("ST-3-1"), "Forward")
        self.assertEqual(category_for_lineup_key("Sub4"), "Substitution")
        self.assertEqual(category_for_lineup_key("Bench"), "Unknown")


if __name__ == "__main__":
    unittest.main()
