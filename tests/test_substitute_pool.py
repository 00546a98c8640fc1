"""
Unit tests for the substitute bench.
"""
import logging
import unittest

from matchday.models import Player, slots_of
from matchday.services import AssignmentTable, SubstituteAddResult, SubstitutePool


class TestSubstitutePool(unittest.TestCase):
    """Test cases for SubstitutePool."""

    def setUp(self) -> None:
        self.pool = SubstitutePool()

    def test_add_keeps_bench_order(self) -> None:
        for email in ["c@x.com", "a@x.com", "b@x.com"]:
            self.assertIs(self.pool.add(email), SubstituteAddResult.ADDED)
        self.assertEqual(self.pool.members, ["c@x.com", "a@x.com", "b@x.com"])

    def test_duplicate_is_rejected(self) -> None:
        self.pool.add("a@x.com")
        self.assertIs(self.pool.add("a@x.com"), SubstituteAddResult.DUPLICATE)
        self.assertEqual(len(self.pool), 1)

    def test_empty_selection_is_rejected(self) -> None:
        self.assertIs(self.pool.add(""), SubstituteAddResult.EMPTY)
        self.assertIs(self.pool.add("   "), SubstituteAddResult.EMPTY)
        self.assertEqual(len(self.pool), 0)

    def test_starter_is_rejected(self) -> None:
        result = self.pool.add("s@x.com", starters=["s@x.com"])
        self.assertIs(result, SubstituteAddResult.IS_STARTER)
        self.assertFalse(result.added)
        self.assertNotIn("s@x.com", self.pool)

    def test_capacity_reached_is_rejected_with_warning(self) -> None:
        for i in range(10):
            self.pool.add(f"sub{i}@x.com")
        self.assertTrue(self.pool.is_full)

        with self.assertLogs("matchday", level=logging.WARNING):
            result = self.pool.add("late@x.com")

        self.assertIs(result, SubstituteAddResult.CAPACITY_REACHED)
        self.assertEqual(len(self.pool), 10)
        self.assertNotIn("late@x.com", self.pool)

    def test_remove_and_evict(self) -> None:
        self.pool.add("a@x.com")
        self.pool.add("b@x.com")
        self.assertTrue(self.pool.remove("a@x.com"))
        self.assertFalse(self.pool.remove("a@x.com"))
        self.assertTrue(self.pool.evict("b@x.com"))
        self.assertEqual(self.pool.members, [])

    def test_members_is_a_copy(self) -> None:
        self.pool.add("a@x.com")
        members = self.pool.members
        members.append("b@x.com")
        self.assertEqual(self.pool.members, ["a@x.com"])

    def test_custom_capacity(self) -> None:
        pool = SubstitutePool(capacity=1)
        pool.add("a@x.com")
        self.assertIs(pool.add("b@x.com"), SubstituteAddResult.CAPACITY_REACHED)


class TestAvailableSubstitutes(unittest.TestCase):
    """Available players are the roster minus the starters."""

    def test_available_is_disjoint_from_assigned(self) -> None:
        roster = [Player(email=f"p{i}@x.com", name=f"P{i}") for i in range(16)]
        slots = slots_of("4-4-2")
        table = AssignmentTable(slots)
        for slot, player in zip(slots, roster):
            table.assign(slot, player.email)

        available = SubstitutePool.available(roster, table.assigned_emails())

        self.assertEqual([p.email for p in available], [f"p{i}@x.com" for i in range(11, 16)])
        self.assertFalse(set(p.email for p in available) & set(table.assigned_emails()))

    def test_available_with_no_assignments(self) -> None:
        roster = [Player(email="a@x.com"), Player(email="b@x.com")]
        self.assertEqual(SubstitutePool.available(roster, []), roster)


if __name__ == "__main__":
    unittest.main()
