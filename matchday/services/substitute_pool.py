"""Bounded, ordered bench of substitutes for one lineup."""

from enum import Enum
from typing import Iterable, List, Sequence

from ..models import Player
from ..utils import setup_logger
from ..utils.constants import MAX_SUBSTITUTES

logger = setup_logger(__name__)


class SubstituteAddResult(Enum):
    """Outcome of adding a player to the bench."""
    ADDED = "added"
    DUPLICATE = "duplicate"
    CAPACITY_REACHED = "capacity_reached"
    IS_STARTER = "is_starter"
    EMPTY = "empty"

    @property
    def added(self) -> bool:
        return self is SubstituteAddResult.ADDED


class SubstitutePool:
    """
    Ordered list of substitute emails, capped at ``capacity``.

    The pool never holds a starter: ``add`` refuses anyone in ``starters``
    and the owning session calls ``evict`` when a substitute is given a slot.
    """

    def __init__(self, capacity: int = MAX_SUBSTITUTES):
        self.capacity = capacity
        self._members: List[str] = []

    def add(self, email: str, starters: Iterable[str] = ()) -> SubstituteAddResult:
        """
        Add a player to the end of the bench.

        Never raises; the result tells the caller whether to warn.
        """
        email = (email or "").strip()
        if not email:
            return SubstituteAddResult.EMPTY
        if email in self._members:
            return SubstituteAddResult.DUPLICATE
        if email in set(starters):
            return SubstituteAddResult.IS_STARTER
        if len(self._members) >= self.capacity:
            logger.warning("Substitute bench is full (%s); %s not added", self.capacity, email)
            return SubstituteAddResult.CAPACITY_REACHED
        self._members.append(email)
        return SubstituteAddResult.ADDED

    def remove(self, email: str) -> bool:
        """Remove a player; returns False when they were not on the bench."""
        if email in self._members:
            self._members.remove(email)
            return True
        return False

    def evict(self, email: str) -> bool:
        """Drop a player who has just been placed in a starting slot."""
        removed = self.remove(email)
        if removed:
            logger.debug("Evicted %s from the bench after starter assignment", email)
        return removed

    def clear(self) -> None:
        self._members.clear()

    @property
    def members(self) -> List[str]:
        return list(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, email: object) -> bool:
        return email in self._members

    @property
    def is_full(self) -> bool:
        return len(self._members) >= self.capacity

    @staticmethod
    def available(roster: Sequence[Player], assigned_emails: Iterable[str]) -> List[Player]:
        """Roster players not currently starting, in roster order."""
        assigned = set(assigned_emails)
        return [player for player in roster if player.email not in assigned]
