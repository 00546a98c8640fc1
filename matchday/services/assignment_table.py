"""
Lineup assignment table.

Owns the slot-to-player bindings for one lineup being edited. Every mutation
goes through ``assign``, ``unassign`` or ``reset``, and each binding change
is published to subscribers so views and the substitute pool can follow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Set

from ..models import SlotKey


class ChangeKind(Enum):
    """What happened to a binding."""
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    RESET = "reset"


@dataclass(frozen=True)
class AssignmentChange:
    """
    Notification sent to table subscribers.

    For ASSIGNED, ``email`` is the new occupant and ``previous_email`` the one
    displaced, if any. For UNASSIGNED, ``email`` is the player removed. RESET
    carries no slot.
    """
    kind: ChangeKind
    slot: Optional[SlotKey] = None
    email: Optional[str] = None
    previous_email: Optional[str] = None


Listener = Callable[[AssignmentChange], None]


class AssignmentTable:
    """
    Injective mapping of formation slots to player emails.

    A player occupies at most one slot. Assigning a player who already holds a
    slot moves them; assigning into an occupied slot displaces the occupant.
    """

    def __init__(self, slots: Iterable[SlotKey] = ()):
        self._slots: List[SlotKey] = list(slots)
        self._slot_set: Set[SlotKey] = set(self._slots)
        self._bindings: Dict[SlotKey, str] = {}
        self._slot_by_email: Dict[str, SlotKey] = {}
        self._listeners: List[Listener] = []

    # ---------- Observers ---------- #

    def subscribe(self, listener: Listener) -> None:
        """Register a callback for binding changes."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: AssignmentChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    # ---------- Mutation ---------- #

    def assign(self, slot: SlotKey, email: Optional[str]) -> None:
        """
        Bind a player to a slot.

        Args:
            slot: Slot to fill
            email: Player email; empty clears the slot

        Raises:
            ValueError: If the slot is not part of this table's layout
        """
        self._check_slot(slot)
        email = (email or "").strip()
        if not email:
            self.unassign(slot)
            return

        current = self._bindings.get(slot)
        if current == email:
            return

        # Move semantics: drop the player's old binding first
        old_slot = self._slot_by_email.get(email)
        if old_slot is not None:
            self._remove(old_slot)

        displaced = None
        if current is not None:
            displaced = current
            del self._slot_by_email[current]

        self._bindings[slot] = email
        self._slot_by_email[email] = slot
        self._notify(AssignmentChange(ChangeKind.ASSIGNED, slot, email, displaced))

    def unassign(self, slot: SlotKey) -> None:
        """Clear a slot; no-op when it is already empty."""
        self._check_slot(slot)
        if slot in self._bindings:
            self._remove(slot)

    def reset(self, slots: Optional[Iterable[SlotKey]] = None) -> None:
        """
        Clear every binding.

        Args:
            slots: New slot layout; the current layout is kept when omitted
        """
        self._bindings.clear()
        self._slot_by_email.clear()
        if slots is not None:
            self._slots = list(slots)
            self._slot_set = set(self._slots)
        self._notify(AssignmentChange(ChangeKind.RESET))

    def _remove(self, slot: SlotKey) -> None:
        email = self._bindings.pop(slot)
        del self._slot_by_email[email]
        self._notify(AssignmentChange(ChangeKind.UNASSIGNED, slot, email))

    def _check_slot(self, slot: SlotKey) -> None:
        if slot not in self._slot_set:
            raise ValueError(f"Slot {slot} is not part of the current formation")

    # ---------- Queries ---------- #

    @property
    def slots(self) -> List[SlotKey]:
        return list(self._slots)

    @property
    def filled_count(self) -> int:
        return len(self._bindings)

    def player_at(self, slot: SlotKey) -> Optional[str]:
        return self._bindings.get(slot)

    def slot_of(self, email: str) -> Optional[SlotKey]:
        return self._slot_by_email.get(email)

    def is_assigned(self, email: str) -> bool:
        return email in self._slot_by_email

    def assigned_emails(self) -> Set[str]:
        return set(self._slot_by_email)

    def as_dict(self) -> Dict[SlotKey, str]:
        """Bindings in slot layout order."""
        return {slot: self._bindings[slot] for slot in self._slots if slot in self._bindings}

    def validate(self, required_slot_count: Optional[int] = None) -> List[str]:
        """
        Check the lineup is complete.

        Args:
            required_slot_count: Starters needed; defaults to the layout size

        Returns:
            List of validation messages (empty if valid)
        """
        required = len(self._slots) if required_slot_count is None else required_slot_count
        messages = []
        if self.filled_count < required:
            remaining = required - self.filled_count
            messages.append(f"{remaining} positions still need to be filled")
        return messages
