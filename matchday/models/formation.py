"""Formation catalog and slot keys for the Matchday lineup engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class PositionCategory(Enum):
    """Broad position groups used to organise the roster."""
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"


class Position(Enum):
    """Position labels that appear in formation rows."""
    GOALKEEPER = "GK"

    RIGHT_BACK = "RB"
    CENTER_BACK = "CB"
    LEFT_BACK = "LB"
    RIGHT_WING_BACK = "RWB"
    LEFT_WING_BACK = "LWB"

    DEFENSIVE_MIDFIELDER = "CDM"
    CENTRAL_MIDFIELDER = "CM"
    ATTACKING_MIDFIELDER = "CAM"
    RIGHT_MIDFIELDER = "RM"
    LEFT_MIDFIELDER = "LM"

    RIGHT_WINGER = "RW"
    LEFT_WINGER = "LW"
    STRIKER = "ST"

    @property
    def category(self) -> PositionCategory:
        """Category this position belongs to."""
        return _POSITION_CATEGORIES[self]


_POSITION_CATEGORIES: Dict[Position, PositionCategory] = {
    Position.GOALKEEPER: PositionCategory.GOALKEEPER,
    Position.RIGHT_BACK: PositionCategory.DEFENDER,
    Position.CENTER_BACK: PositionCategory.DEFENDER,
    Position.LEFT_BACK: PositionCategory.DEFENDER,
    Position.RIGHT_WING_BACK: PositionCategory.DEFENDER,
    Position.LEFT_WING_BACK: PositionCategory.DEFENDER,
    Position.DEFENSIVE_MIDFIELDER: PositionCategory.MIDFIELDER,
    Position.CENTRAL_MIDFIELDER: PositionCategory.MIDFIELDER,
    Position.ATTACKING_MIDFIELDER: PositionCategory.MIDFIELDER,
    Position.RIGHT_MIDFIELDER: PositionCategory.MIDFIELDER,
    Position.LEFT_MIDFIELDER: PositionCategory.MIDFIELDER,
    Position.RIGHT_WINGER: PositionCategory.FORWARD,
    Position.LEFT_WINGER: PositionCategory.FORWARD,
    Position.STRIKER: PositionCategory.FORWARD,
}


@dataclass(frozen=True)
class SlotKey:
    """
    Identifies one starting slot within a formation layout.

    Two keys are equal when position, row and column all match, so a key
    stays stable for as long as the formation is unchanged.
    """
    position: Position
    row: int
    column: int

    @property
    def key(self) -> str:
        """Wire form, e.g. ``"CB-1-2"``."""
        return f"{self.position.value}-{self.row}-{self.column}"

    @classmethod
    def parse(cls, key: str) -> SlotKey:
        """
        Parse the wire form back into a slot key.

        Raises:
            ValueError: If the key is not ``LABEL-ROW-COLUMN``
        """
        if not isinstance(key, str):
            raise ValueError(f"Invalid slot key: {key!r}")
        parts = key.split("-")
        if len(parts) != 3:
            raise ValueError(f"Invalid slot key: {key!r}")
        label, row, column = parts
        try:
            return cls(Position(label), int(row), int(column))
        except ValueError:
            raise ValueError(f"Invalid slot key: {key!r}") from None

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Formation:
    """A named layout of position rows, goalkeeper first."""
    formation_id: str
    rows: Tuple[Tuple[Position, ...], ...]

    @classmethod
    def from_labels(cls, formation_id: str, rows: List[List[str]]) -> Formation:
        """Build a formation from rows of position labels."""
        return cls(
            formation_id=formation_id,
            rows=tuple(tuple(Position(label) for label in row) for row in rows)
        )

    def slots(self) -> List[SlotKey]:
        """Ordered slot keys, row by row."""
        return [
            SlotKey(position, row_index, column_index)
            for row_index, row in enumerate(self.rows)
            for column_index, position in enumerate(row)
        ]

    @property
    def slot_count(self) -> int:
        """Number of starters this formation needs."""
        return sum(len(row) for row in self.rows)

    def to_dict(self) -> Dict:
        """Convert formation to dictionary for serialization."""
        return {
            "formation": self.formation_id,
            "rows": [[position.value for position in row] for row in self.rows],
            "slots": [slot.key for slot in self.slots()],
            "slot_count": self.slot_count,
        }


_FORMATION_ROWS: Dict[str, List[List[str]]] = {
    "5-4-1": [
        ["GK"],
        ["RWB", "CB", "CB", "CB", "LWB"],
        ["RM", "CM", "CM", "LM"],
        ["ST"],
    ],
    "5-3-2": [
        ["GK"],
        ["RWB", "CB", "CB", "CB", "LWB"],
        ["CM", "CM", "CM"],
        ["ST", "ST"],
    ],
    "4-5-1": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["CDM"],
        ["RM", "CM", "CM", "LM"],
        ["ST"],
    ],
    "4-4-2": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["RM", "CM", "CM", "LM"],
        ["ST", "ST"],
    ],
    "4-1-4-1": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["CDM"],
        ["RM", "CM", "CM", "LM"],
        ["ST"],
    ],
    "4-3-3": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["CM", "CM", "CM"],
        ["RW", "ST", "LW"],
    ],
    "4-3-2-1": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["CM", "CDM", "CM"],
        ["CAM", "CAM"],
        ["ST"],
    ],
    "4-2-3-1": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["CDM", "CDM"],
        ["RW", "CAM", "LW"],
        ["ST"],
    ],
    "4-2-2-2": [
        ["GK"],
        ["RB", "CB", "CB", "LB"],
        ["CDM", "CDM"],
        ["CAM", "CAM"],
        ["ST", "ST"],
    ],
    "3-6-1": [
        ["GK"],
        ["CB", "CB", "CB"],
        ["RWB", "CM", "CDM", "CM", "LWB"],
        ["CAM"],
        ["ST"],
    ],
    "3-5-2": [
        ["GK"],
        ["CB", "CB", "CB"],
        ["RWB", "CM", "CDM", "CM", "LWB"],
        ["ST", "ST"],
    ],
    "3-4-3": [
        ["GK"],
        ["CB", "CB", "CB"],
        ["RWB", "CM", "CM", "LWB"],
        ["RW", "ST", "LW"],
    ],
    "3-4-1-2": [
        ["GK"],
        ["CB", "CB", "CB"],
        ["RWB", "CM", "CM", "LWB"],
        ["CAM"],
        ["ST", "ST"],
    ],
    "3-3-4": [
        ["GK"],
        ["CB", "CB", "CB"],
        ["CM", "CM", "CM"],
        ["RW", "ST", "ST", "LW"],
    ],
    "3-2-5": [
        ["GK"],
        ["CB", "CB", "CB"],
        ["CDM", "CDM"],
        ["RW", "CAM", "ST", "CAM", "LW"],
    ],
}

FORMATIONS: Dict[str, Formation] = {
    formation_id: Formation.from_labels(formation_id, rows)
    for formation_id, rows in _FORMATION_ROWS.items()
}

DEFAULT_FORMATION = "4-4-2"


def get_formation(formation_id: str) -> Formation:
    """
    Look up a catalog formation.

    Raises:
        KeyError: If the formation is not in the catalog
    """
    try:
        return FORMATIONS[formation_id]
    except KeyError:
        raise KeyError(f"Unknown formation: {formation_id}") from None


def list_formations() -> List[str]:
    """Formation ids in catalog order."""
    return list(FORMATIONS.keys())


def slots_of(formation_id: str) -> List[SlotKey]:
    """Ordered slot keys for a catalog formation."""
    return get_formation(formation_id).slots()


def slot_count(formation_id: str) -> int:
    """Number of starters a catalog formation requires."""
    return get_formation(formation_id).slot_count


def category_for_lineup_key(key: str) -> str:
    """
    Map a saved team-lineup key to a display category.

    Slot keys resolve through their position label; ``SubN`` keys are
    substitutes; anything else is ``"Unknown"``.
    """
    label = (key or "").split("-")[0]
    if label.startswith("Sub") and label[3:].isdigit():
        return "Substitution"
    try:
        return Position(label).category.value
    except ValueError:
        return "Unknown"
