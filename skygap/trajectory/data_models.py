# skygap/trajectory/data_models.py
"""
Data structures for trajectory reconstruction. Paths and the consumed set are
immutable; each seed walk receives a ConsumedSet and hands back a new one.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, FrozenSet, Iterable, List, Dict, Any

from skygap.constellation.data_models import Position

PositionKey = Tuple[float, float, int]


class TieBreak(Enum):
    """How equally distant candidates are ordered when extending a path."""
    ENCOUNTER = "encounter"      # first candidate in the hour's input order
    COORDINATE = "coordinate"    # lowest longitude, then lowest latitude


@dataclass(frozen=True)
class ConsumedSet:
    """Keys of positions already claimed by a path."""
    keys: FrozenSet[PositionKey] = field(default_factory=frozenset)

    def __contains__(self, position: Position) -> bool:
        return position.key in self.keys

    def __len__(self) -> int:
        return len(self.keys)

    def with_position(self, position: Position) -> "ConsumedSet":
        return ConsumedSet(self.keys | {position.key})

    def with_positions(self, positions: Iterable[Position]) -> "ConsumedSet":
        return ConsumedSet(self.keys | {p.key for p in positions})


@dataclass(frozen=True)
class Path:
    """A reconstructed trajectory, strictly ascending by hour."""
    positions: Tuple[Position, ...]

    def __post_init__(self):
        hours = [p.hour for p in self.positions]
        if any(b <= a for a, b in zip(hours, hours[1:])):
            raise ValueError(f"Path hours must be strictly ascending, got {hours}")

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self):
        return iter(self.positions)

    @property
    def start(self) -> Position:
        return self.positions[0]

    @property
    def end(self) -> Position:
        return self.positions[-1]

    @property
    def hours(self) -> List[int]:
        return [p.hour for p in self.positions]

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.positions]
