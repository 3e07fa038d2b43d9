"""Room — a capacity-limited grouping of colony members.

Rooms only record who is housed where.  They have no effect on how a
colony ticks or when it dies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from meadow.errors import SetupError

if TYPE_CHECKING:
    from meadow.colony.entity import Entity


class RoomKind(Enum):
    """What a room is used for."""

    SPAWNING = auto()
    RESTING = auto()
    STORAGE = auto()
    BATTLE = auto()


@dataclass
class Room:
    """A named chamber holding up to ``capacity`` members.

    Attributes:
        name: Display name.
        kind: Purpose of the room.
        capacity: Maximum number of occupants.
        occupants: Members housed here, in arrival order.
    """

    name: str
    kind: RoomKind
    capacity: int
    occupants: list[Entity] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Reject negative capacities."""
        if self.capacity < 0:
            msg = f"{self.name}: capacity must be non-negative"
            raise SetupError(msg)

    @property
    def can_accept(self) -> bool:
        """Return True while there is space left."""
        return len(self.occupants) < self.capacity

    def add(self, entity: Entity) -> bool:
        """House ``entity`` if there is room.

        Returns:
            False (and leaves the room unchanged) when full.
        """
        if not self.can_accept:
            return False
        self.occupants.append(entity)
        return True
