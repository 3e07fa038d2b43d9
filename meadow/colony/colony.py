"""Colony — one independently resourced group of entities.

A Colony owns its members, its food pool, and its rooms.  The leader is
stored as an index into ``members`` rather than as a second handle, so
the member list stays the single owner of every entity.

Each tick the members act in insertion order and then draw their ration.
The first member whose draw fails ends the colony for good; nobody after
it draws that tick.  Iteration order therefore decides which member
starves the colony, and it must stay stable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from meadow.colony.entity import Entity, ResourcePool
from meadow.colony.room import Room
from meadow.colony.traits import Trait
from meadow.errors import SetupError

logger = logging.getLogger(__name__)

DEFAULT_FOOD_SUPPLY = 1000


@dataclass
class Colony:
    """Top-level state for a single colony.

    Attributes:
        name: Unique display name.
        trait: Species trait shared by the colony.
        pool: Food supply the members draw from.
        members: Entities in tick order (leader included once set).
        rooms: Housing for members; no effect on ticking.
        active: False once the pool failed to cover a ration.  Never
            becomes True again.
        ticks_survived: Ticks in which every member drew successfully.
    """

    name: str
    trait: Trait | None
    pool: ResourcePool = field(
        default_factory=lambda: ResourcePool(DEFAULT_FOOD_SUPPLY),
    )
    members: list[Entity] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    active: bool = True
    ticks_survived: int = 0
    _leader_index: int | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Require a species trait."""
        if self.trait is None:
            msg = f"colony {self.name!r} has no species trait"
            raise SetupError(msg)

    @property
    def food_supply(self) -> int:
        """Units of food left in the pool."""
        return self.pool.amount

    @property
    def leader(self) -> Entity | None:
        """The current leader, or None if none has been set."""
        if self._leader_index is None:
            return None
        return self.members[self._leader_index]

    @property
    def is_alive(self) -> bool:
        """Return True if the colony is still active and has a leader."""
        return self.active and self._leader_index is not None

    def add_member(self, entity: Entity) -> Entity:
        """Append ``entity`` to the end of the tick order.

        Raises:
            SetupError: If the entity is already a member.
        """
        if self._index_of(entity) is not None:
            msg = f"{entity.name} is already a member of {self.name}"
            raise SetupError(msg)
        self.members.append(entity)
        logger.debug("%s: added %s (%s)", self.name, entity.name, entity.kind.name)
        return entity

    def set_leader(self, entity: Entity, *, evict_previous: bool = False) -> None:
        """Make ``entity`` the colony's leader.

        The entity is appended to ``members`` unless it is already there.
        By default a replaced leader stays in ``members``: it keeps acting
        and eating but no longer counts as the leader.  Pass
        ``evict_previous=True`` to drop the former leader instead.

        Args:
            entity: A leader-kind entity.
            evict_previous: Remove the former leader from ``members``.

        Raises:
            SetupError: If ``entity`` is not leader-kind.
        """
        if not entity.is_leader:
            msg = f"{entity.name} is a {entity.kind.name}, not a LEADER"
            raise SetupError(msg)

        previous = self.leader
        if previous is not None and previous is not entity:
            if evict_previous:
                self.members.remove(previous)
                logger.info("%s: evicted former leader %s", self.name, previous.name)
            else:
                logger.warning(
                    "%s: %s replaced as leader but stays a member",
                    self.name,
                    previous.name,
                )

        index = self._index_of(entity)
        if index is None:
            self.members.append(entity)
            index = len(self.members) - 1
        self._leader_index = index

    def add_room(self, room: Room) -> None:
        """Attach a room to the colony."""
        self.rooms.append(room)

    def step(self) -> None:
        """Advance every member by one tick and charge their rations.

        Does nothing if the colony is inactive or leaderless.
        """
        if not self.is_alive:
            return

        for entity in self.members:
            entity.step()
            if not entity.withdraw(self.pool):
                self.active = False
                logger.info(
                    "%s: %s could not draw %d food (%d left); colony inactive",
                    self.name,
                    entity.name,
                    entity.consumption_rate,
                    self.pool.amount,
                )
                return

        self.ticks_survived += 1

    def _index_of(self, entity: Entity) -> int | None:
        for i, member in enumerate(self.members):
            if member is entity:
                return i
        return None
