"""Entity -- a single simulated actor inside a colony.

Every entity carries a ``kind`` tag rather than a subclass.  The three
kinds differ only in how they respond to low energy, and that rule is
looked up with :func:`behavior_for`:

- **Worker / Fighter**: rest (+20) when energy is below the threshold,
  otherwise work (-10).
- **Leader**: works while at or above the threshold and does nothing
  below it.  A leader never recovers on its own.

Food is drawn from a :class:`ResourcePool` owned by the colony.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from meadow.errors import SetupError

if TYPE_CHECKING:
    from meadow.colony.traits import Trait

# -- Constants ---------------------------------------------------------------

MAX_ENERGY = 100
LOW_ENERGY_THRESHOLD = 30
REST_GAIN = 20
WORK_COST = 10
DEFAULT_CONSUMPTION_RATE = 10

Behavior = Callable[[int, int], int]


class EntityKind(Enum):
    """Closed set of behavioural variants."""

    WORKER = auto()
    FIGHTER = auto()
    LEADER = auto()

    @classmethod
    def parse(cls, name: str) -> EntityKind:
        """Look up a kind by case-insensitive name.

        Raises:
            SetupError: If ``name`` is not a known kind.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(k.name.lower() for k in cls)
            msg = f"unknown entity kind {name!r} (expected one of: {valid})"
            raise SetupError(msg) from None


def rest(energy: int) -> int:
    """Recover energy, capped at the maximum."""
    return min(MAX_ENERGY, energy + REST_GAIN)


def work(energy: int) -> int:
    """Spend energy, floored at zero."""
    return max(0, energy - WORK_COST)


def _rest_or_work(energy: int, threshold: int) -> int:
    if energy < threshold:
        return rest(energy)
    return work(energy)


def _work_or_idle(energy: int, threshold: int) -> int:
    if energy < threshold:
        return energy
    return work(energy)


_BEHAVIORS: dict[EntityKind, Behavior] = {
    EntityKind.WORKER: _rest_or_work,
    EntityKind.FIGHTER: _rest_or_work,
    EntityKind.LEADER: _work_or_idle,
}


def behavior_for(kind: EntityKind) -> Behavior:
    """Return the pure ``(energy, threshold) -> energy`` rule for ``kind``."""
    return _BEHAVIORS[kind]


@dataclass
class ResourcePool:
    """A colony's consumable food supply.

    Attributes:
        amount: Units remaining (never negative).
    """

    amount: int = 1000

    def __post_init__(self) -> None:
        """Reject a negative starting amount."""
        if self.amount < 0:
            msg = f"resource pool cannot start negative ({self.amount})"
            raise SetupError(msg)

    def can_cover(self, amount: int) -> bool:
        """Return True if ``amount`` units could be drawn right now."""
        return self.amount >= amount

    def draw(self, amount: int) -> bool:
        """Deduct ``amount`` if available.

        Returns:
            True on success.  On failure the pool is left untouched.
        """
        if not self.can_cover(amount):
            return False
        self.amount -= amount
        return True


@dataclass(eq=False)
class Entity:
    """A single colony member.

    Entities compare by identity: two members with equal fields are
    still distinct actors.

    Attributes:
        name: Display name.
        trait: The species trait this entity belongs to.
        kind: Behavioural variant, fixed for the entity's lifetime.
        energy: Current energy in ``[0, MAX_ENERGY]``.
        consumption_rate: Food drawn from the colony pool per tick.
    """

    name: str
    trait: Trait
    kind: EntityKind
    energy: int = MAX_ENERGY
    consumption_rate: int = DEFAULT_CONSUMPTION_RATE

    def __post_init__(self) -> None:
        """Validate energy and consumption bounds."""
        if not 0 <= self.energy <= MAX_ENERGY:
            msg = f"{self.name}: energy {self.energy} outside [0, {MAX_ENERGY}]"
            raise SetupError(msg)
        if self.consumption_rate <= 0:
            msg = f"{self.name}: consumption rate must be positive"
            raise SetupError(msg)

    @property
    def is_leader(self) -> bool:
        """Return True for leader-kind entities."""
        return self.kind is EntityKind.LEADER

    @property
    def needs_rest(self) -> bool:
        """Return True when energy is below the low-energy threshold."""
        return self.energy < LOW_ENERGY_THRESHOLD

    def step(self) -> None:
        """Apply this tick's rest-or-work energy update."""
        self.energy = behavior_for(self.kind)(self.energy, LOW_ENERGY_THRESHOLD)

    def withdraw(self, pool: ResourcePool) -> bool:
        """Draw this entity's ration from ``pool``.

        Returns:
            Whether the pool could cover the ration.
        """
        return pool.draw(self.consumption_rate)
