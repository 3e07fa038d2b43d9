"""World — the set of colonies advanced together in lockstep.

The World owns the traits rolled at setup and every registered colony.
It is built and passed around explicitly; there is no shared instance.
Colonies must all be registered before the first tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from meadow.colony.colony import DEFAULT_FOOD_SUPPLY, Colony
from meadow.colony.entity import ResourcePool
from meadow.colony.traits import (
    DEFAULT_BONUS_RANGE,
    DEFAULT_TRAIT_COUNT,
    Trait,
    generate_traits,
)
from meadow.errors import SetupError

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)


@dataclass
class World:
    """All colonies in one run.

    Attributes:
        traits: Species traits, fixed for the run.
        colonies: Registered colonies in tick order.
        tick: Number of completed ticks.
    """

    traits: list[Trait] = field(default_factory=list)
    colonies: list[Colony] = field(default_factory=list)
    tick: int = 0

    @classmethod
    def generate(
        cls,
        rng: Generator,
        *,
        num_traits: int = DEFAULT_TRAIT_COUNT,
        bonus_range: tuple[int, int] = DEFAULT_BONUS_RANGE,
    ) -> World:
        """Build an empty world with a freshly rolled trait set.

        Args:
            rng: Seeded random generator.
            num_traits: Number of traits to roll.
            bonus_range: ``(low, high)`` bonus bounds, ``high`` exclusive.
        """
        traits = generate_traits(rng, num_traits, bonus_range)
        logger.debug("Rolled %d traits", len(traits))
        return cls(traits=traits)

    @property
    def started(self) -> bool:
        """Return True once the first tick has run."""
        return self.tick > 0

    @property
    def alive_colonies(self) -> list[Colony]:
        """Colonies that can still advance."""
        return [c for c in self.colonies if c.is_alive]

    def add_colony(self, colony: Colony) -> Colony:
        """Register a colony before the simulation starts.

        Raises:
            SetupError: If ticking has already begun or the colony is
                already registered.
        """
        if self.started:
            msg = f"cannot add colony {colony.name!r} after tick {self.tick}"
            raise SetupError(msg)
        if any(c is colony for c in self.colonies):
            msg = f"colony {colony.name!r} is already registered"
            raise SetupError(msg)
        self.colonies.append(colony)
        logger.debug("Registered colony %s", colony.name)
        return colony

    def create_colony(
        self,
        name: str,
        trait: Trait,
        food_supply: int = DEFAULT_FOOD_SUPPLY,
    ) -> Colony:
        """Construct a colony and register it in one call."""
        colony = Colony(name=name, trait=trait, pool=ResourcePool(food_supply))
        return self.add_colony(colony)

    def trait(self, index: int) -> Trait:
        """Return the trait at ``index``.

        Raises:
            SetupError: If ``index`` is out of range.
        """
        if not 0 <= index < len(self.traits):
            msg = f"trait index {index} out of range for {len(self.traits)} traits"
            raise SetupError(msg)
        return self.traits[index]

    def step(self) -> None:
        """Advance every colony by one tick, alive or not."""
        for colony in self.colonies:
            colony.step()
        self.tick += 1

    def is_simulation_complete(self) -> bool:
        """Return True once at most one colony is still alive."""
        return len(self.alive_colonies) <= 1
