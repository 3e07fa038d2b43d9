"""SimulationEngine — builds a world from config and drives the tick loop.

The engine is the only caller of the world's three run-time operations:

1. ``add_colony`` for every configured colony, before the first tick
2. ``step`` once per loop iteration
3. ``is_simulation_complete`` polled before each iteration

The loop stops when at most one colony is still alive or ``max_ticks``
is reached, whichever comes first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from meadow.colony.colony import Colony
from meadow.colony.entity import Entity, ResourcePool
from meadow.simulation.config import ColonyConfig, MemberConfig, SimulationConfig
from meadow.world.world import World

logger = logging.getLogger(__name__)


@dataclass
class ColonySummary:
    """End-of-run outcome for one colony."""

    name: str
    alive: bool
    food_supply: int
    ticks_survived: int
    members: int


@dataclass
class SimulationEngine:
    """Drives a World forward tick by tick.

    Attributes:
        config: Loaded run configuration.
        world: The colonies and traits being simulated.
        rng: Seeded generator used for the trait roll.
    """

    config: SimulationConfig
    world: World = field(init=False)
    rng: Generator = field(init=False)

    def __post_init__(self) -> None:
        """Roll traits and build every configured colony."""
        self.rng = np.random.default_rng(self.config.seed)
        self.world = World.generate(
            self.rng,
            num_traits=self.config.num_traits,
            bonus_range=self.config.bonus_range,
        )
        for colony_cfg in self.config.colonies:
            self.world.add_colony(self.build_colony(colony_cfg))

    @property
    def tick(self) -> int:
        """Number of ticks run so far."""
        return self.world.tick

    @property
    def colonies(self) -> list[Colony]:
        """Registered colonies in tick order."""
        return self.world.colonies

    @property
    def finished(self) -> bool:
        """Return True when the loop should not step again."""
        return self.world.is_simulation_complete() or self.tick >= self.config.max_ticks

    def build_colony(self, colony_cfg: ColonyConfig) -> Colony:
        """Create a colony, its leaders, and its members from config.

        Leaders are appointed in order and go first in tick order, then
        members as listed.  Each replaced leader is kept as a member or
        evicted according to ``evict_stale_leaders``.

        Raises:
            SetupError: If the trait index or any member is invalid.
        """
        trait = self.world.trait(colony_cfg.trait_index)
        colony = Colony(
            name=colony_cfg.name,
            trait=trait,
            pool=ResourcePool(colony_cfg.food_supply),
        )
        for leader_cfg in colony_cfg.leaders:
            colony.set_leader(
                self._build_entity(leader_cfg, colony),
                evict_previous=self.config.evict_stale_leaders,
            )
        for member_cfg in colony_cfg.members:
            colony.add_member(self._build_entity(member_cfg, colony))
        return colony

    def step(self) -> None:
        """Advance the world by one tick and report it."""
        self.world.step()
        logger.info("Tick %d completed.", self.tick)

    def run(self) -> int:
        """Step until one colony is left standing or ``max_ticks`` is hit.

        Returns:
            The number of ticks run by this call.
        """
        if self.world.is_simulation_complete() and self.tick == 0:
            logger.warning(
                "Simulation is decided before the first tick "
                "(%d colonies alive); nothing to run",
                len(self.world.alive_colonies),
            )
            return 0

        start = self.tick
        while not self.finished:
            self.step()

        self.log_outcome()
        return self.tick - start

    def log_outcome(self) -> None:
        """Report how and when the run stopped."""
        stopped_early = not self.world.is_simulation_complete()
        if stopped_early and self.tick >= self.config.max_ticks:
            logger.warning("Stopped at max_ticks=%d", self.config.max_ticks)
        logger.info("Simulation ended after %d ticks.", self.tick)

    def summary(self) -> list[ColonySummary]:
        """Return one outcome row per colony."""
        return [
            ColonySummary(
                name=c.name,
                alive=c.is_alive,
                food_supply=c.food_supply,
                ticks_survived=c.ticks_survived,
                members=len(c.members),
            )
            for c in self.colonies
        ]

    def _build_entity(self, member_cfg: MemberConfig, colony: Colony) -> Entity:
        return Entity(
            name=member_cfg.name,
            trait=colony.trait,
            kind=member_cfg.kind,
            energy=member_cfg.energy,
            consumption_rate=member_cfg.consumption_rate,
        )
