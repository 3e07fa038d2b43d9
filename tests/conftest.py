"""Shared fixtures for the Meadow test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from meadow.colony.colony import Colony
from meadow.colony.entity import Entity, EntityKind, ResourcePool
from meadow.colony.traits import Trait
from meadow.simulation.config import SimulationConfig


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def trait() -> Trait:
    """A fixed species trait."""
    return Trait("Species0", strength_bonus=5, efficiency_bonus=6, harvest_bonus=7)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default run config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def led_colony(trait: Trait) -> Colony:
    """A colony with a leader and two workers and plenty of food."""
    colony = Colony(name="Alpha", trait=trait, pool=ResourcePool(1000))
    colony.set_leader(Entity("Queen", trait, EntityKind.LEADER))
    colony.add_member(Entity("Drone", trait, EntityKind.WORKER))
    colony.add_member(Entity("Warrior", trait, EntityKind.FIGHTER))
    return colony


@pytest.fixture
def make_colony(trait: Trait) -> Callable[..., Colony]:
    """Factory for colonies whose first member is the leader.

    ``rates`` gives each member's consumption rate in tick order.
    """

    def _make(name: str, food: int, *, rates: tuple[int, ...] = (10,)) -> Colony:
        colony = Colony(name=name, trait=trait, pool=ResourcePool(food))
        colony.set_leader(
            Entity(
                f"{name}-leader",
                trait,
                EntityKind.LEADER,
                consumption_rate=rates[0],
            ),
        )
        for i, rate in enumerate(rates[1:], start=1):
            colony.add_member(
                Entity(f"{name}-{i}", trait, EntityKind.WORKER, consumption_rate=rate),
            )
        return colony

    return _make
