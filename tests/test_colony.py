"""Tests for meadow.colony - Colony lifecycle, leaders, rooms, traits."""

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from meadow.colony.colony import Colony
from meadow.colony.entity import Entity, EntityKind, ResourcePool
from meadow.colony.room import Room, RoomKind
from meadow.colony.traits import Trait, generate_traits
from meadow.errors import SetupError

MakeColony = Callable[..., Colony]


class TestTraits:
    """Tests for trait construction and generation."""

    def test_frozen(self, trait: Trait) -> None:
        with pytest.raises(AttributeError):
            trait.strength_bonus = 1  # type: ignore[misc]

    def test_negative_bonus_rejected(self) -> None:
        with pytest.raises(SetupError):
            Trait("Bad", harvest_bonus=-1)

    def test_generate_count_and_bounds(self, rng: Generator) -> None:
        traits = generate_traits(rng)
        assert len(traits) == 12
        assert [t.trait_id for t in traits[:2]] == ["Species0", "Species1"]
        for t in traits:
            for bonus in (t.strength_bonus, t.efficiency_bonus, t.harvest_bonus):
                assert 5 <= bonus < 10

    def test_generate_is_deterministic(self) -> None:
        a = generate_traits(np.random.default_rng(7), 6)
        b = generate_traits(np.random.default_rng(7), 6)
        assert a == b

    def test_generate_rejects_empty_range(self, rng: Generator) -> None:
        with pytest.raises(SetupError):
            generate_traits(rng, 3, (5, 5))


class TestColonySetup:
    """Tests for building a colony."""

    def test_requires_trait(self) -> None:
        with pytest.raises(SetupError):
            Colony(name="Orphan", trait=None)

    def test_default_food_supply(self, trait: Trait) -> None:
        assert Colony(name="C", trait=trait).food_supply == 1000

    def test_leader_goes_into_members(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait)
        queen = Entity("Queen", trait, EntityKind.LEADER)
        colony.set_leader(queen)
        assert colony.leader is queen
        assert colony.members == [queen]
        assert colony.is_alive

    def test_non_leader_rejected(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait)
        with pytest.raises(SetupError):
            colony.set_leader(Entity("Drone", trait, EntityKind.WORKER))
        assert colony.leader is None

    def test_set_same_leader_twice(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait)
        queen = Entity("Queen", trait, EntityKind.LEADER)
        colony.set_leader(queen)
        colony.set_leader(queen)
        assert colony.members == [queen]

    def test_existing_member_promoted(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait)
        drone = colony.add_member(Entity("Drone", trait, EntityKind.WORKER))
        queen = colony.add_member(Entity("Queen", trait, EntityKind.LEADER))
        colony.set_leader(queen)
        assert colony.members == [drone, queen]
        assert colony.leader is queen

    def test_duplicate_member_rejected(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait)
        drone = colony.add_member(Entity("Drone", trait, EntityKind.WORKER))
        with pytest.raises(SetupError):
            colony.add_member(drone)

    def test_leader_index_is_not_constructor_input(self, trait: Trait) -> None:
        with pytest.raises(TypeError):
            Colony(name="C", trait=trait, _leader_index=0)  # type: ignore[call-arg]
        assert Colony(name="C", trait=trait).leader is None

    def test_leaderless_is_not_alive(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait)
        colony.add_member(Entity("Drone", trait, EntityKind.WORKER))
        assert not colony.is_alive


class TestLeaderReplacement:
    """Replacing a leader: stale member kept (default) or evicted."""

    def test_stale_leader_stays_a_member(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait, pool=ResourcePool(100))
        old = Entity("Old", trait, EntityKind.LEADER)
        new = Entity("New", trait, EntityKind.LEADER)
        colony.set_leader(old)
        colony.set_leader(new)
        assert colony.leader is new
        assert colony.members == [old, new]

        colony.step()
        # Both queens act and eat
        assert colony.food_supply == 80
        assert old.energy == 90
        assert new.energy == 90

    def test_evict_previous_leader(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait, pool=ResourcePool(100))
        old = Entity("Old", trait, EntityKind.LEADER)
        drone = Entity("Drone", trait, EntityKind.WORKER)
        new = Entity("New", trait, EntityKind.LEADER)
        colony.set_leader(old)
        colony.add_member(drone)
        colony.set_leader(new, evict_previous=True)
        assert colony.members == [drone, new]
        assert colony.leader is new

        colony.step()
        assert colony.food_supply == 80
        assert old.energy == 100


class TestColonyStep:
    """Tests for per-tick behaviour and the resource rule."""

    def test_step_charges_every_member(self, led_colony: Colony) -> None:
        led_colony.step()
        assert led_colony.food_supply == 970
        assert all(m.energy == 90 for m in led_colony.members)
        assert led_colony.ticks_survived == 1

    def test_short_circuit_on_last_member(self, make_colony: MakeColony) -> None:
        """Pool covers A and B but not C: C's draw fails, colony dies."""
        colony = make_colony("ABC", 25, rates=(10, 10, 10))
        colony.step()
        assert colony.food_supply == 5
        assert not colony.active
        assert not colony.is_alive
        assert colony.ticks_survived == 0

    def test_later_members_never_touched(self, make_colony: MakeColony) -> None:
        """Members after the first failure neither act nor draw."""
        colony = make_colony("ABCD", 12, rates=(10, 5, 1, 1))
        a, b, c, d = colony.members
        colony.step()
        assert not colony.active
        # Only A drew; C and D would have fit in the remaining 2
        assert colony.food_supply == 2
        assert a.energy == 90
        assert b.energy == 90
        assert c.energy == 100
        assert d.energy == 100

    def test_leaderless_colony_never_ticks(self, trait: Trait) -> None:
        colony = Colony(name="C", trait=trait, pool=ResourcePool(50))
        drone = colony.add_member(Entity("Drone", trait, EntityKind.WORKER))
        for _ in range(10):
            colony.step()
        assert drone.energy == 100
        assert colony.food_supply == 50
        assert colony.active

    def test_dead_colony_is_frozen(self, make_colony: MakeColony) -> None:
        colony = make_colony("C", 15, rates=(10, 10))
        colony.step()
        assert not colony.is_alive
        energies = [m.energy for m in colony.members]
        food = colony.food_supply
        for _ in range(5):
            colony.step()
        assert [m.energy for m in colony.members] == energies
        assert colony.food_supply == food

    def test_pool_never_grows(self, led_colony: Colony) -> None:
        before = led_colony.food_supply
        for _ in range(400):
            led_colony.step()
            assert led_colony.food_supply <= before
            before = led_colony.food_supply
        assert not led_colony.is_alive

    def test_harvest_bonus_is_inert(self, make_colony: MakeColony) -> None:
        """Traits never replenish the pool."""
        rich = Trait("Rich", harvest_bonus=1000)
        colony = Colony(name="C", trait=rich, pool=ResourcePool(100))
        colony.set_leader(Entity("Queen", rich, EntityKind.LEADER))
        baseline = make_colony("B", 100)
        for _ in range(3):
            colony.step()
            baseline.step()
        assert colony.food_supply == baseline.food_supply == 70


class TestRooms:
    """Rooms group members without affecting the tick."""

    def test_capacity_limit(self, trait: Trait) -> None:
        room = Room("Nursery", RoomKind.SPAWNING, capacity=2)
        entities = [Entity(f"D{i}", trait, EntityKind.WORKER) for i in range(3)]
        assert room.add(entities[0])
        assert room.add(entities[1])
        assert not room.can_accept
        assert not room.add(entities[2])
        assert room.occupants == entities[:2]

    def test_negative_capacity_rejected(self) -> None:
        with pytest.raises(SetupError):
            Room("Bad", RoomKind.STORAGE, capacity=-1)

    def test_rooms_do_not_affect_step(self, led_colony: Colony) -> None:
        room = Room("Barracks", RoomKind.BATTLE, capacity=1)
        room.add(led_colony.members[2])
        led_colony.add_room(room)
        led_colony.step()
        assert led_colony.food_supply == 970
        assert led_colony.rooms == [room]
