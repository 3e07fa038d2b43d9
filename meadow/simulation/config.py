"""Config — load run parameters and colony setups from YAML files.

Seeds, tick bounds, trait rolls, and the starting population of every
colony live in YAML and are parsed into typed dataclasses here.  The
engine builds the world from these values and nothing else.  Any value
that cannot be read is reported as a :class:`SetupError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from meadow.colony.colony import DEFAULT_FOOD_SUPPLY
from meadow.colony.entity import DEFAULT_CONSUMPTION_RATE, MAX_ENERGY, EntityKind
from meadow.errors import SetupError


def _as_int(data: dict[str, Any], key: str, default: int, where: str) -> int:
    value = data.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        msg = f"{where}: {key} must be an integer, got {value!r}"
        raise SetupError(msg) from exc


def _as_bool(data: dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        msg = f"{where}: {key} must be true or false, got {value!r}"
        raise SetupError(msg)
    return value


def _as_mapping(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        msg = f"{where} must be a mapping, got {data!r}"
        raise SetupError(msg)
    return data


def _as_list(data: dict[str, Any], key: str, where: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        msg = f"{where}: {key} must be a list, got {value!r}"
        raise SetupError(msg)
    return value


@dataclass
class MemberConfig:
    """Starting values for one colony member.

    Attributes:
        name: Display name.
        kind: Behavioural variant.
        energy: Starting energy.
        consumption_rate: Food drawn per tick.
    """

    name: str
    kind: EntityKind = EntityKind.WORKER
    energy: int = MAX_ENERGY
    consumption_rate: int = DEFAULT_CONSUMPTION_RATE

    @classmethod
    def from_dict(
        cls,
        data: Any,
        *,
        default_kind: EntityKind = EntityKind.WORKER,
    ) -> MemberConfig:
        """Parse a member mapping; ``kind`` is given by name."""
        data = _as_mapping(data, "member entry")
        if "name" not in data:
            msg = f"member entry is missing a name: {data!r}"
            raise SetupError(msg)
        where = f"member {data['name']!r}"
        kind = data.get("kind")
        return cls(
            name=str(data["name"]),
            kind=EntityKind.parse(str(kind)) if kind is not None else default_kind,
            energy=_as_int(data, "energy", MAX_ENERGY, where),
            consumption_rate=_as_int(
                data,
                "consumption_rate",
                DEFAULT_CONSUMPTION_RATE,
                where,
            ),
        )


@dataclass
class ColonyConfig:
    """Starting setup for one colony.

    Attributes:
        name: Unique colony name.
        trait_index: Index into the world's rolled traits.
        food_supply: Starting resource pool.
        leaders: Leaders appointed in order; the last one ends up as the
            colony's leader.  Empty for a leaderless colony.
        members: Non-leader members in tick order (after the leaders).
    """

    name: str
    trait_index: int = 0
    food_supply: int = DEFAULT_FOOD_SUPPLY
    leaders: list[MemberConfig] = field(default_factory=list)
    members: list[MemberConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ColonyConfig:
        """Parse a colony mapping.

        A single ``leader`` mapping and a ``leaders`` list are both
        accepted; a single leader is appointed before any in the list.
        """
        data = _as_mapping(data, "colony entry")
        if "name" not in data:
            msg = f"colony entry is missing a name: {data!r}"
            raise SetupError(msg)
        where = f"colony {data['name']!r}"

        raw_leaders = _as_list(data, "leaders", where)
        if data.get("leader") is not None:
            raw_leaders = [data["leader"], *raw_leaders]

        return cls(
            name=str(data["name"]),
            trait_index=_as_int(data, "trait_index", 0, where),
            food_supply=_as_int(data, "food_supply", DEFAULT_FOOD_SUPPLY, where),
            leaders=[
                MemberConfig.from_dict(leader, default_kind=EntityKind.LEADER)
                for leader in raw_leaders
            ],
            members=[
                MemberConfig.from_dict(m) for m in _as_list(data, "members", where)
            ],
        )


def _default_colonies() -> list[ColonyConfig]:
    return [
        ColonyConfig(
            name="Colony1",
            trait_index=0,
            leaders=[MemberConfig("Queen1", EntityKind.LEADER)],
            members=[MemberConfig("Drone1", EntityKind.WORKER)],
        ),
        ColonyConfig(
            name="Colony2",
            trait_index=1,
            leaders=[MemberConfig("Queen2", EntityKind.LEADER)],
            members=[MemberConfig("Warrior1", EntityKind.FIGHTER)],
        ),
    ]


@dataclass
class SimulationConfig:
    """Top-level run configuration.

    Attributes:
        seed: RNG seed for the trait roll.
        max_ticks: Hard bound on ticks when no colony wins outright.
        num_traits: Number of species traits to roll.
        bonus_min: Lowest trait bonus (inclusive).
        bonus_max: Highest trait bonus (exclusive).
        evict_stale_leaders: When a colony appoints more than one leader,
            drop each replaced leader instead of leaving it as an
            ordinary member.
        colonies: Colony setups, registered in order.
    """

    seed: int = 42
    max_ticks: int = 1000
    num_traits: int = 12
    bonus_min: int = 5
    bonus_max: int = 10
    evict_stale_leaders: bool = False
    colonies: list[ColonyConfig] = field(default_factory=_default_colonies)

    def __post_init__(self) -> None:
        """Validate the tick bound."""
        if self.max_ticks <= 0:
            msg = f"max_ticks must be positive, got {self.max_ticks}"
            raise SetupError(msg)

    @property
    def bonus_range(self) -> tuple[int, int]:
        """Trait bonus bounds as ``(low, high)``."""
        return (self.bonus_min, self.bonus_max)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            SetupError: If a value is missing its required shape or
                cannot be read as the expected type.
        """
        path = Path(path)
        with path.open("r") as f:
            data = _as_mapping(yaml.safe_load(f) or {}, str(path))

        where = str(path)
        colonies = data.get("colonies")
        return cls(
            seed=_as_int(data, "seed", cls.seed, where),
            max_ticks=_as_int(data, "max_ticks", cls.max_ticks, where),
            num_traits=_as_int(data, "num_traits", cls.num_traits, where),
            bonus_min=_as_int(data, "bonus_min", cls.bonus_min, where),
            bonus_max=_as_int(data, "bonus_max", cls.bonus_max, where),
            evict_stale_leaders=_as_bool(
                data,
                "evict_stale_leaders",
                cls.evict_stale_leaders,
                where,
            ),
            colonies=(
                [ColonyConfig.from_dict(c) for c in _as_list(data, "colonies", where)]
                if colonies is not None
                else _default_colonies()
            ),
        )
