"""Traits — immutable numeric modifiers shared by a category of entity.

A fixed set of traits is rolled once when the world is built.  Colonies
and entities reference one of them; none of them own it.  Only the
bonuses are data here: the tick logic does not read ``harvest_bonus``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from meadow.errors import SetupError

if TYPE_CHECKING:
    from numpy.random import Generator

# 38 % 6 + 10: the roll-number formula the trait count was first defined by
DEFAULT_TRAIT_COUNT = 12
DEFAULT_BONUS_RANGE = (5, 10)


@dataclass(frozen=True)
class Trait:
    """Species-level modifier set.

    Attributes:
        trait_id: Unique name, e.g. ``"Species0"``.
        strength_bonus: Strength modifier (>= 0).
        efficiency_bonus: Efficiency modifier (>= 0).
        harvest_bonus: Harvest modifier (>= 0).  Inert in the engine.
    """

    trait_id: str
    strength_bonus: int = 0
    efficiency_bonus: int = 0
    harvest_bonus: int = 0

    def __post_init__(self) -> None:
        """Reject negative bonuses."""
        for name in ("strength_bonus", "efficiency_bonus", "harvest_bonus"):
            if getattr(self, name) < 0:
                msg = f"{self.trait_id}: {name} must be non-negative"
                raise SetupError(msg)


def generate_traits(
    rng: Generator,
    count: int = DEFAULT_TRAIT_COUNT,
    bonus_range: tuple[int, int] = DEFAULT_BONUS_RANGE,
) -> list[Trait]:
    """Roll a fixed-size list of traits with bounded random bonuses.

    Args:
        rng: Seeded random generator; the same seed yields the same list.
        count: Number of traits to produce.
        bonus_range: ``(low, high)`` bounds, ``high`` exclusive.

    Returns:
        Traits named ``Species0`` .. ``Species{count - 1}``.

    Raises:
        SetupError: If ``count`` is negative or the range is empty or
            reaches below zero.
    """
    lo, hi = bonus_range
    if count < 0:
        msg = f"trait count must be non-negative, got {count}"
        raise SetupError(msg)
    if lo < 0 or hi <= lo:
        msg = f"invalid bonus range [{lo}, {hi})"
        raise SetupError(msg)

    traits: list[Trait] = []
    for i in range(count):
        strength, efficiency, harvest = (int(v) for v in rng.integers(lo, hi, size=3))
        traits.append(
            Trait(
                trait_id=f"Species{i}",
                strength_bonus=strength,
                efficiency_bonus=efficiency,
                harvest_bonus=harvest,
            ),
        )
    return traits
