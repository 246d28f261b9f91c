"""Derived values — catalog data combined with purchased upgrades.

All functions here are pure: they read the catalog and an ``Upgrades``
snapshot and never mutate either.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from farmstead.catalog.seeds import SEEDS
from farmstead.catalog.upgrades import UpgradeFlag
from farmstead.world.cell import CellType

if TYPE_CHECKING:
    from farmstead.economy.inventory import Upgrades

MIN_GROW_TIME = 2
YIELD_BOOST_FACTOR = 1.20
DEFAULT_GROW_TIME = 3

# Cumulative partition of one uniform draw into debris types
_TRASH_PARTITION: tuple[tuple[float, CellType], ...] = (
    (0.4, CellType.WEED),
    (0.7, CellType.WOOD),
)


def effective_grow_time(seed_type: str, upgrades: Upgrades) -> int:
    """Nights a freshly planted seed needs before it can be harvested.

    The beehive upgrade shaves one night off, but never below
    ``MIN_GROW_TIME``.

    Args:
        seed_type: Catalog key of the seed.
        upgrades: Purchased upgrade flags.

    Returns:
        Grow time in nights, always at least ``MIN_GROW_TIME``.
    """
    seed = SEEDS.get(seed_type)
    base = seed.grow_time if seed is not None else DEFAULT_GROW_TIME
    if upgrades.is_active(UpgradeFlag.REDUCED_GROW_TIME):
        base -= 1
    return max(MIN_GROW_TIME, base)


def effective_yield(seed_type: str, growth_stage: int, upgrades: Upgrades) -> int:
    """Coins earned by harvesting a crop at ``growth_stage``.

    Yield scales with the actual stage, so an overdue crop pays out
    more than one harvested the morning it matured.

    Args:
        seed_type: Catalog key of the harvested seed.
        growth_stage: Growth stage at harvest time.
        upgrades: Purchased upgrade flags.

    Returns:
        Whole coins, rounded down.  Unknown seeds yield nothing.
    """
    seed = SEEDS.get(seed_type)
    if seed is None:
        return 0
    amount = growth_stage * seed.yield_multiplier
    if upgrades.is_active(UpgradeFlag.YIELD_BOOST):
        amount *= YIELD_BOOST_FACTOR
    # Absorb float noise such as 5.9999999 before flooring
    return math.floor(round(amount, 9))


def effective_trash_spawn_chance(upgrades: Upgrades, base_chance: float) -> float:
    """Per-night probability that an empty cell fills with debris."""
    if upgrades.is_active(UpgradeFlag.TRASH_REDUCTION):
        return base_chance / 2
    return base_chance


def roll_trash_type(draw: float) -> CellType:
    """Map a uniform draw in ``[0, 1)`` to a debris type.

    Weed below 0.4, wood below 0.7, stone otherwise.
    """
    for threshold, cell_type in _TRASH_PARTITION:
        if draw < threshold:
            return cell_type
    return CellType.STONE
