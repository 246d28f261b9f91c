"""Seeds — static catalog of plantable crop types.

Each seed type defines how many nights it needs to mature, how its
harvest scales with growth, and the colour used to draw it.  Seed types
are referenced everywhere else by their catalog key (``"WHEAT"``...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator


@dataclass(frozen=True)
class SeedType:
    """A plantable crop definition.

    Attributes:
        key: Catalog key used in inventories and plot content.
        name: Human-readable display name.
        grow_time: Base number of nights until fully grown.
        yield_multiplier: Coins earned per growth stage at harvest.
        color: RGB display colour.
    """

    key: str
    name: str
    grow_time: int
    yield_multiplier: float
    color: tuple[int, int, int]


SEEDS: dict[str, SeedType] = {
    "WHEAT": SeedType(
        key="WHEAT",
        name="Wheat",
        grow_time=3,
        yield_multiplier=1.0,
        color=(255, 255, 0),
    ),
    "PUMPKIN": SeedType(
        key="PUMPKIN",
        name="Pumpkin",
        grow_time=5,
        yield_multiplier=1.2,
        color=(255, 165, 0),
    ),
    "BERRY": SeedType(
        key="BERRY",
        name="Magic Berry",
        grow_time=7,
        yield_multiplier=1.5,
        color=(138, 43, 226),
    ),
}


def get_seed(key: str) -> SeedType | None:
    """Return the seed definition for ``key`` or None if unknown."""
    return SEEDS.get(key)


def seed_name(key: str | None) -> str:
    """Display name for a seed key, tolerating unknown or missing keys."""
    seed = SEEDS.get(key) if key is not None else None
    return seed.name if seed is not None else "Unknown"


def random_seed_type(rng: Generator) -> str:
    """Pick a seed key uniformly at random.

    Used as the reward for clearing a weed.

    Args:
        rng: Seeded random generator.

    Returns:
        One of the keys of ``SEEDS``.
    """
    keys = list(SEEDS)
    return keys[int(rng.integers(0, len(keys)))]
