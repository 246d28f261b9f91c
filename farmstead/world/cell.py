"""Cell — a single tile in the farm grid.

A cell is either bare ground, a piece of debris, a spawned coin, or a
tilled plot.  Only plots carry ``content``; every other type keeps it
``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvariantError(AssertionError):
    """Raised when internal game state breaks one of its invariants.

    This signals a programming defect, never a player mistake.
    """


class CellType(Enum):
    """What currently occupies a cell."""

    EMPTY = "empty"
    WEED = "weed"
    WOOD = "wood"
    STONE = "stone"
    PLOT = "plot"
    COIN_SPAWN = "coin_spawn"


TRASH_TYPES: frozenset[CellType] = frozenset(
    {CellType.WEED, CellType.WOOD, CellType.STONE},
)


@dataclass
class PlotContent:
    """A crop growing on a plot.

    Attributes:
        seed_type: Catalog key of the planted seed.
        growth_stage: Nights of growth received so far.
        max_growth: Stage at which the crop is ready to harvest.
    """

    seed_type: str
    growth_stage: int = 0
    max_growth: int = 2

    @property
    def is_ready(self) -> bool:
        """True once the crop has reached its growth cap."""
        return self.growth_stage >= self.max_growth


@dataclass
class Cell:
    """A single tile in the farm grid.

    Attributes:
        x: Column position.
        y: Row position.
        type: Current occupant of the tile.
        content: Crop state, present only when ``type`` is PLOT.
    """

    x: int
    y: int
    type: CellType = CellType.EMPTY
    content: PlotContent | None = None

    @property
    def is_trash(self) -> bool:
        """True for clearable debris (weed, wood, stone)."""
        return self.type in TRASH_TYPES
