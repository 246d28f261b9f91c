"""Resources — the stockpiled currencies of the farm."""

from __future__ import annotations

from enum import Enum


class Resource(Enum):
    """Countable inventory resources, valued by their display label."""

    COINS = "coins"
    WOOD = "wood"
    STONE = "stone"
