"""Upgrades — purchasable, permanent modifiers.

Upgrade definitions are pure data: a cost, a list of prerequisite
upgrades and an effect description.  The rules engine interprets the
effect; nothing here mutates game state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from farmstead.catalog.resources import Resource


class UpgradeFlag(Enum):
    """Boolean modifiers consulted by the derived-value formulas."""

    REDUCED_GROW_TIME = "reduced_grow_time"
    YIELD_BOOST = "yield_boost"
    TRASH_REDUCTION = "trash_reduction"
    LUCK = "luck"


@dataclass(frozen=True)
class SetFlag:
    """Upgrade effect that switches a single flag on."""

    flag: UpgradeFlag


@dataclass(frozen=True)
class UpgradeDefinition:
    """A purchasable upgrade.

    Attributes:
        id: Catalog key.
        name: Display name.
        description: One-line effect summary shown in the shop.
        cost: Resources debited on purchase.
        effect: What the upgrade does once bought.
        requires: Ids of upgrades that must already be owned.
    """

    id: str
    name: str
    description: str
    cost: dict[Resource, int]
    effect: SetFlag
    requires: tuple[str, ...] = field(default_factory=tuple)

    def cost_label(self) -> str:
        """Render the cost as ``"8 coins, 5 wood"``."""
        return ", ".join(f"{amount} {res.value}" for res, amount in self.cost.items())


UPGRADES: dict[str, UpgradeDefinition] = {
    "BEEHIVE": UpgradeDefinition(
        id="BEEHIVE",
        name="Beehive",
        description="Reduces grow time by 1 day (min 2).",
        cost={Resource.COINS: 8, Resource.WOOD: 5},
        effect=SetFlag(UpgradeFlag.REDUCED_GROW_TIME),
    ),
    "FERTILIZER_BAG": UpgradeDefinition(
        id="FERTILIZER_BAG",
        name="Fertilizer Bag",
        description="Increases harvest yield by 20%.",
        cost={Resource.COINS: 15, Resource.STONE: 3},
        effect=SetFlag(UpgradeFlag.YIELD_BOOST),
    ),
    "SCARECROW": UpgradeDefinition(
        id="SCARECROW",
        name="Scarecrow",
        description="Halves the chance of trash spawning on empty tiles.",
        cost={Resource.COINS: 10, Resource.WOOD: 8},
        effect=SetFlag(UpgradeFlag.TRASH_REDUCTION),
    ),
    "RAINBOW_BLESSING": UpgradeDefinition(
        id="RAINBOW_BLESSING",
        name="Rainbow Blessing",
        description="Empty tiles may sprout a coin overnight.",
        cost={Resource.COINS: 20, Resource.STONE: 5},
        effect=SetFlag(UpgradeFlag.LUCK),
        requires=("SCARECROW",),
    ),
}
