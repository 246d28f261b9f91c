"""Economy — accounting rules over the player's holdings.

Every debit is all-or-nothing: a request the inventory cannot cover
returns False and leaves every balance untouched.  Derived values
(grow time, yield, trash chance) combine catalog data with the live
upgrade state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from farmstead.catalog import derive
from farmstead.catalog.seeds import SEEDS

if TYPE_CHECKING:
    from farmstead.catalog.resources import Resource
    from farmstead.economy.inventory import Inventory, Upgrades
    from farmstead.simulation.state import DaySession

logger = logging.getLogger(__name__)


@dataclass
class Economy:
    """Inventory, upgrade and seed-selection operations.

    Attributes:
        inventory: Balances being managed.
        upgrades: Purchased upgrade flags.
        session: Day session holding the selected seed.
    """

    inventory: Inventory
    upgrades: Upgrades
    session: DaySession

    # -- Resources --------------------------------------------------------

    def add_resource(self, kind: Resource, amount: int) -> bool:
        """Credit ``amount`` of ``kind``; negative amounts are rejected."""
        if amount < 0:
            logger.warning("Refusing to add negative amount %d of %s", amount, kind.value)
            return False
        self.inventory.credit(kind, amount)
        return True

    def remove_resource(self, kind: Resource, amount: int) -> bool:
        """Debit ``amount`` of ``kind`` if the balance covers it."""
        if amount < 0:
            logger.warning("Refusing to remove negative amount %d of %s", amount, kind.value)
            return False
        return self.inventory.debit(kind, amount)

    # -- Seeds ------------------------------------------------------------

    def seed_count(self, seed_type: str) -> int:
        """Seeds of ``seed_type`` on hand."""
        return self.inventory.seed_count(seed_type)

    def add_seed(self, seed_type: str, amount: int = 1) -> bool:
        """Add seeds of a known catalog type."""
        if seed_type not in SEEDS:
            logger.warning("Tried to add unknown seed type: %s", seed_type)
            return False
        if amount < 0:
            logger.warning("Refusing to add negative seed amount %d", amount)
            return False
        if amount:
            self.inventory.seeds[seed_type] = self.seed_count(seed_type) + amount
        return True

    def remove_seed(self, seed_type: str, amount: int = 1) -> bool:
        """Remove seeds, deselecting the type if its last seed is used.

        Args:
            seed_type: Catalog key.
            amount: Number of seeds to take.

        Returns:
            True if the seeds were removed, False if too few are held.
        """
        if amount == 0:
            return True
        held = self.seed_count(seed_type)
        if amount < 0 or held < amount:
            return False
        remaining = held - amount
        if remaining:
            self.inventory.seeds[seed_type] = remaining
            return True
        self.inventory.seeds.pop(seed_type, None)
        if self.session.selected_seed == seed_type:
            self.session.selected_seed = None
        return True

    def select_seed(self, seed_type: str) -> bool:
        """Arm ``seed_type`` for planting.

        Selecting a seed the player does not hold clears any current
        selection and returns False.
        """
        if self.seed_count(seed_type) > 0:
            self.session.selected_seed = seed_type
            return True
        self.session.selected_seed = None
        return False

    def deselect_seed(self) -> None:
        """Clear the current seed selection."""
        self.session.selected_seed = None

    # -- Costs ------------------------------------------------------------

    def can_afford(self, cost: dict[Resource, int]) -> bool:
        """Return True if every line of ``cost`` is covered."""
        return all(self.inventory.amount(res) >= amount for res, amount in cost.items())

    def spend_cost(self, cost: dict[Resource, int]) -> bool:
        """Debit every resource in ``cost``, or none of them."""
        if any(amount < 0 for amount in cost.values()) or not self.can_afford(cost):
            return False
        for res, amount in cost.items():
            self.inventory.debit(res, amount)
        return True

    # -- Derived values ---------------------------------------------------

    def effective_grow_time(self, seed_type: str) -> int:
        """Grow time for ``seed_type`` under the current upgrades."""
        return derive.effective_grow_time(seed_type, self.upgrades)

    def effective_yield(self, seed_type: str, growth_stage: int) -> int:
        """Harvest yield for a crop at ``growth_stage``."""
        return derive.effective_yield(seed_type, growth_stage, self.upgrades)

    def effective_trash_spawn_chance(self, base_chance: float) -> float:
        """Nightly debris chance for an empty cell."""
        return derive.effective_trash_spawn_chance(self.upgrades, base_chance)
