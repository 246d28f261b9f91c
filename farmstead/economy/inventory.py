"""Inventory and Upgrades — the player's holdings.

Quantities never go negative: every debit is checked first and a short
balance rejects the whole operation instead of clamping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from farmstead.catalog.resources import Resource
from farmstead.catalog.upgrades import UpgradeFlag

logger = logging.getLogger(__name__)


@dataclass
class Inventory:
    """Resources and seeds held by the player.

    Attributes:
        coins: Spendable currency.
        wood: Collected wood.
        stone: Collected stone.
        seeds: Seed counts keyed by catalog key; absent means zero.
    """

    coins: int = 0
    wood: int = 0
    stone: int = 0
    seeds: dict[str, int] = field(default_factory=dict)

    def amount(self, resource: Resource) -> int:
        """Current balance of ``resource``."""
        return getattr(self, resource.value)

    def credit(self, resource: Resource, amount: int) -> None:
        """Add ``amount`` of ``resource``.  Callers validate the amount."""
        setattr(self, resource.value, self.amount(resource) + amount)

    def debit(self, resource: Resource, amount: int) -> bool:
        """Subtract ``amount`` of ``resource`` if the balance covers it."""
        balance = self.amount(resource)
        if amount < 0 or balance < amount:
            return False
        setattr(self, resource.value, balance - amount)
        return True

    def seed_count(self, seed_type: str) -> int:
        """Seeds of ``seed_type`` on hand."""
        return self.seeds.get(seed_type, 0)

    def snapshot(self) -> dict[str, int]:
        """Flat copy of every balance, for display and logging."""
        data = {res.value: self.amount(res) for res in Resource}
        data.update({f"seed:{key}": count for key, count in sorted(self.seeds.items())})
        return data


@dataclass
class Upgrades:
    """Set of active upgrade flags.

    Flags only ever switch on; there is no way to lose an upgrade within
    a session.
    """

    active: set[UpgradeFlag] = field(default_factory=set)

    def is_active(self, flag: UpgradeFlag) -> bool:
        """Return True if ``flag`` has been purchased."""
        return flag in self.active

    def activate(self, flag: UpgradeFlag) -> None:
        """Switch ``flag`` on."""
        if flag not in self.active:
            logger.info("Upgrade flag %s activated", flag.value)
        self.active.add(flag)
