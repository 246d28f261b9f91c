"""GameState — the single aggregate the rules engine mutates.

Bundles the grid, the player's holdings, purchased upgrades and the
current day session.  Only ``RulesEngine`` writes to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from farmstead.economy.economy import Economy
from farmstead.economy.inventory import Inventory, Upgrades
from farmstead.world.grid import Grid

if TYPE_CHECKING:
    from numpy.random import Generator

    from farmstead.simulation.config import GameConfig


class DayPhase(Enum):
    """Where the day/night cycle currently stands."""

    ACTIVE = auto()
    NIGHT_PENDING = auto()


@dataclass
class DaySession:
    """Per-day bookkeeping.

    Attributes:
        actions_per_day: Cap that ``actions_left`` resets to each morning.
        day: Current day number, starting at 1.
        actions_left: Clicks remaining today.
        selected_seed: Seed key armed for planting, if any.
        phase: ACTIVE during the day, NIGHT_PENDING between day end and dawn.
    """

    actions_per_day: int = 10
    day: int = 1
    actions_left: int = -1
    selected_seed: str | None = None
    phase: DayPhase = DayPhase.ACTIVE

    def __post_init__(self) -> None:
        """Start the session with a full action budget."""
        if self.actions_left < 0:
            self.actions_left = self.actions_per_day

    @property
    def is_night(self) -> bool:
        """True while the nightly pass is scheduled but has not run."""
        return self.phase is DayPhase.NIGHT_PENDING

    def spend_action(self) -> bool:
        """Use up one action if any remain."""
        if self.actions_left <= 0:
            return False
        self.actions_left -= 1
        return True

    def begin_night(self) -> None:
        """Close the day: no actions remain until dawn."""
        self.actions_left = 0
        self.phase = DayPhase.NIGHT_PENDING

    def begin_day(self) -> None:
        """Advance to the next morning with a fresh action budget."""
        self.day += 1
        self.actions_left = self.actions_per_day
        self.phase = DayPhase.ACTIVE


@dataclass
class GameState:
    """Everything that makes up a running game.

    Attributes:
        grid: The farm.
        inventory: Coins, materials and seeds.
        upgrades: Purchased upgrade flags.
        session: Day counter, action budget and seed selection.
        economy: Accounting facade over inventory, upgrades and session.
    """

    grid: Grid
    inventory: Inventory = field(default_factory=Inventory)
    upgrades: Upgrades = field(default_factory=Upgrades)
    session: DaySession = field(default_factory=DaySession)
    economy: Economy = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Wire the economy to the holdings owned by this state."""
        self.economy = Economy(
            inventory=self.inventory,
            upgrades=self.upgrades,
            session=self.session,
        )

    @classmethod
    def new_game(cls, config: GameConfig, rng: Generator) -> GameState:
        """Build a fresh game with a debris-strewn grid.

        Args:
            config: Tunables for grid size, budget and starting coins.
            rng: Seeded random generator.

        Returns:
            A GameState on day 1 with a full action budget.
        """
        grid = Grid(size=config.grid_size)
        grid.populate(rng, trash_density=config.initial_trash_density)
        return cls(
            grid=grid,
            inventory=Inventory(coins=config.starting_coins),
            session=DaySession(actions_per_day=config.actions_per_day),
        )
