"""RulesEngine — click handling and the day/night cycle.

Owns the game state and is the only thing that mutates it.  Two kinds of
event drive it:

1. Player input: cell clicks, seed selection, upgrade purchases and
   ending the day early.
2. Dawn: the scheduled callback that runs the nightly pass once the
   day-end delay has elapsed.

After every change the engine calls the injected presentation ports;
it never looks them up globally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from farmstead.catalog.derive import roll_trash_type
from farmstead.catalog.resources import Resource
from farmstead.catalog.seeds import SEEDS, random_seed_type, seed_name
from farmstead.catalog.upgrades import UPGRADES, SetFlag, UpgradeDefinition, UpgradeFlag
from farmstead.simulation.config import GameConfig
from farmstead.simulation.ports import RenderPort, UIPort
from farmstead.simulation.scheduler import ImmediateScheduler, Scheduler
from farmstead.simulation.state import GameState
from farmstead.world.cell import Cell, CellType, InvariantError

logger = logging.getLogger(__name__)

# Message duration hints, in seconds (0 keeps the message until replaced)
_MESSAGE_DURATION = 3.0
_LONG_MESSAGE_DURATION = 4.0
_PERSISTENT = 0.0

NO_ACTIONS_MESSAGE = "No actions left today. Wait for tomorrow!"


@dataclass
class NightReport:
    """What changed during one nightly pass.

    Attributes:
        grown: Plots that advanced a growth stage.
        spawned_trash: Empty cells that filled with debris.
        spawned_coins: Empty cells that sprouted a coin.
    """

    grown: int = 0
    spawned_trash: int = 0
    spawned_coins: int = 0


@dataclass
class RulesEngine:
    """Applies the game rules to a GameState.

    Attributes:
        config: Loaded game configuration.
        renderer: Port notified whenever a cell changes.
        ui: Port notified with state refreshes and messages.
        scheduler: Runs the dawn callback after the night delay.
        state: Game being played; a fresh one is built from config if omitted.
        rng: Master seeded random generator.
    """

    config: GameConfig
    renderer: RenderPort
    ui: UIPort
    scheduler: Scheduler = field(default_factory=ImmediateScheduler)
    state: GameState | None = None
    rng: Generator = field(init=False)
    _handlers: dict[CellType, Callable[[Cell], tuple[bool, str]]] = field(
        init=False,
        repr=False,
    )

    def __post_init__(self) -> None:
        """Seed the RNG, build the game if needed and the click dispatch."""
        self.rng = np.random.default_rng(self.config.seed)
        if self.state is None:
            self.state = GameState.new_game(self.config, self.rng)
        self._handlers = {
            CellType.WEED: self._clear_weed,
            CellType.WOOD: self._collect_wood,
            CellType.STONE: self._collect_stone,
            CellType.EMPTY: self._plant,
            CellType.PLOT: self._harvest,
            CellType.COIN_SPAWN: self._collect_coin,
        }

    # -- Lifecycle --------------------------------------------------------

    def start(self) -> None:
        """Draw the whole farm and greet the player."""
        for cell in self.state.grid:
            self.renderer.render_cell(cell)
        self.ui.refresh(self.state)
        self.ui.notify("Farm away! Click tiles to interact.", 5.0)
        logger.info(
            "New game: %dx%d farm, %d actions per day",
            self.state.grid.size,
            self.state.grid.size,
            self.state.session.actions_per_day,
        )

    # -- Clicks -----------------------------------------------------------

    def handle_cell_click(self, x: int, y: int) -> bool:
        """Apply a click on cell ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if the click consumed an action.
        """
        session = self.state.session
        if session.is_night or session.actions_left <= 0:
            self.ui.notify(NO_ACTIONS_MESSAGE, _LONG_MESSAGE_DURATION)
            return False

        cell = self.state.grid.get(x, y)
        if cell is None:
            return False

        handler = self._handlers.get(cell.type)
        if handler is None:
            self.ui.notify("Nothing to do here.", _LONG_MESSAGE_DURATION)
            return False

        consumed, message = handler(cell)
        if not consumed:
            self.ui.notify(message, _LONG_MESSAGE_DURATION)
            return False

        session.spend_action()
        logger.debug("Action at (%d, %d): %s", x, y, message)
        self.renderer.render_cell(cell)
        self.ui.refresh(self.state)
        self.ui.notify(message, _MESSAGE_DURATION)

        if session.actions_left == 0:
            self.end_day()
        return True

    def _clear_weed(self, cell: Cell) -> tuple[bool, str]:
        seed_type = random_seed_type(self.rng)
        self.state.economy.add_seed(seed_type, 1)
        self.state.grid.set_type(cell.x, cell.y, CellType.EMPTY)
        return True, f"Cleared weeds, found a {seed_name(seed_type)} seed!"

    def _collect_wood(self, cell: Cell) -> tuple[bool, str]:
        return self._collect(cell, Resource.WOOD), "+1 Wood collected."

    def _collect_stone(self, cell: Cell) -> tuple[bool, str]:
        return self._collect(cell, Resource.STONE), "+1 Stone collected."

    def _collect_coin(self, cell: Cell) -> tuple[bool, str]:
        return self._collect(cell, Resource.COINS), "+1 Coin collected!"

    def _collect(self, cell: Cell, resource: Resource) -> bool:
        self.state.economy.add_resource(resource, 1)
        self.state.grid.set_type(cell.x, cell.y, CellType.EMPTY)
        return True

    def _plant(self, cell: Cell) -> tuple[bool, str]:
        seed_type = self.state.session.selected_seed
        if seed_type is None:
            return False, "Select a seed from the inventory to plant."

        economy = self.state.economy
        if not economy.remove_seed(seed_type, 1):
            return False, f"Not enough {seed_name(seed_type)} seeds."

        grid = self.state.grid
        grid.set_type(cell.x, cell.y, CellType.PLOT)
        grid.set_plot_content(
            cell.x,
            cell.y,
            seed_type,
            economy.effective_grow_time(seed_type),
        )
        return True, f"Planted {seed_name(seed_type)}!"

    def _harvest(self, cell: Cell) -> tuple[bool, str]:
        grid = self.state.grid
        if not grid.is_fully_grown(cell.x, cell.y):
            return False, "This plot isn't ready for harvest yet."

        content = cell.content
        if content is None:
            msg = f"plot ({cell.x}, {cell.y}) is ready for harvest but has no crop"
            raise InvariantError(msg)

        economy = self.state.economy
        amount = economy.effective_yield(content.seed_type, content.growth_stage)
        economy.add_resource(Resource.COINS, amount)
        grid.set_type(cell.x, cell.y, CellType.EMPTY)
        return True, f"Harvested {seed_name(content.seed_type)}! +{amount} Coins."

    # -- Seeds ------------------------------------------------------------

    def select_seed(self, seed_type: str) -> bool:
        """Arm ``seed_type`` for planting.

        Returns:
            True if the seed is held and is now selected.  On failure any
            previous selection is cleared.
        """
        if seed_type not in SEEDS:
            self.state.economy.deselect_seed()
            self.ui.refresh(self.state)
            self.ui.notify("Unknown seed type.", _MESSAGE_DURATION)
            return False
        name = seed_name(seed_type)
        selected = self.state.economy.select_seed(seed_type)
        self.ui.refresh(self.state)
        if selected:
            self.ui.notify(f"{name} selected. Click an empty tile to plant.", _MESSAGE_DURATION)
        else:
            self.ui.notify(f"You don't have any {name} seeds!", _MESSAGE_DURATION)
        return selected

    def deselect_seed(self) -> None:
        """Clear the seed selection."""
        self.state.economy.deselect_seed()
        self.ui.refresh(self.state)
        self.ui.notify("Seed deselected.", 2.0)

    # -- Upgrades ---------------------------------------------------------

    def is_purchased(self, upgrade_id: str) -> bool:
        """Return True if the upgrade's effect is already in place."""
        upgrade = UPGRADES.get(upgrade_id)
        if upgrade is None:
            return False
        return self.state.upgrades.is_active(upgrade.effect.flag)

    def can_buy(self, upgrade_id: str) -> bool:
        """True if the upgrade is known, unowned, unlocked and affordable."""
        upgrade = UPGRADES.get(upgrade_id)
        return (
            upgrade is not None
            and not self.is_purchased(upgrade_id)
            and not self._missing_requirements(upgrade)
            and self.state.economy.can_afford(upgrade.cost)
        )

    def buy_upgrade(self, upgrade_id: str) -> bool:
        """Purchase an upgrade and apply its effect.

        Args:
            upgrade_id: Catalog key of the upgrade.

        Returns:
            True if the upgrade was bought.
        """
        upgrade = UPGRADES.get(upgrade_id)
        if upgrade is None:
            self.ui.notify("Unknown upgrade selected.", _MESSAGE_DURATION)
            return False

        if self.is_purchased(upgrade_id):
            self.ui.notify("Upgrade already purchased.", _MESSAGE_DURATION)
            return False

        missing = self._missing_requirements(upgrade)
        if missing:
            names = ", ".join(UPGRADES[m].name for m in missing)
            self.ui.notify(f"Requires {names} first.", _MESSAGE_DURATION)
            return False

        if not self.state.economy.spend_cost(upgrade.cost):
            self.ui.notify("Not enough resources to buy this upgrade.", _MESSAGE_DURATION)
            return False

        self._apply_effect(upgrade)
        logger.info("Purchased %s for %s", upgrade.name, upgrade.cost_label())
        self.ui.notify(f"Purchased {upgrade.name}!", _LONG_MESSAGE_DURATION)
        self.ui.refresh(self.state)
        return True

    def _missing_requirements(self, upgrade: UpgradeDefinition) -> list[str]:
        return [req for req in upgrade.requires if not self.is_purchased(req)]

    def _apply_effect(self, upgrade: UpgradeDefinition) -> None:
        effect = upgrade.effect
        if not isinstance(effect, SetFlag):
            msg = f"unsupported effect {effect!r} on upgrade {upgrade.id}"
            raise InvariantError(msg)
        self.state.upgrades.activate(effect.flag)

    # -- Day / night ------------------------------------------------------

    def end_day(self) -> bool:
        """Close the day and schedule the nightly pass.

        Returns:
            True if a night was scheduled, False if one is already pending.
        """
        session = self.state.session
        if session.is_night:
            return False

        session.begin_night()
        logger.info("Day %d ended", session.day)
        self.ui.refresh(self.state)
        self.ui.notify("Day ended. Processing night...", _PERSISTENT)
        self.scheduler.schedule(self.config.night_delay, self._dawn)
        return True

    def _dawn(self) -> None:
        report = self.process_night()
        session = self.state.session
        session.begin_day()
        logger.info(
            "Day %d begins: %d plots grew, %d trash and %d coins spawned",
            session.day,
            report.grown,
            report.spawned_trash,
            report.spawned_coins,
        )
        self.ui.refresh(self.state)
        self.ui.notify(f"Day {session.day} has begun!", _MESSAGE_DURATION)

    def process_night(self) -> NightReport:
        """Run the overnight simulation over every cell once.

        Plots grow one stage toward their cap.  Empty cells may sprout a
        coin (with the luck upgrade) or, failing that, fill with debris;
        never both in the same night.  Other cells are left alone.

        Returns:
            Counts of what changed.

        Raises:
            InvariantError: If a plot without a crop is encountered.
        """
        grid = self.state.grid
        economy = self.state.economy
        trash_chance = economy.effective_trash_spawn_chance(self.config.trash_spawn_chance)
        lucky = self.state.upgrades.is_active(UpgradeFlag.LUCK)
        report = NightReport()

        for cell in grid:
            if cell.type is CellType.PLOT:
                if cell.content is None:
                    msg = f"plot ({cell.x}, {cell.y}) has no crop during the nightly pass"
                    raise InvariantError(msg)
                if grid.increment_growth(cell.x, cell.y):
                    report.grown += 1
                    self.renderer.render_cell(cell)
            elif cell.type is CellType.EMPTY:
                spawned = self._spawn_on_empty(cell, lucky, trash_chance)
                if spawned is CellType.COIN_SPAWN:
                    report.spawned_coins += 1
                elif spawned is not None:
                    report.spawned_trash += 1
                if spawned is not None:
                    self.renderer.render_cell(cell)

        self.refresh_grown_visuals()
        return report

    def _spawn_on_empty(self, cell: Cell, lucky: bool, trash_chance: float) -> CellType | None:
        if lucky and self.rng.random() < self.config.coin_spawn_chance:
            spawned = CellType.COIN_SPAWN
        elif self.rng.random() < trash_chance:
            spawned = roll_trash_type(float(self.rng.random()))
        else:
            return None
        self.state.grid.set_type(cell.x, cell.y, spawned)
        return spawned

    def refresh_grown_visuals(self) -> None:
        """Re-render every harvest-ready plot so its ready cue shows."""
        for cell in self.state.grid.fully_grown_cells():
            self.renderer.render_cell(cell)

    # -- Queries ----------------------------------------------------------

    def describe_cell(self, x: int, y: int) -> str | None:
        """Hover text for the cell at ``(x, y)``, or None off the grid."""
        cell = self.state.grid.get(x, y)
        if cell is None:
            return None
        if cell.type is CellType.PLOT and cell.content is not None:
            content = cell.content
            name = seed_name(content.seed_type)
            if content.is_ready:
                coins = self.state.economy.effective_yield(content.seed_type, content.growth_stage)
                return f"{name}: ready to harvest ({coins} coins)"
            return f"{name}: growing {content.growth_stage}/{content.max_growth}"
        labels = {
            CellType.EMPTY: "Empty soil",
            CellType.WEED: "Weeds: clear for a random seed",
            CellType.WOOD: "Wood: collect for +1 wood",
            CellType.STONE: "Stone: collect for +1 stone",
            CellType.COIN_SPAWN: "Coin: collect for +1 coin",
        }
        return labels.get(cell.type, cell.type.value)
