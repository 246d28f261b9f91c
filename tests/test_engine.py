"""Tests for the click state machine, seed selection and upgrades."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from farmstead.catalog.resources import Resource
from farmstead.catalog.seeds import SEEDS
from farmstead.catalog.upgrades import UpgradeFlag
from farmstead.simulation.config import GameConfig
from farmstead.simulation.engine import NO_ACTIONS_MESSAGE, RulesEngine
from farmstead.simulation.scheduler import DeferredScheduler
from farmstead.simulation.state import DayPhase, GameState
from farmstead.world.cell import CellType, PlotContent

if TYPE_CHECKING:
    from conftest import RecordingPresentation


class TestClearing:
    """Tests for clicking debris and coins."""

    def test_clear_weed_grants_one_seed(self, engine: RulesEngine) -> None:
        state = engine.state
        state.grid.set_type(0, 0, CellType.WEED)
        assert engine.handle_cell_click(0, 0)
        assert state.grid.get(0, 0).type is CellType.EMPTY
        assert sum(state.inventory.seeds.values()) == 1
        assert set(state.inventory.seeds) <= set(SEEDS)
        assert state.session.actions_left == 9

    def test_collect_wood_and_stone(self, engine: RulesEngine) -> None:
        state = engine.state
        state.grid.set_type(0, 0, CellType.WOOD)
        state.grid.set_type(1, 0, CellType.STONE)
        engine.handle_cell_click(0, 0)
        engine.handle_cell_click(1, 0)
        assert state.inventory.wood == 1
        assert state.inventory.stone == 1
        assert state.grid.count(CellType.EMPTY) == 25

    def test_collect_coin(self, engine: RulesEngine, presentation: RecordingPresentation) -> None:
        engine.state.grid.set_type(2, 2, CellType.COIN_SPAWN)
        assert engine.handle_cell_click(2, 2)
        assert engine.state.inventory.coins == 1
        assert presentation.last_message == "+1 Coin collected!"

    def test_click_notifies_ports(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        engine.state.grid.set_type(3, 4, CellType.STONE)
        engine.handle_cell_click(3, 4)
        assert presentation.rendered == [(3, 4, CellType.EMPTY)]
        assert presentation.refreshes == 1
        assert presentation.last_message == "+1 Stone collected."

    def test_out_of_bounds_click_is_noop(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        assert not engine.handle_cell_click(10, 10)
        assert engine.state.session.actions_left == 10
        assert presentation.rendered == []


class TestPlanting:
    """Tests for clicking empty soil."""

    def test_plant_wheat(self, engine: RulesEngine) -> None:
        state = engine.state
        state.economy.add_seed("WHEAT", 1)
        assert engine.select_seed("WHEAT")
        assert engine.handle_cell_click(1, 1)
        cell = state.grid.get(1, 1)
        assert cell.type is CellType.PLOT
        assert cell.content == PlotContent(seed_type="WHEAT", growth_stage=0, max_growth=3)
        assert state.inventory.seed_count("WHEAT") == 0
        assert state.session.selected_seed is None
        assert state.session.actions_left == 9

    def test_no_selection_spends_nothing(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        assert not engine.handle_cell_click(1, 1)
        assert engine.state.session.actions_left == 10
        assert engine.state.grid.get(1, 1).type is CellType.EMPTY
        assert presentation.last_message == "Select a seed from the inventory to plant."
        assert presentation.rendered == []

    def test_selected_but_none_held(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        engine.state.session.selected_seed = "PUMPKIN"
        assert not engine.handle_cell_click(1, 1)
        assert engine.state.session.actions_left == 10
        assert presentation.last_message == "Not enough Pumpkin seeds."

    def test_beehive_shortens_new_crops(self, engine: RulesEngine) -> None:
        state = engine.state
        state.upgrades.activate(UpgradeFlag.REDUCED_GROW_TIME)
        state.economy.add_seed("WHEAT", 2)
        engine.select_seed("WHEAT")
        engine.handle_cell_click(0, 0)
        assert state.grid.get(0, 0).content.max_growth == 2
        assert state.session.selected_seed == "WHEAT"


class TestHarvest:
    """Tests for clicking plots."""

    def _plant(self, engine: RulesEngine, seed: str = "WHEAT") -> None:
        engine.state.economy.add_seed(seed, 1)
        engine.select_seed(seed)
        engine.handle_cell_click(0, 0)

    def test_not_ready(self, engine: RulesEngine, presentation: RecordingPresentation) -> None:
        self._plant(engine)
        assert not engine.handle_cell_click(0, 0)
        assert engine.state.session.actions_left == 9
        assert presentation.last_message == "This plot isn't ready for harvest yet."

    def test_harvest_after_growing(self, engine: RulesEngine) -> None:
        self._plant(engine)
        for _ in range(3):
            engine.process_night()
        assert engine.handle_cell_click(0, 0)
        assert engine.state.inventory.coins == 3
        cell = engine.state.grid.get(0, 0)
        assert cell.type is CellType.EMPTY
        assert cell.content is None

    def test_overdue_stage_sets_yield(self, engine: RulesEngine) -> None:
        self._plant(engine)
        engine.state.grid.get(0, 0).content.growth_stage = 5
        engine.handle_cell_click(0, 0)
        assert engine.state.inventory.coins == 5

    def test_describe_cell(self, engine: RulesEngine) -> None:
        self._plant(engine)
        assert engine.describe_cell(0, 0) == "Wheat: growing 0/3"
        engine.state.grid.get(0, 0).content.growth_stage = 3
        assert engine.describe_cell(0, 0) == "Wheat: ready to harvest (3 coins)"
        assert engine.describe_cell(1, 0) == "Empty soil"
        assert engine.describe_cell(-1, 0) is None

    def test_fertilizer_boosts_harvest(self, engine: RulesEngine) -> None:
        self._plant(engine, "PUMPKIN")
        engine.state.upgrades.activate(UpgradeFlag.YIELD_BOOST)
        engine.state.grid.get(0, 0).content.growth_stage = 5
        engine.handle_cell_click(0, 0)
        # floor(5 * 1.2 * 1.2)
        assert engine.state.inventory.coins == 7


class TestSeedSelection:
    """Tests for select_seed and deselect_seed."""

    def test_select_missing_seed(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        engine.state.economy.add_seed("WHEAT", 1)
        engine.select_seed("WHEAT")
        assert not engine.select_seed("BERRY")
        assert engine.state.session.selected_seed is None
        assert presentation.last_message == "You don't have any Magic Berry seeds!"
        assert engine.state.session.actions_left == 10

    def test_select_unknown_seed_clears_selection(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        engine.state.economy.add_seed("WHEAT", 2)
        assert engine.select_seed("WHEAT")
        assert not engine.select_seed("CACTUS")
        assert engine.state.session.selected_seed is None
        assert presentation.last_message == "Unknown seed type."

    def test_deselect(self, engine: RulesEngine, presentation: RecordingPresentation) -> None:
        engine.state.economy.add_seed("WHEAT", 1)
        engine.select_seed("WHEAT")
        engine.deselect_seed()
        assert engine.state.session.selected_seed is None
        assert presentation.last_message == "Seed deselected."


class TestUpgrades:
    """Tests for buy_upgrade."""

    def test_buy_with_exact_resources(self, engine: RulesEngine) -> None:
        economy = engine.state.economy
        economy.add_resource(Resource.COINS, 8)
        economy.add_resource(Resource.WOOD, 5)
        assert engine.buy_upgrade("BEEHIVE")
        assert engine.state.inventory.coins == 0
        assert engine.state.inventory.wood == 0
        assert engine.state.upgrades.is_active(UpgradeFlag.REDUCED_GROW_TIME)
        assert engine.is_purchased("BEEHIVE")

    def test_second_purchase_rejected(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        economy = engine.state.economy
        economy.add_resource(Resource.COINS, 16)
        economy.add_resource(Resource.WOOD, 10)
        engine.buy_upgrade("BEEHIVE")
        assert not engine.buy_upgrade("BEEHIVE")
        assert presentation.last_message == "Upgrade already purchased."
        assert engine.state.inventory.coins == 8
        assert engine.state.inventory.wood == 5

    def test_unknown_upgrade(self, engine: RulesEngine, presentation: RecordingPresentation) -> None:
        assert not engine.buy_upgrade("TRACTOR")
        assert presentation.last_message == "Unknown upgrade selected."

    def test_insufficient_resources(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        engine.state.economy.add_resource(Resource.COINS, 100)
        assert not engine.buy_upgrade("FERTILIZER_BAG")
        assert presentation.last_message == "Not enough resources to buy this upgrade."
        assert engine.state.inventory.coins == 100
        assert not engine.state.upgrades.is_active(UpgradeFlag.YIELD_BOOST)

    def test_prerequisite_required(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        economy = engine.state.economy
        economy.add_resource(Resource.COINS, 30)
        economy.add_resource(Resource.WOOD, 8)
        economy.add_resource(Resource.STONE, 5)
        assert not engine.can_buy("RAINBOW_BLESSING")
        assert not engine.buy_upgrade("RAINBOW_BLESSING")
        assert presentation.last_message == "Requires Scarecrow first."
        assert engine.buy_upgrade("SCARECROW")
        assert engine.buy_upgrade("RAINBOW_BLESSING")
        assert engine.state.upgrades.is_active(UpgradeFlag.LUCK)


class TestDayCycle:
    """Tests for the action budget and day transitions."""

    def test_last_action_ends_day_once(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        state = engine.state
        for x in range(5):
            for y in range(2):
                state.grid.set_type(x, y, CellType.WOOD)
        for x in range(5):
            for y in range(2):
                engine.handle_cell_click(x, y)
        texts = presentation.texts()
        assert texts.count("Day ended. Processing night...") == 1
        assert texts.count("Day 2 has begun!") == 1
        assert state.session.day == 2
        assert state.session.actions_left == 10
        assert state.session.phase is DayPhase.ACTIVE
        assert state.inventory.wood == 10

    def test_night_message_is_persistent(
        self,
        engine: RulesEngine,
        presentation: RecordingPresentation,
    ) -> None:
        engine.end_day()
        assert ("Day ended. Processing night...", 0.0) in presentation.messages

    def test_clicks_ignored_while_night_pending(
        self,
        blank_state: GameState,
        presentation: RecordingPresentation,
    ) -> None:
        scheduler = DeferredScheduler()
        engine = RulesEngine(
            config=GameConfig(grid_size=5, night_delay=1.0, trash_spawn_chance=0.0),
            renderer=presentation,
            ui=presentation,
            scheduler=scheduler,
            state=blank_state,
        )
        blank_state.grid.set_type(0, 0, CellType.WOOD)
        assert engine.end_day()
        assert blank_state.session.is_night

        # Restoring actions mid-night must not reopen the farm
        blank_state.session.actions_left = 5
        assert not engine.handle_cell_click(0, 0)
        assert presentation.last_message == NO_ACTIONS_MESSAGE
        assert not engine.end_day()

        scheduler.advance(0.5)
        assert blank_state.session.day == 1
        scheduler.advance(0.5)
        assert blank_state.session.day == 2
        assert blank_state.session.actions_left == blank_state.session.actions_per_day
        assert engine.handle_cell_click(0, 0)

    def test_inventory_never_negative(
        self,
        default_config: GameConfig,
        presentation: RecordingPresentation,
    ) -> None:
        engine = RulesEngine(config=default_config, renderer=presentation, ui=presentation)
        clicks = np.random.default_rng(99)
        seeds = list(SEEDS)
        for step in range(500):
            if step % 7 == 0:
                engine.select_seed(seeds[step % len(seeds)])
            if step % 50 == 0:
                engine.buy_upgrade("BEEHIVE")
            x, y = (int(v) for v in clicks.integers(0, default_config.grid_size, size=2))
            engine.handle_cell_click(x, y)
            inv = engine.state.inventory
            assert min(inv.coins, inv.wood, inv.stone) >= 0
            assert all(count > 0 for count in inv.seeds.values())
            for cell in engine.state.grid:
                assert (cell.content is not None) == (cell.type is CellType.PLOT)
