"""Shared fixtures for the Farmstead test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pytest
from numpy.random import Generator

from farmstead.simulation.config import GameConfig
from farmstead.simulation.engine import RulesEngine
from farmstead.simulation.state import DaySession, GameState
from farmstead.world.cell import Cell, CellType
from farmstead.world.grid import Grid


@dataclass
class RecordingPresentation:
    """Render and UI port that records every call for assertions."""

    rendered: list[tuple[int, int, CellType]] = field(default_factory=list)
    refreshes: int = 0
    messages: list[tuple[str, float]] = field(default_factory=list)

    def render_cell(self, cell: Cell) -> None:
        self.rendered.append((cell.x, cell.y, cell.type))

    def refresh(self, state: GameState) -> None:
        self.refreshes += 1

    def notify(self, message: str, duration: float = 3.0) -> None:
        self.messages.append((message, duration))

    @property
    def last_message(self) -> str | None:
        return self.messages[-1][0] if self.messages else None

    def texts(self) -> list[str]:
        return [message for message, _ in self.messages]


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """A small 5x5 all-empty grid for fast tests."""
    return Grid(size=5)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed)."""
    return GameConfig()


@pytest.fixture
def calm_config() -> GameConfig:
    """A 5x5 config where nothing spawns overnight."""
    return GameConfig(
        seed=7,
        grid_size=5,
        actions_per_day=10,
        initial_trash_density=0.0,
        trash_spawn_chance=0.0,
        coin_spawn_chance=0.0,
        starting_coins=0,
        night_delay=0.0,
    )


@pytest.fixture
def presentation() -> RecordingPresentation:
    """Records every port call made by the engine."""
    return RecordingPresentation()


@pytest.fixture
def blank_state(calm_config: GameConfig) -> GameState:
    """Day 1 on an empty 5x5 farm with an empty inventory."""
    return GameState(
        grid=Grid(size=calm_config.grid_size),
        session=DaySession(actions_per_day=calm_config.actions_per_day),
    )


@pytest.fixture
def engine(
    calm_config: GameConfig,
    blank_state: GameState,
    presentation: RecordingPresentation,
) -> RulesEngine:
    """Rules engine over the blank state, running nights immediately."""
    return RulesEngine(
        config=calm_config,
        renderer=presentation,
        ui=presentation,
        state=blank_state,
    )
