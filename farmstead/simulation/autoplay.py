"""Autoplay — a simple greedy player for headless runs.

Each day it harvests whatever is ready, plants any seed it holds on
empty soil, clears debris with the remaining actions and buys the first
affordable upgrade.  Good enough to exercise every rule end to end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from farmstead.catalog.upgrades import UPGRADES
from farmstead.world.cell import CellType

if TYPE_CHECKING:
    from farmstead.simulation.engine import RulesEngine
    from farmstead.world.cell import Cell


def _next_target(engine: RulesEngine) -> Cell | None:
    """Pick the most valuable cell to click next, if any."""
    state = engine.state
    ready = state.grid.fully_grown_cells()
    if ready:
        return ready[0]

    held = [key for key, count in state.inventory.seeds.items() if count > 0]
    if held:
        empty = next((c for c in state.grid if c.type is CellType.EMPTY), None)
        if empty is not None:
            if state.session.selected_seed not in held:
                engine.select_seed(held[0])
            return empty

    return next(
        (c for c in state.grid if c.is_trash or c.type is CellType.COIN_SPAWN),
        None,
    )


def play_day(engine: RulesEngine) -> int:
    """Spend today's actions greedily, then end the day.

    Args:
        engine: Engine whose scheduler runs dawn synchronously or later.

    Returns:
        Number of actions taken.
    """
    for upgrade_id in UPGRADES:
        if engine.can_buy(upgrade_id):
            engine.buy_upgrade(upgrade_id)
            break

    session = engine.state.session
    start_day = session.day
    taken = 0
    while not session.is_night and session.day == start_day and session.actions_left > 0:
        target = _next_target(engine)
        if target is None or not engine.handle_cell_click(target.x, target.y):
            break
        taken += 1

    if not session.is_night and session.day == start_day:
        engine.end_day()
    return taken


def play(engine: RulesEngine, days: int) -> None:
    """Play ``days`` full days from the engine's current state."""
    for _ in range(days):
        play_day(engine)
