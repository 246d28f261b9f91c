"""Presentation ports — what the rules engine tells the outside world.

The engine never draws anything itself.  It calls a render port when a
cell changes and a UI port when derived displays or the message line
need refreshing.  Both are injected at construction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from farmstead.simulation.state import GameState
    from farmstead.world.cell import Cell

logger = logging.getLogger(__name__)


class RenderPort(Protocol):
    """Redraws individual cells."""

    def render_cell(self, cell: Cell) -> None:
        """Re-derive the visual for ``cell`` from its type and content.

        Must be idempotent: redundant calls are expected.
        """


class UIPort(Protocol):
    """Redraws panels and shows transient messages."""

    def refresh(self, state: GameState) -> None:
        """Re-render day, actions, inventory, selection and shop."""

    def notify(self, message: str, duration: float = 3.0) -> None:
        """Show ``message``; a duration of 0 keeps it until replaced."""


class LoggingPresentation:
    """Headless implementation of both ports that writes to the log."""

    def render_cell(self, cell: Cell) -> None:
        """Log the new state of a cell."""
        crop = ""
        if cell.content is not None:
            crop = f" {cell.content.seed_type} {cell.content.growth_stage}/{cell.content.max_growth}"
        logger.debug("Cell (%d, %d) -> %s%s", cell.x, cell.y, cell.type.value, crop)

    def refresh(self, state: GameState) -> None:
        """Log a one-line summary of the game state."""
        logger.debug(
            "Day %d, %d actions left, inventory %s",
            state.session.day,
            state.session.actions_left,
            state.inventory.snapshot(),
        )

    def notify(self, message: str, duration: float = 3.0) -> None:
        """Log a user-facing message."""
        logger.info("%s", message)
