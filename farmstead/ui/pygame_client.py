"""Pygame 2D client for Farmstead.

Implements both presentation ports against a window: cells are redrawn
from the visuals cached by ``render_cell`` and the side panel from the
last ``refresh`` snapshot.  Mouse clicks are translated into grid
coordinates and forwarded to the rules engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from farmstead.simulation.engine import RulesEngine
    from farmstead.simulation.scheduler import DeferredScheduler
    from farmstead.simulation.state import GameState

from farmstead.catalog.seeds import SEEDS, seed_name
from farmstead.catalog.upgrades import UPGRADES
from farmstead.world.cell import Cell, CellType

# Colour palette
_BG = (30, 20, 10)
_GRID_LINE = (60, 40, 20)
_READY_GLOW = (255, 255, 255)
_TEXT = (220, 220, 220)
_DIM_TEXT = (130, 130, 130)

_TYPE_COLOURS: dict[CellType, tuple[int, int, int]] = {
    CellType.EMPTY: (155, 118, 83),
    CellType.WEED: (0, 200, 0),
    CellType.WOOD: (160, 82, 45),
    CellType.STONE: (128, 128, 128),
    CellType.PLOT: (101, 67, 33),
    CellType.COIN_SPAWN: (255, 215, 0),
}

# Relative crop size by fraction of growth reached
_GROWTH_SCALE = (0.1, 0.3, 0.6, 1.0)


@dataclass
class CellVisual:
    """Cached drawing instructions for one cell.

    Attributes:
        base: Ground colour.
        crop: Crop colour, if a plant is growing.
        crop_scale: Crop size relative to the cell (0-1).
        ready: Whether to draw the harvest-ready outline.
    """

    base: tuple[int, int, int]
    crop: tuple[int, int, int] | None = None
    crop_scale: float = 0.0
    ready: bool = False


def visual_for(cell: Cell) -> CellVisual:
    """Derive how ``cell`` should look from its type and content."""
    visual = CellVisual(base=_TYPE_COLOURS.get(cell.type, _TYPE_COLOURS[CellType.EMPTY]))
    content = cell.content
    if cell.type is CellType.PLOT and content is not None:
        seed = SEEDS.get(content.seed_type)
        fraction = min(content.growth_stage / max(content.max_growth, 1), 1.0)
        index = min(int(fraction * (len(_GROWTH_SCALE) - 1)), len(_GROWTH_SCALE) - 1)
        visual.crop = seed.color if seed is not None else (200, 200, 200)
        visual.crop_scale = _GROWTH_SCALE[index]
        visual.ready = content.is_ready
    return visual


class PygameClient:
    """Window that renders the farm and feeds clicks to the engine.

    Attributes:
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    _SEED_KEYS: ClassVar[dict[int, str]] = {
        pygame.K_1: "WHEAT",
        pygame.K_2: "PUMPKIN",
        pygame.K_3: "BERRY",
    }
    _UPGRADE_KEYS: ClassVar[dict[int, str]] = {
        pygame.K_q: "BEEHIVE",
        pygame.K_w: "FERTILIZER_BAG",
        pygame.K_e: "SCARECROW",
        pygame.K_r: "RAINBOW_BLESSING",
    }

    def __init__(self, grid_size: int, cell_size: int = 48) -> None:
        """Open the window.

        Args:
            grid_size: Rows and columns of the farm.
            cell_size: Pixel width/height per grid cell.
        """
        self.grid_size = grid_size
        self.cell_size = cell_size
        self._visuals: dict[tuple[int, int], CellVisual] = {}
        self._panel_lines: list[str] = []
        self._message = ""
        self._message_left = 0.0
        self._hover: tuple[int, int] | None = None

        self._panel_width = 300
        self._board = grid_size * cell_size
        self._win_w = self._board + self._panel_width
        self._win_h = max(self._board, 420) + 40

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Farmstead")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True

    # -- Ports ------------------------------------------------------------

    def render_cell(self, cell: Cell) -> None:
        """Cache the visual for ``cell``; drawn on the next frame."""
        self._visuals[(cell.x, cell.y)] = visual_for(cell)

    def refresh(self, state: GameState) -> None:
        """Rebuild the side-panel text from a state snapshot."""
        inv = state.inventory
        lines = [
            f"Day: {state.session.day}",
            f"Actions: {state.session.actions_left}/{state.session.actions_per_day}",
            "",
            f"Coins: {inv.coins}",
            f"Wood: {inv.wood}",
            f"Stone: {inv.stone}",
            "",
            "--- Seeds ---",
        ]
        for number, key in enumerate(SEEDS, start=1):
            marker = "*" if state.session.selected_seed == key else " "
            lines.append(f"{marker}{number} {seed_name(key)}: {inv.seed_count(key)}")
        lines += ["", "--- Upgrades ---"]
        for hotkey, upgrade in zip("QWER", UPGRADES.values(), strict=False):
            owned = state.upgrades.is_active(upgrade.effect.flag)
            status = "owned" if owned else upgrade.cost_label()
            lines.append(f"{hotkey} {upgrade.name}: {status}")
        lines += ["", "ENTER: end day", "0: deselect seed", "ESC: quit"]
        self._panel_lines = lines

    def notify(self, message: str, duration: float = 3.0) -> None:
        """Show ``message`` on the status line."""
        self._message = message
        self._message_left = duration if duration > 0 else float("inf")

    # -- Main loop --------------------------------------------------------

    def run(self, engine: RulesEngine, scheduler: DeferredScheduler, fps: int = 30) -> None:
        """Main loop: handle events, advance the night timer, render.

        Args:
            engine: Rules engine to forward input to.
            scheduler: Scheduler holding the pending dawn callback.
            fps: Target frames per second.
        """
        engine.start()
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            self._handle_events(engine)
            scheduler.advance(dt)
            self._message_left -= dt
            if self._message_left <= 0:
                self._message = ""
            self._draw(engine)

        pygame.quit()

    def cell_at_pixel(self, px: int, py: int) -> tuple[int, int] | None:
        """Translate window pixels to grid coordinates."""
        if not (0 <= px < self._board and 0 <= py < self._board):
            return None
        return px // self.cell_size, py // self.cell_size

    def _handle_events(self, engine: RulesEngine) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEMOTION:
                self._hover = self.cell_at_pixel(*event.pos)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                target = self.cell_at_pixel(*event.pos)
                if target is not None:
                    engine.handle_cell_click(*target)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    engine.end_day()
                elif event.key == pygame.K_0:
                    engine.deselect_seed()
                elif event.key in self._SEED_KEYS:
                    engine.select_seed(self._SEED_KEYS[event.key])
                elif event.key in self._UPGRADE_KEYS:
                    engine.buy_upgrade(self._UPGRADE_KEYS[event.key])

    def _draw(self, engine: RulesEngine) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_panel(engine)
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw ground, crops and harvest-ready outlines."""
        cs = self.cell_size
        for (x, y), visual in self._visuals.items():
            rect = pygame.Rect(x * cs, y * cs, cs, cs)
            pygame.draw.rect(self.screen, visual.base, rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)
            if visual.crop is not None:
                radius = max(2, int(cs * 0.4 * visual.crop_scale))
                pygame.draw.circle(self.screen, visual.crop, rect.center, radius)
            if visual.ready:
                pygame.draw.rect(self.screen, _READY_GLOW, rect.inflate(-4, -4), 2)

    def _draw_panel(self, engine: RulesEngine) -> None:
        """Draw the stats panel, hover text and status line."""
        panel_x = self._board + 10
        y = 10
        for line in self._panel_lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

        if self._hover is not None:
            text = engine.describe_cell(*self._hover)
            if text:
                surf = self.font.render(text, True, _DIM_TEXT)
                self.screen.blit(surf, (10, self._win_h - 38))

        if self._message:
            surf = self.font.render(self._message, True, _TEXT)
            self.screen.blit(surf, (10, self._win_h - 20))
