"""Grid — the fixed-size farm the player works on.

The Grid owns an N x N array of cells and exposes typed accessors and
mutators.  Every accessor is bounds-checked: coordinates outside the
farm behave as "no such cell" rather than raising.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from farmstead.catalog.derive import roll_trash_type
from farmstead.world.cell import Cell, CellType, InvariantError, PlotContent


@dataclass
class Grid:
    """A square grid of farm cells.

    Attributes:
        size: Number of rows and columns.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
    """

    size: int
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialise the grid with empty cells."""
        self.cells = [[Cell(x=x, y=y) for x in range(self.size)] for y in range(self.size)]

    def __iter__(self) -> Iterator[Cell]:
        """Yield every cell exactly once, row by row."""
        for row in self.cells:
            yield from row

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies on the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Cell | None:
        """Return the cell at ``(x, y)``, or None when out of range."""
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def set_type(self, x: int, y: int, cell_type: CellType) -> None:
        """Overwrite a cell's type.

        Any type other than PLOT clears the cell's crop content.  Out of
        range coordinates are ignored.

        Args:
            x: Column index.
            y: Row index.
            cell_type: New occupant of the cell.
        """
        cell = self.get(x, y)
        if cell is None:
            return
        cell.type = cell_type
        if cell_type is not CellType.PLOT:
            cell.content = None

    def set_plot_content(self, x: int, y: int, seed_type: str, max_growth: int) -> bool:
        """Plant a fresh crop on a plot.

        Args:
            x: Column index.
            y: Row index.
            seed_type: Catalog key of the seed.
            max_growth: Growth stage at which the crop is ready.

        Returns:
            True if the crop was installed, False if the cell is missing
            or is not a plot.
        """
        cell = self.get(x, y)
        if cell is None or cell.type is not CellType.PLOT:
            return False
        cell.content = PlotContent(seed_type=seed_type, growth_stage=0, max_growth=max_growth)
        return True

    def increment_growth(self, x: int, y: int) -> bool:
        """Grow the crop at ``(x, y)`` by one stage, up to its cap.

        Returns:
            True if the growth stage changed.
        """
        content = self._plot_content(x, y)
        if content is None or content.growth_stage >= content.max_growth:
            return False
        content.growth_stage += 1
        return True

    def is_fully_grown(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` holds a crop that can be harvested."""
        content = self._plot_content(x, y)
        return content is not None and content.is_ready

    def fully_grown_cells(self) -> list[Cell]:
        """All plots currently ready for harvest."""
        return [cell for cell in self if self.is_fully_grown(cell.x, cell.y)]

    def count(self, cell_type: CellType) -> int:
        """Number of cells of the given type."""
        return sum(1 for cell in self if cell.type is cell_type)

    def populate(self, rng: Generator, *, trash_density: float = 0.4) -> None:
        """Scatter debris across the grid for a fresh game.

        Each cell independently becomes trash with probability
        ``trash_density``; the debris kind is drawn with the same
        weed/wood/stone split used by the nightly pass.

        Args:
            rng: Seeded random generator.
            trash_density: Fraction of cells expected to start as debris.
        """
        for cell in self:
            cell_type = CellType.EMPTY
            if rng.random() < trash_density:
                cell_type = roll_trash_type(float(rng.random()))
            self.set_type(cell.x, cell.y, cell_type)

    def _plot_content(self, x: int, y: int) -> PlotContent | None:
        """Return crop content for a plot, checking the content invariant."""
        cell = self.get(x, y)
        if cell is None:
            return None
        if cell.type is not CellType.PLOT:
            if cell.content is not None:
                msg = f"non-plot cell ({x}, {y}) of type {cell.type.value} holds crop content"
                raise InvariantError(msg)
            return None
        return cell.content
