"""
Minefield module for Minesweeper.

A stateless bomb layout: adjacency counts are computed once when the
bombs are buried, after which the field is a pure lookup table.
"""
import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .config import BoardConfig
from .errors import ConstructionError, OutOfRangeError
from .grid import Grid, Position

logger = logging.getLogger(__name__)


# ============================================================================
# Minefield Class
# ============================================================================

class Minefield:
    """
    Immutable bomb layout over a ``Grid[Cell]``.

    Use ``Minefield.random`` for play and ``Minefield.from_bomb_locations``
    for fixed layouts.
    """

    def __init__(self, grid: Grid[Cell], num_bombs: int) -> None:
        """
        Wrap a prebuilt grid of cells.

        Args:
            grid: Grid holding every cell of the field.
            num_bombs: Number of bomb cells in ``grid``.

        Raises:
            ConstructionError: If ``num_bombs`` disagrees with the grid, or
                a clean cell's count disagrees with its neighbours.
        """
        grid = grid.copy()
        bombs = {(row, col) for row, col, cell in grid.iterate() if cell.is_bomb}
        if len(bombs) != num_bombs:
            raise ConstructionError(
                f"Expected {num_bombs} bombs, grid holds {len(bombs)}"
            )
        for row, col, cell in grid.iterate():
            if cell.is_bomb:
                continue
            expected = sum(1 for pos in grid.neighbours8(row, col) if pos in bombs)
            if cell.adjacent_bombs != expected:
                raise ConstructionError(
                    f"Cell ({row}, {col}) counts {cell.adjacent_bombs} "
                    f"adjacent bombs, expected {expected}"
                )
        self._grid = grid
        self._num_bombs = num_bombs

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def random(
        cls,
        height: int,
        width: int,
        num_bombs: int,
        rng: Optional[np.random.Generator] = None,
    ) -> "Minefield":
        """
        Create a field with bombs at distinct, uniformly random positions.

        Args:
            height: Number of rows.
            width: Number of columns.
            num_bombs: Number of bombs to place.
            rng: Random generator; a fresh unseeded one if omitted.

        Raises:
            ConstructionError: If the dimensions or bomb count are invalid.
        """
        return cls.from_config(BoardConfig(height, width, num_bombs), rng)

    @classmethod
    def from_config(
        cls,
        config: BoardConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> "Minefield":
        """Create a random field sized by ``config``."""
        rng = rng if rng is not None else np.random.default_rng()
        grid = Grid.filled(config.height, config.width, Cell.clean(0))
        offsets = rng.choice(len(grid), size=config.num_bombs, replace=False)
        locations = [grid.index_to_coords(int(offset)) for offset in offsets]
        cls.bury_bombs(grid, locations)
        logger.debug(
            "Created %dx%d minefield with %d bombs",
            config.height, config.width, config.num_bombs,
        )
        return cls(grid, config.num_bombs)

    @classmethod
    def from_bomb_locations(
        cls,
        height: int,
        width: int,
        locations: Iterable[Position],
    ) -> "Minefield":
        """
        Create a field with bombs at the given positions.

        Raises:
            ConstructionError: If a position is repeated or out of range,
                or the dimensions are invalid.
        """
        locations = [tuple(loc) for loc in locations]
        config = BoardConfig(height, width, len(locations))
        if len(set(locations)) != len(locations):
            raise ConstructionError("Bomb locations must be distinct")
        grid = Grid.filled(config.height, config.width, Cell.clean(0))
        try:
            cls.bury_bombs(grid, locations)
        except OutOfRangeError as error:
            raise ConstructionError(str(error)) from error
        return cls(grid, config.num_bombs)

    @staticmethod
    def bury_bombs(grid: Grid[Cell], locations: Iterable[Position]) -> None:
        """
        Place bombs and increment the count of their clean neighbours.

        Increments commute, so the order of ``locations`` does not matter.

        Raises:
            OutOfRangeError: If a location is outside the grid.
        """
        for row, col in locations:
            grid.set(row, col, Cell.bomb())
            for neighbour_row, neighbour_col in grid.neighbours8(row, col):
                neighbour = grid.get(neighbour_row, neighbour_col)
                if neighbour.is_clean:
                    grid.set(neighbour_row, neighbour_col, neighbour.incremented())

    # ========================================================================
    # Queries
    # ========================================================================

    def dig(self, row: int, col: int) -> Optional[Cell]:
        """
        Query the content of a cell.

        Returns:
            The cell, or None if the position is outside the field.
        """
        return self._grid.get(row, col)

    def submit(self, locations: Iterable[Position]) -> bool:
        """
        Check a submitted list of bomb positions.

        Duplicates collapse before comparison; the submission is correct
        only if it names every bomb and nothing else.
        """
        submission = {tuple(loc) for loc in locations}
        if len(submission) != self._num_bombs:
            return False
        for row, col in submission:
            cell = self.dig(row, col)
            if cell is None or not cell.is_bomb:
                return False
        return True

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def num_bombs(self) -> int:
        """Number of bombs in the field."""
        return self._num_bombs

    @property
    def shape(self) -> Tuple[int, int]:
        """Field dimensions as (height, width)."""
        return self._grid.shape

    def bomb_locations(self) -> List[Position]:
        """Bomb positions in row-major order."""
        return [(row, col) for row, col, cell in self._grid if cell.is_bomb]

    def __repr__(self) -> str:
        height, width = self.shape
        return f"Minefield(height={height}, width={width}, num_bombs={self._num_bombs})"

    def __str__(self) -> str:
        return str(self._grid)
