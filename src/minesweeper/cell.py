"""
Cell module for Minesweeper.

Defines the immutable ground truth of a position (bomb or neighbour
count) and the player-facing visibility state layered on top of it.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

MAX_ADJACENT = 8

# Observation codes used by ``CellState.to_observation``
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MARKED = -3
OBS_BOMB = 9


class Visibility(Enum):
    """Possible visual states of a position."""

    HIDDEN = auto()
    FLAGGED = auto()
    MARKED = auto()
    REVEALED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Content of a single minefield position.

    Attributes:
        is_bomb: Whether this position holds a bomb.
        adjacent_bombs: Count of bombs in neighbouring cells (0-8).
            Always 0 for bomb cells.
    """

    is_bomb: bool = False
    adjacent_bombs: int = 0

    @classmethod
    def bomb(cls) -> "Cell":
        """Create a bomb cell."""
        return cls(is_bomb=True)

    @classmethod
    def clean(cls, adjacent_bombs: int = 0) -> "Cell":
        """
        Create a clean cell with the given neighbour count.

        Raises:
            ValueError: If the count is outside 0-8.
        """
        if not 0 <= adjacent_bombs <= MAX_ADJACENT:
            raise ValueError(
                f"Adjacent bomb count must be in 0-{MAX_ADJACENT}, "
                f"got {adjacent_bombs}"
            )
        return cls(adjacent_bombs=adjacent_bombs)

    def incremented(self) -> "Cell":
        """Clean cell with one more adjacent bomb; bombs are unchanged."""
        if self.is_bomb:
            return self
        return Cell.clean(self.adjacent_bombs + 1)

    @property
    def is_clean(self) -> bool:
        """Check if cell holds no bomb."""
        return not self.is_bomb

    @property
    def is_empty(self) -> bool:
        """Check if cell is clean with no adjacent bombs."""
        return not self.is_bomb and self.adjacent_bombs == 0

    def __str__(self) -> str:
        return "X" if self.is_bomb else str(self.adjacent_bombs)


# ============================================================================
# Cell State
# ============================================================================

@dataclass(frozen=True)
class CellState:
    """
    Visibility of a position from the player's perspective.

    Attributes:
        visibility: Hidden, flagged, marked or revealed.
        cell: The revealed content; only set when revealed.
    """

    visibility: Visibility = Visibility.HIDDEN
    cell: Optional[Cell] = None

    def __post_init__(self) -> None:
        """Keep ``cell`` consistent with ``visibility``."""
        if (self.visibility == Visibility.REVEALED) != (self.cell is not None):
            raise ValueError("Only revealed states carry a cell")

    @classmethod
    def revealed(cls, cell: Cell) -> "CellState":
        """Create the revealed state for ``cell``."""
        return cls(Visibility.REVEALED, cell)

    @property
    def is_hidden(self) -> bool:
        """Check if position is hidden."""
        return self.visibility == Visibility.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if position is flagged."""
        return self.visibility == Visibility.FLAGGED

    @property
    def is_marked(self) -> bool:
        """Check if position is marked."""
        return self.visibility == Visibility.MARKED

    @property
    def is_revealed(self) -> bool:
        """Check if position is revealed."""
        return self.visibility == Visibility.REVEALED

    def to_observation(self) -> int:
        """
        Convert state to an observation value.

        Returns:
            -1: Hidden
            -2: Flagged
            -3: Marked
            0-8: Revealed clean cell with adjacent bomb count
            9: Revealed bomb
        """
        if self.visibility == Visibility.HIDDEN:
            return OBS_HIDDEN
        if self.visibility == Visibility.FLAGGED:
            return OBS_FLAGGED
        if self.visibility == Visibility.MARKED:
            return OBS_MARKED
        if self.cell.is_bomb:
            return OBS_BOMB
        return self.cell.adjacent_bombs


HIDDEN = CellState(Visibility.HIDDEN)
FLAGGED = CellState(Visibility.FLAGGED)
MARKED = CellState(Visibility.MARKED)
