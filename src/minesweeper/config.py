"""
Board configuration for Minesweeper.

Sessions are sized by (height, width, bomb count) only.
"""
from dataclasses import dataclass

from .errors import ConstructionError


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        num_bombs: Total bombs to place.
    """

    height: int = 9
    width: int = 9
    num_bombs: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConstructionError("Board dimensions must be positive")
        if self.num_bombs < 0:
            raise ConstructionError("Number of bombs cannot be negative")
        if self.num_bombs > self.num_cells:
            raise ConstructionError(f"Too many bombs (max {self.num_cells})")

    @property
    def num_cells(self) -> int:
        """Total number of positions on the board."""
        return self.height * self.width


# Preset board sizes
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)
