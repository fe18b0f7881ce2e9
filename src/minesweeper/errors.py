"""
Error types for the Minesweeper engine.

Out-of-range lookups are reported as ``None`` by the read-only accessors
(``Grid.get``, ``Minefield.dig``, ``Grid.index``); the exceptions below are
raised by the operations that cannot return an absent value.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .client import GameState


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class ConstructionError(MinesweeperError, ValueError):
    """Grid or minefield parameters are inconsistent."""


class OutOfRangeError(MinesweeperError, IndexError):
    """A coordinate falls outside the grid."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Non-existent index requested: ({row}, {col})")
        self.row = row
        self.col = col


class InvalidStateError(MinesweeperError, RuntimeError):
    """
    Operation is not allowed in the current game state.

    Attributes:
        state: The game state at the time of the call.
    """

    def __init__(self, state: "GameState") -> None:
        super().__init__(
            f"Game state must be 'RUNNING' to submit, current state is: {state.name}"
        )
        self.state = state
