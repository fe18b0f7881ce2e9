"""
Minesweeper game engine.

Provides the grid container, bomb layout, and game session logic,
plus a Gymnasium environment over a session.
"""
from .errors import (
    MinesweeperError,
    ConstructionError,
    OutOfRangeError,
    InvalidStateError,
)
from .grid import Grid
from .cell import Cell, CellState, Visibility, HIDDEN, FLAGGED, MARKED
from .config import BoardConfig, BEGINNER, INTERMEDIATE, EXPERT
from .field import Minefield
from .client import Client, GameState, new_random_session
from .environment import MinesweeperEnv

__all__ = [
    "MinesweeperError",
    "ConstructionError",
    "OutOfRangeError",
    "InvalidStateError",
    "Grid",
    "Cell",
    "CellState",
    "Visibility",
    "HIDDEN",
    "FLAGGED",
    "MARKED",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "Minefield",
    "Client",
    "GameState",
    "new_random_session",
    "MinesweeperEnv",
]
