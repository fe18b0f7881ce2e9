"""
Client module for Minesweeper.

Implements a game session over a Minefield: per-position visibility,
flood-reveal, flagging, and the win/loss submission protocol.
"""
import logging
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, FLAGGED, HIDDEN
from .config import BoardConfig
from .errors import InvalidStateError, OutOfRangeError
from .field import Minefield
from .grid import Grid, Position

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    RUNNING = auto()
    LOST = auto()
    WON = auto()


# ============================================================================
# Client Class
# ============================================================================

class Client:
    """
    Stateful game session.

    Owns its Minefield, a grid of CellState of the same shape, and the
    current GameState. LOST and WON are terminal.
    """

    def __init__(self, minefield: Minefield) -> None:
        """
        Start a session on ``minefield`` with every position hidden.

        Args:
            minefield: Bomb layout for this session.
        """
        self.minefield = minefield
        height, width = minefield.shape
        self._state: Grid[CellState] = Grid.filled(height, width, HIDDEN)
        self._game_state = GameState.RUNNING

    @classmethod
    def new_random(
        cls,
        height: int,
        width: int,
        num_bombs: int,
        rng: Optional[np.random.Generator] = None,
    ) -> "Client":
        """Start a session on a randomly laid out field."""
        return cls(Minefield.random(height, width, num_bombs, rng))

    @classmethod
    def from_config(
        cls,
        config: BoardConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> "Client":
        """Start a session on a random field sized by ``config``."""
        return cls(Minefield.from_config(config, rng))

    # ========================================================================
    # Reveal Actions
    # ========================================================================

    def query_update(self, row: int, col: int) -> Cell:
        """
        Reveal exactly one position.

        Revealing a bomb while running loses the game.

        Returns:
            The revealed cell.

        Raises:
            OutOfRangeError: If the position is outside the field.
        """
        cell = self.minefield.dig(row, col)
        if cell is None:
            raise OutOfRangeError(row, col)
        self._state.set(row, col, CellState.revealed(cell))
        if cell.is_bomb and self._game_state == GameState.RUNNING:
            logger.info("Bomb revealed at (%d, %d), game lost", row, col)
            self._game_state = GameState.LOST
        return cell

    def query_smart(self, row: int, col: int) -> GameState:
        """
        Flood-reveal starting at (row, col).

        Empty cells (no adjacent bombs) expand to their hidden neighbours,
        so the connected empty region and its numbered border are revealed.
        Each position is revealed at most once.

        Returns:
            Always GameState.RUNNING; a bomb hit is recorded by
            ``query_update``.
        """
        width = self._state.width
        stack: List[Position] = [(row, col)]
        pending = {row * width + col}
        revealed = 0
        while stack:
            i, j = stack.pop()
            pending.discard(i * width + j)
            cell = self.query_update(i, j)
            revealed += 1
            if not cell.is_empty:
                continue
            for neighbour_row, neighbour_col in self._state.neighbours8(i, j):
                offset = neighbour_row * width + neighbour_col
                if offset in pending:
                    continue
                if self._state.get(neighbour_row, neighbour_col).is_hidden:
                    pending.add(offset)
                    stack.append((neighbour_row, neighbour_col))
        logger.debug("Flood from (%d, %d) revealed %d cells", row, col, revealed)
        return GameState.RUNNING

    def reveal(self, all_cells: bool = False) -> None:
        """
        Reveal the board, typically once the game is over.

        Args:
            all_cells: Also reveal flagged and marked positions.
        """
        original_game_state = self._game_state
        for row, col, cell_state in self._state.iterate():
            if cell_state.is_hidden or (
                all_cells and (cell_state.is_flagged or cell_state.is_marked)
            ):
                self.query_update(row, col)
        if original_game_state == GameState.WON:
            # preserve win even if bombs were revealed
            self._game_state = GameState.WON

    # ========================================================================
    # Flags and Submission
    # ========================================================================

    def flag(self, row: int, col: int) -> CellState:
        """
        Toggle flag on a position.

        Revealed and marked positions are left unchanged.

        Returns:
            The state of the position after the call.

        Raises:
            OutOfRangeError: If the position is outside the field.
        """
        current = self._state.get(row, col)
        if current is None:
            raise OutOfRangeError(row, col)
        if current.is_hidden:
            new_state = FLAGGED
        elif current.is_flagged:
            new_state = HIDDEN
        else:
            return current
        self._state.set(row, col, new_state)
        logger.debug("Flag at (%d, %d) -> %s", row, col, new_state.visibility.name)
        return new_state

    def get_flag_locations(self) -> List[Position]:
        """All flagged positions in row-major order."""
        return [
            (row, col)
            for row, col, cell_state in self._state.iterate()
            if cell_state.is_flagged
        ]

    def submit(self) -> GameState:
        """
        Submit the flagged positions as the bomb locations.

        Returns:
            WON if the flags match the bombs exactly, else LOST.

        Raises:
            InvalidStateError: If the game is not running.
        """
        if self._game_state != GameState.RUNNING:
            raise InvalidStateError(self._game_state)
        if self.minefield.submit(self.get_flag_locations()):
            self._game_state = GameState.WON
        else:
            self._game_state = GameState.LOST
        logger.info("Submission checked, game %s", self._game_state.name.lower())
        return self._game_state

    # ========================================================================
    # State Accessors
    # ========================================================================

    def get_state(self) -> Grid[CellState]:
        """Copy of the per-position visibility grid."""
        return self._state.copy()

    def get_game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_running(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.RUNNING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def num_bombs(self) -> int:
        return self.minefield.num_bombs

    @property
    def shape(self) -> Tuple[int, int]:
        return self._state.shape

    def get_valid_actions(self) -> List[Position]:
        """Hidden positions, i.e. those a reveal can still act on."""
        return [
            (row, col)
            for row, col, cell_state in self._state.iterate()
            if cell_state.is_hidden
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D int8 array of ``CellState.to_observation`` codes.
        """
        obs = np.zeros(self._state.shape, dtype=np.int8)
        for row, col, cell_state in self._state.iterate():
            obs[row, col] = cell_state.to_observation()
        return obs


def new_random_session(
    height: int,
    width: int,
    num_bombs: int,
    rng: Optional[np.random.Generator] = None,
) -> Client:
    """Start a game session on a random field."""
    return Client.new_random(height, width, num_bombs, rng)
