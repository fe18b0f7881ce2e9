"""
Grid module for Minesweeper.

A fixed-size 2D container stored as a flat row-major list, with
bidirectional index mapping and 8-neighbour enumeration.
"""
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .errors import ConstructionError, OutOfRangeError

T = TypeVar("T")

Position = Tuple[int, int]


# ============================================================================
# Grid Class
# ============================================================================

class Grid(Generic[T]):
    """
    Generic 2D grid over a flat sequence.

    Attributes:
        height: Number of rows.
        width: Number of columns.
    """

    def __init__(self, height: int, width: int, data: Iterable[T]) -> None:
        """
        Create a grid from row-major data.

        Args:
            height: Number of rows.
            width: Number of columns.
            data: Exactly ``height * width`` values in row-major order.

        Raises:
            ConstructionError: If a dimension is negative or the data
                length does not match the dimensions.
        """
        if height < 0 or width < 0:
            raise ConstructionError("Grid dimensions cannot be negative")
        values = list(data)
        if len(values) != height * width:
            raise ConstructionError(
                "Data length is incompatible with given height and width"
            )
        self.height = height
        self.width = width
        self._data: List[T] = values

    @classmethod
    def filled(cls, height: int, width: int, value: T) -> "Grid[T]":
        """Create a grid with every position set to ``value``."""
        return cls(height, width, [value] * (height * width))

    # ========================================================================
    # Index Mapping (Low-level)
    # ========================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> Optional[int]:
        """Linear offset of (row, col), or None if out of range."""
        if not self.is_valid_position(row, col):
            return None
        return row * self.width + col

    def index_to_coords(self, offset: int) -> Optional[Position]:
        """(row, col) of a linear offset, or None if out of range."""
        if not 0 <= offset < len(self):
            return None
        return offset // self.width, offset % self.width

    # ========================================================================
    # Access
    # ========================================================================

    def get(self, row: int, col: int) -> Optional[T]:
        """Get value at position, or None if invalid."""
        offset = self.index(row, col)
        if offset is None:
            return None
        return self._data[offset]

    def set(self, row: int, col: int, value: T) -> None:
        """
        Set value at position.

        Raises:
            OutOfRangeError: If the position is outside the grid.
        """
        offset = self.index(row, col)
        if offset is None:
            raise OutOfRangeError(row, col)
        self._data[offset] = value

    def neighbours8(self, row: int, col: int) -> List[Position]:
        """
        Get valid positions adjacent to (row, col), diagonals included.

        Each axis is clamped to the grid independently, so corners yield
        3 neighbours, edges 5 and interior cells 8. The centre itself is
        never included.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples in row-major order; empty if the
            center is out of range.
        """
        if not self.is_valid_position(row, col):
            return []
        row_lo, row_hi = max(row - 1, 0), min(row + 1, self.height - 1)
        col_lo, col_hi = max(col - 1, 0), min(col + 1, self.width - 1)
        return [
            (i, j)
            for i in range(row_lo, row_hi + 1)
            for j in range(col_lo, col_hi + 1)
            if (i, j) != (row, col)
        ]

    def iterate(self) -> Iterator[Tuple[int, int, T]]:
        """Yield (row, col, value) triples in row-major order."""
        for offset, value in enumerate(self._data):
            yield offset // self.width, offset % self.width, value

    def __iter__(self) -> Iterator[Tuple[int, int, T]]:
        return self.iterate()

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (height, width)."""
        return self.height, self.width

    @property
    def data(self) -> Tuple[T, ...]:
        """Snapshot of the row-major values."""
        return tuple(self._data)

    def __len__(self) -> int:
        return self.height * self.width

    def copy(self) -> "Grid[T]":
        """Shallow copy with an independent backing list."""
        return Grid(self.height, self.width, self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    def __repr__(self) -> str:
        return (
            f"grid of size h={self.height}, w={self.width}\n{self._data!r}"
        )

    def __str__(self) -> str:
        rows = []
        for row in range(self.height):
            start = row * self.width
            values = self._data[start:start + self.width]
            rows.append(" ".join(str(value) for value in values))
        return "\n".join(rows)
