"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import BoardConfig, Cell, Client, Grid, Minefield


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def counting_grid() -> Grid:
    """Create a 4x3 grid holding its own linear offsets."""
    return Grid(4, 3, range(12))


@pytest.fixture
def empty_cell_grid() -> Grid:
    """Create a 3x3 grid of clean cells with no neighbours."""
    return Grid.filled(3, 3, Cell.clean(0))


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def two_bomb_field() -> Minefield:
    """Create a 2x2 field with bombs along the top row."""
    return Minefield.from_bomb_locations(2, 2, [(0, 0), (0, 1)])


@pytest.fixture
def diagonal_field() -> Minefield:
    """Create a 3x3 field with bombs on the main diagonal."""
    return Minefield.from_bomb_locations(3, 3, [(0, 0), (1, 1), (2, 2)])


@pytest.fixture
def corner_field() -> Minefield:
    """
    Create a 5x5 field with a single bomb in the bottom-right corner.

    Layout:
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 1 1
        0 0 0 1 X
    """
    return Minefield.from_bomb_locations(5, 5, [(4, 4)])


@pytest.fixture
def walled_field() -> Minefield:
    """
    Create a 4x5 field whose middle column is a wall of bombs.

    Layout:
        0 2 X 2 0
        0 3 X 3 0
        0 3 X 3 0
        0 2 X 2 0
    """
    return Minefield.from_bomb_locations(
        4, 5, [(0, 2), (1, 2), (2, 2), (3, 2)]
    )


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture
def empty_client() -> Client:
    """Create a 10x10 session with no bombs for flood testing."""
    return Client.new_random(10, 10, 0)


@pytest.fixture
def two_bomb_client(two_bomb_field: Minefield) -> Client:
    """Create a session on the 2x2 two-bomb field."""
    return Client(two_bomb_field)


@pytest.fixture
def corner_client(corner_field: Minefield) -> Client:
    """Create a session on the 5x5 corner-bomb field."""
    return Client(corner_field)


@pytest.fixture
def walled_client(walled_field: Minefield) -> Client:
    """Create a session on the 4x5 walled field."""
    return Client(walled_field)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def small_config() -> BoardConfig:
    """Create a small 4x4 configuration with 3 bombs."""
    return BoardConfig(4, 4, 3)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible layouts."""
    return np.random.default_rng(1234)
