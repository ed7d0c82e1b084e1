"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mineslayer import Board, BoardConfig, GameSession, Tile, TileDisplay


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 20x20 board with 40 mines."""
    return Board(seed=1234)


@pytest.fixture
def empty_board() -> Board:
    """Create a 3x3 board with no mines."""
    return Board(BoardConfig(3, 3, 0), seed=0)


@pytest.fixture
def corner_mine_board() -> Board:
    """Create a 3x3 board with a single mine at (0, 0)."""
    return Board.from_mines(3, 3, [(0, 0)])


@pytest.fixture
def walled_board() -> Board:
    """
    Create a 7x3 board split by a column of mines at x=3.

    Columns 0-1 and 5-6 are empty, columns 2 and 4 are neighbors.
    """
    return Board.from_mines(7, 3, [(3, 0), (3, 1), (3, 2)])


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def mine_tile() -> Tile:
    """Create a mine tile."""
    return Tile.mine()


@pytest.fixture
def hidden_display() -> TileDisplay:
    """Create a hidden display value over a neighbor tile."""
    return TileDisplay(False, Tile.neighbor(3))


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def empty_session() -> GameSession:
    """Create a session over a 5x5 board with no mines."""
    return GameSession(BoardConfig(5, 5, 0), rng=random.Random(0))


@pytest.fixture
def default_session() -> GameSession:
    """Create a session over a default board."""
    return GameSession(rng=random.Random(42))
