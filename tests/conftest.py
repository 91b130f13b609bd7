"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, Coordinate


# ============================================================================
# Collaborator Fixtures
# ============================================================================

class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Create a seeded random source."""
    return random.Random(1234)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board(rng: random.Random, clock: FakeClock) -> Board:
    """Create a 9x9 board with 10 random mines."""
    return Board(9, 9, 10, rng=rng, clock=clock)


@pytest.fixture
def corner_mine_board(clock: FakeClock) -> Board:
    """Create a 3x3 board with a single mine at (2, 0)."""
    return Board(3, 3, [Coordinate(2, 0)], clock=clock)


@pytest.fixture
def walled_board(clock: FakeClock) -> Board:
    """
    Create a 5x5 board split by a column of mines at x=2.

    Fully opened it renders as:

        .2*2.
        .3*3.
        .3*3.
        .3*3.
        .2*2.
    """
    mines = [(2, y) for y in range(5)]
    return Board(5, 5, mines, clock=clock)


@pytest.fixture
def empty_board(clock: FakeClock) -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(5, 5, 0, clock=clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create an opened cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.open()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def small_config() -> BoardConfig:
    """Create a small configuration for quick environment episodes."""
    return BoardConfig(4, 4, 2)
