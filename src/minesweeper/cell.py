"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their open/flag
state and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    OPENED = auto()
    FLAGGED = auto()


MINE_CHAR = "*"
EMPTY_CHAR = "."
FLAG_CHAR = "?"
HIDDEN_CHAR = "-"


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine. Set once at setup.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        is_opened: Whether the cell has been opened. Never reverts.
        is_flagged: Whether the player marked the cell as a suspected mine.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    is_opened: bool = False
    is_flagged: bool = False

    def open(self) -> bool:
        """
        Mark this cell opened.

        Returns:
            True if the cell was newly opened, False if it already was.
        """
        if self.is_opened:
            return False
        self.is_opened = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is opened.
        """
        if self.is_opened:
            return False
        self.is_flagged = not self.is_flagged
        return True

    @property
    def state(self) -> CellState:
        """Visual state; an opened cell is OPENED even if it was flagged."""
        if self.is_opened:
            return CellState.OPENED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is unopened and unflagged."""
        return self.state == CellState.HIDDEN

    def render(self) -> str:
        """
        Convert cell to its character in the rendered field.

        Returns:
            '*' opened mine, '1'-'8' opened numbered cell, '.' opened
            empty cell, '?' flagged cell, '-' hidden cell.
        """
        if self.is_opened:
            if self.is_mine:
                return MINE_CHAR
            if self.adjacent_mines > 0:
                return str(self.adjacent_mines)
            return EMPTY_CHAR
        if self.is_flagged:
            return FLAG_CHAR
        return HIDDEN_CHAR

    def to_observation(self) -> int:
        """
        Convert cell to observation value for ML agent.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Opened cell with adjacent mine count
            9: Opened mine (game over state)
        """
        state = self.state
        if state == CellState.HIDDEN:
            return -1
        if state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
