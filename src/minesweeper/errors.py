"""
Exceptions raised by the Minesweeper engine.

Every error is raised before the board is mutated, so a failed call
leaves the game exactly as it was.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count cannot form a valid board."""


class InvalidCoordinate(MinesweeperError, ValueError):
    """A mine coordinate given at setup lies outside the board."""


class IndexOutOfRange(MinesweeperError, IndexError):
    """A coordinate passed to a board action lies outside the board."""
