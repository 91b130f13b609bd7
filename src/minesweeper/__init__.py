"""
Minesweeper game engine.

Provides core game logic including board management, cell state,
error types and a Gymnasium environment wrapper.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, Coordinate, GameStatus
from .errors import (
    MinesweeperError,
    InvalidConfiguration,
    InvalidCoordinate,
    IndexOutOfRange,
)
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Coordinate",
    "GameStatus",
    "MinesweeperError",
    "InvalidConfiguration",
    "InvalidCoordinate",
    "IndexOutOfRange",
    "MinesweeperEnv",
    "make_vec_env",
]
