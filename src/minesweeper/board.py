"""
Board module for Minesweeper game.

Implements the game board with mine placement, cell opening with
flood-fill, flagging, game status management and timing.
"""
import logging
import random
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from .cell import Cell
from .errors import IndexOutOfRange, InvalidConfiguration, InvalidCoordinate


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    VICTORY = auto()
    DEFEAT = auto()


TERMINAL_STATUSES = (GameStatus.VICTORY, GameStatus.DEFEAT)


class Coordinate(NamedTuple):
    """Cell position: x is the column, y is the row."""

    x: int
    y: int


CoordinateLike = Union[Coordinate, Tuple[int, int]]
MineSpec = Union[int, Sequence[CoordinateLike]]


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines on the board.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "num_mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration(
                f"Board dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        if self.num_mines > self.total_cells:
            raise InvalidConfiguration(
                f"Too many mines ({self.num_mines}) for a "
                f"{self.width}x{self.height} board (max {self.total_cells})"
            )

    @property
    def total_cells(self) -> int:
        return self.width * self.height


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    Owns the grid of cells, mine layout, open/flag state, the game
    status state machine and the game timer. Cells are stored in a flat
    list indexed by ``y * width + x``.

    A single instance is not safe for concurrent use.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mines: MineSpec = 0,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Create a board and start a new game on it.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Mine count for random placement, or a sequence of
                (x, y) coordinates for explicit placement.
            rng: Random source for mine placement (default: fresh Random).
            clock: Zero-argument callable returning seconds (default:
                time.time).
        """
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock if clock is not None else time.time
        self.new_game(width, height, mines)

    # ========================================================================
    # Game Setup (Low-level)
    # ========================================================================

    def new_game(self, width: int, height: int, mines: MineSpec) -> None:
        """
        Replace the board with a fresh game.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Mine count for random placement, or a sequence of
                (x, y) coordinates for explicit placement. Duplicate
                coordinates are placed once.

        Raises:
            InvalidConfiguration: Bad dimensions or mine count.
            InvalidCoordinate: An explicit mine lies outside the board.
        """
        if isinstance(mines, (int, np.integer)) and not isinstance(mines, bool):
            config = BoardConfig(width, height, int(mines))
            mine_indices = self._rng.sample(range(config.total_cells), config.num_mines)
        elif isinstance(mines, bool):
            raise InvalidConfiguration(f"num_mines must be an integer, got {mines!r}")
        else:
            BoardConfig(width, height, 0)
            mine_indices = self._mine_indices_from_list(width, height, mines)
            config = BoardConfig(width, height, len(mine_indices))

        self._reset(config)
        for index in mine_indices:
            self._place_mine(index)

        logger.debug(
            "New game: %dx%d board with %d mines",
            config.width, config.height, config.num_mines,
        )

    @staticmethod
    def _mine_indices_from_list(
        width: int, height: int, mines: Iterable[CoordinateLike]
    ) -> List[int]:
        """Validate explicit mine coordinates and return unique flat indices."""
        indices = []
        seen = set()
        for mine in mines:
            try:
                x, y = mine
            except (TypeError, ValueError):
                raise InvalidCoordinate(
                    f"Expected an (x, y) mine coordinate, got {mine!r}"
                ) from None
            if not (0 <= x < width and 0 <= y < height):
                raise InvalidCoordinate(
                    f"Mine at ({x}, {y}) is outside the {width}x{height} board"
                )
            index = y * width + x
            if index not in seen:
                seen.add(index)
                indices.append(index)
        return indices

    def _reset(self, config: BoardConfig) -> None:
        """Install an empty grid and clear counters, status and timers."""
        self.config = config
        self._cells = [Cell() for _ in range(config.total_cells)]
        self._status = GameStatus.NOT_STARTED
        self._opened_count = 0
        self._target_safe_count = config.total_cells - config.num_mines
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None

    def _place_mine(self, index: int) -> None:
        """Set a mine and bump the count of each of its neighbors."""
        self._cells[index].is_mine = True
        for neighbor in self._neighbor_indices(index):
            self._cells[neighbor].adjacent_mines += 1

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _neighbor_indices(self, index: int) -> List[int]:
        """Flat indices of the in-bounds neighbors of a flat index."""
        width = self.config.width
        y, x = divmod(index, width)
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_y == 0 and delta_x == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append(new_y * width + new_x)
        return neighbors

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def _index_of(self, coordinate: CoordinateLike) -> int:
        """Convert a coordinate to a flat index, validating bounds."""
        try:
            x, y = coordinate
        except (TypeError, ValueError):
            raise IndexOutOfRange(
                f"Expected an (x, y) coordinate, got {coordinate!r}"
            ) from None
        if not self._is_valid_position(x, y):
            raise IndexOutOfRange(
                f"Cell ({x}, {y}) is outside the "
                f"{self.config.width}x{self.config.height} board"
            )
        return y * self.config.width + x

    def _coordinate_of(self, index: int) -> Coordinate:
        y, x = divmod(index, self.config.width)
        return Coordinate(x, y)

    def neighbors(self, coordinate: CoordinateLike) -> List[Coordinate]:
        """
        Get the in-bounds neighbors of a cell.

        Raises:
            IndexOutOfRange: The coordinate lies outside the board.
        """
        index = self._index_of(coordinate)
        return [self._coordinate_of(i) for i in self._neighbor_indices(index)]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open_cell(self, coordinate: CoordinateLike) -> bool:
        """
        Open a cell.

        The first action of a game starts the timer. Flagged and already
        opened cells are left alone, mines included. Opening a mine loses
        the game and opens the whole board. Opening an empty cell floods
        outward through its zero-count region.

        Args:
            coordinate: (x, y) position to open.

        Returns:
            True if any cell was opened, False otherwise.

        Raises:
            IndexOutOfRange: The coordinate lies outside the board.
        """
        index = self._index_of(coordinate)
        self._start_if_needed()

        if self._status != GameStatus.IN_PROGRESS:
            return False

        cell = self._cells[index]
        if cell.is_opened or cell.is_flagged:
            return False

        if cell.is_mine:
            self._lose()
            return True

        self._flood_open(index)
        if self._opened_count == self._target_safe_count:
            self._finish(GameStatus.VICTORY)
        return True

    def _flood_open(self, start: int) -> None:
        """Breadth-first open from start through cells with no adjacent mines."""
        queue = deque([start])
        while queue:
            index = queue.popleft()
            cell = self._cells[index]
            if not cell.open():
                continue
            self._opened_count += 1
            if cell.adjacent_mines > 0:
                continue
            for neighbor in self._neighbor_indices(index):
                neighbor_cell = self._cells[neighbor]
                if not neighbor_cell.is_opened and not neighbor_cell.is_flagged:
                    queue.append(neighbor)

    def _lose(self) -> None:
        """Reveal the whole board and end the game in defeat."""
        for cell in self._cells:
            cell.is_opened = True
        self._opened_count = len(self._cells)
        self._finish(GameStatus.DEFEAT)

    def toggle_flag(self, coordinate: CoordinateLike) -> bool:
        """
        Toggle flag on a cell.

        Args:
            coordinate: (x, y) position to flag or unflag.

        Returns:
            True if flag was toggled, False if the game is over or the
            cell is already opened.

        Raises:
            IndexOutOfRange: The coordinate lies outside the board.
        """
        index = self._index_of(coordinate)
        self._start_if_needed()

        if self._status != GameStatus.IN_PROGRESS:
            return False
        return self._cells[index].toggle_flag()

    def _start_if_needed(self) -> None:
        if self._status == GameStatus.NOT_STARTED:
            self._start_time = self._clock()
            self._status = GameStatus.IN_PROGRESS

    def _finish(self, status: GameStatus) -> None:
        self._end_time = self._clock()
        self._status = status
        logger.info(
            "Game over: %s after %d seconds", status.name, self.elapsed_time()
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    def get_status(self) -> GameStatus:
        """Get current game status (method form of `status`)."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game has not reached a terminal status."""
        return self._status not in TERMINAL_STATUSES

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.VICTORY

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.DEFEAT

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.config.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.config.height

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return self.config.num_mines

    @property
    def opened_count(self) -> int:
        """Number of opened cells."""
        return self._opened_count

    @property
    def target_safe_count(self) -> int:
        """Number of safe cells that must be opened to win."""
        return self._target_safe_count

    @property
    def flag_count(self) -> int:
        """Number of flagged cells that are still unopened."""
        return sum(1 for cell in self._cells if cell.is_flagged and not cell.is_opened)

    def elapsed_time(self) -> int:
        """
        Get game duration in whole seconds.

        Returns:
            0 before the first action, the live duration while the game
            is in progress, and the frozen final duration once it ended.
        """
        if self._status == GameStatus.NOT_STARTED:
            return 0
        if self._status == GameStatus.IN_PROGRESS:
            return int(round(self._clock() - self._start_time))
        return int(round(self._end_time - self._start_time))

    def get_cell(self, coordinate: CoordinateLike) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexOutOfRange: The coordinate lies outside the board.
        """
        return self._cells[self._index_of(coordinate)]

    def render_field(self) -> List[str]:
        """
        Render the board as text, one string per row, top to bottom.

        Returns:
            List of ``height`` strings of ``width`` characters each.
        """
        width = self.config.width
        return [
            "".join(cell.render() for cell in self._cells[start:start + width])
            for start in range(0, len(self._cells), width)
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for ML agent.

        Returns:
            2D numpy array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = opened with adjacent count
                9 = opened mine
        """
        obs = np.fromiter(
            (cell.to_observation() for cell in self._cells),
            dtype=np.int8,
            count=len(self._cells),
        )
        return obs.reshape(self.config.height, self.config.width)

    def get_valid_actions(self) -> List[Coordinate]:
        """
        Get list of cells that open_cell would act on.

        Returns:
            Coordinates of unopened, unflagged cells, or an empty list
            once the game is over.
        """
        if not self.is_playing:
            return []
        return [
            self._coordinate_of(index)
            for index, cell in enumerate(self._cells)
            if cell.is_hidden
        ]

    def __str__(self) -> str:
        return "\n".join(self.render_field())
