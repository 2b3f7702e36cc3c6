"""
Board module for the minefield engine.

Implements a minefield on any supported tessellation with deferred,
safe-start mine placement, flood-fill revealing, flagging and
win/loss evaluation.
"""
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from types import MappingProxyType
from typing import (
    Any, Callable, Dict, Iterator, List, Mapping, Optional, Set, Tuple,
    Union,
)

import numpy as np

from .cell import Cell, CellState, Coordinate, MINE
from .errors import InvalidArgument
from .geometry import (
    Geometry, board_size, cell_count as count_cells, generate, neighbors,
    round_half_up,
)


# ============================================================================
# Constants
# ============================================================================

class Outcome(Enum):
    """Possible outcomes of a game."""

    UNDETERMINED = auto()
    WON = auto()
    LOST = auto()


@dataclass
class FieldConfig:
    """
    Configuration for a minefield.

    Attributes:
        approximate_cells: Desired number of cells; the board gets the
            closest size its geometry allows.
        mine_ratio: Share of cells holding a mine, in (0, 1).
        geometry: Tessellation of the board. Side counts and names are
            accepted and normalized to a Geometry.
        roman_digits: Show adjacency counts as Roman numerals.
    """

    approximate_cells: int = 144
    mine_ratio: float = 0.12
    geometry: Geometry = Geometry.SQUARE
    roman_digits: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.geometry = Geometry.parse(self.geometry)
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.approximate_cells <= 0:
            raise InvalidArgument("Number of cells must be positive")
        if not 0 < self.mine_ratio < 1:
            raise InvalidArgument("Ratio of mines must be in (0, 1)")
        cells = self.cell_count
        mines = self.mine_count
        if not 0 < mines < cells:
            raise InvalidArgument(
                f"{mines} mines do not fit a board of {cells} cells"
            )

    @property
    def cell_count(self) -> int:
        """Exact number of cells the board will have."""
        size = board_size(self.geometry, self.approximate_cells)
        return count_cells(self.geometry, size)

    @property
    def mine_count(self) -> int:
        """Number of mines the board will hold."""
        return round_half_up(self.mine_ratio * self.cell_count)


# Preset difficulty levels
BEGINNER = FieldConfig(64, 0.1)
INTERMEDIATE = FieldConfig(144, 0.12)
EXPERT = FieldConfig(256, 0.2)


def _now() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


# ============================================================================
# MineField Class
# ============================================================================

@dataclass
class MineField:
    """
    Minesweeper board on a triangular, square, cairo or hexagonal tiling.

    The board and the flags are parallel mappings keyed by (row, col).
    Mines are placed on the first reveal, away from the revealed cell and
    its neighbors.

    Attributes:
        config: Validated construction parameters.
        rng: Source of randomness for mine placement; needs sample().
        clock: Returns the current time for start and end stamps.
    """

    config: FieldConfig = field(default_factory=FieldConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    clock: Callable[[], datetime] = field(default=_now, repr=False)
    _size: int = field(init=False, default=0)
    _cell_count: int = field(init=False, default=0)
    _mine_count: int = field(init=False, default=0)
    _board: Dict[Coordinate, int] = field(
        init=False, default_factory=dict, repr=False
    )
    _flags: Dict[Coordinate, CellState] = field(
        init=False, default_factory=dict, repr=False
    )
    _mines_placed: bool = field(init=False, default=False)
    _outcome: Outcome = field(init=False, default=Outcome.UNDETERMINED)
    _started_at: Optional[datetime] = field(init=False, default=None)
    _ended_at: Optional[datetime] = field(init=False, default=None)

    def __post_init__(self) -> None:
        """Build the empty board after dataclass creation."""
        self._init_board()

    @classmethod
    def create(
        cls,
        approximate_cells: int,
        mine_ratio: float,
        geometry: Union[Geometry, int, str],
        roman_digits: bool = False,
        rng: Optional[random.Random] = None,
    ) -> "MineField":
        """
        Build a minefield from raw parameters.

        Raises:
            InvalidArgument: If any parameter is rejected by FieldConfig.
        """
        config = FieldConfig(approximate_cells, mine_ratio, geometry, roman_digits)
        return cls(config, rng if rng is not None else random.Random())

    # ========================================================================
    # Board Initialization (Low-level)
    # ========================================================================

    def _init_board(self) -> None:
        """Create the empty coordinate space."""
        size, cells, board, flags = generate(
            self.config.geometry, self.config.approximate_cells
        )
        self._size = size
        self._cell_count = cells
        self._mine_count = self.config.mine_count
        self._board = board
        self._flags = flags
        self._mines_placed = False
        self._outcome = Outcome.UNDETERMINED
        self._started_at = self.clock()
        self._ended_at = None

    def _place_mines(self, trigger: Coordinate) -> bool:
        """
        Place mines away from a cell and number the rest of the board.

        Args:
            trigger: (row, col) whose neighborhood stays mine-free.

        Returns:
            True if mines were placed, False if too few cells lie outside
            the safe zone. Nothing changes on failure.
        """
        if self._mines_placed:
            return True
        safe_zone = self._neighbors(trigger, include_self=True)
        candidates = [
            coordinate for coordinate in self._board
            if coordinate not in safe_zone
        ]
        if len(candidates) <= self._mine_count:
            return False

        for coordinate in self.rng.sample(candidates, self._mine_count):
            self._board[coordinate] = MINE
        self._calculate_adjacent_mines()
        self._mines_placed = True
        return True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for coordinate, value in self._board.items():
            if value != MINE:
                self._board[coordinate] = self._count_adjacent_mines(coordinate)

    def _count_adjacent_mines(self, coordinate: Coordinate) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for neighbor in self._neighbors(coordinate)
            if self._board[neighbor] == MINE
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _neighbors(
        self, coordinate: Coordinate, include_self: bool = False
    ) -> Set[Coordinate]:
        """Get neighbors of a cell that lie on this board."""
        return neighbors(
            coordinate, self.config.geometry, include_self, self._board
        )

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is on the board."""
        return (row, col) in self._board

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On first reveal, places mines avoiding this cell and its neighbors.
        A cell with no adjacent mines reveals its neighbors in turn.
        Off-board, flagged and revealed cells are left alone, as is the
        whole board once the game is decided.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            False if mines could not be placed because the board is too
            small for the mine count, True otherwise.
        """
        if not self._can_reveal(row, col):
            return True

        if not self._mines_placed and not self._place_mines((row, col)):
            return False

        self._flood_reveal((row, col))
        self._check_outcome()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._outcome != Outcome.UNDETERMINED:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._flags[(row, col)] == CellState.HIDDEN

    def _flood_reveal(self, start: Coordinate) -> None:
        """Reveal a cell and cascade through cells with no adjacent mines."""
        stack = [start]
        while stack:
            coordinate = stack.pop()
            if self._flags[coordinate] != CellState.HIDDEN:
                continue
            self._flags[coordinate] = CellState.REVEALED
            if self._board[coordinate] != 0:
                continue
            for neighbor in self._neighbors(coordinate):
                if self._flags[neighbor] == CellState.HIDDEN:
                    stack.append(neighbor)

    def flag(self, row: int, col: int) -> None:
        """
        Toggle flag on a cell.

        Revealed cells, off-board positions and finished games are
        ignored.

        Args:
            row: Row index.
            col: Column index.
        """
        if self._outcome != Outcome.UNDETERMINED:
            return
        if not self._is_valid_position(row, col):
            return
        state = self._flags[(row, col)]
        if state == CellState.HIDDEN:
            self._flags[(row, col)] = CellState.FLAGGED
        elif state == CellState.FLAGGED:
            self._flags[(row, col)] = CellState.HIDDEN

    # ========================================================================
    # Outcome Evaluation
    # ========================================================================

    def _check_outcome(self) -> None:
        """Decide the game once a mine or every safe cell is revealed."""
        if self._outcome != Outcome.UNDETERMINED:
            return
        if self._mine_revealed():
            self._finish(Outcome.LOST)
        elif self._all_safe_cells_revealed():
            self._finish(Outcome.WON)

    def _mine_revealed(self) -> bool:
        """Check if any mine has been revealed."""
        return any(
            value == MINE and self._flags[coordinate] == CellState.REVEALED
            for coordinate, value in self._board.items()
        )

    def _all_safe_cells_revealed(self) -> bool:
        """Check if every non-mine cell is revealed."""
        return all(
            self._flags[coordinate] == CellState.REVEALED
            for coordinate, value in self._board.items()
            if value != MINE
        )

    def _finish(self, outcome: Outcome) -> None:
        """Stamp the end time and reveal all mines."""
        self._outcome = outcome
        self._ended_at = self.clock()
        for coordinate, value in self._board.items():
            if value == MINE:
                self._flags[coordinate] = CellState.REVEALED

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def geometry(self) -> Geometry:
        """Tessellation of the board."""
        return self.config.geometry

    @property
    def size(self) -> int:
        """Size parameter derived from the approximate cell count."""
        return self._size

    @property
    def cell_count(self) -> int:
        """Exact number of cells on the board."""
        return self._cell_count

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return self._mine_count

    @property
    def roman_digits(self) -> bool:
        """Whether counts are shown as Roman numerals."""
        return self.config.roman_digits

    @property
    def mines_placed(self) -> bool:
        """Whether the first reveal has placed the mines."""
        return self._mines_placed

    @property
    def outcome(self) -> Outcome:
        """Get current outcome."""
        return self._outcome

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._outcome == Outcome.UNDETERMINED

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._outcome == Outcome.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._outcome == Outcome.LOST

    @property
    def started_at(self) -> Optional[datetime]:
        """Time the current game began."""
        return self._started_at

    @property
    def ended_at(self) -> Optional[datetime]:
        """Time the game was decided, or None while playing."""
        return self._ended_at

    @property
    def board(self) -> Mapping[Coordinate, int]:
        """Read-only view of cell values (counts or MINE)."""
        return MappingProxyType(self._board)

    @property
    def flags(self) -> Mapping[Coordinate, CellState]:
        """Read-only view of cell states."""
        return MappingProxyType(self._flags)

    @property
    def coordinates(self) -> List[Coordinate]:
        """All coordinates in row-major order."""
        return list(self._board)

    @property
    def flag_count(self) -> int:
        """Number of flagged cells."""
        return sum(
            1 for state in self._flags.values() if state == CellState.FLAGGED
        )

    @property
    def remaining_flags(self) -> int:
        """Mines left to flag; negative when the player over-flags."""
        return self._mine_count - self.flag_count

    def __iter__(self) -> Iterator[Tuple[Coordinate, int, CellState]]:
        """Iterate over (coordinate, value, state) in row-major order."""
        for coordinate, value in self._board.items():
            yield coordinate, value, self._flags[coordinate]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for (row, col), value, state in self:
            yield Cell(row, col, value, state)

    def rows(self) -> Iterator[Tuple[int, List[Cell]]]:
        """Iterate over (row index, cells of that row) pairs."""
        current: Optional[int] = None
        row_cells: List[Cell] = []
        for cell in self.cells():
            if cell.row != current and row_cells:
                yield current, row_cells
                row_cells = []
            current = cell.row
            row_cells.append(cell)
        if row_cells:
            yield current, row_cells

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return Cell(row, col, self._board[(row, col)], self._flags[(row, col)])

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a flat numpy array in row-major order.

        Returns:
            1D numpy array where:
                -1 = hidden
                -2 = flagged
                0-12 = revealed with adjacent count
                13 = revealed mine
        """
        return np.array(
            [cell.to_observation() for cell in self.cells()], dtype=np.int8
        )

    def get_valid_actions(self) -> List[Coordinate]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden.
        """
        if not self.is_playing:
            return []
        return [
            coordinate for coordinate, state in self._flags.items()
            if state == CellState.HIDDEN
        ]

    # ========================================================================
    # Plain-data Snapshot
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain data for serialization."""
        return {
            "config": {
                "approximate_cells": self.config.approximate_cells,
                "mine_ratio": self.config.mine_ratio,
                "geometry": self.config.geometry.value,
                "roman_digits": self.config.roman_digits,
            },
            "cells": [
                [row, col, value, state.name]
                for (row, col), value, state in self
            ],
            "mines_placed": self._mines_placed,
            "outcome": self._outcome.name,
            "started_at": _isoformat(self._started_at),
            "ended_at": _isoformat(self._ended_at),
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "MineField":
        """
        Restore a minefield from to_dict output.

        Raises:
            InvalidArgument: If the snapshot does not fit its geometry or
                its mines, outcome and end time disagree.
        """
        config = FieldConfig(**data["config"])
        minefield = cls(
            config,
            rng if rng is not None else random.Random(),
            clock if clock is not None else _now,
        )
        cells = data["cells"]
        if len(cells) != minefield.cell_count:
            raise InvalidArgument("Snapshot cell count does not match geometry")
        for row, col, value, state in cells:
            coordinate = (row, col)
            if coordinate not in minefield._board:
                raise InvalidArgument(f"Cell {coordinate} is not on the board")
            minefield._board[coordinate] = value
            minefield._flags[coordinate] = _parse_member(CellState, state)
        minefield._mines_placed = bool(data["mines_placed"])
        minefield._outcome = _parse_member(Outcome, data["outcome"])
        minefield._started_at = _parse_time(data["started_at"])
        minefield._ended_at = _parse_time(data["ended_at"])
        minefield._validate_snapshot()
        return minefield

    def _validate_snapshot(self) -> None:
        """Check that restored mines, outcome and end time agree."""
        mines = sum(1 for value in self._board.values() if value == MINE)
        expected = self._mine_count if self._mines_placed else 0
        if mines != expected:
            raise InvalidArgument(
                f"Snapshot holds {mines} mines, expected {expected}"
            )
        decided = self._outcome != Outcome.UNDETERMINED
        if decided != (self._ended_at is not None):
            raise InvalidArgument(
                "Snapshot end time must be set exactly when the game is decided"
            )

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_board()


def _isoformat(moment: Optional[datetime]) -> Optional[str]:
    """Format a timestamp for a snapshot."""
    return moment.isoformat() if moment is not None else None


def _parse_member(enum_type: type, name: str) -> Any:
    """Look up an enum member by name from a snapshot."""
    try:
        return enum_type[name]
    except KeyError:
        raise InvalidArgument(
            f"Unknown {enum_type.__name__} in snapshot: {name!r}"
        ) from None


def _parse_time(text: Optional[str]) -> Optional[datetime]:
    """Parse a snapshot timestamp."""
    return datetime.fromisoformat(text) if text is not None else None
