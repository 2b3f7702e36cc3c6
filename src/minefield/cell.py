"""
Cell module for the minefield engine.

Defines the per-cell visual state (hidden/flagged/revealed), the mine
marker stored in the board, and a read-only view of a single cell used
by renderers.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple

from .numerals import romanise


# ============================================================================
# Constants
# ============================================================================

Coordinate = Tuple[int, int]

# Board value of a cell holding a mine; counts are always >= 0.
MINE = -1

# Observation of a revealed mine; above the largest count (12 on triangles).
MINE_OBSERVATION = 13


class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Snapshot of a single cell on the board.

    Attributes:
        row: Row index (may be negative on hexagonal boards).
        col: Column index (may be negative on triangular and hexagonal boards).
        value: Adjacent mine count, or MINE.
        state: Current visual state.
    """

    row: int
    col: int
    value: int = 0
    state: CellState = CellState.HIDDEN

    @property
    def coordinate(self) -> Coordinate:
        """(row, col) key of this cell."""
        return (self.row, self.col)

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self.value == MINE

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def label(self, roman: bool = False) -> str:
        """
        Text shown for this cell.

        Args:
            roman: Write counts as Roman numerals.

        Returns:
            "." for hidden, "F" for flagged, "*" for a revealed mine,
            "" for a revealed zero, otherwise the count.
        """
        if self.state == CellState.HIDDEN:
            return "."
        if self.state == CellState.FLAGGED:
            return "F"
        if self.is_mine:
            return "*"
        if self.value == 0:
            return ""
        return romanise(self.value) if roman else str(self.value)

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-12: Revealed cell with adjacent mine count
            13: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return MINE_OBSERVATION
        return self.value

