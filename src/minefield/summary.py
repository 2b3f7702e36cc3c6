"""
End-of-game summary.

Classifies a finished board by size and mine density and reports how long
the game took.
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from .board import MineField, Outcome


# ============================================================================
# Constants
# ============================================================================

# Upper cell-count bound (inclusive) of each size class.
SIZE_CLASSES: Tuple[Tuple[int, str], ...] = (
    (19, "micro"),
    (25, "mini"),
    (36, "small"),
    (64, "moderate"),
    (100, "medium"),
    (144, "large"),
    (225, "immense"),
)
LARGEST_SIZE_CLASS = "extreme"

# Upper mine-ratio bound (exclusive) of each density class.
DENSITY_CLASSES: Tuple[Tuple[float, str], ...] = (
    (0.1, "low"),
    (0.2, "medium"),
    (0.3, "high"),
    (0.4, "bosnia"),
)
DENSEST_CLASS = "berlin"


# ============================================================================
# Summary
# ============================================================================

@dataclass(frozen=True)
class GameSummary:
    """
    Facts shown when a game ends.

    Attributes:
        outcome: Result of the game.
        size_class: Name of the board's size class.
        density_class: Name of the board's mine density class.
        shape: Display name of the geometry.
        play_time: Time between start and end, None while playing.
    """

    outcome: Outcome
    size_class: str
    density_class: str
    shape: str
    play_time: Optional[timedelta]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "outcome": self.outcome.name,
            "size": self.size_class,
            "density": self.density_class,
            "shape": self.shape,
            "play_time": (
                format_play_time(self.play_time)
                if self.play_time is not None else None
            ),
        }


def size_class(cells: int) -> str:
    """Name the size class of a board with this many cells."""
    for bound, name in SIZE_CLASSES:
        if cells <= bound:
            return name
    return LARGEST_SIZE_CLASS


def density_class(ratio: float) -> str:
    """Name the density class of a mine ratio."""
    for bound, name in DENSITY_CLASSES:
        if ratio < bound:
            return name
    return DENSEST_CLASS


def format_play_time(delta: timedelta) -> str:
    """Format a duration as HH:MM:SS."""
    seconds = int(delta.total_seconds())
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def summarize(minefield: MineField) -> GameSummary:
    """
    Build the summary of a game.

    Args:
        minefield: Board to describe.

    Returns:
        GameSummary of the board in its current state.
    """
    play_time = None
    if minefield.ended_at is not None and minefield.started_at is not None:
        play_time = minefield.ended_at - minefield.started_at
    return GameSummary(
        outcome=minefield.outcome,
        size_class=size_class(minefield.cell_count),
        density_class=density_class(
            minefield.mine_count / minefield.cell_count
        ),
        shape=minefield.geometry.label,
        play_time=play_time,
    )
