"""
Minesweeper engine for triangular, square, cairo and hexagonal boards.

Provides board geometry, deferred mine placement, reveal and flag logic,
outcome evaluation, and a Gymnasium environment wrapper.
"""
from .errors import InvalidArgument
from .cell import Cell, CellState, Coordinate, MINE
from .geometry import Geometry, generate, neighbors
from .board import (
    FieldConfig, MineField, Outcome, BEGINNER, INTERMEDIATE, EXPERT
)
from .numerals import romanise
from .summary import GameSummary, summarize
from .environment import TessellationEnv, render_ansi

__all__ = [
    "InvalidArgument",
    "Cell",
    "CellState",
    "Coordinate",
    "MINE",
    "Geometry",
    "generate",
    "neighbors",
    "FieldConfig",
    "MineField",
    "Outcome",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "romanise",
    "GameSummary",
    "summarize",
    "TessellationEnv",
    "render_ansi",
]
