"""
Pytest configuration and shared fixtures.
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Sequence

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, CellState, FieldConfig, Geometry, MineField


# ============================================================================
# Test Doubles
# ============================================================================

class FixedSampler:
    """Sampler that always places mines on the given coordinates."""

    def __init__(self, mines: Sequence) -> None:
        self.mines = list(mines)
        self.population: List = []

    def sample(self, population, k):
        self.population = list(population)
        assert k == len(self.mines), "mine count does not match fixture"
        for mine in self.mines:
            assert mine in self.population, f"{mine} is in the safe zone"
        return list(self.mines)


class SteppingClock:
    """Clock that moves forward by a fixed step on every call."""

    def __init__(self, step: timedelta = timedelta(seconds=90)) -> None:
        self.start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        moment = self.start + self.calls * self.step
        self.calls += 1
        return moment


def rigged_field(
    approximate_cells: int,
    mine_ratio: float,
    geometry: Geometry,
    mines: Sequence,
    roman_digits: bool = False,
) -> MineField:
    """Build a board whose first reveal places mines exactly at mines."""
    config = FieldConfig(approximate_cells, mine_ratio, geometry, roman_digits)
    return MineField(config, FixedSampler(mines), SteppingClock())


@pytest.fixture
def make_rigged() -> Callable[..., MineField]:
    """Factory for boards with predetermined mines."""
    return rigged_field


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_field() -> MineField:
    """Create a default 12x12 square board with seeded placement."""
    return MineField(FieldConfig(), random.Random(1234))


@pytest.fixture
def small_square() -> MineField:
    """Create a 4x4 square board with 2 mines."""
    return MineField(FieldConfig(16, 0.1, Geometry.SQUARE), random.Random(7))


@pytest.fixture
def triangle_field() -> MineField:
    """Create a triangular board with 36 cells."""
    return MineField(
        FieldConfig(36, 0.15, Geometry.TRIANGULAR), random.Random(11)
    )


@pytest.fixture
def hexagon_field() -> MineField:
    """Create a hexagonal board with 37 cells."""
    return MineField(
        FieldConfig(37, 0.15, Geometry.HEXAGONAL), random.Random(13)
    )


@pytest.fixture(params=list(Geometry), ids=lambda g: g.name.lower())
def any_geometry(request) -> Geometry:
    """Every supported tessellation."""
    return request.param


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a revealed cell containing a mine."""
    return Cell(1, -1, -1, CellState.REVEALED)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    return Cell(2, 0, 3, CellState.REVEALED)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> FieldConfig:
    """Create a valid board configuration."""
    return FieldConfig(144, 0.12, Geometry.SQUARE)
