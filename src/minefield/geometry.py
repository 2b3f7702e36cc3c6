"""
Board geometry for the supported tessellations.

Builds the coordinate space of a board from an approximate cell count and
resolves the neighbors of a cell for each tiling. Coordinates are
(row, col) tuples and may be negative: triangular rows are centered on
column 0 and hexagonal boards are centered on (0, 0), with columns
stepping by two.
"""
import math
from enum import Enum
from typing import Container, Dict, List, Optional, Set, Tuple, Union

from .cell import CellState, Coordinate
from .errors import InvalidArgument


# ============================================================================
# Geometry Enum
# ============================================================================

class Geometry(Enum):
    """Board tessellation, valued by the number of sides of a tile."""

    TRIANGULAR = 3
    SQUARE = 4
    CAIRO = 5
    HEXAGONAL = 6

    @property
    def label(self) -> str:
        """Display name of the shape."""
        return SHAPE_LABELS[self]

    @classmethod
    def parse(cls, value: Union["Geometry", int, str]) -> "Geometry":
        """
        Resolve a geometry from a member, its side count, or a name.

        Args:
            value: Geometry, side count (3, 4, 5, 6) or name such as
                "hexagonal" or "quadratic".

        Returns:
            The matching geometry.

        Raises:
            InvalidArgument: If value names no known geometry.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for geometry in cls:
                if key in (geometry.name.lower(), geometry.label):
                    return geometry
            if key.isdigit():
                value = int(key)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidArgument(f"Unknown geometry: {value!r}")


SHAPE_LABELS: Dict[Geometry, str] = {
    Geometry.TRIANGULAR: "triangular",
    Geometry.SQUARE: "quadratic",
    Geometry.CAIRO: "egyptian",
    Geometry.HEXAGONAL: "hexagonal",
}


# ============================================================================
# Neighbor Offsets
# ============================================================================

Offsets = Tuple[Tuple[int, int], ...]

SQUARE_OFFSETS: Offsets = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)

TRIANGLE_UP_OFFSETS: Offsets = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -2), (0, -1), (0, 1), (0, 2),
    (1, -2), (1, -1), (1, 0), (1, 1), (1, 2),
)

TRIANGLE_DOWN_OFFSETS: Offsets = (
    (-1, -2), (-1, -1), (-1, 0), (-1, 1), (-1, 2),
    (0, -2), (0, -1), (0, 1), (0, 2),
    (1, -1), (1, 0), (1, 1),
)

# Cairo pentagons, keyed by (row % 2, col % 2).
CAIRO_OFFSETS: Dict[Tuple[int, int], Offsets] = {
    (0, 0): (
        (-1, -1), (-1, 0), (-1, 1),
        (0, -1), (0, 1),
        (1, -1), (1, 0),
    ),
    (0, 1): (
        (-1, -1), (-1, 0),
        (0, -1), (0, 1),
        (1, -1), (1, 0), (1, 1),
    ),
    (1, 0): (
        (-1, -1), (-1, 0), (-1, 1),
        (0, -1), (0, 1),
        (1, 0), (1, 1),
    ),
    (1, 1): (
        (-1, 0), (-1, 1),
        (0, -1), (0, 1),
        (1, -1), (1, 0), (1, 1),
    ),
}

HEXAGON_OFFSETS: Offsets = (
    (-1, -1), (-1, 1),
    (0, -2), (0, 2),
    (1, -1), (1, 1),
)


def is_upward(row: int, col: int) -> bool:
    """Check if the triangle at (row, col) points up."""
    return row % 2 == abs(col) % 2


def neighbor_offsets(geometry: Geometry, row: int, col: int) -> Offsets:
    """Get the offset pattern of the cell at (row, col)."""
    if geometry is Geometry.TRIANGULAR:
        if is_upward(row, col):
            return TRIANGLE_UP_OFFSETS
        return TRIANGLE_DOWN_OFFSETS
    if geometry is Geometry.SQUARE:
        return SQUARE_OFFSETS
    if geometry is Geometry.CAIRO:
        return CAIRO_OFFSETS[(row % 2, col % 2)]
    return HEXAGON_OFFSETS


def neighbors(
    coordinate: Coordinate,
    geometry: Geometry,
    include_self: bool = False,
    on_board: Optional[Container[Coordinate]] = None,
) -> Set[Coordinate]:
    """
    Get the neighboring coordinates of a cell.

    Pass the board's coordinates as on_board to get only cells that exist.
    Without it the raw offset pattern is returned, which may include
    positions off the board (e.g. (-1, -1) for a square corner).

    Args:
        coordinate: (row, col) of the center cell.
        geometry: Tessellation of the board.
        include_self: Also return the center cell.
        on_board: Coordinates present on the board; candidates outside it
            are dropped. When None, nothing is clipped.

    Returns:
        Set of neighbor coordinates.
    """
    row, col = coordinate
    result = {
        (row + delta_row, col + delta_col)
        for delta_row, delta_col in neighbor_offsets(geometry, row, col)
    }
    if include_self:
        result.add(coordinate)
    if on_board is not None:
        result = {candidate for candidate in result if candidate in on_board}
    return result


# ============================================================================
# Coordinate Space
# ============================================================================

def round_half_up(value: float) -> int:
    """Round halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def board_size(geometry: Geometry, approximate_cells: int) -> int:
    """
    Compute the size parameter closest to an approximate cell count.

    Square, triangular and cairo boards use the side length; hexagonal
    boards use the number of cells along one edge.

    Raises:
        InvalidArgument: If approximate_cells is not positive.
    """
    geometry = Geometry.parse(geometry)
    if approximate_cells <= 0:
        raise InvalidArgument(
            f"Number of cells must be positive, got {approximate_cells}"
        )
    if geometry is Geometry.HEXAGONAL:
        return round_half_up(
            0.5 + math.sqrt(0.25 + (approximate_cells - 1) / 3)
        )
    return round_half_up(math.sqrt(approximate_cells))


def cell_count(geometry: Geometry, size: int) -> int:
    """Exact number of cells of a board with the given size."""
    if Geometry.parse(geometry) is Geometry.HEXAGONAL:
        return 3 * size * (size - 1) + 1
    return size * size


def row_columns(geometry: Geometry, size: int, row: int) -> range:
    """Columns present in one row of the board."""
    if geometry is Geometry.TRIANGULAR:
        return range(-row, row + 1)
    if geometry is Geometry.HEXAGONAL:
        start = 2 + abs(row) - 2 * size
        end = 2 * size - 2 - abs(row)
        return range(start, end + 1, 2)
    return range(size)


def row_indices(geometry: Geometry, size: int) -> range:
    """Row indices of the board, top to bottom."""
    if geometry is Geometry.HEXAGONAL:
        return range(1 - size, size)
    return range(size)


def coordinates(geometry: Geometry, size: int) -> List[Coordinate]:
    """
    Enumerate every coordinate of a board in row-major order.

    Args:
        geometry: Tessellation of the board.
        size: Size parameter from board_size.

    Returns:
        List of (row, col) tuples.
    """
    geometry = Geometry.parse(geometry)
    return [
        (row, col)
        for row in row_indices(geometry, size)
        for col in row_columns(geometry, size, row)
    ]


def generate(
    geometry: Geometry, approximate_cells: int
) -> Tuple[int, int, Dict[Coordinate, int], Dict[Coordinate, CellState]]:
    """
    Build an empty board for a geometry.

    Args:
        geometry: Tessellation of the board.
        approximate_cells: Desired number of cells.

    Returns:
        Tuple of (size, exact cell count, board with every count at 0,
        flags with every cell hidden).

    Raises:
        InvalidArgument: If geometry is unknown or approximate_cells is
            not positive.
    """
    geometry = Geometry.parse(geometry)
    size = board_size(geometry, approximate_cells)
    coords = coordinates(geometry, size)
    board = {coordinate: 0 for coordinate in coords}
    flags = {coordinate: CellState.HIDDEN for coordinate in coords}
    return size, len(coords), board, flags
