"""
Unit tests for board geometry.

Tests geometry parsing, coordinate generation and neighbor resolution
for every tessellation.
"""
import pytest

from minefield import CellState, Geometry, InvalidArgument, generate, neighbors
from minefield.geometry import board_size, cell_count, coordinates, is_upward


# ============================================================================
# Geometry Parsing Tests
# ============================================================================

class TestGeometryParse:
    """Test resolving geometries from user input."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Geometry.HEXAGONAL, Geometry.HEXAGONAL),
            (3, Geometry.TRIANGULAR),
            (4, Geometry.SQUARE),
            (5, Geometry.CAIRO),
            (6, Geometry.HEXAGONAL),
            ("square", Geometry.SQUARE),
            ("Quadratic", Geometry.SQUARE),
            ("egyptian", Geometry.CAIRO),
            (" triangular ", Geometry.TRIANGULAR),
            ("6", Geometry.HEXAGONAL),
        ],
    )
    def test_known_values(self, value, expected: Geometry) -> None:
        """Members, side counts and names resolve."""
        assert Geometry.parse(value) is expected

    @pytest.mark.parametrize("value", [7, 0, "octagon", None, True, 4.5])
    def test_unknown_values_raise_error(self, value) -> None:
        """Unknown geometries raise InvalidArgument."""
        with pytest.raises(InvalidArgument, match="Unknown geometry"):
            Geometry.parse(value)

    def test_labels(self) -> None:
        """Each geometry has a display label."""
        assert [g.label for g in Geometry] == [
            "triangular", "quadratic", "egyptian", "hexagonal"
        ]


# ============================================================================
# Generation Tests
# ============================================================================

class TestGenerate:
    """Test coordinate space generation."""

    def test_cell_count_matches_closed_form(
        self, any_geometry: Geometry
    ) -> None:
        """Generated coordinates always match the closed-form count."""
        for approximate in range(1, 301):
            size, cells, board, flags = generate(any_geometry, approximate)
            if any_geometry is Geometry.HEXAGONAL:
                assert cells == 3 * size * (size - 1) + 1
            else:
                assert cells == size * size
            assert len(board) == cells
            assert set(board) == set(flags)

    def test_empty_board_and_flags(self, any_geometry: Geometry) -> None:
        """Fresh boards hold zero counts and hidden cells."""
        _, _, board, flags = generate(any_geometry, 50)
        assert set(board.values()) == {0}
        assert set(flags.values()) == {CellState.HIDDEN}

    def test_square_layout(self) -> None:
        """Square boards are dense size x size grids."""
        size, cells, board, _ = generate(Geometry.SQUARE, 16)
        assert (size, cells) == (4, 16)
        assert set(board) == {(r, c) for r in range(4) for c in range(4)}

    def test_square_size_rounds(self) -> None:
        """Size is the rounded square root."""
        assert board_size(Geometry.SQUARE, 20) == 4
        assert board_size(Geometry.SQUARE, 21) == 5

    def test_triangular_rows_are_centered(self) -> None:
        """Row i of a triangle spans columns -i..i."""
        size, cells, board, _ = generate(Geometry.TRIANGULAR, 9)
        assert (size, cells) == (3, 9)
        assert set(board) == {
            (0, 0),
            (1, -1), (1, 0), (1, 1),
            (2, -2), (2, -1), (2, 0), (2, 1), (2, 2),
        }

    def test_hexagon_of_seven(self) -> None:
        """Seven cells make a size-2 hexagon around the origin."""
        size, cells, board, _ = generate(Geometry.HEXAGONAL, 7)
        assert (size, cells) == (2, 7)
        assert set(board) == {
            (-1, -1), (-1, 1),
            (0, -2), (0, 0), (0, 2),
            (1, -1), (1, 1),
        }

    @pytest.mark.parametrize(
        "approximate, size",
        [(1, 1), (7, 2), (19, 3), (37, 4), (40, 4), (61, 5)],
    )
    def test_hexagon_sizes(self, approximate: int, size: int) -> None:
        """Centered hexagonal numbers map to their own size."""
        assert board_size(Geometry.HEXAGONAL, approximate) == size

    def test_cairo_is_dense_square(self) -> None:
        """Cairo boards share the square coordinate space."""
        assert coordinates(Geometry.CAIRO, 3) == coordinates(Geometry.SQUARE, 3)

    def test_coordinates_are_row_major(self) -> None:
        """Coordinates are ordered by row, then by column."""
        coords = coordinates(Geometry.HEXAGONAL, 3)
        assert coords == sorted(coords)

    def test_cell_count_helper(self) -> None:
        """Closed-form helper agrees with the formulas."""
        assert cell_count(Geometry.TRIANGULAR, 5) == 25
        assert cell_count(Geometry.HEXAGONAL, 4) == 37

    @pytest.mark.parametrize("approximate", [0, -5])
    def test_non_positive_count_raises_error(self, approximate: int) -> None:
        """Non-positive cell counts are rejected."""
        with pytest.raises(InvalidArgument, match="must be positive"):
            generate(Geometry.SQUARE, approximate)

    def test_unknown_geometry_raises_error(self) -> None:
        """Unknown geometry is rejected."""
        with pytest.raises(InvalidArgument):
            generate(8, 16)


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test adjacency for each tessellation."""

    def test_square_interior_has_eight(self) -> None:
        """Square cells touch their 8 king-move neighbors."""
        assert neighbors((5, 5), Geometry.SQUARE) == {
            (4, 4), (4, 5), (4, 6),
            (5, 4), (5, 6),
            (6, 4), (6, 5), (6, 6),
        }

    def test_square_corner_is_clipped(self) -> None:
        """Off-board candidates are dropped."""
        _, _, board, _ = generate(Geometry.SQUARE, 16)
        assert neighbors((0, 0), Geometry.SQUARE, on_board=board) == {
            (0, 1), (1, 0), (1, 1),
        }

    def test_unclipped_without_board(self) -> None:
        """Without a board the raw offset pattern is returned."""
        _, _, board, _ = generate(Geometry.SQUARE, 16)
        raw = neighbors((0, 0), Geometry.SQUARE)
        assert (-1, -1) in raw
        assert len(raw) == 8
        assert neighbors((0, 0), Geometry.SQUARE, on_board=board) <= set(board)

    def test_include_self(self) -> None:
        """include_self adds the center cell."""
        result = neighbors((0, 0), Geometry.HEXAGONAL, include_self=True)
        assert (0, 0) in result
        assert len(result) == 7

    def test_hexagon_offsets(self) -> None:
        """Hexagons touch six cells two columns apart in a row."""
        assert neighbors((0, 0), Geometry.HEXAGONAL) == {
            (-1, -1), (-1, 1), (0, -2), (0, 2), (1, -1), (1, 1),
        }

    def test_triangle_orientation(self) -> None:
        """Orientation alternates along a row and between rows."""
        assert is_upward(0, 0) is True
        assert is_upward(1, 0) is False
        assert is_upward(1, -1) is True
        assert is_upward(2, -1) is False

    def test_upward_triangle_interior_has_twelve(self) -> None:
        """An interior upward triangle has 12 neighbors."""
        _, _, board, _ = generate(Geometry.TRIANGULAR, 25)
        result = neighbors((2, 0), Geometry.TRIANGULAR, on_board=board)
        assert result == {
            (1, -1), (1, 0), (1, 1),
            (2, -2), (2, -1), (2, 1), (2, 2),
            (3, -2), (3, -1), (3, 0), (3, 1), (3, 2),
        }

    def test_downward_triangle_offsets(self) -> None:
        """A downward triangle reaches further into the row above."""
        result = neighbors((3, 0), Geometry.TRIANGULAR)
        assert result == {
            (2, -2), (2, -1), (2, 0), (2, 1), (2, 2),
            (3, -2), (3, -1), (3, 1), (3, 2),
            (4, -1), (4, 0), (4, 1),
        }

    def test_triangle_apex(self) -> None:
        """The apex only touches the row below it."""
        _, _, board, _ = generate(Geometry.TRIANGULAR, 9)
        assert neighbors((0, 0), Geometry.TRIANGULAR, on_board=board) == {
            (1, -1), (1, 0), (1, 1),
        }

    @pytest.mark.parametrize("row, col", [(2, 2), (2, 3), (3, 2), (3, 3)])
    def test_cairo_interior_has_seven(self, row: int, col: int) -> None:
        """Every cairo pentagon has 7 neighbors."""
        assert len(neighbors((row, col), Geometry.CAIRO)) == 7

    def test_adjacency_is_symmetric(self, any_geometry: Geometry) -> None:
        """If a touches b then b touches a."""
        _, _, board, _ = generate(any_geometry, 100)
        for coordinate in board:
            for neighbor in neighbors(coordinate, any_geometry, on_board=board):
                assert coordinate in neighbors(neighbor, any_geometry)

    def test_never_includes_self_by_default(
        self, any_geometry: Geometry
    ) -> None:
        """A cell is not its own neighbor."""
        for coordinate in coordinates(any_geometry, 4):
            assert coordinate not in neighbors(coordinate, any_geometry)
