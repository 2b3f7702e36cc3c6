#!/usr/bin/env python3
"""
Tessellated Minesweeper - Main entry point.

Usage:
    python main.py play [--cells N] [--ratio R] [--shape S] [--roman] [--seed N]
    python main.py shapes
"""
import argparse
import random

from src.minefield.board import FieldConfig, MineField
from src.minefield.environment import render_ansi
from src.minefield.errors import InvalidArgument
from src.minefield.geometry import Geometry
from src.minefield.summary import format_play_time, summarize


HELP = "Commands: r ROW COL (reveal), f ROW COL (flag), q (quit)"


def print_board(minefield: MineField) -> None:
    """Print the board and the remaining flag count."""
    print(render_ansi(minefield))
    print(f"Remaining flags: {minefield.remaining_flags}")


def print_summary(minefield: MineField) -> None:
    """Print the end-of-game summary."""
    summary = summarize(minefield)
    print("\n*** WIN! ***" if minefield.is_won else "\n*** LOST (hit mine) ***")
    print(f"  Size: {summary.size_class} ({minefield.cell_count} cells)")
    print(f"  Mine density: {summary.density_class}")
    print(f"  Shape: {summary.shape}")
    if summary.play_time is not None:
        print(f"  Play time: {format_play_time(summary.play_time)}")


def apply_command(minefield: MineField, line: str) -> bool:
    """
    Apply one command line to the board.

    Returns:
        False when the player asked to quit, True otherwise.
    """
    parts = line.split()
    if not parts:
        return True
    if parts[0] in ("q", "quit"):
        return False
    if parts[0] not in ("r", "f") or len(parts) != 3:
        print(HELP)
        return True
    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        print(HELP)
        return True

    if parts[0] == "f":
        minefield.flag(row, col)
    elif not minefield.reveal(row, col):
        print("Warning: the board is too small for this many mines. "
              "Start a new game with fewer mines or more cells.")
    return True


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    try:
        config = FieldConfig(args.cells, args.ratio, args.shape, args.roman)
    except InvalidArgument as exc:
        print(f"Invalid settings: {exc}")
        return

    minefield = MineField(config, random.Random(args.seed))
    print(
        f"{config.geometry.label.capitalize()} board: "
        f"{minefield.cell_count} cells, {minefield.mine_count} mines"
    )
    print(HELP)
    print_board(minefield)

    while minefield.is_playing:
        try:
            line = input("> ")
        except EOFError:
            break
        if not apply_command(minefield, line):
            break
        print_board(minefield)

    if not minefield.is_playing:
        print_summary(minefield)


def shapes(args: argparse.Namespace) -> None:
    """List the supported board shapes."""
    for geometry in Geometry:
        print(f"{geometry.value}  {geometry.name.lower():<11} {geometry.label}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Tessellated Minesweeper - play on triangles, squares, "
                    "pentagons and hexagons"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--cells", type=int, default=144, help="Approximate number of cells"
    )
    play_parser.add_argument(
        "--ratio", type=float, default=0.12, help="Share of cells with a mine"
    )
    play_parser.add_argument(
        "--shape", default="square",
        help="Board shape: triangular, square, cairo, hexagonal or 3-6",
    )
    play_parser.add_argument(
        "--roman", action="store_true", help="Show counts as Roman numerals"
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    # Shapes command
    subparsers.add_parser("shapes", help="List board shapes")

    args = parser.parse_args()

    if args.command == "play":
        play(args)
    elif args.command == "shapes":
        shapes(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
