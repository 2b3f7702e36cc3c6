#!/usr/bin/env python3
"""Let a random player run a batch of games on any tiling."""
import argparse

import numpy as np

from src.minefield.board import FieldConfig
from src.minefield.environment import TessellationEnv
from src.minefield.summary import summarize


def demo(games: int = 5, cells: int = 64, ratio: float = 0.1,
         shape: str = "hexagonal", seed: int = None, show: bool = False):
    """Play games by revealing random hidden cells and report each result."""
    config = FieldConfig(cells, ratio, shape)
    env = TessellationEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(seed)

    print(f"Board: {config.geometry.label}, {config.cell_count} cells with "
          f"{config.mine_count} mines\n")

    wins = 0
    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)
        done = truncated = False
        info = {}
        while not done:
            action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if truncated:
            print(f"Game {game + 1}: board too small for its mines")
            continue
        summary = summarize(env.board)
        wins += env.board.is_won
        print(f"Game {game + 1}: {summary.outcome.name} after "
              f"{info['steps']} moves, {info['revealed']}/{info['total_safe']} "
              f"safe cells revealed")
        if show:
            print(env.render() + "\n")

    print(f"\nWins: {wins}/{games} ({100 * wins / games:.0f}%)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--cells", type=int, default=64, help="Approximate number of cells")
    parser.add_argument("--ratio", type=float, default=0.1, help="Share of cells with a mine")
    parser.add_argument("--shape", default="hexagonal", help="Board shape")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--show", action="store_true", help="Print each final board")
    args = parser.parse_args()

    demo(games=args.games, cells=args.cells, ratio=args.ratio,
         shape=args.shape, seed=args.seed, show=args.show)
