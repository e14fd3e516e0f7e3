#!/usr/bin/env python3
"""Watch a random player work through Minesweeper boards."""
import os
import time
from typing import Optional

import numpy as np

from src.sweeper import Difficulty, MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(
    delay: float = 0.3,
    games: int = 3,
    difficulty: Difficulty = Difficulty.EASY,
    seed: Optional[int] = None,
):
    """Run demo games with visualization."""
    env = MinesweeperEnv(difficulty, render_mode="ansi")
    rng = np.random.default_rng(seed)
    config = env.config

    print(
        f"Board: {config.rows}x{config.cols} with {config.mine_count} mines "
        f"({difficulty.value})"
    )
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            # Only open actions: the first half of the mask
            mask = env.get_action_mask()[: config.rows * config.cols]
            action = int(rng.choice(np.flatnonzero(mask)))
            row, col = divmod(action, config.cols)

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("status") == "WON":
                    wins += 1
                    print(f"\n*** WIN! ***")
                else:
                    print(f"\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--difficulty", default="easy", help="easy, medium or hard")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    demo(
        delay=args.delay,
        games=args.games,
        difficulty=Difficulty.from_name(args.difficulty),
        seed=args.seed,
    )
