#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--size N] [--bombs N] [--seed S]
    python main.py demo [--games N] [--delay SECONDS]
    python main.py evaluate [--games N]
"""
import argparse
import os
import time
from typing import Optional, Tuple

import numpy as np

from src.minefield.board import Board, BoardConfig, GameState, seeded_shuffle
from src.minefield.environment import MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def parse_move(text: str, dimension: int) -> Optional[Tuple[int, int]]:
    """Turn an ``x y`` line into board coordinates, or None if unusable."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        x, y = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= x < dimension and 0 <= y < dimension):
        return None
    return x, y


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    board = Board(
        BoardConfig(dimension=args.size, num_bombs=args.bombs),
        seeded_shuffle(args.seed),
    )

    print(f"Board: {args.size}x{args.size} with {args.bombs} bombs")
    print("Enter moves as 'x y' (column, row). 'q' quits.\n")
    print(board.render())

    while board.is_playing:
        try:
            line = input("\nmove> ").strip()
        except EOFError:
            break
        if line.lower() in ("q", "quit", "exit"):
            break

        move = parse_move(line, args.size)
        if move is None:
            print(f"Expected two numbers between 0 and {args.size - 1}")
            continue

        board.reveal(*move)
        print()
        print(board.render())

    if board.game_state == GameState.WON:
        print("\n*** WIN! ***")
    elif board.game_state == GameState.LOST:
        print("\n*** LOST (hit bomb) ***")


def random_action(rng: np.random.Generator, mask: np.ndarray) -> int:
    """Pick a random hidden cell."""
    return int(rng.choice(np.flatnonzero(mask)))


def demo(args: argparse.Namespace) -> None:
    """Watch a random player clear boards."""
    config = BoardConfig(dimension=args.size, num_bombs=args.bombs)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    print(f"Board: {args.size}x{args.size} with {args.bombs} bombs")
    wins = 0

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        _, info = env.reset(seed=seed)

        done = False
        step = 0

        while not done:
            action = random_action(rng, env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: {action % args.size} {action // args.size}\n")
            print(env.render())
            time.sleep(args.delay)

        if info["game_state"] == GameState.WON.name:
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit bomb) ***")
        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{args.games} wins ({100*wins/args.games:.0f}%) ===")


def evaluate(args: argparse.Namespace) -> None:
    """Measure how a random player fares over many games."""
    config = BoardConfig(dimension=args.size, num_bombs=args.bombs)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    print(f"\nEvaluating random player over {args.games} games...")
    wins = 0
    total_revealed = 0

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        while not done:
            action = random_action(rng, env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info["game_state"] == GameState.WON.name:
            wins += 1
        total_revealed += info["revealed"]

    print("Results for random player:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - Uncover every cell that is not a bomb"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_board_arguments(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--size", type=int, default=8, help="Board size (NxN)"
        )
        subparser.add_argument(
            "--bombs", type=int, default=8, help="Number of bombs"
        )
        subparser.add_argument(
            "--seed", type=int, default=None, help="Random seed"
        )

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    demo_parser = subparsers.add_parser(
        "demo", help="Watch a random player"
    )
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    eval_parser = subparsers.add_parser(
        "evaluate", help="Evaluate a random player"
    )
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()

    if args.command in ("play", "demo", "evaluate"):
        try:
            BoardConfig(dimension=args.size, num_bombs=args.bombs)
        except ValueError as error:
            parser.error(str(error))
        if getattr(args, "games", 1) < 1:
            parser.error("--games must be at least 1")

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    elif args.command == "evaluate":
        evaluate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
