#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty D] [--rows R --columns C --mines M] [--name NAME]
    python main.py simulate [--games N] [--seed S]
"""
import argparse
import logging
import random
from typing import Optional, Tuple

from minesweeper.game import GameConfig, Difficulty, MinesweeperError, MinesweeperEnv
from minesweeper.game.environment import render_observation
from minesweeper.service import GameService, GameStateResponse, JsonGameStore

HELP_TEXT = (
    "Commands: r ROW COL (reveal), f ROW COL (flag), u ROW COL (unflag), "
    "n (new game), q (quit)"
)
ACTIONS = {"r": "reveal", "f": "flag", "u": "unflag"}


def parse_move(line: str) -> Optional[Tuple[str, int, int]]:
    """Parse 'r 3 4' style input into (action, row, column)."""
    parts = line.split()
    if len(parts) != 3 or parts[0] not in ACTIONS:
        return None
    try:
        return ACTIONS[parts[0]], int(parts[1]), int(parts[2])
    except ValueError:
        return None


def print_state(state: GameStateResponse) -> None:
    """Print the board and counters for a game."""
    grid = state.grid
    header = "    " + " ".join(f"{col % 10}" for col in range(len(grid[0])))
    print(header)
    for row, line in enumerate(grid):
        cells = []
        for view in line:
            if view.is_flagged:
                cells.append("F")
            elif view.is_mine:
                cells.append("*")
            elif not view.is_revealed:
                cells.append(".")
            else:
                cells.append(str(view.adjacent_mine_count) if view.adjacent_mine_count else " ")
        print(f"{row:>3} " + " ".join(cells))
    print(
        f"Mines left: {state.remaining_mines} | "
        f"Status: {state.game.status.value}"
    )


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    config = GameConfig.for_difficulty(
        args.difficulty,
        rows=args.rows,
        columns=args.columns,
        mine_count=args.mines,
        player_name=args.name,
    )
    store = JsonGameStore(args.store) if args.store else None
    service = GameService(store=store)
    state = service.create_game(config)
    print(HELP_TEXT)
    print_state(state)

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break

        if line == "q":
            break
        if line == "n":
            state = service.restart_game(state.game_id)
            print_state(state)
            continue

        move = parse_move(line)
        if move is None:
            print(HELP_TEXT)
            continue

        action, row, col = move
        try:
            state = service.make_move(
                state.game_id, {"row": row, "column": col, "action": action}
            )
        except MinesweeperError as error:
            print(f"Invalid move: {error.message}")
            continue
        print_state(state)

        if state.is_victory:
            print(f"\n*** WIN in {state.game.duration} seconds! ***")
            if args.name:
                print_leaderboard(service, config.difficulty)
            print("Type n for a new game or q to quit.")
        elif state.is_game_over:
            print("\n*** LOST (hit mine) ***")
            print("Type n for a new game or q to quit.")


def print_leaderboard(service: GameService, difficulty: Difficulty) -> None:
    """Print the fastest wins for a difficulty."""
    print(f"\nLeaderboard ({difficulty.value})")
    print("-" * 30)
    for rank, score in enumerate(service.get_leaderboard(difficulty), start=1):
        print(f"{rank:>2}. {score.player_name:<16} {score.duration_seconds:>6}s")


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the agent environment."""
    config = GameConfig.for_difficulty(args.difficulty)
    env = MinesweeperEnv(config=config)
    rng = random.Random(args.seed)
    wins = 0

    for game in range(args.games):
        obs, info = env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        while not done:
            choices = [i for i, valid in enumerate(env.get_action_mask()) if valid]
            obs, reward, terminated, truncated, info = env.step(rng.choice(choices))
            done = terminated or truncated
        if info["game_state"] == "won":
            wins += 1
        if args.show:
            print(render_observation(obs))
            print(f"Game {game + 1}: {info['game_state']}\n")

    print(f"Random play: {wins}/{args.games} wins ({wins / args.games:.1%})")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Show service log messages"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.BEGINNER.value,
        help="Preset, or custom with --rows/--columns/--mines",
    )
    play_parser.add_argument("--rows", type=int, default=None)
    play_parser.add_argument("--columns", type=int, default=None)
    play_parser.add_argument("--mines", type=int, default=None)
    play_parser.add_argument(
        "--name", default=None, help="Player name for the leaderboard"
    )
    play_parser.add_argument(
        "--store", default=None, help="JSON file to keep games in"
    )

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games through the agent environment"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty if d != Difficulty.CUSTOM],
        default=Difficulty.BEGINNER.value,
    )
    simulate_parser.add_argument("--seed", type=int, default=None)
    simulate_parser.add_argument(
        "--show", action="store_true", help="Print each final board"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except MinesweeperError as error:
        parser.exit(2, f"error: {error.message}\n")


if __name__ == "__main__":
    main()
