"""
Demonstration and command line entry point for the maze path finder.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from simple_chalk import chalk

from maze_parser import parse_maze, parse_maze_payload
from mazepath import Direction, Maze, Position, find_path, key_schedule

# name -> (definition, start, goal)
SAMPLE_MAZES: dict[str, tuple[str, Position, Position]] = {
    # Open 1x2 corridor
    "corridor": ("0 0", Position(0, 0), Position(0, 1)),
    # Winding 3x3: the only route snakes right, back left, then right again
    "snake": ("13 5 3|9 5 6|12 5 7", Position(0, 0), Position(2, 2)),
    # The left cell opens to the right but its neighbour only opens upward
    "one_sided": ("13 14|0 0", Position(0, 0), Position(0, 1)),
    # Every cell only opens to the left
    "dead_end": ("7 7|7 7", Position(0, 0), Position(1, 1)),
}


def describe_moves(moves: list[Direction]) -> str:
    if not moves:
        return "already at the goal"
    return " ".join(direction.value for direction in moves)


def solve_and_print(name: str, maze: Maze, start: Position, goal: Position, show_keys: bool = False) -> bool:
    """Solve one maze, print the outcome and return whether a path exists."""
    print("=" * 40)
    print(f"{name}: {maze.rows}x{maze.cols}, ({start.row}, {start.col}) -> ({goal.row}, {goal.col})")
    print("=" * 40)
    for row in maze.cells:
        print("  " + " ".join(f"{code:2d}" for code in row))

    moves = find_path(maze, start, goal)
    if moves is None:
        print(chalk.red("No path"))
        return False

    print(chalk.green(f"{len(moves)} moves: {describe_moves(moves)}"))
    if show_keys:
        for delay_ms, press in key_schedule(moves):
            print(f"  +{delay_ms:5d}ms  {press.key} ({press.key_code})")
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find the shortest route through a directional maze.")
    parser.add_argument("payload", nargs="?", help="Maze payload file (streamed JSON lines); runs samples if omitted")
    parser.add_argument("--keys", action="store_true", help="Also print the arrow-key replay schedule")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    if args.payload is not None:
        info = parse_maze_payload(Path(args.payload).read_text(encoding="utf-8"))
        found = solve_and_print(Path(args.payload).name, info.maze, info.start, info.goal, args.keys)
        return 0 if found else 1

    for name, (definition, start, goal) in SAMPLE_MAZES.items():
        solve_and_print(name, parse_maze(definition), start, goal, args.keys)
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
