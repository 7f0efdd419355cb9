"""
Maze parsing utilities.

Provides two input formats:
1. Text definitions with rows separated by | and codes by spaces
2. The streamed JSON payload a maze page serves its maze info in
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from mazepath import Maze, Position

__all__ = ["MazeInfo", "PAYLOAD_MAZE_PATH", "parse_maze", "parse_maze_payload"]

logger = logging.getLogger(__name__)

# Index path from a decoded payload document down to the maze info object.
PAYLOAD_MAZE_PATH: tuple[str | int, ...] = ("json", 2, 0, 0)


@dataclass(frozen=True)
class MazeInfo:
    """A maze together with the endpoints to solve it between."""

    maze: Maze
    start: Position
    goal: Position


def parse_maze(definition: str) -> Maze:
    """
    Parse a maze from a compact string format.

    Format:
    - Rows separated by |
    - Cells separated by whitespace (any amount)
    - Each cell is a non-negative decimal cell code

    Example:
        "9 5 3|12 5 6"
        Creates a 2x3 maze [[9, 5, 3], [12, 5, 6]]

    Raises:
        ValueError: If the definition is empty, a cell is not a non-negative
                    integer, or the rows differ in length
    """
    if not definition.strip():
        raise ValueError("Empty maze definition")

    row_strings = definition.strip().split("|")
    rows: list[tuple[int, ...]] = []

    for row_idx, row_str in enumerate(row_strings):
        cells: list[int] = []
        for col_idx, cell_str in enumerate(row_str.split()):
            if not cell_str.isdecimal():
                error_msg = (
                    f"Invalid cell string: '{cell_str}'\n"
                    f"  Row {row_idx}: \"{row_str.strip()}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Cells must be non-negative integer codes (e.g. '0', '13')"
                )
                raise ValueError(error_msg)
            cells.append(int(cell_str))
        rows.append(tuple(cells))

    if not rows[0]:
        raise ValueError(f"Row 0 of maze definition has no cells: \"{row_strings[0]}\"")

    # Maze rejects rows whose length differs from row 0.
    return Maze(tuple(rows))


def parse_maze_payload(text: str) -> MazeInfo:
    """
    Decode maze info from a streamed JSON response body.

    The body holds one JSON document per line; the last non-empty line carries
    the maze info at PAYLOAD_MAZE_PATH, shaped like:

        {"walls": [[9, 3], [12, 6]], "goalPos": {"row": 1, "col": 1}}

    Mazes are always entered at the top-left cell, so start is (0, 0).

    Raises:
        ValueError: If the body is empty, not JSON, or lacks the maze info
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise ValueError("Empty maze payload")

    try:
        document = json.loads(lines[-1])
    except json.JSONDecodeError as exc:
        raise ValueError(f"Maze payload's last line is not valid JSON: {exc}") from exc

    info: Any = document
    for depth, key in enumerate(PAYLOAD_MAZE_PATH):
        try:
            info = info[key]
        except (KeyError, IndexError, TypeError) as exc:
            trail = "".join(f"[{k!r}]" for k in PAYLOAD_MAZE_PATH[: depth + 1])
            raise ValueError(f"Maze payload has no maze info at document{trail}") from exc

    try:
        walls = info["walls"]
        goal_row = info["goalPos"]["row"]
        goal_col = info["goalPos"]["col"]
    except KeyError as exc:
        raise ValueError(
            f"Maze info is missing key {exc}\n"
            f"  Expected keys: 'walls' (rows of cell codes), 'goalPos' ({{'row', 'col'}})"
        ) from exc
    except TypeError as exc:
        culprit = "goalPos" if isinstance(info, dict) else "maze info"
        raise ValueError(
            f"Maze info has the wrong shape: {culprit} is not an object\n"
            f"  Expected an object with 'walls' (rows of cell codes) and 'goalPos' ({{'row', 'col'}})"
        ) from exc

    if not isinstance(walls, list) or not all(isinstance(row, list) for row in walls):
        raise ValueError("Maze info 'walls' must be a list of rows")
    for row_idx, row in enumerate(walls):
        for col_idx, code in enumerate(row):
            if not isinstance(code, int) or isinstance(code, bool):
                raise ValueError(f"Maze info 'walls' has non-integer code {code!r} at row {row_idx}, column {col_idx}")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (goal_row, goal_col)):
        raise ValueError(f"Maze info 'goalPos' must hold integers, got row={goal_row!r}, col={goal_col!r}")

    maze = Maze.from_rows(walls)
    logger.debug("parse_maze_payload: %dx%d maze, goal (%d, %d)", maze.rows, maze.cols, goal_row, goal_col)
    return MazeInfo(maze, Position(0, 0), Position(goal_row, goal_col))
