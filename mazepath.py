"""
Shortest paths through mazes whose walls are declared per cell and per side.
A move is open only when both cells on either side of the boundary agree.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Cardinal direction of a single move."""

    UP = "up"  # decreasing row
    DOWN = "down"  # increasing row
    LEFT = "left"  # decreasing col
    RIGHT = "right"  # increasing col

    @property
    def delta(self) -> tuple[int, int]:
        """(row_delta, col_delta) of one step in this direction."""
        match self:
            case Direction.UP:
                return (-1, 0)
            case Direction.DOWN:
                return (1, 0)
            case Direction.LEFT:
                return (0, -1)
            case Direction.RIGHT:
                return (0, 1)

    @property
    def opposite(self) -> Direction:
        match self:
            case Direction.UP:
                return Direction.DOWN
            case Direction.DOWN:
                return Direction.UP
            case Direction.LEFT:
                return Direction.RIGHT
            case Direction.RIGHT:
                return Direction.LEFT


# Order in which neighbours are expanded; decides between equal-length paths.
SEARCH_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class ConfigurationError(Exception):
    """A cell code has no entry in the passability table."""


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A (row, col) location; may lie outside any particular maze."""

    row: int
    col: int

    def step(self, direction: Direction) -> Position:
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


@dataclass(frozen=True)
class Maze:
    """A rectangular grid of cell codes, indexed [row][col]."""

    cells: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells:
            return
        cols = len(self.cells[0])
        mismatched = [(i, len(row)) for i, row in enumerate(self.cells) if len(row) != cols]
        if mismatched:
            error_msg = f"Inconsistent row lengths: expected {cols} columns (from row 0)\n"
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> Maze:
        """Build a maze from nested rows, rejecting ragged input."""
        return cls(tuple(tuple(row) for row in rows))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def contains(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.col < self.cols

    def code_at(self, position: Position) -> int:
        return self.cells[position.row][position.col]


# =============================================================================
# Passability Table
# =============================================================================


Passability = Mapping[int, frozenset[Direction]]


def _directions(*names: str) -> frozenset[Direction]:
    return frozenset(Direction(name) for name in names)


PASSABLE_DIRECTIONS: Passability = MappingProxyType(
    {
        0: _directions("up", "down", "left", "right"),
        1: _directions("left", "right", "down"),
        2: _directions("left", "up", "down"),
        3: _directions("left", "down"),
        4: _directions("left", "right", "up"),
        5: _directions("left", "right"),
        6: _directions("left", "up"),
        7: _directions("left"),
        8: _directions("up", "down", "right"),
        9: _directions("down", "right"),
        10: _directions("up", "down"),
        11: _directions("down"),
        12: _directions("up", "right"),
        13: _directions("right"),
        14: _directions("up"),
    }
)


def passable_directions(code: int, table: Passability = PASSABLE_DIRECTIONS) -> frozenset[Direction]:
    """Directions through which a cell with this code may be crossed."""
    try:
        return table[code]
    except KeyError:
        raise ConfigurationError(
            f"Cell code {code!r} has no passability entry (known codes: {sorted(table)})"
        ) from None


def is_valid_move(
    maze: Maze,
    position: Position,
    direction: Direction,
    table: Passability = PASSABLE_DIRECTIONS,
) -> bool:
    """
    Check whether stepping from position in direction is legal.

    The current cell must lie inside the maze and allow leaving that way, the
    destination must be inside the maze, and the destination must allow entry
    from the opposite side. A position outside the maze has no moves. An
    unknown code at either end raises ConfigurationError.
    """
    if not maze.contains(position):
        return False

    if direction not in passable_directions(maze.code_at(position), table):
        return False

    destination = position.step(direction)
    if not maze.contains(destination):
        return False

    return direction.opposite in passable_directions(maze.code_at(destination), table)


# =============================================================================
# Path Finder
# =============================================================================


def find_path(
    maze: Maze,
    start: Position,
    goal: Position,
    table: Passability = PASSABLE_DIRECTIONS,
) -> list[Direction] | None:
    """
    Breadth-first search for the fewest moves leading from start to goal.

    Returns the moves in order (empty when start == goal), or None when
    either endpoint is outside the maze or the goal cannot be reached.
    Positions are marked visited when enqueued, so each is expanded once.
    """
    if not (maze.contains(start) and maze.contains(goal)):
        logger.debug("find_path: endpoint out of bounds (start=%s, goal=%s)", start, goal)
        return None

    # position -> (previous position, move taken from it)
    came_from: dict[Position, tuple[Position, Direction]] = {}
    visited = {start}
    frontier = deque([start])

    while frontier:
        current = frontier.popleft()
        if current == goal:
            path = _walk_back(came_from, start, goal)
            logger.debug(
                "find_path: %s -> %s in %d moves (%d positions visited)",
                start,
                goal,
                len(path),
                len(visited),
            )
            return path

        for direction in SEARCH_ORDER:
            if not is_valid_move(maze, current, direction, table):
                continue
            neighbour = current.step(direction)
            if neighbour in visited:
                continue
            visited.add(neighbour)
            came_from[neighbour] = (current, direction)
            frontier.append(neighbour)

    logger.debug("find_path: %s unreachable from %s (%d positions visited)", goal, start, len(visited))
    return None


def _walk_back(
    came_from: dict[Position, tuple[Position, Direction]],
    start: Position,
    goal: Position,
) -> list[Direction]:
    moves: list[Direction] = []
    current = goal
    while current != start:
        current, direction = came_from[current]
        moves.append(direction)
    moves.reverse()
    return moves


# =============================================================================
# Move Replay
# =============================================================================


def follow_moves(
    maze: Maze,
    start: Position,
    moves: Iterable[Direction],
    table: Passability = PASSABLE_DIRECTIONS,
) -> list[Position]:
    """
    Replay moves from start and return every position visited, start first.

    Raises ValueError if start is outside the maze or a move is not legal.
    """
    if not maze.contains(start):
        raise ValueError(f"Start {start} is outside the {maze.rows}x{maze.cols} maze")

    positions = [start]
    current = start
    for step_idx, direction in enumerate(moves):
        if not is_valid_move(maze, current, direction, table):
            raise ValueError(
                f"Illegal move at step {step_idx}: {direction.value} from "
                f"({current.row}, {current.col}) (cell code {maze.code_at(current)})"
            )
        current = current.step(direction)
        positions.append(current)
    return positions


@dataclass(frozen=True)
class KeyPress:
    """A keyboard arrow key as a browser reports it."""

    key: str
    key_code: int


KEY_PRESSES: Mapping[Direction, KeyPress] = MappingProxyType(
    {
        Direction.LEFT: KeyPress("ArrowLeft", 37),
        Direction.UP: KeyPress("ArrowUp", 38),
        Direction.RIGHT: KeyPress("ArrowRight", 39),
        Direction.DOWN: KeyPress("ArrowDown", 40),
    }
)

REPLAY_STEP_DELAY_MS = 100


def key_schedule(
    moves: Iterable[Direction],
    step_delay_ms: int = REPLAY_STEP_DELAY_MS,
) -> list[tuple[int, KeyPress]]:
    """Pair each move's key press with its offset in milliseconds from the first."""
    if step_delay_ms < 0:
        raise ValueError(f"step_delay_ms must be non-negative, got {step_delay_ms}")
    return [(i * step_delay_ms, KEY_PRESSES[direction]) for i, direction in enumerate(moves)]
