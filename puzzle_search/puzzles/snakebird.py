"""
Snakebird Problem Definition.

Grid puzzle: snakes move head-first, eat fruit to grow, fall under gravity,
die on spikes, and leave through the exit once all fruit is eaten.

Level text format (one character per cell):
    -   empty
    #   wall
    ^   spike
    +   fruit
    *   exit
    A-Z, a-z, 0-9   snake segments, one snake per range, head = lowest char

State is immutable (frozen dataclass of frozensets/tuples), so successors
share walls/spikes/exit with their parent.

Labels:
    "{i}*"   snake i leaves through the exit
    "{i}f"   snake i falls one row
    "{i}→"   snake i moves (→ ← ↓ ↑), suffix "g" when it eats a fruit
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from itertools import groupby
from pathlib import Path
from typing import Iterator, NamedTuple, Optional

from puzzle_search.errors import LevelFormatError
from puzzle_search.models import Transition
from puzzle_search.problem import Problem

SNAKE_BOUNDS = (("A", "Z"), ("a", "z"), ("0", "9"))

# (label, d_col, d_row)
DIRECTIONS = (("→", 1, 0), ("←", -1, 0), ("↓", 0, 1), ("↑", 0, -1))


class Point(NamedTuple):
    r: int
    c: int

    def shifted(self, dr: int, dc: int) -> Point:
        return Point(self.r + dr, self.c + dc)


Snake = tuple[Point, ...]  # head first


@dataclass(frozen=True)
class SnakebirdState:
    """
    Snakebird board.

    Attributes:
        walls: Cells that block movement and support snakes
        spikes: Cells that kill any snake touching them
        snakes: One slot per SNAKE_BOUNDS range, None = exited / not in level
        fruits: Remaining fruit cells
        exit: Exit cell
    """
    walls: frozenset[Point]
    spikes: frozenset[Point]
    snakes: tuple[Optional[Snake], ...]
    fruits: frozenset[Point]
    exit: Point

    def with_snake(self, index: int, snake: Optional[Snake]) -> SnakebirdState:
        snakes = self.snakes[:index] + (snake,) + self.snakes[index + 1:]
        return replace(self, snakes=snakes)

    def occupied(self) -> frozenset[Point]:
        return frozenset(pt for snake in self.snakes if snake is not None for pt in snake)

    @property
    def lowest_wall_row(self) -> int:
        return max((pt.r for pt in self.walls), default=0)


class SnakebirdProblem(Problem):
    """Snakebird rules (snapshot engine)."""

    def transitions(self, state: SnakebirdState) -> Iterator[Transition]:
        # Exit: only once all fruit is eaten, one snake per step
        if not state.fruits:
            for i, snake in enumerate(state.snakes):
                if snake is not None and state.exit in snake:
                    yield Transition(f"{i}*", state.with_snake(i, None))
                    return

        # Gravity: the first unsupported snake falls one row, nothing else happens
        for i, snake in enumerate(state.snakes):
            if snake is None or self._is_supported(state, i):
                continue
            fallen = tuple(pt.shifted(1, 0) for pt in snake)
            yield Transition(f"{i}f", state.with_snake(i, fallen))
            return

        occupied = state.occupied()
        for i, snake in enumerate(state.snakes):
            if snake is None:
                continue
            for name, dc, dr in DIRECTIONS:
                head = snake[0].shifted(dr, dc)
                if head in state.walls or head in occupied:
                    continue

                ate_fruit = head in state.fruits
                moved = (head,) + (snake if ate_fruit else snake[:-1])
                next_state = state.with_snake(i, moved)
                if ate_fruit:
                    next_state = replace(next_state, fruits=state.fruits - {head})
                yield Transition(f"{i}{name}{'g' if ate_fruit else ''}", next_state)

    @staticmethod
    def _is_supported(state: SnakebirdState, index: int) -> bool:
        others = frozenset(
            pt for j, other in enumerate(state.snakes)
            if other is not None and j != index for pt in other
        )
        for pt in state.snakes[index]:
            below = pt.shifted(1, 0)
            if below in state.walls or below in others:
                return True
        return False

    def is_valid(self, state: SnakebirdState) -> bool:
        # No snake on a spike
        for snake in state.snakes:
            if snake is not None and any(pt in state.spikes for pt in snake):
                return False
        # No snake falling forever (fully below the lowest wall)
        max_r = state.lowest_wall_row
        return all(snake is None or any(pt.r <= max_r for pt in snake)
                   for snake in state.snakes)

    def is_solved(self, state: SnakebirdState) -> bool:
        return not state.fruits and all(snake is None for snake in state.snakes)

    def score(self, state: SnakebirdState) -> float:
        """
        Heuristic: fewer fruits, more exited snakes, heads close to the target.

        Target is the nearest fruit (Manhattan) or the exit once all fruit
        is eaten (rows weighted 10x).
        """
        score = -100 * len(state.fruits)
        score -= 1000 * sum(1 for snake in state.snakes if snake is None)

        for snake in state.snakes:
            if snake is None:
                continue
            head = snake[0]
            if state.fruits:
                score -= min(abs(head.r - f.r) + abs(head.c - f.c) for f in state.fruits)
            else:
                score -= 10 * abs(head.r - state.exit.r) + abs(head.c - state.exit.c)
        return float(score)


# ========== Level I/O ==========

def parse_level(text: str) -> SnakebirdState:
    """
    Parse a level description.

    Raises:
        LevelFormatError: Unknown character
    """
    walls, spikes, fruits = set(), set(), set()
    exit_pt = Point(0, 0)
    raw_snakes: list[list[tuple[str, Point]]] = [[] for _ in SNAKE_BOUNDS]

    for r, line in enumerate(text.split("\n")):
        for c, char in enumerate(line.rstrip("\r")):
            pt = Point(r, c)
            if char == "-":
                continue
            if char == "#":
                walls.add(pt)
            elif char == "^":
                spikes.add(pt)
            elif char == "+":
                fruits.add(pt)
            elif char == "*":
                exit_pt = pt
            else:
                for i, (low, high) in enumerate(SNAKE_BOUNDS):
                    if low <= char <= high:
                        raw_snakes[i].append((char, pt))
                        break
                else:
                    raise LevelFormatError(f"Unknown character {char!r}", r, c)

    snakes = tuple(
        tuple(pt for _, pt in sorted(raw)) if raw else None
        for raw in raw_snakes
    )
    return SnakebirdState(
        walls=frozenset(walls),
        spikes=frozenset(spikes),
        snakes=snakes,
        fruits=frozenset(fruits),
        exit=exit_pt,
    )


def load_level(path: str | Path) -> SnakebirdState:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level(f.read())


def render(state: SnakebirdState) -> str:
    """Text picture of the board (same characters as the level format)."""
    points = list(state.walls) + list(state.spikes) + list(state.fruits) + [state.exit]
    points += [pt for snake in state.snakes if snake is not None for pt in snake]
    # Snakes can hang off the level, so bounds are computed, origin included
    min_r = min([0] + [pt.r for pt in points])
    max_r = max([0] + [pt.r for pt in points])
    min_c = min([0] + [pt.c for pt in points])
    max_c = max([0] + [pt.c for pt in points])

    segments = {}
    for i, snake in enumerate(state.snakes):
        if snake is None:
            continue
        for j, pt in enumerate(snake):
            segments[pt] = chr(ord(SNAKE_BOUNDS[i][0]) + j)

    lines = []
    for r in range(min_r, max_r + 1):
        row = []
        for c in range(min_c, max_c + 1):
            pt = Point(r, c)
            if pt in state.walls:
                row.append("#")
            elif pt in state.spikes:
                row.append("^")
            elif pt in state.fruits:
                row.append("+")
            elif pt == state.exit:
                row.append("*")
            elif pt in segments:
                row.append(segments[pt])
            else:
                row.append("-")
        lines.append("".join(row))
    return "\n".join(lines) + "\n"


def combine_steps(steps: list[str]) -> list[str]:
    """
    Compress raw labels into player instructions.

    Drops start/fall/exit labels and fruit suffixes, merges consecutive moves
    of the same snake and run-length encodes repeated directions.

    Example:
        >>> combine_steps(["start", "0→", "0→g", "0f", "1↑", "1↑", "1←", "0*"])
        ['select(0; A-Z)', '2→', 'select(1; a-z)', '2↑', '←']
    """
    moves = [step[:2] for step in steps
             if step != "start" and step[1] not in ("f", "*")]

    combined = []
    for snake, group in groupby(moves, key=lambda move: move[0]):
        low, high = SNAKE_BOUNDS[int(snake)]
        combined.append(f"select({snake}; {low}-{high})")
        directions = "".join(move[1] for move in group)
        for direction, run in groupby(directions):
            count = len(list(run))
            combined.append(direction if count == 1 else f"{count}{direction}")
    return combined
