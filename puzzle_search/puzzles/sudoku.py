"""
Sudoku Problem Definitions.

Board: 9x9 digits, 0 = empty cell.

Two representations:
- SudokuProblem: snapshot engine, state = tuple of 9 row tuples
  (a move copies one row, the other rows are shared)
- SudokuEditProblem: mutate/undo engines, state = np.ndarray (9, 9),
  a move writes one cell and its inverse clears it

Move generators (grid -> iterator of (row, col, value)):
- fill_fewest_options: empty cell with the fewest candidates, candidates ascending
- fill_top_left: first empty cell in row-major order, values 1..9

Scores for scored traversal (higher = explored first):
- constant_score, filled_cells, degrees_of_freedom
"""

from __future__ import annotations
from typing import Callable, Iterator, Optional, Sequence

import numpy as np

from puzzle_search.errors import LevelFormatError
from puzzle_search.models import Edit, Transition
from puzzle_search.problem import Problem

Board = tuple[tuple[int, ...], ...]
Move = tuple[int, int, int]  # (row, col, value)
Generator = Callable[[np.ndarray], Iterator[Move]]

SIZE = 9
DIGITS = frozenset(range(1, SIZE + 1))


# ========== Board helpers ==========

def as_grid(board) -> np.ndarray:
    """Board (tuples, lists or array) -> int (9, 9) array (copy for arrays)."""
    grid = np.array(board, dtype=np.int64)
    if grid.shape != (SIZE, SIZE):
        raise ValueError(f"Expected (9, 9) board, got shape {grid.shape}")
    return grid


def as_board(grid) -> Board:
    return tuple(tuple(int(v) for v in row) for row in grid)


def set_cell(board: Board, row: int, col: int, value: int) -> Board:
    """New board with one cell changed. Untouched rows are shared."""
    changed = board[row][:col] + (value,) + board[row][col + 1:]
    return board[:row] + (changed,) + board[row + 1:]


def boxes(grid: np.ndarray) -> np.ndarray:
    """3x3 boxes as rows of a (9, 9) array, box index = 3 * (r // 3) + c // 3."""
    return grid.reshape(3, 3, 3, 3).transpose(0, 2, 1, 3).reshape(SIZE, SIZE)


def box_index(row: int, col: int) -> int:
    return 3 * (row // 3) + col // 3


def has_duplicates(grid: np.ndarray) -> bool:
    """True if any row, column or box repeats a non-zero digit."""
    digits = np.arange(1, SIZE + 1)
    for units in (grid, grid.T, boxes(grid)):
        counts = (units[:, :, None] == digits).sum(axis=1)
        if (counts > 1).any():
            return True
    return False


def candidates(grid: np.ndarray, row: int, col: int) -> frozenset[int]:
    """Digits not used in the cell's row, column and box."""
    r0, c0 = 3 * (row // 3), 3 * (col // 3)
    used = set(grid[row].tolist()) | set(grid[:, col].tolist())
    used |= set(grid[r0:r0 + 3, c0:c0 + 3].ravel().tolist())
    return DIGITS - used


# ========== Move generators ==========

def fill_fewest_options(grid: np.ndarray) -> Iterator[Move]:
    """
    Fill the empty cell with the fewest candidates.

    Notes:
        - Row-major scan, the first cell wins ties
        - A cell with zero candidates yields nothing (dead end)
    """
    best = None
    best_values: Optional[frozenset[int]] = None
    for row, col in zip(*np.nonzero(grid == 0)):
        values = candidates(grid, int(row), int(col))
        if best_values is None or len(values) < len(best_values):
            best = (int(row), int(col))
            best_values = values
    if best is None:
        return
    for value in sorted(best_values):
        yield best[0], best[1], value


def fill_top_left(grid: np.ndarray) -> Iterator[Move]:
    """Try 1..9 in the first empty cell (no candidate filtering)."""
    empty = np.argwhere(grid == 0)
    if len(empty) == 0:
        return
    row, col = (int(v) for v in empty[0])
    for value in range(1, SIZE + 1):
        yield row, col, value


GENERATORS: dict[str, Generator] = {
    "Fill from top left": fill_top_left,
    "Fill fewest degrees of freedom first": fill_fewest_options,
}


# ========== Scores ==========

def constant_score(board) -> float:
    return 1.0


def filled_cells(board) -> float:
    return float(np.count_nonzero(as_grid(board)))


def degrees_of_freedom(board) -> float:
    """
    Sum over all cells of 10 - |row ∪ col ∪ box values| (0 included).

    Returns -1 for boards with a duplicate digit.
    """
    grid = as_grid(board)
    if has_duplicates(grid):
        return -1.0

    row_sets = [set(r.tolist()) for r in grid]
    col_sets = [set(c.tolist()) for c in grid.T]
    box_sets = [set(b.tolist()) for b in boxes(grid)]

    score = 0
    for row in range(SIZE):
        for col in range(SIZE):
            seen = row_sets[row] | col_sets[col] | box_sets[box_index(row, col)]
            score += 10 - len(seen)
    return float(score)


SCORES: dict[str, Callable[[Board], float]] = {
    "Constant score": constant_score,
    "Count non-zero squares": filled_cells,
    "Count degrees of freedom": degrees_of_freedom,
}


# ========== Problems ==========

def move_label(row: int, col: int, value: int) -> str:
    return f"({row}, {col}) => {value}"


def _is_valid(grid: np.ndarray) -> bool:
    return not has_duplicates(grid)


def _is_solved(grid: np.ndarray) -> bool:
    return not (grid == 0).any() and not has_duplicates(grid)


class SudokuProblem(Problem):
    """
    Sudoku rules for the snapshot engine (state: Board tuple).

    Args:
        generator: Move generator (default: fill_fewest_options)
        score: Optional score function for scored traversal
    """

    def __init__(self, generator: Generator = fill_fewest_options,
                 score: Optional[Callable[[Board], float]] = None):
        self.generator = generator
        self._score = score

    def transitions(self, state: Board) -> Iterator[Transition]:
        for row, col, value in self.generator(as_grid(state)):
            yield Transition(move_label(row, col, value), set_cell(state, row, col, value))

    def is_valid(self, state: Board) -> bool:
        return _is_valid(as_grid(state))

    def is_solved(self, state: Board) -> bool:
        return _is_solved(as_grid(state))

    def score(self, state: Board) -> float:
        if self._score is None:
            return super().score(state)
        return self._score(state)

    @property
    def has_score(self) -> bool:
        return self._score is not None


class SudokuEditProblem(Problem):
    """
    Sudoku rules for the mutate/undo engines (state: np.ndarray, edited in place).

    Args:
        generator: Move generator (default: fill_fewest_options)
    """

    def __init__(self, generator: Generator = fill_fewest_options):
        self.generator = generator

    def transitions(self, state: np.ndarray) -> Iterator[Edit]:
        # Moves are computed up front: the grid is edited while siblings wait
        for row, col, value in list(self.generator(state)):
            yield Edit(
                label=move_label(row, col, value),
                forward=_writer(row, col, value),
                inverse=_writer(row, col, 0),
            )

    def is_valid(self, state: np.ndarray) -> bool:
        return _is_valid(state)

    def is_solved(self, state: np.ndarray) -> bool:
        return _is_solved(state)


def _writer(row: int, col: int, value: int) -> Callable[[np.ndarray], None]:
    def write(grid: np.ndarray) -> None:
        grid[row, col] = value
    return write


# ========== Text format ==========

def parse_board(text: str) -> Board:
    """
    Parse 81 cells: digits 1-9, '0' or '.' for empty. Whitespace is ignored.

    Raises:
        LevelFormatError: Unknown character or wrong cell count
    """
    cells = []
    for row, line in enumerate(text.splitlines()):
        for col, char in enumerate(line):
            if char.isspace():
                continue
            if char == ".":
                cells.append(0)
            elif char in "0123456789":
                cells.append(int(char))
            else:
                raise LevelFormatError(f"Unknown character {char!r}", row, col)
    if len(cells) != SIZE * SIZE:
        raise LevelFormatError(f"Expected 81 cells, got {len(cells)}")
    return tuple(tuple(cells[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE))


def board_to_string(board: Sequence[Sequence[int]]) -> str:
    return "\n".join("".join(str(int(v)) for v in row) for row in board) + "\n"


BOARDS: dict[str, Board] = {
    "easy": parse_board("""
        040000179
        002008054
        006005008
        080070910
        050090030
        019060040
        300400700
        570100200
        928000060
    """),
    "hard": parse_board("""
        100007090
        030020008
        009600500
        005300900
        010080002
        600004000
        300000010
        040000007
        007000300
    """),
    "hardest": parse_board("""
        800000000
        003600000
        070090200
        050007000
        000045700
        000100030
        001000068
        008500010
        090000400
    """),
}
