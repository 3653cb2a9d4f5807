"""
Tests for the Sudoku puzzle (puzzles/sudoku.py).

Test Groups:
- B1-B5: Board helpers and text format
- G1-G3: Move generators and scores
- S1-S5: Solving with every driver
"""

import numpy as np
import pytest

from puzzle_search import (
    EngineKind,
    LevelFormatError,
    SearchConfig,
    SearchStatus,
    TraversalMode,
    solve,
)
from puzzle_search.puzzles import sudoku


@pytest.fixture
def easy():
    return sudoku.BOARDS["easy"]


def empty_cells(board):
    return sum(1 for row in board for v in row if v == 0)


def assert_valid_solution(puzzle, solution):
    grid = sudoku.as_grid(solution)
    assert not (grid == 0).any()
    assert not sudoku.has_duplicates(grid)
    givens = sudoku.as_grid(puzzle) != 0
    assert np.array_equal(grid[givens], sudoku.as_grid(puzzle)[givens])


# ========== Test Group B: Board helpers ==========

def test_B1_parse_and_print(easy):
    """B1: 81 digits, '.' and '0' are empty, whitespace ignored"""
    assert easy[0] == (0, 4, 0, 0, 0, 0, 1, 7, 9)
    assert sudoku.board_to_string(easy).splitlines()[0] == "040000179"

    text = sudoku.board_to_string(easy).replace("0", ".")
    assert sudoku.parse_board(text) == easy


def test_B2_parse_errors():
    """B2: Unknown characters carry their position, cell count is checked"""
    with pytest.raises(LevelFormatError, match="at 1:2"):
        sudoku.parse_board("123\n45x\n")
    with pytest.raises(LevelFormatError, match="Expected 81 cells, got 80"):
        sudoku.parse_board("0" * 80)


def test_B3_set_cell_shares_rows(easy):
    """B3: Changing one cell copies one row only"""
    board = sudoku.set_cell(easy, 0, 0, 8)

    assert board[0][0] == 8
    assert easy[0][0] == 0
    assert all(board[r] is easy[r] for r in range(1, 9))


def test_B4_duplicates_and_candidates(easy):
    """B4: Row / column / box duplicates; candidates exclude all three units"""
    grid = sudoku.as_grid(easy)
    assert not sudoku.has_duplicates(grid)
    assert sudoku.candidates(grid, 0, 0) == frozenset({8})

    for row, col in ((0, 0), (3, 1), (1, 0)):
        broken = grid.copy()
        # 4 already sits at (0, 1): same row, same box, same column
        broken[row, col] = 4
        assert sudoku.has_duplicates(broken)


def test_B5_as_grid_shape():
    """B5: Non 9x9 boards are rejected"""
    with pytest.raises(ValueError):
        sudoku.as_grid([[0] * 9] * 8)


# ========== Test Group G: Generators and scores ==========

def test_G1_generators(easy):
    """G1: Fewest-options picks the forced cell, top-left tries 1..9"""
    grid = sudoku.as_grid(easy)

    assert list(sudoku.fill_fewest_options(grid)) == [(0, 0, 8)]
    assert list(sudoku.fill_top_left(grid)) == [(0, 0, v) for v in range(1, 10)]

    full = np.ones((9, 9), dtype=np.int64)
    assert list(sudoku.fill_fewest_options(full)) == []
    assert list(sudoku.fill_top_left(full)) == []


def test_G2_scores(easy):
    """G2: Score functions on a valid and a broken board"""
    assert sudoku.constant_score(easy) == 1.0
    assert sudoku.filled_cells(easy) == 81 - empty_cells(easy)

    dof = sudoku.degrees_of_freedom(easy)
    assert dof > 0
    # One more filled cell never adds freedom
    assert sudoku.degrees_of_freedom(sudoku.set_cell(easy, 0, 0, 8)) < dof

    assert sudoku.degrees_of_freedom(sudoku.set_cell(easy, 0, 0, 4)) == -1.0


def test_G3_edit_round_trip(easy):
    """G3: apply + revert of every edit restores the grid"""
    grid = sudoku.as_grid(easy)
    original = grid.copy()
    problem = sudoku.SudokuEditProblem(generator=sudoku.fill_top_left)

    edits = list(problem.transitions(grid))
    assert [e.label for e in edits][:2] == ["(0, 0) => 1", "(0, 0) => 2"]
    for edit in edits:
        edit.apply(grid)
        assert grid[0, 0] != 0
        edit.revert(grid)
        assert np.array_equal(grid, original)


# ========== Test Group S: Solving ==========

@pytest.mark.parametrize("traversal,score", [
    (TraversalMode.DFS, None),
    (TraversalMode.SCORED, sudoku.degrees_of_freedom),
    (TraversalMode.SCORED, sudoku.filled_cells),
])
def test_S1_snapshot_solves_easy(easy, traversal, score):
    """S1: Snapshot engine solves the easy board in every mode"""
    print(f"\nTest S1: easy board ({traversal.value})...", end=" ")

    problem = sudoku.SudokuProblem(score=score)
    result = solve(problem, easy, SearchConfig(traversal=traversal))

    assert result.status is SearchStatus.SOLVED
    assert_valid_solution(easy, result.state)
    assert result.steps[0] == "start"
    assert len(result.steps) == empty_cells(easy) + 1

    print("✓")


@pytest.mark.parametrize("engine", [EngineKind.RECURSIVE, EngineKind.STACK])
def test_S2_mutable_engines_solve_easy(easy, engine):
    """S2: Mutate/undo engines reach the same (unique) solution"""
    grid = sudoku.as_grid(easy)
    result = solve(sudoku.SudokuEditProblem(), grid, SearchConfig(engine=engine))

    assert result.solved
    assert result.state is grid
    assert_valid_solution(easy, grid)
    assert len(result.steps) == empty_cells(easy)

    snapshot = solve(sudoku.SudokuProblem(), easy)
    assert sudoku.as_board(grid) == snapshot.state


def test_S3_solved_board_is_root(easy):
    """S3: A complete board is solved at the root"""
    solution = solve(sudoku.SudokuProblem(), easy).state
    result = solve(sudoku.SudokuProblem(), solution)

    assert result.steps == ["start"]
    assert result.iterations == 1


def test_S4_contradiction_has_no_solution():
    """S4: A board with an empty cell that has no candidates is unsolvable"""
    # (0, 8): row holds 1-8, column holds 9
    board = sudoku.parse_board("123456780" + "000000009" + "0" * 63)
    grid = sudoku.as_grid(board)
    assert not sudoku.has_duplicates(grid)
    assert sudoku.candidates(grid, 0, 8) == frozenset()

    result = solve(sudoku.SudokuProblem(), board)
    assert result.status is SearchStatus.NO_SOLUTION
    assert result.iterations == 1

    grid = sudoku.as_grid(board)
    stack = solve(sudoku.SudokuEditProblem(), grid, SearchConfig(engine=EngineKind.STACK))
    assert stack.status is SearchStatus.NO_SOLUTION
    assert np.array_equal(grid, sudoku.as_grid(board))


def test_S5_timeout():
    """S5: Hardest board with top-left filling and no time budget times out"""
    problem = sudoku.SudokuProblem(generator=sudoku.fill_top_left)
    result = solve(problem, sudoku.BOARDS["hardest"], SearchConfig(max_time_s=0))

    assert result.status is SearchStatus.TIMEOUT
    assert result.iterations == 1
