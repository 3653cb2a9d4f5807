"""
Puzzle Problem Definitions.

Public exports:
- SudokuProblem, SudokuEditProblem: Sudoku (snapshot / mutate-undo)
- SnakebirdProblem, SnakebirdState: Snakebird (snapshot)
"""

from puzzle_search.puzzles.sudoku import (
    BOARDS,
    GENERATORS,
    SCORES,
    SudokuEditProblem,
    SudokuProblem,
    board_to_string,
    parse_board,
)
from puzzle_search.puzzles.snakebird import (
    SnakebirdProblem,
    SnakebirdState,
    combine_steps,
    load_level,
    parse_level,
    render,
)

__all__ = [
    'BOARDS',
    'GENERATORS',
    'SCORES',
    'SudokuProblem',
    'SudokuEditProblem',
    'board_to_string',
    'parse_board',
    'SnakebirdProblem',
    'SnakebirdState',
    'combine_steps',
    'load_level',
    'parse_level',
    'render',
]
