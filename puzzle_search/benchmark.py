"""
Search Mode Benchmark.

Runs every (search mode x move generator x board) combination on Sudoku and
renders the results as a markdown table:

| Search Name | Generator Name | Test Name | Iterations | Duration | Iter/Sec | Error |

Each run uses the snapshot engine with first-found policy and a timeout
(default 30 s), so slow combinations show up as 'max_time_s reached'.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional

from puzzle_search.config import SearchConfig, SolutionPolicy, TraversalMode
from puzzle_search.engine import SnapshotSolver
from puzzle_search.puzzles.sudoku import (
    BOARDS,
    GENERATORS,
    Board,
    Generator,
    SudokuProblem,
    constant_score,
    degrees_of_freedom,
    filled_cells,
)
from puzzle_search.utils.timing import PerformanceTimer

# name -> (traversal, score function for SCORED)
SearchMode = tuple[TraversalMode, Optional[Callable[[Board], float]]]

DEFAULT_SEARCHES: dict[str, SearchMode] = {
    "Depth First Search": (TraversalMode.DFS, None),
    "Breadth First Search": (TraversalMode.BFS, None),
    "Constant score": (TraversalMode.SCORED, constant_score),  # same order as DFS
    "Count non-zero squares": (TraversalMode.SCORED, filled_cells),
    "Count degrees of freedom": (TraversalMode.SCORED, degrees_of_freedom),
}

HEADER = ("Search Name", "Generator Name", "Test Name",
          "Iterations", "Duration", "Iter/Sec", "Error")


@dataclass
class BenchmarkRow:
    search: str
    generator: str
    board: str
    iterations: int
    duration_s: float
    iterations_per_s: float
    error: Optional[str] = None

    def cells(self) -> tuple[str, ...]:
        return (
            self.search,
            self.generator,
            self.board,
            str(self.iterations),
            f"{self.duration_s:.3f}",
            str(round(self.iterations_per_s)),
            self.error or "",
        )


def run_benchmark(
    searches: Optional[Mapping[str, SearchMode]] = None,
    generators: Optional[Mapping[str, Generator]] = None,
    boards: Optional[Mapping[str, Board]] = None,
    base_config: Optional[SearchConfig] = None,
    timer: Optional[PerformanceTimer] = None,
    verbose: bool = True,
) -> list[BenchmarkRow]:
    """
    Run the benchmark grid.

    Args:
        searches: name -> (traversal, score) (default: DEFAULT_SEARCHES)
        generators: name -> move generator (default: sudoku.GENERATORS)
        boards: name -> board (default: sudoku.BOARDS)
        base_config: Config shared by all runs (default: first-found, 30 s)
        timer: Optional PerformanceTimer, one block per generator/search pair
        verbose: Print a line before each run

    Returns:
        One BenchmarkRow per run, in grid order (generator, search, board)
    """
    searches = searches if searches is not None else DEFAULT_SEARCHES
    generators = generators if generators is not None else GENERATORS
    boards = boards if boards is not None else BOARDS
    if base_config is None:
        base_config = SearchConfig(policy=SolutionPolicy.FIRST_FOUND, max_time_s=30.0)
    timer = timer if timer is not None else PerformanceTimer(enabled=False)

    rows = []
    for generator_name, generator in generators.items():
        for search_name, (traversal, score) in searches.items():
            solver = SnapshotSolver(
                SudokuProblem(generator=generator, score=score),
                replace(base_config, traversal=traversal),
            )
            with timer.time_block(f"{search_name} / {generator_name}"):
                for board_name, board in boards.items():
                    if verbose:
                        print(f"Running {search_name}, {generator_name} on {board_name}")
                    with timer.time_block(board_name):
                        result = solver.solve(board)
                    rows.append(BenchmarkRow(
                        search=search_name,
                        generator=generator_name,
                        board=board_name,
                        iterations=result.iterations,
                        duration_s=result.duration_s,
                        iterations_per_s=result.iterations_per_s,
                        error=result.error,
                    ))
    return rows


def markdown_table(rows: list[BenchmarkRow]) -> str:
    """Render rows as a padded markdown table (header row first)."""
    table = [HEADER] + [row.cells() for row in rows]
    widths = [max(len(line[col]) for line in table) for col in range(len(HEADER))]

    def render_line(cells) -> str:
        return "| " + " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " |"

    lines = [render_line(HEADER), "| " + " | ".join("-" * w for w in widths) + " |"]
    lines += [render_line(cells) for cells in table[1:]]
    return "\n".join(lines)
