"""
puzzle_search: Backtracking / state-space search engine for combinatorial puzzles.

Main API:
    solve(problem, initial_state, config) -> SearchResult

A problem supplies three rules (see problem.Problem):
    transitions(state), is_valid(state), is_solved(state)  [+ optional score(state)]

The engine explores the successor tree depth-first, breadth-first or by
descending score, with optional dedup of seen states and a wall-clock limit.
"""

from typing import Any, Optional

from .config import (
    SearchConfig,
    TraversalMode,
    SolutionPolicy,
    DuplicateCheck,
    EngineKind,
)
from .errors import SearchError, SearchConfigError, NoSolutionError, LevelFormatError
from .models import Transition, Edit, Node, SearchStatus, SearchResult
from .problem import Problem, FunctionProblem
from .engine import SnapshotSolver, RecursiveSolver, StackSolver


__all__ = [
    # Main API
    "solve",
    "make_solver",
    # Config
    "SearchConfig",
    "TraversalMode",
    "SolutionPolicy",
    "DuplicateCheck",
    "EngineKind",
    # Errors
    "SearchError",
    "SearchConfigError",
    "NoSolutionError",
    "LevelFormatError",
    # Models
    "Transition",
    "Edit",
    "Node",
    "SearchStatus",
    "SearchResult",
    # Problems
    "Problem",
    "FunctionProblem",
    # Drivers
    "SnapshotSolver",
    "RecursiveSolver",
    "StackSolver",
]

_DRIVERS = {
    EngineKind.SNAPSHOT: SnapshotSolver,
    EngineKind.RECURSIVE: RecursiveSolver,
    EngineKind.STACK: StackSolver,
}


def make_solver(problem: Problem, config: Optional[SearchConfig] = None):
    """
    Build the driver selected by config.engine.

    Raises:
        SearchConfigError: Unknown engine, or a configuration the mutate/undo
                           drivers cannot run (non-DFS, exhaustive)
    """
    config = config if config is not None else SearchConfig()
    driver = _DRIVERS.get(config.engine)
    if driver is None:
        raise SearchConfigError(f"Unknown engine {config.engine}")
    return driver(problem, config)


def solve(problem: Problem, initial_state: Any,
          config: Optional[SearchConfig] = None) -> SearchResult:
    """
    Solve a puzzle from `initial_state`.

    Args:
        problem: Puzzle rules
        initial_state: Start state (mutated in place by the mutate/undo engines)
        config: SearchConfig (default: snapshot engine, DFS, first-found,
                canonical dedup)

    Returns:
        SearchResult with state, steps, iterations, duration_s, status, error

    Example:
        >>> result = solve(SudokuProblem(), BOARDS["easy"],
        ...                SearchConfig(traversal=TraversalMode.BFS))
        >>> result.status is SearchStatus.SOLVED
    """
    return make_solver(problem, config).solve(initial_state)
