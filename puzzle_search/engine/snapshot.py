"""
Snapshot Search Driver.

Each node owns its own (structurally shared) state value. Nothing is mutated
in place, so the frontier can hold any number of branches and every traversal
mode is available.

Main loop (one iteration per popped node):
    1. Pop a node (front of the frontier)
    2. is_valid() fails         -> discard
    3. is_solved():
         first-found            -> return the path immediately
         exhaustive             -> record the solution, keep going
    4. Visited check            -> duplicates are not expanded
    5. Expand: one child per transition (distance + 1), push to frontier
    6. Elapsed > max_time_s     -> stop with TIMEOUT

Terminal states: SOLVED, NO_SOLUTION (frontier empty), TIMEOUT, CONFIG_ERROR.

The configuration is checked before the root is popped, so an unknown
traversal mode is reported as CONFIG_ERROR even when the initial state is
already solved.
"""

from __future__ import annotations
from typing import Any, Optional

from puzzle_search.config import SearchConfig, TraversalMode
from puzzle_search.engine.frontier import Frontier
from puzzle_search.engine.visited import VisitedTable, VisitOutcome
from puzzle_search.errors import SearchConfigError
from puzzle_search.fingerprint import make_fingerprint
from puzzle_search.models import Node, SearchResult, SearchStatus
from puzzle_search.problem import Problem
from puzzle_search.utils.diagnostics import SearchTracer
from puzzle_search.utils.timing import Deadline


class SnapshotSolver:
    """
    Frontier-based search over immutable state snapshots.

    Args:
        problem: Puzzle rules (transitions must yield Transition(label, state))
        config: Search configuration (default: DFS, first-found, canonical dedup)

    Example:
        >>> solver = SnapshotSolver(problem, SearchConfig(traversal=TraversalMode.BFS))
        >>> result = solver.solve(initial_state)
        >>> result.steps  # ['start', ...]
    """

    def __init__(self, problem: Problem, config: Optional[SearchConfig] = None):
        self.problem = problem
        self.config = config if config is not None else SearchConfig()

    def solve(self, initial_state: Any) -> SearchResult:
        """
        Run one search from `initial_state`.

        Returns:
            SearchResult. Configuration problems are reported with status
            CONFIG_ERROR instead of being raised.
        """
        config = self.config
        problem = self.problem
        deadline = Deadline(config.max_time_s)
        tracer = SearchTracer(config.debug, config.progress_every, name="snapshot")

        try:
            config.validate()
            frontier = Frontier(config.traversal)
            scored = config.traversal is TraversalMode.SCORED
            if scored and not problem.has_score:
                raise SearchConfigError(
                    f"Scored traversal requires {type(problem).__name__}.score()"
                )
            visited = VisitedTable(make_fingerprint(config.duplicate_check))
        except SearchConfigError as exc:
            tracer.trace(f"configuration error: {exc}")
            return SearchResult(
                iterations=0,
                duration_s=deadline.elapsed(),
                status=SearchStatus.CONFIG_ERROR,
                error=str(exc),
            )

        return_first = config.return_first
        frontier.push(Node.root(initial_state, score=problem.score(initial_state) if scored else 0.0))

        solutions: list[Node] = []
        iterations = 0
        timed_out = False

        while frontier:
            iterations += 1
            tracer.iteration(iterations, len(frontier))

            node = frontier.pop()
            state = node.state
            if tracer.debug:
                tracer.trace(f"current node: {node.label} (distance {node.distance}, score {node.score})")
                tracer.trace(f"current steps to node: {node.path()}")

            if not problem.is_valid(state):
                tracer.trace("invalid state found")
                continue

            if problem.is_solved(state):
                tracer.trace("solution found")
                if return_first:
                    return self._result(node, iterations, deadline, SearchStatus.SOLVED)
                solutions.append(node)

            outcome = visited.check(node, return_first)
            if outcome is VisitOutcome.DUPLICATE:
                tracer.trace("duplicate state found")
                continue
            if outcome is VisitOutcome.IMPROVED:
                tracer.trace(f"better path found (distance {node.distance})")
                continue

            for label, next_state in problem.transitions(state):
                child = node.child(
                    label, next_state,
                    score=problem.score(next_state) if scored else 0.0,
                )
                tracer.trace(f"adding state: {label} (score {child.score})")
                frontier.push(child)

            if deadline.expired():
                tracer.trace("max_time_s reached")
                timed_out = True
                break

        # Shortest recorded solution (first recorded wins ties)
        best = min(solutions, key=lambda n: n.distance, default=None)
        if tracer.debug:
            tracer.trace(f"solutions: {len(solutions)}, visited: {len(visited)}")

        if timed_out:
            result = self._result(best, iterations, deadline, SearchStatus.TIMEOUT)
            result.error = f"max_time_s reached ({config.max_time_s}s)"
            return result
        if best is None:
            return self._result(None, iterations, deadline, SearchStatus.NO_SOLUTION)
        return self._result(best, iterations, deadline, SearchStatus.SOLVED)

    @staticmethod
    def _result(node: Optional[Node], iterations: int, deadline: Deadline,
                status: SearchStatus) -> SearchResult:
        result = SearchResult(
            iterations=iterations,
            duration_s=deadline.elapsed(),
            status=status,
        )
        if node is not None:
            result.state = node.state
            result.steps = node.path()
        return result
