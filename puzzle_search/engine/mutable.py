"""
Mutate/Undo Search Drivers.

One live mutable state is advanced with Edit.apply() and rolled back with
Edit.revert(). Memory for states stays constant (one instance) at the cost
of repeated apply/undo work.

Two forms:
- RecursiveSolver: the call stack is the frontier (limited by Python's
  recursion limit)
- StackSolver: explicit tree of pending edits, iterative, no recursion limit

Constraints:
- Depth-first only: strict apply/undo nesting rules out BFS and scored order
- First-found only: there is no per-node state to compare paths against
- Every Edit must be a true inverse pair (not verified)

Per visited position:
    1. Dedup check on the live state (seen -> skip)
    2. is_valid() fails -> skip
    3. is_solved()      -> success, the live state IS the goal state
    4. Expand, then check max_time_s

Steps are the labels of the edits applied on the current descent.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from puzzle_search.config import SearchConfig, SolutionPolicy, TraversalMode
from puzzle_search.engine.visited import SeenSet
from puzzle_search.errors import NoSolutionError, SearchConfigError, SearchError
from puzzle_search.fingerprint import make_fingerprint
from puzzle_search.models import Edit, SearchResult, SearchStatus
from puzzle_search.problem import Problem
from puzzle_search.utils.diagnostics import SearchTracer
from puzzle_search.utils.timing import Deadline


class _MutableSolver:
    """Shared configuration checks and result assembly."""

    name = "mutable"

    def __init__(self, problem: Problem, config: Optional[SearchConfig] = None):
        self.problem = problem
        self.config = config if config is not None else SearchConfig()

        self.config.validate()
        if self.config.traversal is not TraversalMode.DFS:
            raise SearchConfigError(
                f"{type(self).__name__} only supports depth-first traversal, "
                f"got {self.config.traversal.value}"
            )
        if self.config.policy is not SolutionPolicy.FIRST_FOUND:
            raise SearchConfigError(
                f"{type(self).__name__} only supports the first_found policy"
            )

    def _start(self) -> tuple[Deadline, SearchTracer, SeenSet]:
        config = self.config
        return (
            Deadline(config.max_time_s),
            SearchTracer(config.debug, config.progress_every, name=self.name),
            SeenSet(make_fingerprint(config.duplicate_check)),
        )

    def _visit(self, state: Any, seen: SeenSet, tracer: SearchTracer) -> Optional[bool]:
        """
        Checks for the current position.

        Returns:
            True if solved, False if pruned (seen or invalid), None to expand
        """
        if not seen.add(state):
            tracer.trace("duplicate state found")
            return False
        if not self.problem.is_valid(state):
            tracer.trace("invalid state found")
            return False
        if self.problem.is_solved(state):
            tracer.trace("solution found")
            return True
        return None

    def _edits(self, state: Any) -> Iterator[Edit]:
        return iter(self.problem.transitions(state))

    def _failure(self, iterations: int, deadline: Deadline, timed_out: bool) -> SearchResult:
        if timed_out:
            return SearchResult(
                iterations=iterations,
                duration_s=deadline.elapsed(),
                status=SearchStatus.TIMEOUT,
                error=f"max_time_s reached ({self.config.max_time_s}s)",
            )
        if self.config.raise_on_no_solution:
            raise NoSolutionError(iterations)
        return SearchResult(
            iterations=iterations,
            duration_s=deadline.elapsed(),
            status=SearchStatus.NO_SOLUTION,
            error="No solution found",
        )


class RecursiveSolver(_MutableSolver):
    """
    Pure recursion form of the mutate/undo driver.

    Args:
        problem: Puzzle rules (transitions must yield Edit objects)
        config: DFS + FIRST_FOUND configuration

    Raises:
        SearchConfigError: Non-DFS traversal or exhaustive policy

    Notes:
        - Deep spaces hit RecursionError, reported as SearchError once the
          applied edits are reverted. Use StackSolver for those.
        - After a successful solve the passed state object holds the goal
    """

    name = "recursive"

    def solve(self, state: Any) -> SearchResult:
        deadline, tracer, seen = self._start()
        steps: list[str] = []
        iterations = 0

        def recur() -> Optional[SearchStatus]:
            nonlocal iterations
            iterations += 1
            tracer.iteration(iterations, len(steps))

            outcome = self._visit(state, seen, tracer)
            if outcome is not None:
                return SearchStatus.SOLVED if outcome else None

            edits = self._edits(state)
            if deadline.expired():
                return SearchStatus.TIMEOUT

            for edit in edits:
                edit.apply(state)
                applied.append(edit)
                if edit.label is not None:
                    steps.append(edit.label)
                tracer.trace(f"step: {edit.label}")

                status = recur()
                if status is SearchStatus.SOLVED:
                    return status

                edit.revert(state)
                applied.pop()
                if edit.label is not None:
                    steps.pop()
                if status is SearchStatus.TIMEOUT:
                    return status
            return None

        # Edits on the current path, undone if the recursion blows up
        applied: list[Edit] = []
        try:
            status = recur()
        except RecursionError as exc:
            for edit in reversed(applied):
                edit.revert(state)
            raise SearchError(
                f"Recursion limit reached after {iterations} iterations "
                f"(use the stack engine for deep searches)"
            ) from exc

        if status is SearchStatus.SOLVED:
            return SearchResult(
                state=state,
                steps=steps,
                iterations=iterations,
                duration_s=deadline.elapsed(),
                status=SearchStatus.SOLVED,
            )
        return self._failure(iterations, deadline, timed_out=status is SearchStatus.TIMEOUT)


@dataclass(eq=False)
class EditTreeNode:
    """
    Position in the explicit edit tree.

    Attributes:
        parent: Parent position (None for the start position)
        edit: Edit that leads from the parent to this position
        pending: Lazily consumed iterator of not yet tried child edits

    Notes:
        - A child is taken off its parent's pending iterator when the driver
          descends into it and is dropped once it is exhausted
    """
    parent: Optional[EditTreeNode] = None
    edit: Optional[Edit] = None
    pending: Iterator[Edit] = field(default_factory=lambda: iter(()))


class StackSolver(_MutableSolver):
    """
    Explicit-tree form of the mutate/undo driver (no recursion).

    Args:
        problem: Puzzle rules (transitions must yield Edit objects)
        config: DFS + FIRST_FOUND configuration

    Algorithm:
        - Descend: take the next pending edit of the current position, apply it,
          push its label, visit the new position
        - Ascend: current position exhausted -> revert its edit, pop its label,
          continue with the parent
        - Exhausting the start position means there is no solution
    """

    name = "stack"

    def solve(self, state: Any) -> SearchResult:
        deadline, tracer, seen = self._start()
        steps: list[str] = []
        iterations = 0
        timed_out = False

        current = EditTreeNode()
        visiting = True  # the start position is visited without an edit

        while True:
            if not visiting:
                edit = next(current.pending, None)
                if edit is not None:
                    current = EditTreeNode(parent=current, edit=edit)
                    edit.apply(state)
                    if edit.label is not None:
                        steps.append(edit.label)
                    tracer.trace(f"step: {edit.label}")
                elif current.parent is None:
                    break
                else:
                    self._ascend(current, state, steps)
                    current = current.parent
                    continue
            visiting = False

            iterations += 1
            tracer.iteration(iterations, len(steps))

            outcome = self._visit(state, seen, tracer)
            if outcome is True:
                return SearchResult(
                    state=state,
                    steps=steps,
                    iterations=iterations,
                    duration_s=deadline.elapsed(),
                    status=SearchStatus.SOLVED,
                )
            if outcome is False:
                continue

            current.pending = self._edits(state)
            if deadline.expired():
                tracer.trace("max_time_s reached")
                timed_out = True
                break

        # Restore the start state before reporting a failure
        while current.parent is not None:
            self._ascend(current, state, steps)
            current = current.parent

        return self._failure(iterations, deadline, timed_out)

    @staticmethod
    def _ascend(node: EditTreeNode, state: Any, steps: list[str]) -> None:
        node.edit.revert(state)
        if node.edit.label is not None:
            steps.pop()
