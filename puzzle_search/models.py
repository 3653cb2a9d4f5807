"""
Search Engine Data Models.

This module defines the data structures shared by all search drivers:
- Transition: Successor produced by a problem (snapshot engine)
- Edit: Reversible in-place mutation produced by a problem (mutate/undo engines)
- Node: Search tree node (state + predecessor link + distance)
- SearchStatus: Terminal state of a search run
- SearchResult: Final search result

Labels are opaque descriptions of a move. The engine only reports them,
it never uses them for search decisions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional


START_LABEL = "start"


class Transition(NamedTuple):
    """
    Successor of a state (snapshot engine).

    Attributes:
        label: Move description, e.g. "(0, 2) => 5" or "1←"
        state: The resulting state (new value, may share structure with parent)
    """
    label: str
    state: Any


@dataclass(frozen=True)
class Edit:
    """
    Reversible mutation of a live state (mutate/undo engines).

    Attributes:
        label: Move description (None = not reported in the step list)
        forward: Mutates the state in place (do)
        inverse: Restores the state exactly (undo)

    Notes:
        - forward followed by inverse MUST restore an identical state
        - The engine does not verify this (precondition of the problem)
    """
    label: Optional[str]
    forward: Callable[[Any], None]
    inverse: Callable[[Any], None]

    def apply(self, state: Any) -> None:
        self.forward(state)

    def revert(self, state: Any) -> None:
        self.inverse(state)


@dataclass(eq=False)
class Node:
    """
    Search tree node (snapshot engine).

    Attributes:
        state: State reached by this node
        parent: Predecessor node (None for the root)
        label: Transition label that produced this node ("start" for the root)
        distance: Number of transitions from the root
        score: Problem score (only meaningful in scored traversal)

    Invariants:
        - root.distance == 0
        - child.distance == parent.distance + 1

    Notes:
        - eq=False: nodes compare by identity, parents are never deep-compared
    """
    state: Any
    parent: Optional[Node] = field(default=None, repr=False)
    label: str = START_LABEL
    distance: int = 0
    score: float = 0.0

    @classmethod
    def root(cls, state: Any, score: float = 0.0) -> Node:
        return cls(state=state, score=score)

    def child(self, label: str, state: Any, score: float = 0.0) -> Node:
        """Create the successor reached from this node via `label`."""
        return Node(
            state=state,
            parent=self,
            label=label,
            distance=self.distance + 1,
            score=score,
        )

    def path(self) -> list[str]:
        """
        Labels from the root to this node (root label included).

        Example:
            >>> root = Node.root("S0")
            >>> root.child("a", "S1").child("b", "S2").path()
            ['start', 'a', 'b']
        """
        steps = []
        node: Optional[Node] = self
        while node is not None:
            steps.append(node.label)
            node = node.parent
        steps.reverse()
        return steps


class SearchStatus(Enum):
    """
    Terminal state of a search run.

    Values:
        SOLVED: A goal state was reached (result has state + steps)
        NO_SOLUTION: Frontier exhausted without any goal
        TIMEOUT: max_time_s exceeded (result may still hold the best goal so far)
        CONFIG_ERROR: Unknown/unsupported configuration, run aborted
    """
    SOLVED = "SOLVED"
    NO_SOLUTION = "NO_SOLUTION"
    TIMEOUT = "TIMEOUT"
    CONFIG_ERROR = "CONFIG_ERROR"


@dataclass
class SearchResult:
    """
    Final search result.

    Attributes:
        state: Goal state (None if no goal was reached)
        steps: Transition labels from start to goal (None if no goal)
        iterations: Number of nodes popped / positions visited
        duration_s: Elapsed wall-clock time in seconds
        status: Terminal state (see SearchStatus)
        error: Human readable error ("max_time_s reached (30s)", "Unknown search mode x", ...)

    Notes:
        - A TIMEOUT result can still be solved in exhaustive mode
          (best goal accumulated before the deadline)
    """
    state: Any = None
    steps: Optional[list[str]] = None
    iterations: int = 0
    duration_s: float = 0.0
    status: SearchStatus = SearchStatus.NO_SOLUTION
    error: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.steps is not None

    @property
    def iterations_per_s(self) -> float:
        if self.duration_s <= 0.0:
            return float(self.iterations)
        return self.iterations / self.duration_s
