"""Problem definition contract consumed by the search drivers."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from .models import Edit, Transition

Move = Union[Transition, Edit]


class Problem(ABC):
    """
    Abstract base class for puzzle rules.

    Subclasses provide:
        transitions(state): Successors (Transition) or reversible edits (Edit)
        is_valid(state): False prunes the state (default: always valid)
        is_solved(state): Goal test
        score(state): Optional heuristic, higher is explored first

    Notes:
        - transitions() must be re-derivable: every call on the same state
          yields the same sequence, no state is kept between calls.
          A generator function is the natural implementation.
        - The sequence may be empty (dead end)
    """

    @abstractmethod
    def transitions(self, state: Any) -> Iterable[Move]:
        pass

    def is_valid(self, state: Any) -> bool:
        return True

    @abstractmethod
    def is_solved(self, state: Any) -> bool:
        pass

    def score(self, state: Any) -> float:
        raise NotImplementedError(f"{type(self).__name__} does not define a score")

    @property
    def has_score(self) -> bool:
        """True if score() is implemented (required for scored traversal)."""
        return type(self).score is not Problem.score


class FunctionProblem(Problem):
    """
    Problem assembled from plain callables.

    Example:
        >>> problem = FunctionProblem(
        ...     transitions=lambda s: [Transition("inc", s + 1)] if s < 3 else [],
        ...     is_solved=lambda s: s == 3,
        ... )
    """

    def __init__(
        self,
        transitions: Callable[[Any], Iterable[Move]],
        is_solved: Callable[[Any], bool],
        is_valid: Optional[Callable[[Any], bool]] = None,
        score: Optional[Callable[[Any], float]] = None,
    ):
        self._transitions = transitions
        self._is_solved = is_solved
        self._is_valid = is_valid
        self._score = score

    def transitions(self, state: Any) -> Iterator[Move]:
        return iter(self._transitions(state))

    def is_valid(self, state: Any) -> bool:
        if self._is_valid is None:
            return True
        return self._is_valid(state)

    def is_solved(self, state: Any) -> bool:
        return self._is_solved(state)

    def score(self, state: Any) -> float:
        if self._score is None:
            return super().score(state)
        return self._score(state)

    @property
    def has_score(self) -> bool:
        return self._score is not None
