"""Shared fixtures: small explicit state graphs and a mutable subset-sum problem."""

from pathlib import Path

import pytest

import puzzle_search
from puzzle_search import Edit, Problem, Transition

LEVELS_DIR = Path(puzzle_search.__file__).parent / "levels"


class GraphProblem(Problem):
    """
    Explicit state graph: state -> [(label, next_state), ...].

    Records how often each state was expanded (transitions() called).
    """

    def __init__(self, edges, goals, invalid=(), scores=None):
        self.edges = edges
        self.goals = set(goals)
        self.invalid = set(invalid)
        self.scores = scores
        self.expanded = {}

    def transitions(self, state):
        self.expanded[state] = self.expanded.get(state, 0) + 1
        for label, next_state in self.edges.get(state, []):
            yield Transition(label, next_state)

    def is_valid(self, state):
        return state not in self.invalid

    def is_solved(self, state):
        return state in self.goals

    def score(self, state):
        if self.scores is None:
            return super().score(state)
        return self.scores[state]

    @property
    def has_score(self):
        return self.scores is not None


class SubsetSumProblem(Problem):
    """
    Mutable state: list of chosen numbers (ascending). Goal: sum == target.

    Edits append/pop one number, so forward + inverse restore the list.
    """

    def __init__(self, numbers, target):
        self.numbers = numbers
        self.target = target

    def transitions(self, state):
        last = state[-1] if state else None
        for n in self.numbers:
            if last is not None and n <= last:
                continue
            yield Edit(
                label=f"+{n}",
                forward=lambda s, n=n: s.append(n),
                inverse=lambda s: s.pop(),
            )

    def is_valid(self, state):
        return sum(state) <= self.target

    def is_solved(self, state):
        return sum(state) == self.target


class ChainProblem(Problem):
    """Mutable counter [n] incremented until it reaches `length`."""

    def __init__(self, length):
        self.length = length

    def transitions(self, state):
        yield Edit(
            label="inc",
            forward=lambda s: s.__setitem__(0, s[0] + 1),
            inverse=lambda s: s.__setitem__(0, s[0] - 1),
        )

    def is_solved(self, state):
        return state[0] >= self.length


@pytest.fixture
def make_graph():
    """Factory for GraphProblem instances."""
    return GraphProblem


@pytest.fixture
def shortcut_graph():
    """
    S0 -> S1 -> S2 (goal) and S0 -> S2 (goal).

    The direct edge is listed first, so DFS (newest first) explores the
    2-transition branch first.
    """
    return GraphProblem(
        edges={
            "S0": [("direct", "S2"), ("to_s1", "S1")],
            "S1": [("s1_to_s2", "S2")],
        },
        goals={"S2"},
    )


@pytest.fixture
def cyclic_graph():
    """A <-> B <-> C <-> A, no goal."""
    return GraphProblem(
        edges={
            "A": [("ab", "B"), ("ac", "C")],
            "B": [("ba", "A"), ("bc", "C")],
            "C": [("ca", "A"), ("cb", "B")],
        },
        goals=set(),
    )


@pytest.fixture
def subset_sum():
    return SubsetSumProblem([3, 5, 7, 11], target=18)


@pytest.fixture
def chain_problem():
    return ChainProblem


@pytest.fixture
def make_subset_sum():
    """Factory for SubsetSumProblem instances."""
    return SubsetSumProblem


@pytest.fixture
def levels_dir():
    return LEVELS_DIR
