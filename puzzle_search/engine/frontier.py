"""
Frontier (pending nodes) for the snapshot driver.

Insertion policy per traversal mode:
- DFS: push to the front (stack), the newest branch is explored first
- BFS: push to the back (queue), nodes are explored in distance order
- SCORED: list kept in descending score order, insertion via approximate
  binary search (see scored_insert_index)

Pop always takes the front.
"""

from __future__ import annotations
from collections import deque
from typing import Iterator, Sequence, Union

from puzzle_search.config import TraversalMode
from puzzle_search.errors import SearchConfigError
from puzzle_search.models import Node


def scored_insert_index(entries: Sequence[Node], score: float) -> int:
    """
    Insertion index for a node with `score` in a descending-score list.

    Algorithm:
        lo, hi = 0, len - 1
        while the window is wider than 1:
            mid = (lo + hi) // 2
            score >= entries[mid].score -> hi = mid, else lo = mid
        insert at lo (no final comparison)

    Notes:
        - Approximate: the window stops at width <= 1 and the
          node goes to the lower bound, so ties are not ordered among
          themselves and the position can be one slot early
        - Constant score -> always index 0 -> same order as DFS
        - Empty list -> 0

    Example:
        >>> scored_insert_index([Node("a", score=9), Node("b", score=5),
        ...                      Node("c", score=1)], 5)
        0
    """
    lo = 0
    hi = len(entries) - 1
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if score >= entries[mid].score:
            hi = mid
        else:
            lo = mid
    return lo


class Frontier:
    """
    Ordered collection of discovered but not yet expanded nodes.

    Args:
        mode: TraversalMode (a raw string is rejected)

    Raises:
        SearchConfigError: Unknown traversal mode
    """

    def __init__(self, mode: Union[TraversalMode, str]):
        if not isinstance(mode, TraversalMode):
            raise SearchConfigError(f"Unknown search mode {mode}")
        self.mode = mode
        self._pending: Union[deque[Node], list[Node]]
        self._pending = [] if mode is TraversalMode.SCORED else deque()

    def push(self, node: Node) -> None:
        if self.mode is TraversalMode.DFS:
            self._pending.appendleft(node)
        elif self.mode is TraversalMode.BFS:
            self._pending.append(node)
        else:
            self._pending.insert(scored_insert_index(self._pending, node.score), node)

    def pop(self) -> Node:
        if self.mode is TraversalMode.SCORED:
            return self._pending.pop(0)
        return self._pending.popleft()

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return len(self._pending) > 0

    def __iter__(self) -> Iterator[Node]:
        return iter(self._pending)
