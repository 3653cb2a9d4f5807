"""
Visited Table.

Maps fingerprint -> best node seen so far (snapshot driver) or keeps a plain
fingerprint set (mutate/undo drivers, pruning only).

Check semantics when a node is popped (VisitedTable.check):
    fingerprint absent               -> record node, NEW (expand it)
    present, first-found policy      -> DUPLICATE (first seen wins)
    present, exhaustive policy       -> keep the shorter node:
                                        strictly shorter -> IMPROVED
                                        otherwise        -> DUPLICATE
IMPROVED nodes are NOT re-expanded. The shorter record only matters for
choosing which recorded solution to report.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Hashable, Optional

from puzzle_search.fingerprint import Fingerprint
from puzzle_search.models import Node


class VisitOutcome(Enum):
    NEW = "new"
    DUPLICATE = "duplicate"
    IMPROVED = "improved"


class VisitedTable:
    """
    Fingerprint -> node with minimal distance.

    Args:
        fingerprint: Key function, or None to disable dedup (every node is NEW)
    """

    def __init__(self, fingerprint: Optional[Fingerprint]):
        self.fingerprint = fingerprint
        self._records: dict[Hashable, Node] = {}

    @property
    def enabled(self) -> bool:
        return self.fingerprint is not None

    def check(self, node: Node, return_first: bool) -> VisitOutcome:
        if self.fingerprint is None:
            return VisitOutcome.NEW

        key = self.fingerprint(node.state)
        known = self._records.get(key)
        if known is None:
            self._records[key] = node
            return VisitOutcome.NEW
        if return_first:
            return VisitOutcome.DUPLICATE
        if node.distance < known.distance:
            self._records[key] = node
            return VisitOutcome.IMPROVED
        return VisitOutcome.DUPLICATE

    def best(self, state: Any) -> Optional[Node]:
        """Recorded node for `state` (None if unknown or dedup disabled)."""
        if self.fingerprint is None:
            return None
        return self._records.get(self.fingerprint(state))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, state: Any) -> bool:
        return self.best(state) is not None


class SeenSet:
    """Fingerprint set for the mutate/undo drivers (no path comparison)."""

    def __init__(self, fingerprint: Optional[Fingerprint]):
        self.fingerprint = fingerprint
        self._seen: set[Hashable] = set()

    def add(self, state: Any) -> bool:
        """
        Record the live state.

        Returns:
            False if the state was already seen (caller prunes it),
            True otherwise (also when dedup is disabled)
        """
        if self.fingerprint is None:
            return True
        key = self.fingerprint(state)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __len__(self) -> int:
        return len(self._seen)
