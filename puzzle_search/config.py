"""
Search Engine Configuration.

This module defines the configuration structures for the search engine:
- TraversalMode: Frontier discipline (depth-first, breadth-first, scored)
- SolutionPolicy: Stop at first goal vs. keep searching for the shortest
- DuplicateCheck: Fingerprint strategy for the visited table
- EngineKind: Which driver runs the search (snapshot, recursive, stack)
- SearchConfig: All search parameters

Time limits are in seconds. Iteration counts are popped/visited nodes.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional, Union

from .errors import SearchConfigError


class TraversalMode(Enum):
    """Order in which pending nodes are explored."""
    DFS = "dfs"  # stack: newest first
    BFS = "bfs"  # queue: oldest first
    SCORED = "scored"  # descending problem.score(state)


class SolutionPolicy(Enum):
    """What to do when a goal state is reached."""
    FIRST_FOUND = "first_found"
    EXHAUSTIVE_SHORTEST = "exhaustive_shortest"


class DuplicateCheck(Enum):
    """
    Fingerprint strategy used for deduplication.

    Values:
        NONE: No dedup (may not terminate on cyclic state graphs)
        UNORDERED: Order-preserving JSON key, fast, equal states may get different keys
        CANONICAL: Canonical JSON key, slower, equal states always match
        DIGEST: 64-bit hash, fastest, collisions silently prune states
    """
    NONE = "none"
    UNORDERED = "unordered"
    CANONICAL = "canonical"
    DIGEST = "digest"


class EngineKind(Enum):
    """State representation strategy."""
    SNAPSHOT = "snapshot"  # one immutable state per node
    RECURSIVE = "recursive"  # one mutable state, call stack as frontier
    STACK = "stack"  # one mutable state, explicit edit tree


@dataclass
class SearchConfig:
    """
    Complete search configuration.

    Organized in 3 groups:
    1. Search: traversal, policy, duplicate check, engine
    2. Limits: max_time_s
    3. Diagnostics: progress_every, debug

    Notes:
        - traversal is typed loosely: a raw string that is not a
          TraversalMode value survives from_dict() so the snapshot driver can
          report it as a CONFIG_ERROR result
        - The mutate/undo engines only support DFS + FIRST_FOUND

    Example:
        >>> config = SearchConfig(traversal=TraversalMode.BFS)
        >>> config = SearchConfig.from_dict({"traversal": "bfs", "max_time_s": 30})
    """

    # ========== 1. Search ==========
    traversal: Union[TraversalMode, str] = TraversalMode.DFS
    """Frontier discipline. SCORED requires problem.score()."""

    policy: SolutionPolicy = SolutionPolicy.FIRST_FOUND
    """FIRST_FOUND returns immediately, EXHAUSTIVE_SHORTEST drains the frontier."""

    duplicate_check: DuplicateCheck = DuplicateCheck.CANONICAL
    """Fingerprint strategy for the visited table."""

    engine: EngineKind = EngineKind.SNAPSHOT
    """Driver used by puzzle_search.solve()."""

    # ========== 2. Limits ==========
    max_time_s: Optional[float] = None
    """Wall-clock ceiling in seconds, sampled after each expanded node.

    0 stops after the first fully expanded node."""

    # ========== 3. Diagnostics ==========
    progress_every: Optional[int] = None
    """Print 'iteration: N, queue size: M' every N iterations (None = off)."""

    debug: bool = False
    """Print a trace line for every search event."""

    raise_on_no_solution: bool = False
    """Mutate/undo engines only: raise NoSolutionError instead of returning
    a NO_SOLUTION result."""

    @property
    def return_first(self) -> bool:
        return self.policy is SolutionPolicy.FIRST_FOUND

    def validate(self) -> None:
        """
        Check all parameters.

        Raises:
            SearchConfigError: If any parameter is out of range or unknown
        """
        if not isinstance(self.traversal, TraversalMode):
            raise SearchConfigError(f"Unknown search mode {self.traversal}")
        if not isinstance(self.policy, SolutionPolicy):
            raise SearchConfigError(f"Unknown solution policy {self.policy}")
        if not isinstance(self.duplicate_check, DuplicateCheck):
            raise SearchConfigError(f"Unknown duplicate check {self.duplicate_check}")
        if not isinstance(self.engine, EngineKind):
            raise SearchConfigError(f"Unknown engine {self.engine}")
        if self.max_time_s is not None and self.max_time_s < 0:
            raise SearchConfigError(f"max_time_s must be >= 0, got {self.max_time_s}")
        if self.progress_every is not None and self.progress_every <= 0:
            raise SearchConfigError(
                f"progress_every must be a positive int, got {self.progress_every}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchConfig:
        """
        Build a config from plain values (CLI arguments, benchmark grids).

        Args:
            data: Mapping of field name -> value. Enum fields accept their
                  string values ("bfs", "exhaustive_shortest", ...)

        Returns:
            SearchConfig (not validated)

        Raises:
            SearchConfigError: On unknown keys or unknown policy/dedup/engine
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise SearchConfigError(f"Unknown config keys: {sorted(unknown)}")

        kwargs = dict(data)
        if "traversal" in kwargs:
            kwargs["traversal"] = _coerce(TraversalMode, kwargs["traversal"], strict=False)
        for name, enum_cls in (
            ("policy", SolutionPolicy),
            ("duplicate_check", DuplicateCheck),
            ("engine", EngineKind),
        ):
            if name in kwargs:
                kwargs[name] = _coerce(enum_cls, kwargs[name], strict=True)
        return cls(**kwargs)


def _coerce(enum_cls, value, strict: bool):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        if strict:
            raise SearchConfigError(f"Unknown {enum_cls.__name__} value {value!r}") from None
        return value
