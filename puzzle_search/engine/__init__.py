"""
Search Engine Drivers.

Public exports:
- SnapshotSolver: Frontier-based search over immutable snapshots (DFS/BFS/scored)
- RecursiveSolver: Mutate/undo search, call stack as frontier
- StackSolver: Mutate/undo search, explicit edit tree
- Frontier, scored_insert_index: Pending node ordering
- VisitedTable, SeenSet, VisitOutcome: Dedup bookkeeping
"""

from puzzle_search.engine.frontier import Frontier, scored_insert_index
from puzzle_search.engine.visited import SeenSet, VisitedTable, VisitOutcome
from puzzle_search.engine.snapshot import SnapshotSolver
from puzzle_search.engine.mutable import EditTreeNode, RecursiveSolver, StackSolver

__all__ = [
    'SnapshotSolver',
    'RecursiveSolver',
    'StackSolver',
    'EditTreeNode',
    'Frontier',
    'scored_insert_index',
    'VisitedTable',
    'SeenSet',
    'VisitOutcome',
]
