"""
Tests for Frontier ordering and the Visited Table.

Test Groups:
- F1-F7: engine/frontier.py (Frontier, scored_insert_index)
- V1-V6: engine/visited.py (VisitedTable, SeenSet)
"""

import pytest

from puzzle_search import Node, SearchConfigError, TraversalMode
from puzzle_search.engine import Frontier, SeenSet, VisitedTable, VisitOutcome, scored_insert_index
from puzzle_search.fingerprint import canonical_fingerprint


def scored(*scores):
    return [Node(state=f"s{i}", score=s) for i, s in enumerate(scores)]


# ========== Test Group F: Frontier ==========

def test_F1_dfs_is_a_stack():
    """F1: DFS pops the newest node first"""
    frontier = Frontier(TraversalMode.DFS)
    for name in ("a", "b", "c"):
        frontier.push(Node(state=name))

    assert [frontier.pop().state for _ in range(3)] == ["c", "b", "a"]
    assert not frontier


def test_F2_bfs_is_a_queue():
    """F2: BFS pops the oldest node first"""
    frontier = Frontier(TraversalMode.BFS)
    for name in ("a", "b", "c"):
        frontier.push(Node(state=name))

    assert len(frontier) == 3
    assert [frontier.pop().state for _ in range(3)] == ["a", "b", "c"]


def test_F3_scored_insert_small_lists_go_to_front():
    """F3: Lists with <= 2 entries always insert at index 0 (window already <= 1)"""
    assert scored_insert_index([], 5) == 0
    assert scored_insert_index(scored(9), 1) == 0
    assert scored_insert_index(scored(9, 1), 5) == 0


def test_F4_scored_insert_is_approximate():
    """F4: Binary search stops at width <= 1 and inserts at the lower bound"""
    entries = scored(10, 8, 6, 4, 2)

    assert scored_insert_index(entries, 100) == 0
    # 3 lands before 4, one slot early
    assert scored_insert_index(entries, 3) == 3
    assert scored_insert_index(entries, 7) == 1
    assert scored_insert_index(scored(9, 5, 1), 5) == 0


def test_F5_scored_frontier_pops_high_scores_first():
    """F5: Scored frontier keeps the best node near the front"""
    frontier = Frontier(TraversalMode.SCORED)
    for name, score in (("c1", 1), ("c2", 2), ("c3", 3), ("c4", 10), ("c5", 0)):
        frontier.push(Node(state=name, score=score))

    assert [node.state for node in frontier] == ["c4", "c3", "c5", "c2", "c1"]
    assert frontier.pop().state == "c4"


def test_F6_constant_score_matches_dfs():
    """F6: Constant score inserts every node at the front, like DFS"""
    scored_frontier = Frontier(TraversalMode.SCORED)
    dfs_frontier = Frontier(TraversalMode.DFS)
    for name in "abcdef":
        scored_frontier.push(Node(state=name, score=1.0))
        dfs_frontier.push(Node(state=name))

    assert [n.state for n in scored_frontier] == [n.state for n in dfs_frontier]


def test_F7_unknown_mode_rejected():
    """F7: Raw strings are not traversal modes"""
    with pytest.raises(SearchConfigError, match="Unknown search mode astar"):
        Frontier("astar")


# ========== Test Group V: Visited Table ==========

def test_V1_first_seen_is_new():
    """V1: Unknown fingerprint is recorded"""
    table = VisitedTable(canonical_fingerprint)
    node = Node(state=("a", 1))

    assert table.check(node, return_first=True) is VisitOutcome.NEW
    assert table.best(("a", 1)) is node
    assert ("a", 1) in table
    assert len(table) == 1


def test_V2_first_found_duplicates_always_discarded():
    """V2: First-found policy: first seen wins, even against a shorter node"""
    table = VisitedTable(canonical_fingerprint)
    root = Node(state="r")
    long_node = root.child("x", "s").child("y", "t")
    short_node = root.child("z", "t")

    assert table.check(long_node, return_first=True) is VisitOutcome.NEW
    assert table.check(short_node, return_first=True) is VisitOutcome.DUPLICATE
    assert table.best("t") is long_node


def test_V3_exhaustive_keeps_shorter_node():
    """V3: Exhaustive policy replaces the record with a strictly shorter node"""
    table = VisitedTable(canonical_fingerprint)
    root = Node(state="r")
    long_node = root.child("x", "s").child("y", "t")
    short_node = root.child("z", "t")
    same_length = root.child("w", "u").child("v", "t")

    table.check(long_node, return_first=False)
    assert table.check(short_node, return_first=False) is VisitOutcome.IMPROVED
    assert table.best("t") is short_node
    assert table.check(same_length, return_first=False) is VisitOutcome.DUPLICATE
    assert table.best("t") is short_node


def test_V4_disabled_table_never_dedups():
    """V4: No fingerprint -> every node is NEW, nothing is stored"""
    table = VisitedTable(None)
    assert not table.enabled
    for _ in range(3):
        assert table.check(Node(state="same"), return_first=True) is VisitOutcome.NEW
    assert len(table) == 0
    assert table.best("same") is None


def test_V5_seen_set():
    """V5: SeenSet reports repeats of the live state"""
    seen = SeenSet(canonical_fingerprint)
    state = [1, 2]

    assert seen.add(state)
    assert not seen.add([1, 2])
    state.append(3)
    assert seen.add(state)
    assert len(seen) == 2


def test_V6_seen_set_disabled():
    """V6: SeenSet without fingerprint accepts everything"""
    seen = SeenSet(None)
    assert seen.add("x") and seen.add("x")
    assert len(seen) == 0
