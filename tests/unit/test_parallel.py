"""
Tests for parallel BFS layer expansion.

Parallel and in-process expansion must give the same answer, the same
statistics and the same trace.
"""

import pytest

from flipull_solver.engine import Block, Blocks, FlipullRules, Move, Position
from flipull_solver.search import BreadthFirstSearch, LayerExpander, SearchConfig, expand_position
from flipull_solver.types import SolveStatus


@pytest.fixture
def checkerboard():
    """4 x 4 board with every row and column throwable."""
    throws = tuple(Move.horizontal(src, src) for src in range(4)) + tuple(
        Move.vertical(4 + col, col) for col in range(4)
    )
    rules = FlipullRules(throws=throws, width=4, height=4, clear_quota=2)
    position = Position(Blocks.from_rows(["1212", "2121", "1122", "2211"]), Block.B1, None)
    return position, rules


class TestExpandPosition:
    """Single-position expansion."""

    def test_children_in_throw_order(self, two_pairs):
        position, rules = two_pairs
        expansion = expand_position(rules, position)
        assert not expansion.cleared
        assert [move for move, _, _, _ in expansion.children] == list(rules.throws)

    def test_children_carry_hash_and_key(self, two_pairs):
        position, rules = two_pairs
        for _, child, child_hash, child_key in expand_position(rules, position).children:
            assert child_hash == rules.state_hash(child)
            assert child_key == child.canonical_key()

    def test_cleared(self, already_cleared):
        position, rules = already_cleared
        expansion = expand_position(rules, position)
        assert expansion.cleared
        assert expansion.children == []

    def test_dead_end_not_cleared(self, dead_end):
        position, rules = dead_end
        assert not expand_position(rules, position).cleared


class TestLayerExpander:
    """Layer expansion with and without a pool."""

    def test_in_process(self, two_pairs):
        position, rules = two_pairs
        with LayerExpander(rules, SearchConfig()) as expander:
            assert expander._pool is None
            results = list(expander.expand([position, position]))
        assert len(results) == 2
        assert results[0] == results[1]

    def test_pool_matches_in_process(self, checkerboard):
        position, rules = checkerboard
        layer = [child for _, child in rules.successors(position)]
        local = [expand_position(rules, p) for p in layer]
        config = SearchConfig(num_workers=2, parallel_threshold=1)
        with LayerExpander(rules, config) as expander:
            pooled = list(expander.expand(layer))
        assert pooled == local


class TestParallelSearch:
    """Whole searches with worker processes."""

    def test_same_result_as_serial(self, checkerboard):
        position, rules = checkerboard
        serial = BreadthFirstSearch(rules, SearchConfig()).run(position)
        parallel = BreadthFirstSearch(
            rules, SearchConfig(num_workers=2, parallel_threshold=1)
        ).run(position)
        assert parallel.status == serial.status
        assert parallel.trace == serial.trace
        assert parallel.stats.nodes_expanded == serial.stats.nodes_expanded
        assert parallel.stats.duplicates_pruned == serial.stats.duplicates_pruned

    def test_parallel_two_pairs(self, two_pairs):
        position, rules = two_pairs
        result = BreadthFirstSearch(
            rules, SearchConfig(num_workers=2, parallel_threshold=1)
        ).run(position)
        assert result.status is SolveStatus.SOLVED
        assert str(result.trace) == "7 7"
