#!/usr/bin/env python3
"""Unit tests for iterative deepening search and search configuration."""

import time
import unittest

import pytest

from conftest import (
    H_BOTTOM, MOVE_A, MOVE_B, FirstVisitTable, GraphRules,
    make_position, two_by_two_rules,
)
from flipull_solver.search import (
    BreadthFirstSearch, IterativeDeepeningSearch, NodeBudgetExhausted,
    SearchConfig, TimeBudgetExhausted, build_stopping_conditions,
)
from flipull_solver.types import SolveStatus


class TestSearchConfig(unittest.TestCase):
    """Test SearchConfig dataclass."""

    def test_default_values(self):
        """Default values are set correctly."""
        config = SearchConfig()
        self.assertEqual(config.algorithm, "bfs")
        self.assertIsNone(config.max_depth)
        self.assertIsNone(config.max_nodes)
        self.assertIsNone(config.time_budget)
        self.assertEqual(config.num_workers, 1)
        self.assertFalse(config.parallel)

    def test_custom_values(self):
        """Custom values are accepted."""
        config = SearchConfig(algorithm="iddfs", max_depth=40, max_nodes=1000, time_budget=60.0)
        self.assertEqual(config.algorithm, "iddfs")
        self.assertEqual(config.max_depth, 40)
        self.assertEqual(config.max_nodes, 1000)
        self.assertEqual(config.time_budget, 60.0)

    def test_workers_default_to_cpu_count(self):
        self.assertGreaterEqual(SearchConfig(num_workers=None).num_workers, 1)

    def test_invalid_values(self):
        for kwargs in (
            {"algorithm": "astar"},
            {"max_depth": -1},
            {"max_nodes": -1},
            {"time_budget": -1.0},
            {"num_workers": 0},
        ):
            with self.assertRaises(ValueError, msg=kwargs):
                SearchConfig(**kwargs)

    def test_with_overrides_skips_none(self):
        config = SearchConfig(max_depth=5).with_overrides(max_depth=None, max_nodes=7)
        self.assertEqual((config.max_depth, config.max_nodes), (5, 7))


class TestSearchConfigFromEnv:
    """Environment configuration."""

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("FLIPULL_ALGORITHM", "IDDFS")
        monkeypatch.setenv("FLIPULL_MAX_DEPTH", "12")
        monkeypatch.setenv("FLIPULL_TIME_BUDGET", "2.5")
        config = SearchConfig.from_env()
        assert config.algorithm == "iddfs"
        assert config.max_depth == 12
        assert config.time_budget == 2.5

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("FLIPULL_MAX_NODES", "100")
        monkeypatch.setenv("FLIPULL_WORKERS", "3")
        config = SearchConfig.from_env(max_nodes=5, num_workers=None)
        assert config.max_nodes == 5
        assert config.num_workers == 3

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("FLIPULL_MAX_DEPTH", "deep")
        with pytest.raises(ValueError, match="FLIPULL_MAX_DEPTH"):
            SearchConfig.from_env()

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            SearchConfig.from_env(depth=3)


class TestStoppingConditions(unittest.TestCase):
    """Test stopping condition classes."""

    def test_node_budget(self):
        cond = NodeBudgetExhausted(10)
        self.assertFalse(cond.should_stop({"nodes_expanded": 9}))
        self.assertTrue(cond.should_stop({"nodes_expanded": 10}))
        self.assertIn("10", cond.reason())

    def test_time_budget_not_exhausted(self):
        cond = TimeBudgetExhausted(10.0)
        self.assertFalse(cond.should_stop({}))

    def test_time_budget_exhausted(self):
        cond = TimeBudgetExhausted(0.01)
        time.sleep(0.02)
        self.assertTrue(cond.should_stop({}))
        self.assertIn("time_budget", cond.reason())

    def test_build(self):
        conditions = build_stopping_conditions(SearchConfig(max_nodes=3, time_budget=1.0))
        self.assertEqual([type(c) for c in conditions], [NodeBudgetExhausted, TimeBudgetExhausted])
        self.assertEqual(build_stopping_conditions(SearchConfig()), [])


def iddfs(rules, start, table_factory=None, **config):
    config = SearchConfig(algorithm="iddfs", **config)
    if table_factory is None:
        return IterativeDeepeningSearch(rules, config).run(start)
    return IterativeDeepeningSearch(rules, config, table_factory=table_factory).run(start)


class TestIterativeDeepening:
    """Outcomes of iterative deepening search."""

    def test_two_pairs(self, two_pairs):
        position, rules = two_pairs
        result = iddfs(rules, position)
        assert result.status is SolveStatus.SOLVED
        assert result.moves == [H_BOTTOM, H_BOTTOM]
        assert result.stats.iterations == 3

    def test_agrees_with_bfs(self, two_pairs, transposition_graph):
        for rules, start in (two_pairs[::-1], (transposition_graph, "R")):
            bfs_result = BreadthFirstSearch(rules, SearchConfig()).run(start)
            assert iddfs(rules, start).trace == bfs_result.trace

    def test_already_cleared(self, already_cleared):
        position, rules = already_cleared
        result = iddfs(rules, position, max_nodes=0)
        assert result.solved and result.length == 0

    def test_dead_end_ignores_bounds(self, dead_end):
        position, rules = dead_end
        for bounds in ({}, {"max_nodes": 0}, {"max_depth": 0}, {"time_budget": 0.0}):
            assert iddfs(rules, position, **bounds).status is SolveStatus.UNSOLVABLE

    def test_out_of_budget(self):
        position = make_position(["11", "11"], move_remain=1)
        assert iddfs(two_by_two_rules(), position).status is SolveStatus.UNSOLVABLE

    @pytest.mark.parametrize("bounds, reason", [
        ({"max_depth": 1}, "max_depth_reached"),
        ({"max_nodes": 2}, "node_budget_exhausted"),
        ({"time_budget": 0.0}, "time_budget_exhausted"),
    ])
    def test_inconclusive(self, two_pairs, bounds, reason):
        position, rules = two_pairs
        result = iddfs(rules, position, **bounds)
        assert result.status is SolveStatus.INCONCLUSIVE
        assert result.stopped_reason.startswith(reason)


class TestTranspositionDepth:
    """The table must keep the lowest depth a position was reached at."""

    def test_shallower_revisit_is_explored(self, transposition_graph):
        result = iddfs(transposition_graph, "R")
        assert result.moves == [MOVE_B, MOVE_A, MOVE_A]

    def test_keeping_first_depth_changes_answer(self, transposition_graph):
        """Keeping S at depth 3 hides the 3-move solution through B."""
        result = iddfs(transposition_graph, "R", table_factory=FirstVisitTable)
        assert result.solved
        assert result.moves == [MOVE_A, MOVE_A, MOVE_A, MOVE_A]

    def test_colliding_hashes(self, transposition_graph):
        colliding = GraphRules(transposition_graph.edges, transposition_graph.goals, collide=True)
        assert iddfs(colliding, "R").moves == [MOVE_B, MOVE_A, MOVE_A]


if __name__ == "__main__":
    unittest.main()
