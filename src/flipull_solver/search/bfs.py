#!/usr/bin/env python3
"""
Layered breadth-first search for the shortest clearing sequence.

Usage:
    from flipull_solver.search import BreadthFirstSearch, SearchConfig

    search = BreadthFirstSearch(rules, SearchConfig(max_depth=30))
    result = search.run(position)
    if result.solved:
        print(result.trace)

Architecture:
    For depth 0, 1, 2, ...:
        1. Expand every position of the layer, in discovery order
        2. The first cleared position met is the answer
        3. New successors enter the transposition table with a back-pointer;
           successors already known at equal or lower depth are dropped
        4. The next layer is the recorded successors, in generation order

    Layers are processed parents-first and moves in throw-table order, so the
    first cleared position met ends the lexicographically smallest shortest
    path (by throw-table index).

The engine needs only these methods from ``rules``: validate, successors,
meets_quota, canonical_key and state_hash.
"""

import logging
import time
from typing import List, Optional, Tuple

from ..engine.solution import SolutionTrace
from ..types import SearchStats, SolveResult, SolveStatus
from .config import SearchConfig, build_stopping_conditions, first_triggered
from .parallel import LayerExpander
from .transposition import TranspositionEntry, TranspositionTable

logger = logging.getLogger(__name__)


class BreadthFirstSearch:
    """
    Breadth-first search over positions.

    Attributes:
        rules: Stage rules (move generation, transition, stage end).
        config: Search bounds and parallelism.
        table: Transposition table of the last run.
    """

    def __init__(self, rules, config: Optional[SearchConfig] = None):
        self.rules = rules
        self.config = config or SearchConfig()
        self.table = TranspositionTable()

    def run(self, start) -> SolveResult:
        """Search from ``start``; see SolveStatus for the possible outcomes."""
        self.rules.validate(start)
        self.table = TranspositionTable()
        stats = SearchStats()
        conditions = build_stopping_conditions(self.config)
        max_depth = self.config.max_depth
        started = time.perf_counter()

        root = TranspositionEntry(
            key=self.rules.canonical_key(start),
            state_hash=self.rules.state_hash(start),
            depth=0,
        )
        self.table.store(root)
        layer: List[Tuple[TranspositionEntry, object]] = [(root, start)]
        depth = 0
        cutoff = False

        logger.info(
            f"BFS start (max_depth={max_depth}, max_nodes={self.config.max_nodes}, "
            f"time_budget={self.config.time_budget}, workers={self.config.num_workers})"
        )

        with LayerExpander(self.rules, self.config) as expander:
            while layer:
                stats.max_depth_reached = depth
                logger.info(f"Depth {depth}: {len(layer):,} positions, table size {len(self.table):,}")
                next_layer: List[Tuple[TranspositionEntry, object]] = []
                expansions = expander.expand([position for _, position in layer])

                for (entry, _), expansion in zip(layer, expansions):
                    if not expansion.children:
                        if expansion.cleared:
                            trace = SolutionTrace(tuple(self.table.path_to(entry)))
                            return self._finish(SolveStatus.SOLVED, "cleared", stats, started, trace)
                        continue

                    if max_depth is not None and depth >= max_depth:
                        cutoff = True
                        continue

                    reason = first_triggered(conditions, {"nodes_expanded": stats.nodes_expanded})
                    if reason is not None:
                        return self._finish(SolveStatus.INCONCLUSIVE, reason, stats, started)

                    stats.nodes_expanded += 1
                    for move, child, child_hash, child_key in expansion.children:
                        stats.states_generated += 1
                        child_entry = TranspositionEntry(
                            key=child_key,
                            state_hash=child_hash,
                            depth=depth + 1,
                            parent=entry.ref,
                            move=move,
                        )
                        if self.table.store(child_entry):
                            next_layer.append((child_entry, child))
                        else:
                            stats.duplicates_pruned += 1

                layer = next_layer
                depth += 1

        if cutoff:
            return self._finish(SolveStatus.INCONCLUSIVE, f"max_depth_reached ({max_depth})", stats, started)
        return self._finish(SolveStatus.UNSOLVABLE, "frontier_exhausted", stats, started)

    def _finish(
        self,
        status: SolveStatus,
        reason: str,
        stats: SearchStats,
        started: float,
        trace: Optional[SolutionTrace] = None,
    ) -> SolveResult:
        stats.duration_seconds = time.perf_counter() - started
        stats.table = self.table.stats()
        if trace is not None:
            logger.info(f"Solved in {len(trace)} moves: {trace}")
        else:
            logger.info(f"Search ended: {status.value} ({reason})")
        logger.info(
            f"Expanded {stats.nodes_expanded:,} positions, pruned {stats.duplicates_pruned:,} "
            f"duplicates in {stats.duration_seconds:.2f}s"
        )
        return SolveResult(status=status, trace=trace, stopped_reason=reason, stats=stats)


__all__ = ["BreadthFirstSearch"]
