#!/usr/bin/env python3
"""
Iterative deepening depth-first search.

Searches with depth bounds 0, 1, 2, ... so the first solution found is a
shortest one. Memory stays proportional to the transposition table of one
iteration instead of a whole BFS layer.

Usage:
    from flipull_solver.search import IterativeDeepeningSearch, SearchConfig

    search = IterativeDeepeningSearch(rules, SearchConfig(algorithm="iddfs"))
    result = search.run(position)

Architecture:
    For bound = 0, 1, 2, ... max_depth:
        1. Depth-first walk with an explicit worklist (no recursion)
        2. A position is visited only if the table has not seen it at the
           same or a lower depth during this iteration
        3. The first cleared position visited is the answer
        4. If no position was cut off by the bound, the stage is unsolvable

    Children are visited in throw-table order, so the answer matches the
    one the breadth-first search returns.
"""

import logging
import time
from typing import Callable, List, Optional, Tuple

from ..engine.moves import Move
from ..engine.solution import SolutionTrace
from ..types import SearchStats, SolveResult, SolveStatus
from .config import SearchConfig, build_stopping_conditions, first_triggered
from .transposition import TranspositionEntry, TranspositionTable

logger = logging.getLogger(__name__)


class _Iteration:
    """Outcome of one bounded depth-first pass."""

    def __init__(self):
        self.trace: Optional[SolutionTrace] = None
        self.stopped: Optional[str] = None
        self.cutoff = False


class IterativeDeepeningSearch:
    """
    Iterative deepening search over positions.

    Attributes:
        rules: Stage rules; needs validate, successors, meets_quota,
            canonical_key and state_hash.
        config: Search bounds.
        table_factory: Builds the per-iteration transposition table.
    """

    def __init__(
        self,
        rules,
        config: Optional[SearchConfig] = None,
        table_factory: Callable[[], TranspositionTable] = TranspositionTable,
    ):
        self.rules = rules
        self.config = config or SearchConfig(algorithm="iddfs")
        self.table_factory = table_factory
        self.table: Optional[TranspositionTable] = None

    def run(self, start) -> SolveResult:
        self.rules.validate(start)
        stats = SearchStats()
        conditions = build_stopping_conditions(self.config)
        max_depth = self.config.max_depth
        started = time.perf_counter()

        logger.info(
            f"IDDFS start (max_depth={max_depth}, max_nodes={self.config.max_nodes}, "
            f"time_budget={self.config.time_budget})"
        )

        bound = 0
        while True:
            iter_start = time.perf_counter()
            expanded_before = stats.nodes_expanded
            stats.iterations += 1
            stats.max_depth_reached = bound

            outcome = self._bounded_search(start, bound, conditions, stats)

            logger.info(
                f"Depth {bound}: {stats.nodes_expanded - expanded_before:,} expanded, "
                f"table size {len(self.table):,}, {time.perf_counter() - iter_start:.2f}s"
            )

            if outcome.trace is not None:
                return self._finish(SolveStatus.SOLVED, "cleared", stats, started, outcome.trace)
            if outcome.stopped is not None:
                return self._finish(SolveStatus.INCONCLUSIVE, outcome.stopped, stats, started)
            if not outcome.cutoff:
                return self._finish(SolveStatus.UNSOLVABLE, "tree_exhausted", stats, started)
            if max_depth is not None and bound >= max_depth:
                return self._finish(
                    SolveStatus.INCONCLUSIVE, f"max_depth_reached ({max_depth})", stats, started
                )
            bound += 1

    def _bounded_search(self, start, bound: int, conditions, stats: SearchStats) -> _Iteration:
        rules = self.rules
        table = self.table = self.table_factory()
        outcome = _Iteration()
        path: List[Move] = []
        worklist: List[Tuple[object, int, Optional[Move]]] = [(start, 0, None)]

        while worklist:
            position, depth, move = worklist.pop()
            if depth > 0:
                del path[depth - 1:]
                path.append(move)

            entry = TranspositionEntry(
                key=rules.canonical_key(position),
                state_hash=rules.state_hash(position),
                depth=depth,
            )
            if not table.store(entry):
                stats.duplicates_pruned += 1
                continue

            successors = rules.successors(position)
            if not successors:
                if rules.meets_quota(position):
                    outcome.trace = SolutionTrace(tuple(path))
                    return outcome
                continue

            if depth >= bound:
                outcome.cutoff = True
                continue

            reason = first_triggered(conditions, {"nodes_expanded": stats.nodes_expanded})
            if reason is not None:
                outcome.stopped = reason
                return outcome

            stats.nodes_expanded += 1
            stats.states_generated += len(successors)
            # Reversed so the first move in throw-table order is popped first.
            for child_move, child in reversed(successors):
                worklist.append((child, depth + 1, child_move))

        return outcome

    def _finish(
        self,
        status: SolveStatus,
        reason: str,
        stats: SearchStats,
        started: float,
        trace: Optional[SolutionTrace] = None,
    ) -> SolveResult:
        stats.duration_seconds = time.perf_counter() - started
        stats.table = self.table.stats() if self.table is not None else {}
        if trace is not None:
            logger.info(f"Solved in {len(trace)} moves: {trace}")
        else:
            logger.info(f"Search ended: {status.value} ({reason})")
        return SolveResult(status=status, trace=trace, stopped_reason=reason, stats=stats)


__all__ = ["IterativeDeepeningSearch"]
