"""
Search configuration and stopping conditions.

Usage:
    from flipull_solver.search import SearchConfig

    config = SearchConfig(max_depth=30, time_budget=60.0)
    config = SearchConfig.from_env(num_workers=4)   # env + overrides
"""

import multiprocessing as mp
import os
import time
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

ALGORITHMS = ("bfs", "iddfs")


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class SearchConfig:
    """
    Configuration for one search.

    Attributes:
        algorithm: "bfs" (layered breadth-first) or "iddfs" (iterative
            deepening depth-first).
        max_depth: Longest solution considered (None = no limit). Every throw
            erases a block, so the search always terminates without one.
        max_nodes: Maximum positions expanded (None = no limit).
        time_budget: Maximum seconds to search (None = no limit).
        num_workers: Processes used to expand BFS layers (None = CPU count,
            1 = in-process).
        parallel_threshold: Layers smaller than this are expanded in-process.
    """
    algorithm: str = "bfs"
    max_depth: Optional[int] = None
    max_nodes: Optional[int] = None
    time_budget: Optional[float] = None
    num_workers: Optional[int] = 1
    parallel_threshold: int = 256

    def __post_init__(self):
        if self.num_workers is None:
            self.num_workers = mp.cpu_count()
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {self.algorithm!r}, expected one of {ALGORITHMS}")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative: {self.max_depth}")
        if self.max_nodes is not None and self.max_nodes < 0:
            raise ValueError(f"max_nodes must be non-negative: {self.max_nodes}")
        if self.time_budget is not None and self.time_budget < 0:
            raise ValueError(f"time_budget must be non-negative: {self.time_budget}")
        if self.num_workers < 1:
            raise ValueError(f"num_workers must be at least 1: {self.num_workers}")

    @property
    def parallel(self) -> bool:
        return self.num_workers > 1

    @classmethod
    def from_env(cls, **overrides) -> "SearchConfig":
        """
        Build a config from FLIPULL_* environment variables (and .env).

        Keyword arguments that are not None take precedence over the
        environment.
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        algorithm = os.getenv("FLIPULL_ALGORITHM")
        if algorithm:
            values["algorithm"] = algorithm.lower()
        for name, env, convert in (
            ("max_depth", "FLIPULL_MAX_DEPTH", int),
            ("max_nodes", "FLIPULL_MAX_NODES", int),
            ("time_budget", "FLIPULL_TIME_BUDGET", float),
            ("num_workers", "FLIPULL_WORKERS", int),
        ):
            raw = os.getenv(env)
            if raw:
                try:
                    values[name] = convert(raw)
                except ValueError:
                    raise ValueError(f"{env} is not a valid {convert.__name__}: {raw!r}") from None

        known = {f.name for f in fields(cls)}
        for name, value in overrides.items():
            if name not in known:
                raise TypeError(f"unknown SearchConfig field: {name}")
            if value is not None:
                values[name] = value
        return cls(**values)

    def with_overrides(self, **changes) -> "SearchConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


# =============================================================================
# STOPPING CONDITIONS
# =============================================================================

class StoppingCondition:
    """Base class for search stopping conditions."""

    def should_stop(self, search_state: Dict[str, Any]) -> bool:
        """Check if search should stop."""
        raise NotImplementedError

    def reason(self) -> str:
        """Return reason for stopping."""
        raise NotImplementedError


class TimeBudgetExhausted(StoppingCondition):
    """Stop when time budget is exhausted."""

    def __init__(self, budget_seconds: float):
        self.budget = budget_seconds
        self.start_time = time.perf_counter()

    def should_stop(self, state: Dict[str, Any]) -> bool:
        elapsed = time.perf_counter() - self.start_time
        return elapsed >= self.budget

    def reason(self) -> str:
        return f"time_budget_exhausted ({self.budget}s)"


class NodeBudgetExhausted(StoppingCondition):
    """Stop when the expansion budget is used up."""

    def __init__(self, budget_nodes: int):
        self.budget = budget_nodes

    def should_stop(self, state: Dict[str, Any]) -> bool:
        return state.get("nodes_expanded", 0) >= self.budget

    def reason(self) -> str:
        return f"node_budget_exhausted ({self.budget})"


def build_stopping_conditions(config: SearchConfig) -> List[StoppingCondition]:
    """Stopping conditions for ``config``; the time budget starts now."""
    conditions: List[StoppingCondition] = []
    if config.max_nodes is not None:
        conditions.append(NodeBudgetExhausted(config.max_nodes))
    if config.time_budget is not None:
        conditions.append(TimeBudgetExhausted(config.time_budget))
    return conditions


def first_triggered(conditions: List[StoppingCondition], state: Dict[str, Any]) -> Optional[str]:
    """Reason of the first condition that fires, or None."""
    for condition in conditions:
        if condition.should_stop(state):
            return condition.reason()
    return None


__all__ = [
    "ALGORITHMS",
    "SearchConfig",
    "StoppingCondition",
    "TimeBudgetExhausted",
    "NodeBudgetExhausted",
    "build_stopping_conditions",
    "first_triggered",
]
