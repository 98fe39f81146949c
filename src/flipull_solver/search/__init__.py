"""
Search algorithms for minimal clearing sequences.

This module provides:
- Layered breadth-first search (bfs.py)
- Iterative deepening search (iddfs.py)
- Transposition table with back-pointers (transposition.py)
- Parallel layer expansion (parallel.py)
- Search configuration and stopping conditions (config.py)
"""

from .config import (
    ALGORITHMS,
    SearchConfig,
    StoppingCondition,
    TimeBudgetExhausted,
    NodeBudgetExhausted,
    build_stopping_conditions,
)

from .transposition import (
    TranspositionEntry,
    TranspositionTable,
)

from .parallel import (
    Expansion,
    LayerExpander,
    expand_position,
)

from .bfs import BreadthFirstSearch
from .iddfs import IterativeDeepeningSearch

__all__ = [
    # Config
    'ALGORITHMS',
    'SearchConfig',
    'StoppingCondition',
    'TimeBudgetExhausted',
    'NodeBudgetExhausted',
    'build_stopping_conditions',
    # Transposition
    'TranspositionEntry',
    'TranspositionTable',
    # Parallel
    'Expansion',
    'LayerExpander',
    'expand_position',
    # Engines
    'BreadthFirstSearch',
    'IterativeDeepeningSearch',
]
