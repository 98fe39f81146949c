"""
Parallel expansion of BFS layers.

Each layer is a barrier: its positions are expanded (successors, hashes and
canonical keys computed) across a process pool, and the results are consumed
in layer order by the main process, which alone writes the transposition
table. The search therefore returns the same answer for any worker count.

Usage:
    with LayerExpander(rules, config) as expander:
        for position, expansion in zip(layer, expander.expand(layer)):
            ...

Architecture:
    - Pool workers receive the (immutable) rules once via the initializer
    - Small layers are expanded in-process to avoid pickling overhead
    - Pool.imap keeps results in submission order
"""

import logging
from dataclasses import dataclass
from functools import partial
from multiprocessing import Pool
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from ..engine.moves import Move
from .config import SearchConfig

logger = logging.getLogger(__name__)

Child = Tuple[Move, Any, int, bytes]  # (move, position, state hash, canonical key)


@dataclass
class Expansion:
    """
    Successors of one position.

    Attributes:
        cleared: True if the position is stuck and meets the clear quota.
        children: Legal moves with their positions, hashes and keys, in
            move-generation order.
    """
    cleared: bool
    children: List[Child]


def expand_position(rules, position) -> Expansion:
    children = [
        (move, child, rules.state_hash(child), rules.canonical_key(child))
        for move, child in rules.successors(position)
    ]
    cleared = not children and rules.meets_quota(position)
    return Expansion(cleared=cleared, children=children)


# =============================================================================
# WORKER FUNCTIONS
# =============================================================================

# Global state for worker processes (initialized once per worker)
_worker_rules = None


def _worker_init(rules):
    """Initialize worker process with the stage rules."""
    global _worker_rules
    _worker_rules = rules


def _worker_expand(position) -> Expansion:
    return expand_position(_worker_rules, position)


# =============================================================================
# LAYER EXPANDER
# =============================================================================

class LayerExpander:
    """Expands whole layers, in-process or across a worker pool."""

    def __init__(self, rules, config: SearchConfig):
        self.rules = rules
        self.config = config
        self._pool: Optional[Any] = None
        self._local = partial(expand_position, rules)

    def __enter__(self) -> "LayerExpander":
        if self.config.parallel:
            logger.info(f"Starting {self.config.num_workers} worker processes")
            self._pool = Pool(
                processes=self.config.num_workers,
                initializer=_worker_init,
                initargs=(self.rules,),
            )
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._pool is not None:
            self._pool.terminate()
            self._pool.join()
            self._pool = None
        return False

    def expand(self, positions: Sequence[Any]) -> Iterator[Expansion]:
        """Expansions of ``positions``, lazily and in the same order."""
        if self._pool is None or len(positions) < self.config.parallel_threshold:
            return map(self._local, positions)
        chunksize = max(1, len(positions) // (self.config.num_workers * 4))
        return self._pool.imap(_worker_expand, positions, chunksize=chunksize)


__all__ = ["Expansion", "LayerExpander", "expand_position"]
