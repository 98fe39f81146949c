"""
Shared result types for the search engines.

Centralizes the outcome dataclasses so the BFS and iterative deepening
engines, the CLI and the tests all speak the same vocabulary.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .engine.moves import Move
from .engine.solution import SolutionTrace


class SolveStatus(str, Enum):
    """Outcome of a search."""
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    INCONCLUSIVE = "inconclusive"


@dataclass
class SearchStats:
    """
    Counters collected during one search.

    Attributes:
        nodes_expanded: Positions whose successors were generated.
        states_generated: Successor positions produced.
        duplicates_pruned: Successors discarded by the transposition table.
        max_depth_reached: Deepest layer or depth bound reached.
        iterations: Depth bounds tried (iterative deepening only).
        duration_seconds: Wall-clock time of the search.
        table: Transposition table statistics at the end of the search.
    """
    nodes_expanded: int = 0
    states_generated: int = 0
    duplicates_pruned: int = 0
    max_depth_reached: int = 0
    iterations: int = 0
    duration_seconds: float = 0.0
    table: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SolveResult:
    """
    Result of solving one position.

    Attributes:
        status: SOLVED, UNSOLVABLE or INCONCLUSIVE.
        trace: Minimal solution when SOLVED, else None.
        stopped_reason: Short machine-readable reason the search ended.
        stats: Search counters.
    """
    status: SolveStatus
    trace: Optional[SolutionTrace] = None
    stopped_reason: str = ""
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def moves(self) -> List[Move]:
        return list(self.trace.moves) if self.trace is not None else []

    @property
    def length(self) -> Optional[int]:
        return len(self.trace) if self.trace is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "solution": str(self.trace) if self.trace is not None else None,
            "moves": [move.to_dict() for move in self.moves],
            "length": self.length,
            "stopped_reason": self.stopped_reason,
            "stats": self.stats.to_dict(),
        }


__all__ = ["SolveStatus", "SearchStats", "SolveResult"]
