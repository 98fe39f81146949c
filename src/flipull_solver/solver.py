"""
Entry points for solving a stage.

Usage:
    from flipull_solver import Problem, solve_problem

    problem = Problem.load("stage01.txt")
    result = solve_problem(problem)
    print(result.status.value, result.trace)
"""

import logging
from typing import Optional

from .engine.errors import SolutionVerificationError
from .engine.position import Position
from .engine.problem import ADVANCE_CLEAR_QUOTA, Problem
from .engine.rules import FlipullRules
from .search.bfs import BreadthFirstSearch
from .search.config import SearchConfig
from .search.iddfs import IterativeDeepeningSearch
from .types import SolveResult

logger = logging.getLogger(__name__)


def make_search(rules, config: SearchConfig):
    """Search engine selected by ``config.algorithm``."""
    if config.algorithm == "bfs":
        return BreadthFirstSearch(rules, config)
    if config.algorithm == "iddfs":
        return IterativeDeepeningSearch(rules, config)
    raise ValueError(f"unknown algorithm: {config.algorithm!r}")


def solve_position(
    position: Position,
    rules: FlipullRules,
    config: Optional[SearchConfig] = None,
    verify: bool = True,
) -> SolveResult:
    """
    Find a minimal clearing sequence from ``position``.

    With ``verify`` set, a found trace is replayed before it is returned; a
    trace that fails to replay raises SolutionVerificationError.
    """
    config = config or SearchConfig()
    result = make_search(rules, config).run(position)
    if verify and result.trace is not None:
        try:
            result.trace.verify(rules, position)
        except SolutionVerificationError:
            logger.error(f"Search returned a trace that does not replay: {result.trace}")
            raise
    return result


def solve_problem(
    problem: Problem,
    config: Optional[SearchConfig] = None,
    clear_quota: int = ADVANCE_CLEAR_QUOTA,
) -> SolveResult:
    position, rules = problem.to_rules(clear_quota=clear_quota)
    logger.info(f"Throw table: {' '.join(str(move) for move in rules.throws)}")
    return solve_position(position, rules, config)


__all__ = ["make_search", "solve_position", "solve_problem"]
