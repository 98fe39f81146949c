"""
Flipull Solver: exact minimal-move solutions for Flipull ADVANCE mode.

Reads a captured stage, derives its throw table from the walls and pipes,
and searches for the shortest sequence of throws that clears it.

Submodules:
    engine   - Blocks, positions, moves, rules, problems and solution traces
    search   - Breadth-first and iterative deepening search, transposition
               table, parallel layer expansion
    zobrist  - Position hashing
    solver   - solve_problem / solve_position entry points
    cli      - Command-line interface

Usage:
    from flipull_solver import Problem, SearchConfig, solve_problem

    result = solve_problem(Problem.load("stage01.txt"), SearchConfig(time_budget=60))
    if result.solved:
        print(result.trace)
"""

__version__ = "0.1.0"

from .engine import (
    SolverError,
    MalformedInputError,
    IllegalMoveError,
    SolutionVerificationError,
    Block,
    Blocks,
    Move,
    ThrowKind,
    Position,
    FlipullRules,
    Problem,
    ADVANCE_CLEAR_QUOTA,
    SolutionTrace,
    format_pretty,
)

# Shared types
from .types import SolveStatus, SearchStats, SolveResult

# Search
from .search import (
    SearchConfig,
    BreadthFirstSearch,
    IterativeDeepeningSearch,
    TranspositionTable,
)

from .zobrist import ZobristHasher
from .solver import solve_position, solve_problem

__all__ = [
    '__version__',
    # Engine
    'SolverError',
    'MalformedInputError',
    'IllegalMoveError',
    'SolutionVerificationError',
    'Block',
    'Blocks',
    'Move',
    'ThrowKind',
    'Position',
    'FlipullRules',
    'Problem',
    'ADVANCE_CLEAR_QUOTA',
    'SolutionTrace',
    'format_pretty',
    # Types
    'SolveStatus',
    'SearchStats',
    'SolveResult',
    # Search
    'SearchConfig',
    'BreadthFirstSearch',
    'IterativeDeepeningSearch',
    'TranspositionTable',
    'ZobristHasher',
    'solve_position',
    'solve_problem',
]
