"""
Game model for Flipull ADVANCE mode.

This package provides:
- Blocks and the block area with throw resolution (block.py)
- Moves / throws (moves.py)
- Board state and its canonical key (position.py)
- Move generation, transition and stage-end rules (rules.py)
- Captured playfield problems and their throw tables (problem.py)
- Solution traces and replay verification (solution.py)
"""

from .errors import (
    SolverError,
    MalformedInputError,
    IllegalMoveError,
    SolutionVerificationError,
)
from .block import Block, Blocks, ThrowOutcome, square_name
from .moves import Move, ThrowKind
from .position import Position
from .rules import FlipullRules
from .problem import Problem, ProblemBoard, Terrain, ADVANCE_CLEAR_QUOTA
from .solution import SolutionTrace, format_pretty

__all__ = [
    # Errors
    'SolverError',
    'MalformedInputError',
    'IllegalMoveError',
    'SolutionVerificationError',
    # Model
    'Block',
    'Blocks',
    'ThrowOutcome',
    'square_name',
    'Move',
    'ThrowKind',
    'Position',
    # Rules
    'FlipullRules',
    # Problems
    'Problem',
    'ProblemBoard',
    'Terrain',
    'ADVANCE_CLEAR_QUOTA',
    # Solutions
    'SolutionTrace',
    'format_pretty',
]
