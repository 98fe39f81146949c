"""Exceptions raised by the board model and the transition rules."""


class SolverError(Exception):
    """Base class for all solver errors."""


class MalformedInputError(SolverError, ValueError):
    """Board, problem or solution text that violates the input format."""


class IllegalMoveError(SolverError):
    """A move was applied whose precondition does not hold on the position."""


class SolutionVerificationError(SolverError):
    """A replayed solution is illegal or does not clear the stage."""


__all__ = [
    "SolverError",
    "MalformedInputError",
    "IllegalMoveError",
    "SolutionVerificationError",
]
