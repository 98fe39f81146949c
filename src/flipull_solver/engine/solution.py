"""
Solution traces.

A trace is the ordered list of moves that clears a stage. Its text form is
the hero rows separated by spaces (e.g. ``"11 10 8 6"``), which is what the
movie encoder consumes; the throw table turns rows back into moves.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .errors import IllegalMoveError, MalformedInputError, SolutionVerificationError
from .moves import Move
from .position import Position
from .rules import FlipullRules


@dataclass(frozen=True)
class SolutionTrace:
    """Ordered, immutable sequence of moves."""
    moves: Tuple[Move, ...] = ()

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def sources(self) -> List[int]:
        return [move.src for move in self.moves]

    def __str__(self) -> str:
        return " ".join(str(src) for src in self.sources())

    @classmethod
    def parse(cls, text: str, rules: FlipullRules) -> "SolutionTrace":
        """Resolve a line of hero rows against the throw table of ``rules``."""
        moves = []
        for i, token in enumerate(text.split()):
            try:
                src = int(token)
            except ValueError:
                raise MalformedInputError(f"move {i} is not a number: {token!r}") from None
            move = rules.move_for_src(src)
            if move is None:
                raise MalformedInputError(f"move {i}: no throw from hero row {src}")
            moves.append(move)
        return cls(tuple(moves))

    def positions(self, rules: FlipullRules, start: Position) -> List[Position]:
        """
        ``start`` followed by the position after each move.

        Raises SolutionVerificationError at the first illegal move.
        """
        result = [start]
        for i, move in enumerate(self.moves):
            try:
                result.append(rules.apply(result[-1], move))
            except IllegalMoveError as e:
                raise SolutionVerificationError(f"move {i} ({move}) is illegal: {e}") from e
        return result

    def verify(self, rules: FlipullRules, start: Position) -> Position:
        """
        Replay the trace from ``start``.

        Returns the final position. Raises SolutionVerificationError if a move
        is illegal or the final position is not cleared.
        """
        position = self.positions(rules, start)[-1]
        if not rules.is_stuck(position):
            raise SolutionVerificationError(f"legal moves remain after the last move:\n{position}")
        if not rules.meets_quota(position):
            raise SolutionVerificationError(
                f"{position.block_count} blocks remain, quota is {rules.clear_quota}:\n{position}"
            )
        return position


def format_pretty(trace: SolutionTrace, rules: FlipullRules, start: Position) -> str:
    """Human readable replay: every intermediate position with the move played."""
    lines = [str(start)]
    positions = trace.positions(rules, start)
    for i, (move, position) in enumerate(zip(trace.moves, positions[1:])):
        lines.append(f"move {i}: {move.src} ({move.kind.name.lower()} {move.target_name})")
        lines.append(str(position))
    lines.append(f"total moves: {len(trace)}")
    return "\n".join(lines)


__all__ = ["SolutionTrace", "format_pretty"]
