"""
Board state: the block area, the held block and the remaining move budget.

Text format (header line, then one line per block-area row):

    3 5
    ......
    ......
    222222
    333333
    344444
    311111

The header holds the held block (1..5) and the moves remaining, or ``-`` when
the stage has no move budget.
"""

import struct
from dataclasses import dataclass
from typing import Optional

from .block import Block, Blocks, ThrowOutcome
from .errors import MalformedInputError
from .moves import Move, ThrowKind

UNBOUNDED = "-"
_NO_BUDGET = 0xFFFF


@dataclass(frozen=True)
class Position:
    """Immutable board state. Equal positions have equal canonical keys."""
    blocks: Blocks
    holding: Block
    move_remain: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.holding, Block):
            raise MalformedInputError(f"held block must be a Block, got {self.holding!r}")
        if self.move_remain is not None and not 0 <= self.move_remain < _NO_BUDGET:
            raise MalformedInputError(f"moves remaining out of range: {self.move_remain}")

    @property
    def block_count(self) -> int:
        return self.blocks.block_count()

    @property
    def out_of_moves(self) -> bool:
        return self.move_remain is not None and self.move_remain <= 0

    def canonical_key(self) -> bytes:
        """Byte string identifying this state exactly."""
        remain = _NO_BUDGET if self.move_remain is None else self.move_remain
        return (
            struct.pack(">BB", self.blocks.width, self.blocks.height)
            + bytes(self.blocks.cells)
            + struct.pack(">BH", int(self.holding), remain)
        )

    def throw(self, move: Move) -> Optional[ThrowOutcome]:
        """Resolve ``move`` on the block area, ignoring the move budget."""
        if move.kind is ThrowKind.HORIZONTAL:
            return self.blocks.throw_horizontal(move.line, self.holding)
        if move.kind is ThrowKind.VERTICAL:
            return self.blocks.throw_vertical(move.line, self.holding)
        raise AssertionError(f"unhandled throw kind: {move.kind!r}")

    def do_move(self, move: Move) -> Optional["Position"]:
        """Position after ``move``, or None if the move is not possible here."""
        if self.out_of_moves:
            return None
        outcome = self.throw(move)
        if outcome is None:
            return None
        remain = None if self.move_remain is None else self.move_remain - 1
        return Position(outcome.blocks, outcome.next_holding, remain)

    # -------------------------------------------------------------------------
    # Text I/O
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "Position":
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            raise MalformedInputError("empty position text")
        holding, move_remain = parse_header(lines[0])
        return cls(Blocks.from_rows(lines[1:]), holding, move_remain)

    def __str__(self) -> str:
        remain = UNBOUNDED if self.move_remain is None else str(self.move_remain)
        return f"{self.holding.to_char()} {remain}\n{self.blocks}\n"


def parse_header(line: str, allow_unbounded: bool = True):
    """Parse a ``<held> <moves>`` header line into (Block, Optional[int])."""
    tokens = line.split()
    if len(tokens) != 2:
        raise MalformedInputError(f"header must have exactly 2 fields: {line!r}")
    holding = Block.from_char(tokens[0])
    if tokens[1] == UNBOUNDED and allow_unbounded:
        return holding, None
    try:
        move_remain = int(tokens[1])
    except ValueError:
        raise MalformedInputError(f"moves remaining is not a number: {tokens[1]!r}") from None
    if move_remain < 0:
        raise MalformedInputError(f"moves remaining must be non-negative: {move_remain}")
    return holding, move_remain


__all__ = ["Position", "parse_header", "UNBOUNDED"]
