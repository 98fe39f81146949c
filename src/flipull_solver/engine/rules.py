"""
Move generation, transition and stage-end rules.

FlipullRules is the immutable rule set of one stage: its throw table, block
area shape and clear quota. It is the only thing the search engines know
about the game, and it is what parallel workers receive at start-up.

    position, rules = problem.to_rules()
    for move in rules.legal_moves(position):
        child = rules.apply(position, move)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..zobrist import DEFAULT_SEED, ZobristHasher
from .block import DEFAULT_HEIGHT, DEFAULT_WIDTH
from .errors import IllegalMoveError, MalformedInputError
from .moves import Move, ThrowKind
from .position import Position


@dataclass(frozen=True)
class FlipullRules:
    """
    Rules of one stage.

    Attributes:
        throws: Ordered throw table. Move generation follows this order, so
            it also fixes which of several equally short solutions is found.
        width: Block area width.
        height: Block area height.
        clear_quota: A stuck position is cleared when at most this many
            blocks remain.
        zobrist_seed: Seed for position hashing.
    """
    throws: Tuple[Move, ...]
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    clear_quota: int = 3
    zobrist_seed: int = DEFAULT_SEED
    hasher: ZobristHasher = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "throws", tuple(self.throws))
        if self.clear_quota < 0:
            raise MalformedInputError(f"clear quota must be non-negative: {self.clear_quota}")
        seen_src = set()
        for move in self.throws:
            limit = self.height if move.kind is ThrowKind.HORIZONTAL else self.width
            if move.line >= limit:
                raise MalformedInputError(f"throw {move} misses the {self.width}x{self.height} block area")
            if move.src in seen_src:
                raise MalformedInputError(f"hero row {move.src} appears twice in the throw table")
            seen_src.add(move.src)
        object.__setattr__(self, "hasher", ZobristHasher(self.zobrist_seed))

    def validate(self, position: Position) -> None:
        """Raise MalformedInputError if ``position`` does not fit these rules."""
        blocks = position.blocks
        if (blocks.width, blocks.height) != (self.width, self.height):
            raise MalformedInputError(
                f"position is {blocks.width}x{blocks.height}, rules expect {self.width}x{self.height}"
            )

    def move_for_src(self, src: int) -> Optional[Move]:
        return next((move for move in self.throws if move.src == src), None)

    # -------------------------------------------------------------------------
    # Move generation / transition
    # -------------------------------------------------------------------------

    def successors(self, position: Position) -> List[Tuple[Move, Position]]:
        """Every legal move with its resulting position, in throw-table order."""
        if position.out_of_moves:
            return []
        result = []
        for move in self.throws:
            child = position.do_move(move)
            if child is not None:
                result.append((move, child))
        return result

    def legal_moves(self, position: Position) -> List[Move]:
        return [move for move, _ in self.successors(position)]

    def apply(self, position: Position, move: Move) -> Position:
        """Position after ``move``; raises IllegalMoveError if it is not legal."""
        if move not in self.throws:
            raise IllegalMoveError(f"{move} is not in the throw table")
        if position.out_of_moves:
            raise IllegalMoveError(f"{move} played with no moves remaining")
        child = position.do_move(move)
        if child is None:
            raise IllegalMoveError(f"{move} does not erase a block on\n{position}")
        return child

    # -------------------------------------------------------------------------
    # Stage end
    # -------------------------------------------------------------------------

    def meets_quota(self, position: Position) -> bool:
        return position.block_count <= self.clear_quota

    def is_stuck(self, position: Position) -> bool:
        if position.out_of_moves:
            return True
        return all(position.do_move(move) is None for move in self.throws)

    def is_cleared(self, position: Position) -> bool:
        return self.meets_quota(position) and self.is_stuck(position)

    def is_dead_end(self, position: Position) -> bool:
        """Stuck without meeting the clear quota."""
        return self.is_stuck(position) and not self.meets_quota(position)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def canonical_key(self, position: Position) -> bytes:
        return position.canonical_key()

    def state_hash(self, position: Position) -> int:
        return self.hasher.hash_position(position)


__all__ = ["FlipullRules"]
