"""
Stage problems as captured from the game: the full 8 x 12 playfield.

Text format (header, then 12 rows of 8 tiles):

    2 33
    #####...
    ##......
    ...
    13334...

Tiles: '.' empty, '1'..'4' normal blocks, '5' wild block, '#' wall, '|' pipe.
The lower-left 6 x 6 of the playfield is the block area.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .block import Block, Blocks, EMPTY
from .errors import MalformedInputError
from .moves import BLOCK_AREA_TOP_ROW, PLAYFIELD_ROWS, Move
from .position import Position, parse_header
from .rules import FlipullRules

logger = logging.getLogger(__name__)

PLAYFIELD_COLS = 8
BLOCK_AREA_SIZE = 6

# Stages in ADVANCE mode are cleared with at most this many blocks left.
ADVANCE_CLEAR_QUOTA = 3


class Terrain(Enum):
    WALL = "#"
    PIPE = "|"


Tile = Union[None, Block, Terrain]


def tile_from_char(ch: str) -> Tile:
    if ch == ".":
        return None
    if ch in "12345":
        return Block.from_char(ch)
    try:
        return Terrain(ch)
    except ValueError:
        raise MalformedInputError(f"invalid playfield tile: {ch!r}") from None


def tile_to_char(tile: Tile) -> str:
    if tile is None:
        return "."
    if isinstance(tile, Block):
        return tile.to_char()
    return tile.value


def in_block_area(col: int, row: int) -> bool:
    return 0 <= col < BLOCK_AREA_SIZE and BLOCK_AREA_TOP_ROW <= row < PLAYFIELD_ROWS


@dataclass(frozen=True)
class ProblemBoard:
    """The 8 x 12 playfield, row-major."""
    tiles: Tuple[Tile, ...]

    def __post_init__(self):
        if len(self.tiles) != PLAYFIELD_COLS * PLAYFIELD_ROWS:
            raise MalformedInputError(
                f"playfield must have {PLAYFIELD_COLS * PLAYFIELD_ROWS} tiles, got {len(self.tiles)}"
            )

    @classmethod
    def from_rows(cls, rows: List[str]) -> "ProblemBoard":
        if len(rows) != PLAYFIELD_ROWS:
            raise MalformedInputError(f"playfield must have exactly {PLAYFIELD_ROWS} rows, got {len(rows)}")
        tiles: List[Tile] = []
        for row_idx, row in enumerate(rows):
            if len(row) != PLAYFIELD_COLS:
                raise MalformedInputError(
                    f"playfield row {row_idx} must have exactly {PLAYFIELD_COLS} tiles: {row!r}"
                )
            tiles.extend(tile_from_char(ch) for ch in row)
        return cls(tuple(tiles))

    def __getitem__(self, square: Tuple[int, int]) -> Tile:
        col, row = square
        return self.tiles[row * PLAYFIELD_COLS + col]

    def to_rows(self) -> List[str]:
        return [
            "".join(tile_to_char(self[col, row]) for col in range(PLAYFIELD_COLS))
            for row in range(PLAYFIELD_ROWS)
        ]

    def __str__(self) -> str:
        return "\n".join(self.to_rows())


@dataclass(frozen=True)
class Problem:
    """
    A validated ADVANCE mode stage.

    Attributes:
        board: Playfield tiles.
        holding: Block the hero holds at the start.
        move_remain: Throws available for the stage.
    """
    board: ProblemBoard
    holding: Block
    move_remain: int

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise MalformedInputError unless the playfield is a legal ADVANCE stage."""
        for row in range(PLAYFIELD_ROWS):
            for col in range(PLAYFIELD_COLS):
                tile = self.board[col, row]
                if in_block_area(col, row):
                    if tile is not None and not (isinstance(tile, Block) and tile.is_normal):
                        raise MalformedInputError(
                            f"block area may only hold empty cells or normal blocks (col {col}, row {row})"
                        )
                elif isinstance(tile, Block):
                    raise MalformedInputError(f"block outside the block area (col {col}, row {row})")
                elif tile is Terrain.WALL and row > 0 and self.board[col, row - 1] is not Terrain.WALL:
                    raise MalformedInputError(f"wall without a wall above it (col {col}, row {row})")

    # -------------------------------------------------------------------------
    # Text I/O
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "Problem":
        lines = text.splitlines()
        while lines and not lines[-1].strip():
            lines.pop()
        if not lines:
            raise MalformedInputError("empty problem text")
        holding, move_remain = parse_header(lines[0], allow_unbounded=False)
        board = ProblemBoard.from_rows([line.rstrip("\r") for line in lines[1:]])
        return cls(board, holding, move_remain)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Problem":
        path = Path(path)
        logger.debug(f"Loading problem from {path}")
        return cls.parse(path.read_text(encoding="utf-8"))

    def __str__(self) -> str:
        return f"{self.holding.to_char()} {self.move_remain}\n{self.board}\n"

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_blocks(self) -> Blocks:
        cells = []
        for row in range(BLOCK_AREA_TOP_ROW, PLAYFIELD_ROWS):
            for col in range(BLOCK_AREA_SIZE):
                tile = self.board[col, row]
                cells.append(int(tile) if tile is not None else EMPTY)
        return Blocks(BLOCK_AREA_SIZE, BLOCK_AREA_SIZE, tuple(cells))

    def throw_from(self, src: int) -> Optional[Move]:
        """
        The move made by throwing from hero row ``src``, or None if unusable.

        The block flies leftwards along the hero row. With nothing in the way
        it drops down column A; hitting a block makes it a horizontal throw
        into that row; hitting a wall or pipe drops it down the next column,
        which only counts if that column has a block to land on.
        """
        hit = next(
            ((col, self.board[col, src]) for col in reversed(range(PLAYFIELD_COLS))
             if self.board[col, src] is not None),
            None,
        )
        if hit is None:
            return Move.vertical(src, 0)
        col, tile = hit
        if isinstance(tile, Block):
            return Move.horizontal(src, src - BLOCK_AREA_TOP_ROW)
        drop_col = col + 1
        if drop_col >= BLOCK_AREA_SIZE:
            return None
        if any(isinstance(self.board[drop_col, row], Block) for row in range(src, PLAYFIELD_ROWS)):
            return Move.vertical(src, drop_col)
        return None

    def throw_table(self) -> Tuple[Move, ...]:
        """Usable moves, bottom hero row first."""
        moves = (self.throw_from(src) for src in reversed(range(PLAYFIELD_ROWS)))
        return tuple(move for move in moves if move is not None)

    def to_position_and_moves(self) -> Tuple[Position, Tuple[Move, ...]]:
        position = Position(self.to_blocks(), self.holding, self.move_remain)
        return position, self.throw_table()

    def to_rules(self, clear_quota: int = ADVANCE_CLEAR_QUOTA) -> Tuple[Position, FlipullRules]:
        """Initial position and the rules for this stage."""
        position, moves = self.to_position_and_moves()
        rules = FlipullRules(
            throws=moves,
            width=BLOCK_AREA_SIZE,
            height=BLOCK_AREA_SIZE,
            clear_quota=clear_quota,
        )
        return position, rules


__all__ = [
    "Problem",
    "ProblemBoard",
    "Terrain",
    "Tile",
    "ADVANCE_CLEAR_QUOTA",
    "PLAYFIELD_COLS",
    "BLOCK_AREA_SIZE",
]
