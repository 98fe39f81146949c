"""
Blocks and the block area of a Flipull stage.

The block area is a fixed ``width x height`` grid (6 x 6 in ADVANCE mode).
Columns are named A, B, C, ... from the left and rows 1, 2, 3, ... from the
top. Cells are stored row-major as small integers, 0 meaning empty, so a grid
is hashable and cheap to copy.

Throw mechanics:
    A horizontal throw enters a row from the right edge, travels left and, on
    reaching column A, falls down column A to the bottom. A vertical throw
    falls down one column from row 1.

    The first block met is erased if the held block can erase it. Further
    blocks of the same kind are erased too; the first block of another kind
    is replaced and becomes the next held block, ending the throw.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import MalformedInputError


EMPTY = 0
EMPTY_CHAR = "."

DEFAULT_WIDTH = 6
DEFAULT_HEIGHT = 6

Square = Tuple[int, int]  # (column index, row index), both 0-based


class Block(IntEnum):
    """Kinds of block. WILD only ever appears as the held block."""
    B1 = 1
    B2 = 2
    B3 = 3
    B4 = 4
    WILD = 5

    @classmethod
    def from_char(cls, ch: str) -> "Block":
        if len(ch) != 1 or ch not in "12345":
            raise MalformedInputError(f"invalid block character: {ch!r}")
        return cls(int(ch))

    def to_char(self) -> str:
        return str(int(self))

    @property
    def is_normal(self) -> bool:
        return self is not Block.WILD

    def can_erase(self, other: "Block") -> bool:
        """True if this block, when thrown, erases ``other``."""
        return self is Block.WILD or self == other


def square_name(square: Square) -> str:
    """Human readable square name, e.g. (1, 0) -> 'B1'."""
    col, row = square
    return f"{chr(ord('A') + col)}{row + 1}"


@dataclass(frozen=True)
class ThrowOutcome:
    """
    Result of one throw.

    Attributes:
        blocks: Block area after erasures and the replacement.
        next_holding: Block held after the throw.
        last_square: Last square the thrown block passed through.
    """
    blocks: "Blocks"
    next_holding: Block
    last_square: Square


@dataclass(frozen=True)
class Blocks:
    """Immutable block area."""
    width: int
    height: int
    cells: Tuple[int, ...]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise MalformedInputError(
                f"block area must be non-empty, got {self.width}x{self.height}"
            )
        if len(self.cells) != self.width * self.height:
            raise MalformedInputError(
                f"expected {self.width * self.height} cells, got {len(self.cells)}"
            )
        for value in self.cells:
            if not EMPTY <= value <= Block.B4:
                raise MalformedInputError(f"invalid cell value in block area: {value!r}")

    # -------------------------------------------------------------------------
    # Construction / text I/O
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> "Blocks":
        return cls(width, height, (EMPTY,) * (width * height))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Blocks":
        """
        Build a grid from text rows, top row first.

        Each row uses '.' for empty and '1'..'4' for blocks. All rows must be
        the same length.
        """
        rows = [row.strip() for row in rows]
        if not rows or not rows[0]:
            raise MalformedInputError("block area has no rows")
        width = len(rows[0])
        cells: List[int] = []
        for row_idx, row in enumerate(rows):
            if len(row) != width:
                raise MalformedInputError(
                    f"row {row_idx + 1} has {len(row)} cells, expected {width}"
                )
            for ch in row:
                if ch == EMPTY_CHAR:
                    cells.append(EMPTY)
                    continue
                block = Block.from_char(ch)
                if not block.is_normal:
                    raise MalformedInputError("wild block inside the block area")
                cells.append(int(block))
        return cls(width, len(rows), tuple(cells))

    @classmethod
    def parse(cls, text: str) -> "Blocks":
        return cls.from_rows(line for line in text.splitlines() if line.strip())

    def to_rows(self) -> List[str]:
        rows = []
        for row in range(self.height):
            start = row * self.width
            rows.append("".join(
                EMPTY_CHAR if v == EMPTY else str(v)
                for v in self.cells[start:start + self.width]
            ))
        return rows

    def __str__(self) -> str:
        return "\n".join(self.to_rows())

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def index(self, col: int, row: int) -> int:
        return row * self.width + col

    def get(self, col: int, row: int) -> Optional[Block]:
        value = self.cells[self.index(col, row)]
        return Block(value) if value else None

    def __getitem__(self, square: Square) -> Optional[Block]:
        return self.get(*square)

    def block_count(self) -> int:
        return sum(1 for v in self.cells if v)

    def column_has_block(self, col: int, from_row: int = 0) -> bool:
        """True if column ``col`` holds a block at or below ``from_row``."""
        return any(self.cells[self.index(col, row)] for row in range(max(from_row, 0), self.height))

    # -------------------------------------------------------------------------
    # Throws
    # -------------------------------------------------------------------------

    def horizontal_path(self, row: int) -> Iterator[Square]:
        for col in range(self.width - 1, -1, -1):
            yield col, row
        for below in range(row + 1, self.height):
            yield 0, below

    def vertical_path(self, col: int) -> Iterator[Square]:
        for row in range(self.height):
            yield col, row

    def throw_horizontal(self, row: int, holding: Block) -> Optional[ThrowOutcome]:
        """Throw ``holding`` into ``row``; None if the throw is not possible."""
        if not 0 <= row < self.height:
            raise IndexError(f"row {row} outside block area")
        return self._throw(self.horizontal_path(row), holding, shift=True)

    def throw_vertical(self, col: int, holding: Block) -> Optional[ThrowOutcome]:
        """Throw ``holding`` down column ``col``; None if the throw is not possible."""
        if not 0 <= col < self.width:
            raise IndexError(f"column {col} outside block area")
        return self._throw(self.vertical_path(col), holding, shift=False)

    def _throw(self, path: Iterator[Square], holding: Block, shift: bool) -> Optional[ThrowOutcome]:
        # Cells are always read from the grid before the throw and written to
        # ``cells``. Squares past the current one are never touched by a shift.
        for col, row in path:
            first = self.cells[self.index(col, row)]
            if first:
                break
        else:
            return None

        if not holding.can_erase(Block(first)):
            return None

        cells = list(self.cells)
        self._erase(cells, col, row, shift)
        next_holding = first
        last_square = (col, row)

        for col, row in path:
            value = self.cells[self.index(col, row)]
            if value == first:
                self._erase(cells, col, row, shift)
            elif value:
                cells[self.index(col, row)] = first
                next_holding = value
                break
            last_square = (col, row)

        return ThrowOutcome(
            blocks=Blocks(self.width, self.height, tuple(cells)),
            next_holding=Block(next_holding),
            last_square=last_square,
        )

    def _erase(self, cells: List[int], col: int, row: int, shift: bool) -> None:
        if not shift:
            cells[self.index(col, row)] = EMPTY
            return
        # Everything above drops by one.
        for r in range(row, 0, -1):
            cells[self.index(col, r)] = cells[self.index(col, r - 1)]
        cells[self.index(col, 0)] = EMPTY


__all__ = [
    "Block",
    "Blocks",
    "ThrowOutcome",
    "Square",
    "square_name",
    "EMPTY",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
]
