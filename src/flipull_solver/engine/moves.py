"""
Moves (throws) and the hero rows they are thrown from.

The hero climbs a ladder on the right side of the 12-row playfield and can
throw from any of the rows 0..11. Rows 6..11 line up with block-area rows
1..6. Which block-area row or column a throw reaches depends on the walls and
pipes of the stage, so a stage carries a throw table mapping each usable hero
row to one Move (see ``engine.problem``).
"""

from dataclasses import dataclass
from enum import Enum

from .block import square_name

PLAYFIELD_ROWS = 12
BLOCK_AREA_TOP_ROW = 6


class ThrowKind(Enum):
    """Direction of a throw."""
    HORIZONTAL = "H"
    VERTICAL = "V"


@dataclass(frozen=True)
class Move:
    """
    One throw.

    Attributes:
        src: Hero row (0..11) the block is thrown from.
        kind: HORIZONTAL (enters a block-area row) or VERTICAL (falls down a
            block-area column).
        line: Target block-area row index for HORIZONTAL, column index for
            VERTICAL (both 0-based).
    """
    src: int
    kind: ThrowKind
    line: int

    def __post_init__(self):
        if not 0 <= self.src < PLAYFIELD_ROWS:
            raise ValueError(f"hero row out of range: {self.src}")
        if self.line < 0:
            raise ValueError(f"negative throw target: {self.line}")

    @classmethod
    def horizontal(cls, src: int, row: int) -> "Move":
        return cls(src, ThrowKind.HORIZONTAL, row)

    @classmethod
    def vertical(cls, src: int, col: int) -> "Move":
        return cls(src, ThrowKind.VERTICAL, col)

    @property
    def target_name(self) -> str:
        """'row 3' / 'col B' style description of the target."""
        if self.kind is ThrowKind.HORIZONTAL:
            return f"row {self.line + 1}"
        return f"col {square_name((self.line, 0))[0]}"

    def to_dict(self) -> dict:
        return {"src": self.src, "kind": self.kind.value, "line": self.line}

    @classmethod
    def from_dict(cls, data: dict) -> "Move":
        return cls(int(data["src"]), ThrowKind(data["kind"]), int(data["line"]))

    def __str__(self) -> str:
        return f"{self.src}:{self.kind.value}{self.line}"


__all__ = [
    "Move",
    "ThrowKind",
    "PLAYFIELD_ROWS",
    "BLOCK_AREA_TOP_ROW",
]
