#!/usr/bin/env python3
"""
Zobrist hashing for Flipull positions.

Each (square, block) pair, each held block and each move budget value gets a
64-bit random key; a position hashes to the XOR of the keys of its
components. Keys are derived from the seed and the component alone, so every
process (including pool workers) computes identical hashes.

Hashes only pick a transposition-table bucket. Identity is always confirmed
with ``Position.canonical_key()``, so a collision costs a comparison, never a
wrong answer.

Usage:
    from flipull_solver.zobrist import ZobristHasher

    hasher = ZobristHasher(seed=42)
    h = hasher.hash_position(position)

References:
    - Zobrist, A. (1970). "A New Hashing Method with Application for Game Playing"
    - Chess Programming Wiki: https://www.chessprogramming.org/Zobrist_Hashing
"""

import random
from typing import Dict, Tuple

from .engine.position import Position

DEFAULT_SEED = 42

_TAG_CELL = "cell"
_TAG_HOLDING = "holding"
_TAG_REMAIN = "remain"


class ZobristHasher:
    """
    Deterministic Zobrist hasher.

    Attributes:
        seed: Seed all keys are derived from.
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = seed
        self._keys: Dict[Tuple[str, int, int], int] = {}

    def _key(self, tag: str, a: int, b: int = 0) -> int:
        ident = (tag, a, b)
        key = self._keys.get(ident)
        if key is None:
            key = random.Random(f"{self.seed}:{tag}:{a}:{b}").getrandbits(64)
            self._keys[ident] = key
        return key

    def cell_key(self, index: int, value: int) -> int:
        return self._key(_TAG_CELL, index, value)

    def holding_key(self, holding: int) -> int:
        return self._key(_TAG_HOLDING, holding)

    def remain_key(self, move_remain) -> int:
        return self._key(_TAG_REMAIN, -1 if move_remain is None else move_remain)

    def hash_position(self, position: Position) -> int:
        h = self.holding_key(int(position.holding)) ^ self.remain_key(position.move_remain)
        for index, value in enumerate(position.blocks.cells):
            if value:
                h ^= self.cell_key(index, value)
        return h

    def stats(self) -> Dict[str, int]:
        """Number of keys generated so far, by component."""
        counts = {_TAG_CELL: 0, _TAG_HOLDING: 0, _TAG_REMAIN: 0}
        for tag, _, _ in self._keys:
            counts[tag] += 1
        return counts

    def __getstate__(self):
        # Keys are regenerated on demand; ship only the seed to workers.
        return {"seed": self.seed}

    def __setstate__(self, state):
        self.__init__(state["seed"])


def hash_to_hex(h: int) -> str:
    """Fixed-width hex form of a 64-bit hash."""
    return f"{h:016x}"


__all__ = ["ZobristHasher", "hash_to_hex", "DEFAULT_SEED"]
