"""
Transposition table for search nodes.

Maps each canonical position key to the lowest depth at which it has been
reached, plus a back-pointer (parent key, move) for rebuilding the solution.

Entries are bucketed by Zobrist hash and matched on the full canonical key,
so two positions that collide on the hash are kept apart.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..engine.moves import Move

ParentRef = Tuple[int, bytes]  # (state hash, canonical key)


@dataclass
class TranspositionEntry:
    """
    One explored position.

    Attributes:
        key: Canonical key of the position.
        state_hash: Zobrist hash of the position.
        depth: Lowest depth the position has been reached at.
        parent: (hash, key) of the position it was reached from, None for the root.
        move: Move played from the parent, None for the root.
    """
    key: bytes
    state_hash: int
    depth: int
    parent: Optional[ParentRef] = None
    move: Optional[Move] = None

    @property
    def ref(self) -> ParentRef:
        return self.state_hash, self.key


class TranspositionTable:
    """
    Hash table of explored positions.

    Key insight: a position reached again at the same or a greater depth
    cannot lead to a shorter solution than its first visit, so it is pruned.
    A position reached at a strictly lower depth replaces the old entry.

    Attributes:
        buckets: Hash -> entries with that hash.
        hits: Number of successful lookups.
        misses: Number of failed lookups.
        stores: New positions recorded.
        overwrites: Entries replaced by a shallower visit.
        rejected: Stores refused because the position was already as shallow.
        collisions: Stores that shared a bucket with a different key.
    """

    def __init__(self):
        self.buckets: Dict[int, List[TranspositionEntry]] = {}
        self._size = 0
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.overwrites = 0
        self.rejected = 0
        self.collisions = 0

    def _find(self, state_hash: int, key: bytes) -> Optional[TranspositionEntry]:
        for entry in self.buckets.get(state_hash, ()):
            if entry.key == key:
                return entry
        return None

    def lookup(self, state_hash: int, key: bytes) -> Optional[TranspositionEntry]:
        """Entry for the position, or None if it has not been recorded."""
        entry = self._find(state_hash, key)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def store(self, entry: TranspositionEntry) -> bool:
        """
        Record ``entry`` unless its position is already known at equal or
        lower depth.

        Returns:
            True if the entry was recorded (new or shallower), False if it
            was rejected.
        """
        bucket = self.buckets.setdefault(entry.state_hash, [])
        for i, existing in enumerate(bucket):
            if existing.key != entry.key:
                continue
            if existing.depth <= entry.depth:
                self.rejected += 1
                return False
            bucket[i] = entry
            self.overwrites += 1
            return True
        if bucket:
            self.collisions += 1
        bucket.append(entry)
        self._size += 1
        self.stores += 1
        return True

    def path_to(self, entry: TranspositionEntry) -> List[Move]:
        """Moves from the root to ``entry``'s position, following back-pointers."""
        moves: List[Move] = []
        current = entry
        while current.parent is not None:
            moves.append(current.move)
            parent = self._find(*current.parent)
            if parent is None:
                raise KeyError(f"dangling back-pointer at depth {current.depth}")
            current = parent
        moves.reverse()
        return moves

    def clear(self):
        """Clear all entries and reset statistics."""
        self.buckets.clear()
        self._size = 0
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.overwrites = 0
        self.rejected = 0
        self.collisions = 0

    def stats(self) -> dict:
        """Return table statistics."""
        total = self.hits + self.misses
        return {
            "size": self._size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total > 0 else 0,
            "stores": self.stores,
            "overwrites": self.overwrites,
            "rejected": self.rejected,
            "collisions": self.collisions,
        }

    def __len__(self) -> int:
        return self._size

    def __contains__(self, ref: ParentRef) -> bool:
        return self._find(*ref) is not None


__all__ = ["TranspositionEntry", "TranspositionTable", "ParentRef"]
