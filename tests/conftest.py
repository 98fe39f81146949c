"""Shared pytest fixtures for flipull-solver tests."""

import zlib

import pytest

from flipull_solver.engine import Block, Blocks, FlipullRules, Move, Position
from flipull_solver.search import TranspositionTable


# Throw table for a 2 x 2 block area: both rows, then both columns.
H_BOTTOM = Move.horizontal(7, 1)
H_TOP = Move.horizontal(6, 0)
V_LEFT = Move.vertical(5, 0)
V_RIGHT = Move.vertical(4, 1)
TWO_BY_TWO_THROWS = (H_BOTTOM, H_TOP, V_LEFT, V_RIGHT)


def make_position(rows, holding=Block.B1, move_remain=None) -> Position:
    """Position from block-area rows, e.g. make_position(["11", "11"])."""
    return Position(Blocks.from_rows(rows), holding, move_remain)


def two_by_two_rules(clear_quota: int = 0) -> FlipullRules:
    return FlipullRules(throws=TWO_BY_TWO_THROWS, width=2, height=2, clear_quota=clear_quota)


@pytest.fixture
def two_pairs():
    """Two vertical pairs of 1s on a 2 x 2 board: shortest clear is 2 moves."""
    return make_position(["11", "11"]), two_by_two_rules()


@pytest.fixture
def dead_end():
    """A lone 2 that the held 1 can never erase."""
    return make_position(["..", ".2"]), two_by_two_rules()


@pytest.fixture
def already_cleared():
    return make_position(["..", ".."]), two_by_two_rules()


# =============================================================================
# EXPLICIT STATE GRAPHS
# =============================================================================

MOVE_A = Move.vertical(1, 0)
MOVE_B = Move.vertical(2, 0)


class GraphRules:
    """
    Explicit state graph with the interface the search engines use.

    States are strings; ``edges`` maps a state to its (move, next state)
    pairs in generation order. With ``collide`` every state hashes to 0.
    """

    def __init__(self, edges, goals, collide=False):
        self.edges = edges
        self.goals = set(goals)
        self.collide = collide

    def validate(self, state):
        pass

    def successors(self, state):
        return list(self.edges.get(state, []))

    def meets_quota(self, state):
        return state in self.goals

    def canonical_key(self, state):
        return state.encode()

    def state_hash(self, state):
        return 0 if self.collide else zlib.crc32(state.encode())


class FirstVisitTable(TranspositionTable):
    """Table that keeps the first depth it sees instead of the lowest."""

    def store(self, entry):
        if self.lookup(entry.state_hash, entry.key) is not None:
            self.rejected += 1
            return False
        return super().store(entry)


@pytest.fixture
def transposition_graph():
    """
    S is first reached at depth 3 (via A, C) and later at depth 2 (via B).

        R -a-> A -a-> C -a-> S -a-> G
        R -b-> B -a-> S

    The only cleared state is G, so the shortest solution is b a a.
    """
    edges = {
        "R": [(MOVE_A, "A"), (MOVE_B, "B")],
        "A": [(MOVE_A, "C")],
        "C": [(MOVE_A, "S")],
        "B": [(MOVE_A, "S")],
        "S": [(MOVE_A, "G")],
    }
    return GraphRules(edges, goals={"G"})


# =============================================================================
# PROBLEMS
# =============================================================================

# A wall on row 0 drops throws from hero row 0 into column D.
WALL_DROP_PROBLEM = """\
3 3
..#.....
........
........
........
........
........
........
........
........
........
...3....
...3....
"""

# Throwing the held 2 replaces the 1 and leaves one unreachable block.
SWAP_PROBLEM = """\
2 5
........
........
........
........
........
........
........
........
........
........
........
12......
"""


@pytest.fixture
def wall_drop_text():
    return WALL_DROP_PROBLEM


@pytest.fixture
def swap_text():
    return SWAP_PROBLEM
