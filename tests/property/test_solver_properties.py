"""
Property-based tests for the search engines.

Random small boards are solved by the engines and by exhaustive enumeration
of every move sequence; the engines must find a shortest solution, the first
one in throw-table order, and must never call a solvable board unsolvable.
"""

from typing import List, Optional

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from flipull_solver.engine import Block, Blocks, FlipullRules, Move, Position
from flipull_solver.search import BreadthFirstSearch, IterativeDeepeningSearch, SearchConfig
from flipull_solver.types import SolveStatus

SIZE = 3
THROWS = tuple(Move.horizontal(src, src) for src in range(SIZE)) + tuple(
    Move.vertical(SIZE + col, col) for col in range(SIZE)
)


@st.composite
def boards(draw):
    """Columns of stacked blocks (at most two per column) on a 3 x 3 area."""
    columns = draw(st.lists(
        st.lists(st.integers(min_value=1, max_value=3), max_size=2),
        min_size=SIZE, max_size=SIZE,
    ))
    cells = [0] * (SIZE * SIZE)
    for col, stack in enumerate(columns):
        for i, value in enumerate(stack):
            cells[(SIZE - 1 - i) * SIZE + col] = value
    holding = draw(st.sampled_from(list(Block)))
    quota = draw(st.integers(min_value=0, max_value=2))
    position = Position(Blocks(SIZE, SIZE, tuple(cells)), holding, None)
    rules = FlipullRules(throws=THROWS, width=SIZE, height=SIZE, clear_quota=quota)
    return position, rules


def exhaustive_shortest(rules: FlipullRules, start: Position) -> Optional[List[Move]]:
    """First shortest clearing sequence in throw-table order, by full enumeration."""
    best: Optional[List[Move]] = None
    stack = [(start, [])]
    while stack:
        position, path = stack.pop()
        successors = rules.successors(position)
        if not successors:
            if rules.meets_quota(position) and (best is None or len(path) < len(best)):
                best = path
            continue
        for move, child in reversed(successors):
            stack.append((child, path + [move]))
    return best


class TestSearchProperties:
    """Engine results against exhaustive enumeration."""

    @given(board=boards())
    @settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_bfs_matches_enumeration(self, board):
        """BFS finds the first shortest solution, or proves there is none."""
        position, rules = board
        expected = exhaustive_shortest(rules, position)
        result = BreadthFirstSearch(rules, SearchConfig()).run(position)
        if expected is None:
            assert result.status is SolveStatus.UNSOLVABLE
        else:
            assert result.status is SolveStatus.SOLVED
            assert result.moves == expected

    @given(board=boards())
    @settings(max_examples=40, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_iddfs_agrees_with_bfs(self, board):
        position, rules = board
        bfs = BreadthFirstSearch(rules, SearchConfig()).run(position)
        iddfs = IterativeDeepeningSearch(rules, SearchConfig(algorithm="iddfs")).run(position)
        assert iddfs.status == bfs.status
        assert iddfs.trace == bfs.trace

    @given(board=boards())
    @settings(max_examples=40, deadline=None)
    def test_solutions_replay(self, board):
        """Every returned trace is legal and ends cleared."""
        position, rules = board
        result = BreadthFirstSearch(rules, SearchConfig()).run(position)
        if result.solved:
            final = result.trace.verify(rules, position)
            assert rules.is_cleared(final)

    @given(board=boards(), depth=st.integers(min_value=0, max_value=3))
    @settings(max_examples=40, deadline=None)
    def test_depth_bound_is_honest(self, board, depth):
        """A depth bound never produces a wrong verdict, only 'inconclusive'."""
        position, rules = board
        full = BreadthFirstSearch(rules, SearchConfig()).run(position)
        bounded = BreadthFirstSearch(rules, SearchConfig(max_depth=depth)).run(position)
        if bounded.status is SolveStatus.SOLVED:
            assert bounded.trace == full.trace
        elif bounded.status is SolveStatus.UNSOLVABLE:
            assert full.status is SolveStatus.UNSOLVABLE
        else:
            assert full.status is not SolveStatus.SOLVED or full.length > depth

    @given(board=boards())
    @settings(max_examples=30, deadline=None)
    def test_deterministic(self, board):
        position, rules = board
        first = BreadthFirstSearch(rules, SearchConfig()).run(position)
        second = BreadthFirstSearch(rules, SearchConfig()).run(position)
        assert (first.status, first.trace) == (second.status, second.trace)
