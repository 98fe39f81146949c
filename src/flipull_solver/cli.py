#!/usr/bin/env python3
"""
Command-line interface for the Flipull solver.

Usage:
    python -m flipull_solver.cli solve stage01.txt
    python -m flipull_solver.cli solve stage01.txt --algorithm iddfs --time-budget 600 -o result.json
    python -m flipull_solver.cli replay stage01.txt "11 10 8 6"

Exit codes:
    0  solved (solve) or verified (replay)
    1  malformed input or failed verification
    2  proven unsolvable
    3  inconclusive (a search bound was hit)
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from . import __version__
from .engine.errors import MalformedInputError, SolutionVerificationError
from .engine.problem import ADVANCE_CLEAR_QUOTA, Problem
from .engine.solution import SolutionTrace, format_pretty
from .search.config import ALGORITHMS, SearchConfig
from .sentry_config import capture_exception, capture_message, init_sentry
from .solver import solve_problem
from .types import SolveStatus

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSOLVABLE = 2
EXIT_INCONCLUSIVE = 3

_STATUS_EXIT = {
    SolveStatus.SOLVED: EXIT_OK,
    SolveStatus.UNSOLVABLE: EXIT_UNSOLVABLE,
    SolveStatus.INCONCLUSIVE: EXIT_INCONCLUSIVE,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flipull-solver",
        description="Minimal-move solver for Flipull ADVANCE mode stages",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Find a minimal clearing sequence")
    solve.add_argument("problem", type=Path, help="Problem file")
    solve.add_argument("--algorithm", choices=ALGORITHMS, default=None,
                       help="Search algorithm (default: bfs)")
    solve.add_argument("--max-depth", type=int, default=None, help="Longest solution considered")
    solve.add_argument("--max-nodes", type=int, default=None, help="Max positions expanded")
    solve.add_argument("--time-budget", type=float, default=None, help="Max seconds to search")
    solve.add_argument("--workers", type=int, default=None,
                       help="Worker processes for BFS layer expansion")
    solve.add_argument("--clear-quota", type=int, default=ADVANCE_CLEAR_QUOTA,
                       help="Blocks allowed to remain when the stage ends")
    solve.add_argument("--output", "-o", type=Path, default=None, help="Write a JSON report")

    replay = sub.add_parser("replay", help="Replay and verify a solution")
    replay.add_argument("problem", type=Path, help="Problem file")
    replay.add_argument("solution", help="Hero rows separated by spaces, or a file containing them")
    replay.add_argument("--clear-quota", type=int, default=ADVANCE_CLEAR_QUOTA,
                        help="Blocks allowed to remain when the stage ends")
    return parser


def cmd_solve(args) -> int:
    problem = Problem.load(args.problem)
    try:
        config = SearchConfig.from_env(
            algorithm=args.algorithm,
            max_depth=args.max_depth,
            max_nodes=args.max_nodes,
            time_budget=args.time_budget,
            num_workers=args.workers,
        )
    except ValueError as e:
        raise MalformedInputError(f"invalid search settings: {e}") from e
    result = solve_problem(problem, config, clear_quota=args.clear_quota)

    if result.solved:
        print(result.trace)
    else:
        print(f"NO SOLUTION FOUND ({result.status.value}: {result.stopped_reason})")
        if result.status is SolveStatus.INCONCLUSIVE:
            capture_message(
                f"search inconclusive: {result.stopped_reason}",
                level="warning",
                problem=args.problem.name,
            )

    if args.output is not None:
        report = {
            "meta": {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "version": __version__,
                "problem": str(args.problem),
                "algorithm": config.algorithm,
                "max_depth": config.max_depth,
                "max_nodes": config.max_nodes,
                "time_budget": config.time_budget,
                "num_workers": config.num_workers,
                "clear_quota": args.clear_quota,
            },
            "result": result.to_dict(),
        }
        with open(args.output, "w") as f:
            json.dump(report, f, indent=2)
        logger.info(f"Report written to {args.output}")

    return _STATUS_EXIT[result.status]


def cmd_replay(args) -> int:
    problem = Problem.load(args.problem)
    position, rules = problem.to_rules(clear_quota=args.clear_quota)

    text = args.solution
    if Path(text).is_file():
        text = Path(text).read_text(encoding="utf-8")
    trace = SolutionTrace.parse(text, rules)

    print(format_pretty(trace, rules, position))
    final = trace.verify(rules, position)
    print(f"verified: {final.block_count} blocks remain")
    return EXIT_OK


def main(argv=None) -> int:
    """Main entry point for the solver CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    init_sentry(release=f"flipull-solver@{__version__}")

    try:
        if args.command == "solve":
            return cmd_solve(args)
        return cmd_replay(args)
    except (MalformedInputError, SolutionVerificationError, OSError) as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        capture_exception(e)
        raise


if __name__ == "__main__":
    sys.exit(main())
