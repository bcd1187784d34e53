"""CLI: sum the minimum presses over every machine of an input file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .logging_utils import configure_logging
from .models import Options, SolveRequest
from .parametrization import MAX_FREE_VARIABLES
from .parser import ParseError, parse_lines
from .solver import solve_request

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Minimum total button presses per machine")
    parser.add_argument("path", nargs="?", default=None, help="Input file, one machine per line (default: stdin)")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first machine that cannot be solved")
    parser.add_argument("--lights", action="store_true", help="Print the indicator-light total instead of the counter total")
    parser.add_argument("--cross-check", action="store_true", help="Verify every machine with CP-SAT")
    parser.add_argument("--max-free-variables", type=int, default=MAX_FREE_VARIABLES)
    parser.add_argument("--log-level", default=None, help="Logging level (default: MINPRESS_LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        text = Path(args.path).read_text(encoding="utf-8") if args.path else sys.stdin.read()
    except OSError as exc:
        logger.error("Cannot read input: %s", exc)
        return 1

    try:
        machines = parse_lines(text)
    except ParseError as exc:
        logger.error("Cannot parse input: %s", exc)
        return 1

    options = Options(
        maxFreeVariables=args.max_free_variables,
        continueOnError=not args.fail_fast,
        crossCheck=args.cross_check,
    )
    response = solve_request(SolveRequest(machines=machines, options=options))
    if response.error:
        logger.error("Aborted: %s", response.error)
        return 1

    total = response.lightTotal if args.lights else response.total
    print(total if total is not None else 0)
    return 0 if response.status == "OPTIMAL" else 1


if __name__ == "__main__":
    raise SystemExit(main())
