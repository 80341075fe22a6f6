"""Command line program.

Run with: nashfinder GAME_FILE [SUPPORT_SETS]

Without SUPPORT_SETS every pair of supports is tested. With it, only the
given pair is, e.g. ``nashfinder matching-pennies.json "[H,T][T]"``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from nashfinder import __version__
from nashfinder.config import LOG_DATE_FORMAT, LOG_FORMAT, ExtractionConfig, SearchConfig, SolverConfig
from nashfinder.core.builder import ConstraintMode
from nashfinder.core.errors import ConfigurationError, NashFinderError
from nashfinder.core.search import SearchOptions, find_equilibria
from nashfinder.formats import load_game
from nashfinder.formats.report import format_json, format_summary, format_text
from nashfinder.formats.supports import parse_support_sets

logger = logging.getLogger("nashfinder")

EXIT_OK = 0
EXIT_INTERNAL_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nashfinder",
        description="Find Nash equilibria of two-player strategic games by support enumeration.",
    )
    parser.add_argument("game_file", help="path to the game file (JSON)")
    parser.add_argument(
        "support_sets",
        nargs="?",
        default=None,
        help='only test this support pair, e.g. "[H,T][T]"',
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ConstraintMode],
        default=ConstraintMode.EQUILIBRIUM.value,
        help="constraint family used per support pair (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=SolverConfig.TIMEOUT_MILLIS,
        help="LP solver time limit per support pair (default: %(default)s)",
    )
    parser.add_argument(
        "--verbosity",
        type=int,
        default=SolverConfig.VERBOSITY,
        help="LP solver verbosity, 0 is silent (default: %(default)s)",
    )
    parser.add_argument(
        "--decimals",
        type=int,
        default=ExtractionConfig.ROUNDING_DECIMALS,
        help="decimal places for probabilities and utilities, at most "
        f"{ExtractionConfig.MAX_ROUNDING_DECIMALS} (default: %(default)s)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=SearchConfig.DEFAULT_MAX_WORKERS,
        help="solve support pairs on this many threads (default: %(default)s)",
    )
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument(
        "--only-equilibria",
        action="store_true",
        help="omit support pairs without an equilibrium",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    try:
        options = SearchOptions(
            mode=args.mode,
            timeout_ms=args.timeout_ms,
            verbosity=args.verbosity,
            decimals=args.decimals,
            max_workers=args.workers,
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        parser.error(str(e))

    try:
        game = load_game(args.game_file)
        explicit = None
        if args.support_sets:
            explicit = parse_support_sets(args.support_sets, game.players)
        result = find_equilibria(game, explicit=explicit, options=options)
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_USAGE_ERROR
    except NashFinderError as e:
        logger.exception("Equilibrium search failed: %s", e)
        return EXIT_INTERNAL_ERROR

    if args.json:
        print(format_json(result, only_equilibria=args.only_equilibria))
    else:
        text = format_text(result, only_equilibria=args.only_equilibria)
        if text:
            print(text)
        logger.info(format_summary(result))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
