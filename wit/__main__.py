"""CLI entry point for the work incentive tracker."""

from __future__ import annotations

import argparse
from datetime import date
import logging
from pathlib import Path
import sys

from .engine import calculate_status
from .months import format_month_readable
from .proration import attributed_total
from .report import format_currency, render_summary, result_to_dict, write_json
from .schema import History, SchemaError, load_history
from .validate import MONTH_RE, validate_history

logger = logging.getLogger(__name__)


def _parse_as_of(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a YYYY-MM-DD date") from exc


def _parse_target_month(value: str) -> str:
    if not MONTH_RE.match(value):
        raise argparse.ArgumentTypeError(f"'{value}' is not a YYYY-MM month")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SSDI work incentive tracker")
    parser.add_argument("history", help="Path to work history JSON file")
    parser.add_argument("-o", "--output", help="Also write the calculation result as JSON to this path")
    parser.add_argument("--as-of", type=_parse_as_of, help="Date used for the current phase (default: today)")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument(
        "--attribute",
        metavar="YYYY-MM",
        type=_parse_target_month,
        help="Print the prorated pay period total for a month instead of running the engine",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _print_attribution(history: History, target_month: str) -> None:
    total = attributed_total(history.pay_periods, target_month, history.earnings_type)
    print(f"Attributed to {format_month_readable(target_month)}: {format_currency(total)} ({total:.2f})")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    today = args.as_of or date.today()

    try:
        history = load_history(args.history)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load history: {exc}", file=sys.stderr)
        return 2

    validation = validate_history(history, today=today)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return 1

    if args.validate:
        print("History is valid.")
        return 0

    if args.attribute:
        _print_attribution(history, args.attribute)
        return 0

    logger.debug("Analyzing %d entries as of %s", len(history.entries), today.isoformat())
    result = calculate_status(history.entries, today=today, rules=history.rules)
    print(render_summary(result, today, history.rules))

    if args.output:
        write_json(args.output, result_to_dict(result))
        print(f"Wrote result to {Path(args.output)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
