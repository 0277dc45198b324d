"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from datetime import date
from typing import List, Optional, TextIO

from expense_ledger.exceptions import ValidationError
from expense_ledger.log import LOG_LEVELS, configure_logging, default_log_level
from expense_ledger.models import Expense, format_date, parse_date
from expense_ledger.services import ExpenseLedger

logger = logging.getLogger(__name__)

PROMPT = "> "


class CommandError(Exception):
    """Raised when a console line cannot be parsed into a command."""


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems instead of exiting the process."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise CommandError(message)

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:  # type: ignore[override]
        if message:
            raise CommandError(message.strip())
        raise CommandError("")


def _parse_date(value: str) -> date:
    try:
        parsed = parse_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if parsed is None:
        raise argparse.ArgumentTypeError("Date cannot be empty")
    return parsed


def _format_expense(expense: Expense) -> str:
    return f"{format_date(expense.date)}  {expense.amount:>12.2f}  {expense.name}"


def handle_add(args: argparse.Namespace, ledger: ExpenseLedger, out: TextIO) -> None:
    expense = ledger.add_expense(args.name, args.amount, args.date or date.today())
    print("Expense added: " + _format_expense(expense), file=out)


def handle_filter(args: argparse.Namespace, ledger: ExpenseLedger, out: TextIO) -> None:
    ledger.set_month_filter(args.month)
    print(f"Showing {ledger.month_filter.label} (total {ledger.total():.2f})", file=out)


def handle_reset(args: argparse.Namespace, ledger: ExpenseLedger, out: TextIO) -> None:
    ledger.clear_month_filter()
    print(f"Showing all months (total {ledger.total():.2f})", file=out)


def handle_list(args: argparse.Namespace, ledger: ExpenseLedger, out: TextIO) -> None:
    expenses = ledger.filtered_entries()
    if not expenses:
        print("No expenses found.", file=out)
    for expense in expenses:
        print(_format_expense(expense), file=out)
    print(f"Total: {ledger.total():.2f}", file=out)


def build_command_parser() -> CommandParser:
    parser = CommandParser(prog="", add_help=False)
    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=CommandParser)

    add_parser = subparsers.add_parser("add", help="Record an expense", add_help=False)
    add_parser.add_argument("name")
    # Kept as text so the ledger decides what counts as a number.
    add_parser.add_argument("amount")
    add_parser.add_argument("date", nargs="?", type=_parse_date, help="YYYY-MM-DD (default: today)")
    add_parser.set_defaults(handler=handle_add)

    filter_parser = subparsers.add_parser("filter", help="Show a single month", add_help=False)
    filter_parser.add_argument("month", help="Month number (1-12) or name")
    filter_parser.set_defaults(handler=handle_filter)

    reset_parser = subparsers.add_parser("reset", help="Show all months", add_help=False)
    reset_parser.set_defaults(handler=handle_reset)

    list_parser = subparsers.add_parser("list", help="List visible expenses and their total", add_help=False)
    list_parser.set_defaults(handler=handle_list)

    return parser


HELP_TEXT = """Commands:
  add NAME AMOUNT [DATE]   record an expense (DATE is YYYY-MM-DD, default today)
  filter MONTH             show a single month (1-12 or a month name)
  reset                    show all months
  list                     list visible expenses and their total
  help                     show this message
  quit                     leave the tracker"""


def run_loop(
    ledger: ExpenseLedger,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
    *,
    interactive: bool = False,
) -> int:
    """Read commands from ``stdin`` until end of input or ``quit``."""
    parser = build_command_parser()
    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            print(f"Error: {exc}", file=stderr)
            continue
        if not tokens:
            continue
        if tokens[0] in {"quit", "exit"}:
            break
        if tokens[0] == "help":
            print(HELP_TEXT, file=stdout)
            continue

        try:
            args = parser.parse_args(tokens)
            args.handler(args, ledger, stdout)
        except CommandError as exc:
            print(f"Error: {exc}", file=stderr)
        except ValidationError as exc:
            logger.warning("Validation error: %s", exc)
            print(f"Error: {exc}", file=stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker console")
    parser.add_argument(
        "--log-level",
        default=default_log_level(),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity (default: $EXPENSE_TRACKER_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    ledger = ExpenseLedger()
    interactive = sys.stdin.isatty()
    if interactive:
        print("Expense Tracker. Type 'help' for commands.")
    return run_loop(ledger, sys.stdin, sys.stdout, sys.stderr, interactive=interactive)


if __name__ == "__main__":
    raise SystemExit(main())
