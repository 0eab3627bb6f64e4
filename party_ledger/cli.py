"""Console interface for the party ledger."""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, TextIO

from ledger.balance import ENTRY_TYPES, totals_by_type
from ledger.exceptions import RecordNotFoundError, ValidationError
from ledger.models import Party
from ledger.store import PartyStore

DEFAULT_CURRENCY_SYMBOL = "₹"
PROMPT = "ledger> "
QUIT_COMMANDS = {"quit", "exit"}

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when a session command line cannot be parsed."""


class SessionArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports errors instead of exiting the process."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise CommandError(f"{self.prog}: {message}")

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:  # type: ignore[override]
        # argparse exits after printing help; the session keeps running.
        if message:
            raise CommandError(message.strip())
        raise CommandError("")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc


def format_amount(value: Decimal, symbol: str) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def resolve_party(store: PartyStore, ref: str) -> Party:
    """Look a party up by id, or by its 1-based position in ``party list``."""
    if ref in store:
        return store.get(ref)
    if ref.isdigit():
        position = int(ref)
        parties = store.list()
        if 1 <= position <= len(parties):
            return parties[position - 1]
    raise RecordNotFoundError(f"Party {ref} not found")


def _format_party_line(position: int, party: Party, symbol: str) -> str:
    return (
        f"{position:>3}. {party.name} [{party.id}] "
        f"{len(party.entries)} entries, balance {format_amount(party.balance, symbol)}"
    )


def _format_party_detail(party: Party, symbol: str) -> str:
    totals = totals_by_type(party.entries)
    lines = [
        f"{party.name} [{party.id}]",
        f"  Balance: {format_amount(party.balance, symbol)}",
        "  Totals: "
        + " | ".join(
            f"{entry_type}: {format_amount(totals[entry_type], symbol)}"
            for entry_type in sorted(totals)
        ),
    ]
    if not party.entries:
        lines.append("  No entries yet.")
    for entry in party.entries:
        lines.append(
            f"  {entry.date.isoformat()} {entry.type.upper():<8} "
            f"{format_amount(entry.amount, symbol)} [{entry.id}]"
        )
    return "\n".join(lines)


class LedgerSession:
    """Runs console commands against a single, injected :class:`PartyStore`."""

    def __init__(
        self,
        store: PartyStore,
        *,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.store = store
        self.currency_symbol = currency_symbol
        self._out = out
        self._err = err
        self._parser = build_command_parser()

    # Resolved per call so a redirected sys.stdout is honoured.
    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def emit(self, message: str) -> None:
        print(message, file=self.out)

    def run(self, lines: Iterable[str], *, interactive: bool = False) -> None:
        if interactive:
            self.out.write(PROMPT)
            self.out.flush()
        for line in lines:
            if not self.execute(line):
                return
            if interactive:
                self.out.write(PROMPT)
                self.out.flush()

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the session should end."""
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            print(f"Parse error: {exc}", file=self.err)
            return True
        if not tokens:
            return True
        if tokens[0].lower() in QUIT_COMMANDS:
            return False
        if tokens[0].lower() == "help":
            self.out.write(self._parser.format_help())
            return True

        try:
            args = self._parser.parse_args(tokens)
        except CommandError as exc:
            if str(exc):
                print(str(exc), file=self.err)
            return True

        try:
            args.handler(self, args)
        except ValidationError as exc:
            print(f"Validation error: {exc}", file=self.err)
        except RecordNotFoundError as exc:
            print(str(exc), file=self.err)
        return True

    # Command handlers -----------------------------------------------------
    def party_add(self, args: argparse.Namespace) -> None:
        party = self.store.add_party(" ".join(args.name))
        position = len(self.store)
        self.emit("Party added:\n" + _format_party_line(position, party, self.currency_symbol))

    def party_list(self, args: argparse.Namespace) -> None:
        parties = self.store.list()
        if not parties:
            self.emit("No parties yet.")
            return
        self.emit(f"Found {len(parties)} parties:")
        for position, party in enumerate(parties, start=1):
            self.emit(_format_party_line(position, party, self.currency_symbol))

    def party_show(self, args: argparse.Namespace) -> None:
        party = resolve_party(self.store, args.party)
        self.emit(_format_party_detail(party, self.currency_symbol))

    def entry_add(self, args: argparse.Namespace) -> None:
        party = resolve_party(self.store, args.party)
        entry = self.store.add_entry(
            party.id, {"type": args.type, "amount": args.amount, "date": args.date}
        )
        balance = self.store.balance(party.id)
        self.emit(
            f"Entry added to {party.name}: {entry.type.upper()} "
            f"{format_amount(entry.amount, self.currency_symbol)} on {entry.date.isoformat()}\n"
            f"  Balance: {format_amount(balance, self.currency_symbol)}"
        )

    def balance(self, args: argparse.Namespace) -> None:
        party = resolve_party(self.store, args.party)
        self.emit(f"Balance for {party.name}: {format_amount(party.balance, self.currency_symbol)}")

    def summary(self, args: argparse.Namespace) -> None:
        report = self.store.summary()
        if not report["parties"]:
            self.emit("No parties yet.")
            return
        for item in report["parties"]:
            self.emit(
                f"  {item['name']}: {format_amount(Decimal(item['balance']), self.currency_symbol)}"
            )
        self.emit(f"Net: {format_amount(Decimal(report['net']), self.currency_symbol)}")


def build_command_parser() -> SessionArgumentParser:
    parser = SessionArgumentParser(prog="ledger", add_help=False, description="Party ledger commands")
    subparsers = parser.add_subparsers(dest="entity", required=True, parser_class=SessionArgumentParser)

    party_parser = subparsers.add_parser("party", help="Manage parties")
    party_sub = party_parser.add_subparsers(dest="command", required=True, parser_class=SessionArgumentParser)

    party_add = party_sub.add_parser("add", help="Add a new party")
    party_add.add_argument("name", nargs="+")
    party_add.set_defaults(handler=LedgerSession.party_add)

    party_list = party_sub.add_parser("list", help="List parties")
    party_list.set_defaults(handler=LedgerSession.party_list)

    party_show = party_sub.add_parser("show", help="Show a party with its entries")
    party_show.add_argument("party", help="Party id or position from 'party list'")
    party_show.set_defaults(handler=LedgerSession.party_show)

    entry_parser = subparsers.add_parser("entry", help="Manage entries")
    entry_sub = entry_parser.add_subparsers(dest="command", required=True, parser_class=SessionArgumentParser)

    entry_add = entry_sub.add_parser("add", help="Append an entry to a party")
    entry_add.add_argument("party", help="Party id or position from 'party list'")
    entry_add.add_argument("type", choices=sorted(ENTRY_TYPES), type=str.lower)
    entry_add.add_argument("amount")
    entry_add.add_argument("--date", type=_parse_date, help="Entry date (default: today)")
    entry_add.set_defaults(handler=LedgerSession.entry_add)

    balance_parser = subparsers.add_parser("balance", help="Show a party's balance")
    balance_parser.add_argument("party", help="Party id or position from 'party list'")
    balance_parser.set_defaults(handler=LedgerSession.balance)

    summary_parser = subparsers.add_parser("summary", help="Show balances of all parties")
    summary_parser.set_defaults(handler=LedgerSession.summary)

    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Party Ledger interactive session")
    parser.add_argument(
        "--currency-symbol",
        default=os.getenv("PARTY_LEDGER_CURRENCY", DEFAULT_CURRENCY_SYMBOL),
        help="Symbol shown in front of amounts (default: $PARTY_LEDGER_CURRENCY or ₹)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    source = stdin or sys.stdin
    store = PartyStore()
    session = LedgerSession(store, currency_symbol=args.currency_symbol)
    logger.info("Starting ledger session")
    try:
        session.run(source, interactive=source.isatty())
    except KeyboardInterrupt:
        print(file=session.out)
    finally:
        store.clear()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
