#!/usr/bin/env python3
import argparse
import logging
import sys
from decimal import Decimal
from typing import Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from donation_chooser import (
    DonationChooser,
    DonationConfig,
    DonationError,
    DonationInput,
    DonationResult,
    Objective,
    dump_result,
    load_input,
)
from donation_chooser.chooser import STRATEGIES
from donation_chooser.config import DEFAULT_DONATION, DEFAULT_MAX_TABLE_CELLS
from donation_chooser.models import exact_arithmetic

logger = logging.getLogger(__name__)
console = Console(stderr=True)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2

DESCRIPTION = """\
Reads a set of asset prices and lots from standard input and calculates which
lots you should donate to maximize capital gains tax savings (or, optionally,
which you should sell before donating to maximize capital losses).

Donating shares held for more than a year that have capital gains lets you
deduct their full value without paying tax on the gains. Selling shares that
have capital losses and donating the cash lets you deduct the donation and
also claim the losses.

Standard input must be a JSON object with:

  assetSharePrices  object mapping each case-sensitive asset name to its
                    current share price (number or numeric string)
  lots              array of objects with assetName, date (any label that
                    identifies the lot), shares (non-negative integer) and
                    shareCost (number or numeric string)

Standard output is a JSON object with:

  donation           the lots to donate, shaped like the input lots but
                     possibly with fewer shares
  assetSharePrices   the prices from standard input
  totalValue         total price of the donated shares
  totalCapitalGains  total capital gains (negative for losses) donated

The donation never exceeds the requested amount; try larger amounts if you
are happy to give a little more. The default solver runs in O(s*d) time and
space, where s is the number of shares and d is the donation amount in its
smallest unit.
"""


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="choose-donation-assets",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--donation", default=DEFAULT_DONATION, help="donation amount (default: %(default)s)"
    )
    parser.add_argument(
        "--maximize-losses",
        action="store_true",
        help="maximize capital losses instead of capital gains",
    )
    parser.add_argument(
        "--quote-decimals",
        action="store_true",
        help="print decimal values as JSON strings",
    )
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="expanded",
        help="selection algorithm (default: %(default)s)",
    )
    parser.add_argument(
        "--max-table-cells",
        type=_non_negative_int,
        default=DEFAULT_MAX_TABLE_CELLS,
        help="refuse solver tables larger than this; 0 for no limit (default: %(default)s)",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="also show the donation as a table on standard error",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser


def config_from_args(args: argparse.Namespace) -> DonationConfig:
    objective = Objective.MAXIMIZE_LOSSES if args.maximize_losses else Objective.MAXIMIZE_GAINS
    return DonationConfig(
        objective=objective,
        strategy=args.strategy,
        quote_decimals=args.quote_decimals,
        max_table_cells=args.max_table_cells or None,
    )


def _gain_color(gain: Decimal) -> str:
    if gain > 0:
        return "green"
    return "red" if gain < 0 else "white"


def donation_table(source: DonationInput, result: DonationResult) -> Table:
    """Build a Rich table showing the lots to donate."""
    t = Table(title="Donation", box=box.ROUNDED, title_style="bold white")
    t.add_column("Asset", style="cyan")
    t.add_column("Date")
    t.add_column("Shares", justify="right")
    t.add_column("Cost", justify="right")
    t.add_column("Price", justify="right")
    t.add_column("Value", justify="right")
    t.add_column("Gain", justify="right")

    for lot in result.donation:
        price = source.asset_share_prices[lot.asset_name]
        with exact_arithmetic():
            value = price * lot.shares
            gain = source.unit_capital_gains(lot) * lot.shares
        t.add_row(
            lot.asset_name,
            lot.date,
            str(lot.shares),
            f"${lot.share_cost:,.2f}",
            f"${price:,.2f}",
            f"${value:,.2f}",
            Text(f"${gain:,.2f}", style=_gain_color(gain)),
        )

    t.add_section()
    t.add_row(
        "",
        "",
        f"[bold]{result.total_shares}[/bold]",
        "",
        "Total",
        f"[bold]${result.total_value:,.2f}[/bold]",
        Text(f"${result.total_capital_gains:,.2f}", style=_gain_color(result.total_capital_gains)),
    )
    return t


def run(args: argparse.Namespace, stdin=None, stdout=None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    config = config_from_args(args)
    try:
        source = load_input(stdin)
        logger.debug("Read %d lots and %d prices", len(source.lots), len(source.asset_share_prices))
        result = DonationChooser(source, config).choose(args.donation)
    except DonationError as e:
        console.print(Text(str(e), style="red"))
        return EXIT_INPUT_ERROR

    if args.table:
        console.print(donation_table(source, result))

    stdout.write(dump_result(result, quote_decimals=config.quote_decimals) + "\n")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
