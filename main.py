#!/usr/bin/env python3
"""
Insider Trading Lookup.

Resolves a ticker against the SEC company directory, scrapes its insider
transactions from OpenInsider, and prints buy/sell sentiment and per-insider
activity for a trailing window.
"""
from datetime import date
import argparse
import logging
import sys
import os

_here = os.path.dirname(os.path.abspath(__file__))
if _here not in sys.path:
    sys.path.insert(0, _here)

from pathlib import Path
from dotenv import load_dotenv
load_dotenv(Path(_here) / ".env")

from insider_lookup.config import DEFAULT_WINDOW_DAYS, LOG_LEVEL
from insider_lookup.clients import OpenInsiderClient, InsiderDataUnavailable
from insider_lookup.aggregator import summarize, filter_by_window, transactions_frame, window_bounds
from insider_lookup.data.directory import TickerDirectory
from insider_lookup.resolver import CompanyResolver
from insider_lookup.formatting import (
    format_currency,
    format_date,
    format_number,
    format_percent,
    transaction_label,
)


def iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def print_search(resolver: CompanyResolver, query: str) -> None:
    companies = resolver.search(query)
    if not companies:
        print("  No matching companies.")
        return
    for c in companies:
        print(f"  {c.ticker:<8} {c.name}  (CIK {c.cik})")


def print_report(company, summary, by_insider, transactions, days: int, as_of: date, list_transactions: bool) -> None:
    start, end = window_bounds(days, as_of)
    print(f"{company.name} ({company.ticker})  CIK {company.cik}")
    print(f"Period: {format_date(start.isoformat())} - {format_date(end.isoformat())} ({days} days)\n")

    print(f"Sentiment:         {summary.sentiment.value}")
    print(f"Transactions:      {summary.total_transactions} "
          f"({summary.buy_transactions} buys, {summary.sell_transactions} sells)")
    print(f"Total bought:      {format_currency(summary.total_buy_value)}")
    print(f"Total sold:        {format_currency(summary.total_sell_value)}")
    print(f"Net value:         {format_currency(summary.net_value)}")
    print(f"Buy/sell ratio:    {summary.buy_to_sell_ratio:.2f}")
    print(f"Active insiders:   {summary.active_insiders} "
          f"({summary.insiders_buying} buying, {summary.insiders_selling} selling)")

    print("\nBy insider:")
    if not by_insider:
        print("  (No data)")
    ranked = sorted(by_insider.values(), key=lambda a: abs(a.net_value), reverse=True)
    for agg in ranked:
        print(f"  {agg.name[:28]:<28} {agg.title[:20]:<20} "
              f"{format_number(agg.net_shares):>14} sh {format_currency(agg.net_value):>10}  "
              f"last {format_date(agg.last_trade_date)}")

    if list_transactions:
        print("\nTransactions:")
        for t in transactions:
            print(f"  {t.trade_date}  {transaction_label(t.transaction_type.value):<8} "
                  f"{t.insider_name[:28]:<28} {format_number(t.shares):>12} "
                  f"@ ${t.price_per_share:,.2f} {format_currency(t.total_value):>10} "
                  f"{format_percent(t.ownership_change_percent):>8}")


def main():
    parser = argparse.ArgumentParser(
        description="Look up a company's insider trading activity."
    )
    parser.add_argument("ticker", nargs="?", help="Ticker symbol, e.g. AAPL")
    parser.add_argument(
        "--search",
        type=str,
        default=None,
        help="Search companies by ticker or name instead of looking one up",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=DEFAULT_WINDOW_DAYS,
        help="Trailing window in days (default: 90)",
    )
    parser.add_argument(
        "--as-of",
        type=iso_date,
        default=None,
        help="As-of date YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--list-transactions",
        action="store_true",
        help="Print every transaction in the window",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write transactions in the window to CSV path",
    )
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    resolver = CompanyResolver(TickerDirectory())

    if args.search is not None:
        print_search(resolver, args.search)
        return
    if not args.ticker:
        parser.error("ticker is required unless --search is given")

    as_of = args.as_of or date.today()

    company = resolver.resolve(args.ticker)
    if company is None:
        print(f"Company not found: {args.ticker}", file=sys.stderr)
        sys.exit(1)

    try:
        transactions = OpenInsiderClient().get_transactions(company.ticker)
    except InsiderDataUnavailable as e:
        print(f"{e} for {company.ticker}.", file=sys.stderr)
        sys.exit(1)

    summary, by_insider = summarize(company, transactions, window_days=args.days, as_of=as_of)
    in_window = filter_by_window(transactions, args.days, as_of)
    print_report(company, summary, by_insider, in_window, args.days, as_of, args.list_transactions)

    if args.csv:
        transactions_frame(in_window).to_csv(args.csv, index=False)
        print(f"\nWrote {args.csv}.")


if __name__ == "__main__":
    main()
