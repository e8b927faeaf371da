"""Aggregate insider transactions over a trailing window: totals, sentiment, per-insider rollups."""
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .config import (
    DEFAULT_WINDOW_DAYS,
    BULLISH_RATIO,
    BEARISH_RATIO,
    BULLISH_NET_VALUE,
    BEARISH_NET_VALUE,
)
from .models import Company, InsiderAggregate, InsiderTransaction, Sentiment, SummaryStatistics


def window_bounds(window_days: int = DEFAULT_WINDOW_DAYS, as_of: Optional[date] = None) -> Tuple[date, date]:
    """(start, end) calendar dates of the trailing window ending at as_of."""
    as_of = as_of or date.today()
    return as_of - timedelta(days=window_days), as_of


def filter_by_window(
    transactions: List[InsiderTransaction],
    window_days: int = DEFAULT_WINDOW_DAYS,
    as_of: Optional[date] = None,
) -> List[InsiderTransaction]:
    """Keep transactions traded on or after the cutoff. Unparsable trade dates are dropped."""
    if not transactions:
        return []
    cutoff, _ = window_bounds(window_days, as_of)
    trade_dates = pd.to_datetime(
        pd.Series([t.trade_date for t in transactions], dtype="object"),
        errors="coerce",
        format="ISO8601",
        utc=True,
    )
    keep = trade_dates.notna() & (trade_dates >= pd.Timestamp(cutoff, tz="UTC"))
    return [t for t, k in zip(transactions, keep) if k]


def classify_sentiment(buy_count: int, sell_count: int, net_value: float) -> Sentiment:
    """First match wins: bullish, then bearish, else neutral."""
    ratio = buy_count / max(sell_count, 1)
    if ratio > BULLISH_RATIO or net_value > BULLISH_NET_VALUE:
        return Sentiment.BULLISH
    if ratio < BEARISH_RATIO or net_value < BEARISH_NET_VALUE:
        return Sentiment.BEARISH
    return Sentiment.NEUTRAL


def group_by_insider(transactions: List[InsiderTransaction]) -> Dict[str, InsiderAggregate]:
    """Group by exact insider name, in first-seen order."""
    by_insider: Dict[str, InsiderAggregate] = {}
    for tx in transactions:
        agg = by_insider.get(tx.insider_name)
        if agg is None:
            agg = by_insider[tx.insider_name] = InsiderAggregate(name=tx.insider_name, title=tx.insider_title)
        agg.add(tx)
    return by_insider


def summarize(
    company: Company,
    transactions: List[InsiderTransaction],
    window_days: int = DEFAULT_WINDOW_DAYS,
    as_of: Optional[date] = None,
) -> Tuple[SummaryStatistics, Dict[str, InsiderAggregate]]:
    """
    Summary statistics and per-insider rollups for transactions inside the window.

    Buys are purchases; sells are sales and tax withholdings. Buy and sell values are
    summed as magnitudes and net_value is their difference; other transaction types
    count toward totals only.
    """
    filtered = filter_by_window(transactions, window_days, as_of)

    buys = [t for t in filtered if t.transaction_type.is_buy]
    sells = [t for t in filtered if t.transaction_type.is_sell]

    total_buy_value = sum(abs(t.total_value) for t in buys)
    total_sell_value = sum(abs(t.total_value) for t in sells)
    net_value = total_buy_value - total_sell_value

    by_insider = group_by_insider(filtered)

    summary = SummaryStatistics(
        total_transactions=len(filtered),
        buy_transactions=len(buys),
        sell_transactions=len(sells),
        total_buy_value=total_buy_value,
        total_sell_value=total_sell_value,
        net_value=net_value,
        active_insiders=len(by_insider),
        insiders_buying=len({t.insider_name for t in buys}),
        insiders_selling=len({t.insider_name for t in sells}),
        buy_to_sell_ratio=len(buys) / max(len(sells), 1),
        sentiment=classify_sentiment(len(buys), len(sells), net_value),
    )
    return summary, by_insider


def transactions_frame(transactions: List[InsiderTransaction]) -> pd.DataFrame:
    """Flat DataFrame of transactions (one row each, snake_case columns)."""
    columns = [
        "id", "filing_date", "trade_date", "ticker", "insider_name", "insider_title",
        "transaction_type", "transaction_code", "shares", "price_per_share", "total_value",
        "shares_owned_after", "ownership_change_percent", "direct_or_indirect",
        "is_10b5_1_plan", "sec_filing_url",
    ]
    if not transactions:
        return pd.DataFrame(columns=columns)
    rows = []
    for t in transactions:
        rows.append({
            "id": t.id,
            "filing_date": t.filing_date,
            "trade_date": t.trade_date,
            "ticker": t.ticker,
            "insider_name": t.insider_name,
            "insider_title": t.insider_title,
            "transaction_type": t.transaction_type.value,
            "transaction_code": t.transaction_code,
            "shares": t.shares,
            "price_per_share": t.price_per_share,
            "total_value": t.total_value,
            "shares_owned_after": t.shares_owned_after,
            "ownership_change_percent": t.ownership_change_percent,
            "direct_or_indirect": t.direct_or_indirect,
            "is_10b5_1_plan": t.is_10b5_1_plan,
            "sec_filing_url": t.sec_filing_url,
        })
    return pd.DataFrame(rows, columns=columns)
