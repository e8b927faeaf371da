from datetime import date

from insider_lookup.aggregator import (
    classify_sentiment,
    filter_by_window,
    summarize,
    transactions_frame,
    window_bounds,
)
from insider_lookup.models import Company, Sentiment

from conftest import AS_OF, make_tx

COMPANY = Company(ticker="ABCD", name="Abcd Corp", cik="0000123456")


def test_totals_are_magnitudes_and_net_is_difference():
    txs = [
        make_tx("A", "P", value=10_000),
        make_tx("B", "S", value=4_000),
        make_tx("C", "F", value=1_000),
        make_tx("D", "A", value=99_999),
    ]
    summary, _ = summarize(COMPANY, txs, 90, as_of=AS_OF)
    assert summary.total_buy_value == 10_000
    assert summary.total_sell_value == 5_000
    assert summary.net_value == summary.total_buy_value - summary.total_sell_value
    assert summary.total_transactions == 4
    assert summary.buy_transactions == 1
    assert summary.sell_transactions == 2
    assert summary.buy_to_sell_ratio == 0.5


def test_totals_never_negative_for_sells_only():
    txs = [make_tx("A", "S", value=700_000), make_tx("B", "F", value=1)]
    summary, _ = summarize(COMPANY, txs, 90, as_of=AS_OF)
    assert summary.total_buy_value == 0
    assert summary.total_sell_value == 700_001
    assert summary.sentiment is Sentiment.BEARISH


def test_window_filter_boundary_and_malformed_dates():
    txs = [
        make_tx(trade_date="2025-12-01"),  # exactly 90 days before AS_OF
        make_tx(trade_date="2025-11-30"),
        make_tx(trade_date="not a date"),
        make_tx(trade_date="2026-02-28"),
    ]
    kept = filter_by_window(txs, 90, as_of=AS_OF)
    assert [t.trade_date for t in kept] == ["2025-12-01", "2026-02-28"]


def test_window_bounds():
    assert window_bounds(90, AS_OF) == (date(2025, 12, 1), AS_OF)


def test_per_insider_rollup():
    txs = [
        make_tx("Jane Doe", "P", value=1_000, shares=10, trade_date="2026-02-01", title="CFO"),
        make_tx("Jane Doe", "S", value=300, shares=3, trade_date="2026-02-20", title="CEO"),
        make_tx("Jane Doe", "M", value=50, shares=5, trade_date="2026-01-15", title="CEO, Dir"),
        make_tx("jane doe", "P", value=5, shares=1),
        make_tx("Old Timer", "P", trade_date="2020-01-01"),
    ]
    summary, by_insider = summarize(COMPANY, txs, 90, as_of=AS_OF)
    assert list(by_insider) == ["Jane Doe", "jane doe"]
    jane = by_insider["Jane Doe"]
    assert len(jane.transactions) == 3
    assert jane.net_shares == 10 - 3 + 5
    assert jane.net_value == 1_000 - 300 + 50
    assert jane.title == "CEO, Dir"
    assert jane.last_trade_date == "2026-02-20"
    assert sum(len(a.transactions) for a in by_insider.values()) == summary.total_transactions


def test_distinct_insider_counts():
    txs = [
        make_tx("A", "P"),
        make_tx("A", "S"),
        make_tx("B", "P"),
        make_tx("C", "G"),
    ]
    summary, _ = summarize(COMPANY, txs, 90, as_of=AS_OF)
    assert summary.active_insiders == 3
    assert summary.insiders_buying == 2
    assert summary.insiders_selling == 1


def test_sentiment_net_value_overrides_ratio():
    assert classify_sentiment(1, 10, 600_000) is Sentiment.BULLISH


def test_sentiment_neutral_when_balanced():
    assert classify_sentiment(5, 5, 0) is Sentiment.NEUTRAL


def test_sentiment_ratio_thresholds():
    assert classify_sentiment(2, 1, 0) is Sentiment.BULLISH
    assert classify_sentiment(3, 2, 0) is Sentiment.NEUTRAL
    assert classify_sentiment(1, 3, 0) is Sentiment.BEARISH
    assert classify_sentiment(1, 1, -500_001) is Sentiment.BEARISH
    assert classify_sentiment(0, 0, 0) is Sentiment.BEARISH


def test_summarize_empty():
    summary, by_insider = summarize(COMPANY, [], 90, as_of=AS_OF)
    assert summary.total_transactions == 0
    assert summary.net_value == 0
    assert by_insider == {}


def test_summary_to_dict_wire_keys():
    summary, by_insider = summarize(COMPANY, [make_tx("A", "P", value=600_000)], 90, as_of=AS_OF)
    d = summary.to_dict()
    assert d["sentiment"] == "Bullish"
    assert d["totalBuyValue"] == 600_000
    assert by_insider["A"].to_dict()["lastTradeDate"] == "2026-02-10"


def test_transactions_frame():
    df = transactions_frame([make_tx("A", "S", value=10, shares=2)])
    assert list(df["transaction_type"]) == ["S"]
    assert df.loc[0, "shares"] == -2
    assert transactions_frame([]).empty
