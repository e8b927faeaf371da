from datetime import date

import pytest

from insider_lookup.models import InsiderTransaction, TransactionType


SAMPLE_DIRECTORY = {
    "0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."},
    "1": {"cik_str": 1000001, "ticker": "PINE", "title": "Pineapple Holdings"},
    "2": {"cik_str": 789019, "ticker": "MSFT", "title": "Microsoft Corp"},
    "3": {"cik_str": 1000002, "ticker": "AAPLW", "title": "Crab Apple Growers"},
}


class CountingFetch:
    """Stands in for the company_tickers.json download and counts calls."""

    def __init__(self, data=None):
        self.data = SAMPLE_DIRECTORY if data is None else data
        self.calls = 0

    def __call__(self, url, headers, timeout):
        self.calls += 1
        return self.data


@pytest.fixture
def counting_fetch():
    return CountingFetch()


def make_tx(
    name="Jane Doe",
    code="P",
    value=1000.0,
    shares=100,
    trade_date="2026-02-10",
    title="CEO",
    idx=0,
):
    tx_type = TransactionType(code)
    sign = -1 if tx_type.is_disposition else 1
    return InsiderTransaction(
        id=f"ABCD-{trade_date}-{idx}",
        filing_date=trade_date,
        trade_date=trade_date,
        ticker="ABCD",
        insider_name=name,
        insider_title=title,
        transaction_type=tx_type,
        transaction_code=f"{code} - test",
        shares=sign * abs(shares),
        price_per_share=10.0,
        total_value=sign * abs(value),
        shares_owned_after=5000,
        ownership_change_percent=2.0,
    )


AS_OF = date(2026, 3, 1)
