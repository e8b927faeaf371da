"""Insider trading lookup - data models and shared types."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class TransactionType(str, Enum):
    """SEC Form 4 transaction codes as shown in the OpenInsider trade type column."""
    PURCHASE = "P"
    SALE = "S"
    GRANT = "A"
    SALE_TO_ISSUER = "D"
    TAX_PAYMENT = "F"
    OPTION_EXERCISE = "M"
    GIFT = "G"
    INHERITED = "W"
    CONVERSION = "C"
    EXERCISE_AND_SALE = "X"

    @property
    def is_buy(self) -> bool:
        return self is TransactionType.PURCHASE

    @property
    def is_sell(self) -> bool:
        return self in (TransactionType.SALE, TransactionType.TAX_PAYMENT)

    @property
    def is_disposition(self) -> bool:
        # Shares and value are negative for these
        return self.is_sell


class Sentiment(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"


@dataclass(frozen=True)
class CompanyDirectoryEntry:
    """One value of the SEC company_tickers.json document."""
    cik: int
    ticker: str
    title: str


@dataclass(frozen=True)
class Company:
    ticker: str
    name: str
    cik: str  # 10-digit, zero padded

    @classmethod
    def from_entry(cls, entry: CompanyDirectoryEntry) -> "Company":
        return cls(ticker=entry.ticker, name=entry.title, cik=str(entry.cik).zfill(10))

    def to_dict(self) -> dict:
        return {"ticker": self.ticker, "name": self.name, "cik": self.cik}


@dataclass(frozen=True)
class InsiderTransaction:
    """Single disclosed insider trade scraped from OpenInsider."""
    id: str
    filing_date: str
    trade_date: str
    ticker: str
    insider_name: str
    insider_title: str
    transaction_type: TransactionType
    transaction_code: str  # raw trade type text, e.g. "S - Sale+OE"
    shares: int  # signed
    price_per_share: float
    total_value: float  # signed
    shares_owned_after: int
    ownership_change_percent: float
    direct_or_indirect: str = "D"
    is_10b5_1_plan: bool = False
    sec_filing_url: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filingDate": self.filing_date,
            "tradeDate": self.trade_date,
            "ticker": self.ticker,
            "insiderName": self.insider_name,
            "insiderTitle": self.insider_title,
            "transactionType": self.transaction_type.value,
            "transactionCode": self.transaction_code,
            "shares": self.shares,
            "pricePerShare": self.price_per_share,
            "totalValue": self.total_value,
            "sharesOwnedAfter": self.shares_owned_after,
            "ownershipChangePercent": self.ownership_change_percent,
            "directOrIndirect": self.direct_or_indirect,
            "is10b51Plan": self.is_10b5_1_plan,
            "secFilingUrl": self.sec_filing_url,
        }


@dataclass
class InsiderAggregate:
    """Per-insider rollup over the filtered transactions of one query."""
    name: str
    title: str
    transactions: List[InsiderTransaction] = field(default_factory=list)
    net_shares: int = 0
    net_value: float = 0.0
    last_trade_date: str = ""

    def add(self, tx: InsiderTransaction) -> None:
        self.transactions.append(tx)
        self.net_shares += tx.shares
        self.net_value += tx.total_value
        self.title = tx.insider_title
        if tx.trade_date > self.last_trade_date:
            self.last_trade_date = tx.trade_date

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "transactions": [t.to_dict() for t in self.transactions],
            "netShares": self.net_shares,
            "netValue": self.net_value,
            "lastTradeDate": self.last_trade_date,
        }


@dataclass(frozen=True)
class SummaryStatistics:
    total_transactions: int
    buy_transactions: int
    sell_transactions: int
    total_buy_value: float
    total_sell_value: float
    net_value: float
    active_insiders: int
    insiders_buying: int
    insiders_selling: int
    buy_to_sell_ratio: float
    sentiment: Sentiment

    def to_dict(self) -> dict:
        return {
            "totalTransactions": self.total_transactions,
            "buyTransactions": self.buy_transactions,
            "sellTransactions": self.sell_transactions,
            "totalBuyValue": self.total_buy_value,
            "totalSellValue": self.total_sell_value,
            "netValue": self.net_value,
            "activeInsiders": self.active_insiders,
            "insidersBuying": self.insiders_buying,
            "insidersSelling": self.insiders_selling,
            "buyToSellRatio": self.buy_to_sell_ratio,
            "sentiment": self.sentiment.value,
        }
