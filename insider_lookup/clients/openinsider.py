"""OpenInsider client - scrape the per-ticker insider trading table (SEC Form 4)."""
import logging
import math
import re
from typing import List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from ..config import OPENINSIDER_BASE_URL, BROWSER_USER_AGENT, REQUEST_TIMEOUT, SEC_BASE_URL
from ..models import InsiderTransaction, TransactionType

logger = logging.getLogger(__name__)

TABLE_SELECTOR = "table.tinytable tbody tr"

# Column positions in the OpenInsider table (cell 0 holds filing flags)
FILING_DATE = 1
TRADE_DATE = 2
TICKER = 3
INSIDER_NAME = 4
TITLE = 5
TRADE_TYPE = 6
PRICE = 7
QUANTITY = 8
OWNED = 9
CHANGE = 10
VALUE = 11
MIN_COLUMNS = 12

_STRIP_CHARS = re.compile(r"[$,+\-%]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_TRANSACTION_CODES = {t.value: t for t in TransactionType}


class InsiderDataUnavailable(RuntimeError):
    """The transaction page could not be fetched; not the same as zero transactions."""
    pass


def parse_number(text: str) -> float:
    """Strip currency, comma, sign and percent punctuation; unparsable text is 0."""
    cleaned = _STRIP_CHARS.sub("", (text or "").strip())
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return 0.0
    try:
        value = float(m.group(0))
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_integer(text: str) -> int:
    return int(parse_number(text))


def parse_transaction_type(raw: str) -> Optional[TransactionType]:
    """'S - Sale+OE' -> TransactionType.SALE; None for empty or unknown codes."""
    token = raw.split()[0] if raw and raw.split() else ""
    return _TRANSACTION_CODES.get(token[:1])


def parse_sec_url(href: Optional[str], base_url: str = SEC_BASE_URL) -> str:
    if not href:
        return ""
    return href if href.startswith("http") else urljoin(base_url, href)


def signed(value, tx_type: TransactionType):
    return -value if tx_type.is_disposition and value else value


def parse_table_row(row, ticker: str, index: int, sec_base_url: str = SEC_BASE_URL) -> Optional[InsiderTransaction]:
    """Decode one <tr> into an InsiderTransaction, or None if the row is not a usable trade."""
    cells = row.find_all("td")
    if len(cells) < MIN_COLUMNS:
        return None

    def text(i: int) -> str:
        return cells[i].get_text(" ", strip=True)

    filing_cell = cells[FILING_DATE]
    filing_parts = filing_cell.get_text(" ", strip=True).split()
    filing_date = filing_parts[0] if filing_parts else ""
    link = filing_cell.find("a")
    sec_url = parse_sec_url(link.get("href") if link else None, sec_base_url)

    trade_date = text(TRADE_DATE)
    ticker_text = text(TICKER)
    insider_name = text(INSIDER_NAME)
    trade_type_raw = text(TRADE_TYPE)

    if not insider_name or not trade_date:
        logger.debug(f"Skipping row {index}: missing insider name or trade date")
        return None

    tx_type = parse_transaction_type(trade_type_raw)
    if tx_type is None:
        logger.debug(f"Skipping row {index}: unknown trade type {trade_type_raw!r}")
        return None

    try:
        qty = abs(parse_integer(text(QUANTITY)))
        value = abs(parse_number(text(VALUE)))
        price = parse_number(text(PRICE))
        owned = parse_integer(text(OWNED))
        change = parse_number(text(CHANGE))
    except (ValueError, OverflowError) as e:
        logger.debug(f"Skipping row {index}: bad numeric cell ({e})")
        return None
    ticker_sym = ticker_text or ticker.upper()

    return InsiderTransaction(
        id=f"{ticker_sym}-{filing_date}-{index}",
        filing_date=filing_date,
        trade_date=trade_date,
        ticker=ticker_sym,
        insider_name=insider_name,
        insider_title=text(TITLE),
        transaction_type=tx_type,
        transaction_code=trade_type_raw,
        shares=signed(qty, tx_type),
        price_per_share=price,
        total_value=signed(value, tx_type),
        shares_owned_after=owned,
        ownership_change_percent=change,
        direct_or_indirect="D",
        is_10b5_1_plan=False,
        sec_filing_url=sec_url,
    )


def parse_transactions_html(html: str, ticker: str, sec_base_url: str = SEC_BASE_URL) -> List[InsiderTransaction]:
    """Parse every row of the OpenInsider trades table; malformed rows are skipped."""
    soup = BeautifulSoup(html, "lxml")
    transactions: List[InsiderTransaction] = []
    for index, row in enumerate(soup.select(TABLE_SELECTOR)):
        tx = parse_table_row(row, ticker, index, sec_base_url)
        if tx is not None:
            transactions.append(tx)
    return transactions


class OpenInsiderClient:
    """Fetch insider transactions for a ticker from openinsider.com."""

    def __init__(
        self,
        base_url: str = OPENINSIDER_BASE_URL,
        user_agent: str = BROWSER_USER_AGENT,
        timeout: float = REQUEST_TIMEOUT,
        sec_base_url: str = SEC_BASE_URL,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.sec_base_url = sec_base_url

    def _get(self, url: str) -> str:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }
        r = requests.get(url, headers=headers, timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def get_transactions(self, ticker: str) -> List[InsiderTransaction]:
        """Return every parsable trade on the ticker's page, in document order.

        Raises InsiderDataUnavailable if the page cannot be fetched.
        """
        url = f"{self.base_url}/{ticker.upper()}"
        try:
            html = self._get(url)
        except requests.RequestException as e:
            logger.error(f"Error fetching from OpenInsider ({url}): {e}")
            raise InsiderDataUnavailable("Failed to fetch insider trading data") from e

        logger.info(f"Fetched {len(html)} bytes from {url}")
        transactions = parse_transactions_html(html, ticker, self.sec_base_url)
        logger.info(f"Parsed {len(transactions)} insider transactions for {ticker.upper()}")
        return transactions


def fetch_insider_transactions(ticker: str) -> List[InsiderTransaction]:
    return OpenInsiderClient().get_transactions(ticker)
