"""SEC ticker directory, loaded once and held in memory for the process lifetime."""
import logging
import threading
from typing import Callable, Dict, Optional, Tuple

import requests

from ..config import COMPANY_TICKERS_URL, SEC_USER_AGENT, DIRECTORY_TIMEOUT
from ..models import CompanyDirectoryEntry

logger = logging.getLogger(__name__)

Index = Dict[str, CompanyDirectoryEntry]


def _http_fetch(url: str, headers: dict, timeout: float) -> dict:
    r = requests.get(url, headers=headers, timeout=timeout)
    r.raise_for_status()
    return r.json()


def build_indexes(data: dict) -> Tuple[Index, Index]:
    """Build (by_ticker, by_name) from the company_tickers.json payload.

    Format is { "0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."}, ... }.
    Later duplicates overwrite earlier ones in both indexes.
    """
    by_ticker: Index = {}
    by_name: Index = {}
    for _, obj in (data or {}).items():
        if not isinstance(obj, dict):
            continue
        entry = CompanyDirectoryEntry(
            cik=int(obj.get("cik_str") or 0),
            ticker=str(obj.get("ticker") or ""),
            title=str(obj.get("title") or ""),
        )
        by_ticker[entry.ticker.upper()] = entry
        by_name[entry.title.lower()] = entry
    return by_ticker, by_name


class TickerDirectory:
    """
    Lazily loaded ticker directory.

    The first load() fetches company_tickers.json once; every later call returns
    the same indexes. The directory is never refreshed while the process runs.
    A failed load caches nothing, so the next call fetches again.
    """

    def __init__(
        self,
        url: str = COMPANY_TICKERS_URL,
        user_agent: str = SEC_USER_AGENT,
        timeout: float = DIRECTORY_TIMEOUT,
        fetch: Optional[Callable[[str, dict, float], dict]] = None,
    ):
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout
        self._fetch = fetch or _http_fetch
        self._lock = threading.Lock()
        self._indexes: Optional[Tuple[Index, Index]] = None

    @property
    def loaded(self) -> bool:
        return self._indexes is not None

    def load(self) -> Tuple[Index, Index]:
        """Return (by_ticker, by_name). Fetch errors propagate to the caller."""
        if self._indexes is not None:
            return self._indexes
        with self._lock:
            if self._indexes is None:
                logger.info(f"Loading ticker directory from {self.url}")
                data = self._fetch(self.url, {"User-Agent": self.user_agent}, self.timeout)
                by_ticker, by_name = build_indexes(data)
                logger.info(f"Ticker directory loaded: {len(by_ticker)} tickers")
                self._indexes = (by_ticker, by_name)
        return self._indexes
