"""Look up companies by ticker or search the ticker directory by name/ticker substring."""
from typing import List, Optional

from .config import SEARCH_RESULT_LIMIT, SEARCH_MIN_QUERY_LENGTH
from .data.directory import TickerDirectory
from .models import Company


class CompanyResolver:
    """Resolve and search companies against an in-memory TickerDirectory."""

    def __init__(self, directory: TickerDirectory, limit: int = SEARCH_RESULT_LIMIT):
        self.directory = directory
        self.limit = limit

    def resolve(self, ticker: str) -> Optional[Company]:
        """Exact (case-insensitive) ticker lookup. Returns None if unknown."""
        t = (ticker or "").strip().upper()
        if not t:
            return None
        by_ticker, _ = self.directory.load()
        entry = by_ticker.get(t)
        return Company.from_entry(entry) if entry else None

    def search(self, query: str, limit: Optional[int] = None) -> List[Company]:
        """
        Rank matches in three passes: exact ticker, name substring, ticker substring.
        Deduplicated by ticker and truncated to limit.
        """
        limit = self.limit if limit is None else limit
        q = (query or "").strip()
        if len(q) < SEARCH_MIN_QUERY_LENGTH or limit <= 0:
            return []

        by_ticker, by_name = self.directory.load()
        q_upper = q.upper()
        q_lower = q.lower()
        results: List[Company] = []
        seen = set()

        def add(entry) -> None:
            if entry.ticker in seen:
                return
            seen.add(entry.ticker)
            results.append(Company.from_entry(entry))

        if q_upper in by_ticker:
            add(by_ticker[q_upper])

        for name, entry in by_name.items():
            if len(results) >= limit:
                break
            if q_lower in name:
                add(entry)

        for ticker, entry in by_ticker.items():
            if len(results) >= limit:
                break
            if q_upper in ticker:
                add(entry)

        return results[:limit]
