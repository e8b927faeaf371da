#!/usr/bin/env python3
"""FastAPI server for insider trading lookup - company search and insider activity API."""
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional
import asyncio
import logging
import sys
import os

_here = os.path.dirname(os.path.abspath(__file__))
if _here not in sys.path:
    sys.path.insert(0, _here)

from pathlib import Path
from dotenv import load_dotenv
load_dotenv(Path(_here) / ".env")

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from insider_lookup.config import DEFAULT_WINDOW_DAYS, LOG_LEVEL
from insider_lookup.clients import fetch_insider_transactions
from insider_lookup.aggregator import summarize, window_bounds
from insider_lookup.data.directory import TickerDirectory
from insider_lookup.resolver import CompanyResolver

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Insider Trading Lookup", version="1.0.0")
_executor = ThreadPoolExecutor(max_workers=4)

# One directory per process; loaded on first use and never refreshed
_resolver = CompanyResolver(TickerDirectory())


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _do_search(q: str):
    return [c.to_dict() for c in _resolver.search(q)]


@app.get("/api/search")
async def search(q: Optional[str] = Query(default=None, description="Ticker or company name")):
    """Search companies by ticker or name. Empty query returns no companies."""
    if not q:
        return {"companies": []}
    loop = asyncio.get_event_loop()
    try:
        companies = await loop.run_in_executor(_executor, _do_search, q)
    except Exception as e:
        logger.error(f"Search error for {q!r}: {e}")
        return _error(500, "Failed to search companies")
    return {"companies": companies}


def _do_insider(ticker: str, days: int, as_of_date: date):
    company = _resolver.resolve(ticker)
    if company is None:
        return None
    transactions = fetch_insider_transactions(ticker)
    summary, by_insider = summarize(company, transactions, window_days=days, as_of=as_of_date)
    start, end = window_bounds(days, as_of_date)
    return {
        "company": company.to_dict(),
        "summary": summary.to_dict(),
        "transactions": [t.to_dict() for t in transactions],
        "byInsider": {name: agg.to_dict() for name, agg in by_insider.items()},
        "period": {
            "days": days,
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
        },
    }


@app.get("/api/insider/{ticker}")
async def insider_activity(
    ticker: str,
    days: int = Query(default=DEFAULT_WINDOW_DAYS, ge=0, le=3650, description="Trailing window in days"),
):
    """Insider transactions, summary and per-insider breakdown for one company."""
    loop = asyncio.get_event_loop()
    try:
        data = await loop.run_in_executor(_executor, _do_insider, ticker, days, date.today())
    except Exception as e:
        logger.error(f"Error fetching insider trading data for {ticker}: {e}")
        return _error(500, "Failed to fetch insider trading data")
    if data is None:
        return _error(404, "Company not found")
    return data


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
