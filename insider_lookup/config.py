"""Configuration and environment for insider trading lookup."""
import os
from pathlib import Path

from dotenv import load_dotenv
_root = Path(__file__).resolve().parent.parent
load_dotenv(_root / ".env")

def _get(key: str, default: str = "") -> str:
    return (os.getenv(key) or default).strip()


# SEC asks for a descriptive User-Agent with a contact address
SEC_USER_AGENT = _get("SEC_USER_AGENT", "InsiderTracker contact@example.com")
COMPANY_TICKERS_URL = _get("COMPANY_TICKERS_URL", "https://www.sec.gov/files/company_tickers.json")
SEC_BASE_URL = _get("SEC_BASE_URL", "https://www.sec.gov")

# OpenInsider blocks non-browser agents
OPENINSIDER_BASE_URL = _get("OPENINSIDER_BASE_URL", "http://openinsider.com")
BROWSER_USER_AGENT = _get(
    "BROWSER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
)

# Seconds
REQUEST_TIMEOUT = float(_get("REQUEST_TIMEOUT", "15"))
DIRECTORY_TIMEOUT = float(_get("DIRECTORY_TIMEOUT", "30"))

# Trailing window for summary statistics
DEFAULT_WINDOW_DAYS = 90

# Company search
SEARCH_RESULT_LIMIT = 10
SEARCH_MIN_QUERY_LENGTH = 1

# Sentiment: buy/sell count ratio and net dollar value thresholds
BULLISH_RATIO = 1.5
BEARISH_RATIO = 0.5
BULLISH_NET_VALUE = 500_000
BEARISH_NET_VALUE = -500_000

LOG_LEVEL = _get("LOG_LEVEL", "INFO").upper()
