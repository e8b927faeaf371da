"""Insider trading lookup - upstream clients and data fetching."""
from .openinsider import OpenInsiderClient, InsiderDataUnavailable, fetch_insider_transactions

__all__ = [
    "OpenInsiderClient",
    "InsiderDataUnavailable",
    "fetch_insider_transactions",
]
