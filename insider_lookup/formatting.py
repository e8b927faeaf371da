"""Display helpers for CLI output."""
from datetime import datetime

SHORT_LABELS = {
    "P": "Buy",
    "S": "Sell",
    "A": "Grant",
    "D": "Dispose",
    "F": "Tax",
    "M": "Exercise",
    "G": "Gift",
    "W": "Inherit",
    "C": "Convert",
    "X": "Exercise",
}


def format_currency(value: float) -> str:
    """Compact dollars: -$1.23B, $4.56M, $7.8K, $12."""
    abs_value = abs(value)
    sign = "-" if value < 0 else ""
    if abs_value >= 1e9:
        return f"{sign}${abs_value / 1e9:.2f}B"
    if abs_value >= 1e6:
        return f"{sign}${abs_value / 1e6:.2f}M"
    if abs_value >= 1e3:
        return f"{sign}${abs_value / 1e3:.1f}K"
    return f"{sign}${abs_value:.0f}"


def format_number(value) -> str:
    return f"{value:,}"


def format_percent(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f}%"


def format_date(date_str: str) -> str:
    """'2024-01-05' -> 'Jan 5, 2024'; unparsable input is returned as is."""
    try:
        d = datetime.strptime((date_str or "")[:10], "%Y-%m-%d")
    except ValueError:
        return date_str
    return f"{d:%b} {d.day}, {d.year}"


def transaction_label(code: str) -> str:
    return SHORT_LABELS.get(code, code)
