from insider_lookup.formatting import (
    format_currency,
    format_date,
    format_number,
    format_percent,
    transaction_label,
)


def test_format_currency():
    assert format_currency(1_234_000_000) == "$1.23B"
    assert format_currency(-4_560_000) == "-$4.56M"
    assert format_currency(7_800) == "$7.8K"
    assert format_currency(12) == "$12"
    assert format_currency(0) == "$0"


def test_format_number_and_percent():
    assert format_number(-1234567) == "-1,234,567"
    assert format_percent(3.14) == "+3.1%"
    assert format_percent(-2) == "-2.0%"
    assert format_percent(0) == "0.0%"


def test_format_date():
    assert format_date("2024-01-05") == "Jan 5, 2024"
    assert format_date("garbage") == "garbage"


def test_transaction_label():
    assert transaction_label("P") == "Buy"
    assert transaction_label("F") == "Tax"
    assert transaction_label("?") == "?"
