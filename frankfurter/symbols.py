"""Currency symbol and date validation."""

import datetime as dt
import re

EUR = "EUR"

# Earliest date for which the API publishes rates
MIN_DATE = dt.date(1994, 1, 4)

_SYMBOL_RE = re.compile(r"[a-zA-Z]{3}")


def is_valid_symbol(symbol: str | None) -> bool:
    """Check whether a symbol is made of exactly three ASCII letters."""
    return symbol is not None and _SYMBOL_RE.fullmatch(symbol) is not None


def normalize_symbol(symbol: str | None) -> str:
    """Validate and uppercase a currency symbol.

    Args:
        symbol: Currency symbol (e.g., "usd").

    Returns:
        The uppercased symbol (e.g., "USD").

    Raises:
        ValueError: If the symbol is not exactly three letters.
    """
    if not is_valid_symbol(symbol):
        raise ValueError(f"Invalid currency symbol: {symbol}")
    return symbol.upper()


def validate_date(date: dt.date | None) -> None:
    """Ensure a date is set and not earlier than the first published rates.

    Raises:
        ValueError: If the date is missing or before 1994-01-04.
    """
    if date is None:
        raise ValueError("A valid date is required.")
    if date < MIN_DATE:
        raise ValueError(f"Dates prior to 1994-01-04 are not supported: {date}")
