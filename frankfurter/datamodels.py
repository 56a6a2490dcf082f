"""Data models for the Frankfurter API client."""

import datetime as dt
import re
from collections.abc import Iterator

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import RootModel

from frankfurter.symbols import normalize_symbol

# Locale marker for currencies added without formatting information
ROOT_LOCALE = "root"


class Currency(BaseModel):
    """Represents a currency known to the registry."""

    model_config = ConfigDict(frozen=True)

    symbol: str | None
    name: str | None = None
    locale: str | None = ROOT_LOCALE


class ApiErrorBody(BaseModel):
    """Represents an error payload returned by the API."""

    message: str | None = None


class ExchangeRates(BaseModel):
    """Represents the rates for a single day."""

    model_config = ConfigDict(frozen=True)

    amount: float
    base: str
    date: dt.date
    rates: dict[str, float]

    def has_rate_for(self, symbol: str) -> bool:
        return symbol in self.rates

    def rate_for(self, symbol: str | None) -> float | None:
        """Return the rate for a currency symbol, or None if absent.

        Raises:
            ValueError: If the symbol is not three letters.
        """
        if symbol is None or not symbol.strip():
            return None
        return self.rates.get(normalize_symbol(symbol))

    def symbols(self) -> set[str]:
        return set(self.rates)


class SeriesRates(BaseModel):
    """Represents the rates for each working day of a period."""

    model_config = ConfigDict(frozen=True)

    amount: float
    base: str
    start_date: str
    end_date: str
    rates: dict[dt.date, dict[str, float]]

    def dates(self) -> set[dt.date]:
        return set(self.rates)

    def start_local_date(self) -> dt.date:
        return dt.date.fromisoformat(self.start_date)

    def end_local_date(self) -> dt.date:
        return dt.date.fromisoformat(self.end_date)

    def has_rates_for(self, date: dt.date) -> bool:
        return date in self.rates

    def has_symbol_for(self, date: dt.date | None, symbol: str | None) -> bool:
        if date is None or symbol is None or not symbol.strip() or date not in self.rates:
            return False
        return normalize_symbol(symbol) in self.rates[date]

    def rate_for(self, date: dt.date | None, symbol: str | None) -> float | None:
        if date is None or symbol is None or not symbol.strip() or date not in self.rates:
            return None
        return self.rates[date].get(normalize_symbol(symbol))

    def rates_for(self, date: dt.date | None) -> dict[str, float]:
        if date is None or date not in self.rates:
            return {}
        return dict(self.rates[date])


class Currencies(RootModel[dict[str, str]]):
    """Represents the currencies supported by the API, keyed by symbol."""

    def __getitem__(self, symbol: str) -> str:
        return self.root[symbol]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.root

    def __iter__(self) -> Iterator[str]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def items(self):
        return self.root.items()

    def get_full_name_for(self, symbol: str | None) -> str | None:
        if symbol is None or not symbol.strip():
            return None
        return self.root.get(normalize_symbol(symbol))

    def get_symbol_for(self, name: str | None) -> str | None:
        """Return the symbol whose full name equals `name`, ignoring case."""
        if name is None or not name.strip():
            return None
        for symbol, full_name in self.root.items():
            if full_name.casefold() == name.casefold():
                return symbol
        return None

    def get_symbol_for_pattern(self, pattern: re.Pattern | None) -> str | None:
        """Return the first symbol whose full name matches `pattern` entirely."""
        if pattern is None:
            return None
        for symbol, full_name in self.root.items():
            if pattern.fullmatch(full_name):
                return symbol
        return None
