"""In-memory registry of currencies with regular expression lookups.

Every lookup treats its argument as a case-insensitive regular expression that may
match anywhere in the target ("PY" finds "JPY"), so plain symbols such as "usd" work
as exact lookups too. Lookups never raise on bad input: blank or invalid patterns
simply match nothing. Mutations raise ValueError on missing arguments.

The registry is safe to share between threads. Each operation is atomic on its own,
but no ordering is guaranteed between concurrent add/refresh/reset calls.
"""

import logging
import re
from collections.abc import Callable
from threading import Lock
from threading import RLock

from frankfurter.config import PATTERN_CACHE_SIZE
from frankfurter.datamodels import ROOT_LOCALE
from frankfurter.datamodels import Currency
from frankfurter.pattern_cache import PatternCache
from frankfurter.services.available_currencies import fetch_currency_list

logger = logging.getLogger(__name__)

DEFAULT_CURRENCIES = (
    Currency(symbol="AUD", name="Australian Dollar", locale="en_AU"),
    Currency(symbol="BGN", name="Bulgarian Lev", locale="bg_BG"),
    Currency(symbol="BRL", name="Brazilian Real", locale="pt_BR"),
    Currency(symbol="CAD", name="Canadian Dollar", locale="en_CA"),
    Currency(symbol="CHF", name="Swiss Franc", locale="de_CH"),
    Currency(symbol="CNY", name="Chinese Renminbi Yuan", locale="zh_CN"),
    Currency(symbol="CZK", name="Czech Koruna", locale="cs_CZ"),
    Currency(symbol="DKK", name="Danish Krone", locale="da_DK"),
    Currency(symbol="EUR", name="Euro", locale="de_DE"),
    Currency(symbol="GBP", name="British Pound", locale="en_GB"),
    Currency(symbol="HKD", name="Hong Kong Dollar", locale="zh_HK"),
    Currency(symbol="HUF", name="Hungarian Forint", locale="hu_HU"),
    Currency(symbol="IDR", name="Indonesian Rupiah", locale="id_ID"),
    Currency(symbol="ILS", name="Israeli New Sheqel", locale="he_IL"),
    Currency(symbol="INR", name="Indian Rupee", locale="hi_IN"),
    Currency(symbol="ISK", name="Icelandic Króna", locale="is_IS"),
    Currency(symbol="JPY", name="Japanese Yen", locale="ja_JP"),
    Currency(symbol="KRW", name="South Korean Won", locale="ko_KR"),
    Currency(symbol="MXN", name="Mexican Peso", locale="es_MX"),
    Currency(symbol="MYR", name="Malaysian Ringgit", locale="ms_MY"),
    Currency(symbol="NOK", name="Norwegian Krone", locale="nb_NO"),
    Currency(symbol="NZD", name="New Zealand Dollar", locale="en_NZ"),
    Currency(symbol="PHP", name="Philippine Peso", locale="fil_PH"),
    Currency(symbol="PLN", name="Polish Złoty", locale="pl_PL"),
    Currency(symbol="RON", name="Romanian Leu", locale="ro_RO"),
    Currency(symbol="SEK", name="Swedish Krona", locale="sv_SE"),
    Currency(symbol="SGD", name="Singapore Dollar", locale="en_SG"),
    Currency(symbol="THB", name="Thai Baht", locale="th_TH"),
    Currency(symbol="TRY", name="Turkish Lira", locale="tr_TR"),
    Currency(symbol="USD", name="United States Dollar", locale="en_US"),
    Currency(symbol="ZAR", name="South African Rand", locale="en_ZA"),
)

DEFAULT_CURRENCY_COUNT = len(DEFAULT_CURRENCIES)


class CurrencyRegistry:
    """Table of known currencies keyed by uppercase symbol.

    Use `get_instance()` for the process-wide registry, or construct an instance
    directly for an isolated table.
    """

    _instance: "CurrencyRegistry | None" = None
    _instance_lock = Lock()

    def __init__(
        self,
        pattern_cache_size: int = PATTERN_CACHE_SIZE,
        fetch_currencies: Callable[[], dict[str, str]] | None = None,
    ) -> None:
        """Create a registry seeded with the default currencies.

        Args:
            pattern_cache_size: Maximum number of compiled patterns to keep.
            fetch_currencies: Source of (symbol, name) pairs for `refresh()`.
                Defaults to the Frankfurter currency list.
        """
        self._lock = RLock()
        self._pattern_cache = PatternCache(pattern_cache_size)
        self._fetch_currencies = fetch_currencies
        self._currencies = self._default_table()

    @classmethod
    def get_instance(cls) -> "CurrencyRegistry":
        """Return the shared registry, creating it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @staticmethod
    def _default_table() -> dict[str, Currency]:
        return {currency.symbol: currency for currency in DEFAULT_CURRENCIES}

    def _snapshot(self) -> list[tuple[str, Currency]]:
        with self._lock:
            return list(self._currencies.items())

    def _compile(self, pattern: str | None) -> re.Pattern | None:
        return self._pattern_cache.get_or_compile(pattern)

    def add(self, currency: Currency | None) -> None:
        """Add a currency, replacing any existing entry with the same symbol.

        Raises:
            ValueError: If the currency or its symbol is None.
        """
        if currency is None or currency.symbol is None:
            raise ValueError("Currency and currency symbol cannot be None")
        with self._lock:
            self._currencies[currency.symbol.upper()] = currency

    def add_if_absent(self, symbol: str | None, name: str | None) -> None:
        """Add a currency without formatting locale, keeping any existing entry.

        Raises:
            ValueError: If the symbol is None.
        """
        if symbol is None:
            raise ValueError("Currency symbol cannot be None")
        upper_symbol = symbol.upper()
        with self._lock:
            self._currencies.setdefault(
                upper_symbol, Currency(symbol=upper_symbol, name=name, locale=ROOT_LOCALE)
            )

    def remove(self, symbol: str | None) -> Currency | None:
        """Remove a currency by exact symbol and return it, or None if it was not registered."""
        if symbol is None:
            raise ValueError("Currency symbol cannot be None")
        with self._lock:
            return self._currencies.pop(symbol.upper(), None)

    def contains(self, pattern: str | None) -> bool:
        regex = self._compile(pattern)
        if regex is None:
            return False
        return any(regex.search(symbol) for symbol, _ in self._snapshot())

    def __contains__(self, pattern: object) -> bool:
        return isinstance(pattern, str) and self.contains(pattern)

    def find_by_symbol(self, pattern: str | None) -> Currency | None:
        regex = self._compile(pattern)
        if regex is None:
            return None
        for symbol, currency in self._snapshot():
            if regex.search(symbol):
                return currency
        return None

    def find_by_name(self, pattern: str | None) -> Currency | None:
        regex = self._compile(pattern)
        if regex is None:
            return None
        for _, currency in self._snapshot():
            if currency.name is not None and regex.search(currency.name):
                return currency
        return None

    def search(self, pattern: str | None) -> list[Currency]:
        """Return every currency whose symbol or name matches `pattern`."""
        regex = self._compile(pattern)
        if regex is None:
            return []
        return [
            currency
            for symbol, currency in self._snapshot()
            if regex.search(symbol) or (currency.name is not None and regex.search(currency.name))
        ]

    def get_all_currencies(self) -> list[Currency]:
        return [currency for _, currency in self._snapshot()]

    def get_all_symbols(self) -> list[str]:
        return [symbol for symbol, _ in self._snapshot()]

    def size(self) -> int:
        with self._lock:
            return len(self._currencies)

    def __len__(self) -> int:
        return self.size()

    def refresh(self) -> None:
        """Update the registry from the API's currency list.

        Names of existing currencies are overwritten and their formatting locale is
        kept. New currencies are added without a formatting locale. Errors from the
        currency list fetch are not caught.
        """
        fetch_currencies = self._fetch_currencies or fetch_currency_list
        currency_map = fetch_currencies()

        with self._lock:
            for symbol, name in currency_map.items():
                existing = self._currencies.get(symbol.upper())
                locale = existing.locale if existing is not None else ROOT_LOCALE
                self.add(Currency(symbol=symbol.upper(), name=name, locale=locale))

        logger.info(f"Registry refreshed with {len(currency_map)} currencies, size is now {self.size()}")

    def reset(self) -> None:
        """Restore the default currencies and clear the pattern cache."""
        table = self._default_table()
        with self._lock:
            self._currencies = table
            self._pattern_cache.clear()
        logger.info(f"Registry reset to {DEFAULT_CURRENCY_COUNT} default currencies")

    def clear_pattern_cache(self) -> None:
        self._pattern_cache.clear()

    def pattern_cache_size(self) -> int:
        return self._pattern_cache.size()
