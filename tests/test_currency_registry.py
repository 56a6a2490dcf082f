"""Tests for the currency registry."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from frankfurter.currency_registry import DEFAULT_CURRENCIES
from frankfurter.currency_registry import DEFAULT_CURRENCY_COUNT
from frankfurter.currency_registry import CurrencyRegistry
from frankfurter.datamodels import ROOT_LOCALE
from frankfurter.datamodels import Currency
from frankfurter.services.http_client import HttpError

DOLLAR_SYMBOLS = {"AUD", "CAD", "HKD", "NZD", "SGD", "USD"}
DEFAULT_SYMBOLS = [currency.symbol for currency in DEFAULT_CURRENCIES]
UNUSABLE_PATTERNS = ["a{4294967296}", "x{1,99999999999}", "(" * 2000 + ")" * 2000]


def test_default_currencies(registry: CurrencyRegistry):
    """Test that a new registry holds the 31 default currencies."""
    assert DEFAULT_CURRENCY_COUNT == 31
    assert registry.size() == 31
    assert len(registry) == 31
    assert set(registry.get_all_symbols()) == set(DEFAULT_SYMBOLS)
    assert registry.find_by_symbol("EUR") == Currency(symbol="EUR", name="Euro", locale="de_DE")


def test_get_instance_returns_shared_registry():
    """Test that the shared registry is created once."""
    assert CurrencyRegistry.get_instance() is CurrencyRegistry.get_instance()
    assert CurrencyRegistry.get_instance() is not CurrencyRegistry()


def test_get_instance_is_thread_safe():
    """Test that racing first calls all receive the same registry."""
    with patch.object(CurrencyRegistry, "_instance", None):
        with ThreadPoolExecutor(max_workers=8) as executor:
            instances = list(executor.map(lambda _: CurrencyRegistry.get_instance(), range(32)))

        assert all(instance is instances[0] for instance in instances)


def test_add_currency(registry: CurrencyRegistry):
    """Test adding a new currency."""
    size = registry.size()

    registry.add(Currency(symbol="FMD", name="Fake Money Dollar", locale="en_CA"))

    assert registry.size() == size + 1
    fmd = registry.find_by_symbol("FMD")
    assert fmd.symbol == "FMD"
    assert fmd.name == "Fake Money Dollar"
    assert fmd.locale == "en_CA"
    assert registry.find_by_symbol("fmd") == fmd


def test_add_lowercase_symbol_is_keyed_uppercase(registry: CurrencyRegistry):
    """Test that the registry key is the uppercased symbol."""
    registry.add(Currency(symbol="fmd", name="Fake Money Dollar", locale="en_CA"))

    assert "FMD" in registry.get_all_symbols()
    assert "fmd" not in registry.get_all_symbols()


def test_add_replaces_existing_currency(registry: CurrencyRegistry):
    """Test that adding a record overwrites the existing entry."""
    registry.add(Currency(symbol="USD", name="US Dollar", locale="en_US"))

    assert registry.size() == DEFAULT_CURRENCY_COUNT
    assert registry.find_by_symbol("USD").name == "US Dollar"


def test_add_if_absent_keeps_existing_currency(registry: CurrencyRegistry):
    """Test that adding by symbol and name never overwrites."""
    registry.add_if_absent("USD", "US Dollar")

    assert registry.size() == DEFAULT_CURRENCY_COUNT
    assert registry.find_by_symbol("USD").name == "United States Dollar"


def test_add_if_absent_new_currency(registry: CurrencyRegistry):
    """Test adding a currency by symbol and name."""
    registry.add_if_absent("fmd", "Fake Money Dollar")

    assert registry.size() == DEFAULT_CURRENCY_COUNT + 1
    assert registry.find_by_symbol("FMD") == Currency(symbol="FMD", name="Fake Money Dollar", locale=ROOT_LOCALE)


def test_add_none_currency(registry: CurrencyRegistry):
    """Test that a missing currency is rejected."""
    with pytest.raises(ValueError):
        registry.add(None)


def test_add_currency_with_none_symbol(registry: CurrencyRegistry):
    """Test that a currency without symbol is rejected."""
    with pytest.raises(ValueError):
        registry.add(Currency(symbol=None, name=None, locale=None))


def test_add_if_absent_none_symbol(registry: CurrencyRegistry):
    """Test that a missing symbol is rejected."""
    with pytest.raises(ValueError):
        registry.add_if_absent(None, None)


def test_remove(registry: CurrencyRegistry):
    """Test removing a currency by symbol."""
    removed = registry.remove("usd")

    assert removed.symbol == "USD"
    assert registry.size() == DEFAULT_CURRENCY_COUNT - 1
    assert registry.find_by_symbol("USD") is None
    assert registry.remove("USD") is None


def test_remove_none_symbol(registry: CurrencyRegistry):
    """Test that removing without symbol is rejected."""
    with pytest.raises(ValueError):
        registry.remove(None)


@pytest.mark.parametrize("symbol", DEFAULT_SYMBOLS)
def test_find_by_symbol_ignores_case(registry: CurrencyRegistry, symbol: str):
    """Test that every default symbol is found in any case."""
    expected = registry.find_by_symbol(symbol)
    mixed = symbol[0].lower() + symbol[1:]

    assert expected is not None
    assert expected.symbol == symbol
    assert registry.find_by_symbol(symbol.lower()) == expected
    assert registry.find_by_symbol(mixed) == expected


def test_find_by_symbol_substring(registry: CurrencyRegistry):
    """Test that patterns match anywhere in the symbol."""
    assert registry.find_by_symbol("PY").symbol == "JPY"
    assert registry.find_by_symbol("^Z").symbol == "ZAR"


@pytest.mark.parametrize("pattern", ["XYZ", "FOO", "USDX"])
def test_find_by_symbol_no_match(registry: CurrencyRegistry, pattern: str):
    """Test that unknown symbols are not found."""
    assert registry.find_by_symbol(pattern) is None


def test_find_by_name(registry: CurrencyRegistry):
    """Test finding currencies by name."""
    assert registry.find_by_name("United States Dollar").symbol == "USD"
    assert registry.find_by_name("United STATES dollar").symbol == "USD"
    assert registry.find_by_name(".*Japan.*").symbol == "JPY"
    assert registry.find_by_name("Króna").symbol == "ISK"
    assert registry.find_by_name("NotARealCurrencyName") is None


def test_find_by_name_skips_currencies_without_name(registry: CurrencyRegistry):
    """Test that currencies without a name never match a name lookup."""
    registry.add(Currency(symbol="NON", name=None, locale=ROOT_LOCALE))

    assert registry.find_by_name("NON") is None
    assert registry.find_by_symbol("NON").name is None


def test_contains(registry: CurrencyRegistry):
    """Test matching symbols with literal and regular expression patterns."""
    assert registry.contains("USD")
    assert registry.contains("eur")
    assert registry.contains("^[A-C]")
    assert registry.contains("S.D")
    assert "gbp" in registry
    assert not registry.contains("XYZ")
    assert 42 not in registry


def test_contains_does_not_match_names(registry: CurrencyRegistry):
    """Test that contains only looks at symbols."""
    assert not registry.contains("Dollar")


@pytest.mark.parametrize(
    "pattern",
    [None, "", " ", "(", "[", "*"] + UNUSABLE_PATTERNS,
)
def test_lookups_never_raise(registry: CurrencyRegistry, pattern):
    """Test that blank and invalid patterns match nothing."""
    assert registry.contains(pattern) is False
    assert registry.find_by_symbol(pattern) is None
    assert registry.find_by_name(pattern) is None
    assert registry.search(pattern) == []


def test_search_by_name(registry: CurrencyRegistry):
    """Test that searching by name returns every dollar currency."""
    results = registry.search("Dollar")

    assert len(results) == 6
    assert {currency.symbol for currency in results} == DOLLAR_SYMBOLS


def test_search_by_name_with_regex(registry: CurrencyRegistry):
    """Test searching with a regular expression over names."""
    results = registry.search(".*dollar$")

    assert {currency.symbol for currency in results} == DOLLAR_SYMBOLS


def test_search_by_symbol(registry: CurrencyRegistry):
    """Test searching with a symbol."""
    results = registry.search("NZD")

    assert len(results) == 1
    assert results[0].symbol == "NZD"


def test_search_by_symbol_with_regex(registry: CurrencyRegistry):
    """Test searching with a regular expression over symbols."""
    results = registry.search("^[A-Z]{2}D$")

    assert {currency.symbol for currency in results} == DOLLAR_SYMBOLS


def test_search_matches_symbol_or_name(registry: CurrencyRegistry):
    """Test that search returns the union of symbol and name matches."""
    results = {currency.symbol for currency in registry.search("EUR|Yen")}

    assert results == {"EUR", "JPY"}


def test_search_is_superset_of_finds(registry: CurrencyRegistry):
    """Test that search includes the first symbol and name matches."""
    for pattern in ["Dollar", "K", "^S", "Krone"]:
        results = registry.search(pattern)
        for found in (registry.find_by_symbol(pattern), registry.find_by_name(pattern)):
            if found is not None:
                assert found in results


def test_search_without_match(registry: CurrencyRegistry):
    """Test that a search without matches returns an empty list."""
    assert registry.search("NotARealCurrencyName") == []


def test_snapshots_are_independent(registry: CurrencyRegistry):
    """Test that returned lists do not expose the registry table."""
    currencies = registry.get_all_currencies()
    symbols = registry.get_all_symbols()

    currencies.clear()
    symbols.append("FMD")

    assert registry.size() == DEFAULT_CURRENCY_COUNT
    assert len(registry.get_all_currencies()) == DEFAULT_CURRENCY_COUNT
    assert "FMD" not in registry.get_all_symbols()


def test_reset_restores_defaults(registry: CurrencyRegistry):
    """Test that reset restores exactly the default currencies and clears the pattern cache."""
    registry.add(Currency(symbol="FMD", name="Fake Money Dollar", locale="en_CA"))
    registry.add(Currency(symbol="USD", name="US Dollar", locale="en_US"))
    registry.remove("EUR")
    registry.search("Dollar")

    registry.reset()

    assert registry.size() == DEFAULT_CURRENCY_COUNT
    assert registry.pattern_cache_size() == 0
    assert set(registry.get_all_currencies()) == set(DEFAULT_CURRENCIES)

    registry.reset()
    assert registry.size() == DEFAULT_CURRENCY_COUNT


def test_pattern_cache_size(registry: CurrencyRegistry):
    """Test that the pattern cache is bounded."""
    registry.clear_pattern_cache()

    for i in range(50):
        registry.contains(f"^X{i}")
    assert registry.pattern_cache_size() == 50

    for i in range(50, 60):
        registry.find_by_name(f"^X{i}")
    assert registry.pattern_cache_size() == 50

    registry.clear_pattern_cache()
    assert registry.pattern_cache_size() == 0


def test_pattern_cache_clear(registry: CurrencyRegistry):
    """Test that lookups still work after the pattern cache is cleared."""
    assert registry.contains("USD")
    assert registry.pattern_cache_size() == 1

    registry.clear_pattern_cache()
    assert registry.pattern_cache_size() == 0

    assert registry.find_by_symbol("USD").name == "United States Dollar"
    assert registry.pattern_cache_size() == 1


def test_custom_pattern_cache_size():
    """Test that the pattern cache capacity can be configured per registry."""
    registry = CurrencyRegistry(pattern_cache_size=2)

    for pattern in ["USD", "EUR", "GBP"]:
        registry.contains(pattern)

    assert registry.pattern_cache_size() == 2


def test_invalid_patterns_are_not_cached(registry: CurrencyRegistry):
    """Test that invalid patterns do not occupy the pattern cache."""
    registry.search("(")
    registry.contains(" ")

    assert registry.pattern_cache_size() == 0


def test_refresh_overwrites_names():
    """Test that refresh updates names, keeps locales and adds new currencies."""
    registry = CurrencyRegistry(fetch_currencies=lambda: {"USD": "US Dollar", "XAU": "Gold"})

    registry.refresh()

    assert registry.size() == DEFAULT_CURRENCY_COUNT + 1
    assert registry.find_by_symbol("USD") == Currency(symbol="USD", name="US Dollar", locale="en_US")
    assert registry.find_by_symbol("XAU") == Currency(symbol="XAU", name="Gold", locale=ROOT_LOCALE)

    registry.reset()
    assert registry.size() == DEFAULT_CURRENCY_COUNT
    assert registry.find_by_symbol("USD").name == "United States Dollar"


@patch("frankfurter.currency_registry.fetch_currency_list")
def test_refresh_uses_api_currency_list(mock_fetch_currency_list, registry: CurrencyRegistry):
    """Test that refresh fetches the API currency list by default."""
    mock_fetch_currency_list.return_value = {"eur": "Euro (EMU)"}

    registry.refresh()

    mock_fetch_currency_list.assert_called_once()
    assert registry.find_by_symbol("EUR").name == "Euro (EMU)"
    assert registry.size() == DEFAULT_CURRENCY_COUNT


def test_refresh_error_propagates():
    """Test that fetch errors are raised unchanged and leave the registry intact."""
    error = HttpError(503, "Service Unavailable", "https://api.frankfurter.dev/v1/currencies")

    def failing_fetch():
        raise error

    registry = CurrencyRegistry(fetch_currencies=failing_fetch)

    with pytest.raises(HttpError) as exc_info:
        registry.refresh()

    assert exc_info.value is error
    assert registry.size() == DEFAULT_CURRENCY_COUNT


def test_concurrent_reads_and_writes(registry: CurrencyRegistry):
    """Test that concurrent mutations and lookups do not interfere."""
    symbols = [f"Q{chr(65 + i // 26)}{chr(65 + i % 26)}" for i in range(200)]

    def add(symbol: str) -> None:
        registry.add(Currency(symbol=symbol, name=f"Test {symbol}", locale=ROOT_LOCALE))

    def lookup(i: int) -> int:
        registry.find_by_symbol("USD")
        registry.contains(f"^Q{i}")
        return len(registry.search("Dollar"))

    with ThreadPoolExecutor(max_workers=8) as executor:
        adds = [executor.submit(add, symbol) for symbol in symbols]
        lookups = [executor.submit(lookup, i) for i in range(200)]
        for future in adds:
            future.result()
        dollar_counts = [future.result() for future in lookups]

    assert registry.size() == DEFAULT_CURRENCY_COUNT + len(symbols)
    assert registry.pattern_cache_size() <= 50
    assert all(count >= 6 for count in dollar_counts)


def test_reset_is_atomic_for_size_observers(registry: CurrencyRegistry):
    """Test that size never shows a partially reset registry."""
    for i in range(100):
        registry.add(Currency(symbol=f"R{i:02d}", name=f"Reset {i}", locale=ROOT_LOCALE))

    def reset() -> None:
        for _ in range(50):
            registry.reset()

    def observe() -> set[int]:
        return {registry.size() for _ in range(500)}

    with ThreadPoolExecutor(max_workers=2) as executor:
        observed = executor.submit(observe)
        executor.submit(reset).result()
        sizes = observed.result()

    assert sizes <= {DEFAULT_CURRENCY_COUNT, DEFAULT_CURRENCY_COUNT + 100}
