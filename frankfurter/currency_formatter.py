"""Locale-aware currency formatting."""

import logging
from decimal import Decimal

from babel import Locale
from babel import UnknownLocaleError
from babel.numbers import UnknownCurrencyError
from babel.numbers import format_currency as babel_format_currency
from babel.numbers import validate_currency

from frankfurter.config import DEFAULT_LOCALE
from frankfurter.currency_registry import CurrencyRegistry
from frankfurter.datamodels import ROOT_LOCALE
from frankfurter.symbols import normalize_symbol

logger = logging.getLogger(__name__)


def _babel_locale(identifier: str | None) -> Locale:
    if not identifier or identifier == ROOT_LOCALE:
        return Locale.parse(DEFAULT_LOCALE)
    try:
        return Locale.parse(identifier)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Unknown locale '{identifier}', using {DEFAULT_LOCALE}: {e}")
        return Locale.parse(DEFAULT_LOCALE)


def format_currency(
    symbol: str,
    amount: float | int | Decimal,
    rounded: bool = False,
    registry: CurrencyRegistry | None = None,
) -> str:
    """Format an amount in the conventions of the currency's home locale.

    Args:
        symbol: Currency symbol (e.g., "usd").
        amount: Amount to format.
        rounded: Round to the currency's standard number of digits. When False, every
            significant fraction digit of `amount` is kept.
        registry: Registry used to resolve the formatting locale. Defaults to the
            shared registry.

    Returns:
        Formatted amount (e.g., "$1,234.57").

    Raises:
        ValueError: If the symbol is invalid or is not a known currency.
    """
    normalized_symbol = normalize_symbol(symbol)
    if registry is None:
        registry = CurrencyRegistry.get_instance()

    currency = registry.find_by_symbol(normalized_symbol)
    if currency is None:
        raise ValueError(f"Unknown currency symbol: {normalized_symbol}")

    try:
        validate_currency(normalized_symbol)
    except UnknownCurrencyError as e:
        raise ValueError(f"Unknown currency symbol: {normalized_symbol}") from e

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return babel_format_currency(
        value,
        normalized_symbol,
        locale=_babel_locale(currency.locale),
        decimal_quantization=rounded,
    )
