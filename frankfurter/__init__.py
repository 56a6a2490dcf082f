from frankfurter.currency_formatter import format_currency
from frankfurter.currency_registry import CurrencyRegistry
from frankfurter.datamodels import ROOT_LOCALE
from frankfurter.datamodels import Currencies
from frankfurter.datamodels import Currency
from frankfurter.datamodels import ExchangeRates
from frankfurter.datamodels import SeriesRates
from frankfurter.services.available_currencies import fetch_currency_list
from frankfurter.services.available_currencies import get_currencies
from frankfurter.services.http_client import FrankfurterError
from frankfurter.services.http_client import HttpError
from frankfurter.services.http_client import ResponseParseError
from frankfurter.services.latest_rates import LatestRates
from frankfurter.services.time_series import TimeSeries

__all__ = [
    "ROOT_LOCALE",
    "Currencies",
    "Currency",
    "CurrencyRegistry",
    "ExchangeRates",
    "FrankfurterError",
    "HttpError",
    "LatestRates",
    "ResponseParseError",
    "SeriesRates",
    "TimeSeries",
    "fetch_currency_list",
    "format_currency",
    "get_currencies",
]
