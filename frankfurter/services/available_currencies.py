"""Currencies supported by the Frankfurter API."""

import logging

from pydantic import TypeAdapter
from pydantic import ValidationError

from frankfurter.datamodels import Currencies
from frankfurter.services.http_client import ResponseParseError
from frankfurter.services.http_client import build_uri
from frankfurter.services.http_client import fetch_uri

logger = logging.getLogger(__name__)

CURRENCIES_URL = build_uri("currencies")

_currency_map = TypeAdapter(dict[str, str])


def fetch_currency_list() -> dict[str, str]:
    """Fetch the supported currencies and their full names.

    Returns:
        Mapping of currency symbol (e.g., "USD") to name (e.g., "United States Dollar").

    Raises:
        HttpError: If the API answers with an error status.
        FrankfurterError: If the request fails.
        ResponseParseError: If the response is not a JSON object of strings.
    """
    body = fetch_uri(CURRENCIES_URL)
    try:
        currencies = _currency_map.validate_json(body)
    except ValidationError as e:
        raise ResponseParseError(f"Invalid currency list from {CURRENCIES_URL}: {e}") from e

    logger.info(f"{len(currencies)} currencies available from {CURRENCIES_URL}")
    return currencies


def get_currencies() -> Currencies:
    return Currencies(fetch_currency_list())
