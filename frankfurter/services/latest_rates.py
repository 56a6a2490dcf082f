"""Latest and historical exchange rates."""

import datetime as dt
import logging

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError
from pydantic import field_validator

from frankfurter.datamodels import ExchangeRates
from frankfurter.services.http_client import ResponseParseError
from frankfurter.services.http_client import build_uri
from frankfurter.services.http_client import fetch_uri
from frankfurter.services.http_client import fetch_uri_cached
from frankfurter.symbols import EUR
from frankfurter.symbols import normalize_symbol
from frankfurter.symbols import validate_date

logger = logging.getLogger(__name__)


def rates_query(amount: float, base: str, symbols: tuple[str, ...]) -> dict[str, str]:
    """Build the query parameters shared by rate requests, sorted by key.

    Defaults (an amount of 1, a EUR base, all symbols) are left out of the query.
    """
    query = {}
    if amount > 1.0:
        query["amount"] = str(amount)
    if base != EUR:
        query["base"] = base
    if symbols:
        query["symbols"] = ",".join(symbols)
    return dict(sorted(query.items()))


class LatestRates(BaseModel):
    """Request for the rates of the last working day, or of a given date."""

    model_config = ConfigDict(frozen=True)

    amount: float = 1.0
    base: str = EUR
    date: dt.date | None = None
    symbols: tuple[str, ...] = ()

    @field_validator("base")
    @classmethod
    def _normalize_base(cls, value: str) -> str:
        return normalize_symbol(value)

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: dt.date | None) -> dt.date | None:
        if value is not None:
            validate_date(value)
        return value

    @field_validator("symbols")
    @classmethod
    def _normalize_symbols(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(normalize_symbol(symbol) for symbol in value)

    def uri(self) -> str:
        path = self.date.isoformat() if self.date is not None else "latest"
        return build_uri(path, rates_query(self.amount, self.base, self.symbols))

    def exchange_rates(self) -> ExchangeRates:
        """Fetch the exchange rates.

        Returns:
            ExchangeRates for the requested (or latest) date.

        Raises:
            HttpError: If the API answers with an error status.
            FrankfurterError: If the request fails.
            ResponseParseError: If the response cannot be parsed.
        """
        uri = self.uri()
        if self.date is not None and self.date < dt.date.today():
            body = fetch_uri_cached(uri)
        else:
            body = fetch_uri(uri)

        try:
            rates = ExchangeRates.model_validate_json(body)
        except ValidationError as e:
            raise ResponseParseError(f"Invalid exchange rates from {uri}: {e}") from e

        logger.info(f"{len(rates.rates)} rates for {rates.amount} {rates.base} on {rates.date}")
        return rates
