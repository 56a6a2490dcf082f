"""Exchange rates over a period of time."""

import datetime as dt
import logging

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError
from pydantic import field_validator

from frankfurter.datamodels import SeriesRates
from frankfurter.services.http_client import ResponseParseError
from frankfurter.services.http_client import build_uri
from frankfurter.services.http_client import fetch_uri
from frankfurter.services.http_client import fetch_uri_cached
from frankfurter.services.latest_rates import rates_query
from frankfurter.symbols import EUR
from frankfurter.symbols import normalize_symbol
from frankfurter.symbols import validate_date

logger = logging.getLogger(__name__)


class TimeSeries(BaseModel):
    """Request for the rates of every working day between two dates.

    Without an end date, the period runs up to the latest published rates.
    """

    model_config = ConfigDict(frozen=True)

    amount: float = 1.0
    base: str = EUR
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    symbols: tuple[str, ...] = ()

    @field_validator("base")
    @classmethod
    def _normalize_base(cls, value: str) -> str:
        return normalize_symbol(value)

    @field_validator("start_date", "end_date")
    @classmethod
    def _validate_dates(cls, value: dt.date | None) -> dt.date | None:
        if value is not None:
            validate_date(value)
        return value

    @field_validator("symbols")
    @classmethod
    def _normalize_symbols(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(normalize_symbol(symbol) for symbol in value)

    def uri(self) -> str:
        """Build the request URI.

        Raises:
            ValueError: If the start date is missing or the end date precedes it.
        """
        if self.start_date is None:
            raise ValueError("The start date is required.")

        path = f"{self.start_date.isoformat()}.."
        if self.end_date is not None:
            if self.end_date < self.start_date:
                raise ValueError("The end date must be on or after the start date.")
            path += self.end_date.isoformat()

        return build_uri(path, rates_query(self.amount, self.base, self.symbols))

    def periodic_rates(self) -> SeriesRates:
        """Fetch the exchange rates for the period.

        Returns:
            SeriesRates keyed by date.

        Raises:
            ValueError: If the start date is missing or the end date precedes it.
            HttpError: If the API answers with an error status.
            FrankfurterError: If the request fails.
            ResponseParseError: If the response cannot be parsed.
        """
        uri = self.uri()
        if self.end_date is not None and self.end_date < dt.date.today():
            body = fetch_uri_cached(uri)
        else:
            body = fetch_uri(uri)

        try:
            rates = SeriesRates.model_validate_json(body)
        except ValidationError as e:
            raise ResponseParseError(f"Invalid series rates from {uri}: {e}") from e

        logger.info(f"{len(rates.rates)} days of rates for {rates.base} from {rates.start_date} to {rates.end_date}")
        return rates
