"""HTTP transport for the Frankfurter API."""

import logging
from collections.abc import Mapping
from urllib.parse import urlencode

import requests
from joblib import Memory
from pydantic import ValidationError

from frankfurter.config import API_BASE_URL
from frankfurter.config import CACHE_DIR
from frankfurter.config import CONNECT_TIMEOUT
from frankfurter.config import READ_TIMEOUT
from frankfurter.datamodels import ApiErrorBody

logger = logging.getLogger(__name__)

memory = Memory(CACHE_DIR / "frankfurter_responses", verbose=0)


class FrankfurterError(Exception):
    """Raised when a request to the Frankfurter API fails."""


class HttpError(FrankfurterError):
    """Raised when the API answers with a non-200 status code."""

    def __init__(self, status_code: int, message: str, uri: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.uri = uri

    def __str__(self) -> str:
        return f"HTTP {self.status_code} for {self.uri}: {self.args[0]}"


class ResponseParseError(FrankfurterError):
    """Raised when an API response does not match the expected format."""


def build_uri(path: str | None = None, query: Mapping[str, str] | None = None) -> str:
    """Build an API URI from a path and query parameters.

    Args:
        path: Path relative to the API base URL (e.g., "latest").
        query: Query parameters, encoded in iteration order.

    Returns:
        The full request URI.
    """
    uri = API_BASE_URL
    if path and path.strip():
        uri += path
    if query:
        uri += "?" + urlencode(query)
    return uri


def _error_message(response: requests.Response) -> str:
    body = response.text
    if not body:
        return response.reason or "No error message provided"
    try:
        error = ApiErrorBody.model_validate_json(body)
    except ValidationError:
        return response.reason or "Unable to parse error message"
    return error.message or response.reason or "No error message provided"


def fetch_uri(uri: str) -> str:
    """Fetch a URI and return the response body.

    Args:
        uri: Full request URI.

    Returns:
        Response body decoded as UTF-8.

    Raises:
        HttpError: If the API answers with a status other than 200.
        FrankfurterError: If the request cannot be completed.
    """
    logger.debug(f"GET {uri}")
    try:
        response = requests.get(
            uri,
            headers={"Accept": "application/json"},
            timeout=(CONNECT_TIMEOUT, READ_TIMEOUT),
            allow_redirects=True,
        )
    except requests.RequestException as e:
        logger.error(f"Request to {uri} failed: {e}")
        raise FrankfurterError(f"Request to {uri} failed: {e}") from e

    response.encoding = "utf-8"
    if response.status_code != 200:
        error = HttpError(response.status_code, _error_message(response), uri)
        logger.error(str(error))
        raise error

    return response.text


@memory.cache
def fetch_uri_cached(uri: str) -> str:
    """Cached fetch for responses that can no longer change (past dates only).

    Args:
        uri: Full request URI (cache key).

    Returns:
        Response body.
    """
    return fetch_uri(uri)
