"""HTTP transport and API error types."""
import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests
from requests import Response
from requests.exceptions import RequestException

from ..config_loader import Config
from .cache import ResponseCache

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors."""
    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (Status: {self.status_code})"
        return self.message


class ProviderUnavailable(APIError):
    """Transport or HTTP failure talking to a provider."""


class ProviderMalformedResponse(APIError):
    """A provider answered with something other than the expected JSON shape."""


def handle_api_response(response: Response, api_name: str = "API") -> Dict[str, Any]:
    """
    Handle API response and raise appropriate exceptions.

    Args:
        response: The response object from requests
        api_name: Name of the API for error messages

    Returns:
        Parsed JSON response

    Raises:
        ProviderUnavailable: If the response has an error status
        ProviderMalformedResponse: If the body is not a JSON object
    """
    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status_code = getattr(e.response, "status_code", None) or response.status_code
        error_msg = f"{api_name} request failed"
        logger.error(f"{error_msg} (Status: {status_code}): {str(e)}")
        raise ProviderUnavailable(error_msg, status_code, str(e)) from e

    try:
        data = response.json()
    except ValueError as e:
        error_msg = f"{api_name} returned invalid JSON"
        logger.error(f"{error_msg}: {response.text[:200]}...")
        raise ProviderMalformedResponse(error_msg, response.status_code, response.text) from e

    if not isinstance(data, dict):
        raise ProviderMalformedResponse(f"{api_name} returned unexpected payload", response.status_code)
    return data


def cache_key(url: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Build the signature identical requests share."""
    if not params:
        return url
    return f"{url}?{urlencode(sorted((k, str(v)) for k, v in params.items()))}"


class Transport:
    """Outbound GET requests shared by the provider clients.

    Successful JSON payloads are kept for a freshness window so identical
    requests issued shortly after each other do not hit the network again.
    Timeouts come from the configuration; there is no retry.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cache: Optional[ResponseCache] = None,
        user_agent: Optional[str] = None,
    ):
        self.timeout = Config.REQUEST_TIMEOUT if timeout is None else timeout
        if cache is None:
            cache = ResponseCache(Config.CACHE_TTL_SECONDS, Config.CACHE_MAX_ENTRIES)
        self.cache = cache
        self.headers = {
            "User-Agent": user_agent or Config.USER_AGENT,
            "Accept": "application/json",
        }

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        api_name: str = "API",
        ttl: Optional[int] = None,
        allow_not_found: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        GET ``url`` and return the decoded JSON object.

        Args:
            url: Absolute URL to request
            params: Query parameters
            api_name: Name of the API for log and error messages
            ttl: Freshness window override in seconds
            allow_not_found: Return None on HTTP 404 instead of raising

        Raises:
            ProviderUnavailable: On connection errors, timeouts and error statuses
            ProviderMalformedResponse: When the body is not a JSON object
        """
        key = cache_key(url, params)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"{api_name} cache hit: {key}")
            return json.loads(cached)

        logger.debug(f"Making request to {api_name}: {url} params={params}")
        start_time = time.time()
        try:
            response = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
        except RequestException as e:
            raise ProviderUnavailable(f"{api_name} unreachable: {str(e)}") from e
        elapsed = time.time() - start_time

        logger.info(f"{api_name} request completed in {elapsed:.2f}s - Status: {response.status_code}")

        if allow_not_found and response.status_code == 404:
            return None

        data = handle_api_response(response, api_name)
        # Stored serialized so callers never share mutable payloads
        self.cache.set(key, json.dumps(data), ttl)
        return data
