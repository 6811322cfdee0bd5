"""Shared HTTP plumbing for the upstream fetchers."""

import logging
from collections.abc import Callable
from datetime import date, timedelta

import httpx

from finaid_data.config import Settings
from finaid_data.data.cache import TTLCache
from finaid_data.data.errors import UpstreamHTTPError


logger = logging.getLogger(__name__)


class BaseFetcher:
    """Lazy httpx client, a private TTL cache and status checking.

    Subclasses set BASE_URL, SOURCE and CACHE_TTL.
    """

    BASE_URL = ""
    SOURCE = ""
    CACHE_TTL = timedelta(hours=1)

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        cache: TTLCache | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or Settings()
        self.cache = cache if cache is not None else TTLCache(self.CACHE_TTL)
        self.today = today
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.http_timeout)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "BaseFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def clear_cache(self) -> None:
        self.cache.clear()

    def _get_json(self, path: str, params: dict) -> dict:
        """GET BASE_URL + path and decode the JSON body.

        Raises:
            UpstreamHTTPError: on any non-2xx response
        """
        request = self.client.build_request("GET", f"{self.BASE_URL}{path}", params=params)
        logger.debug(f"GET {_redact(request.url)}")

        response = self.client.send(request)
        if not response.is_success:
            logger.error(f"{self.SOURCE} API error: {response.status_code} - {response.text}")
            raise UpstreamHTTPError(self.SOURCE, response.status_code, response.text)

        return response.json()


def _redact(url: httpx.URL) -> str:
    """Mask the API key in a URL before it is logged."""
    if "api_key" in url.params:
        url = url.copy_set_param("api_key", "***")
    return str(url)
