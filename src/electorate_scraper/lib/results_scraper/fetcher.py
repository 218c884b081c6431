"""HTTP client for the election results source.

Wraps one ``httpx.AsyncClient`` that sends a browser-like header set. Every
request is made exactly once; anything other than HTTP 200 is a failure.
"""

from typing import Any

import httpx
from loguru import logger

from electorate_scraper.core.config import DEFAULT_USER_AGENT
from electorate_scraper.lib.results_scraper.endpoints import ABC_BASE_URL

JSON_ACCEPT = "application/json, text/plain, */*"
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


class FetchError(Exception):
    """Raised when fetching from the results source fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def build_headers(user_agent: str = DEFAULT_USER_AGENT, referer: str | None = None) -> dict[str, str]:
    """Browser-like default headers sent with every request."""
    return {
        "User-Agent": user_agent,
        "Accept": JSON_ACCEPT,
        "Accept-Language": "en-AU,en;q=0.9",
        "DNT": "1",
        "Referer": referer or f"{ABC_BASE_URL}/news/elections",
    }


class ResultsFetcher:
    """Issues GET requests against the results source.

    Args:
        client: Optional pre-configured client. When omitted the fetcher owns
            a new client and closes it in :meth:`aclose`.
        user_agent: ``User-Agent`` header for an owned client.
        timeout: Per-request timeout in seconds for an owned client.
        referer: ``Referer`` header for an owned client.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        referer: str | None = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                headers=build_headers(user_agent, referer),
                timeout=timeout,
                follow_redirects=True,
            )
        self._client = client

    async def __aenter__(self) -> "ResultsFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, url: str, accept: str) -> httpx.Response:
        try:
            logger.debug("GET {}", url)
            response = await self._client.get(url, headers={"Accept": accept})
        except httpx.TimeoutException as exc:
            msg = f"Timeout fetching {url}"
            raise FetchError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"HTTP error fetching {url}: {exc}"
            raise FetchError(msg) from exc

        if response.status_code != httpx.codes.OK:
            msg = f"HTTP {response.status_code} fetching {url}"
            raise FetchError(msg, status_code=response.status_code)
        return response

    async def get_json(self, url: str) -> Any:
        """Fetch ``url`` and decode the body as JSON.

        Raises:
            FetchError: On transport errors, non-200 status or invalid JSON.
        """
        response = await self._get(url, JSON_ACCEPT)
        try:
            return response.json()
        except ValueError as exc:
            msg = f"Invalid JSON response from {url}"
            raise FetchError(msg, status_code=response.status_code) from exc

    async def get_text(self, url: str) -> str:
        """Fetch ``url`` and return the decoded body (HTML pages).

        Raises:
            FetchError: On transport errors or non-200 status.
        """
        response = await self._get(url, HTML_ACCEPT)
        return response.text
