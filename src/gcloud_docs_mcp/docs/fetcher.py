"""
HTTP fetch adapter for documentation pages and search probes
"""

import logging
from typing import Optional

import httpx

from ..config import Settings
from ..exceptions import FetchError
from .models import FetchedPage

logger = logging.getLogger(__name__)


def browser_headers(user_agent: str) -> dict[str, str]:
    """Header set that mimics a desktop browser"""
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }


class DocsFetcher:
    """
    GET with a per-request timeout and browser-like headers.

    A shared ``httpx.AsyncClient`` may be injected; otherwise a short-lived
    client is opened for every request.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = client
        self._headers = browser_headers(settings.user_agent)

    async def get(
        self,
        url: str,
        timeout: Optional[float] = None,
        params: Optional[dict[str, str]] = None,
    ) -> FetchedPage:
        """
        Fetch ``url`` and return its status and body.

        Non-2xx responses are returned, not raised.

        Raises:
            FetchError: On timeout or any transport-level failure.
        """
        timeout = self.settings.page_timeout if timeout is None else timeout
        logger.debug(f"GET {url} (timeout={timeout}s)")

        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params=params, headers=self._headers, timeout=timeout
                )
            else:
                async with httpx.AsyncClient(
                    headers=self._headers, timeout=timeout, follow_redirects=True
                ) as client:
                    response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {timeout}s fetching {url}")
            raise FetchError(f"Request timed out after {timeout:g}s", url) from e
        except httpx.HTTPError as e:
            logger.warning(f"Request error fetching {url}: {e}")
            raise FetchError(str(e) or type(e).__name__, url) from e

        logger.debug(f"Fetched {len(response.text)} chars from {url} (HTTP {response.status_code})")
        return FetchedPage(url=url, status_code=response.status_code, text=response.text)
