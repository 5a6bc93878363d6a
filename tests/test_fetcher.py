"""
Tests for the HTTP fetch adapter

``respx`` patches ``httpx`` at the transport layer so no real network calls
are made.
"""

import httpx
import pytest
import respx

from gcloud_docs_mcp.config import DEFAULT_USER_AGENT
from gcloud_docs_mcp.docs.fetcher import DocsFetcher, browser_headers
from gcloud_docs_mcp.exceptions import DocsError, FetchError

PAGE_URL = "https://cloud.google.com/run/docs/deploying"


@pytest.fixture
def docs_fetcher(settings):
    return DocsFetcher(settings)


def test_browser_headers():
    headers = browser_headers("agent/1.0")

    assert headers["User-Agent"] == "agent/1.0"
    assert headers["Accept"].startswith("text/html")
    assert headers["Accept-Language"] == "en-US,en;q=0.5"


@pytest.mark.asyncio
async def test_successful_fetch(docs_fetcher):
    with respx.mock:
        route = respx.get(PAGE_URL).mock(
            return_value=httpx.Response(200, text="<html>Deploying</html>")
        )
        page = await docs_fetcher.get(PAGE_URL)

    assert page.url == PAGE_URL
    assert page.status_code == 200
    assert page.ok is True
    assert page.text == "<html>Deploying</html>"
    assert route.calls.last.request.headers["User-Agent"] == DEFAULT_USER_AGENT


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised(docs_fetcher):
    with respx.mock:
        respx.get(PAGE_URL).mock(return_value=httpx.Response(404, text="Not Found"))
        page = await docs_fetcher.get(PAGE_URL)

    assert page.status_code == 404
    assert page.ok is False


@pytest.mark.asyncio
async def test_query_params_are_sent(docs_fetcher):
    with respx.mock:
        route = respx.get(host="www.google.com", path="/search").mock(
            return_value=httpx.Response(200, text="")
        )
        await docs_fetcher.get(
            "https://www.google.com/search",
            params={"q": "site:cloud.google.com vpc peering", "num": "10"},
        )

    params = route.calls.last.request.url.params
    assert params["q"] == "site:cloud.google.com vpc peering"
    assert params["num"] == "10"


@pytest.mark.asyncio
async def test_timeout_raises_fetch_error(docs_fetcher):
    with respx.mock:
        respx.get(PAGE_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))
        with pytest.raises(FetchError, match="Request timed out after 3s") as exc_info:
            await docs_fetcher.get(PAGE_URL, timeout=3)

    assert exc_info.value.url == PAGE_URL
    assert isinstance(exc_info.value, DocsError)


@pytest.mark.asyncio
async def test_connection_error_raises_fetch_error(docs_fetcher):
    with respx.mock:
        respx.get(PAGE_URL).mock(side_effect=httpx.ConnectError("connection refused"))
        with pytest.raises(FetchError, match="connection refused"):
            await docs_fetcher.get(PAGE_URL)


@pytest.mark.asyncio
async def test_injected_client_is_used(settings):
    with respx.mock:
        route = respx.get(PAGE_URL).mock(return_value=httpx.Response(200, text="shared"))
        async with httpx.AsyncClient() as client:
            page = await DocsFetcher(settings, client=client).get(PAGE_URL)

    assert page.text == "shared"
    assert route.calls.last.request.headers["Accept-Language"] == "en-US,en;q=0.5"
