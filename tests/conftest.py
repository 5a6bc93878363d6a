"""
Shared fixtures for the Google Cloud docs MCP server tests
"""

from typing import Optional, Union

import pytest

from gcloud_docs_mcp.config import Settings
from gcloud_docs_mcp.docs.models import FetchedPage
from gcloud_docs_mcp.docs.service import DocsService
from gcloud_docs_mcp.exceptions import FetchError
from gcloud_docs_mcp.tools import gcloud_docs

BASE_URL = "https://cloud.google.com"


class FakeFetcher:
    """In-memory stand-in for DocsFetcher keyed by exact URL"""

    def __init__(self, pages: Optional[dict[str, Union[FetchedPage, Exception, str]]] = None):
        self.pages = pages or {}
        self.calls: list[tuple[str, Optional[dict]]] = []

    def add(self, url: str, html: str, status_code: int = 200):
        self.pages[url] = FetchedPage(url=url, status_code=status_code, text=html)

    async def get(self, url: str, timeout: Optional[float] = None, params: Optional[dict] = None):
        self.calls.append((url, params))
        page = self.pages.get(url)
        if page is None:
            return FetchedPage(url=url, status_code=404, text="Not Found")
        if isinstance(page, Exception):
            raise page
        if isinstance(page, str):
            return FetchedPage(url=url, status_code=200, text=page)
        return page

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def article(title: str, body: str) -> str:
    """A minimal documentation page with the usual site chrome"""
    return f"""<html><head><title>{title} | Google Cloud</title></head>
<body>
  <header><a href="/">Home</a></header>
  <nav class="devsite-nav"><a href="/docs">Documentation</a></nav>
  <article>
    <div class="devsite-article-body">
      <h1>{title}</h1>
      {body}
    </div>
  </article>
  <footer>Footer links and legal text</footer>
</body></html>"""


@pytest.fixture
def settings():
    """Settings with live search probes disabled"""
    return Settings(
        docs_base_url=BASE_URL,
        page_timeout=5,
        search_timeout=5,
        max_content_chars=20000,
        web_search_enabled=False,
        site_search_enabled=False,
    )


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def service(settings, fetcher):
    return DocsService(settings=settings, fetcher=fetcher)


@pytest.fixture
def docs_service(service):
    """Install ``service`` as the process-wide service used by the tools"""
    gcloud_docs.set_docs_service(service)
    yield service
    gcloud_docs.set_docs_service(None)


@pytest.fixture
def fetch_error():
    def make(url: str, message: str = "Request timed out after 5s") -> FetchError:
        return FetchError(message, url)

    return make
