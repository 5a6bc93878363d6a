"""
Candidate resolution: turns a free-text query into ranked documentation pages.

Live search probes are best effort. The keyword tables in the catalog always
contribute, so a query still resolves when both probes come back empty.
"""

import logging
from typing import Optional
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag

from ..config import Settings
from ..exceptions import FetchError
from .catalog import DEFAULT_CATALOG, DocsCatalog
from .extractor import HTML_PARSER
from .fetcher import DocsFetcher
from .models import Candidate
from .ranking import rank

logger = logging.getLogger(__name__)

WEB_SEARCH_URL = "https://www.google.com/search"
SITE_SEARCH_PATH = "/s/results"
MAX_PROBE_RESULTS = 5
SNIPPET_CHARS = 300

WEB_RESULT_BLOCKS = "div.g, div[data-hveid]"
WEB_RESULT_LINK = "a[href^='http']"
WEB_SNIPPET_SELECTORS = "div[data-sncf], div.VwiC3b, span.aCOpRe"

SITE_RESULT_LINKS = "a.gs-title, .gsc-thumbnail-inside a, .gs-result a"
SITE_RESULT_CONTAINER_CLASSES = ("gs-result", "gsc-webResult")
SITE_SNIPPET_SELECTORS = ".gs-snippet, .gs-bidi-start-align"


def dedupe_by_url(candidates: list[Candidate]) -> list[Candidate]:
    """Keep the first candidate seen for each URL."""
    seen: set[str] = set()
    unique = []
    for candidate in candidates:
        if candidate.url not in seen:
            seen.add(candidate.url)
            unique.append(candidate)
    return unique


def _closest(element: Tag, classes: tuple[str, ...]) -> Optional[Tag]:
    node: Optional[Tag] = element
    while node is not None and isinstance(node, Tag):
        if any(cls in (node.get("class") or []) for cls in classes):
            return node
        node = node.parent
    return None


class CandidateResolver:
    """
    Produces ranked candidates for a query.

    Args:
        fetcher: HTTP adapter used for the search probes
        settings: Runtime settings (base URL, probe timeouts, toggles)
        catalog: Product and keyword tables for heuristic candidates
    """

    def __init__(
        self,
        fetcher: DocsFetcher,
        settings: Settings,
        catalog: DocsCatalog = DEFAULT_CATALOG,
    ):
        self.fetcher = fetcher
        self.settings = settings
        self.catalog = catalog

    async def resolve(self, query: str, product: Optional[str] = None) -> list[Candidate]:
        """Ranked candidates for ``query``; at least three survive when three exist."""
        candidates = await self.web_search(query, product)
        if not candidates:
            candidates = await self.site_search(query)
        logger.info(f"Search probes returned {len(candidates)} results for '{query}'")

        known_urls = {candidate.url for candidate in candidates}
        for candidate in self.heuristic_candidates(query):
            if candidate.url not in known_urls:
                known_urls.add(candidate.url)
                candidates.append(candidate)

        ranked = rank(candidates, query)
        logger.debug(f"{len(ranked)} of {len(candidates)} candidates kept after ranking")
        return ranked

    def heuristic_candidates(self, query: str) -> list[Candidate]:
        """Candidates from the product and keyword tables, in table order."""
        query_lower = query.lower()
        paths = self.catalog.product_paths_for(query_lower)
        paths.extend(self.catalog.topic_paths_for(query_lower))

        candidates = []
        for path in dict.fromkeys(paths):
            candidates.append(Candidate(url=self.settings.doc_url(path), title=path, snippet=""))
        return candidates

    async def web_search(self, query: str, product: Optional[str] = None) -> list[Candidate]:
        """Probe a general web search restricted to the documentation site."""
        if not self.settings.web_search_enabled:
            return []

        domain = self.settings.docs_domain
        site_filter = f"site:{domain}/{product}" if product else f"site:{domain}"
        params = {"q": f"{site_filter} {query}", "num": "10"}

        try:
            page = await self.fetcher.get(
                WEB_SEARCH_URL, timeout=self.settings.search_timeout, params=params
            )
        except FetchError as e:
            logger.warning(f"Web search probe failed: {e}")
            return []
        if not page.ok:
            logger.info(f"Web search probe returned HTTP {page.status_code}")
            return []

        try:
            return self.parse_web_results(page.text)
        except Exception as e:
            logger.warning(f"Could not parse web search results: {e}")
            return []

    def parse_web_results(self, html: str) -> list[Candidate]:
        soup = BeautifulSoup(html, HTML_PARSER)
        domain = self.settings.docs_domain
        results = []

        for block in soup.select(WEB_RESULT_BLOCKS):
            link = block.select_one(WEB_RESULT_LINK)
            url = link.get("href", "") if link is not None else ""
            if domain not in url:
                continue

            heading = block.find("h3")
            title = heading.get_text().strip() if heading is not None else ""
            if not url or not title:
                continue

            results.append(Candidate(
                url=url.split("&")[0],
                title=title,
                snippet=self._web_snippet(block)[:SNIPPET_CHARS],
            ))

        return dedupe_by_url(results)[:MAX_PROBE_RESULTS]

    def _web_snippet(self, block: Tag) -> str:
        snippet = block.select_one(WEB_SNIPPET_SELECTORS)
        if snippet is not None:
            text = snippet.get_text().strip()
            if text:
                return text
        for div in block.find_all("div"):
            text = div.get_text()
            if 50 < len(text) < 500:
                return text.strip()
        return ""

    async def site_search(self, query: str) -> list[Candidate]:
        """Probe the documentation site's own search page."""
        if not self.settings.site_search_enabled:
            return []

        url = f"{self.settings.docs_base_url}{SITE_SEARCH_PATH}?q={quote(query, safe='')}"
        try:
            page = await self.fetcher.get(url, timeout=self.settings.search_timeout)
        except FetchError as e:
            logger.warning(f"Site search probe failed: {e}")
            return []
        if not page.ok:
            logger.info(f"Site search probe returned HTTP {page.status_code}")
            return []

        try:
            return self.parse_site_results(page.text)
        except Exception as e:
            logger.warning(f"Could not parse site search results: {e}")
            return []

    def parse_site_results(self, html: str) -> list[Candidate]:
        soup = BeautifulSoup(html, HTML_PARSER)
        domain = self.settings.docs_domain
        results = []

        for link in soup.select(SITE_RESULT_LINKS):
            url = link.get("href", "")
            title = link.get_text().strip()
            if not url or not title or domain not in url:
                continue

            snippet = ""
            container = _closest(link, SITE_RESULT_CONTAINER_CLASSES)
            if container is not None:
                snippet = "".join(
                    node.get_text() for node in container.select(SITE_SNIPPET_SELECTORS)
                ).strip()

            if not url.startswith("http"):
                url = f"{self.settings.docs_base_url}{url}"
            results.append(Candidate(url=url, title=title, snippet=snippet[:SNIPPET_CHARS]))

        return dedupe_by_url(results)[:MAX_PROBE_RESULTS]
