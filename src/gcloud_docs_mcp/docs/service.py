"""
Documentation operations behind the MCP tools.

Each operation returns typed results or structured error values; nothing
raised by fetching or parsing escapes to the tool layer.
"""

import logging
import re
from typing import Any, Optional

from ..config import Settings, get_settings
from ..exceptions import FetchError
from .catalog import DEFAULT_CATALOG, DocsCatalog
from .extractor import ContentExtractor
from .fetcher import DocsFetcher
from .models import (
    Candidate,
    DocumentMatch,
    ErrorKind,
    ExtractionError,
    ExtractionOutcome,
    ExtractionResult,
    SearchReport,
)
from .search import CandidateResolver

logger = logging.getLogger(__name__)

FETCH_FAILURE_PREFIX = "Failed to fetch documentation"
HTTP_STATUS_SUGGESTION = (
    "Please check the path and try again. "
    "Use 'list_google_cloud_products' to see available products."
)
PRODUCTS_USAGE = 'Use "fetch_google_cloud_doc" with the docsPath to get documentation content.'
UNKNOWN_SERVICE_SUGGESTION = 'Use "list_google_cloud_products" to see all available services.'

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


class DocsService:
    """
    Fetch, search and reference lookups for Google Cloud documentation.

    Args:
        settings: Runtime settings; read from the environment when omitted
        fetcher: HTTP adapter; built from ``settings`` when omitted
        catalog: Static product, keyword and API tables
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[DocsFetcher] = None,
        catalog: DocsCatalog = DEFAULT_CATALOG,
    ):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or DocsFetcher(self.settings)
        self.catalog = catalog
        self.extractor = ContentExtractor(max_chars=self.settings.max_content_chars)
        self.resolver = CandidateResolver(self.fetcher, self.settings, catalog)

    def normalize_path(self, path: str) -> str:
        """Strip leading slashes and a redundant domain prefix from ``path``."""
        clean = _SCHEME.sub("", path.strip()).lstrip("/")
        domain_prefix = f"{self.settings.docs_domain}/"
        if clean.startswith(domain_prefix):
            clean = clean[len(domain_prefix):]
        return clean

    def path_from_url(self, url: str) -> str:
        """Documentation path of an absolute docs URL, without its query string."""
        prefix = f"{self.settings.docs_base_url}/"
        if url.startswith(prefix):
            url = url[len(prefix):]
        return url.split("?")[0]

    async def fetch_doc(self, path: str) -> ExtractionOutcome:
        """Fetch one documentation page and extract its content."""
        url = self.settings.doc_url(self.normalize_path(path))
        logger.info(f"Fetching documentation page {url}")

        try:
            page = await self.fetcher.get(url, timeout=self.settings.page_timeout)
        except FetchError as e:
            return ExtractionError(
                kind=ErrorKind.NETWORK_FAILURE,
                message=f"{FETCH_FAILURE_PREFIX}: {e}",
                url=url,
            )

        if not page.ok:
            logger.info(f"HTTP {page.status_code} for {url}")
            return ExtractionError(
                kind=ErrorKind.HTTP_STATUS,
                message=f"{FETCH_FAILURE_PREFIX}: HTTP {page.status_code}",
                url=url,
                status=page.status_code,
                suggestion=HTTP_STATUS_SUGGESTION,
            )

        try:
            return self.extractor.extract(page.text, url)
        except Exception as e:
            logger.error(f"Failed to parse {url}: {e}", exc_info=True)
            return ExtractionError(
                kind=ErrorKind.PARSE_FAILURE,
                message=f"{FETCH_FAILURE_PREFIX}: could not parse page ({type(e).__name__}: {e})",
                url=url,
            )

    async def search_docs(self, query: str, product: Optional[str] = None) -> SearchReport:
        """
        Resolve ``query`` to ranked pages and fetch the best ones.

        The top candidates are fetched one after another, in rank order. A
        failed fetch only affects its own slot.
        """
        ranked = await self.resolver.resolve(query, product)
        top_k = self.settings.fetch_top_k

        matches = []
        for candidate in ranked[:top_k]:
            matches.append(await self._materialize(candidate))

        related = ranked[top_k:top_k + self.settings.related_docs_count]
        return SearchReport(
            query=query,
            product=product or "all",
            total_results=len(ranked),
            results=matches,
            other_related_docs=[candidate.reference() for candidate in related],
        )

    async def _materialize(self, candidate: Candidate) -> DocumentMatch:
        outcome = await self.fetch_doc(self.path_from_url(candidate.url))
        if isinstance(outcome, ExtractionError):
            return DocumentMatch(
                url=candidate.url,
                title=candidate.title,
                snippet=candidate.snippet,
                error=outcome.message,
            )
        return DocumentMatch(
            url=candidate.url,
            title=outcome.title or candidate.title,
            snippet=candidate.snippet,
            content=outcome.content,
        )

    def list_products(self) -> dict[str, Any]:
        products = [
            {
                "id": key,
                "name": product.name,
                "docsPath": product.docs_path,
                "docsUrl": self.settings.doc_url(product.docs_path),
                "description": product.description,
            }
            for key, product in self.catalog.products.items()
        ]
        return {
            "totalProducts": len(products),
            "products": products,
            "usage": PRODUCTS_USAGE,
        }

    async def get_api_reference(self, service: str, resource: Optional[str] = None) -> dict[str, Any]:
        """REST API reference for ``service``, with the page content when it can be fetched."""
        service_key = service.strip().lower()
        product = self.catalog.products.get(service_key)
        if product is None:
            return {
                "error": f"Unknown service: {service}",
                "availableServices": list(self.catalog.products),
                "suggestion": UNKNOWN_SERVICE_SUGGESTION,
            }

        api = self.catalog.api_references.get(service_key)
        if api is None:
            return {
                "service": product.name,
                "docsUrl": self.settings.doc_url(product.docs_path),
                "apiReference": self.settings.doc_url(f"{product.docs_path}/reference"),
                "note": "API reference path not pre-configured. Try fetching the docs URL directly.",
            }

        reference_path = f"{api.rest_path}/{resource}" if resource else api.rest_path
        payload: dict[str, Any] = {
            "service": product.name,
            "description": product.description,
            "apiReferenceUrl": self.settings.doc_url(reference_path),
            "availableResources": list(api.resources),
            "selectedResource": resource or "overview",
        }

        outcome = await self.fetch_doc(reference_path)
        if isinstance(outcome, ExtractionResult):
            payload["documentation"] = outcome.to_payload()
        else:
            payload["fetchCommand"] = f'Use fetch_google_cloud_doc with path: "{reference_path}"'
            payload["fetchError"] = outcome.message

        if resource:
            payload["usage"] = f"Viewing API reference for {resource}"
        else:
            payload["usage"] = (
                'Use "get_api_reference" with a resource parameter to get specific resource '
                f"documentation. Available: {', '.join(api.resources)}"
            )
        return payload
