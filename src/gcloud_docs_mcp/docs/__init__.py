"""Google Cloud documentation retrieval: fetch, extract, search and rank"""

from .catalog import DEFAULT_CATALOG, DocsCatalog
from .extractor import ContentExtractor, extract
from .fetcher import DocsFetcher
from .models import (
    Candidate,
    DocReference,
    DocumentMatch,
    ErrorKind,
    ExtractionError,
    ExtractionResult,
    SearchReport,
)
from .ranking import rank, score
from .search import CandidateResolver
from .service import DocsService

__all__ = [
    "Candidate",
    "CandidateResolver",
    "ContentExtractor",
    "DEFAULT_CATALOG",
    "DocReference",
    "DocsCatalog",
    "DocsFetcher",
    "DocsService",
    "DocumentMatch",
    "ErrorKind",
    "ExtractionError",
    "ExtractionResult",
    "SearchReport",
    "extract",
    "rank",
    "score",
]
