"""
Data types passed between the fetch, extraction and search stages
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Kinds of failure reported to tool callers"""

    HTTP_STATUS = "http_status"
    NETWORK_FAILURE = "network_failure"
    NO_CONTENT = "no_content"
    PARSE_FAILURE = "parse_failure"


class FetchedPage(NamedTuple):
    """Raw response for one documentation page"""

    url: str
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class ExtractedSection:
    """A heading plus the markdown accumulated under it"""

    heading: str
    level: int
    body: str = ""

    def append(self, block: str) -> None:
        self.body += f"\n{block}\n"

    def has_content(self) -> bool:
        return bool(self.body.strip())

    def render(self) -> str:
        prefix = "#" * min(self.level, 4)
        return f"{prefix} {self.heading}\n{self.body.strip()}"


class ExtractionResult(BaseModel):
    """Structured text extracted from a documentation page"""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    url: str
    content: str
    content_length: int = Field(alias="contentLength")
    truncated: bool

    @classmethod
    def from_text(cls, title: str, url: str, text: str, limit: int) -> "ExtractionResult":
        """Bound ``text`` to ``limit`` characters, recording the original length."""
        return cls(
            title=title,
            url=url,
            content=text[:limit],
            content_length=len(text),
            truncated=len(text) > limit,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ExtractionError(BaseModel):
    """A fetch or extraction failure, reported as a value"""

    kind: ErrorKind
    message: str
    url: str
    status: Optional[int] = None
    suggestion: Optional[str] = None
    raw_text_preview: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "url": self.url}
        if self.suggestion:
            payload["suggestion"] = self.suggestion
        if self.raw_text_preview is not None:
            payload["rawTextPreview"] = self.raw_text_preview
        return payload


ExtractionOutcome = Union[ExtractionResult, ExtractionError]


class DocReference(BaseModel):
    """Lightweight pointer to a documentation page"""

    url: str
    title: str = ""
    snippet: str = ""


class Candidate(DocReference):
    """A scored page considered relevant to a query"""

    score: int = 0

    def reference(self) -> DocReference:
        return DocReference(url=self.url, title=self.title, snippet=self.snippet)


class DocumentMatch(DocReference):
    """A top-ranked candidate after its content was fetched"""

    content: Optional[str] = None
    error: Optional[str] = None


class SearchReport(BaseModel):
    """Aggregated answer to a documentation search"""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    product: str
    total_results: int = Field(alias="totalResults")
    results: list[DocumentMatch] = Field(default_factory=list)
    other_related_docs: list[DocReference] = Field(
        default_factory=list, alias="otherRelatedDocs"
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
