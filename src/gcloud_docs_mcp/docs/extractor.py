"""
HTML to structured text extraction for Google Cloud documentation pages.

The pipeline removes page chrome, picks the article body, walks its
block-level elements in document order and renders them as markdown
sections. Output depends only on the input markup and the tables below.
"""

import logging
import re
from collections.abc import Callable
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .models import ExtractedSection, ExtractionError, ExtractionOutcome, ExtractionResult, ErrorKind

logger = logging.getLogger(__name__)

# Applies implied end tags for li, p, td and tr
HTML_PARSER = "lxml"

DEFAULT_MAX_CHARS = 20000
DEFAULT_TITLE = "Google Cloud Documentation"
TITLE_SUFFIX = " | Google Cloud"
NO_CONTENT_MESSAGE = "Could not extract content from the page"
RAW_PREVIEW_CHARS = 500

# Removed from the whole document before anything else is looked at
CHROME_SELECTORS = ", ".join((
    "script", "style", "nav", "header", "footer", "noscript", "iframe", "svg", "img",
    ".devsite-nav", ".devsite-book-nav", ".devsite-footer", ".devsite-header",
    ".devsite-breadcrumb-list", ".devsite-page-title", ".devsite-banner",
    ".devsite-collapsible-section", ".devsite-toc", ".devsite-article-meta",
    '[role="navigation"]', '[role="banner"]', '[aria-hidden="true"]',
    ".nocontent", ".caution", ".note", ".warning", ".tip", ".key-point",
    ".buttons", ".button-group", ".cta", ".feedback", ".rating",
))

# Residual navigation nested inside the content root
CONTENT_CHROME_SELECTORS = ", ".join((
    "nav", ".devsite-nav", ".devsite-toc", ".nocontent",
    '[role="navigation"]', '[aria-hidden="true"]',
))

TITLE_SELECTORS = ("h1.devsite-page-title", "article h1", "h1")

# Most specific first
CONTENT_ROOT_SELECTORS = (
    ".devsite-article-body",
    "article .body-content",
    "article",
    "main",
    ".content",
)

BLOCK_SELECTOR = "h1, h2, h3, h4, h5, p, pre, ul, ol, table, blockquote, dl"
HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5}

MIN_CODE_CHARS = 5
MIN_PARAGRAPH_CHARS = 10

LANGUAGE_CLASS = re.compile(r"language-(\w+)", re.ASCII)
EXCESS_NEWLINES = re.compile(r"\n{3,}")
WHITESPACE_RUN = re.compile(r"\s+")
DOCUMENT_TAG = re.compile(r"<(html|body)[\s>]", re.IGNORECASE)


# Text-level boilerplate. Some of the site's UI chrome has no stable
# selector, so it is matched on text. These break if the site rewords them.
def _is_nav_link_cluster(text: str) -> bool:
    return "Documentation" in text and "Home" in text and len(text) < 100


def _is_collections_prompt(text: str) -> bool:
    return text.startswith("Stay organized with collections")


def _is_save_prompt(text: str) -> bool:
    return text.startswith("Save and categorize")


BOILERPLATE_FILTERS: tuple[Callable[[str], bool], ...] = (
    _is_nav_link_cluster,
    _is_collections_prompt,
    _is_save_prompt,
)


def is_boilerplate(text: str) -> bool:
    """True when ``text`` matches one of the known UI chrome phrases"""
    return any(matches(text) for matches in BOILERPLATE_FILTERS)


def _remove(soup: BeautifulSoup, selectors: str) -> None:
    for element in soup.select(selectors):
        # Descendants of an already removed element are decomposed with it
        if not element.decomposed:
            element.decompose()


def _text(element: Tag) -> str:
    return element.get_text().strip()


def _next_element_sibling(element: Tag) -> Optional[Tag]:
    for sibling in element.next_siblings:
        if isinstance(sibling, Tag):
            return sibling
    return None


class ContentExtractor:
    """
    Converts documentation page markup into bounded markdown text.

    Args:
        max_chars: Upper bound on the returned ``content`` length
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CHARS, parser: str = HTML_PARSER):
        self.max_chars = max_chars
        self.parser = parser

    def extract(self, html: str, source_url: str) -> ExtractionOutcome:
        """
        Extract the article body of ``html``.

        Returns:
            ExtractionResult on success, or ExtractionError of kind
            NO_CONTENT when no content container is found.
        """
        soup = BeautifulSoup(html, self.parser)
        _remove(soup, CHROME_SELECTORS)

        title = self.resolve_title(soup)

        is_fragment = DOCUMENT_TAG.search(html) is None
        root = self.select_content_root(soup, is_fragment)
        if root is None:
            logger.info(f"No content root found for {source_url}")
            return ExtractionError(
                kind=ErrorKind.NO_CONTENT,
                message=NO_CONTENT_MESSAGE,
                url=source_url,
                raw_text_preview=self.raw_text_preview(soup),
            )

        _remove(root, CONTENT_CHROME_SELECTORS)

        sections = self.collect_sections(root, title)
        rendered = self.render(sections)
        logger.debug(
            f"Extracted {len(sections)} sections ({len(rendered)} chars) from {source_url}"
        )
        return ExtractionResult.from_text(title, source_url, rendered, self.max_chars)

    def resolve_title(self, soup: BeautifulSoup) -> str:
        for selector in TITLE_SELECTORS:
            heading = soup.select_one(selector)
            if heading is not None:
                text = _text(heading)
                if text:
                    return text

        title_text = "".join(tag.get_text() for tag in soup.find_all("title"))
        title_text = title_text.replace(TITLE_SUFFIX, "", 1).strip()
        return title_text or DEFAULT_TITLE

    def select_content_root(
        self, soup: BeautifulSoup, is_fragment: bool = False
    ) -> Optional[BeautifulSoup]:
        """
        Return a detached copy of the first content container holding markup.

        A bare fragment (source without ``<html>`` or ``<body>``) is its own
        root. The tree builder adds both elements, so the caller decides.
        """
        markup = ""
        for selector in CONTENT_ROOT_SELECTORS:
            container = soup.select_one(selector)
            if container is None:
                continue
            markup = container.decode_contents()
            if markup:
                logger.debug(f"Content root selected with '{selector}'")
                break

        if not markup and is_fragment:
            markup = (soup.body or soup).decode_contents()

        if not markup:
            return None
        return BeautifulSoup(markup, self.parser)

    def raw_text_preview(self, soup: BeautifulSoup) -> str:
        body = soup.body or soup
        return WHITESPACE_RUN.sub(" ", body.get_text())[:RAW_PREVIEW_CHARS]

    def collect_sections(self, root: BeautifulSoup, title: str) -> list[ExtractedSection]:
        """Walk block elements in document order, grouping them under headings."""
        sections: list[ExtractedSection] = []
        current = ExtractedSection(heading=title, level=1)

        for element in root.select(BLOCK_SELECTOR):
            text = _text(element)
            if not text or is_boilerplate(text):
                continue

            level = HEADING_LEVELS.get(element.name)
            if level is not None:
                if current.has_content():
                    sections.append(current)
                current = ExtractedSection(heading=text, level=level)
                continue

            block = self.render_block(element, text)
            if block:
                current.append(block)

        if current.has_content():
            sections.append(current)
        return sections

    def render_block(self, element: Tag, text: str) -> Optional[str]:
        """Markdown for one non-heading block, or None to drop it."""
        name = element.name
        if name == "pre":
            return self._render_code(element, text)
        if name == "table":
            return self._render_table(element)
        if name in ("ul", "ol"):
            return self._render_list(element, ordered=name == "ol")
        if name == "dl":
            return self._render_definitions(element)
        if name == "blockquote":
            return f"> {text}"
        if len(text) > MIN_PARAGRAPH_CHARS:
            return text
        return None

    def render(self, sections: list[ExtractedSection]) -> str:
        rendered = "\n\n".join(section.render() for section in sections if section.has_content())
        return EXCESS_NEWLINES.sub("\n\n", rendered).strip()

    def _render_code(self, element: Tag, text: str) -> Optional[str]:
        if len(text) <= MIN_CODE_CHARS:
            return None
        language = ""
        code = element.find("code")
        if code is not None:
            classes = code.get("class") or []
            if isinstance(classes, str):
                classes = [classes]
            match = LANGUAGE_CLASS.search(" ".join(classes))
            if match:
                language = match.group(1)
        return f"```{language}\n{text}\n```"

    def _render_table(self, element: Tag) -> Optional[str]:
        rows = []
        for row in element.find_all("tr"):
            cells = [_text(cell) for cell in row.find_all(["th", "td"])]
            if cells:
                rows.append(" | ".join(cells))
        if not rows:
            return None
        return "| " + " |\n| ".join(rows) + " |"

    def _render_list(self, element: Tag, ordered: bool) -> Optional[str]:
        items = []
        for position, item in enumerate(element.find_all("li", recursive=False), start=1):
            item_text = _text(item)
            if item_text:
                prefix = f"{position}." if ordered else "-"
                items.append(f"{prefix} {item_text}")
        return "\n".join(items) if items else None

    def _render_definitions(self, element: Tag) -> Optional[str]:
        entries = []
        for term_element in element.find_all("dt"):
            term = _text(term_element)
            if not term:
                continue
            sibling = _next_element_sibling(term_element)
            definition = _text(sibling) if sibling is not None and sibling.name == "dd" else ""
            entries.append(f"**{term}**: {definition}")
        return "\n\n".join(entries) if entries else None


def extract(html: str, source_url: str, max_chars: int = DEFAULT_MAX_CHARS) -> ExtractionOutcome:
    """Extract structured text from ``html`` with the default tables."""
    return ContentExtractor(max_chars=max_chars).extract(html, source_url)
