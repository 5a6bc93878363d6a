"""
Relevance scoring for documentation search candidates
"""

from collections.abc import Iterable

from .models import Candidate

MIN_TOKEN_LENGTH = 3
URL_MATCH_WEIGHT = 3
TITLE_MATCH_WEIGHT = 2
TASK_PAGE_BONUS = 2
QUICKSTART_BONUS = 1
GENERIC_ROOT_PENALTY = 1


def query_tokens(query: str) -> list[str]:
    """Lowercased whitespace tokens, dropping those of two characters or fewer"""
    return [token for token in query.lower().split() if len(token) >= MIN_TOKEN_LENGTH]


def score(url: str, title: str, query: str) -> int:
    """
    Score how well a page matches ``query``.

    Each query token found in the URL adds 3 and each found in the title adds
    2. Task pages (``/how-to/``, ``/configure``) get +2, quickstarts +1, and a
    bare ``/docs`` landing page -1.
    """
    url_lower = url.lower()
    title_lower = title.lower()

    total = 0
    for token in query_tokens(query):
        if token in url_lower:
            total += URL_MATCH_WEIGHT
        if token in title_lower:
            total += TITLE_MATCH_WEIGHT

    if "/how-to/" in url_lower or "/configure" in url_lower:
        total += TASK_PAGE_BONUS
    if "/quickstart" in url_lower:
        total += QUICKSTART_BONUS
    if url_lower.endswith("/docs") or url_lower.endswith("/docs/"):
        total -= GENERIC_ROOT_PENALTY

    return total


def rank(candidates: Iterable[Candidate], query: str, floor: int = 3) -> list[Candidate]:
    """
    Score and order candidates, best first.

    Candidates scoring below zero are dropped unless they are among the
    first ``floor`` entries, so sparse queries still return something.
    """
    scored = [
        candidate.model_copy(update={"score": score(candidate.url, candidate.title, query)})
        for candidate in candidates
    ]
    scored.sort(key=lambda candidate: candidate.score, reverse=True)
    return [
        candidate
        for index, candidate in enumerate(scored)
        if candidate.score >= 0 or index < floor
    ]
