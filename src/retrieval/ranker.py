"""Lexical relevance ranking over the project catalog."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import ProjectRecord, ScoredMatch

logger = logging.getLogger(__name__)

NAME_BONUS = 3
DEFAULT_TOP_K = 3


def searchable_text(record: ProjectRecord) -> str:
    """Lowercase text a query is matched against; missing fields contribute nothing."""
    fields = [
        record.name,
        record.description,
        record.status,
        record.responsible_name(),
        *record.tags,
        *(document.title for document in record.documents),
    ]
    return " ".join(value for value in fields if value).lower()


def query_terms(query: str) -> list[str]:
    return query.lower().split()


def score_project(query: str, record: ProjectRecord) -> int:
    """Count literal, case-insensitive occurrences of each query term in the record.

    Terms match as substrings (not on word boundaries) and are counted
    left to right without overlap. A record whose name appears anywhere in
    the query earns ``NAME_BONUS`` on top.
    """
    normalized_query = (query or "").lower()
    text = searchable_text(record)
    score = sum(text.count(term) for term in query_terms(normalized_query))
    if record.name and record.name.lower() in normalized_query:
        score += NAME_BONUS
    return score


def rank_scored(query: str, catalog: Iterable[ProjectRecord], k: int = DEFAULT_TOP_K) -> list[ScoredMatch]:
    if k <= 0:
        return []
    scored = [ScoredMatch(record=record, score=score_project(query, record)) for record in catalog]
    # sorted() is stable, so equal scores keep catalog order
    scored = sorted(scored, key=lambda match: match.score, reverse=True)
    top = scored[:k]
    logger.debug("Ranked %d projects for %r, keeping %d", len(scored), query, len(top))
    return top


def rank(query: str, catalog: Iterable[ProjectRecord], k: int = DEFAULT_TOP_K) -> list[ProjectRecord]:
    """Return up to ``k`` catalog records, best match first."""
    return [match.record for match in rank_scored(query, catalog, k)]


__all__ = ["NAME_BONUS", "DEFAULT_TOP_K", "searchable_text", "query_terms", "score_project", "rank_scored", "rank"]
