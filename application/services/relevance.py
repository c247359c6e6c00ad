"""Heuristic relevance scoring tuned for recall over precision."""
from __future__ import annotations

from typing import Iterable

from application.services.keywords import DEFAULT_KEYWORDS, KeywordSet
from domain.entities import ErrorEntry

MIN_TOKEN_LENGTH = 3
SHORT_QUERY_LENGTH = 10
ERROR_CONTENT_MIN_LENGTH = 50


def query_tokens(query: str, *, min_length: int = MIN_TOKEN_LENGTH) -> list[str]:
    """Whitespace tokens of the lower-cased query with at least ``min_length`` chars."""
    return [token for token in query.lower().split() if len(token) >= min_length]


def contains_any_keyword(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword and keyword.lower() in lowered for keyword in keywords)


class RelevanceScorer:
    """Decides whether content should be considered for a query.

    A document is relevant when any signal fires: a query token (longer than two
    characters) appears in it, a domain keyword appears in both query and
    content, the query is shorter than ten characters, the content mentions one
    of the trigger words, or it mentions "error" and is longer than 50 chars.
    """

    def __init__(self, keywords: KeywordSet = DEFAULT_KEYWORDS) -> None:
        self.keywords = keywords

    def is_relevant(self, query: str, content: str) -> bool:
        lowered_query = query.lower()
        lowered_content = content.lower()

        if len(lowered_query) < SHORT_QUERY_LENGTH:
            return True
        if any(trigger in lowered_content for trigger in self.keywords.relevance_triggers):
            return True
        if "error" in lowered_content and len(lowered_content) > ERROR_CONTENT_MIN_LENGTH:
            return True
        if self.direct_overlap(lowered_query, lowered_content) >= 1:
            return True
        return self.keyword_cooccurrence(lowered_query, lowered_content) > 0

    @staticmethod
    def direct_overlap(query: str, content: str, *, min_length: int = MIN_TOKEN_LENGTH) -> int:
        lowered = content.lower()
        return sum(1 for token in query_tokens(query, min_length=min_length) if token in lowered)

    def keyword_cooccurrence(self, query: str, content: str) -> int:
        lowered_query = query.lower()
        lowered_content = content.lower()
        return sum(
            1
            for keyword in self.keywords.domain_keywords
            if keyword in lowered_query and keyword in lowered_content
        )

    def is_technical_query(self, query: str, error_entries: Iterable[ErrorEntry] = ()) -> bool:
        lowered = query.lower()
        if contains_any_keyword(lowered, self.keywords.technical_query_keywords):
            return True
        return any(entry.code and entry.code.lower() in lowered for entry in error_entries)

    def matches_upload(self, query: str, content: str) -> bool:
        """Looser test for user uploads: the user attached them for a reason."""
        if len(query.strip()) <= SHORT_QUERY_LENGTH:
            return True
        if self.direct_overlap(query, content) >= 1:
            return True
        return contains_any_keyword(content, self.keywords.upload_keywords)


__all__ = ["RelevanceScorer", "contains_any_keyword", "query_tokens"]
