"""Pick the most query-dense window of paragraphs from a long document."""
from __future__ import annotations

from application.services.relevance import query_tokens

WINDOW_SIZE = 3
MIN_PARAGRAPHS = 3


def split_paragraphs(content: str) -> list[str]:
    paragraphs = content.split("\n\n")
    if len(paragraphs) < MIN_PARAGRAPHS:
        # Large unstructured dumps rarely contain blank lines; fall back to sentences.
        paragraphs = content.split(". ")
    return paragraphs


def score_window(window: str, tokens: list[str]) -> int:
    lowered = window.lower()
    return sum(lowered.count(token) for token in tokens)


def best_section(content: str, query: str, max_length: int) -> str:
    """Return the best window of up to three paragraphs no longer than ``max_length``.

    Windows are scored by total occurrences of the query tokens; the earliest
    window wins ties. When nothing scores above zero the leading ``max_length``
    characters are returned instead.
    """
    tokens = query_tokens(query)
    paragraphs = split_paragraphs(content)

    best_score = 0
    best: str | None = None
    for start in range(len(paragraphs)):
        window = "\n\n".join(paragraphs[start : start + WINDOW_SIZE])
        if len(window) > max_length:
            continue
        score = score_window(window, tokens)
        if score > best_score:
            best_score = score
            best = window

    if best is None:
        return content[:max_length]
    return best


__all__ = ["best_section", "split_paragraphs", "score_window"]
