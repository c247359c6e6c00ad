"""Use case that assembles a size-bounded, source-attributed context for a query."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from application.services.citations import format_citation
from application.services.relevance import RelevanceScorer, contains_any_keyword, query_tokens
from application.services.section_extractor import best_section
from domain.entities import (
    ContextResult,
    Document,
    DocumentKind,
    StructuredKnowledge,
    TEXT_KINDS,
)
from domain.interfaces import CorpusRepository, UploadRepository

logger = logging.getLogger(__name__)

ELLIPSIS = "..."
TRUNCATION_NOTICE = "\n[Context truncated to prevent timeout...]"
GENERAL_TOKEN_MIN_LENGTH = 4
GENERAL_MIN_OVERLAP = 2
OUTSIDE_EXPERTISE_TEMPLATE = (
    "Your question '{query}' seems to be outside my technical troubleshooting expertise. "
    "I can help with engineering errors, system issues, device problems, and technical troubleshooting."
)
FALLBACK_HEADER = "General Engineering Knowledge:\n\n"
FALLBACK_HTML_DOCUMENTS = 2

Citer = Callable[[Document], str]


@dataclass(slots=True, frozen=True)
class ContextBudget:
    """Character budgets per tier and for the whole context."""

    upload_chars: int = 800
    html_chars: int = 500
    text_chars: int = 400
    general_chars: int = 400
    document_chars: int = 600
    section_threshold: int = 1000
    section_chars: int = 800
    fallback_chars: int = 300
    total_chars: int = 1500


@dataclass(slots=True)
class _Builder:
    budget: ContextBudget
    parts: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)

    def add(self, header: str, body: str, source: str) -> None:
        self.parts.append(header)
        self.parts.append(body)
        self.sources.append(source)

    def add_text(self, text: str) -> None:
        self.parts.append(text)

    @property
    def empty(self) -> bool:
        return not any(self.parts)

    def result(self) -> ContextResult:
        return ContextResult(text=cap_length("".join(self.parts), self.budget.total_chars), sources=list(self.sources))


def cap_length(text: str, limit: int) -> str:
    """Keep the whole context within ``limit`` characters, notice included."""
    if len(text) <= limit:
        return text
    return text[: limit - len(TRUNCATION_NOTICE)] + TRUNCATION_NOTICE


def truncate(content: str, limit: int) -> str:
    """Cut ``content`` to ``limit`` chars with an ellipsis, followed by a blank line."""
    if len(content) > limit:
        return content[:limit] + ELLIPSIS + "\n\n"
    return content + "\n\n"


def assemble_context(
    query: str,
    *,
    corpus_repository: CorpusRepository,
    upload_repository: UploadRepository,
    knowledge: StructuredKnowledge,
    scorer: RelevanceScorer,
    knowledge_root: str | Path | None = None,
    budget: ContextBudget = ContextBudget(),
) -> ContextResult:
    """Search every collection in priority order and build the context block.

    Uploads always come first. General (non-technical) queries only pull text
    documents with strong token overlap; technical queries walk the HTML docs,
    structured error codes, common issues, other text files, PDFs, Word
    documents and images, in that order, falling back to general reference
    material when nothing matched.
    """
    lowered = query.lower()
    builder = _Builder(budget)

    def cite(document: Document) -> str:
        return format_citation(document.path, knowledge_root)

    _add_uploads(lowered, upload_repository, scorer, builder)

    if not scorer.is_technical_query(lowered, knowledge.error_entries):
        logger.debug("Query classified as general: %r", query)
        _add_general_matches(lowered, corpus_repository, builder, cite)
        if builder.empty:
            message = OUTSIDE_EXPERTISE_TEMPLATE.format(query=query)
            return ContextResult(text=cap_length(message, budget.total_chars), out_of_scope=True)
        return builder.result()

    logger.debug("Query classified as technical: %r", query)
    text_documents = corpus_repository.documents(*TEXT_KINDS)
    html_documents = [doc for doc in text_documents if doc.kind is DocumentKind.MARKUP_HTML]
    other_text_documents = [doc for doc in text_documents if doc.kind is not DocumentKind.MARKUP_HTML]

    for document in html_documents:
        if scorer.is_relevant(lowered, document.content):
            builder.add(
                f"From Documentation ({cite(document)}):\n",
                truncate(document.content, budget.html_chars),
                f"Documentation: {cite(document)}",
            )

    _add_error_entries(lowered, knowledge, builder)
    _add_common_issues(lowered, knowledge, builder)

    for document in other_text_documents:
        if scorer.is_relevant(lowered, document.content):
            builder.add(
                f"From {cite(document)}:\n",
                truncate(document.content, budget.text_chars),
                cite(document),
            )

    for document in corpus_repository.documents(DocumentKind.PAGINATED):
        if "<<" in document.content and ">>" in document.content:
            logger.debug("Skipping %s: content looks like raw PDF metadata", document.id)
            continue
        if scorer.is_relevant(lowered, document.content):
            builder.add(
                f"From {cite(document)}:\n",
                _long_document_excerpt(document.content, lowered, budget),
                f"PDF: {cite(document)}",
            )

    for document in corpus_repository.documents(DocumentKind.WORD_PROCESSOR):
        if document.failed:
            continue
        if scorer.is_relevant(lowered, document.content):
            builder.add(
                f"From Word Document ({cite(document)}):\n",
                _long_document_excerpt(document.content, lowered, budget),
                f"Word Document: {cite(document)}",
            )

    for document in corpus_repository.documents(DocumentKind.IMAGE):
        if document.failed:
            continue
        if scorer.is_relevant(lowered, document.content):
            builder.add(
                f"From Image ({cite(document)}):\n",
                document.content + "\n\n",
                f"Image: {cite(document)}",
            )

    if builder.empty:
        logger.debug("No tier matched %r; using general reference material", query)
        _add_fallback(knowledge, html_documents, other_text_documents, builder, cite)

    result = builder.result()
    logger.debug("Assembled %d characters from %d sources", len(result.text), len(result.sources))
    return result


def _add_uploads(
    lowered_query: str,
    upload_repository: UploadRepository,
    scorer: RelevanceScorer,
    builder: _Builder,
) -> None:
    for record in upload_repository.snapshot():
        if not scorer.matches_upload(lowered_query, record.content):
            logger.debug("Upload %s not included for %r", record.id, lowered_query)
            continue
        builder.add(
            f"From User Upload ({record.display_name}):\n",
            truncate(record.content, builder.budget.upload_chars),
            f"User Upload: {record.display_name}",
        )


def _add_general_matches(lowered_query: str, corpus_repository: CorpusRepository, builder: _Builder, cite: Citer) -> None:
    tokens = query_tokens(lowered_query, min_length=GENERAL_TOKEN_MIN_LENGTH)
    # Two overlapping tokens are required, or every token when the query has
    # fewer. A one-word query such as "python" therefore pulls in every text
    # document that contains that word.
    required = min(GENERAL_MIN_OVERLAP, len(tokens))
    if required == 0:
        return
    for document in corpus_repository.text_documents():
        content = document.content.lower()
        overlap = sum(1 for token in tokens if token in content)
        if overlap >= required:
            builder.add(
                f"From {cite(document)}:\n",
                truncate(document.content, builder.budget.general_chars),
                cite(document),
            )


def _add_error_entries(lowered_query: str, knowledge: StructuredKnowledge, builder: _Builder) -> None:
    for entry in knowledge.error_entries:
        matched = (
            entry.code.lower() in lowered_query
            or (entry.description and entry.description.lower() in lowered_query)
            or contains_any_keyword(lowered_query, entry.related_components)
        )
        if not matched:
            continue
        steps = "".join(f"{number}. {step}\n" for number, step in enumerate(entry.steps, start=1))
        builder.add(
            f"Error Code {entry.code}: {entry.description}\n",
            f"Troubleshooting Steps:\n{steps}\n",
            f"Error Code: {entry.code}",
        )


def _add_common_issues(lowered_query: str, knowledge: StructuredKnowledge, builder: _Builder) -> None:
    for issue in knowledge.common_issues:
        if not (issue.issue.lower() in lowered_query or contains_any_keyword(lowered_query, issue.symptoms)):
            continue
        solutions = "".join(f"{number}. {solution}\n" for number, solution in enumerate(issue.solutions, start=1))
        builder.add(
            f"Common Issue: {issue.issue}\n",
            f"Solutions:\n{solutions}\n",
            f"Common Issue: {issue.issue}",
        )


def _long_document_excerpt(content: str, lowered_query: str, budget: ContextBudget) -> str:
    if len(content) > budget.section_threshold:
        return best_section(content, lowered_query, budget.section_chars) + ELLIPSIS + "\n\n"
    return truncate(content, budget.document_chars)


def _add_fallback(
    knowledge: StructuredKnowledge,
    html_documents: list[Document],
    other_text_documents: list[Document],
    builder: _Builder,
    cite: Citer,
) -> None:
    budget = builder.budget
    builder.add_text(FALLBACK_HEADER)
    for document in html_documents[:FALLBACK_HTML_DOCUMENTS]:
        builder.add(
            f"From Documentation ({cite(document)}):\n",
            truncate(document.content, budget.fallback_chars),
            f"Documentation (General): {cite(document)}",
        )
    for entry in knowledge.error_entries:
        builder.add(f"Error Code {entry.code}: {entry.description}\n", "", f"Error Code Reference: {entry.code}")
    builder.add_text("\n")
    if other_text_documents:
        document = other_text_documents[0]
        builder.add(
            f"From {cite(document)}:\n",
            truncate(document.content, budget.fallback_chars),
            f"General Reference: {cite(document)}",
        )


__all__ = [
    "assemble_context",
    "truncate",
    "ContextBudget",
    "TRUNCATION_NOTICE",
    "OUTSIDE_EXPERTISE_TEMPLATE",
]
