"""Abstract interfaces for the troubleshooting context engine."""
from __future__ import annotations

from abc import ABC, abstractmethod

from domain.entities import Document, DocumentKind, ExtractionResult, UploadRecord


class TextExtractor(ABC):
    """Turns the raw payload of one file format into plain text."""

    @abstractmethod
    def extract(self, source: bytes | str) -> ExtractionResult:
        """Return the extracted text, or a failure result describing why not."""


class CorpusRepository(ABC):
    """Holds ingested documents grouped by kind plus the path index."""

    @abstractmethod
    def add(self, document: Document) -> None:
        """Store a document and record its ingestion path."""

    @abstractmethod
    def get(self, kind: DocumentKind, document_id: str) -> Document | None:
        """Retrieve a document of the given kind by id."""

    @abstractmethod
    def documents(self, *kinds: DocumentKind) -> list[Document]:
        """Return documents of the given kinds (all kinds if none) in ingestion order."""

    @abstractmethod
    def path_index(self) -> dict[str, str]:
        """Return a copy of the id -> full ingestion path mapping."""

    def text_documents(self) -> list[Document]:
        return self.documents(DocumentKind.TEXT, DocumentKind.MARKUP, DocumentKind.MARKUP_HTML)

    def path_for(self, document_id: str) -> str | None:
        return self.path_index().get(document_id)


class UploadRepository(ABC):
    """Session-scoped store for user uploads."""

    @abstractmethod
    def add(self, record: UploadRecord) -> None:
        """Store an uploaded record."""

    @abstractmethod
    def snapshot(self) -> list[UploadRecord]:
        """Return a consistent copy of all uploads in upload order."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every upload of the session."""


__all__ = [
    "TextExtractor",
    "CorpusRepository",
    "UploadRepository",
]
