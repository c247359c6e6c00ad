"""In-memory corpus store grouped by document kind."""
from __future__ import annotations

from domain.entities import Document, DocumentKind
from domain.interfaces import CorpusRepository


class InMemoryCorpusRepository(CorpusRepository):
    """Keeps one ordered mapping per kind plus the path index.

    Filled once during ingestion and read-only afterwards, so reads need no
    locking. Re-adding an id of the same kind replaces its content but keeps
    its original position.
    """

    def __init__(self) -> None:
        self._by_kind: dict[DocumentKind, dict[str, Document]] = {kind: {} for kind in DocumentKind}
        self._order: dict[tuple[DocumentKind, str], int] = {}
        self._paths: dict[str, str] = {}

    def add(self, document: Document) -> None:
        key = (document.kind, document.id)
        self._order.setdefault(key, len(self._order))
        self._by_kind[document.kind][document.id] = document
        self._paths[document.id] = document.path

    def get(self, kind: DocumentKind, document_id: str) -> Document | None:
        return self._by_kind[kind].get(document_id)

    def documents(self, *kinds: DocumentKind) -> list[Document]:
        selected = kinds or tuple(DocumentKind)
        found = [doc for kind in selected for doc in self._by_kind[kind].values()]
        return sorted(found, key=lambda doc: self._order[(doc.kind, doc.id)])

    def path_index(self) -> dict[str, str]:
        return dict(self._paths)

    def __len__(self) -> int:
        return len(self._order)


__all__ = ["InMemoryCorpusRepository"]
