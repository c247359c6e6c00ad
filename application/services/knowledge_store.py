"""Single handle over the corpus, uploads and structured knowledge."""
from __future__ import annotations

import logging
from pathlib import Path

from application.services.citations import format_citation
from application.use_cases.assemble_context import assemble_context
from application.use_cases.build_prompt import build_generation_request
from application.use_cases.ingest_paths import IngestReport, ingest_directory
from application.use_cases.ingest_upload import ingest_upload, ingest_upload_bytes
from domain.entities import ContextResult, GenerationRequest, UploadRecord
from infrastructure.config import Container, ContainerConfig, build_default_container

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """Built once at startup and handed to every consumer.

    The corpus is immutable after ``ingest``; only the upload session changes
    afterwards, and its repository serialises those changes.
    """

    def __init__(self, container: Container) -> None:
        self._container = container
        self.ingest_report: IngestReport | None = None

    @classmethod
    def open(cls, config: ContainerConfig | None = None) -> "KnowledgeStore":
        store = cls(build_default_container(config))
        store.ingest()
        return store

    @property
    def container(self) -> Container:
        return self._container

    def ingest(self, root: str | Path | None = None) -> IngestReport:
        target = Path(root) if root is not None else self._container.knowledge_root
        self.ingest_report = ingest_directory(
            target,
            corpus_repository=self._container.corpus_repository,
            extractors=self._container.extractors,
        )
        return self.ingest_report

    def assemble(self, query: str) -> ContextResult:
        c = self._container
        return assemble_context(
            query,
            corpus_repository=c.corpus_repository,
            upload_repository=c.upload_repository,
            knowledge=c.knowledge,
            scorer=c.scorer,
            knowledge_root=c.knowledge_root,
            budget=c.budget,
        )

    def generation_request(self, query: str) -> tuple[GenerationRequest, ContextResult]:
        context = self.assemble(query)
        request = build_generation_request(
            query,
            context,
            model=self._container.model,
            options=self._container.generation,
        )
        return request, context

    def ingest_single(self, path: str | Path) -> UploadRecord:
        return ingest_upload(
            path,
            upload_repository=self._container.upload_repository,
            extractors=self._container.extractors,
        )

    def ingest_bytes(self, filename: str, data: bytes) -> UploadRecord:
        return ingest_upload_bytes(
            filename,
            data,
            upload_repository=self._container.upload_repository,
            extractors=self._container.extractors,
        )

    def list_uploads(self) -> list[str]:
        return [record.describe() for record in self._container.upload_repository.snapshot()]

    def clear_uploads(self) -> None:
        self._container.upload_repository.clear()
        logger.info("Cleared user uploads")

    def path_index(self) -> dict[str, str]:
        return self._container.corpus_repository.path_index()

    def citation_for(self, document_id: str) -> str:
        path = self._container.corpus_repository.path_for(document_id)
        if path is None:
            return document_id
        return format_citation(path, self._container.knowledge_root)


__all__ = ["KnowledgeStore"]
