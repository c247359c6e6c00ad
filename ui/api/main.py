"""FastAPI layer exposing context assembly and the upload session."""
from __future__ import annotations

from functools import lru_cache
from pathlib import PurePath
from typing import Any

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from application.services.knowledge_store import KnowledgeStore
from application.use_cases.build_prompt import format_sources_section
from domain.errors import UploadError
from infrastructure.config import ContainerConfig
from ui.logging_utils import setup_logging


class ContextRequest(BaseModel):
    query: str = Field(..., min_length=1, description="User troubleshooting question")


class ContextResponse(BaseModel):
    text: str
    sources: list[str]
    out_of_scope: bool
    sources_section: str


class PromptResponse(BaseModel):
    payload: dict[str, Any]
    sources: list[str]


class UploadResponse(BaseModel):
    id: str
    display_name: str
    failed: bool


class UploadListResponse(BaseModel):
    uploads: list[str]


@lru_cache(maxsize=1)
def _default_store() -> KnowledgeStore:
    setup_logging()
    return KnowledgeStore.open(ContainerConfig.from_env())


def create_app(store: KnowledgeStore | None = None) -> FastAPI:
    app = FastAPI(title="Troubleshooting Context API")

    def get_store() -> KnowledgeStore:
        return store if store is not None else _default_store()

    @app.post("/context", response_model=ContextResponse)
    def context_endpoint(payload: ContextRequest, kb: KnowledgeStore = Depends(get_store)) -> ContextResponse:
        result = kb.assemble(payload.query)
        return ContextResponse(
            text=result.text,
            sources=result.sources,
            out_of_scope=result.out_of_scope,
            sources_section=format_sources_section(result.sources, out_of_scope=result.out_of_scope),
        )

    @app.post("/prompt", response_model=PromptResponse)
    def prompt_endpoint(payload: ContextRequest, kb: KnowledgeStore = Depends(get_store)) -> PromptResponse:
        request, context = kb.generation_request(payload.query)
        return PromptResponse(payload=request.as_payload(), sources=context.sources)

    @app.post("/uploads", response_model=UploadResponse, status_code=201)
    def upload_endpoint(
        file: UploadFile = File(..., description="File attached to the troubleshooting session"),
        kb: KnowledgeStore = Depends(get_store),
    ) -> UploadResponse:
        # Only the base name is kept; clients cannot name server paths.
        filename = PurePath((file.filename or "").replace("\\", "/")).name
        if not filename:
            raise HTTPException(status_code=400, detail="Uploaded file has no name")
        try:
            record = kb.ingest_bytes(filename, file.file.read())
        except UploadError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return UploadResponse(id=record.id, display_name=record.display_name, failed=record.failed)

    @app.get("/uploads", response_model=UploadListResponse)
    def list_uploads_endpoint(kb: KnowledgeStore = Depends(get_store)) -> UploadListResponse:
        return UploadListResponse(uploads=kb.list_uploads())

    @app.delete("/uploads", status_code=204)
    def clear_uploads_endpoint(kb: KnowledgeStore = Depends(get_store)) -> None:
        kb.clear_uploads()

    @app.get("/sources", response_model=dict[str, str])
    def sources_endpoint(kb: KnowledgeStore = Depends(get_store)) -> dict[str, str]:
        return {document_id: kb.citation_for(document_id) for document_id in kb.path_index()}

    return app


app = create_app()
