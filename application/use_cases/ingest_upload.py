"""Use case for files the user attaches during a session."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Mapping

from application.use_cases.ingest_paths import classify_path, extractor_for, kind_label, sentinel_for
from domain.entities import DocumentKind, UploadRecord
from domain.errors import UploadError
from domain.interfaces import TextExtractor, UploadRepository

logger = logging.getLogger(__name__)


def upload_id(filename: str, uploaded_at: datetime) -> str:
    return f"upload_{uploaded_at:%Y%m%d%H%M%S%f}_{filename}"


def ingest_upload(
    path: str | Path,
    *,
    upload_repository: UploadRepository,
    extractors: Mapping[str, TextExtractor] | None = None,
    now: datetime | None = None,
) -> UploadRecord:
    """Read a local file and store it in the session.

    Raises ``UploadError`` when the file cannot be read; see
    ``ingest_upload_bytes`` for the format handling.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise UploadError(str(file_path), str(exc)) from exc
    return ingest_upload_bytes(
        file_path.name,
        raw,
        upload_repository=upload_repository,
        extractors=extractors,
        now=now,
        source_path=str(file_path),
    )


def ingest_upload_bytes(
    filename: str,
    raw: bytes,
    *,
    upload_repository: UploadRepository,
    extractors: Mapping[str, TextExtractor] | None = None,
    now: datetime | None = None,
    source_path: str | None = None,
) -> UploadRecord:
    """Extract an uploaded payload into the session store.

    The format is chosen from ``filename``. Raises ``UploadError`` when it is
    neither a known format nor UTF-8 text. Extraction failures of known formats
    are stored as visible placeholders instead.
    """
    uploaded_at = now or datetime.now()
    origin = source_path or filename

    kind = classify_path(filename)
    extractor = extractor_for(filename, extractors)
    failed = False
    if kind is None or extractor is None:
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UploadError(origin, f"unsupported file type: {filename}") from exc
    else:
        result = extractor.extract(raw)
        content = result.text
        if result.failed:
            failed = True
            logger.warning("Extraction failed for uploaded %s: %s", origin, result.text)
            content = _upload_sentinel(filename, kind)

    record = UploadRecord(
        id=upload_id(filename, uploaded_at),
        display_name=filename,
        path=origin,
        content=content,
        uploaded_at=uploaded_at,
        failed=failed,
    )
    upload_repository.add(record)
    logger.info("Stored upload %s (%d characters)", record.id, len(content))
    return record


def _upload_sentinel(filename: str, kind: DocumentKind) -> str:
    if Path(filename).suffix.lower() == ".doc":
        return sentinel_for(filename, kind, None)
    return f"Failed to extract text from uploaded {kind_label(kind)} - {filename}"


__all__ = ["ingest_upload", "ingest_upload_bytes", "upload_id"]
