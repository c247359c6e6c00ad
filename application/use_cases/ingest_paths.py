"""Use case that ingests a knowledge directory into the corpus store."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from domain.entities import Document, DocumentKind, ExtractionResult
from domain.interfaces import CorpusRepository, TextExtractor
from infrastructure.text_extraction.docx_extractor import DocxExtractor, LegacyDocExtractor
from infrastructure.text_extraction.drawio_extractor import DrawioExtractor
from infrastructure.text_extraction.html_extractor import HtmlExtractor
from infrastructure.text_extraction.image_extractor import ImageExtractor
from infrastructure.text_extraction.pdf_extractor import PdfExtractor
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestError:
    path: str
    reason: str


@dataclass(slots=True)
class IngestReport:
    total: int = 0
    ingested: int = 0
    skipped: int = 0
    failures: list[IngestError] = field(default_factory=list)


_EXTENSION_KINDS: dict[str, DocumentKind] = {
    ".txt": DocumentKind.TEXT,
    ".drawio": DocumentKind.MARKUP,
    ".html": DocumentKind.MARKUP_HTML,
    ".htm": DocumentKind.MARKUP_HTML,
    ".pdf": DocumentKind.PAGINATED,
    ".docx": DocumentKind.WORD_PROCESSOR,
    ".doc": DocumentKind.WORD_PROCESSOR,
    ".png": DocumentKind.IMAGE,
    ".jpg": DocumentKind.IMAGE,
    ".jpeg": DocumentKind.IMAGE,
    ".bmp": DocumentKind.IMAGE,
    ".gif": DocumentKind.IMAGE,
    ".tiff": DocumentKind.IMAGE,
}

# Extractors are keyed by extension because .doc and .docx share a kind.
DEFAULT_EXTRACTORS: dict[str, TextExtractor] = {
    ".txt": PlainTextExtractor(),
    ".drawio": DrawioExtractor(),
    ".html": HtmlExtractor(),
    ".htm": HtmlExtractor(),
    ".pdf": PdfExtractor(),
    ".docx": DocxExtractor(),
    ".doc": LegacyDocExtractor(),
    ".png": ImageExtractor(),
    ".jpg": ImageExtractor(),
    ".jpeg": ImageExtractor(),
    ".bmp": ImageExtractor(),
    ".gif": ImageExtractor(),
    ".tiff": ImageExtractor(),
}

_KIND_LABELS: dict[DocumentKind, str] = {
    DocumentKind.TEXT: "text file",
    DocumentKind.MARKUP: "diagram",
    DocumentKind.MARKUP_HTML: "HTML file",
    DocumentKind.PAGINATED: "PDF",
    DocumentKind.WORD_PROCESSOR: "Word document",
    DocumentKind.IMAGE: "image",
}


def classify_path(path: str | Path) -> DocumentKind | None:
    """Map a file to its document kind by (case-insensitive) extension."""
    return _EXTENSION_KINDS.get(Path(path).suffix.lower())


def kind_label(kind: DocumentKind) -> str:
    return _KIND_LABELS[kind]


def extractor_for(path: str | Path, extractors: Mapping[str, TextExtractor] | None = None) -> TextExtractor | None:
    return (extractors or DEFAULT_EXTRACTORS).get(Path(path).suffix.lower())


def sentinel_for(name: str, kind: DocumentKind, result: ExtractionResult | None) -> str:
    """Visible placeholder stored instead of text when a corpus file cannot be read."""
    if kind is DocumentKind.PAGINATED:
        return f"Failed to extract text from PDF - {name}"
    if kind is DocumentKind.WORD_PROCESSOR:
        if Path(name).suffix.lower() == ".doc":
            return f"Legacy .doc format not supported - please convert to .docx format: {name}"
        detail = f" ({result.text})" if result is not None else ""
        return f"Failed to extract text from Word document - {name}{detail}"
    if kind is DocumentKind.IMAGE:
        return f"Failed to process image - {name}"
    return f"Failed to read file - {name}"


def ingest_directory(
    root: str | Path,
    *,
    corpus_repository: CorpusRepository,
    extractors: Mapping[str, TextExtractor] | None = None,
) -> IngestReport:
    """Walk ``root`` depth-first and store every recognised file.

    Per-file problems never abort the walk: unreadable or unparseable files are
    stored as sentinel documents so they still show up in the corpus.
    """
    report = IngestReport()
    root_path = Path(root)
    if not root_path.is_dir():
        logger.warning("Knowledge directory %s does not exist; corpus is empty", root_path)
        return report

    _walk(root_path, corpus_repository, extractors, report)
    logger.info(
        "Ingested %d of %d files from %s (%d skipped, %d failed)",
        report.ingested,
        report.total,
        root_path,
        report.skipped,
        len(report.failures),
    )
    return report


def _walk(
    directory: Path,
    corpus_repository: CorpusRepository,
    extractors: Mapping[str, TextExtractor] | None,
    report: IngestReport,
) -> None:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("Cannot list %s: %s", directory, exc)
        report.failures.append(IngestError(path=str(directory), reason=str(exc)))
        return

    for entry in entries:
        path = directory / entry.name
        try:
            # Symlinked directories are not descended into; links to files are read.
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file()
        except OSError as exc:
            logger.warning("Cannot inspect %s: %s", path, exc)
            report.failures.append(IngestError(path=str(path), reason=str(exc)))
            continue
        if is_dir:
            _walk(path, corpus_repository, extractors, report)
            continue
        if not is_file:
            logger.debug("Skipping %s: not a regular file", path)
            continue
        report.total += 1
        kind = classify_path(path)
        extractor = extractor_for(path, extractors)
        if kind is None or extractor is None:
            report.skipped += 1
            continue
        document = _ingest_file(path, kind, extractor, report)
        if document is None:
            report.skipped += 1
            continue
        corpus_repository.add(document)
        report.ingested += 1


def _ingest_file(path: Path, kind: DocumentKind, extractor: TextExtractor, report: IngestReport) -> Document | None:
    name = path.name
    try:
        result = extractor.extract(path.read_bytes())
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        report.failures.append(IngestError(path=str(path), reason=str(exc)))
        return Document(id=name, path=str(path), kind=kind, content=sentinel_for(name, kind, None), failed=True)

    if result.failed:
        logger.warning("Extraction failed for %s: %s", path, result.text)
        report.failures.append(IngestError(path=str(path), reason=result.text))
        return Document(id=name, path=str(path), kind=kind, content=sentinel_for(name, kind, result), failed=True)

    if not result.text and kind in (DocumentKind.MARKUP, DocumentKind.MARKUP_HTML):
        logger.debug("No usable text in %s", path)
        return None
    return Document(id=name, path=str(path), kind=kind, content=result.text)


__all__ = [
    "ingest_directory",
    "classify_path",
    "extractor_for",
    "kind_label",
    "sentinel_for",
    "IngestReport",
    "IngestError",
    "DEFAULT_EXTRACTORS",
]
