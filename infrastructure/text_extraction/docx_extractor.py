"""DOCX extractor built on python-docx."""
from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path

from docx import Document as DocxDocument

from domain.entities import ExtractionResult
from domain.interfaces import TextExtractor

logger = logging.getLogger(__name__)

_HORIZONTAL_SPACE = re.compile(r"[ \t]+")
MIN_LINE_LENGTH = 4


class DocxExtractor(TextExtractor):
    """Extract paragraph and table text from Word documents."""

    def extract(self, source: bytes | str) -> ExtractionResult:
        try:
            doc = DocxDocument(BytesIO(source) if isinstance(source, bytes) else Path(source))
        except Exception as exc:  # python-docx surfaces zip, xml and key errors
            logger.warning("Could not read Word document: %s", exc)
            return ExtractionResult.failure(f"Error reading Word document: {exc}")

        lines = [
            line.strip()
            for line in _HORIZONTAL_SPACE.sub(" ", _collect_docx_text(doc)).split("\n")
        ]
        text = "".join(f"{line}\n" for line in lines if len(line) >= MIN_LINE_LENGTH)
        if not text.strip():
            return ExtractionResult.failure("Word document processed but no readable text content found")
        return ExtractionResult.ok(text)


def _collect_docx_text(doc: DocxDocument) -> str:
    parts: list[str] = []
    parts.extend(paragraph.text for paragraph in doc.paragraphs if paragraph.text)
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text:
                    parts.append(cell.text)
    return "\n".join(parts).strip()


class LegacyDocExtractor(TextExtractor):
    """Binary .doc files are not parsed; callers are asked to convert them."""

    def extract(self, source: bytes | str) -> ExtractionResult:
        return ExtractionResult.failure("Legacy .doc format not supported - please convert to .docx format")


__all__ = ["DocxExtractor", "LegacyDocExtractor"]
