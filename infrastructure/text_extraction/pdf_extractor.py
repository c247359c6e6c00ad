"""PDF extractor built on pypdf."""
from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from domain.entities import ExtractionResult
from domain.interfaces import TextExtractor

logger = logging.getLogger(__name__)

# Glyphs that show up when a PDF font lacks a usable ToUnicode map.
_MOJIBAKE = ("♥", "◄", "↔", "�")
_SPACES = re.compile(r" {2,}")
_BLANK_LINES = re.compile(r"\n{3,}")
MIN_PAGE_LENGTH = 10


class PdfExtractor(TextExtractor):
    """Extract page text in order, dropping near-empty pages."""

    def extract(self, source: bytes | str) -> ExtractionResult:
        try:
            reader = PdfReader(BytesIO(source) if isinstance(source, bytes) else Path(source))
            pages = list(reader.pages)
        except Exception as exc:  # pypdf raises a wide range of errors on broken files
            logger.warning("Could not open PDF: %s", exc)
            return ExtractionResult.failure(f"unreadable PDF: {exc}")

        parts: list[str] = []
        for number, page in enumerate(pages, start=1):
            if page is None:
                continue
            try:
                raw = page.extract_text() or ""
            except Exception as exc:
                logger.debug("Skipping PDF page %d: %s", number, exc)
                continue
            text = clean_page_text(raw)
            if len(text) > MIN_PAGE_LENGTH:
                parts.append(text + "\n")

        if not parts:
            return ExtractionResult.failure("no extractable text")
        return ExtractionResult.ok("".join(parts))


def clean_page_text(text: str) -> str:
    text = text.strip()
    for glyph in _MOJIBAKE:
        text = text.replace(glyph, " ")
    text = _SPACES.sub(" ", text)
    return _BLANK_LINES.sub("\n\n", text)


__all__ = ["PdfExtractor", "clean_page_text"]
