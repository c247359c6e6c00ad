"""Text extractor that treats the payload as plain UTF-8 text."""
from __future__ import annotations

from domain.entities import ExtractionResult
from domain.interfaces import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Return text files unmodified."""

    def extract(self, source: bytes | str) -> ExtractionResult:
        if isinstance(source, bytes):
            return ExtractionResult.ok(source.decode("utf-8", errors="ignore"))
        return ExtractionResult.ok(source)


__all__ = ["PlainTextExtractor"]
