"""Placeholder image extractor.

No text recognition happens here: the result only records the file size and a
fixed set of generic keywords so images stay searchable. A real OCR backend can
replace this class behind the same ``TextExtractor`` contract.
"""
from __future__ import annotations

from pathlib import Path

from domain.entities import ExtractionResult
from domain.interfaces import TextExtractor

IMAGE_KEYWORDS = "screenshot diagram flowchart error message interface"


class ImageExtractor(TextExtractor):
    def extract(self, source: bytes | str) -> ExtractionResult:
        if isinstance(source, str):
            path = Path(source)
            if not path.is_file():
                return ExtractionResult.failure(f"Image file not found: {source}")
            size = path.stat().st_size
        else:
            size = len(source)
        if size == 0:
            return ExtractionResult.failure("empty image file")
        return ExtractionResult.ok(
            "Image processed\n"
            f"File size: {size} bytes\n"
            "OCR not available - image metadata only\n"
            f"Image content: {IMAGE_KEYWORDS}\n"
        )


__all__ = ["ImageExtractor", "IMAGE_KEYWORDS"]
