"""Line-oriented HTML extractor that keeps troubleshooting-looking lines."""
from __future__ import annotations

import re
from typing import Sequence

from domain.entities import ExtractionResult
from domain.interfaces import TextExtractor

_SKIPPED_PREFIXES = ("<!", "<html", "<head", "<meta", "<link", "<script", "<style")
_TAG_PATTERN = re.compile(r"<[^>]+>")
DEFAULT_LINE_KEYWORDS = ("troubleshoot", "error", "problem", "solution", "step", "issue")
MIN_LINE_LENGTH = 20
MAX_LINE_LENGTH = 500


class HtmlExtractor(TextExtractor):
    """Heuristic extractor; not a real HTML parser.

    Keeps the page title and any line that mentions one of ``line_keywords``
    (matched case-sensitively against the raw line) once tags and the common
    entities are removed and its length falls strictly between 20 and 500.
    """

    def __init__(self, line_keywords: Sequence[str] = DEFAULT_LINE_KEYWORDS) -> None:
        self._line_keywords = tuple(line_keywords)

    def extract(self, source: bytes | str) -> ExtractionResult:
        raw = source.decode("utf-8", errors="ignore") if isinstance(source, bytes) else source
        parts: list[str] = []
        for line in raw.split("\n"):
            line = line.strip()
            if not line or line.startswith(_SKIPPED_PREFIXES):
                continue

            title = _title_of(line)
            if title:
                parts.append(f"Title: {title}\n")

            if any(keyword in line for keyword in self._line_keywords):
                cleaned = _clean_line(line)
                if MIN_LINE_LENGTH < len(cleaned) < MAX_LINE_LENGTH:
                    parts.append(cleaned + "\n")
        return ExtractionResult.ok("".join(parts))


def _title_of(line: str) -> str:
    start = line.find("<title>")
    end = line.find("</title>")
    if start == -1 or end == -1:
        return ""
    title = line[start + len("<title>") : end]
    return title if title.strip() else ""


def _clean_line(line: str) -> str:
    cleaned = line.replace("&quot;", '"').replace("&amp;", "&").replace("\\n", "\n")
    return _TAG_PATTERN.sub("", cleaned).strip()


__all__ = ["HtmlExtractor", "DEFAULT_LINE_KEYWORDS"]
