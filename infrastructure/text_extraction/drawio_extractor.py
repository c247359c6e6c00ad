"""Extractor for draw.io diagrams: collects the labels users typed into shapes."""
from __future__ import annotations

import re

from domain.entities import ExtractionResult
from domain.interfaces import TextExtractor

_VALUE_PATTERN = re.compile(r'value="([^"]*)"')
_ENTITIES = (
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&#xa;", "\n"),
)
MIN_LABEL_LENGTH = 6


def decode_entities(text: str) -> str:
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text


class DrawioExtractor(TextExtractor):
    """Pull ``value="..."`` attributes out of the diagram XML."""

    def extract(self, source: bytes | str) -> ExtractionResult:
        raw = source.decode("utf-8", errors="ignore") if isinstance(source, bytes) else source
        labels: list[str] = []
        for match in _VALUE_PATTERN.finditer(raw):
            label = decode_entities(match.group(1))
            if len(label.strip()) >= MIN_LABEL_LENGTH:
                labels.append(label + "\n")
        return ExtractionResult.ok("".join(labels))


__all__ = ["DrawioExtractor", "decode_entities"]
