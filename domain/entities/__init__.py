"""Domain entities for the troubleshooting context engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping


class DocumentKind(str, Enum):
    """Extraction kind of an ingested document."""

    TEXT = "text"
    MARKUP = "markup"
    MARKUP_HTML = "markup-html"
    PAGINATED = "paginated"
    WORD_PROCESSOR = "word-processor"
    IMAGE = "image"


TEXT_KINDS = (DocumentKind.TEXT, DocumentKind.MARKUP, DocumentKind.MARKUP_HTML)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Outcome of an extractor: real text or a failure reason."""

    text: str
    failed: bool = False

    @classmethod
    def ok(cls, text: str) -> "ExtractionResult":
        return cls(text=text)

    @classmethod
    def failure(cls, reason: str) -> "ExtractionResult":
        return cls(text=reason, failed=True)


@dataclass(slots=True, frozen=True)
class Document:
    """An ingested corpus document; ``content`` holds the sentinel when ``failed``."""

    id: str
    path: str
    kind: DocumentKind
    content: str
    failed: bool = False


@dataclass(slots=True, frozen=True)
class UploadRecord:
    """A file submitted by the user for the current session."""

    id: str
    display_name: str
    path: str
    content: str
    uploaded_at: datetime
    failed: bool = False

    def describe(self) -> str:
        return f"{self.display_name} (uploaded {self.uploaded_at:%H:%M:%S})"


@dataclass(slots=True, frozen=True)
class ErrorEntry:
    code: str
    description: str
    category: str = ""
    severity: str = ""
    steps: tuple[str, ...] = ()
    related_components: tuple[str, ...] = ()
    doc_reference: str = ""


@dataclass(slots=True, frozen=True)
class CommonIssue:
    issue: str
    symptoms: tuple[str, ...] = ()
    solutions: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class StructuredKnowledge:
    """Curated error entries and common issues loaded once at startup."""

    error_entries: tuple[ErrorEntry, ...] = ()
    common_issues: tuple[CommonIssue, ...] = ()


@dataclass(slots=True)
class ContextResult:
    """Assembled context for one query plus citations in contribution order."""

    text: str
    sources: list[str] = field(default_factory=list)
    out_of_scope: bool = False


_GENERATION_FIELDS = ("num_predict", "temperature", "top_p")


@dataclass(slots=True, frozen=True)
class GenerationOptions:
    """Sampling options forwarded to the text-generation call."""

    num_predict: int = 1000
    temperature: float = 0.7
    top_p: float = 0.9

    def __post_init__(self) -> None:
        if self.num_predict <= 0:
            raise ValueError("num_predict must be positive")
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError("temperature must be within [0, 2]")
        if not 0.0 < self.top_p <= 1.0:
            raise ValueError("top_p must be within (0, 1]")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "GenerationOptions":
        unknown = sorted(set(options) - set(_GENERATION_FIELDS))
        if unknown:
            raise ValueError(f"Unknown generation option(s): {', '.join(unknown)}")
        return cls(**dict(options))

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in _GENERATION_FIELDS}


@dataclass(slots=True, frozen=True)
class GenerationRequest:
    model: str
    prompt: str
    options: GenerationOptions = field(default_factory=GenerationOptions)
    stream: bool = False

    def as_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.prompt,
            "stream": self.stream,
            "options": self.options.as_dict(),
        }


__all__ = [
    "DocumentKind",
    "TEXT_KINDS",
    "ExtractionResult",
    "Document",
    "UploadRecord",
    "ErrorEntry",
    "CommonIssue",
    "StructuredKnowledge",
    "ContextResult",
    "GenerationOptions",
    "GenerationRequest",
]
