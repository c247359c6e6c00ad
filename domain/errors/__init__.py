"""Exceptions raised by the troubleshooting context engine."""
from __future__ import annotations


class KnowledgeBaseError(Exception):
    """Base class for engine errors."""


class StructuredKnowledgeError(KnowledgeBaseError):
    """The structured knowledge file is missing or malformed; startup must abort."""


class UploadError(KnowledgeBaseError):
    """A user upload could not be read or has an unsupported format."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to process uploaded file {path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = ["KnowledgeBaseError", "StructuredKnowledgeError", "UploadError"]
