"""Loads the structured troubleshooting data file (error codes and common issues)."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from domain.entities import CommonIssue, ErrorEntry, StructuredKnowledge
from domain.errors import StructuredKnowledgeError

logger = logging.getLogger(__name__)


class ErrorCodeModel(BaseModel):
    code: str = Field(min_length=1)
    description: str
    category: str = ""
    severity: str = ""
    troubleshooting_steps: list[str] = Field(default_factory=list)
    related_components: list[str] = Field(default_factory=list)
    documentation_reference: str = ""

    def to_entity(self) -> ErrorEntry:
        return ErrorEntry(
            code=self.code,
            description=self.description,
            category=self.category,
            severity=self.severity,
            steps=tuple(self.troubleshooting_steps),
            related_components=tuple(self.related_components),
            doc_reference=self.documentation_reference,
        )


class CommonIssueModel(BaseModel):
    issue: str = Field(min_length=1)
    symptoms: list[str] = Field(default_factory=list)
    solutions: list[str] = Field(default_factory=list)

    def to_entity(self) -> CommonIssue:
        return CommonIssue(
            issue=self.issue,
            symptoms=tuple(self.symptoms),
            solutions=tuple(self.solutions),
        )


class TroubleshootingDataModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    error_codes: list[ErrorCodeModel] = Field(default_factory=list)
    common_issues: list[CommonIssueModel] = Field(default_factory=list)


def parse_structured_knowledge(raw: str | bytes, *, source: str = "<memory>") -> StructuredKnowledge:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StructuredKnowledgeError(f"{source} is not valid JSON: {exc}") from exc
    try:
        data = TroubleshootingDataModel.model_validate(payload)
    except ValidationError as exc:
        raise StructuredKnowledgeError(f"{source} does not match the expected schema: {exc}") from exc
    return StructuredKnowledge(
        error_entries=tuple(item.to_entity() for item in data.error_codes),
        common_issues=tuple(item.to_entity() for item in data.common_issues),
    )


def load_structured_knowledge(path: str | Path) -> StructuredKnowledge:
    """Read and validate the data file; any problem is fatal for startup."""
    data_path = Path(path)
    try:
        raw = data_path.read_bytes()
    except OSError as exc:
        raise StructuredKnowledgeError(f"Failed to read {data_path}: {exc}") from exc
    knowledge = parse_structured_knowledge(raw, source=str(data_path))
    logger.info(
        "Loaded %d error codes and %d common issues from %s",
        len(knowledge.error_entries),
        len(knowledge.common_issues),
        data_path,
    )
    return knowledge


__all__ = ["load_structured_knowledge", "parse_structured_knowledge"]
