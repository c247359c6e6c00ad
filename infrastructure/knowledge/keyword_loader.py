"""Loads a keyword file that overrides the default vocabularies."""
from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from application.services.keywords import KeywordSet


class KeywordFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    domain_keywords: list[str] | None = None
    technical_query_keywords: list[str] | None = None
    upload_keywords: list[str] | None = None
    relevance_triggers: list[str] | None = None
    markup_line_keywords: list[str] | None = None


def load_keyword_set(path: str | Path) -> KeywordSet:
    """Lists missing from the file keep their defaults; unknown keys are rejected."""
    keyword_path = Path(path)
    try:
        model = KeywordFileModel.model_validate(json.loads(keyword_path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Invalid keyword file {keyword_path}: {exc}") from exc
    overrides = {name: tuple(values) for name, values in model.model_dump().items() if values is not None}
    return KeywordSet(**overrides)


__all__ = ["load_keyword_set"]
