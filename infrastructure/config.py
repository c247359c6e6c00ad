"""Dependency wiring for the troubleshooting context engine."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from application.services.keywords import DEFAULT_KEYWORDS, KeywordSet
from application.services.relevance import RelevanceScorer
from application.use_cases.assemble_context import ContextBudget
from application.use_cases.ingest_paths import DEFAULT_EXTRACTORS
from domain.entities import GenerationOptions, StructuredKnowledge
from domain.interfaces import CorpusRepository, TextExtractor, UploadRepository
from infrastructure.knowledge.json_knowledge_loader import load_structured_knowledge
from infrastructure.knowledge.keyword_loader import load_keyword_set
from infrastructure.storage.in_memory_corpus_repository import InMemoryCorpusRepository
from infrastructure.storage.in_memory_upload_repository import InMemoryUploadRepository
from infrastructure.text_extraction.html_extractor import HtmlExtractor

ENV_PREFIX = "TECHCONTEXT_"
DEFAULT_MODEL = "llama3.2:1b"


@dataclass(slots=True)
class Container:
    """Concrete collaborators shared by every use case."""

    corpus_repository: CorpusRepository
    upload_repository: UploadRepository
    knowledge: StructuredKnowledge
    scorer: RelevanceScorer
    extractors: dict[str, TextExtractor]
    knowledge_root: Path
    budget: ContextBudget
    model: str
    generation: GenerationOptions


@dataclass(slots=True)
class ContainerConfig:
    """Where the corpus lives and how the engine is tuned."""

    knowledge_root: str = "knowledge"
    structured_data_path: str = "knowledge/troubleshooting.json"
    keywords_path: str | None = None
    model: str = DEFAULT_MODEL
    generation: GenerationOptions = field(default_factory=GenerationOptions)
    budget: ContextBudget = field(default_factory=ContextBudget)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ContainerConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            knowledge_root=env.get(f"{ENV_PREFIX}KNOWLEDGE_ROOT", defaults.knowledge_root),
            structured_data_path=env.get(f"{ENV_PREFIX}STRUCTURED_DATA", defaults.structured_data_path),
            keywords_path=env.get(f"{ENV_PREFIX}KEYWORDS_FILE") or None,
            model=env.get(f"{ENV_PREFIX}MODEL", defaults.model),
        )


def build_extractors(keywords: KeywordSet) -> dict[str, TextExtractor]:
    extractors = dict(DEFAULT_EXTRACTORS)
    html = HtmlExtractor(line_keywords=keywords.markup_line_keywords)
    extractors[".html"] = html
    extractors[".htm"] = html
    return extractors


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default stack. Raises ``StructuredKnowledgeError`` on bad data."""

    cfg = config or ContainerConfig()
    knowledge = load_structured_knowledge(cfg.structured_data_path)
    keywords = load_keyword_set(cfg.keywords_path) if cfg.keywords_path else DEFAULT_KEYWORDS

    return Container(
        corpus_repository=InMemoryCorpusRepository(),
        upload_repository=InMemoryUploadRepository(),
        knowledge=knowledge,
        scorer=RelevanceScorer(keywords),
        extractors=build_extractors(keywords),
        knowledge_root=Path(cfg.knowledge_root),
        budget=cfg.budget,
        model=cfg.model,
        generation=cfg.generation,
    )


__all__ = ["Container", "ContainerConfig", "build_default_container", "build_extractors"]
