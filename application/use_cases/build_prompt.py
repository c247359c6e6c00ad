"""Turns an assembled context into a generation request and a sources footer."""
from __future__ import annotations

from typing import Sequence

from domain.entities import ContextResult, GenerationOptions, GenerationRequest

PROMPT_TEMPLATE = """You are an engineering support assistant. Analyze the user's issue and provide structured engineering guidance based on the provided knowledge base.

User Issue: {query}

Knowledge Base:
{context}

Provide structured engineering response:

1. PROBLEM ANALYSIS: [Identify the core issue: What is failing? What symptoms are described? What system/component is affected?]

2. SOLUTION STEPS:
   - Step 1: [First diagnostic/corrective action]
   - Step 2: [Next action based on knowledge base]
   - Step 3: [Additional verification/fix step]

3. IF PROBLEM PERSISTS: [Advanced troubleshooting or escalation steps]

Important: Base your response on the knowledge base provided. If the knowledge base contains relevant information, reference it in your solution. Analyze the user's description carefully and provide specific, actionable engineering guidance."""

SOURCES_HEADER = "\n\n---\n\n**Sources Referenced:**\n\n"
NO_SOURCES_NOTE = (
    "*No documents from the knowledge base were referenced for this response. "
    "This answer is based on general knowledge and may not reflect your specific documentation or procedures.*\n"
)
OUT_OF_SCOPE_NOTE = (
    "*No relevant documents were found for this query. "
    "The question appears to be outside the scope of the available technical documentation.*\n"
)


def build_prompt(query: str, context_text: str) -> str:
    return PROMPT_TEMPLATE.format(query=query, context=context_text)


def build_generation_request(
    query: str,
    context: ContextResult,
    *,
    model: str,
    options: GenerationOptions | None = None,
) -> GenerationRequest:
    return GenerationRequest(
        model=model,
        prompt=build_prompt(query, context.text),
        options=options or GenerationOptions(),
    )


def format_sources_section(sources: Sequence[str], *, out_of_scope: bool = False) -> str:
    """Numbered citation footer appended to every answer, even when empty."""
    if not sources:
        return SOURCES_HEADER + (OUT_OF_SCOPE_NOTE if out_of_scope else NO_SOURCES_NOTE)
    lines = "".join(f"{number}. {source}\n" for number, source in enumerate(sources, start=1))
    return SOURCES_HEADER + lines


__all__ = [
    "build_prompt",
    "build_generation_request",
    "format_sources_section",
]
