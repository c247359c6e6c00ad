"""Keyword vocabularies used by relevance scoring and query classification."""
from __future__ import annotations

from dataclasses import dataclass, fields

# Technical terms, tool names and team jargon; substring-matched against both
# the query and the document.
DEFAULT_DOMAIN_KEYWORDS: tuple[str, ...] = (
    # troubleshooting vocabulary
    "error", "troubleshoot", "communication", "sensor", "power", "temperature",
    "timeout", "connection", "voltage", "calibration", "cycler", "device",
    "interface", "problem", "issue", "solution", "step", "procedure",
    "check", "verify", "test", "replace", "restart", "configure",
    "support", "jira", "ticket", "contact", "help", "official",
    "execution", "standard", "process", "team", "unofficial", "pdf", "file",
    "open", "document", "manual", "guide", "instruction", "setup", "install",
    "software", "hardware", "system", "application", "program", "tool",
    # test automation and lab software
    "automation", "python", "channel", "module", "schedule", "display", "data",
    "logging", "report", "security", "configuration", "developer", "api",
    "scripting", "control", "panel", "limit", "alarm", "calculation", "variable",
    "function", "installation", "getting", "started", "how", "use", "managing",
    "creating",
    # meetings and documents
    "word", "docx", "meeting", "notes", "discussion", "minutes", "agenda",
    "action", "item", "decision", "requirement", "specification", "design",
    # images and visual content
    "image", "screenshot", "diagram", "flowchart", "picture", "photo",
    "visual", "graphic", "chart", "graph", "screen", "png", "jpg", "jpeg",
    "bmp", "gif", "tiff", "ocr", "text",
    # lab, build and operations tooling
    "battery", "lab", "integration", "testing", "flash", "firmware", "jenkins",
    "build", "deploy", "release", "patch", "teststand", "national",
    "instruments", "systemlink", "grafana", "influx", "influxdb", "telegraf",
    "pagerduty", "sentry", "container", "pack", "cell", "formation", "pulse",
    "utilization", "pxi", "port", "serial", "vehicle", "troubleshooting",
    "wsus", "artifactory", "wheel", "deployment", "kubernetes", "k8s", "vpn",
    "access", "camera", "relay", "server", "hotswap", "replacement",
    "connectivity", "licensing", "studio", "service", "desk", "confluence",
    "atlassian", "markdown", "sprint", "retrospective", "planning", "ingestion",
    "utility", "transfer", "sheet", "flow", "engineer", "contractor", "onboard",
    "commander", "loader", "innovation", "center", "validation", "win10",
    "work", "track", "presentation",
)

DEFAULT_TECHNICAL_QUERY_KEYWORDS: tuple[str, ...] = (
    "error", "problem", "troubleshoot", "timeout", "connection", "device",
    "communication", "system", "software", "hardware", "issue", "failure",
    "malfunction",
)

DEFAULT_UPLOAD_KEYWORDS: tuple[str, ...] = (
    "error", "problem", "issue", "step", "solution", "configure", "install", "troubleshoot",
)

# Content containing any of these is always considered relevant.
DEFAULT_RELEVANCE_TRIGGERS: tuple[str, ...] = ("troubleshoot", "solution", "procedure")

DEFAULT_MARKUP_LINE_KEYWORDS: tuple[str, ...] = (
    "troubleshoot", "error", "problem", "solution", "step", "issue",
)


@dataclass(slots=True, frozen=True)
class KeywordSet:
    """Replaceable vocabularies; every list defaults to the compiled constants."""

    domain_keywords: tuple[str, ...] = DEFAULT_DOMAIN_KEYWORDS
    technical_query_keywords: tuple[str, ...] = DEFAULT_TECHNICAL_QUERY_KEYWORDS
    upload_keywords: tuple[str, ...] = DEFAULT_UPLOAD_KEYWORDS
    relevance_triggers: tuple[str, ...] = DEFAULT_RELEVANCE_TRIGGERS
    markup_line_keywords: tuple[str, ...] = DEFAULT_MARKUP_LINE_KEYWORDS

    def __post_init__(self) -> None:
        for item in fields(self):
            values = getattr(self, item.name)
            normalized = tuple(dict.fromkeys(v.strip().lower() for v in values if v.strip()))
            object.__setattr__(self, item.name, normalized)


DEFAULT_KEYWORDS = KeywordSet()


__all__ = [
    "KeywordSet",
    "DEFAULT_KEYWORDS",
    "DEFAULT_DOMAIN_KEYWORDS",
    "DEFAULT_TECHNICAL_QUERY_KEYWORDS",
    "DEFAULT_UPLOAD_KEYWORDS",
    "DEFAULT_RELEVANCE_TRIGGERS",
    "DEFAULT_MARKUP_LINE_KEYWORDS",
]
