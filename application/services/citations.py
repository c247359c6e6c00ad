"""Short, human-readable source references for assembled context."""
from __future__ import annotations

from pathlib import Path


def _components(path: str) -> list[str]:
    return [part for part in path.replace("\\", "/").split("/") if part and part != "."]


def format_citation(path: str, root: str | Path | None = None) -> str:
    """Render ``path`` as ``<parent-folder>/<filename>`` relative to ``root``.

    Files directly under the root render as just the filename; deeper files show
    only their immediate parent folder.
    """
    parts = _components(path)
    root_parts = _components(str(root)) if root is not None else []
    if root_parts and parts[: len(root_parts)] == root_parts:
        parts = parts[len(root_parts) :]
    if not parts:
        return path
    if len(parts) == 1:
        return parts[0]
    return f"{parts[-2]}/{parts[-1]}"


__all__ = ["format_citation"]
