"""Renders extracted API documentation as markdown or JSON."""

from __future__ import annotations

import json
from typing import List

from ..models import ApiDocumentation

MARKDOWN = "markdown"
JSON = "json"


def normalise_format(fmt: str | None) -> str:
    """Return ``json`` for a JSON selector and ``markdown`` for anything else."""
    return JSON if (fmt or "").strip().lower() == JSON else MARKDOWN


def render_api_docs(docs: ApiDocumentation, fmt: str | None = MARKDOWN) -> str:
    if normalise_format(fmt) == JSON:
        return json.dumps(docs.to_dict(), indent=2, ensure_ascii=False)
    return render_markdown(docs)


def render_markdown(docs: ApiDocumentation) -> str:
    """Return the ``### Public API`` section, or an empty string when nothing is documented."""
    if docs.is_empty():
        return ""

    lines: List[str] = ["### Public API", ""]
    for group in docs.namespaces:
        if not group.entries:
            continue
        lines.append(f"#### {group.namespace}")
        lines.append("")
        for entry in group.entries:
            lines.append(f"**{entry.name}**")
            if entry.summary:
                lines.append(f"- {entry.summary}")
            lines.append("")
    return "\n".join(lines)


__all__ = ["JSON", "MARKDOWN", "normalise_format", "render_api_docs", "render_markdown"]
