"""Extracts namespace-grouped API documentation from public declarations."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .base import validate_descriptor
from ..errors import AnalysisFailure, SharpDocError
from ..logging import analysis_logger
from ..models import (
    GLOBAL_NAMESPACE,
    ApiDocumentation,
    DocumentationEntry,
    group_documentation,
)
from ..toolchain import BuildToolchain, Declaration, Workspace, default_toolchain

_LOGGER = analysis_logger("docs")


def extract_xml_element(xml: str, element: str) -> str:
    """Return the trimmed inner text of the first ``<element>`` block.

    This is a plain substring search rather than an XML parse, so malformed
    comment markup still yields whatever text sits between the tags. Returns
    an empty string when either tag is missing.
    """
    lowered = xml.lower()
    start_tag = f"<{element.lower()}>"
    end_tag = f"</{element.lower()}>"

    start = lowered.find(start_tag)
    if start == -1:
        return ""
    start += len(start_tag)
    end = lowered.find(end_tag, start)
    if end == -1:
        return ""
    return xml[start:end].strip()


class DocumentationExtractor:
    """Collects documented public symbols from every module of a workspace."""

    def __init__(self, toolchain: BuildToolchain | None = None) -> None:
        self._toolchain = toolchain or default_toolchain()

    def extract(self, project_path: str | Path) -> ApiDocumentation:
        _LOGGER.info("Extracting API documentation from: %s", project_path)
        descriptor, _ = validate_descriptor(project_path)

        entries: List[DocumentationEntry] = []
        try:
            with self._toolchain.open_workspace(descriptor) as workspace:
                for module in workspace.enumerate_modules():
                    for declaration in workspace.enumerate_declarations(module):
                        if not declaration.is_public:
                            continue
                        entry = self._document(workspace, declaration)
                        if entry is not None:
                            entries.append(entry)
        except SharpDocError:
            _LOGGER.error("Error extracting API documentation from %s", project_path)
            raise
        except Exception as exc:
            _LOGGER.error("Error extracting API documentation from %s: %s", project_path, exc)
            raise AnalysisFailure(
                f"Could not extract API documentation for {project_path}: {exc}", exc
            ) from exc

        docs = ApiDocumentation(
            project_path=str(descriptor),
            namespaces=group_documentation(entries),
        )
        _LOGGER.info("Documented %d public symbol(s)", len(entries))
        return docs

    @staticmethod
    def _document(workspace: Workspace, declaration: Declaration) -> Optional[DocumentationEntry]:
        symbol = workspace.resolve_symbol(declaration)
        if symbol is None:
            return None
        markup = workspace.get_doc_comment(symbol)
        if not markup:
            return None
        return DocumentationEntry(
            name=symbol.name,
            namespace=symbol.namespace or GLOBAL_NAMESPACE,
            kind=symbol.kind,
            summary=extract_xml_element(markup, "summary"),
        )
