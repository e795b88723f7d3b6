"""Project analyzer backed by an opened build workspace."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .base import ProjectAnalyzer, validate_descriptor
from ..descriptors import SOURCE_SUFFIX
from ..errors import AnalysisFailure, SharpDocError
from ..logging import analysis_logger
from ..metrics import sum_line_counts
from ..models import UNKNOWN_REFERENCE, AnalysisResult, ModuleInfo
from ..toolchain import BuildToolchain, ModuleHandle, default_toolchain

_LOGGER = analysis_logger("semantic")


class SemanticAnalyzer(ProjectAnalyzer):
    """Reads modules, references and documents through a :class:`BuildToolchain`.

    The toolchain must already be registered; constructing the analyzer never
    registers it.
    """

    mode = "semantic"

    def __init__(self, toolchain: BuildToolchain | None = None) -> None:
        self._toolchain = toolchain or default_toolchain()

    def analyze(self, project_path: str | Path) -> AnalysisResult:
        _LOGGER.info("Starting project analysis for: %s", project_path)
        descriptor, project_type = validate_descriptor(project_path)

        try:
            with self._toolchain.open_workspace(descriptor) as workspace:
                modules = [self._describe(handle) for handle in workspace.enumerate_modules()]
        except SharpDocError:
            _LOGGER.error("Error analyzing project: %s", project_path)
            raise
        except Exception as exc:
            _LOGGER.error("Error analyzing project %s: %s", project_path, exc)
            raise AnalysisFailure(f"Could not open workspace for {project_path}: {exc}", exc) from exc

        result = AnalysisResult(
            project_path=str(descriptor),
            project_type=project_type,
            projects=modules,
        )
        _LOGGER.info(
            "Project analysis finished: %d project(s), %d document(s), %d line(s)",
            result.total_projects,
            result.total_documents,
            result.total_lines_of_code,
        )
        return result

    def _describe(self, handle: ModuleHandle) -> ModuleInfo:
        sources: List[Path] = [
            document
            for document in handle.documents
            if document.suffix.lower() == SOURCE_SUFFIX
        ]
        return ModuleInfo(
            name=handle.name,
            file_path=str(handle.file_path),
            language=handle.language,
            assembly_name=handle.assembly_name,
            output_file_path=handle.output_file_path,
            project_references=tuple(handle.project_references),
            metadata_references=tuple(
                reference or UNKNOWN_REFERENCE for reference in handle.metadata_references
            ),
            document_count=len(handle.documents),
            lines_of_code=sum_line_counts(sources, logger=_LOGGER),
        )
