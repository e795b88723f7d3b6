"""Filesystem-only project analyzer for hosts without a build toolchain."""

from __future__ import annotations

import time
from pathlib import Path

from .base import ProjectAnalyzer, validate_descriptor
from ..config import AnalysisConfig
from ..descriptors import PROJECT_SUFFIX, SOLUTION_SUFFIX, SOURCE_SUFFIX, extract_project_metadata
from ..errors import AnalysisFailure, AnalysisTimeout
from ..logging import analysis_logger
from ..metrics import sum_line_counts
from ..models import AnalysisResult, FilesystemDetails, ModuleInfo
from ..walker import capture_directory_snapshot, find_files

_LOGGER = analysis_logger("filesystem")

LANGUAGE = "C#"


class FilesystemAnalyzer(ProjectAnalyzer):
    """Rebuilds project metrics from bounded directory walks and descriptor text.

    The whole call shares one wall-clock budget. Crossing it raises
    :class:`AnalysisTimeout`; no partial result is returned.
    """

    mode = "filesystem"

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()

    def analyze(self, project_path: str | Path) -> AnalysisResult:
        budget = self._config.timeout_seconds
        deadline = time.monotonic() + budget
        _LOGGER.info("Starting filesystem analysis for: %s", project_path)

        descriptor, project_type = validate_descriptor(project_path)
        try:
            result = self._analyze(descriptor, project_type, deadline)
        except AnalysisTimeout as exc:
            _LOGGER.error("Filesystem analysis of %s timed out after %ss", project_path, budget)
            raise AnalysisTimeout(
                f"Filesystem analysis of {project_path} exceeded {budget:g}s", budget=budget
            ) from exc

        _LOGGER.info(
            "Filesystem analysis finished: %d source file(s), %d line(s)",
            result.total_documents,
            result.total_lines_of_code,
        )
        return result

    def _analyze(self, descriptor: Path, project_type: str, deadline: float) -> AnalysisResult:
        limits = self._config.limits
        directory = descriptor.parent

        def _walk(pattern: str, cap: int) -> list[Path]:
            return find_files(
                directory,
                pattern,
                cap,
                max_subdirectories=limits.subdirectories,
                deadline=deadline,
            )

        source_files = _walk(f"*{SOURCE_SUFFIX}", limits.source_files)
        project_files = _walk(f"*{PROJECT_SUFFIX}", limits.project_files)
        solution_files = _walk(f"*{SOLUTION_SUFFIX}", limits.solution_files)

        lines_of_code = sum_line_counts(source_files, logger=_LOGGER, deadline=deadline)

        try:
            descriptor_text = descriptor.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as exc:
            raise AnalysisFailure(f"Could not read descriptor {descriptor}: {exc}", exc) from exc
        metadata = extract_project_metadata(descriptor_text)

        snapshot = capture_directory_snapshot(
            directory,
            max_directories=limits.snapshot_directories,
            max_files=limits.snapshot_files,
        )

        if time.monotonic() > deadline:
            raise AnalysisTimeout("Filesystem analysis finished past its budget")

        name = descriptor.stem
        module = ModuleInfo(
            name=name,
            file_path=str(descriptor),
            language=LANGUAGE,
            assembly_name=metadata.assembly_name or name,
            output_file_path=None,
            project_references=tuple(metadata.project_references),
            metadata_references=tuple(metadata.package_references),
            document_count=len(source_files),
            lines_of_code=lines_of_code,
        )
        return AnalysisResult(
            project_path=str(descriptor),
            project_type=project_type,
            projects=[module],
            filesystem=FilesystemDetails(
                project_directory=str(directory),
                project_name=name,
                target_framework=metadata.target_framework,
                total_project_files=len(project_files),
                total_solution_files=len(solution_files),
                directory_structure=snapshot,
            ),
        )
