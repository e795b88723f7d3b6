"""Entry point that selects an analyzer and runs analysis passes."""

from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path
from typing import Callable, Optional, TypeVar

from .analyzers import DocumentationExtractor, FilesystemAnalyzer, ProjectAnalyzer, SemanticAnalyzer
from .config import ANALYSIS_MODES, SharpDocConfig, default_config
from .errors import InvalidArgumentError
from .logging import get_logger
from .models import AnalysisResult, ApiDocumentation
from .reports.insights import (
    DependencyReport,
    QualityReport,
    build_dependency_report,
    build_quality_report,
)
from .toolchain import BuildToolchain, is_registered

_LOGGER = get_logger("engine")

T = TypeVar("T")


class AnalysisEngine:
    """Runs semantic or filesystem analysis for a descriptor path.

    Every call builds fresh analyzers, so concurrent calls share no state. In
    ``auto`` mode the semantic analyzer is used only when the toolchain has
    already been registered by the caller.
    """

    def __init__(
        self,
        config: SharpDocConfig | None = None,
        *,
        toolchain_factory: Optional[Callable[[], BuildToolchain]] = None,
    ) -> None:
        self.config = config or default_config()
        self._toolchain_factory = toolchain_factory

    def select_mode(self, mode: str | None = None) -> str:
        requested = (mode or self.config.analysis.mode or "auto").lower()
        if requested not in ANALYSIS_MODES:
            raise InvalidArgumentError(
                f"Unknown analysis mode '{mode}'; expected one of {', '.join(ANALYSIS_MODES)}"
            )
        if requested == "auto":
            return SemanticAnalyzer.mode if is_registered() else FilesystemAnalyzer.mode
        return requested

    def analyzer_for(self, mode: str | None = None) -> ProjectAnalyzer:
        selected = self.select_mode(mode)
        _LOGGER.debug("Using %s analyzer", selected)
        if selected == SemanticAnalyzer.mode:
            return SemanticAnalyzer(self._toolchain())
        return FilesystemAnalyzer(self.config.analysis)

    def analyze(self, project_path: str | Path, mode: str | None = None) -> AnalysisResult:
        return self.analyzer_for(mode).analyze(project_path)

    def extract_api_docs(self, project_path: str | Path) -> ApiDocumentation:
        return DocumentationExtractor(self._toolchain()).extract(project_path)

    def dependency_report(
        self, result: AnalysisResult, *, include_transitive: bool = False
    ) -> DependencyReport:
        return build_dependency_report(result, include_transitive=include_transitive)

    def quality_report(self, result: AnalysisResult) -> QualityReport:
        return build_quality_report(result)

    async def analyze_async(
        self, project_path: str | Path, mode: str | None = None
    ) -> AnalysisResult:
        return await self._in_executor(partial(self.analyze, project_path, mode))

    async def extract_api_docs_async(self, project_path: str | Path) -> ApiDocumentation:
        return await self._in_executor(partial(self.extract_api_docs, project_path))

    def _toolchain(self) -> BuildToolchain | None:
        return self._toolchain_factory() if self._toolchain_factory else None

    @staticmethod
    async def _in_executor(call: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, call)


__all__ = ["AnalysisEngine"]
