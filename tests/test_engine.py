"""Tests for analyzer selection in the engine."""

from __future__ import annotations

import asyncio
from typing import Iterator

import pytest

from sharpdoc.analyzers import FilesystemAnalyzer, SemanticAnalyzer
from sharpdoc.config import AnalysisConfig, default_config
from sharpdoc.engine import AnalysisEngine
from sharpdoc.errors import InvalidArgumentError
from sharpdoc.toolchain import registry
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def unregistered() -> Iterator[None]:
    previous = registry._registration
    registry.reset_registration()
    yield
    registry._registration = previous


def test_auto_mode_falls_back_without_toolchain(unregistered: None) -> None:
    engine = AnalysisEngine(default_config())

    assert engine.select_mode() == "filesystem"
    assert isinstance(engine.analyzer_for(), FilesystemAnalyzer)


def test_auto_mode_uses_registered_toolchain() -> None:
    registry.ensure_registered()
    engine = AnalysisEngine(default_config())

    assert engine.select_mode("auto") == "semantic"
    assert isinstance(engine.analyzer_for(), SemanticAnalyzer)


def test_configured_mode_is_used(unregistered: None) -> None:
    config = default_config()
    config.analysis = AnalysisConfig(mode="semantic")

    assert AnalysisEngine(config).select_mode() == "semantic"
    assert AnalysisEngine(config).select_mode("filesystem") == "filesystem"


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        AnalysisEngine().select_mode("roslyn")


def test_concurrent_async_analyses(project_builder: ProjectBuilder) -> None:
    first = project_builder.project("One/One.csproj")
    second = project_builder.project("Two/Two.csproj", packages=[("Serilog", "3.1.1")])
    project_builder.source("One/A.cs", 4)
    project_builder.source("Two/B.cs", 6)
    engine = AnalysisEngine()

    async def _run() -> list:
        return await asyncio.gather(
            engine.analyze_async(first, "filesystem"),
            engine.analyze_async(second, "filesystem"),
        )

    one, two = asyncio.run(_run())

    assert one.total_lines_of_code == 4
    assert two.total_lines_of_code == 6
    assert two.package_references == ["Serilog"]


def test_reports_from_result(project_builder: ProjectBuilder) -> None:
    descriptor = project_builder.project("App.csproj", packages=[("Polly", "8.2.0")])
    project_builder.source("Program.cs", 3)
    engine = AnalysisEngine()
    result = engine.analyze(descriptor, "filesystem")

    deps = engine.dependency_report(result, include_transitive=True)
    quality = engine.quality_report(result)

    assert deps.total_direct_dependencies == 1
    assert deps.total_transitive_dependencies == 0
    assert deps.to_dict()["TransitiveResolved"] is False
    assert quality.total_files == 1
    assert quality.target_framework == "net8.0"
