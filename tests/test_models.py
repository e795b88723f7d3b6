"""Tests for sharpdoc.models."""

from __future__ import annotations

from datetime import UTC, datetime

from sharpdoc.models import (
    AnalysisResult,
    DirectoryEntry,
    DocumentationEntry,
    FilesystemDetails,
    ModuleInfo,
    group_documentation,
)


def _result() -> AnalysisResult:
    return AnalysisResult(
        project_path="/src/All.sln",
        project_type="Solution",
        analysis_timestamp=datetime(2024, 5, 1, 12, 30, 15, 123456, tzinfo=UTC),
        projects=[
            ModuleInfo(
                name="App",
                file_path="/src/App/App.csproj",
                language="C#",
                assembly_name="App",
                output_file_path="/src/App/bin/Debug/net8.0/App.dll",
                project_references=("LIB-ID", "LIB-ID"),
                metadata_references=("Serilog, Version=3.1.1",),
                document_count=3,
                lines_of_code=100,
            ),
            ModuleInfo(
                name="Lib",
                file_path="/src/Lib/Lib.csproj",
                language="C#",
                metadata_references=("Serilog, Version=3.1.1", "Unknown"),
                document_count=4,
                lines_of_code=50,
            ),
        ],
        filesystem=FilesystemDetails(
            project_directory="/src",
            project_name="All",
            target_framework="net8.0",
            total_project_files=2,
            total_solution_files=1,
            directory_structure=[DirectoryEntry("src", "directory", "directory")],
        ),
    )


def test_aggregates_are_derived_from_modules() -> None:
    result = _result()

    assert result.total_projects == 2
    assert result.total_documents == 7
    assert result.total_lines_of_code == 150
    assert result.average_lines_per_file == 21
    assert result.package_references == [
        "Serilog, Version=3.1.1",
        "Serilog, Version=3.1.1",
        "Unknown",
    ]
    assert result.project_references == ["LIB-ID", "LIB-ID"]


def test_average_is_zero_without_documents() -> None:
    result = AnalysisResult(project_path="App.csproj", project_type="Project")

    assert result.average_lines_per_file == 0


def test_json_round_trip_is_lossless() -> None:
    result = _result()

    restored = AnalysisResult.from_json(result.to_json())

    assert restored == result


def test_serialised_keys_and_timestamp() -> None:
    payload = _result().to_dict()

    assert payload["AnalysisTimestamp"] == "2024-05-01T12:30:15.123456Z"
    assert payload["TotalLinesOfCode"] == 150
    assert payload["AverageLinesPerFile"] == 21
    assert set(payload["Projects"][0]) == {
        "Name",
        "FilePath",
        "Language",
        "AssemblyName",
        "OutputFilePath",
        "ProjectReferences",
        "MetadataReferences",
        "DocumentCount",
        "LinesOfCode",
    }


def test_parse_ignores_stale_aggregates() -> None:
    payload = _result().to_dict()
    payload["TotalLinesOfCode"] = 999

    assert AnalysisResult.from_dict(payload).total_lines_of_code == 150


def test_group_documentation_orders_namespaces_and_names() -> None:
    groups = group_documentation(
        [
            DocumentationEntry("Zeta", "B.Core", "Class", "z"),
            DocumentationEntry("Alpha", "B.Core", "Method", "a"),
            DocumentationEntry("Loose", "", "Class", ""),
            DocumentationEntry("Gamma", "A.Util", "Class", "g"),
        ]
    )

    assert [group.namespace for group in groups] == ["A.Util", "B.Core", "Global"]
    assert [entry.name for entry in groups[1].entries] == ["Alpha", "Zeta"]
