"""Tests for sharpdoc.descriptors."""

from __future__ import annotations

import pytest

from sharpdoc.descriptors import (
    classify_descriptor,
    extract_project_metadata,
    extract_solution_projects,
)
from sharpdoc.errors import InvalidArgumentError

PROJECT_TEXT = """
<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <OutputType>Exe</OutputType>
    <TargetFramework>net8.0</TargetFramework>
    <AssemblyName>Demo.App</AssemblyName>
    <RootNamespace>Demo</RootNamespace>
  </PropertyGroup>
  <ItemGroup>
    <PackageReference Include="Serilog" Version="3.1.1" />
    <PackageReference Include="Newtonsoft.Json" Version="13.0.3" />
    <PackageReference Include="Dapper" Version="2.1.24" />
    <ProjectReference Include="..\\Lib\\Lib.csproj" />
  </ItemGroup>
</Project>
"""


def test_extract_project_metadata_reads_packages_in_order() -> None:
    metadata = extract_project_metadata(PROJECT_TEXT)

    assert metadata.package_references == ["Serilog", "Newtonsoft.Json", "Dapper"]
    assert metadata.project_references == ["..\\Lib\\Lib.csproj"]
    assert metadata.target_framework == "net8.0"
    assert metadata.assembly_name == "Demo.App"
    assert metadata.root_namespace == "Demo"
    assert metadata.output_type == "Exe"


def test_extract_project_metadata_without_declarations() -> None:
    metadata = extract_project_metadata("<Project></Project>")

    assert metadata.package_references == []
    assert metadata.project_references == []
    assert metadata.target_framework == ""


def test_extract_project_metadata_tolerates_malformed_text() -> None:
    text = '<Project><PackageReference Include="Polly" Version="8.0" <TargetFramework>net6.0'

    metadata = extract_project_metadata(text)

    assert metadata.package_references == ["Polly"]
    assert metadata.target_framework == ""


def test_target_frameworks_fallback_uses_first_entry() -> None:
    text = "<TargetFrameworks> net8.0;net48 </TargetFrameworks>"

    assert extract_project_metadata(text).target_framework == "net8.0"


def test_extract_solution_projects_skips_folders() -> None:
    text = """
Microsoft Visual Studio Solution File, Format Version 12.00
Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "App", "src\\App\\App.csproj", "{aaaaaaaa-0000-0000-0000-000000000001}"
EndProject
Project("{2150E333-8FDC-42A3-9474-1A3956D46DE8}") = "Solution Items", "Solution Items", "{BBBBBBBB-0000-0000-0000-000000000002}"
EndProject
"""
    projects = extract_solution_projects(text)

    assert len(projects) == 1
    assert projects[0].name == "App"
    assert projects[0].path == "src/App/App.csproj"
    assert projects[0].guid == "AAAAAAAA-0000-0000-0000-000000000001"


@pytest.mark.parametrize(
    ("path", "expected"),
    [("All.sln", "Solution"), ("All.SLN", "Solution"), ("App.csproj", "Project")],
)
def test_classify_descriptor(path: str, expected: str) -> None:
    assert classify_descriptor(path) == expected


def test_classify_descriptor_rejects_other_suffixes() -> None:
    with pytest.raises(InvalidArgumentError):
        classify_descriptor("App.vbproj")
