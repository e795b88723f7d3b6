"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sharpdoc.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze", "App.csproj"])
    assert args.verbose is True
    assert args.command == "analyze"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["summary", "App.csproj", "--verbose"])
    assert args.verbose is True
    assert args.command == "summary"


def test_cli_parses_docs_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["docs", "All.sln", "--format", "json", "-o", "api.json"])
    assert args.format == "json"
    assert args.output == "api.json"
    assert args.mode is None


def test_cli_rejects_unknown_mode() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["analyze", "App.csproj", "--mode", "roslyn"])


def test_analyze_prints_json(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    descriptor = project_builder.project("App.csproj", packages=[("Serilog", "3.1.1")])
    project_builder.source("Program.cs", 7)

    main(["analyze", str(descriptor), "--mode", "filesystem"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["ProjectType"] == "Project"
    assert payload["TotalLinesOfCode"] == 7
    assert payload["Projects"][0]["MetadataReferences"] == ["Serilog"]


def test_readme_written_to_output(project_builder: ProjectBuilder, tmp_path: Path) -> None:
    descriptor = project_builder.project("App.csproj")
    project_builder.source("Program.cs", 2)
    target = tmp_path / "README.md"

    main(["readme", str(descriptor), "--mode", "filesystem", "--no-api-docs", "-o", str(target)])

    assert target.read_text(encoding="utf-8").startswith("# App\n")


def test_missing_project_exits_with_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["quality", str(tmp_path / "Missing.csproj"), "--mode", "filesystem"])

    assert excinfo.value.code == 1
    assert "Missing.csproj" in capsys.readouterr().err
