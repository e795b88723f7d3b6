"""Markdown report builders for analysis results."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .api_docs import render_markdown
from .insights import quality_recommendations
from ..models import AnalysisResult, ApiDocumentation

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TOP_DEPENDENCIES = 10
SNAPSHOT_PREVIEW = 10

GETTING_STARTED = """## Getting Started

### Prerequisites

- .NET 8.0 SDK or later
- Visual Studio 2022 or VS Code with C# extension

### Installation

1. Clone the repository
2. Restore NuGet packages:
   ```bash
   dotnet restore
   ```
3. Build the solution:
   ```bash
   dotnet build
   ```
4. Run the application:
   ```bash
   dotnet run
   ```
"""

CONTRIBUTING = """## Contributing

1. Fork the repository
2. Create a feature branch
3. Make your changes
4. Add tests if applicable
5. Submit a pull request
"""

LICENSE = """## License

This project is licensed under the MIT License - see the LICENSE file for details.
"""


def project_title(result: AnalysisResult) -> str:
    return Path(result.project_path).stem


def unique_dependencies(result: AnalysisResult) -> List[str]:
    """All package references across modules, deduplicated and sorted."""
    return sorted(set(result.package_references))


def _stamp(result: AnalysisResult) -> str:
    return f"{result.analysis_timestamp.strftime(_TIMESTAMP_FORMAT)} UTC"


def build_readme(result: AnalysisResult, api_docs: Optional[ApiDocumentation] = None) -> str:
    """Assemble a README from an analysis result and optional API documentation."""
    lines: List[str] = [
        f"# {project_title(result)}",
        "",
        f"A .NET {result.project_type.lower()} built with modern development practices.",
        "",
        "## Project Overview",
        "",
        f"- **Project Type**: {result.project_type}",
        f"- **Total Projects**: {result.total_projects}",
        f"- **Total Files**: {result.total_documents}",
        f"- **Lines of Code**: {result.total_lines_of_code:,}",
        f"- **Analysis Date**: {_stamp(result)}",
        "",
        "## Project Structure",
        "",
    ]
    for module in result.projects:
        lines.extend(
            [
                f"### {module.name}",
                f"- **Language**: {module.language}",
                f"- **Assembly**: {module.assembly_name or ''}",
                f"- **Files**: {module.document_count}",
                f"- **Lines of Code**: {module.lines_of_code:,}",
                "",
            ]
        )

    lines.extend(["## Dependencies", ""])
    dependencies = unique_dependencies(result)
    if dependencies:
        lines.extend(["### NuGet Packages", ""])
        lines.extend(f"- {dependency}" for dependency in dependencies)
        lines.append("")

    lines.append(GETTING_STARTED)

    if api_docs is not None:
        section = render_markdown(api_docs)
        if section:
            lines.extend(["## API Documentation", "", section, ""])

    lines.append(CONTRIBUTING)
    lines.append(LICENSE)
    return "\n".join(lines)


def build_summary(result: AnalysisResult, *, detailed: bool = False) -> str:
    lines: List[str] = [
        f"# {project_title(result)} - Project Summary",
        "",
        f"**Analysis Date**: {_stamp(result)}",
        "",
        "## Quick Stats",
        "",
        f"- \U0001f4c1 **Project Type**: {result.project_type}",
        f"- \U0001f3d7\ufe0f **Total Projects**: {result.total_projects}",
        f"- \U0001f4c4 **Total Files**: {result.total_documents:,}",
        f"- \U0001f4dd **Lines of Code**: {result.total_lines_of_code:,}",
        f"- \U0001f4ca **Avg Lines/File**: {result.average_lines_per_file:,}",
    ]
    filesystem = result.filesystem
    if filesystem is not None:
        lines.append(f"- \U0001f3af **Target Framework**: {filesystem.target_framework or 'unknown'}")
    lines.extend(["", "## Project Breakdown", ""])

    for module in result.projects:
        lines.extend(
            [
                f"### {module.name}",
                f"- **Language**: {module.language}",
                f"- **Assembly**: {module.assembly_name or ''}",
                f"- **Files**: {module.document_count:,}",
                f"- **Lines of Code**: {module.lines_of_code:,}",
                f"- **Dependencies**: {len(module.metadata_references)}",
                "",
            ]
        )

    if filesystem is not None and filesystem.directory_structure:
        lines.extend(["## Top-Level Structure", ""])
        lines.extend(
            f"- {entry.label}" for entry in filesystem.directory_structure[:SNAPSHOT_PREVIEW]
        )
        lines.append("")

    if detailed:
        lines.extend(_detailed_metrics(result))

    lines.extend(["## Recommendations", ""])
    lines.extend(f"- {item.markdown}" for item in quality_recommendations(result))
    lines.append("")
    return "\n".join(lines)


def _detailed_metrics(result: AnalysisResult) -> List[str]:
    dependencies = unique_dependencies(result)
    lines = [
        "## Detailed Metrics",
        "",
        f"### Dependencies ({len(dependencies)} total)",
        "",
    ]
    lines.extend(f"- {dependency}" for dependency in dependencies[:TOP_DEPENDENCIES])
    if len(dependencies) > TOP_DEPENDENCIES:
        lines.append(f"- ... and {len(dependencies) - TOP_DEPENDENCIES} more")
    lines.extend(["", "### Code Distribution", ""])

    total = result.total_lines_of_code
    for module in sorted(result.projects, key=lambda item: item.lines_of_code, reverse=True):
        share = module.lines_of_code / total * 100 if total > 0 else 0.0
        lines.append(f"- **{module.name}**: {module.lines_of_code:,} lines ({share:.1f}%)")
    lines.append("")
    return lines


def build_structure_resource(result: AnalysisResult) -> str:
    lines: List[str] = [
        f"# Project Structure: {project_title(result)}",
        "",
        f"**Analysis Date**: {_stamp(result)}",
        f"**Project Type**: {result.project_type}",
        "",
        "## Overview",
        f"- Total Projects: {result.total_projects}",
        f"- Total Files: {result.total_documents:,}",
        f"- Total Lines of Code: {result.total_lines_of_code:,}",
        "",
        "## Projects",
    ]
    for module in result.projects:
        lines.extend(
            [
                f"### {module.name}",
                f"- **Path**: {module.file_path or ''}",
                f"- **Language**: {module.language}",
                f"- **Assembly**: {module.assembly_name or ''}",
                f"- **Files**: {module.document_count:,}",
                f"- **Lines of Code**: {module.lines_of_code:,}",
                f"- **Project References**: {len(module.project_references)}",
                f"- **Package References**: {len(module.metadata_references)}",
                "",
            ]
        )
    return "\n".join(lines)


def build_dependencies_resource(result: AnalysisResult) -> str:
    dependencies = unique_dependencies(result)
    lines: List[str] = [
        f"# Project Dependencies: {project_title(result)}",
        "",
        f"**Analysis Date**: {_stamp(result)}",
        "",
        "## Summary",
        f"- Total Unique Dependencies: {len(dependencies)}",
        f"- Total Project References: {len(result.project_references)}",
        "",
        "## All Dependencies",
    ]
    lines.extend(f"- {dependency}" for dependency in dependencies)
    lines.extend(["", "## Dependencies by Project"])
    for module in result.projects:
        lines.append(f"### {module.name}")
        lines.append(f"**Package References ({len(module.metadata_references)}):**")
        lines.extend(f"- {dependency}" for dependency in sorted(module.metadata_references))
        lines.append("")
        lines.append(f"**Project References ({len(module.project_references)}):**")
        lines.extend(f"- {reference}" for reference in module.project_references)
        lines.append("")
    return "\n".join(lines)


__all__ = [
    "build_dependencies_resource",
    "build_readme",
    "build_structure_resource",
    "build_summary",
    "project_title",
    "unique_dependencies",
]
