"""Dependency and quality records derived from an analysis result."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ..models import AnalysisResult, DirectoryEntry, format_timestamp, utc_now

LARGE_CODEBASE_LINES = 100_000
HIGH_FILE_COUNT = 1_000
LARGE_SINGLE_PROJECT_LINES = 50_000
LARGE_AVERAGE_FILE_LINES = 500
MANY_DEPENDENCIES = 50


@dataclass(frozen=True)
class Recommendation:
    """A quality observation with a short title and an actionable detail."""

    icon: str
    title: str
    detail: str

    @property
    def text(self) -> str:
        return f"{self.icon} {self.title} - {self.detail}"

    @property
    def markdown(self) -> str:
        return f"{self.icon} **{self.title}** - {self.detail}"


HEALTHY = Recommendation(
    "\u2705", "Project structure looks good", "No major concerns detected"
)


def quality_recommendations(result: AnalysisResult) -> List[Recommendation]:
    """Apply the size and dependency thresholds to ``result``.

    Always returns at least one entry; a healthy project yields :data:`HEALTHY`.
    """
    found: List[Recommendation] = []
    if result.total_lines_of_code > LARGE_CODEBASE_LINES:
        found.append(
            Recommendation(
                "\U0001f50d",
                "Large codebase detected",
                "Consider modularization for better maintainability",
            )
        )
    if result.total_documents > HIGH_FILE_COUNT:
        found.append(
            Recommendation(
                "\U0001f4c1", "High file count", "Review folder structure and organization"
            )
        )
    if result.total_projects == 1 and result.total_lines_of_code > LARGE_SINGLE_PROJECT_LINES:
        found.append(
            Recommendation(
                "\U0001f3d7\ufe0f",
                "Single large project",
                "Consider splitting into multiple projects",
            )
        )
    if result.average_lines_per_file > LARGE_AVERAGE_FILE_LINES:
        found.append(
            Recommendation(
                "\U0001f4c4",
                "Large files detected",
                "Consider breaking down large files into smaller, focused classes",
            )
        )
    if len(result.package_references) > MANY_DEPENDENCIES:
        found.append(
            Recommendation(
                "\U0001f4e6", "Many dependencies", "Review if all dependencies are necessary"
            )
        )
    if result.filesystem is not None and not result.filesystem.target_framework:
        found.append(
            Recommendation(
                "\u26a0\ufe0f",
                "Target framework not detected",
                "Ensure the project file is valid",
            )
        )
    return found or [HEALTHY]


@dataclass
class ProjectDependencies:
    project_name: str
    direct_dependencies: List[str] = field(default_factory=list)
    project_references: List[str] = field(default_factory=list)
    transitive_dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ProjectName": self.project_name,
            "DirectDependencies": list(self.direct_dependencies),
            "TransitiveDependencies": list(self.transitive_dependencies),
            "ProjectReferences": list(self.project_references),
        }


@dataclass
class DependencyReport:
    """Direct package and project references per module.

    Transitive resolution needs a package feed and is not performed, so
    ``transitive_dependencies`` stays empty and ``transitive_resolved`` is False.
    """

    project_path: str
    analyzed_at: datetime = field(default_factory=utc_now)
    include_transitive: bool = False
    target_framework: str = ""
    projects: List[ProjectDependencies] = field(default_factory=list)
    transitive_resolved: bool = False

    @property
    def total_direct_dependencies(self) -> int:
        return sum(len(project.direct_dependencies) for project in self.projects)

    @property
    def total_transitive_dependencies(self) -> int:
        return sum(len(project.transitive_dependencies) for project in self.projects)

    @property
    def total_project_references(self) -> int:
        return sum(len(project.project_references) for project in self.projects)

    @property
    def summary(self) -> str:
        return (
            f"Found {self.total_direct_dependencies} NuGet packages and "
            f"{self.total_project_references} project references"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ProjectPath": self.project_path,
            "AnalysisTimestamp": format_timestamp(self.analyzed_at),
            "IncludeTransitive": self.include_transitive,
            "TransitiveResolved": self.transitive_resolved,
            "TargetFramework": self.target_framework,
            "TotalDirectDependencies": self.total_direct_dependencies,
            "TotalTransitiveDependencies": self.total_transitive_dependencies,
            "ProjectDependencies": [project.to_dict() for project in self.projects],
            "Summary": self.summary,
        }


@dataclass
class QualityReport:
    project_path: str
    analyzed_at: datetime = field(default_factory=utc_now)
    total_projects: int = 0
    total_files: int = 0
    total_lines_of_code: int = 0
    average_lines_per_file: int = 0
    target_framework: str = ""
    recommendations: List[Recommendation] = field(default_factory=list)
    directory_structure: List[DirectoryEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ProjectPath": self.project_path,
            "AnalysisTimestamp": format_timestamp(self.analyzed_at),
            "Metrics": {
                "TotalProjects": self.total_projects,
                "TotalFiles": self.total_files,
                "TotalLinesOfCode": self.total_lines_of_code,
                "AverageLinesPerFile": self.average_lines_per_file,
                "TargetFramework": self.target_framework,
            },
            "Recommendations": [item.text for item in self.recommendations],
            "DirectoryStructure": [entry.label for entry in self.directory_structure],
        }


def build_dependency_report(
    result: AnalysisResult, *, include_transitive: bool = False
) -> DependencyReport:
    return DependencyReport(
        project_path=result.project_path,
        include_transitive=include_transitive,
        target_framework=result.filesystem.target_framework if result.filesystem else "",
        projects=[
            ProjectDependencies(
                project_name=module.name,
                direct_dependencies=list(module.metadata_references),
                project_references=list(module.project_references),
            )
            for module in result.projects
        ],
    )


def build_quality_report(result: AnalysisResult) -> QualityReport:
    filesystem = result.filesystem
    return QualityReport(
        project_path=result.project_path,
        total_projects=result.total_projects,
        total_files=result.total_documents,
        total_lines_of_code=result.total_lines_of_code,
        average_lines_per_file=result.average_lines_per_file,
        target_framework=filesystem.target_framework if filesystem else "",
        recommendations=quality_recommendations(result),
        directory_structure=list(filesystem.directory_structure) if filesystem else [],
    )


__all__ = [
    "DependencyReport",
    "HEALTHY",
    "ProjectDependencies",
    "QualityReport",
    "Recommendation",
    "build_dependency_report",
    "build_quality_report",
    "quality_recommendations",
]
