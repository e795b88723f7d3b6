"""Core data models shared across sharpdoc components."""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

SOLUTION = "Solution"
PROJECT = "Project"
GLOBAL_NAMESPACE = "Global"
UNKNOWN_REFERENCE = "Unknown"

_CATEGORY_ICONS = {
    "directory": "\U0001f4c1",
    "source": "\U0001f4c4",
    "project": "\U0001f4e6",
    "solution": "\U0001f3d7\ufe0f",
    "markdown": "\U0001f4dd",
    "config": "\u2699\ufe0f",
    "file": "\U0001f4c4",
}


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True)
class ModuleInfo:
    """One compilable project discovered during an analysis pass."""

    name: str
    file_path: Optional[str]
    language: str
    assembly_name: Optional[str] = None
    output_file_path: Optional[str] = None
    project_references: Tuple[str, ...] = ()
    metadata_references: Tuple[str, ...] = ()
    document_count: int = 0
    lines_of_code: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "FilePath": self.file_path,
            "Language": self.language,
            "AssemblyName": self.assembly_name,
            "OutputFilePath": self.output_file_path,
            "ProjectReferences": list(self.project_references),
            "MetadataReferences": list(self.metadata_references),
            "DocumentCount": self.document_count,
            "LinesOfCode": self.lines_of_code,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ModuleInfo":
        return cls(
            name=str(payload.get("Name", "")),
            file_path=payload.get("FilePath"),
            language=str(payload.get("Language", "")),
            assembly_name=payload.get("AssemblyName"),
            output_file_path=payload.get("OutputFilePath"),
            project_references=tuple(payload.get("ProjectReferences") or ()),
            metadata_references=tuple(payload.get("MetadataReferences") or ()),
            document_count=int(payload.get("DocumentCount", 0)),
            lines_of_code=int(payload.get("LinesOfCode", 0)),
        )


@dataclass(frozen=True)
class DirectoryEntry:
    """A top-level child of the project directory, tagged for display."""

    name: str
    kind: str
    category: str

    @property
    def label(self) -> str:
        icon = _CATEGORY_ICONS.get(self.category, _CATEGORY_ICONS["file"])
        suffix = "/" if self.kind == "directory" else ""
        return f"{icon} {self.name}{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        return {"Name": self.name, "Kind": self.kind, "Category": self.category}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DirectoryEntry":
        return cls(
            name=str(payload.get("Name", "")),
            kind=str(payload.get("Kind", "file")),
            category=str(payload.get("Category", "file")),
        )


@dataclass
class FilesystemDetails:
    """Extras only the filesystem analyzer can report."""

    project_directory: str
    project_name: str
    target_framework: str = ""
    total_project_files: int = 0
    total_solution_files: int = 0
    directory_structure: List[DirectoryEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ProjectDirectory": self.project_directory,
            "ProjectName": self.project_name,
            "TargetFramework": self.target_framework,
            "TotalProjectFiles": self.total_project_files,
            "TotalSolutionFiles": self.total_solution_files,
            "DirectoryStructure": [entry.to_dict() for entry in self.directory_structure],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FilesystemDetails":
        return cls(
            project_directory=str(payload.get("ProjectDirectory", "")),
            project_name=str(payload.get("ProjectName", "")),
            target_framework=str(payload.get("TargetFramework", "")),
            total_project_files=int(payload.get("TotalProjectFiles", 0)),
            total_solution_files=int(payload.get("TotalSolutionFiles", 0)),
            directory_structure=[
                DirectoryEntry.from_dict(item)
                for item in payload.get("DirectoryStructure") or []
            ],
        )


@dataclass
class AnalysisResult:
    """Project inventory and metrics produced by either analyzer.

    Totals are properties over ``projects`` and are never stored, so they cannot
    drift from the module list.
    """

    project_path: str
    project_type: str
    analysis_timestamp: datetime = field(default_factory=utc_now)
    projects: List[ModuleInfo] = field(default_factory=list)
    filesystem: Optional[FilesystemDetails] = None

    @property
    def total_projects(self) -> int:
        return len(self.projects)

    @property
    def total_documents(self) -> int:
        return sum(project.document_count for project in self.projects)

    @property
    def total_lines_of_code(self) -> int:
        return sum(project.lines_of_code for project in self.projects)

    @property
    def average_lines_per_file(self) -> int:
        documents = self.total_documents
        return self.total_lines_of_code // documents if documents > 0 else 0

    @property
    def total_csharp_files(self) -> int:
        return self.total_documents

    @property
    def package_references(self) -> List[str]:
        return [ref for project in self.projects for ref in project.metadata_references]

    @property
    def project_references(self) -> List[str]:
        return [ref for project in self.projects for ref in project.project_references]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ProjectPath": self.project_path,
            "ProjectType": self.project_type,
            "AnalysisTimestamp": format_timestamp(self.analysis_timestamp),
            "TotalProjects": self.total_projects,
            "TotalDocuments": self.total_documents,
            "TotalLinesOfCode": self.total_lines_of_code,
            "AverageLinesPerFile": self.average_lines_per_file,
            "Projects": [project.to_dict() for project in self.projects],
            "Filesystem": self.filesystem.to_dict() if self.filesystem else None,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AnalysisResult":
        filesystem = payload.get("Filesystem")
        return cls(
            project_path=str(payload.get("ProjectPath", "")),
            project_type=str(payload.get("ProjectType", "")),
            analysis_timestamp=parse_timestamp(str(payload["AnalysisTimestamp"])),
            projects=[ModuleInfo.from_dict(item) for item in payload.get("Projects") or []],
            filesystem=FilesystemDetails.from_dict(filesystem) if filesystem else None,
        )

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "AnalysisResult":
        return cls.from_dict(json.loads(text))


@dataclass(frozen=True)
class DocumentationEntry:
    """Summary text extracted from a documented public declaration."""

    name: str
    namespace: str
    kind: str
    summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "Namespace": self.namespace,
            "Type": self.kind,
            "Summary": self.summary,
        }


@dataclass
class NamespaceDocumentation:
    namespace: str
    entries: List[DocumentationEntry] = field(default_factory=list)


@dataclass
class ApiDocumentation:
    """Namespace-grouped public API listing for one project or solution."""

    project_path: str
    extracted_at: datetime = field(default_factory=utc_now)
    namespaces: List[NamespaceDocumentation] = field(default_factory=list)

    @property
    def entries(self) -> List[DocumentationEntry]:
        return [entry for group in self.namespaces for entry in group.entries]

    def is_empty(self) -> bool:
        return not any(group.entries for group in self.namespaces)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ProjectPath": self.project_path,
            "ExtractionTimestamp": format_timestamp(self.extracted_at),
            "Namespaces": [
                {
                    "Namespace": group.namespace,
                    "Members": [entry.to_dict() for entry in group.entries],
                }
                for group in self.namespaces
            ],
        }


def group_documentation(entries: Iterable[DocumentationEntry]) -> List[NamespaceDocumentation]:
    """Group entries by namespace, ordering namespaces and members by name."""
    grouped: Dict[str, List[DocumentationEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.namespace or GLOBAL_NAMESPACE].append(entry)
    return [
        NamespaceDocumentation(
            namespace=namespace,
            entries=sorted(grouped[namespace], key=lambda item: item.name),
        )
        for namespace in sorted(grouped)
    ]
