"""Pattern-based extraction of project and solution descriptor metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List

from .errors import InvalidArgumentError
from .models import PROJECT, SOLUTION

SOLUTION_SUFFIX = ".sln"
PROJECT_SUFFIX = ".csproj"
SOURCE_SUFFIX = ".cs"

_TARGET_FRAMEWORK = re.compile(r"<TargetFramework>(.*?)</TargetFramework>", re.DOTALL)
_TARGET_FRAMEWORKS = re.compile(r"<TargetFrameworks>(.*?)</TargetFrameworks>", re.DOTALL)
_ASSEMBLY_NAME = re.compile(r"<AssemblyName>(.*?)</AssemblyName>", re.DOTALL)
_ROOT_NAMESPACE = re.compile(r"<RootNamespace>(.*?)</RootNamespace>", re.DOTALL)
_OUTPUT_TYPE = re.compile(r"<OutputType>(.*?)</OutputType>", re.DOTALL)
_PACKAGE_REFERENCE = re.compile(r"<PackageReference\s+Include=\"([^\"]+)\"")
_PROJECT_REFERENCE = re.compile(r"<ProjectReference\s+Include=\"([^\"]+)\"")
_SOLUTION_PROJECT = re.compile(
    r'^Project\("\{(?P<type>[^}]*)\}"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"'
    r'\s*,\s*"\{(?P<guid>[^}]*)\}"',
    re.MULTILINE,
)


@dataclass
class ProjectMetadata:
    """Declarations found in a project descriptor's raw text."""

    target_framework: str = ""
    assembly_name: str = ""
    root_namespace: str = ""
    output_type: str = ""
    package_references: List[str] = field(default_factory=list)
    project_references: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SolutionProject:
    name: str
    path: str
    guid: str
    type_guid: str


def classify_descriptor(path: Path | str) -> str:
    """Return ``"Solution"`` or ``"Project"`` based on the descriptor suffix."""
    suffix = Path(path).suffix.lower()
    if suffix == SOLUTION_SUFFIX:
        return SOLUTION
    if suffix == PROJECT_SUFFIX:
        return PROJECT
    raise InvalidArgumentError(
        f"File must be a {SOLUTION_SUFFIX} or {PROJECT_SUFFIX} file: {path}"
    )


def extract_project_metadata(text: str) -> ProjectMetadata:
    """Scan descriptor text for framework, package and project declarations.

    Each category is an independent scan, so a malformed descriptor still yields
    whatever declarations can be recognised.
    """
    metadata = ProjectMetadata()

    target = _first(_TARGET_FRAMEWORK, text)
    if not target:
        frameworks = _first(_TARGET_FRAMEWORKS, text)
        target = next((item.strip() for item in frameworks.split(";") if item.strip()), "")
    metadata.target_framework = target
    metadata.assembly_name = _first(_ASSEMBLY_NAME, text)
    metadata.root_namespace = _first(_ROOT_NAMESPACE, text)
    metadata.output_type = _first(_OUTPUT_TYPE, text)
    metadata.package_references = _PACKAGE_REFERENCE.findall(text)
    metadata.project_references = _PROJECT_REFERENCE.findall(text)
    return metadata


def extract_solution_projects(text: str) -> List[SolutionProject]:
    """Return the project entries of a solution file, skipping solution folders."""
    projects: List[SolutionProject] = []
    for match in _SOLUTION_PROJECT.finditer(text):
        path = normalise_descriptor_path(match.group("path"))
        if not path.lower().endswith(PROJECT_SUFFIX):
            continue
        projects.append(
            SolutionProject(
                name=match.group("name"),
                path=path,
                guid=match.group("guid").upper(),
                type_guid=match.group("type").upper(),
            )
        )
    return projects


def normalise_descriptor_path(value: str) -> str:
    """Convert Windows separators used in descriptors to a relative POSIX path."""
    return str(PurePosixPath(value.strip().replace("\\", "/")))


def _first(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


__all__ = [
    "PROJECT_SUFFIX",
    "ProjectMetadata",
    "SOLUTION_SUFFIX",
    "SOURCE_SUFFIX",
    "SolutionProject",
    "classify_descriptor",
    "extract_project_metadata",
    "extract_solution_projects",
    "normalise_descriptor_path",
]
