"""Loads solution and project descriptors into module handles."""

from __future__ import annotations

import os
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from .base import ModuleHandle
from ..descriptors import (
    SOURCE_SUFFIX,
    extract_solution_projects,
    normalise_descriptor_path,
)
from ..models import SOLUTION
from ..walker import is_excluded_directory

LANGUAGE = "C#"

_EXECUTABLE_OUTPUT_TYPES = {"exe", "winexe"}
_PROPERTY_NAMES = {
    "AssemblyName",
    "EnableDefaultCompileItems",
    "OutputType",
    "RootNamespace",
    "TargetFramework",
    "TargetFrameworks",
}
_WILDCARDS = ("*", "?", "[")


@dataclass
class _ProjectFile:
    """Properties and items read from one MSBuild project file."""

    properties: Dict[str, str] = field(default_factory=dict)
    package_references: List[Optional[str]] = field(default_factory=list)
    assembly_references: List[Optional[str]] = field(default_factory=list)
    project_references: List[str] = field(default_factory=list)
    compile_includes: List[str] = field(default_factory=list)
    compile_removes: List[str] = field(default_factory=list)
    sdk_style: bool = False


def module_id_for(descriptor: Path) -> str:
    """Deterministic identifier for a project that has no solution GUID."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, descriptor.resolve().as_uri())).upper()


def load_modules(descriptor: Path, kind: str) -> List[ModuleHandle]:
    """Return the modules of a solution, or the single module of a project."""
    if kind == SOLUTION:
        return load_solution(descriptor)
    return [load_project(descriptor)]


def load_solution(descriptor: Path) -> List[ModuleHandle]:
    text = descriptor.read_text(encoding="utf-8-sig")
    root = descriptor.parent
    entries = extract_solution_projects(text)

    id_lookup: Dict[Path, str] = {}
    for entry in entries:
        id_lookup[(root / entry.path).resolve()] = entry.guid

    modules: List[ModuleHandle] = []
    for entry in entries:
        project_path = root / entry.path
        if not project_path.is_file():
            raise FileNotFoundError(
                f"Project '{entry.name}' referenced by {descriptor.name} not found: {project_path}"
            )
        modules.append(load_project(project_path, module_id=entry.guid, id_lookup=id_lookup))
    return modules


def load_project(
    descriptor: Path,
    *,
    module_id: Optional[str] = None,
    id_lookup: Optional[Mapping[Path, str]] = None,
) -> ModuleHandle:
    """Parse a project file; malformed XML raises ``xml.etree.ElementTree.ParseError``."""
    project = _parse_project(descriptor)
    directory = descriptor.parent
    lookup = id_lookup or {}

    name = descriptor.stem
    assembly_name = project.properties.get("AssemblyName") or name

    references: List[str] = []
    for include in project.project_references:
        target = (directory / normalise_descriptor_path(include)).resolve()
        references.append(lookup.get(target) or module_id_for(target))

    return ModuleHandle(
        id=module_id or module_id_for(descriptor),
        name=name,
        file_path=descriptor,
        language=LANGUAGE,
        assembly_name=assembly_name,
        output_file_path=_output_path(directory, assembly_name, project),
        project_references=tuple(references),
        metadata_references=tuple(project.package_references + project.assembly_references),
        documents=tuple(_compile_documents(directory, project)),
    )


def _parse_project(descriptor: Path) -> _ProjectFile:
    root = ET.parse(descriptor).getroot()
    project = _ProjectFile(
        sdk_style="Sdk" in root.attrib
        or any(_local(element.tag) == "Sdk" for element in root)
        or any(
            _local(element.tag) == "Import" and "Sdk" in element.attrib for element in root
        )
    )

    for element in root.iter():
        tag = _local(element.tag)
        if tag in _PROPERTY_NAMES:
            project.properties.setdefault(tag, (element.text or "").strip())
        elif tag == "PackageReference":
            project.package_references.append(_package_display(element))
        elif tag in {"Reference", "FrameworkReference"}:
            project.assembly_references.append(element.get("Include") or None)
        elif tag == "ProjectReference" and element.get("Include"):
            project.project_references.append(element.get("Include", ""))
        elif tag == "Compile":
            if element.get("Include"):
                project.compile_includes.extend(_split_items(element.get("Include", "")))
            if element.get("Remove"):
                project.compile_removes.extend(_split_items(element.get("Remove", "")))

    if not project.properties.get("TargetFramework"):
        frameworks = _split_items(project.properties.get("TargetFrameworks", ""))
        if frameworks:
            project.properties["TargetFramework"] = frameworks[0]
    return project


def _package_display(element: ET.Element) -> Optional[str]:
    include = element.get("Include")
    if not include:
        return None
    version = element.get("Version")
    if version is None:
        child = next((item for item in element if _local(item.tag) == "Version"), None)
        version = (child.text or "").strip() if child is not None else None
    return f"{include}, Version={version}" if version else include


def _output_path(directory: Path, assembly_name: str, project: _ProjectFile) -> str:
    framework = project.properties.get("TargetFramework", "")
    output_type = project.properties.get("OutputType", "").lower()
    extension = ".exe" if output_type in _EXECUTABLE_OUTPUT_TYPES and not framework else ".dll"
    output_dir = directory / "bin" / "Debug"
    if framework:
        output_dir = output_dir / framework
    return str(output_dir / f"{assembly_name}{extension}")


def _compile_documents(directory: Path, project: _ProjectFile) -> List[Path]:
    documents: List[Path] = []
    seen: set[Path] = set()

    def _add(paths: Iterable[Path]) -> None:
        for path in paths:
            key = path.resolve()
            if key in seen or not path.is_file():
                continue
            seen.add(key)
            documents.append(path)

    default_items = project.properties.get("EnableDefaultCompileItems", "").lower() != "false"
    if project.sdk_style and default_items:
        _add(_default_sources(directory))
    for pattern in project.compile_includes:
        _add(_expand(directory, pattern))

    removed = {
        path.resolve()
        for pattern in project.compile_removes
        for path in _expand(directory, pattern)
    }
    return [path for path in documents if path.resolve() not in removed]


def _default_sources(directory: Path) -> Iterable[Path]:
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(name for name in dirnames if not is_excluded_directory(name))
        for filename in sorted(filenames):
            if filename.lower().endswith(SOURCE_SUFFIX):
                yield Path(dirpath) / filename


def _expand(directory: Path, pattern: str) -> List[Path]:
    relative = normalise_descriptor_path(pattern)
    if any(token in relative for token in _WILDCARDS):
        if relative.endswith("**"):
            # MSBuild's trailing ** means every file below the directory.
            relative = f"{relative}/*"
        return sorted(path for path in directory.glob(relative) if path.is_file())
    return [directory / relative]


def _split_items(value: str) -> List[str]:
    return [item.strip() for item in value.split(";") if item.strip()]


def _local(tag: object) -> str:
    # Legacy projects qualify every tag with the MSBuild XML namespace.
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


__all__ = ["LANGUAGE", "load_modules", "load_project", "load_solution", "module_id_for"]
