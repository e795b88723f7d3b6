"""Bounded, cycle-safe directory traversal."""

from __future__ import annotations

import os
import time
from collections import deque
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Deque, List, Optional, Set

from .errors import AnalysisTimeout
from .logging import get_logger
from .models import DirectoryEntry

_LOGGER = get_logger("walker")

BUILD_OUTPUT_DIRS = frozenset({"bin", "obj"})
DEFAULT_MAX_SUBDIRECTORIES = 5

_CATEGORY_BY_SUFFIX = {
    ".cs": "source",
    ".csproj": "project",
    ".sln": "solution",
    ".md": "markdown",
    ".json": "config",
}


def is_excluded_directory(name: str) -> bool:
    """Hidden directories and build output never take part in a walk."""
    return name.startswith(".") or name in BUILD_OUTPUT_DIRS


def find_files(
    root: Path | str,
    pattern: str,
    max_files: int,
    *,
    max_subdirectories: int = DEFAULT_MAX_SUBDIRECTORIES,
    deadline: Optional[float] = None,
) -> List[Path]:
    """Return at most ``max_files`` files under ``root`` matching ``pattern``.

    Directories are visited breadth-first so shallower matches always win over
    deeper ones. Each resolved directory is listed once, which keeps symlink
    cycles finite, and at most ``max_subdirectories`` children of any directory
    are queued. A directory that cannot be listed contributes nothing.

    ``deadline`` is a ``time.monotonic()`` value checked before every dequeue;
    crossing it raises :class:`AnalysisTimeout`, the only error this function
    lets escape.
    """
    if max_files <= 0:
        return []

    root_path = Path(root)
    try:
        if not root_path.is_dir():
            return []
    except OSError as exc:
        _LOGGER.warning("Could not access directory %s: %s", root_path, exc)
        return []

    matcher = pattern.lower()
    files: List[Path] = []
    queue: Deque[Path] = deque([root_path])
    visited: Set[str] = set()

    while queue and len(files) < max_files:
        _check_deadline(deadline)
        current = queue.popleft()
        key = os.path.realpath(current)
        if key in visited:
            continue
        visited.add(key)

        try:
            entries = sorted(os.scandir(current), key=lambda item: item.name.lower())
        except OSError as exc:
            _LOGGER.warning("Could not process directory %s: %s", current, exc)
            continue

        subdirectories: List[Path] = []
        for entry in entries:
            try:
                if entry.is_file():
                    if len(files) < max_files and fnmatchcase(entry.name.lower(), matcher):
                        files.append(Path(entry.path))
                elif entry.is_dir() and not is_excluded_directory(entry.name):
                    subdirectories.append(Path(entry.path))
            except OSError as exc:
                _LOGGER.warning("Could not inspect %s: %s", entry.path, exc)

        if len(files) >= max_files:
            break

        queued = 0
        for subdirectory in subdirectories:
            if queued >= max_subdirectories:
                break
            if os.path.realpath(subdirectory) in visited:
                continue
            queue.append(subdirectory)
            queued += 1

    _LOGGER.debug(
        "Walk of %s for %s found %d file(s) across %d directories",
        root_path,
        pattern,
        len(files),
        len(visited),
    )
    return files


def capture_directory_snapshot(
    root: Path | str,
    *,
    max_directories: int = 10,
    max_files: int = 20,
) -> List[DirectoryEntry]:
    """Return the top-level directories and files of ``root`` for display."""
    root_path = Path(root)
    snapshot: List[DirectoryEntry] = []
    try:
        entries = sorted(os.scandir(root_path), key=lambda item: item.name.lower())
    except OSError as exc:
        _LOGGER.warning("Could not read directory structure %s: %s", root_path, exc)
        return snapshot

    directories: List[DirectoryEntry] = []
    files: List[DirectoryEntry] = []
    for entry in entries:
        try:
            if entry.is_dir():
                if is_excluded_directory(entry.name) or len(directories) >= max_directories:
                    continue
                directories.append(
                    DirectoryEntry(name=entry.name, kind="directory", category="directory")
                )
            elif entry.is_file():
                if entry.name.startswith(".") or len(files) >= max_files:
                    continue
                files.append(
                    DirectoryEntry(name=entry.name, kind="file", category=file_category(entry.name))
                )
        except OSError as exc:
            _LOGGER.warning("Could not inspect %s: %s", entry.path, exc)

    snapshot.extend(directories)
    snapshot.extend(files)
    return snapshot


def file_category(filename: str) -> str:
    return _CATEGORY_BY_SUFFIX.get(os.path.splitext(filename)[1].lower(), "file")


def _check_deadline(deadline: Optional[float]) -> None:
    if deadline is not None and time.monotonic() > deadline:
        raise AnalysisTimeout("Directory walk exceeded the analysis time budget")


__all__ = [
    "BUILD_OUTPUT_DIRS",
    "capture_directory_snapshot",
    "file_category",
    "find_files",
    "is_excluded_directory",
]
