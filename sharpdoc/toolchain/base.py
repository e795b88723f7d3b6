"""Capability interface the semantic analyzers depend on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ModuleHandle:
    """A project as seen through an opened build workspace."""

    id: str
    name: str
    file_path: Path
    language: str
    assembly_name: Optional[str]
    output_file_path: Optional[str]
    project_references: Tuple[str, ...] = ()
    # None marks a reference without a display form.
    metadata_references: Tuple[Optional[str], ...] = ()
    documents: Tuple[Path, ...] = ()


@dataclass(frozen=True)
class Declaration:
    """A member declaration found in one compilation unit."""

    syntax_kind: str
    modifiers: Tuple[str, ...]
    namespace: Optional[str]
    source_path: Path
    node: Any = field(default=None, compare=False, repr=False)
    source: bytes = field(default=b"", compare=False, repr=False)

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers


@dataclass(frozen=True)
class DeclaredSymbol:
    name: str
    kind: str
    namespace: Optional[str]
    declaration: Declaration


class Workspace(ABC):
    """An opened solution or project; release it with :meth:`close` or ``with``."""

    def __init__(self, path: Path, kind: str) -> None:
        self.path = path
        self.kind = kind

    @abstractmethod
    def enumerate_modules(self) -> Sequence[ModuleHandle]:
        """Return the projects that make up the workspace."""

    @abstractmethod
    def enumerate_declarations(self, module: ModuleHandle) -> Iterator[Declaration]:
        """Yield every member declaration in the module's compilation units."""

    @abstractmethod
    def resolve_symbol(self, declaration: Declaration) -> Optional[DeclaredSymbol]:
        """Return the symbol a declaration introduces, or None when it has none."""

    @abstractmethod
    def get_doc_comment(self, symbol: DeclaredSymbol) -> Optional[str]:
        """Return the raw documentation comment markup attached to a symbol."""

    def close(self) -> None:
        """Release resources held by the workspace."""

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class BuildToolchain(ABC):
    """Opens build workspaces for solution and project descriptors."""

    name: str = ""

    @abstractmethod
    def open_workspace(self, path: Path) -> Workspace:
        """Open ``path`` and return a workspace; raise when it cannot be loaded."""
