"""Build toolchain abstraction and its tree-sitter implementation."""

from __future__ import annotations

from .base import BuildToolchain, Declaration, DeclaredSymbol, ModuleHandle, Workspace
from .registry import (
    TOOLCHAIN_NAME,
    ensure_registered,
    is_registered,
    registered_language,
    reset_registration,
    toolchain_available,
)
from .tree_sitter import TreeSitterToolchain, TreeSitterWorkspace


def default_toolchain() -> BuildToolchain:
    """Return the toolchain used when callers do not supply one."""
    return TreeSitterToolchain()


__all__ = [
    "BuildToolchain",
    "Declaration",
    "DeclaredSymbol",
    "ModuleHandle",
    "TOOLCHAIN_NAME",
    "TreeSitterToolchain",
    "TreeSitterWorkspace",
    "Workspace",
    "default_toolchain",
    "ensure_registered",
    "is_registered",
    "registered_language",
    "reset_registration",
    "toolchain_available",
]
