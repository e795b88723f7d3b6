"""Process-wide registration of the C# parsing toolchain."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import tree_sitter_c_sharp
from tree_sitter import Language

from ..errors import ToolchainUnavailableError
from ..logging import get_logger

_LOGGER = get_logger("toolchain")

TOOLCHAIN_NAME = "tree-sitter-c-sharp"


@dataclass(frozen=True)
class ToolchainRegistration:
    name: str
    language: Language


_lock = threading.Lock()
_registration: Optional[ToolchainRegistration] = None


def ensure_registered() -> ToolchainRegistration:
    """Load the C# grammar once per process and return the registration.

    Callers invoke this before constructing analyzers; analyzers never register
    on their own.
    """
    global _registration
    with _lock:
        if _registration is None:
            try:
                language = Language(tree_sitter_c_sharp.language())
            except (TypeError, ValueError) as exc:
                _LOGGER.error("Failed to register %s: %s", TOOLCHAIN_NAME, exc)
                raise ToolchainUnavailableError(
                    f"Could not load the {TOOLCHAIN_NAME} grammar: {exc}", exc
                ) from exc
            _registration = ToolchainRegistration(name=TOOLCHAIN_NAME, language=language)
            _LOGGER.info("Toolchain registered: %s", TOOLCHAIN_NAME)
        return _registration


def is_registered() -> bool:
    return _registration is not None


def registered_language() -> Language:
    registration = _registration
    if registration is None:
        raise ToolchainUnavailableError(
            "C# toolchain is not registered; call ensure_registered() first"
        )
    return registration.language


def toolchain_available() -> bool:
    """Try to register the toolchain and report whether semantic analysis can run."""
    try:
        ensure_registered()
    except ToolchainUnavailableError:
        return False
    return True


def reset_registration() -> None:
    """Forget the current registration so the next call loads the grammar again."""
    global _registration
    with _lock:
        _registration = None


__all__ = [
    "TOOLCHAIN_NAME",
    "ToolchainRegistration",
    "ensure_registered",
    "is_registered",
    "registered_language",
    "reset_registration",
    "toolchain_available",
]
