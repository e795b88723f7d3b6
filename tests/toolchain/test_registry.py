"""Tests for process-wide toolchain registration."""

from __future__ import annotations

from typing import Iterator

import pytest

from sharpdoc.errors import ToolchainUnavailableError
from sharpdoc.toolchain import registry


@pytest.fixture(autouse=True)
def _restore_registration() -> Iterator[None]:
    previous = registry._registration
    yield
    registry._registration = previous


def test_registered_language_requires_registration() -> None:
    registry.reset_registration()

    assert registry.is_registered() is False
    with pytest.raises(ToolchainUnavailableError):
        registry.registered_language()


def test_ensure_registered_is_idempotent() -> None:
    registry.reset_registration()

    first = registry.ensure_registered()
    second = registry.ensure_registered()

    assert first is second
    assert first.name == registry.TOOLCHAIN_NAME
    assert registry.is_registered() is True
    assert registry.registered_language() is first.language


def test_toolchain_available_registers() -> None:
    registry.reset_registration()

    assert registry.toolchain_available() is True
    assert registry.is_registered() is True


def test_failed_grammar_load_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    registry.reset_registration()

    def _broken(_: object) -> None:
        raise ValueError("incompatible language version")

    monkeypatch.setattr(registry, "Language", _broken)

    assert registry.toolchain_available() is False
    with pytest.raises(ToolchainUnavailableError):
        registry.ensure_registered()
