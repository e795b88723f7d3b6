from __future__ import annotations

from pathlib import Path

import pytest

from sharpdoc.toolchain import ensure_registered
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable .NET project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def registered() -> None:
    """Load the C# grammar before a test touches the tree-sitter workspace."""
    ensure_registered()
