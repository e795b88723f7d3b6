"""Base classes for project analyzers."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..descriptors import classify_descriptor
from ..errors import NotFoundError
from ..models import AnalysisResult


class ProjectAnalyzer(ABC):
    """Contract shared by the semantic and filesystem analyzers."""

    mode: str = ""

    @abstractmethod
    def analyze(self, project_path: str | Path) -> AnalysisResult:
        """Analyze a solution or project descriptor and return a populated result."""


def validate_descriptor(project_path: str | Path) -> tuple[Path, str]:
    """Return the descriptor path and its classification, or raise.

    Existence is checked before the suffix so a missing file always reports
    :class:`NotFoundError`.
    """
    path = Path(project_path).expanduser()
    if not path.is_file():
        raise NotFoundError(f"Project file not found: {project_path}")
    return path, classify_descriptor(path)
