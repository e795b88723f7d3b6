"""sharpdoc: .NET solution and project analysis with API documentation extraction."""

from .engine import AnalysisEngine
from .errors import (
    AnalysisFailure,
    AnalysisTimeout,
    InvalidArgumentError,
    NotFoundError,
    SharpDocError,
    ToolchainUnavailableError,
)
from .models import AnalysisResult, ApiDocumentation, DocumentationEntry, ModuleInfo

__version__ = "0.1.0"

__all__ = [
    "AnalysisEngine",
    "AnalysisFailure",
    "AnalysisResult",
    "AnalysisTimeout",
    "ApiDocumentation",
    "DocumentationEntry",
    "InvalidArgumentError",
    "ModuleInfo",
    "NotFoundError",
    "SharpDocError",
    "ToolchainUnavailableError",
]
