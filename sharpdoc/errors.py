"""Error taxonomy raised by the analysis engine."""

from __future__ import annotations


class SharpDocError(RuntimeError):
    """Base class for every escalated analysis error."""


class NotFoundError(SharpDocError, FileNotFoundError):
    """Raised when the descriptor path handed to an analyzer does not exist."""


class InvalidArgumentError(SharpDocError, ValueError):
    """Raised when an input is not a solution or project descriptor."""


class AnalysisFailure(SharpDocError):
    """Raised when a workspace cannot be opened or compiled.

    The underlying exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ToolchainUnavailableError(AnalysisFailure):
    """Raised when the build toolchain is missing or was never registered."""


class AnalysisTimeout(SharpDocError, TimeoutError):
    """Raised when filesystem analysis runs past its wall-clock budget."""

    def __init__(self, message: str, budget: float | None = None) -> None:
        super().__init__(message)
        self.budget = budget


__all__ = [
    "AnalysisFailure",
    "AnalysisTimeout",
    "InvalidArgumentError",
    "NotFoundError",
    "SharpDocError",
    "ToolchainUnavailableError",
]
