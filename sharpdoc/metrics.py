"""Line-of-code counting that never aborts on a single unreadable file."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .errors import AnalysisTimeout
from .logging import get_logger

_LOGGER = get_logger("metrics")


@dataclass(frozen=True)
class ReadError:
    path: Path
    message: str


@dataclass(frozen=True)
class LineCount:
    """Outcome of counting one file: either ``lines`` or an ``error``."""

    path: Path
    lines: int = 0
    error: Optional[ReadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def count_text_lines(text: str) -> int:
    return len(text.splitlines())


def count_file_lines(path: Path) -> LineCount:
    try:
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        return LineCount(path=path, error=ReadError(path=path, message=str(exc)))
    return LineCount(path=path, lines=count_text_lines(text))


def sum_line_counts(
    paths: Iterable[Path],
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    deadline: Optional[float] = None,
) -> int:
    """Sum the line counts of ``paths``; unreadable files are logged and count as zero."""
    log = logger or _LOGGER
    total = 0
    for path in paths:
        if deadline is not None and time.monotonic() > deadline:
            raise AnalysisTimeout("Line counting exceeded the analysis time budget")
        outcome = count_file_lines(path)
        if outcome.ok:
            total += outcome.lines
        else:
            log.warning("Could not read file %s: %s", path, outcome.error.message)  # type: ignore[union-attr]
    return total


__all__ = ["LineCount", "ReadError", "count_file_lines", "count_text_lines", "sum_line_counts"]
