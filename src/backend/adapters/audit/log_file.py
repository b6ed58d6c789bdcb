from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Protocol

from common.contrast_engine.models import ContrastResult

AUDIT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
ABSENT_MARKER = "<none>"


class Auditor(Protocol):
    def record(self, result: ContrastResult) -> str:
        """Persist one result and return the rendered line."""
        ...


def render_audit_line(result: ContrastResult) -> str:
    """
    Render a result as one human-readable line.

    Shape:
      "2025-12-31 08:15:00: <identifier> <reference>  MATCH"

    Absent values are written as ``<none>``.
    """
    stamp = result.generated_at.strftime(AUDIT_TIME_FORMAT)
    identifier = result.identifier if result.identifier is not None else ABSENT_MARKER
    reference = result.reference if result.reference is not None else ABSENT_MARKER
    return f"{stamp}: {identifier} {reference}  {result.outcome.value}"


class LogFileAuditor:
    def __init__(
        self,
        path: Path,
        *,
        max_bytes: int = 1024 * 1024,
        backup_count: int = 2,
        echo_console: bool = False,
        logger_name: str = "contrast.audit",
    ) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

        # Unregistered logger: each auditor owns its handlers even for a shared file.
        self._logger = logging.Logger(logger_name)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._handlers: list[logging.Handler] = []

        file_handler = RotatingFileHandler(
            self._path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        self._handlers.append(file_handler)
        if echo_console:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter("%(message)s"))
            self._handlers.append(console)
        for handler in self._handlers:
            self._logger.addHandler(handler)

    @property
    def path(self) -> Path:
        return self._path

    def record(self, result: ContrastResult) -> str:
        line = render_audit_line(result)
        if result.is_match:
            self._logger.info(line)
        else:
            self._logger.warning(line)
        return line

    def close(self) -> None:
        for handler in self._handlers:
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers = []


class MemoryAuditor:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self.results: list[ContrastResult] = []

    def record(self, result: ContrastResult) -> str:
        line = render_audit_line(result)
        self.results.append(result)
        self.lines.append(line)
        return line
