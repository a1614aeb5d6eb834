"""Violation model shared by analyzers and report renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ViolationSeverity(str, Enum):
    """Severity levels a normalized violation can carry."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single finding reported by an analyzer."""

    severity: ViolationSeverity
    message: str
    type: str
    file: str = ""
    line: int = 0
    rule: str = ""

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError(f"Violation line must be non-negative, got {self.line}")

    @property
    def location(self) -> str:
        """Return ``file:line`` or an empty string for project-level findings."""

        if not self.file:
            return ""
        if self.line:
            return f"{self.file}:{self.line}"
        return self.file
