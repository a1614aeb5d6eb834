"""Analyzer contract shared by every tool integration."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ..config import QaConfiguration
from ..models import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """Raised inside an analyzer when its tool cannot produce a result."""


class Analyzer(ABC):
    """Abstract base class describing the analyzer contract.

    Subclasses implement :meth:`is_available` and :meth:`run`. Callers only
    use :meth:`check_available` and :meth:`analyze`, which never raise: an
    availability probe that fails counts as unavailable, and any fault raised
    by :meth:`run` comes back as an ``error`` result.
    """

    name: str = ""
    category: str = "static"

    def __init__(self, config: QaConfiguration | None = None) -> None:
        self.config = config or QaConfiguration.defaults()

    # ------------------------------------------------------------------
    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` when the underlying tool or service can run."""

    @abstractmethod
    def run(self, project_root: Path) -> AnalysisResult:
        """Execute the tool against ``project_root`` and normalize its output."""

    # ------------------------------------------------------------------
    def check_available(self) -> bool:
        try:
            return bool(self.is_available())
        except Exception as exc:  # noqa: BLE001 - availability probes must not crash the run
            logger.debug("Availability check for %s failed: %s", self.name, exc)
            return False

    def analyze(self, project_root: Path) -> AnalysisResult:
        """Run the analyzer and always return a normalized result."""

        try:
            result = self.run(project_root)
        except Exception as exc:  # noqa: BLE001 - faults become error results
            logger.exception("%s analysis failed", self.name)
            return AnalysisResult.error(self.name, exc)

        if not isinstance(result, AnalysisResult):
            return AnalysisResult.error(
                self.name, f"analyzer returned {type(result).__name__} instead of AnalysisResult"
            )
        if result.type != self.name:
            return AnalysisResult.error(
                self.name, f"analyzer reported result type '{result.type}'"
            )
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


__all__ = ["AnalysisError", "Analyzer"]
