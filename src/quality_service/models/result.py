"""Normalized per-analyzer result model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, Mapping

from .status import AnalysisStatus
from .violation import Violation, ViolationSeverity

MetricValue = int | float | str | bool


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Output of one analyzer run, normalized across tools."""

    type: str
    status: AnalysisStatus
    summary: str = ""
    violations: tuple[Violation, ...] = ()
    metrics: Mapping[str, MetricValue] = field(default_factory=dict, hash=False)
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("AnalysisResult requires an analyzer type")
        # Accept plain strings and lists from callers, store the normalized forms.
        # Metrics are copied into a read-only view.
        object.__setattr__(self, "status", AnalysisStatus(self.status))
        object.__setattr__(self, "violations", tuple(self.violations))
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

        if self.status is AnalysisStatus.SKIPPED and (self.violations or self.metrics):
            raise ValueError(f"Skipped result for '{self.type}' must not carry violations or metrics")
        if self.status is AnalysisStatus.ERROR and not self.summary.strip():
            raise ValueError(f"Error result for '{self.type}' must describe the failure cause")

    # ------------------------------------------------------------------
    @classmethod
    def skipped(cls, analyzer_type: str, reason: str) -> "AnalysisResult":
        return cls(type=analyzer_type, status=AnalysisStatus.SKIPPED, summary=reason)

    @classmethod
    def error(cls, analyzer_type: str, cause: str | BaseException) -> "AnalysisResult":
        """Build an ``error`` result whose summary names the failure cause."""

        if isinstance(cause, BaseException):
            detail = str(cause) or cause.__class__.__name__
        else:
            detail = cause or "unknown failure"
        return cls(
            type=analyzer_type,
            status=AnalysisStatus.ERROR,
            summary=f"Analysis failed: {detail}",
        )

    # ------------------------------------------------------------------
    def violations_with(self, severity: ViolationSeverity) -> list[Violation]:
        return [violation for violation in self.violations if violation.severity is severity]

    def counts_by_severity(self) -> dict[str, int]:
        counts = {severity.value: 0 for severity in ViolationSeverity}
        for violation in self.violations:
            counts[violation.severity.value] += 1
        return counts


def status_from_violations(violations: Iterable[Violation]) -> AnalysisStatus:
    """Default status for tools whose findings are advisory."""

    return AnalysisStatus.WARNING if any(True for _ in violations) else AnalysisStatus.PASS

