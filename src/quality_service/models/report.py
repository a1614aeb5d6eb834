"""Aggregate quality report model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

from .result import AnalysisResult, utc_now
from .status import AnalysisStatus, compute_overall_status


@dataclass(frozen=True, slots=True)
class QualityReport:
    """Ordered analyzer results for one project snapshot.

    ``overall_status`` is derived from ``results`` each time it is read, so it
    cannot drift from the results it summarizes.
    """

    project_path: str
    results: tuple[AnalysisResult, ...] = ()
    timestamp: datetime = field(default_factory=utc_now)
    ignore_failures: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))

        seen: set[str] = set()
        for result in self.results:
            if result.type in seen:
                raise ValueError(f"Duplicate analyzer type in report: {result.type}")
            seen.add(result.type)

    @property
    def overall_status(self) -> AnalysisStatus:
        return compute_overall_status(
            (result.status for result in self.results),
            ignore_failures=self.ignore_failures,
        )

    @property
    def passed(self) -> bool:
        return self.overall_status is AnalysisStatus.PASS

    def result_for(self, analyzer_type: str) -> AnalysisResult | None:
        for result in self.results:
            if result.type == analyzer_type:
                return result
        return None

    def __iter__(self) -> Iterator[AnalysisResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)
