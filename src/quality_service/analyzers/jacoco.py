"""JaCoCo coverage integration.

Reads the XML report the build already produced; JaCoCo itself is not invoked.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import Dict, List

from ..models import AnalysisResult, AnalysisStatus, Violation, ViolationSeverity
from .base import AnalysisError, Analyzer
from .xml_reports import local_name, relative_path

logger = logging.getLogger(__name__)

# counter type -> (metric name, configuration attribute holding the minimum)
_COUNTERS = {
    "INSTRUCTION": ("instructionCoverage", "jacoco_min_instruction_coverage"),
    "BRANCH": ("branchCoverage", "jacoco_min_branch_coverage"),
    "LINE": ("lineCoverage", "jacoco_min_line_coverage"),
}


def read_totals(root: ElementTree.Element) -> Dict[str, tuple[int, int]]:
    """Return ``{counter type: (missed, covered)}`` for the report-level counters."""

    totals: Dict[str, tuple[int, int]] = {}
    for child in root:
        if local_name(child.tag) != "counter":
            continue
        try:
            missed = int(child.get("missed", "0"))
            covered = int(child.get("covered", "0"))
        except ValueError as exc:
            raise AnalysisError(f"Invalid JaCoCo counter: {child.attrib}") from exc
        totals[child.get("type", "")] = (missed, covered)
    return totals


def percentage(missed: int, covered: int) -> float:
    total = missed + covered
    return round(covered * 100.0 / total, 2) if total else 0.0


class JaCoCoAnalyzer(Analyzer):
    """Compare report-level coverage against the configured minimums."""

    name = "jacoco"
    category = "coverage"

    def is_available(self) -> bool:
        return True

    def run(self, project_root: Path) -> AnalysisResult:
        report_path = project_root / self.config.jacoco_report_path
        if not report_path.is_file():
            return AnalysisResult.skipped(
                self.name, f"No JaCoCo XML report found at {self.config.jacoco_report_path}"
            )

        try:
            root = ElementTree.parse(report_path).getroot()
        except ElementTree.ParseError as exc:
            raise AnalysisError(f"Failed to parse JaCoCo report {report_path}: {exc}") from exc

        logger.debug("Reading JaCoCo report %s", report_path)
        totals = read_totals(root)
        if not totals:
            raise AnalysisError(f"JaCoCo report {report_path} has no coverage counters")

        metrics: Dict[str, int | float | str] = {}
        violations: List[Violation] = []
        for counter, (metric_name, minimum_attribute) in _COUNTERS.items():
            missed, covered = totals.get(counter, (0, 0))
            coverage = percentage(missed, covered)
            metrics[metric_name] = coverage

            minimum = float(getattr(self.config, minimum_attribute))
            if coverage < minimum:
                label = counter.lower()
                violations.append(
                    Violation(
                        severity=ViolationSeverity.WARNING,
                        message=f"{label.title()} coverage {coverage:.1f}% is below minimum {minimum:.1f}%",
                        type=self.name,
                        rule=f"min-{label}-coverage",
                    )
                )

        for counter, metric_name in (("CLASS", "classCount"), ("METHOD", "methodCount")):
            missed, covered = totals.get(counter, (0, 0))
            metrics[metric_name] = missed + covered
        metrics["violationsFound"] = len(violations)
        metrics["reportPath"] = relative_path(str(report_path), project_root)

        summary = (
            f"Coverage: {metrics['lineCoverage']:.1f}% lines, "
            f"{metrics['branchCoverage']:.1f}% branches, "
            f"{metrics['instructionCoverage']:.1f}% instructions"
        )
        if violations:
            summary += f"\n{len(violations)} coverage minimums not met"

        return AnalysisResult(
            type=self.name,
            status=AnalysisStatus.FAIL if violations else AnalysisStatus.PASS,
            summary=summary,
            violations=tuple(violations),
            metrics=metrics,
        )


__all__ = ["JaCoCoAnalyzer", "percentage", "read_totals"]
