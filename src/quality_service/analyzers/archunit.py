"""Architecture rule results from ArchUnit test suites.

ArchUnit rules run as ordinary JUnit tests during the build. This analyzer
reads the JUnit XML results of suites whose name marks them as architecture
tests and reports each failed rule as an error violation.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import List

from ..models import AnalysisResult, AnalysisStatus, Violation, ViolationSeverity
from .base import AnalysisError, Analyzer
from .xml_reports import iter_elements, local_name

logger = logging.getLogger(__name__)

SUITE_MARKERS = ("arch", "architecture", "layer")


def is_architecture_suite(name: str, base_package: str | None) -> bool:
    lowered = name.lower()
    if base_package and not name.startswith(base_package):
        return False
    return any(marker in lowered.rsplit(".", 1)[-1] for marker in SUITE_MARKERS)


class ArchUnitAnalyzer(Analyzer):
    """Summarize architecture test outcomes from JUnit XML reports."""

    name = "archunit"
    category = "architecture"

    def is_available(self) -> bool:
        return True

    def run(self, project_root: Path) -> AnalysisResult:
        results_dir = project_root / self.config.archunit_results_path
        report_files = sorted(results_dir.glob("TEST-*.xml")) if results_dir.is_dir() else []
        if not report_files:
            return AnalysisResult.skipped(
                self.name, f"No JUnit results found under {self.config.archunit_results_path}"
            )

        base_package = self.config.archunit_base_package or None
        rules_checked = 0
        violations: List[Violation] = []
        for report_file in report_files:
            suite = self._load_suite(report_file)
            suite_name = suite.get("name", report_file.stem[len("TEST-"):])
            if not is_architecture_suite(suite_name, base_package):
                logger.debug("Ignoring non-architecture suite %s", suite_name)
                continue

            for case in iter_elements(suite, "testcase"):
                rules_checked += 1
                failure = self._failure_of(case)
                if failure is None:
                    continue
                rule = case.get("name", "")
                message = (failure.get("message") or failure.text or rule).strip()
                violations.append(
                    Violation(
                        severity=ViolationSeverity.ERROR,
                        message=message.splitlines()[0] if message else rule,
                        type=self.name,
                        file=case.get("classname", suite_name),
                        rule=rule,
                    )
                )

        if rules_checked == 0:
            return AnalysisResult.skipped(self.name, "No architecture test suites found in JUnit results")

        failed = len(violations)
        threshold = self.config.archunit_failure_threshold
        status = AnalysisStatus.FAIL if failed > threshold else AnalysisStatus.PASS
        if status is AnalysisStatus.PASS and failed:
            status = AnalysisStatus.WARNING

        return AnalysisResult(
            type=self.name,
            status=status,
            summary=f"ArchUnit: {rules_checked - failed}/{rules_checked} architecture rules passed",
            violations=tuple(violations),
            metrics={
                "rulesChecked": rules_checked,
                "rulesPassed": rules_checked - failed,
                "violationsFound": failed,
                "score": round((rules_checked - failed) * 100.0 / rules_checked, 1),
                "basePackage": base_package or "",
            },
        )

    # ------------------------------------------------------------------
    def _load_suite(self, report_file: Path) -> ElementTree.Element:
        try:
            return ElementTree.parse(report_file).getroot()
        except ElementTree.ParseError as exc:
            raise AnalysisError(f"Failed to parse JUnit report {report_file}: {exc}") from exc

    @staticmethod
    def _failure_of(case: ElementTree.Element) -> ElementTree.Element | None:
        for child in case:
            if local_name(child.tag) in ("failure", "error"):
                return child
        return None


__all__ = ["ArchUnitAnalyzer", "is_architecture_suite"]
