"""PMD integration."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import List

from ..models import Violation, ViolationSeverity
from .xml_reports import XmlReportAnalyzer, iter_elements, parse_line, relative_path

DEFAULT_RULESETS = ",".join(
    f"category/java/{category}.xml"
    for category in ("bestpractices", "codestyle", "design", "errorprone", "performance")
)


def severity_for_priority(priority: str | None) -> ViolationSeverity:
    """Map PMD priorities (1 = highest, 5 = lowest) onto violation severities."""

    try:
        value = int(priority or 3)
    except ValueError:
        return ViolationSeverity.WARNING
    if value <= 2:
        return ViolationSeverity.ERROR
    if value == 3:
        return ViolationSeverity.WARNING
    return ViolationSeverity.INFO


class PmdAnalyzer(XmlReportAnalyzer):
    """Run ``pmd check`` and read its XML report."""

    name = "pmd"
    title = "PMD"
    executable = "pmd"

    def build_command(self, project_root: Path, report_path: Path) -> List[str]:
        ruleset = project_root / self.config.pmd_ruleset_path
        return [
            self.executable,
            "check",
            "--no-fail-on-violation",
            "-d",
            str(self.source_dir(project_root)),
            "-R",
            str(ruleset) if ruleset.is_file() else DEFAULT_RULESETS,
            "-f",
            "xml",
            "-r",
            str(report_path),
        ]

    def parse_report(self, root: ElementTree.Element, project_root: Path) -> List[Violation]:
        violations: List[Violation] = []
        for file_element in iter_elements(root, "file"):
            file_path = relative_path(file_element.get("name", ""), project_root)
            for element in iter_elements(file_element, "violation"):
                rule = element.get("rule", "")
                violations.append(
                    Violation(
                        severity=severity_for_priority(element.get("priority")),
                        message=(element.text or "").strip() or rule,
                        type=self.name,
                        file=file_path,
                        line=parse_line(element.get("beginline")),
                        rule=rule,
                    )
                )
        return violations
