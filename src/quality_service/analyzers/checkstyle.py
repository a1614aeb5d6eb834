"""Checkstyle integration."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import List

from ..models import Violation, ViolationSeverity
from .xml_reports import XmlReportAnalyzer, iter_elements, parse_line, relative_path

_SEVERITIES = {
    "error": ViolationSeverity.ERROR,
    "warning": ViolationSeverity.WARNING,
    "info": ViolationSeverity.INFO,
    "ignore": ViolationSeverity.INFO,
}


class CheckstyleAnalyzer(XmlReportAnalyzer):
    """Run the ``checkstyle`` CLI and read its XML report."""

    name = "checkstyle"
    title = "Checkstyle"
    executable = "checkstyle"

    def build_command(self, project_root: Path, report_path: Path) -> List[str]:
        return [
            self.executable,
            "-c",
            str(project_root / self.config.checkstyle_config_path),
            "-f",
            "xml",
            "-o",
            str(report_path),
            str(self.source_dir(project_root)),
        ]

    def parse_report(self, root: ElementTree.Element, project_root: Path) -> List[Violation]:
        violations: List[Violation] = []
        for file_element in iter_elements(root, "file"):
            file_path = relative_path(file_element.get("name", ""), project_root)
            for error in iter_elements(file_element, "error"):
                source = error.get("source", "")
                violations.append(
                    Violation(
                        severity=_SEVERITIES.get(
                            error.get("severity", "").lower(), ViolationSeverity.WARNING
                        ),
                        message=error.get("message", "").strip() or source,
                        type=self.name,
                        file=file_path,
                        line=parse_line(error.get("line")),
                        rule=source.rsplit(".", 1)[-1],
                    )
                )
        return violations
