"""SpotBugs integration."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree
from pathlib import Path
from typing import List

from ..models import AnalysisResult, Violation, ViolationSeverity
from .xml_reports import XmlReportAnalyzer, iter_elements, local_name, parse_line

CLASS_DIRECTORIES = ("build/classes/java/main", "target/classes")


def severity_for_priority(priority: str | None) -> ViolationSeverity:
    if priority == "1":
        return ViolationSeverity.ERROR
    if priority == "2":
        return ViolationSeverity.WARNING
    return ViolationSeverity.INFO


class SpotBugsAnalyzer(XmlReportAnalyzer):
    """Run SpotBugs in text-UI mode over compiled classes."""

    name = "spotbugs"
    title = "SpotBugs"
    executable = "spotbugs"

    def run(self, project_root: Path) -> AnalysisResult:
        if self.classes_dir(project_root) is None:
            return AnalysisResult.skipped(
                self.name, "No compiled classes found; build the project before running SpotBugs"
            )
        return super().run(project_root)

    def classes_dir(self, project_root: Path) -> Path | None:
        for candidate in CLASS_DIRECTORIES:
            path = project_root / candidate
            if path.is_dir():
                return path
        return None

    def build_command(self, project_root: Path, report_path: Path) -> List[str]:
        command = [
            self.executable,
            "-textui",
            "-xml:withMessages",
            "-effort:min",
            "-output",
            str(report_path),
        ]
        exclude = project_root / self.config.spotbugs_exclude_path
        if exclude.is_file():
            command.extend(["-exclude", str(exclude)])
        command.append(str(self.classes_dir(project_root)))
        return command

    def parse_report(self, root: ElementTree.Element, project_root: Path) -> List[Violation]:
        violations: List[Violation] = []
        for bug in iter_elements(root, "BugInstance"):
            messages: dict[str, str] = {}
            file_path = ""
            line = 0
            for child in bug:
                tag = local_name(child.tag)
                if tag in ("LongMessage", "ShortMessage"):
                    messages[tag] = (child.text or "").strip()
                elif tag == "SourceLine" and not file_path:
                    file_path = child.get("sourcepath", "")
                    line = parse_line(child.get("start"))

            bug_type = bug.get("type", "")
            message = messages.get("LongMessage") or messages.get("ShortMessage", "")
            violations.append(
                Violation(
                    severity=severity_for_priority(bug.get("priority")),
                    message=message or bug_type,
                    type=self.name,
                    file=file_path,
                    line=line,
                    rule=bug_type,
                )
            )
        return violations
