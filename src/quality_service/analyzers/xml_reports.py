"""Shared plumbing for linters that write an XML report and are parsed afterwards."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from abc import abstractmethod
from pathlib import Path
from typing import Iterator, List, Sequence

from ..config import QaConfiguration
from ..models import AnalysisResult, Violation, ViolationSeverity, status_from_violations
from .base import AnalysisError, Analyzer
from .process import CommandRunner, executable_available

logger = logging.getLogger(__name__)

REPORT_FILENAME = "main.xml"


def local_name(tag: str) -> str:
    """Strip an XML namespace (``{ns}violation -> violation``)."""

    return tag.rsplit("}", 1)[-1]


def iter_elements(root: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    for element in root.iter():
        if local_name(element.tag) == name:
            yield element


def relative_path(path: str, project_root: Path) -> str:
    if not path:
        return ""
    try:
        return str(Path(path).resolve().relative_to(project_root.resolve()))
    except ValueError:
        return path


def parse_line(value: str | None) -> int:
    try:
        line = int(value or 0)
    except ValueError:
        return 0
    return max(line, 0)


class XmlReportAnalyzer(Analyzer):
    """Base for tools invoked as ``<executable> ... -> build/reports/<name>/main.xml``."""

    executable: str = ""
    title: str = ""

    def __init__(
        self,
        config: QaConfiguration | None = None,
        *,
        runner: CommandRunner | None = None,
        executable: str | None = None,
    ) -> None:
        super().__init__(config)
        self.runner = runner or CommandRunner(timeout=self.config.command_timeout_seconds)
        if executable is not None:
            self.executable = executable

    # ------------------------------------------------------------------
    def is_available(self) -> bool:
        return executable_available(self.executable)

    def run(self, project_root: Path) -> AnalysisResult:
        logger.info("Running %s analysis on: %s", self.title, project_root)
        report_path = self.report_path(project_root)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.unlink(missing_ok=True)

        command = self.build_command(project_root, report_path)
        completed = self.runner.run(command, cwd=project_root)

        if not report_path.exists():
            detail = (completed.stderr or completed.stdout or "").strip()[:300]
            raise AnalysisError(
                f"{self.title} did not produce a report at {report_path}"
                + (f" (exit code {completed.returncode}: {detail})" if detail else "")
            )

        violations = self.parse_report(self._load_xml(report_path), project_root)
        return self.build_result(violations, report_path, project_root)

    # ------------------------------------------------------------------
    def report_path(self, project_root: Path) -> Path:
        return project_root / "build" / "reports" / self.name / REPORT_FILENAME

    def source_dir(self, project_root: Path) -> Path:
        candidate = project_root / "src" / "main" / "java"
        return candidate if candidate.is_dir() else project_root

    @abstractmethod
    def build_command(self, project_root: Path, report_path: Path) -> List[str]:
        """Return the command line that writes the XML report to ``report_path``."""

    @abstractmethod
    def parse_report(self, root: ElementTree.Element, project_root: Path) -> List[Violation]:
        """Convert the tool's XML document into normalized violations."""

    # ------------------------------------------------------------------
    def build_result(
        self,
        violations: Sequence[Violation],
        report_path: Path,
        project_root: Path,
    ) -> AnalysisResult:
        counts = {severity.value: 0 for severity in ViolationSeverity}
        for violation in violations:
            counts[violation.severity.value] += 1

        summary = f"{self.title} found {len(violations)} violations"
        if violations:
            summary += f" ({counts['error']} errors, {counts['warning']} warnings, {counts['info']} info)"

        return AnalysisResult(
            type=self.name,
            status=status_from_violations(violations),
            summary=summary,
            violations=tuple(violations),
            metrics={
                "violationsFound": len(violations),
                "errors": counts["error"],
                "warnings": counts["warning"],
                "infos": counts["info"],
                "reportPath": relative_path(str(report_path), project_root),
            },
        )

    def _load_xml(self, report_path: Path) -> ElementTree.Element:
        try:
            return ElementTree.parse(report_path).getroot()
        except ElementTree.ParseError as exc:
            raise AnalysisError(f"Failed to parse {self.title} report {report_path}: {exc}") from exc


__all__ = [
    "XmlReportAnalyzer",
    "iter_elements",
    "local_name",
    "parse_line",
    "relative_path",
]
