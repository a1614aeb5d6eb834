"""Kingfisher secret scanner integration."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from ..config import QaConfiguration
from ..models import AnalysisResult, AnalysisStatus, Violation, ViolationSeverity
from .base import AnalysisError, Analyzer
from .process import CommandRunner, executable_available
from .xml_reports import relative_path

logger = logging.getLogger(__name__)

EXCLUDED_PATHS = ("build/**", ".git/**", "**/*.class")

_CONFIDENCE_TO_SEVERITY = {
    "high": ViolationSeverity.ERROR,
    "medium": ViolationSeverity.WARNING,
    "low": ViolationSeverity.INFO,
}


def iter_matches(data: Any) -> Iterable[Mapping[str, Any]]:
    """Yield match objects from the shapes Kingfisher emits (list, wrapper object, rule results)."""

    if isinstance(data, list):
        for item in data:
            yield from iter_matches(item)
        return
    if not isinstance(data, Mapping):
        return
    if "finding" in data:
        yield data
        return
    for key in ("matches", "findings", "results"):
        if key in data:
            yield from iter_matches(data[key])


class KingfisherAnalyzer(Analyzer):
    """Scan the project tree for committed secrets."""

    name = "kingfisher"
    category = "security"
    executable = "kingfisher"

    def __init__(
        self,
        config: QaConfiguration | None = None,
        *,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(config)
        self.runner = runner or CommandRunner(timeout=self.config.command_timeout_seconds)

    def is_available(self) -> bool:
        return executable_available(self.executable)

    def run(self, project_root: Path) -> AnalysisResult:
        completed = self.runner.run(self.build_command(project_root), cwd=project_root)
        # Kingfisher exits 200/205 when it reports findings.
        if completed.returncode not in (0, 200, 205) and not completed.stdout.strip():
            raise AnalysisError(
                f"kingfisher failed with exit code {completed.returncode}: {completed.stderr.strip()[:300]}"
            )

        violations = self.parse_output(completed.stdout, project_root)
        logger.debug("Kingfisher reported %d matches", len(violations))
        severities = {violation.severity for violation in violations}
        if ViolationSeverity.ERROR in severities:
            status = AnalysisStatus.FAIL
        elif violations:
            status = AnalysisStatus.WARNING
        else:
            status = AnalysisStatus.PASS

        return AnalysisResult(
            type=self.name,
            status=status,
            summary=f"Kingfisher found {len(violations)} potential secrets",
            violations=tuple(violations),
            metrics={
                "violationsFound": len(violations),
                "confidenceLevel": self.config.kingfisher_confidence_level,
                "validationEnabled": self.config.kingfisher_validation_enabled,
            },
        )

    # ------------------------------------------------------------------
    def build_command(self, project_root: Path) -> List[str]:
        command = [
            self.executable,
            "scan",
            str(project_root),
            "--confidence",
            self.config.kingfisher_confidence_level,
        ]
        for pattern in EXCLUDED_PATHS:
            command.extend(["--exclude", pattern])
        if not self.config.kingfisher_validation_enabled:
            command.append("--no-validate")
        command.extend(["--format", "json"])
        return command

    def parse_output(self, output: str, project_root: Path) -> List[Violation]:
        text = output.strip()
        if not text:
            return []

        try:
            documents: List[Any] = [json.loads(text)]
        except json.JSONDecodeError:
            documents = []
            for line in text.splitlines():
                line = line.strip()
                if not line.startswith(("{", "[")):
                    continue
                try:
                    documents.append(json.loads(line))
                except json.JSONDecodeError as exc:
                    raise AnalysisError("Kingfisher output was not valid JSON") from exc

        return [self._to_violation(match, project_root) for match in iter_matches(documents)]

    def _to_violation(self, match: Mapping[str, Any], project_root: Path) -> Violation:
        finding = match.get("finding") or {}
        rule = match.get("rule") or {}
        confidence = str(finding.get("confidence", "medium")).lower()
        try:
            line = max(int(finding.get("line") or 0), 0)
        except (TypeError, ValueError):
            line = 0

        return Violation(
            severity=_CONFIDENCE_TO_SEVERITY.get(confidence, ViolationSeverity.WARNING),
            message=str(rule.get("name") or "Secret detected"),
            type=self.name,
            file=relative_path(str(finding.get("path") or ""), project_root),
            line=line,
            rule=str(rule.get("id") or ""),
        )


__all__ = ["KingfisherAnalyzer", "iter_matches"]
