"""Lossless JSON serialization of :class:`QualityReport`.

The JSON artifact is the canonical machine-readable output. ``load_json``
reverses ``render_json`` exactly: a report written and read back compares
equal field by field.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Mapping

from ..models import AnalysisResult, AnalysisStatus, QualityReport, Violation, ViolationSeverity
from .errors import ReportDecodeError, ReportRenderingError

logger = logging.getLogger(__name__)


def render_json(report: QualityReport) -> bytes:
    """Serialize ``report`` to UTF-8 encoded JSON."""

    try:
        payload = report_to_dict(report)
        return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise ReportRenderingError(f"Failed to render JSON report: {exc}") from exc


def report_to_dict(report: QualityReport) -> dict[str, Any]:
    return {
        "timestamp": report.timestamp.isoformat(),
        "projectPath": report.project_path,
        "overallStatus": report.overall_status.value,
        "ignoreFailures": report.ignore_failures,
        "results": [_result_to_dict(result) for result in report.results],
    }


def _result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    return {
        "type": result.type,
        "status": result.status.value,
        "summary": result.summary,
        "violations": [_violation_to_dict(violation) for violation in result.violations],
        "metrics": dict(result.metrics),
        "timestamp": result.timestamp.isoformat(),
    }


def _violation_to_dict(violation: Violation) -> dict[str, Any]:
    return {
        "severity": violation.severity.value,
        "message": violation.message,
        "type": violation.type,
        "file": violation.file,
        "line": violation.line,
        "rule": violation.rule,
    }


# ------------------------------------------------------------------
def load_json(data: bytes | str) -> QualityReport:
    """Rebuild a :class:`QualityReport` from a JSON artifact.

    Raises:
        ReportDecodeError: if the document is not valid JSON or lacks required fields.
    """

    try:
        payload = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ReportDecodeError(f"Report is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ReportDecodeError("Report JSON must be an object")

    try:
        report = QualityReport(
            project_path=str(payload["projectPath"]),
            results=tuple(_result_from_dict(item) for item in payload.get("results", [])),
            timestamp=datetime.fromisoformat(payload["timestamp"]),
            ignore_failures=bool(payload.get("ignoreFailures", False)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ReportDecodeError(f"Malformed report JSON: {exc}") from exc

    recorded = payload.get("overallStatus")
    if recorded is not None and recorded != report.overall_status.value:
        logger.warning(
            "Stored overall status %r differs from recomputed %r",
            recorded,
            report.overall_status.value,
        )
    return report


def _result_from_dict(item: Mapping[str, Any]) -> AnalysisResult:
    return AnalysisResult(
        type=item["type"],
        status=AnalysisStatus(item["status"]),
        summary=item.get("summary", ""),
        violations=tuple(_violation_from_dict(entry) for entry in item.get("violations", [])),
        metrics=dict(item.get("metrics", {})),
        timestamp=datetime.fromisoformat(item["timestamp"]),
    )


def _violation_from_dict(item: Mapping[str, Any]) -> Violation:
    return Violation(
        severity=ViolationSeverity(item["severity"]),
        message=item["message"],
        type=item["type"],
        file=item.get("file", ""),
        line=int(item.get("line", 0)),
        rule=item.get("rule", ""),
    )


__all__ = ["load_json", "render_json", "report_to_dict"]
