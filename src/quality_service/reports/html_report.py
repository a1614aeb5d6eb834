"""Human-readable HTML rendering of :class:`QualityReport`.

Generic cards list only ``error`` violations inline. Tools that write their
own detailed report (checkstyle, PMD, ...) get a link to it instead of a
warning list. Analyzer types without such a report list their warnings
separately under a ``violation-warning`` class, so warnings are never lost.
"""

from __future__ import annotations

import html
import logging
from typing import List

from ..analyzers.gemini import SEQUENTIAL_GEMINI
from ..models import AnalysisResult, QualityReport, ViolationSeverity
from .errors import ReportRenderingError
from .markup import markup_to_html

logger = logging.getLogger(__name__)

DETAILED_REPORT_TYPES = frozenset(
    {"checkstyle", "pmd", "spotbugs", "jacoco", "archunit", "kingfisher"}
)

_STYLE = """
body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; margin: 2rem; color: #222; }
header { border-bottom: 2px solid #ddd; margin-bottom: 1.5rem; }
.card { border: 1px solid #ddd; border-radius: 6px; padding: 1rem 1.25rem; margin-bottom: 1rem; }
.badge { display: inline-block; padding: 0.1rem 0.6rem; border-radius: 999px; color: #fff;
         font-size: 0.8rem; text-transform: uppercase; }
.status-pass { background: #2e7d32; }
.status-warning { background: #ed6c02; }
.status-fail { background: #c62828; }
.status-error { background: #6a1b9a; }
.status-skipped { background: #757575; }
.summary { white-space: pre-wrap; }
.violation-error { color: #c62828; }
.violation-warning { color: #ed6c02; }
.metrics td { padding: 0.1rem 0.75rem 0.1rem 0; }
details { margin-top: 0.75rem; }
"""


def render_html(report: QualityReport) -> bytes:
    """Render ``report`` as a standalone UTF-8 HTML document."""

    try:
        return _render_document(report).encode("utf-8")
    except Exception as exc:  # noqa: BLE001 - any rendering fault is reported as one error type
        raise ReportRenderingError(f"Failed to render HTML report: {exc}") from exc


def _render_document(report: QualityReport) -> str:
    logger.debug("Rendering HTML report with %d results", len(report.results))
    status = report.overall_status.value
    cards = [
        _render_sequential(result) if result.type == SEQUENTIAL_GEMINI else _render_card(result)
        for result in report.results
    ]
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="utf-8">',
            "<title>Quality report</title>",
            f"<style>{_STYLE}</style>",
            "</head>",
            "<body>",
            "<header>",
            "<h1>Quality report</h1>",
            f"<p>Project: <code>{_escape(report.project_path)}</code></p>",
            f"<p>Generated: {_escape(report.timestamp.isoformat())}</p>",
            f"<p>Overall status: {_badge(status)}</p>",
            "</header>",
            "<main>",
            *cards,
            "</main>",
            "</body>",
            "</html>",
        ]
    )


def _render_sequential(result: AnalysisResult) -> str:
    metrics = result.metrics
    rows = [
        ("Total guides", metrics.get("totalGuides", 0)),
        ("Successful", metrics.get("successfulGuides", 0)),
        ("Failed", metrics.get("failedGuides", 0)),
        ("Total time (s)", metrics.get("totalExecutionTimeSeconds", 0)),
    ]
    return "\n".join(
        [
            f'<section class="card ai-review" id="result-{_escape(result.type)}">',
            f"<h2>AI review {_badge(result.status.value)}</h2>",
            _metrics_table(rows),
            "<details>",
            "<summary>Guide feedback</summary>",
            markup_to_html(result.summary),
            "</details>",
            _violation_lists(result),
            "</section>",
        ]
    )


def _render_card(result: AnalysisResult) -> str:
    parts = [
        f'<section class="card" id="result-{_escape(result.type)}">',
        f"<h2>{_escape(result.type)} {_badge(result.status.value)}</h2>",
        f'<div class="summary">{_escape(result.summary)}</div>',
    ]
    counts = result.counts_by_severity()
    if result.violations:
        parts.append(
            f"<p>{counts['error']} errors, {counts['warning']} warnings, {counts['info']} info</p>"
        )
    parts.append(_violation_lists(result))

    report_path = result.metrics.get("reportPath")
    if report_path and result.type in DETAILED_REPORT_TYPES:
        parts.append(
            f'<p><a href="{_escape(str(report_path))}">Detailed {_escape(result.type)} report</a></p>'
        )
    parts.append("</section>")
    return "\n".join(parts)


def _violation_lists(result: AnalysisResult) -> str:
    parts: List[str] = []
    errors = result.violations_with(ViolationSeverity.ERROR)
    if errors:
        parts.append('<ul class="error-list">')
        parts.extend(
            f'<li class="violation-error">{_describe(violation)}</li>' for violation in errors
        )
        parts.append("</ul>")

    if result.type not in DETAILED_REPORT_TYPES:
        warnings = result.violations_with(ViolationSeverity.WARNING)
        if warnings:
            parts.append('<ul class="warning-list">')
            parts.extend(
                f'<li class="violation-warning">{_describe(violation)}</li>'
                for violation in warnings
            )
            parts.append("</ul>")
    return "\n".join(parts)


def _describe(violation) -> str:
    location = violation.location
    prefix = f"<code>{_escape(location)}</code> " if location else ""
    rule = f" <small>[{_escape(violation.rule)}]</small>" if violation.rule else ""
    return f"{prefix}{_escape(violation.message)}{rule}"


def _metrics_table(rows) -> str:
    cells = "\n".join(
        f"<tr><td>{_escape(label)}</td><td>{_escape(str(value))}</td></tr>" for label, value in rows
    )
    return f'<table class="metrics">\n{cells}\n</table>'


def _badge(status: str) -> str:
    return f'<span class="badge status-{_escape(status)}">{_escape(status)}</span>'


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


__all__ = ["DETAILED_REPORT_TYPES", "render_html"]
