"""Write the enabled report formats under an output directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict

from ..config import QaConfiguration
from ..models import QualityReport
from .errors import ReportRenderingError
from .html_report import render_html
from .json_report import render_json

logger = logging.getLogger(__name__)

JSON_FILENAME = "quality-report.json"
HTML_FILENAME = "quality-report.html"


def write_reports(
    report: QualityReport, output_root: Path, config: QaConfiguration
) -> Dict[str, Path]:
    """Render and write every enabled format, returning ``{format: path}``."""

    renderers: Dict[str, tuple[str, Callable[[QualityReport], bytes]]] = {}
    if config.json_report_enabled:
        renderers["json"] = (JSON_FILENAME, render_json)
    if config.html_report_enabled:
        renderers["html"] = (HTML_FILENAME, render_html)

    try:
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ReportRenderingError(f"Cannot create report directory {output_root}: {exc}") from exc

    written: Dict[str, Path] = {}
    for report_format, (filename, renderer) in renderers.items():
        target = output_root / filename
        content = renderer(report)
        try:
            target.write_bytes(content)
        except OSError as exc:
            raise ReportRenderingError(f"Failed to write {report_format} report to {target}: {exc}") from exc
        logger.info("Wrote %s report to %s", report_format.upper(), target)
        written[report_format] = target
    return written


__all__ = ["HTML_FILENAME", "JSON_FILENAME", "write_reports"]
