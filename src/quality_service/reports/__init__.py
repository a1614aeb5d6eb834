"""HTML and JSON renderers for quality reports."""

from .errors import ReportDecodeError, ReportRenderingError
from .html_report import render_html
from .json_report import load_json, render_json, report_to_dict
from .markup import markup_to_html
from .writer import HTML_FILENAME, JSON_FILENAME, write_reports

__all__ = [
    "HTML_FILENAME",
    "JSON_FILENAME",
    "ReportDecodeError",
    "ReportRenderingError",
    "load_json",
    "markup_to_html",
    "render_html",
    "render_json",
    "report_to_dict",
    "write_reports",
]
