"""Exceptions raised by the report renderers."""

from __future__ import annotations


class ReportRenderingError(RuntimeError):
    """Raised when a report cannot be rendered or written."""


class ReportDecodeError(RuntimeError):
    """Raised when a JSON report artifact cannot be turned back into a report."""


__all__ = ["ReportDecodeError", "ReportRenderingError"]
