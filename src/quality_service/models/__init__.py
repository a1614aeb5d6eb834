"""Normalized data models shared by analyzers, the orchestrator and renderers."""

from .report import QualityReport
from .result import AnalysisResult, MetricValue, status_from_violations
from .status import AnalysisStatus, compute_overall_status
from .violation import Violation, ViolationSeverity

__all__ = [
    "AnalysisResult",
    "AnalysisStatus",
    "MetricValue",
    "QualityReport",
    "Violation",
    "ViolationSeverity",
    "compute_overall_status",
    "status_from_violations",
]
