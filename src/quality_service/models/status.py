"""Overall status fold over per-analyzer statuses."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class AnalysisStatus(str, Enum):
    """Status of a single analyzer run or of a whole report."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"
    ERROR = "error"
    SKIPPED = "skipped"


def compute_overall_status(
    statuses: Iterable[AnalysisStatus | str],
    *,
    ignore_failures: bool = False,
) -> AnalysisStatus:
    """Fold per-result statuses into the report status.

    ``error`` and ``fail`` make the report fail, or only warn when
    ``ignore_failures`` is set. Any ``warning`` makes it warn. Everything else
    (``pass`` and ``skipped``) passes. The result depends only on which
    statuses are present, never on their order or multiplicity.
    """

    present = {AnalysisStatus(status) for status in statuses}

    if AnalysisStatus.ERROR in present or AnalysisStatus.FAIL in present:
        return AnalysisStatus.WARNING if ignore_failures else AnalysisStatus.FAIL
    if AnalysisStatus.WARNING in present:
        return AnalysisStatus.WARNING
    return AnalysisStatus.PASS
