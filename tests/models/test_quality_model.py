from __future__ import annotations

import itertools
from datetime import datetime, timezone

import pytest

from quality_service.models import (
    AnalysisResult,
    AnalysisStatus,
    QualityReport,
    Violation,
    ViolationSeverity,
    compute_overall_status,
    status_from_violations,
)

STATUS_SETS = [
    [AnalysisStatus.PASS, AnalysisStatus.WARNING, AnalysisStatus.SKIPPED],
    [AnalysisStatus.PASS, AnalysisStatus.ERROR, AnalysisStatus.WARNING, AnalysisStatus.PASS],
    [AnalysisStatus.FAIL, AnalysisStatus.SKIPPED, AnalysisStatus.PASS],
    [AnalysisStatus.SKIPPED, AnalysisStatus.SKIPPED],
]


@pytest.mark.parametrize("statuses", STATUS_SETS)
@pytest.mark.parametrize("ignore_failures", [False, True])
def test_overall_status_is_order_independent(statuses, ignore_failures) -> None:
    expected = compute_overall_status(statuses, ignore_failures=ignore_failures)

    for permutation in itertools.permutations(statuses):
        assert compute_overall_status(permutation, ignore_failures=ignore_failures) is expected
    assert compute_overall_status(statuses, ignore_failures=ignore_failures) is expected


@pytest.mark.parametrize(
    ("statuses", "expected"),
    [
        ([], AnalysisStatus.PASS),
        ([AnalysisStatus.PASS, AnalysisStatus.SKIPPED], AnalysisStatus.PASS),
        ([AnalysisStatus.PASS, AnalysisStatus.WARNING], AnalysisStatus.WARNING),
        ([AnalysisStatus.WARNING, AnalysisStatus.FAIL], AnalysisStatus.FAIL),
        ([AnalysisStatus.PASS, AnalysisStatus.ERROR], AnalysisStatus.FAIL),
        (["pass", "warning"], AnalysisStatus.WARNING),
    ],
)
def test_overall_status_rules(statuses, expected) -> None:
    assert compute_overall_status(statuses) is expected


def test_ignore_failures_downgrades_errors_and_failures_to_warning() -> None:
    statuses = [AnalysisStatus.ERROR, AnalysisStatus.FAIL, AnalysisStatus.ERROR]

    assert compute_overall_status(statuses) is AnalysisStatus.FAIL
    assert compute_overall_status(statuses, ignore_failures=True) is AnalysisStatus.WARNING


def test_violation_rejects_negative_line() -> None:
    with pytest.raises(ValueError):
        Violation(severity=ViolationSeverity.ERROR, message="boom", type="pmd", line=-1)


def test_violation_location() -> None:
    assert Violation(ViolationSeverity.INFO, "m", "pmd", file="A.java", line=3).location == "A.java:3"
    assert Violation(ViolationSeverity.INFO, "m", "pmd", file="A.java").location == "A.java"
    assert Violation(ViolationSeverity.INFO, "m", "pmd").location == ""


def test_skipped_result_must_not_carry_violations_or_metrics() -> None:
    violation = Violation(ViolationSeverity.WARNING, "m", "pmd")

    with pytest.raises(ValueError):
        AnalysisResult(type="pmd", status=AnalysisStatus.SKIPPED, violations=(violation,))
    with pytest.raises(ValueError):
        AnalysisResult(type="pmd", status=AnalysisStatus.SKIPPED, metrics={"violationsFound": 0})

    skipped = AnalysisResult.skipped("pmd", "pmd not installed")
    assert skipped.status is AnalysisStatus.SKIPPED
    assert skipped.violations == ()
    assert skipped.metrics == {}


def test_error_result_requires_cause() -> None:
    with pytest.raises(ValueError):
        AnalysisResult(type="pmd", status=AnalysisStatus.ERROR, summary="   ")

    result = AnalysisResult.error("pmd", RuntimeError("report missing"))
    assert result.status is AnalysisStatus.ERROR
    assert "report missing" in result.summary
    assert result.violations == ()


def test_result_normalizes_inputs() -> None:
    violation = Violation(ViolationSeverity.ERROR, "m", "pmd")
    result = AnalysisResult(type="pmd", status="warning", violations=[violation])

    assert result.status is AnalysisStatus.WARNING
    assert result.violations == (violation,)
    assert result.counts_by_severity() == {"info": 0, "warning": 0, "error": 1}
    assert result.violations_with(ViolationSeverity.ERROR) == [violation]


def test_result_metrics_are_read_only_and_result_is_hashable() -> None:
    source = {"violationsFound": 2}
    result = AnalysisResult(type="pmd", status=AnalysisStatus.WARNING, metrics=source)

    source["violationsFound"] = 99
    assert result.metrics == {"violationsFound": 2}
    with pytest.raises(TypeError):
        result.metrics["violationsFound"] = 0  # type: ignore[index]

    assert isinstance(hash(result), int)


def test_status_from_violations() -> None:
    assert status_from_violations([]) is AnalysisStatus.PASS
    assert (
        status_from_violations([Violation(ViolationSeverity.INFO, "m", "pmd")])
        is AnalysisStatus.WARNING
    )


def test_report_overall_status_follows_results() -> None:
    timestamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
    results = (
        AnalysisResult(type="a", status=AnalysisStatus.PASS),
        AnalysisResult(type="b", status=AnalysisStatus.FAIL, summary="coverage too low"),
    )

    report = QualityReport(project_path="/project", results=results, timestamp=timestamp)
    lenient = QualityReport(
        project_path="/project", results=results, timestamp=timestamp, ignore_failures=True
    )

    assert report.overall_status is AnalysisStatus.FAIL
    assert not report.passed
    assert lenient.overall_status is AnalysisStatus.WARNING
    assert report.result_for("b") is results[1]
    assert report.result_for("missing") is None
    assert [result.type for result in report] == ["a", "b"]
    assert len(report) == 2


def test_report_rejects_duplicate_types() -> None:
    with pytest.raises(ValueError):
        QualityReport(
            project_path="/project",
            results=(
                AnalysisResult(type="pmd", status=AnalysisStatus.PASS),
                AnalysisResult(type="pmd", status=AnalysisStatus.PASS),
            ),
        )
