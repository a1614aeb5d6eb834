"""Tests for the ``qa-quality analyze`` command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quality_service.analyzers import Analyzer
from quality_service.cli import app
from quality_service.models import AnalysisResult, AnalysisStatus
from quality_service.reports import ReportRenderingError
from quality_service.service import QualityService


class StaticAnalyzer(Analyzer):
    def __init__(self, name: str, status: AnalysisStatus) -> None:
        super().__init__()
        self.name = name
        self.status = status

    def is_available(self) -> bool:
        return True

    def run(self, project_root: Path) -> AnalysisResult:
        return AnalysisResult(type=self.name, status=self.status, summary=f"{self.name} done")


def make_service(*statuses: AnalysisStatus, captured: dict | None = None) -> QualityService:
    def factory(config):
        if captured is not None:
            captured["config"] = config
        return [StaticAnalyzer(f"tool-{index}", status) for index, status in enumerate(statuses)]

    return QualityService(analyzer_factory=factory)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "config").mkdir(parents=True)
    (root / "config" / "qa.yaml").write_text("archunit:\n  basePackage: com.example\n", encoding="utf-8")
    return root


def test_passing_run_writes_reports_and_exits_zero(project: Path, capsys) -> None:
    output = project / "reports"

    exit_code = app.main(
        ["analyze", str(project), "--output", str(output)],
        service=make_service(AnalysisStatus.PASS, AnalysisStatus.SKIPPED),
    )

    assert exit_code == 0
    stdout = capsys.readouterr().out
    assert "tool-0" in stdout and "Overall status: pass" in stdout
    payload = json.loads((output / "quality-report.json").read_text(encoding="utf-8"))
    assert payload["overallStatus"] == "pass"
    assert (output / "quality-report.html").is_file()


def test_warning_run_exits_one(project: Path) -> None:
    exit_code = app.main(
        ["analyze", str(project), "--output", str(project / "out")],
        service=make_service(AnalysisStatus.PASS, AnalysisStatus.WARNING),
    )

    assert exit_code == 1


def test_ignore_failures_and_parallel_flags_override_configuration(project: Path) -> None:
    captured: dict = {}

    exit_code = app.main(
        ["analyze", str(project), "--output", str(project / "out"), "--ignore-failures", "--parallel"],
        service=make_service(AnalysisStatus.FAIL, captured=captured),
    )

    config = captured["config"]
    assert config.ignore_failures is True
    assert config.parallel is True
    assert config.archunit_base_package == "com.example"
    assert exit_code == 1


def test_explicit_config_file(project: Path, tmp_path: Path) -> None:
    config_file = tmp_path / "qa.properties"
    config_file.write_text("qa.reports.html.enabled=false\n", encoding="utf-8")
    output = project / "out"

    exit_code = app.main(
        ["analyze", str(project), "--output", str(output), "--config", str(config_file)],
        service=make_service(AnalysisStatus.PASS),
    )

    assert exit_code == 0
    assert (output / "quality-report.json").is_file()
    assert not (output / "quality-report.html").exists()


def test_invalid_configuration_exits_two(project: Path, capsys) -> None:
    (project / "config" / "qa.yaml").write_text("ignoreFailures: sometimes\n", encoding="utf-8")

    exit_code = app.main(["analyze", str(project)], service=make_service(AnalysisStatus.PASS))

    assert exit_code == 2
    assert "Error:" in capsys.readouterr().out


def test_undecodable_configuration_exits_two(project: Path, capsys) -> None:
    config_file = project / "config" / "qa.yaml"
    config_file.write_bytes(b"\xff\xfe")

    exit_code = app.main(
        ["analyze", str(project), "--config", str(config_file)],
        service=make_service(AnalysisStatus.PASS),
    )

    assert exit_code == 2
    assert "Error:" in capsys.readouterr().out


def test_rendering_failure_exits_two(project: Path, monkeypatch, capsys) -> None:
    def failing_write(report, output_root, config):
        raise ReportRenderingError("disk full")

    monkeypatch.setattr(app, "write_reports", failing_write)

    exit_code = app.main(["analyze", str(project)], service=make_service(AnalysisStatus.PASS))

    assert exit_code == 2
    assert "disk full" in capsys.readouterr().out


def test_missing_project_exits_two(tmp_path: Path) -> None:
    assert app.main(["analyze", str(tmp_path / "absent")]) == 2


def test_no_command_prints_help(capsys) -> None:
    assert app.main([]) == 0
    assert "analyze" in capsys.readouterr().out


def test_render_table_lists_each_analyzer() -> None:
    from quality_service.models import QualityReport

    report = QualityReport(
        project_path="/p",
        results=(
            AnalysisResult(type="pmd", status=AnalysisStatus.WARNING, summary="PMD found 1\nmore"),
            AnalysisResult.skipped("jacoco", "no report"),
        ),
    )

    table = app.render_table(report)

    lines = table.splitlines()
    assert lines[0].split() == ["Analyzer", "Status", "Violations", "Summary"]
    assert lines[2].startswith("pmd")
    assert "PMD found 1" in lines[2] and "more" not in lines[2]
    assert lines[-1] == "Overall status: warning"
