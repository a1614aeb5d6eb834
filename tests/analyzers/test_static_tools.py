from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from quality_service.analyzers import CheckstyleAnalyzer, PmdAnalyzer, SpotBugsAnalyzer
from quality_service.config import QaConfiguration
from quality_service.models import AnalysisStatus, ViolationSeverity


class ReportWritingRunner:
    """Test double that writes a canned XML report where the tool would."""

    def __init__(self, report_xml: str | None, output_flag: str) -> None:
        self.report_xml = report_xml
        self.output_flag = output_flag
        self.calls: list[list[str]] = []

    def run(self, args, **kwargs):
        self.calls.append(list(args))
        if self.report_xml is not None:
            target = Path(args[args.index(self.output_flag) + 1])
            target.write_text(self.report_xml, encoding="utf-8")
        return SimpleNamespace(returncode=0, stdout="", stderr="tool crashed")


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    (tmp_path / "src" / "main" / "java").mkdir(parents=True)
    return tmp_path


def test_checkstyle_parses_report(java_project: Path) -> None:
    source = java_project / "src" / "main" / "java" / "App.java"
    report = f"""<?xml version="1.0"?>
<checkstyle version="10.12">
  <file name="{source}">
    <error line="3" severity="error" message="Missing javadoc"
           source="com.puppycrawl.tools.checkstyle.checks.javadoc.MissingJavadocTypeCheck"/>
    <error line="9" severity="warning" message="Line is longer than 100 characters"
           source="com.puppycrawl.tools.checkstyle.checks.sizes.LineLengthCheck"/>
  </file>
</checkstyle>
"""
    runner = ReportWritingRunner(report, "-o")
    analyzer = CheckstyleAnalyzer(QaConfiguration.defaults(), runner=runner)

    result = analyzer.analyze(java_project)

    assert result.type == "checkstyle"
    assert result.status is AnalysisStatus.WARNING
    assert [v.severity for v in result.violations] == [
        ViolationSeverity.ERROR,
        ViolationSeverity.WARNING,
    ]
    first = result.violations[0]
    assert first.file == str(Path("src") / "main" / "java" / "App.java")
    assert first.line == 3
    assert first.rule == "MissingJavadocTypeCheck"
    assert result.metrics["violationsFound"] == 2
    assert result.metrics["errors"] == 1
    assert result.metrics["reportPath"] == str(Path("build") / "reports" / "checkstyle" / "main.xml")

    command = runner.calls[0]
    assert command[:2] == ["checkstyle", "-c"]
    assert command[-1] == str(java_project / "src" / "main" / "java")


def test_checkstyle_clean_report_passes(java_project: Path) -> None:
    runner = ReportWritingRunner('<checkstyle version="10"><file name="A.java"/></checkstyle>', "-o")

    result = CheckstyleAnalyzer(runner=runner).analyze(java_project)

    assert result.status is AnalysisStatus.PASS
    assert result.violations == ()


def test_missing_report_becomes_error(java_project: Path) -> None:
    runner = ReportWritingRunner(None, "-o")

    result = CheckstyleAnalyzer(runner=runner).analyze(java_project)

    assert result.status is AnalysisStatus.ERROR
    assert "did not produce a report" in result.summary


def test_pmd_maps_priorities(java_project: Path) -> None:
    report = """<?xml version="1.0"?>
<pmd xmlns="http://pmd.sourceforge.net/report/2.0.0" version="7.0.0">
  <file name="Service.java">
    <violation beginline="12" rule="AvoidCatchingNPE" priority="1">Avoid catching NPE</violation>
    <violation beginline="20" rule="UnusedLocalVariable" priority="3">Unused variable</violation>
    <violation beginline="30" rule="ShortVariable" priority="5">Short name</violation>
  </file>
</pmd>
"""
    runner = ReportWritingRunner(report, "-r")

    result = PmdAnalyzer(runner=runner).analyze(java_project)

    assert result.status is AnalysisStatus.WARNING
    assert [(v.severity, v.line, v.rule) for v in result.violations] == [
        (ViolationSeverity.ERROR, 12, "AvoidCatchingNPE"),
        (ViolationSeverity.WARNING, 20, "UnusedLocalVariable"),
        (ViolationSeverity.INFO, 30, "ShortVariable"),
    ]
    assert result.violations[0].message == "Avoid catching NPE"
    assert "--no-fail-on-violation" in runner.calls[0]


def test_spotbugs_skips_without_compiled_classes(java_project: Path) -> None:
    runner = ReportWritingRunner("<BugCollection/>", "-output")

    result = SpotBugsAnalyzer(runner=runner).analyze(java_project)

    assert result.status is AnalysisStatus.SKIPPED
    assert runner.calls == []


def test_spotbugs_parses_bug_instances(java_project: Path) -> None:
    (java_project / "build" / "classes" / "java" / "main").mkdir(parents=True)
    report = """<?xml version="1.0"?>
<BugCollection>
  <BugInstance type="NP_NULL_ON_SOME_PATH" priority="1" category="CORRECTNESS">
    <ShortMessage>Possible null pointer dereference</ShortMessage>
    <LongMessage>Possible null pointer dereference in App.run()</LongMessage>
    <Class classname="App"><SourceLine sourcepath="App.java" start="1"/></Class>
    <SourceLine sourcepath="com/example/App.java" start="42" end="42"/>
  </BugInstance>
  <BugInstance type="DM_DEFAULT_ENCODING" priority="2">
    <ShortMessage>Reliance on default encoding</ShortMessage>
  </BugInstance>
</BugCollection>
"""
    runner = ReportWritingRunner(report, "-output")

    result = SpotBugsAnalyzer(runner=runner).analyze(java_project)

    assert result.status is AnalysisStatus.WARNING
    bug = result.violations[0]
    assert bug.severity is ViolationSeverity.ERROR
    assert bug.message == "Possible null pointer dereference in App.run()"
    assert (bug.file, bug.line) == ("com/example/App.java", 42)
    assert result.violations[1].severity is ViolationSeverity.WARNING
    assert result.violations[1].message == "Reliance on default encoding"
    assert runner.calls[0][-1] == str(java_project / "build" / "classes" / "java" / "main")
