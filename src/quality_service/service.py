"""Orchestration layer that runs the configured analyzers and assembles the report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Sequence

from .analyzers import Analyzer, build_analyzers
from .config import QaConfiguration, discover_configuration, resolve_configuration
from .models import AnalysisResult, QualityReport
from .models.result import utc_now

logger = logging.getLogger(__name__)

AnalyzerFactory = Callable[[QaConfiguration], Sequence[Analyzer]]


class QualityService:
    """Run every enabled analyzer against one project snapshot.

    No analyzer fault escapes :meth:`run`. Unavailable analyzers become
    ``skipped`` or ``error`` results according to configuration, and results
    always appear in catalog order.
    """

    def __init__(self, *, analyzer_factory: AnalyzerFactory | None = None) -> None:
        self._analyzer_factory = analyzer_factory or build_analyzers

    # ------------------------------------------------------------------
    def run(self, project_root: Path, output_root: Path, config: QaConfiguration) -> QualityReport:
        """Execute an analysis run and return the assembled report."""

        output_root.mkdir(parents=True, exist_ok=True)
        analyzers = list(self._analyzer_factory(config))
        logger.info("Running %d analyzers on %s", len(analyzers), project_root)

        if config.parallel and len(analyzers) > 1:
            with ThreadPoolExecutor(max_workers=len(analyzers)) as executor:
                # map() yields in submission order, which is catalog order.
                results = list(
                    executor.map(
                        lambda analyzer: self._run_one(analyzer, project_root, config),
                        analyzers,
                    )
                )
        else:
            results = [self._run_one(analyzer, project_root, config) for analyzer in analyzers]

        report = QualityReport(
            project_path=str(project_root),
            results=tuple(results),
            timestamp=utc_now(),
            ignore_failures=config.ignore_failures,
        )
        logger.info("Overall status: %s", report.overall_status.value)
        return report

    # ------------------------------------------------------------------
    def _run_one(
        self, analyzer: Analyzer, project_root: Path, config: QaConfiguration
    ) -> AnalysisResult:
        name = analyzer.name or analyzer.__class__.__name__
        try:
            if not analyzer.check_available():
                return self._unavailable(name, config)

            logger.info("Starting %s", name)
            result = analyzer.analyze(project_root)
        except Exception as exc:  # noqa: BLE001 - one analyzer must never stop the run
            logger.exception("%s raised past its analysis boundary", name)
            return AnalysisResult.error(name, exc)

        logger.info("Finished %s: %s", name, result.status.value)
        return result

    @staticmethod
    def _unavailable(name: str, config: QaConfiguration) -> AnalysisResult:
        if config.skip_unavailable_analyzers:
            logger.info("Skipping %s: not available", name)
            return AnalysisResult.skipped(name, f"{name} is not available in this environment")

        logger.error("%s is not available and skipping unavailable analyzers is disabled", name)
        return AnalysisResult.error(
            name,
            f"{name} is not available in this environment and skipUnavailableAnalyzers is false",
        )


def analyze_project(
    project_root: Path,
    output_root: Path,
    config: QaConfiguration | None = None,
    *,
    service: QualityService | None = None,
) -> QualityReport:
    """Discover and resolve configuration when none is given, then run the analysis."""

    effective = config if config is not None else discover_configuration(project_root)
    effective = resolve_configuration(effective, project_root)
    return (service or QualityService()).run(project_root, output_root, effective)


__all__ = ["AnalyzerFactory", "QualityService", "analyze_project"]
