"""Command-line interface for running quality analysis on a project."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Sequence

from ..config import (
    ConfigurationError,
    QaConfiguration,
    discover_configuration,
    load_configuration,
    resolve_configuration,
)
from ..models import AnalysisStatus, QualityReport
from ..reports import ReportRenderingError, write_reports
from ..service import QualityService

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("build") / "reports" / "quality"


def render_table(report: QualityReport) -> str:
    """Render per-analyzer statuses as a simple text table for terminal output."""

    if not report.results:
        return "No analyzers ran."

    headers = ("Analyzer", "Status", "Violations", "Summary")
    rows = [headers]
    for result in report.results:
        first_line = result.summary.strip().splitlines()[0] if result.summary.strip() else ""
        rows.append((result.type, result.status.value, str(len(result.violations)), first_line))

    widths = [max(len(str(row[idx])) for row in rows) for idx in range(len(headers))]

    def format_row(values: tuple[str, str, str, str]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths, strict=True))

    lines = [format_row(headers)]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows[1:]:
        lines.append(format_row(row))
    lines.append("")
    lines.append(f"Overall status: {report.overall_status.value}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(prog="qa-quality", description="Code quality analysis CLI")
    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser(
        "analyze", help="Run the configured analyzers and write quality reports."
    )
    analyze_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path.cwd(),
        help="Path to the project to analyze.",
    )
    analyze_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Directory for report files (default: <project>/{DEFAULT_OUTPUT_DIR}).",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (qa.yaml or qa.properties). Discovered when omitted.",
    )
    analyze_parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run analyzers concurrently. Report order is unchanged.",
    )
    analyze_parser.add_argument(
        "--ignore-failures",
        action="store_true",
        help="Downgrade failed or errored analyzers to an overall warning.",
    )
    analyze_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def load_effective_configuration(args: argparse.Namespace, project_root: Path) -> QaConfiguration:
    if args.config is not None:
        config = load_configuration(args.config)
    else:
        config = discover_configuration(project_root)

    overrides = {}
    if args.parallel:
        overrides["parallel"] = True
    if args.ignore_failures:
        overrides["ignore_failures"] = True
    if overrides:
        config = dataclasses.replace(config, **overrides)

    config = resolve_configuration(config, project_root)
    logger.debug("Effective configuration: %s", config)
    return config


def _handle_analyze(args: argparse.Namespace, service: QualityService | None = None) -> int:
    project_root = args.path.resolve()
    if not project_root.is_dir():
        print(f"Error: project directory does not exist: {project_root}")
        return 2

    output_root = (args.output or project_root / DEFAULT_OUTPUT_DIR).resolve()

    try:
        config = load_effective_configuration(args, project_root)
    except ConfigurationError as exc:
        print(f"Error: {exc}")
        return 2

    report = (service or QualityService()).run(project_root, output_root, config)

    try:
        written = write_reports(report, output_root, config)
    except ReportRenderingError as exc:
        print(f"Error: {exc}")
        return 2

    print(render_table(report))
    for report_format, path in written.items():
        print(f"{report_format.upper()} report: {path}")

    return 0 if report.overall_status is AnalysisStatus.PASS else 1


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None, *, service: QualityService | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "analyze":
        configure_logging(args.verbose)
        return _handle_analyze(args, service)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
