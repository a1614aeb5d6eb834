"""AI review through the Gemini CLI, one guide at a time."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ..config import QaConfiguration
from ..models import AnalysisResult, AnalysisStatus
from .base import AnalysisError, Analyzer
from .guides import Guide, PromptBuilder, load_guides
from .process import CommandRunner, executable_available

logger = logging.getLogger(__name__)

SEQUENTIAL_GEMINI = "sequential-gemini"

_CLI_NOISE = (
    "Loaded cached credentials.",
    "Using cached credentials from",
    "Authentication successful",
    "Connected to Gemini",
    "Model initialized",
)

_STATUS_ICONS = {
    AnalysisStatus.PASS: "✅",
    AnalysisStatus.FAIL: "❌",
}


def clean_output(raw: str) -> str:
    """Drop CLI banner lines and collapse runs of blank lines."""

    lines = [line for line in raw.splitlines() if not line.strip().startswith(_CLI_NOISE)]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()


class GeminiClient:
    """Thin wrapper around the ``gemini`` command line client."""

    executable = "gemini"

    def __init__(self, model: str, *, runner: CommandRunner | None = None) -> None:
        self.model = model
        self.runner = runner or CommandRunner()

    def is_available(self) -> bool:
        if not executable_available(self.executable):
            return False
        try:
            completed = self.runner.run([self.executable, "--version"], timeout=5)
        except AnalysisError:
            return False
        return completed.returncode == 0

    def review(self, prompt: str, *, cwd: Path, timeout: float | None = None) -> str:
        completed = self.runner.run(
            [self.executable, "-m", self.model, "-p", prompt],
            cwd=cwd,
            check=True,
            timeout=timeout,
        )
        output = clean_output(completed.stdout)
        if not output:
            raise AnalysisError("No response received from Gemini")
        return output


@dataclass(frozen=True, slots=True)
class GuideOutcome:
    """Outcome of reviewing the project against one guide."""

    guide: Guide
    status: AnalysisStatus
    feedback: str
    seconds: float

    @property
    def succeeded(self) -> bool:
        return self.status is AnalysisStatus.PASS


class SequentialGuideAnalyzer(Analyzer):
    """Invoke the reviewer once per guide, in guide order, and merge the outcomes.

    A failing guide is recorded and the remaining guides still run. Guides are
    never retried and never run concurrently, so the combined summary always
    lists them in input order.
    """

    name = SEQUENTIAL_GEMINI
    category = "ai"

    def __init__(
        self,
        config: QaConfiguration | None = None,
        *,
        client: GeminiClient | None = None,
        prompt_builder: PromptBuilder | None = None,
        guides: Sequence[Guide] | None = None,
    ) -> None:
        super().__init__(config)
        self.client = client or GeminiClient(self.config.gemini_model)
        self.prompt_builder = prompt_builder or PromptBuilder()
        self._guides = list(guides) if guides is not None else None

    def is_available(self) -> bool:
        return self.client.is_available()

    def run(self, project_root: Path) -> AnalysisResult:
        guides = self.resolve_guides(project_root)
        if not guides:
            return AnalysisResult.skipped(
                self.name, f"No review guides found at {self.config.gemini_guide_path}"
            )

        logger.info("Starting sequential review with %d guides", len(guides))
        outcomes = [
            self.review_guide(project_root, guide, index, len(guides))
            for index, guide in enumerate(guides, start=1)
        ]
        return self.combine(outcomes)

    def resolve_guides(self, project_root: Path) -> List[Guide]:
        if self._guides is not None:
            return list(self._guides)
        return load_guides(project_root / self.config.gemini_guide_path)

    # ------------------------------------------------------------------
    def review_guide(self, project_root: Path, guide: Guide, index: int, total: int) -> GuideOutcome:
        logger.info("[%d/%d] Reviewing with %s", index, total, guide.display_name)
        started = time.monotonic()
        try:
            content = guide.read()
            if not content.strip():
                raise AnalysisError(f"Guide file is empty: {guide.file_name}")
            prompt = self.prompt_builder.build(project_root, guide, content)
            feedback = self.client.review(
                prompt, cwd=project_root, timeout=self.config.gemini_timeout_seconds
            )
        except Exception as exc:  # noqa: BLE001 - one guide failing must not stop the rest
            logger.error("[%d/%d] %s failed: %s", index, total, guide.display_name, exc)
            return GuideOutcome(
                guide=guide,
                status=AnalysisStatus.FAIL,
                feedback=f"Review failed: {exc}",
                seconds=0.0,
            )

        elapsed = time.monotonic() - started
        logger.info("[%d/%d] %s done in %.2fs", index, total, guide.display_name, elapsed)
        return GuideOutcome(
            guide=guide,
            status=AnalysisStatus.PASS,
            feedback=feedback,
            seconds=elapsed,
        )

    def combine(self, outcomes: Sequence[GuideOutcome]) -> AnalysisResult:
        if not outcomes:
            raise AnalysisError("Sequential review produced no guide outcomes")

        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        failed = len(outcomes) - succeeded
        total_seconds = sum(outcome.seconds for outcome in outcomes)

        if failed == 0:
            status = AnalysisStatus.PASS
        elif succeeded == 0:
            status = AnalysisStatus.FAIL
        else:
            status = AnalysisStatus.WARNING

        metrics: dict[str, int | float | bool] = {
            "sequentialAnalysis": True,
            "totalGuides": len(outcomes),
            "successfulGuides": succeeded,
            "failedGuides": failed,
            "totalExecutionTimeSeconds": round(total_seconds, 3),
            "averageExecutionTimeSeconds": round(total_seconds / len(outcomes), 3),
        }
        metrics.update(self.category_stats(outcomes))

        return AnalysisResult(
            type=self.name,
            status=status,
            summary=self.build_summary(outcomes, succeeded, total_seconds),
            metrics=metrics,
        )

    @staticmethod
    def category_stats(outcomes: Sequence[GuideOutcome]) -> dict[str, int]:
        """Per-category guide counts, flattened as ``category.<name>.<count>``."""

        stats: dict[str, int] = {}
        for outcome in outcomes:
            prefix = f"category.{outcome.guide.category}"
            stats[f"{prefix}.total"] = stats.get(f"{prefix}.total", 0) + 1
            key = "successful" if outcome.succeeded else "failed"
            stats.setdefault(f"{prefix}.successful", 0)
            stats.setdefault(f"{prefix}.failed", 0)
            stats[f"{prefix}.{key}"] += 1
        return stats

    def build_summary(
        self, outcomes: Sequence[GuideOutcome], succeeded: int, total_seconds: float
    ) -> str:
        lines = ["# Sequential AI review", "", "## Results", ""]
        for outcome in outcomes:
            icon = _STATUS_ICONS.get(outcome.status, "⚠️")
            lines.append(f"- {icon} {outcome.guide.display_name} ({outcome.seconds:.2f}s)")
        lines.extend(
            [
                "",
                f"**{succeeded}/{len(outcomes)} guides succeeded, {total_seconds:.2f}s total**",
                "",
                "---",
            ]
        )

        for index, outcome in enumerate(outcomes, start=1):
            lines.extend(
                [
                    "",
                    f"## [{index}/{len(outcomes)}] {outcome.guide.display_name}",
                    "",
                    f"- Guide file: `{outcome.guide.file_name}`",
                    f"- Category: {outcome.guide.category}",
                    f"- Status: {outcome.status.value}",
                    "",
                    outcome.feedback,
                ]
            )
        return "\n".join(lines)


__all__ = [
    "GeminiClient",
    "GuideOutcome",
    "SEQUENTIAL_GEMINI",
    "SequentialGuideAnalyzer",
    "clean_output",
]
