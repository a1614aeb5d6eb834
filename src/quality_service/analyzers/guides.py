"""Review guides and the prompts built from them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

CATEGORIES = ("security", "tdd", "testing", "quality")
DEFAULT_CATEGORY = "general"

_OBJECTIVES = {
    "general": "Assess overall code quality: naming, complexity, duplication and readability.",
    "security": "Review the code for security weaknesses: input validation, authentication, "
    "authorization and handling of sensitive data.",
    "tdd": "Assess how closely the code follows test-driven development: test-first changes, "
    "small red-green-refactor steps and refactoring quality.",
    "testing": "Assess the test suite: structure, naming, isolation and reliability.",
    "quality": "Assess quality metrics and adherence to the team's coding standards.",
}

_REQUESTS = {
    "general": (
        "Check naming consistency of classes and methods",
        "Point out overly long or complex methods",
        "Identify duplicated logic",
        "Evaluate comments and documentation",
        "Review adherence to SOLID principles",
    ),
    "security": (
        "Check for injection risks in queries and commands",
        "Review output encoding against XSS",
        "Review validation of external input",
        "Evaluate authentication and authorization checks",
        "Look for hard-coded secrets or leaked sensitive data",
    ),
    "tdd": (
        "Check whether production code is covered by focused tests",
        "Look for signs of tests written after the fact",
        "Evaluate refactoring quality under test",
    ),
    "testing": (
        "Review test naming and structure",
        "Check test isolation and use of test doubles",
        "Identify flaky or slow tests",
        "Point out untested edge cases",
    ),
    "quality": (
        "Report measurable quality issues (size, complexity, coupling)",
        "Check adherence to the documented coding standard",
    ),
}


@dataclass(frozen=True, slots=True)
class Guide:
    """One review guide file."""

    path: Path
    category: str

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def display_name(self) -> str:
        return self.path.stem.replace("-", " ").replace("_", " ").strip().title()

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")


def category_for(file_name: str) -> str:
    lowered = file_name.lower()
    for category in CATEGORIES:
        if category in lowered:
            return category
    return DEFAULT_CATEGORY


def load_guides(guide_path: Path) -> List[Guide]:
    """Return the guides at ``guide_path`` (a single file or a directory of ``*.md`` files)."""

    if guide_path.is_file():
        return [Guide(path=guide_path, category=category_for(guide_path.name))]
    if not guide_path.is_dir():
        return []
    return [
        Guide(path=path, category=category_for(path.name))
        for path in sorted(guide_path.glob("*.md"))
        if path.is_file()
    ]


class PromptBuilder:
    """Render the reviewer prompt for one guide."""

    def build(self, project_root: Path, guide: Guide, guide_content: str) -> str:
        category = guide.category if guide.category in _OBJECTIVES else DEFAULT_CATEGORY
        requests = "\n".join(
            f"{index}. {request}" for index, request in enumerate(_REQUESTS[category], start=1)
        )
        return "\n".join(
            [
                "You are an expert reviewer of Java code.",
                "",
                "=== Objective ===",
                _OBJECTIVES[category],
                "",
                "=== Review guide ===",
                guide_content.strip(),
                "",
                "=== Target ===",
                f"Project: {project_root}",
                f"Main sources: {project_root / 'src' / 'main' / 'java'}",
                f"Test sources: {project_root / 'src' / 'test' / 'java'}",
                "",
                "=== Focus ===",
                requests,
                "",
                "=== Output ===",
                f"Answer in Markdown. Start with a '## {guide.display_name}' heading, "
                "list concrete findings with file and line where possible, "
                "and end with a short list of recommended next steps.",
            ]
        )


__all__ = ["Guide", "PromptBuilder", "category_for", "load_guides"]
