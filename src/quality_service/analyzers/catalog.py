"""Fixed, ordered catalog of analyzer variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from ..config import QaConfiguration
from .archunit import ArchUnitAnalyzer
from .base import Analyzer
from .checkstyle import CheckstyleAnalyzer
from .gemini import SequentialGuideAnalyzer
from .jacoco import JaCoCoAnalyzer
from .kingfisher import KingfisherAnalyzer
from .pmd import PmdAnalyzer
from .spotbugs import SpotBugsAnalyzer


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One catalog slot: how to build the analyzer and when it is enabled."""

    name: str
    factory: Callable[[QaConfiguration], Analyzer]
    enabled: Callable[[QaConfiguration], bool]


CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("checkstyle", CheckstyleAnalyzer, lambda c: c.is_static_tool_enabled("checkstyle")),
    CatalogEntry("pmd", PmdAnalyzer, lambda c: c.is_static_tool_enabled("pmd")),
    CatalogEntry("spotbugs", SpotBugsAnalyzer, lambda c: c.is_static_tool_enabled("spotbugs")),
    CatalogEntry("jacoco", JaCoCoAnalyzer, lambda c: c.is_static_tool_enabled("jacoco")),
    CatalogEntry("archunit", ArchUnitAnalyzer, lambda c: c.archunit_enabled),
    CatalogEntry("kingfisher", KingfisherAnalyzer, lambda c: c.is_static_tool_enabled("kingfisher")),
    CatalogEntry(
        "sequential-gemini", SequentialGuideAnalyzer, lambda c: c.is_ai_provider_enabled("gemini")
    ),
)


def build_analyzers(config: QaConfiguration) -> List[Analyzer]:
    """Instantiate the enabled analyzers in catalog order."""

    return [entry.factory(config) for entry in CATALOG if entry.enabled(config)]


__all__ = ["CATALOG", "CatalogEntry", "build_analyzers"]
