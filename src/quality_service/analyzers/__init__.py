"""Analyzer contract, tool integrations and the fixed analyzer catalog."""

from .archunit import ArchUnitAnalyzer
from .base import AnalysisError, Analyzer
from .catalog import CATALOG, CatalogEntry, build_analyzers
from .checkstyle import CheckstyleAnalyzer
from .gemini import GeminiClient, SequentialGuideAnalyzer
from .guides import Guide, PromptBuilder, load_guides
from .jacoco import JaCoCoAnalyzer
from .kingfisher import KingfisherAnalyzer
from .pmd import PmdAnalyzer
from .process import CommandRunner, executable_available
from .spotbugs import SpotBugsAnalyzer

__all__ = [
    "AnalysisError",
    "Analyzer",
    "ArchUnitAnalyzer",
    "CATALOG",
    "CatalogEntry",
    "CheckstyleAnalyzer",
    "CommandRunner",
    "GeminiClient",
    "Guide",
    "JaCoCoAnalyzer",
    "KingfisherAnalyzer",
    "PmdAnalyzer",
    "PromptBuilder",
    "SequentialGuideAnalyzer",
    "SpotBugsAnalyzer",
    "build_analyzers",
    "executable_available",
    "load_guides",
]
