from __future__ import annotations

from quality_service.analyzers import CATALOG, build_analyzers
from quality_service.config import QaConfiguration

CATALOG_ORDER = [
    "checkstyle",
    "pmd",
    "spotbugs",
    "jacoco",
    "archunit",
    "kingfisher",
    "sequential-gemini",
]


def test_catalog_order_is_fixed() -> None:
    assert [entry.name for entry in CATALOG] == CATALOG_ORDER


def test_defaults_build_every_analyzer_in_order() -> None:
    analyzers = build_analyzers(QaConfiguration.defaults())

    assert [analyzer.name for analyzer in analyzers] == CATALOG_ORDER


def test_disabled_analyzers_are_not_built() -> None:
    config = QaConfiguration.from_mapping(
        {
            "static.enabled": False,
            "ai.gemini.enabled": False,
        }
    )

    assert [analyzer.name for analyzer in build_analyzers(config)] == ["archunit"]


def test_ai_master_switch() -> None:
    config = QaConfiguration.from_mapping({"ai.enabled": False, "static.pmd.enabled": False})

    names = [analyzer.name for analyzer in build_analyzers(config)]

    assert "sequential-gemini" not in names
    assert "pmd" not in names
    assert "checkstyle" in names
