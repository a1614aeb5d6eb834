"""Project metadata detection used to fill options left unset in configuration.

Precedence is always: explicit configuration, then the first detector that
returns a value, then the built-in default.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Sequence

from .settings import QaConfiguration

logger = logging.getLogger(__name__)

PackageDetector = Callable[[Path], Optional[str]]

_GRADLE_GROUP = re.compile(r"""^\s*group\s*=\s*["']([\w.]+)["']""", re.MULTILINE)
_POM_GROUP = re.compile(r"<groupId>\s*([\w.]+)\s*</groupId>")
_JAVA_PACKAGE = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)
_MAIN_MARKERS = ("@SpringBootApplication", "public static void main")


def detect_from_gradle(project_root: Path) -> str | None:
    for name in ("build.gradle", "build.gradle.kts"):
        build_file = project_root / name
        if build_file.is_file():
            match = _GRADLE_GROUP.search(build_file.read_text(encoding="utf-8"))
            if match:
                return match.group(1)
    return None


def detect_from_pom(project_root: Path) -> str | None:
    pom = project_root / "pom.xml"
    if not pom.is_file():
        return None
    match = _POM_GROUP.search(pom.read_text(encoding="utf-8"))
    return match.group(1) if match else None


def detect_from_main_class(project_root: Path) -> str | None:
    """Return the package of the first source file that declares an entry point."""

    source_root = project_root / "src" / "main" / "java"
    if not source_root.is_dir():
        return None

    for source_file in sorted(source_root.rglob("*.java")):
        content = source_file.read_text(encoding="utf-8", errors="replace")
        if not any(marker in content for marker in _MAIN_MARKERS):
            continue
        match = _JAVA_PACKAGE.search(content)
        if match:
            return match.group(1)
    return None


DEFAULT_DETECTORS: tuple[PackageDetector, ...] = (
    detect_from_gradle,
    detect_from_pom,
    detect_from_main_class,
)


def detect_base_package(
    project_root: Path,
    detectors: Sequence[PackageDetector] = DEFAULT_DETECTORS,
) -> str | None:
    for detector in detectors:
        try:
            detected = detector(project_root)
        except (OSError, ValueError) as exc:
            logger.debug("Base package detector %s failed: %s", detector.__name__, exc)
            continue
        if detected:
            return detected
    return None


def resolve_configuration(
    config: QaConfiguration,
    project_root: Path,
    *,
    detectors: Sequence[PackageDetector] = DEFAULT_DETECTORS,
) -> QaConfiguration:
    """Return ``config`` with auto-detected values for options it leaves unset."""

    if config.base_package_explicitly_configured:
        logger.info("Using configured base package: %s", config.archunit_base_package)
        return config

    detected = detect_base_package(project_root, detectors)
    if detected is None:
        logger.warning("Could not auto-detect base package for %s", project_root)
        return config

    logger.info("Auto-detected base package: %s", detected)
    return replace(config, archunit_base_package=detected)


__all__ = [
    "DEFAULT_DETECTORS",
    "PackageDetector",
    "detect_base_package",
    "detect_from_gradle",
    "detect_from_main_class",
    "detect_from_pom",
    "resolve_configuration",
]
