"""Configuration loading for quality analysis runs.

Options live in a flat, dotted key namespace (``static.pmd.enabled``). Files
may use that namespace directly, nest it as YAML mappings, or prefix every
key with ``qa.`` as Java-style ``qa.properties`` files do. Missing keys fall
back to built-in defaults and unknown keys are ignored.

Usage:
    config = load_configuration("config/qa.yaml")
    config = discover_configuration(Path("."))
    config = QaConfiguration.from_mapping({"ignoreFailures": True})
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, MutableMapping

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("qa.yaml", "qa.yml", "qa.properties")
PROJECT_ROOT_MARKERS = (".git", "build.gradle", "build.gradle.kts", "pom.xml", "pyproject.toml")


class ConfigurationError(RuntimeError):
    """Raised when a configuration source cannot be read or holds invalid values."""


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")


def _parse_str(key: str, value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise ConfigurationError(f"'{key}' must be a string, got {value!r}")
    return str(value).strip()


def _parse_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"'{key}' must be a number, got {value!r}") from exc


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}") from exc


# ---------------------------------------------------------------------------
# Configuration snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class QaConfiguration:
    """Immutable snapshot of every recognized option."""

    ignore_failures: bool = False
    skip_unavailable_analyzers: bool = True
    parallel: bool = False
    command_timeout_seconds: float = 600.0

    static_enabled: bool = True
    checkstyle_enabled: bool = True
    checkstyle_config_path: str = "config/static/checkstyle/checkstyle.xml"
    pmd_enabled: bool = True
    pmd_ruleset_path: str = "config/static/pmd/ruleset.xml"
    spotbugs_enabled: bool = True
    spotbugs_exclude_path: str = "config/static/spotbugs/exclude.xml"
    jacoco_enabled: bool = True
    jacoco_report_path: str = "build/reports/jacoco/test/jacocoTestReport.xml"
    jacoco_min_line_coverage: float = 0.0
    jacoco_min_branch_coverage: float = 0.0
    jacoco_min_instruction_coverage: float = 0.0
    kingfisher_enabled: bool = True
    kingfisher_confidence_level: str = "medium"
    kingfisher_validation_enabled: bool = True

    archunit_enabled: bool = True
    archunit_base_package: str | None = None
    archunit_results_path: str = "build/test-results/test"
    archunit_failure_threshold: int = 0

    ai_enabled: bool = True
    gemini_enabled: bool = True
    gemini_model: str = "gemini-2.5-pro"
    gemini_guide_path: str = "config/ai"
    gemini_timeout_seconds: float = 300.0

    html_report_enabled: bool = True
    json_report_enabled: bool = True

    # ------------------------------------------------------------------
    @property
    def base_package_explicitly_configured(self) -> bool:
        return self.archunit_base_package is not None

    def is_static_tool_enabled(self, tool: str) -> bool:
        """Return ``True`` when both ``static.enabled`` and the tool flag are set."""

        return self.static_enabled and bool(getattr(self, f"{tool}_enabled"))

    def is_ai_provider_enabled(self, provider: str) -> bool:
        return self.ai_enabled and bool(getattr(self, f"{provider}_enabled"))

    # ------------------------------------------------------------------
    @classmethod
    def defaults(cls) -> "QaConfiguration":
        return cls()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "QaConfiguration":
        """Build a configuration from a flat or nested key/value mapping."""

        flat = flatten_keys(mapping or {})
        values: Dict[str, Any] = {}
        for key, raw in flat.items():
            option = _OPTIONS.get(_strip_prefix(key))
            if option is None:
                logger.debug("Ignoring unknown configuration key: %s", key)
                continue
            attribute, parser = option
            if raw is None:
                continue
            values[attribute] = parser(key, raw)

        return cls(**values)


_OPTIONS: Dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "ignoreFailures": ("ignore_failures", _parse_bool),
    "skipUnavailableAnalyzers": ("skip_unavailable_analyzers", _parse_bool),
    "parallel": ("parallel", _parse_bool),
    "commandTimeoutSeconds": ("command_timeout_seconds", _parse_float),
    "static.enabled": ("static_enabled", _parse_bool),
    "static.checkstyle.enabled": ("checkstyle_enabled", _parse_bool),
    "static.checkstyle.configPath": ("checkstyle_config_path", _parse_str),
    "static.pmd.enabled": ("pmd_enabled", _parse_bool),
    "static.pmd.rulesetPath": ("pmd_ruleset_path", _parse_str),
    "static.spotbugs.enabled": ("spotbugs_enabled", _parse_bool),
    "static.spotbugs.excludePath": ("spotbugs_exclude_path", _parse_str),
    "static.jacoco.enabled": ("jacoco_enabled", _parse_bool),
    "static.jacoco.reportPath": ("jacoco_report_path", _parse_str),
    "static.jacoco.minLineCoverage": ("jacoco_min_line_coverage", _parse_float),
    "static.jacoco.minBranchCoverage": ("jacoco_min_branch_coverage", _parse_float),
    "static.jacoco.minInstructionCoverage": ("jacoco_min_instruction_coverage", _parse_float),
    "static.kingfisher.enabled": ("kingfisher_enabled", _parse_bool),
    "static.kingfisher.confidenceLevel": ("kingfisher_confidence_level", _parse_str),
    "static.kingfisher.validationEnabled": ("kingfisher_validation_enabled", _parse_bool),
    "archunit.enabled": ("archunit_enabled", _parse_bool),
    "static.archunit.enabled": ("archunit_enabled", _parse_bool),
    "archunit.basePackage": ("archunit_base_package", _parse_str),
    "static.archunit.basePackage": ("archunit_base_package", _parse_str),
    "archunit.resultsPath": ("archunit_results_path", _parse_str),
    "archunit.failureThreshold": ("archunit_failure_threshold", _parse_int),
    "ai.enabled": ("ai_enabled", _parse_bool),
    "ai.gemini.enabled": ("gemini_enabled", _parse_bool),
    "ai.gemini.model": ("gemini_model", _parse_str),
    "ai.gemini.guidePath": ("gemini_guide_path", _parse_str),
    "ai.gemini.timeoutSeconds": ("gemini_timeout_seconds", _parse_float),
    "reports.html.enabled": ("html_report_enabled", _parse_bool),
    "reports.json.enabled": ("json_report_enabled", _parse_bool),
}


def _strip_prefix(key: str) -> str:
    return key[3:] if key.startswith("qa.") else key


def flatten_keys(mapping: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested mappings into dotted keys (``{"a": {"b": 1}} -> {"a.b": 1}``)."""

    flat: Dict[str, Any] = {}
    for key, value in mapping.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_keys(value, dotted))
        else:
            flat[dotted] = value
    return flat


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def load_configuration(path: str | Path) -> QaConfiguration:
    """Load configuration from a YAML or ``.properties`` file.

    Raises:
        ConfigurationError: if the file is missing, unreadable, or malformed.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read configuration file {config_path}") from exc

    if config_path.suffix == ".properties":
        data: Any = parse_properties(content)
    else:
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in configuration file {config_path}") from exc

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration file must be a mapping: {config_path}")

    logger.info("Loaded configuration from %s", config_path)
    return QaConfiguration.from_mapping(data)


def parse_properties(content: str) -> Dict[str, str]:
    """Parse ``key=value`` / ``key: value`` lines, skipping ``#`` and ``!`` comments."""

    values: MutableMapping[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        separators = [index for index in (line.find("="), line.find(":")) if index > 0]
        if not separators:
            values[line] = ""
            continue
        index = min(separators)
        values[line[:index].strip()] = line[index + 1 :].strip()
    return dict(values)


def find_configuration_file(project_root: Path) -> Path | None:
    """Locate a configuration file for ``project_root``.

    The project's own ``config/`` directory wins. Otherwise parent directories
    are searched upward; a directory that looks like a project root may also
    keep the file next to its build files.
    """

    project_root = project_root.resolve()
    for candidate in _candidates(project_root / "config"):
        return candidate

    for directory in project_root.parents:
        for candidate in _candidates(directory / "config"):
            return candidate
        if any((directory / marker).exists() for marker in PROJECT_ROOT_MARKERS):
            for candidate in _candidates(directory):
                return candidate
    return None


def _candidates(directory: Path) -> Iterable[Path]:
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            yield candidate


def discover_configuration(project_root: Path) -> QaConfiguration:
    """Load the nearest configuration file, or built-in defaults when none exists."""

    config_path = find_configuration_file(project_root)
    if config_path is None:
        logger.info("No configuration file found for %s, using defaults", project_root)
        return QaConfiguration.defaults()
    return load_configuration(config_path)


__all__ = [
    "ConfigurationError",
    "QaConfiguration",
    "discover_configuration",
    "find_configuration_file",
    "flatten_keys",
    "load_configuration",
    "parse_properties",
]
