from __future__ import annotations

from pathlib import Path

from quality_service.config import QaConfiguration, detect_base_package, resolve_configuration
from quality_service.config.resolver import (
    detect_from_gradle,
    detect_from_main_class,
    detect_from_pom,
)


def test_detect_from_gradle(tmp_path: Path) -> None:
    (tmp_path / "build.gradle").write_text(
        "plugins { id 'java' }\ngroup = 'com.example.shop'\nversion = '1.0'\n",
        encoding="utf-8",
    )

    assert detect_from_gradle(tmp_path) == "com.example.shop"


def test_detect_from_pom(tmp_path: Path) -> None:
    (tmp_path / "pom.xml").write_text(
        "<project><groupId>org.acme</groupId><artifactId>app</artifactId></project>",
        encoding="utf-8",
    )

    assert detect_from_pom(tmp_path) == "org.acme"


def test_detect_from_main_class(tmp_path: Path) -> None:
    source = tmp_path / "src" / "main" / "java" / "io" / "demo"
    source.mkdir(parents=True)
    (source / "Helper.java").write_text("package io.demo.util;\nclass Helper {}\n", encoding="utf-8")
    (source / "App.java").write_text(
        "package io.demo;\n\n@SpringBootApplication\npublic class App {}\n",
        encoding="utf-8",
    )

    assert detect_from_main_class(tmp_path) == "io.demo"


def test_explicit_configuration_wins(tmp_path: Path) -> None:
    config = QaConfiguration.from_mapping({"archunit.basePackage": "com.explicit"})

    resolved = resolve_configuration(config, tmp_path, detectors=[lambda root: "com.detected"])

    assert resolved.archunit_base_package == "com.explicit"


def test_first_detected_value_fills_unset_option(tmp_path: Path) -> None:
    detectors = [lambda root: None, lambda root: "com.second", lambda root: "com.third"]

    resolved = resolve_configuration(QaConfiguration.defaults(), tmp_path, detectors=detectors)

    assert resolved.archunit_base_package == "com.second"


def test_detection_failure_keeps_default(tmp_path: Path) -> None:
    def broken(root: Path) -> str:
        raise OSError("unreadable build file")

    assert detect_base_package(tmp_path, [broken]) is None
    resolved = resolve_configuration(QaConfiguration.defaults(), tmp_path, detectors=[broken])
    assert resolved.archunit_base_package is None
