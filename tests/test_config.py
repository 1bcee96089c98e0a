"""Tests for resgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.config import BuildPlan, ConfigError, ResgenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ResgenConfig)
    assert config.root == tmp_path.resolve()
    assert config.resources_dir == tmp_path.resolve() / "res"
    assert config.tests_dir == tmp_path.resolve() / "res" / "tests"
    assert config.include_tests is False
    assert config.profile == "debug"
    assert config.duplicates_as_errors is False
    assert config.output_path == tmp_path.resolve() / "resources_generated.py"
    assert config.enabled_types() is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".resgen.yml"
    config_file.write_text(
        """
resources_dir: resources
tests_dir: fixtures/resources
include_tests: true
profile: release
duplicates_as_errors: "yes"
output: build/generated.py
types:
  enabled:
    - string
    - number
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    root = tmp_path.resolve()
    assert config.resources_dir == root / "resources"
    assert config.tests_dir == root / "fixtures" / "resources"
    assert config.include_tests is True
    assert config.profile == "release"
    assert config.duplicates_as_errors is True
    assert config.output_path == root / "build" / "generated.py"
    assert config.enabled_types() == ["string", "number"]


def test_load_config_accepts_comma_separated_types(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("types:\n  enabled: string, bool\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.types.enabled == ["string", "bool"]


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.profile == "debug"
    assert config.resources_dir == tmp_path.resolve() / "res"


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_wraps_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("profile: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_to_build_plan_applies_overrides_and_ignores_none(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    plan = config.to_build_plan(
        {"profile": "release", "include_tests": None, "duplicates_as_errors": True}
    )

    assert isinstance(plan, BuildPlan)
    assert plan.profile == "release"
    assert plan.treat_duplicates_as_errors is True
    assert plan.include_tests is False
    assert plan.tests_resources_dir == config.tests_dir
    assert plan.resources_dir == config.resources_dir


def test_to_build_plan_enables_tests_from_file_or_override(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.to_build_plan().include_tests is False
    assert config.to_build_plan({"include_tests": True}).include_tests is True

    config.include_tests = True
    assert config.to_build_plan().include_tests is True
    assert config.to_build_plan({"include_tests": False}).include_tests is False
