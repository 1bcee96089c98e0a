"""CLI parser and command behaviour tests."""

from __future__ import annotations

import pytest

from resgen.cli import _build_parser, main
from tests._fixtures.resource_builder import ResourceProject, load_generated


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["check", "--verbose"])
    assert args.verbose is True
    assert args.command == "check"


def test_cli_leaves_unset_overrides_as_none() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "project"])
    assert args.path == "project"
    assert args.profile is None
    assert args.strict_duplicates is None
    assert args.include_tests is None
    assert args.output is None


def test_cli_accepts_plan_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["build", "--profile", "release", "--strict-duplicates", "--include-tests", "--types", "string,number"]
    )
    assert args.profile == "release"
    assert args.strict_duplicates is True
    assert args.include_tests is True
    assert args.types == "string,number"


def test_build_command_writes_module(resource_project: ResourceProject, capsys) -> None:
    resource_project.write(
        {
            "res/strings.xml": '<resources><string name="app_name">Acme</string></resources>',
            ".resgen.yml": "output: generated/resources.py\n",
        }
    )

    main(["build", str(resource_project.path())])

    output = resource_project.path() / "generated" / "resources.py"
    assert load_generated(output.read_text(encoding="utf-8")).APP_NAME == "Acme"
    assert "Resources written to" in capsys.readouterr().out


def test_build_command_honours_output_flag(resource_project: ResourceProject, tmp_path) -> None:
    resource_project.write({"res/strings.xml": '<resources><string name="a">x</string></resources>'})
    target = tmp_path / "elsewhere.py"

    main(["build", str(resource_project.path()), "--output", str(target)])

    assert target.exists()


def test_check_command_reports_count_and_warnings(resource_project: ResourceProject, capsys) -> None:
    resource_project.write(
        {
            "res/a.xml": '<resources><string name="title">A</string></resources>',
            "res/b.xml": '<resources><string name="title">B</string></resources>',
        }
    )

    main(["check", str(resource_project.path())])

    out = capsys.readouterr().out
    assert "1 resource(s) checked, no errors (1 warning(s))" in out
    assert not (resource_project.path() / "resources_generated.py").exists()


def test_strict_duplicates_exit_non_zero(resource_project: ResourceProject, capsys) -> None:
    resource_project.write(
        {
            "res/a.xml": '<resources><string name="title">A</string></resources>',
            "res/b.xml": '<resources><string name="title">B</string></resources>',
        }
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(resource_project.path()), "--strict-duplicates"])

    assert excinfo.value.code == 1
    assert "resgen check failed" in capsys.readouterr().err


def test_missing_resources_exit_non_zero(resource_project: ResourceProject, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(resource_project.path())])

    assert excinfo.value.code == 1
    assert "Resource directory not found" in capsys.readouterr().err


def test_unknown_type_exit_non_zero(resource_project: ResourceProject, capsys) -> None:
    resource_project.write({"res/strings.xml": "<resources/>"})

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(resource_project.path()), "--types", "string,widget"])

    assert excinfo.value.code == 1
    assert "widget" in capsys.readouterr().err


def test_malformed_config_exit_non_zero(resource_project: ResourceProject, capsys) -> None:
    resource_project.write({".resgen.yml": "- not\n- a mapping\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(resource_project.path())])

    assert excinfo.value.code == 1
    assert "mapping" in capsys.readouterr().err


def test_log_file_receives_debug_detail(resource_project: ResourceProject, tmp_path) -> None:
    resource_project.write({"res/strings.xml": '<resources><string name="a">x</string></resources>'})
    log_file = tmp_path / "logs" / "resgen.log"

    main(["--quiet", "check", str(resource_project.path()), "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "resgen.loader: Loaded 1 resource file(s)" in text
