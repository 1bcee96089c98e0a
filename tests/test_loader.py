"""Tests for the resource loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.config import BuildPlan
from resgen.loader import (
    MissingDirectoryError,
    NoXmlFilesFoundError,
    ResourceLoader,
    ResourceReadError,
)
from tests._fixtures.resource_builder import ResourceProject


def test_loader_returns_files_sorted_by_path(resource_project: ResourceProject) -> None:
    resource_project.write(
        {
            "res/values/strings.xml": "<resources/>",
            "res/colors.xml": "<resources/>",
            "res/values/a.xml": "<resources/>",
            "res/notes.txt": "ignored",
        }
    )

    files = ResourceLoader().load(resource_project.plan())

    relative = [file.path.relative_to(resource_project.resources_dir).as_posix() for file in files]
    assert relative == ["colors.xml", "values/a.xml", "values/strings.xml"]
    assert all(not file.is_test for file in files)


def test_loader_appends_test_resources_after_main_files(resource_project: ResourceProject) -> None:
    resource_project.write(
        {
            "res/strings.xml": "<resources/>",
            "res/tests/overrides.xml": "<resources/>",
        }
    )

    files = ResourceLoader().load(resource_project.plan(include_tests=True))

    assert [file.path.name for file in files] == ["strings.xml", "overrides.xml"]
    assert [file.is_test for file in files] == [False, True]


def test_loader_skips_test_resources_unless_requested(resource_project: ResourceProject) -> None:
    resource_project.write(
        {
            "res/strings.xml": "<resources/>",
            "res/tests/overrides.xml": "<resources/>",
        }
    )

    files = ResourceLoader().load(resource_project.plan())

    assert [file.path.name for file in files] == ["strings.xml"]


def test_loader_tolerates_missing_test_directory(resource_project: ResourceProject) -> None:
    resource_project.write({"res/strings.xml": "<resources/>"})

    files = ResourceLoader().load(resource_project.plan(include_tests=True))

    assert len(files) == 1


def test_loader_applies_profile_filtering(resource_project: ResourceProject) -> None:
    resource_project.write(
        {
            "res/strings.xml": """
            <resources>
                <string name="only_release" profile="release">x</string>
            </resources>
            """
        }
    )

    [debug] = ResourceLoader().load(resource_project.plan(profile="debug"))
    [release] = ResourceLoader().load(resource_project.plan(profile="release"))

    assert "only_release" not in debug.contents
    assert "only_release" in release.contents


def test_loader_raises_for_missing_directory(tmp_path: Path) -> None:
    plan = BuildPlan(resources_dir=tmp_path / "absent")

    with pytest.raises(MissingDirectoryError) as excinfo:
        ResourceLoader().load(plan)

    assert excinfo.value.path == tmp_path / "absent"


def test_loader_raises_when_no_xml_files(resource_project: ResourceProject) -> None:
    resource_project.write({"res/readme.txt": "nothing here"})

    with pytest.raises(NoXmlFilesFoundError):
        ResourceLoader().load(resource_project.plan())


def test_loader_reports_undecodable_files(resource_project: ResourceProject) -> None:
    resource_project.resources_dir.mkdir(parents=True)
    (resource_project.resources_dir / "broken.xml").write_bytes(b"\xff\xfe\x00<resources/>")

    with pytest.raises(ResourceReadError) as excinfo:
        ResourceLoader().load(resource_project.plan())

    assert excinfo.value.path.name == "broken.xml"
