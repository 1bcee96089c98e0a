"""Resource discovery and loading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import BuildPlan
from .logging import get_logger
from .profile import preprocess_xml

_XML_SUFFIX = ".xml"

_LOGGER = get_logger("loader")


class LoaderError(RuntimeError):
    """Base class for failures while collecting resource files."""


class MissingDirectoryError(LoaderError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Resource directory not found: {path}")
        self.path = path


class NoXmlFilesFoundError(LoaderError):
    def __init__(self, searched: Path) -> None:
        super().__init__(f"No XML resource files found in {searched}")
        self.searched = searched


class ResourceReadError(LoaderError):
    """Raised when a resource file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class RawResourceFile:
    """File contents after profile preprocessing."""

    path: Path
    contents: str
    is_test: bool = False


class ResourceLoader:
    """Collects the XML files named by a build plan."""

    def load(self, plan: BuildPlan) -> List[RawResourceFile]:
        """Return main files ordered by path, followed by test files when enabled.

        The test directory is never part of the main scan, even when it lies
        inside the main directory.
        """
        tests_dir = plan.tests_resources_dir
        files = self._load_directory(
            plan.resources_dir,
            is_test=False,
            profile=plan.profile,
            strict=True,
            skip=tests_dir,
        )
        if tests_dir is not None and plan.include_tests:
            files.extend(
                self._load_directory(tests_dir, is_test=True, profile=plan.profile, strict=False)
            )
        _LOGGER.debug("Loaded %d resource file(s) for profile '%s'", len(files), plan.profile)
        return files

    def _load_directory(
        self,
        directory: Path,
        *,
        is_test: bool,
        profile: str,
        strict: bool,
        skip: Optional[Path] = None,
    ) -> List[RawResourceFile]:
        if not directory.is_dir():
            if strict:
                raise MissingDirectoryError(directory)
            _LOGGER.debug("Optional resource directory %s not present", directory)
            return []

        paths = _collect_xml_files(directory, skip)
        if not paths:
            if strict:
                raise NoXmlFilesFoundError(directory)
            return []

        loaded: List[RawResourceFile] = []
        for path in paths:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ResourceReadError(path, str(exc)) from exc
            loaded.append(RawResourceFile(path=path, contents=preprocess_xml(text, profile), is_test=is_test))
        return loaded


def _collect_xml_files(directory: Path, skip: Optional[Path]) -> List[Path]:
    skip_resolved = skip.resolve() if skip is not None else None
    found: List[Path] = []
    for path in directory.rglob(f"*{_XML_SUFFIX}"):
        if not path.is_file():
            continue
        if skip_resolved is not None and _is_within(path.resolve(), skip_resolved):
            continue
        found.append(path)
    return sorted(found)


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return True


__all__ = [
    "LoaderError",
    "MissingDirectoryError",
    "NoXmlFilesFoundError",
    "RawResourceFile",
    "ResourceLoader",
    "ResourceReadError",
]
