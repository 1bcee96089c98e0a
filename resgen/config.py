"""Configuration loading for resgen (.resgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".resgen.yml"
DEFAULT_RESOURCES_DIR = "res"
DEFAULT_PROFILE = "debug"
DEFAULT_OUTPUT = "resources_generated.py"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class BuildPlan:
    """Immutable inputs threaded through every pipeline stage."""

    resources_dir: Path
    tests_resources_dir: Optional[Path] = None
    include_tests: bool = False
    profile: str = DEFAULT_PROFILE
    treat_duplicates_as_errors: bool = False


@dataclass
class TypesConfig:
    """Type handler enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class ResgenConfig:
    """Represents the settings defined in .resgen.yml."""

    root: Path
    resources_dir: Path
    tests_dir: Path
    include_tests: bool = False
    profile: str = DEFAULT_PROFILE
    duplicates_as_errors: bool = False
    output: Path = Path(DEFAULT_OUTPUT)
    types: TypesConfig = field(default_factory=TypesConfig)

    @property
    def output_path(self) -> Path:
        return self.output if self.output.is_absolute() else self.root / self.output

    def enabled_types(self) -> Optional[List[str]]:
        return list(self.types.enabled) or None

    def to_build_plan(self, overrides: Optional[Mapping[str, Any]] = None) -> BuildPlan:
        """Combine file settings with CLI overrides (``None`` values are ignored)."""
        values: Dict[str, Any] = {
            "profile": self.profile,
            "include_tests": self.include_tests,
            "duplicates_as_errors": self.duplicates_as_errors,
        }
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value

        return BuildPlan(
            resources_dir=self.resources_dir,
            tests_resources_dir=self.tests_dir,
            include_tests=bool(values["include_tests"]),
            profile=str(values["profile"]),
            treat_duplicates_as_errors=bool(values["duplicates_as_errors"]),
        )


def load_config(config_path: Path) -> ResgenConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return _defaults(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    resources_dir = root / (_as_str(data.get("resources_dir")) or DEFAULT_RESOURCES_DIR)
    tests_dir_str = _as_str(data.get("tests_dir"))
    tests_dir = root / tests_dir_str if tests_dir_str else resources_dir / "tests"

    types_data = _as_dict(data.get("types"))
    types = TypesConfig()
    if types_data:
        types.enabled = _as_str_list(types_data.get("enabled"))

    return ResgenConfig(
        root=root,
        resources_dir=resources_dir,
        tests_dir=tests_dir,
        include_tests=_as_bool(data.get("include_tests")) or False,
        profile=_as_str(data.get("profile")) or DEFAULT_PROFILE,
        duplicates_as_errors=_as_bool(data.get("duplicates_as_errors")) or False,
        output=Path(_as_str(data.get("output")) or DEFAULT_OUTPUT),
        types=types,
    )


def _defaults(root: Path) -> ResgenConfig:
    resources_dir = root / DEFAULT_RESOURCES_DIR
    return ResgenConfig(root=root, resources_dir=resources_dir, tests_dir=resources_dir / "tests")


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
