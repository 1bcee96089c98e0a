"""CLI entrypoints for resgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .analysis import AnalysisFailedError
from .config import ConfigError, ResgenConfig, load_config
from .loader import LoaderError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .parsing import ParseFailure
from .types import ResourceBuildError, discover_types


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    """Logging flags, accepted both before and after the subcommand."""
    flag_default: object = argparse.SUPPRESS if suppress_default else False
    value_default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=flag_default,
        help="Log every pipeline stage at debug level.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=flag_default,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=value_default,
        help="Also write a debug-level log to this file.",
    )


def _add_plan_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root holding .resgen.yml (defaults to current directory).",
    )
    parser.add_argument("--profile", help="Active build profile (defaults to 'debug').")
    parser.add_argument(
        "--strict-duplicates",
        action="store_true",
        default=None,
        help="Treat duplicate resource keys as errors.",
    )
    parser.add_argument(
        "--include-tests",
        action="store_true",
        default=None,
        help="Also load the test resources directory.",
    )
    parser.add_argument(
        "--types",
        help="Comma-separated resource types to enable (defaults to all registered types).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resgen",
        description="Compile XML resource definitions into a Python module.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate the resources module.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    _add_plan_options(build_parser)
    build_parser.add_argument(
        "--output",
        help="Destination of the generated module (defaults to resources_generated.py).",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Validate resources without writing any output.",
    )
    _add_logging_options(check_parser, suppress_default=True)
    _add_plan_options(check_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config = load_config(Path(args.path))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    overrides: Dict[str, Any] = {
        "profile": args.profile,
        "include_tests": args.include_tests,
        "duplicates_as_errors": args.strict_duplicates,
    }
    plan = config.to_build_plan(overrides)

    try:
        registry = discover_types(_enabled_types(args.types, config))
    except ValueError as exc:
        parser.exit(1, f"{exc}\n")
    orchestrator = Orchestrator(registry=registry)

    try:
        if args.command == "build":
            output = _output_path(args.output, config)
            result = orchestrator.run_build(plan, output)
        elif args.command == "check":
            result = orchestrator.run_check(plan)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (LoaderError, ParseFailure, ResourceBuildError, AnalysisFailedError, OSError) as exc:
        parser.exit(1, f"resgen {args.command} failed: {exc}\n")

    suffix = f" ({len(result.warnings)} warning(s))" if result.warnings else ""
    if result.written is not None:
        print(f"Resources written to {_relativize(result.written.path)}{suffix}")
    else:
        print(f"{len(result.graph)} resource(s) checked, no errors{suffix}")


def _enabled_types(option: Optional[str], config: ResgenConfig) -> Optional[List[str]]:
    if option:
        return [name.strip() for name in option.split(",") if name.strip()]
    return config.enabled_types()


def _output_path(option: Optional[str], config: ResgenConfig) -> Path:
    if option:
        return Path(option)
    return config.output_path


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
